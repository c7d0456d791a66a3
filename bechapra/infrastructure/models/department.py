"""SQLAlchemy model for departments."""

from sqlalchemy import Column, Integer, String

from bechapra.infrastructure.database import Base


class DepartmentModel(Base):
    """Organisational unit a user belongs to."""

    __tablename__ = "department"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)


__all__ = ["DepartmentModel"]
