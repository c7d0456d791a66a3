"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from bechapra.infrastructure.database import Base


class UserModel(Base):
    """Database representation of the system user.

    The table is owned by user management; the notification engine only reads it.
    """

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("role.id"), nullable=False, index=True)
    department_id = Column(Integer, ForeignKey("department.id"), nullable=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    role = relationship("RoleModel", back_populates="users", lazy="joined")
    department = relationship("DepartmentModel", lazy="joined")


__all__ = ["UserModel"]
