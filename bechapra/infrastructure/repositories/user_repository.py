"""Read access to user profiles."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from bechapra.domain.entities import Role, User
from bechapra.infrastructure.models import RoleModel, UserModel


class UserRepository:
    """Provide the user lookups the notification engine needs."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self._query().filter(UserModel.id == user_id).first()
        return self._to_entity(model) if model else None

    def list_active_by_role(self, alias: str) -> Sequence[User]:
        """Return every active user holding the role ``alias`` in storage order."""

        query = (
            self._query()
            .join(RoleModel, UserModel.role_id == RoleModel.id)
            .filter(func.lower(RoleModel.alias) == alias.lower())
            .filter(UserModel.is_active.is_(True))
            .order_by(UserModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def _query(self):
        return self.session.query(UserModel).options(
            joinedload(UserModel.role), joinedload(UserModel.department)
        )

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=UserRepository._role_to_entity(model.role),
            name=model.name,
            email=model.email,
            department=model.department.name if model.department else None,
            is_active=bool(model.is_active),
        )

    @staticmethod
    def _role_to_entity(model_role) -> Role:
        if model_role is None:
            msg = "User role is not set"
            raise ValueError(msg)
        return Role(id=model_role.id, name=model_role.name, alias=model_role.alias)


__all__ = ["UserRepository"]
