"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from hostelia.domain.entities import User
from hostelia.infrastructure.models import UserModel
from hostelia.utils import from_storage_datetime


class UserRepository:
    """Provide the user lookups needed for authentication and recipient resolution."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def list_active_ids_by_roles(
        self, roles: Iterable[str], *, hostel: str | None = None
    ) -> list[int]:
        """Return ids of active users holding any of ``roles``, oldest first."""

        role_list = [role.lower() for role in roles]
        if not role_list:
            return []
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.role.in_(role_list))
            .filter(UserModel.is_active.is_(True))
        )
        if hostel is not None:
            query = query.filter(UserModel.hostel == hostel)
        return [row.id for row in query.order_by(UserModel.id.asc()).all()]

    def create(self, user: User) -> User:
        model = UserModel(
            name=user.name,
            email=user.email.strip().lower(),
            password=user.password,
            role=user.role.lower(),
            hostel=user.hostel,
            is_active=user.is_active,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            role=model.role,
            hostel=model.hostel,
            is_active=bool(model.is_active),
            created_at=from_storage_datetime(model.created_at),
        )


__all__ = ["UserRepository"]
