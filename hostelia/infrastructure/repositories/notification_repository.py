"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from hostelia.domain.entities import Notification, RelatedEntity
from hostelia.infrastructure.models import NotificationModel
from hostelia.utils import (
    from_storage_datetime,
    now_in_app_timezone,
    to_storage_datetime,
)


class NotificationRepository:
    """Provide storage operations for :class:`Notification` objects.

    Every read and mutation is filtered by ``user_id`` so callers cannot reach
    another user's records.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: int,
        *,
        limit: int,
        skip: int = 0,
        unread_only: bool = False,
    ) -> tuple[list[Notification], int]:
        """Return one page of notifications (newest first) and the total count."""

        query = self._owned_by(user_id, unread_only=unread_only)
        total = query.count()
        models = (
            query.order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def count_unread(self, user_id: int) -> int:
        return (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.read.is_(False))
            .scalar()
            or 0
        )

    def create(self, notification: Notification) -> Notification:
        model = self._build_model(notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def create_many(self, notifications: Sequence[Notification]) -> list[Notification]:
        """Insert ``notifications`` in a single transaction, keeping input order."""

        if not notifications:
            return []
        models = [self._build_model(notification) for notification in notifications]
        self.session.add_all(models)
        self.session.commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def mark_as_read(self, notification_id: int, *, user_id: int) -> Notification | None:
        """Flag one owned notification as read.

        Returns ``None`` when the id does not exist or belongs to somebody
        else. Already read records are returned untouched so ``read_at`` keeps
        the first read time.
        """

        model = self._get_owned_model(notification_id, user_id=user_id)
        if model is None:
            return None
        if model.read:
            return self._to_entity(model)
        model.read = True
        model.read_at = to_storage_datetime(now_in_app_timezone())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_as_read(self, user_id: int) -> int:
        """Flag every unread notification of ``user_id``; return the row count."""

        now = to_storage_datetime(now_in_app_timezone())
        updated = self._owned_by(user_id, unread_only=True).update(
            {
                NotificationModel.read: True,
                NotificationModel.read_at: now,
                NotificationModel.updated_at: now,
            },
            synchronize_session=False,
        )
        self.session.commit()
        return int(updated or 0)

    def _owned_by(self, user_id: int, *, unread_only: bool) -> Query:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if unread_only:
            query = query.filter(NotificationModel.read.is_(False))
        return query

    def _get_owned_model(
        self, notification_id: int, *, user_id: int
    ) -> NotificationModel | None:
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .filter(NotificationModel.user_id == user_id)
            .one_or_none()
        )

    @staticmethod
    def _build_model(notification: Notification) -> NotificationModel:
        created_at = to_storage_datetime(
            notification.created_at or now_in_app_timezone()
        )
        return NotificationModel(
            user_id=notification.user_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            related_entity_id=notification.related_entity.id,
            related_entity_type=notification.related_entity.type,
            read=False,
            read_at=None,
            created_at=created_at,
            updated_at=created_at,
        )

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            message=model.message,
            related_entity=RelatedEntity(
                type=model.related_entity_type, id=model.related_entity_id
            ),
            read=bool(model.read),
            read_at=from_storage_datetime(model.read_at),
            created_at=from_storage_datetime(model.created_at),
            updated_at=from_storage_datetime(model.updated_at),
        )


__all__ = ["NotificationRepository"]
