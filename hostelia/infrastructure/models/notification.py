"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.sql import expression

from hostelia.domain.entities import (
    MESSAGE_MAX_LENGTH,
    RELATED_ENTITY_ID_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from hostelia.infrastructure.database import Base
from hostelia.utils import now_for_storage


class NotificationModel(Base):
    """Database representation for user notifications.

    ``type`` and ``related_entity_type`` are plain strings so new tags can be
    introduced without a schema migration; ``related_entity_id`` carries no
    foreign key.
    """

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_user_read_created", "user_id", "read", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    message = Column(String(MESSAGE_MAX_LENGTH), nullable=False)
    related_entity_id = Column(String(RELATED_ENTITY_ID_MAX_LENGTH), nullable=False)
    related_entity_type = Column(String(50), nullable=False)
    read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    read_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_for_storage)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_for_storage,
        onupdate=now_for_storage,
    )


__all__ = ["NotificationModel"]
