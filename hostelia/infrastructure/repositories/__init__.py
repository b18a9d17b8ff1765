"""Repository implementations for infrastructure layer."""

from .user_repository import UserRepository
from .notification_repository import NotificationRepository

__all__ = [
    "UserRepository",
    "NotificationRepository",
]
