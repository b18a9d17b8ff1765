from .auth import Token
from .notification import (
    NotificationCountResponse,
    NotificationListResponse,
    NotificationRead,
)

__all__ = [
    "NotificationCountResponse",
    "NotificationListResponse",
    "NotificationRead",
    "Token",
]
