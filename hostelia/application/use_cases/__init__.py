"""Aggregate application use cases."""

from .notifications import create_notification, create_notifications
from .users import authenticate_user, create_user

__all__ = [
    "authenticate_user",
    "create_notification",
    "create_notifications",
    "create_user",
]
