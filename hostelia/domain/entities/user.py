"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

ROLE_STUDENT = "student"
ROLE_WARDEN = "warden"
ROLE_ADMIN = "admin"

USER_ROLES = (ROLE_STUDENT, ROLE_WARDEN, ROLE_ADMIN)


@dataclass
class User:
    """Core attributes describing a hostel resident or staff member."""

    id: int | None
    name: str
    email: str
    password: str
    role: str
    hostel: str | None
    is_active: bool
    created_at: datetime | None = None

