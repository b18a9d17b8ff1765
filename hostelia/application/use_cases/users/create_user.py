"""Use case for creating users."""

from sqlalchemy.orm import Session

from hostelia.domain.entities import ROLE_STUDENT, ROLE_WARDEN, USER_ROLES, User
from hostelia.infrastructure.repositories import UserRepository
from hostelia.infrastructure.security import get_password_hash


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str,
    hostel: str | None = None,
) -> User:
    """Create a new user ensuring unique email addresses."""

    role = role.strip().lower()
    if role not in USER_ROLES:
        raise ValueError(f"Role must be one of: {', '.join(USER_ROLES)}")
    if role in (ROLE_STUDENT, ROLE_WARDEN) and not hostel:
        raise ValueError("Students and wardens must belong to a hostel")
    if not password:
        raise ValueError("Password is required")

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise ValueError("Email is already registered")

    user = User(
        id=None,
        name=name.strip(),
        email=email,
        password=get_password_hash(password),
        role=role,
        hostel=hostel,
        is_active=True,
    )
    return repository.create(user)
