"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from hostelia.domain.entities import User
from hostelia.infrastructure.database import get_db
from hostelia.infrastructure.notifications import (
    NotificationConnectionManager,
    NotificationPublisher,
)
from hostelia.infrastructure.repositories import UserRepository
from hostelia.infrastructure.security import decode_access_token

TOKEN_COOKIE_NAME = "jwt"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_token(request: Request, bearer_token: str | None = None) -> str | None:
    """Return the access token from the header, the ``jwt`` cookie or ``?token=``.

    Browsers cannot attach headers to ``EventSource`` requests, hence the
    cookie and query parameter fallbacks.
    """

    return (
        bearer_token
        or request.cookies.get(TOKEN_COOKIE_NAME)
        or request.query_params.get("token")
        or None
    )


def resolve_current_user(token: str | None, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    if not token:
        raise _unauthorized("Unauthorized - No token provided")

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized("Unauthorized - Invalid token") from exc

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError) as exc:
        raise _unauthorized("Unauthorized - Invalid token") from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user


def ensure_active(user: User) -> User:
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return user


def get_current_user(
    request: Request,
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(extract_token(request, token), db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    return ensure_active(current_user)


def get_notification_manager(request: Request) -> NotificationConnectionManager:
    """Return the connection registry built by the application factory."""

    return request.app.state.notification_manager


def get_notification_publisher(request: Request) -> NotificationPublisher:
    """Return the publisher that routes pass to ``create_notification(s)``."""

    return request.app.state.notification_publisher
