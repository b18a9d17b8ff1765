"""Use case for paging through a user's notifications."""

from __future__ import annotations

from sqlalchemy.orm import Session

from hostelia.config import get_settings
from hostelia.domain.entities import NotificationPage
from hostelia.infrastructure.repositories import NotificationRepository


def normalize_pagination(limit: object, skip: object) -> tuple[int, int]:
    """Coerce raw client values into a safe ``(limit, skip)`` pair.

    Missing or non numeric values fall back to the defaults; ``limit`` is
    clamped to ``[1, NOTIFICATION_PAGE_MAX_LIMIT]`` and ``skip`` to ``>= 0``.
    """

    settings = get_settings()
    default_limit = settings.notification_page_default_limit
    max_limit = settings.notification_page_max_limit

    parsed_limit = _to_int(limit)
    if parsed_limit is None or parsed_limit <= 0:
        parsed_limit = default_limit
    parsed_limit = min(parsed_limit, max_limit)

    parsed_skip = _to_int(skip)
    if parsed_skip is None or parsed_skip < 0:
        parsed_skip = 0
    return parsed_limit, parsed_skip


def list_notifications(
    session: Session,
    *,
    user_id: int,
    limit: object = None,
    skip: object = None,
    unread_only: bool = False,
) -> NotificationPage:
    """Return the caller's notifications, newest first."""

    page_limit, page_skip = normalize_pagination(limit, skip)
    notifications, total = NotificationRepository(session).list_for_user(
        user_id, limit=page_limit, skip=page_skip, unread_only=unread_only
    )
    return NotificationPage(
        notifications=notifications,
        total_count=total,
        has_more=page_skip + len(notifications) < total,
    )


def _to_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


__all__ = ["list_notifications", "normalize_pagination"]
