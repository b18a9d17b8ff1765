"""Endpoints and SSE stream for user notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from hostelia.application.use_cases.notifications import (
    count_unread_notifications,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from hostelia.config import get_settings
from hostelia.domain.entities import User
from hostelia.infrastructure.database import SessionLocal, get_db
from hostelia.infrastructure.notifications import (
    STREAM_HEADERS,
    NotificationConnectionManager,
    NotificationStream,
    SSEChannel,
)
from hostelia.interfaces.api.dependencies import (
    ensure_active,
    extract_token,
    get_current_active_user,
    get_notification_manager,
    oauth2_scheme,
    resolve_current_user,
)
from hostelia.interfaces.api.schemas import (
    NotificationCountResponse,
    NotificationListResponse,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _server_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def _authenticate_stream_user(token: str | None) -> User:
    session = SessionLocal()
    try:
        return ensure_active(resolve_current_user(token, session))
    finally:
        session.close()


@router.get("/stream")
async def stream_notifications(
    request: Request,
    token: str | None = Depends(oauth2_scheme),
    manager: NotificationConnectionManager = Depends(get_notification_manager),
) -> StreamingResponse:
    """Hold a ``text/event-stream`` response open and push new notifications."""

    user = await run_in_threadpool(_authenticate_stream_user, extract_token(request, token))
    settings = get_settings()
    stream = NotificationStream(
        manager=manager,
        user_id=user.id,
        channel=SSEChannel(max_pending=settings.notification_stream_max_pending),
        keepalive_seconds=settings.notification_keepalive_seconds,
        is_disconnected=request.is_disconnected,
    )
    return StreamingResponse(
        stream.events(),
        media_type="text/event-stream",
        headers=STREAM_HEADERS,
    )


@router.get("/", response_model=NotificationListResponse)
def get_notifications(
    limit: str | None = Query(None),
    skip: str | None = Query(None),
    unread_only: str | None = Query(None, alias="unreadOnly"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationListResponse:
    """Return one page of the caller's notifications, newest first."""

    try:
        page = list_notifications(
            db,
            user_id=current_user.id,
            limit=limit,
            skip=skip,
            unread_only=(unread_only or "").strip().lower() == "true",
        )
    except SQLAlchemyError as exc:
        logger.exception("Failed to get notifications for user %s", current_user.id)
        raise _server_error("Failed to fetch notifications") from exc
    return NotificationListResponse.from_page(page)


@router.get("/unread-count", response_model=NotificationCountResponse)
def get_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationCountResponse:
    """Return how many notifications the caller has not read yet."""

    try:
        count = count_unread_notifications(db, user_id=current_user.id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to get unread count for user %s", current_user.id)
        raise _server_error("Failed to fetch unread count") from exc
    return NotificationCountResponse(count=count)


@router.patch("/read-all", response_model=NotificationCountResponse)
def mark_all_as_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationCountResponse:
    """Mark every unread notification of the caller as read."""

    try:
        count = mark_all_notifications_read(db, user_id=current_user.id)
    except SQLAlchemyError as exc:
        logger.exception(
            "Failed to mark all notifications as read for user %s", current_user.id
        )
        raise _server_error("Failed to mark all notifications as read") from exc
    return NotificationCountResponse(count=count)


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    """Mark one of the caller's notifications as read."""

    try:
        notification = mark_notification_read(
            db, notification_id=notification_id, user_id=current_user.id
        )
    except SQLAlchemyError as exc:
        logger.exception(
            "Failed to mark notification %s as read for user %s",
            notification_id,
            current_user.id,
        )
        raise _server_error("Failed to mark notification as read") from exc

    if notification is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found",
        )
    return NotificationRead.from_entity(notification)
