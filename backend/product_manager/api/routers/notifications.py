"""Endpoints for the single visible notification."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from product_manager.api.dependencies.manager import get_manager
from product_manager.api.schemas.notification import NotificationRead
from product_manager.services.product_manager import ProductManager

router = APIRouter()


@router.get(
    "/current",
    summary="Notification currently on screen",
    response_model=NotificationRead | None,
)
async def current_notification(
    manager: ProductManager = Depends(get_manager),
) -> NotificationRead | None:
    """Return the visible notification, or null once it has expired."""
    center = manager.notifications
    notification = center.current()
    if notification is None:
        return None
    return NotificationRead(
        id=notification.id,
        message=notification.message,
        variant=notification.variant.value,
        title=notification.title,
        remaining_seconds=center.time_left(notification),
    )


@router.delete(
    "/current",
    summary="Dismiss the visible notification",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def dismiss_notification(
    notification_id: str | None = Query(
        None, alias="id", description="Only dismiss if this notification is still shown"
    ),
    manager: ProductManager = Depends(get_manager),
) -> Response:
    manager.notifications.dismiss(notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
