"""Notification payloads for the toast area."""

from pydantic import BaseModel, Field


class NotificationRead(BaseModel):
    id: str
    message: str
    variant: str = Field(..., description="success|danger")
    title: str
    remaining_seconds: float = Field(..., description="Time left before auto-dismiss")
