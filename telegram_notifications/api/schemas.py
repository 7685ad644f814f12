# telegram_notifications/api/schemas.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from telegram_notifications.config import SERVICE_VERSION
from telegram_notifications.domain.models import Delivered, DeliveryFailed


class NotifyResponse(BaseModel):
    """POST /notify, /send 성공 응답"""

    success: bool = True
    message: str
    telegram_message_id: Optional[int] = None

    @classmethod
    def from_result(cls, result: Delivered) -> "NotifyResponse":
        message = "Notification sent successfully"
        if result.simulated:
            message += " (test mode)"
        return cls(message=message, telegram_message_id=result.message_id)


class ErrorResponse(BaseModel):
    """실패 응답 공통 포맷"""

    success: bool = False
    error: str
    code: Optional[str] = None

    @classmethod
    def from_result(cls, result: DeliveryFailed) -> "ErrorResponse":
        return cls(error=result.error, code=result.code.value)


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str
    version: str
    bot_verified: bool
    bot_username: Optional[str] = None


class EndpointInfo(BaseModel):
    method: str
    path: str
    description: str


class InfoResponse(BaseModel):
    """GET / 서비스 설명"""

    name: str = "Telegram Notifications API"
    version: str = SERVICE_VERSION
    description: str = "Send notifications via Telegram Bot API"
    endpoints: List[EndpointInfo] = Field(
        default_factory=lambda: [
            EndpointInfo(method="GET", path="/", description="API information and available endpoints"),
            EndpointInfo(method="GET", path="/health", description="Health check and bot status"),
            EndpointInfo(method="POST", path="/notify", description="Send a notification message"),
            EndpointInfo(
                method="POST",
                path="/send",
                description="Send a notification message (alias for /notify)",
            ),
        ]
    )
