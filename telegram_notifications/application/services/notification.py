# telegram_notifications/application/services/notification.py
from __future__ import annotations

import logging
from typing import Optional

from telegram_notifications.adapters.mock_gateway import MockGateway
from telegram_notifications.adapters.telegram_gateway import TelegramGateway
from telegram_notifications.application.ports.bot_gateway import BotGateway
from telegram_notifications.config import Settings
from telegram_notifications.domain.errors import (
    EmptyMessage,
    MessageTooLong,
    MissingTarget,
    NotificationError,
)
from telegram_notifications.domain.models import (
    MAX_MESSAGE_LENGTH,
    BotIdentity,
    DeliveryFailed,
    DeliveryResult,
    OutboundMessage,
)

logger = logging.getLogger(__name__)


def build_gateway(settings: Settings) -> BotGateway:
    """
    설정에 맞는 게이트웨이 생성

    테스트 모드면 MockGateway, 아니면 실제 TelegramGateway.
    """
    if settings.test_mode:
        return MockGateway()
    return TelegramGateway(
        settings.bot_token.get_secret_value(),
        timeout=settings.request_timeout,
    )


class NotificationService:
    """
    알림 전송 서비스

    책임:
    - 메시지 검증 (빈 메시지, 길이 제한)
    - 대상 chat id 결정
    - 게이트웨이 호출 결과를 DeliveryResult 로 변환
    """

    def __init__(self, gateway: BotGateway, default_chat_id: Optional[str] = None):
        """
        Args:
            gateway: Bot API 게이트웨이 구현체
            default_chat_id: 요청에 chat_id 가 없을 때 사용할 대상
        """
        self.gateway = gateway
        self.default_chat_id = default_chat_id

    async def verify(self) -> BotIdentity:
        """
        봇 토큰 검증 (getMe 1회)

        Raises:
            VerificationFailed: 검증 실패
        """
        identity = await self.gateway.get_me()
        if identity.verified:
            logger.info(f"✅ Bot verified: @{identity.username}")
        return identity

    async def send(self, request: OutboundMessage) -> DeliveryResult:
        """
        메시지 1건 전송 (재시도 없음)

        Args:
            request: 전송 요청

        Returns:
            Delivered 또는 DeliveryFailed
        """
        try:
            chat_id = self._validate(request)
        except NotificationError as exc:
            logger.warning(f"⚠️ Rejected notification request: {exc}")
            return DeliveryFailed.from_error(exc)

        logger.info(f"📤 Sending message to chat {chat_id}: {request.message[:50]}")

        try:
            delivered = await self.gateway.send_message(request.to_payload(chat_id))
        except NotificationError as exc:
            logger.error(f"❌ Failed to send notification: {exc}")
            return DeliveryFailed(
                code=exc.code,
                error=f"Failed to send notification: {exc}",
            )

        logger.info(
            f"✅ Notification sent successfully to chat {chat_id} "
            f"(message_id={delivered.message_id})"
        )
        return delivered

    def _validate(self, request: OutboundMessage) -> str:
        """
        네트워크 호출 전 검증

        Returns:
            실제 전송 대상 chat id
        """
        if not request.message:
            raise EmptyMessage()

        if len(request.message) > MAX_MESSAGE_LENGTH:
            raise MessageTooLong(len(request.message), MAX_MESSAGE_LENGTH)

        chat_id = request.chat_id or self.default_chat_id
        if not chat_id:
            raise MissingTarget(
                "Chat ID is required. Provide chat_id in the request "
                "or set TELEGRAM_CHAT_ID"
            )
        return chat_id
