# telegram_notifications/context.py
"""
의존성 조립 (Dependency Assembly)

서버 시작 시 한 번 만들어서 app.state 에 올려두고,
핸들러에는 FastAPI Depends 로 주입한다. 이후에는 변경하지 않는다.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from telegram_notifications.application.ports.bot_gateway import BotGateway
from telegram_notifications.application.services.notification import (
    NotificationService,
    build_gateway,
)
from telegram_notifications.config import Settings
from telegram_notifications.domain.errors import VerificationFailed
from telegram_notifications.domain.models import BotIdentity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContext:
    """
    서버 컨텍스트

    - settings: 불변 설정
    - service: NotificationService
    - identity: 시작 시 확인한 봇 정보 (캐시)
    """

    settings: Settings
    service: NotificationService
    identity: BotIdentity


async def build_context(
    settings: Settings,
    gateway: Optional[BotGateway] = None,
) -> AppContext:
    """
    AppContext 생성

    봇 검증은 여기서 한 번만 한다. 검증에 실패해도 서버는 계속 뜨고,
    /health 에서 bot_verified=false 로 보인다.

    Args:
        settings: 불변 설정
        gateway: 주입할 게이트웨이 (없으면 설정에 맞게 생성)

    Returns:
        AppContext 인스턴스
    """
    service = NotificationService(
        gateway or build_gateway(settings),
        default_chat_id=settings.chat_id,
    )

    logger.info("🔍 Verifying bot configuration...")
    try:
        identity = await service.verify()
    except VerificationFailed as exc:
        logger.error(f"❌ Failed to verify bot: {exc}")
        logger.error(
            "💡 Make sure your bot token is correct and the bot is "
            "properly configured with @BotFather"
        )
        identity = BotIdentity.unverified()

    return AppContext(settings=settings, service=service, identity=identity)


def get_context(request: Request) -> AppContext:
    """FastAPI 의존성: 현재 앱의 AppContext"""
    return request.app.state.context
