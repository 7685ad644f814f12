# telegram_notifications/adapters/mock_gateway.py
"""
테스트 모드용 게이트웨이

네트워크 호출 없이 항상 같은 결과를 돌려준다.
"""
from typing import Any, Dict, List
import logging

from telegram_notifications.domain.models import BotIdentity, Delivered

logger = logging.getLogger(__name__)

MOCK_MESSAGE_ID = 42
MOCK_BOT_USERNAME = "test-bot"


class MockGateway:
    """TelegramGateway 대체 구현 (TELEGRAM_NOTIFICATIONS_SKIP_VALIDATION=true)"""

    def __init__(self):
        self.sent: List[Dict[str, Any]] = []

    async def get_me(self) -> BotIdentity:
        logger.warning("⚠️  Bot validation skipped (test mode)")
        return BotIdentity.unverified(username=MOCK_BOT_USERNAME)

    async def send_message(self, payload: Dict[str, Any]) -> Delivered:
        logger.info(f"⚠️  Test mode: Simulating message send to chat {payload.get('chat_id')}")
        self.sent.append(payload)
        return Delivered(message_id=MOCK_MESSAGE_ID, simulated=True)

    async def aclose(self) -> None:
        return None
