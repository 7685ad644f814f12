# telegram_notifications/application/ports/bot_gateway.py
"""
Bot API 게이트웨이 포트 (인터페이스)

Secondary Port: 애플리케이션이 외부 메시징 API 를 호출하기 위한 인터페이스
"""
from typing import Any, Dict, Protocol

from telegram_notifications.domain.models import BotIdentity, Delivered


class BotGateway(Protocol):
    """
    Bot API 호출 인터페이스

    이 Protocol을 구현하는 어댑터:
    - TelegramGateway (adapters/telegram_gateway.py) - 실제 HTTPS 호출
    - MockGateway (adapters/mock_gateway.py) - 테스트 모드, 네트워크 호출 없음

    Protocol을 사용하는 서비스:
    - notification.py (NotificationService)
    """

    async def get_me(self) -> BotIdentity:
        """
        봇 정보 조회

        Raises:
            VerificationFailed: 조회 실패
        """
        ...

    async def send_message(self, payload: Dict[str, Any]) -> Delivered:
        """
        sendMessage 호출

        Args:
            payload: sendMessage 요청 body

        Raises:
            NetworkError: 요청이 Telegram 에 도달하지 못함
            ProviderError: Telegram 이 요청을 거절함
        """
        ...

    async def aclose(self) -> None:
        """커넥션 풀 정리"""
        ...
