# telegram_notifications/adapters/telegram_gateway.py
"""
Telegram Bot API 어댑터
"""
from typing import Any, Dict, Optional
import logging

import httpx

from telegram_notifications.domain.errors import (
    NetworkError,
    NotificationError,
    ProviderError,
    VerificationFailed,
)
from telegram_notifications.domain.models import BotIdentity, Delivered

logger = logging.getLogger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org/bot"


class TelegramGateway:
    """Telegram Bot API 로 getMe / sendMessage 호출"""

    def __init__(
        self,
        bot_token: str,
        timeout: float = 10.0,
        api_base: str = TELEGRAM_API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = f"{api_base}{bot_token}"
        self.timeout = timeout
        # 프로세스 전체에서 하나의 커넥션 풀을 재사용한다
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def get_me(self) -> BotIdentity:
        """
        봇 토큰 검증

        Returns:
            verified=True 인 BotIdentity

        Raises:
            VerificationFailed: 네트워크 오류 또는 API 거절
        """
        try:
            result = await self._call("GET", "getMe")
        except NotificationError as exc:
            raise VerificationFailed(f"Bot verification failed: {exc}") from exc

        result = result if isinstance(result, dict) else {}
        return BotIdentity(
            verified=True,
            username=result.get("username"),
            first_name=result.get("first_name"),
            bot_id=result.get("id"),
        )

    async def send_message(self, payload: Dict[str, Any]) -> Delivered:
        """
        메시지 전송

        Args:
            payload: sendMessage body (chat_id, text, parse_mode, disable_notification)

        Returns:
            Telegram 이 부여한 message_id 를 담은 Delivered
        """
        result = await self._call("POST", "sendMessage", payload)

        message_id = result.get("message_id") if isinstance(result, dict) else None
        if not isinstance(message_id, int):
            message_id = None
        return Delivered(message_id=message_id)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _call(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Bot API 호출 후 result 필드 반환

        응답 매핑:
        - 전송 실패 → NetworkError
        - non-2xx / ok=false / JSON 아님 → ProviderError
        """
        url = f"{self.api_url}/{endpoint}"

        try:
            if method == "GET":
                resp = await self._client.get(url)
            else:
                resp = await self._client.post(url, json=payload)
        except httpx.RequestError as exc:
            # exc.request.url 에는 토큰이 들어 있으므로 로그에 남기지 않는다
            logger.error(f"❌ Telegram {endpoint} request error: {type(exc).__name__}")
            raise NetworkError(
                f"Failed to send request to Telegram API: {type(exc).__name__}: {exc}"
            ) from exc
        except httpx.InvalidURL as exc:
            # 토큰에 URL 에 쓸 수 없는 문자가 섞인 경우. 메시지에 URL 이 담길 수 있어 생략
            logger.error(f"❌ Telegram {endpoint} request error: invalid API URL")
            raise NetworkError(
                "Failed to send request to Telegram API: invalid API URL "
                "(check the bot token for stray characters)"
            ) from exc

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            logger.error(
                f"❌ Telegram {endpoint} invalid response. "
                f"status={resp.status_code} body={resp.text[:200]}"
            )
            if resp.is_success:
                raise ProviderError("Invalid response from Telegram API", resp.status_code)
            raise ProviderError(f"HTTP {resp.status_code}", resp.status_code)

        if resp.is_error or not body.get("ok"):
            description = body.get("description") or "Unknown error"
            error_code = body.get("error_code")
            if error_code is None and resp.is_error:
                error_code = resp.status_code
            logger.error(
                f"❌ Telegram {endpoint} rejected. "
                f"status={resp.status_code} error_code={error_code} description={description}"
            )
            raise ProviderError(description, error_code)

        return body.get("result")
