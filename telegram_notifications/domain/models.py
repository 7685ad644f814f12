# telegram_notifications/domain/models.py
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from telegram_notifications.domain.errors import ErrorCode, NotificationError

# Telegram sendMessage text 최대 길이
MAX_MESSAGE_LENGTH = 4096


class ParseMode(str, Enum):
    """Telegram 메시지 포맷 (None 이면 plain text)"""

    MARKDOWN = "Markdown"
    HTML = "HTML"


class OutboundMessage(BaseModel):
    """
    전송 요청 한 건.

    - message: 본문 (필수)
    - chat_id: 기본 chat id 대신 사용할 대상 (선택)
    - parse_mode: Markdown / HTML / None
    - disable_notification: 무음 전송 여부
    """

    message: str
    chat_id: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    disable_notification: Optional[bool] = None

    @field_validator("chat_id", mode="before")
    @classmethod
    def _coerce_chat_id(cls, value: Any) -> Any:
        # -1001234567890 처럼 숫자로 들어와도 문자열로 맞춘다
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_payload(self, chat_id: str) -> Dict[str, Any]:
        """
        Bot API sendMessage 요청 body 생성.
        값이 주어진 필드만 포함한다.
        """
        payload: Dict[str, Any] = {"chat_id": chat_id, "text": self.message}
        if self.parse_mode is not None:
            payload["parse_mode"] = self.parse_mode.value
        if self.disable_notification:
            payload["disable_notification"] = True
        return payload


class Delivered(BaseModel):
    """전송 성공"""

    model_config = ConfigDict(frozen=True)

    message_id: Optional[int] = None
    simulated: bool = False

    @property
    def success(self) -> bool:
        return True


class DeliveryFailed(BaseModel):
    """전송 실패 (code 로 실패 유형 구분)"""

    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    error: str

    @property
    def success(self) -> bool:
        return False

    @classmethod
    def from_error(cls, exc: NotificationError) -> "DeliveryFailed":
        return cls(code=exc.code, error=str(exc))


DeliveryResult = Union[Delivered, DeliveryFailed]


class BotIdentity(BaseModel):
    """
    getMe 로 확인한 봇 정보.
    서버 시작 시 한 번만 조회하고 이후에는 읽기 전용으로 쓴다.
    """

    model_config = ConfigDict(frozen=True)

    verified: bool
    username: Optional[str] = None
    first_name: Optional[str] = None
    bot_id: Optional[int] = None

    @classmethod
    def unverified(cls, username: Optional[str] = None) -> "BotIdentity":
        return cls(verified=False, username=username)
