# telegram_notifications/domain/errors.py
"""
알림 전송 에러 분류

모든 에러는 단일 작업(설정 로딩 / 검증 / 전송) 안에서 종결되며 재시도하지 않는다.
각 예외는 API 응답의 `code` 로 그대로 노출되는 ErrorCode 를 가진다.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """API / CLI 에 노출되는 안정적인 에러 코드"""

    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    MISSING_TARGET = "MISSING_TARGET"
    EMPTY_MESSAGE = "EMPTY_MESSAGE"
    MESSAGE_TOO_LONG = "MESSAGE_TOO_LONG"
    BOT_VERIFICATION_FAILED = "BOT_VERIFICATION_FAILED"
    NETWORK_ERROR = "NETWORK_ERROR"
    TELEGRAM_API_ERROR = "TELEGRAM_API_ERROR"
    INVALID_JSON = "INVALID_JSON"
    INVALID_REQUEST = "INVALID_REQUEST"


class NotificationError(Exception):
    """모든 알림 관련 에러의 베이스"""

    code: ErrorCode = ErrorCode.TELEGRAM_API_ERROR


class ConfigurationError(NotificationError):
    """설정을 만들 수 없는 경우"""


class MissingCredential(ConfigurationError):
    code = ErrorCode.MISSING_CREDENTIAL

    def __init__(self, message: str = (
        "Bot token is required. Set TELEGRAM_BOT_TOKEN environment variable "
        "or use --bot-token flag"
    )):
        super().__init__(message)


class MissingTarget(ConfigurationError):
    code = ErrorCode.MISSING_TARGET

    def __init__(self, message: str = (
        "Chat ID is required. Set TELEGRAM_CHAT_ID environment variable "
        "or use --chat-id flag"
    )):
        super().__init__(message)


class EmptyMessage(NotificationError):
    code = ErrorCode.EMPTY_MESSAGE

    def __init__(self, message: str = "Message cannot be empty"):
        super().__init__(message)


class MessageTooLong(NotificationError):
    code = ErrorCode.MESSAGE_TOO_LONG

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(
            f"Message is too long ({length} characters, limit is {limit})"
        )


class VerificationFailed(NotificationError):
    code = ErrorCode.BOT_VERIFICATION_FAILED


class NetworkError(NotificationError):
    """Telegram 까지 요청이 도달하지 못함 (연결 실패, 타임아웃 등)"""

    code = ErrorCode.NETWORK_ERROR


class ProviderError(NotificationError):
    """Telegram Bot API 가 요청을 거절함"""

    code = ErrorCode.TELEGRAM_API_ERROR

    def __init__(self, description: str, error_code: Optional[int] = None):
        self.description = description
        self.error_code = error_code
        super().__init__(
            f"Telegram API error: {description} (code: {error_code})"
        )
