# telegram_notifications/config.py
"""
설정 로딩

우선순위: 호출부 override (CLI 플래그) > 프로세스 환경변수 > .env 파일 > 기본값
로딩은 프로세스 시작 시 한 번만 하고, 만들어진 Settings 는 변경하지 않는다.
"""
from __future__ import annotations

import os
from typing import Any, Mapping, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, SecretStr

from telegram_notifications.domain.errors import MissingCredential, MissingTarget

SERVICE_NAME = "telegram-notifications"
SERVICE_VERSION = "0.1.0"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_TIMEOUT = 10.0

# 환경변수 이름
ENV_BOT_TOKEN = "TELEGRAM_BOT_TOKEN"
ENV_CHAT_ID = "TELEGRAM_CHAT_ID"
ENV_SKIP_VALIDATION = "TELEGRAM_NOTIFICATIONS_SKIP_VALIDATION"
ENV_TIMEOUT = "TELEGRAM_REQUEST_TIMEOUT"
ENV_HOST = "HOST"
ENV_PORT = "PORT"
ENV_LOG_LEVEL = "LOG_LEVEL"

_TRUTHY = {"true", "1", "yes", "on"}


class Settings(BaseModel):
    """불변 설정 레코드"""

    model_config = ConfigDict(frozen=True)

    bot_token: SecretStr
    chat_id: Optional[str] = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    test_mode: bool = False
    request_timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"


def _parse_bool(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in _TRUTHY


def _parse_port(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    try:
        port = int(raw)
    except ValueError:
        return None
    if 0 < port < 65536:
        return port
    return None


def _parse_float(raw: Optional[str]) -> Optional[float]:
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def load_settings(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[str] = ".env",
    require_chat_id: bool = True,
) -> Settings:
    """
    Settings 생성

    Args:
        overrides: 호출부에서 명시한 값 (None 인 항목은 무시)
        environ: 환경변수 (기본값 os.environ)
        env_file: 개발용 .env 파일 경로 (None 이면 읽지 않음)
        require_chat_id: 기본 chat id 가 반드시 있어야 하는지 여부

    Returns:
        Settings 인스턴스

    Raises:
        MissingCredential: bot token 을 어디서도 찾지 못한 경우
        MissingTarget: require_chat_id 인데 chat id 를 찾지 못한 경우
    """
    explicit = {k: v for k, v in (overrides or {}).items() if v is not None}
    env = os.environ if environ is None else environ

    file_values: Mapping[str, Optional[str]] = {}
    if env_file and os.path.isfile(env_file):
        file_values = dotenv_values(env_file)

    def lookup(name: str) -> Optional[str]:
        value = env.get(name)
        if value is None:
            value = file_values.get(name)
        return value

    bot_token = explicit.get("bot_token", lookup(ENV_BOT_TOKEN))
    if not bot_token:
        raise MissingCredential()
    if any(ch.isspace() or not ch.isprintable() for ch in bot_token):
        # CRLF .env 에서 딸려온 \r 같은 문자는 URL 을 깨뜨린다
        raise MissingCredential(
            "Bot token contains whitespace or control characters. "
            "Check TELEGRAM_BOT_TOKEN or --bot-token"
        )

    chat_id = explicit.get("chat_id", lookup(ENV_CHAT_ID)) or None
    if require_chat_id and not chat_id:
        raise MissingTarget()

    port = explicit.get("port")
    if port is None:
        port = _parse_port(lookup(ENV_PORT)) or DEFAULT_PORT

    test_mode = explicit.get("test_mode")
    if test_mode is None:
        test_mode = _parse_bool(lookup(ENV_SKIP_VALIDATION))

    timeout = explicit.get("request_timeout")
    if timeout is None:
        timeout = _parse_float(lookup(ENV_TIMEOUT)) or DEFAULT_TIMEOUT

    return Settings(
        bot_token=bot_token,
        chat_id=str(chat_id) if chat_id else None,
        host=explicit.get("host") or lookup(ENV_HOST) or DEFAULT_HOST,
        port=port,
        test_mode=test_mode,
        request_timeout=timeout,
        log_level=(explicit.get("log_level") or lookup(ENV_LOG_LEVEL) or "INFO").upper(),
    )
