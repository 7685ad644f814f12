# telegram_notifications/cli.py
"""
telegram-notifications CLI

- 기본: 메시지 1건 전송 후 종료 (성공 0, 전송 실패 1, 설정 오류 2)
- --server: HTTP API 서버 실행
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

import uvicorn

from telegram_notifications.application.services.notification import (
    NotificationService,
    build_gateway,
)
from telegram_notifications.config import (
    ENV_LOG_LEVEL,
    SERVICE_NAME,
    Settings,
    load_settings,
)
from telegram_notifications.domain.errors import (
    ConfigurationError,
    ErrorCode,
    VerificationFailed,
)
from telegram_notifications.domain.models import (
    Delivered,
    DeliveryFailed,
    DeliveryResult,
    OutboundMessage,
    ParseMode,
)
from telegram_notifications.logging_config import setup_logging
from telegram_notifications.main import create_app

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Hello from Telegram Bot! 🤖"

EXIT_OK = 0
EXIT_SEND_FAILED = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=SERVICE_NAME,
        description="A Telegram notification service - supports both CLI and HTTP API modes",
    )
    parser.add_argument("-m", "--message", default=DEFAULT_MESSAGE, help="Message to send (CLI mode only)")
    parser.add_argument(
        "-b",
        "--bot-token",
        default=None,
        help="Telegram Bot Token (can also be set via TELEGRAM_BOT_TOKEN env var)",
    )
    parser.add_argument(
        "-c",
        "--chat-id",
        default=None,
        help="Chat ID to send messages to (can also be set via TELEGRAM_CHAT_ID env var)",
    )
    parser.add_argument(
        "--parse-mode",
        choices=[mode.value for mode in ParseMode] + ["none"],
        default=ParseMode.MARKDOWN.value,
        help="Message formatting (CLI mode only, default: Markdown)",
    )
    parser.add_argument(
        "--silent",
        action="store_true",
        help="Deliver without notification sound (CLI mode only)",
    )
    parser.add_argument("--server", action="store_true", help="Run as HTTP server instead of CLI mode")
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help="Server port (can also be set via PORT env var, default: 3000)",
    )
    parser.add_argument("--host", default=None, help="Server host address (default: 0.0.0.0)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")
    return parser


def _build_request(args: argparse.Namespace) -> OutboundMessage:
    parse_mode = None if args.parse_mode == "none" else ParseMode(args.parse_mode)
    return OutboundMessage(
        message=args.message,
        parse_mode=parse_mode,
        disable_notification=args.silent or None,
    )


async def send_once(settings: Settings, request: OutboundMessage) -> DeliveryResult:
    """
    메시지 1건 전송 후 게이트웨이 정리

    테스트 모드가 아니면 전송 전에 getMe 로 봇 토큰을 먼저 확인한다.
    """
    gateway = build_gateway(settings)
    service = NotificationService(gateway, default_chat_id=settings.chat_id)
    try:
        if not settings.test_mode:
            logger.info("🔍 Verifying bot configuration...")
            try:
                await service.verify()
            except VerificationFailed as exc:
                logger.error(f"❌ Failed to verify bot: {exc}")
                return DeliveryFailed.from_error(exc)
        return await service.send(request)
    finally:
        await gateway.aclose()


def run_cli_mode(settings: Settings, args: argparse.Namespace) -> int:
    request = _build_request(args)

    logger.info(f"📤 Sending message to chat ID: {settings.chat_id}")
    logger.info(f"📝 Message: {request.message[:50]}")

    result = asyncio.run(send_once(settings, request))

    if isinstance(result, Delivered):
        suffix = " (test mode)" if result.simulated else ""
        print(f"✅ Message sent successfully{suffix} (message_id={result.message_id})")
        return EXIT_OK

    print(f"❌ {result.error} [{result.code.value}]", file=sys.stderr)
    if result.code == ErrorCode.BOT_VERIFICATION_FAILED:
        print(
            "💡 Make sure your bot token is correct and the bot is "
            "properly configured with @BotFather",
            file=sys.stderr,
        )
    elif result.code == ErrorCode.TELEGRAM_API_ERROR:
        print("💡 Common issues:", file=sys.stderr)
        print("   - Make sure the chat ID is correct", file=sys.stderr)
        print("   - If using a group chat, add the bot to the group first", file=sys.stderr)
        print("   - If using a private chat, start a conversation with the bot first", file=sys.stderr)
    return EXIT_SEND_FAILED


def run_server(settings: Settings) -> int:
    logger.info(f"🌐 Listening on http://{settings.host}:{settings.port}")
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # 설정 오류도 로그로 남길 수 있도록 우선 플래그/환경변수 기준으로 설정
    setup_logging(args.log_level or os.getenv(ENV_LOG_LEVEL, "INFO"))

    try:
        settings = load_settings(
            {
                "bot_token": args.bot_token,
                "chat_id": args.chat_id,
                "host": args.host,
                "port": args.port,
                "log_level": args.log_level,
            },
            require_chat_id=not args.server,
        )
    except ConfigurationError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    # .env 까지 반영된 최종 로그 레벨로 다시 설정
    setup_logging(settings.log_level)

    if args.server:
        return run_server(settings)
    return run_cli_mode(settings, args)


if __name__ == "__main__":
    raise SystemExit(main())
