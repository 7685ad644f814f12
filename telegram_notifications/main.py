# telegram_notifications/main.py
from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from telegram_notifications.api.routes import router
from telegram_notifications.api.schemas import ErrorResponse, InfoResponse
from telegram_notifications.application.ports.bot_gateway import BotGateway
from telegram_notifications.config import SERVICE_VERSION, Settings, load_settings
from telegram_notifications.context import build_context
from telegram_notifications.domain.errors import ErrorCode
from telegram_notifications.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """
    요청 body 파싱/검증 실패 처리

    - JSON 자체가 깨진 경우: 400 INVALID_JSON
    - JSON 은 맞지만 필드가 잘못된 경우: 422 INVALID_REQUEST
    """
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        logger.warning(f"⚠️ Malformed JSON body on {request.url.path}")
        body = ErrorResponse(
            error="Invalid JSON in request body",
            code=ErrorCode.INVALID_JSON.value,
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = first.get("msg", "Invalid request")
    logger.warning(f"⚠️ Invalid request body on {request.url.path}: {field} {detail}")
    body = ErrorResponse(
        error=f"Invalid request: {field}: {detail}" if field else f"Invalid request: {detail}",
        code=ErrorCode.INVALID_REQUEST.value,
    )
    return JSONResponse(status_code=422, content=body.model_dump())


def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[BotGateway] = None,
) -> FastAPI:
    """
    FastAPI 앱 생성

    Args:
        settings: 불변 설정 (없으면 시작 시 환경변수에서 로딩)
        gateway: 주입할 게이트웨이 (테스트용)

    Returns:
        FastAPI 인스턴스
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """앱 시작/종료 시 실행"""
        # uvicorn --factory 로 직접 띄운 경우: 설정과 로깅을 여기서 준비
        if settings is None:
            resolved = load_settings(require_chat_id=False)
            setup_logging(resolved.log_level)
        else:
            resolved = settings

        logger.info("=" * 80)
        logger.info("🚀 Telegram Notifications API server starting...")
        logger.info("=" * 80)

        context = await build_context(resolved, gateway)
        app.state.context = context

        if resolved.chat_id:
            logger.info(f"📝 Default chat ID: {resolved.chat_id}")
        else:
            logger.warning("⚠️  No default chat ID configured; requests must provide chat_id")

        logger.info("📄 Available endpoints:")
        for endpoint in InfoResponse().endpoints:
            logger.info(f"    {endpoint.method:<4} {endpoint.path:<7} - {endpoint.description}")

        yield

        await context.service.gateway.aclose()

        logger.info("=" * 80)
        logger.info("👋 Shutting down Telegram Notifications API server")
        logger.info("=" * 80)

    app = FastAPI(
        title="Telegram Notifications API",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router)
    return app
