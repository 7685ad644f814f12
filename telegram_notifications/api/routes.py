# telegram_notifications/api/routes.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from telegram_notifications.api.schemas import (
    ErrorResponse,
    HealthResponse,
    InfoResponse,
    NotifyResponse,
)
from telegram_notifications.config import SERVICE_NAME, SERVICE_VERSION
from telegram_notifications.context import AppContext, get_context
from telegram_notifications.domain.errors import ErrorCode
from telegram_notifications.domain.models import Delivered, OutboundMessage

logger = logging.getLogger(__name__)

router = APIRouter()

# DeliveryFailed.code → HTTP status
ERROR_STATUS = {
    ErrorCode.EMPTY_MESSAGE: 400,
    ErrorCode.MESSAGE_TOO_LONG: 400,
    ErrorCode.MISSING_TARGET: 400,
    ErrorCode.INVALID_JSON: 400,
    ErrorCode.INVALID_REQUEST: 422,
    ErrorCode.NETWORK_ERROR: 502,
    ErrorCode.TELEGRAM_API_ERROR: 502,
}


@router.get("/", response_model=InfoResponse)
async def root():
    """API 정보"""
    return InfoResponse()


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
async def health(context: AppContext = Depends(get_context)):
    """
    헬스체크 엔드포인트

    시작 시 캐시한 봇 정보만 돌려준다. 봇 검증이 실패했어도 200.
    """
    logger.info("🔍 Health check requested")
    return HealthResponse(
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        bot_verified=context.identity.verified,
        bot_username=context.identity.username,
    )


@router.post("/notify")
async def notify(request: OutboundMessage, context: AppContext = Depends(get_context)):
    """알림 전송"""
    logger.info(f"📤 Notification request received: {request.message[:50]}")

    result = await context.service.send(request)

    if isinstance(result, Delivered):
        body = NotifyResponse.from_result(result)
        return JSONResponse(status_code=200, content=body.model_dump(exclude_none=True))

    return JSONResponse(
        status_code=ERROR_STATUS.get(result.code, 502),
        content=ErrorResponse.from_result(result).model_dump(),
    )


@router.post("/send")
async def send(request: OutboundMessage, context: AppContext = Depends(get_context)):
    """알림 전송 (/notify alias)"""
    return await notify(request, context)
