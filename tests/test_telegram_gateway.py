# tests/test_telegram_gateway.py
import json
from typing import Any, Dict, List

import httpx
import pytest

from telegram_notifications.adapters.telegram_gateway import TELEGRAM_API_BASE, TelegramGateway
from telegram_notifications.domain.errors import (
    ErrorCode,
    NetworkError,
    ProviderError,
    VerificationFailed,
)

BOT_TOKEN = "test_token_123:ABCdefGHIjklMNOpqrSTUvwxyz"


# --- Helper Functions -------------------------------------------------------

def make_gateway(handler) -> TelegramGateway:
    """httpx.MockTransport 로 응답을 흉내내는 게이트웨이"""
    return TelegramGateway(BOT_TOKEN, transport=httpx.MockTransport(handler))


def recording_handler(status: int, body: Any, calls: List[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)

    return handler


def sent_message(message_id: int = 42) -> Dict[str, Any]:
    return {
        "ok": True,
        "result": {
            "message_id": message_id,
            "date": 1234567890,
            "chat": {"id": 987654321, "type": "private"},
            "text": "Test message",
        },
    }


# --- 테스트들 ---------------------------------------------------------------

@pytest.mark.anyio
async def test_api_url_contains_token():
    gateway = TelegramGateway(BOT_TOKEN)

    assert gateway.api_url == f"{TELEGRAM_API_BASE}{BOT_TOKEN}"
    assert TELEGRAM_API_BASE == "https://api.telegram.org/bot"
    await gateway.aclose()


@pytest.mark.anyio
async def test_send_message_success():
    calls: List[httpx.Request] = []
    gateway = make_gateway(recording_handler(200, sent_message(42), calls))

    result = await gateway.send_message({"chat_id": "987654321", "text": "Test message"})

    assert result.message_id == 42
    assert result.simulated is False
    assert len(calls) == 1
    assert calls[0].method == "POST"
    assert calls[0].url.path == f"/bot{BOT_TOKEN}/sendMessage"
    assert json.loads(calls[0].content) == {"chat_id": "987654321", "text": "Test message"}
    await gateway.aclose()


@pytest.mark.anyio
async def test_send_message_passes_payload_as_is():
    calls: List[httpx.Request] = []
    gateway = make_gateway(recording_handler(200, sent_message(43), calls))
    payload = {
        "chat_id": "987654321",
        "text": "*Bold text*",
        "parse_mode": "Markdown",
        "disable_notification": True,
    }

    await gateway.send_message(payload)

    assert json.loads(calls[0].content) == payload


@pytest.mark.anyio
async def test_send_message_ok_false_is_provider_error():
    """2xx 여도 ok=false 면 실패"""
    body = {"ok": False, "error_code": 400, "description": "Bad Request: chat not found"}
    gateway = make_gateway(recording_handler(200, body, []))

    with pytest.raises(ProviderError) as exc_info:
        await gateway.send_message({"chat_id": "invalid", "text": "Test"})

    assert exc_info.value.code == ErrorCode.TELEGRAM_API_ERROR
    assert exc_info.value.error_code == 400
    assert "Bad Request: chat not found" in str(exc_info.value)
    assert "400" in str(exc_info.value)


@pytest.mark.anyio
async def test_send_message_http_error_with_body():
    body = {"ok": False, "error_code": 403, "description": "Forbidden: bot was blocked by the user"}
    gateway = make_gateway(recording_handler(403, body, []))

    with pytest.raises(ProviderError) as exc_info:
        await gateway.send_message({"chat_id": "1", "text": "Test"})

    assert exc_info.value.error_code == 403
    assert exc_info.value.description == "Forbidden: bot was blocked by the user"


@pytest.mark.anyio
async def test_send_message_http_error_without_body():
    gateway = make_gateway(recording_handler(500, "", []))

    with pytest.raises(ProviderError) as exc_info:
        await gateway.send_message({"chat_id": "1", "text": "Test"})

    assert exc_info.value.error_code == 500
    assert "HTTP 500" in str(exc_info.value)


@pytest.mark.anyio
async def test_send_message_non_json_success_is_provider_error():
    gateway = make_gateway(recording_handler(200, "<html>proxy</html>", []))

    with pytest.raises(ProviderError) as exc_info:
        await gateway.send_message({"chat_id": "1", "text": "Test"})

    assert "Invalid response" in str(exc_info.value)


@pytest.mark.anyio
async def test_send_message_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    gateway = make_gateway(handler)

    with pytest.raises(NetworkError) as exc_info:
        await gateway.send_message({"chat_id": "1", "text": "Test"})

    assert exc_info.value.code == ErrorCode.NETWORK_ERROR
    assert "connection refused" in str(exc_info.value)
    assert BOT_TOKEN not in str(exc_info.value)


@pytest.mark.anyio
async def test_send_message_timeout_is_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    gateway = make_gateway(handler)

    with pytest.raises(NetworkError):
        await gateway.send_message({"chat_id": "1", "text": "Test"})


@pytest.mark.anyio
async def test_get_me_success():
    calls: List[httpx.Request] = []
    body = {
        "ok": True,
        "result": {
            "id": 123456789,
            "is_bot": True,
            "first_name": "Test Bot",
            "username": "test_bot",
        },
    }
    gateway = make_gateway(recording_handler(200, body, calls))

    identity = await gateway.get_me()

    assert identity.verified is True
    assert identity.username == "test_bot"
    assert identity.first_name == "Test Bot"
    assert identity.bot_id == 123456789
    assert calls[0].method == "GET"
    assert calls[0].url.path == f"/bot{BOT_TOKEN}/getMe"


@pytest.mark.anyio
async def test_get_me_error():
    body = {"ok": False, "error_code": 401, "description": "Unauthorized: bot token is invalid"}
    gateway = make_gateway(recording_handler(401, body, []))

    with pytest.raises(VerificationFailed) as exc_info:
        await gateway.get_me()

    assert exc_info.value.code == ErrorCode.BOT_VERIFICATION_FAILED
    assert "Unauthorized: bot token is invalid" in str(exc_info.value)
    assert "401" in str(exc_info.value)


@pytest.mark.anyio
async def test_get_me_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("name resolution failed", request=request)

    gateway = make_gateway(handler)

    with pytest.raises(VerificationFailed):
        await gateway.get_me()


@pytest.mark.anyio
async def test_send_message_token_breaking_url_is_network_error():
    """토큰 끝에 \\r 이 붙으면 httpx 가 URL 을 만들지 못한다"""
    calls: List[httpx.Request] = []
    gateway = TelegramGateway(
        "123:abc\r",
        transport=httpx.MockTransport(recording_handler(200, sent_message(), calls)),
    )

    with pytest.raises(NetworkError) as exc_info:
        await gateway.send_message({"chat_id": "1", "text": "Test"})

    assert exc_info.value.code == ErrorCode.NETWORK_ERROR
    assert "invalid API URL" in str(exc_info.value)
    assert calls == []
    await gateway.aclose()


@pytest.mark.anyio
async def test_get_me_token_breaking_url_is_verification_failure():
    gateway = TelegramGateway(
        "123:abc\r",
        transport=httpx.MockTransport(recording_handler(200, {"ok": True, "result": {}}, [])),
    )

    with pytest.raises(VerificationFailed):
        await gateway.get_me()
    await gateway.aclose()
