# tests/conftest.py
import os
import sys

import pytest

# 프로젝트 루트 경로를 계산해서 sys.path 맨 앞에 넣어준다.
# 이러면 어디서 pytest를 실행해도 'telegram_notifications' 패키지를 안정적으로 import 할 수 있다.
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from telegram_notifications.config import Settings  # noqa: E402

BOT_TOKEN = "test_token_123:ABCdefGHIjklMNOpqrSTUvwxyz"
CHAT_ID = "987654321"


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """
    관련 환경변수를 지우고, 작업 디렉토리의 .env 도 읽히지 않도록 tmp 로 이동
    """
    for name in (
        "TELEGRAM_BOT_TOKEN",
        "TELEGRAM_CHAT_ID",
        "TELEGRAM_NOTIFICATIONS_SKIP_VALIDATION",
        "TELEGRAM_REQUEST_TIMEOUT",
        "HOST",
        "PORT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings() -> Settings:
    """테스트 모드 설정"""
    return Settings(bot_token=BOT_TOKEN, chat_id=CHAT_ID, test_mode=True)
