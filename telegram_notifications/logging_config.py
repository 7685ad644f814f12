"""
로깅 설정
"""
import logging
import sys


def setup_logging(level: str = "INFO"):
    """
    애플리케이션 로깅 설정

    - Console handler 사용
    - stdout 출력
    - 포맷: '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    - 알 수 없는 level 은 INFO 로 처리
    """
    log_level = logging.getLevelName(str(level).upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    # 루트 로거 설정
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # 기존 핸들러 제거 (중복 방지)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)

    # httpx 는 요청 URL(봇 토큰 포함)을 INFO 로 남기므로 한 단계 올린다
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))
