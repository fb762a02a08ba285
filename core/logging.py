"""
로깅 설정

설정 파일(logging.level)의 레벨로 콘솔과 일별 로그 파일을 함께 구성한다.

사용법:
    from core.config.loader import get_settings
    from core.logging import configure_logging

    log_file = configure_logging("monthly_report", get_settings())
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from core.constants import Paths

if TYPE_CHECKING:
    from core.config.loader import Settings


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7

# 쿼리마다 로그를 남기는 드라이버 로거. WARNING 미만은 버린다.
NOISY_LOGGERS = ("aiosqlite", "asyncio")


def _file_handler(log_file: Path, formatter: logging.Formatter) -> TimedRotatingFileHandler:
    # 자정마다 ledger.log.2025-07-31 형식으로 넘김
    handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    process_name: str,
    level: int = logging.INFO,
    log_dir: Path | None = None,
) -> Path:
    """루트 로거에 콘솔/파일 핸들러 설치

    다시 호출하면 기존 핸들러를 닫고 교체한다.

    Args:
        process_name: 로그 파일 이름 (<process_name>.log)
        level: 콘솔과 파일 공통 레벨
        log_dir: 로그 디렉토리 (None이면 Paths.LOGS_DIR)

    Returns:
        로그 파일 경로
    """
    log_dir = log_dir or Paths.LOGS_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{process_name}.log"

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)

    root_logger.addHandler(console)
    root_logger.addHandler(_file_handler(log_file, formatter))
    root_logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    root_logger.info(
        f"로깅 초기화: {process_name} ({logging.getLevelName(level)}) → {log_file}"
    )
    return log_file


def configure_logging(
    process_name: str,
    settings: Settings,
    log_dir: Path | None = None,
) -> Path:
    """설정의 logging.level로 setup_logging 실행"""
    return setup_logging(process_name, level=settings.log_level, log_dir=log_dir)
