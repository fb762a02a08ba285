"""
core/logging.py 테스트

콘솔/파일 핸들러 구성, 설정 레벨 반영, 소음 로거 레벨 조정 테스트
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import pytest

from core.config.loader import get_settings
from core.logging import (
    LOG_FILE_BACKUP_COUNT,
    NOISY_LOGGERS,
    configure_logging,
    setup_logging,
)


@pytest.mark.usefixtures("restore_root_logger")
class TestSetupLogging:
    """setup_logging 테스트"""

    def test_creates_log_file(self, tmp_path: Path) -> None:
        """로그 디렉토리와 파일 생성"""
        log_dir = tmp_path / "logs"

        log_file = setup_logging("ledger", log_dir=log_dir)
        logging.getLogger("ledger").info("hello")

        assert log_file == log_dir / "ledger.log"
        assert log_file.exists()
        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_handlers(self, tmp_path: Path) -> None:
        """콘솔 + 일별 롤링 파일 핸들러, 루트 레벨 = 지정 레벨"""
        setup_logging("ledger", level=logging.WARNING, log_dir=tmp_path)
        root_logger = logging.getLogger()

        assert len(root_logger.handlers) == 2
        assert root_logger.level == logging.WARNING

        file_handlers = [
            h for h in root_logger.handlers if isinstance(h, TimedRotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].backupCount == LOG_FILE_BACKUP_COUNT
        assert file_handlers[0].when == "MIDNIGHT"

    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path: Path) -> None:
        """여러 번 호출해도 핸들러 중복 없음"""
        setup_logging("ledger", log_dir=tmp_path)
        setup_logging("ledger", log_dir=tmp_path)

        assert len(logging.getLogger().handlers) == 2

    def test_noisy_loggers_quieted(self, tmp_path: Path) -> None:
        """DEBUG에서도 aiosqlite 등은 WARNING 이상만"""
        setup_logging("ledger", level=logging.DEBUG, log_dir=tmp_path)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_debug_records_filtered_at_info(self, tmp_path: Path) -> None:
        """INFO 레벨이면 DEBUG 기록은 파일에 남지 않음"""
        log_file = setup_logging("ledger", level=logging.INFO, log_dir=tmp_path)

        logging.getLogger("core.ledger.store").debug("hidden detail")
        logging.getLogger("core.ledger.store").info("visible line")

        content = log_file.read_text(encoding="utf-8")
        assert "visible line" in content
        assert "hidden detail" not in content


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    """configure_logging 테스트"""

    def test_uses_settings_level(self, temp_settings_file: Path, tmp_path: Path) -> None:
        """settings.yaml의 logging.level(DEBUG) 반영"""
        settings = get_settings(temp_settings_file)

        log_file = configure_logging("ledger", settings, log_dir=tmp_path)

        assert logging.getLogger().level == logging.DEBUG
        assert log_file == tmp_path / "ledger.log"
