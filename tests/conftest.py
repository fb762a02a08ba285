"""
pytest 공통 fixture 정의

설정 파일, 임시 디렉토리 등 공통 fixture
"""

import logging
import tempfile
from pathlib import Path

import pytest

from core.config.loader import Settings


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_settings() -> None:
    """테스트 간 Settings 싱글턴 격리"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성 (file 모드)"""
    db_path = temp_dir / "data" / "ledger.db"
    settings_content = f"""# 테스트용 settings.yaml
storage:
  mode: file
  db_path: "{db_path.as_posix()}"

logging:
  level: DEBUG
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_memory(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성 (memory 모드)"""
    settings_content = """storage:
  mode: memory
"""
    settings_path = temp_dir / "settings_memory.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_invalid_mode(temp_dir: Path) -> Path:
    """잘못된 모드의 settings.yaml 파일 생성"""
    settings_content = """storage:
  mode: cloud
"""
    settings_path = temp_dir / "settings_invalid.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def restore_root_logger() -> None:
    """테스트 후 루트 로거 핸들러/레벨 복원"""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level

    yield

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(saved_level)
