"""
설정 로더

settings.yaml 로드 및 저장소/로깅 설정 생성
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from core.constants import MEMORY_DB, PROJECT_ROOT, Defaults, Paths
from core.types import StorageMode


@dataclass(frozen=True)
class AppSettings:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    storage_mode: StorageMode
    db_path: Path
    log_level: int


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def _resolve_db_path(raw: str | None) -> Path:
    """db_path 해석 (상대 경로는 프로젝트 루트 기준)"""
    if not raw:
        return Paths.DEFAULT_DB

    path = Path(raw)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def _parse_log_level(raw: str | int | None) -> int:
    if raw is None:
        raw = Defaults.LOG_LEVEL
    if isinstance(raw, int):
        return raw

    level = logging.getLevelName(str(raw).upper())
    if not isinstance(level, int):
        raise ValueError(f"유효하지 않은 로그 레벨입니다: '{raw}'")
    return level


def load_settings(path: Path | None = None) -> AppSettings:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppSettings 인스턴스

    Raises:
        SettingsLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 유효하지 않은 mode 또는 로그 레벨인 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        raise SettingsLoadError(f"settings.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SettingsLoadError("settings.yaml이 비어 있습니다")

    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    storage_config = data.get("storage") or {}
    logging_config = data.get("logging") or {}

    # mode 검증
    mode_str = storage_config.get("mode", Defaults.STORAGE_MODE)
    try:
        mode = StorageMode(str(mode_str).lower())
    except ValueError as e:
        valid_modes = [m.value for m in StorageMode]
        raise ValueError(
            f"유효하지 않은 mode입니다: '{mode_str}'. "
            f"유효한 값: {valid_modes}"
        ) from e

    return AppSettings(
        storage_mode=mode,
        db_path=_resolve_db_path(storage_config.get("db_path")),
        log_level=_parse_log_level(logging_config.get("level")),
    )


def get_db_target(settings: AppSettings) -> Path | str:
    """모드에 따른 연결 대상 반환

    Args:
        settings: AppSettings 인스턴스

    Returns:
        파일 모드: DB 파일 경로 / 메모리 모드: ":memory:"
    """
    if settings.storage_mode == StorageMode.MEMORY:
        return MEMORY_DB
    return settings.db_path


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _settings: AppSettings | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._settings is None:
            self._settings = load_settings(settings_path)

    @property
    def storage_mode(self) -> StorageMode:
        """저장소 모드"""
        assert self._settings is not None
        return self._settings.storage_mode

    @property
    def db_path(self) -> Path:
        """설정된 DB 파일 경로 (메모리 모드에서는 사용하지 않음)"""
        assert self._settings is not None
        return self._settings.db_path

    @property
    def db_target(self) -> Path | str:
        """현재 모드의 연결 대상"""
        assert self._settings is not None
        return get_db_target(self._settings)

    @property
    def log_level(self) -> int:
        """로그 레벨"""
        assert self._settings is not None
        return self._settings.log_level

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._settings = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
