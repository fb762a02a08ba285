"""
데이터베이스 어댑터

SQLite 연결 관리 (파일 WAL 모드 / 메모리 모드).
"""

from adapters.db.sqlite_adapter import (
    STORAGE_ERRORS,
    ConnectionClosedError,
    SQLiteAdapter,
    StorageFault,
    create_connection,
    init_schema,
)

__all__ = [
    "SQLiteAdapter",
    "StorageFault",
    "STORAGE_ERRORS",
    "ConnectionClosedError",
    "create_connection",
    "init_schema",
]
