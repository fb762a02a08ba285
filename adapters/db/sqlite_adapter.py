"""
SQLite 어댑터

파일 DB는 WAL 모드, ":memory:"는 휘발성 연결로 관리.
두 모드 모두 같은 계약(스키마, 조회/쓰기 API)을 제공.

주의: 날짜는 ISO 문자열(YYYY-MM-DD)로 저장하여 문자열 정렬 = 시간순 정렬
"""

import asyncio
import logging
import sqlite3
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from core.constants import MEMORY_DB

logger = logging.getLogger(__name__)


class StorageFault(Exception):
    """저장소 I/O 실패

    읽기/쓰기 실패(I/O 에러, 손상된 파일, 연결 실패)를 나타낸다.
    내부에서 재시도하지 않으며 항상 호출자에게 전파된다.

    Args:
        operation: 실패한 작업 이름 (예: "add_account")
        cause: 원인 예외
    """

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Storage operation '{operation}' failed: {cause}")


class ConnectionClosedError(RuntimeError):
    """연결이 없거나 이미 닫힌 어댑터 사용"""

    def __init__(self) -> None:
        super().__init__("Not connected to database")


# StorageFault로 감싸는 하위 예외 목록
STORAGE_ERRORS: tuple[type[BaseException], ...] = (
    aiosqlite.Error,
    sqlite3.Error,
    OSError,
    ConnectionClosedError,
)


def is_memory_target(db_path: Path | str) -> bool:
    """휘발성(in-memory) 연결 대상인지 확인"""
    return str(db_path) == MEMORY_DB


async def create_connection(db_path: Path | str) -> aiosqlite.Connection:
    """SQLite 연결 생성

    파일 DB는 WAL 모드로, 메모리 DB는 기본 저널 모드로 연다.

    Args:
        db_path: DB 파일 경로 또는 ":memory:"

    Returns:
        aiosqlite 연결 객체
    """
    db_path_str = str(db_path)

    if is_memory_target(db_path):
        conn = await aiosqlite.connect(MEMORY_DB)
    else:
        # 디렉토리가 없으면 생성
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(db_path_str)

        try:
            # WAL 모드 설정
            await conn.execute("PRAGMA journal_mode=WAL")

            # 동시 접근 설정
            await conn.execute("PRAGMA busy_timeout=30000")  # 30초 대기
        except aiosqlite.Error:
            # 손상된 파일 등: 연결을 닫고 그대로 전파
            await conn.close()
            raise

    logger.info(
        "SQLite 연결 생성",
        extra={"db_path": db_path_str},
    )

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    단일 연결을 관리하고 트랜잭션 컨텍스트 매니저 제공.

    연결 하나를 여러 Task가 공유하므로 트랜잭션(본문 + 커밋/롤백),
    조회(fetchone/fetchall), 종료(close)는 같은 락 아래에서 실행된다.
    한 Task의 롤백이 다른 Task의 미커밋 문장을 되돌리지 않고,
    조회는 진행 중인 트랜잭션의 중간 상태를 보지 않는다.

    주의: 트랜잭션 본문에서는 yield된 연결(conn)만 사용.
    본문에서 adapter.fetchone()/fetchall()을 호출하면 교착 상태가 된다.

    Args:
        db_path: DB 파일 경로 또는 ":memory:"

    사용 예시:
    ```python
    adapter = SQLiteAdapter(db_path)
    await adapter.connect()

    async with adapter.transaction() as conn:
        await conn.execute("INSERT INTO ...")

    await adapter.close()
    ```
    """

    def __init__(self, db_path: Path | str):
        self.db_path: Path | str = (
            MEMORY_DB if is_memory_target(db_path) else Path(db_path)
        )
        self._conn: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        """연결 상태 확인"""
        return self._conn is not None

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        self._conn = await create_connection(self.db_path)

    async def close(self) -> None:
        """연결 종료

        진행 중인 트랜잭션/조회가 끝난 뒤 닫는다.
        """
        async with self._lock:
            if self._conn is not None:
                await self._conn.close()
                self._conn = None
                logger.info("SQLite 연결 종료")

    def _require_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise ConnectionClosedError()
        return self._conn

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행 (락 없음: 스키마 생성 등 단독 작업용)"""
        conn = self._require_conn()

        if parameters:
            return await conn.execute(sql, parameters)
        return await conn.execute(sql)

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """단일 행 조회"""
        async with self._lock:
            cursor = await self.execute(sql, parameters)
            return await cursor.fetchone()

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회"""
        async with self._lock:
            cursor = await self.execute(sql, parameters)
            return list(await cursor.fetchall())

    async def commit(self) -> None:
        """커밋"""
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        """롤백"""
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """트랜잭션 컨텍스트 매니저

        성공 시 자동 커밋, 예외 시 자동 롤백.
        본문부터 커밋/롤백까지 락을 잡고 있으므로
        다른 Task의 트랜잭션과 섞이지 않는다.

        사용 예시:
        ```python
        async with adapter.transaction() as conn:
            await conn.execute("DELETE FROM balance_entry WHERE account_id = ?", (1,))
            await conn.execute("DELETE FROM account WHERE id = ?", (1,))
            # 성공 시 자동 커밋
        ```
        """
        async with self._lock:
            conn = self._require_conn()

            try:
                yield conn
                await conn.commit()
            except BaseException:
                await conn.rollback()
                raise

    async def table_exists(self, table_name: str) -> bool:
        """테이블 존재 여부 확인"""
        result = await self.fetchone(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table_name,),
        )
        return result is not None

    async def index_exists(self, index_name: str) -> bool:
        """인덱스 존재 여부 확인"""
        result = await self.fetchone(
            "SELECT name FROM sqlite_master WHERE type='index' AND name=?",
            (index_name,),
        )
        return result is not None

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter) -> None:
    """스키마 초기화 (테이블 생성)

    여러 번 실행해도 안전 (IF NOT EXISTS).

    Args:
        adapter: 연결된 SQLiteAdapter

    주의: balance_entry.account_id에는 FOREIGN KEY를 두지 않는다.
    삭제된 계좌의 잔고 기록은 삽입을 막지 않고 계좌 삭제 시 함께 정리한다.
    """
    # account
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS account (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            name             TEXT NOT NULL DEFAULT ''
        )
    """)

    # balance_entry
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS balance_entry (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            value            TEXT NOT NULL,
            date             TEXT NOT NULL,
            account_id       INTEGER NOT NULL
        )
    """)

    # 계좌별 시간순 조회 인덱스
    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_balance_entry_account
        ON balance_entry(account_id, date)
    """)

    await adapter.commit()

    logger.info("스키마 초기화 완료")
