"""
Ledger 저장소

계좌(account)와 잔고 기록(balance_entry)의 저장 및 조회
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Any, AsyncIterator

from adapters.db.sqlite_adapter import (
    STORAGE_ERRORS,
    SQLiteAdapter,
    StorageFault,
    init_schema,
)
from core.constants import MEMORY_DB
from core.ledger.reports import get_monthly_reports
from core.types import Account, BalanceEntry, MonthlyReport
from core.utils.lazy import AsyncLazy

if TYPE_CHECKING:
    from core.config.loader import Settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def storage_operation(operation: str) -> AsyncIterator[None]:
    """저장소 예외를 StorageFault로 변환

    Args:
        operation: 작업 이름 (StorageFault.operation)
    """
    try:
        yield
    except STORAGE_ERRORS as e:
        logger.error(f"Storage operation '{operation}' failed: {e}")
        raise StorageFault(operation, e) from e


class LedgerStore:
    """Ledger 저장소

    계좌와 잔고 기록의 CRUD 및 계좌별 시간순 조회.
    연결과 스키마는 첫 작업 시점에 한 번만 생성된다.
    동시에 여러 작업이 첫 접근을 해도 초기화는 한 번만 실행되고
    모두 같은 연결을 사용한다.

    Args:
        db_path: DB 파일 경로 또는 ":memory:" (휘발성)

    사용 예시:
    ```python
    async with LedgerStore(db_path) as store:
        account = Account(name="Livret A")
        await store.add_account(account)

        await store.add_balance_entry(
            BalanceEntry(account_id=account.id, value=Decimal("150"), date=date(2025, 7, 25))
        )

        reports = await store.get_monthly_reports(account.id)
    ```
    """

    def __init__(self, db_path: Path | str = MEMORY_DB):
        self.db_path = db_path
        self._lazy_db: AsyncLazy[SQLiteAdapter] = AsyncLazy(self._open)

    @classmethod
    def from_settings(cls, settings: Settings) -> LedgerStore:
        """설정에서 LedgerStore 생성"""
        return cls(settings.db_target)

    @property
    def is_initialized(self) -> bool:
        """연결/스키마 초기화 완료 여부"""
        return self._lazy_db.is_ready

    async def _open(self) -> SQLiteAdapter:
        """연결 생성 + 스키마 초기화 (AsyncLazy가 한 번만 호출)"""
        adapter = SQLiteAdapter(self.db_path)
        try:
            async with storage_operation("initialize"):
                await adapter.connect()
                await init_schema(adapter)
        except StorageFault:
            await adapter.close()
            raise

        logger.info(f"LedgerStore 초기화 완료: {self.db_path}")
        return adapter

    async def _db(self) -> SQLiteAdapter:
        return await self._lazy_db.get()

    async def close(self) -> None:
        """연결 종료

        이후 작업이 호출되면 다시 연결한다.
        메모리 모드에서는 종료 시 데이터가 사라진다.
        """
        adapter = await self._lazy_db.reset()
        if adapter is not None:
            await adapter.close()

    async def __aenter__(self) -> LedgerStore:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # =========================================================================
    # 계좌
    # =========================================================================

    async def list_accounts(self) -> list[Account]:
        """전체 계좌 조회 (순서 보장 없음)"""
        async with storage_operation("list_accounts"):
            db = await self._db()
            rows = await db.fetchall("SELECT id, name FROM account")

        return [Account(id=row[0], name=row[1]) for row in rows]

    async def add_account(self, account: Account) -> int:
        """계좌 저장

        할당된 id를 account.id에도 기록한다.

        Returns:
            새 계좌 ID
        """
        async with storage_operation("add_account"):
            db = await self._db()
            async with db.transaction() as conn:
                cursor = await conn.execute(
                    "INSERT INTO account (name) VALUES (?)",
                    (account.name,),
                )
                account_id = cursor.lastrowid

        account.id = account_id
        logger.debug(f"Account added: id={account_id}")
        return account_id

    async def update_account(self, account: Account) -> None:
        """계좌 수정 (id 기준). 없는 id면 아무 것도 하지 않음"""
        async with storage_operation("update_account"):
            db = await self._db()
            async with db.transaction() as conn:
                cursor = await conn.execute(
                    "UPDATE account SET name = ? WHERE id = ?",
                    (account.name, account.id),
                )

        if cursor.rowcount == 0:
            logger.debug(f"update_account: no account with id={account.id}")

    async def delete_account(self, account_id: int) -> None:
        """계좌 삭제

        해당 계좌의 잔고 기록을 먼저 지우고 계좌를 지운다.
        두 삭제는 하나의 트랜잭션으로 실행된다.
        """
        async with storage_operation("delete_account"):
            db = await self._db()
            async with db.transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM balance_entry WHERE account_id = ?",
                    (account_id,),
                )
                removed_entries = cursor.rowcount
                await conn.execute(
                    "DELETE FROM account WHERE id = ?",
                    (account_id,),
                )

        logger.debug(
            f"Account deleted: id={account_id}, entries removed={removed_entries}"
        )

    # =========================================================================
    # 잔고 기록
    # =========================================================================

    async def add_balance_entry(self, entry: BalanceEntry) -> int:
        """잔고 기록 저장

        할당된 id를 entry.id에도 기록한다.

        Returns:
            새 잔고 기록 ID
        """
        async with storage_operation("add_balance_entry"):
            db = await self._db()
            async with db.transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO balance_entry (value, date, account_id)
                    VALUES (?, ?, ?)
                    """,
                    (str(entry.value), entry.date.isoformat(), entry.account_id),
                )
                entry_id = cursor.lastrowid

        entry.id = entry_id
        logger.debug(f"Balance entry added: id={entry_id}, account={entry.account_id}")
        return entry_id

    async def update_balance_entry(self, entry: BalanceEntry) -> None:
        """잔고 기록 수정 (id 기준). 없는 id면 아무 것도 하지 않음"""
        async with storage_operation("update_balance_entry"):
            db = await self._db()
            async with db.transaction() as conn:
                cursor = await conn.execute(
                    """
                    UPDATE balance_entry
                    SET value = ?, date = ?, account_id = ?
                    WHERE id = ?
                    """,
                    (
                        str(entry.value),
                        entry.date.isoformat(),
                        entry.account_id,
                        entry.id,
                    ),
                )

        if cursor.rowcount == 0:
            logger.debug(f"update_balance_entry: no entry with id={entry.id}")

    async def delete_balance_entry(self, entry_id: int) -> None:
        """잔고 기록 삭제. 없는 id면 아무 것도 하지 않음"""
        async with storage_operation("delete_balance_entry"):
            db = await self._db()
            async with db.transaction() as conn:
                await conn.execute(
                    "DELETE FROM balance_entry WHERE id = ?",
                    (entry_id,),
                )

    async def list_balance_history(self, account_id: int) -> list[BalanceEntry]:
        """계좌의 잔고 기록 조회

        관측일 오름차순. 같은 날짜는 저장 순서(id)대로.

        Args:
            account_id: 계좌 ID

        Returns:
            잔고 기록 목록 (기록이 없으면 빈 목록)
        """
        async with storage_operation("list_balance_history"):
            db = await self._db()
            rows = await db.fetchall(
                """
                SELECT id, value, date, account_id
                FROM balance_entry
                WHERE account_id = ?
                ORDER BY date ASC, id ASC
                """,
                (account_id,),
            )

        return [
            BalanceEntry(
                id=row[0],
                value=Decimal(row[1]),
                date=row[2],
                account_id=row[3],
            )
            for row in rows
        ]

    # =========================================================================
    # 리포트
    # =========================================================================

    async def get_monthly_reports(self, account_id: int) -> list[MonthlyReport]:
        """계좌의 월간 변동 리포트 조회"""
        return await get_monthly_reports(self, account_id)
