"""
월간 잔고 변동 리포트

계좌 하나의 잔고 기록을 달력 월 단위로 묶어
월별 대표 잔고와 직전 월 대비 변동(증감액, 증감률)을 계산.

규칙:
- 월별 대표 잔고 = 해당 월에서 관측일이 가장 늦은 기록
- 같은 최대 관측일이 여러 개면 입력 순서상 마지막 기록
- 기록이 없는 월은 리포트를 만들지 않음 (빈 월은 건너뜀)
- 첫 리포트의 증감액/증감률은 0
- 직전 월 잔고가 0이면 증감률은 0 (0으로 나누지 않음)
"""

from __future__ import annotations

import logging
from decimal import Decimal, localcontext
from typing import TYPE_CHECKING, Iterable

from core.constants import Defaults
from core.types import BalanceEntry, MonthlyReport

if TYPE_CHECKING:
    from core.ledger.store import LedgerStore

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def last_entry_per_month(entries: Iterable[BalanceEntry]) -> list[BalanceEntry]:
    """월별 마지막 잔고 기록 선택

    Args:
        entries: 잔고 기록 (정렬되어 있지 않아도 됨)

    Returns:
        월별 대표 기록 목록 (관측일 오름차순)
    """
    latest: dict[tuple[int, int], BalanceEntry] = {}

    for entry in entries:
        key = (entry.date.year, entry.date.month)
        current = latest.get(key)
        # >= : 같은 날짜면 나중에 나온 기록이 우선
        if current is None or entry.date >= current.date:
            latest[key] = entry

    return sorted(latest.values(), key=lambda e: e.date)


def evolution_ratio(evolution_value: Decimal, previous_value: Decimal) -> Decimal:
    """증감률 계산

    직전 잔고가 정확히 0이면 0 반환.
    """
    if previous_value == ZERO:
        return ZERO

    with localcontext() as ctx:
        ctx.prec = Defaults.RATIO_PRECISION
        return evolution_value / previous_value


def build_reports(entries: Iterable[BalanceEntry]) -> list[MonthlyReport]:
    """월간 리포트 생성 (순수 함수)

    입력을 변경하지 않으며 I/O도 하지 않는다.

    Args:
        entries: 한 계좌의 잔고 기록 (관측일 오름차순)

    Returns:
        월간 리포트 목록 (오름차순). 입력이 비어 있으면 빈 목록.

    Example:
        >>> reports = build_reports(history)
        >>> [(r.year, r.month, r.value, r.evolution_value) for r in reports]
        [(2025, 7, Decimal('150'), Decimal('0')), (2025, 8, Decimal('350'), Decimal('200'))]
    """
    month_sequence = last_entry_per_month(entries)
    if not month_sequence:
        return []

    reports: list[MonthlyReport] = []
    previous: BalanceEntry | None = None

    for current in month_sequence:
        if previous is None:
            reports.append(MonthlyReport(last_entry_of_month=current))
        else:
            value_diff = current.value - previous.value
            reports.append(
                MonthlyReport(
                    last_entry_of_month=current,
                    evolution_value=value_diff,
                    evolution_ratio=evolution_ratio(value_diff, previous.value),
                )
            )
        previous = current

    return reports


async def get_monthly_reports(store: LedgerStore, account_id: int) -> list[MonthlyReport]:
    """계좌의 월간 리포트 조회

    저장소 오류(StorageFault)는 그대로 전파된다.

    Args:
        store: LedgerStore 인스턴스
        account_id: 계좌 ID

    Returns:
        월간 리포트 목록
    """
    history = await store.list_balance_history(account_id)
    reports = build_reports(history)

    logger.debug(
        f"Monthly reports built: account={account_id}, "
        f"entries={len(history)}, months={len(reports)}"
    )
    return reports
