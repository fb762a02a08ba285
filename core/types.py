"""
타입 정의 모듈

Enum, Dataclass 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from dataclasses import dataclass
from datetime import date as Date
from datetime import datetime
from decimal import Decimal
from enum import Enum

from core.utils.decimal_utils import to_decimal


class StorageMode(str, Enum):
    """저장소 모드 (파일 / 메모리)"""

    FILE = "file"
    MEMORY = "memory"


def to_date(value: Date | datetime | str) -> Date:
    """관측일을 달력 날짜로 정규화

    시각(time-of-day)은 월간 집계에 영향이 없으므로 버린다.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, Date):
        return value
    if isinstance(value, str):
        # "2025-07-10" 또는 "2025-07-10T12:00:00"
        return datetime.fromisoformat(value).date()
    raise TypeError(f"날짜로 사용할 수 없는 값입니다: {value!r}")


@dataclass
class Account:
    """계좌

    id == 0 이면 아직 저장되지 않은 계좌.
    LedgerStore.add_account()가 id를 할당한다.
    """

    id: int = 0
    name: str = ""


@dataclass
class BalanceEntry:
    """잔고 관측 기록

    특정 날짜에 관측된 계좌 잔고.
    value는 항상 Decimal, date는 항상 달력 날짜로 정규화된다.
    """

    account_id: int
    value: Decimal
    date: Date
    id: int = 0

    def __post_init__(self) -> None:
        self.value = to_decimal(self.value)
        self.date = to_date(self.date)


@dataclass(frozen=True)
class MonthlyReport:
    """월간 리포트 (불변, 저장하지 않음)

    Attributes:
        last_entry_of_month: 해당 월의 마지막 잔고 기록
        evolution_value: 직전 리포트 월 대비 증감액 (첫 달은 0)
        evolution_ratio: 증감액 / 직전 월 잔고 (첫 달 또는 직전 잔고 0이면 0)
    """

    last_entry_of_month: BalanceEntry
    evolution_value: Decimal = Decimal("0")
    evolution_ratio: Decimal = Decimal("0")

    @property
    def year(self) -> int:
        return self.last_entry_of_month.date.year

    @property
    def month(self) -> int:
        return self.last_entry_of_month.date.month

    @property
    def value(self) -> Decimal:
        """해당 월 대표 잔고"""
        return self.last_entry_of_month.value
