"""
잔고 이력 (Balance History) 모듈

계좌별 잔고 기록 저장소와 월간 변동 리포트 계산.

사용 예시:
```python
from core.ledger import LedgerStore, build_reports

async with LedgerStore(db_path) as store:
    # 계좌별 잔고 이력 (관측일 오름차순)
    history = await store.list_balance_history(account_id)

    # 월간 변동 리포트
    reports = build_reports(history)
```
"""

from core.ledger.reports import build_reports, get_monthly_reports, last_entry_per_month
from core.ledger.store import LedgerStore, storage_operation

__all__ = [
    # 핵심 클래스
    "LedgerStore",
    # 리포트
    "build_reports",
    "get_monthly_reports",
    "last_entry_per_month",
    # 유틸리티
    "storage_operation",
]
