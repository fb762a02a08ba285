#!/usr/bin/env python3
"""
계좌별 월간 변동 리포트 출력

사용법:
    python -m scripts.monthly_report
    python -m scripts.monthly_report --account 3 --settings config/settings.yaml
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.config.loader import get_settings
from core.ledger.store import LedgerStore
from core.logging import configure_logging
from core.types import MonthlyReport

logger = logging.getLogger(__name__)


def format_report(report: MonthlyReport) -> str:
    """리포트 한 줄: 연-월, 잔고, 증감액, 증감률(%)"""
    return (
        f"{report.year:04d}-{report.month:02d}"
        f"  {report.value:>16}"
        f"  {report.evolution_value:>+14}"
        f"  {report.evolution_ratio:>+10.2%}"
    )


async def main(
    account_id: int | None = None,
    settings_path: Path | None = None,
    log_dir: Path | None = None,
) -> None:
    """리포트 출력

    Args:
        account_id: 특정 계좌만 출력 (None이면 전체)
        settings_path: settings.yaml 경로 (None이면 기본 경로)
        log_dir: 로그 디렉토리 (None이면 Paths.LOGS_DIR)
    """
    settings = get_settings(settings_path)
    configure_logging("monthly_report", settings, log_dir=log_dir)

    async with LedgerStore.from_settings(settings) as store:
        accounts = await store.list_accounts()
        if account_id is not None:
            accounts = [a for a in accounts if a.id == account_id]
            if not accounts:
                logger.warning(f"계좌 없음: id={account_id}")

        for account in sorted(accounts, key=lambda a: a.id):
            reports = await store.get_monthly_reports(account.id)
            print(f"[{account.id}] {account.name} ({len(reports)} months)")
            for report in reports:
                print(f"  {format_report(report)}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="계좌별 월간 변동 리포트")
    parser.add_argument("--account", type=int, default=None, help="계좌 ID (기본: 전체)")
    parser.add_argument("--settings", type=Path, default=None, help="settings.yaml 경로")
    args = parser.parse_args()

    asyncio.run(main(args.account, args.settings))
