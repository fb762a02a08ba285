"""
scripts/monthly_report.py 테스트

설정 파일 기반 저장소 조회 + 월간 리포트 출력
"""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from core.ledger.store import LedgerStore
from core.types import Account, BalanceEntry, MonthlyReport
from scripts.monthly_report import format_report, main


class TestFormatReport:
    """format_report 테스트"""

    def test_line(self) -> None:
        """연-월, 잔고, 증감액, 증감률"""
        report = MonthlyReport(
            last_entry_of_month=BalanceEntry(
                account_id=1, value=Decimal("350"), date=date(2025, 8, 5)
            ),
            evolution_value=Decimal("200"),
            evolution_ratio=Decimal(200) / Decimal(150),
        )

        line = format_report(report)

        assert line.startswith("2025-08")
        assert "350" in line
        assert "+200" in line
        assert "+133.33%" in line


@pytest.mark.usefixtures("restore_root_logger")
class TestMain:
    """main 테스트"""

    @pytest.mark.asyncio
    async def test_prints_reports_per_account(
        self,
        temp_settings_file: Path,
        temp_dir: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """settings.yaml의 DB를 읽어 계좌별 리포트 출력, 로그 파일 생성"""
        async with LedgerStore(temp_dir / "data" / "ledger.db") as store:
            account = Account(name="Livret A")
            await store.add_account(account)
            for value, d in [("150", date(2025, 7, 25)), ("350", date(2025, 8, 5))]:
                await store.add_balance_entry(
                    BalanceEntry(account_id=account.id, value=Decimal(value), date=d)
                )

        log_dir = temp_dir / "logs"
        await main(settings_path=temp_settings_file, log_dir=log_dir)

        out = capsys.readouterr().out
        assert f"[{account.id}] Livret A (2 months)" in out
        assert "2025-07" in out
        assert "2025-08" in out
        assert "+200" in out
        assert (log_dir / "monthly_report.log").exists()

    @pytest.mark.asyncio
    async def test_unknown_account_prints_nothing(
        self,
        temp_settings_file: Path,
        temp_dir: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """없는 계좌 ID → 리포트 없음"""
        await main(account_id=999, settings_path=temp_settings_file, log_dir=temp_dir / "logs")

        out = capsys.readouterr().out
        assert "[999]" not in out
        assert "months)" not in out
