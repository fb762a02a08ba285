"""
core/utils/decimal_utils.py 테스트

금액 값의 Decimal 변환 테스트
"""

from decimal import Decimal

import pytest

from core.utils.decimal_utils import to_decimal


class TestToDecimal:
    """to_decimal 함수 테스트"""

    def test_none_rejected(self) -> None:
        """None은 0이 아니라 에러"""
        with pytest.raises(ValueError):
            to_decimal(None)

    def test_decimal_passthrough(self) -> None:
        """Decimal은 그대로 반환"""
        value = Decimal("123.45")
        assert to_decimal(value) is value

    def test_int(self) -> None:
        """정수"""
        assert to_decimal(350) == Decimal("350")

    def test_string(self) -> None:
        """문자열"""
        assert to_decimal("-50.10") == Decimal("-50.10")

    def test_float_without_binary_noise(self) -> None:
        """float는 str 경유 (0.1 + 0.2 오차 없음)"""
        assert to_decimal(0.1) + to_decimal(0.2) == Decimal("0.3")

    def test_invalid_string(self) -> None:
        """숫자가 아닌 문자열"""
        with pytest.raises(ValueError):
            to_decimal("abc")

    def test_bool_rejected(self) -> None:
        """bool은 금액이 아님"""
        with pytest.raises(ValueError):
            to_decimal(True)
