"""
Decimal 변환 유틸리티

금액은 항상 Decimal로 다룬다. float 연산을 거치지 않도록 str()로 변환 후 생성.
"""

from decimal import Decimal, InvalidOperation
from typing import Any


def to_decimal(value: Any) -> Decimal:
    """값을 Decimal로 변환

    Args:
        value: Decimal, int, str 또는 float

    Returns:
        Decimal 값

    Raises:
        ValueError: 숫자로 해석할 수 없는 값인 경우 (None, bool 포함)

    Example:
        >>> to_decimal("150.25")
        Decimal('150.25')
        >>> to_decimal(0.1)
        Decimal('0.1')
    """
    if isinstance(value, Decimal):
        return value
    # 누락된 잔고를 0으로 저장하지 않는다
    if value is None or isinstance(value, bool):
        raise ValueError(f"금액으로 사용할 수 없는 값입니다: {value!r}")

    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"금액으로 사용할 수 없는 값입니다: {value!r}") from e
