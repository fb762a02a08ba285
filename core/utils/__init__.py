"""
유틸리티 패키지

Decimal 변환, 단일 실행 지연 초기화 등 공통 유틸리티
"""

from core.utils.decimal_utils import to_decimal
from core.utils.lazy import AsyncLazy

__all__ = [
    "to_decimal",
    "AsyncLazy",
]
