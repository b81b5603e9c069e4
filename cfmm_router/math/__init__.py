"""Numeric backends and vector helpers."""

from cfmm_router.math.decimal_math import DecimalMath, checked_sum, max_of
from cfmm_router.math.fixed_decimal import FixedDecimal
from cfmm_router.math.signed_decimal import SignedDecimal
from cfmm_router.math.unsigned_decimal import UnsignedDecimal

__all__ = [
    "DecimalMath",
    "FixedDecimal",
    "SignedDecimal",
    "UnsignedDecimal",
    "checked_sum",
    "max_of",
]
