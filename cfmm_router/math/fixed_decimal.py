"""Signed 18-decimal fixed-point backend.

FixedDecimal stores a value as an integer count of atomics scaled by 10^18,
bounded to the signed 128-bit range. Unlike SignedDecimal it uses native
signed semantics: the sign lives in the integer itself, so -0 cannot occur.

Multiplication and division truncate toward zero at the 18th decimal, the
way on-chain fixed-point libraries do. Every operation is checked.
"""

from __future__ import annotations

import math
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import ClassVar

from cfmm_router.constants import (
    DECIMAL_FRACTIONAL,
    DECIMAL_HIGH_PREC_CONTEXT,
    DECIMAL_PLACES,
    FIXED_INFINITY_MARGIN,
    FIXED_MIN_PRICE_ATOMICS,
    INT128_MAX,
    INT128_MIN,
)
from cfmm_router.errors import DivideByZero, Overflow

__all__ = ["FixedDecimal"]


def _div_trunc(a: int, b: int) -> int:
    """Integer division truncating toward zero.

    Python's // floors toward -inf; fixed-point math truncates, which only
    differs when the operands have different signs (-7 / 3 gives -2, not -3).
    """
    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))


class FixedDecimal:
    """18-decimal signed fixed-point number with checked arithmetic.

    Attributes:
        atomics: Raw integer value (value * 10^18)
    """

    __slots__ = ("atomics",)
    atomics: int

    ONE: ClassVar[int] = DECIMAL_FRACTIONAL
    MAX: ClassVar[int] = INT128_MAX
    MIN: ClassVar[int] = INT128_MIN

    def __init__(self, atomics: int) -> None:
        if isinstance(atomics, bool) or not isinstance(atomics, int):
            raise TypeError(f"FixedDecimal requires int atomics, got {type(atomics).__name__}")
        self.atomics = _checked(atomics, "init")

    def __repr__(self) -> str:
        return f"FixedDecimal('{self}')"

    def __str__(self) -> str:
        return format(self.to_decimal(), "f")

    def __hash__(self) -> int:
        return hash(self.atomics)

    def to_decimal(self) -> Decimal:
        return Decimal(self.atomics).scaleb(-DECIMAL_PLACES, DECIMAL_HIGH_PREC_CONTEXT)

    # --- Constructors ---

    @classmethod
    def zero(cls) -> FixedDecimal:
        return cls(0)

    @classmethod
    def one(cls) -> FixedDecimal:
        return cls(cls.ONE)

    @classmethod
    def max(cls) -> FixedDecimal:
        return cls(cls.MAX)

    @classmethod
    def infinity(cls) -> FixedDecimal:
        """Maximum value minus a safety margin of 10^9 whole units."""
        return cls(cls.MAX - FIXED_INFINITY_MARGIN * cls.ONE)

    @classmethod
    def eps(cls) -> FixedDecimal:
        return cls.zero()

    @classmethod
    def min_price(cls) -> FixedDecimal:
        """Smallest positive price handed to the minimizer (10^-6)."""
        return cls(FIXED_MIN_PRICE_ATOMICS)

    @classmethod
    def from_int(cls, value: int) -> FixedDecimal:
        return cls(value * cls.ONE)

    @classmethod
    def from_decimal(cls, value: Decimal) -> FixedDecimal:
        """Convert a Decimal, truncating below 18 decimal places.

        Raises:
            ValueError: If value is not finite
            Overflow: If value is outside the representable range
        """
        if not value.is_finite():
            raise ValueError(f"FixedDecimal requires a finite value, got {value}")
        scaled = value.scaleb(DECIMAL_PLACES, DECIMAL_HIGH_PREC_CONTEXT)
        return cls(int(scaled.to_integral_value(rounding=ROUND_DOWN)))

    @classmethod
    def from_str(cls, s: str) -> FixedDecimal:
        try:
            d = Decimal(s.strip())
        except InvalidOperation as err:
            raise ValueError(f"Invalid decimal string: '{s}'") from err
        return cls.from_decimal(d)

    @classmethod
    def from_float(cls, x: float) -> FixedDecimal:
        return cls.from_decimal(Decimal(x))

    # --- Checked arithmetic ---

    def checked_add(self, other: FixedDecimal) -> FixedDecimal:
        return _wrap(_checked(self.atomics + other.atomics, f"{self} + {other}"))

    def checked_sub(self, other: FixedDecimal) -> FixedDecimal:
        return _wrap(_checked(self.atomics - other.atomics, f"{self} - {other}"))

    def checked_mul(self, other: FixedDecimal) -> FixedDecimal:
        product = _div_trunc(self.atomics * other.atomics, self.ONE)
        return _wrap(_checked(product, f"{self} * {other}"))

    def checked_div(self, other: FixedDecimal) -> FixedDecimal:
        """Divide self by other, truncating toward zero.

        Raises:
            DivideByZero: If other is zero
            Overflow: If the quotient is outside the representable range
        """
        if other.atomics == 0:
            raise DivideByZero(f"Division by zero: {self} / 0")
        quotient = _div_trunc(self.atomics * self.ONE, other.atomics)
        return _wrap(_checked(quotient, f"{self} / {other}"))

    def checked_div_int(self, other: int) -> FixedDecimal:
        if other == 0:
            raise DivideByZero(f"Division by zero: {self} / 0")
        return _wrap(_checked(_div_trunc(self.atomics, other), f"{self} / {other}"))

    def sqrt(self) -> FixedDecimal:
        """Square root, truncated to 18 decimals.

        Raises:
            ValueError: If self is negative
        """
        if self.atomics < 0:
            raise ValueError(f"Square root of negative value: {self}")
        return _wrap(math.isqrt(self.atomics * self.ONE))

    # --- Sign helpers ---

    def is_zero(self) -> bool:
        return self.atomics == 0

    def is_sign_positive(self) -> bool:
        return self.atomics >= 0

    def abs(self) -> FixedDecimal:
        return _wrap(_checked(abs(self.atomics), f"abs({self})"))

    def neg(self) -> FixedDecimal:
        return _wrap(_checked(-self.atomics, f"-{self}"))

    def to_float(self) -> float:
        return self.atomics / self.ONE

    # --- Operators (checked) ---

    def __add__(self, other: FixedDecimal) -> FixedDecimal:
        return self.checked_add(other)

    def __sub__(self, other: FixedDecimal) -> FixedDecimal:
        return self.checked_sub(other)

    def __mul__(self, other: FixedDecimal) -> FixedDecimal:
        return self.checked_mul(other)

    def __truediv__(self, other: FixedDecimal) -> FixedDecimal:
        return self.checked_div(other)

    def __neg__(self) -> FixedDecimal:
        return self.neg()

    def __abs__(self) -> FixedDecimal:
        return self.abs()

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FixedDecimal):
            return self.atomics == other.atomics
        return NotImplemented

    def __lt__(self, other: FixedDecimal) -> bool:
        return self.atomics < other.atomics

    def __le__(self, other: FixedDecimal) -> bool:
        return self.atomics <= other.atomics

    def __gt__(self, other: FixedDecimal) -> bool:
        return self.atomics > other.atomics

    def __ge__(self, other: FixedDecimal) -> bool:
        return self.atomics >= other.atomics


def _checked(atomics: int, operation: str) -> int:
    if atomics > INT128_MAX or atomics < INT128_MIN:
        raise Overflow(f"Overflow: {operation} outside the 128-bit fixed-point range")
    return atomics


def _wrap(atomics: int) -> FixedDecimal:
    result = FixedDecimal.__new__(FixedDecimal)
    result.atomics = atomics
    return result
