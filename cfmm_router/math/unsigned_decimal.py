"""Checked non-negative decimal magnitude.

UnsignedDecimal is the magnitude half of SignedDecimal. It wraps a
decimal.Decimal evaluated in a 78-digit context and keeps it inside
[0, UNSIGNED_DECIMAL_MAX] (uint256 atomics at 18 decimal places):
- Results above the maximum raise Overflow
- Subtraction below zero raises Overflow
- Division by zero raises DivideByZero

Usage pattern:
    from cfmm_router.math.unsigned_decimal import UnsignedDecimal, U

    a, b = U.from_str("1.5"), U.from_int(3)
    c = a.checked_mul(b)        # 4.5
    d = a.checked_sub(b)        # raises Overflow
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from cfmm_router.constants import DECIMAL_HIGH_PREC_CONTEXT, UNSIGNED_DECIMAL_MAX
from cfmm_router.errors import DivideByZero, Overflow


class UnsignedDecimal:
    """Non-negative decimal with checked arithmetic.

    Attributes:
        value: The underlying decimal.Decimal (read-only, always >= 0)
    """

    __slots__ = ("_value",)
    _value: Decimal

    def __init__(self, value: Decimal | int | UnsignedDecimal) -> None:
        """Create an UnsignedDecimal.

        Args:
            value: Decimal or int to wrap, or UnsignedDecimal to copy

        Raises:
            TypeError: If value is not a Decimal, int or UnsignedDecimal
            ValueError: If value is negative or not finite
            Overflow: If value exceeds UNSIGNED_DECIMAL_MAX
        """
        if isinstance(value, UnsignedDecimal):
            self._value = value._value
            return
        if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
            raise TypeError(f"UnsignedDecimal requires Decimal or int, got {type(value).__name__}")
        d = Decimal(value)
        if not d.is_finite():
            raise ValueError(f"UnsignedDecimal requires a finite value, got {d}")
        if d < 0:
            raise ValueError(f"UnsignedDecimal cannot be negative: {d}")
        if d == 0:
            # Drop the sign of a negative zero
            d = Decimal(0)
        self._value = _checked(d.normalize(DECIMAL_HIGH_PREC_CONTEXT), "init")

    @property
    def value(self) -> Decimal:
        """The underlying decimal value."""
        return self._value

    def __repr__(self) -> str:
        return f"UnsignedDecimal('{self}')"

    def __str__(self) -> str:
        return format(self._value, "f")

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Constructors ---

    @classmethod
    def zero(cls) -> UnsignedDecimal:
        return cls(0)

    @classmethod
    def one(cls) -> UnsignedDecimal:
        return cls(1)

    @classmethod
    def max(cls) -> UnsignedDecimal:
        """Largest representable magnitude."""
        return cls(UNSIGNED_DECIMAL_MAX)

    @classmethod
    def from_int(cls, value: int) -> UnsignedDecimal:
        return cls(value)

    @classmethod
    def from_str(cls, s: str) -> UnsignedDecimal:
        """Parse from a decimal string.

        Raises:
            ValueError: If the string is not a valid non-negative decimal
        """
        try:
            d = Decimal(s)
        except decimal.InvalidOperation as err:
            raise ValueError(f"Invalid decimal string: '{s}'") from err
        return cls(d)

    @classmethod
    def from_float(cls, x: float) -> UnsignedDecimal:
        """Exact conversion of a binary float (rounded to the context precision)."""
        return cls(Decimal(x))

    # --- Checked arithmetic ---

    def checked_add(self, other: UnsignedDecimal) -> UnsignedDecimal:
        """Add two magnitudes.

        Raises:
            Overflow: If the sum exceeds the maximum
        """
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            result = self._value + other._value
        return _wrap(_checked(result, f"{self} + {other}"))

    def checked_sub(self, other: UnsignedDecimal) -> UnsignedDecimal:
        """Subtract other from self.

        Raises:
            Overflow: If the result would be negative
        """
        if other._value > self._value:
            raise Overflow(f"Subtraction overflow: {self} - {other}")
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            result = self._value - other._value
        return _wrap(result)

    def checked_mul(self, other: UnsignedDecimal) -> UnsignedDecimal:
        """Multiply two magnitudes.

        Raises:
            Overflow: If the product exceeds the maximum
        """
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            result = self._value * other._value
        return _wrap(_checked(result, f"{self} * {other}"))

    def checked_div(self, other: UnsignedDecimal) -> UnsignedDecimal:
        """Divide self by other.

        Raises:
            DivideByZero: If other is zero
            Overflow: If the quotient exceeds the maximum
        """
        if other._value == 0:
            raise DivideByZero(f"Division by zero: {self} / 0")
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            result = self._value / other._value
        return _wrap(_checked(result, f"{self} / {other}"))

    def sqrt(self) -> UnsignedDecimal:
        """Square root (always representable)."""
        return _wrap(self._value.sqrt(DECIMAL_HIGH_PREC_CONTEXT))

    # --- Comparison ---

    def is_zero(self) -> bool:
        return self._value == 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UnsignedDecimal):
            return self._value == other._value
        return NotImplemented

    def __lt__(self, other: UnsignedDecimal) -> bool:
        return self._value < other._value

    def __le__(self, other: UnsignedDecimal) -> bool:
        return self._value <= other._value

    def __gt__(self, other: UnsignedDecimal) -> bool:
        return self._value > other._value

    def __ge__(self, other: UnsignedDecimal) -> bool:
        return self._value >= other._value

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    def to_float(self) -> float:
        return float(self._value)


def _checked(value: Decimal, operation: str) -> Decimal:
    """Raise Overflow if value lies above the representable maximum."""
    if value > UNSIGNED_DECIMAL_MAX:
        raise Overflow(f"Overflow: {operation} exceeds {UNSIGNED_DECIMAL_MAX}")
    return value


def _wrap(value: Decimal) -> UnsignedDecimal:
    """Build an UnsignedDecimal from an already validated Decimal."""
    result = UnsignedDecimal.__new__(UnsignedDecimal)
    result._value = value
    return result


# Convenience alias for concise code
U = UnsignedDecimal
