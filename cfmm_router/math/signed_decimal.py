"""Sign-magnitude decimal value type.

SignedDecimal pairs an UnsignedDecimal magnitude with an explicit sign flag.
It does not reuse native signed semantics: the arithmetic law table is
spelled out below, and a zero magnitude compares (and hashes) equal
whichever sign it carries.

    same-sign add        magnitudes add, sign kept
    differing-sign add   larger magnitude minus smaller, sign of the larger
                         (self on ties)
    subtraction          differing signs add magnitudes with the minuend's
                         sign; equal signs take the minuend's sign when it is
                         >= the subtrahend, the flipped sign otherwise
    mul / div            nested magnitude op, positive iff signs agree

All arithmetic is checked. Operators (+, -, *, /) delegate to the checked
methods and raise Overflow / DivideByZero just like them.
"""

from __future__ import annotations

from cfmm_router.constants import FLOAT_EPSILON
from cfmm_router.errors import DivideByZero
from cfmm_router.math.unsigned_decimal import UnsignedDecimal


class SignedDecimal:
    """Signed decimal built from a non-negative magnitude and a sign flag.

    Attributes:
        magnitude: Absolute value as an UnsignedDecimal
        is_positive: Sign flag (True for >= 0); ignored when magnitude is zero
    """

    __slots__ = ("magnitude", "is_positive")
    magnitude: UnsignedDecimal
    is_positive: bool

    def __init__(self, magnitude: UnsignedDecimal, is_positive: bool = True) -> None:
        if not isinstance(magnitude, UnsignedDecimal):
            raise TypeError(
                f"SignedDecimal requires an UnsignedDecimal magnitude, got {type(magnitude).__name__}"
            )
        self.magnitude = magnitude
        self.is_positive = is_positive

    def __repr__(self) -> str:
        return f"SignedDecimal('{self}')"

    def __str__(self) -> str:
        if self.is_positive or self.magnitude.is_zero():
            return str(self.magnitude)
        return f"-{self.magnitude}"

    def __hash__(self) -> int:
        if self.magnitude.is_zero():
            return hash(self.magnitude)
        return hash((self.magnitude, self.is_positive))

    # --- Constructors ---

    @classmethod
    def zero(cls) -> SignedDecimal:
        return cls(UnsignedDecimal.zero())

    @classmethod
    def one(cls) -> SignedDecimal:
        return cls(UnsignedDecimal.one())

    @classmethod
    def infinity(cls) -> SignedDecimal:
        """Maximal finite value, used as the infeasibility sentinel."""
        return cls(UnsignedDecimal.max())

    @classmethod
    def eps(cls) -> SignedDecimal:
        """Machine tolerance. Exact zero: comparisons carry no slack."""
        return cls.zero()

    @classmethod
    def min_price(cls) -> SignedDecimal:
        """Smallest positive price handed to the minimizer (double epsilon)."""
        return cls.from_float(FLOAT_EPSILON)

    @classmethod
    def from_int(cls, value: int) -> SignedDecimal:
        return cls(UnsignedDecimal(abs(value)), value >= 0)

    @classmethod
    def from_str(cls, s: str) -> SignedDecimal:
        """Parse from a decimal string with an optional leading sign.

        Raises:
            ValueError: If the string is not a valid decimal
        """
        s = s.strip()
        if s.startswith("-"):
            return cls(UnsignedDecimal.from_str(s[1:]), False)
        if s.startswith("+"):
            s = s[1:]
        return cls(UnsignedDecimal.from_str(s))

    @classmethod
    def from_float(cls, x: float) -> SignedDecimal:
        return cls(UnsignedDecimal.from_float(abs(x)), x >= 0)

    # --- Checked arithmetic ---

    def checked_add(self, other: SignedDecimal) -> SignedDecimal:
        if self.is_positive == other.is_positive:
            return SignedDecimal(self.magnitude.checked_add(other.magnitude), self.is_positive)
        if self.magnitude >= other.magnitude:
            return SignedDecimal(self.magnitude.checked_sub(other.magnitude), self.is_positive)
        return SignedDecimal(other.magnitude.checked_sub(self.magnitude), other.is_positive)

    def checked_sub(self, other: SignedDecimal) -> SignedDecimal:
        if self.is_positive != other.is_positive:
            return SignedDecimal(self.magnitude.checked_add(other.magnitude), self.is_positive)
        if self.magnitude >= other.magnitude:
            return SignedDecimal(self.magnitude.checked_sub(other.magnitude), self.is_positive)
        return SignedDecimal(other.magnitude.checked_sub(self.magnitude), not self.is_positive)

    def checked_mul(self, other: SignedDecimal) -> SignedDecimal:
        return SignedDecimal(
            self.magnitude.checked_mul(other.magnitude),
            self.is_positive == other.is_positive,
        )

    def checked_div(self, other: SignedDecimal) -> SignedDecimal:
        """Divide self by other.

        Raises:
            DivideByZero: If other is zero (of either sign)
            Overflow: If the quotient magnitude exceeds the maximum
        """
        if other.magnitude.is_zero():
            raise DivideByZero(f"Division by zero: {self} / {other}")
        return SignedDecimal(
            self.magnitude.checked_div(other.magnitude),
            self.is_positive == other.is_positive,
        )

    def checked_div_int(self, other: int) -> SignedDecimal:
        return self.checked_div(SignedDecimal.from_int(other))

    def sqrt(self) -> SignedDecimal:
        """Non-negative square root.

        Raises:
            ValueError: If self is negative
        """
        if not self.is_sign_positive():
            raise ValueError(f"Square root of negative value: {self}")
        return SignedDecimal(self.magnitude.sqrt())

    # --- Sign helpers ---

    def is_zero(self) -> bool:
        return self.magnitude.is_zero()

    def is_sign_positive(self) -> bool:
        """True for positive values and for zero of either sign."""
        return self.is_positive or self.magnitude.is_zero()

    def is_negative(self) -> bool:
        return not self.is_sign_positive()

    def abs(self) -> SignedDecimal:
        return SignedDecimal(self.magnitude, True)

    def neg(self) -> SignedDecimal:
        return SignedDecimal(self.magnitude, not self.is_positive)

    def to_float(self) -> float:
        f = self.magnitude.to_float()
        return f if self.is_positive else -f

    # --- Operators (checked) ---

    def __add__(self, other: SignedDecimal) -> SignedDecimal:
        return self.checked_add(other)

    def __sub__(self, other: SignedDecimal) -> SignedDecimal:
        return self.checked_sub(other)

    def __mul__(self, other: SignedDecimal) -> SignedDecimal:
        return self.checked_mul(other)

    def __truediv__(self, other: SignedDecimal) -> SignedDecimal:
        return self.checked_div(other)

    def __neg__(self) -> SignedDecimal:
        return self.neg()

    def __abs__(self) -> SignedDecimal:
        return self.abs()

    # --- Comparison ---

    def _cmp(self, other: SignedDecimal) -> int:
        """Three-way compare with -0 == +0."""
        self_neg = self.is_negative()
        other_neg = other.is_negative()
        if self_neg != other_neg:
            return -1 if self_neg else 1
        if self.magnitude == other.magnitude:
            return 0
        larger = self.magnitude > other.magnitude
        # Larger magnitude means larger value only on the positive side
        return (1 if larger else -1) * (-1 if self_neg else 1)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SignedDecimal):
            return self._cmp(other) == 0
        return NotImplemented

    def __lt__(self, other: SignedDecimal) -> bool:
        return self._cmp(other) < 0

    def __le__(self, other: SignedDecimal) -> bool:
        return self._cmp(other) <= 0

    def __gt__(self, other: SignedDecimal) -> bool:
        return self._cmp(other) > 0

    def __ge__(self, other: SignedDecimal) -> bool:
        return self._cmp(other) >= 0
