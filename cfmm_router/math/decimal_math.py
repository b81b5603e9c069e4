"""Numeric contract shared by every value type the router works with.

The router, the pools and the objectives are written against DecimalMath
only. A backend supplies every capability below explicitly; arithmetic goes
through the named checked methods, which raise Overflow or DivideByZero
(see cfmm_router.errors) instead of wrapping or producing garbage.
"""

from __future__ import annotations

from typing import Protocol, Self, TypeVar, runtime_checkable


@runtime_checkable
class DecimalMath(Protocol):
    """Arithmetic capability set required by the router.

    Constructors:
        zero, one: additive and multiplicative identities
        infinity: finite-but-maximal sentinel, used to encode infeasibility
        eps: tolerance added to strict lower bounds
        min_price: smallest positive price the router hands to the minimizer
        from_int, from_str, from_float: conversions into the numeric type

    Checked arithmetic:
        checked_add, checked_sub, checked_mul, checked_div, checked_div_int

    Everything else:
        sqrt (non-negative inputs only), sign helpers, a total order in
        which zero forms a single equivalence class, and to_float for
        handing values to float-based minimizers.
    """

    @classmethod
    def zero(cls) -> Self: ...

    @classmethod
    def one(cls) -> Self: ...

    @classmethod
    def infinity(cls) -> Self: ...

    @classmethod
    def eps(cls) -> Self: ...

    @classmethod
    def min_price(cls) -> Self: ...

    @classmethod
    def from_int(cls, value: int) -> Self: ...

    @classmethod
    def from_str(cls, value: str) -> Self: ...

    @classmethod
    def from_float(cls, value: float) -> Self: ...

    def checked_add(self, other: Self) -> Self: ...

    def checked_sub(self, other: Self) -> Self: ...

    def checked_mul(self, other: Self) -> Self: ...

    def checked_div(self, other: Self) -> Self: ...

    def checked_div_int(self, other: int) -> Self: ...

    def sqrt(self) -> Self: ...

    def abs(self) -> Self: ...

    def neg(self) -> Self: ...

    def is_zero(self) -> bool: ...

    def is_sign_positive(self) -> bool: ...

    def to_float(self) -> float: ...

    def __eq__(self, other: object) -> bool: ...

    def __lt__(self, other: Self) -> bool: ...

    def __le__(self, other: Self) -> bool: ...

    def __gt__(self, other: Self) -> bool: ...

    def __ge__(self, other: Self) -> bool: ...


T = TypeVar("T", bound=DecimalMath)


def max_of(a: T, b: T) -> T:
    """Return the larger of two values (a on ties)."""
    return b if b > a else a


def checked_sum(values: list[T], zero: T) -> T:
    """Sum values with checked addition, starting from zero."""
    acc = zero
    for value in values:
        acc = acc.checked_add(value)
    return acc
