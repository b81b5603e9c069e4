"""Vector capability set over any DecimalMath backend.

Plain functions over lists. Every function returns a new list and leaves its
inputs untouched; mismatched lengths raise ValueError.
"""

from __future__ import annotations

from collections.abc import Sequence

from cfmm_router.math.decimal_math import T

__all__ = [
    "vecadd",
    "vecdot",
    "vecscale",
    "veccpy",
    "vecncpy",
    "vecdiff",
    "vec2norm",
    "vec2norminv",
]


def _pairs(x: Sequence[T], y: Sequence[T]) -> zip:
    if len(x) != len(y):
        raise ValueError(f"Vector length mismatch: {len(x)} != {len(y)}")
    return zip(x, y, strict=True)


def vecadd(y: Sequence[T], x: Sequence[T], c: T) -> list[T]:
    """Return y + c * x."""
    return [yi.checked_add(c.checked_mul(xi)) for yi, xi in _pairs(y, x)]


def vecdot(x: Sequence[T], y: Sequence[T]) -> T:
    """Dot product of x and y.

    Raises:
        ValueError: If the vectors are empty or differ in length
    """
    pairs = list(_pairs(x, y))
    if not pairs:
        raise ValueError("Dot product of empty vectors")
    acc = pairs[0][0].checked_mul(pairs[0][1])
    for xi, yi in pairs[1:]:
        acc = acc.checked_add(xi.checked_mul(yi))
    return acc


def vecscale(x: Sequence[T], c: T) -> list[T]:
    """Return c * x."""
    return [c.checked_mul(xi) for xi in x]


def veccpy(x: Sequence[T]) -> list[T]:
    return list(x)


def vecncpy(x: Sequence[T]) -> list[T]:
    """Return -x."""
    return [xi.neg() for xi in x]


def vecdiff(x: Sequence[T], y: Sequence[T]) -> list[T]:
    """Return x - y."""
    return [xi.checked_sub(yi) for xi, yi in _pairs(x, y)]


def vec2norm(x: Sequence[T]) -> T:
    """Euclidean norm of x."""
    return vecdot(x, x).sqrt()


def vec2norminv(x: Sequence[T]) -> T:
    """Inverse Euclidean norm of x.

    Raises:
        DivideByZero: If x is the zero vector
    """
    norm = vec2norm(x)
    return type(norm).one().checked_div(norm)
