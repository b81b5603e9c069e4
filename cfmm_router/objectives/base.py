"""Base class for routing objectives."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic

from cfmm_router.math.decimal_math import T


class Objective(ABC, Generic[T]):
    """Utility the router maximizes, expressed through its conjugate.

    The router minimizes value(v) plus the pools' arbitrage profit over the
    price vector v. value() may return the numeric type's infinity() to mark
    v as infeasible; that is a signal, not an error.
    """

    @abstractmethod
    def value(self, prices: Sequence[T]) -> T:
        """Objective term at price vector prices."""
        ...

    @abstractmethod
    def gradient(self, prices: Sequence[T]) -> list[T]:
        """Gradient of value() with respect to each price."""
        ...

    @abstractmethod
    def lower_limit(self) -> list[T]:
        """Per-token lower bound on the price vector."""
        ...

    @abstractmethod
    def upper_limit(self) -> list[T]:
        """Per-token upper bound on the price vector."""
        ...

    @property
    @abstractmethod
    def n_tokens(self) -> int:
        """Dimension of the price vector the objective is defined over."""
        ...
