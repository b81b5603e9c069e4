"""Base class for CFMM implementations."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic

from cfmm_router.math.decimal_math import T


class CFMM(ABC, Generic[T]):
    """Abstract constant-function market maker.

    A CFMM trades a fixed set of tokens, identified by their indices in the
    router's global token space. Reserves and trade vectors are indexed by the
    pool's local token ordering (the order of get_token_ids()).
    """

    @abstractmethod
    def find_arb(self, prices: Sequence[T]) -> tuple[list[T], list[T]]:
        """Compute the optimal arbitrage trade against external prices.

        Args:
            prices: Price of each of the pool's tokens, in local order

        Returns:
            Tuple of (sell, buy): amounts the router tenders to the pool and
            amounts it receives from the pool, per local token. Never negative.
        """
        ...

    @abstractmethod
    def get_token_ids(self) -> list[int]:
        """Global token indices traded by this pool, in local order."""
        ...

    @abstractmethod
    def get_reserves(self) -> list[T]:
        """Current reserves, in local order."""
        ...

    @abstractmethod
    def set_reserves(self, reserves: Sequence[T]) -> None:
        """Replace the reserves (after a route has been committed)."""
        ...
