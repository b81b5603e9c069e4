"""Basket liquidation objective.

Liquidate a basket of tokens (delta_in) into a single output token,
maximizing the amount of output received. The output token is the numeraire:
prices with v[output] < 1 are infeasible.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from cfmm_router.errors import InvalidObjective
from cfmm_router.math.decimal_math import T, checked_sum
from cfmm_router.objectives.base import Objective


@dataclass
class BasketLiquidation(Objective[T]):
    """Sell every delta_in[i] for the token at output_token_id.

    Attributes:
        output_token_id: Global index of the token received
        delta_in: Amount tendered of each token (the output entry is ignored)
    """

    output_token_id: int
    delta_in: list[T]

    def __post_init__(self) -> None:
        self.delta_in = list(self.delta_in)
        if not 0 <= self.output_token_id < len(self.delta_in):
            raise InvalidObjective(
                f"Output token {self.output_token_id} out of range for {len(self.delta_in)} tokens"
            )

    @property
    def n_tokens(self) -> int:
        return len(self.delta_in)

    def _numeric(self) -> type[T]:
        return type(self.delta_in[0])

    def _is_feasible(self, prices: Sequence[T]) -> bool:
        return prices[self.output_token_id] >= self._numeric().one()

    def value(self, prices: Sequence[T]) -> T:
        """Sum of delta_in[i] * v[i] over non-output tokens, or infinity.

        Raises:
            ValueError: If prices does not match the basket dimension
        """
        self._check_dimension(prices)
        numeric = self._numeric()
        if not self._is_feasible(prices):
            return numeric.infinity()
        terms = [
            amount.checked_mul(price)
            for i, (amount, price) in enumerate(zip(self.delta_in, prices, strict=True))
            if i != self.output_token_id
        ]
        return checked_sum(terms, numeric.zero())

    def gradient(self, prices: Sequence[T]) -> list[T]:
        """delta_in with the output entry zeroed, or all infinity when infeasible."""
        self._check_dimension(prices)
        numeric = self._numeric()
        if not self._is_feasible(prices):
            return [numeric.infinity() for _ in self.delta_in]
        grad = list(self.delta_in)
        grad[self.output_token_id] = numeric.zero()
        return grad

    def lower_limit(self) -> list[T]:
        numeric = self._numeric()
        limits = [numeric.zero() for _ in self.delta_in]
        limits[self.output_token_id] = numeric.one().checked_add(numeric.eps())
        return limits

    def upper_limit(self) -> list[T]:
        numeric = self._numeric()
        return [numeric.infinity() for _ in self.delta_in]

    def _check_dimension(self, prices: Sequence[T]) -> None:
        if len(prices) != len(self.delta_in):
            raise ValueError(f"Expected {len(self.delta_in)} prices, got {len(prices)}")
