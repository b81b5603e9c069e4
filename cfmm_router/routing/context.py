"""Evaluation state shared between the router and the minimizer.

RoutingContext owns the per-pool trade cache for one route() call. The
minimizer queries it through evaluate_float(); every query first refreshes
the cache, and the refresh is skipped when the candidate price vector equals
the one the cache was computed for.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Generic

import numpy as np
import structlog

from cfmm_router.cfmm.base import CFMM
from cfmm_router.math.decimal_math import T
from cfmm_router.math.vector import vecdiff, vecdot
from cfmm_router.objectives.base import Objective

logger = structlog.get_logger()


def compute_trades(
    cfmms: Sequence[CFMM[T]], prices: Sequence[T]
) -> tuple[list[list[T]], list[list[T]]]:
    """Run every pool's closed-form arbitrage at a global price vector.

    Returns:
        Tuple of (token_sales, token_buys), one local-order vector per pool
    """
    token_sales: list[list[T]] = []
    token_buys: list[list[T]] = []
    for cfmm in cfmms:
        local_prices = [prices[token_id] for token_id in cfmm.get_token_ids()]
        sell, buy = cfmm.find_arb(local_prices)
        token_sales.append(sell)
        token_buys.append(buy)
    return token_sales, token_buys


class RoutingContext(Generic[T]):
    """Memoized objective/gradient evaluation over a fixed set of pools.

    Attributes:
        prices: Price vector the cached trades were computed for
        token_sales: Per-pool amounts tendered at prices
        token_buys: Per-pool amounts received at prices
        arb_evaluations: Number of times the pool trades were recomputed
        evaluations: Number of objective evaluations served
    """

    def __init__(
        self,
        cfmms: Sequence[CFMM[T]],
        objective: Objective[T],
        prices: Sequence[T],
        numeric: type[T],
    ) -> None:
        self.cfmms = list(cfmms)
        self.objective = objective
        self.numeric = numeric
        self.prices = list(prices)
        self.token_sales, self.token_buys = compute_trades(self.cfmms, self.prices)
        self.arb_evaluations = 1
        self.evaluations = 0

    def refresh(self, prices: Sequence[T]) -> bool:
        """Recompute the trade cache if prices differ from the cached vector.

        Returns:
            True if the pool trades were recomputed
        """
        prices = list(prices)
        if prices == self.prices:
            return False
        # Compute before assigning so a failure leaves the cache consistent
        token_sales, token_buys = compute_trades(self.cfmms, prices)
        self.prices = prices
        self.token_sales = token_sales
        self.token_buys = token_buys
        self.arb_evaluations += 1
        return True

    def evaluate(self, prices: Sequence[T]) -> tuple[T, list[T]]:
        """Objective value plus arbitrage profit, and its gradient.

        The scalar is objective.value(v) + sum over pools of
        dot(buy, v_pool) - dot(sell, v_pool). When the objective reports
        infinity the infinite value and gradient are returned as is.
        """
        self.refresh(prices)
        self.evaluations += 1

        value = self.objective.value(self.prices)
        gradient = self.objective.gradient(self.prices)
        if value >= self.numeric.infinity():
            return value, gradient

        for cfmm, sell, buy in zip(self.cfmms, self.token_sales, self.token_buys, strict=True):
            token_ids = cfmm.get_token_ids()
            local_prices = [self.prices[token_id] for token_id in token_ids]
            value = value.checked_add(vecdot(buy, local_prices)).checked_sub(
                vecdot(sell, local_prices)
            )
            for token_id, flow in zip(token_ids, vecdiff(buy, sell), strict=True):
                gradient[token_id] = gradient[token_id].checked_add(flow)
        return value, gradient

    def evaluate_float(self, x: np.ndarray) -> tuple[float, np.ndarray]:
        """Float adapter for scipy.optimize.minimize(..., jac=True)."""
        prices = [self.numeric.from_float(float(xi)) for xi in x]
        value, gradient = self.evaluate(prices)
        logger.debug(
            "route_evaluation",
            evaluation=self.evaluations,
            value=value.to_float(),
            recomputed=self.arb_evaluations,
        )
        return value.to_float(), np.array([g.to_float() for g in gradient], dtype=float)
