"""Optimal routing across CFMMs.

The router solves the dual of the routing problem: it searches for the price
vector v minimizing

    objective.value(v) + sum over pools of (profit of the optimal arbitrage at v)

with SciPy's L-BFGS-B. Each evaluation runs every pool's closed-form
arbitrage (memoized in a RoutingContext). At the optimum the cached pool
trades are the optimal routing, and their per-token sum is the net flow
received by the router.

Typical use:

    router = Router(BasketLiquidation(0, delta_in), pools, n_tokens=3)
    router.route()
    router.net_flows()        # amount received (+) / tendered (-) per token
    router.update_reserves()  # commit the trades to the pools
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic

import numpy as np
import structlog
from scipy.optimize import Bounds, minimize

from cfmm_router.cfmm.base import CFMM
from cfmm_router.errors import OptimizerFailure
from cfmm_router.math.decimal_math import T, max_of
from cfmm_router.math.signed_decimal import SignedDecimal
from cfmm_router.objectives.base import Objective
from cfmm_router.routing.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from cfmm_router.routing.context import RoutingContext, compute_trades

logger = structlog.get_logger()

# scipy L-BFGS-B termination statuses
STATUS_CONVERGED = 0
STATUS_LIMIT_REACHED = 1


@dataclass(frozen=True)
class PoolTrade(Generic[T]):
    """Optimal trade against one pool, in the pool's local token order."""

    token_ids: list[int]
    sell: list[T]
    buy: list[T]


@dataclass(frozen=True)
class RouteReport:
    """Summary of the last minimizer run."""

    status: int
    message: str
    iterations: int
    evaluations: int
    arb_evaluations: int
    objective_value: float

    @property
    def converged(self) -> bool:
        return self.status == STATUS_CONVERGED


class Router(Generic[T]):
    """Routes an objective through a set of CFMMs.

    Args:
        objective: Utility to maximize (e.g. BasketLiquidation)
        cfmms: Pools available for routing
        n_tokens: Size of the global token space
        numeric: DecimalMath backend the pools and objective are expressed in
        config: Minimizer settings

    Attributes:
        market_prices: Price vector found by the last route() (zeros before)
        token_sales: Per-pool amounts tendered at market_prices
        token_buys: Per-pool amounts received at market_prices
        last_result: RouteReport of the last successful route(), or None
    """

    def __init__(
        self,
        objective: Objective[T],
        cfmms: Sequence[CFMM[T]],
        n_tokens: int,
        numeric: type[T] = SignedDecimal,  # type: ignore[assignment]
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    ) -> None:
        if n_tokens < 1:
            raise ValueError(f"n_tokens must be positive, got {n_tokens}")
        if objective.n_tokens != n_tokens:
            raise ValueError(
                f"Objective is defined over {objective.n_tokens} tokens, router over {n_tokens}"
            )
        for index, cfmm in enumerate(cfmms):
            token_ids = cfmm.get_token_ids()
            if any(token_id >= n_tokens for token_id in token_ids):
                raise ValueError(f"Pool {index} trades token ids {token_ids} outside 0..{n_tokens - 1}")

        self.objective = objective
        self.cfmms = list(cfmms)
        self.n_tokens = n_tokens
        self.numeric = numeric
        self.config = config

        zero = numeric.zero()
        self.market_prices: list[T] = [zero for _ in range(n_tokens)]
        self.token_sales: list[list[T]] = [
            [zero for _ in cfmm.get_token_ids()] for cfmm in self.cfmms
        ]
        self.token_buys: list[list[T]] = [
            [zero for _ in cfmm.get_token_ids()] for cfmm in self.cfmms
        ]
        self.last_result: RouteReport | None = None

    # --- Optimization ---

    def initial_prices(self) -> list[T]:
        """Uniform starting vector 1/n, clipped into the bounds."""
        uniform = self.numeric.one().checked_div_int(self.n_tokens)
        lower, upper = self._numeric_bounds()
        return [min(max_of(uniform, lo), hi) for lo, hi in zip(lower, upper, strict=True)]

    def price_floor(self) -> T:
        """Smallest lower bound any price may take.

        The larger of config.price_floor and the backend's min_price(), which
        keeps pool arbitrage at the bound inside the backend's range.
        """
        return max_of(self.numeric.from_float(self.config.price_floor), self.numeric.min_price())

    def _numeric_bounds(self) -> tuple[list[T], list[T]]:
        floor = self.price_floor()
        lower = [max_of(limit, floor) for limit in self.objective.lower_limit()]
        return lower, self.objective.upper_limit()

    def bounds(self) -> Bounds:
        """Box constraints handed to the minimizer.

        Upper limits at the numeric infinity() sentinel are passed as unbounded.
        """
        lower, upper = self._numeric_bounds()
        infinity = self.numeric.infinity()
        return Bounds(
            np.array([lo.to_float() for lo in lower], dtype=float),
            np.array([np.inf if hi >= infinity else hi.to_float() for hi in upper], dtype=float),
        )

    def route(self) -> RouteReport:
        """Find the optimal price vector and the pool trades consistent with it.

        State is committed only after the minimizer finishes and the trades
        have been recomputed at its result; on any error the router keeps its
        previous market_prices and trade cache.

        Returns:
            RouteReport for this run (also stored as last_result)

        Raises:
            OptimizerFailure: If the minimizer terminates abnormally
            Overflow, DivideByZero: If pool or objective arithmetic fails
        """
        initial = self.initial_prices()
        context = RoutingContext(self.cfmms, self.objective, initial, self.numeric)
        x0 = np.array([p.to_float() for p in initial], dtype=float)

        logger.info(
            "route_started",
            n_tokens=self.n_tokens,
            n_pools=len(self.cfmms),
            price_floor=self.price_floor().to_float(),
        )

        try:
            result = minimize(
                context.evaluate_float,
                x0,
                method="L-BFGS-B",
                jac=True,
                bounds=self.bounds(),
                options={
                    "maxcor": self.config.history_size,
                    "ftol": self.config.factr * np.finfo(float).eps,
                    "gtol": self.config.pgtol,
                    "maxfun": self.config.max_evaluations,
                    "maxiter": self.config.max_iterations,
                },
            )
        except (ArithmeticError, ValueError) as e:
            logger.error(
                "route_failed",
                error=str(e),
                error_type=type(e).__name__,
                evaluations=context.evaluations,
            )
            raise

        message = str(result.message)
        if result.status not in (STATUS_CONVERGED, STATUS_LIMIT_REACHED):
            logger.error("route_failed", status=int(result.status), message=message)
            raise OptimizerFailure(f"L-BFGS-B failed (status {result.status}): {message}")
        if result.status == STATUS_LIMIT_REACHED:
            logger.warning(
                "route_iteration_limit",
                iterations=int(result.nit),
                evaluations=int(result.nfev),
                message=message,
            )

        final_prices = [self.numeric.from_float(float(xi)) for xi in result.x]
        context.refresh(final_prices)

        self.market_prices = context.prices
        self.token_sales = context.token_sales
        self.token_buys = context.token_buys

        report = RouteReport(
            status=int(result.status),
            message=message,
            iterations=int(result.nit),
            evaluations=context.evaluations,
            arb_evaluations=context.arb_evaluations,
            objective_value=float(result.fun),
        )
        self.last_result = report

        logger.info(
            "route_converged",
            iterations=report.iterations,
            evaluations=report.evaluations,
            arb_evaluations=report.arb_evaluations,
            objective_value=report.objective_value,
            market_prices=[p.to_float() for p in self.market_prices],
        )
        return report

    # --- Cache and results ---

    def find_arb(self, prices: Sequence[T]) -> tuple[list[list[T]], list[list[T]]]:
        """Recompute every pool's arbitrage at prices and overwrite the cache.

        market_prices is set to prices so that the cache stays consistent
        with the vector it was computed for.

        Returns:
            Tuple of (token_sales, token_buys)
        """
        if len(prices) != self.n_tokens:
            raise ValueError(f"Expected {self.n_tokens} prices, got {len(prices)}")
        token_sales, token_buys = compute_trades(self.cfmms, prices)
        self.market_prices = list(prices)
        self.token_sales = token_sales
        self.token_buys = token_buys
        return token_sales, token_buys

    def net_flows(self) -> list[T]:
        """Net amount of each token received by the router across all pools.

        Positive entries are received, negative entries tendered.
        """
        flows = [self.numeric.zero() for _ in range(self.n_tokens)]
        for cfmm, sell, buy in zip(self.cfmms, self.token_sales, self.token_buys, strict=True):
            for local, token_id in enumerate(cfmm.get_token_ids()):
                flows[token_id] = flows[token_id].checked_add(buy[local].checked_sub(sell[local]))
        return flows

    def trades(self) -> list[PoolTrade[T]]:
        """Cached trades, one record per pool."""
        return [
            PoolTrade(token_ids=cfmm.get_token_ids(), sell=list(sell), buy=list(buy))
            for cfmm, sell, buy in zip(self.cfmms, self.token_sales, self.token_buys, strict=True)
        ]

    def update_reserves(self) -> None:
        """Apply the cached trades to the pools: reserves += sell - buy.

        Call only after a successful route() (or find_arb()), while the cache
        is fresh. Every pool's new reserves are computed before any is set.
        """
        updated: list[list[T]] = []
        for cfmm, sell, buy in zip(self.cfmms, self.token_sales, self.token_buys, strict=True):
            reserves = cfmm.get_reserves()
            updated.append(
                [r.checked_add(s).checked_sub(b) for r, s, b in zip(reserves, sell, buy, strict=True)]
            )
        for cfmm, reserves in zip(self.cfmms, updated, strict=True):
            cfmm.set_reserves(reserves)
        logger.info("reserves_updated", n_pools=len(self.cfmms))
