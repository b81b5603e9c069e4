"""Unit tests for Router state handling (minimizer patched where needed)."""

import numpy as np
import pytest
from scipy.optimize import OptimizeResult
from structlog.testing import capture_logs

from cfmm_router.cfmm.product_two_coin import ProductTwoCoin
from cfmm_router.errors import OptimizerFailure, Overflow
from cfmm_router.math.fixed_decimal import FixedDecimal
from cfmm_router.math.signed_decimal import SignedDecimal
from cfmm_router.routing import router as router_module
from cfmm_router.routing.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from cfmm_router.routing.router import PoolTrade, Router
from tests.helpers import (
    N_TOKENS,
    TOKEN_OUT,
    make_basket,
    make_pool,
    make_scenario_pools,
    make_scenario_router,
    values,
)


def fake_minimize(status: int, x: list[float], message: str = "stub"):
    """Replacement for scipy.optimize.minimize returning a fixed result."""

    def _minimize(fun, x0, **kwargs):
        return OptimizeResult(
            x=np.array(x),
            fun=0.0,
            status=status,
            success=status == 0,
            message=message,
            nit=3,
            nfev=4,
        )

    return _minimize


class FailingPool(ProductTwoCoin):
    """Pool whose find_arb starts overflowing after a number of calls."""

    def __init__(self, *args, fail_after: int, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = 0
        self.fail_after = fail_after

    def find_arb(self, prices):
        self.calls += 1
        if self.calls > self.fail_after:
            raise Overflow("simulated overflow")
        return super().find_arb(prices)


class TestConstruction:
    """Tests for Router validation and initial state."""

    def test_initial_state_is_zero(self):
        """Prices and caches start zeroed."""
        router = make_scenario_router()
        assert router.market_prices == [SignedDecimal.zero()] * N_TOKENS
        assert router.token_sales == [[SignedDecimal.zero()] * 2] * 3
        assert router.token_buys == [[SignedDecimal.zero()] * 2] * 3
        assert router.last_result is None

    def test_objective_dimension_mismatch(self):
        """The objective must be defined over n_tokens."""
        with pytest.raises(ValueError):
            Router(make_basket(["0", "1"]), make_scenario_pools(), n_tokens=3)

    def test_pool_token_out_of_range(self):
        """Pool token ids must lie inside the token space."""
        with pytest.raises(ValueError):
            Router(make_basket(["0", "1"]), [make_pool(token_ids=(0, 2))], n_tokens=2)

    def test_empty_token_space(self):
        """n_tokens must be positive."""
        with pytest.raises(ValueError):
            Router(make_basket(["0"]), [], n_tokens=0)

    def test_default_config(self):
        """Routers use DEFAULT_ROUTER_CONFIG unless told otherwise."""
        assert make_scenario_router().config is DEFAULT_ROUTER_CONFIG


class TestBounds:
    """Tests for the starting point and box constraints."""

    def test_initial_prices_bounded(self):
        """The uniform start is clipped so the output price starts at 1."""
        router = make_scenario_router()
        third = SignedDecimal.one().checked_div_int(3)
        assert router.initial_prices() == [SignedDecimal.one(), third, third]

    def test_bounds(self):
        """Lower bounds are floored at price_floor, infinite uppers are unbounded."""
        bounds = make_scenario_router().bounds()
        assert list(bounds.lb) == [1.0, DEFAULT_ROUTER_CONFIG.price_floor, DEFAULT_ROUTER_CONFIG.price_floor]
        assert np.all(np.isinf(bounds.ub))

    def test_fixed_decimal_floor(self):
        """FixedDecimal raises the floor to its own min_price (10^-6)."""
        router = make_scenario_router(numeric=FixedDecimal)
        assert router.price_floor() == FixedDecimal.min_price()
        assert list(router.bounds().lb) == [1.0, 1e-6, 1e-6]

    def test_config_floor_wins_when_larger(self):
        """A price_floor above the backend minimum is used as is."""
        router = make_scenario_router(config=RouterConfig(price_floor=0.5))
        assert router.price_floor() == SignedDecimal.from_float(0.5)
        assert router.initial_prices()[1] == SignedDecimal.from_float(0.5)

    def test_fixed_decimal_arbitrage_at_floor(self):
        """Pool arbitrage stays in range with one price at the floor."""
        router = make_scenario_router(numeric=FixedDecimal)
        floor = router.price_floor()
        prices = [FixedDecimal.one(), floor, FixedDecimal.one()]
        token_sales, _ = router.find_arb(prices)
        assert all(x.is_sign_positive() for x in token_sales[0])

    def test_route_only_evaluates_feasible_prices(self):
        """The output price never drops below 1 during a route."""
        objective = make_basket()
        seen = []
        value = objective.value

        def recording_value(prices):
            seen.append(prices[TOKEN_OUT])
            return value(prices)

        objective.value = recording_value
        router = Router(objective, make_scenario_pools(), n_tokens=N_TOKENS)
        router.route()

        assert seen
        assert all(price >= SignedDecimal.one() for price in seen)


class TestFindArbAndFlows:
    """Tests for find_arb, net_flows, trades and update_reserves."""

    def test_find_arb_overwrites_cache(self):
        """find_arb stores the trades and the prices they belong to."""
        router = make_scenario_router()
        prices = values(["1", "0.2", "0.05"])
        token_sales, token_buys = router.find_arb(prices)

        assert router.market_prices == prices
        assert router.token_sales == token_sales
        assert router.token_buys == token_buys
        assert (token_sales[0], token_buys[0]) == router.cfmms[0].find_arb(values(["1", "0.2"]))

    def test_find_arb_wrong_length(self):
        """find_arb requires a full price vector."""
        with pytest.raises(ValueError):
            make_scenario_router().find_arb(values(["1", "1"]))

    def test_net_flows_single_pool(self):
        """net_flows is buy - sell per token id."""
        pool = make_pool(["1000", "10000"], token_ids=(2, 0))
        router = Router(make_basket(["0", "0", "0"]), [pool], n_tokens=3)
        router.find_arb(values(["1", "0", "1"]))

        sell, buy = router.token_sales[0], router.token_buys[0]
        flows = router.net_flows()
        assert flows[2] == buy[0].checked_sub(sell[0])
        assert flows[0] == buy[1].checked_sub(sell[1])
        assert flows[1].is_zero()
        # Tender token 2 (local coin 0), receive token 0 (local coin 1)
        assert flows[2] < SignedDecimal.zero() < flows[0]

    def test_net_flows_sum_over_pools(self):
        """A token shared by several pools accumulates every pool's flow."""
        router = make_scenario_router()
        router.find_arb(values(["1", "0.2", "0.05"]))
        flows = router.net_flows()

        expected = SignedDecimal.zero()
        for pool, sell, buy in zip(router.cfmms, router.token_sales, router.token_buys):
            if 0 in pool.get_token_ids():
                local = pool.get_token_ids().index(0)
                expected = expected.checked_add(buy[local].checked_sub(sell[local]))
        assert flows[0] == expected

    def test_trades(self):
        """trades() reports one record per pool."""
        router = make_scenario_router()
        router.find_arb(values(["1", "0.2", "0.05"]))
        trades = router.trades()
        assert len(trades) == 3
        assert isinstance(trades[1], PoolTrade)
        assert trades[1].token_ids == [1, 2]
        assert trades[1].sell == router.token_sales[1]
        assert trades[1].buy == router.token_buys[1]

    def test_update_reserves(self):
        """update_reserves adds sell - buy to every pool's reserves."""
        router = make_scenario_router()
        router.find_arb(values(["1", "0.2", "0.05"]))
        before = [pool.get_reserves() for pool in router.cfmms]

        with capture_logs() as logs:
            router.update_reserves()

        for pool, reserves, sell, buy in zip(
            router.cfmms, before, router.token_sales, router.token_buys
        ):
            expected = [r.checked_add(s).checked_sub(b) for r, s, b in zip(reserves, sell, buy)]
            assert pool.get_reserves() == expected
        assert any(log["event"] == "reserves_updated" for log in logs)


class TestRouteStatus:
    """Tests for how route() treats minimizer outcomes."""

    def test_converged_commits(self, monkeypatch):
        """A converged result is committed with trades recomputed at it."""
        monkeypatch.setattr(router_module, "minimize", fake_minimize(0, [1.0, 0.125, 0.0625]))
        router = make_scenario_router()
        report = router.route()

        prices = values(["1", "0.125", "0.0625"])
        assert router.market_prices == prices
        sales, buys = router.find_arb(prices)
        assert router.token_sales == sales
        assert router.token_buys == buys
        assert report.converged
        assert router.last_result is report

    def test_limit_reached_warns_and_commits(self, monkeypatch):
        """Hitting the iteration cap is accepted with a warning."""
        monkeypatch.setattr(router_module, "minimize", fake_minimize(1, [1.0, 0.125, 0.0625]))
        router = make_scenario_router()
        with capture_logs() as logs:
            report = router.route()

        assert not report.converged
        assert router.market_prices == values(["1", "0.125", "0.0625"])
        assert any(log["event"] == "route_iteration_limit" for log in logs)

    def test_abnormal_termination_raises(self, monkeypatch):
        """Any other status raises OptimizerFailure and commits nothing."""
        monkeypatch.setattr(router_module, "minimize", fake_minimize(2, [1.0, 0.5, 0.5], "ABNORMAL"))
        router = make_scenario_router()
        with pytest.raises(OptimizerFailure, match="ABNORMAL"):
            router.route()
        assert router.market_prices == [SignedDecimal.zero()] * N_TOKENS
        assert router.last_result is None

    def test_arithmetic_failure_is_atomic(self):
        """An error inside the minimization leaves prices and cache untouched."""
        pools = make_scenario_pools()
        failing = FailingPool(
            reserves=pools[1].reserves,
            fee=pools[1].fee,
            token_ids=pools[1].token_ids,
            fail_after=3,
        )
        router = Router(make_basket(), [pools[0], failing, pools[2]], n_tokens=N_TOKENS)
        router.find_arb(values(["1", "0.5", "0.5"]))
        prices, sales, buys = router.market_prices, router.token_sales, router.token_buys

        with capture_logs() as logs, pytest.raises(Overflow):
            router.route()

        assert router.market_prices == prices
        assert router.token_sales == sales
        assert router.token_buys == buys
        assert any(log["event"] == "route_failed" for log in logs)
