"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from cfmm_router.math.fixed_decimal import FixedDecimal
from cfmm_router.math.signed_decimal import SignedDecimal
from cfmm_router.models import RoutingProblem
from cfmm_router.routing.router import Router
from tests.helpers import make_scenario_router

FIXTURES_DIR = Path(__file__).parent / "fixtures"
PROBLEMS_DIR = FIXTURES_DIR / "problems"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the fixtures directory path."""
    return FIXTURES_DIR


def load_problem_fixture(name: str) -> RoutingProblem:
    """Load a routing problem fixture by name.

    Args:
        name: Fixture name (e.g., "basket_liquidation")

    Returns:
        Parsed RoutingProblem
    """
    path = PROBLEMS_DIR / f"{name}.json"
    with open(path) as f:
        data = json.load(f)
    return RoutingProblem.model_validate(data)


@pytest.fixture
def basket_problem() -> RoutingProblem:
    """The three-pool basket liquidation problem."""
    return load_problem_fixture("basket_liquidation")


@pytest.fixture
def scenario_router() -> Router:
    """Un-routed router over the three scenario pools."""
    return make_scenario_router()


@pytest.fixture(scope="module", params=[SignedDecimal, FixedDecimal], ids=["signed", "fixed"])
def routed_scenario(request) -> Router:
    """Scenario router after a successful route(), once per numeric backend."""
    router = make_scenario_router(numeric=request.param)
    router.route()
    return router
