"""Test helpers module for shared test utilities.

- constants: the three-pool basket liquidation scenario
- factories: pool, objective and router factory functions
"""

from tests.helpers.constants import (
    FEE,
    N_TOKENS,
    SCENARIO_DELTA_IN,
    SCENARIO_POOLS,
    TOKEN_A,
    TOKEN_B,
    TOKEN_OUT,
)
from tests.helpers.factories import (
    make_basket,
    make_pool,
    make_scenario_pools,
    make_scenario_router,
    values,
)

__all__ = [
    # Constants
    "FEE",
    "N_TOKENS",
    "SCENARIO_DELTA_IN",
    "SCENARIO_POOLS",
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_OUT",
    # Factories
    "make_basket",
    "make_pool",
    "make_scenario_pools",
    "make_scenario_router",
    "values",
]
