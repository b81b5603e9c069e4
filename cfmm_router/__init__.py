"""Optimal routing across constant-function market makers."""

from cfmm_router.cfmm import CFMM, ProductTwoCoin
from cfmm_router.errors import (
    DecimalMathError,
    DivideByZero,
    InvalidCFMM,
    InvalidObjective,
    OptimizerFailure,
    Overflow,
    RouterError,
)
from cfmm_router.math import DecimalMath, FixedDecimal, SignedDecimal, UnsignedDecimal
from cfmm_router.objectives import BasketLiquidation, Objective
from cfmm_router.routing import DEFAULT_ROUTER_CONFIG, Router, RouterConfig

__version__ = "0.1.0"

__all__ = [
    "CFMM",
    "DEFAULT_ROUTER_CONFIG",
    "BasketLiquidation",
    "DecimalMath",
    "DecimalMathError",
    "DivideByZero",
    "FixedDecimal",
    "InvalidCFMM",
    "InvalidObjective",
    "Objective",
    "OptimizerFailure",
    "Overflow",
    "ProductTwoCoin",
    "Router",
    "RouterConfig",
    "RouterError",
    "SignedDecimal",
    "UnsignedDecimal",
]
