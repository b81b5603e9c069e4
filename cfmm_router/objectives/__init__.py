"""Routing objectives."""

from cfmm_router.objectives.base import Objective
from cfmm_router.objectives.basket_liquidation import BasketLiquidation

__all__ = ["BasketLiquidation", "Objective"]
