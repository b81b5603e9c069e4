"""CFMM implementations."""

from cfmm_router.cfmm.base import CFMM
from cfmm_router.cfmm.product_two_coin import ProductTwoCoin

__all__ = ["CFMM", "ProductTwoCoin"]
