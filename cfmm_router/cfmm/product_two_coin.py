"""Two-coin constant-product CFMM.

The pool keeps R_0 * R_1 = k invariant and charges a fee multiplier gamma on
the tendered amount (gamma = 0.997 for a 0.3% fee). Against external prices
the profit-maximizing trade has a closed form, so find_arb needs no search.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from cfmm_router.cfmm.base import CFMM
from cfmm_router.errors import InvalidCFMM
from cfmm_router.math.decimal_math import T, max_of


@dataclass
class ProductTwoCoin(CFMM[T]):
    """Constant-product pool over two tokens.

    Attributes:
        reserves: Pool reserves of the two coins, in local order
        fee: Fee multiplier in (0, 1]; 1 means no fee
        token_ids: Global token indices of the two coins
    """

    reserves: list[T]
    fee: T
    token_ids: list[int]

    def __post_init__(self) -> None:
        self.reserves = list(self.reserves)
        self.token_ids = list(self.token_ids)
        if len(self.reserves) != 2:
            raise InvalidCFMM(f"Expected 2 reserves, got {len(self.reserves)}")
        if len(self.token_ids) != 2:
            raise InvalidCFMM(f"Expected 2 token ids, got {len(self.token_ids)}")
        if self.token_ids[0] == self.token_ids[1]:
            raise InvalidCFMM(f"Token ids must be distinct, got {self.token_ids}")
        if any(token_id < 0 for token_id in self.token_ids):
            raise InvalidCFMM(f"Token ids must be non-negative, got {self.token_ids}")
        if any(not r.is_sign_positive() for r in self.reserves):
            raise InvalidCFMM(f"Reserves must be non-negative, got {self.reserves}")
        numeric = type(self.fee)
        if self.fee <= numeric.zero() or self.fee > numeric.one():
            raise InvalidCFMM(f"Fee must be in (0, 1], got {self.fee}")

    def find_arb(self, prices: Sequence[T]) -> tuple[list[T], list[T]]:
        """Closed-form optimal arbitrage at the given pool-local prices.

        For coin i (and j the other coin), with k = R_0 * R_1:
            sell_i = max(sqrt(gamma * v_j / v_i * k) - R_i, 0) / gamma
            buy_i  = max(R_i - sqrt(k / (v_i / v_j * gamma)), 0)

        Only the ratio of the two prices matters.

        Raises:
            ValueError: If prices does not hold exactly two entries
            DivideByZero: If a price is zero
        """
        if len(prices) != 2:
            raise ValueError(f"Expected 2 prices, got {len(prices)}")
        zero = type(self.fee).zero()
        gamma = self.fee
        k = self.reserves[0].checked_mul(self.reserves[1])

        sell: list[T] = []
        buy: list[T] = []
        for i in (0, 1):
            j = 1 - i
            reserve = self.reserves[i]

            ratio = prices[j].checked_div(prices[i])
            target = gamma.checked_mul(ratio).checked_mul(k).sqrt()
            sell.append(max_of(target.checked_sub(reserve), zero).checked_div(gamma))

            inverse_ratio = prices[i].checked_div(prices[j])
            target = k.checked_div(inverse_ratio.checked_mul(gamma)).sqrt()
            buy.append(max_of(reserve.checked_sub(target), zero))
        return sell, buy

    def marginal_price(self) -> T:
        """Fee-free price of coin 1 in units of coin 0 (R_0 / R_1).

        Prices in this ratio admit no arbitrage.
        """
        return self.reserves[0].checked_div(self.reserves[1])

    def get_token_ids(self) -> list[int]:
        return list(self.token_ids)

    def get_reserves(self) -> list[T]:
        return list(self.reserves)

    def set_reserves(self, reserves: Sequence[T]) -> None:
        if len(reserves) != 2:
            raise ValueError(f"Expected 2 reserves, got {len(reserves)}")
        self.reserves = list(reserves)
