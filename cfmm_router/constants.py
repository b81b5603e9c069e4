"""Numeric constants for the CFMM router.

Centralizes the precision and range parameters shared by the decimal
backends, the pools and the router.
"""

import decimal
from decimal import Decimal

# Fractional digits carried by the fixed-point representations (matches
# on-chain 18-decimal tokens)
DECIMAL_PLACES = 18
DECIMAL_FRACTIONAL = 10**DECIMAL_PLACES

UINT256_MAX = 2**256 - 1
INT128_MAX = 2**127 - 1
INT128_MIN = -(2**127)

# 78 digits of precision: every uint256 value with 18 fractional digits
# (up to ~1.16e59) is representable exactly
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(
    prec=78,
    rounding=decimal.ROUND_DOWN,
    Emin=-999999,
    Emax=999999,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero],
)

# Largest magnitude an UnsignedDecimal may hold: uint256 atomics at 18 decimals
UNSIGNED_DECIMAL_MAX = Decimal(UINT256_MAX).scaleb(-DECIMAL_PLACES, DECIMAL_HIGH_PREC_CONTEXT)

# Distance kept between FixedDecimal.infinity() and the maximum value, so that
# small additions to the infeasibility sentinel do not overflow
FIXED_INFINITY_MARGIN = 10**9

# Standard constant-product pool fee multiplier (0.3% fee)
DEFAULT_FEE = "0.997"

# Double precision machine epsilon, the smallest price SignedDecimal hands to
# the minimizer as a lower bound
FLOAT_EPSILON = 2.220446049250313e-16

# Smallest FixedDecimal price handed to the minimizer as a lower bound, in
# atomics (10^-6). Keeps gamma * (v_j / v_i) * k inside the 128-bit range for
# pools with k up to ~10^14 while the other price stays near 1.
FIXED_MIN_PRICE_ATOMICS = 10**12
