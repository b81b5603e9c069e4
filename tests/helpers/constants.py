"""Shared test constants: the three-pool basket liquidation scenario."""

# Token ids
TOKEN_OUT = 0
TOKEN_A = 1
TOKEN_B = 2
N_TOKENS = 3

FEE = "0.997"

# (reserves, token_ids) per pool
SCENARIO_POOLS = [
    (["1000", "10000"], [TOKEN_OUT, TOKEN_A]),
    (["1000", "100"], [TOKEN_A, TOKEN_B]),
    (["1000", "20000"], [TOKEN_OUT, TOKEN_B]),
]

# Basket tendered, indexed by token id
SCENARIO_DELTA_IN = ["0", "10", "100"]
