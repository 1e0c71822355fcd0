"""Fixed-point constants shared by the StableSwap and CryptoSwap math.

Values match the reference Vyper contracts exactly. They are plain module
constants: nothing in the package mutates them.
"""

# Maximum uint256 value
UINT256_MAX = 2**256 - 1

# Iteration cap for every Newton / search loop
MAX_ITERATIONS = 255

# =============================================================================
# StableSwap
# =============================================================================

# A is stored multiplied by A_PRECISION on-chain
A_PRECISION = 100

# Fees are expressed as fractions of 1e10
FEE_DENOMINATOR = 10**10

STABLESWAP_MIN_COINS = 2
STABLESWAP_MAX_COINS = 8

# =============================================================================
# CryptoSwap
# =============================================================================

PRECISION = 10**18

# A is stored multiplied by A_MULTIPLIER (and already includes N**N)
A_MULTIPLIER = 10_000

CRYPTOSWAP_COIN_COUNTS = (2, 3)

MIN_GAMMA = 10**10
MAX_GAMMA = 2 * 10**17


def cryptoswap_min_a(n_coins: int) -> int:
    """Smallest safe A for a CryptoSwap pool with n_coins."""
    return n_coins**n_coins * A_MULTIPLIER // 100


def cryptoswap_max_a(n_coins: int) -> int:
    """Largest safe A for a CryptoSwap pool with n_coins."""
    return n_coins**n_coins * A_MULTIPLIER * 100_000
