"""StakeSwap: staked-token / token liquidity pool with a liquidity-sensitive fee curve."""

from .core.lp_pool import (
    ArithmeticOverflow,
    ArithmeticUnderflow,
    ConfigurationError,
    InsufficientLiquidity,
    InsufficientPoolValue,
    InsufficientShares,
    LpPool,
    PoolError,
    PoolState,
    ReserveExhausted,
    SlippageExceeded,
)
from .core.units import PRECISION, LpTokenAmount, Percentage, Price, StakedTokenAmount, TokenAmount

__version__ = "0.1.0"

__all__ = [
    "PRECISION",
    "Price",
    "Percentage",
    "TokenAmount",
    "StakedTokenAmount",
    "LpTokenAmount",
    "LpPool",
    "PoolState",
    "PoolError",
    "ConfigurationError",
    "InsufficientShares",
    "ReserveExhausted",
    "InsufficientPoolValue",
    "ArithmeticUnderflow",
    "ArithmeticOverflow",
    "InsufficientLiquidity",
    "SlippageExceeded",
]
