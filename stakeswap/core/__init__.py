"""
Core pool algorithms
"""

from .units import (
    PRECISION,
    LpTokenAmount,
    Percentage,
    Price,
    StakedTokenAmount,
    TokenAmount,
)

__all__ = [
    "PRECISION",
    "Price",
    "Percentage",
    "TokenAmount",
    "StakedTokenAmount",
    "LpTokenAmount",
]
