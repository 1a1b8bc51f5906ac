"""`lp_pool`: single-asset staked-token / token liquidity pool engine.

This package implements the pool accounting with:
- deterministic, integer-only transitions (fixed point, 1e6 scale),
- unit-typed quantities and immutable state (frozen dataclasses),
- fail-closed guards, checked arithmetic and invariant checks.

Public API:
- `init(price, min_fee, max_fee, liquidity_target) -> PoolState`
- `step(state, params) -> StepResult`
- `step_or_raise(state, params) -> StepResult` (raises on rejection)
- `add_liquidity` / `remove_liquidity` / `swap` -> (new_state, output)
- `LpPool`: lock-guarded mutable holder
"""

from .engine import add_liquidity, quote_swap, remove_liquidity, step, step_or_raise, swap, swap_with_quote
from .errors import (
    ArithmeticOverflow,
    ArithmeticUnderflow,
    ConfigurationError,
    InsufficientLiquidity,
    InsufficientPoolValue,
    InsufficientShares,
    PoolError,
    PoolInvariantError,
    PoolParamError,
    ReserveExhausted,
    SlippageExceeded,
)
from .math import fee_rate
from .pool import LpPool
from .state import init, reconfigure, state_from_dict, state_to_dict
from .types import Action, ActionParams, Effect, Event, PoolState, PoolStatus, Quote, StepResult

__all__ = [
    "init",
    "reconfigure",
    "state_from_dict",
    "state_to_dict",
    "step",
    "step_or_raise",
    "add_liquidity",
    "remove_liquidity",
    "swap",
    "swap_with_quote",
    "quote_swap",
    "fee_rate",
    "LpPool",
    "Action",
    "ActionParams",
    "Effect",
    "Event",
    "PoolState",
    "PoolStatus",
    "Quote",
    "StepResult",
    "PoolError",
    "ConfigurationError",
    "InsufficientShares",
    "ReserveExhausted",
    "InsufficientPoolValue",
    "ArithmeticUnderflow",
    "ArithmeticOverflow",
    "InsufficientLiquidity",
    "SlippageExceeded",
    "PoolParamError",
    "PoolInvariantError",
]
