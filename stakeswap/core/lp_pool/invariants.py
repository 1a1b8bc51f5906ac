"""Invariant checkers for `lp_pool`.

Each function returns True when the invariant holds, and `check_all()` returns
the list of violated invariant IDs (empty = all pass). The engine runs
`check_all()` on every post-state before accepting a step.
"""

from __future__ import annotations

from typing import Callable

from ..units import PRECISION, LpTokenAmount, Percentage, Price, StakedTokenAmount, TokenAmount
from .types import PoolState

_FIELD_KINDS: tuple[tuple[str, type], ...] = (
    ("price", Price),
    ("min_fee", Percentage),
    ("max_fee", Percentage),
    ("liquidity_target", TokenAmount),
    ("token_amount", TokenAmount),
    ("st_token_amount", StakedTokenAmount),
    ("lp_token_amount", LpTokenAmount),
)


def inv_fields_typed(s: PoolState) -> bool:
    return all(type(getattr(s, name)) is kind for name, kind in _FIELD_KINDS)


def inv_price_positive(s: PoolState) -> bool:
    return s.price.raw > 0


def inv_fee_bounds_ordered(s: PoolState) -> bool:
    return s.min_fee.raw <= s.max_fee.raw <= PRECISION


def inv_empty_pool_has_no_reserves(s: PoolState) -> bool:
    if s.lp_token_amount.raw != 0:
        return True
    return s.token_amount.raw == 0 and s.st_token_amount.raw == 0


def inv_active_pool_has_reserves(s: PoolState) -> bool:
    if s.lp_token_amount.raw == 0:
        return True
    return s.token_amount.raw > 0 or s.st_token_amount.raw > 0


# ---------------------------------------------------------------------------
# Registry + check_all
# ---------------------------------------------------------------------------

INVARIANT_REGISTRY: dict[str, Callable[[PoolState], bool]] = {
    "inv_fields_typed": inv_fields_typed,
    "inv_price_positive": inv_price_positive,
    "inv_fee_bounds_ordered": inv_fee_bounds_ordered,
    "inv_empty_pool_has_no_reserves": inv_empty_pool_has_no_reserves,
    "inv_active_pool_has_reserves": inv_active_pool_has_reserves,
}


def check_all(state: PoolState) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    if not inv_fields_typed(state):
        # The remaining checks read `.raw` and assume well-typed fields.
        return ["inv_fields_typed"]
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(state)
    ]
