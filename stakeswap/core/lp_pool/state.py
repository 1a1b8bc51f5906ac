"""State construction and serialization for `lp_pool`.

`init()` returns a fresh, validated pool with zeroed reserves.
`reconfigure()` is the only sanctioned way to change price or fee parameters.

Round-trip property (tested): `state_from_dict(state_to_dict(s)) == s` for all valid states.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Optional

from ..units import (
    PRECISION,
    LpTokenAmount,
    Percentage,
    Price,
    Quantity,
    StakedTokenAmount,
    TokenAmount,
    require_kind,
)
from .errors import ConfigurationError, PoolInvariantError
from .invariants import check_all
from .types import PoolState

# Auto-derived from PoolState field definitions (single source of truth).
STATE_VAR_NAMES: tuple[str, ...] = tuple(PoolState.__dataclass_fields__)

_STATE_KINDS: dict[str, type[Quantity]] = {
    "price": Price,
    "min_fee": Percentage,
    "max_fee": Percentage,
    "liquidity_target": TokenAmount,
    "token_amount": TokenAmount,
    "st_token_amount": StakedTokenAmount,
    "lp_token_amount": LpTokenAmount,
}


def _validate_params(price: Price, min_fee: Percentage, max_fee: Percentage, liquidity_target: TokenAmount) -> None:
    require_kind("price", price, Price)
    require_kind("min_fee", min_fee, Percentage)
    require_kind("max_fee", max_fee, Percentage)
    require_kind("liquidity_target", liquidity_target, TokenAmount)

    if price.raw == 0:
        raise ConfigurationError("price must be positive")
    if min_fee.raw > max_fee.raw:
        raise ConfigurationError(f"min_fee ({min_fee.raw}) must not exceed max_fee ({max_fee.raw})")
    if max_fee.raw > PRECISION:
        raise ConfigurationError(f"max_fee ({max_fee.raw}) must not exceed 100% ({PRECISION})")


def init(price: Price, min_fee: Percentage, max_fee: Percentage, liquidity_target: TokenAmount) -> PoolState:
    """
    Create an empty pool.

    Raises:
        TypeError: If an argument has the wrong quantity kind.
        ConfigurationError: If price is zero, min_fee > max_fee, or max_fee > 100%.
    """
    _validate_params(price, min_fee, max_fee, liquidity_target)
    return PoolState(
        price=price,
        min_fee=min_fee,
        max_fee=max_fee,
        liquidity_target=liquidity_target,
    )


def reconfigure(
    state: PoolState,
    *,
    price: Optional[Price] = None,
    min_fee: Optional[Percentage] = None,
    max_fee: Optional[Percentage] = None,
    liquidity_target: Optional[TokenAmount] = None,
) -> PoolState:
    """Return a new validated state with the given parameters replaced; reserves are untouched."""
    new_price = state.price if price is None else price
    new_min_fee = state.min_fee if min_fee is None else min_fee
    new_max_fee = state.max_fee if max_fee is None else max_fee
    new_target = state.liquidity_target if liquidity_target is None else liquidity_target
    _validate_params(new_price, new_min_fee, new_max_fee, new_target)
    return replace(
        state,
        price=new_price,
        min_fee=new_min_fee,
        max_fee=new_max_fee,
        liquidity_target=new_target,
    )


def state_to_dict(state: PoolState) -> dict[str, int]:
    """Serialize a PoolState to a plain dict of raw integers."""
    return {name: getattr(state, name).raw for name in STATE_VAR_NAMES}


def state_from_dict(d: Mapping[str, Any]) -> PoolState:
    """
    Deserialize a dict to a PoolState.

    Raises:
        KeyError: If a field is missing.
        TypeError: If a field is not an int.
        ConfigurationError: If the price or fee parameters are invalid.
        PoolInvariantError: If the reserves and LP supply are inconsistent.
    """
    kwargs: dict[str, Quantity] = {}
    for name in STATE_VAR_NAMES:
        val = d[name]
        if isinstance(val, bool) or not isinstance(val, int):
            raise TypeError(f"state var {name!r} must be int, got {type(val).__name__}")
        kwargs[name] = _STATE_KINDS[name](int(val))  # normalize int subclasses
    state = PoolState(**kwargs)
    _validate_params(state.price, state.min_fee, state.max_fee, state.liquidity_target)
    violations = check_all(state)
    if violations:
        raise PoolInvariantError(violations)
    return state
