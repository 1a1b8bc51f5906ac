"""Data types for the `lp_pool` engine.

All types are frozen dataclasses (immutable).

Units/conventions:
- every quantity is a unit-typed wrapper from `stakeswap.core.units`,
- raw values are unsigned integers scaled by `PRECISION` (1e6),
- `fee_rate` values are `Percentage` (1e6 = 100%).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional, Union

from ..units import LpTokenAmount, Percentage, Price, Quantity, StakedTokenAmount, TokenAmount
from .errors import PoolError


@unique
class Action(Enum):
    ADD_LIQUIDITY = "add_liquidity"
    REMOVE_LIQUIDITY = "remove_liquidity"
    SWAP = "swap"


@unique
class Event(Enum):
    LIQUIDITY_ADDED = "LiquidityAdded"
    LIQUIDITY_REMOVED = "LiquidityRemoved"
    SWAPPED = "Swapped"


@unique
class PoolStatus(Enum):
    EMPTY = "empty"
    ACTIVE = "active"


@dataclass(frozen=True)
class PoolState:
    """Complete state of a single staked-token / token pool."""

    price: Price
    min_fee: Percentage
    max_fee: Percentage
    liquidity_target: TokenAmount

    token_amount: TokenAmount = TokenAmount(0)
    st_token_amount: StakedTokenAmount = StakedTokenAmount(0)
    lp_token_amount: LpTokenAmount = LpTokenAmount(0)

    @property
    def status(self) -> PoolStatus:
        return PoolStatus.EMPTY if self.lp_token_amount.raw == 0 else PoolStatus.ACTIVE


# Input kind of `ActionParams.amount` per action (checked by the engine).
AMOUNT_KINDS: dict[Action, type[Quantity]] = {
    Action.ADD_LIQUIDITY: TokenAmount,
    Action.REMOVE_LIQUIDITY: LpTokenAmount,
    Action.SWAP: StakedTokenAmount,
}

# Kind of `ActionParams.min_out` per action.
MIN_OUT_KINDS: dict[Action, type[Quantity]] = {
    Action.ADD_LIQUIDITY: LpTokenAmount,
    Action.REMOVE_LIQUIDITY: TokenAmount,
    Action.SWAP: TokenAmount,
}


@dataclass(frozen=True)
class ActionParams:
    """Parameters for an action. `min_out` is an optional slippage floor."""

    action: Action
    amount: Union[TokenAmount, LpTokenAmount, StakedTokenAmount]
    min_out: Optional[Union[TokenAmount, LpTokenAmount]] = None


@dataclass(frozen=True)
class Quote:
    """Amounts computed from the PRE-state by a guard. Unused fields stay zero."""

    lp_minted: LpTokenAmount = LpTokenAmount(0)
    lp_burned: LpTokenAmount = LpTokenAmount(0)
    token_in: TokenAmount = TokenAmount(0)
    token_out: TokenAmount = TokenAmount(0)
    staked_in: StakedTokenAmount = StakedTokenAmount(0)
    staked_out: StakedTokenAmount = StakedTokenAmount(0)
    fee_rate: Percentage = Percentage(0)
    fee_amount: TokenAmount = TokenAmount(0)


@dataclass(frozen=True)
class Effect:
    """Post-state observables emitted after a successful step."""

    event: Event
    quote: Quote
    token_after: TokenAmount
    st_token_after: StakedTokenAmount
    lp_supply_after: LpTokenAmount
    status_after: PoolStatus


@dataclass(frozen=True)
class StepResult:
    """Result of a single engine step."""

    accepted: bool
    state: PoolState | None = None
    effect: Effect | None = None
    rejection: str | None = None
    error: PoolError | None = None
