"""State transition functions for `lp_pool`.

One pure function per action. Each returns a new `PoolState` with the
guard's `Quote` applied. Updates evaluate against the PRE-state and are
implemented via `dataclasses.replace()` on frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import replace

from ..units import LpTokenAmount, StakedTokenAmount, TokenAmount
from .types import ActionParams, PoolState, Quote


def apply_add_liquidity(state: PoolState, params: ActionParams, quote: Quote) -> PoolState:
    return replace(
        state,
        token_amount=TokenAmount(state.token_amount.raw + quote.token_in.raw),
        lp_token_amount=LpTokenAmount(state.lp_token_amount.raw + quote.lp_minted.raw),
    )


def apply_remove_liquidity(state: PoolState, params: ActionParams, quote: Quote) -> PoolState:
    return replace(
        state,
        token_amount=TokenAmount(state.token_amount.raw - quote.token_out.raw),
        st_token_amount=StakedTokenAmount(state.st_token_amount.raw - quote.staked_out.raw),
        lp_token_amount=LpTokenAmount(state.lp_token_amount.raw - quote.lp_burned.raw),
    )


def apply_swap(state: PoolState, params: ActionParams, quote: Quote) -> PoolState:
    return replace(
        state,
        token_amount=TokenAmount(state.token_amount.raw - quote.token_out.raw),
        st_token_amount=StakedTokenAmount(state.st_token_amount.raw + quote.staked_in.raw),
    )
