"""Effect functions for the lp_pool engine.

Each computes the ``Effect`` from the POST-state plus the guard's quote.
"""

from __future__ import annotations

from .types import ActionParams, Effect, Event, PoolState, Quote


def _effect(event: Event, state: PoolState, quote: Quote) -> Effect:
    return Effect(
        event=event,
        quote=quote,
        token_after=state.token_amount,
        st_token_after=state.st_token_amount,
        lp_supply_after=state.lp_token_amount,
        status_after=state.status,
    )


def effect_add_liquidity(state: PoolState, params: ActionParams, quote: Quote) -> Effect:
    return _effect(Event.LIQUIDITY_ADDED, state, quote)


def effect_remove_liquidity(state: PoolState, params: ActionParams, quote: Quote) -> Effect:
    return _effect(Event.LIQUIDITY_REMOVED, state, quote)


def effect_swap(state: PoolState, params: ActionParams, quote: Quote) -> Effect:
    return _effect(Event.SWAPPED, state, quote)
