"""Dispatch-table engine for `lp_pool`.

``step(state, params)`` is the single entry point. It:

1. Validates parameter kinds (unit-typed quantities).
2. Runs the guard, which computes a ``Quote`` or raises a ``PoolError``.
3. Applies the update and checks all invariants on the post-state.
4. Returns a ``StepResult`` (accepted or rejected with reason).

The input state is never modified; a rejected step simply returns no state.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..units import LpTokenAmount, StakedTokenAmount, TokenAmount
from .effects import effect_add_liquidity, effect_remove_liquidity, effect_swap
from .errors import PoolError, PoolInvariantError, PoolParamError
from .guards import guard_add_liquidity, guard_remove_liquidity, guard_swap
from .invariants import check_all
from .types import (
    AMOUNT_KINDS,
    MIN_OUT_KINDS,
    Action,
    ActionParams,
    Effect,
    PoolState,
    Quote,
    StepResult,
)
from .updates import apply_add_liquidity, apply_remove_liquidity, apply_swap

GuardFn = Callable[[PoolState, ActionParams], Quote]
UpdateFn = Callable[[PoolState, ActionParams, Quote], PoolState]
EffectFn = Callable[[PoolState, ActionParams, Quote], Effect]

_DISPATCH: dict[Action, tuple[GuardFn, UpdateFn, EffectFn]] = {
    Action.ADD_LIQUIDITY: (
        guard_add_liquidity, apply_add_liquidity, effect_add_liquidity,
    ),
    Action.REMOVE_LIQUIDITY: (
        guard_remove_liquidity, apply_remove_liquidity, effect_remove_liquidity,
    ),
    Action.SWAP: (
        guard_swap, apply_swap, effect_swap,
    ),
}


def _validate_params(params: ActionParams) -> Optional[PoolParamError]:
    """Check parameter kinds. Returns the error or None."""
    if type(params.amount) is not AMOUNT_KINDS[params.action]:
        return PoolParamError(
            f"{params.action.value}: amount must be {AMOUNT_KINDS[params.action].__name__}, "
            f"got {type(params.amount).__name__}"
        )
    if params.min_out is not None and type(params.min_out) is not MIN_OUT_KINDS[params.action]:
        return PoolParamError(
            f"{params.action.value}: min_out must be {MIN_OUT_KINDS[params.action].__name__}, "
            f"got {type(params.min_out).__name__}"
        )
    return None


def step(state: PoolState, params: ActionParams) -> StepResult:
    """Execute one action against the given state.

    Returns ``StepResult`` with ``accepted=True`` on success,
    or ``accepted=False`` with a ``rejection`` code and the typed ``error``.
    """
    entry = _DISPATCH.get(params.action)
    if entry is None:
        return StepResult(accepted=False, rejection=f"unknown_action:{params.action}")

    param_err = _validate_params(params)
    if param_err is not None:
        return StepResult(accepted=False, rejection=param_err.code, error=param_err)

    guard_fn, update_fn, effect_fn = entry

    try:
        quote = guard_fn(state, params)
    except PoolError as exc:
        return StepResult(accepted=False, rejection=exc.code, error=exc)

    new_state = update_fn(state, params, quote)

    violations = check_all(new_state)
    if violations:
        err = PoolInvariantError(violations)
        return StepResult(
            accepted=False,
            rejection=f"invariant:{','.join(violations)}",
            error=err,
        )

    effect = effect_fn(new_state, params, quote)
    return StepResult(accepted=True, state=new_state, effect=effect)


def step_or_raise(state: PoolState, params: ActionParams) -> StepResult:
    """Like ``step()`` but raises the typed error on rejection.

    Raises:
        PoolParamError: Parameter has the wrong quantity kind.
        PoolInvariantError: Post-state violates one or more invariants.
        PoolError: Any guard failure (see ``errors.py``).
    """
    result = step(state, params)
    if result.accepted:
        return result
    if result.error is not None:
        raise result.error
    raise PoolError(result.rejection or "rejected")


# -- Operation helpers -------------------------------------------------------


def add_liquidity(
    state: PoolState,
    amount: TokenAmount,
    *,
    min_out: Optional[LpTokenAmount] = None,
) -> tuple[PoolState, LpTokenAmount]:
    """Deposit tokens; returns the new state and the minted shares."""
    result = step_or_raise(state, ActionParams(Action.ADD_LIQUIDITY, amount, min_out))
    return result.state, result.effect.quote.lp_minted


def remove_liquidity(
    state: PoolState,
    shares: LpTokenAmount,
    *,
    min_out: Optional[TokenAmount] = None,
) -> tuple[PoolState, tuple[TokenAmount, StakedTokenAmount]]:
    """Burn shares; returns the new state and the (token, staked) amounts paid out."""
    result = step_or_raise(state, ActionParams(Action.REMOVE_LIQUIDITY, shares, min_out))
    quote = result.effect.quote
    return result.state, (quote.token_out, quote.staked_out)


def swap(
    state: PoolState,
    staked_in: StakedTokenAmount,
    *,
    min_out: Optional[TokenAmount] = None,
) -> tuple[PoolState, TokenAmount]:
    """Sell staked tokens to the pool; returns the new state and the tokens paid out."""
    new_state, quote = swap_with_quote(state, staked_in, min_out=min_out)
    return new_state, quote.token_out


def swap_with_quote(
    state: PoolState,
    staked_in: StakedTokenAmount,
    *,
    min_out: Optional[TokenAmount] = None,
) -> tuple[PoolState, Quote]:
    """Like `swap`, but returns the full quote (fee rate and fee amount) of the executed swap."""
    result = step_or_raise(state, ActionParams(Action.SWAP, staked_in, min_out))
    return result.state, result.effect.quote


def quote_swap(state: PoolState, staked_in: StakedTokenAmount) -> Quote:
    """Preview a swap (payout and fee) without producing a new state."""
    result = step_or_raise(state, ActionParams(Action.SWAP, staked_in))
    return result.effect.quote
