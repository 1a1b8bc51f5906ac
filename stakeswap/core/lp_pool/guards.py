"""Guard functions for `lp_pool`.

One pure function per action. Each checks that the action is allowed in the
given PRE-state and returns the `Quote` the update will apply, or raises the
matching `PoolError`. Storage-width checks for the post-state happen here too,
so an update can never produce an unrepresentable state.
"""

from __future__ import annotations

from ..units import LpTokenAmount, Percentage, StakedTokenAmount, TokenAmount
from .errors import (
    ArithmeticUnderflow,
    InsufficientLiquidity,
    InsufficientPoolValue,
    InsufficientShares,
    ReserveExhausted,
    SlippageExceeded,
)
from .math import (
    apply_fee,
    checked_add,
    fee_rate,
    lp_to_mint,
    pool_value,
    pro_rata,
    staked_value,
)
from .types import ActionParams, PoolState, Quote


def _check_min_out(computed: int, params: ActionParams) -> None:
    if params.min_out is not None and computed < params.min_out.raw:
        raise SlippageExceeded(f"output {computed} below min_out {params.min_out.raw}")


def guard_add_liquidity(state: PoolState, params: ActionParams) -> Quote:
    amount = params.amount.raw
    lp_supply = state.lp_token_amount.raw

    if lp_supply == 0:
        minted = amount
    else:
        value = pool_value(state.token_amount.raw, state.st_token_amount.raw, state.price.raw)
        if value == 0:
            raise InsufficientPoolValue(f"pool value is zero with {lp_supply} shares outstanding")
        minted = lp_to_mint(amount, lp_supply, value)

    checked_add(state.token_amount.raw, amount, what="token_amount")
    checked_add(lp_supply, minted, what="lp_token_amount")
    _check_min_out(minted, params)

    return Quote(lp_minted=LpTokenAmount(minted), token_in=TokenAmount(amount))


def guard_remove_liquidity(state: PoolState, params: ActionParams) -> Quote:
    shares = params.amount.raw
    lp_supply = state.lp_token_amount.raw
    if shares > lp_supply:
        raise InsufficientShares(f"cannot burn {shares} shares, only {lp_supply} outstanding")

    token_return = pro_rata(shares, state.token_amount.raw, lp_supply)
    staked_return = pro_rata(shares, state.st_token_amount.raw, lp_supply)

    if token_return > state.token_amount.raw:
        raise ReserveExhausted(f"token return {token_return} exceeds reserve {state.token_amount.raw}")
    if staked_return > state.st_token_amount.raw:
        raise ReserveExhausted(f"staked return {staked_return} exceeds reserve {state.st_token_amount.raw}")
    _check_min_out(token_return, params)

    return Quote(
        lp_burned=LpTokenAmount(shares),
        token_out=TokenAmount(token_return),
        staked_out=StakedTokenAmount(staked_return),
    )


def guard_swap(state: PoolState, params: ActionParams) -> Quote:
    staked_in = params.amount.raw
    reserve = state.token_amount.raw

    gross = staked_value(staked_in, state.price.raw)
    if gross > reserve:
        raise ArithmeticUnderflow(f"swap value {gross} exceeds token reserve {reserve}")
    amount_after = reserve - gross

    fee = fee_rate(
        amount_after,
        state.liquidity_target.raw,
        state.min_fee.raw,
        state.max_fee.raw,
    )
    token_out = apply_fee(gross, fee)

    # Independent of the projection above: the payout itself must be covered.
    if token_out > reserve:
        raise InsufficientLiquidity(f"payout {token_out} exceeds token reserve {reserve}")
    if state.lp_token_amount.raw == 0:
        raise InsufficientLiquidity("pool has no liquidity providers")

    checked_add(state.st_token_amount.raw, staked_in, what="st_token_amount")
    _check_min_out(token_out, params)

    return Quote(
        staked_in=StakedTokenAmount(staked_in),
        token_out=TokenAmount(token_out),
        fee_rate=Percentage(fee),
        fee_amount=TokenAmount(gross - token_out),
    )
