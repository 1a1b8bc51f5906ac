"""Property tests for the lp_pool engine.

Uses Hypothesis to fuzz fee-curve inputs and random deposit / withdraw / swap
sequences, checking that every accepted step keeps the invariants and that the
accounting properties hold.
"""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import assume, given, settings

from stakeswap.core.lp_pool import Action, ActionParams, PoolState, PoolStatus, init, step
from stakeswap.core.lp_pool.invariants import check_all
from stakeswap.core.lp_pool.math import fee_rate, pool_value
from stakeswap.core.units import (
    PRECISION,
    LpTokenAmount,
    Percentage,
    Price,
    StakedTokenAmount,
    TokenAmount,
)

MAX_AMOUNT = 1_000_000_000_000  # 1e6 whole tokens


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

@st.composite
def fee_bounds(draw) -> tuple[int, int]:
    lo = draw(st.integers(min_value=0, max_value=PRECISION))
    hi = draw(st.integers(min_value=lo, max_value=PRECISION))
    return lo, hi


@st.composite
def pools(draw) -> PoolState:
    lo, hi = draw(fee_bounds())
    return init(
        Price(draw(st.integers(min_value=1, max_value=10 * PRECISION))),
        Percentage(lo),
        Percentage(hi),
        TokenAmount(draw(st.integers(min_value=0, max_value=MAX_AMOUNT))),
    )


def action_params_strategy() -> st.SearchStrategy[ActionParams]:
    amount = st.integers(min_value=0, max_value=MAX_AMOUNT)
    return st.one_of(
        st.builds(ActionParams, action=st.just(Action.ADD_LIQUIDITY), amount=amount.map(TokenAmount)),
        st.builds(ActionParams, action=st.just(Action.REMOVE_LIQUIDITY), amount=amount.map(LpTokenAmount)),
        st.builds(ActionParams, action=st.just(Action.SWAP), amount=amount.map(StakedTokenAmount)),
    )


def _run(state: PoolState, actions: list[ActionParams]) -> PoolState:
    for params in actions:
        r = step(state, params)
        assert r.rejection is None or not r.rejection.startswith("invariant"), r.rejection
        if r.accepted:
            assert check_all(r.state) == []
            state = r.state
    return state


# ---------------------------------------------------------------------------
# Fee curve
# ---------------------------------------------------------------------------

class TestFeeCurveProperties:
    @given(
        bounds=fee_bounds(),
        target=st.integers(min_value=0, max_value=MAX_AMOUNT),
        a=st.integers(min_value=0, max_value=2 * MAX_AMOUNT),
        b=st.integers(min_value=0, max_value=2 * MAX_AMOUNT),
    )
    @settings(max_examples=300, deadline=2000)
    def test_bounded_and_non_increasing(self, bounds, target, a, b):
        lo, hi = bounds
        lo_after, hi_after = min(a, b), max(a, b)
        fee_lo = fee_rate(lo_after, target, lo, hi)
        fee_hi = fee_rate(hi_after, target, lo, hi)
        assert lo <= fee_hi <= fee_lo <= hi
        if hi_after >= target:
            assert fee_hi == lo


# ---------------------------------------------------------------------------
# Engine sequences
# ---------------------------------------------------------------------------

class TestSequenceProperties:
    @given(state=pools(), actions=st.lists(action_params_strategy(), max_size=25))
    @settings(max_examples=200, deadline=2000)
    def test_accepted_steps_keep_invariants(self, state, actions):
        _run(state, actions)

    @given(state=pools(), actions=st.lists(action_params_strategy(), max_size=25))
    @settings(max_examples=200, deadline=2000)
    def test_full_withdrawal_conserves_reserves(self, state, actions):
        state = _run(state, actions)
        r = step(state, ActionParams(Action.REMOVE_LIQUIDITY, state.lp_token_amount))
        assert r.accepted, r.rejection
        assert r.effect.quote.token_out == state.token_amount
        assert r.effect.quote.staked_out == state.st_token_amount
        assert r.state.status is PoolStatus.EMPTY
        assert r.state.token_amount.raw == 0
        assert r.state.st_token_amount.raw == 0

    @given(
        state=pools(),
        actions=st.lists(action_params_strategy(), max_size=10),
        excess=st.integers(min_value=1, max_value=MAX_AMOUNT),
    )
    @settings(max_examples=200, deadline=2000)
    def test_overdraw_rejected(self, state, actions, excess):
        state = _run(state, actions)
        shares = LpTokenAmount(state.lp_token_amount.raw + excess)
        r = step(state, ActionParams(Action.REMOVE_LIQUIDITY, shares))
        assert not r.accepted
        assert r.rejection == "insufficient_shares"

    @given(
        state=pools(),
        deposit=st.integers(min_value=1, max_value=MAX_AMOUNT),
        staked=st.integers(min_value=0, max_value=MAX_AMOUNT),
    )
    @settings(max_examples=300, deadline=2000)
    def test_swap_never_decreases_pool_value(self, state, deposit, staked):
        state = step(state, ActionParams(Action.ADD_LIQUIDITY, TokenAmount(deposit))).state
        r = step(state, ActionParams(Action.SWAP, StakedTokenAmount(staked)))
        if not r.accepted:
            return
        before = pool_value(state.token_amount.raw, state.st_token_amount.raw, state.price.raw)
        after = pool_value(r.state.token_amount.raw, r.state.st_token_amount.raw, r.state.price.raw)
        assert after >= before
        assert r.state.lp_token_amount == state.lp_token_amount

    @given(state=pools(), deposit=st.integers(min_value=0, max_value=MAX_AMOUNT))
    @settings(max_examples=100, deadline=2000)
    def test_first_deposit_one_to_one(self, state, deposit):
        r = step(state, ActionParams(Action.ADD_LIQUIDITY, TokenAmount(deposit)))
        assert r.accepted
        assert r.effect.quote.lp_minted.raw == deposit
        assert r.state.token_amount.raw == deposit


# ---------------------------------------------------------------------------
# Share value
# ---------------------------------------------------------------------------

def _value(s: PoolState) -> int:
    return pool_value(s.token_amount.raw, s.st_token_amount.raw, s.price.raw)


class TestShareValueProperties:
    """Value per LP share never drops across deposits and withdrawals.

    Compared cross-multiplied: V_after / L_after >= V_before / L_before.
    """

    @given(
        state=pools(),
        actions=st.lists(action_params_strategy(), max_size=15),
        deposit=st.integers(min_value=0, max_value=MAX_AMOUNT),
    )
    @settings(max_examples=300, deadline=2000)
    def test_deposit_keeps_share_value(self, state, actions, deposit):
        state = _run(state, actions)
        assume(state.lp_token_amount.raw > 0)
        r = step(state, ActionParams(Action.ADD_LIQUIDITY, TokenAmount(deposit)))
        if not r.accepted:
            return
        l_before, l_after = state.lp_token_amount.raw, r.state.lp_token_amount.raw
        assert _value(r.state) * l_before >= _value(state) * l_after

    @given(
        state=pools(),
        actions=st.lists(action_params_strategy(), max_size=15),
        fraction=st.floats(min_value=0.0, max_value=1.0, exclude_max=True),
    )
    @settings(max_examples=300, deadline=2000)
    def test_partial_withdrawal_keeps_share_value(self, state, actions, fraction):
        state = _run(state, actions)
        l_before = state.lp_token_amount.raw
        assume(l_before > 1)
        shares = min(int(l_before * fraction), l_before - 1)
        r = step(state, ActionParams(Action.REMOVE_LIQUIDITY, LpTokenAmount(shares)))
        assert r.accepted, r.rejection
        l_after = r.state.lp_token_amount.raw
        # The staked leg is valued with a truncating division, so allow one
        # raw unit of value per pre-withdrawal share.
        assert _value(r.state) * l_before + l_before >= _value(state) * l_after
