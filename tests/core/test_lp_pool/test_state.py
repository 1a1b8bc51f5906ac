"""Tests for stakeswap/core/lp_pool/state.py: init, reconfigure and serialization."""

import pytest

from stakeswap.core.lp_pool import ConfigurationError, PoolInvariantError, add_liquidity, swap
from stakeswap.core.lp_pool.state import (
    STATE_VAR_NAMES,
    init,
    reconfigure,
    state_from_dict,
    state_to_dict,
)
from stakeswap.core.lp_pool.types import PoolState, PoolStatus
from stakeswap.core.units import (
    PRECISION,
    LpTokenAmount,
    Percentage,
    Price,
    StakedTokenAmount,
    TokenAmount,
)


def _init(**overrides):
    kwargs = dict(
        price=Price(1_500_000),
        min_fee=Percentage(1_000),
        max_fee=Percentage(90_000),
        liquidity_target=TokenAmount(90_000_000),
    )
    kwargs.update(overrides)
    return init(**kwargs)


class TestInit:
    def test_returns_pool_state(self):
        assert isinstance(_init(), PoolState)

    def test_parameters_stored_unchanged(self):
        s = _init()
        assert s.price.raw == 1_500_000
        assert s.min_fee.raw == 1_000
        assert s.max_fee.raw == 90_000
        assert s.liquidity_target.raw == 90_000_000

    def test_reserves_zeroed(self):
        s = _init()
        assert s.token_amount == TokenAmount(0)
        assert s.st_token_amount == StakedTokenAmount(0)
        assert s.lp_token_amount == LpTokenAmount(0)
        assert s.status is PoolStatus.EMPTY

    def test_frozen(self):
        s = _init()
        with pytest.raises(AttributeError):
            s.token_amount = TokenAmount(1)  # type: ignore[misc]

    def test_zero_price_rejected(self):
        with pytest.raises(ConfigurationError, match="price"):
            _init(price=Price(0))

    def test_min_fee_above_max_rejected(self):
        with pytest.raises(ConfigurationError):
            _init(min_fee=Percentage(100_000))

    def test_fee_above_100_percent_rejected(self):
        with pytest.raises(ConfigurationError):
            _init(max_fee=Percentage(PRECISION + 1))

    def test_full_fee_accepted(self):
        assert _init(max_fee=Percentage(PRECISION)).max_fee.raw == PRECISION

    def test_zero_target_accepted(self):
        assert _init(liquidity_target=TokenAmount(0)).liquidity_target.raw == 0

    def test_wrong_kind_rejected(self):
        with pytest.raises(TypeError):
            _init(liquidity_target=StakedTokenAmount(90_000_000))

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            _init(price=Price(0))


class TestReconfigure:
    def test_replaces_only_given_fields(self):
        s, _ = add_liquidity(_init(), TokenAmount(100_000_000))
        s2 = reconfigure(s, price=Price(2_000_000))
        assert s2.price == Price(2_000_000)
        assert s2.min_fee == s.min_fee
        assert s2.token_amount == s.token_amount
        assert s2.lp_token_amount == s.lp_token_amount

    def test_validates(self):
        with pytest.raises(ConfigurationError):
            reconfigure(_init(), min_fee=Percentage(95_000))

    def test_new_price_used_by_swap(self):
        s, _ = add_liquidity(_init(), TokenAmount(100_000_000))
        s = reconfigure(s, price=Price(PRECISION))
        _, out = swap(s, StakedTokenAmount(9_000_000))
        assert out == TokenAmount(8_991_000)


class TestStateVarNames:
    def test_count(self):
        assert len(STATE_VAR_NAMES) == 7

    def test_no_duplicates(self):
        assert len(set(STATE_VAR_NAMES)) == 7


class TestSerialization:
    def test_to_dict(self):
        d = state_to_dict(_init())
        assert d == {
            "price": 1_500_000,
            "min_fee": 1_000,
            "max_fee": 90_000,
            "liquidity_target": 90_000_000,
            "token_amount": 0,
            "st_token_amount": 0,
            "lp_token_amount": 0,
        }

    def test_round_trip(self):
        s, _ = add_liquidity(_init(), TokenAmount(100_000_000))
        s, _ = swap(s, StakedTokenAmount(6_000_000))
        assert state_from_dict(state_to_dict(s)) == s

    def test_missing_field(self):
        d = state_to_dict(_init())
        del d["price"]
        with pytest.raises(KeyError):
            state_from_dict(d)

    def test_non_int_field(self):
        d = state_to_dict(_init())
        d["token_amount"] = "0"
        with pytest.raises(TypeError):
            state_from_dict(d)

    def test_invalid_parameters(self):
        d = state_to_dict(_init())
        d["price"] = 0
        with pytest.raises(ConfigurationError):
            state_from_dict(d)

    def test_empty_pool_with_reserves_rejected(self):
        d = state_to_dict(_init())
        d["token_amount"] = 100_000_000
        with pytest.raises(PoolInvariantError) as exc_info:
            state_from_dict(d)
        assert exc_info.value.violations == ["inv_empty_pool_has_no_reserves"]

    def test_active_pool_without_reserves_rejected(self):
        d = state_to_dict(_init())
        d["lp_token_amount"] = 100_000_000
        with pytest.raises(PoolInvariantError) as exc_info:
            state_from_dict(d)
        assert exc_info.value.violations == ["inv_active_pool_has_reserves"]

    def test_staked_only_active_pool_accepted(self):
        d = state_to_dict(_init())
        d["st_token_amount"] = 1
        d["lp_token_amount"] = 100_000_000
        assert state_from_dict(d).status is PoolStatus.ACTIVE
