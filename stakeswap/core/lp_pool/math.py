"""Pure fixed-point arithmetic for the `lp_pool` engine.

Every function is stateless and operates on plain Python ints (the `raw` of a
quantity). Python ints never wrap, so the widths are enforced explicitly:

- stored quantities fit in 64 bits (`U64_MAX`),
- intermediate products fit in 128 bits (`U128_MAX`).

Anything outside those bounds raises `ArithmeticOverflow`; a subtraction below
zero raises `ArithmeticUnderflow`. Division is Python's `//`, which truncates
toward zero for the non-negative operands used here.
"""

from __future__ import annotations

from ..units import PRECISION, U64_MAX, U128_MAX
from .errors import ArithmeticOverflow, ArithmeticUnderflow


# -- Checked primitives ------------------------------------------------------

def checked_mul(a: int, b: int, *, what: str = "product") -> int:
    """``a * b`` within the 128-bit intermediate width."""
    out = a * b
    if out > U128_MAX:
        raise ArithmeticOverflow(f"{what} exceeds 128 bits: {a} * {b}")
    return out


def checked_add(a: int, b: int, *, what: str = "sum") -> int:
    """``a + b`` within the 64-bit storage width."""
    out = a + b
    if out > U64_MAX:
        raise ArithmeticOverflow(f"{what} exceeds 64 bits: {a} + {b}")
    return out


def checked_sub(a: int, b: int, *, what: str = "difference") -> int:
    if b > a:
        raise ArithmeticUnderflow(f"{what} below zero: {a} - {b}")
    return a - b


def mul_div(a: int, b: int, denom: int, *, what: str = "mul_div") -> int:
    """``floor(a * b / denom)`` narrowed back to 64 bits."""
    if denom == 0:
        raise ZeroDivisionError(f"{what}: zero denominator")
    return narrow(checked_mul(a, b, what=what) // denom, what=what)


def narrow(x: int, *, what: str = "value") -> int:
    """Check that an intermediate result fits back into 64 bits."""
    if x > U64_MAX:
        raise ArithmeticOverflow(f"{what} exceeds 64 bits: {x}")
    return x


# -- Pool valuation ----------------------------------------------------------

def staked_value(staked: int, price: int) -> int:
    """Underlying-token value of a staked amount: ``staked * price / 1e6``."""
    return mul_div(staked, price, PRECISION, what="staked_value")


def pool_value(token_amount: int, st_token_amount: int, price: int) -> int:
    """Total pool value in underlying-token units."""
    return checked_add(token_amount, staked_value(st_token_amount, price), what="pool_value")


# -- Deposit -----------------------------------------------------------------

def lp_ratio(lp_supply: int, value: int) -> int:
    """Shares per unit of pool value, scaled: ``lp_supply * 1e6 / value``."""
    return mul_div(lp_supply, PRECISION, value, what="lp_ratio")


def lp_to_mint(amount: int, lp_supply: int, value: int) -> int:
    """Shares minted for a deposit of `amount` tokens.

    The empty pool (``lp_supply == 0``) mints 1:1. Otherwise the ratio is
    truncated before it scales the deposit, then the share count is truncated.
    """
    if lp_supply == 0:
        return amount
    return mul_div(lp_ratio(lp_supply, value), amount, PRECISION, what="lp_minted")


# -- Withdraw ----------------------------------------------------------------

def pro_rata(shares: int, reserve: int, lp_supply: int) -> int:
    """``floor(shares * reserve / lp_supply)``; one rounding rule for every leg."""
    if lp_supply == 0:
        return 0
    return mul_div(shares, reserve, lp_supply, what="pro_rata")


# -- Swap --------------------------------------------------------------------

def fee_rate(amount_after: int, liquidity_target: int, min_fee: int, max_fee: int) -> int:
    """Liquidity-sensitive linear fee curve.

    ``min_fee`` while the projected token reserve stays at or above the target,
    otherwise linear interpolation from ``min_fee`` (at the target) up to
    ``max_fee`` (at an empty reserve)::

        max_fee - (max_fee - min_fee) * amount_after / liquidity_target

    A zero target always yields ``min_fee``.
    """
    if amount_after >= liquidity_target:
        return min_fee
    spread = checked_sub(max_fee, min_fee, what="fee_spread")
    discount = checked_mul(spread, amount_after, what="fee_discount") // liquidity_target
    return checked_sub(max_fee, discount, what="fee_rate")


def apply_fee(gross: int, fee: int) -> int:
    """Net amount after a multiplicative fee: ``gross * (1e6 - fee) / 1e6``."""
    keep = checked_sub(PRECISION, fee, what="fee_keep")
    return mul_div(gross, keep, PRECISION, what="token_out")
