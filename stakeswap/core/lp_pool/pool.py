"""Mutable, lock-guarded holder around the pure `lp_pool` engine.

`LpPool` keeps one `PoolState` and replaces it wholesale after every accepted
operation. All operations run under a single exclusive lock; the engine does
no I/O, so nothing finer-grained is useful (every operation touches all three
reserves). A rejected operation raises and leaves the held state untouched.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from ..units import LpTokenAmount, Percentage, Price, StakedTokenAmount, TokenAmount
from . import engine
from .state import init as init_state
from .state import reconfigure as reconfigure_state
from .state import state_to_dict
from .types import PoolState, PoolStatus, Quote

logger = logging.getLogger(__name__)


class LpPool:
    """Single staked-token / token liquidity pool."""

    def __init__(self, state: PoolState) -> None:
        self._state = state
        self._lock = threading.Lock()

    @classmethod
    def init(
        cls,
        price: Price,
        min_fee: Percentage,
        max_fee: Percentage,
        liquidity_target: TokenAmount,
    ) -> "LpPool":
        return cls(init_state(price, min_fee, max_fee, liquidity_target))

    # -- Read access ---------------------------------------------------------

    @property
    def state(self) -> PoolState:
        return self._state

    @property
    def price(self) -> Price:
        return self._state.price

    @property
    def token_amount(self) -> TokenAmount:
        return self._state.token_amount

    @property
    def st_token_amount(self) -> StakedTokenAmount:
        return self._state.st_token_amount

    @property
    def lp_token_amount(self) -> LpTokenAmount:
        return self._state.lp_token_amount

    @property
    def liquidity_target(self) -> TokenAmount:
        return self._state.liquidity_target

    @property
    def min_fee(self) -> Percentage:
        return self._state.min_fee

    @property
    def max_fee(self) -> Percentage:
        return self._state.max_fee

    @property
    def status(self) -> PoolStatus:
        return self._state.status

    def snapshot(self) -> dict[str, Any]:
        return state_to_dict(self._state)

    # -- Operations ----------------------------------------------------------

    def add_liquidity(self, amount: TokenAmount, *, min_out: Optional[LpTokenAmount] = None) -> LpTokenAmount:
        with self._lock:
            new_state, minted = engine.add_liquidity(self._state, amount, min_out=min_out)
            self._state = new_state
        logger.debug("add_liquidity amount=%d minted=%d lp_supply=%d", amount.raw, minted.raw, new_state.lp_token_amount.raw)
        return minted

    def remove_liquidity(
        self,
        shares: LpTokenAmount,
        *,
        min_out: Optional[TokenAmount] = None,
    ) -> tuple[TokenAmount, StakedTokenAmount]:
        with self._lock:
            new_state, (token_out, staked_out) = engine.remove_liquidity(self._state, shares, min_out=min_out)
            self._state = new_state
        logger.debug(
            "remove_liquidity shares=%d token_out=%d staked_out=%d status=%s",
            shares.raw, token_out.raw, staked_out.raw, new_state.status.value,
        )
        return token_out, staked_out

    def swap(self, staked_in: StakedTokenAmount, *, min_out: Optional[TokenAmount] = None) -> TokenAmount:
        return self.swap_with_quote(staked_in, min_out=min_out).token_out

    def swap_with_quote(self, staked_in: StakedTokenAmount, *, min_out: Optional[TokenAmount] = None) -> Quote:
        """Swap and return the quote it executed at, taken under the same lock."""
        with self._lock:
            new_state, quote = engine.swap_with_quote(self._state, staked_in, min_out=min_out)
            self._state = new_state
        logger.debug(
            "swap staked_in=%d token_out=%d fee_rate=%d token_after=%d",
            staked_in.raw, quote.token_out.raw, quote.fee_rate.raw, new_state.token_amount.raw,
        )
        return quote

    def quote_swap(self, staked_in: StakedTokenAmount) -> Quote:
        with self._lock:
            return engine.quote_swap(self._state, staked_in)

    def reconfigure(
        self,
        *,
        price: Optional[Price] = None,
        min_fee: Optional[Percentage] = None,
        max_fee: Optional[Percentage] = None,
        liquidity_target: Optional[TokenAmount] = None,
    ) -> None:
        with self._lock:
            self._state = reconfigure_state(
                self._state,
                price=price,
                min_fee=min_fee,
                max_fee=max_fee,
                liquidity_target=liquidity_target,
            )
            logger.debug("reconfigure %s", state_to_dict(self._state))
