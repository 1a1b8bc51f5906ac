"""
Pool configuration from the environment.

Decimal strings are read from `STAKESWAP_*` variables and converted to
unit-typed quantities. Unset or blank variables fall back to the defaults
below; malformed values raise `ConfigurationError` rather than being ignored.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Type, TypeVar

from .core.lp_pool import ConfigurationError, LpPool
from .core.units import Percentage, Price, Quantity, TokenAmount

Q = TypeVar("Q", bound=Quantity)

DEFAULT_PRICE = "1.5"
DEFAULT_MIN_FEE = "0.001"
DEFAULT_MAX_FEE = "0.09"
DEFAULT_LIQUIDITY_TARGET = "90"
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_str(environ: Mapping[str, str], name: str, default: str) -> str:
    raw = environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _env_quantity(environ: Mapping[str, str], name: str, default: str, kind: Type[Q]) -> Q:
    raw = _env_str(environ, name, default)
    try:
        return kind.from_decimal(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name}={raw!r}: {exc}") from exc


@dataclass(frozen=True)
class PoolConfig:
    price: Price
    min_fee: Percentage
    max_fee: Percentage
    liquidity_target: TokenAmount
    log_level: str = DEFAULT_LOG_LEVEL

    def build_pool(self) -> LpPool:
        """Create an empty pool; raises ConfigurationError on invalid parameters."""
        return LpPool.init(self.price, self.min_fee, self.max_fee, self.liquidity_target)


def load_config(environ: Optional[Mapping[str, str]] = None) -> PoolConfig:
    """
    Read pool parameters from `environ` (default: `os.environ`).

    Variables:
        STAKESWAP_PRICE: staked -> token exchange rate (decimal, default 1.5)
        STAKESWAP_MIN_FEE: fee floor as a fraction (default 0.001 = 0.1%)
        STAKESWAP_MAX_FEE: fee ceiling as a fraction (default 0.09 = 9%)
        STAKESWAP_LIQUIDITY_TARGET: token reserve target (default 90)
        STAKESWAP_LOG_LEVEL: logging level name (default WARNING)
    """
    env = os.environ if environ is None else environ
    log_level = _env_str(env, "STAKESWAP_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigurationError(f"STAKESWAP_LOG_LEVEL must be one of {_LOG_LEVELS}: {log_level!r}")
    return PoolConfig(
        price=_env_quantity(env, "STAKESWAP_PRICE", DEFAULT_PRICE, Price),
        min_fee=_env_quantity(env, "STAKESWAP_MIN_FEE", DEFAULT_MIN_FEE, Percentage),
        max_fee=_env_quantity(env, "STAKESWAP_MAX_FEE", DEFAULT_MAX_FEE, Percentage),
        liquidity_target=_env_quantity(env, "STAKESWAP_LIQUIDITY_TARGET", DEFAULT_LIQUIDITY_TARGET, TokenAmount),
        log_level=log_level,
    )
