"""Unit-typed fixed-point quantities.

Every quantity the pool handles is an unsigned integer scaled by `PRECISION`
(six decimal digits). Each semantic kind gets its own frozen wrapper so that a
staked-token amount can never be passed where a share count is expected:

- `Price`: staked token -> underlying token exchange rate.
- `Percentage`: fee rate (`1000` = 0.1%).
- `TokenAmount`: underlying token balance.
- `StakedTokenAmount`: staked token balance.
- `LpTokenAmount`: pool-share supply.

Wrappers deliberately carry no arithmetic operators; the engine does its math
on `raw` integers through the checked helpers in `lp_pool.math`.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Type, TypeVar, Union

PRECISION: int = 1_000_000
U64_MAX: int = (1 << 64) - 1
U128_MAX: int = (1 << 128) - 1

DecimalLike = Union[str, int, Decimal]

Q = TypeVar("Q", bound="Quantity")


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


@dataclass(frozen=True, order=True)
class Quantity:
    """Base wrapper: one unsigned fixed-point integer in `[0, U64_MAX]`."""

    raw: int

    def __post_init__(self) -> None:
        _require_int(f"{type(self).__name__}.raw", self.raw)
        if not (0 <= self.raw <= U64_MAX):
            raise ValueError(f"{type(self).__name__}.raw must be in [0, {U64_MAX}]: {self.raw}")

    @classmethod
    def zero(cls: Type[Q]) -> Q:
        return cls(0)

    @classmethod
    def from_decimal(cls: Type[Q], value: DecimalLike) -> Q:
        """
        Scale a human-readable decimal into a quantity.

        Digits beyond `PRECISION` are truncated toward zero, matching the
        rounding rule used everywhere else in the engine.
        """
        if isinstance(value, bool) or not isinstance(value, (str, int, Decimal)):
            raise TypeError(f"{cls.__name__}.from_decimal expects str, int or Decimal, got {type(value).__name__}")
        try:
            d = Decimal(value.strip() if isinstance(value, str) else value)
        except InvalidOperation:
            raise ValueError(f"not a decimal number: {value!r}") from None
        if not d.is_finite():
            raise ValueError(f"not a finite decimal number: {value!r}")
        scaled = (d * PRECISION).to_integral_value(rounding=ROUND_DOWN)
        return cls(int(scaled))

    def to_decimal(self) -> Decimal:
        return Decimal(self.raw) / Decimal(PRECISION)

    def is_zero(self) -> bool:
        return self.raw == 0

    def __int__(self) -> int:
        return self.raw

    def __str__(self) -> str:
        whole, frac = divmod(self.raw, PRECISION)
        if frac == 0:
            return str(whole)
        return f"{whole}.{frac:06d}".rstrip("0")


# Each kind is a distinct class: dataclass equality and ordering both require
# the exact same type, so `TokenAmount(5) != StakedTokenAmount(5)` and
# `TokenAmount(5) < StakedTokenAmount(6)` raises TypeError.


@dataclass(frozen=True, order=True)
class Price(Quantity):
    pass


@dataclass(frozen=True, order=True)
class Percentage(Quantity):
    pass


@dataclass(frozen=True, order=True)
class TokenAmount(Quantity):
    pass


@dataclass(frozen=True, order=True)
class StakedTokenAmount(Quantity):
    pass


@dataclass(frozen=True, order=True)
class LpTokenAmount(Quantity):
    pass


def require_kind(name: str, value: object, kind: Type[Quantity]) -> None:
    """Raise TypeError unless `value` is exactly of quantity kind `kind`."""
    if type(value) is not kind:
        raise TypeError(f"{name} must be {kind.__name__}, got {type(value).__name__}")
