"""Exception types for the lp_pool engine.

Used by ``step_or_raise()`` in ``engine.py`` and by the operation helpers.
``step()`` never raises these; it attaches them to a rejected ``StepResult``.

Every class carries a stable ``code`` which doubles as the rejection reason.
"""

from __future__ import annotations


class PoolError(Exception):
    """Base class for every recoverable pool failure."""

    code: str = "pool_error"


class ConfigurationError(PoolError, ValueError):
    """Invalid pool parameters (zero price, min_fee > max_fee, fee above 100%)."""

    code = "configuration"


class InsufficientShares(PoolError):
    """Withdrawal burns more shares than are outstanding."""

    code = "insufficient_shares"


class ReserveExhausted(PoolError):
    """Pro-rata withdrawal would return more than the pool holds."""

    code = "reserve_exhausted"


class InsufficientPoolValue(PoolError):
    """Deposit would divide by a zero pool value while shares are outstanding."""

    code = "insufficient_pool_value"


class ArithmeticUnderflow(PoolError, ArithmeticError):
    """A checked subtraction would go below zero."""

    code = "arithmetic_underflow"


class ArithmeticOverflow(PoolError, ArithmeticError):
    """A checked result exceeds its representable width."""

    code = "arithmetic_overflow"


class InsufficientLiquidity(PoolError):
    """Swap payout exceeds the token reserve, or the pool is empty."""

    code = "insufficient_liquidity"


class SlippageExceeded(PoolError):
    """Computed output is below the caller's ``min_out`` floor."""

    code = "slippage_exceeded"


class PoolParamError(PoolError, TypeError):
    """An action parameter has the wrong quantity kind."""

    code = "param_domain"


class PoolInvariantError(PoolError):
    """Raised when a post-state violates one or more invariants."""

    code = "invariant"

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")
