"""Pool error classes.

Each class is one failure kind of the public pool operations. ``code`` is the
stable kind name used by the HTTP layer; ``reason`` is the human message
(defaults are the messages clients match on, e.g. "Zero amount").
"""


class PoolError(Exception):
    """Base error for pool operations."""

    code = "PoolError"
    default_reason = "Pool operation failed"

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason or self.default_reason
        super().__init__(self.reason)


class ZeroAmount(PoolError):
    """A required positive deposit quantity was zero or negative."""

    code = "ZeroAmount"
    default_reason = "Zero amount"


class RatioMismatch(PoolError):
    """Deposit does not match the current reserve ratio exactly."""

    code = "RatioMismatch"
    default_reason = "Ratio mismatch"


class Insufficient(PoolError):
    """A decrement would take a balance below zero."""

    code = "Insufficient"
    default_reason = "Insufficient balance"


class InsufficientShares(Insufficient):
    """Withdrawal exceeds the holder's share balance."""

    code = "InsufficientShares"
    default_reason = "Not enough liquidity"


class InsufficientReserves(Insufficient):
    """Requested amount exceeds what the pool holds."""

    code = "InsufficientReserves"
    default_reason = "Insufficient reserves"


class NoLiquidity(PoolError):
    """Operation attempted against an empty pool."""

    code = "NoLiquidity"
    default_reason = "No liquidity"


class ZeroInput(PoolError):
    """Swap input was zero or negative."""

    code = "ZeroInput"
    default_reason = "Zero input"


class ZeroOutput(PoolError):
    """Swap would pay out nothing for a non-zero input."""

    code = "ZeroOutput"
    default_reason = "Zero output"


class SlippageExceeded(PoolError):
    """Swap output is below the caller's minimum."""

    code = "SlippageExceeded"
    default_reason = "Insufficient output amount"


class TransferFailed(PoolError):
    """The asset ledger refused a requested movement."""

    code = "TransferFailed"
    default_reason = "Transfer failed"


class ReentrantCall(PoolError):
    """A ledger callback tried to start a pool operation inside another."""

    code = "ReentrantCall"
    default_reason = "Reentrant call"


class InvariantViolation(PoolError):
    """Pool accounting broke an invariant. Indicates a bug, never user error."""

    code = "InvariantViolation"
    default_reason = "Pool invariant violated"
