"""Exception types raised by the projection engine.

None of these are transient: every error means either a caller bug (bad
snapshot ordering, missing configuration) or a modeling bug, so callers
should fail the enclosing assertion rather than retry.
"""

from __future__ import annotations


class OracleError(Exception):
    """Base class for all reserve_oracle errors."""


class RayMathError(OracleError, ArithmeticError):
    """Raised on divide-by-zero, negative operands or uint256 overflow."""

    def __init__(self, operation: str, *operands: int) -> None:
        self.operation = operation
        self.operands = operands
        args = ", ".join(str(o) for o in operands)
        super().__init__(f"{operation}({args}) is out of uint256 range or divides by zero")


class ConfigurationError(OracleError, LookupError):
    """Raised when no interest rate strategy is registered for a reserve."""

    def __init__(self, symbol: str, message: str | None = None) -> None:
        self.symbol = symbol
        super().__init__(message or f"Reserve configuration for {symbol} not found")


class TemporalInvariantViolation(OracleError):
    """Raised when an accrual is asked to run backwards in time."""

    def __init__(self, current: int, last: int) -> None:
        self.current = current
        self.last = last
        super().__init__(
            f"current timestamp {current} precedes last update timestamp {last}"
        )


class ProjectionInvariantViolation(OracleError):
    """Raised when a projected total or balance would go negative."""

    def __init__(self, symbol: str, action: str, field: str, value: int) -> None:
        self.symbol = symbol
        self.action = action
        self.field = field
        self.value = value
        super().__init__(f"{action} on {symbol} leaves {field} = {value}")


class SnapshotError(OracleError, ValueError):
    """Raised when a snapshot is built with a missing or ill-typed field."""


class SnapshotMismatch(OracleError, AssertionError):
    """Raised when a live snapshot diverges from its projection."""

    def __init__(self, mismatches: list) -> None:
        self.mismatches = mismatches
        details = "; ".join(str(m) for m in mismatches)
        super().__init__(f"{len(mismatches)} field(s) diverge: {details}")
