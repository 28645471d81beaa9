"""Compare projected snapshots against live ledger reads."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields

import pandas as pd

from reserve_oracle.data.interfaces import ReserveSnapshot, UserPosition
from reserve_oracle.errors import SnapshotMismatch

logger = logging.getLogger(__name__)

# Accessory data that is never projected
SKIPPED_FIELDS = frozenset({"address", "symbol", "decimals", "last_update_timestamp"})

# Fixed-point truncation on either side can drift the last digit or two
DEFAULT_TOLERANCE = 2


@dataclass(frozen=True)
class FieldMismatch:
    """One field whose live value diverges from its projection."""

    field: str
    actual: int | bool
    expected: int | bool

    @property
    def delta(self) -> int:
        return int(self.actual) - int(self.expected)

    def __str__(self) -> str:
        return f"{self.field}: expected {self.expected}, got {self.actual}"


@dataclass(frozen=True)
class SnapshotDiff:
    """Outcome of comparing one live snapshot against its projection."""

    mismatches: list[FieldMismatch] = field(default_factory=list)
    tolerance: int = DEFAULT_TOLERANCE

    @property
    def matches(self) -> bool:
        return not self.mismatches

    def to_frame(self) -> pd.DataFrame:
        """Tabular report of the mismatches.

        Returns:
            DataFrame with columns: field, expected, actual, delta
        """
        return pd.DataFrame(
            {
                "field": [m.field for m in self.mismatches],
                "expected": [m.expected for m in self.mismatches],
                "actual": [m.actual for m in self.mismatches],
                "delta": [m.delta for m in self.mismatches],
            },
            columns=["field", "expected", "actual", "delta"],
        )


def compare_snapshots(
    actual: ReserveSnapshot | UserPosition,
    expected: ReserveSnapshot | UserPosition,
    tolerance: int = DEFAULT_TOLERANCE,
) -> SnapshotDiff:
    """Compare two snapshots of the same type field by field.

    Integer fields may differ by up to ``tolerance`` units; flags must be
    equal.  Identity and timestamp fields are skipped.
    """
    if type(actual) is not type(expected):
        raise TypeError(
            f"cannot compare {type(actual).__name__} with {type(expected).__name__}"
        )

    mismatches = []
    for f in fields(expected):
        if f.name in SKIPPED_FIELDS:
            continue
        actual_value = getattr(actual, f.name)
        expected_value = getattr(expected, f.name)

        if isinstance(expected_value, bool) or isinstance(actual_value, bool):
            equal = actual_value == expected_value
        else:
            equal = abs(actual_value - expected_value) <= tolerance

        if not equal:
            mismatches.append(FieldMismatch(f.name, actual_value, expected_value))

    return SnapshotDiff(mismatches=mismatches, tolerance=tolerance)


def assert_snapshots_match(
    actual: ReserveSnapshot | UserPosition,
    expected: ReserveSnapshot | UserPosition,
    tolerance: int = DEFAULT_TOLERANCE,
) -> None:
    """Raise SnapshotMismatch listing every field outside ``tolerance``."""
    diff = compare_snapshots(actual, expected, tolerance)
    if diff.matches:
        return

    for mismatch in diff.mismatches:
        logger.warning("Snapshot mismatch on %s", mismatch)
    raise SnapshotMismatch(diff.mismatches)
