"""Independent accounting oracle for a collateralized lending pool."""

from reserve_oracle.data.config_factory import create_config
from reserve_oracle.data.constants import MAX_UINT_AMOUNT, RAY, SECONDS_PER_YEAR, WAD
from reserve_oracle.data.interfaces import (
    Action,
    InterestRateStrategy,
    ProjectionConfig,
    ReserveSnapshot,
    UserPosition,
)
from reserve_oracle.errors import (
    ConfigurationError,
    OracleError,
    ProjectionInvariantViolation,
    RayMathError,
    SnapshotError,
    SnapshotMismatch,
    TemporalInvariantViolation,
)
from reserve_oracle.projection import (
    assert_snapshots_match,
    compare_snapshots,
    project_reserve,
    project_reserve_after_borrow,
    project_reserve_after_deposit,
    project_reserve_after_redeem,
    project_reserve_after_repay,
    project_reserve_after_set_collateral,
    project_user,
    project_user_after_borrow,
    project_user_after_deposit,
    project_user_after_redeem,
    project_user_after_repay,
    project_user_after_set_collateral,
)

__all__ = [
    "Action",
    "ConfigurationError",
    "InterestRateStrategy",
    "MAX_UINT_AMOUNT",
    "OracleError",
    "ProjectionConfig",
    "ProjectionInvariantViolation",
    "RAY",
    "RayMathError",
    "ReserveSnapshot",
    "SECONDS_PER_YEAR",
    "SnapshotError",
    "SnapshotMismatch",
    "TemporalInvariantViolation",
    "UserPosition",
    "WAD",
    "assert_snapshots_match",
    "compare_snapshots",
    "create_config",
    "project_reserve",
    "project_reserve_after_borrow",
    "project_reserve_after_deposit",
    "project_reserve_after_redeem",
    "project_reserve_after_repay",
    "project_reserve_after_set_collateral",
    "project_user",
    "project_user_after_borrow",
    "project_user_after_deposit",
    "project_user_after_redeem",
    "project_user_after_repay",
    "project_user_after_set_collateral",
]
