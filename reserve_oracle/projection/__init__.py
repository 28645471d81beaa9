"""Per-action projections of reserve and user state."""

from reserve_oracle.projection.comparison import assert_snapshots_match, compare_snapshots
from reserve_oracle.projection.reserve import (
    project_reserve,
    project_reserve_after_borrow,
    project_reserve_after_deposit,
    project_reserve_after_redeem,
    project_reserve_after_repay,
    project_reserve_after_set_collateral,
)
from reserve_oracle.projection.user import (
    project_user,
    project_user_after_borrow,
    project_user_after_deposit,
    project_user_after_redeem,
    project_user_after_repay,
    project_user_after_set_collateral,
)

__all__ = [
    "assert_snapshots_match",
    "compare_snapshots",
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
