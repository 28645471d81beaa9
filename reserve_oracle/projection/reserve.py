"""Expected reserve state after each ledger action.

Every projection shares one epilogue: utilization is recomputed from the new
totals and fed to the rate model (rates look forward), while the indices are
accrued from the pre-action snapshot up to the transaction timestamp (indices
look back over the time elapsed since the last update).
"""

from __future__ import annotations

import logging
from dataclasses import replace

from reserve_oracle.data.constants import MAX_UINT_AMOUNT
from reserve_oracle.data.interfaces import (
    Action,
    ProjectionConfig,
    ReserveSnapshot,
    UserPosition,
)
from reserve_oracle.errors import ProjectionInvariantViolation, SnapshotError
from reserve_oracle.protocol.accrual import (
    expected_atoken_balance,
    expected_compounded_borrow_balance,
    expected_liquidity_index,
    expected_variable_borrow_index,
)
from reserve_oracle.protocol.interest_rate import (
    calculate_interest_rates,
    calculate_utilization_rate,
)

logger = logging.getLogger(__name__)


def validate_amount(action: Action, symbol: str, name: str, value: int) -> None:
    """Reject amounts the ledger could never accept (non-int or negative)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise SnapshotError(f"{action.value} on {symbol}: {name} must be an int, got {value!r}")
    if value < 0:
        raise ProjectionInvariantViolation(symbol, action.value, name, value)


def _project(
    config: ProjectionConfig,
    action: Action,
    reserve_before: ReserveSnapshot,
    tx_timestamp: int,
    total_liquidity: int,
    available_liquidity: int,
    total_borrows_variable: int,
) -> ReserveSnapshot:
    for name, value in (
        ("total_liquidity", total_liquidity),
        ("available_liquidity", available_liquidity),
        ("total_borrows_variable", total_borrows_variable),
    ):
        if value < 0:
            raise ProjectionInvariantViolation(reserve_before.symbol, action.value, name, value)
    if available_liquidity > total_liquidity:
        raise ProjectionInvariantViolation(
            reserve_before.symbol,
            action.value,
            "available_liquidity",
            available_liquidity,
        )

    utilization_rate = calculate_utilization_rate(total_borrows_variable, total_liquidity)
    rates = calculate_interest_rates(config, reserve_before.symbol, utilization_rate)

    return replace(
        reserve_before,
        total_liquidity=total_liquidity,
        available_liquidity=available_liquidity,
        total_borrows_variable=total_borrows_variable,
        utilization_rate=utilization_rate,
        liquidity_rate=rates.liquidity_rate,
        variable_borrow_rate=rates.variable_borrow_rate,
        liquidity_index=expected_liquidity_index(reserve_before, tx_timestamp),
        variable_borrow_index=expected_variable_borrow_index(reserve_before, tx_timestamp),
        last_update_timestamp=tx_timestamp,
    )


def resolve_repay_amount(
    amount: int, reserve_before: ReserveSnapshot, user_before: UserPosition, tx_timestamp: int
) -> int:
    """Amount the ledger actually takes for a repay.

    The sentinel means "everything owed" (compounded balance plus the
    outstanding origination fee); any larger amount is capped to that, the
    excess being refunded.
    """
    owed = (
        expected_compounded_borrow_balance(reserve_before, user_before, tx_timestamp)
        + user_before.origination_fee
    )
    if amount == MAX_UINT_AMOUNT or amount > owed:
        return owed
    return amount


def resolve_redeem_amount(
    amount: int, reserve_before: ReserveSnapshot, user_before: UserPosition, tx_timestamp: int
) -> int:
    """Amount redeemed; the sentinel means the user's whole aToken balance."""
    if amount == MAX_UINT_AMOUNT:
        return expected_atoken_balance(reserve_before, user_before, tx_timestamp)
    return amount


def project_reserve_after_deposit(
    config: ProjectionConfig,
    amount: int,
    reserve_before: ReserveSnapshot,
    tx_timestamp: int,
) -> ReserveSnapshot:
    validate_amount(Action.DEPOSIT, reserve_before.symbol, "amount", amount)
    logger.debug("Projecting deposit of %d into %s", amount, reserve_before.symbol)
    return _project(
        config,
        Action.DEPOSIT,
        reserve_before,
        tx_timestamp,
        total_liquidity=reserve_before.total_liquidity + amount,
        available_liquidity=reserve_before.available_liquidity + amount,
        total_borrows_variable=reserve_before.total_borrows_variable,
    )


def project_reserve_after_borrow(
    config: ProjectionConfig,
    amount: int,
    reserve_before: ReserveSnapshot,
    user_before: UserPosition,
    tx_timestamp: int,
) -> ReserveSnapshot:
    """Borrow ``amount``; the user's stale debt is swapped for its compounded value.

    Interest the user accrued since the last update becomes new liquidity.
    """
    validate_amount(Action.BORROW, reserve_before.symbol, "amount", amount)
    logger.debug("Projecting borrow of %d from %s", amount, reserve_before.symbol)
    compounded_balance = expected_compounded_borrow_balance(
        reserve_before, user_before, tx_timestamp
    )
    balance_increase = compounded_balance - user_before.principal_borrow_balance

    return _project(
        config,
        Action.BORROW,
        reserve_before,
        tx_timestamp,
        total_liquidity=reserve_before.total_liquidity + balance_increase,
        available_liquidity=reserve_before.available_liquidity - amount,
        total_borrows_variable=(
            reserve_before.total_borrows_variable
            - user_before.principal_borrow_balance
            + compounded_balance
            + amount
        ),
    )


def project_reserve_after_repay(
    config: ProjectionConfig,
    amount: int,
    reserve_before: ReserveSnapshot,
    user_before: UserPosition,
    tx_timestamp: int,
) -> ReserveSnapshot:
    """Repay ``amount`` (or everything, for the sentinel).

    The origination fee is settled first and leaves the reserve; only the
    remainder pays down principal and returns to available liquidity.
    """
    validate_amount(Action.REPAY, reserve_before.symbol, "amount", amount)
    amount = resolve_repay_amount(amount, reserve_before, user_before, tx_timestamp)
    logger.debug("Projecting repay of %d to %s", amount, reserve_before.symbol)

    compounded_balance = expected_compounded_borrow_balance(
        reserve_before, user_before, tx_timestamp
    )
    balance_increase = compounded_balance - user_before.principal_borrow_balance
    principal_repaid = max(amount - user_before.origination_fee, 0)

    return _project(
        config,
        Action.REPAY,
        reserve_before,
        tx_timestamp,
        total_liquidity=reserve_before.total_liquidity + balance_increase,
        available_liquidity=reserve_before.available_liquidity + principal_repaid,
        total_borrows_variable=(
            reserve_before.total_borrows_variable + balance_increase - principal_repaid
        ),
    )


def project_reserve_after_redeem(
    config: ProjectionConfig,
    amount: int,
    reserve_before: ReserveSnapshot,
    user_before: UserPosition,
    tx_timestamp: int,
) -> ReserveSnapshot:
    validate_amount(Action.REDEEM, reserve_before.symbol, "amount", amount)
    amount = resolve_redeem_amount(amount, reserve_before, user_before, tx_timestamp)
    logger.debug("Projecting redeem of %d from %s", amount, reserve_before.symbol)
    return _project(
        config,
        Action.REDEEM,
        reserve_before,
        tx_timestamp,
        total_liquidity=reserve_before.total_liquidity - amount,
        available_liquidity=reserve_before.available_liquidity - amount,
        total_borrows_variable=reserve_before.total_borrows_variable,
    )


def project_reserve_after_set_collateral(
    config: ProjectionConfig,
    use_as_collateral: bool,
    reserve_before: ReserveSnapshot,
    tx_timestamp: int,
) -> ReserveSnapshot:
    """Collateral toggles leave the reserve untouched."""
    logger.debug(
        "Projecting collateral toggle (%s) on %s", use_as_collateral, reserve_before.symbol
    )
    return reserve_before


_USER_ACTIONS = {
    Action.BORROW: project_reserve_after_borrow,
    Action.REPAY: project_reserve_after_repay,
    Action.REDEEM: project_reserve_after_redeem,
}


def project_reserve(
    config: ProjectionConfig,
    action: Action | str,
    amount: int,
    reserve_before: ReserveSnapshot,
    user_before: UserPosition,
    tx_timestamp: int,
) -> ReserveSnapshot:
    """Dispatch to the projection for ``action``.

    ``action`` may be an ``Action`` or its string value; anything else
    raises ValueError.  For ``Action.SET_COLLATERAL`` a non-zero ``amount``
    means "enable".
    """
    action = Action(action)
    if action is Action.DEPOSIT:
        return project_reserve_after_deposit(config, amount, reserve_before, tx_timestamp)
    if action is Action.SET_COLLATERAL:
        return project_reserve_after_set_collateral(
            config, bool(amount), reserve_before, tx_timestamp
        )
    return _USER_ACTIONS[action](config, amount, reserve_before, user_before, tx_timestamp)

