"""Expected user position after each ledger action.

Balances are first brought up to the transaction timestamp against the
pre-action reserve, the action's deltas are applied, and the "current"
balances are then re-observed at ``observation_timestamp`` against the
projected reserve, since the live read may happen some seconds (or, after a
time jump, days) after the transaction was mined.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from reserve_oracle.data.interfaces import (
    Action,
    ProjectionConfig,
    ReserveSnapshot,
    UserPosition,
)
from reserve_oracle.errors import ProjectionInvariantViolation
from reserve_oracle.projection.reserve import (
    resolve_redeem_amount,
    resolve_repay_amount,
    validate_amount,
)
from reserve_oracle.protocol.accrual import (
    expected_atoken_balance,
    expected_compounded_borrow_balance,
)
from reserve_oracle.protocol.ray_math import bps_to_ray, ray_mul

logger = logging.getLogger(__name__)


def calculate_origination_fee(config: ProjectionConfig, amount: int) -> int:
    """Fee charged on a new borrow of ``amount``, rounded half up like the ledger."""
    return ray_mul(amount, bps_to_ray(config.origination_fee_bps))


def _validate_inputs(action: Action, reserve: ReserveSnapshot, amount: int, tx_cost: int) -> None:
    validate_amount(action, reserve.symbol, "amount", amount)
    validate_amount(action, reserve.symbol, "tx_cost", tx_cost)


def _wallet_after(
    config: ProjectionConfig,
    reserve: ReserveSnapshot,
    user_before: UserPosition,
    delta: int,
    tx_cost: int,
) -> int:
    # gas comes out of the same balance only on the native asset reserve
    balance = user_before.wallet_balance + delta
    if config.is_native_asset(reserve.address):
        balance -= tx_cost
    return balance


def _apply(
    action: Action,
    reserve: ReserveSnapshot,
    user_before: UserPosition,
    **changes: int | bool,
) -> UserPosition:
    """Copy ``user_before`` with ``changes``; negative amounts are modeling errors."""
    for name, value in changes.items():
        if not isinstance(value, bool) and value < 0:
            raise ProjectionInvariantViolation(reserve.symbol, action.value, name, value)
    return replace(user_before, **changes)


def _observe(
    reserve_after: ReserveSnapshot, user: UserPosition, observation_timestamp: int
) -> UserPosition:
    """Fill in current balances as seen by a read at ``observation_timestamp``."""
    return replace(
        user,
        current_atoken_balance=expected_atoken_balance(reserve_after, user, observation_timestamp),
        current_borrow_balance=expected_compounded_borrow_balance(
            reserve_after, user, observation_timestamp
        ),
        liquidity_rate=reserve_after.liquidity_rate,
    )


def _atoken_index(reserve_after: ReserveSnapshot, principal_atoken_balance: int) -> int:
    # an empty position carries no index
    if principal_atoken_balance == 0:
        return 0
    return reserve_after.liquidity_index


def project_user_after_deposit(
    config: ProjectionConfig,
    amount: int,
    reserve_before: ReserveSnapshot,
    reserve_after: ReserveSnapshot,
    user_before: UserPosition,
    tx_timestamp: int,
    observation_timestamp: int,
    tx_cost: int,
) -> UserPosition:
    _validate_inputs(Action.DEPOSIT, reserve_before, amount, tx_cost)
    logger.debug("Projecting user after deposit of %d into %s", amount, reserve_before.symbol)
    principal = expected_atoken_balance(reserve_before, user_before, tx_timestamp) + amount

    # the first deposit enables the reserve as collateral
    if user_before.current_atoken_balance == 0:
        usage_as_collateral = True
    else:
        usage_as_collateral = user_before.usage_as_collateral_enabled

    user = _apply(
        Action.DEPOSIT,
        reserve_before,
        user_before,
        principal_atoken_balance=principal,
        atoken_user_index=_atoken_index(reserve_after, principal),
        usage_as_collateral_enabled=usage_as_collateral,
        wallet_balance=_wallet_after(config, reserve_before, user_before, -amount, tx_cost),
    )
    return _observe(reserve_after, user, observation_timestamp)


def project_user_after_borrow(
    config: ProjectionConfig,
    amount: int,
    reserve_before: ReserveSnapshot,
    reserve_after: ReserveSnapshot,
    user_before: UserPosition,
    tx_timestamp: int,
    observation_timestamp: int,
    tx_cost: int,
) -> UserPosition:
    """New principal is the compounded debt plus ``amount``; a fee is charged on top.

    The user's borrow rate and index are reset to the reserve's post-action
    values.
    """
    _validate_inputs(Action.BORROW, reserve_before, amount, tx_cost)
    logger.debug("Projecting user after borrow of %d from %s", amount, reserve_before.symbol)
    compounded_balance = expected_compounded_borrow_balance(
        reserve_before, user_before, tx_timestamp
    )

    user = _apply(
        Action.BORROW,
        reserve_before,
        user_before,
        principal_borrow_balance=compounded_balance + amount,
        borrow_rate=reserve_after.variable_borrow_rate,
        variable_borrow_index=reserve_after.variable_borrow_index,
        origination_fee=user_before.origination_fee + calculate_origination_fee(config, amount),
        wallet_balance=_wallet_after(config, reserve_before, user_before, amount, tx_cost),
        last_update_timestamp=tx_timestamp,
    )
    return _observe(reserve_after, user, observation_timestamp)


def project_user_after_repay(
    config: ProjectionConfig,
    amount: int,
    reserve_before: ReserveSnapshot,
    reserve_after: ReserveSnapshot,
    user_before: UserPosition,
    tx_timestamp: int,
    observation_timestamp: int,
    tx_cost: int,
    repaid_by_owner: bool = True,
) -> UserPosition:
    """Settle the origination fee first, then principal.

    When ``repaid_by_owner`` is False a third party repays on the user's
    behalf and the user's wallet does not move.
    """
    _validate_inputs(Action.REPAY, reserve_before, amount, tx_cost)
    amount = resolve_repay_amount(amount, reserve_before, user_before, tx_timestamp)
    logger.debug("Projecting user after repay of %d to %s", amount, reserve_before.symbol)

    compounded_balance = expected_compounded_borrow_balance(
        reserve_before, user_before, tx_timestamp
    )
    if amount <= user_before.origination_fee:
        origination_fee = user_before.origination_fee - amount
        principal = compounded_balance
    else:
        origination_fee = 0
        principal = compounded_balance - (amount - user_before.origination_fee)

    if principal == 0:
        borrow_rate = 0
        variable_borrow_index = 0
    else:
        borrow_rate = reserve_after.variable_borrow_rate
        variable_borrow_index = reserve_after.variable_borrow_index

    if repaid_by_owner:
        wallet_balance = _wallet_after(config, reserve_before, user_before, -amount, tx_cost)
    else:
        wallet_balance = user_before.wallet_balance

    user = _apply(
        Action.REPAY,
        reserve_before,
        user_before,
        principal_borrow_balance=principal,
        borrow_rate=borrow_rate,
        variable_borrow_index=variable_borrow_index,
        origination_fee=origination_fee,
        wallet_balance=wallet_balance,
        last_update_timestamp=tx_timestamp,
    )
    return _observe(reserve_after, user, observation_timestamp)


def project_user_after_redeem(
    config: ProjectionConfig,
    amount: int,
    reserve_before: ReserveSnapshot,
    reserve_after: ReserveSnapshot,
    user_before: UserPosition,
    tx_timestamp: int,
    observation_timestamp: int,
    tx_cost: int,
) -> UserPosition:
    _validate_inputs(Action.REDEEM, reserve_before, amount, tx_cost)
    amount = resolve_redeem_amount(amount, reserve_before, user_before, tx_timestamp)
    logger.debug("Projecting user after redeem of %d from %s", amount, reserve_before.symbol)
    principal = expected_atoken_balance(reserve_before, user_before, tx_timestamp) - amount

    # redeeming everything switches collateral usage off
    if principal == 0:
        usage_as_collateral = False
    else:
        usage_as_collateral = user_before.usage_as_collateral_enabled

    user = _apply(
        Action.REDEEM,
        reserve_before,
        user_before,
        principal_atoken_balance=principal,
        atoken_user_index=_atoken_index(reserve_after, principal),
        usage_as_collateral_enabled=usage_as_collateral,
        wallet_balance=_wallet_after(config, reserve_before, user_before, amount, tx_cost),
    )
    return _observe(reserve_after, user, observation_timestamp)


def project_user_after_set_collateral(
    config: ProjectionConfig,
    use_as_collateral: bool,
    reserve_before: ReserveSnapshot,
    reserve_after: ReserveSnapshot,
    user_before: UserPosition,
    tx_timestamp: int,
    observation_timestamp: int,
    tx_cost: int,
) -> UserPosition:
    validate_amount(Action.SET_COLLATERAL, reserve_before.symbol, "tx_cost", tx_cost)
    logger.debug(
        "Projecting user after collateral toggle (%s) on %s",
        use_as_collateral,
        reserve_before.symbol,
    )
    user = _apply(
        Action.SET_COLLATERAL,
        reserve_before,
        user_before,
        usage_as_collateral_enabled=use_as_collateral,
        wallet_balance=_wallet_after(config, reserve_before, user_before, 0, tx_cost),
    )
    return _observe(reserve_after, user, observation_timestamp)


_AMOUNT_ACTIONS = {
    Action.DEPOSIT: project_user_after_deposit,
    Action.BORROW: project_user_after_borrow,
    Action.REPAY: project_user_after_repay,
    Action.REDEEM: project_user_after_redeem,
}


def project_user(
    config: ProjectionConfig,
    action: Action | str,
    amount: int,
    reserve_before: ReserveSnapshot,
    reserve_after: ReserveSnapshot,
    user_before: UserPosition,
    tx_timestamp: int,
    observation_timestamp: int,
    tx_cost: int,
) -> UserPosition:
    """Dispatch to the projection for ``action``.

    ``action`` may be an ``Action`` or its string value; anything else
    raises ValueError.  For ``Action.SET_COLLATERAL`` a non-zero ``amount``
    means "enable".
    """
    action = Action(action)
    if action is Action.SET_COLLATERAL:
        return project_user_after_set_collateral(
            config,
            bool(amount),
            reserve_before,
            reserve_after,
            user_before,
            tx_timestamp,
            observation_timestamp,
            tx_cost,
        )
    return _AMOUNT_ACTIONS[action](
        config,
        amount,
        reserve_before,
        reserve_after,
        user_before,
        tx_timestamp,
        observation_timestamp,
        tx_cost,
    )
