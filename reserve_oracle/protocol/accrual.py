"""Interest accrual: linear (supply side) and compounded (borrow side).

Every helper here is a pure function of a snapshot and a timestamp.  The
supply side grows linearly between updates; the borrow side compounds per
second.  A reserve with zero utilization, or a user with zero principal,
accrues nothing and gets its input back untouched.
"""

from __future__ import annotations

from reserve_oracle.data.constants import RAY, SECONDS_PER_YEAR
from reserve_oracle.data.interfaces import ReserveSnapshot, UserPosition
from reserve_oracle.errors import TemporalInvariantViolation
from reserve_oracle.protocol.ray_math import (
    ray_div,
    ray_mul,
    ray_pow,
    ray_to_wad,
    wad_to_ray,
)


def elapsed_seconds(current_timestamp: int, last_update_timestamp: int) -> int:
    elapsed = current_timestamp - last_update_timestamp
    if elapsed < 0:
        raise TemporalInvariantViolation(current_timestamp, last_update_timestamp)
    return elapsed


def calculate_linear_interest(rate: int, current_timestamp: int, last_update_timestamp: int) -> int:
    """Linear growth factor: 1 + rate * dt / year (ray)."""
    time_difference = wad_to_ray(elapsed_seconds(current_timestamp, last_update_timestamp))
    time_delta = ray_div(time_difference, wad_to_ray(SECONDS_PER_YEAR))
    return ray_mul(rate, time_delta) + RAY


def calculate_compounded_interest(
    rate: int, current_timestamp: int, last_update_timestamp: int
) -> int:
    """Compounded growth factor: (1 + rate / year) ** dt (ray)."""
    time_difference = elapsed_seconds(current_timestamp, last_update_timestamp)
    rate_per_second = rate // SECONDS_PER_YEAR
    return ray_pow(rate_per_second + RAY, time_difference)


def expected_liquidity_index(reserve: ReserveSnapshot, timestamp: int) -> int:
    if reserve.utilization_rate == 0:
        # nothing accrues without borrowers; the timestamps must still be ordered
        elapsed_seconds(timestamp, reserve.last_update_timestamp)
        return reserve.liquidity_index

    cumulated_interest = calculate_linear_interest(
        reserve.liquidity_rate, timestamp, reserve.last_update_timestamp
    )
    return ray_mul(cumulated_interest, reserve.liquidity_index)


def expected_variable_borrow_index(reserve: ReserveSnapshot, timestamp: int) -> int:
    if reserve.utilization_rate == 0:
        elapsed_seconds(timestamp, reserve.last_update_timestamp)
        return reserve.variable_borrow_index

    cumulated_interest = calculate_compounded_interest(
        reserve.variable_borrow_rate, timestamp, reserve.last_update_timestamp
    )
    return ray_mul(cumulated_interest, reserve.variable_borrow_index)


def normalized_income(reserve: ReserveSnapshot, timestamp: int) -> int:
    """Reserve-wide factor converting principal aToken balances to current ones.

    Equal to the liquidity index the reserve would report if it were
    updated at ``timestamp``.
    """
    return expected_liquidity_index(reserve, timestamp)


def expected_atoken_balance(
    reserve: ReserveSnapshot, user: UserPosition, timestamp: int
) -> int:
    """Interest-bearing balance of ``user`` at ``timestamp``.

    A zero user index marks a position that has never been indexed (first
    deposit), whose principal is already current.
    """
    income = normalized_income(reserve, timestamp)
    if user.atoken_user_index == 0:
        return user.principal_atoken_balance

    return ray_to_wad(
        ray_div(
            ray_mul(wad_to_ray(user.principal_atoken_balance), income),
            user.atoken_user_index,
        )
    )


def expected_compounded_borrow_balance(
    reserve: ReserveSnapshot, user: UserPosition, timestamp: int
) -> int:
    """Borrow balance of ``user`` at ``timestamp``, principal plus interest.

    The growth since the user's last update is the ratio between the
    reserve's borrow index at ``timestamp`` and the index stored for the
    user.  A user with no stored index compounds its own borrow rate since
    its own last update instead.
    """
    if user.principal_borrow_balance == 0:
        return user.principal_borrow_balance

    if user.variable_borrow_index == 0:
        cumulated_interest = calculate_compounded_interest(
            user.borrow_rate, timestamp, user.last_update_timestamp
        )
    else:
        cumulated_interest = ray_div(
            expected_variable_borrow_index(reserve, timestamp),
            user.variable_borrow_index,
        )

    return ray_to_wad(ray_mul(wad_to_ray(user.principal_borrow_balance), cumulated_interest))
