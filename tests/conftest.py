"""Shared snapshots for projection tests."""

from dataclasses import replace
from functools import partial

import pytest

from reserve_oracle.data.constants import DAI, ETH, MAINNET_ADDRESSES, NATIVE_ASSET_ADDRESS, RAY, WAD
from reserve_oracle.data.interfaces import ProjectionConfig, ReserveSnapshot, UserPosition
from reserve_oracle.data.static_params import DEFAULT_STRATEGIES
from reserve_oracle.protocol.interest_rate import (
    calculate_interest_rates,
    calculate_utilization_rate,
)

T0 = 1_700_000_000
ONE_DAY = 24 * 3600


@pytest.fixture
def config() -> ProjectionConfig:
    return ProjectionConfig(strategies=DEFAULT_STRATEGIES, native_asset=NATIVE_ASSET_ADDRESS)


def make_reserve(
    config: ProjectionConfig,
    total_liquidity: int = 1_000 * WAD,
    available_liquidity: int = 600 * WAD,
    total_borrows_variable: int = 400 * WAD,
    symbol: str = ETH,
) -> ReserveSnapshot:
    """Reserve whose rates are consistent with its utilization."""
    utilization = calculate_utilization_rate(total_borrows_variable, total_liquidity)
    rates = calculate_interest_rates(config, symbol, utilization)
    return ReserveSnapshot(
        address=MAINNET_ADDRESSES[symbol],
        symbol=symbol,
        decimals=18,
        total_liquidity=total_liquidity,
        available_liquidity=available_liquidity,
        total_borrows_variable=total_borrows_variable,
        utilization_rate=utilization,
        variable_borrow_rate=rates.variable_borrow_rate,
        liquidity_rate=rates.liquidity_rate,
        liquidity_index=RAY,
        variable_borrow_index=RAY,
        last_update_timestamp=T0,
    )


@pytest.fixture
def reserve_factory(config: ProjectionConfig):
    return partial(make_reserve, config)


@pytest.fixture
def reserve(config: ProjectionConfig) -> ReserveSnapshot:
    # 40% utilized ETH reserve
    return make_reserve(config)


@pytest.fixture
def dai_reserve(config: ProjectionConfig) -> ReserveSnapshot:
    return make_reserve(config, symbol=DAI)


@pytest.fixture
def user(reserve: ReserveSnapshot) -> UserPosition:
    """Depositor of 100 and borrower of 50, both indexed at the reserve's last update."""
    return UserPosition(
        principal_atoken_balance=100 * WAD,
        current_atoken_balance=100 * WAD,
        atoken_user_index=RAY,
        principal_borrow_balance=50 * WAD,
        current_borrow_balance=50 * WAD,
        borrow_rate=reserve.variable_borrow_rate,
        liquidity_rate=reserve.liquidity_rate,
        variable_borrow_index=RAY,
        origination_fee=50 * WAD * 25 // 10_000,
        usage_as_collateral_enabled=True,
        wallet_balance=1_000 * WAD,
        last_update_timestamp=T0,
    )


@pytest.fixture
def new_user(user: UserPosition) -> UserPosition:
    """User with no position at all."""
    return replace(
        user,
        principal_atoken_balance=0,
        current_atoken_balance=0,
        atoken_user_index=0,
        principal_borrow_balance=0,
        current_borrow_balance=0,
        borrow_rate=0,
        liquidity_rate=0,
        variable_borrow_index=0,
        origination_fee=0,
        usage_as_collateral_enabled=False,
    )
