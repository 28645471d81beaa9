"""Snapshot, strategy and configuration value types."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from reserve_oracle.data.constants import (
    NATIVE_ASSET_ADDRESS,
    ORIGINATION_FEE_BPS,
    RAY,
)
from reserve_oracle.errors import ConfigurationError, SnapshotError


class Action(str, Enum):
    """Ledger operations the engine can project."""

    DEPOSIT = "deposit"
    BORROW = "borrow"
    REPAY = "repay"
    REDEEM = "redeem"
    SET_COLLATERAL = "set_collateral"


def _validate_fields(instance: object, str_fields: tuple[str, ...] = ()) -> None:
    """Reject ill-typed or negative fields before they reach arithmetic."""
    for f in fields(instance):
        value = getattr(instance, f.name)
        name = f"{type(instance).__name__}.{f.name}"
        if f.name in str_fields:
            if not isinstance(value, str) or not value:
                raise SnapshotError(f"{name} must be a non-empty string, got {value!r}")
        elif f.type in ("bool", bool):
            if not isinstance(value, bool):
                raise SnapshotError(f"{name} must be a bool, got {value!r}")
        else:
            # bool is an int subclass; it never stands in for an amount
            if isinstance(value, bool) or not isinstance(value, int):
                raise SnapshotError(f"{name} must be an int, got {value!r}")
            if value < 0:
                raise SnapshotError(f"{name} must be non-negative, got {value}")


@dataclass(frozen=True)
class ReserveSnapshot:
    """State of one reserve as read from, or projected for, the ledger.

    Liquidity and borrow totals are in the asset's native decimals; rates
    and indices are rays.
    """

    address: str
    symbol: str
    decimals: int
    total_liquidity: int
    available_liquidity: int
    total_borrows_variable: int
    utilization_rate: int
    variable_borrow_rate: int
    liquidity_rate: int
    liquidity_index: int
    variable_borrow_index: int
    last_update_timestamp: int

    def __post_init__(self) -> None:
        _validate_fields(self, str_fields=("address", "symbol"))
        if self.available_liquidity > self.total_liquidity:
            raise SnapshotError(
                f"{self.symbol}: available liquidity {self.available_liquidity} "
                f"exceeds total liquidity {self.total_liquidity}"
            )


@dataclass(frozen=True)
class UserPosition:
    """One user's position in one reserve.

    aToken and borrow balances are in the asset's native decimals; the
    user indices and rates are rays.
    """

    principal_atoken_balance: int
    current_atoken_balance: int
    atoken_user_index: int
    principal_borrow_balance: int
    current_borrow_balance: int
    borrow_rate: int
    liquidity_rate: int
    variable_borrow_index: int
    origination_fee: int
    usage_as_collateral_enabled: bool
    wallet_balance: int
    last_update_timestamp: int

    def __post_init__(self) -> None:
        _validate_fields(self)


@dataclass(frozen=True)
class InterestRateStrategy:
    """Ray-scaled parameters of a reserve's two-slope rate curve."""

    optimal_usage: int
    base_variable_borrow_rate: int
    variable_rate_slope1: int
    variable_rate_slope2: int

    def __post_init__(self) -> None:
        _validate_fields(self)
        if not 0 < self.optimal_usage < RAY:
            raise SnapshotError(
                f"optimal_usage must lie strictly between 0 and RAY, got {self.optimal_usage}"
            )


@dataclass(frozen=True)
class ProjectionConfig:
    """Explicit configuration context threaded through every projection.

    Attributes:
        strategies: Interest rate strategy per reserve symbol (read-only).
        native_asset: Address of the chain's native asset; wallet deltas on
            this reserve also pay the transaction cost.
        origination_fee_bps: Fee charged on each borrow, in basis points.
    """

    strategies: Mapping[str, InterestRateStrategy] = field(default_factory=dict)
    native_asset: str = NATIVE_ASSET_ADDRESS
    origination_fee_bps: int = ORIGINATION_FEE_BPS

    def __post_init__(self) -> None:
        object.__setattr__(self, "strategies", MappingProxyType(dict(self.strategies)))

    def strategy_for(self, symbol: str) -> InterestRateStrategy:
        strategy = self.strategies.get(symbol)
        if strategy is None:
            raise ConfigurationError(symbol)
        return strategy

    def is_native_asset(self, address: str) -> bool:
        return address.lower() == self.native_asset.lower()
