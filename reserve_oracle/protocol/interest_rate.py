"""Two-slope interest rate model in ray fixed point.

Replicates DefaultReserveInterestRateStrategy: gentle slope below the
optimal utilization, steep slope above it.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from reserve_oracle.data.constants import RAY
from reserve_oracle.data.interfaces import InterestRateStrategy, ProjectionConfig
from reserve_oracle.protocol.ray_math import percent_to_ray, ray_div, ray_mul, ray_to_float


@dataclass(frozen=True)
class InterestRates:
    """Rates produced by the model for one utilization (rays)."""

    liquidity_rate: int
    variable_borrow_rate: int


class InterestRateModel:
    """Ray-exact rate model (kinked curve)."""

    def __init__(self, strategy: InterestRateStrategy) -> None:
        self.strategy = strategy

    def variable_borrow_rate(self, utilization: int) -> int:
        """Compute variable borrow rate for a given utilization.

        Args:
            utilization: Utilization ratio as a ray.

        Returns:
            Annual borrow rate as a ray.
        """
        s = self.strategy
        if utilization <= s.optimal_usage:
            return s.base_variable_borrow_rate + ray_mul(
                ray_div(utilization, s.optimal_usage), s.variable_rate_slope1
            )

        excess = ray_div(utilization - s.optimal_usage, RAY - s.optimal_usage)
        return (
            s.base_variable_borrow_rate
            + s.variable_rate_slope1
            + ray_mul(s.variable_rate_slope2, excess)
        )

    def supply_rate(self, utilization: int) -> int:
        """Compute liquidity (supply) rate.

        R_supply = R_borrow * U
        """
        return ray_mul(self.variable_borrow_rate(utilization), utilization)

    def rates(self, utilization: int) -> InterestRates:
        borrow_rate = self.variable_borrow_rate(utilization)
        return InterestRates(
            liquidity_rate=ray_mul(borrow_rate, utilization),
            variable_borrow_rate=borrow_rate,
        )

    def rate_curve(self, n_points: int = 200) -> pd.DataFrame:
        """Generate the full rate curve for inspection.

        Rates are computed in ray and converted to floats afterwards, so the
        curve shows exactly what the projector would use.

        Returns:
            DataFrame with columns: utilization, borrow_rate, supply_rate
        """
        utilizations = np.linspace(0, 1, n_points)
        borrow_rates = np.empty(n_points)
        supply_rates = np.empty(n_points)
        for i, u in enumerate(utilizations):
            rates = self.rates(percent_to_ray(float(u)))
            borrow_rates[i] = ray_to_float(rates.variable_borrow_rate)
            supply_rates[i] = ray_to_float(rates.liquidity_rate)

        return pd.DataFrame(
            {
                "utilization": utilizations,
                "borrow_rate": borrow_rates,
                "supply_rate": supply_rates,
            }
        )


def calculate_utilization_rate(total_borrows_variable: int, total_liquidity: int) -> int:
    """U = borrows / liquidity as a ray; 0 when nothing is borrowed."""
    if total_borrows_variable == 0:
        return 0
    return ray_div(total_borrows_variable, total_liquidity)


def calculate_interest_rates(
    config: ProjectionConfig, symbol: str, utilization: int
) -> InterestRates:
    """Look up the reserve's strategy and evaluate the curve at ``utilization``."""
    return InterestRateModel(config.strategy_for(symbol)).rates(utilization)
