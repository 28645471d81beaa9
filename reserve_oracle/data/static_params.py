"""Hardcoded interest rate strategies for the pool's reserves."""

from reserve_oracle.data.constants import DAI, ETH, LINK, USDC
from reserve_oracle.data.interfaces import InterestRateStrategy
from reserve_oracle.protocol.ray_math import percent_to_ray

# --- Strategies deployed with the pool ---

STRATEGY_VOLATILE_ONE = InterestRateStrategy(
    optimal_usage=percent_to_ray(0.45),
    base_variable_borrow_rate=0,
    variable_rate_slope1=percent_to_ray(0.04),
    variable_rate_slope2=percent_to_ray(3.00),
)

DEFAULT_STRATEGIES: dict[str, InterestRateStrategy] = {
    ETH: STRATEGY_VOLATILE_ONE,
    USDC: STRATEGY_VOLATILE_ONE,
    DAI: STRATEGY_VOLATILE_ONE,
    LINK: STRATEGY_VOLATILE_ONE,
}
