"""Factory for building the projection configuration context."""

from __future__ import annotations

import logging
import os
from typing import Mapping

from reserve_oracle.data.constants import NATIVE_ASSET_ADDRESS, ORIGINATION_FEE_BPS
from reserve_oracle.data.interfaces import InterestRateStrategy, ProjectionConfig
from reserve_oracle.data.static_params import DEFAULT_STRATEGIES

logger = logging.getLogger(__name__)

NATIVE_ASSET_ENV = "RESERVE_ORACLE_NATIVE_ASSET"
ORIGINATION_FEE_ENV = "RESERVE_ORACLE_ORIGINATION_FEE_BPS"


def _fee_from_env() -> int:
    raw = os.environ.get(ORIGINATION_FEE_ENV)
    if not raw:
        return ORIGINATION_FEE_BPS
    try:
        fee = int(raw)
    except ValueError:
        logger.warning(
            "Ignoring %s=%r: not an integer; using %d bps",
            ORIGINATION_FEE_ENV,
            raw,
            ORIGINATION_FEE_BPS,
        )
        return ORIGINATION_FEE_BPS
    if fee < 0:
        logger.warning(
            "Ignoring negative %s=%d; using %d bps", ORIGINATION_FEE_ENV, fee, ORIGINATION_FEE_BPS
        )
        return ORIGINATION_FEE_BPS
    return fee


def create_config(
    strategies: Mapping[str, InterestRateStrategy] | None = None,
    native_asset: str | None = None,
    origination_fee_bps: int | None = None,
) -> ProjectionConfig:
    """Create a configuration context for one scenario run.

    Parameters
    ----------
    strategies : Mapping[str, InterestRateStrategy] | None
        Rate strategy per reserve symbol.  Defaults to the strategies the
        pool is deployed with.
    native_asset : str | None
        Native asset address.  Falls back to the
        ``RESERVE_ORACLE_NATIVE_ASSET`` environment variable, then to the
        internal ETH placeholder address.
    origination_fee_bps : int | None
        Borrow origination fee.  Falls back to the
        ``RESERVE_ORACLE_ORIGINATION_FEE_BPS`` environment variable, then
        to 25 bps.

    Returns
    -------
    ProjectionConfig
        A fresh, immutable context; each scenario should build its own.
    """
    resolved_native = native_asset or os.environ.get(NATIVE_ASSET_ENV) or NATIVE_ASSET_ADDRESS
    resolved_fee = origination_fee_bps if origination_fee_bps is not None else _fee_from_env()

    return ProjectionConfig(
        strategies=DEFAULT_STRATEGIES if strategies is None else strategies,
        native_asset=resolved_native,
        origination_fee_bps=resolved_fee,
    )
