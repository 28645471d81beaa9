"""Value types and configuration for the projection engine."""

from reserve_oracle.data.config_factory import create_config

__all__ = ["create_config"]
