"""
Runtime Configuration Module

Provides configuration loading and management for the anchoring core.
"""

from .runtime import (
    HashingConfig,
    LedgerConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "HashingConfig",
    "LedgerConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
