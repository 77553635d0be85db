"""
API Dependencies

Dependency injection for the API: runtime config, the shared ledger
backend and the anchor client built on top of it.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from core.anchor import AnchorClient
from core.config.runtime import RuntimeConfig
from core.ledger import Ledger, create_ledger

logger = logging.getLogger(__name__)


CONFIG_SEARCH_PATHS = (
    "anchor.yaml",
    "anchor.yml",
    "anchor.json",
)


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from a config file, then overlay environment variables.

    Search order for config file (current directory):
      1. ./anchor.yaml
      2. ./anchor.yml
      3. ./anchor.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    config: RuntimeConfig | None = None

    for name in CONFIG_SEARCH_PATHS:
        path = Path.cwd() / name
        if path.exists():
            try:
                config = RuntimeConfig.from_file(path)
                logger.info(f"Loaded config from {path}")
                break
            except Exception as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


@lru_cache(maxsize=1)
def get_runtime_config() -> RuntimeConfig:
    """Runtime config, loaded once per process."""
    return _load_runtime_config()


@lru_cache(maxsize=1)
def get_ledger() -> Ledger:
    """Shared ledger backend; one instance so in-memory anchors persist across requests."""
    config = get_runtime_config()
    logger.info(f"Using {config.ledger.backend} ledger backend")
    return create_ledger(config.ledger)


def get_anchor_client() -> AnchorClient:
    """Anchor client bound to the shared ledger."""
    config = get_runtime_config()
    return AnchorClient(get_ledger(), hash_algorithm=config.hashing.algorithm)
