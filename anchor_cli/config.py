"""
CLI Configuration

Locates and loads the runtime configuration for the CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

from pathlib import Path

from core.config.runtime import LedgerConfig, RuntimeConfig


DEFAULT_CONFIG_PATHS = (
    Path("anchor.yaml"),
    Path("anchor.yml"),
    Path("anchor.json"),
    Path.home() / ".config" / "merkle-anchor" / "config.yaml",
)


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. Without any config
    file the ledger backend defaults to "file".

    Args:
        config_path: Optional path to config file (.yaml, .yml or .json)

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given but does not exist
    """
    # Without a config file, anchors go to ./anchors.jsonl
    config = RuntimeConfig(ledger=LedgerConfig(backend="file"))

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                config = RuntimeConfig.from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """# merkle-anchor configuration
hashing:
  algorithm: blake2s   # blake2s or sha256; must match on write and read paths

ledger:
  backend: file        # memory, file or http
  path: anchors.jsonl  # file backend only
  endpoint: null       # http backend, e.g. http://localhost:9000
  api_key: null
  timeout: 30

log_level: INFO
"""
