"""
Runtime Configuration

Central configuration for hashing, ledger backend selection and logging.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "ANCHOR_"

LEDGER_BACKENDS = ("memory", "file", "http")


@dataclass
class HashingConfig:
    """Configuration for content and node hashing."""
    algorithm: str = "blake2s"


@dataclass
class LedgerConfig:
    """Configuration for the ledger collaborator."""
    backend: str = "memory"  # "memory", "file" or "http"
    endpoint: Optional[str] = None
    api_key: Optional[str] = None
    timeout: float = 30.0
    path: str = "anchors.jsonl"  # used by the file backend

    def __post_init__(self):
        if self.backend not in LEDGER_BACKENDS:
            raise ValueError(
                f"Unknown ledger backend {self.backend!r}, expected one of {LEDGER_BACKENDS}"
            )


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    log_level: str = "INFO"

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - ANCHOR_HASH_ALGORITHM: blake2s or sha256
        - ANCHOR_LEDGER_BACKEND: memory, file or http
        - ANCHOR_LEDGER_ENDPOINT: base URL of the anchor service
        - ANCHOR_LEDGER_API_KEY: bearer token for the anchor service
        - ANCHOR_LEDGER_TIMEOUT: request timeout in seconds
        - ANCHOR_LEDGER_PATH: file used by the file backend
        - ANCHOR_LOG_LEVEL: log level name
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("hashing", {})["algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")

        if os.getenv(f"{ENV_PREFIX}LEDGER_BACKEND"):
            overrides.setdefault("ledger", {})["backend"] = os.getenv(f"{ENV_PREFIX}LEDGER_BACKEND")
        if os.getenv(f"{ENV_PREFIX}LEDGER_ENDPOINT"):
            overrides.setdefault("ledger", {})["endpoint"] = os.getenv(f"{ENV_PREFIX}LEDGER_ENDPOINT")
        if os.getenv(f"{ENV_PREFIX}LEDGER_API_KEY"):
            overrides.setdefault("ledger", {})["api_key"] = os.getenv(f"{ENV_PREFIX}LEDGER_API_KEY")
        if os.getenv(f"{ENV_PREFIX}LEDGER_TIMEOUT"):
            overrides.setdefault("ledger", {})["timeout"] = float(
                os.getenv(f"{ENV_PREFIX}LEDGER_TIMEOUT", "30")
            )
        if os.getenv(f"{ENV_PREFIX}LEDGER_PATH"):
            overrides.setdefault("ledger", {})["path"] = os.getenv(f"{ENV_PREFIX}LEDGER_PATH")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a .yaml/.yml or .json file."""
        path = Path(path)
        if path.suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json_file(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing", {})
        ledger_data = data.get("ledger", {})

        hashing = HashingConfig(**hashing_data) if hashing_data else HashingConfig()
        ledger = LedgerConfig(**ledger_data) if ledger_data else LedgerConfig()

        return cls(
            hashing=hashing,
            ledger=ledger,
            log_level=data.get("log_level", "INFO"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "hashing" in overrides:
            for key, value in overrides["hashing"].items():
                setattr(new_config.hashing, key, value)

        if "ledger" in overrides:
            for key, value in overrides["ledger"].items():
                setattr(new_config.ledger, key, value)
            # Re-run backend validation on the updated values
            new_config.ledger.__post_init__()

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary (secrets omitted)."""
        return {
            "hashing": {
                "algorithm": self.hashing.algorithm,
            },
            "ledger": {
                "backend": self.ledger.backend,
                "endpoint": self.ledger.endpoint,
                "timeout": self.ledger.timeout,
                "path": self.ledger.path,
            },
            "log_level": self.log_level,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
