"""
Ledger Collaborators

The Ledger protocol plus three backends:
- InMemoryLedger: process-local, for tests and development
- JsonFileLedger: append-only JSON-lines file
- HttpLedger: REST anchor service in front of a real chain
"""

from __future__ import annotations

from typing import Optional

from core.config.runtime import LedgerConfig

from .base import Ledger
from .file import JsonFileLedger
from .http import HttpLedger
from .memory import InMemoryLedger


def create_ledger(config: Optional[LedgerConfig] = None) -> Ledger:
    """
    Build the ledger backend selected by configuration.

    Raises:
        ValueError: If the http backend is selected without an endpoint
    """
    config = config or LedgerConfig()

    if config.backend == "http":
        if not config.endpoint:
            raise ValueError("ledger.endpoint is required for the http backend")
        return HttpLedger(
            config.endpoint,
            api_key=config.api_key,
            timeout=config.timeout,
        )
    if config.backend == "file":
        return JsonFileLedger(config.path)
    return InMemoryLedger()


__all__ = [
    "Ledger",
    "InMemoryLedger",
    "JsonFileLedger",
    "HttpLedger",
    "create_ledger",
]
