"""
JSON-Lines File Ledger

Append-only ledger persisted as one JSON record per line, so anchors
survive between CLI invocations without running an anchor service.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.crypto.hashing import from_hex
from core.ledger.memory import InMemoryLedger
from core.schemas.anchor import AnchorRecord
from core.schemas.errors import LedgerQueryException, LedgerSubmitException


logger = logging.getLogger(__name__)


class JsonFileLedger(InMemoryLedger):
    """
    InMemoryLedger whose finalized records are appended to a file.

    Existing records are loaded when the ledger is opened; the file is
    only ever appended to.
    """

    def __init__(self, path: str | Path, *, auto_finalize: bool = True) -> None:
        super().__init__(auto_finalize=auto_finalize)
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                for line_no, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    record = AnchorRecord.model_validate_json(line)
                    self._records[from_hex(record.root)] = record
                    self._next_block = max(self._next_block, record.block_number + 1)
        except (OSError, ValueError) as e:
            raise LedgerQueryException(
                f"Failed to read ledger file {self.path}: {e}",
                details={"path": str(self.path)},
            ) from e

        logger.debug(f"Loaded {len(self._records)} anchors from {self.path}")

    def _persist(self, record: AnchorRecord) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(record.model_dump_json() + "\n")
        except OSError as e:
            raise LedgerSubmitException(
                f"Failed to write ledger file {self.path}: {e}",
                root=record.root,
                details={"path": str(self.path)},
            ) from e


__all__ = ["JsonFileLedger"]
