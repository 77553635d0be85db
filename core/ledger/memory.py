"""
In-Memory Ledger

Dict-backed append-only ledger for tests, local development and the
default API configuration. Each submitted root gets its own block.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Optional

from core.crypto.hashing import HASH_SIZE, blake2s256, to_hex
from core.schemas.anchor import AnchorRecord, BlockRef
from core.schemas.errors import LedgerSubmitException


logger = logging.getLogger(__name__)


class InMemoryLedger:
    """
    Append-only ledger held in process memory.

    Re-submitting a root that is already anchored returns the original
    block; records are never overwritten.

    With auto_finalize=False, submissions stay pending (invisible to
    lookup_root) until finalize() is called, which models a ledger whose
    writes become visible only after finality.

    Example:
        >>> ledger = InMemoryLedger()
        >>> block = ledger.submit_root(root)
        >>> ledger.lookup_root(root).block_number == block.block_number
        True
    """

    def __init__(self, *, auto_finalize: bool = True, start_block: int = 1) -> None:
        self.auto_finalize = auto_finalize
        self._records: dict[bytes, AnchorRecord] = {}
        self._pending: dict[bytes, AnchorRecord] = {}
        self._next_block = start_block
        self._lock = threading.Lock()

    def _make_record(self, root: bytes) -> AnchorRecord:
        block_number = self._next_block
        self._next_block += 1
        block_hash = blake2s256(block_number.to_bytes(8, "big") + root)
        return AnchorRecord(
            root=to_hex(root),
            block_number=block_number,
            block_hash=to_hex(block_hash),
            anchored_at=datetime.now(timezone.utc),
        )

    def _persist(self, record: AnchorRecord) -> None:
        """Hook for subclasses that store finalized records elsewhere."""

    def submit_root(self, root: bytes) -> BlockRef:
        root = bytes(root)
        if len(root) != HASH_SIZE:
            raise LedgerSubmitException(
                f"Root must be {HASH_SIZE} bytes, got {len(root)}",
                retryable=False,
            )

        with self._lock:
            existing = self._records.get(root) or self._pending.get(root)
            if existing is not None:
                logger.debug(f"Root {to_hex(root)} already submitted in block {existing.block_number}")
                return existing.block

            record = self._make_record(root)
            if self.auto_finalize:
                self._persist(record)
                self._records[root] = record
            else:
                self._pending[root] = record

        logger.info(f"Anchored root {record.root} in block {record.block_number}")
        return record.block

    def lookup_root(self, root: bytes) -> Optional[AnchorRecord]:
        with self._lock:
            return self._records.get(bytes(root))

    def finalize(self) -> int:
        """
        Make all pending submissions visible.

        Records leave the pending set one at a time, as soon as they are
        persisted; if persisting fails, the records already finalized stay
        finalized and a retry only handles the rest.

        Returns:
            Number of records finalized
        """
        finalized = 0
        with self._lock:
            for key, record in list(self._pending.items()):
                self._persist(record)
                self._records[key] = record
                del self._pending[key]
                finalized += 1
        return finalized

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["InMemoryLedger"]
