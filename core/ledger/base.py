"""
Ledger Interface

The anchoring core consumes exactly two ledger operations: submit a root,
and look up the record for a root. Everything else about the ledger
(signing, consensus, storage, retries, finality) belongs to the backend.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from core.schemas.anchor import AnchorRecord, BlockRef


@runtime_checkable
class Ledger(Protocol):
    """
    Protocol for an append-only ledger that anchors 32-byte roots.

    Ledgers are eventually consistent: a submitted root may not be
    visible to lookup_root() immediately.
    """

    def submit_root(self, root: bytes) -> BlockRef:
        """
        Commit a root to the ledger as a single write.

        Args:
            root: 32-byte root hash

        Returns:
            BlockRef of the block the root was committed in

        Raises:
            LedgerSubmitException: If the ledger rejected the write or
                failed to finalize it
        """
        ...

    def lookup_root(self, root: bytes) -> Optional[AnchorRecord]:
        """
        Find the anchoring record of a root.

        Returns:
            AnchorRecord, or None if the root was never anchored (or is not
            visible yet)

        Raises:
            LedgerQueryException: If the ledger could not be queried
        """
        ...


__all__ = ["Ledger"]
