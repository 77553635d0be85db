"""
Anchor Client

Commits content hashes to a ledger, either one at a time (direct anchors)
or many at once as the root of a Merkle tree (batched anchors).

Batch submission:
1. Collect - ordered, non-empty sequence of 32-byte content hashes
2. Pack    - pack_leaves(); fails fast on empty input or bad width
3. Build   - compute_root() over the packed leaves
4. Submit  - only the root goes to the ledger, as a single write
5. Emit    - one proof per leaf, in input order

Batched check recomputes the root from a leaf and its proof and asks the
ledger for that root's record. An unknown root returns None.

A single-leaf batch anchors the leaf itself and verifies with an empty
proof, so anchoring one document hash as a batch of one and checking it
with proof [] is always consistent.

Ledger errors are never caught or retried here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from core.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    HASH_SIZE,
    get_hasher,
    hash_content,
    pack_leaves,
    to_hex,
)
from core.ledger.base import Ledger
from core.merkle.merkle_proofs import recompute_root
from core.merkle.merkle_tree import Proof, ProofStep, compute_root, create_proofs
from core.schemas.anchor import AnchorRecord, BlockRef
from core.schemas.errors import InvalidLeafSizeException


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchReceipt:
    """
    Result of one batch submission.

    Attributes:
        root: Merkle root that was anchored
        block: Ledger position of the anchoring write
        proofs: One proof per submitted leaf, in submission order
    """
    root: bytes
    block: BlockRef
    proofs: list[Proof] = field(default_factory=list)

    @property
    def root_hex(self) -> str:
        return to_hex(self.root)

    def __len__(self) -> int:
        return len(self.proofs)


class AnchorClient:
    """
    Batching and verification API over a ledger collaborator.

    Usage:
        client = AnchorClient(InMemoryLedger())

        proofs = client.anchor_batched([h1, h2, h3])
        record = client.check_batched(h2, proofs[1])
        assert record is not None
    """

    def __init__(self, ledger: Ledger, *, hash_algorithm: str = DEFAULT_HASH_ALGORITHM) -> None:
        self.ledger = ledger
        self.hash_algorithm = hash_algorithm
        self.hasher = get_hasher(hash_algorithm)

    def hash_content(self, data: bytes) -> bytes:
        """Hash raw content with this client's algorithm."""
        return hash_content(data, self.hash_algorithm)

    # ------------------------------------------------------------------
    # Direct anchors
    # ------------------------------------------------------------------

    def anchor(self, value: bytes) -> BlockRef:
        """
        Anchor a single 32-byte value directly.

        Raises:
            InvalidLeafSizeException: If value is not 32 bytes
            LedgerSubmitException: Propagated from the ledger
        """
        value = bytes(value)
        if len(value) != HASH_SIZE:
            raise InvalidLeafSizeException(
                f"Anchored value is {len(value)} bytes, expected {HASH_SIZE}",
                actual_size=len(value),
            )
        return self.ledger.submit_root(value)

    def check(self, value: bytes) -> Optional[AnchorRecord]:
        """
        Look up the block a value was anchored in.

        Returns:
            AnchorRecord, or None if the value was never anchored
        """
        record = self.ledger.lookup_root(bytes(value))
        if record is None:
            logger.debug(f"{to_hex(value)} is not anchored")
        return record

    # ------------------------------------------------------------------
    # Batched anchors
    # ------------------------------------------------------------------

    def submit_batch(self, leaf_hashes: Sequence[bytes]) -> BatchReceipt:
        """
        Anchor a batch of leaf hashes as one Merkle root.

        Validation happens before the ledger is contacted, so a malformed
        batch never costs a ledger transaction.

        Raises:
            EmptyBatchException: If leaf_hashes is empty
            InvalidLeafSizeException: If any hash is not 32 bytes
            LedgerSubmitException: Propagated from the ledger
        """
        packed = pack_leaves(leaf_hashes)
        root = compute_root(packed, self.hasher)
        proofs = create_proofs(packed, self.hasher)

        logger.info(f"Anchoring batch of {packed.leaf_count} leaves under root {to_hex(root)}")
        block = self.ledger.submit_root(root)

        return BatchReceipt(root=root, block=block, proofs=proofs)

    def anchor_batched(self, leaf_hashes: Sequence[bytes]) -> list[Proof]:
        """
        Anchor a batch and return the inclusion proof of every leaf,
        in the order the leaves were given.
        """
        return self.submit_batch(leaf_hashes).proofs

    def check_batched(
        self,
        leaf_hash: bytes,
        proof: Iterable[ProofStep],
    ) -> Optional[AnchorRecord]:
        """
        Check a single hash from a batch.

        Recomputes the root from the leaf and proof, then looks that root
        up on the ledger.

        Returns:
            AnchorRecord of the batch root, or None if it was never
            anchored (including when the proof does not belong to the leaf)
        """
        root = recompute_root(leaf_hash, proof, self.hasher)
        return self.check(root)


__all__ = [
    "AnchorClient",
    "BatchReceipt",
]
