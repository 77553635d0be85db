"""
Merkle Proof Verification
Recompute a root from a leaf and its proof, independent of how the
tree was built.

Verification never raises on proof contents: a wrong proof simply
recomputes a root that will not match the anchored one. Callers compare
roots (verify_proof) or look the recomputed root up on a ledger.

This module also provides:
- proof_to_dict / proof_from_dict: JSON-friendly hex form of a proof
- MerkleProver / MerkleVerifier: class-based wrappers bound to one hasher
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from core.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    Hasher,
    PackedLeaves,
    from_hex,
    get_hasher,
    pack_leaves,
    to_hex,
)
from core.merkle.merkle_tree import (
    DEFAULT_HASHER,
    Proof,
    ProofStep,
    compute_root,
    create_proof,
    create_proofs,
    merkle_parent,
)


def recompute_root(
    leaf: bytes,
    proof: Iterable[ProofStep],
    hasher: Hasher = DEFAULT_HASHER,
) -> bytes:
    """
    Replay a proof starting from a leaf and return the candidate root.

    Algorithm:
    1. Start with the leaf hash
    2. For each step (bottom-up):
       - is_left: node = H(node + sibling)
       - otherwise: node = H(sibling + node)
    3. The final node is the candidate root

    An empty proof returns the leaf itself (single-leaf batch).

    Args:
        leaf: The leaf hash being proven
        proof: Proof steps, bottom-up
        hasher: Must be the hash function used when the tree was built

    Returns:
        Candidate root bytes
    """
    node = bytes(leaf)
    for step in proof:
        if isinstance(step, ProofStep):
            sibling, is_left = step.sibling, step.is_left
        else:
            sibling, is_left = step
        if is_left:
            node = merkle_parent(node, bytes(sibling), hasher)
        else:
            node = merkle_parent(bytes(sibling), node, hasher)
    return node


def verify_proof(
    leaf: bytes,
    proof: Iterable[ProofStep],
    root: bytes,
    hasher: Hasher = DEFAULT_HASHER,
) -> bool:
    """
    Check that a leaf and proof recompute the given root.

    Returns:
        True if the proof is valid, False otherwise
    """
    return recompute_root(leaf, proof, hasher) == bytes(root)


def proof_to_dict(proof: Sequence[ProofStep]) -> list[dict[str, Any]]:
    """
    Serialize a proof to a list of {"sibling": "0x..", "is_left": bool}.
    """
    return [
        {"sibling": to_hex(step.sibling), "is_left": step.is_left}
        for step in proof
    ]


def proof_from_dict(data: Sequence[dict[str, Any]]) -> Proof:
    """
    Parse the output of proof_to_dict back into ProofStep objects.

    Raises:
        ValueError: If an entry is missing a key or holds invalid hex
    """
    proof: Proof = []
    for i, entry in enumerate(data):
        try:
            sibling = entry["sibling"]
            is_left = entry["is_left"]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed proof step {i}: {entry!r}") from e
        proof.append(ProofStep(sibling=from_hex(sibling), is_left=bool(is_left)))
    return proof


class MerkleProver:
    """
    Convenience class for building roots and proofs with one hash function.

    Example:
        >>> prover = MerkleProver()
        >>> proofs = prover.prove_all(leaves)
        >>> len(proofs) == len(leaves)
        True
    """

    def __init__(self, algorithm: str = DEFAULT_HASH_ALGORITHM) -> None:
        self.algorithm = algorithm
        self.hasher = get_hasher(algorithm)

    def pack(self, leaves: Sequence[bytes]) -> PackedLeaves:
        return pack_leaves(leaves)

    def compute_root(self, leaves: Sequence[bytes]) -> bytes:
        """Compute the Merkle root for a sequence of leaf hashes."""
        return compute_root(pack_leaves(leaves), self.hasher)

    def prove(self, leaves: Sequence[bytes], index: int) -> Proof:
        """Generate a proof for the leaf at the given index."""
        return create_proof(index, pack_leaves(leaves), self.hasher)

    def prove_all(self, leaves: Sequence[bytes]) -> list[Proof]:
        """Generate proofs for every leaf, in input order."""
        return create_proofs(pack_leaves(leaves), self.hasher)


class MerkleVerifier:
    """
    Convenience class for verifying proofs with one hash function.
    """

    def __init__(self, algorithm: str = DEFAULT_HASH_ALGORITHM) -> None:
        self.algorithm = algorithm
        self.hasher = get_hasher(algorithm)

    def recompute_root(self, leaf: bytes, proof: Iterable[ProofStep]) -> bytes:
        return recompute_root(leaf, proof, self.hasher)

    def verify(self, leaf: bytes, proof: Iterable[ProofStep], root: bytes) -> bool:
        return verify_proof(leaf, proof, root, self.hasher)


__all__ = [
    "recompute_root",
    "verify_proof",
    "proof_to_dict",
    "proof_from_dict",
    "MerkleProver",
    "MerkleVerifier",
]
