"""
Merkle Tree Construction
Deterministic Merkle root computation and inclusion proof generation
over packed 32-byte leaves.

Canonical Commitment Rules (Hard Contracts):
1. Leaves are used as-is: no extra hashing at the leaf level
2. Parent hashing: parent = H(left + right)
3. Odd node rule (ODD_NODE_POLICY): the last node of an odd-sized level
   is paired with a copy of itself
4. Single leaf: root = leaf, proof = []
5. Empty batches are rejected before a tree is built

Any two implementations must agree on all five rules to produce the same
root bytes and therefore to verify against the same ledger anchor.

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves - it trusts input order
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from core.crypto.hashing import (
    Hasher,
    PackedLeaves,
    blake2s256,
)
from core.schemas.errors import IndexOutOfRangeException


# The last node of an odd-sized level is paired with itself, so the proof
# step at that level has sibling == node and H(node + node) is the same
# either way round: its is_left flag does not affect the recomputed root.
ODD_NODE_POLICY = "duplicate-last"

DEFAULT_HASHER: Hasher = blake2s256


@dataclass(frozen=True)
class ProofStep:
    """
    One level of an inclusion proof.

    Attributes:
        sibling: Hash of the sibling node at this level
        is_left: True when the node carried up from the leaf is the left
                 operand, i.e. parent = H(node + sibling)
    """
    sibling: bytes
    is_left: bool


# Ordered bottom-up; empty for a single-leaf batch
Proof = list[ProofStep]

LeafInput = Union[PackedLeaves, bytes, bytearray]


def _as_packed(packed: LeafInput) -> PackedLeaves:
    if isinstance(packed, PackedLeaves):
        return packed
    return PackedLeaves.from_bytes(bytes(packed))


def merkle_parent(left: bytes, right: bytes, hasher: Hasher = DEFAULT_HASHER) -> bytes:
    """
    Compute the parent hash of two child nodes: H(left + right).
    """
    return hasher(left + right)


def _next_level(level: list[bytes], hasher: Hasher) -> list[bytes]:
    if len(level) % 2 == 1:
        level = level + [level[-1]]
    return [
        merkle_parent(level[i], level[i + 1], hasher)
        for i in range(0, len(level), 2)
    ]


def build_levels(packed: LeafInput, hasher: Hasher = DEFAULT_HASHER) -> list[list[bytes]]:
    """
    Build every level of the tree, leaves first and root last.

    Levels are stored unpadded; the duplicate used for an odd-sized level
    is implied by the odd node rule.

    Example:
        >>> levels = build_levels(pack_leaves([a, b, c]))
        >>> [len(level) for level in levels]
        [3, 2, 1]
    """
    packed = _as_packed(packed)
    levels = [packed.leaves()]
    while len(levels[-1]) > 1:
        levels.append(_next_level(levels[-1], hasher))
    return levels


def compute_root(packed: LeafInput, hasher: Hasher = DEFAULT_HASHER) -> bytes:
    """
    Compute the Merkle root of packed leaves.

    Algorithm:
    1. If single leaf: return the leaf itself
    2. Otherwise, iteratively build levels:
       - If odd number of nodes, duplicate the last node
       - Pair adjacent nodes and compute parent hashes
       - Repeat until single root remains

    Example: [a, b, c] -> [a, b, c, c] -> [H(a+b), H(c+c)] -> root

    Args:
        packed: PackedLeaves (or a raw packed buffer)
        hasher: 256-bit hash function used for parent nodes

    Returns:
        32-byte Merkle root

    Raises:
        EmptyBatchException: If the buffer holds no leaves
        InvalidLeafSizeException: If the buffer is not a multiple of 32 bytes
    """
    level = _as_packed(packed).leaves()
    while len(level) > 1:
        level = _next_level(level, hasher)
    return level[0]


def _proof_from_levels(levels: list[list[bytes]], index: int) -> Proof:
    proof: Proof = []
    current_index = index
    for level in levels[:-1]:
        sibling_index = current_index ^ 1
        if sibling_index >= len(level):
            # Odd node rule: the last node is its own sibling
            sibling_index = current_index
        proof.append(
            ProofStep(sibling=level[sibling_index], is_left=current_index % 2 == 0)
        )
        current_index //= 2
    return proof


def create_proof(index: int, packed: LeafInput, hasher: Hasher = DEFAULT_HASHER) -> Proof:
    """
    Generate an inclusion proof for the leaf at the given index.

    Walks from the leaf level to the root, recording at each level the
    sibling hash and whether the carried node is the left operand.

    Args:
        index: 0-based index of the leaf in submission order
        packed: PackedLeaves the tree is built over
        hasher: 256-bit hash function used for parent nodes

    Returns:
        Proof of length proof_length(leaf_count), bottom-up

    Raises:
        IndexOutOfRangeException: If index is outside the batch
    """
    packed = _as_packed(packed)
    if index < 0 or index >= packed.leaf_count:
        raise IndexOutOfRangeException(index, packed.leaf_count)

    return _proof_from_levels(build_levels(packed, hasher), index)


def create_proofs(packed: LeafInput, hasher: Hasher = DEFAULT_HASHER) -> list[Proof]:
    """
    Generate proofs for every leaf, in leaf order.

    Equivalent to [create_proof(i, packed) for i in range(n)] but builds
    the tree only once.
    """
    levels = build_levels(packed, hasher)
    return [_proof_from_levels(levels, i) for i in range(len(levels[0]))]


def proof_length(leaf_count: int) -> int:
    """
    Number of steps in every proof of a tree with leaf_count leaves.

    ceil(log2(leaf_count)) for leaf_count > 1, and 0 for a single leaf.
    """
    if leaf_count < 1:
        raise ValueError(f"leaf_count must be positive, got {leaf_count}")
    return (leaf_count - 1).bit_length()


__all__ = [
    "ODD_NODE_POLICY",
    "DEFAULT_HASHER",
    "Proof",
    "ProofStep",
    "merkle_parent",
    "build_levels",
    "compute_root",
    "create_proof",
    "create_proofs",
    "proof_length",
]
