"""
Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof generation/verification
over packed 32-byte leaves.

Canonical Commitment Rules:
1. Leaves are 32-byte hashes, used as-is
2. Parent hashing: H(left + right), H = BLAKE2s-256 by default
3. Odd node rule: duplicate last node if odd number at any level
4. Single leaf: root = leaf, proof = []

Usage:
    from core.crypto import hash_content, pack_leaves
    from core.merkle import compute_root, create_proof, recompute_root

    leaves = [hash_content(doc) for doc in documents]
    packed = pack_leaves(leaves)

    root = compute_root(packed)
    proof = create_proof(2, packed)

    assert recompute_root(leaves[2], proof) == root
"""
from .merkle_tree import (
    ODD_NODE_POLICY,
    Proof,
    ProofStep,
    merkle_parent,
    build_levels,
    compute_root,
    create_proof,
    create_proofs,
    proof_length,
)

from .merkle_proofs import (
    recompute_root,
    verify_proof,
    proof_to_dict,
    proof_from_dict,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "Proof",
    "ProofStep",
    "ODD_NODE_POLICY",
    # Tree construction
    "merkle_parent",
    "build_levels",
    "compute_root",
    "create_proof",
    "create_proofs",
    "proof_length",
    # Verification
    "recompute_root",
    "verify_proof",
    "proof_to_dict",
    "proof_from_dict",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
