"""
Merkle Routes

Offline tree operations that never touch the ledger.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import get_runtime_config
from api.hexcodec import decode_hex, decode_leaves, decode_proof
from api.models.requests import RootRequest, VerifyRequest
from api.models.responses import RootResponse, VerifyResponse
from core.config.runtime import RuntimeConfig
from core.crypto.hashing import get_hasher, pack_leaves, to_hex
from core.merkle import compute_root, proof_length, recompute_root


router = APIRouter(prefix="/merkle", tags=["merkle"])


@router.post("/root", response_model=RootResponse)
def merkle_root(
    request: RootRequest,
    config: RuntimeConfig = Depends(get_runtime_config),
) -> RootResponse:
    """Compute the Merkle root of a batch without anchoring it."""
    packed = pack_leaves(decode_leaves(request.leaves))
    root = compute_root(packed, get_hasher(config.hashing.algorithm))
    return RootResponse(
        root=to_hex(root),
        leaf_count=packed.leaf_count,
        proof_length=proof_length(packed.leaf_count),
    )


@router.post("/verify", response_model=VerifyResponse)
def merkle_verify(
    request: VerifyRequest,
    config: RuntimeConfig = Depends(get_runtime_config),
) -> VerifyResponse:
    """Recompute a root from leaf and proof and compare it with an expected root."""
    leaf = decode_hex(request.leaf, "leaf")
    expected = decode_hex(request.root, "root")
    computed = recompute_root(
        leaf,
        decode_proof(request.proof),
        get_hasher(config.hashing.algorithm),
    )
    return VerifyResponse(
        valid=computed == expected,
        computed_root=to_hex(computed),
        expected_root=to_hex(expected),
    )
