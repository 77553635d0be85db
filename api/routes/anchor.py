"""
Anchor Routes

Submit a batch of leaf hashes to the ledger and check a leaf against
its proof.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_anchor_client
from api.hexcodec import decode_hex, decode_leaves, decode_proof, encode_proof
from api.models.requests import BatchAnchorRequest, CheckRequest
from api.models.responses import BatchAnchorResponse, CheckResponse
from core.anchor import AnchorClient
from core.crypto.hashing import to_hex
from core.merkle import recompute_root


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/anchor", tags=["anchor"])


@router.post("/batch", response_model=BatchAnchorResponse)
def anchor_batch(
    request: BatchAnchorRequest,
    client: AnchorClient = Depends(get_anchor_client),
) -> BatchAnchorResponse:
    """
    Anchor a batch of leaf hashes as a single Merkle root.

    Returns the root, the ledger block and one proof per leaf in request order.
    """
    leaves = decode_leaves(request.leaves)
    receipt = client.submit_batch(leaves)

    return BatchAnchorResponse(
        root=receipt.root_hex,
        leaf_count=len(receipt),
        block=receipt.block,
        proofs=[encode_proof(proof) for proof in receipt.proofs],
    )


@router.post("/check", response_model=CheckResponse)
def check_anchor(
    request: CheckRequest,
    client: AnchorClient = Depends(get_anchor_client),
) -> CheckResponse:
    """
    Check whether a leaf belongs to an anchored batch.

    A root that was never anchored is reported with anchored=false, not
    as an error.
    """
    leaf = decode_hex(request.leaf, "leaf")
    proof = decode_proof(request.proof)

    root = recompute_root(leaf, proof, client.hasher)
    logger.debug(f"Checking leaf {to_hex(leaf)} via root {to_hex(root)} ({len(proof)} steps)")
    record = client.check(root)

    return CheckResponse(
        anchored=record is not None,
        root=to_hex(root),
        record=record,
    )
