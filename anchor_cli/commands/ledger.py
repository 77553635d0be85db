"""
CLI Ledger Commands

Commands that talk to the configured ledger backend.

Usage:
    merkle-anchor anchor LEAF... [--from-file PATH] [--out PATH]
    merkle-anchor check LEAF [--proof PATH]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from anchor_cli.commands.merkle import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    emit,
    read_leaves,
    read_proof,
)
from core.anchor import AnchorClient, BatchReceipt
from core.crypto.hashing import from_hex, to_hex
from core.ledger import create_ledger
from core.merkle import proof_to_dict
from core.schemas.errors import AnchorException


logger = logging.getLogger(__name__)


def build_client(args: Namespace) -> AnchorClient:
    """
    Build an anchor client over the configured ledger.

    Raises:
        ValueError: If the memory backend is configured; its anchors would
            be lost when the command exits
    """
    config = args.cli_config
    if config.ledger.backend == "memory":
        raise ValueError(
            "The memory ledger does not persist between CLI runs; "
            "set ledger.backend to 'file' or 'http'"
        )
    return AnchorClient(
        create_ledger(config.ledger),
        hash_algorithm=config.hashing.algorithm,
    )


def receipt_to_dict(receipt: BatchReceipt, leaves: list[bytes], algorithm: str) -> dict[str, Any]:
    return {
        "root": receipt.root_hex,
        "hash_algorithm": algorithm,
        "block_number": receipt.block.block_number,
        "block_hash": receipt.block.block_hash,
        "proofs": [
            {"leaf": to_hex(leaf), "index": i, "proof": proof_to_dict(proof)}
            for i, (leaf, proof) in enumerate(zip(leaves, receipt.proofs))
        ],
    }


def anchor_cmd(args: Namespace) -> int:
    """Anchor a batch of leaves and print (or save) the proofs."""
    try:
        leaves = read_leaves(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        client = build_client(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        receipt = client.submit_batch(leaves)
    except AnchorException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    data = receipt_to_dict(receipt, leaves, client.hash_algorithm)

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.info(f"Wrote {len(receipt)} proofs to {out_path}")

    emit(
        data,
        args.json,
        f"Anchored {len(receipt)} leaves under root {receipt.root_hex} "
        f"in block {receipt.block.block_number}",
    )
    return EXIT_SUCCESS


def check_cmd(args: Namespace) -> int:
    """
    Look up when a leaf (with optional proof) was anchored.

    Exits 2 when the recomputed root is not anchored.
    """
    try:
        leaf = from_hex(args.leaf)
        proof = read_proof(args.proof) if args.proof else []
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        client = build_client(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        record = client.check_batched(leaf, proof)
    except AnchorException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if record is None:
        emit({"anchored": False}, args.json, "NOT ANCHORED")
        return EXIT_VERIFICATION_FAILED

    emit(
        {"anchored": True, "record": record.model_dump(mode="json")},
        args.json,
        f"Anchored in block {record.block_number} at {record.anchored_at.isoformat()}",
    )
    return EXIT_SUCCESS
