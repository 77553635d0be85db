"""
CLI Merkle Commands

Offline commands that never contact a ledger:

Usage:
    merkle-anchor hash FILE | --text TEXT
    merkle-anchor root LEAF... | --from-file PATH
    merkle-anchor prove INDEX LEAF... | --from-file PATH
    merkle-anchor verify LEAF --proof PATH [--root HEX]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from core.crypto.hashing import (
    from_hex,
    get_hasher,
    hash_content,
    pack_leaves,
    to_hex,
)
from core.merkle import (
    Proof,
    compute_root,
    create_proof,
    proof_from_dict,
    proof_to_dict,
    recompute_root,
)
from core.schemas.errors import AnchorException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def emit(data: dict[str, Any], as_json: bool, human: str) -> None:
    """Print either the JSON form or the human-readable line."""
    if as_json:
        print(json.dumps(data, indent=2, default=str))
    else:
        print(human)


def read_leaves(args: Namespace) -> list[bytes]:
    """Collect leaf hashes from positional args or --from-file (one hex per line)."""
    values: list[str] = list(getattr(args, "leaves", None) or [])
    from_file = getattr(args, "from_file", None)
    if from_file:
        with open(from_file, "r", encoding="utf-8") as f:
            values.extend(line.strip() for line in f if line.strip())
    return [from_hex(v) for v in values]


def read_proof(path: str | Path) -> Proof:
    """
    Load a proof from JSON.

    Accepts either a bare list of steps or an object with a "proof" key
    (the per-leaf entries written by `anchor --out`).
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("proof", [])
    return proof_from_dict(data)


def hash_cmd(args: Namespace) -> int:
    """Print the content hash of a file or a text string."""
    config = args.cli_config
    if args.text is not None:
        content = args.text.encode("utf-8")
        source = "<text>"
    elif args.file:
        content = Path(args.file).read_bytes()
        source = args.file
    else:
        content = sys.stdin.buffer.read()
        source = "<stdin>"

    digest = hash_content(content, config.hashing.algorithm)
    emit(
        {"source": source, "algorithm": config.hashing.algorithm, "hash": to_hex(digest)},
        args.json,
        to_hex(digest),
    )
    return EXIT_SUCCESS


def root_cmd(args: Namespace) -> int:
    """Print the Merkle root of a batch of leaves."""
    config = args.cli_config
    try:
        packed = pack_leaves(read_leaves(args))
    except (AnchorException, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    root = compute_root(packed, get_hasher(config.hashing.algorithm))
    emit(
        {"root": to_hex(root), "leaf_count": packed.leaf_count},
        args.json,
        to_hex(root),
    )
    return EXIT_SUCCESS


def prove_cmd(args: Namespace) -> int:
    """Print the inclusion proof of one leaf as JSON."""
    config = args.cli_config
    hasher = get_hasher(config.hashing.algorithm)
    try:
        packed = pack_leaves(read_leaves(args))
        proof = create_proof(args.index, packed, hasher)
    except (AnchorException, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    print(json.dumps(
        {
            "leaf": to_hex(packed.leaf(args.index)),
            "index": args.index,
            "root": to_hex(compute_root(packed, hasher)),
            "proof": proof_to_dict(proof),
        },
        indent=2,
    ))
    return EXIT_SUCCESS


def verify_cmd(args: Namespace) -> int:
    """
    Recompute the root from a leaf and proof.

    With --root, exits 2 when the recomputed root differs.
    """
    config = args.cli_config
    try:
        leaf = from_hex(args.leaf)
        proof = read_proof(args.proof)
        expected = from_hex(args.root) if args.root else None
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    computed = recompute_root(leaf, proof, get_hasher(config.hashing.algorithm))

    if expected is None:
        emit({"computed_root": to_hex(computed)}, args.json, to_hex(computed))
        return EXIT_SUCCESS

    valid = computed == expected
    emit(
        {
            "valid": valid,
            "computed_root": to_hex(computed),
            "expected_root": to_hex(expected),
        },
        args.json,
        "VALID" if valid else f"INVALID: computed {to_hex(computed)}",
    )
    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
