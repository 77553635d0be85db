"""
Hex decoding for request payloads.

Malformed hex is a request error; well-formed hex of the wrong width is
left to the anchoring core so it reports INVALID_LEAF_SIZE.
"""

from __future__ import annotations

from api.errors import InvalidRequestError
from api.models.requests import ProofStepModel
from core.crypto.hashing import from_hex, to_hex
from core.merkle import Proof, ProofStep


def decode_hex(value: str, field: str) -> bytes:
    try:
        return from_hex(value)
    except ValueError as e:
        raise InvalidRequestError(
            f"Field {field!r} is not valid hex",
            details={"field": field, "error": str(e)},
        ) from e


def decode_leaves(values: list[str]) -> list[bytes]:
    return [decode_hex(v, f"leaves[{i}]") for i, v in enumerate(values)]


def decode_proof(steps: list[ProofStepModel]) -> Proof:
    return [
        ProofStep(sibling=decode_hex(step.sibling, f"proof[{i}].sibling"), is_left=step.is_left)
        for i, step in enumerate(steps)
    ]


def encode_proof(proof: Proof) -> list[ProofStepModel]:
    return [
        ProofStepModel(sibling=to_hex(step.sibling), is_left=step.is_left)
        for step in proof
    ]
