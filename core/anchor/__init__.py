"""
Anchoring: direct and Merkle-batched anchors over a ledger collaborator.
"""

from .client import AnchorClient, BatchReceipt

__all__ = [
    "AnchorClient",
    "BatchReceipt",
]
