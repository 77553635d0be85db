"""
Core cryptographic utilities: content hashing and leaf packing.
"""
from .hashing import (
    HASH_SIZE,
    DEFAULT_HASH_ALGORITHM,
    Hasher,
    PackedLeaves,
    blake2s256,
    sha256,
    supported_algorithms,
    get_hasher,
    hash_content,
    hash_concat,
    pack_leaves,
    to_hex,
    from_hex,
    hash_from_hex,
)

__all__ = [
    "HASH_SIZE",
    "DEFAULT_HASH_ALGORITHM",
    "Hasher",
    "PackedLeaves",
    "blake2s256",
    "sha256",
    "supported_algorithms",
    "get_hasher",
    "hash_content",
    "hash_concat",
    "pack_leaves",
    "to_hex",
    "from_hex",
    "hash_from_hex",
]
