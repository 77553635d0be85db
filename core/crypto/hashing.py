"""
Hashing and Leaf Packing
Fixed-width content hashing and the packed-leaf buffer used as tree input.

This module provides:
- BLAKE2s-256 (default) and SHA-256 content hashing
- PackedLeaves: leaves concatenated into one fixed-stride byte buffer
- Hex encoding/decoding with 0x prefix

Width Rules:
- Every hash, leaf and root is exactly HASH_SIZE (32) bytes
- Leaves are always hashes of content, never raw content
- Leaf order is caller-owned and preserved by packing
"""
from __future__ import annotations

import hashlib
from typing import Callable, Iterator, Sequence

from core.schemas.errors import (
    EmptyBatchException,
    InvalidLeafSizeException,
    UnsupportedHashAlgorithmException,
)


HASH_SIZE = 32

DEFAULT_HASH_ALGORITHM = "blake2s"

# A 256-bit hash function: bytes in, 32 bytes out
Hasher = Callable[[bytes], bytes]


def blake2s256(data: bytes) -> bytes:
    """
    Compute the BLAKE2s-256 digest of raw bytes.

    Example:
        >>> len(blake2s256(b"hello"))
        32
    """
    return hashlib.blake2s(data, digest_size=HASH_SIZE).digest()


def sha256(data: bytes) -> bytes:
    """
    Compute the SHA-256 digest of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


_HASHERS: dict[str, Hasher] = {
    "blake2s": blake2s256,
    "sha256": sha256,
}


def supported_algorithms() -> list[str]:
    """Names accepted by get_hasher()."""
    return sorted(_HASHERS)


def get_hasher(algorithm: str = DEFAULT_HASH_ALGORITHM) -> Hasher:
    """
    Look up a hash function by name.

    Raises:
        UnsupportedHashAlgorithmException: If the name is unknown
    """
    try:
        return _HASHERS[algorithm.lower()]
    except KeyError:
        raise UnsupportedHashAlgorithmException(algorithm) from None


def hash_content(data: bytes, algorithm: str = DEFAULT_HASH_ALGORITHM) -> bytes:
    """
    Hash arbitrary content into a 32-byte leaf value.

    Args:
        data: Raw content bytes
        algorithm: Hash algorithm name ("blake2s" or "sha256")

    Returns:
        32-byte digest
    """
    return get_hasher(algorithm)(data)


def hash_concat(left: bytes, right: bytes, hasher: Hasher = blake2s256) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    Order-sensitive: hash_concat(a, b) != hash_concat(b, a) for a != b.
    """
    return hasher(left + right)


def _check_leaf(leaf: object, index: int) -> bytes:
    if not isinstance(leaf, (bytes, bytearray, memoryview)):
        raise InvalidLeafSizeException(
            f"Leaf {index} must be bytes, got {type(leaf).__name__}",
            leaf_index=index,
        )
    leaf = bytes(leaf)
    if len(leaf) != HASH_SIZE:
        raise InvalidLeafSizeException(
            f"Leaf {index} is {len(leaf)} bytes, expected {HASH_SIZE}",
            leaf_index=index,
            actual_size=len(leaf),
        )
    return leaf


class PackedLeaves:
    """
    Leaves concatenated in submission order into one contiguous buffer.

    Invariant: len(data) == HASH_SIZE * leaf_count and leaf_count >= 1.
    Instances are immutable; build them with pack_leaves() or from_bytes().
    """

    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        if len(data) == 0:
            raise EmptyBatchException()
        if len(data) % HASH_SIZE != 0:
            raise InvalidLeafSizeException(
                f"Packed buffer length {len(data)} is not a multiple of {HASH_SIZE}",
                actual_size=len(data),
            )
        self._data = bytes(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> "PackedLeaves":
        """Wrap an already-packed buffer, validating its length."""
        return cls(data)

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def leaf_count(self) -> int:
        return len(self._data) // HASH_SIZE

    def leaf(self, index: int) -> bytes:
        """Return the leaf at a 0-based index."""
        if index < 0 or index >= self.leaf_count:
            raise IndexError(f"Leaf index {index} out of range for {self.leaf_count} leaves")
        start = index * HASH_SIZE
        return self._data[start:start + HASH_SIZE]

    def leaves(self) -> list[bytes]:
        """All leaves in submission order."""
        return [self.leaf(i) for i in range(self.leaf_count)]

    def __len__(self) -> int:
        return self.leaf_count

    def __getitem__(self, index: int) -> bytes:
        return self.leaf(index)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.leaves())

    def __bytes__(self) -> bytes:
        return self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PackedLeaves):
            return self._data == other._data
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"PackedLeaves(leaf_count={self.leaf_count})"


def pack_leaves(leaves: Sequence[bytes]) -> PackedLeaves:
    """
    Pack an ordered sequence of 32-byte hashes into one buffer.

    Args:
        leaves: Leaf hashes in submission order

    Returns:
        PackedLeaves with len(data) == 32 * len(leaves)

    Raises:
        EmptyBatchException: If leaves is empty
        InvalidLeafSizeException: If any leaf is not exactly 32 bytes
    """
    if isinstance(leaves, (set, frozenset)):
        raise TypeError("Leaves must be an ordered sequence, not a set")
    if len(leaves) == 0:
        raise EmptyBatchException()

    packed = b"".join(_check_leaf(leaf, i) for i, leaf in enumerate(leaves))
    return PackedLeaves(packed)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + bytes(data).hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string (0x prefix optional) to bytes.

    Raises:
        ValueError: If the string has odd length or invalid hex characters
    """
    hex_content = hex_string[2:] if hex_string[:2].lower() == "0x" else hex_string

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def hash_from_hex(hex_string: str) -> bytes:
    """
    Decode a hex string that must hold exactly one 32-byte hash.

    Raises:
        ValueError: If the string is not valid hex
        InvalidLeafSizeException: If the decoded value is not 32 bytes
    """
    value = from_hex(hex_string)
    if len(value) != HASH_SIZE:
        raise InvalidLeafSizeException(
            f"Hash is {len(value)} bytes, expected {HASH_SIZE}",
            actual_size=len(value),
        )
    return value


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
