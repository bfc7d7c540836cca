"""IPFS CIDv0 of a byte string, as produced by a UnixFS balanced file import."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from dataclasses import dataclass

DEFAULT_CHUNK_SIZE = 256 * 1024
BRANCHING_FACTOR = 174

_BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_SHA2_256 = 0x12
_UNIXFS_FILE = 2


def _varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _field_varint(field: int, value: int) -> bytes:
    return _varint(field << 3) + _varint(value)


def _field_bytes(field: int, data: bytes) -> bytes:
    return _varint((field << 3) | 2) + _varint(len(data)) + data


def _base58(data: bytes) -> str:
    number = int.from_bytes(data, "big")
    digits = []
    while number:
        number, rem = divmod(number, 58)
        digits.append(_BASE58_ALPHABET[rem])
    zeros = len(data) - len(data.lstrip(b"\0"))
    return "1" * zeros + "".join(reversed(digits))


@dataclass(frozen=True)
class _Block:
    multihash: bytes
    filesize: int
    total_size: int


def _store(block: bytes, filesize: int, children_total: int = 0) -> _Block:
    multihash = bytes([_SHA2_256, 32]) + hashlib.sha256(block).digest()
    return _Block(multihash, filesize, len(block) + children_total)


def _leaf(chunk: bytes) -> _Block:
    unixfs = (
        _field_varint(1, _UNIXFS_FILE)
        + _field_bytes(2, chunk)
        + _field_varint(3, len(chunk))
    )
    return _store(_field_bytes(1, unixfs), len(chunk))


def _parent(children: Sequence[_Block]) -> _Block:
    links = b"".join(
        _field_bytes(
            2,
            _field_bytes(1, child.multihash)
            + _field_bytes(2, b"")
            + _field_varint(3, child.total_size),
        )
        for child in children
    )
    filesize = sum(child.filesize for child in children)
    unixfs = (
        _field_varint(1, _UNIXFS_FILE)
        + _field_varint(3, filesize)
        + b"".join(_field_varint(4, child.filesize) for child in children)
    )
    block = links + _field_bytes(1, unixfs)
    return _store(block, filesize, sum(child.total_size for child in children))


def _build(leaves: Sequence[_Block], depth: int) -> _Block:
    if depth == 0:
        return leaves[0]
    span = BRANCHING_FACTOR ** (depth - 1)
    children = [
        _build(leaves[start : start + span], depth - 1)
        for start in range(0, len(leaves), span)
    ]
    return _parent(children)


@dataclass(frozen=True)
class IpfsHasher:
    """Compute the IPFS hash (CIDv0) of some content.

    The content is split into chunks of ``chunk_size`` bytes, each chunk
    becomes a UnixFS leaf block and the leaves are linked into a balanced
    tree whose root gives the returned CID.
    """

    chunk_size: int | None = None

    def __post_init__(self) -> None:
        if self.chunk_size is not None and self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

    def compute(self, content: bytes) -> str:
        """Return the CIDv0 of ``content`` as a base58 string."""
        data = bytes(content)
        size = self.chunk_size or DEFAULT_CHUNK_SIZE
        chunks = [data[start : start + size] for start in range(0, len(data), size)]
        leaves = [_leaf(chunk) for chunk in chunks or [b""]]

        depth = 0
        while BRANCHING_FACTOR**depth < len(leaves):
            depth += 1
        return _base58(_build(leaves, depth).multihash)