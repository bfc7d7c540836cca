"""Detection, compression and decompression of runtime blobs."""

from __future__ import annotations

import math
from dataclasses import dataclass

import zstandard

from .errors import CompressionError, DecompressionError

CODE_BLOB_BOMB_LIMIT = 50 * 1024 * 1024
"""Largest blob, in bytes, that may be compressed or produced by decompression."""

ZSTD_PREFIX = bytes([82, 188, 83, 118, 70, 219, 142, 5])
"""Marker written in front of a zstd frame to flag a compressed runtime."""

_ZSTD_LEVEL = 3
_READ_CHUNK = 64 * 1024


@dataclass(frozen=True)
class Compression:
    """Sizes of a runtime before and after decompression."""

    size_compressed: int
    size_decompressed: int
    compressed: bool

    @classmethod
    def from_blobs(cls, compressed: bytes, decompressed: bytes) -> Compression:
        """Describe a blob as retrieved and the same blob after decompression."""
        return cls(
            size_compressed=len(compressed),
            size_decompressed=len(decompressed),
            compressed=bytes(compressed) != bytes(decompressed),
        )

    def compression_ratio(self) -> float:
        """Compressed size divided by decompressed size."""
        if self.size_decompressed == 0:
            return math.nan if self.size_compressed == 0 else math.inf
        return self.size_compressed / self.size_decompressed


def compress(data: bytes) -> bytes:
    """Compress a runtime and prepend the compression marker."""
    blob = bytes(data)
    if len(blob) > CODE_BLOB_BOMB_LIMIT:
        raise CompressionError()
    compressor = zstandard.ZstdCompressor(level=_ZSTD_LEVEL, write_content_size=False)
    stream = compressor.compressobj()
    return ZSTD_PREFIX + stream.compress(blob) + stream.flush()


def decompress(data: bytes) -> bytes:
    """Decompress a runtime; blobs without the marker come back unchanged."""
    blob = bytes(data)
    if not blob.startswith(ZSTD_PREFIX):
        return blob

    payload = blob[len(ZSTD_PREFIX):]
    chunks: list[bytes] = []
    total = 0
    try:
        with zstandard.ZstdDecompressor().stream_reader(
            payload, read_across_frames=True
        ) as reader:
            while chunk := reader.read(_READ_CHUNK):
                total += len(chunk)
                if total > CODE_BLOB_BOMB_LIMIT:
                    raise DecompressionError()
                chunks.append(chunk)
    except zstandard.ZstdError as exc:
        raise DecompressionError() from exc
    return b"".join(chunks)