import math

import pytest
import zstandard

from subrt.compression import (
    CODE_BLOB_BOMB_LIMIT,
    ZSTD_PREFIX,
    Compression,
    compress,
    decompress,
)
from subrt.errors import CompressionError, DecompressionError


def test_ratio():
    c = Compression.from_blobs(bytes([1, 2]), bytes([1, 2, 3, 4]))
    assert abs(c.compression_ratio() - 0.50) < 0.01


def test_compression():
    data = bytes([0, 42, 7, 27, 0, 0, 0, 27, 26, 27])
    compressed = compress(data)
    assert compressed == bytes(
        [
            82, 188, 83, 118, 70, 219, 142, 5, 40, 181, 47, 253, 0, 88, 81, 0, 0, 0,
            42, 7, 27, 0, 0, 0, 27, 26, 27,
        ]
    )
    assert decompress(compressed) == data


def test_from_blobs_detects_compression():
    same = Compression.from_blobs(b"abc", b"abc")
    assert same.compressed is False
    assert same.compression_ratio() == 1.0

    different = Compression.from_blobs(b"ab", b"abcd")
    assert different.compressed is True
    assert different.size_compressed == 2
    assert different.size_decompressed == 4


def test_ratio_of_empty_blobs_is_nan():
    c = Compression.from_blobs(b"", b"")
    assert c.size_compressed == 0
    assert c.size_decompressed == 0
    assert c.compressed is False
    ratio = c.compression_ratio()
    assert math.isnan(ratio) is True
    assert ratio != ratio


def test_round_trip_larger_blob():
    data = bytes(range(256)) * 100
    blob = compress(data)
    assert blob.startswith(ZSTD_PREFIX)
    assert len(blob) < len(data)
    assert decompress(blob) == data


def test_decompress_passes_through_unmarked_data():
    data = b"\x00asm\x01\x00\x00\x00"
    assert decompress(data) == data


def test_decompress_rejects_garbage_after_prefix():
    with pytest.raises(DecompressionError):
        decompress(ZSTD_PREFIX + b"definitely not a zstd frame")


def test_compress_refuses_oversized_input():
    with pytest.raises(CompressionError):
        compress(bytes(CODE_BLOB_BOMB_LIMIT + 1))


def test_decompress_refuses_bomb():
    payload = zstandard.ZstdCompressor(level=1).compress(bytes(CODE_BLOB_BOMB_LIMIT + 1))
    with pytest.raises(DecompressionError):
        decompress(ZSTD_PREFIX + payload)