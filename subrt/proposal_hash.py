"""Call hashes for runtime upgrade proposals (``system.setCode`` and friends)."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

SIZE = 32
"""Size in bytes of the call hash."""

Prefix = tuple[int, int]

PREFIX_SYSTEM_SETCODE: Prefix = (0x00, 0x02)
"""Pallet and call index of ``system.setCode``; prepended before hashing."""

PARACHAIN_PALLET_ID_ENV = "PARACHAIN_PALLET_ID"
DEFAULT_PARACHAIN_PALLET_ID = "0x01"

AUTHORIZE_UPGRADE_PREFIX_ENV = "AUTHORIZE_UPGRADE_PREFIX"
DEFAULT_AUTHORIZE_UPGRADE_PREFIX = "0x02"

AUTHORIZE_UPGRADE_CHECK_VERSION_ENV = "AUTHORIZE_UPGRADE_CHECK_VERSION"

T = TypeVar("T")


@dataclass(frozen=True)
class SrhResult:
    """A computed call hash and its hex form."""

    hash: bytes
    encoded_hash: str


def concatenate_arrays(x: Iterable[T], y: Iterable[T]) -> list[T]:
    """Return the items of ``x`` followed by those of ``y``."""
    return [*x, *y]


def _blake2_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=SIZE).digest()


def _prefix_bytes(prefix: Sequence[int]) -> bytes:
    if len(prefix) != 2 or any(not 0 <= part <= 0xFF for part in prefix):
        raise ValueError(f"prefix must be two bytes, got {prefix!r}")
    return bytes(prefix)


def _encode_compact(value: int) -> bytes:
    """SCALE compact encoding of a non-negative integer."""
    if value < 1 << 6:
        return bytes([value << 2])
    if value < 1 << 14:
        return ((value << 2) | 0b01).to_bytes(2, "little")
    if value < 1 << 30:
        return ((value << 2) | 0b10).to_bytes(4, "little")
    length = (value.bit_length() + 7) // 8
    return bytes([((length - 4) << 2) | 0b11]) + value.to_bytes(length, "little")


def get_call_hash(prefix: Sequence[int], wasm_blob: bytes) -> bytes:
    """Blake2b-256 of the two prefix bytes followed by ``wasm_blob``."""
    return _blake2_256(_prefix_bytes(prefix) + bytes(wasm_blob))


def get_result(prefix: Sequence[int], buffer: bytes) -> SrhResult:
    """Hash ``buffer`` as a SCALE encoded byte vector behind ``prefix``."""
    data = bytes(buffer)
    call_hash = get_call_hash(prefix, _encode_compact(len(data)) + data)
    return SrhResult(hash=call_hash, encoded_hash=call_hash.hex())


def get_system_setcode(wasm_blob: bytes) -> bytes:
    """Call hash of ``system.setCode`` with the raw ``wasm_blob``."""
    return get_call_hash(PREFIX_SYSTEM_SETCODE, wasm_blob)


def get_parachainsystem_authorize_upgrade(
    prefix: Sequence[int], wasm_blob: bytes, check_spec_version: bool | None = None
) -> bytes:
    """Call hash of ``parachainSystem.authorizeUpgrade`` for ``wasm_blob``.

    The preimage is the Blake2-256 of the code, followed by one byte for
    ``check_spec_version`` when that flag is given.
    """
    preimage = _blake2_256(bytes(wasm_blob))
    if check_spec_version is not None:
        preimage += bytes([int(check_spec_version)])
    return get_call_hash(prefix, preimage)