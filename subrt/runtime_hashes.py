"""Checks and hashes computed from a runtime's bytes and metadata."""

from __future__ import annotations

import hashlib
import logging
import os
import re
from collections.abc import Mapping

from .errors import HexDecodingError
from .proposal_hash import (
    AUTHORIZE_UPGRADE_CHECK_VERSION_ENV,
    AUTHORIZE_UPGRADE_PREFIX_ENV,
    DEFAULT_AUTHORIZE_UPGRADE_PREFIX,
    DEFAULT_PARACHAIN_PALLET_ID,
    PARACHAIN_PALLET_ID_ENV,
    PREFIX_SYSTEM_SETCODE,
    get_parachainsystem_authorize_upgrade,
    get_result,
)

log = logging.getLogger(__name__)

META = bytes([0x6D, 0x65, 0x74, 0x61])
"""Magic number opening the metadata of a Substrate runtime."""

MIN_SUPPORTED_METADATA_VERSION = 12

_SINGLE_HEX_BYTE = re.compile(r"[0-9a-fA-F]{2}")


def _require_length(data: bytes, length: int) -> bytes:
    blob = bytes(data)
    if len(blob) < length:
        raise ValueError(f"expected at least {length} bytes of metadata, got {len(blob)}")
    return blob


def is_substrate_wasm(metadata: bytes) -> bool:
    """Whether the metadata starts with the Substrate magic number."""
    return _require_length(metadata, len(META))[: len(META)] == META


def get_metadata_version(data: bytes) -> int:
    """The metadata version, stored right after the magic number."""
    return _require_length(data, len(META) + 1)[len(META)]


def describe_magic_and_version(data: bytes) -> str:
    """Report on the magic number and version found in a raw buffer."""
    found = "YES" if is_substrate_wasm(data) else "NO"
    version = get_metadata_version(data)
    return f"✨ Magic number found: {found}\n#️⃣ Extracted version : V{version}"


def is_supported(metadata_version: int) -> bool:
    """Whether a metadata version is recent enough to be handled."""
    return metadata_version >= MIN_SUPPORTED_METADATA_VERSION


def proposal_hash(data: bytes) -> str:
    """The ``system.setCode`` proposal hash of a runtime, ``0x`` prefixed."""
    return f"0x{get_result(PREFIX_SYSTEM_SETCODE, data).encoded_hash}"


def _single_byte(text: str) -> int:
    if not _SINGLE_HEX_BYTE.fullmatch(text):
        raise HexDecodingError(text)
    return int(text, 16)


def parachain_authorize_upgrade_hash(
    data: bytes, environ: Mapping[str, str] | None = None
) -> str:
    """The ``parachainSystem.authorizeUpgrade`` call hash of a runtime.

    The pallet id, call prefix and spec version check flag are read from
    ``environ`` (the process environment by default).
    """
    env = os.environ if environ is None else environ
    pallet_id = env.get(PARACHAIN_PALLET_ID_ENV, DEFAULT_PARACHAIN_PALLET_ID).replace("0x", "", 1)
    call_prefix = env.get(
        AUTHORIZE_UPGRADE_PREFIX_ENV, DEFAULT_AUTHORIZE_UPGRADE_PREFIX
    ).replace("0x", "", 1)

    flag = env.get(AUTHORIZE_UPGRADE_CHECK_VERSION_ENV)
    check_version = None if flag is None else flag == "true"
    if check_version is None:
        log.warning(
            "Env variable `%s` not specified. If your chain is running on Substrate >= 0.9.41, "
            "this will most likely yield wrong values for the "
            "`parachainSystem::authorizeUpgrade` call hash.",
            AUTHORIZE_UPGRADE_CHECK_VERSION_ENV,
        )

    prefix = (_single_byte(pallet_id), _single_byte(call_prefix))
    result = get_parachainsystem_authorize_upgrade(prefix, data, check_version)
    return f"0x{result.hex()}"


def blake2_256_hash(data: bytes) -> str:
    """The Blake2b-256 hash of a runtime, ``0x`` prefixed."""
    return "0x" + hashlib.blake2b(bytes(data), digest_size=32).hexdigest()