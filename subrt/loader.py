"""Load a runtime blob from a file, raw bytes or a node."""

from __future__ import annotations

import json
import logging
import os
import urllib.request
from typing import Any

import websocket

from .compression import Compression, decompress
from .endpoint import EndpointKind, OnchainBlock
from .errors import (
    CompressionError,
    DecompressionError,
    HttpClientError,
    WasmLoaderError,
    WsClientError,
)
from .source import ChainSource, FileSource, Source

log = logging.getLogger(__name__)

CODE = "0x3a636f6465"
"""Storage key of the runtime code (``:code`` in hex)."""

_TIMEOUT = 60


def load_from_file(path: str | os.PathLike[str]) -> bytes:
    """Read the whole file at ``path``."""
    with open(path, "rb") as handle:
        data = handle.read()
    log.debug("read data from file, buffer size: %d", len(data))
    return data


def _storage_request(reference: OnchainBlock) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": 0,
        "method": "state_getStorage",
        "params": [CODE, reference.block_ref],
    }


def _fetch_http(url: str, payload: dict[str, Any]) -> Any:
    request = urllib.request.Request(
        url,
        data=json.dumps(payload).encode(),
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with urllib.request.urlopen(request, timeout=_TIMEOUT) as response:
            body = json.load(response)
    except (OSError, ValueError) as exc:
        raise HttpClientError(url) from exc
    if not isinstance(body, dict) or "result" not in body:
        raise WasmLoaderError("unexpected response from node")
    return body["result"]


def _fetch_ws(url: str, payload: dict[str, Any]) -> Any:
    try:
        ws = websocket.create_connection(url, timeout=_TIMEOUT)
    except (websocket.WebSocketException, OSError) as exc:
        raise WsClientError(url) from exc
    try:
        ws.send_binary(json.dumps(payload).encode())
        result = None
        # One frame may be a ping, the other the response.
        for _ in range(2):
            opcode, data = ws.recv_data(control_frame=True)
            if opcode != websocket.ABNF.OPCODE_TEXT:
                continue
            try:
                body = json.loads(data)
                result = body["result"]
            except (ValueError, KeyError, TypeError):
                result = None
            if result is not None:
                break
    except (websocket.WebSocketException, OSError) as exc:
        raise WsClientError(url) from exc
    finally:
        ws.close()
    if result is None:
        raise WasmLoaderError("unexpected response from node")
    return result


def fetch_wasm_from_rpc(reference: OnchainBlock) -> bytes:
    """Read the runtime code stored on chain at the referenced block."""
    payload = _storage_request(reference)
    url = reference.endpoint.url
    if reference.endpoint.kind is EndpointKind.HTTP:
        wasm_hex = _fetch_http(url, payload)
    else:
        wasm_hex = _fetch_ws(url, payload)
    if not isinstance(wasm_hex, str):
        raise WasmLoaderError("unexpected response from node")
    digits = wasm_hex[2:] if wasm_hex.startswith("0x") else wasm_hex
    try:
        return bytes.fromhex(digits)
    except ValueError as exc:
        raise WasmLoaderError(f"Decoding bytes: {wasm_hex[:32]}") from exc


class WasmLoader:
    """A runtime blob as retrieved and, when compressed, its decompressed form."""

    def __init__(self, original: bytes, uncompressed: bytes, compression: Compression) -> None:
        self._original = bytes(original)
        self._uncompressed = bytes(uncompressed)
        self.compression = compression

    @classmethod
    def from_bytes(cls, data: bytes) -> WasmLoader:
        """Build a loader from raw runtime bytes, decompressing them if needed."""
        original = bytes(data)
        log.debug("code size before decompression: %d", len(original))
        try:
            uncompressed = decompress(original)
        except DecompressionError as exc:
            raise CompressionError() from exc
        log.debug("code size after decompression: %d", len(uncompressed))
        return cls(original, uncompressed, Compression.from_blobs(original, uncompressed))

    @classmethod
    def load_from_source(cls, source: Source) -> WasmLoader:
        """Load the runtime from a file or from a node."""
        log.debug("Loading from %s", source)
        if isinstance(source, FileSource):
            data = load_from_file(source.path)
        elif isinstance(source, ChainSource):
            data = fetch_wasm_from_rpc(source.block)
        else:
            raise TypeError(f"unsupported source: {source!r}")
        log.debug("Loaded %d bytes", len(data))
        return cls.from_bytes(data)

    def uncompressed_bytes(self) -> bytes:
        """The usable runtime: decompressed if it was compressed."""
        return self._uncompressed

    def original_bytes(self) -> bytes:
        """The runtime exactly as retrieved."""
        return self._original