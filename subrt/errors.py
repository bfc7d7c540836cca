"""Exception hierarchy shared by the hashing, loading and diffing modules."""

from __future__ import annotations

import os
from pathlib import Path


class SubrtError(Exception):
    """Base of every error raised by this package."""


# --- IPFS hashing -----------------------------------------------------------


class IpfsHasherError(SubrtError):
    """Failure while computing an IPFS hash."""

    def __init__(self, message: str = "Unknown error") -> None:
        super().__init__(message)


class PalletNotFoundError(IpfsHasherError):
    """A pallet that was asked for does not exist."""

    def __init__(self, pallet: str) -> None:
        self.pallet = pallet
        super().__init__(f"The following pallet was not found: `{pallet}`")


# --- Proposal hashes ----------------------------------------------------------


class RuntimePropHashError(SubrtError):
    """Failure while computing a proposal or call hash."""

    def __init__(self, message: str = "Unknown") -> None:
        super().__init__(message)


class HashComputingError(RuntimePropHashError):
    """The hasher could not produce a digest."""

    def __init__(self) -> None:
        super().__init__("HashComputing")


class MissingEnvironmentVariableError(RuntimePropHashError):
    """A required environment variable is not set."""

    def __init__(self, variable: str) -> None:
        self.variable = variable
        super().__init__(f"Failure while fecthing the ENV: `{variable}`")


class HexDecodingError(RuntimePropHashError):
    """A value expected to be hex could not be decoded."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Failure while fecthing the ENV: `{value}`")


# --- Runtime differ -----------------------------------------------------------


class SubstrateDifferError(SubrtError):
    """Failure while reducing or comparing runtimes."""

    def __init__(self, message: str = "Unknown error") -> None:
        super().__init__(message)


class SerializationError(SubstrateDifferError):
    """A value could not be serialized."""

    def __init__(self) -> None:
        super().__init__("SerializationError")


class RegistryError(SubstrateDifferError):
    """A type could not be resolved in the metadata registry."""

    def __init__(self, kind: str, type_id: int) -> None:
        self.kind = kind
        self.type_id = type_id
        super().__init__(f"RegistryError for {kind} {type_id}")


class RuntimeNotFoundError(SubstrateDifferError):
    """A runtime file does not exist."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        super().__init__(f"Could not find runtime at {self.path}")


# --- Wasm loading -------------------------------------------------------------


class WasmLoaderError(SubrtError):
    """Failure while loading a runtime blob."""


class EndpointParsingError(WasmLoaderError):
    """An endpoint could not be parsed."""

    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint
        super().__init__(f"Issue parsing endpoint: `{endpoint}`")


class OnchainBlockParsingError(WasmLoaderError):
    """A block reference could not be parsed."""

    def __init__(self, block: str) -> None:
        self.block = block
        super().__init__(f"Issue parsing block: `{block}`")


class NotSupportedError(WasmLoaderError):
    """The requested operation or input is not supported."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Not supported: `{detail}`")


class UnknownSourceError(WasmLoaderError):
    """A source string is neither an existing file nor a known endpoint."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"Unknown source: `{source}`")


class CompressionError(WasmLoaderError):
    """Compression produced nothing."""

    def __init__(self) -> None:
        super().__init__("Compression failed and returned nothing")


class DecompressionError(WasmLoaderError):
    """Decompression failed."""

    def __init__(self) -> None:
        super().__init__("Decompression failed")


class UrlParsingError(WasmLoaderError):
    """A URL could not be parsed."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"URL Error: {url}")


class HttpClientError(WasmLoaderError):
    """An HTTP request to a node failed."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"HTTP Client error, url: `{url}`")


class WsClientError(WasmLoaderError):
    """A WebSocket exchange with a node failed."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"WebSocket Client error, url: `{url}`")


# --- Testbed ------------------------------------------------------------------


class WasmTestbedError(SubrtError):
    """Failure while inspecting a runtime."""

    def __init__(self, message: str = "Hash Error") -> None:
        super().__init__(message)


class LoadingError(WasmTestbedError):
    """The runtime source could not be loaded."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"Error while loading source: `{source}`")


class DecodingError(WasmTestbedError):
    """Bytes could not be decoded."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        super().__init__(f"Failed decoding bytes: {list(self.data)}")


class UnsupportedRuntimeError(WasmTestbedError):
    """The runtime is not a supported Substrate runtime."""

    def __init__(self) -> None:
        super().__init__("This runtime is not supported")