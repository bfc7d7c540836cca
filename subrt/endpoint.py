"""Node endpoints and references to an on-chain block."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import SplitResult, urlsplit

from .errors import NotSupportedError, UrlParsingError

_SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss"})


class EndpointKind(Enum):
    """Transport used to reach a node."""

    HTTP = "Http"
    WEBSOCKET = "WebSocket"


@dataclass(frozen=True)
class NodeEndpoint:
    """An HTTP or WebSocket URL of a node."""

    kind: EndpointKind
    url: str

    @classmethod
    def parse(cls, text: str) -> NodeEndpoint:
        """Classify ``text`` by its prefix: ``ws…`` or ``http…``."""
        if text.startswith("ws"):
            return cls(EndpointKind.WEBSOCKET, text)
        if text.startswith("http"):
            return cls(EndpointKind.HTTP, text)
        raise NotSupportedError(f"Unsuported endpoint: {text}")

    def as_url(self) -> SplitResult:
        """Parse the endpoint into URL components."""
        try:
            parts = urlsplit(self.url)
            parts.port  # noqa: B018 - validates the port
        except ValueError as exc:
            raise UrlParsingError(self.url) from exc
        if not parts.scheme or (parts.scheme in _SPECIAL_SCHEMES and not parts.hostname):
            raise UrlParsingError(self.url)
        return parts

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class OnchainBlock:
    """A node endpoint and an optional block hash to read state at."""

    endpoint: NodeEndpoint
    block_ref: str | None = None

    @classmethod
    def new(cls, url: str, block_ref: str | None = None) -> OnchainBlock:
        """Build from an endpoint URL and an optional block reference."""
        return cls(NodeEndpoint.parse(url), block_ref)

    @classmethod
    def parse(cls, text: str) -> OnchainBlock:
        """Build from an endpoint URL, pointing at the latest block."""
        return cls(NodeEndpoint.parse(text))

    def as_url(self) -> SplitResult:
        """Parse the endpoint into URL components."""
        return self.endpoint.as_url()