"""Where a runtime comes from: a local file or a chain."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .endpoint import NodeEndpoint, OnchainBlock
from .errors import NotSupportedError, UnknownSourceError


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


@dataclass(frozen=True)
class FileSource:
    """A runtime stored in a file on the local file system."""

    path: Path

    def __str__(self) -> str:
        return _quote(str(self.path))


@dataclass(frozen=True)
class ChainSource:
    """A runtime read from a node."""

    block: OnchainBlock

    def __str__(self) -> str:
        endpoint = self.block.endpoint
        block_ref = (
            "None" if self.block.block_ref is None else f"Some({_quote(self.block.block_ref)})"
        )
        return (
            f"OnchainBlock {{ endpoint: {endpoint.kind.value}({_quote(endpoint.url)}), "
            f"block_ref: {block_ref} }}"
        )


Source = Union[FileSource, ChainSource]


def get_source_type(text: str) -> Source:
    """Interpret ``text`` as an existing path or else as a node endpoint."""
    path = Path(text)
    if path.exists():
        return FileSource(path)
    try:
        endpoint = NodeEndpoint.parse(text)
    except NotSupportedError as exc:
        raise UnknownSourceError(text) from exc
    return ChainSource(OnchainBlock(endpoint))