from pathlib import Path

import pytest

from subrt.endpoint import EndpointKind, NodeEndpoint, OnchainBlock
from subrt.errors import UnknownSourceError
from subrt.source import ChainSource, FileSource, get_source_type


@pytest.mark.parametrize("url", ["ws://localhost:9933", "wss://localhost:9933"])
def test_converts_from_ws_url(url):
    src = get_source_type(url)
    assert isinstance(src, ChainSource)
    assert src.block.endpoint.kind is EndpointKind.WEBSOCKET
    assert src.block.endpoint.url == url


@pytest.mark.parametrize("url", ["http://localhost:9933", "https://localhost:9933"])
def test_converts_from_http(url):
    src = get_source_type(url)
    assert isinstance(src, ChainSource)
    assert src.block.endpoint.kind is EndpointKind.HTTP
    assert src.block.endpoint.url == url


def test_converts_from_path(tmp_path):
    (tmp_path / "{subwasm_fake_runtime}.wasm").touch()
    assert get_source_type(str(tmp_path)) == FileSource(Path(str(tmp_path)))


def test_converts_from_file(tmp_path):
    runtime = tmp_path / "runtime.wasm"
    runtime.write_bytes(b"\x00asm")
    assert get_source_type(str(runtime)) == FileSource(runtime)


@pytest.mark.parametrize("value", ["foo", "bar"])
def test_catches_unknown(value, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(UnknownSourceError):
        get_source_type(value)


def test_file_source_display():
    assert str(FileSource(Path("runtime.wasm"))) == '"runtime.wasm"'


def test_chain_source_display():
    src = ChainSource(OnchainBlock(NodeEndpoint(EndpointKind.WEBSOCKET, "ws://localhost:9944")))
    assert str(src) == 'OnchainBlock { endpoint: WebSocket("ws://localhost:9944"), block_ref: None }'


def test_chain_source_display_with_block_ref():
    src = ChainSource(OnchainBlock.new("http://localhost:9933", "0x01"))
    text = str(src)
    assert 'Http("http://localhost:9933")' in text
    assert 'Some("0x01")' in text