import io
import json
import urllib.error
from unittest import mock

import pytest
import websocket

from subrt.compression import ZSTD_PREFIX, compress
from subrt.endpoint import OnchainBlock
from subrt.errors import CompressionError, HttpClientError, WasmLoaderError, WsClientError
from subrt.loader import CODE, WasmLoader, fetch_wasm_from_rpc, load_from_file
from subrt.source import ChainSource, FileSource

WASM = b"\x00asm\x01\x00\x00\x00" + bytes(range(200)) * 5


def _http_response(result):
    return io.BytesIO(json.dumps({"jsonrpc": "2.0", "id": 0, "result": result}).encode())


class _FakeWs:
    def __init__(self, frames):
        self.frames = list(frames)
        self.sent = []
        self.closed = False

    def send_binary(self, data):
        self.sent.append(data)

    def recv_data(self, **kwargs):
        return self.frames.pop(0)

    def close(self):
        self.closed = True


def test_from_bytes_uncompressed():
    loader = WasmLoader.from_bytes(WASM)
    assert loader.original_bytes() == WASM
    assert loader.uncompressed_bytes() == WASM
    assert loader.compression.compressed is False
    assert loader.compression.compression_ratio() == 1.0


def test_from_bytes_compressed():
    blob = compress(WASM)
    loader = WasmLoader.from_bytes(blob)
    assert loader.original_bytes() == blob
    assert loader.uncompressed_bytes() == WASM
    assert loader.compression.compressed is True
    assert loader.compression.size_compressed == len(blob)
    assert loader.compression.size_decompressed == len(WASM)


def test_from_bytes_bad_compressed_blob():
    with pytest.raises(CompressionError):
        WasmLoader.from_bytes(ZSTD_PREFIX + b"garbage")


def test_load_from_file(tmp_path):
    runtime = tmp_path / "runtime.wasm"
    runtime.write_bytes(WASM)
    assert load_from_file(runtime) == WASM


def test_load_from_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_from_file(tmp_path / "missing.wasm")


def test_load_from_file_source(tmp_path):
    runtime = tmp_path / "runtime.wasm"
    blob = compress(WASM)
    runtime.write_bytes(blob)
    loader = WasmLoader.load_from_source(FileSource(runtime))
    assert loader.uncompressed_bytes() == WASM
    assert loader.original_bytes() == blob


def test_fetch_over_http():
    with mock.patch("urllib.request.urlopen", return_value=_http_response("0x" + WASM.hex())) as urlopen:
        data = fetch_wasm_from_rpc(OnchainBlock.new("http://localhost:9933", "0xabc"))
    assert data == WASM
    request = urlopen.call_args.args[0]
    payload = json.loads(request.data)
    assert payload["method"] == "state_getStorage"
    assert payload["params"] == [CODE, "0xabc"]
    assert request.full_url == "http://localhost:9933"


def test_fetch_over_http_without_block_ref():
    with mock.patch("urllib.request.urlopen", return_value=_http_response("0x0061736d")) as urlopen:
        data = fetch_wasm_from_rpc(OnchainBlock.parse("http://localhost:9933"))
    assert data == bytes.fromhex("0061736d")
    assert json.loads(urlopen.call_args.args[0].data)["params"] == [CODE, None]


def test_fetch_over_http_error():
    with mock.patch("urllib.request.urlopen", side_effect=urllib.error.URLError("refused")):
        with pytest.raises(HttpClientError):
            fetch_wasm_from_rpc(OnchainBlock.parse("http://localhost:9933"))


def test_fetch_over_http_without_result():
    with mock.patch("urllib.request.urlopen", return_value=io.BytesIO(b'{"error": {}}')):
        with pytest.raises(WasmLoaderError):
            fetch_wasm_from_rpc(OnchainBlock.parse("http://localhost:9933"))


def test_fetch_over_websocket_skips_ping():
    response = json.dumps({"jsonrpc": "2.0", "id": 0, "result": "0x" + WASM.hex()}).encode()
    fake = _FakeWs([(websocket.ABNF.OPCODE_PING, b""), (websocket.ABNF.OPCODE_TEXT, response)])
    with mock.patch("websocket.create_connection", return_value=fake):
        data = fetch_wasm_from_rpc(OnchainBlock.parse("ws://localhost:9944"))
    assert data == WASM
    assert json.loads(fake.sent[0])["params"] == [CODE, None]
    assert fake.closed is True


def test_fetch_over_websocket_connection_error():
    with mock.patch("websocket.create_connection", side_effect=ConnectionRefusedError()):
        with pytest.raises(WsClientError):
            fetch_wasm_from_rpc(OnchainBlock.parse("ws://localhost:9944"))


def test_fetch_over_websocket_without_response():
    fake = _FakeWs([(websocket.ABNF.OPCODE_PING, b""), (websocket.ABNF.OPCODE_PING, b"")])
    with mock.patch("websocket.create_connection", return_value=fake):
        with pytest.raises(WasmLoaderError):
            fetch_wasm_from_rpc(OnchainBlock.parse("ws://localhost:9944"))


def test_load_from_chain_source():
    blob = compress(WASM)
    with mock.patch("urllib.request.urlopen", return_value=_http_response("0x" + blob.hex())):
        loader = WasmLoader.load_from_source(ChainSource(OnchainBlock.parse("https://localhost:9933")))
    assert loader.original_bytes() == blob
    assert loader.uncompressed_bytes() == WASM
    assert loader.compression.compressed is True