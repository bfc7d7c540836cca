# subrt

`subrt` is a Python library for working with Substrate WASM runtimes. It can:

- load a runtime from a file, from raw bytes or from a node over HTTP or
  WebSocket, and undo the zstd compression that runtimes are stored with;
- compute the hashes used when upgrading a chain: the `system.setCode`
  proposal hash, the `parachainSystem.authorizeUpgrade` call hash and the
  plain blake2-256 hash of the runtime;
- compute the IPFS CID (v0) of any content;
- compare two reduced runtimes pallet by pallet, and report whether the new
  one stays compatible and whether its `transaction_version` must be bumped.

It needs Python 3.10 or later. Its only dependencies are `zstandard` and
`websocket-client`. Install `subrt[test]` to get `pytest` for the test suite.

## Hashes

```python
from subrt.proposal_hash import (
    PREFIX_SYSTEM_SETCODE,
    get_parachainsystem_authorize_upgrade,
    get_result,
    get_system_setcode,
)

result = get_result(PREFIX_SYSTEM_SETCODE, bytes([1, 2, 42]))
result.hash           # 32 bytes
result.encoded_hash   # the same hash as a hex string

call_hash = get_system_setcode(wasm_bytes)
upgrade_hash = get_parachainsystem_authorize_upgrade((0x01, 0x02), wasm_bytes, True)
```

`get_result` hashes the buffer as a SCALE-encoded byte vector (length prefix
first), while `get_system_setcode` and `get_call_hash` hash the bytes as they
are. The third argument of `get_parachainsystem_authorize_upgrade` may be
`True`, `False` or `None`; with `None` no check-version byte is appended.

`subrt.runtime_hashes` works on the bytes of a runtime:

- `proposal_hash(data)` and `blake2_256_hash(data)` return `0x`-prefixed hex;
- `parachain_authorize_upgrade_hash(data, environ=None)` reads the pallet id,
  the call prefix and the check-version flag from `PARACHAIN_PALLET_ID`
  (default `0x01`), `AUTHORIZE_UPGRADE_PREFIX` (default `0x02`) and
  `AUTHORIZE_UPGRADE_CHECK_VERSION` (`"true"` or anything else) in the given
  mapping, or in `os.environ` when none is given. A value that is not a
  single hex byte raises `HexDecodingError`; a missing flag logs a warning.

The same module also inspects metadata bytes that you supply:
`is_substrate_wasm`, `get_metadata_version`, `describe_magic_and_version`
and `is_supported` (metadata version 12 or later).

## IPFS CID

```python
from subrt.ipfs import IpfsHasher

IpfsHasher().compute(b"foobar\n")
# 'QmRgutAxd8t7oGkSm4wmeuByG6M51wcTso6cubDdQtuEfL'

IpfsHasher(chunk_size=2).compute(b"foobar\n")
```

Content is split into chunks (256 KiB by default) and linked into a
balanced UnixFS tree; the CID of its root is returned.

## Loading runtimes

```python
from subrt.loader import WasmLoader
from subrt.source import get_source_type

source = get_source_type("runtime.wasm")   # or "wss://node.example.com:443"
loader = WasmLoader.load_from_source(source)

wasm = loader.uncompressed_bytes()   # decompressed if it was compressed
raw = loader.original_bytes()        # as read from disk or from the chain
loader.compression.compressed
loader.compression.compression_ratio()
```

`get_source_type` returns a `FileSource` when the path exists and a
`ChainSource` for strings starting with `ws` or `http`; anything else raises
`UnknownSourceError`. `WasmLoader.from_bytes(data)` builds a loader from
bytes you already hold, and `fetch_wasm_from_rpc(OnchainBlock.new(url,
block_hash))` reads the `:code` storage at a given block (or the latest one).

`subrt.compression` offers `compress`, `decompress` and the `Compression`
record. Blobs without the compression marker come back from `decompress`
unchanged; blobs larger than 50 MiB are refused.

## Diffing runtimes

`subrt.differ` compares two `ReducedRuntime` values. A reduced runtime holds
a `ReducedExtrinsic` and `ReducedPallet` entries keyed by pallet index; each
pallet holds calls, events, errors, constants and storages.

```python
from subrt.differ.diff_result import ReducedDiffResult
from subrt.differ.items import Variant, VariantField, variant_to_calls
from subrt.differ.reduced_pallet import ReducedPallet
from subrt.differ.reduced_runtime import ReducedExtrinsic, ReducedRuntime

def runtime(call_index):
    calls = variant_to_calls([Variant(call_index, "remark", (VariantField("remark", "Vec<u8>"),))])
    pallet = ReducedPallet(index=0, name="System", calls=calls)
    return ReducedRuntime(ReducedExtrinsic(version=4), {0: pallet})

result = ReducedDiffResult(runtime(0), runtime(1))
print(result)                               # changes, then a SUMMARY block
result.compatible()                         # False: a call was removed
result.require_transaction_version_bump()   # True: a call was removed
```

`result.changes` is `None` when both runtimes are alike; otherwise it is a
`ChangedWrapper` with `get_pallets_changes()` and
`get_pallet_changes_by_id(pallet_id)`. `DiffAnalyzer` and the functions
`compatible` and `require_tx_version_bump` in `subrt.differ.analysis` apply
the same rules to individual changes. Changes to the extrinsic format are
not analysed; they count as compatible and need no bump.

`ReducedRuntimeSummary.from_runtime(runtime)` in `subrt.differ.summary`
renders a table of every pallet with the number of items of each kind.
`DiffMethod.parse` accepts `reduced` or `partial`.

## What it does not do

`subrt` does not execute runtimes. It cannot call into a WASM blob, so it
neither extracts the metadata or core version from a runtime nor decodes
metadata into a `ReducedRuntime`: reduced runtimes and metadata bytes must be
built or supplied by the caller. There is no command-line tool.

## Errors

Every error raised by the package derives from `subrt.errors.SubrtError`,
through one class per area: `WasmLoaderError`, `RuntimePropHashError`,
`IpfsHasherError`, `SubstrateDifferError` and `WasmTestbedError`, each with
more specific subclasses such as `UnknownSourceError`, `DecompressionError`
or `HexDecodingError`.