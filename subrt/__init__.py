"""Load, hash and compare Substrate WASM runtimes."""

__version__ = "0.1.0"