"""Toolchain adapters — wasm-pack."""

from wasmsplice.adapters.toolchains.wasm_pack import WasmPackToolchain

__all__ = ["WasmPackToolchain"]
