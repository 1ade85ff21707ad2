"""wasmsplice — embed wasm-pack builds of inline Rust modules as constants."""

__version__ = "0.1.0"
