"""Adapters — bindings for the external build toolchain.

Public re-exports for convenient access.
"""

from wasmsplice.adapters.base import Toolchain
from wasmsplice.adapters.mock import MockToolchain
from wasmsplice.adapters.registry import ToolchainRegistry, default_registry

__all__ = [
    "MockToolchain",
    "Toolchain",
    "ToolchainRegistry",
    "default_registry",
]
