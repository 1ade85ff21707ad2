"""
Toolchain registry — central lookup for build toolchains.

The registry is the single point of toolchain management. It handles
registration, lookup and mock mode. The pipeline never constructs a
toolchain directly — always through the registry.
"""

from __future__ import annotations

import logging
from typing import Any

from wasmsplice.adapters.base import Toolchain
from wasmsplice.adapters.mock import MockToolchain
from wasmsplice.core.models.config import SpliceConfig

logger = logging.getLogger(__name__)


class ToolchainRegistry:
    """Central registry for toolchains.

    Features:
        - Register/unregister toolchains by name
        - Mock mode: resolve every name to a mock toolchain
        - Query toolchain availability
    """

    def __init__(self, mock_mode: bool = False):
        self._toolchains: dict[str, Toolchain] = {}
        self._mock_mode = mock_mode
        self._mock_toolchain: Toolchain | None = None

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    def set_mock_mode(self, enabled: bool, mock_toolchain: Toolchain | None = None) -> None:
        """Enable or disable mock mode.

        Args:
            enabled: Whether to use mock mode.
            mock_toolchain: Optional custom mock. If None, a default
                MockToolchain is created on first use.
        """
        self._mock_mode = enabled
        self._mock_toolchain = mock_toolchain

    def register(self, toolchain: Toolchain) -> None:
        """Register a toolchain under its name."""
        name = toolchain.name
        if name in self._toolchains:
            logger.warning("Overwriting existing toolchain: %s", name)
        self._toolchains[name] = toolchain
        logger.debug("Registered toolchain: %s", name)

    def unregister(self, name: str) -> None:
        """Remove a toolchain from the registry."""
        self._toolchains.pop(name, None)

    def get(self, name: str) -> Toolchain | None:
        """Look up a toolchain by name (mock mode returns the mock)."""
        if self._mock_mode:
            if self._mock_toolchain is None:
                self._mock_toolchain = MockToolchain()
            return self._mock_toolchain
        return self._toolchains.get(name)

    def list_toolchains(self) -> list[str]:
        """List all registered toolchain names."""
        return list(self._toolchains.keys())

    def toolchain_status(self) -> dict[str, dict[str, Any]]:
        """Get availability status of all registered toolchains."""
        status = {}
        for name, toolchain in self._toolchains.items():
            try:
                available = toolchain.is_available()
            except Exception:
                available = False
            version = None
            version_fn = getattr(toolchain, "version", None)
            if available and callable(version_fn):
                version = version_fn()
            status[name] = {
                "name": name,
                "available": available,
                "version": version,
                "type": toolchain.__class__.__name__,
            }
        return status


def default_registry(config: SpliceConfig, mock_mode: bool = False) -> ToolchainRegistry:
    """Build a registry holding the configured wasm-pack toolchain."""
    from wasmsplice.adapters.toolchains.wasm_pack import WasmPackToolchain

    registry = ToolchainRegistry(mock_mode=mock_mode)
    registry.register(WasmPackToolchain(config.toolchain))
    if mock_mode:
        registry.set_mock_mode(True, MockToolchain(layout=config.layout))
    return registry
