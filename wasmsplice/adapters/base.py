"""
Toolchain base — the protocol contract between the pipeline and the
external build tools.

The pipeline only talks to toolchains through this protocol, never
directly to ``cargo`` or ``wasm-pack``, so the real tools can be
swapped for a test double without touching pipeline logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from wasmsplice.core.models.project import BuildResult, ProjectHandle


class Toolchain(ABC):
    """Abstract base class for all toolchains.

    Toolchains perform external side effects and return results.
    They NEVER raise for tool failures. A tool that cannot be launched
    is reported in ``BuildResult.error``, a tool that fails reports a
    non-zero ``exit_status``. The pipeline decides what is fatal.

    To create a new toolchain:
        1. Subclass Toolchain
        2. Implement name, is_available, scaffold, build
        3. Register it in the ToolchainRegistry
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The toolchain identifier (e.g., 'wasm-pack', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the underlying tools are installed.

        Should be fast and never raise.
        """

    @abstractmethod
    def scaffold(self, name: str, staging_root: Path) -> ProjectHandle:
        """Create an empty library project ``staging_root/name``.

        A scaffold that fails because the project already exists is
        reported through ``handle.scaffold`` like any other failure.
        """

    @abstractmethod
    def build(self, handle: ProjectHandle) -> BuildResult:
        """Build the project at ``handle.root`` for the web target."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
