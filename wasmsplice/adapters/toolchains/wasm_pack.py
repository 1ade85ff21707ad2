"""
wasm-pack toolchain — cargo scaffolding plus ``wasm-pack build``.

Scaffolds with ``cargo new --lib <module>`` in the staging root and
builds with ``wasm-pack build --target web`` in the sub-project root.
Both commands are configurable through ``ToolchainSettings``.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from pathlib import Path

from wasmsplice.adapters.base import Toolchain
from wasmsplice.adapters.shell.command import run_command
from wasmsplice.core.models.config import ToolchainSettings
from wasmsplice.core.models.project import BuildResult, ProjectHandle

logger = logging.getLogger(__name__)


class WasmPackToolchain(Toolchain):
    """The real Rust → wasm toolchain.

    Settings:
        scaffold_command (list[str]): Prefix; the module name is appended.
        build_command (list[str]): Run as-is in the sub-project root.
        timeout (int | None): Per-command timeout in seconds.
    """

    def __init__(self, settings: ToolchainSettings | None = None):
        self._settings = settings or ToolchainSettings()

    @property
    def name(self) -> str:
        return self._settings.name

    @property
    def settings(self) -> ToolchainSettings:
        return self._settings

    def executables(self) -> list[str]:
        """Executables this toolchain needs on PATH."""
        names = []
        for cmd in (self._settings.scaffold_command, self._settings.build_command):
            if cmd and cmd[0] not in names:
                names.append(cmd[0])
        return names

    def is_available(self) -> bool:
        return all(shutil.which(exe) is not None for exe in self.executables())

    def version(self) -> str | None:
        """Detect the build tool's version string."""
        if not self._settings.build_command:
            return None
        try:
            result = subprocess.run(
                [self._settings.build_command[0], "--version"],
                capture_output=True,
                text=True,
                timeout=5,
            )
            if result.returncode == 0:
                # "wasm-pack 0.12.1" → "0.12.1"
                match = re.search(r"(\d+\.\d+\.\d+)", result.stdout + result.stderr)
                return match.group(1) if match else None
        except (subprocess.TimeoutExpired, FileNotFoundError):
            pass
        return None

    def scaffold(self, name: str, staging_root: Path) -> ProjectHandle:
        cmd = [*self._settings.scaffold_command, name]
        result = run_command(cmd, cwd=staging_root, timeout=self._settings.timeout)
        return ProjectHandle(name=name, root=staging_root / name, scaffold=result)

    def build(self, handle: ProjectHandle) -> BuildResult:
        return run_command(
            list(self._settings.build_command),
            cwd=handle.root,
            timeout=self._settings.timeout,
        )
