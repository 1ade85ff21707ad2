"""
Mock toolchain — test double for cargo + wasm-pack.

Used in mock mode and throughout the test suite to exercise the whole
pipeline without a Rust installation. Scaffolds a minimal crate and
"builds" deterministic artifacts derived from the source entry, so a
rebuilt module visibly reflects its latest body.
"""

from __future__ import annotations

from pathlib import Path

from wasmsplice.adapters.base import Toolchain
from wasmsplice.core.models.config import LayoutSettings
from wasmsplice.core.models.project import BuildResult, ProjectHandle, WorkingProject

WASM_MAGIC = b"\x00asm\x01\x00\x00\x00"

_CARGO_TEMPLATE = """\
[package]
name = "{name}"
version = "0.1.0"
edition = "2021"

[dependencies]
"""

_PLACEHOLDER_SOURCE = """\
pub fn add(left: u64, right: u64) -> u64 {
    left + right
}
"""


class MockToolchain(Toolchain):
    """Universal mock toolchain for testing.

    By default, scaffolding and building succeed. Can be configured to
    fail to launch, exit non-zero, or leave out an artifact.
    """

    def __init__(
        self,
        toolchain_name: str = "mock",
        available: bool = True,
        layout: LayoutSettings | None = None,
        launch_error: str | None = None,
        build_exit_status: int = 0,
        omit_binary: bool = False,
        omit_loader: bool = False,
    ):
        self._name = toolchain_name
        self._available = available
        self._layout = layout or LayoutSettings()
        self.launch_error = launch_error
        self.build_exit_status = build_exit_status
        self.omit_binary = omit_binary
        self.omit_loader = omit_loader
        self._call_log: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[tuple[str, str]]:
        """(operation, module name) for every call received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls(self, operation: str) -> list[str]:
        """Module names passed to one operation ('scaffold' or 'build')."""
        return [name for op, name in self._call_log if op == operation]

    def is_available(self) -> bool:
        return self._available

    def scaffold(self, name: str, staging_root: Path) -> ProjectHandle:
        self._call_log.append(("scaffold", name))
        root = staging_root / name
        command = f"cargo new --lib {name}"

        if self.launch_error:
            result = BuildResult(command=command, error=self.launch_error)
        elif root.exists():
            result = BuildResult(
                command=command,
                exit_status=101,
                stderr=f"error: destination `{root}` already exists\n",
            )
        else:
            project = WorkingProject.for_module(staging_root, name, self._layout)
            project.source_entry_path.parent.mkdir(parents=True, exist_ok=True)
            project.manifest_path.write_text(_CARGO_TEMPLATE.format(name=name), encoding="utf-8")
            project.source_entry_path.write_text(_PLACEHOLDER_SOURCE, encoding="utf-8")
            result = BuildResult(
                command=command,
                exit_status=0,
                stderr=f"     Created library `{name}` package\n",
            )
        return ProjectHandle(name=name, root=root, scaffold=result)

    def build(self, handle: ProjectHandle) -> BuildResult:
        self._call_log.append(("build", handle.name))
        command = "wasm-pack build --target web"

        if self.launch_error:
            return BuildResult(command=command, error=self.launch_error)

        project = WorkingProject.for_module(handle.root.parent, handle.name, self._layout)
        source = project.source_entry_path.read_bytes() if project.source_entry_path.is_file() else b""

        project.output_dir.mkdir(parents=True, exist_ok=True)
        if not self.omit_binary:
            project.binary_path.write_bytes(WASM_MAGIC + source)
        if not self.omit_loader:
            project.loader_path.write_text(
                f"// mock loader for {handle.name}\n"
                f"export default async function init() {{ return '{handle.name}_bg.wasm'; }}\n",
                encoding="utf-8",
            )

        stderr = "[INFO]: :-) Done in 0.01s\n"
        if self.build_exit_status != 0:
            stderr = "error[E0425]: cannot find value in this scope\n"
        return BuildResult(
            command=command,
            exit_status=self.build_exit_status,
            stdout="",
            stderr=stderr,
        )

    def reset(self) -> None:
        """Clear the call log."""
        self._call_log.clear()
