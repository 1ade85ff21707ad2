"""
Working project models — the on-disk sub-project and what the
toolchain produces for it.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from wasmsplice.core.models.config import LayoutSettings


class BuildResult(BaseModel):
    """Outcome of one external toolchain invocation.

    ``error`` is set only when the process could not be launched at all;
    a process that ran and failed has ``exit_status != 0`` instead.
    """

    command: str = ""
    exit_status: int | None = None
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0
    error: str | None = None

    @property
    def launched(self) -> bool:
        return self.error is None

    @property
    def ok(self) -> bool:
        return self.launched and self.exit_status == 0


class ProjectHandle(BaseModel):
    """A scaffolded (or reused) sub-project, as seen by the toolchain."""

    name: str
    root: Path
    scaffold: BuildResult | None = None


class WorkingProject(BaseModel):
    """Paths of one module's sub-project under the staging root."""

    name: str
    root: Path
    manifest_path: Path
    source_entry_path: Path
    output_dir: Path
    binary_path: Path
    loader_path: Path

    @classmethod
    def for_module(
        cls,
        staging_root: Path,
        name: str,
        layout: LayoutSettings | None = None,
    ) -> WorkingProject:
        layout = layout or LayoutSettings()
        root = staging_root / name
        output_dir = root / layout.output_dir
        return cls(
            name=name,
            root=root,
            manifest_path=root / layout.manifest_file,
            source_entry_path=root / layout.source_entry,
            output_dir=output_dir,
            binary_path=output_dir / f"{name}{layout.binary_suffix}",
            loader_path=output_dir / f"{name}{layout.loader_suffix}",
        )

    def handle(self) -> ProjectHandle:
        return ProjectHandle(name=self.name, root=self.root)


class Artifact(BaseModel):
    """The wasm binary and its JS loader, read once per run."""

    binary: bytes
    loader: str | bytes


class EmbedResult(BaseModel):
    """Final output of a pipeline run."""

    module: str
    output: str
    binary_size: int = 0
    loader_size: int = 0
