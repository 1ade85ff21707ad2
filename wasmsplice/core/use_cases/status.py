"""
Status use case — what sub-projects live in the staging directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from wasmsplice.core.config.loader import (
    ConfigError,
    find_config_file,
    load_config,
    resolve_project_root,
)
from wasmsplice.core.errors import SpliceError
from wasmsplice.core.models.project import WorkingProject


@dataclass
class ModuleStatus:
    """On-disk state of one materialized sub-project."""

    name: str
    has_manifest: bool = False
    has_source: bool = False
    binary_size: int | None = None
    has_loader: bool = False

    @property
    def built(self) -> bool:
        return self.binary_size is not None and self.has_loader

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "has_manifest": self.has_manifest,
            "has_source": self.has_source,
            "binary_size": self.binary_size,
            "has_loader": self.has_loader,
            "built": self.built,
        }


@dataclass
class StatusResult:
    """Result of inspecting the staging directory."""

    project_root: Path | None = None
    staging_root: Path | None = None
    modules: list[ModuleStatus] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "project_root": str(self.project_root),
            "staging_root": str(self.staging_root),
            "modules": [m.to_dict() for m in self.modules],
        }


def get_status(
    config_path: Path | None = None,
    project_root: Path | None = None,
) -> StatusResult:
    """List sub-projects under the staging root and their build outputs."""
    result = StatusResult()

    try:
        if config_path is None:
            config_path = find_config_file()
        config = load_config(config_path)
        root = resolve_project_root(project_root, config_path)
    except (ConfigError, SpliceError) as e:
        result.error = str(e)
        return result

    staging_root = root / config.staging_dir
    result.project_root = root
    result.staging_root = staging_root

    if not staging_root.is_dir():
        return result

    for child in sorted(staging_root.iterdir()):
        if not child.is_dir():
            continue
        project = WorkingProject.for_module(staging_root, child.name, config.layout)
        status = ModuleStatus(
            name=child.name,
            has_manifest=project.manifest_path.is_file(),
            has_source=project.source_entry_path.is_file(),
            has_loader=project.loader_path.is_file(),
        )
        if project.binary_path.is_file():
            status.binary_size = project.binary_path.stat().st_size
        result.modules.append(status)

    return result
