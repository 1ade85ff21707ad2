"""
Manifest models — dependency tables and the sub-project Cargo.toml.

``DependencySpec`` is the flat table parsed from a macro payload.
``ManifestDocument`` wraps the parsed manifest tree and knows how to
apply the settings every wasm sub-project needs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import tomli_w
from pydantic import BaseModel, Field


class DependencySpec(BaseModel):
    """Dependency name → version string, feature list or nested table."""

    entries: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> DependencySpec:
        """Build a spec directly from a Python mapping."""
        return cls(entries=dict(mapping or {}))

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> DependencySpec:
        """Extract the ``[dependencies]`` table of a parsed TOML document."""
        deps = document.get("dependencies")
        if isinstance(deps, Mapping):
            return cls.from_mapping(deps)
        return cls()

    def merge(self, other: DependencySpec) -> DependencySpec:
        """Return a new spec with ``other``'s entries layered on top."""
        merged = dict(self.entries)
        merged.update(other.entries)
        return DependencySpec(entries=merged)

    def keys(self) -> list[str]:
        return list(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __getitem__(self, name: str) -> Any:
        return self.entries[name]


class ManifestDocument(BaseModel):
    """A parsed Cargo.toml as a plain nested dict."""

    data: dict[str, Any] = Field(default_factory=dict)

    def table(self, name: str) -> dict[str, Any]:
        """Return the named top-level table, replacing any non-table value."""
        value = self.data.get(name)
        if not isinstance(value, dict):
            value = {}
            self.data[name] = value
        return value

    @property
    def lib(self) -> dict[str, Any]:
        return self.table("lib")

    @property
    def dependencies(self) -> dict[str, Any]:
        return self.table("dependencies")

    def set_crate_type(self, crate_type: str) -> None:
        self.lib["crate-type"] = [crate_type]

    def set_dependency(self, name: str, value: Any) -> None:
        self.dependencies[name] = value

    def merge_dependencies(self, spec: DependencySpec) -> None:
        self.dependencies.update(spec.entries)

    def to_toml(self) -> str:
        return tomli_w.dumps(self.data)
