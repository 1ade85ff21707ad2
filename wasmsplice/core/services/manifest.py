"""
Manifest synthesizer — make a scaffolded Cargo.toml build as a wasm cdylib.

Order of operations matters for idempotence: the canonical crate type
and bindgen dependency are set first, then the payload's dependencies
are merged on top, then the whole file is rewritten.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from wasmsplice.core.errors import IoFailureError, ManifestParseError
from wasmsplice.core.models.config import LayoutSettings
from wasmsplice.core.models.manifest import DependencySpec, ManifestDocument
from wasmsplice.core.models.project import WorkingProject

logger = logging.getLogger(__name__)


def load_manifest(path: Path) -> ManifestDocument:
    """Read and parse an existing manifest.

    Raises:
        IoFailureError: The file is missing or unreadable.
        ManifestParseError: The file is not valid TOML.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise IoFailureError("read manifest", path, e) from e

    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ManifestParseError(f"Invalid TOML in {path}: {e}") from e
    return ManifestDocument(data=data)


def save_manifest(document: ManifestDocument, path: Path) -> None:
    """Overwrite the manifest file with the serialized document."""
    try:
        path.write_text(document.to_toml(), encoding="utf-8")
    except OSError as e:
        raise IoFailureError("write manifest", path, e) from e


def apply_build_settings(
    document: ManifestDocument,
    dependencies: DependencySpec,
    layout: LayoutSettings,
) -> ManifestDocument:
    """Apply crate type, bindgen dependency and merged dependencies in place."""
    document.set_crate_type(layout.crate_type)
    document.set_dependency(layout.bindgen_dependency, layout.bindgen_version)
    document.merge_dependencies(dependencies)
    return document


def synthesize_manifest(
    project: WorkingProject,
    dependencies: DependencySpec | None = None,
    layout: LayoutSettings | None = None,
) -> ManifestDocument:
    """Rewrite the sub-project manifest for a wasm build.

    Args:
        project: The materialized sub-project.
        dependencies: Extra dependencies; their values win on collision.
        layout: Crate type and bindgen dependency to enforce.

    Returns:
        The document as written.
    """
    layout = layout or LayoutSettings()
    dependencies = dependencies or DependencySpec()

    document = load_manifest(project.manifest_path)
    apply_build_settings(document, dependencies, layout)
    save_manifest(document, project.manifest_path)

    logger.info(
        "Synthesized %s (%d dependencies)",
        project.manifest_path,
        len(document.dependencies),
    )
    return document
