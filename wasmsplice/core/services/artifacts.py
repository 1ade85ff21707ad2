"""
Artifact reader — load the wasm binary and JS loader after a build.
"""

from __future__ import annotations

import logging
from pathlib import Path

from wasmsplice.core.errors import ArtifactMissingError, IoFailureError
from wasmsplice.core.models.config import LoaderFormat
from wasmsplice.core.models.project import Artifact, WorkingProject

logger = logging.getLogger(__name__)


def _read(path: Path, what: str) -> bytes:
    if not path.is_file():
        raise ArtifactMissingError(path, what)
    try:
        return path.read_bytes()
    except OSError as e:
        raise IoFailureError(f"read {what}", path, e) from e


def read_artifacts(project: WorkingProject, loader_format: LoaderFormat = "text") -> Artifact:
    """Read ``<module>_bg.wasm`` and ``<module>.js`` from the output dir.

    The binary is always raw bytes; the loader is decoded UTF-8 text or
    raw bytes depending on ``loader_format``.

    Raises:
        ArtifactMissingError: Either file is absent.
    """
    binary = _read(project.binary_path, "wasm binary")
    raw_loader = _read(project.loader_path, "JS loader")

    loader: str | bytes = raw_loader
    if loader_format == "text":
        try:
            loader = raw_loader.decode("utf-8")
        except UnicodeDecodeError as e:
            raise IoFailureError("decode JS loader", project.loader_path, e) from e

    logger.debug(
        "Read artifacts for %s: %d byte binary, %d byte loader",
        project.name,
        len(binary),
        len(raw_loader),
    )
    return Artifact(binary=binary, loader=loader)
