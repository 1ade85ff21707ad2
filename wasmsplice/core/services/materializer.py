"""
Project materializer — ensure the sub-project exists and holds the
current module body.

The staging directory is durable: a second run for the same module
reuses the scaffold. The source entry is always overwritten, so the
body embedded in the surrounding program stays authoritative.
"""

from __future__ import annotations

import logging
from pathlib import Path

from wasmsplice.adapters.base import Toolchain
from wasmsplice.core.errors import IoFailureError, ToolchainInvocationError
from wasmsplice.core.models.config import LayoutSettings
from wasmsplice.core.models.project import WorkingProject

logger = logging.getLogger(__name__)


def ensure_staging_root(staging_root: Path) -> Path:
    """Create the staging directory if needed."""
    try:
        staging_root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IoFailureError("create staging directory", staging_root, e) from e
    return staging_root


def write_source_entry(project: WorkingProject, body: str) -> None:
    """Replace the sub-project's source entry with ``body``."""
    try:
        project.source_entry_path.parent.mkdir(parents=True, exist_ok=True)
        project.source_entry_path.write_text(body, encoding="utf-8")
    except OSError as e:
        raise IoFailureError("write source entry", project.source_entry_path, e) from e


def materialize_project(
    name: str,
    body: str,
    staging_root: Path,
    toolchain: Toolchain,
    layout: LayoutSettings | None = None,
) -> WorkingProject:
    """Scaffold (or reuse) ``staging_root/name`` and write the body into it.

    A scaffold that runs but fails (usually because the project already
    exists) is the normal reuse path and only logged.

    Raises:
        IoFailureError: The staging root or source entry cannot be written.
        ToolchainInvocationError: The scaffold generator cannot be launched.
    """
    ensure_staging_root(staging_root)
    project = WorkingProject.for_module(staging_root, name, layout)

    handle = toolchain.scaffold(name, staging_root)
    result = handle.scaffold
    if result is not None:
        if not result.launched:
            raise ToolchainInvocationError(
                f"Could not run scaffold generator '{result.command}': {result.error}"
            )
        if result.stderr.strip():
            logger.info("%s", result.stderr.strip())
        if result.ok:
            logger.info("Scaffolded sub-project %s", project.root)
        else:
            logger.debug("Reusing existing sub-project %s (exit %s)", project.root, result.exit_status)

    write_source_entry(project, body)
    return project
