"""
Build orchestrator — run the toolchain build in the sub-project root.
"""

from __future__ import annotations

import logging

from wasmsplice.adapters.base import Toolchain
from wasmsplice.core.errors import ToolchainFailureError, ToolchainInvocationError
from wasmsplice.core.models.project import BuildResult, WorkingProject

logger = logging.getLogger(__name__)


def build_project(
    project: WorkingProject,
    toolchain: Toolchain,
    check_exit_status: bool = True,
) -> BuildResult:
    """Build the sub-project and surface failures.

    Args:
        project: The materialized sub-project.
        toolchain: Toolchain to build with.
        check_exit_status: Raise on a non-zero exit. When False, a failed
            build only shows up later as missing artifacts.

    Raises:
        ToolchainInvocationError: The build tool cannot be launched.
        ToolchainFailureError: The build exited non-zero.
    """
    logger.info("Building %s with %s", project.name, toolchain.name)
    result = toolchain.build(project.handle())

    if not result.launched:
        raise ToolchainInvocationError(f"Could not build '{project.name}': {result.error}")

    if result.stderr.strip():
        logger.info("%s", result.stderr.strip())
    if result.stdout.strip():
        logger.debug("%s", result.stdout.strip())

    if result.exit_status != 0:
        if check_exit_status:
            raise ToolchainFailureError(result.command, result.exit_status or -1, result.stderr)
        logger.warning(
            "Build of %s exited with code %s; continuing",
            project.name,
            result.exit_status,
        )

    return result
