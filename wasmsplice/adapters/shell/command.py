"""
Shell command runner — the single place toolchain subprocesses start.

Runs an argument list with an explicit working directory and captures
its output. The process-wide cwd is never touched.
"""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path

from wasmsplice.core.models.project import BuildResult

logger = logging.getLogger(__name__)


def run_command(
    cmd: list[str],
    cwd: Path | str,
    timeout: int | None = None,
) -> BuildResult:
    """Run a command to completion and capture stdout/stderr.

    Never raises: a command that cannot be started comes back with
    ``error`` set, a timeout with ``error`` set and no exit status.

    Args:
        cmd: Argument list (no shell).
        cwd: Working directory for the command.
        timeout: Seconds before giving up. None blocks indefinitely.
    """
    command = " ".join(cmd)
    logger.debug("Executing: %s (cwd=%s)", command, cwd)
    start = time.monotonic()

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        return BuildResult(command=command, error=f"Command not found: {e.filename or cmd[0]}")
    except subprocess.TimeoutExpired:
        return BuildResult(command=command, error=f"Command timed out after {timeout}s")
    except OSError as e:
        return BuildResult(command=command, error=f"Command execution error: {e}")

    elapsed_ms = int((time.monotonic() - start) * 1000)
    return BuildResult(
        command=command,
        exit_status=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
        duration_ms=elapsed_ms,
    )
