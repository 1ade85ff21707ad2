"""
Pipeline errors — every failure mode of a splice run.

All errors are fatal: the pipeline has no partial-failure or recovery
semantics. Use cases catch ``SpliceError`` and report ``kind`` plus the
message; the CLI turns that into a red line and exit code 1.
"""

from __future__ import annotations

from pathlib import Path


class SpliceError(Exception):
    """Base class for all pipeline failures."""

    kind = "SpliceFailure"


class MissingEnvironmentError(SpliceError):
    """The enclosing project root cannot be determined."""

    kind = "MissingEnvironment"


class DeclarationError(SpliceError):
    """The annotated item is not a usable module declaration."""

    kind = "DeclarationFailure"


class IoFailureError(SpliceError):
    """A directory-create, read or write failed."""

    kind = "IoFailure"

    def __init__(self, operation: str, path: Path | str, cause: Exception | None = None):
        self.operation = operation
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Cannot {operation} {self.path}{detail}")


class ManifestParseError(SpliceError):
    """A manifest or dependency fragment is not valid TOML."""

    kind = "ManifestParseFailure"


class ToolchainInvocationError(SpliceError):
    """The scaffold generator or build tool could not be launched."""

    kind = "ToolchainInvocationFailure"


class ToolchainFailureError(SpliceError):
    """The build tool ran but exited with a non-zero status."""

    kind = "ToolchainFailure"

    def __init__(self, command: str, exit_status: int, stderr: str = ""):
        self.command = command
        self.exit_status = exit_status
        self.stderr = stderr
        tail = stderr.strip().splitlines()[-1] if stderr.strip() else ""
        message = f"'{command}' exited with code {exit_status}"
        if tail:
            message += f": {tail}"
        super().__init__(message)


class ArtifactMissingError(SpliceError):
    """An expected build output file is absent after the build."""

    kind = "ArtifactMissing"

    def __init__(self, path: Path | str, what: str = "artifact"):
        self.path = Path(path)
        self.what = what
        super().__init__(f"Missing {what}: {self.path}")
