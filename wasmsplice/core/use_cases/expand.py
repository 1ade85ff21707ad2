"""
Expand use case — splice every annotated module of a source file.

This is the top-level orchestrator: it loads config, resolves the
project root, picks the toolchain, runs the pipeline over the file and
writes the expanded source. The full vertical slice from CLI intent to
embedded artifacts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from wasmsplice.adapters.registry import ToolchainRegistry, default_registry
from wasmsplice.core.config.loader import (
    ConfigError,
    find_config_file,
    load_config,
    resolve_project_root,
)
from wasmsplice.core.engine.pipeline import SplicePipeline
from wasmsplice.core.errors import IoFailureError, SpliceError, ToolchainInvocationError
from wasmsplice.core.models.project import EmbedResult

logger = logging.getLogger(__name__)


@dataclass
class ExpandResult:
    """Result of expanding one source file."""

    source_path: Path | None = None
    output_path: Path | None = None
    project_root: Path | None = None
    modules: list[EmbedResult] = field(default_factory=list)
    text: str | None = None
    error: str | None = None
    error_kind: str | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
            return result

        result["source"] = str(self.source_path)
        result["output"] = str(self.output_path) if self.output_path else None
        result["project_root"] = str(self.project_root)
        result["modules"] = [
            {
                "name": m.module,
                "binary_size": m.binary_size,
                "loader_size": m.loader_size,
            }
            for m in self.modules
        ]
        return result


def expand_file(
    source_path: Path,
    output_path: Path | None = None,
    in_place: bool = False,
    config_path: Path | None = None,
    project_root: Path | None = None,
    mock_mode: bool = False,
    registry: ToolchainRegistry | None = None,
) -> ExpandResult:
    """Expand all annotated modules in ``source_path``.

    Args:
        source_path: Rust source file to expand.
        output_path: Where to write the result. None keeps it in
            ``result.text`` only.
        in_place: Overwrite ``source_path`` with the result.
        config_path: Explicit wasmsplice.yml (default: auto-detect).
        project_root: Explicit project root (default: environment/config).
        mock_mode: Use the mock toolchain.
        registry: Optional pre-configured toolchain registry.

    Returns:
        ExpandResult; failures are reported in ``error``/``error_kind``.
    """
    result = ExpandResult(source_path=source_path)

    # ── Load config + resolve root ───────────────────────────────
    try:
        if config_path is None:
            config_path = find_config_file(source_path.parent)
        config = load_config(config_path)
        root = resolve_project_root(project_root, config_path)
    except ConfigError as e:
        result.error = str(e)
        result.error_kind = "ConfigFailure"
        return result
    except SpliceError as e:
        result.error = str(e)
        result.error_kind = e.kind
        return result

    result.project_root = root

    # ── Resolve toolchain ────────────────────────────────────────
    if registry is None:
        registry = default_registry(config, mock_mode=mock_mode)

    try:
        toolchain = registry.get(config.toolchain.name)
        if toolchain is None:
            raise ToolchainInvocationError(
                f"No toolchain registered for '{config.toolchain.name}'"
            )

        # ── Read, expand, write ──────────────────────────────────
        try:
            text = source_path.read_text(encoding="utf-8")
        except OSError as e:
            raise IoFailureError("read source", source_path, e) from e

        pipeline = SplicePipeline(root, toolchain, config)
        expansion = pipeline.expand(text)
        result.modules = expansion.results
        result.text = expansion.text

        target = source_path if in_place else output_path
        if target is not None:
            try:
                target.write_text(expansion.text, encoding="utf-8")
            except OSError as e:
                raise IoFailureError("write output", target, e) from e
            result.output_path = target

    except SpliceError as e:
        logger.error("Expansion of %s failed: %s", source_path, e)
        result.error = str(e)
        result.error_kind = e.kind
        return result

    logger.info("Expanded %d module(s) in %s", len(result.modules), source_path)
    return result
