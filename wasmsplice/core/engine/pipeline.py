"""
Splice pipeline — the linear path from annotated declaration to
embedded constants.

    extract → parse payload → materialize → synthesize manifest
            → build → read artifacts → embed

Every stage consumes the previous stage's output; any failure raises a
``SpliceError`` and aborts the run. All filesystem and subprocess work
is rooted at an explicit project root, never the process cwd.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from wasmsplice.adapters.base import Toolchain
from wasmsplice.core.errors import MissingEnvironmentError
from wasmsplice.core.models.config import SpliceConfig
from wasmsplice.core.models.manifest import DependencySpec
from wasmsplice.core.models.project import EmbedResult
from wasmsplice.core.models.tokens import TokenTree
from wasmsplice.core.services.artifacts import read_artifacts
from wasmsplice.core.services.embedder import embed
from wasmsplice.core.services.extractor import extract_declaration
from wasmsplice.core.services.manifest import synthesize_manifest
from wasmsplice.core.services.materializer import materialize_project
from wasmsplice.core.services.orchestrator import build_project
from wasmsplice.core.services.payload import parse_payload
from wasmsplice.core.services.source_scan import AnnotatedItem, find_annotated_items

logger = logging.getLogger(__name__)


@dataclass
class Expansion:
    """A source file with every annotated module spliced."""

    text: str
    results: list[EmbedResult] = field(default_factory=list)

    @property
    def modules(self) -> list[str]:
        return [r.module for r in self.results]


class SplicePipeline:
    """One configured pipeline bound to a project root and toolchain."""

    def __init__(
        self,
        project_root: Path | None,
        toolchain: Toolchain,
        config: SpliceConfig | None = None,
    ):
        if project_root is None:
            raise MissingEnvironmentError("Project root is not set")
        self.project_root = Path(project_root)
        self.toolchain = toolchain
        self.config = config or SpliceConfig()

    @property
    def staging_root(self) -> Path:
        return self.project_root / self.config.staging_dir

    def run(
        self,
        item_tokens: list[TokenTree],
        payload: list[TokenTree] | None = None,
        source: str = "",
        dependencies: DependencySpec | None = None,
    ) -> EmbedResult:
        """Run every stage for one annotated item.

        Args:
            item_tokens: Tokens of the module item (attribute removed).
            payload: Attribute argument tokens, inline or a quoted path.
            source: Text the token spans point into.
            dependencies: Extra dependencies merged after the payload's.

        Returns:
            EmbedResult holding the re-emitted declaration.
        """
        config = self.config

        # ── 1. Extract ───────────────────────────────────────────
        declaration = extract_declaration(item_tokens, source)
        logger.info("Splicing module '%s'", declaration.name)

        # ── 2. Parse payload (before any side effect) ───────────
        deps = parse_payload(payload or [], self.project_root, config.payload_mode)
        if dependencies is not None:
            deps = deps.merge(dependencies)

        # ── 3. Materialize sub-project ───────────────────────────
        project = materialize_project(
            declaration.name,
            declaration.body,
            self.staging_root,
            self.toolchain,
            config.layout,
        )

        # ── 4. Synthesize manifest ───────────────────────────────
        synthesize_manifest(project, deps, config.layout)

        # ── 5. Build ─────────────────────────────────────────────
        build_project(project, self.toolchain, config.check_exit_status)

        # ── 6. Read artifacts ────────────────────────────────────
        artifact = read_artifacts(project, config.loader_format)

        # ── 7. Embed ─────────────────────────────────────────────
        result = embed(declaration, artifact, config.convention, config.placement)
        logger.info(
            "Spliced '%s': %d byte wasm, %d byte loader",
            declaration.name,
            result.binary_size,
            result.loader_size,
        )
        return result

    def run_item(self, text: str, item: AnnotatedItem) -> EmbedResult:
        """Run the pipeline for an item found by the source scanner."""
        return self.run(item.item_tokens, item.payload, source=text)

    def expand(self, text: str) -> Expansion:
        """Splice every annotated module in a source file.

        Items are built in source order; replacements are applied back to
        front so earlier spans stay valid. Only the attribute is dropped:
        comments between it and the item are kept.
        """
        items = find_annotated_items(text, self.config.attribute)
        results = [self.run_item(text, item) for item in items]

        expanded = text
        for item, result in reversed(list(zip(items, results))):
            attr_start, attr_end = item.attribute_span
            item_start, item_end = item.item_span
            between = expanded[attr_end:item_start].lstrip()
            expanded = expanded[:attr_start] + between + result.output + expanded[item_end:]

        return Expansion(text=expanded, results=results)
