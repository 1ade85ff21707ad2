"""
Dependency payload parser — macro attribute arguments → DependencySpec.

Two payload shapes are accepted:

    #[wasmsplice(
        [dependencies]
        web-sys = { version = "0.3", features = ["Document"] }
    )]

    #[wasmsplice("wasm-deps.toml")]

Inline payloads are reflowed back into TOML text from their tokens and
parsed with ``tomllib``. A single string literal is a path to a TOML
fragment, resolved against the enclosing project root.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from wasmsplice.core.errors import IoFailureError, ManifestParseError
from wasmsplice.core.models.config import PayloadMode
from wasmsplice.core.models.manifest import DependencySpec
from wasmsplice.core.models.tokens import DELIMITER_CHARS, Group, Ident, Lit, Punct, TokenTree

logger = logging.getLogger(__name__)


# ── Reflow ──────────────────────────────────────────────────────


def _token_to_toml(token: TokenTree, prev: TokenTree | None, nested: bool) -> str:
    if isinstance(token, Group):
        # the first child of a group (`[[bin]]`) stays on its opener's line
        glued = isinstance(prev, Punct) or (nested and prev is None)
        newline = "" if glued else "\n"
        open_, close = DELIMITER_CHARS[token.delimiter]
        return f"{newline}{open_}{_reflow(token.children, nested=True)}{close}"

    if isinstance(token, Ident):
        # `true`/`false` are idents too; a key after them starts a new line
        newline = "\n" if isinstance(prev, (Group, Lit, Ident)) else ""
        return f"{newline}{token.text}"

    if isinstance(token, Lit):
        # a quoted key after a value starts a new line
        newline = "\n" if isinstance(prev, (Group, Lit, Ident)) else ""
        return f"{newline}{token.text}"

    # Punctuation only breaks after a closed group
    newline = "\n" if isinstance(prev, Group) else ""
    return f"{newline}{token}"


def _reflow(tokens: list[TokenTree], nested: bool) -> str:
    buf: list[str] = []
    prev: TokenTree | None = None
    for token in tokens:
        buf.append(_token_to_toml(token, prev, nested))
        prev = token
    return "".join(buf)


def tokens_to_toml(tokens: list[TokenTree]) -> str:
    """Re-serialize a token stream as line-oriented TOML text.

    Best-effort: whitespace and comments of the original are gone, so
    line breaks are re-inserted before anything that follows a closed
    group, a literal or a bare word. Punctuation glues to its neighbours,
    keeping ``wasm-bindgen`` and ``dependencies.web-sys`` intact.
    """
    return _reflow(tokens, nested=False)


# ── Parsing ─────────────────────────────────────────────────────


def parse_inline_payload(tokens: list[TokenTree]) -> DependencySpec:
    """Parse inline TOML-like tokens into a dependency table."""
    text = tokens_to_toml(tokens)
    logger.debug("Reflowed inline payload:\n%s", text)
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ManifestParseError(f"Invalid inline dependency payload: {e}\n{text}") from e
    return DependencySpec.from_document(document)


def parse_file_payload(path: str | Path, project_root: Path) -> DependencySpec:
    """Load a TOML fragment file and return its dependency table.

    Relative paths resolve against ``project_root``.
    """
    target = Path(path)
    if not target.is_absolute():
        target = project_root / target

    logger.debug("Loading dependency fragment from %s", target)
    try:
        raw = target.read_text(encoding="utf-8")
    except OSError as e:
        raise IoFailureError("read dependency fragment", target, e) from e

    try:
        document = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ManifestParseError(f"Invalid TOML in {target}: {e}") from e
    return DependencySpec.from_document(document)


def is_file_reference(tokens: list[TokenTree]) -> bool:
    """A payload that is exactly one string literal names a fragment file."""
    return len(tokens) == 1 and isinstance(tokens[0], Lit) and tokens[0].is_string


def parse_payload(
    tokens: list[TokenTree],
    project_root: Path,
    mode: PayloadMode = "auto",
) -> DependencySpec:
    """Parse a macro payload in the configured mode.

    Args:
        tokens: The attribute's argument tokens (may be empty).
        project_root: Enclosing project root for fragment paths.
        mode: ``auto`` picks by shape; ``inline``/``file`` force a mode.

    Raises:
        IoFailureError: The fragment file cannot be read.
        ManifestParseError: The payload or fragment is not valid TOML,
            or ``file`` mode was forced on a non-path payload.
    """
    if not tokens:
        return DependencySpec()

    if mode == "file" or (mode == "auto" and is_file_reference(tokens)):
        if not is_file_reference(tokens):
            raise ManifestParseError(
                "File payload mode expects a single quoted path, "
                f"got {len(tokens)} tokens"
            )
        literal = tokens[0]
        assert isinstance(literal, Lit)
        return parse_file_payload(literal.string_value(), project_root)

    return parse_inline_payload(tokens)
