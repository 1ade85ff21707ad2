"""
Embedder — re-emit a declaration with its build artifacts as constants.

Output for the ``exported`` convention, placed inside the module:

    mod greeter {
        ...original body...

        pub const wasm: [u8; 1234] = [
            0, 97, 115, 109, ...
        ];
        pub const loader: &str = "...";
    }
"""

from __future__ import annotations

import logging

from wasmsplice.core.errors import DeclarationError
from wasmsplice.core.models.config import EmbeddingConvention, Placement
from wasmsplice.core.models.declaration import ModuleDeclaration
from wasmsplice.core.models.project import Artifact, EmbedResult

logger = logging.getLogger(__name__)

_BYTES_PER_LINE = 16
_INDENT = "    "

_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def rust_string_literal(text: str) -> str:
    """Quote text as a Rust string literal."""
    out = ['"']
    for ch in text:
        if ch in _STRING_ESCAPES:
            out.append(_STRING_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def rust_byte_array(data: bytes, indent: str = "") -> str:
    """Render bytes as a multi-line Rust array expression."""
    if not data:
        return "[]"
    lines = []
    for offset in range(0, len(data), _BYTES_PER_LINE):
        chunk = data[offset : offset + _BYTES_PER_LINE]
        lines.append(f"{indent}{_INDENT}" + ", ".join(str(b) for b in chunk) + ",")
    return "[\n" + "\n".join(lines) + f"\n{indent}]"


def render_constants(
    artifact: Artifact,
    convention: EmbeddingConvention,
    indent: str = "",
) -> str:
    """Render the two constant bindings at the given indentation."""
    prefix = convention.prefix
    binary = artifact.binary
    lines = [
        f"{indent}{prefix}const {convention.wasm_name}: [u8; {len(binary)}] = "
        f"{rust_byte_array(binary, indent)};"
    ]
    if isinstance(artifact.loader, bytes):
        lines.append(
            f"{indent}{prefix}const {convention.loader_name}: [u8; {len(artifact.loader)}] = "
            f"{rust_byte_array(artifact.loader, indent)};"
        )
    else:
        lines.append(
            f"{indent}{prefix}const {convention.loader_name}: &str = "
            f"{rust_string_literal(artifact.loader)};"
        )
    return "\n".join(lines)


def embed(
    declaration: ModuleDeclaration,
    artifact: Artifact,
    convention: EmbeddingConvention,
    placement: Placement = "inside",
) -> EmbedResult:
    """Append the artifact constants to the declaration.

    ``inside`` inserts them before the module's closing brace;
    ``alongside`` emits them right after the declaration.

    Raises:
        DeclarationError: The declaration text has no closing brace.
    """
    source = declaration.source.rstrip()

    if placement == "inside":
        close = source.rfind("}")
        if close == -1:
            raise DeclarationError(f"Declaration of '{declaration.name}' has no closing brace")
        head = source[:close].rstrip()
        constants = render_constants(artifact, convention, indent=_INDENT)
        output = f"{head}\n\n{constants}\n{source[close:]}"
    else:
        constants = render_constants(artifact, convention)
        output = f"{source}\n\n{constants}"

    loader_size = (
        len(artifact.loader)
        if isinstance(artifact.loader, bytes)
        else len(artifact.loader.encode("utf-8"))
    )
    logger.debug("Embedded %s (%s, %s)", declaration.name, placement, convention.wasm_name)
    return EmbedResult(
        module=declaration.name,
        output=output,
        binary_size=len(artifact.binary),
        loader_size=loader_size,
    )
