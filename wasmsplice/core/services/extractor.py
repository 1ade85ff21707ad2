"""
Declaration extractor — annotated item tokens → ModuleDeclaration.
"""

from __future__ import annotations

import logging
import textwrap

from wasmsplice.core.errors import DeclarationError
from wasmsplice.core.models.declaration import ModuleDeclaration
from wasmsplice.core.models.tokens import Group, Ident, TokenTree

logger = logging.getLogger(__name__)

# Visibility and container keywords that precede the module name
_SKIPPED_WORDS = frozenset({"pub", "mod", "crate", "self", "super", "in"})


def extract_declaration(tokens: list[TokenTree], source: str = "") -> ModuleDeclaration:
    """Find the module name and body in an item's tokens.

    The first identifier that is not a visibility/container keyword is
    the name; the first brace group is the body. Anything after the body
    is ignored.

    Args:
        tokens: Top-level tokens of the item (attribute already removed).
        source: The text the token spans point into. When given, the body
            and declaration are sliced verbatim; otherwise they are
            rebuilt from the tokens.

    Raises:
        DeclarationError: No name precedes the body, or there is no body.
    """
    name = ""
    body_group: Group | None = None

    body_index = 0

    for index, token in enumerate(tokens):
        if isinstance(token, Ident):
            if token.text in _SKIPPED_WORDS or name:
                continue
            name = token.text.removeprefix("r#")
        elif isinstance(token, Group):
            if token.delimiter == "brace":
                body_group = token
                body_index = index
                break

    if body_group is None:
        raise DeclarationError("Annotated item has no brace-delimited body")
    if not name:
        raise DeclarationError("Annotated item has no module name before its body")

    if source:
        start, end = body_group.inner_span
        body = textwrap.dedent(source[start:end]).strip()
        declaration = source[tokens[0].span[0] : body_group.span[1]]
    else:
        body = " ".join(str(c) for c in body_group.children)
        declaration = " ".join(str(t) for t in tokens[: body_index + 1])

    logger.debug("Extracted module '%s' (%d chars of body)", name, len(body))
    return ModuleDeclaration(name=name, body=body, source=declaration)
