"""
Source scanner — locate annotated module declarations in Rust source.

Recognizes outer attributes whose path ends in the configured name:

    #[wasmsplice]
    #[wasmsplice(...payload...)]
    #[wasmsplice::wasmsplice("deps.toml")]

followed by a module item. Nested modules are searched too.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from wasmsplice.core.errors import DeclarationError
from wasmsplice.core.models.tokens import Group, Ident, Punct, TokenTree
from wasmsplice.core.services.tokens import tokenize

logger = logging.getLogger(__name__)


@dataclass
class AnnotatedItem:
    """One annotated declaration found in a source file."""

    attribute_span: tuple[int, int]
    payload: list[TokenTree] = field(default_factory=list)
    item_tokens: list[TokenTree] = field(default_factory=list)

    @property
    def item_span(self) -> tuple[int, int]:
        return (self.item_tokens[0].span[0], self.item_tokens[-1].span[1])

    @property
    def span(self) -> tuple[int, int]:
        """Attribute start through the end of the item body."""
        return (self.attribute_span[0], self.item_span[1])


def _is_punct(token: TokenTree | None, char: str) -> bool:
    return isinstance(token, Punct) and token.char == char


def _attribute_payload(group: Group, attribute: str) -> list[TokenTree] | None:
    """Return the payload if ``group`` is ``[path::attribute(...)]``, else None."""
    children = group.children
    i = 0
    last_ident = ""
    while i < len(children):
        token = children[i]
        if isinstance(token, Ident):
            last_ident = token.text
            i += 1
        elif _is_punct(token, ":"):
            i += 1
        else:
            break

    if last_ident != attribute:
        return None
    rest = children[i:]
    if not rest:
        return []
    if len(rest) == 1 and isinstance(rest[0], Group) and rest[0].delimiter == "parenthesis":
        return list(rest[0].children)
    return None


def _collect_item(tokens: list[TokenTree], start: int) -> list[TokenTree]:
    """Tokens from ``start`` through the first brace group."""
    item: list[TokenTree] = []
    for token in tokens[start:]:
        item.append(token)
        if isinstance(token, Group) and token.delimiter == "brace":
            return item
        if _is_punct(token, ";"):
            break
    offset = tokens[start].span[0] if start < len(tokens) else 0
    raise DeclarationError(f"Annotated item at offset {offset} is not a module with a body")


def _scan(tokens: list[TokenTree], attribute: str, found: list[AnnotatedItem]) -> None:
    i = 0
    while i < len(tokens):
        token = tokens[i]
        nxt = tokens[i + 1] if i + 1 < len(tokens) else None

        if _is_punct(token, "#") and isinstance(nxt, Group) and nxt.delimiter == "bracket":
            payload = _attribute_payload(nxt, attribute)
            if payload is not None:
                item_tokens = _collect_item(tokens, i + 2)
                found.append(
                    AnnotatedItem(
                        attribute_span=(token.span[0], nxt.span[1]),
                        payload=payload,
                        item_tokens=item_tokens,
                    )
                )
                i += 2 + len(item_tokens)
                continue
            i += 2
            continue

        if isinstance(token, Group) and token.delimiter == "brace":
            _scan(token.children, attribute, found)
        i += 1


def find_annotated_items(text: str, attribute: str = "wasmsplice") -> list[AnnotatedItem]:
    """Find every ``#[attribute]`` module declaration in source order."""
    found: list[AnnotatedItem] = []
    _scan(tokenize(text), attribute, found)
    found.sort(key=lambda item: item.attribute_span[0])
    logger.debug("Found %d #[%s] items", len(found), attribute)
    return found
