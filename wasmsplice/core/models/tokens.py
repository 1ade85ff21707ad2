"""
Token tree model — the lexed form of Rust source.

Mirrors the shape a procedural macro sees: identifiers, literals,
single-character punctuation and delimited groups. Every token keeps
the ``(start, end)`` offsets of its source text so declarations can be
re-emitted verbatim.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

Delimiter = Literal["brace", "bracket", "parenthesis", "none"]

# Opening / closing characters per delimiter
DELIMITER_CHARS: dict[str, tuple[str, str]] = {
    "brace": ("{", "}"),
    "bracket": ("[", "]"),
    "parenthesis": ("(", ")"),
    "none": ("", ""),
}


class _Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    span: tuple[int, int] = (0, 0)


class Ident(_Token):
    """An identifier or keyword (``mod``, ``pub``, ``true``, ``web``)."""

    kind: Literal["ident"] = "ident"
    text: str

    def __str__(self) -> str:
        return self.text


class Lit(_Token):
    """A literal exactly as written (``"*"``, ``1.0``, ``b'x'``)."""

    kind: Literal["literal"] = "literal"
    text: str

    @property
    def is_string(self) -> bool:
        return self.text.startswith('"') or (
            self.text.startswith("r") and self.text.lstrip("r#").startswith('"')
        )

    def string_value(self) -> str:
        """Unquote a string literal (plain or raw)."""
        text = self.text
        if text.startswith("r"):
            hashes = len(text) - len(text.lstrip("r#")) - 1
            return text[1 + hashes + 1 : len(text) - hashes - 1]
        inner = text[1:-1]
        return _unescape(inner)

    def __str__(self) -> str:
        return self.text


class Punct(_Token):
    """A single punctuation character."""

    kind: Literal["punct"] = "punct"
    char: str

    def __str__(self) -> str:
        return self.char


class Group(_Token):
    """A delimited sequence of token trees."""

    kind: Literal["group"] = "group"
    delimiter: Delimiter = "none"
    children: list[TokenTree] = Field(default_factory=list)

    @property
    def inner_span(self) -> tuple[int, int]:
        """Offsets of the text between the delimiters."""
        if self.delimiter == "none":
            return self.span
        return (self.span[0] + 1, self.span[1] - 1)

    def __str__(self) -> str:
        open_, close = DELIMITER_CHARS[self.delimiter]
        return open_ + " ".join(str(c) for c in self.children) + close


TokenTree = Annotated[Union[Ident, Lit, Punct, Group], Field(discriminator="kind")]

Group.model_rebuild()


_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\", "0": "\0", '"': '"', "'": "'"}


def _unescape(inner: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(inner):
        ch = inner[i]
        if ch != "\\" or i + 1 >= len(inner):
            out.append(ch)
            i += 1
            continue
        nxt = inner[i + 1]
        if nxt in _ESCAPES:
            out.append(_ESCAPES[nxt])
            i += 2
        elif nxt == "x":
            out.append(chr(int(inner[i + 2 : i + 4], 16)))
            i += 4
        elif nxt == "u" and inner[i + 2 : i + 3] == "{":
            end = inner.index("}", i)
            out.append(chr(int(inner[i + 3 : end].replace("_", ""), 16)))
            i = end + 1
        elif nxt == "\n":
            # line continuation: skip the newline and leading whitespace
            i += 2
            while i < len(inner) and inner[i] in " \t\r\n":
                i += 1
        else:
            out.append(ch)
            i += 1
    return "".join(out)
