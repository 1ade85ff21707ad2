"""
Rust token lexer — source text → token trees.

Produces the same coarse structure a procedural macro receives:
identifiers, literals, single-char punctuation, and ``()``/``[]``/``{}``
groups. Comments are dropped. Every token records its source span so
callers can slice the original text back out.
"""

from __future__ import annotations

import logging
import re

from wasmsplice.core.errors import DeclarationError
from wasmsplice.core.models.tokens import Group, Ident, Lit, Punct, TokenTree

logger = logging.getLogger(__name__)

_OPEN = {"(": "parenthesis", "[": "bracket", "{": "brace"}
_CLOSE = {")": "parenthesis", "]": "bracket", "}": "brace"}

_RAW_STRING = re.compile(r'[bc]?r(#*)"')
_QUOTED_STRING = re.compile(r'[bc]?"')
_NUMBER = re.compile(
    r"(?:0x[0-9a-fA-F_]+|0o[0-7_]+|0b[01_]+"
    r"|[0-9][0-9_]*(?:\.[0-9][0-9_]*)?(?:[eE][+-]?[0-9_]+)?)"
    r"(?:[A-Za-z_][A-Za-z0-9_]*)?"
)


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


class _Frame:
    """An open group while lexing."""

    def __init__(self, delimiter: str, start: int):
        self.delimiter = delimiter
        self.start = start
        self.children: list[TokenTree] = []


class _Lexer:
    def __init__(self, text: str):
        self.text = text
        self.n = len(text)
        self.pos = 0
        self.stack: list[_Frame] = [_Frame("none", 0)]

    # ── Helpers ─────────────────────────────────────────────────

    def _error(self, message: str, offset: int) -> DeclarationError:
        line = self.text.count("\n", 0, offset) + 1
        return DeclarationError(f"{message} at line {line} (offset {offset})")

    def _emit(self, token: TokenTree) -> None:
        self.stack[-1].children.append(token)

    def _skip_block_comment(self, start: int) -> int:
        depth = 0
        i = start
        while i < self.n:
            if self.text.startswith("/*", i):
                depth += 1
                i += 2
            elif self.text.startswith("*/", i):
                depth -= 1
                i += 2
                if depth == 0:
                    return i
            else:
                i += 1
        raise self._error("Unterminated block comment", start)

    def _scan_quoted(self, start: int, quote: str) -> int:
        """Return the offset just past the closing quote."""
        i = start
        while i < self.n:
            ch = self.text[i]
            if ch == "\\":
                i += 2
            elif ch == quote:
                return i + 1
            else:
                i += 1
        raise self._error("Unterminated literal", start)

    # ── Main loop ───────────────────────────────────────────────

    def run(self) -> list[TokenTree]:
        text = self.text
        while self.pos < self.n:
            i = self.pos
            ch = text[i]

            if ch.isspace():
                self.pos += 1
                continue

            if text.startswith("//", i):
                end = text.find("\n", i)
                self.pos = self.n if end == -1 else end + 1
                continue

            if text.startswith("/*", i):
                self.pos = self._skip_block_comment(i)
                continue

            raw = _RAW_STRING.match(text, i)
            if raw:
                terminator = '"' + raw.group(1)
                end = text.find(terminator, raw.end())
                if end == -1:
                    raise self._error("Unterminated raw string", i)
                self._literal(i, end + len(terminator))
                continue

            quoted = _QUOTED_STRING.match(text, i)
            if quoted:
                self._literal(i, self._scan_quoted(quoted.end(), '"'))
                continue

            if text.startswith("b'", i):
                self._literal(i, self._scan_quoted(i + 2, "'"))
                continue

            if text.startswith("r#", i) and i + 2 < self.n and _is_ident_start(text[i + 2]):
                self._ident(i, i + 2)
                continue

            if _is_ident_start(ch):
                self._ident(i, i)
                continue

            if ch.isdigit():
                match = _NUMBER.match(text, i)
                assert match is not None
                self._literal(i, match.end())
                continue

            if ch == "'":
                self._quote(i)
                continue

            if ch in _OPEN:
                self.stack.append(_Frame(_OPEN[ch], i))
                self.pos += 1
                continue

            if ch in _CLOSE:
                self._close(ch, i)
                continue

            self._emit(Punct(char=ch, span=(i, i + 1)))
            self.pos += 1

        if len(self.stack) > 1:
            frame = self.stack[-1]
            raise self._error(f"Unclosed {frame.delimiter}", frame.start)
        return self.stack[0].children

    def _literal(self, start: int, end: int) -> None:
        self._emit(Lit(text=self.text[start:end], span=(start, end)))
        self.pos = end

    def _ident(self, start: int, body: int) -> None:
        end = body
        while end < self.n and _is_ident_char(self.text[end]):
            end += 1
        self._emit(Ident(text=self.text[start:end], span=(start, end)))
        self.pos = end

    def _quote(self, start: int) -> None:
        text = self.text
        # char literal: 'x' or '\n' / '\u{..}'; anything else is a lifetime
        if start + 1 < self.n and text[start + 1] == "\\":
            self._literal(start, self._scan_quoted(start + 1, "'"))
        elif start + 2 < self.n and text[start + 2] == "'":
            self._literal(start, start + 3)
        else:
            self._emit(Punct(char="'", span=(start, start + 1)))
            self.pos = start + 1

    def _close(self, ch: str, offset: int) -> None:
        delimiter = _CLOSE[ch]
        frame = self.stack[-1]
        if len(self.stack) == 1 or frame.delimiter != delimiter:
            raise self._error(f"Unexpected '{ch}'", offset)
        self.stack.pop()
        self._emit(
            Group(
                delimiter=frame.delimiter,
                children=frame.children,
                span=(frame.start, offset + 1),
            )
        )
        self.pos = offset + 1


def tokenize(text: str) -> list[TokenTree]:
    """Lex Rust source text into token trees.

    Raises:
        DeclarationError: On unbalanced delimiters or unterminated
            literals/comments.
    """
    tokens = _Lexer(text).run()
    logger.debug("Lexed %d top-level tokens", len(tokens))
    return tokens


def slice_source(text: str, tokens: list[TokenTree]) -> str:
    """Return the source text covered by a run of tokens."""
    if not tokens:
        return ""
    return text[tokens[0].span[0] : tokens[-1].span[1]]
