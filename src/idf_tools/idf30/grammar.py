"""
IDF 3.0 tokenizer and grammar.

Turns raw IDF text into a :class:`ParseTree`: an ordered list of sections,
each with its header arguments and its records. A record is one line of
tokens. The tree knows nothing about what a section means; the decoder
gives it meaning.

Grammar::

    document    := (blank | comment | section)*
    section     := "." NAME arg* NEWLINE record* ".END_" NAME NEWLINE
    record      := token+ NEWLINE
    token       := FLOAT | INTEGER | QUOTED_STRING | BARE_STRING
    comment     := "#" <anything up to end of line>   (first thing on a line)

    INTEGER       [+-]?digits
    FLOAT         [+-]?digits "." digits ([eE][+-]?digits)?
    BARE_STRING   any run of non-whitespace, non-quote characters
    QUOTED_STRING '"' <anything but '"' and newline>* '"'

Usage::

    from idf_tools.idf30.grammar import parse

    tree = parse(text)
    for section in tree.sections:
        print(section.name, len(section.records))
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from ..exceptions import GrammarError

_INTEGER_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?\d+\.\d+(?:[eE][+-]?\d+)?")

# Whitespace that separates tokens; newline separates records.
_BLANKS = " \t\r\f\v"

SECTION_PREFIX = "."
TERMINATOR_PREFIX = ".END_"


class TokenKind(Enum):
    """Grammar tag of a token."""

    INTEGER = "integer"
    FLOAT = "float"
    BARE_STRING = "string"
    QUOTED_STRING = "quoted_string"


def classify(text: str) -> TokenKind:
    """Return the kind a bare (unquoted) run of characters tokenizes to."""
    if _INTEGER_RE.fullmatch(text):
        return TokenKind.INTEGER
    if _FLOAT_RE.fullmatch(text):
        return TokenKind.FLOAT
    return TokenKind.BARE_STRING


@dataclass
class Token:
    """
    A single token.

    ``text`` is the token as written, except for quoted strings where it is
    the content between the quotes.
    """

    kind: TokenKind
    text: str
    offset: int
    line: int
    column: int

    @property
    def is_numeric(self) -> bool:
        return self.kind in (TokenKind.INTEGER, TokenKind.FLOAT)

    def __str__(self) -> str:
        if self.kind is TokenKind.QUOTED_STRING:
            return f'"{self.text}"'
        return self.text


@dataclass
class RawRecord:
    """One line of tokens inside a section."""

    tokens: list[Token]
    line: int

    @property
    def first(self) -> Optional[Token]:
        return self.tokens[0] if self.tokens else None

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)


@dataclass
class RawSection:
    """A ``.NAME ... .END_NAME`` block."""

    name: str
    args: list[Token] = field(default_factory=list)
    records: list[RawRecord] = field(default_factory=list)
    line: int = 1
    offset: int = 0


@dataclass
class ParseTree:
    """All sections of a document, in order."""

    sections: list[RawSection] = field(default_factory=list)


class Parser:
    """Line-oriented IDF 3.0 tokenizer."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)
        self.line = 1
        self._line_start = 0

    def parse(self) -> ParseTree:
        """Parse the entire document."""
        tree = ParseTree()
        current: Optional[RawSection] = None

        while self.pos < self.length:
            line = self.line
            tokens = self._read_line()
            if not tokens:
                continue

            first = tokens[0]
            is_marker = first.kind is TokenKind.BARE_STRING and first.text.startswith(
                SECTION_PREFIX
            )

            if current is None:
                if not is_marker:
                    raise self._error_at(
                        first,
                        f"Expected a section header, got '{first.text}'",
                        suggestions=["Every record must be inside a .NAME ... .END_NAME block"],
                    )
                if first.text.startswith(TERMINATOR_PREFIX):
                    raise self._error_at(first, f"'{first.text}' does not close any open section")
                name = first.text[len(SECTION_PREFIX) :]
                if not name:
                    raise self._error_at(first, "Section header without a name")
                current = RawSection(
                    name=name,
                    args=tokens[1:],
                    line=line,
                    offset=first.offset,
                )
            elif is_marker and first.text.startswith(TERMINATOR_PREFIX):
                name = first.text[len(TERMINATOR_PREFIX) :]
                if name != current.name:
                    raise self._error_at(
                        first,
                        f"Expected {TERMINATOR_PREFIX}{current.name}, got '{first.text}'",
                    )
                if len(tokens) > 1:
                    raise self._error_at(
                        tokens[1], f"Unexpected content after '{first.text}'"
                    )
                tree.sections.append(current)
                current = None
            else:
                current.records.append(RawRecord(tokens=tokens, line=line))

        if current is not None:
            raise GrammarError(
                f"Missing {TERMINATOR_PREFIX}{current.name}",
                offset=self.length,
                line=self.line,
                column=self.pos - self._line_start + 1,
                context={"section": current.name, "opened_at_line": current.line},
            )
        return tree

    def _read_line(self) -> list[Token]:
        """Read the tokens of one line and consume its newline."""
        tokens: list[Token] = []

        while self.pos < self.length:
            char = self.text[self.pos]

            if char == "\n":
                self.pos += 1
                self.line += 1
                self._line_start = self.pos
                break
            if char in _BLANKS:
                self.pos += 1
            elif char == "#" and not tokens:
                self._skip_comment()
            elif char == '"':
                tokens.append(self._parse_quoted())
            else:
                tokens.append(self._parse_bare())

        return tokens

    def _skip_comment(self) -> None:
        """Skip to end of line, leaving the newline in place."""
        while self.pos < self.length and self.text[self.pos] != "\n":
            self.pos += 1

    def _parse_quoted(self) -> Token:
        """Parse a quoted string; contents are taken literally."""
        start = self.pos
        column = self._column()
        self.pos += 1

        while self.pos < self.length:
            char = self.text[self.pos]
            if char == '"':
                self.pos += 1
                return Token(
                    kind=TokenKind.QUOTED_STRING,
                    text=self.text[start + 1 : self.pos - 1],
                    offset=start,
                    line=self.line,
                    column=column,
                )
            if char == "\n":
                break
            self.pos += 1

        raise GrammarError(
            "Unterminated quoted string",
            offset=start,
            line=self.line,
            column=column,
            suggestions=["Quoted strings must close on the line they start"],
        )

    def _parse_bare(self) -> Token:
        """Parse a bare run and tag it integer, float or string."""
        start = self.pos
        column = self._column()

        while self.pos < self.length:
            char = self.text[self.pos]
            if char in _BLANKS or char in '\n"':
                break
            self.pos += 1

        text = self.text[start : self.pos]
        return Token(
            kind=classify(text),
            text=text,
            offset=start,
            line=self.line,
            column=column,
        )

    def _column(self) -> int:
        return self.pos - self._line_start + 1

    @staticmethod
    def _error_at(token: Token, message: str, suggestions=None) -> GrammarError:
        return GrammarError(
            message,
            offset=token.offset,
            line=token.line,
            column=token.column,
            suggestions=suggestions,
        )


def parse(text: str) -> ParseTree:
    """Parse IDF 3.0 text into a :class:`ParseTree`."""
    return Parser(text).parse()
