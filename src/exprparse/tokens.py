"""Token types and source position data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    BOF = auto()  # before the first next_token() call
    IDENTIFIER = auto()
    SYMBOL = auto()  # registered grammar symbol (or synthesized ';')
    NUMBER = auto()
    STRING = auto()  # still quoted, see strings.unquote
    EOF = auto()
    UNRECOGNIZED = auto()  # whitespace-delimited run nothing else matched


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single token with the whitespace run that preceded it.

    An empty ``leading_whitespace`` means the token is directly adjacent to
    the previous one.
    """

    type: TokenType
    value: str
    span: Span
    leading_whitespace: str = ""

    @property
    def start(self) -> int:
        return self.span.start.offset

    @property
    def end(self) -> int:
        return self.span.end.offset
