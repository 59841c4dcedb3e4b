"""Tokenizer — lazily converts source text into tokens against a grammar alphabet."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from exprparse.errors import LexError, ParseError
from exprparse.tokens import Position, Span, Token, TokenType

# Every pattern is matched at the cursor and may consume leading whitespace,
# which is split off into Token.leading_whitespace.
DEFAULT_NUMBER_PATTERN = re.compile(r"\s*(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
DEFAULT_IDENTIFIER_PATTERN = re.compile(r"\s*[A-Za-z_$][A-Za-z0-9_$]*")
DEFAULT_STRING_PATTERN = re.compile(r"""\s*(?:"[^"\\]*(?:\\.[^"\\]*)*"|'[^'\\]*(?:\\.[^'\\]*)*')""")
DEFAULT_END_PATTERN = re.compile(r"\s*\Z")
DEFAULT_NEWLINE_PATTERN = re.compile(r"[ \t]*(?:\r\n|[\n\r\v\f])")
DEFAULT_LINE_COMMENT_PATTERN = re.compile(r"[ \t]*#[^\r\n]*(?:\r\n|[\n\r]|\Z)")

_CATCHALL_PATTERN = re.compile(r"\s*\S*")
_LINE_BREAK_PATTERN = re.compile(r"\r\n|[\n\r\v\f]")

# Tokens after which a line break ends a statement in insert_semicolons mode
_SEMICOLON_CLOSERS = frozenset(")]}")


@dataclass(frozen=True, slots=True)
class TokenizerOptions:
    """Pattern overrides and flags applied to each new Tokenizer."""

    number_pattern: re.Pattern[str] = DEFAULT_NUMBER_PATTERN
    identifier_pattern: re.Pattern[str] = DEFAULT_IDENTIFIER_PATTERN
    string_pattern: re.Pattern[str] = DEFAULT_STRING_PATTERN
    end_pattern: re.Pattern[str] = DEFAULT_END_PATTERN
    newline_pattern: re.Pattern[str] = DEFAULT_NEWLINE_PATTERN
    line_comment_pattern: re.Pattern[str] | None = DEFAULT_LINE_COMMENT_PATTERN
    insert_semicolons: bool = False


def build_symbol_pattern(symbols: Iterable[str]) -> re.Pattern[str] | None:
    """Alternate *symbols* longest first (ties in lexical order) so the longest match wins."""
    ordered = sorted({s for s in symbols if s}, key=lambda s: (-len(s), s))
    if not ordered:
        return None
    return re.compile(r"\s*(?:" + "|".join(re.escape(s) for s in ordered) + ")")


class Tokenizer:
    """Cursor over source text holding exactly one current token.

    The recognition patterns are plain attributes and may be replaced on an
    instance before the first call to next_token().
    """

    def __init__(
        self,
        source: str,
        symbols: Iterable[str] = (),
        additional_symbols: Iterable[str] = (),
        options: TokenizerOptions | None = None,
    ) -> None:
        if options is None:
            options = TokenizerOptions()
        self.number_pattern = options.number_pattern
        self.identifier_pattern = options.identifier_pattern
        self.string_pattern = options.string_pattern
        self.end_pattern = options.end_pattern
        self.newline_pattern = options.newline_pattern
        self.line_comment_pattern = options.line_comment_pattern
        self.insert_semicolons = options.insert_semicolons
        self.symbol_pattern = build_symbol_pattern([*symbols, *additional_symbols])

        self._source = source
        self._pos = 0
        self._line = 1
        self._line_start = 0
        self._comments: list[str] = []
        origin = Position(1, 1, 0)
        self.current = Token(TokenType.BOF, "", Span(origin, origin))

    @property
    def source(self) -> str:
        return self._source

    @property
    def current_type(self) -> TokenType:
        return self.current.type

    @property
    def current_value(self) -> str:
        return self.current.value

    @property
    def leading_whitespace(self) -> str:
        return self.current.leading_whitespace

    @property
    def current_position(self) -> int:
        return self.current.start

    @property
    def current_line(self) -> int:
        return self.current.span.start.line

    @property
    def current_column(self) -> int:
        return self.current.span.start.column

    def __repr__(self) -> str:
        return (
            f"Tokenizer({self.current_type.name} {self.current_value!r} "
            f"at {self.current_line}:{self.current_column})"
        )

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _position(self) -> Position:
        return Position(self._line, self._pos - self._line_start + 1, self._pos)

    def _advance(self, text: str) -> None:
        last = None
        for last in _LINE_BREAK_PATTERN.finditer(text):
            self._line += 1
        if last is not None:
            self._line_start = self._pos + last.end()
        self._pos += len(text)

    def _match(self, pattern: re.Pattern[str] | None) -> re.Match[str] | None:
        if pattern is None:
            return None
        m = pattern.match(self._source, self._pos)
        if m is None or m.end() == self._pos:
            return None
        return m

    def _inserts_semicolon(self) -> bool:
        """Whether a line break after the current token ends a statement."""
        return (
            self.current_type in (TokenType.IDENTIFIER, TokenType.NUMBER, TokenType.STRING)
            or self.current_value in _SEMICOLON_CLOSERS
        )

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def next_token(self) -> TokenType:
        """Advance to the next token and return its type."""
        skipped: list[str] = []
        newline = False
        while True:
            m = self._match(self.line_comment_pattern)
            if m is not None:
                text = m.group()
                self._comments.append(text.strip() + "\n")
                indent = text[: len(text) - len(text.lstrip(" \t"))]
                skipped.append(indent + ("\n" if text.endswith(("\n", "\r")) else ""))
            else:
                m = self._match(self.newline_pattern)
                if m is None:
                    break
                text = m.group()
                skipped.append(text)
            newline = True
            self._advance(text)

        if newline and self.insert_semicolons and self._inserts_semicolon():
            end = self.current.span.end
            self.current = Token(TokenType.SYMBOL, ";", Span(end, end), "".join(skipped))
            return self.current.type

        candidates = (
            (TokenType.IDENTIFIER, self.identifier_pattern),
            (TokenType.NUMBER, self.number_pattern),
            (TokenType.STRING, self.string_pattern),
            (TokenType.SYMBOL, self.symbol_pattern),
        )
        for token_type, pattern in candidates:
            m = self._match(pattern)
            if m is not None:
                break
        else:
            token_type = TokenType.EOF
            m = self.end_pattern.match(self._source, self._pos)
            if m is None:
                token_type = TokenType.UNRECOGNIZED
                m = _CATCHALL_PATTERN.match(self._source, self._pos)
                if m is None or m.end() == self._pos:
                    raise LexError(
                        "end of input not reached, but no token matched",
                        Span(self._position(), self._position()),
                        self._source,
                    )

        text = m.group()
        value = text.lstrip()
        leading = text[: len(text) - len(value)]
        self._advance(leading)
        start = self._position()
        self._advance(value)
        # Skipped line breaks stay in the run: a token on a new line is never adjacent
        self.current = Token(
            token_type, value, Span(start, self._position()), "".join(skipped) + leading
        )
        return token_type

    def tokenize(self) -> list[Token]:
        """Consume the remaining input and return every token through EOF."""
        tokens: list[Token] = []
        while self.next_token() != TokenType.EOF:
            tokens.append(self.current)
        tokens.append(self.current)
        return tokens

    # ------------------------------------------------------------------
    # Helpers for statement-level parsers
    # ------------------------------------------------------------------

    def try_consume(self, value: str) -> bool:
        """Advance past the current token if its text equals *value*."""
        if self.current_value != value:
            return False
        self.next_token()
        return True

    def consume(self, expected: str, message: str | None = None) -> TokenType:
        if not self.try_consume(expected):
            raise self.error(message or f"expected '{expected}'")
        return self.current_type

    def consume_identifier(self, message: str = "identifier expected") -> str:
        if self.current_type != TokenType.IDENTIFIER:
            raise self.error(message)
        name = self.current_value
        self.next_token()
        return name

    def consume_comments(self) -> str:
        """Return the line comments skipped so far and clear the buffer."""
        result = "".join(self._comments)
        self._comments.clear()
        return result

    def error(self, message: str) -> ParseError:
        """Build a ParseError spanning the current token."""
        return ParseError(message, self.current.span, self._source)


def tokenize(
    source: str,
    symbols: Iterable[str] = (),
    options: TokenizerOptions | None = None,
) -> list[Token]:
    """Convenience function: tokenize source text and return the token list."""
    return Tokenizer(source, symbols, options=options).tokenize()
