"""Grammar registry — operator, bracket and primary symbol tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

# Implicit operator precedence that no threshold (>= -1) ever exceeds
DISABLED = -1


class OperatorType(Enum):
    INFIX = auto()  # left associative
    INFIX_RTL = auto()  # right associative
    PREFIX = auto()
    SUFFIX = auto()


@dataclass(frozen=True, slots=True)
class Symbol:
    """An infix table entry: a plain operator, a ternary, or apply brackets.

    Plain operators carry ``type``; ternaries carry ``separator`` (the
    secondary symbol) and no ``close``; apply brackets carry ``close``.
    """

    precedence: int
    type: OperatorType | None = None
    separator: str | None = None
    close: str | None = None

    @property
    def is_ternary(self) -> bool:
        return self.type is None and self.close is None

    @property
    def is_bracket(self) -> bool:
        return self.type is None and self.close is not None


@dataclass(frozen=True, slots=True)
class Brackets:
    """Call or group brackets.

    A ``None`` separator allows a single element only; an empty separator
    lets whitespace separate elements.
    """

    separator: str | None
    close: str


@dataclass
class Grammar:
    """Symbol tables consulted by the parsing engine.

    Populate during setup; the tables are only read while parsing, so one
    grammar can back any number of parsers and tokenizers.
    """

    prefix: dict[str, Symbol] = field(default_factory=dict)
    infix: dict[str, Symbol] = field(default_factory=dict)
    calls: dict[str, Brackets] = field(default_factory=dict)
    groups: dict[str, Brackets] = field(default_factory=dict)
    primary: set[str] = field(default_factory=set)
    other_symbols: set[str] = field(default_factory=set)
    strong_implicit_precedence: int = DISABLED
    weak_implicit_precedence: int = DISABLED

    def add_operators(self, type: OperatorType, precedence: int, *names: str) -> None:
        """Add prefix, infix or suffix operators sharing one precedence."""
        _check_precedence(precedence)
        for name in names:
            _check_symbol(name)
            if type == OperatorType.PREFIX:
                self.prefix[name] = Symbol(precedence, type)
            else:
                self.infix[name] = Symbol(precedence, type)

    def add_ternary_operator(self, precedence: int, primary: str, secondary: str) -> None:
        """Add a ternary operator such as ``a ? b : c``."""
        _check_precedence(precedence)
        _check_symbol(primary)
        _check_symbol(secondary)
        self.infix[primary] = Symbol(precedence, separator=secondary)
        self.other_symbols.add(secondary)

    def add_apply_brackets(
        self, precedence: int, open: str, separator: str | None, close: str
    ) -> None:
        """Add brackets applied to any preceding expression, e.g. indexing.

        Unlike call brackets these take part in precedence climbing.
        """
        _check_precedence(precedence)
        _check_symbol(open)
        _check_symbol(close)
        self.infix[open] = Symbol(precedence, separator=separator, close=close)
        self._add_terminators(separator, close)

    def add_call_brackets(self, open: str, separator: str | None, close: str) -> None:
        """Add brackets parsed eagerly right after a bare identifier."""
        _check_symbol(open)
        _check_symbol(close)
        self.calls[open] = Brackets(separator, close)
        self.other_symbols.add(open)
        self._add_terminators(separator, close)

    def add_group_brackets(self, open: str, separator: str | None, close: str) -> None:
        """Add brackets in operand position.

        With a ``None`` separator only a single element is permitted, which is
        what parentheses overriding precedence want. With an empty separator
        whitespace is enough to separate elements.
        """
        _check_symbol(open)
        _check_symbol(close)
        self.groups[open] = Brackets(separator, close)
        self.other_symbols.add(open)
        self._add_terminators(separator, close)

    def add_primary(self, *names: str) -> None:
        """Add nullary symbols such as an empty set glyph."""
        for name in names:
            _check_symbol(name)
            self.primary.add(name)

    def set_implicit_operator_precedence(self, strong: bool, precedence: int) -> None:
        """Set the precedence of juxtaposition without (strong) or with (weak) whitespace.

        ``DISABLED`` turns that kind of juxtaposition off again.
        """
        if precedence != DISABLED:
            _check_precedence(precedence)
        if strong:
            self.strong_implicit_precedence = precedence
        else:
            self.weak_implicit_precedence = precedence

    def implicit_precedence(self, strong: bool) -> int:
        return self.strong_implicit_precedence if strong else self.weak_implicit_precedence

    def is_terminator(self, value: str) -> bool:
        """True for end of input and symbols that must end an expression."""
        return value == "" or value in self.other_symbols

    def symbols(self) -> set[str]:
        """Return every registered symbol, for tokenizer construction."""
        result = set(self.other_symbols)
        result.update(self.infix)
        result.update(self.prefix)
        result.update(self.primary)
        return result

    def _add_terminators(self, separator: str | None, close: str) -> None:
        if separator:
            self.other_symbols.add(separator)
        self.other_symbols.add(close)


def _check_precedence(precedence: int) -> None:
    if precedence < 0:
        raise ValueError(f"precedence must be non-negative, got {precedence}")


def _check_symbol(name: str) -> None:
    if not name:
        raise ValueError("symbol must be a non-empty string")
