"""Processor — the callback interface invoked at each grammar production."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from exprparse.lexer import Tokenizer

T = TypeVar("T")
C = TypeVar("C")


class Processor(Generic[T, C]):
    """Turns parsed productions into values of the result type ``T``.

    Subclasses may evaluate directly or build a tree. Every method raises
    NotImplementedError by default, so a grammar only overrides the
    productions it can actually produce. ``context`` is whatever the caller
    passed to ExpressionParser.parse(); the tokenizer is positioned just
    after the production, for diagnostics.
    """

    def apply(
        self, context: C, tokenizer: Tokenizer, base: T, bracket: str, arguments: list[T]
    ) -> T:
        """Called for apply brackets following an arbitrary expression."""
        raise NotImplementedError(
            f"apply({base!r}, {bracket!r}, {arguments!r}) is not implemented"
        )

    def call(
        self, context: C, tokenizer: Tokenizer, identifier: str, bracket: str, arguments: list[T]
    ) -> T:
        """Called for call brackets directly following an identifier."""
        raise NotImplementedError(
            f"call({identifier!r}, {bracket!r}, {arguments!r}) is not implemented"
        )

    def group(self, context: C, tokenizer: Tokenizer, paren: str, elements: list[T]) -> T:
        raise NotImplementedError(f"group({paren!r}, {elements!r}) is not implemented")

    def identifier(self, context: C, tokenizer: Tokenizer, name: str) -> T:
        raise NotImplementedError(f"identifier({name!r}) is not implemented")

    def implicit_operator(
        self, context: C, tokenizer: Tokenizer, strong: bool, left: T, right: T
    ) -> T:
        """Called for juxtaposed operands; ``strong`` means no whitespace between them."""
        raise NotImplementedError(
            f"implicit_operator({strong!r}, {left!r}, {right!r}) is not implemented"
        )

    def infix_operator(self, context: C, tokenizer: Tokenizer, name: str, left: T, right: T) -> T:
        raise NotImplementedError(
            f"infix_operator({name!r}, {left!r}, {right!r}) is not implemented"
        )

    def number_literal(self, context: C, tokenizer: Tokenizer, value: str) -> T:
        raise NotImplementedError(f"number_literal({value!r}) is not implemented")

    def prefix_operator(self, context: C, tokenizer: Tokenizer, name: str, argument: T) -> T:
        raise NotImplementedError(f"prefix_operator({name!r}, {argument!r}) is not implemented")

    def primary(self, context: C, tokenizer: Tokenizer, name: str) -> T:
        """Called for a registered nullary symbol."""
        raise NotImplementedError(f"primary({name!r}) is not implemented")

    def suffix_operator(self, context: C, tokenizer: Tokenizer, name: str, argument: T) -> T:
        raise NotImplementedError(f"suffix_operator({name!r}, {argument!r}) is not implemented")

    def string_literal(self, context: C, tokenizer: Tokenizer, value: str) -> T:
        """Called with the literal in its original quoted form; see strings.unquote."""
        raise NotImplementedError(f"string_literal({value!r}) is not implemented")

    def ternary_operator(
        self, context: C, tokenizer: Tokenizer, operator: str, left: T, middle: T, right: T
    ) -> T:
        raise NotImplementedError(
            f"ternary_operator({operator!r}, {left!r}, {middle!r}, {right!r}) is not implemented"
        )
