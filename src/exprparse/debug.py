"""Parenthesized rendering of parse structure and token dumps."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from exprparse.grammar import Grammar
from exprparse.lexer import Tokenizer
from exprparse.processor import Processor
from exprparse.tokens import Token


class ParenthesizingProcessor(Processor[str, Any]):
    """Render every production as fully parenthesized text.

    ``3 + 4*x`` becomes ``(3 + (4*x))`` under the usual precedences, which
    makes the shape the grammar produced visible without building a tree.
    Element lists are shown in square brackets: ``f(1, 2)`` renders as
    ``f([1, 2])``.
    """

    def __init__(self, grammar: Grammar) -> None:
        self.grammar = grammar

    def apply(
        self, context: Any, tokenizer: Tokenizer, base: str, bracket: str, arguments: list[str]
    ) -> str:
        close = self.grammar.infix[bracket].close
        return f"({base}{bracket}{_elements(arguments)}{close})"

    def call(
        self,
        context: Any,
        tokenizer: Tokenizer,
        identifier: str,
        bracket: str,
        arguments: list[str],
    ) -> str:
        close = self.grammar.calls[bracket].close
        return f"{identifier}{bracket}{_elements(arguments)}{close}"

    def group(self, context: Any, tokenizer: Tokenizer, paren: str, elements: list[str]) -> str:
        close = self.grammar.groups[paren].close
        return f"{paren}{_elements(elements)}{close}"

    def identifier(self, context: Any, tokenizer: Tokenizer, name: str) -> str:
        return name

    def implicit_operator(
        self, context: Any, tokenizer: Tokenizer, strong: bool, left: str, right: str
    ) -> str:
        return f"({left}{'' if strong else ' '}{right})"

    def infix_operator(
        self, context: Any, tokenizer: Tokenizer, name: str, left: str, right: str
    ) -> str:
        return f"({left} {name} {right})"

    def number_literal(self, context: Any, tokenizer: Tokenizer, value: str) -> str:
        return value

    def prefix_operator(self, context: Any, tokenizer: Tokenizer, name: str, argument: str) -> str:
        return f"({name} {argument})"

    def primary(self, context: Any, tokenizer: Tokenizer, name: str) -> str:
        return name

    def suffix_operator(self, context: Any, tokenizer: Tokenizer, name: str, argument: str) -> str:
        return f"({argument} {name})"

    def string_literal(self, context: Any, tokenizer: Tokenizer, value: str) -> str:
        return value

    def ternary_operator(
        self,
        context: Any,
        tokenizer: Tokenizer,
        operator: str,
        left: str,
        middle: str,
        right: str,
    ) -> str:
        separator = self.grammar.infix[operator].separator
        return f"({left} {operator} {middle} {separator} {right})"


def _elements(items: list[str]) -> str:
    return "[" + ", ".join(items) + "]"


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token: position, type, value and leading whitespace."""
    for tok in tokens:
        pos = tok.span.start
        file.write(
            f"{pos.line}:{pos.column}\t{tok.type.name}\t{tok.value!r}"
            f"\tws={tok.leading_whitespace!r}\n"
        )
