"""Shared test fixtures and helpers."""

from __future__ import annotations

import math

import pytest

from exprparse.debug import ParenthesizingProcessor
from exprparse.grammar import Grammar, OperatorType
from exprparse.lexer import tokenize
from exprparse.parser import ExpressionParser
from exprparse.processor import Processor
from exprparse.tokens import Token, TokenType


class CalculatorProcessor(Processor[float, dict[str, float]]):
    """Evaluates arithmetic directly; the context holds variable values."""

    def infix_operator(self, context, tokenizer, name, left, right):
        if name == "+":
            return left + right
        if name == "-":
            return left - right
        if name == "*":
            return left * right
        if name == "/":
            return left / right
        if name == "^":
            return math.pow(left, right)
        raise ValueError(f"unsupported operator {name}")

    def implicit_operator(self, context, tokenizer, strong, left, right):
        return left * right

    def prefix_operator(self, context, tokenizer, name, argument):
        return -argument if name == "-" else argument

    def number_literal(self, context, tokenizer, value):
        return float(value)

    def identifier(self, context, tokenizer, name):
        if name not in context:
            raise ValueError(f"undeclared variable: {name}")
        return context[name]

    def group(self, context, tokenizer, paren, elements):
        return elements[0]

    def call(self, context, tokenizer, identifier, bracket, arguments):
        function = getattr(math, identifier, None)
        if callable(function) and len(arguments) == 1:
            return float(function(arguments[0]))
        return super().call(context, tokenizer, identifier, bracket, arguments)


def calculator_grammar() -> Grammar:
    grammar = Grammar()
    grammar.add_call_brackets("(", ",", ")")
    grammar.add_group_brackets("(", None, ")")
    grammar.add_operators(OperatorType.INFIX_RTL, 4, "^")
    grammar.add_operators(OperatorType.PREFIX, 3, "+", "-")
    grammar.set_implicit_operator_precedence(True, 2)
    grammar.set_implicit_operator_precedence(False, 2)
    grammar.add_operators(OperatorType.INFIX, 1, "*", "/")
    grammar.add_operators(OperatorType.INFIX, 0, "+", "-")
    return grammar


def structure_grammar() -> Grammar:
    """Operators at distinct levels, with apply brackets and member access."""
    grammar = Grammar()
    grammar.add_group_brackets("(", None, ")")
    grammar.add_operators(OperatorType.INFIX, 7, ".")
    grammar.add_apply_brackets(6, "(", ",", ")")
    grammar.add_operators(OperatorType.INFIX_RTL, 5, "^")
    grammar.add_operators(OperatorType.PREFIX, 4, "+", "-")
    grammar.set_implicit_operator_precedence(True, 3)
    grammar.set_implicit_operator_precedence(False, 3)
    grammar.add_operators(OperatorType.INFIX, 2, "*", "/")
    grammar.add_operators(OperatorType.INFIX, 1, "+", "-")
    return grammar


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str, symbols: tuple[str, ...] = ()) -> list[Token]:
        tokens = tokenize(source, symbols)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def calculator() -> ExpressionParser[float, dict[str, float]]:
    return ExpressionParser(calculator_grammar(), CalculatorProcessor())


@pytest.fixture
def structure():
    """Return a helper rendering the parse of source as parenthesized text."""

    def _structure(source: str, grammar: Grammar | None = None) -> str:
        if grammar is None:
            grammar = structure_grammar()
        parser = ExpressionParser(grammar, ParenthesizingProcessor(grammar))
        return parser.parse(None, source)

    return _structure


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
