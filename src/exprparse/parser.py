"""Parsing engine — precedence climbing over a runtime-configured grammar."""

from __future__ import annotations

from typing import Generic, TypeVar

from exprparse.errors import ParseError
from exprparse.grammar import Grammar, OperatorType
from exprparse.lexer import Tokenizer, TokenizerOptions
from exprparse.processor import Processor
from exprparse.tokens import TokenType

T = TypeVar("T")
C = TypeVar("C")

# Threshold below every registered precedence
_TOP = -1


class ExpressionParser(Generic[T, C]):
    """Parses expressions of a Grammar, reducing them through a Processor.

    Single pass without backtracking; nesting in the input maps directly to
    recursion depth here.
    """

    def __init__(
        self,
        grammar: Grammar,
        processor: Processor[T, C],
        tokenizer_options: TokenizerOptions | None = None,
    ) -> None:
        self.grammar = grammar
        self.processor = processor
        self.tokenizer_options = tokenizer_options

    def create_tokenizer(self, source: str) -> Tokenizer:
        """Return a tokenizer for *source* recognizing the grammar's symbols."""
        return Tokenizer(source, self.grammar.symbols(), options=self.tokenizer_options)

    def parse(self, context: C, source: str | Tokenizer) -> T:
        """Parse one expression.

        Given text, the whole text must form a single expression. Given a
        tokenizer, parsing starts at its current token and stops in front of
        the first token that cannot continue the expression, leaving it for
        the caller.
        """
        if isinstance(source, Tokenizer):
            return self._parse_expression(context, source)

        tokenizer = self.create_tokenizer(source)
        tokenizer.next_token()
        result = self._parse_expression(context, tokenizer)
        if tokenizer.current_type != TokenType.EOF:
            raise tokenizer.error("leftover input")
        return result

    def _parse_expression(self, context: C, tokenizer: Tokenizer) -> T:
        if tokenizer.current_type == TokenType.BOF:
            tokenizer.next_token()
        try:
            return self._parse_operator(context, tokenizer, _TOP)
        except ParseError:
            raise
        except Exception as exc:
            raise tokenizer.error(str(exc) or type(exc).__name__) from exc

    # ------------------------------------------------------------------
    # Productions
    # ------------------------------------------------------------------

    def _parse_prefix(self, context: C, tokenizer: Tokenizer) -> T:
        name = tokenizer.current_value
        symbol = self.grammar.prefix.get(name)
        if symbol is None:
            return self._parse_primary(context, tokenizer)
        tokenizer.next_token()
        operand = self._parse_operator(context, tokenizer, symbol.precedence)
        return self.processor.prefix_operator(context, tokenizer, name, operand)

    def _parse_operator(self, context: C, tokenizer: Tokenizer, precedence: int) -> T:
        left = self._parse_prefix(context, tokenizer)

        while True:
            name = tokenizer.current_value
            symbol = self.grammar.infix.get(name)

            if symbol is None:
                if self.grammar.is_terminator(name):
                    break
                # Two operands without an operator token in between
                strong = tokenizer.leading_whitespace == ""
                implicit_precedence = self.grammar.implicit_precedence(strong)
                if implicit_precedence <= precedence:
                    break
                right = self._parse_operator(context, tokenizer, implicit_precedence)
                left = self.processor.implicit_operator(context, tokenizer, strong, left, right)
                continue

            if symbol.precedence <= precedence:
                break
            tokenizer.next_token()

            if symbol.is_ternary:
                middle = self._parse_operator(context, tokenizer, _TOP)
                tokenizer.consume(symbol.separator)
                right = self._parse_operator(context, tokenizer, symbol.precedence)
                left = self.processor.ternary_operator(
                    context, tokenizer, name, left, middle, right
                )
            elif symbol.is_bracket:
                arguments = self._parse_list(context, tokenizer, symbol.separator, symbol.close)
                left = self.processor.apply(context, tokenizer, left, name, arguments)
            elif symbol.type == OperatorType.INFIX:
                right = self._parse_operator(context, tokenizer, symbol.precedence)
                left = self.processor.infix_operator(context, tokenizer, name, left, right)
            elif symbol.type == OperatorType.INFIX_RTL:
                right = self._parse_operator(context, tokenizer, symbol.precedence - 1)
                left = self.processor.infix_operator(context, tokenizer, name, left, right)
            else:
                left = self.processor.suffix_operator(context, tokenizer, name, left)

        return left

    def _parse_list(
        self, context: C, tokenizer: Tokenizer, separator: str | None, close: str
    ) -> list[T]:
        # Opening bracket already consumed; consumes the closing bracket.
        elements: list[T] = []
        if tokenizer.current_value != close:
            while True:
                elements.append(self._parse_operator(context, tokenizer, _TOP))
                value = tokenizer.current_value
                if value == close:
                    break
                if separator is None:
                    raise tokenizer.error(f"expected closing '{close}'")
                if separator:
                    if value != separator:
                        raise tokenizer.error(f"expected '{separator}' or closing '{close}'")
                    tokenizer.next_token()
        tokenizer.next_token()
        return elements

    def _parse_primary(self, context: C, tokenizer: Tokenizer) -> T:
        candidate = tokenizer.current_value

        group = self.grammar.groups.get(candidate)
        if group is not None:
            tokenizer.next_token()
            elements = self._parse_list(context, tokenizer, group.separator, group.close)
            return self.processor.group(context, tokenizer, candidate, elements)

        if candidate in self.grammar.primary:
            tokenizer.next_token()
            return self.processor.primary(context, tokenizer, candidate)

        token_type = tokenizer.current_type
        if token_type == TokenType.NUMBER:
            tokenizer.next_token()
            return self.processor.number_literal(context, tokenizer, candidate)

        if token_type == TokenType.IDENTIFIER:
            tokenizer.next_token()
            bracket = tokenizer.current_value
            call = self.grammar.calls.get(bracket)
            if call is None:
                return self.processor.identifier(context, tokenizer, candidate)
            # Bound before any operator, outside precedence climbing
            tokenizer.next_token()
            arguments = self._parse_list(context, tokenizer, call.separator, call.close)
            return self.processor.call(context, tokenizer, candidate, bracket, arguments)

        if token_type == TokenType.STRING:
            tokenizer.next_token()
            return self.processor.string_literal(context, tokenizer, candidate)

        if token_type == TokenType.EOF:
            raise tokenizer.error("unexpected end of input")
        raise tokenizer.error(f"unexpected token type {token_type.name} for '{candidate}'")
