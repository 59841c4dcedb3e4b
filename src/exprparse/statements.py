"""Statement sequences — expressions separated by ';' or line breaks."""

from __future__ import annotations

from dataclasses import replace
from typing import TypeVar

from exprparse.lexer import TokenizerOptions
from exprparse.parser import ExpressionParser
from exprparse.tokens import TokenType

T = TypeVar("T")
C = TypeVar("C")

# Value of the token the tokenizer synthesizes at line breaks
_LINE_BREAK = ";"


def parse_statements(
    parser: ExpressionParser[T, C],
    context: C,
    source: str,
    separator: str = ";",
) -> list[T]:
    """Parse *source* as a sequence of expressions.

    A line break after a complete operand ends a statement as if *separator*
    had been written. Empty statements are skipped. Each expression is parsed
    through ``parser.parse(context, tokenizer)``, which stops in front of the
    separator and leaves it here.
    """
    grammar = replace(
        parser.grammar, other_symbols=parser.grammar.other_symbols | {separator, _LINE_BREAK}
    )
    options = replace(parser.tokenizer_options or TokenizerOptions(), insert_semicolons=True)
    statement_parser = ExpressionParser(grammar, parser.processor, options)

    tokenizer = statement_parser.create_tokenizer(source)
    tokenizer.next_token()
    results: list[T] = []
    while True:
        while tokenizer.try_consume(separator) or tokenizer.try_consume(_LINE_BREAK):
            pass
        if tokenizer.current_type == TokenType.EOF:
            return results
        results.append(statement_parser.parse(context, tokenizer))
        if tokenizer.current_type == TokenType.EOF:
            return results
        if tokenizer.current_value not in (separator, _LINE_BREAK):
            raise tokenizer.error(f"expected '{separator}' or end of input")
