"""Grammar-configurable expression parser."""

from __future__ import annotations

from exprparse.errors import ConfigError, LexError, ParseError
from exprparse.grammar import Grammar, OperatorType
from exprparse.lexer import Tokenizer, TokenizerOptions, tokenize
from exprparse.parser import ExpressionParser
from exprparse.processor import Processor
from exprparse.strings import unquote
from exprparse.tokens import Token, TokenType

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ExpressionParser",
    "Grammar",
    "LexError",
    "OperatorType",
    "ParseError",
    "Processor",
    "Token",
    "TokenType",
    "Tokenizer",
    "TokenizerOptions",
    "tokenize",
    "unquote",
]
