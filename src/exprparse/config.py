"""Grammar and tokenizer configuration loaded from TOML."""

from __future__ import annotations

import re
import tomllib
from pathlib import Path
from typing import Any

from exprparse.debug import ParenthesizingProcessor
from exprparse.errors import ConfigError
from exprparse.grammar import Grammar, OperatorType
from exprparse.lexer import TokenizerOptions
from exprparse.parser import ExpressionParser

CONFIG_FILENAME = "exprparse.toml"

# Arithmetic grammar used when no configuration names a [grammar] table
DEFAULT_CONFIG = """\
[grammar.implicit]
strong = 3
weak = 3

[[grammar.operators]]
type = "suffix"
precedence = 6
symbols = ["!"]

[[grammar.operators]]
type = "infix_rtl"
precedence = 5
symbols = ["^"]

[[grammar.operators]]
type = "prefix"
precedence = 4
symbols = ["+", "-"]

[[grammar.operators]]
type = "infix"
precedence = 2
symbols = ["*", "/"]

[[grammar.operators]]
type = "infix"
precedence = 1
symbols = ["+", "-"]

[[grammar.ternary]]
precedence = 0
symbols = ["?", ":"]

[[grammar.brackets]]
kind = "call"
open = "("
separator = ","
close = ")"

[[grammar.brackets]]
kind = "group"
open = "("
close = ")"
"""

_OPERATOR_TYPES = {
    "infix": OperatorType.INFIX,
    "infix_rtl": OperatorType.INFIX_RTL,
    "prefix": OperatorType.PREFIX,
    "suffix": OperatorType.SUFFIX,
}

_BRACKET_KINDS = ("apply", "call", "group")

# [tokenizer] key -> TokenizerOptions field
_PATTERN_KEYS = {
    "number": "number_pattern",
    "identifier": "identifier_pattern",
    "string": "string_pattern",
    "end": "end_pattern",
    "newline": "newline_pattern",
    "line_comment": "line_comment_pattern",
}


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc


def build_grammar(config: dict[str, Any]) -> Grammar:
    """Build a Grammar from the [grammar] table, or the default grammar without one."""
    table = config.get("grammar")
    if table is None:
        table = tomllib.loads(DEFAULT_CONFIG)["grammar"]
    if not isinstance(table, dict):
        raise ConfigError("[grammar] must be a table")

    grammar = Grammar()
    try:
        for i, entry in enumerate(_table_list(table, "operators")):
            where = f"grammar.operators[{i}]"
            type_name = _get(entry, "type", str, where)
            if type_name not in _OPERATOR_TYPES:
                choices = ", ".join(_OPERATOR_TYPES)
                raise ConfigError(f"{where}: unknown operator type '{type_name}' ({choices})")
            grammar.add_operators(
                _OPERATOR_TYPES[type_name],
                _get(entry, "precedence", int, where),
                *_get_symbols(entry, where),
            )

        for i, entry in enumerate(_table_list(table, "ternary")):
            where = f"grammar.ternary[{i}]"
            symbols = _get_symbols(entry, where)
            if len(symbols) != 2:
                raise ConfigError(f"{where}: 'symbols' must name exactly two symbols")
            grammar.add_ternary_operator(_get(entry, "precedence", int, where), *symbols)

        for i, entry in enumerate(_table_list(table, "brackets")):
            _add_brackets(grammar, entry, f"grammar.brackets[{i}]")

        primary = table.get("primary", [])
        if not isinstance(primary, list) or not all(isinstance(p, str) for p in primary):
            raise ConfigError("grammar.primary must be a list of strings")
        grammar.add_primary(*primary)

        implicit = table.get("implicit", {})
        if not isinstance(implicit, dict):
            raise ConfigError("grammar.implicit must be a table")
        if "strong" in implicit:
            grammar.set_implicit_operator_precedence(
                True, _get(implicit, "strong", int, "grammar.implicit")
            )
        if "weak" in implicit:
            grammar.set_implicit_operator_precedence(
                False, _get(implicit, "weak", int, "grammar.implicit")
            )
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    return grammar


def build_tokenizer_options(config: dict[str, Any]) -> TokenizerOptions:
    """Build TokenizerOptions from the [tokenizer] table.

    Pattern values are regular expressions matched at the cursor; they should
    accept leading whitespace (``\\s*``) like the defaults do. An empty
    ``line_comment`` disables comment skipping.
    """
    table = config.get("tokenizer", {})
    if not isinstance(table, dict):
        raise ConfigError("[tokenizer] must be a table")

    overrides: dict[str, Any] = {}
    for key, field_name in _PATTERN_KEYS.items():
        if key not in table:
            continue
        pattern = _get(table, key, str, "tokenizer")
        if key == "line_comment" and pattern == "":
            overrides[field_name] = None
            continue
        try:
            overrides[field_name] = re.compile(pattern)
        except re.error as exc:
            raise ConfigError(f"tokenizer.{key}: invalid pattern: {exc}") from exc

    if "insert_semicolons" in table:
        overrides["insert_semicolons"] = _get(table, "insert_semicolons", bool, "tokenizer")

    return TokenizerOptions(**overrides)


def create_parser(config: dict[str, Any]) -> ExpressionParser[str, Any]:
    """Return a parser for the configured grammar that renders parenthesized text."""
    grammar = build_grammar(config)
    return ExpressionParser(
        grammar, ParenthesizingProcessor(grammar), build_tokenizer_options(config)
    )


def _add_brackets(grammar: Grammar, entry: dict[str, Any], where: str) -> None:
    kind = _get(entry, "kind", str, where)
    if kind not in _BRACKET_KINDS:
        raise ConfigError(f"{where}: unknown bracket kind '{kind}' ({', '.join(_BRACKET_KINDS)})")
    open_ = _get(entry, "open", str, where)
    close = _get(entry, "close", str, where)
    separator = entry.get("separator")
    if separator is not None and not isinstance(separator, str):
        raise ConfigError(f"{where}: 'separator' must be a string")

    if kind == "apply":
        grammar.add_apply_brackets(_get(entry, "precedence", int, where), open_, separator, close)
    elif kind == "call":
        grammar.add_call_brackets(open_, separator, close)
    else:
        grammar.add_group_brackets(open_, separator, close)


def _table_list(table: dict[str, Any], key: str) -> list[dict[str, Any]]:
    entries = table.get(key, [])
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise ConfigError(f"grammar.{key} must be an array of tables")
    return entries


def _get(table: dict[str, Any], key: str, expected: type, where: str) -> Any:
    if key not in table:
        raise ConfigError(f"{where}: missing '{key}'")
    value = table[key]
    # bool is an int subclass; keep the two apart
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ConfigError(f"{where}: '{key}' must be of type {expected.__name__}")
    return value


def _get_symbols(entry: dict[str, Any], where: str) -> list[str]:
    symbols = _get(entry, "symbols", list, where)
    if not all(isinstance(s, str) for s in symbols):
        raise ConfigError(f"{where}: 'symbols' must be a list of strings")
    return symbols
