"""Tests for group, call and apply brackets, primaries and literals."""

from __future__ import annotations

import pytest

from exprparse.errors import ParseError
from exprparse.grammar import Grammar, OperatorType


def _call_grammar() -> Grammar:
    g = Grammar()
    g.add_call_brackets("(", ",", ")")
    g.add_group_brackets("(", None, ")")
    g.add_operators(OperatorType.INFIX, 2, "*")
    g.add_operators(OperatorType.INFIX, 1, "+")
    return g


def _list_grammar() -> Grammar:
    g = Grammar()
    g.add_group_brackets("[", "", "]")
    g.add_group_brackets("{", ",", "}")
    g.add_group_brackets("|", None, "|")
    g.add_operators(OperatorType.INFIX, 1, "+")
    g.add_primary("∅")
    return g


class TestGroups:
    def test_single_element(self, structure) -> None:
        assert structure("(1)") == "([1])"

    def test_nested(self, structure) -> None:
        assert structure("((a))") == "([([a])])"

    def test_no_separator_rejects_second_element(self, structure) -> None:
        with pytest.raises(ParseError, match="expected closing '\\)'") as exc_info:
            structure("(1,2)")
        assert exc_info.value.start == 2

    def test_comma_list(self, structure) -> None:
        assert structure("{1, 2, 3}", _list_grammar()) == "{[1, 2, 3]}"

    def test_empty_list(self, structure) -> None:
        assert structure("{}", _list_grammar()) == "{[]}"

    def test_whitespace_list(self, structure) -> None:
        assert structure("[1 2 a+b]", _list_grammar()) == "[[1, 2, (a + b)]]"

    def test_same_open_and_close(self, structure) -> None:
        assert structure("|{1, 2}|", _list_grammar()) == "|[{[1, 2]}]|"

    def test_missing_separator(self, structure) -> None:
        with pytest.raises(ParseError, match="expected ',' or closing '\\}'"):
            structure("{1 2}", _list_grammar())


class TestPrimary:
    def test_primary_symbol(self, structure) -> None:
        assert structure("∅", _list_grammar()) == "∅"

    def test_primary_in_expression(self, structure) -> None:
        assert structure("{∅} + ∅", _list_grammar()) == "({[∅]} + ∅)"

    def test_string_literal_stays_quoted(self, structure) -> None:
        assert structure("'a' + \"b\"", _list_grammar()) == "('a' + \"b\")"


class TestCalls:
    def test_call(self, structure) -> None:
        assert structure("f(x, 1)", _call_grammar()) == "f([x, 1])"

    def test_empty_call(self, structure) -> None:
        assert structure("f()", _call_grammar()) == "f([])"

    def test_call_binds_tighter_than_operators(self, structure) -> None:
        assert structure("2*f(x)+1", _call_grammar()) == "((2 * f([x])) + 1)"

    def test_call_arguments_are_full_expressions(self, structure) -> None:
        assert structure("f(a+b*c)", _call_grammar()) == "f([(a + (b * c))])"

    def test_call_requires_identifier(self, structure) -> None:
        # After a number, "(" only terminates the expression
        with pytest.raises(ParseError, match="leftover input"):
            structure("2(3)", _call_grammar())

    def test_group_still_works(self, structure) -> None:
        assert structure("(a+b)*c", _call_grammar()) == "(([(a + b)]) * c)"


class TestApply:
    def test_apply_after_path(self, structure) -> None:
        assert structure("a.b(4)") == "((a . b)([4]))"

    def test_apply_then_member(self, structure) -> None:
        assert structure("call(x).size") == "((call([x])) . size)"

    def test_apply_to_group(self, structure) -> None:
        assert structure("(f)(1, 2)") == "(([f])([1, 2]))"

    def test_chained_apply(self, structure) -> None:
        assert structure("f(1)(2)") == "((f([1]))([2]))"

    def test_apply_respects_precedence(self, structure) -> None:
        assert structure("-f(1)") == "(- (f([1])))"

    def test_empty_apply(self, structure) -> None:
        assert structure("f()") == "(f([]))"
