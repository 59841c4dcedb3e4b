"""Test leading whitespace, line tracking, comments and semicolon insertion."""

import pytest

from exprparse.lexer import Tokenizer, TokenizerOptions, tokenize
from exprparse.tokens import TokenType

from .conftest import assert_types, assert_values


class TestLeadingWhitespace:
    def test_adjacent_token_has_none(self, lex):
        tokens = lex("2x")
        assert tokens[1].leading_whitespace == ""

    def test_separated_token_keeps_run(self, lex):
        tokens = lex("a \t b")
        assert tokens[1].leading_whitespace == " \t "

    def test_first_token(self, lex):
        tokens = lex("  a")
        assert tokens[0].leading_whitespace == "  "
        assert tokens[0].value == "a"

    def test_newline_counts_as_whitespace(self, lex):
        tokens = lex("a\n  b")
        assert tokens[1].leading_whitespace == "\n  "

    def test_tokenizer_property(self):
        t = Tokenizer("a  +b", ["+"])
        t.next_token()
        t.next_token()
        assert t.leading_whitespace == "  "
        t.next_token()
        assert t.leading_whitespace == ""


class TestPositions:
    def test_offsets(self, lex):
        tokens = lex("ab + cd", ("+",))
        assert [(t.start, t.end) for t in tokens] == [(0, 2), (3, 4), (5, 7)]

    def test_first_line(self, lex):
        tokens = lex("ab cd")
        assert tokens[1].span.start.line == 1
        assert tokens[1].span.start.column == 4

    def test_second_line(self, lex):
        tokens = lex("a\n  b")
        pos = tokens[1].span.start
        assert (pos.line, pos.column, pos.offset) == (2, 3, 4)

    def test_blank_lines(self, lex):
        tokens = lex("a\n\n\nb")
        assert tokens[1].span.start.line == 4
        assert tokens[1].span.start.column == 1

    def test_crlf(self, lex):
        tokens = lex("a\r\nb")
        assert tokens[1].span.start.line == 2
        assert tokens[1].span.start.column == 1

    @pytest.mark.parametrize("line_break", ["\r", "\v", "\f"])
    def test_other_line_breaks(self, lex, line_break):
        tokens = lex(f"ab{line_break}cd\ne")
        assert (tokens[1].span.start.line, tokens[1].span.start.column) == (2, 1)
        assert (tokens[2].span.start.line, tokens[2].span.start.column) == (3, 1)

    def test_crlf_is_one_line_break(self, lex):
        tokens = lex("a\r\n\r\nb")
        assert tokens[1].span.start.line == 3

    def test_tokenizer_line_and_column(self):
        t = Tokenizer("x\ny z")
        t.next_token()
        t.next_token()
        t.next_token()
        assert t.current_value == "z"
        assert t.current_line == 2
        assert t.current_column == 3
        assert t.current_position == 4


class TestComments:
    def test_comment_is_skipped(self, lex):
        tokens = lex("a # note\nb")
        assert_values(tokens, ["a", "b"])

    def test_comment_at_end(self, lex):
        tokens = lex("a # trailing")
        assert_values(tokens, ["a"])

    def test_comment_text_is_collected(self):
        t = Tokenizer("# first\na # second\nb")
        t.tokenize()
        assert t.consume_comments() == "# first\n# second\n"
        assert t.consume_comments() == ""

    def test_line_after_comment(self, lex):
        tokens = lex("# c\n# d\nx")
        assert tokens[0].span.start.line == 3


class TestSemicolonInsertion:
    def _lex(self, source: str) -> list:
        options = TokenizerOptions(insert_semicolons=True)
        return tokenize(source, ("+", "(", ")"), options)

    def test_after_identifier(self):
        tokens = self._lex("a\nb")
        assert_values(tokens, ["a", ";", "b", ""])
        assert tokens[1].type == TokenType.SYMBOL

    def test_after_number_and_string(self):
        assert_values(self._lex("1\n'x'\n"), ["1", ";", "'x'", ";", ""])

    def test_after_closing_bracket(self):
        assert_values(self._lex("(a)\nb"), ["(", "a", ")", ";", "b", ""])

    def test_not_after_operator(self):
        assert_values(self._lex("a +\nb"), ["a", "+", "b", ""])

    def test_not_after_opening_bracket(self):
        assert_values(self._lex("(\na)"), ["(", "a", ")", ""])

    def test_blank_lines_insert_once(self):
        assert_values(self._lex("a\n\n\nb"), ["a", ";", "b", ""])

    def test_synthesized_token_position(self):
        tokens = self._lex("ab\ncd")
        assert tokens[1].start == 2
        assert tokens[1].end == 2

    def test_off_by_default(self, lex):
        assert_types(lex("a\nb"), [TokenType.IDENTIFIER, TokenType.IDENTIFIER])

    def test_after_comment(self):
        assert_values(self._lex("a # c\nb"), ["a", ";", "b", ""])
