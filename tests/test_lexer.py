"""Tests for the token rules and error positions of the lexer."""

import pytest

from aws_config_mod.errors import ParseError
from aws_config_mod.lexer import Lexer, TokKind


def test_whitespace_stops_before_indented_line():
    lexer = Lexer("\n# comment\n  key = 1\n")
    tok = lexer.match(TokKind.WHITESPACE)
    assert tok.value == "\n# comment\n"
    assert lexer.cursor == len("\n# comment\n")


def test_whitespace_keeps_crlf():
    tok = Lexer("# c\r\n\r\n[default]").match(TokKind.WHITESPACE)
    assert tok.value == "# c\r\n\r\n"


def test_whitespace_runs_to_end_of_input():
    tok = Lexer("\n  # last line").match(TokKind.WHITESPACE)
    assert tok.value == "\n  # last line"


def test_whitespace_may_be_empty():
    lexer = Lexer("region = x")
    assert lexer.match(TokKind.WHITESPACE).value == ""
    assert lexer.cursor == 0


def test_failed_match_keeps_cursor():
    lexer = Lexer("= x")
    assert lexer.match(TokKind.IDENTIFIER) is False
    assert lexer.cursor == 0


def test_match_with_message_raises():
    with pytest.raises(ParseError) as exc:
        Lexer("!").match(TokKind.IDENTIFIER, "Bad name")
    assert exc.value.msg == "Line 1, column 1: Bad name\n  !\n  ^"
    assert exc.value.expected == ("a name",)
    assert exc.value.coords == (1, 1)


def test_default_keyword_needs_closing_bracket():
    assert Lexer("default]").match(TokKind.DEFAULT)
    assert Lexer("default foo]").match(TokKind.DEFAULT) is False


def test_indent_must_precede_a_name():
    assert Lexer("  # comment").match(TokKind.INDENT) is False
    assert Lexer("\tkey = 1").match(TokKind.INDENT).value == "\t"


def test_value_stops_at_comment_and_space():
    assert Lexer("https://x/#frag").match(TokKind.VALUE).value == "https://x/"
    assert Lexer("a b").match(TokKind.VALUE).value == "a"


def test_trailer_takes_rest_of_line_without_line_break():
    assert Lexer("  # note\n").match(TokKind.TRAILER).value == "  # note"
    assert Lexer(" # note\r\n").match(TokKind.TRAILER).value == " # note"
    assert Lexer("").match(TokKind.TRAILER).value == ""


def test_trailer_rejects_another_word():
    assert Lexer(" b\n").match(TokKind.TRAILER) is False


def test_line_and_column_numbers():
    lexer = Lexer("ab\ncd")
    assert lexer.lineno_at(4) == 2
    assert lexer.colno_at(4) == 2
    assert lexer.get_line(2) == "cd"


def test_mark_and_reset():
    lexer = Lexer("key=value")
    start = lexer.mark()
    lexer.match(TokKind.IDENTIFIER)
    lexer.match(TokKind.EQUALS)
    assert lexer.cursor == 4
    lexer.reset(start)
    assert lexer.cursor == 0


def test_furthest_error_lists_expected_tokens():
    lexer = Lexer("a b")
    lexer.match(TokKind.IDENTIFIER)
    lexer.match(TokKind.EQUALS)
    lexer.match(TokKind.DOT)
    err = lexer.furthest_error()
    assert err.expected == ("'='", "'.'")
    assert err.coords == (1, 2)
    assert "expected '=' or '.', found ' '" in err.msg


def test_furthest_error_at_end_of_input():
    lexer = Lexer("a")
    lexer.match(TokKind.IDENTIFIER)
    lexer.match(TokKind.EQUALS)
    err = lexer.furthest_error()
    assert "found end of input" in err.msg


@pytest.mark.parametrize(
    ("cursor", "coords"),
    [
        (0, (1, 1)),
        (3, (1, 4)),
        (4, (1, 5)),
        (5, (2, 1)),
        (7, (2, 3)),
        (8, (3, 1)),
        (9, (3, 2)),
    ],
)
def test_line_and_column_of_position(cursor, coords):
    lexer = Lexer("abc\r\nde\nf")
    assert (lexer.lineno_at(cursor), lexer.colno_at(cursor)) == coords
