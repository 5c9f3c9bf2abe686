"""Tests for error types and their messages."""

import pytest

import aws_config_mod
from aws_config_mod import (
    ConfigError,
    ParseError,
    PathError,
    SectionNameRequiredError,
    SectionType,
    TokenError,
)
from aws_config_mod.lexer import Lexer


def test_hierarchy():
    assert issubclass(ParseError, TokenError)
    assert issubclass(TokenError, ConfigError)
    assert issubclass(SectionNameRequiredError, PathError)
    assert issubclass(PathError, ConfigError)
    assert issubclass(ConfigError, SyntaxError)


def test_parse_error_is_config_error():
    with pytest.raises(ConfigError) as exc:
        aws_config_mod.parse("[default\n")
    assert str(exc.value) == exc.value.msg
    assert exc.value.cursor == 8


def test_token_error_without_token():
    err = TokenError("Invalid value: 'a b'")
    assert err.token is None
    assert err.cursor is None
    assert err.coords is None
    assert str(err) == "Invalid value: 'a b'"


def test_hl_error_breaks_long_messages():
    lexer = Lexer("key = value\n")
    token = lexer.token_at(6)
    msg = "x" * 100
    err = ParseError.hl_error(token, msg)
    leader, rest = err.msg.split("\n", 1)
    assert leader == "Line 1, column 7: "
    assert rest == "  " + msg + "\n  key = value\n        ^^^^^"


def test_hl_error_stops_at_end_of_line():
    lexer = Lexer("a = 1\n")
    token = lexer.token_at(5)
    err = TokenError.hl_error(token, "Oops")
    assert err.msg.splitlines()[-1] == "       ^"


def test_section_name_required_error():
    err = SectionNameRequiredError(SectionType.SSO_SESSION, "sso-session.x")
    assert err.section_type is SectionType.SSO_SESSION
    assert err.path == "sso-session.x"
    assert str(err) == (
        "A section name is required for section type 'sso-session'"
    )


def test_path_error_wraps_parse_error():
    with pytest.raises(PathError) as exc:
        aws_config_mod.SettingPath.from_str("profile.A.region!")
    assert isinstance(exc.value.__cause__, ParseError)
    assert exc.value.path == "profile.A.region!"
