"""Tests for credentials files."""

import pytest

import aws_config_mod
from aws_config_mod import ParseError, SectionType, TokenError


def test_round_trip(credentials_text, credentials):
    assert str(credentials) == credentials_text


def test_get_profile(credentials):
    section = credentials.get_profile("dev")
    assert section.section_type is SectionType.PROFILE
    assert section.section_name == "dev"
    assert section.settings[0].value == "AKIDDEV"
    assert credentials.get_profile("prod") is None


def test_get_setting(credentials):
    setting = credentials.get_setting("default", "aws_secret_access_key")
    assert setting.value == "secret"
    assert setting.trailing_whitespace == " # rotate monthly"
    assert credentials.get_setting("default", "aws_session_token") is None
    assert credentials.get_setting("prod", "aws_access_key_id") is None


def test_set_existing(credentials_text, credentials):
    credentials.set("default", "aws_secret_access_key", "rotated")
    assert str(credentials) == credentials_text.replace(
        "= secret #", "= rotated #"
    )


def test_set_new_setting(credentials_text, credentials):
    credentials.set("dev", "aws_session_token", "token")
    assert str(credentials) == credentials_text + "aws_session_token = token\n"


def test_set_new_profile(credentials_text, credentials):
    credentials.set("prod", "aws_access_key_id", "AKIDPROD")
    assert str(credentials) == (
        credentials_text + "\n[prod]\naws_access_key_id = AKIDPROD\n"
    )
    assert credentials.get_profile("prod") is credentials.sections[-1]


def test_set_rejects_bad_names(credentials_text, credentials):
    with pytest.raises(TokenError):
        credentials.set("my profile", "aws_access_key_id", "x")
    with pytest.raises(TokenError):
        credentials.set("dev", "aws_access_key_id", "two words")
    assert str(credentials) == credentials_text


def test_config_style_header_is_rejected():
    with pytest.raises(ParseError) as exc:
        aws_config_mod.parse_credentials("[profile dev]\nkey = value\n")
    assert exc.value.coords == (1, 9)


def test_empty_credentials_file():
    creds = aws_config_mod.parse_credentials("")
    assert creds.sections == []
    creds.set("default", "aws_access_key_id", "AKID")
    assert str(creds) == "[default]\naws_access_key_id = AKID\n"
