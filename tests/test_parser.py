"""Tests for parsing config files and rendering them back."""

import logging
import time
from textwrap import dedent

import pytest

import aws_config_mod
from aws_config_mod import (
    NestedSettings,
    OtherSectionType,
    ParseError,
    SectionType,
    Value,
)


ROUND_TRIP_INPUTS = [
    "",
    "\n\n",
    "# only a comment",
    "   \n\t\n# two\n",
    "[default]",
    "[default]\n",
    "[profile A]\nregion=us-east-1",
    "[default]\r\nregion = x\r\n\r\n[profile A]\r\noutput = json\r\n",
    "[default]\na   =b\nc=   d\ne\t=\tf\n",
    "[default]\nregion = x   # note\n# between\noutput = json # again\n",
    "[custom thing]\nkey = value\n",
    "[default foo]\n",
    "[profile]\nregion = x\n",
    "[plugins]\ncli_legacy_plugin_path = /opt/plugins\n",
    "[default]\ns3 =\nregion = x\n",
    "[default]\ns3 =   # comment\n",
    dedent("""\
        # Leading comment

        [services local]   # services
        s3 =
          endpoint_url = http://localhost:4566

          # a comment between nested settings
        \taddressing_style = path
        dynamodb =
          endpoint_url = http://localhost:8000   # dynamo


        [sso-session corp]
        sso_region = us-east-1
        # trailing comment
    """),
]


@pytest.mark.parametrize("text", ROUND_TRIP_INPUTS)
def test_round_trip(text):
    assert aws_config_mod.render(aws_config_mod.parse(text)) == text


def test_round_trip_sample(sample_text, sample_config):
    assert str(sample_config) == sample_text


@pytest.mark.parametrize("text", ["", " ", "\n", "\r\n\r\n", "# c\n\n# d"])
def test_empty_and_whitespace_only_files_have_no_sections(text):
    config = aws_config_mod.parse(text)
    assert config.sections == []
    assert len(config) == 0


def test_sample_structure(sample_config):
    keys = [section.key for section in sample_config]
    assert keys == [
        (SectionType.DEFAULT, None),
        (SectionType.PROFILE, "A"),
        (SectionType.SERVICES, "myservices"),
    ]
    default = sample_config.sections[0]
    assert default.header.trailing_whitespace == (
        "                 # section header, optional comment\n"
    )
    assert [s.name for s in default.settings] == ["region", "output"]
    assert default.get_setting("output").equal == "="


def test_get_section_first_setting(sample_config):
    section = sample_config.get_section("profile.A")
    assert section is not None
    first = section.settings[0]
    assert first.name == "credential_source"
    assert first.value == "Ec2InstanceMetadata"
    assert isinstance(first.value, Value)


def test_get_setting_with_nested_value(sample_config):
    setting = sample_config.get_setting(
        ("services", "myservices", "ec2")
    )
    assert setting.is_nested
    assert isinstance(setting.value, NestedSettings)
    assert len(setting.value) == 1
    item = setting.value.items[0]
    assert item.name == "endpoint_url"
    assert item.value == "http://localhost:8000"


def test_get_nested_setting(sample_config):
    item = sample_config.get_nested_setting(
        "services.myservices.ec2.endpoint_url"
    )
    assert item.value == "http://localhost:8000"
    assert item.indent == "  "


def test_section_get_value(sample_config):
    section = sample_config.get_section(("default",))
    assert section.get_value("region") == "us-west-2"
    assert section.get_value("missing") is None


def test_failed_lookups_leave_text_unchanged(sample_text, sample_config):
    assert sample_config.get_section("profile.Z") is None
    assert sample_config.get_section("sso-session.corp") is None
    assert sample_config.get_setting("profile.A.missing") is None
    assert sample_config.get_setting("profile.Z.region") is None
    # A scalar setting has no nested settings:
    assert sample_config.get_nested_setting(
        "profile.A.credential_source.x"
    ) is None
    assert sample_config.get_nested_setting(
        "services.myservices.ec2.missing"
    ) is None
    assert str(sample_config) == sample_text


def test_empty_nested_list():
    config = aws_config_mod.parse("[default]\ns3 =\nregion = x\n")
    s3 = config.get_setting("default.s3")
    assert isinstance(s3.value, NestedSettings)
    assert len(s3.value) == 0
    assert config.get_setting("default.region").value == "x"


def test_inline_comment_after_value():
    config = aws_config_mod.parse("[default]\nregion = x   # note\n")
    setting = config.get_setting("default.region")
    assert setting.value == "x"
    assert setting.trailing_whitespace == "   # note"


def test_default_with_name_is_kept():
    config = aws_config_mod.parse("[default foo]\nregion = x\n")
    section = config.sections[0]
    assert section.section_type is SectionType.DEFAULT
    assert section.section_name == "foo"


def test_unknown_section_type():
    config = aws_config_mod.parse("[custom thing]\nkey = value\n")
    assert config.sections[0].section_type == OtherSectionType("custom")
    assert config.get_setting("custom.thing.key").value == "value"


def test_nameless_section_types():
    config = aws_config_mod.parse("[preview]\ncloudfront = true\n")
    assert config.get_setting("preview.cloudfront").value == "true"


def test_duplicate_sections_use_first_and_warn(caplog):
    text = "[profile A]\na = 1\n[profile A]\na = 2\n"
    with caplog.at_level(logging.WARNING, logger="aws_config_mod"):
        config = aws_config_mod.parse(text)
    assert len(config.sections) == 2
    assert config.get_setting("profile.A.a").value == "1"
    assert "Duplicate section [profile A]" in caplog.text
    assert str(config) == text


def test_parse_rejects_non_str():
    with pytest.raises(TypeError):
        aws_config_mod.parse(b"[default]\n")


@pytest.mark.parametrize(
    ("text", "coords"),
    [
        ("region = x\n", (1, 1)),
        ("[profile A\nregion = x\n", (1, 11)),
        ("[default]\nregion = a b\n", (2, 11)),
        ("[default]\nkey value\n", (2, 4)),
        ("[default]\n  indented = 1\n", (2, 1)),
        ("[default]\ns3 =\n  max =\n", (3, 8)),
        ("[default] region = x\n", (1, 10)),
        ("[]\n", (1, 2)),
        ("[[default]]\n", (1, 2)),
        ("[default]]\n", (1, 10)),
        ("[ default]\n", (1, 2)),
        ("[profile A B]\n", (1, 11)),
    ],
)
def test_parse_errors_point_at_furthest_position(text, coords):
    with pytest.raises(ParseError) as exc:
        aws_config_mod.parse(text)
    assert exc.value.coords == coords


def test_parse_error_message():
    with pytest.raises(ParseError) as exc:
        aws_config_mod.parse("[default]\nregion = a b\n")
    assert exc.value.msg == (
        "Line 2, column 11: Invalid syntax: expected a comment or a line"
        " break, found ' '\n"
        "  region = a b\n"
        "            ^"
    )
    assert exc.value.expected == ("a comment or a line break",)


def test_unclosed_header_expects_bracket():
    with pytest.raises(ParseError) as exc:
        aws_config_mod.parse("[profile A\n")
    assert "']'" in exc.value.expected


def test_empty_brackets_expect_a_section_type():
    with pytest.raises(ParseError) as exc:
        aws_config_mod.parse("[]\n")
    assert exc.value.expected == ("'default'", "a name")


def _many_settings(count):
    return "[default]\n" + "".join(
        f"key{i} = value{i}\n" for i in range(count)
    )


def test_parse_large_file():
    count = 40_000
    text = _many_settings(count)
    config = aws_config_mod.parse(text)
    assert str(config) == text
    assert len(config.get_section("default").settings) == count
    assert config.get_setting(f"default.key{count - 1}").value == (
        f"value{count - 1}"
    )

    with pytest.raises(ParseError) as exc:
        aws_config_mod.parse(text + "oops\n")
    assert exc.value.coords == (count + 2, 5)


def test_parse_time_grows_linearly():
    def best_time(text):
        times = []
        for _ in range(3):
            start = time.perf_counter()
            aws_config_mod.parse(text)
            times.append(time.perf_counter() - start)
        return min(times)

    small = best_time(_many_settings(2_000))
    large = best_time(_many_settings(16_000))
    # Eight times the input; a quadratic parse would take about 64 times
    # as long.
    assert large / small < 24
