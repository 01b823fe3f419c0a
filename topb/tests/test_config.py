from __future__ import annotations

import pytest

from topb.pipeline import CodeGeneratorConfig, ConfigError, DiscoveryMode, EmbeddedFieldPolicy


def test_defaults():
    config = CodeGeneratorConfig()
    assert config.marker == "gen:topb"
    assert config.wire_alias == "pb"
    assert config.method_name == "ToPb"
    assert config.receiver_name == "m"
    assert config.embedded_fields == EmbeddedFieldPolicy.ERROR
    assert config.output.file_prefix == "autogen_topb_"
    assert config.output.prune_stale is False
    assert config.formatter.enabled is False


def test_round_trip():
    config = CodeGeneratorConfig.from_dict(
        {
            "wire_package": "example.com/pb",
            "embedded_fields": "implicit",
            "discovery": "directive",
            "output": {"prune_stale": True},
            "formatter": {"enabled": True, "command": "/usr/local/go/bin/gofmt"},
        }
    )

    assert config.embedded_fields == EmbeddedFieldPolicy.IMPLICIT
    assert config.discovery == DiscoveryMode.DIRECTIVE
    assert config.output.prune_stale is True
    assert config.output.file_prefix == "autogen_topb_"
    assert config.formatter.command == "/usr/local/go/bin/gofmt"
    assert CodeGeneratorConfig.from_dict(config.to_dict()) == config


def test_unknown_keys_ignored():
    config = CodeGeneratorConfig.from_dict({"not_an_option": 1, "marker": "+topb"})
    assert config.marker == "+topb"
    assert not hasattr(config, "not_an_option")


def test_invalid_enum_value():
    with pytest.raises(ConfigError, match="embedded_fields"):
        CodeGeneratorConfig.from_dict({"embedded_fields": "maybe"})


def test_invalid_section_type():
    with pytest.raises(ConfigError, match="output"):
        CodeGeneratorConfig.from_dict({"output": "yes"})


def test_not_an_object():
    with pytest.raises(ConfigError):
        CodeGeneratorConfig.from_dict(["marker"])


@pytest.mark.parametrize(
    "discovery, flag, expected",
    [
        (DiscoveryMode.EXPLICIT, None, False),
        (DiscoveryMode.DIRECTIVE, None, True),
        (DiscoveryMode.EXPLICIT, True, True),
        (DiscoveryMode.DIRECTIVE, False, False),
    ],
)
def test_generation_comment_default(discovery, flag, expected):
    config = CodeGeneratorConfig(discovery=discovery, add_generation_comment=flag)
    assert config.wants_generation_comment() is expected
