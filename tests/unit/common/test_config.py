"""Tests for configuration module."""

import pytest
import yaml

from owasp_strength.common.config import (
    OPTION_ALIASES,
    PolicyConfig,
    StrengthConfig,
    load_config,
    load_typed_config,
    merge_overrides,
    parse_config,
    parse_policy_config,
)
from owasp_strength.exceptions import ConfigError, UnknownOptionError


class TestMergeOverrides:
    """Tests for the allow-list merge."""

    def test_recognized_keys_applied(self):
        """Test snake case keys overwrite defaults."""
        config = PolicyConfig()

        ignored = merge_overrides(config, {"min_length": 8, "max_length": 64})

        assert ignored == []
        assert config.min_length == 8
        assert config.max_length == 64
        assert config.allow_passphrases is True

    def test_camel_case_keys_applied(self):
        """Test reference implementation key names are accepted."""
        config = PolicyConfig()

        merge_overrides(config, {"minPhraseLength": 30, "minOptionalTestsToPass": 2})

        assert config.min_phrase_length == 30
        assert config.min_optional_tests_to_pass == 2

    def test_unknown_keys_returned(self):
        """Test unknown keys are reported and not set."""
        config = PolicyConfig()

        ignored = merge_overrides(config, {"foo": "bar", "__class__": object})

        assert sorted(ignored) == ["__class__", "foo"]
        assert config == PolicyConfig()
        assert type(config) is PolicyConfig

    def test_strict_raises(self):
        """Test strict merge rejects unknown keys without applying any."""
        config = PolicyConfig()

        with pytest.raises(UnknownOptionError) as exc_info:
            merge_overrides(config, {"min_length": 5, "minLen": 5}, strict=True)

        assert exc_info.value.keys == ["minLen"]
        assert "minLen" in str(exc_info.value)
        assert config.min_length == 10

    def test_no_cross_field_validation(self):
        """Test inconsistent thresholds are accepted."""
        config = PolicyConfig()

        merge_overrides(config, {"min_length": 50, "max_length": 5, "min_phrase_length": 1})

        assert config.min_length == 50
        assert config.max_length == 5
        assert config.min_phrase_length == 1

    def test_none_is_noop(self):
        config = PolicyConfig()

        assert merge_overrides(config, None) == []
        assert config == PolicyConfig()

    def test_non_mapping_rejected(self):
        with pytest.raises(TypeError):
            merge_overrides(PolicyConfig(), ["min_length"])

    def test_aliases_cover_every_field(self):
        assert set(OPTION_ALIASES.values()) == set(vars(PolicyConfig()))


class TestParsePolicyConfig:
    """Tests for PolicyConfig parsing."""

    def test_parse_defaults(self):
        assert parse_policy_config({}) == PolicyConfig()

    def test_parse_values(self):
        config = parse_policy_config({
            "allow_passphrases": False,
            "minLength": 12,
            "max_length": 64,
        })

        assert config.allow_passphrases is False
        assert config.min_length == 12
        assert config.max_length == 64

    def test_coerces_strings(self):
        """Test string values from environment expansion are coerced."""
        config = parse_policy_config({
            "allow_passphrases": "no",
            "min_length": "14",
        })

        assert config.allow_passphrases is False
        assert config.min_length == 14

    def test_unknown_keys_skipped(self):
        config = parse_policy_config({"foo": "bar", "min_length": 11})

        assert config.min_length == 11
        assert not hasattr(config, "foo")

    @pytest.mark.parametrize(
        "key,value",
        [
            ("min_length", "twelve"),
            ("min_length", True),
            ("max_length", 12.5),
            ("allow_passphrases", "maybe"),
            ("allow_passphrases", 1),
        ],
    )
    def test_bad_values_rejected(self, key, value):
        with pytest.raises(ConfigError) as exc_info:
            parse_policy_config({key: value})

        assert exc_info.value.key == key


class TestParseConfig:
    """Tests for full config parsing."""

    def test_parse_full_config(self, sample_config):
        config = parse_config(sample_config)

        assert isinstance(config, StrengthConfig)
        assert config.policy.min_length == 12
        assert config.policy.min_optional_tests_to_pass == 3
        assert config.log_level == "DEBUG"
        assert config.log_dir is None

    def test_parse_empty_config(self):
        config = parse_config({})

        assert config.policy == PolicyConfig()
        assert config.log_level == "INFO"

    def test_parse_empty_sections(self):
        config = parse_config({"password_policy": None, "logging": None})

        assert config.policy == PolicyConfig()
        assert config.log_level == "INFO"


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_load_config(self, tmp_path, sample_config):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump(sample_config))

        assert load_config(config_file) == sample_config

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_load_empty_file(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        assert load_config(config_file) == {}

    def test_load_non_mapping(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- min_length\n- max_length\n")

        with pytest.raises(TypeError):
            load_config(config_file)

    def test_env_var_expansion(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PW_MIN_LENGTH", "16")
        config_file = tmp_path / "config.yaml"
        config_file.write_text("password_policy:\n  min_length: ${PW_MIN_LENGTH}\n")

        config = load_typed_config(config_file)

        assert config.policy.min_length == 16

    def test_load_typed_config(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "password_policy:\n"
            "  allowPassphrases: false\n"
            "logging:\n"
            "  level: WARNING\n"
            f"  log_dir: {tmp_path / 'logs'}\n"
        )

        config = load_typed_config(str(config_file))

        assert config.policy.allow_passphrases is False
        assert config.log_level == "WARNING"
        assert config.log_dir == str(tmp_path / "logs")
