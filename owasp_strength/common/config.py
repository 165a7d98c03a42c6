"""Configuration management for owasp-strength.

Holds the policy threshold record, the allow-list merge used to apply
caller overrides, and loading of YAML configuration files.
"""

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from ..exceptions import ConfigError, UnknownOptionError


@dataclass
class PolicyConfig:
    """Thresholds for the password strength policy."""

    allow_passphrases: bool = True
    max_length: int = 128
    min_length: int = 10
    min_phrase_length: int = 20
    min_optional_tests_to_pass: int = 4


@dataclass
class StrengthConfig:
    """Top-level configuration for owasp-strength."""

    policy: PolicyConfig = field(default_factory=PolicyConfig)
    log_level: str = "INFO"
    log_dir: Optional[str] = None


# Recognized override keys. The camelCase spellings are the option names
# used by the OWASP reference implementation.
OPTION_ALIASES: Dict[str, str] = {
    "allow_passphrases": "allow_passphrases",
    "allowPassphrases": "allow_passphrases",
    "max_length": "max_length",
    "maxLength": "max_length",
    "min_length": "min_length",
    "minLength": "min_length",
    "min_phrase_length": "min_phrase_length",
    "minPhraseLength": "min_phrase_length",
    "min_optional_tests_to_pass": "min_optional_tests_to_pass",
    "minOptionalTestsToPass": "min_optional_tests_to_pass",
}

FIELD_TYPES: Dict[str, type] = {
    "allow_passphrases": bool,
    "max_length": int,
    "min_length": int,
    "min_phrase_length": int,
    "min_optional_tests_to_pass": int,
}

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}

Overrides = Union[Mapping[str, Any], PolicyConfig]


def merge_overrides(
    config: PolicyConfig,
    overrides: Optional[Overrides],
    strict: bool = False,
) -> List[str]:
    """Apply recognized override keys to a policy config in place.

    Values are assigned as given; no type or cross-field validation is
    done here.

    Args:
        config: PolicyConfig to update
        overrides: Mapping of option name to value, or another PolicyConfig
        strict: Reject the whole merge if any key is unknown

    Returns:
        The override keys that were ignored

    Raises:
        UnknownOptionError: If strict and unknown keys are present
        TypeError: If overrides is not a mapping
    """
    if overrides is None:
        return []
    if isinstance(overrides, PolicyConfig):
        overrides = asdict(overrides)
    if not isinstance(overrides, Mapping):
        raise TypeError(
            f"Policy overrides must be a mapping, got {type(overrides).__name__}"
        )

    unknown = [key for key in overrides if key not in OPTION_ALIASES]
    if unknown and strict:
        raise UnknownOptionError(unknown)

    for key, value in overrides.items():
        if key in OPTION_ALIASES:
            setattr(config, OPTION_ALIASES[key], value)

    return [str(key) for key in unknown]


def _coerce_value(key: str, value: Any) -> Any:
    """Coerce a configuration file value to its field type.

    Args:
        key: Canonical field name
        value: Raw value from the file

    Returns:
        Value of the field's type

    Raises:
        ConfigError: If the value cannot be converted
    """
    expected = FIELD_TYPES[key]

    if expected is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise ConfigError(f"{key} must be a boolean, got {value!r}", key)

    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got {value!r}", key)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ConfigError(f"{key} must be an integer, got {value!r}", key)


def parse_policy_config(policy_dict: Dict[str, Any]) -> PolicyConfig:
    """Parse a password policy configuration dictionary.

    Unknown keys are skipped, matching the merge semantics.

    Args:
        policy_dict: Policy section of the configuration

    Returns:
        PolicyConfig instance

    Raises:
        ConfigError: If a recognized value has the wrong type
    """
    config = PolicyConfig()
    coerced = {}
    for key, value in policy_dict.items():
        canonical = OPTION_ALIASES.get(key)
        if canonical is None:
            continue
        coerced[canonical] = _coerce_value(canonical, value)
    merge_overrides(config, coerced)
    return config


def parse_config(config_dict: Dict[str, Any]) -> StrengthConfig:
    """Parse the full configuration dictionary.

    Args:
        config_dict: Full configuration dictionary

    Returns:
        StrengthConfig instance
    """
    policy = PolicyConfig()
    if config_dict.get("password_policy"):
        policy = parse_policy_config(config_dict["password_policy"])

    logging_dict = config_dict.get("logging") or {}

    return StrengthConfig(
        policy=policy,
        log_level=logging_dict.get("level", "INFO"),
        log_dir=logging_dict.get("log_dir"),
    )


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        TypeError: If the document root is not a mapping
        yaml.YAMLError: If config file is invalid YAML
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_file.open("r") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise TypeError(
            f"Configuration root must be a mapping, got {type(config).__name__}"
        )

    return _expand_env_vars(config)


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in configuration."""
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj


def load_typed_config(config_path: Union[str, Path]) -> StrengthConfig:
    """Load and parse configuration into typed dataclass.

    Args:
        config_path: Path to configuration file

    Returns:
        StrengthConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigError: If a policy value has the wrong type
        yaml.YAMLError: If config file is invalid YAML
    """
    return parse_config(load_config(config_path))
