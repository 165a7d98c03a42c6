"""OWASP-style password strength evaluation."""

from .common.config import PolicyConfig, StrengthConfig, load_typed_config
from .exceptions import (
    ConfigError,
    InvalidInputError,
    OwaspStrengthError,
    UnknownOptionError,
)
from .policy import PasswordPolicy, Rule, RuleKind, RuleResult, RuleType, Verdict

__version__ = "1.0.0"

__all__ = [
    "ConfigError",
    "InvalidInputError",
    "OwaspStrengthError",
    "PasswordPolicy",
    "PolicyConfig",
    "Rule",
    "RuleKind",
    "RuleResult",
    "RuleType",
    "StrengthConfig",
    "UnknownOptionError",
    "Verdict",
    "load_typed_config",
]
