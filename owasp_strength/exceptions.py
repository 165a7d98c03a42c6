"""Exceptions raised by owasp-strength.

Check failures are never exceptions; they are reported as messages inside
the verdict. These cover misuse of the evaluator and bad configuration.
"""

from typing import Iterable


class OwaspStrengthError(Exception):
    """Base class for owasp-strength errors."""


class InvalidInputError(OwaspStrengthError, TypeError):
    """Raised when a non-string value is submitted for evaluation."""

    def __init__(self, value: object):
        super().__init__(
            f"Password must be a str, got {type(value).__name__}"
        )
        self.value_type = type(value)


class UnknownOptionError(OwaspStrengthError, KeyError):
    """Raised by a strict policy when overrides contain unknown keys."""

    def __init__(self, keys: Iterable[str]):
        self.keys = sorted(str(k) for k in keys)
        super().__init__(f"Unknown policy option(s): {', '.join(self.keys)}")

    def __str__(self) -> str:
        return self.args[0]


class ConfigError(OwaspStrengthError, ValueError):
    """Raised when a configuration value cannot be used."""

    def __init__(self, message: str, key: str):
        super().__init__(message)
        self.key = key
