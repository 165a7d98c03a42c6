"""Password policy rule definitions.

Each rule wraps a check function with the signature
``(password, config) -> Optional[str]``: ``None`` when the password
passes, otherwise a human-readable error message. Rules are indexed by
position, required rules first and optional rules continuing after them.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..common.config import PolicyConfig

CheckFunc = Callable[[str, PolicyConfig], Optional[str]]


class RuleKind(str, Enum):
    """How a rule contributes to the verdict."""

    REQUIRED = "required"    # Any failure makes the password weak
    OPTIONAL = "optional"    # Counted toward min_optional_tests_to_pass


class RuleType(str, Enum):
    """Types of password rules."""

    # Required rules
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    REPEATED_CHARACTERS = "repeated_characters"

    # Optional character class rules
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    DIGIT = "digit"
    SPECIAL_CHARACTER = "special_character"


# Any code point except a line terminator, three or more times in a row
_REPEATED = re.compile(r"([^\n\r\u2028\u2029])\1{2,}")
_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
# Anything that is not ASCII alphanumeric, whitespace included
_SPECIAL = re.compile(r"[^A-Za-z0-9]")


def check_min_length(password: str, config: PolicyConfig) -> Optional[str]:
    if len(password) < config.min_length:
        return f"The password must be at least {config.min_length} characters long."
    return None


def check_max_length(password: str, config: PolicyConfig) -> Optional[str]:
    if len(password) > config.max_length:
        return f"The password must be fewer than {config.max_length} characters."
    return None


def check_repeated_characters(password: str, config: PolicyConfig) -> Optional[str]:
    if _REPEATED.search(password):
        return "The password may not contain sequences of three or more repeated characters."
    return None


def check_lowercase(password: str, config: PolicyConfig) -> Optional[str]:
    if not _LOWER.search(password):
        return "The password must contain at least one lowercase letter."
    return None


def check_uppercase(password: str, config: PolicyConfig) -> Optional[str]:
    if not _UPPER.search(password):
        return "The password must contain at least one uppercase letter."
    return None


def check_digit(password: str, config: PolicyConfig) -> Optional[str]:
    if not _DIGIT.search(password):
        return "The password must contain at least one number."
    return None


def check_special_character(password: str, config: PolicyConfig) -> Optional[str]:
    if not _SPECIAL.search(password):
        return "The password must contain at least one special character."
    return None


# Evaluation order is significant: it fixes each rule's index.
REQUIRED_CHECKS: Tuple[Tuple[RuleType, CheckFunc], ...] = (
    (RuleType.MIN_LENGTH, check_min_length),
    (RuleType.MAX_LENGTH, check_max_length),
    (RuleType.REPEATED_CHARACTERS, check_repeated_characters),
)

OPTIONAL_CHECKS: Tuple[Tuple[RuleType, CheckFunc], ...] = (
    (RuleType.LOWERCASE, check_lowercase),
    (RuleType.UPPERCASE, check_uppercase),
    (RuleType.DIGIT, check_digit),
    (RuleType.SPECIAL_CHARACTER, check_special_character),
)


@dataclass(frozen=True)
class Rule:
    """
    A single password rule.

    Binds a check function to its position in the policy.
    """
    rule_type: RuleType
    kind: RuleKind
    index: int
    check: CheckFunc

    def to_dict(self) -> Dict[str, Any]:
        """Convert rule to dictionary for serialization."""
        return {
            "rule_type": self.rule_type.value,
            "kind": self.kind.value,
            "index": self.index,
        }


@dataclass(frozen=True)
class RuleResult:
    """Result of evaluating a single rule."""
    rule: Rule
    passed: bool
    reason: Optional[str] = None


def build_rules() -> Tuple[Tuple[Rule, ...], Tuple[Rule, ...]]:
    """
    Build the required and optional rule sequences.

    Returns:
        Tuple of (required rules, optional rules), indexed 0..n-1
        across both sequences
    """
    required: List[Rule] = []
    for rule_type, check in REQUIRED_CHECKS:
        required.append(Rule(rule_type, RuleKind.REQUIRED, len(required), check))

    optional: List[Rule] = []
    for rule_type, check in OPTIONAL_CHECKS:
        index = len(required) + len(optional)
        optional.append(Rule(rule_type, RuleKind.OPTIONAL, index, check))

    return tuple(required), tuple(optional)


def evaluate_rule(rule: Rule, password: str, config: PolicyConfig) -> RuleResult:
    """
    Evaluate a single rule against a password.

    Args:
        rule: The rule to evaluate
        password: Candidate password
        config: Policy thresholds in effect

    Returns:
        RuleResult with the failure message, if any
    """
    reason = rule.check(password, config)
    return RuleResult(rule=rule, passed=reason is None, reason=reason)
