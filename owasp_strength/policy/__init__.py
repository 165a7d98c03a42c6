"""Password policy evaluation.

Evaluates passwords against the configurable OWASP strength policy.
"""

from .engine import PasswordPolicy, Verdict
from .rules import Rule, RuleKind, RuleResult, RuleType

__all__ = [
    "PasswordPolicy",
    "Verdict",
    "Rule",
    "RuleKind",
    "RuleResult",
    "RuleType",
]
