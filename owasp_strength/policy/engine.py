"""Password policy evaluation engine.

Evaluates passwords against the OWASP-style strength policy: required
rules that every password must pass, and optional character class rules
of which a threshold must pass unless the password is long enough to be
treated as a passphrase.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from ..common.config import Overrides, PolicyConfig, load_typed_config, merge_overrides
from ..common.logger import get_logger, setup_logger
from ..exceptions import InvalidInputError
from .rules import Rule, build_rules, evaluate_rule

logger = get_logger("password_policy")


@dataclass(frozen=True)
class Verdict:
    """
    Result of evaluating a password against the policy.
    """
    strong: bool
    is_passphrase: bool
    errors: Tuple[str, ...] = ()
    required_test_errors: Tuple[str, ...] = ()
    optional_test_errors: Tuple[str, ...] = ()
    passed_tests: Tuple[int, ...] = ()
    failed_tests: Tuple[int, ...] = ()
    optional_tests_passed: int = 0

    def to_dict(self, camel_case: bool = False) -> Dict[str, Any]:
        """Convert verdict to a plain dictionary.

        Args:
            camel_case: Use the key names of the OWASP reference result
                object (``isPassphrase``, ``requiredTestErrors``, ...)

        Returns:
            Dictionary with lists in place of tuples
        """
        data = {
            "strong": self.strong,
            "is_passphrase": self.is_passphrase,
            "errors": list(self.errors),
            "required_test_errors": list(self.required_test_errors),
            "optional_test_errors": list(self.optional_test_errors),
            "passed_tests": list(self.passed_tests),
            "failed_tests": list(self.failed_tests),
            "optional_tests_passed": self.optional_tests_passed,
        }
        if camel_case:
            return {_camel(key): value for key, value in data.items()}
        return data


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class PasswordPolicy:
    """
    Evaluates passwords against a configurable strength policy.

    Required rules (length floor, length ceiling, repeated characters)
    always run and any failure makes the password weak. Optional rules
    (lowercase, uppercase, digit, special character) run unless the
    password qualifies as a passphrase; at least
    ``min_optional_tests_to_pass`` of them must pass.

    Evaluation does not modify the policy, so one instance may serve
    concurrent ``evaluate`` calls. ``configure`` is not synchronized.
    """

    def __init__(self, overrides: Optional[Overrides] = None, *, strict: bool = False):
        """
        Initialize the policy.

        Args:
            overrides: Option values replacing the defaults
            strict: Raise UnknownOptionError for unrecognized option keys
                instead of ignoring them
        """
        self.strict = strict
        self._config = PolicyConfig()
        self._required_rules, self._optional_rules = build_rules()
        self.configure(overrides)

    @classmethod
    def from_config_file(
        cls, config_path: Union[str, Path], *, strict: bool = False
    ) -> "PasswordPolicy":
        """
        Build a policy from a YAML configuration file.

        The ``password_policy`` section sets the thresholds and the
        ``logging`` section configures the package logger.

        Args:
            config_path: Path to configuration file
            strict: Passed through to the constructor

        Returns:
            PasswordPolicy instance
        """
        config = load_typed_config(config_path)
        setup_logger(level=config.log_level, log_dir=config.log_dir)
        return cls(config.policy, strict=strict)

    @property
    def config(self) -> PolicyConfig:
        """Current policy thresholds."""
        return self._config

    @property
    def required_rules(self) -> Tuple[Rule, ...]:
        return self._required_rules

    @property
    def optional_rules(self) -> Tuple[Rule, ...]:
        return self._optional_rules

    @property
    def rules(self) -> Tuple[Rule, ...]:
        """All rules in index order."""
        return self._required_rules + self._optional_rules

    def configure(self, overrides: Optional[Overrides]) -> None:
        """
        Merge option overrides into the current configuration.

        Only recognized option names are applied. Affects subsequent
        evaluations only.

        Args:
            overrides: Mapping of option name to value, or a PolicyConfig

        Raises:
            UnknownOptionError: If strict and an option name is unknown
        """
        ignored = merge_overrides(self._config, overrides, strict=self.strict)
        if ignored:
            logger.warning(f"Ignoring unknown policy options: {', '.join(ignored)}")
        if overrides:
            logger.debug(f"Policy configured: {self._config}")

    def evaluate(self, password: str) -> Verdict:
        """
        Evaluate a password against the policy.

        Args:
            password: Candidate password or passphrase

        Returns:
            Verdict with the overall decision and per-rule diagnostics

        Raises:
            InvalidInputError: If password is not a str
        """
        if not isinstance(password, str):
            raise InvalidInputError(password)

        # Consistent thresholds for the whole evaluation
        config = replace(self._config)

        strong = True
        errors: List[str] = []
        required_errors: List[str] = []
        optional_errors: List[str] = []
        passed: List[int] = []
        failed: List[int] = []

        for rule in self._required_rules:
            result = evaluate_rule(rule, password, config)
            if result.passed:
                passed.append(rule.index)
            else:
                strong = False
                errors.append(result.reason)
                required_errors.append(result.reason)
                failed.append(rule.index)

        is_passphrase = (
            config.allow_passphrases is True
            and len(password) >= config.min_phrase_length
        )

        optional_passed = 0
        if not is_passphrase:
            for rule in self._optional_rules:
                result = evaluate_rule(rule, password, config)
                if result.passed:
                    optional_passed += 1
                    passed.append(rule.index)
                else:
                    errors.append(result.reason)
                    optional_errors.append(result.reason)
                    failed.append(rule.index)

            if optional_passed < config.min_optional_tests_to_pass:
                strong = False

        verdict = Verdict(
            strong=strong,
            is_passphrase=is_passphrase,
            errors=tuple(errors),
            required_test_errors=tuple(required_errors),
            optional_test_errors=tuple(optional_errors),
            passed_tests=tuple(passed),
            failed_tests=tuple(failed),
            optional_tests_passed=optional_passed,
        )
        logger.debug(
            f"Evaluated password: strong={verdict.strong}, "
            f"passphrase={verdict.is_passphrase}, failed={list(verdict.failed_tests)}"
        )
        return verdict

    def evaluate_batch(self, passwords: Iterable[str]) -> List[Verdict]:
        """
        Evaluate multiple passwords against the policy.

        Args:
            passwords: Candidate passwords

        Returns:
            List of Verdicts in input order
        """
        return [self.evaluate(password) for password in passwords]
