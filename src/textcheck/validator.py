"""
Core validation engine.

Validator binds one input string to an ordered list of rules, evaluates
them with short-circuit semantics and reports the first failure.
"""

import logging
from typing import Callable, Iterable, Optional, Tuple

from .report import CheckReport
from .rules import (
    AllLowerCaseRule,
    AllUpperCaseRule,
    AtLeastOneLowerCaseRule,
    AtLeastOneNumberRule,
    AtLeastOneSpecialCharacterRule,
    AtLeastOneUpperCaseRule,
    ContainsRule,
    CreditCardRule,
    CreditCardWithDashesRule,
    CreditCardWithSpacesRule,
    CustomRule,
    EmailRule,
    EndsWithRule,
    GreaterThanOrEqualRule,
    GreaterThanRule,
    LessThanOrEqualRule,
    LessThanRule,
    MaxLengthRule,
    MinLengthRule,
    NoNumbersRule,
    NoSpecialCharacterRule,
    NonEmptyRule,
    NotContainsRule,
    Number,
    NumberEqualToRule,
    OnlyNumbersRule,
    RegexRule,
    Rule,
    RuleResult,
    RuleSet,
    StartsWithNonNumberRule,
    StartsWithNumberRule,
    StartsWithRule,
    TextEqualToRule,
    TextNotEqualToRule,
    UrlRule,
    ValidNumberRule,
)

CARD_LENGTH = 16
CARD_LENGTH_WITH_SEPARATORS = 19


class Validator:
    """
    Validate one string against a chain of rules.

    Every rule method appends a rule and returns this same instance, so
    checks can be chained. ``check()`` runs the rules in the order they
    were added and stops at the first failure.

    Usage:
        from textcheck import Validator

        ok = (
            Validator(password, name="password")
            .non_empty()
            .min_length(8)
            .at_least_one_number()
            .add_error_callback(show_error)
            .check()
        )

    Re-running ``check()`` re-evaluates the full rule list from a clean
    state, so an earlier failure does not stick once the rules that
    caused it are satisfied.
    """

    def __init__(self, text: str, name: Optional[str] = None):
        if not isinstance(text, str):
            raise TypeError(f"Validator text must be a str, got {type(text).__name__}")
        self._text = text
        self.name = name
        self._ruleset = RuleSet(name or 'validator')
        self._is_valid = True
        self._error_message: Optional[str] = None
        self._error_callback: Optional[Callable[[str], None]] = None
        self._success_callback: Optional[Callable[[], None]] = None
        self.last_report: Optional[CheckReport] = None
        self._log = logging.getLogger(f"textcheck.validator.{name}" if name else "textcheck.validator")

    @property
    def text(self) -> str:
        return self._text

    @property
    def is_valid(self) -> bool:
        """Outcome of the most recent check (True before any check)."""
        return self._is_valid

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    @property
    def rule_count(self) -> int:
        return len(self._ruleset)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._ruleset)

    # --- Evaluation -----------------------------------------------------------

    def check(self) -> bool:
        """
        Run all rules in insertion order and return the result.

        Stops at the first failing rule and records its message. Invokes
        the success callback when every rule passed, otherwise the error
        callback with the message. Callback exceptions propagate.

        State is only updated once the rule loop finishes; a rule
        that raises leaves the previous outcome untouched.
        """
        results = []
        failed: Optional[RuleResult] = None

        for rule in self._ruleset:
            result = rule.evaluate(self._text)
            results.append(result)
            if not result.passed:
                failed = result
                self._log.debug(f"{result.rule_name} failed: {result.message}")
                break

        self._is_valid = failed is None
        self._error_message = failed.message if failed else None
        self.last_report = CheckReport(
            name=self.name,
            passed=self._is_valid,
            error_message=self._error_message,
            failed_rule=failed.rule_name if failed else None,
            results=results,
            total_rules=len(self._ruleset),
        )
        self._log.debug(
            f"check {'passed' if self._is_valid else 'failed'}: "
            f"{len(results)}/{len(self._ruleset)} rules evaluated"
        )

        if self._is_valid:
            if self._success_callback is not None:
                self._success_callback()
        elif self._error_callback is not None:
            self._error_callback(self._error_message)

        return self._is_valid

    # --- Configuration --------------------------------------------------------

    def add_rule(self, rule: Rule) -> 'Validator':
        """Append a single rule."""
        self._ruleset.add(rule)
        return self

    def add_rules(self, rules: Iterable[Rule]) -> 'Validator':
        """Append multiple rules at once, preserving their order."""
        for rule in rules:
            self._ruleset.add(rule)
        return self

    def add_error_callback(self, callback: Callable[[str], None]) -> 'Validator':
        """Set the handler called with the failure message. Replaces any previous one."""
        self._error_callback = callback
        return self

    def add_success_callback(self, callback: Callable[[], None]) -> 'Validator':
        """Set the handler called when all rules pass. Replaces any previous one."""
        self._success_callback = callback
        return self

    # --- Rules ----------------------------------------------------------------

    def non_empty(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(NonEmptyRule(message=message))

    def min_length(self, length: int, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(MinLengthRule(length, message=message))

    def max_length(self, length: int, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(MaxLengthRule(length, message=message))

    def valid_email(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(EmailRule(message=message))

    def valid_number(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(ValidNumberRule(message=message))

    def greater_than(self, number: Number, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(GreaterThanRule(number, message=message))

    def greater_than_or_equal(self, number: Number, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(GreaterThanOrEqualRule(number, message=message))

    def less_than(self, number: Number, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(LessThanRule(number, message=message))

    def less_than_or_equal(self, number: Number, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(LessThanOrEqualRule(number, message=message))

    def number_equal_to(self, number: Number, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(NumberEqualToRule(number, message=message))

    def all_upper_case(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(AllUpperCaseRule(message=message))

    def all_lower_case(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(AllLowerCaseRule(message=message))

    def at_least_one_upper_case(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(AtLeastOneUpperCaseRule(message=message))

    def at_least_one_lower_case(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(AtLeastOneLowerCaseRule(message=message))

    def at_least_one_number(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(AtLeastOneNumberRule(message=message))

    def no_numbers(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(NoNumbersRule(message=message))

    def only_numbers(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(OnlyNumbersRule(message=message))

    def starts_with_number(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(StartsWithNumberRule(message=message))

    def starts_with_non_number(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(StartsWithNonNumberRule(message=message))

    def no_special_characters(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(NoSpecialCharacterRule(message=message))

    def at_least_one_special_character(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(AtLeastOneSpecialCharacterRule(message=message))

    def text_equal_to(self, target: str, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(TextEqualToRule(target, message=message))

    def text_not_equal_to(self, target: str, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(TextNotEqualToRule(target, message=message))

    def starts_with(self, target: str, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(StartsWithRule(target, message=message))

    def ends_with(self, target: str, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(EndsWithRule(target, message=message))

    def contains(self, target: str, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(ContainsRule(target, message=message))

    def not_contains(self, target: str, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(NotContainsRule(target, message=message))

    def valid_url(self, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(UrlRule(message=message))

    def regex(self, pattern: str, flags: int = 0, message: Optional[str] = None) -> 'Validator':
        return self.add_rule(RegexRule(pattern, flags=flags, message=message))

    def custom(
        self,
        func: Callable[[str], bool],
        message: Optional[str] = None,
        name: str = 'custom_rule',
    ) -> 'Validator':
        return self.add_rule(CustomRule(func, name=name, message=message))

    def credit_card_number(self, message: Optional[str] = None) -> 'Validator':
        """Sixteen digits, e.g. ``4111111111111111``."""
        return self.add_rules([
            MinLengthRule(CARD_LENGTH, message=message),
            MaxLengthRule(CARD_LENGTH, message=message),
            CreditCardRule(message=message),
        ])

    def credit_card_number_with_spaces(self, message: Optional[str] = None) -> 'Validator':
        """Four groups of four digits separated by spaces."""
        return self.add_rules([
            MinLengthRule(CARD_LENGTH_WITH_SEPARATORS, message=message),
            MaxLengthRule(CARD_LENGTH_WITH_SEPARATORS, message=message),
            CreditCardWithSpacesRule(message=message),
        ])

    def credit_card_number_with_dashes(self, message: Optional[str] = None) -> 'Validator':
        """Four groups of four digits separated by dashes."""
        return self.add_rules([
            MinLengthRule(CARD_LENGTH_WITH_SEPARATORS, message=message),
            MaxLengthRule(CARD_LENGTH_WITH_SEPARATORS, message=message),
            CreditCardWithDashesRule(message=message),
        ])

    def __repr__(self) -> str:
        return f"<Validator {self.name!r} rules={self.rule_count}>"


def validator(text: str, name: Optional[str] = None) -> Validator:
    """Shorthand for ``Validator(text, name)``."""
    return Validator(text, name=name)
