"""
Validation rule definitions.

Each rule encapsulates a single check over one string. Rules are
stateless apart from their construction parameters, never raise from
``validate``, and describe their failure with a human-readable message.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable, Iterator, List, Optional, Union

Number = Union[int, float, Decimal, str]

EMAIL_PATTERN = (
    r"[a-zA-Z0-9+._%\-]{1,256}"
    r"@"
    r"[a-zA-Z0-9][a-zA-Z0-9\-]{0,64}"
    r"(\.[a-zA-Z0-9][a-zA-Z0-9\-]{0,25})+"
)

URL_PATTERN = (
    r"(?:(?:https?|ftp)://)?"
    r"(?:[^\s:@/]+(?::[^\s:@/]*)?@)?"
    r"(?:"
    r"localhost"
    r"|(?:\d{1,3}\.){3}\d{1,3}"
    r"|(?:[a-zA-Z0-9](?:[a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,63}"
    r")"
    r"(?::\d{1,5})?"
    r"(?:[/?#]\S*)?"
)


# Optional sign, digits with an optional fraction, optional exponent.
_DECIMAL_RE = re.compile(r"\s*[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*")


def to_decimal(value: Number) -> Decimal:
    """
    Normalize a numeric threshold to a Decimal.

    Floats are converted through ``repr`` so ``0.1`` becomes
    ``Decimal('0.1')`` rather than its binary expansion.

    Raises:
        TypeError: For bools and non-numeric types.
        ValueError: For strings that are not finite decimal numbers.
    """
    if isinstance(value, bool):
        raise TypeError(f"expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        result = parse_decimal(value)
        if result is None:
            raise ValueError(f"not a decimal number: {value!r}")
    else:
        raise TypeError(f"expected a number, got {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"threshold must be finite, got {value!r}")
    return result


def parse_decimal(text: str) -> Optional[Decimal]:
    """Parse text as a finite Decimal, or return None."""
    if not _DECIMAL_RE.fullmatch(text):
        return None
    try:
        value = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    return value if value.is_finite() else None


@dataclass
class RuleResult:
    """Result of a single rule evaluation."""
    rule_name: str
    passed: bool
    message: Optional[str] = None

    @property
    def severity(self) -> str:
        return 'PASS' if self.passed else 'FAIL'


class Rule(ABC):
    """
    Base class for all validation rules.

    Subclasses implement ``validate`` and ``default_message``. A caller
    supplied ``message`` replaces the default in ``describe``.
    """

    def __init__(self, name: Optional[str] = None, message: Optional[str] = None):
        self.name = name or self.__class__.__name__
        self.message = message

    @abstractmethod
    def validate(self, text: str) -> bool:
        """Return True if the text satisfies this rule."""
        ...

    @abstractmethod
    def default_message(self) -> str:
        ...

    def describe(self) -> str:
        """Message explaining why this rule fails."""
        if self.message is not None:
            return self.message
        return self.default_message()

    def evaluate(self, text: str) -> RuleResult:
        passed = bool(self.validate(text))
        return RuleResult(
            rule_name=self.name,
            passed=passed,
            message=None if passed else self.describe(),
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r}>"


# --- Length -------------------------------------------------------------------

class NonEmptyRule(Rule):

    def validate(self, text: str) -> bool:
        return len(text) > 0

    def default_message(self) -> str:
        return "Can't be empty"


class _LengthRule(Rule):

    def __init__(self, length: int, name: Optional[str] = None, message: Optional[str] = None):
        super().__init__(name, message)
        if isinstance(length, bool) or not isinstance(length, int):
            raise TypeError(f"length must be an int, got {length!r}")
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        self.length = length


class MinLengthRule(_LengthRule):
    """
    Check that the text has at least ``length`` characters.

    Args:
        length: Minimum character count (inclusive).
    """

    def validate(self, text: str) -> bool:
        return len(text) >= self.length

    def default_message(self) -> str:
        return f"Length should be greater than or equal to {self.length}"


class MaxLengthRule(_LengthRule):
    """
    Check that the text has at most ``length`` characters.

    Args:
        length: Maximum character count (inclusive).
    """

    def validate(self, text: str) -> bool:
        return len(text) <= self.length

    def default_message(self) -> str:
        return f"Length should be less than or equal to {self.length}"


# --- Numeric ------------------------------------------------------------------

class ValidNumberRule(Rule):

    def validate(self, text: str) -> bool:
        return parse_decimal(text) is not None

    def default_message(self) -> str:
        return "Invalid number"


class _NumericRule(Rule):
    """
    Compare the text, parsed as a decimal, against a threshold.

    Non-numeric text never satisfies the comparison.

    Args:
        number: Threshold as int, float, Decimal or numeric string.
    """

    def __init__(self, number: Number, name: Optional[str] = None, message: Optional[str] = None):
        super().__init__(name, message)
        self.number = to_decimal(number)

    def validate(self, text: str) -> bool:
        value = parse_decimal(text)
        if value is None:
            return False
        return self._compare(value)

    @abstractmethod
    def _compare(self, value: Decimal) -> bool:
        ...


class GreaterThanRule(_NumericRule):

    def _compare(self, value: Decimal) -> bool:
        return value > self.number

    def default_message(self) -> str:
        return f"Should be greater than {self.number}"


class GreaterThanOrEqualRule(_NumericRule):

    def _compare(self, value: Decimal) -> bool:
        return value >= self.number

    def default_message(self) -> str:
        return f"Should be greater than or equal to {self.number}"


class LessThanRule(_NumericRule):

    def _compare(self, value: Decimal) -> bool:
        return value < self.number

    def default_message(self) -> str:
        return f"Should be less than {self.number}"


class LessThanOrEqualRule(_NumericRule):

    def _compare(self, value: Decimal) -> bool:
        return value <= self.number

    def default_message(self) -> str:
        return f"Should be less than or equal to {self.number}"


class NumberEqualToRule(_NumericRule):

    def _compare(self, value: Decimal) -> bool:
        return value == self.number

    def default_message(self) -> str:
        return f"Should be equal to {self.number}"


# --- Character classes --------------------------------------------------------

def _is_special(char: str) -> bool:
    return not (char.isalnum() or char.isspace())


class AllUpperCaseRule(Rule):
    """Letters must all be upper case. Non-letters are ignored."""

    def validate(self, text: str) -> bool:
        return not any(c.islower() for c in text)

    def default_message(self) -> str:
        return "All letters should be in upper case"


class AllLowerCaseRule(Rule):
    """Letters must all be lower case. Non-letters are ignored."""

    def validate(self, text: str) -> bool:
        return not any(c.isupper() for c in text)

    def default_message(self) -> str:
        return "All letters should be in lower case"


class AtLeastOneUpperCaseRule(Rule):

    def validate(self, text: str) -> bool:
        return any(c.isupper() for c in text)

    def default_message(self) -> str:
        return "At least one letter should be in upper case"


class AtLeastOneLowerCaseRule(Rule):

    def validate(self, text: str) -> bool:
        return any(c.islower() for c in text)

    def default_message(self) -> str:
        return "At least one letter should be in lower case"


class AtLeastOneNumberRule(Rule):

    def validate(self, text: str) -> bool:
        return any(c.isdigit() for c in text)

    def default_message(self) -> str:
        return "At least one number is required"


class NoNumbersRule(Rule):

    def validate(self, text: str) -> bool:
        return not any(c.isdigit() for c in text)

    def default_message(self) -> str:
        return "Numbers are not allowed"


class OnlyNumbersRule(Rule):
    """Every character must be a digit. Empty text fails."""

    def validate(self, text: str) -> bool:
        return len(text) > 0 and all(c.isdigit() for c in text)

    def default_message(self) -> str:
        return "Only numbers are allowed"


class StartsWithNumberRule(Rule):

    def validate(self, text: str) -> bool:
        return len(text) > 0 and text[0].isdigit()

    def default_message(self) -> str:
        return "Should start with a number"


class StartsWithNonNumberRule(Rule):
    """First character must exist and not be a digit."""

    def validate(self, text: str) -> bool:
        return len(text) > 0 and not text[0].isdigit()

    def default_message(self) -> str:
        return "Should not start with a number"


class NoSpecialCharacterRule(Rule):
    """Only letters, digits and whitespace are allowed."""

    def validate(self, text: str) -> bool:
        return not any(_is_special(c) for c in text)

    def default_message(self) -> str:
        return "Special characters are not allowed"


class AtLeastOneSpecialCharacterRule(Rule):

    def validate(self, text: str) -> bool:
        return any(_is_special(c) for c in text)

    def default_message(self) -> str:
        return "At least one special character is required"


# --- String relations ---------------------------------------------------------

class _TargetRule(Rule):
    """
    Case-sensitive comparison against a target string.

    Args:
        target: String to compare with.
    """

    def __init__(self, target: str, name: Optional[str] = None, message: Optional[str] = None):
        super().__init__(name, message)
        if not isinstance(target, str):
            raise TypeError(f"target must be a str, got {type(target).__name__}")
        self.target = target


class TextEqualToRule(_TargetRule):

    def validate(self, text: str) -> bool:
        return text == self.target

    def default_message(self) -> str:
        return f"Should be equal to {self.target}"


class TextNotEqualToRule(_TargetRule):

    def validate(self, text: str) -> bool:
        return text != self.target

    def default_message(self) -> str:
        return f"Should not be equal to {self.target}"


class StartsWithRule(_TargetRule):

    def validate(self, text: str) -> bool:
        return text.startswith(self.target)

    def default_message(self) -> str:
        return f"Should start with {self.target}"


class EndsWithRule(_TargetRule):

    def validate(self, text: str) -> bool:
        return text.endswith(self.target)

    def default_message(self) -> str:
        return f"Should end with {self.target}"


class ContainsRule(_TargetRule):

    def validate(self, text: str) -> bool:
        return self.target in text

    def default_message(self) -> str:
        return f"Should contain {self.target}"


class NotContainsRule(_TargetRule):

    def validate(self, text: str) -> bool:
        return self.target not in text

    def default_message(self) -> str:
        return f"Should not contain {self.target}"


# --- Formats ------------------------------------------------------------------

class RegexRule(Rule):
    """
    Check that the whole text matches a regular expression.

    Args:
        pattern: Regular expression, compiled at construction.
        flags: ``re`` flags passed to ``re.compile``.
    """

    def __init__(
        self,
        pattern: str,
        flags: int = 0,
        name: Optional[str] = None,
        message: Optional[str] = None,
    ):
        super().__init__(name, message)
        self.pattern = pattern
        self._regex = re.compile(pattern, flags)

    def validate(self, text: str) -> bool:
        return self._regex.fullmatch(text) is not None

    def default_message(self) -> str:
        return f"Should match pattern {self.pattern}"


class EmailRule(RegexRule):

    def __init__(self, name: Optional[str] = None, message: Optional[str] = None):
        super().__init__(EMAIL_PATTERN, name=name, message=message)

    def default_message(self) -> str:
        return "Invalid email address"


class UrlRule(RegexRule):
    """Web URL with an optional http, https or ftp scheme."""

    def __init__(self, name: Optional[str] = None, message: Optional[str] = None):
        super().__init__(URL_PATTERN, name=name, message=message)

    def default_message(self) -> str:
        return "Invalid URL"


class CreditCardRule(RegexRule):
    """Sixteen digits with no separators."""

    separator: Optional[str] = None

    def __init__(self, name: Optional[str] = None, message: Optional[str] = None):
        if self.separator is None:
            pattern = r"\d{16}"
        else:
            sep = re.escape(self.separator)
            pattern = rf"\d{{4}}{sep}\d{{4}}{sep}\d{{4}}{sep}\d{{4}}"
        super().__init__(pattern, flags=re.ASCII, name=name, message=message)

    def default_message(self) -> str:
        return "Invalid credit card number"


class CreditCardWithSpacesRule(CreditCardRule):
    separator = " "


class CreditCardWithDashesRule(CreditCardRule):
    separator = "-"


# --- Custom -------------------------------------------------------------------

class CustomRule(Rule):
    """
    User-defined check via a callable.

    Args:
        func: Takes the text and returns a truthy value when it is valid.
            Exceptions raised by ``func`` propagate to the caller.
    """

    def __init__(
        self,
        func: Callable[[str], bool],
        name: str = 'custom_rule',
        message: Optional[str] = None,
    ):
        super().__init__(name, message)
        self.func = func

    def validate(self, text: str) -> bool:
        return bool(self.func(text))

    def default_message(self) -> str:
        return "Custom check failed"


class RuleSet:
    """
    An ordered, append-only collection of rules.

    Usage:
        rules = RuleSet("password")
        rules.add(MinLengthRule(8)).add(AtLeastOneNumberRule())
        len(rules)  # 2
    """

    def __init__(self, name: str = 'default'):
        self.name = name
        self.rules: List[Rule] = []

    def add(self, rule: Rule) -> 'RuleSet':
        if not isinstance(rule, Rule):
            raise TypeError(f"expected a Rule, got {type(rule).__name__}")
        self.rules.append(rule)
        return self

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)
