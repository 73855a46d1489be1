"""
Fluent validation of single string values.

Usage:
    from textcheck import Validator

    Validator("test@example.com").non_empty().valid_email().check()
"""

from .batch import summarize, validate_series
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
from .validator import Validator, validator

__version__ = "0.1.0"
