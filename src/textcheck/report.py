"""
Check report generation.

Structures the outcome of one ``Validator.check()`` run: pass/fail
status, the first failure, and which rules were actually evaluated.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .rules import RuleResult


@dataclass
class CheckReport:
    """
    Structured output from a single check.

    The validated text is deliberately absent; it may be a password.

    Attributes:
        name: Name of the validator (usually the form field).
        passed: True if no rule failed.
        error_message: Message of the first failing rule, if any.
        failed_rule: Name of the first failing rule, if any.
        results: Results of the rules evaluated, in order.
        total_rules: Number of rules configured on the validator.
    """
    name: Optional[str]
    passed: bool
    error_message: Optional[str] = None
    failed_rule: Optional[str] = None
    results: List[RuleResult] = field(default_factory=list)
    total_rules: int = 0

    @property
    def evaluated_count(self) -> int:
        return len(self.results)

    @property
    def skipped_count(self) -> int:
        """Rules never evaluated because an earlier rule failed."""
        return self.total_rules - self.evaluated_count

    def to_dict(self) -> Dict:
        """Serialize the report to a dictionary."""
        return {
            'name': self.name,
            'passed': self.passed,
            'error_message': self.error_message,
            'failed_rule': self.failed_rule,
            'summary': {
                'total_rules': self.total_rules,
                'evaluated': self.evaluated_count,
                'skipped': self.skipped_count,
            },
            'results': [
                {
                    'rule': r.rule_name,
                    'severity': r.severity,
                    'message': r.message,
                }
                for r in self.results
            ],
        }

    def print_summary(self) -> None:
        """Print a concise summary to stdout."""
        status = 'PASSED' if self.passed else 'FAILED'
        print(f"\n{'=' * 60}")
        print(f"  Check:      {self.name or '(unnamed)'}")
        print(f"  Status:     {status}")
        print(f"  Rules:      {self.evaluated_count}/{self.total_rules} evaluated")
        if not self.passed:
            print(f"  Failed:     {self.failed_rule}")
            print(f"  Message:    {self.error_message}")
        print(f"{'=' * 60}")
