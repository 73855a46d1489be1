"""Shared test fixtures and path setup."""
import sys
from pathlib import Path

# Add src/ to sys.path so tests can import textcheck without installing
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

import pytest
import pandas as pd

from textcheck import Rule


class CountingRule(Rule):
    """Stub rule with a fixed outcome that records every call."""

    def __init__(self, outcome: bool, name: str = 'counting', message: str = None):
        super().__init__(name, message)
        self.outcome = outcome
        self.calls = []

    def validate(self, text: str) -> bool:
        self.calls.append(text)
        return self.outcome

    def default_message(self) -> str:
        return f"{self.name} failed"


@pytest.fixture
def passing_rule():
    return CountingRule(True, name='always_pass')


@pytest.fixture
def failing_rule():
    return CountingRule(False, name='always_fail')


@pytest.fixture
def counting_rule():
    """Factory for call-counting stub rules."""
    return CountingRule


@pytest.fixture
def callbacks():
    """Recorder for success and error callback invocations."""
    class Recorder:
        def __init__(self):
            self.successes = 0
            self.errors = []

        def on_success(self):
            self.successes += 1

        def on_error(self, message):
            self.errors.append(message)

    return Recorder()


@pytest.fixture
def signup_emails():
    """Email column from an exported signup form, with a few bad rows."""
    return pd.Series(
        ['ada@example.com', 'grace@navy.mil', '', 'not-an-email', None, 'linus@kernel.org'],
        name='email',
    )
