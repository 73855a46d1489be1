#!/usr/bin/env python3
"""
Example: Validate a signup form, field by field and in bulk.

Checks a single submission the way a form handler would, then re-checks
an exported batch of submissions with pandas.

Usage:
    python examples/validate_signup_form.py
"""

import sys
from pathlib import Path

import pandas as pd

sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from textcheck import Validator, summarize, validate_series


def password_rules(v: Validator) -> Validator:
    return (
        v.non_empty(message='Password is required')
        .min_length(8)
        .at_least_one_upper_case()
        .at_least_one_lower_case()
        .at_least_one_number()
        .at_least_one_special_character()
    )


def check_submission(form: dict) -> bool:
    """Validate one submission, printing the first error of each field."""
    def show(field):
        return lambda message: print(f"  {field}: {message}")

    checks = [
        Validator(form['email'], name='email')
            .non_empty(message='Email is required')
            .valid_email()
            .add_error_callback(show('email')),
        password_rules(Validator(form['password'], name='password'))
            .add_error_callback(show('password')),
        Validator(form['age'], name='age')
            .only_numbers(message='Age must be a whole number')
            .greater_than_or_equal(13)
            .less_than(130)
            .add_error_callback(show('age')),
        Validator(form['website'], name='website')
            .valid_url()
            .add_error_callback(show('website')),
    ]
    results = [v.check() for v in checks]
    return all(results)


def main():
    # --- Step 1: A single submission ---
    print("\n--- Validating one submission ---")
    form = {
        'email': 'ada@example.com',
        'password': 'analytical',
        'age': '36',
        'website': 'https://example.com/ada',
    }
    ok = check_submission(form)
    print(f"  Submission {'accepted' if ok else 'rejected'}")

    # --- Step 2: An exported batch of passwords ---
    print("\n--- Validating exported passwords ---")
    passwords = pd.Series(
        ['Tr0ub4dor&3', 'password', 'CorrectHorse9!', '', 'SHOUTING1!'],
        name='password',
    )
    frame = validate_series(passwords, password_rules)
    summary = summarize(frame)

    print(f"  {summary['passed']}/{summary['total']} passed")
    for message, count in summary['failures_by_message'].items():
        print(f"  {count:>3}  {message}")
    print()
    print(frame[['passed', 'failed_rule']].to_string())
    print()


if __name__ == '__main__':
    main()
