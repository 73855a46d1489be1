"""
Tests for the Validator builder and its check reports.
"""

import logging

import pytest

from textcheck import CheckReport, MinLengthRule, NonEmptyRule, Validator, validator


class TestConstruction:

    def test_requires_string(self):
        with pytest.raises(TypeError):
            Validator(None)
        with pytest.raises(TypeError):
            Validator(42)

    def test_text_is_read_only(self):
        v = Validator('abc')
        with pytest.raises(AttributeError):
            v.text = 'other'
        assert v.text == 'abc'

    def test_initial_state(self):
        v = Validator('abc')
        assert v.is_valid is True
        assert v.error_message is None
        assert v.rule_count == 0
        assert v.last_report is None

    def test_factory(self):
        v = validator('abc', name='field')
        assert isinstance(v, Validator)
        assert v.name == 'field'


class TestCheck:

    def test_empty_rule_list_is_valid(self, callbacks):
        v = Validator('').add_success_callback(callbacks.on_success)
        assert v.check() is True
        assert callbacks.successes == 1

    def test_all_pass(self, callbacks, counting_rule):
        v = (
            Validator('hello')
            .add_rule(counting_rule(True))
            .add_rule(counting_rule(True))
            .add_success_callback(callbacks.on_success)
            .add_error_callback(callbacks.on_error)
        )
        assert v.check() is True
        assert callbacks.successes == 1
        assert callbacks.errors == []
        assert v.error_message is None

    def test_short_circuits_at_first_failure(self, callbacks, counting_rule):
        first = counting_rule(True, name='first')
        second = counting_rule(False, name='second')
        third = counting_rule(False, name='third')
        v = (
            Validator('hello')
            .add_rules([first, second, third])
            .add_success_callback(callbacks.on_success)
            .add_error_callback(callbacks.on_error)
        )

        assert v.check() is False
        assert first.calls == ['hello']
        assert second.calls == ['hello']
        assert third.calls == []
        assert v.error_message == second.describe()
        assert callbacks.errors == ['second failed']
        assert callbacks.successes == 0

    def test_only_first_failure_is_reported(self):
        v = Validator('ab').min_length(5).only_numbers().valid_email()
        assert v.check() is False
        assert v.error_message == MinLengthRule(5).describe()

    def test_min_length_boundary(self):
        assert Validator('abcd').min_length(5).check() is False
        assert Validator('abcde').min_length(5).check() is True

    def test_greater_than(self):
        assert Validator('15').greater_than(10).check() is True
        assert Validator('abc').greater_than(10).check() is False

    def test_email_chain(self):
        assert Validator('test@example.com').non_empty().valid_email().check() is True

    def test_message_override(self, callbacks):
        v = (
            Validator('')
            .non_empty(message='Email is required')
            .add_error_callback(callbacks.on_error)
        )
        v.check()
        assert callbacks.errors == ['Email is required']

    def test_custom_rule(self):
        taken = {'admin', 'root'}
        v = Validator('root').custom(lambda text: text not in taken, message='Username taken')
        assert v.check() is False
        assert v.error_message == 'Username taken'

    def test_callback_exceptions_propagate(self):
        def explode(message):
            raise RuntimeError(message)

        v = Validator('').non_empty().add_error_callback(explode)
        with pytest.raises(RuntimeError):
            v.check()

    def test_later_callback_replaces_earlier(self, callbacks):
        seen = []
        v = (
            Validator('')
            .non_empty()
            .add_error_callback(seen.append)
            .add_error_callback(callbacks.on_error)
        )
        v.check()
        assert seen == []
        assert callbacks.errors == ["Can't be empty"]


class TestRecheck:

    def test_recheck_reruns_all_rules(self, counting_rule):
        rule = counting_rule(True)
        v = Validator('x').add_rule(rule)
        v.check()
        v.check()
        assert len(rule.calls) == 2

    def test_failure_does_not_latch(self, counting_rule):
        rule = counting_rule(False)
        v = Validator('x').add_rule(rule)
        assert v.check() is False
        rule.outcome = True
        assert v.check() is True
        assert v.is_valid is True
        assert v.error_message is None

    def test_rules_added_after_check_are_evaluated(self):
        v = Validator('abc').non_empty()
        assert v.check() is True
        v.min_length(5)
        assert v.check() is False
        assert '5' in v.error_message

    def test_raising_rule_keeps_previous_outcome(self):
        calls = []

        def flaky(text):
            calls.append(text)
            if len(calls) > 1:
                raise RuntimeError('lookup service down')
            return False

        v = Validator('root').custom(flaky, message='Username taken')
        assert v.check() is False

        with pytest.raises(RuntimeError):
            v.check()
        assert v.is_valid is False
        assert v.error_message == 'Username taken'
        assert v.last_report.passed is False
        assert v.last_report.error_message == v.error_message


class TestCreditCards:

    def test_plain_number(self):
        assert Validator('4111111111111111').credit_card_number().check() is True
        assert Validator('411111111111111').credit_card_number().check() is False

    def test_with_spaces(self):
        assert Validator('4111 1111 1111 1111').credit_card_number_with_spaces().check() is True
        assert Validator('4111-1111-1111-1111').credit_card_number_with_spaces().check() is False

    def test_with_dashes(self):
        assert Validator('4111-1111-1111-1111').credit_card_number_with_dashes().check() is True

    @pytest.mark.parametrize('text', [
        '4111-1111-1111-111',
        '4111-1111-1111-11111',
        '41111-111-1111-1111',
        '4111 1111 1111 1111',
        '4111-1111-1111-111a',
    ])
    def test_with_dashes_rejects_deviations(self, text):
        assert Validator(text).credit_card_number_with_dashes().check() is False

    def test_expands_to_three_rules(self):
        assert Validator('x').credit_card_number_with_dashes().rule_count == 3

    def test_length_reported_before_format(self):
        v = Validator('4111').credit_card_number()
        v.check()
        assert v.last_report.failed_rule == 'MinLengthRule'


class TestChaining:

    @pytest.mark.parametrize('method, args', [
        ('non_empty', ()),
        ('min_length', (1,)),
        ('max_length', (10,)),
        ('valid_email', ()),
        ('valid_number', ()),
        ('greater_than', (1,)),
        ('greater_than_or_equal', (1,)),
        ('less_than', (1,)),
        ('less_than_or_equal', (1,)),
        ('number_equal_to', (1,)),
        ('all_upper_case', ()),
        ('all_lower_case', ()),
        ('at_least_one_upper_case', ()),
        ('at_least_one_lower_case', ()),
        ('at_least_one_number', ()),
        ('no_numbers', ()),
        ('only_numbers', ()),
        ('starts_with_number', ()),
        ('starts_with_non_number', ()),
        ('no_special_characters', ()),
        ('at_least_one_special_character', ()),
        ('text_equal_to', ('a',)),
        ('text_not_equal_to', ('a',)),
        ('starts_with', ('a',)),
        ('ends_with', ('a',)),
        ('contains', ('a',)),
        ('not_contains', ('a',)),
        ('valid_url', ()),
        ('regex', (r'\w+',)),
        ('custom', (str.isalpha,)),
        ('credit_card_number', ()),
        ('credit_card_number_with_spaces', ()),
        ('credit_card_number_with_dashes', ()),
        ('add_rule', (NonEmptyRule(),)),
        ('add_rules', ([NonEmptyRule()],)),
        ('add_error_callback', (print,)),
        ('add_success_callback', (print,)),
    ])
    def test_returns_same_instance(self, method, args):
        v = Validator('abc')
        assert getattr(v, method)(*args) is v

    def test_rules_keep_insertion_order(self):
        v = Validator('abc').max_length(3).non_empty().min_length(1)
        assert [r.name for r in v.rules] == ['MaxLengthRule', 'NonEmptyRule', 'MinLengthRule']

    def test_add_rule_rejects_non_rules(self):
        with pytest.raises(TypeError):
            Validator('abc').add_rule('non_empty')


class TestCheckReport:

    def test_report_after_failure(self):
        v = Validator('ab', name='username').non_empty().min_length(3).no_numbers()
        v.check()
        report = v.last_report
        assert isinstance(report, CheckReport)
        assert report.passed is False
        assert report.failed_rule == 'MinLengthRule'
        assert report.evaluated_count == 2
        assert report.skipped_count == 1

    def test_to_dict_structure(self):
        v = Validator('ab', name='username').non_empty().min_length(3)
        v.check()
        d = v.last_report.to_dict()
        assert d['name'] == 'username'
        assert d['passed'] is False
        assert d['summary'] == {'total_rules': 2, 'evaluated': 2, 'skipped': 0}
        assert [r['severity'] for r in d['results']] == ['PASS', 'FAIL']

    def test_report_omits_text(self):
        v = Validator('hunter2', name='password').min_length(12)
        v.check()
        assert 'hunter2' not in repr(v.last_report.to_dict())

    def test_print_summary(self, capsys):
        v = Validator('ab', name='username').min_length(3)
        v.check()
        v.last_report.print_summary()
        captured = capsys.readouterr()
        assert 'FAILED' in captured.out
        assert '1/1 evaluated' in captured.out

    def test_print_summary_when_passed(self, capsys):
        v = Validator('abc', name='username').min_length(3)
        v.check()
        v.last_report.print_summary()
        captured = capsys.readouterr()
        assert 'PASSED' in captured.out
        assert 'Message' not in captured.out


class TestLogging:

    def test_failure_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='textcheck'):
            Validator('', name='email').non_empty().check()
        assert "NonEmptyRule failed: Can't be empty" in caplog.text
