"""Tests for the retry policy."""

from unittest.mock import Mock

import pytest

from flight_tracker.retry import RetryExhaustedError, RetryPolicy, exponential_backoff


def test_exponential_backoff():
    assert [exponential_backoff(n) for n in (1, 2, 3)] == [2.0, 4.0, 8.0]


class TestRetryPolicy:
    """Attempts, backoff and timeouts."""

    def test_success_on_first_attempt(self, no_sleep):
        policy = RetryPolicy(max_attempts=3, timeout=15, sleep=no_sleep)
        func = Mock(return_value='ok')

        assert policy.call(func) == 'ok'
        func.assert_called_once_with(15)
        no_sleep.assert_not_called()

    def test_retries_until_success(self, no_sleep):
        policy = RetryPolicy(max_attempts=3, sleep=no_sleep)
        func = Mock(side_effect=[IOError('boom'), 'ok'])

        assert policy.call(func) == 'ok'
        assert func.call_count == 2
        no_sleep.assert_called_once_with(2.0)

    def test_exhaustion_reports_attempts_and_last_error(self, no_sleep):
        policy = RetryPolicy(max_attempts=3, sleep=no_sleep)
        func = Mock(side_effect=[IOError('one'), IOError('two'), IOError('three')])

        with pytest.raises(RetryExhaustedError) as exc_info:
            policy.call(func, description='Token request')

        assert exc_info.value.attempts == 3
        assert str(exc_info.value.last_error) == 'three'
        assert 'after 3 attempts' in str(exc_info.value)
        # No wait after the final attempt
        assert [c.args[0] for c in no_sleep.call_args_list] == [2.0, 4.0]

    def test_unlisted_exceptions_propagate(self, no_sleep):
        policy = RetryPolicy(max_attempts=3, sleep=no_sleep)
        func = Mock(side_effect=KeyError('access_token'))

        with pytest.raises(KeyError):
            policy.call(func, retry_on=(IOError,))
        func.assert_called_once()

    def test_single_attempt_policy(self, no_sleep):
        policy = RetryPolicy(max_attempts=1, timeout=10, sleep=no_sleep)

        with pytest.raises(RetryExhaustedError) as exc_info:
            policy.call(Mock(side_effect=IOError('down')))

        assert exc_info.value.attempts == 1
        no_sleep.assert_not_called()
