"""Tests for OAuth2 token acquisition."""

from unittest.mock import Mock

import pytest
import requests

from flight_tracker.cache import TOKEN_KEY
from flight_tracker.ingestion import TokenProvider, TokenRequestError
from flight_tracker.retry import RetryPolicy

from conftest import TOKEN_URL, make_response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def provider(app_config, cache, session, no_sleep):
    return TokenProvider(
        app_config.opensky,
        app_config.cache,
        cache,
        session=session,
        retry_policy=RetryPolicy(max_attempts=3, timeout=15, sleep=no_sleep),
    )


class TestTokenProvider:
    """Cache hits, refresh and retries."""

    def test_requests_token_with_client_credentials(self, provider, session):
        session.post.return_value = make_response(json_data={'access_token': 'tok', 'expires_in': 1800})

        assert provider.get_access_token() == 'tok'

        session.post.assert_called_once()
        args, kwargs = session.post.call_args
        assert args[0] == TOKEN_URL
        assert kwargs['data'] == {
            'grant_type': 'client_credentials',
            'client_id': 'client-id',
            'client_secret': 'client-secret',
        }
        assert kwargs['timeout'] == 15

    def test_expiry_subtracts_buffer(self, provider, session, cache, clock):
        session.post.return_value = make_response(json_data={'access_token': 'tok', 'expires_in': 1800})

        provider.get_access_token()

        entry = cache.peek(TOKEN_KEY)
        assert entry.expires_at == clock.now + 1800 * 1000 - 5 * 60 * 1000

    def test_cached_token_skips_network(self, provider, session, clock):
        session.post.return_value = make_response(json_data={'access_token': 'tok', 'expires_in': 1800})

        provider.get_access_token()
        clock.advance(60_000)
        assert provider.get_access_token() == 'tok'
        assert session.post.call_count == 1
        assert provider.is_cached

    def test_refreshes_after_buffered_expiry(self, provider, session, clock):
        session.post.side_effect = [
            make_response(json_data={'access_token': 'first', 'expires_in': 1800}),
            make_response(json_data={'access_token': 'second', 'expires_in': 1800}),
        ]

        assert provider.get_access_token() == 'first'
        clock.advance((1800 - 5 * 60) * 1000)
        assert provider.get_access_token() == 'second'

    def test_retries_with_backoff_then_succeeds(self, provider, session, no_sleep):
        session.post.side_effect = [
            make_response(status=503, reason='Service Unavailable'),
            requests.ConnectionError('reset'),
            make_response(json_data={'access_token': 'tok', 'expires_in': 1800}),
        ]

        assert provider.get_access_token() == 'tok'
        assert session.post.call_count == 3
        assert [c.args[0] for c in no_sleep.call_args_list] == [2.0, 4.0]

    def test_three_failures_raise_fatal_error(self, provider, session):
        session.post.return_value = make_response(status=401, reason='Unauthorized')

        with pytest.raises(TokenRequestError) as exc_info:
            provider.get_access_token()

        assert exc_info.value.attempts == 3
        assert '3 attempts' in str(exc_info.value)
        assert '401 Unauthorized' in str(exc_info.value)
        assert not provider.is_cached

    @pytest.mark.parametrize('body', [
        {'error': 'invalid_client'},
        {'access_token': 'tok'},
        {'access_token': 'tok', 'expires_in': 'soon'},
        ['not', 'an', 'object'],
    ])
    def test_malformed_body_counts_as_failed_attempt(self, provider, session, body):
        session.post.return_value = make_response(json_data=body)

        with pytest.raises(TokenRequestError) as exc_info:
            provider.get_access_token()

        assert exc_info.value.attempts == 3
        assert isinstance(exc_info.value.last_error, ValueError)
        assert not provider.is_cached
