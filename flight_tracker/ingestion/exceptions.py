"""Errors raised while talking to the OpenSky Network."""

from typing import Optional


class OpenSkyError(Exception):
    """Base class for upstream OpenSky failures."""


class TokenRequestError(OpenSkyError):
    """The client-credentials grant failed on every attempt."""

    def __init__(self, message: str, attempts: int = 0, last_error: Optional[Exception] = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class AuthenticationError(OpenSkyError):
    """The states endpoint rejected the bearer token."""

    def __init__(self, status: int):
        super().__init__(f'OpenSky rejected bearer token: {status}')
        self.status = status


class FlightsRequestError(OpenSkyError):
    """The states endpoint failed after any fallback."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
