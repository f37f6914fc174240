"""
Retry policy for upstream HTTP calls.

Each call site builds its own policy: the token endpoint gets three
attempts with exponential backoff, the states endpoint a single attempt.
The per-attempt timeout is handed to the wrapped callable, which passes
it on to requests.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class RetryExhaustedError(Exception):
    """All attempts of a RetryPolicy failed."""

    def __init__(self, description: str, attempts: int, last_error: Exception):
        self.description = description
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f'{description} failed after {attempts} attempts: {last_error}'
        )


def exponential_backoff(attempt: int) -> float:
    """Seconds to wait after the given (1-based) failed attempt."""
    return float(2 ** attempt)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Sequential retries with a backoff between attempts.

    Attributes:
        max_attempts: Total attempts, including the first one.
        timeout: Per-attempt timeout in seconds.
        backoff: Maps a failed attempt number to a delay in seconds.
        sleep: Blocking wait, replaced in tests.
    """
    max_attempts: int = 3
    timeout: float = 15.0
    backoff: Callable[[int], float] = exponential_backoff
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False)

    def call(
        self,
        func: Callable[[float], Any],
        description: str = 'request',
        retry_on: tuple = (Exception,),
    ) -> Any:
        """
        Run func(timeout) until it succeeds or attempts run out.

        Exceptions outside retry_on propagate immediately.

        Raises:
            RetryExhaustedError carrying the attempt count and last error.
        """
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                return func(self.timeout)
            except retry_on as e:
                last_error = e
                logger.warning(
                    f'{description} attempt {attempt}/{self.max_attempts} failed: {e}'
                )

            if attempt < self.max_attempts:
                delay = self.backoff(attempt)
                logger.debug(f'Retrying {description} in {delay:.0f}s')
                self.sleep(delay)

        raise RetryExhaustedError(description, self.max_attempts, last_error)


# Call-site policies
TOKEN_RETRY_POLICY = RetryPolicy(max_attempts=3, timeout=15.0)
FLIGHTS_RETRY_POLICY = RetryPolicy(max_attempts=1, timeout=10.0)
