"""
Retry strategies for calls that cross the network boundary.

Exponential backoff with jitter comes from tenacity. ``create_retry_decorator``
wraps both plain and ``async`` callables (tenacity picks the right mode).
"""

import logging
from typing import Optional

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random_exponential,
)

from topicmap.models import AnalysisSettings

logger = logging.getLogger(__name__)


class RetryConfig:
    """Configuration for retry strategies."""

    def __init__(
        self,
        max_attempts: int = 3,
        initial_delay: float = 1.0,
        max_delay: float = 10.0,
        jitter: bool = True,
        retryable_exceptions: tuple = (Exception,),
    ):
        """
        Initialize retry configuration.

        Args:
            max_attempts: Maximum number of attempts, the first one included
            initial_delay: Initial delay in seconds
            max_delay: Maximum delay in seconds
            jitter: Whether to randomise delays
            retryable_exceptions: Tuple of exceptions that should trigger retry
        """
        self.max_attempts = max_attempts
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.jitter = jitter
        self.retryable_exceptions = retryable_exceptions

    @classmethod
    def from_settings(cls, settings: AnalysisSettings, retryable_exceptions: tuple = (Exception,)) -> "RetryConfig":
        return cls(
            max_attempts=settings.max_attempts,
            initial_delay=settings.initial_delay,
            max_delay=settings.max_delay,
            retryable_exceptions=retryable_exceptions,
        )


def create_retry_decorator(config: Optional[RetryConfig] = None):
    """
    Create a tenacity retry decorator from ``config``.

    The last exception is re-raised once attempts run out.
    """
    if config is None:
        config = RetryConfig()

    if config.jitter:
        wait = wait_random_exponential(multiplier=config.initial_delay, max=config.max_delay)
    else:
        wait = wait_exponential(multiplier=config.initial_delay, max=config.max_delay)

    return retry(
        stop=stop_after_attempt(config.max_attempts),
        wait=wait,
        retry=retry_if_exception_type(config.retryable_exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
