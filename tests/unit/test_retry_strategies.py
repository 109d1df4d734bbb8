"""
Unit tests for retry strategies.
"""

import pytest

from topicmap.models import AnalysisSettings
from topicmap.utils.retry_strategies import (
    RetryConfig,
    create_retry_decorator,
)


def test_retry_config():
    """Test RetryConfig creation."""
    config = RetryConfig(max_attempts=5, initial_delay=0.5, max_delay=30.0, jitter=True)

    assert config.max_attempts == 5
    assert config.initial_delay == 0.5
    assert config.max_delay == 30.0
    assert config.jitter is True
    assert config.retryable_exceptions == (Exception,)


def test_retry_config_from_settings():
    """Analysis settings map onto a retry config."""
    settings = AnalysisSettings(max_attempts=4, initial_delay=0.25, max_delay=2.0)
    config = RetryConfig.from_settings(settings, retryable_exceptions=(ConnectionError,))

    assert config.max_attempts == 4
    assert config.initial_delay == 0.25
    assert config.max_delay == 2.0
    assert config.retryable_exceptions == (ConnectionError,)


def test_retry_decorator_success():
    """Test retry decorator with successful call."""
    call_count = [0]

    @create_retry_decorator(RetryConfig(max_attempts=3, initial_delay=0, jitter=False))
    def successful_function():
        call_count[0] += 1
        return "success"

    assert successful_function() == "success"
    assert call_count[0] == 1


def test_retry_decorator_retries_then_succeeds():
    """Retryable failures are retried until a call succeeds."""
    call_count = [0]

    @create_retry_decorator(RetryConfig(max_attempts=3, initial_delay=0, retryable_exceptions=(ConnectionError,)))
    def flaky_function():
        call_count[0] += 1
        if call_count[0] < 3:
            raise ConnectionError("flaky")
        return "success"

    assert flaky_function() == "success"
    assert call_count[0] == 3


def test_retry_decorator_reraises_last_error():
    """Once attempts run out the original exception surfaces."""
    call_count = [0]

    @create_retry_decorator(RetryConfig(max_attempts=2, initial_delay=0))
    def failing_function():
        call_count[0] += 1
        raise ValueError("still broken")

    with pytest.raises(ValueError, match="still broken"):
        failing_function()
    assert call_count[0] == 2


def test_non_retryable_exception_is_not_retried():
    """Exceptions outside the retryable set fail immediately."""
    call_count = [0]

    @create_retry_decorator(RetryConfig(max_attempts=3, initial_delay=0, retryable_exceptions=(ConnectionError,)))
    def wrong_error():
        call_count[0] += 1
        raise KeyError("nope")

    with pytest.raises(KeyError):
        wrong_error()
    assert call_count[0] == 1


@pytest.mark.asyncio
async def test_retry_decorator_async():
    """Coroutines are retried the same way."""
    call_count = [0]

    @create_retry_decorator(RetryConfig(max_attempts=3, initial_delay=0))
    async def flaky_coroutine():
        call_count[0] += 1
        if call_count[0] == 1:
            raise TimeoutError()
        return "done"

    assert await flaky_coroutine() == "done"
    assert call_count[0] == 2
