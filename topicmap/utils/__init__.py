from .logging_config import LogLevel, get_logger, setup_logging
from .retry_strategies import RetryConfig, create_retry_decorator

__all__ = [
    "LogLevel",
    "RetryConfig",
    "create_retry_decorator",
    "get_logger",
    "setup_logging",
]
