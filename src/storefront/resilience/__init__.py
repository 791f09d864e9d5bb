"""Retry and backoff utilities."""

from .retry import (
    BackoffStrategy,
    ExponentialBackoffStrategy,
    FixedDelayStrategy,
    LinearBackoffStrategy,
    RetryManager,
    RetryPolicy,
    RetryStrategy,
)

__all__ = [
    "RetryStrategy",
    "RetryPolicy",
    "RetryManager",
    "BackoffStrategy",
    "FixedDelayStrategy",
    "LinearBackoffStrategy",
    "ExponentialBackoffStrategy",
]
