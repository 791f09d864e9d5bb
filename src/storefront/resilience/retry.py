"""
Retry mechanisms with exponential backoff and jitter.

Only exceptions listed as retryable are retried; anything else propagates on
the first attempt.
"""

import functools
import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple, Type

from storefront.exceptions.api import TransportError
from storefront.logging import get_logger

logger = get_logger(__name__)


class RetryStrategy(str, Enum):
    """Available retry strategies."""
    FIXED_DELAY = "fixed_delay"
    LINEAR_BACKOFF = "linear_backoff"
    EXPONENTIAL_BACKOFF = "exponential_backoff"
    EXPONENTIAL_BACKOFF_JITTER = "exponential_backoff_jitter"


@dataclass
class RetryPolicy:
    """Configuration for retry behavior."""
    max_attempts: int = 3
    strategy: RetryStrategy = RetryStrategy.EXPONENTIAL_BACKOFF_JITTER
    base_delay: float = 0.5           # seconds
    max_delay: float = 5.0            # seconds
    multiplier: float = 2.0
    jitter_max: float = 0.1           # fraction of delay

    retryable_exceptions: Tuple[Type[Exception], ...] = (TransportError,)


class BackoffStrategy(ABC):
    """Abstract base class for backoff strategies."""

    @abstractmethod
    def calculate_delay(self, attempt: int, base_delay: float, max_delay: float) -> float:
        """Calculate delay for given attempt number."""


class FixedDelayStrategy(BackoffStrategy):
    """Fixed delay between retries."""

    def calculate_delay(self, attempt: int, base_delay: float, max_delay: float) -> float:
        return min(base_delay, max_delay)


class LinearBackoffStrategy(BackoffStrategy):
    """Linear increase in delay."""

    def calculate_delay(self, attempt: int, base_delay: float, max_delay: float) -> float:
        return min(base_delay * attempt, max_delay)


class ExponentialBackoffStrategy(BackoffStrategy):
    """Exponential backoff with optional jitter."""

    def __init__(self, multiplier: float = 2.0, jitter: bool = False, jitter_max: float = 0.1):
        self.multiplier = multiplier
        self.jitter = jitter
        self.jitter_max = jitter_max

    def calculate_delay(self, attempt: int, base_delay: float, max_delay: float) -> float:
        delay = min(base_delay * (self.multiplier ** (attempt - 1)), max_delay)

        if self.jitter and delay > 0:
            delay += delay * self.jitter_max * random.random()

        return delay


@dataclass
class RetryAttempt:
    """Information about a failed attempt."""
    attempt_number: int
    delay: float
    exception: Exception


class RetryManager:
    """
    Retry manager with pluggable backoff strategies.

    ``sleep`` is injectable so callers (and tests) can control waiting.
    """

    def __init__(self, policy: Optional[RetryPolicy] = None,
                 sleep: Optional[Callable[[float], None]] = None):
        self.policy = policy or RetryPolicy()
        self.sleep = sleep or time.sleep
        self.strategy_map = {
            RetryStrategy.FIXED_DELAY: FixedDelayStrategy(),
            RetryStrategy.LINEAR_BACKOFF: LinearBackoffStrategy(),
            RetryStrategy.EXPONENTIAL_BACKOFF: ExponentialBackoffStrategy(
                multiplier=self.policy.multiplier,
                jitter=False
            ),
            RetryStrategy.EXPONENTIAL_BACKOFF_JITTER: ExponentialBackoffStrategy(
                multiplier=self.policy.multiplier,
                jitter=True,
                jitter_max=self.policy.jitter_max
            )
        }
        self.attempts: List[RetryAttempt] = []

    def __call__(self, func: Callable) -> Callable:
        """Decorator to add retry logic to a function."""
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            return self.execute_with_retry(func, *args, **kwargs)
        return wrapper

    def execute_with_retry(self, func: Callable, *args, **kwargs) -> Any:
        """
        Execute a function with retry logic.

        Raises:
            The last exception once attempts are exhausted, or the first
            non-retryable exception.
        """
        self.attempts = []
        name = getattr(func, "__name__", repr(func))

        for attempt in range(1, self.policy.max_attempts + 1):
            try:
                result = func(*args, **kwargs)
                if attempt > 1:
                    logger.info(f"{name} succeeded after {attempt} attempts")
                return result

            except self.policy.retryable_exceptions as e:
                if attempt >= self.policy.max_attempts:
                    logger.warning(f"{name} failed after {attempt} attempts",
                                   exception_type=type(e).__name__)
                    raise

                delay = self._calculate_delay(attempt)
                self.attempts.append(RetryAttempt(attempt, delay, e))
                logger.info(f"{name} failed, retrying",
                            exception_type=type(e).__name__,
                            attempt=attempt,
                            max_attempts=self.policy.max_attempts,
                            delay=round(delay, 3))
                if delay > 0:
                    self.sleep(delay)

        raise RuntimeError(f"No attempts were made for {name}")

    def _calculate_delay(self, attempt: int) -> float:
        strategy = self.strategy_map[self.policy.strategy]
        return strategy.calculate_delay(
            attempt=attempt,
            base_delay=self.policy.base_delay,
            max_delay=self.policy.max_delay,
        )
