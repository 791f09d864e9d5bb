"""
Single-flight coordination.

At most one call of a guarded operation runs at a time. Callers that arrive
while it runs do not start their own; they block until it settles and all
receive its outcome, or its exception.
"""

import threading
from typing import Any, Callable, List, Optional

from storefront.logging import get_logger

logger = get_logger(__name__)


class _Flight:
    """One outstanding call and everyone waiting on it."""

    def __init__(self):
        self.done = threading.Event()
        self.waiters: List[int] = []  # thread idents, arrival order
        self.outcome: Any = None
        self.error: Optional[BaseException] = None


class SingleFlight:
    """Collapse concurrent calls of one operation into a single execution.

    Each client owns its own instance, so separate clients never share a
    flight.
    """

    def __init__(self, name: str):
        self.name = name
        self._lock = threading.Lock()
        self._flight: Optional[_Flight] = None
        self.executions = 0

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._flight is not None

    @property
    def waiting(self) -> int:
        """Number of callers currently waiting on the outstanding flight."""
        with self._lock:
            return len(self._flight.waiters) if self._flight else 0

    def run_exclusive(self, fn: Callable[[], Any]) -> Any:
        """Run ``fn`` unless a run is already outstanding, then share its result."""
        with self._lock:
            flight = self._flight
            leader = flight is None
            if leader:
                flight = self._flight = _Flight()
                self.executions += 1
            else:
                flight.waiters.append(threading.get_ident())

        if not leader:
            logger.debug(f"{self.name}: joining outstanding flight")
            flight.done.wait()
            if flight.error is not None:
                raise flight.error
            return flight.outcome

        try:
            flight.outcome = fn()
            return flight.outcome
        except BaseException as e:
            flight.error = e
            raise
        finally:
            with self._lock:
                self._flight = None
            if flight.waiters:
                logger.debug(f"{self.name}: releasing {len(flight.waiters)} waiter(s)")
            flight.done.set()
