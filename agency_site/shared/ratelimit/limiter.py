"""Process-local sliding-window rate limiting keyed by client address."""

from abc import ABC, abstractmethod
from collections import deque
from threading import Lock
from typing import Deque, Dict


class RateLimiterStore(ABC):
    """Storage contract for sliding-window rate limiting."""

    @abstractmethod
    def allow(self, address: str, now: float, max_requests: int, window_seconds: float) -> bool:
        """Record an attempt and return True, or return False without recording it."""

    @abstractmethod
    def sweep(self, now: float, window_seconds: float) -> int:
        """Drop addresses with no attempts inside the window. Returns the number removed."""

    @abstractmethod
    def reset(self) -> None:
        """Forget every address."""


class InMemoryRateLimiterStore(RateLimiterStore):
    """
    Timestamps per address in a dict of deques, guarded by one lock.

    The check-then-append runs under the lock so concurrent requests from the same
    address cannot both observe a free slot. State is lost on restart and is not
    shared between processes.
    """

    def __init__(self):
        self._store: Dict[str, Deque[float]] = {}
        self._lock = Lock()

    def allow(self, address: str, now: float, max_requests: int, window_seconds: float) -> bool:
        with self._lock:
            request_times = self._store.setdefault(address, deque())
            while request_times and now - request_times[0] >= window_seconds:
                request_times.popleft()
            if len(request_times) >= max_requests:
                return False
            request_times.append(now)
            return True

    def sweep(self, now: float, window_seconds: float) -> int:
        with self._lock:
            stale = [
                address for address, request_times in self._store.items()
                if not request_times or now - request_times[-1] >= window_seconds
            ]
            for address in stale:
                del self._store[address]
            return len(stale)

    def reset(self) -> None:
        with self._lock:
            self._store.clear()

    def attempts(self, address: str) -> int:
        with self._lock:
            return len(self._store.get(address, ()))

    def __len__(self) -> int:
        return len(self._store)


class RateLimiter:
    """Sliding-window limiter with a periodic sweep of idle addresses."""

    def __init__(self, store: RateLimiterStore, max_requests: int = 3, window_seconds: float = 60.0):
        self.store = store
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._last_sweep = None

    def allow(self, address: str, now: float) -> bool:
        if self._last_sweep is None or now - self._last_sweep >= self.window_seconds:
            self.store.sweep(now, self.window_seconds)
            self._last_sweep = now
        return self.store.allow(address, now, self.max_requests, self.window_seconds)

    def reset(self) -> None:
        self.store.reset()
        self._last_sweep = None
