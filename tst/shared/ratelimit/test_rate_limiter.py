"""Tests for the sliding-window rate limiter."""

import threading

from agency_site.shared.ratelimit.limiter import InMemoryRateLimiterStore, RateLimiter


def test_admits_max_requests_then_denies():
    store = InMemoryRateLimiterStore()
    results = [store.allow("1.2.3.4", 100.0 + i, 3, 60) for i in range(4)]
    assert results == [True, True, True, False]


def test_denied_attempt_is_not_recorded():
    store = InMemoryRateLimiterStore()
    for i in range(3):
        store.allow("1.2.3.4", 100.0 + i, 3, 60)
    assert store.allow("1.2.3.4", 110.0, 3, 60) is False
    assert store.attempts("1.2.3.4") == 3


def test_admits_again_once_earliest_attempt_leaves_window():
    store = InMemoryRateLimiterStore()
    for t in (100.0, 101.0, 102.0):
        assert store.allow("1.2.3.4", t, 3, 60)
    assert store.allow("1.2.3.4", 159.9, 3, 60) is False
    # now - earliest == window: the earliest attempt is pruned
    assert store.allow("1.2.3.4", 160.0, 3, 60) is True
    assert store.allow("1.2.3.4", 160.5, 3, 60) is False


def test_addresses_are_independent():
    store = InMemoryRateLimiterStore()
    for i in range(3):
        assert store.allow("1.1.1.1", 100.0 + i, 3, 60)
    assert store.allow("1.1.1.1", 103.0, 3, 60) is False
    assert store.allow("2.2.2.2", 103.0, 3, 60) is True


def test_sweep_removes_idle_addresses():
    store = InMemoryRateLimiterStore()
    store.allow("old", 0.0, 3, 60)
    store.allow("recent", 50.0, 3, 60)
    assert store.sweep(100.0, 60) == 1
    assert len(store) == 1
    assert store.attempts("recent") == 1
    assert store.attempts("old") == 0


def test_rate_limiter_sweeps_once_per_window():
    store = InMemoryRateLimiterStore()
    limiter = RateLimiter(store, max_requests=3, window_seconds=60)
    limiter.allow("a", 0.0)
    limiter.allow("b", 10.0)
    assert len(store) == 2
    limiter.allow("c", 65.0)
    assert store.attempts("a") == 0
    assert len(store) == 2


def test_concurrent_attempts_never_exceed_cap():
    store = InMemoryRateLimiterStore()
    results = []
    lock = threading.Lock()
    barrier = threading.Barrier(20)

    def attempt():
        barrier.wait()
        allowed = store.allow("1.2.3.4", 100.0, 3, 60)
        with lock:
            results.append(allowed)

    threads = [threading.Thread(target=attempt) for _ in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 3
    assert results.count(False) == 17


def test_reset_forgets_everything():
    limiter = RateLimiter(InMemoryRateLimiterStore(), max_requests=1, window_seconds=60)
    assert limiter.allow("a", 0.0)
    assert not limiter.allow("a", 1.0)
    limiter.reset()
    assert limiter.allow("a", 2.0)
