"""Tests for specloader.loader.memory -- the single-flight in-process cache."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from specloader.document import OpenAPI
from specloader.loader.memory import DocumentCache


def _doc(title: str = "T") -> OpenAPI:
    return OpenAPI.model_validate({"openapi": "3.0.1", "info": {"title": title}})


class TestBasics:
    def test_get_missing_returns_none(self) -> None:
        assert DocumentCache().get("FILE:/x") is None

    def test_get_or_load_stores_result(self) -> None:
        cache = DocumentCache()
        doc = _doc()
        assert cache.get_or_load("FILE:/x", lambda: doc) is doc
        assert cache.get("FILE:/x") is doc
        assert "FILE:/x" in cache
        assert len(cache) == 1

    def test_hit_does_not_call_factory(self) -> None:
        cache = DocumentCache()
        doc = _doc()
        cache.get_or_load("k", lambda: doc)

        def boom() -> OpenAPI:
            raise AssertionError("factory must not run on a hit")

        assert cache.get_or_load("k", boom) is doc

    def test_failure_is_not_cached(self) -> None:
        cache = DocumentCache()

        def failing() -> OpenAPI:
            raise RuntimeError("source down")

        with pytest.raises(RuntimeError):
            cache.get_or_load("k", failing)
        assert "k" not in cache

        doc = _doc()
        assert cache.get_or_load("k", lambda: doc) is doc

    def test_invalidate_and_clear(self) -> None:
        cache = DocumentCache()
        cache.get_or_load("a", _doc)
        cache.get_or_load("b", _doc)
        assert cache.invalidate("a") is True
        assert cache.invalidate("a") is False
        assert cache.keys() == ["b"]
        cache.clear()
        assert len(cache) == 0


class TestConcurrency:
    def test_concurrent_first_loads_run_factory_once(self) -> None:
        cache = DocumentCache()
        calls = 0
        calls_lock = threading.Lock()
        start = threading.Barrier(8)

        def factory() -> OpenAPI:
            nonlocal calls
            with calls_lock:
                calls += 1
            time.sleep(0.05)
            return _doc()

        def worker() -> OpenAPI:
            start.wait()
            return cache.get_or_load("URL:https://example.com/spec", factory)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: worker(), range(8)))

        assert calls == 1
        assert all(r is results[0] for r in results)

    def test_distinct_keys_do_not_block_each_other(self) -> None:
        cache = DocumentCache()
        slow_started = threading.Event()
        release_slow = threading.Event()

        def slow() -> OpenAPI:
            slow_started.set()
            release_slow.wait(timeout=5)
            return _doc("slow")

        with ThreadPoolExecutor(max_workers=2) as pool:
            slow_future = pool.submit(cache.get_or_load, "slow", slow)
            assert slow_started.wait(timeout=5)
            # Completes while "slow" still holds its own lock.
            fast = cache.get_or_load("fast", lambda: _doc("fast"))
            assert fast.info.title == "fast"
            assert not slow_future.done()
            release_slow.set()
            assert slow_future.result(timeout=5).info.title == "slow"

    def test_failed_keys_leave_no_lock_behind(self) -> None:
        cache = DocumentCache()

        def failing() -> OpenAPI:
            raise RuntimeError("source down")

        for attempt in range(3):
            with pytest.raises(RuntimeError):
                cache.get_or_load(f"URL:https://down.example/{attempt}", failing)
        cache.get_or_load("ok", _doc)
        assert cache._key_locks == {}
        assert cache._waiters == {}

    def test_waiter_retries_after_first_caller_fails(self) -> None:
        cache = DocumentCache()
        first_running = threading.Event()
        release_first = threading.Event()
        calls = 0

        def factory() -> OpenAPI:
            nonlocal calls
            calls += 1
            if calls == 1:
                first_running.set()
                release_first.wait(timeout=5)
                raise RuntimeError("first attempt fails")
            return _doc("second")

        with ThreadPoolExecutor(max_workers=2) as pool:
            first = pool.submit(cache.get_or_load, "k", factory)
            assert first_running.wait(timeout=5)
            second = pool.submit(cache.get_or_load, "k", factory)
            time.sleep(0.05)
            release_first.set()
            with pytest.raises(RuntimeError):
                first.result(timeout=5)
            assert second.result(timeout=5).info.title == "second"

        assert calls == 2
        assert cache._key_locks == {}
