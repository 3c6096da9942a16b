"""Tests for MemoryCache and CacheKeys."""

import pytest

from warden.core.cache import MemoryCache
from warden.rbac.cache_keys import CacheKeys


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestMemoryCache:
    def test_remember_calls_producer_once(self):
        cache = MemoryCache()
        calls = []

        def producer():
            calls.append(1)
            return ["RoleA"]

        assert cache.remember("k", 60, producer) == ["RoleA"]
        assert cache.remember("k", 60, producer) == ["RoleA"]
        assert len(calls) == 1

    def test_entries_expire_after_ttl_minutes(self):
        clock = FakeClock()
        cache = MemoryCache(clock=clock)
        cache.put("k", "v", ttl=1)

        clock.now += 59
        assert cache.get("k") == "v"

        clock.now += 1
        assert cache.get("k") is None
        assert cache.remember("k", 1, lambda: "fresh") == "fresh"

    def test_expired_entries_swept_on_write(self):
        clock = FakeClock()
        cache = MemoryCache(clock=clock)
        for user_id in range(100):
            cache.put(f"roles_for_user:{user_id}", [], ttl=1)

        clock.now += 10_000
        cache.remember("roles_for_user:new", 1, lambda: ["RoleA"])

        assert len(cache) == 1
        assert cache.get("roles_for_user:new") == ["RoleA"]

    def test_live_entries_survive_sweep(self):
        clock = FakeClock()
        cache = MemoryCache(clock=clock)
        cache.put("short", 1, ttl=1)
        cache.put("long", 2, ttl=60)

        clock.now += 120
        cache.put("other", 3, ttl=1)

        assert cache.has("short") is False
        assert cache.get("long") == 2
        assert len(cache) == 2

    def test_falsy_values_are_cached(self):
        cache = MemoryCache()
        calls = []

        def producer():
            calls.append(1)
            return []

        cache.remember("k", 60, producer)
        cache.remember("k", 60, producer)

        assert len(calls) == 1
        assert cache.has("k") is True

    def test_forget_and_flush(self):
        cache = MemoryCache()
        cache.put("a", 1, ttl=5)
        cache.put("b", 2, ttl=5)

        cache.forget("a")
        cache.forget("missing")
        assert cache.has("a") is False
        assert cache.get("b") == 2

        cache.flush()
        assert len(cache) == 0

    def test_producer_errors_propagate(self):
        cache = MemoryCache()

        def producer():
            raise RuntimeError("db down")

        with pytest.raises(RuntimeError, match="db down"):
            cache.remember("k", 60, producer)
        assert cache.has("k") is False


class TestCacheKeys:
    def test_keys_unique_per_kind_and_id(self):
        keys = CacheKeys(prefix="warden")

        generated = {
            keys.roles_for_user(1),
            keys.permissions_for_user(1),
            keys.permissions_for_role(1),
            keys.roles_for_user(2),
        }
        assert len(generated) == 4

    def test_for_user(self):
        keys = CacheKeys(prefix="warden")

        assert keys.for_user(4) == (
            "warden:roles_for_user:4",
            "warden:permissions_for_user:4",
        )
