"""
Tests for the TTL cache.
"""

from datetime import timedelta

from thpt_ranking.cache import TTLCache


class TestTTLCache:
    def test_set_and_get(self):
        cache = TTLCache(default_ttl=60)
        cache.set(["2024"], "unique_years")
        assert cache.get("unique_years") == ["2024"]
        assert cache.get("unique_combinations") is None

    def test_arguments_are_part_of_key(self):
        cache = TTLCache()
        cache.set("a", "query", 2024)
        cache.set("b", "query", 2023)
        assert cache.get("query", 2024) == "a"
        assert cache.get("query", 2023) == "b"
        assert cache.get("query") is None

    def test_expiry(self, monkeypatch):
        cache = TTLCache(default_ttl=60)
        cache.set("value", "key")
        later = TTLCache._now() + timedelta(seconds=61)
        monkeypatch.setattr(cache, "_now", lambda: later)

        assert cache.get("key") is None
        assert cache.size() == 0

    def test_cleanup_expired(self, monkeypatch):
        cache = TTLCache(default_ttl=60)
        cache.set("short", "a", ttl=1)
        cache.set("long", "b", ttl=3600)
        later = TTLCache._now() + timedelta(seconds=5)
        monkeypatch.setattr(cache, "_now", lambda: later)

        assert cache.cleanup_expired() == 1
        assert cache.get("b") == "long"

    def test_disabled_cache(self):
        cache = TTLCache(enabled=False)
        cache.set("value", "key")
        assert cache.get("key") is None
        assert cache.size() == 0

    def test_stats(self):
        cache = TTLCache(default_ttl=120)
        cache.set(1, "k")
        cache.get("k")
        cache.get("missing")
        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["entries"] == 1
        assert stats["default_ttl"] == 120

        cache.clear()
        assert cache.get_stats()["entries"] == 0
