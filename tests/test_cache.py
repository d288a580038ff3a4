"""Tests for ChunkCache."""

import threading

from chunkfetch.cache import ChunkCache


class TestChunkCache:
    def test_take_missing_returns_none(self):
        cache = ChunkCache()
        assert cache.take("http://example.com/") is None

    def test_put_then_take(self):
        cache = ChunkCache()
        cache.put("http://example.com/", "ABC")
        assert "http://example.com/" in cache
        assert cache.take("http://example.com/") == "ABC"

    def test_take_is_single_use(self):
        cache = ChunkCache()
        cache.put("http://example.com/", "ABC")
        cache.take("http://example.com/")
        assert cache.take("http://example.com/") is None
        assert len(cache) == 0

    def test_put_overwrites(self):
        cache = ChunkCache()
        cache.put("http://example.com/", "old")
        cache.put("http://example.com/", "new")
        assert len(cache) == 1
        assert cache.take("http://example.com/") == "new"

    def test_keys_are_independent(self):
        cache = ChunkCache()
        cache.put("http://a.example/", "A")
        cache.put("http://b.example/", "B")
        assert cache.take("http://a.example/") == "A"
        assert cache.take("http://b.example/") == "B"

    def test_concurrent_take_is_exactly_once(self):
        """Only one of many racing readers gets the entry."""
        cache = ChunkCache()
        cache.put("http://example.com/", "ABC")
        barrier = threading.Barrier(16)
        results = []
        results_lock = threading.Lock()

        def reader():
            barrier.wait()
            value = cache.take("http://example.com/")
            with results_lock:
                results.append(value)

        threads = [threading.Thread(target=reader) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count("ABC") == 1
        assert results.count(None) == 15
