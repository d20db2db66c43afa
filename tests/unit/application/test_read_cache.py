"""Tests for the bounded-freshness read cache."""

from unittest.mock import patch

import pytest

from clerq.application.read_cache import ReadCache


class TestReadCache:
    """Test cases for ReadCache."""

    @pytest.fixture
    def cache(self, clock, mock_logger):
        """Create a cache with a 100ms window."""
        return ReadCache(100, clock, mock_logger)

    @pytest.mark.parametrize("window", [None, 0, -5])
    def test_disabled_window(self, clock, window):
        cache = ReadCache(window, clock)
        assert cache.should_cache is False

        cache.put("svc", "10.0.0.1:80")
        assert cache.is_fresh("svc") is False
        assert cache.get("svc") is None
        assert cache.stats()["size"] == 0

    def test_fresh_until_window_elapses(self, cache, clock):
        assert cache.is_fresh("svc") is False

        cache.put("svc", "10.0.0.1:80")
        assert cache.is_fresh("svc") is True
        assert cache.get("svc") == "10.0.0.1:80"

        clock.advance(milliseconds=99)
        assert cache.is_fresh("svc") is True

        clock.advance(milliseconds=1)
        assert cache.is_fresh("svc") is False
        assert cache.get("svc") is None

    def test_put_overwrites_and_restamps(self, cache, clock):
        cache.put("svc", "10.0.0.1:80")
        clock.advance(milliseconds=80)

        cache.put("svc", "10.0.0.2:80")
        clock.advance(milliseconds=80)

        assert cache.get("svc") == "10.0.0.2:80"

    def test_entries_are_per_service(self, cache):
        cache.put("a", "10.0.0.1:80")

        assert cache.is_fresh("a") is True
        assert cache.is_fresh("b") is False

    def test_put_random_picks_a_member(self, cache):
        addresses = ["10.0.0.1:80", "10.0.0.2:80", "10.0.0.3:80"]

        with patch("clerq.application.read_cache.random.choice", return_value=addresses[1]):
            cache.put_random("svc", addresses)

        assert cache.get("svc") == "10.0.0.2:80"

    def test_put_random_ignores_empty_list(self, cache):
        cache.put_random("svc", [])
        assert cache.is_fresh("svc") is False

    def test_stats(self, cache):
        cache.get("svc")
        cache.put("svc", "10.0.0.1:80")
        cache.get("svc")
        cache.get("svc")

        stats = cache.stats()
        assert stats["enabled"] is True
        assert stats["window_ms"] == 100
        assert stats["size"] == 1
        assert stats["hits"] == 2
        assert stats["misses"] == 1
        assert stats["hit_rate"] == pytest.approx(2 / 3)

    def test_hit_is_logged(self, cache, mock_logger):
        cache.put("svc", "10.0.0.1:80")
        cache.get("svc")

        mock_logger.debug.assert_called_once()
