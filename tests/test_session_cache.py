"""
Tests for the session key cache.

Tests cover:
- Reuse inside the 5 minute window and expiry after it
- Explicit time values and the injected clock
- forget() and repr() hygiene
"""
import threading

import pytest

from password_generator.vault.session_cache import SessionKey, SessionKeyCache

MINUTE = 60 * 1000


@pytest.fixture
def cache(clock):
    return SessionKeyCache(ttl=300, clock=clock)


class TestReuseWindow:
    """Tests for remember() / try_reuse() with explicit times."""

    def test_empty_cache(self, cache):
        """Test nothing is reusable before remember()."""
        assert cache.try_reuse(0) is None

    def test_within_ttl(self, cache):
        """Test reuse at t0 + 4min59s returns the password."""
        t0 = 1_000_000
        cache.remember("secret", t0)
        assert cache.try_reuse(t0 + 4 * MINUTE + 59_000) == "secret"

    def test_after_ttl(self, cache):
        """Test reuse at t0 + 5min1s returns None."""
        t0 = 1_000_000
        cache.remember("secret", t0)
        assert cache.try_reuse(t0 + 5 * MINUTE + 1_000) is None

    def test_exact_boundary_is_valid(self, cache):
        """Test exactly TTL elapsed still counts as valid."""
        cache.remember("secret", 0)
        assert cache.try_reuse(5 * MINUTE) == "secret"
        assert cache.try_reuse(5 * MINUTE + 1) is None

    def test_expired_entry_is_dropped(self, cache):
        """Test an expired lookup clears the cache."""
        cache.remember("secret", 0)
        assert cache.try_reuse(6 * MINUTE) is None
        assert cache.try_reuse(1) is None

    def test_remember_replaces(self, cache):
        """Test only the latest pair is held."""
        cache.remember("old", 0)
        cache.remember("new", MINUTE)
        assert cache.try_reuse(2 * MINUTE) == "new"


class TestInjectedClock:
    """Tests using the constructor-supplied clock."""

    def test_defaults_to_clock(self, cache, clock):
        """Test omitted times come from the clock."""
        cache.remember("secret")
        clock.advance(minutes=4, seconds=59)
        assert cache.try_reuse() == "secret"
        clock.advance(seconds=2)
        assert cache.try_reuse() is None

    def test_is_active(self, cache, clock):
        """Test is_active() follows the TTL."""
        assert cache.is_active() is False
        cache.remember("secret")
        assert cache.is_active() is True
        clock.advance(minutes=6)
        assert cache.is_active() is False

    def test_custom_ttl(self, clock):
        """Test a shorter TTL expires sooner."""
        cache = SessionKeyCache(ttl=10, clock=clock)
        cache.remember("secret")
        clock.advance(seconds=11)
        assert cache.try_reuse() is None

    def test_invalid_ttl(self):
        """Test a non-positive TTL is rejected."""
        with pytest.raises(ValueError):
            SessionKeyCache(ttl=0)

    def test_default_wall_clock(self):
        """Test a cache without injected clock works with real time."""
        cache = SessionKeyCache()
        cache.remember("secret")
        assert cache.try_reuse() == "secret"


class TestHygiene:
    """Tests for forget() and secret-free representations."""

    def test_forget(self, cache):
        """Test forget() drops the cached password at once."""
        cache.remember("secret")
        cache.forget()
        assert cache.try_reuse() is None

    def test_repr_hides_password(self, cache):
        """Test repr() of cache and entry never show the password."""
        cache.remember("secret")
        assert "secret" not in repr(cache)
        assert "secret" not in repr(SessionKey("secret", 0))

    def test_concurrent_access(self, cache):
        """Test concurrent remember/try_reuse calls do not corrupt state."""
        def worker(n):
            for _ in range(200):
                cache.remember(f"pw{n}")
                cache.try_reuse()

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert cache.try_reuse() in {f"pw{i}" for i in range(4)}
