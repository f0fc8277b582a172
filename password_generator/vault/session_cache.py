"""
SessionKeyCache — Time-bounded reuse of a verified master password.

Holds at most one ``(master password, verified_at)`` pair in process
memory. A remembered unlock can be reused while
``now - verified_at <= ttl``; after that the caller must verify again.

Security Note:
    The master password stays in memory while cached. It is never
    written to disk or logged, and ``repr()`` does not show it.
"""
import time
import logging
import threading
from typing import Callable, NamedTuple, Optional

from .. import conf

logger = logging.getLogger("password_generator.vault")


def epoch_millis() -> int:
    """Wall clock in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class SessionKey(NamedTuple):
    master_password: str
    verified_at: int  # epoch milliseconds

    def __repr__(self) -> str:
        return f"SessionKey(master_password='***', verified_at={self.verified_at})"


class SessionKeyCache:
    """Owned, injectable session cache.

    Args:
        ttl: Lifetime of a remembered unlock, in seconds.
        clock: Zero-argument callable returning epoch milliseconds.
    """

    def __init__(
        self,
        ttl: int = conf.DEFAULT_SESSION_TTL,
        clock: Optional[Callable[[], int]] = None,
    ):
        if ttl <= 0:
            raise ValueError("Session TTL must be positive")
        self._ttl_millis = ttl * 1000
        self._clock = clock or epoch_millis
        self._lock = threading.Lock()
        self._entry: Optional[SessionKey] = None

    def __repr__(self) -> str:
        return (
            f"<SessionKeyCache ttl={self._ttl_millis // 1000}s "
            f"active={self._entry is not None}>"
        )

    @property
    def ttl(self) -> int:
        return self._ttl_millis // 1000

    def _now(self, now: Optional[int]) -> int:
        return self._clock() if now is None else now

    def remember(self, password: str, now: Optional[int] = None) -> None:
        """Cache ``password`` as verified at ``now`` (epoch ms)."""
        with self._lock:
            self._entry = SessionKey(password, self._now(now))
        logger.debug("Session remembered for %ds", self.ttl)

    def try_reuse(self, now: Optional[int] = None) -> Optional[str]:
        """Return the cached password if still within the TTL, else None.

        An expired entry is dropped on the first lookup that sees it.
        """
        with self._lock:
            entry = self._entry
            if entry is None:
                return None
            if self._now(now) - entry.verified_at <= self._ttl_millis:
                return entry.master_password
            self._entry = None
        logger.debug("Session expired; verification required")
        return None

    def is_active(self, now: Optional[int] = None) -> bool:
        return self.try_reuse(now) is not None

    def forget(self) -> None:
        """Drop the cached password immediately."""
        with self._lock:
            self._entry = None
        logger.debug("Session forgotten")
