"""Rate limiting for Gemini API requests"""

from collections import deque
from collections.abc import Callable
import logging
import math
import threading
import time

from ..exceptions import RateLimitedError
from .configuration import RateLimitConfig

log = logging.getLogger(__name__)


class RateLimiter:
    """Sliding-window admission gate shared by every outbound LLM call.

    Non-blocking: a full window raises ``RateLimitedError`` with the wait
    estimate instead of sleeping. The window is guarded by a lock so that
    concurrent callers never both observe the last free slot.
    """

    def __init__(
        self,
        config: RateLimitConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or RateLimitConfig()
        self._clock = clock
        self._lock = threading.Lock()
        self.request_timestamps: deque[float] = deque()

    def try_acquire(self) -> None:
        """Record a request, or raise ``RateLimitedError`` if the window is full."""
        with self._lock:
            now = self._clock()
            self._prune(now)

            if len(self.request_timestamps) >= self.config.max_requests:
                oldest = self.request_timestamps[0]
                wait = self.config.window_seconds - (now - oldest)
                wait_seconds = math.ceil(wait)
                log.warning(
                    "Rate limit reached (%d requests / %ss). Retry in %ds.",
                    self.config.max_requests,
                    self.config.window_seconds,
                    wait_seconds,
                )
                raise RateLimitedError(wait_seconds)

            self.request_timestamps.append(now)

    def in_flight(self) -> int:
        """Number of requests still counted in the current window."""
        with self._lock:
            self._prune(self._clock())
            return len(self.request_timestamps)

    def reset(self) -> None:
        """Forget every recorded request."""
        with self._lock:
            self.request_timestamps.clear()

    def _prune(self, now: float) -> None:
        # Timestamps exactly one window old have left the window.
        while (
            self.request_timestamps
            and now - self.request_timestamps[0] >= self.config.window_seconds
        ):
            self.request_timestamps.popleft()
