"""Minimum-spacing throttle shared by every geocoding provider call."""

import logging
import threading
import time
from functools import lru_cache
from typing import Callable, Optional

from landing_pages.core.config import get_settings

logger = logging.getLogger(__name__)


class Throttle:
    """Enforce a minimum interval between consecutive calls.

    The last-call timestamp is read and written under a lock, and the wait
    happens while the lock is held, so concurrent callers are spaced out one
    after another rather than all waking at once.
    """

    def __init__(
        self,
        min_interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must not be negative")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None
        self._lock = threading.Lock()

    def wait(self) -> float:
        """Block until the next call is allowed; return the seconds slept."""
        with self._lock:
            waited = 0.0
            if self._last_call is not None:
                elapsed = self._clock() - self._last_call
                if elapsed < self.min_interval:
                    waited = self.min_interval - elapsed
                    logger.debug("Throttling provider call for %.3fs", waited)
                    self._sleep(waited)
            self._last_call = self._clock()
            return waited

    def reset(self) -> None:
        with self._lock:
            self._last_call = None


@lru_cache(maxsize=1)
def get_throttle() -> Throttle:
    """Return the process-wide throttle used by the geocoding services."""
    settings = get_settings()
    return Throttle(settings.geocoder_min_interval_ms / 1000.0)
