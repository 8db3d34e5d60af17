"""
Search Debounce.

Coalesces rapid search input into one recomputation. Contract: at most one
release per quiescence window, carrying the most recent input; every new
submission restarts the window.

Time comes from an injectable clock so the behaviour is deterministic under
test. Nothing here schedules callbacks; the owner polls.
"""

import time
from typing import Callable, Optional

from ..config import SEARCH_DEBOUNCE_SECONDS

Clock = Callable[[], float]


class SearchDebouncer:
    """
    Holds the latest pending search text until the window has elapsed.
    """

    def __init__(self, window: float = SEARCH_DEBOUNCE_SECONDS, clock: Clock = time.monotonic):
        if window < 0:
            raise ValueError(f"Debounce window must be non-negative, got {window}")
        self.window = window
        self._clock = clock
        self._pending: Optional[str] = None
        self._deadline = 0.0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def submit(self, text: str) -> None:
        """Record new input and restart the quiescence window."""
        self._pending = text
        self._deadline = self._clock() + self.window

    def poll(self) -> Optional[str]:
        """Release the pending text if the window has elapsed, else None."""
        if self._pending is None or self._clock() < self._deadline:
            return None
        return self.flush()

    def flush(self) -> Optional[str]:
        """Release the pending text immediately."""
        text, self._pending = self._pending, None
        return text

    def cancel(self) -> None:
        self._pending = None
