"""
Filter Controller.

The single writer of a FilterState. Messages are dispatched serially:

- Toggles and resets are applied and recomputed immediately.
- Search input goes through the SearchDebouncer and is applied on the first
  ``tick`` after the quiescence window.

Every recomputation runs ``compute_visibility`` from scratch and is handed
to the optional ``on_change`` listener.
"""

import logging
import time
from typing import Callable, Optional

from ..config import SEARCH_DEBOUNCE_SECONDS
from ..core.types import GraphModel
from .debounce import Clock, SearchDebouncer
from .engine import VisibilityAssignment, compute_visibility
from .state import FilterMessage, FilterState, ResetRequested, SearchChanged, apply_message

logger = logging.getLogger(__name__)

ChangeListener = Callable[[VisibilityAssignment], None]


class FilterController:
    """
    Owns the FilterState for one GraphModel and keeps its visibility current.
    """

    def __init__(
        self,
        model: GraphModel,
        debounce_window: float = SEARCH_DEBOUNCE_SECONDS,
        clock: Clock = time.monotonic,
        on_change: Optional[ChangeListener] = None,
    ):
        self.model = model
        self.state = FilterState.seeded_from(model)
        self.recompute_count = 0
        self._debouncer = SearchDebouncer(debounce_window, clock)
        self._on_change = on_change
        self.visibility = self._recompute()

    @property
    def search_pending(self) -> bool:
        return self._debouncer.pending

    def dispatch(self, message: FilterMessage) -> Optional[VisibilityAssignment]:
        """
        Apply a message.

        Returns:
            The new assignment, or None when the message was deferred.
        """
        logger.debug(f"Dispatch {message!r}")

        if isinstance(message, SearchChanged):
            self._debouncer.submit(message.text)
            return None

        if isinstance(message, ResetRequested):
            self._debouncer.cancel()
        apply_message(self.state, message)

        self.visibility = self._recompute()
        return self.visibility

    def tick(self) -> Optional[VisibilityAssignment]:
        """Apply debounced search input if its window has elapsed."""
        return self._apply_search(self._debouncer.poll())

    def flush_search(self) -> Optional[VisibilityAssignment]:
        """Apply pending search input without waiting for the window."""
        return self._apply_search(self._debouncer.flush())

    def _apply_search(self, text: Optional[str]) -> Optional[VisibilityAssignment]:
        if text is None:
            return None
        apply_message(self.state, SearchChanged(text))
        self.visibility = self._recompute()
        return self.visibility

    def _recompute(self) -> VisibilityAssignment:
        visibility = compute_visibility(self.model, self.state)
        self.recompute_count += 1
        if self._on_change is not None:
            self._on_change(visibility)
        return visibility
