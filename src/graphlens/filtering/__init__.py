"""
Filtering Module.

Turns a GraphModel plus the active facet selections into a show/hide
assignment for every node and edge.

- FilterState / messages: the selections and the reducer that updates them
- compute_visibility: leaf, group and edge passes
- SearchDebouncer: coalesces rapid search input
- FilterController: single owner of a FilterState
"""

from .controller import FilterController
from .debounce import SearchDebouncer
from .engine import VisibilityAssignment, compute_visibility
from .state import (
    CategoryToggled,
    FilterMessage,
    FilterState,
    GroupToggled,
    ResetRequested,
    SearchChanged,
    TagToggled,
    apply_message,
)

__all__ = [
    "CategoryToggled",
    "FilterController",
    "FilterMessage",
    "FilterState",
    "GroupToggled",
    "ResetRequested",
    "SearchChanged",
    "SearchDebouncer",
    "TagToggled",
    "VisibilityAssignment",
    "apply_message",
    "compute_visibility",
]
