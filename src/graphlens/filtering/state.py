"""
Filter State and Messages.

FilterState is the mutable record of active facet selections. It is owned by
the interface driving the filters (see ``FilterController``), never by the
model builder, and is only changed through ``apply_message``.

Facet keys that are absent from a mapping are treated as enabled, so a
category, tag or group the state was not seeded with is never hidden by
default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple, Union

from ..core.types import GraphModel


@dataclass
class FilterState:
    """Active selections for the four filter facets."""
    search_text: str = ""
    category_enabled: Dict[str, bool] = field(default_factory=dict)
    tag_enabled: Dict[str, bool] = field(default_factory=dict)
    group_enabled: Dict[str, bool] = field(default_factory=dict)
    _known: Tuple[Tuple[str, ...], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # Keys present at construction are the ones reset restores
        self._known = tuple(tuple(facet) for facet in self._facets())

    def _facets(self) -> Tuple[Dict[str, bool], ...]:
        return (self.category_enabled, self.tag_enabled, self.group_enabled)

    @classmethod
    def seeded_from(cls, model: GraphModel) -> FilterState:
        """Default state: empty search, every discovered facet value enabled."""
        return cls(
            category_enabled={c: True for c in model.categories()},
            tag_enabled={t: True for t in model.tags()},
            group_enabled={g: True for g in model.group_ids()},
        )

    def copy(self) -> FilterState:
        clone = FilterState(
            search_text=self.search_text,
            category_enabled=dict(self.category_enabled),
            tag_enabled=dict(self.tag_enabled),
            group_enabled=dict(self.group_enabled),
        )
        clone._known = self._known
        return clone

    def is_category_enabled(self, category: str) -> bool:
        return self.category_enabled.get(category, True)

    def is_tag_enabled(self, tag: str) -> bool:
        return self.tag_enabled.get(tag, True)

    def is_group_enabled(self, group_id: str) -> bool:
        return self.group_enabled.get(group_id, True)

    def reset(self) -> None:
        """
        Clear the search and re-enable every seeded facet value.

        Keys added later by toggles are dropped, so a reset state equals a
        freshly seeded one.
        """
        self.search_text = ""
        for facet, known in zip(self._facets(), self._known):
            facet.clear()
            facet.update({key: True for key in known})


# =============================================================================
# Messages
# =============================================================================


@dataclass(frozen=True)
class SearchChanged:
    text: str


@dataclass(frozen=True)
class CategoryToggled:
    category: str
    enabled: bool


@dataclass(frozen=True)
class TagToggled:
    tag: str
    enabled: bool


@dataclass(frozen=True)
class GroupToggled:
    group_id: str
    enabled: bool


@dataclass(frozen=True)
class ResetRequested:
    pass


FilterMessage = Union[SearchChanged, CategoryToggled, TagToggled, GroupToggled, ResetRequested]


def apply_message(state: FilterState, message: FilterMessage) -> None:
    """
    Apply one message to ``state`` in place.

    Raises:
        TypeError: If ``message`` is not a known filter message.
    """
    if isinstance(message, SearchChanged):
        state.search_text = message.text
    elif isinstance(message, CategoryToggled):
        state.category_enabled[message.category] = message.enabled
    elif isinstance(message, TagToggled):
        state.tag_enabled[message.tag] = message.enabled
    elif isinstance(message, GroupToggled):
        state.group_enabled[message.group_id] = message.enabled
    elif isinstance(message, ResetRequested):
        state.reset()
    else:
        raise TypeError(f"Unknown filter message: {message!r}")
