"""
Highlight state machine.

Exactly one of three states is active:

    NoHighlight --pointer_enter(n)--> Hover(n)
    Hover(n)    --pointer_leave-->    Search(q) if a query is set, else NoHighlight
    any         --query_changed(q)--> Search(q), or NoHighlight when q is empty

Hover wins over search while the pointer stays on a node; the query is
remembered underneath it and restored on pointer-out.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class NoHighlight:
    pass


@dataclass(frozen=True)
class Hover:
    node_id: str


@dataclass(frozen=True)
class Search:
    query: str


HighlightState = Union[NoHighlight, Hover, Search]

NONE = NoHighlight()


class HighlightMachine:
    """Holds the current HighlightState and the remembered search query."""

    def __init__(self):
        self.state: HighlightState = NONE
        self.query = ""

    def _resting_state(self) -> HighlightState:
        return Search(self.query) if self.query else NONE

    def pointer_enter(self, node_id: str) -> HighlightState:
        self.state = Hover(node_id)
        return self.state

    def pointer_leave(self) -> HighlightState:
        if isinstance(self.state, Hover):
            self.state = self._resting_state()
        return self.state

    def query_changed(self, query: str) -> HighlightState:
        self.query = query.strip()
        self.state = self._resting_state()
        return self.state

    def reset(self) -> HighlightState:
        """Drop hover (e.g. the hovered node was filtered out) but keep the query."""
        self.state = self._resting_state()
        return self.state

    @property
    def hovered(self) -> str | None:
        return self.state.node_id if isinstance(self.state, Hover) else None
