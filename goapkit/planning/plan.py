"""Plan representation: the ordered actions found by one search."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class SearchStats:
    """Bookkeeping for a single search call."""

    expansions: int = 0  # states expanded (marked visited)
    generated: int = 0  # successor nodes pushed on the frontier
    truncated: bool = False  # stopped by the expansion cap


@dataclass(frozen=True)
class Plan:
    """A cheapest known action sequence toward a goal.

    ``actions`` are in execution order. ``goal`` is set when the plan was
    produced by an agent for one of its goals.
    """

    actions: tuple[Any, ...]
    cost: float = 0
    goal: Any = None
    stats: SearchStats = field(default_factory=SearchStats, compare=False)

    def __len__(self) -> int:
        return len(self.actions)

    def __iter__(self):
        return iter(self.actions)

    @property
    def is_empty(self) -> bool:
        """True when the start state already satisfied the goal."""
        return not self.actions

    @property
    def first_action(self) -> Any | None:
        """The next action to execute, or None for an empty plan."""
        return self.actions[0] if self.actions else None

    def for_goal(self, goal: Any) -> Plan:
        """Return a copy of this plan tagged with ``goal``."""
        return replace(self, goal=goal)
