"""Action, goal and state contracts consumed by the search engine.

The engine never looks inside a state. It only needs:

- states that are hashable with consistent equality (visited-set keys),
- actions exposing ``is_applicable``, ``apply`` and optionally ``cost``,
- goals exposing ``is_satisfied`` and optionally ``priority``/``heuristic``.

Optional members fall back to the defaults of :class:`BaseAction` and
:class:`BaseGoal`, so plain enums or dataclasses can take part without
inheriting from anything.
"""

from __future__ import annotations

import copy
from collections.abc import Hashable
from typing import Protocol, runtime_checkable

from goapkit.errors import InvalidStateError

State = Hashable

DEFAULT_ACTION_COST = 1
DEFAULT_PRIORITY = 0
DEFAULT_HEURISTIC = 0


@runtime_checkable
class Action(Protocol):
    """Anything that can transition a state."""

    def is_applicable(self, state: State) -> bool:
        """Return True if the action may be taken from ``state``. Must not mutate it."""
        ...

    def apply(self, state: State) -> State:
        """Return the state that results from taking the action. Deterministic."""
        ...


@runtime_checkable
class Goal(Protocol):
    """Anything that can be satisfied by a state."""

    def is_satisfied(self, state: State) -> bool:
        """Return True if ``state`` satisfies the goal."""
        ...


class BaseAction:
    """Convenience base class for actions.

    Subclasses implement ``is_applicable`` and either ``apply_mut`` (in-place
    effect on a copy) or ``apply`` (returns a new state, e.g. for frozen
    dataclasses). ``cost`` defaults to a constant.

    Example::

        @dataclass(frozen=True)
        class PickFlower(BaseAction):
            def is_applicable(self, state):
                return state.flowers < 5

            def apply(self, state):
                return replace(state, flowers=state.flowers + 1)
    """

    def is_applicable(self, state: State) -> bool:
        raise NotImplementedError

    def apply_mut(self, state: State) -> None:
        """Apply the action to ``state`` in place."""
        raise NotImplementedError

    def apply(self, state: State) -> State:
        """Apply the action to a deep copy of ``state`` and return the copy."""
        new_state = copy.deepcopy(state)
        self.apply_mut(new_state)
        return new_state

    def cost(self, state: State) -> float:
        """Cost of applying the action from ``state``. Must be non-negative."""
        return DEFAULT_ACTION_COST


class BaseGoal:
    """Convenience base class for goals.

    ``priority`` ranks goals against each other (higher = more urgent) and is
    re-evaluated on every planning cycle. ``heuristic`` is an optional lower
    bound on the remaining cost; it must never overestimate, or returned plans
    may not be cheapest.
    """

    def is_satisfied(self, state: State) -> bool:
        raise NotImplementedError

    def priority(self, state: State) -> float:
        return DEFAULT_PRIORITY

    def heuristic(self, state: State) -> float:
        return DEFAULT_HEURISTIC


# ----------------------------------------------------------------------
# Dispatch helpers for optional members
# ----------------------------------------------------------------------


def action_cost(action: Action, state: State) -> float:
    """Return ``action.cost(state)``, or the default cost if not defined."""
    cost_fn = getattr(action, "cost", None)
    if cost_fn is None:
        return DEFAULT_ACTION_COST
    return cost_fn(state)


def goal_priority(goal: Goal, state: State) -> float:
    """Return ``goal.priority(state)``, or the default priority if not defined."""
    priority_fn = getattr(goal, "priority", None)
    if priority_fn is None:
        return DEFAULT_PRIORITY
    return priority_fn(state)


def goal_heuristic(goal: Goal, state: State) -> float:
    """Return ``goal.heuristic(state)``, or 0 if not defined."""
    heuristic_fn = getattr(goal, "heuristic", None)
    if heuristic_fn is None:
        return DEFAULT_HEURISTIC
    return heuristic_fn(state)


def check_state(state: State) -> None:
    """Raise InvalidStateError if ``state`` cannot be used as a search node."""
    try:
        hash(state)
    except TypeError as e:
        raise InvalidStateError(
            f"State of type {type(state).__name__} is not hashable: {e}"
        ) from e
