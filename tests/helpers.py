"""Test domains shared across the goapkit test suite."""

from __future__ import annotations

import enum
import itertools
from dataclasses import dataclass, replace

from goapkit.contracts import BaseAction, BaseGoal, action_cost
from goapkit.registry import TypeRegistry

# ----------------------------------------------------------------------
# Counter domain: integer state, increments with different costs
# ----------------------------------------------------------------------

COUNTER_LIMIT = 10


@TypeRegistry.register_action("test_increment")
@dataclass(frozen=True)
class Increment(BaseAction):
    """Add ``step`` to the counter at a fixed cost, never past the limit."""

    step: int
    price: float = 1

    def is_applicable(self, state: int) -> bool:
        return state + self.step <= COUNTER_LIMIT

    def apply(self, state: int) -> int:
        return state + self.step

    def cost(self, state: int) -> float:
        return self.price


@TypeRegistry.register_goal("test_reach")
@dataclass(frozen=True)
class Reach(BaseGoal):
    """Counter equals ``target``."""

    target: int
    urgency: int = 0

    def is_satisfied(self, state: int) -> bool:
        return state == self.target

    def priority(self, state: int) -> int:
        return self.urgency


@dataclass(frozen=True)
class Toggle(BaseAction):
    """Flips a boolean state forever; the reachable space has two states."""

    def is_applicable(self, state: bool) -> bool:
        return True

    def apply(self, state: bool) -> bool:
        return not state


@dataclass(frozen=True)
class Never(BaseGoal):
    def is_satisfied(self, state) -> bool:
        return False


# ----------------------------------------------------------------------
# House domain: state-dependent movement costs
# ----------------------------------------------------------------------

HOME = (0, 0)


def manhattan(a: tuple[int, int], b: tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass(frozen=True)
class HouseState:
    has_wood: bool = False
    has_axe: bool = False
    house_built: bool = False
    position: tuple[int, int] = HOME
    nearest_tree: tuple[int, int] = (1, 1)
    nearest_axe: tuple[int, int] = (2, 2)


class HouseAction(enum.Enum):
    CHOP_TREE = "chop_tree"
    GRAB_AXE = "grab_axe"
    BUILD_HOUSE = "build_house"
    GO_TO_TREE = "go_to_tree"
    GO_TO_AXE = "go_to_axe"
    GO_HOME = "go_home"

    def is_applicable(self, state: HouseState) -> bool:
        if self is HouseAction.CHOP_TREE:
            return state.has_axe and state.position == state.nearest_tree
        if self is HouseAction.GRAB_AXE:
            return not state.has_axe and state.position == state.nearest_axe
        if self is HouseAction.BUILD_HOUSE:
            return state.has_wood and state.position == HOME
        if self is HouseAction.GO_TO_TREE:
            return state.position != state.nearest_tree
        if self is HouseAction.GO_TO_AXE:
            return state.position != state.nearest_axe
        return state.position != HOME

    def apply(self, state: HouseState) -> HouseState:
        if self is HouseAction.CHOP_TREE:
            return replace(state, has_wood=True)
        if self is HouseAction.GRAB_AXE:
            return replace(state, has_axe=True)
        if self is HouseAction.BUILD_HOUSE:
            return replace(state, house_built=True)
        if self is HouseAction.GO_TO_TREE:
            return replace(state, position=state.nearest_tree)
        if self is HouseAction.GO_TO_AXE:
            return replace(state, position=state.nearest_axe)
        return replace(state, position=HOME)

    def cost(self, state: HouseState) -> int:
        if self is HouseAction.GO_TO_TREE:
            return manhattan(state.position, state.nearest_tree)
        if self is HouseAction.GO_TO_AXE:
            return manhattan(state.position, state.nearest_axe)
        if self is HouseAction.GO_HOME:
            return manhattan(state.position, HOME)
        return 1


class HouseBuilt(BaseGoal):
    def is_satisfied(self, state: HouseState) -> bool:
        return state.house_built


class HouseBuiltEstimated(HouseBuilt):
    """Same goal with an admissible heuristic: one unit per missing milestone."""

    def heuristic(self, state: HouseState) -> int:
        return sum(not flag for flag in (state.has_axe, state.has_wood, state.house_built))


# ----------------------------------------------------------------------
# Market domain: the same enum is both the action and the goal
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class MarketState:
    banana_sold: bool = False
    apple_sold: bool = False


class Sell(enum.Enum):
    APPLE = "apple"  # costs 4, priority 5
    BANANA = "banana"  # costs 1, priority 4

    def is_applicable(self, state: MarketState) -> bool:
        return not (state.apple_sold or state.banana_sold)

    def apply(self, state: MarketState) -> MarketState:
        if self is Sell.APPLE:
            return replace(state, apple_sold=True)
        return replace(state, banana_sold=True)

    def cost(self, state: MarketState) -> int:
        return 4 if self is Sell.APPLE else 1

    def is_satisfied(self, state: MarketState) -> bool:
        return state.apple_sold if self is Sell.APPLE else state.banana_sold

    def priority(self, state: MarketState) -> int:
        return 5 if self is Sell.APPLE else 4


# ----------------------------------------------------------------------
# Graph domain: string states, an admissible but inconsistent heuristic
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class Move(BaseAction):
    """Walk the edge ``source -> target``."""

    source: str
    target: str
    price: int

    def is_applicable(self, state: str) -> bool:
        return state == self.source

    def apply(self, state: str) -> str:
        return self.target

    def cost(self, state: str) -> int:
        return self.price


# S->A->B->G costs 5; S->B->G costs 6
DETOUR_GRAPH = [
    Move("S", "A", 1),
    Move("S", "B", 3),
    Move("A", "B", 1),
    Move("B", "G", 3),
]


class ReachG(BaseGoal):
    """Goal G with a heuristic that never overestimates but overrates A.

    h(A) = 4 exceeds cost(A->B) + h(B) = 1, so the heuristic is not consistent
    and B is first reached through the dearer direct edge.
    """

    ESTIMATES = {"S": 0, "A": 4, "B": 0, "G": 0}

    def is_satisfied(self, state: str) -> bool:
        return state == "G"

    def heuristic(self, state: str) -> int:
        return self.ESTIMATES[state]


# ----------------------------------------------------------------------
# Pantry domain: a registered state with tuple and frozenset fields
# ----------------------------------------------------------------------


@TypeRegistry.register_state("test_pantry")
@dataclass(frozen=True)
class Pantry:
    items: tuple[str, ...] = ()
    tags: frozenset[str] = frozenset()
    shelf: tuple[int, int] = (0, 0)


@TypeRegistry.register_action("test_stock")
@dataclass(frozen=True)
class Stock(BaseAction):
    item: str

    def is_applicable(self, state: Pantry) -> bool:
        return self.item not in state.items

    def apply(self, state: Pantry) -> Pantry:
        return replace(state, items=state.items + (self.item,), tags=state.tags | {self.item[0]})


@TypeRegistry.register_goal("test_stocked")
@dataclass(frozen=True)
class Stocked(BaseGoal):
    items: tuple[str, ...]

    def is_satisfied(self, state: Pantry) -> bool:
        return set(self.items) <= set(state.items)


# ----------------------------------------------------------------------
# Plan checking
# ----------------------------------------------------------------------


def execute(start, actions):
    """Apply ``actions`` in order, asserting each is applicable when reached."""
    state = start
    for action in actions:
        assert action.is_applicable(state), f"{action!r} not applicable in {state!r}"
        state = action.apply(state)
    return state


def brute_force_min_cost(start, actions, goal, max_depth: int) -> float | None:
    """Cheapest cost over every applicable action sequence up to ``max_depth``."""
    best = 0 if goal.is_satisfied(start) else None
    for depth in range(1, max_depth + 1):
        for sequence in itertools.product(actions, repeat=depth):
            state = start
            total = 0
            for action in sequence:
                if not action.is_applicable(state):
                    break
                total += action_cost(action, state)
                state = action.apply(state)
            else:
                if goal.is_satisfied(state) and (best is None or total < best):
                    best = total
    return best
