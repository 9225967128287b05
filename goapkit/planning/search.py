"""Best-first search over the implicit state graph.

Nodes are states, edges are applicable actions weighted by their cost. With a
zero heuristic this is uniform-cost (Dijkstra) search; a goal that supplies an
admissible ``heuristic`` turns it into A* without changing the result cost.
States are reopened whenever a cheaper path to them turns up, so a heuristic
need only be admissible, not consistent.
"""

from __future__ import annotations

import heapq
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from goapkit.contracts import (
    Action,
    Goal,
    State,
    action_cost,
    check_state,
    goal_heuristic,
)
from goapkit.errors import NegativeCostError
from goapkit.planning.plan import Plan, SearchStats

logger = logging.getLogger(__name__)


@dataclass
class _Node:
    """Arena entry: a state plus the edge that reached it."""

    state: State
    cost: float
    parent: int | None  # arena index of the predecessor
    action: Any  # action taken from the predecessor


class SearchEngine:
    """Finds the cheapest action sequence from a start state to a goal.

    One engine may be reused for many calls; every call builds its own node
    arena, frontier and best-cost table, so nothing is shared between calls.
    ``last_stats`` holds the statistics of the most recent call, including
    failed ones.

    With ``validate_costs=False`` a negative-cost cycle keeps improving the
    same states; set ``max_expansions`` to bound such searches.
    """

    def __init__(self, max_expansions: int | None = None, validate_costs: bool = True):
        self.max_expansions = max_expansions
        self.validate_costs = validate_costs
        self.last_stats = SearchStats()

    def search(self, start: State, actions: Sequence[Action], goal: Goal) -> Plan | None:
        """Return the cheapest plan from ``start`` to a state satisfying ``goal``.

        Args:
            start: Initial state (must be hashable)
            actions: Candidate actions, expanded in this order
            goal: Goal to satisfy

        Returns:
            Plan with actions in execution order and its total cost, or None
            if the frontier was exhausted (or the expansion cap was hit)
            without reaching the goal.
        """
        check_state(start)

        nodes: list[_Node] = [_Node(state=start, cost=0, parent=None, action=None)]
        # (priority, insertion order, arena index); order makes ties FIFO
        frontier: list[tuple[float, int, int]] = [(goal_heuristic(goal, start), 0, 0)]
        # cheapest known cost per state; a cheaper path reopens the state
        best_cost: dict[State, float] = {start: 0}
        order = 1
        expansions = 0
        truncated = False

        while frontier:
            _, _, index = heapq.heappop(frontier)
            node = nodes[index]

            if node.cost > best_cost[node.state]:
                continue  # superseded by a cheaper path pushed later

            if goal.is_satisfied(node.state):
                self.last_stats = SearchStats(
                    expansions=expansions, generated=len(nodes) - 1, truncated=False
                )
                plan = Plan(
                    actions=self._reconstruct(nodes, index),
                    cost=node.cost,
                    stats=self.last_stats,
                )
                logger.debug(
                    f"Plan found for {goal!r}: {len(plan)} steps, cost {plan.cost}, "
                    f"{expansions} expansions"
                )
                return plan

            if self.max_expansions is not None and expansions >= self.max_expansions:
                truncated = True
                logger.warning(
                    f"Search for {goal!r} stopped after {expansions} expansions "
                    f"(max_expansions={self.max_expansions})"
                )
                break

            expansions += 1

            for action in actions:
                if not action.is_applicable(node.state):
                    continue
                step_cost = action_cost(action, node.state)
                if self.validate_costs and step_cost < 0:
                    raise NegativeCostError(action, step_cost)

                child_state = action.apply(node.state)
                child_cost = node.cost + step_cost
                known = best_cost.get(child_state)
                if known is not None and child_cost >= known:
                    continue
                best_cost[child_state] = child_cost
                nodes.append(
                    _Node(state=child_state, cost=child_cost, parent=index, action=action)
                )
                heapq.heappush(
                    frontier,
                    (child_cost + goal_heuristic(goal, child_state), order, len(nodes) - 1),
                )
                order += 1

        self.last_stats = SearchStats(
            expansions=expansions, generated=len(nodes) - 1, truncated=truncated
        )
        logger.debug(f"No plan for {goal!r} after {expansions} expansions")
        return None

    @staticmethod
    def _reconstruct(nodes: list[_Node], index: int) -> tuple[Any, ...]:
        """Walk back-pointers from ``index`` to the root and reverse."""
        steps = []
        current: int | None = index
        while current is not None:
            node = nodes[current]
            if node.parent is not None:
                steps.append(node.action)
            current = node.parent
        steps.reverse()
        return tuple(steps)


def find_plan(
    start: State,
    actions: Sequence[Action],
    goal: Goal,
    max_expansions: int | None = None,
    validate_costs: bool = True,
) -> Plan | None:
    """Plan toward a single goal with a throwaway engine.

    Returns None when no plan exists within the explored space.
    """
    engine = SearchEngine(max_expansions=max_expansions, validate_costs=validate_costs)
    return engine.search(start, actions, goal)
