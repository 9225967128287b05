"""Agent: owns a current state, an action set and a goal set, and picks goals.

Dynamic planning ranks goals by ``priority(state)`` on every call, then runs
the search engine goal by goal until one is reachable.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import Any

from goapkit.config import PlannerConfig
from goapkit.contracts import Action, Goal, State, check_state, goal_priority
from goapkit.errors import PlanExecutionError
from goapkit.planning.monitor import PlanMonitor
from goapkit.planning.plan import Plan
from goapkit.planning.search import SearchEngine

logger = logging.getLogger(__name__)


class Agent:
    """A stateful planner choosing among several goals.

    The agent never mutates its state during a planning query. State only
    changes through :meth:`step`, :meth:`apply_plan` or direct assignment to
    :attr:`state`. One agent must not be used from two threads at once.

    Example::

        agent = Agent(state, [PickFlower, SetPicnic, Eat], [BouquetMade, Eaten])
        plan = agent.plan_dynamic()
        if plan is not None:
            agent.apply_plan(plan)
    """

    def __init__(
        self,
        state: State,
        actions: Iterable[Action],
        goals: Iterable[Goal],
        config: PlannerConfig | None = None,
    ):
        check_state(state)
        self.config = config or PlannerConfig()
        self._state = state
        self.actions = actions
        self.goals = goals
        self._engine = SearchEngine(
            max_expansions=self.config.max_expansions,
            validate_costs=self.config.validate_costs,
        )
        self.monitor: PlanMonitor | None = PlanMonitor() if self.config.record_stats else None

    # ------------------------------------------------------------------
    # Configuration access
    # ------------------------------------------------------------------

    @property
    def state(self) -> State:
        return self._state

    @state.setter
    def state(self, value: State) -> None:
        check_state(value)
        self._state = value

    @property
    def actions(self) -> list[Action]:
        return self._actions

    @actions.setter
    def actions(self, value: Iterable[Action]) -> None:
        self._actions = list(value)

    @property
    def goals(self) -> list[Goal]:
        return self._goals

    @goals.setter
    def goals(self, value: Iterable[Goal]) -> None:
        self._goals = list(value)

    # ------------------------------------------------------------------
    # Planning queries
    # ------------------------------------------------------------------

    def plan_for(self, goal: Goal) -> Plan | None:
        """Plan toward one goal from the current state, bypassing goal selection.

        Returns None if the goal is unreachable from the current state.
        """
        started = time.perf_counter()
        result = self._engine.search(self._state, self._actions, goal)
        elapsed_ms = (time.perf_counter() - started) * 1000

        if self.monitor is not None:
            self.monitor.record_search(goal, result, self._engine.last_stats, elapsed_ms)
        if result is None:
            return None
        return result.for_goal(goal)

    def ranked_goals(self) -> list[Goal]:
        """Goals by descending priority for the current state.

        Priorities are recomputed on every call. Equal priorities keep their
        configured order.
        """
        priorities = [goal_priority(goal, self._state) for goal in self._goals]
        order = sorted(range(len(self._goals)), key=lambda i: -priorities[i])
        return [self._goals[i] for i in order]

    def plan_dynamic(self) -> Plan | None:
        """Plan for the highest-priority goal that is currently reachable.

        Returns the plan tagged with the selected goal, or None if no goal
        can be reached from the current state.
        """
        ranked = self.ranked_goals()
        for skipped, goal in enumerate(ranked):
            result = self.plan_for(goal)
            if result is None:
                logger.debug(f"Goal {goal!r} unreachable, falling through")
                continue
            if self.monitor is not None:
                self.monitor.record_fallback(skipped)
            logger.info(
                f"Selected goal {goal!r} (rank {skipped + 1}/{len(ranked)}): "
                f"{len(result)} steps, cost {result.cost}"
            )
            return result

        if self.monitor is not None:
            self.monitor.record_no_feasible_goal()
        logger.info(f"No feasible goal among {len(ranked)} goals")
        return None

    def plan_constant(self) -> Plan | None:
        """Plan for the first reachable goal in configured order.

        Cheaper than :meth:`plan_dynamic` when priorities never depend on state
        and the goals are already listed most-urgent first.
        """
        for goal in self._goals:
            result = self.plan_for(goal)
            if result is not None:
                return result
        if self.monitor is not None:
            self.monitor.record_no_feasible_goal()
        return None

    def plan_all(self) -> list[Plan]:
        """Plan for every goal; unreachable goals are left out.

        Plans are returned in configured goal order.
        """
        plans = []
        for goal in self._goals:
            result = self.plan_for(goal)
            if result is not None:
                plans.append(result)
        return plans

    def plan_profit(self) -> Plan | None:
        """Return the reachable plan maximising ``priority - cost``.

        Ties go to the goal configured first.
        """
        best: Plan | None = None
        best_profit = 0.0
        for result in self.plan_all():
            profit = goal_priority(result.goal, self._state) - result.cost
            # strict > keeps the earliest goal on a tie, where a max-by-key
            # scan over the same order would keep the last one
            if best is None or profit > best_profit:
                best = result
                best_profit = profit
        return best

    # ------------------------------------------------------------------
    # State mutation
    # ------------------------------------------------------------------

    def step(self, action: Action) -> State:
        """Apply one action to the current state and return the new state.

        Raises:
            PlanExecutionError: if the action is not applicable
        """
        if not action.is_applicable(self._state):
            raise PlanExecutionError(0, action)
        self.state = action.apply(self._state)
        if self.monitor is not None:
            self.monitor.record_commit(1)
        return self._state

    def apply_plan(self, plan: Plan | Iterable[Any], steps: int | None = None) -> State:
        """Commit a plan (or its first ``steps`` actions) to the current state.

        All steps are checked before anything is committed: if one is not
        applicable when reached, PlanExecutionError is raised and the
        agent's state is left untouched.

        Returns:
            The new current state
        """
        actions = list(plan.actions if isinstance(plan, Plan) else plan)
        if steps is not None:
            actions = actions[:steps]

        state = self._state
        for index, action in enumerate(actions):
            if not action.is_applicable(state):
                raise PlanExecutionError(index, action)
            state = action.apply(state)

        self.state = state
        if self.monitor is not None:
            self.monitor.record_commit(len(actions))
        logger.info(f"Committed {len(actions)} plan steps")
        return self._state

    def __repr__(self) -> str:
        return (
            f"Agent(state={self._state!r}, actions={len(self._actions)}, "
            f"goals={len(self._goals)})"
        )
