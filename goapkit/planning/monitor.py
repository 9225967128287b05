"""Planning outcome monitoring and metrics tracking."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from goapkit.planning.plan import Plan, SearchStats


class PlanMonitor:
    """Tracks per-goal search outcomes and agent-level planning counters."""

    def __init__(self, history_max: int = 500):
        self._history: list[dict] = []
        self._history_max = history_max
        self._plans_found: int = 0
        self._no_plan_count: int = 0
        self._no_feasible_goal_count: int = 0
        self._fallback_count: int = 0
        self._commit_count: int = 0
        self._committed_steps: int = 0
        self._total_ms: float = 0.0

    def record_search(
        self,
        goal: Any,
        plan: Plan | None,
        stats: SearchStats,
        elapsed_ms: float,
    ) -> None:
        """Record the outcome of one single-goal search."""
        self._history.append(
            {
                "goal": repr(goal),
                "found": plan is not None,
                "cost": plan.cost if plan is not None else None,
                "plan_steps": len(plan) if plan is not None else None,
                "expansions": stats.expansions,
                "truncated": stats.truncated,
                "elapsed_ms": elapsed_ms,
            }
        )
        if len(self._history) > self._history_max:
            del self._history[0]

        self._total_ms += elapsed_ms
        if plan is not None:
            self._plans_found += 1
        else:
            self._no_plan_count += 1

    def record_fallback(self, skipped_goals: int) -> None:
        """Record that a lower-ranked goal won because higher ones were unreachable."""
        if skipped_goals > 0:
            self._fallback_count += 1

    def record_no_feasible_goal(self) -> None:
        """Record a dynamic planning cycle where no goal was reachable."""
        self._no_feasible_goal_count += 1

    def record_commit(self, steps: int) -> None:
        """Record that ``steps`` plan steps were committed to the agent state."""
        self._commit_count += 1
        self._committed_steps += steps

    @property
    def history(self) -> list[dict]:
        """Most recent search records, oldest first."""
        return list(self._history)

    @property
    def planning_stats(self) -> dict:
        """Summary stats for reporting."""
        searches = self._plans_found + self._no_plan_count
        success_rate = self._plans_found / searches if searches > 0 else 0.0

        return {
            "searches": searches,
            "plans_found": self._plans_found,
            "no_plan_count": self._no_plan_count,
            "no_feasible_goal_count": self._no_feasible_goal_count,
            "fallback_count": self._fallback_count,
            "commit_count": self._commit_count,
            "committed_steps": self._committed_steps,
            "success_rate": success_rate,
            "total_ms": self._total_ms,
        }

    def reset(self) -> None:
        """Clear all records and counters."""
        self._history.clear()
        self._plans_found = 0
        self._no_plan_count = 0
        self._no_feasible_goal_count = 0
        self._fallback_count = 0
        self._commit_count = 0
        self._committed_steps = 0
        self._total_ms = 0.0
