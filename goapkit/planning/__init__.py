"""Goal-oriented action planning engine.

This package implements:
- Best-first (uniform-cost / A*) search from a start state to one goal
- Immutable plans with total cost and search statistics
- Monitoring of planning outcomes across calls
"""

from __future__ import annotations

from goapkit.planning.monitor import PlanMonitor
from goapkit.planning.plan import Plan, SearchStats
from goapkit.planning.search import SearchEngine, find_plan

__all__ = [
    "Plan",
    "SearchStats",
    "SearchEngine",
    "PlanMonitor",
    "find_plan",
]
