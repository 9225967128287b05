"""goapkit: goal-oriented action planning.

Plans minimal-cost action sequences from a current state to the most urgent
goal that is currently reachable. Callers supply the state type, the actions
and the goals; the planner only relies on state equality and hashing.
"""

from __future__ import annotations

from goapkit.agent import Agent
from goapkit.config import PlannerConfig
from goapkit.contracts import Action, BaseAction, BaseGoal, Goal
from goapkit.errors import (
    GoapError,
    InvalidStateError,
    NegativeCostError,
    PlanExecutionError,
    RegistryError,
    SerializationError,
    ValidationError,
)
from goapkit.planning import Plan, PlanMonitor, SearchEngine, SearchStats, find_plan
from goapkit.registry import TypeRegistry

__version__ = "0.1.0"

__all__ = [
    "Action",
    "Agent",
    "BaseAction",
    "BaseGoal",
    "Goal",
    "GoapError",
    "InvalidStateError",
    "NegativeCostError",
    "Plan",
    "PlanExecutionError",
    "PlanMonitor",
    "PlannerConfig",
    "RegistryError",
    "SearchEngine",
    "SearchStats",
    "SerializationError",
    "TypeRegistry",
    "ValidationError",
    "find_plan",
]
