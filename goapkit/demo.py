"""Picnic domain: a small worked example of states, actions and goals.

An agent can pick flowers, set up a picnic and eat. Eating is urgent while
the agent is hungry; once fed, making a bouquet becomes the best goal.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

from goapkit.agent import Agent
from goapkit.config import PlannerConfig
from goapkit.registry import TypeRegistry

BOUQUET_SIZE = 5


@TypeRegistry.register_state("picnic_state")
@dataclass(frozen=True)
class PicnicState:
    """World state for the picnic domain."""

    flowers: int = 0
    hungry: bool = True
    picnic: bool = False


@TypeRegistry.register_action("picnic_action")
class PicnicAction(enum.Enum):
    """Actions available in the picnic domain (all unit cost)."""

    PICK_FLOWER = "pick_flower"
    SET_PICNIC = "set_picnic"
    EAT = "eat"

    def is_applicable(self, state: PicnicState) -> bool:
        if self is PicnicAction.PICK_FLOWER:
            return state.flowers < BOUQUET_SIZE
        if self is PicnicAction.SET_PICNIC:
            return not state.picnic
        return state.hungry and state.picnic

    def apply(self, state: PicnicState) -> PicnicState:
        if self is PicnicAction.PICK_FLOWER:
            return replace(state, flowers=state.flowers + 1)
        if self is PicnicAction.SET_PICNIC:
            return replace(state, picnic=True)
        return replace(state, hungry=False)

    def cost(self, state: PicnicState) -> int:
        return 1


@TypeRegistry.register_goal("picnic_goal")
class PicnicGoal(enum.Enum):
    """Goals of the picnic domain."""

    BOUQUET_MADE = "bouquet_made"
    EATEN = "eaten"

    def is_satisfied(self, state: PicnicState) -> bool:
        if self is PicnicGoal.BOUQUET_MADE:
            return state.flowers >= BOUQUET_SIZE
        return not state.hungry

    def priority(self, state: PicnicState) -> int:
        if self is PicnicGoal.BOUQUET_MADE:
            return 1
        # Irrelevant once fed
        return 2 if state.hungry else 0


def build_agent(hungry: bool = True, config: PlannerConfig | None = None) -> Agent:
    """Build a picnic agent starting with no flowers and no picnic set."""
    return Agent(
        state=PicnicState(flowers=0, hungry=hungry, picnic=False),
        actions=list(PicnicAction),
        goals=list(PicnicGoal),
        config=config,
    )
