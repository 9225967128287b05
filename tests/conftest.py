"""Shared test fixtures for the goapkit test suite."""

from __future__ import annotations

import pytest

from goapkit.agent import Agent
from goapkit.config import PlannerConfig
from goapkit.demo import PicnicAction, PicnicGoal, PicnicState, build_agent
from tests.helpers import HouseAction, HouseState, Increment


@pytest.fixture
def config() -> PlannerConfig:
    """Default config with stats recording on."""
    return PlannerConfig(record_stats=True)


@pytest.fixture
def picnic_agent(config: PlannerConfig) -> Agent:
    """Hungry picnic agent with no flowers and no picnic set."""
    return build_agent(hungry=True, config=config)


@pytest.fixture
def picnic_state() -> PicnicState:
    return PicnicState(flowers=0, hungry=True, picnic=False)


@pytest.fixture
def picnic_actions() -> list[PicnicAction]:
    return [PicnicAction.PICK_FLOWER, PicnicAction.SET_PICNIC, PicnicAction.EAT]


@pytest.fixture
def picnic_goals() -> list[PicnicGoal]:
    return [PicnicGoal.BOUQUET_MADE, PicnicGoal.EATEN]


@pytest.fixture
def increments() -> list[Increment]:
    """+1 for 1, +3 for 2, +5 for 10."""
    return [Increment(step=1, price=1), Increment(step=3, price=2), Increment(step=5, price=10)]


@pytest.fixture
def house_state() -> HouseState:
    return HouseState()


@pytest.fixture
def house_actions() -> list[HouseAction]:
    return [
        HouseAction.CHOP_TREE,
        HouseAction.GRAB_AXE,
        HouseAction.BUILD_HOUSE,
        HouseAction.GO_TO_TREE,
        HouseAction.GO_TO_AXE,
        HouseAction.GO_HOME,
    ]
