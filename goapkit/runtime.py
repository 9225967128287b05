"""Tick-loop runtime embedding one planning agent per entity.

Each tick, every attached entity re-plans from its current state, commits
the first action of the winning plan and yields an EntityTickRecord.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from goapkit.config import PlannerConfig
from goapkit.errors import ValidationError
from goapkit.persistence.checkpoint import CheckpointManager

if TYPE_CHECKING:
    from goapkit.agent import Agent

logger = logging.getLogger(__name__)


@dataclass
class EntityTickRecord:
    """Record of one entity's planning step in a tick."""

    entity_id: str
    goal: Any | None  # None when no goal was feasible
    action: Any | None  # None when nothing was executed
    plan_cost: float | None
    plan_steps: int
    state_before: Any
    state_after: Any


@dataclass
class TickRecord:
    """Record of a single runtime tick."""

    tick: int
    entity_records: list[EntityTickRecord] = field(default_factory=list)
    elapsed_ms: float = 0.0

    @property
    def idle_entities(self) -> list[str]:
        """Entities that did not execute an action this tick."""
        return [r.entity_id for r in self.entity_records if r.action is None]


class PlanningRuntime:
    """Holds per-entity agents and advances them one action per tick.

    A lock per entity serialises planning and state commits, so a runtime
    may be stepped from one thread while another thread inspects or edits a
    single entity through :meth:`locked`.
    """

    def __init__(
        self,
        checkpoints: CheckpointManager | None = None,
        checkpoint_interval: int = 0,
        config: PlannerConfig | None = None,
    ):
        """Initialize the runtime.

        Args:
            checkpoints: Optional checkpoint manager for periodic saves
            checkpoint_interval: Ticks between checkpoints (0 = disabled)
            config: Used to build a checkpoint manager from
                ``checkpoint_dir``/``checkpoint_max`` when checkpointing is
                enabled but no manager is given
        """
        if checkpoints is None and checkpoint_interval > 0:
            checkpoints = CheckpointManager.from_config(config or PlannerConfig())
        self._agents: dict[str, Agent] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._checkpoints = checkpoints
        self._checkpoint_interval = checkpoint_interval
        self.tick = 0

    # ------------------------------------------------------------------
    # Entity management
    # ------------------------------------------------------------------

    def attach(self, entity_id: str, agent: Agent) -> None:
        """Attach a planning agent to an entity.

        Raises:
            ValidationError: if the entity already has an agent
        """
        if entity_id in self._agents:
            raise ValidationError(f"Entity '{entity_id}' already has an agent attached")
        self._agents[entity_id] = agent
        self._locks[entity_id] = threading.Lock()
        logger.debug(f"Attached agent to entity {entity_id}")

    def detach(self, entity_id: str) -> Agent | None:
        """Detach and return an entity's agent, or None if there was none."""
        self._locks.pop(entity_id, None)
        return self._agents.pop(entity_id, None)

    def get(self, entity_id: str) -> Agent | None:
        """Get the agent attached to an entity."""
        return self._agents.get(entity_id)

    def locked(self, entity_id: str) -> threading.Lock:
        """The lock guarding an entity's agent; hold it while editing the agent."""
        return self._locks[entity_id]

    @property
    def entity_ids(self) -> list[str]:
        """Attached entity ids in attach order."""
        return list(self._agents)

    # ------------------------------------------------------------------
    # Tick loop
    # ------------------------------------------------------------------

    def step(self) -> TickRecord:
        """Execute one tick for all attached entities, in attach order."""
        started = time.perf_counter()
        record = TickRecord(tick=self.tick)

        for entity_id in list(self._agents):
            with self._locks[entity_id]:
                record.entity_records.append(self._step_entity(entity_id))

        self.tick += 1
        record.elapsed_ms = (time.perf_counter() - started) * 1000

        if (
            self._checkpoints is not None
            and self._checkpoint_interval > 0
            and self.tick % self._checkpoint_interval == 0
        ):
            for entity_id, agent in self._agents.items():
                with self._locks[entity_id]:
                    self._checkpoints.save(agent, tick=self.tick, label=entity_id)

        return record

    def run(self, ticks: int) -> list[TickRecord]:
        """Run ``ticks`` consecutive ticks and return their records."""
        return [self.step() for _ in range(ticks)]

    def _step_entity(self, entity_id: str) -> EntityTickRecord:
        agent = self._agents[entity_id]
        state_before = agent.state
        result = agent.plan_dynamic()

        if result is None:
            logger.debug(f"Entity {entity_id}: no feasible goal at tick {self.tick}")
            return EntityTickRecord(
                entity_id=entity_id,
                goal=None,
                action=None,
                plan_cost=None,
                plan_steps=0,
                state_before=state_before,
                state_after=state_before,
            )

        action = result.first_action
        if action is not None:
            agent.step(action)

        return EntityTickRecord(
            entity_id=entity_id,
            goal=result.goal,
            action=action,
            plan_cost=result.cost,
            plan_steps=len(result),
            state_before=state_before,
            state_after=agent.state,
        )
