"""Checkpoint management: save, load, list and prune agent checkpoints.

Provides atomic writes and automatic pruning of old checkpoint files.
"""

from __future__ import annotations

import json
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from goapkit.errors import SerializationError
from goapkit.persistence.serializer import AgentSerializer

if TYPE_CHECKING:
    from goapkit.agent import Agent
    from goapkit.config import PlannerConfig


class CheckpointManager:
    """Manages checkpoint lifecycle: save, load, list, prune."""

    def __init__(self, checkpoint_dir: str = "data/checkpoints", max_checkpoints: int = 10):
        """Initialize checkpoint manager.

        Args:
            checkpoint_dir: Directory to store checkpoints
            max_checkpoints: Maximum number of checkpoints to keep
        """
        self._dir = Path(checkpoint_dir)
        self._max = max_checkpoints
        self._serializer = AgentSerializer()

        self._dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_config(cls, config: PlannerConfig) -> CheckpointManager:
        """Build a manager for ``config.checkpoint_dir`` keeping ``config.checkpoint_max`` files."""
        return cls(checkpoint_dir=config.checkpoint_dir, max_checkpoints=config.checkpoint_max)

    def save(self, agent: Agent, tick: int = 0, label: str = "") -> str:
        """Save checkpoint with atomic write, then prune old ones.

        Args:
            agent: Agent to save
            tick: Host-loop tick the checkpoint belongs to
            label: Optional label for the checkpoint

        Returns:
            Path to saved checkpoint file
        """
        data = self._serializer.serialize(agent)

        # Filename: {tick:06d}_{label}_{date}_{time}.json
        timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S%f")
        label_part = f"{label}_" if label else ""
        filename = f"{tick:06d}_{label_part}{timestamp}.json"
        filepath = self._dir / filename

        temp_path = self._dir / f".{filename}.tmp"
        try:
            with open(temp_path, "w") as f:
                json.dump(data, f, indent=2)
            os.replace(temp_path, filepath)
        finally:
            if temp_path.exists():
                temp_path.unlink()

        self._prune_old()
        return str(filepath)

    def load(self, path: str, config_override: dict | None = None) -> Agent:
        """Load an agent from a checkpoint file."""
        return load_agent(path, config_override)

    def list_checkpoints(self) -> list[dict]:
        """List available checkpoints with metadata, oldest first.

        Returns:
            List of checkpoint metadata dicts with keys:
            - path: str
            - tick: int
            - timestamp: str
            - label: str
        """
        checkpoints = []

        for filepath in self._dir.glob("*.json"):
            if filepath.name.startswith("."):
                continue

            tick_part, _, rest = filepath.stem.partition("_")
            parts = rest.rsplit("_", 2)
            try:
                tick = int(tick_part)
            except ValueError:
                continue
            if len(parts) == 3:
                label, date, time_ = parts
            elif len(parts) == 2:
                label = ""
                date, time_ = parts
            else:
                continue

            checkpoints.append(
                {
                    "path": str(filepath),
                    "tick": tick,
                    "timestamp": f"{date}_{time_}",
                    "label": label,
                }
            )

        checkpoints.sort(key=lambda c: (c["tick"], c["timestamp"]))
        return checkpoints

    def latest_checkpoint(self) -> str | None:
        """Get path to most recent checkpoint, or None if there are none."""
        checkpoints = self.list_checkpoints()
        if not checkpoints:
            return None
        checkpoint_path: str = checkpoints[-1]["path"]
        return checkpoint_path

    def _prune_old(self) -> None:
        """Remove oldest checkpoints beyond max_checkpoints."""
        checkpoints = self.list_checkpoints()
        if len(checkpoints) <= self._max:
            return

        for checkpoint in checkpoints[: len(checkpoints) - self._max]:
            Path(checkpoint["path"]).unlink()


def load_agent(path: str, config_override: dict | None = None) -> Agent:
    """Load an agent from a checkpoint file without managing a directory.

    Raises:
        SerializationError: if the file is not valid JSON or not an agent
    """
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Checkpoint {path} is not valid JSON: {e}") from e

    return AgentSerializer().deserialize(data, config_override)
