"""Persistence package: save/load agents.

Provides serialization and checkpoint management.
"""

from goapkit.persistence.checkpoint import CheckpointManager, load_agent
from goapkit.persistence.serializer import AgentSerializer

__all__ = ["AgentSerializer", "CheckpointManager", "load_agent"]
