"""Agent serialization: convert an Agent to/from a JSON-compatible dict.

States, actions and goals are written as ``{"type": name, "data": ...}``
where ``name`` comes from :class:`~goapkit.registry.TypeRegistry`. Builtin
hashable states need no registration. Tuples and frozensets go through JSON
as lists and are rebuilt from the dataclass field annotations on load.
"""

from __future__ import annotations

import dataclasses
import enum
import typing
from datetime import UTC, datetime
from typing import Any

from goapkit.errors import RegistryError, SerializationError
from goapkit.registry import TypeRegistry

BUILTIN_PREFIX = "builtin:"

# hashable builtins usable as states without registration
BUILTIN_STATE_TYPES: dict[str, type] = {
    t.__name__: t for t in (bool, int, float, str, tuple, frozenset)
}


class AgentSerializer:
    """Serialize and deserialize an agent's state, actions, goals and config."""

    SCHEMA_VERSION = 1

    def serialize(self, agent) -> dict:
        """Serialize an agent to a dict.

        Args:
            agent: The agent to serialize

        Returns:
            Dictionary containing everything needed to rebuild the agent
        """
        return {
            "schema_version": self.SCHEMA_VERSION,
            "timestamp": datetime.now(UTC).isoformat(),
            "config": agent.config.model_dump(),
            "state": self.encode("state", agent.state),
            "actions": [self.encode("action", action) for action in agent.actions],
            "goals": [self.encode("goal", goal) for goal in agent.goals],
        }

    def deserialize(self, data: dict, config_override: dict | None = None):
        """Reconstruct an agent from serialized data.

        Args:
            data: Serialized agent dictionary
            config_override: Optional config fields to override

        Returns:
            Reconstructed Agent with the same planning behaviour
        """
        from goapkit.agent import Agent
        from goapkit.config import PlannerConfig

        if not isinstance(data, dict):
            raise SerializationError(f"Serialized agent must be a dict, got {type(data).__name__}")

        version = data.get("schema_version", 1)
        if version > self.SCHEMA_VERSION:
            raise SerializationError(
                f"Unsupported schema version {version} (max {self.SCHEMA_VERSION})"
            )

        missing = [key for key in ("state", "actions", "goals") if key not in data]
        if missing:
            raise SerializationError(f"Serialized agent is missing {', '.join(missing)}")

        config_dict = dict(data.get("config", {}))
        if config_override:
            config_dict.update(config_override)
        config = PlannerConfig(**config_dict)

        return Agent(
            state=self.decode("state", data["state"]),
            actions=[self.decode("action", item) for item in data["actions"]],
            goals=[self.decode("goal", item) for item in data["goals"]],
            config=config,
        )

    # ------------------------------------------------------------------
    # Value codecs
    # ------------------------------------------------------------------

    def encode(self, kind: str, obj: Any) -> dict:
        """Encode one registered state/action/goal value.

        Builtin hashable states (int, str, tuple, frozenset, ...) need no
        registration and are tagged ``builtin:<type>``.
        """
        if kind == "state" and type(obj) in BUILTIN_STATE_TYPES.values():
            return {"type": f"{BUILTIN_PREFIX}{type(obj).__name__}", "data": _to_json(obj)}

        try:
            name = TypeRegistry.name_of(kind, obj)
        except RegistryError as e:
            raise SerializationError(str(e)) from e

        if hasattr(obj, "to_dict"):
            payload = obj.to_dict()
        elif isinstance(obj, enum.Enum):
            payload = obj.value
        elif dataclasses.is_dataclass(obj):
            payload = {f.name: _to_json(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
        else:
            raise SerializationError(
                f"Don't know how to encode {type(obj).__name__}: "
                "use an enum, a dataclass, or define to_dict/from_dict"
            )
        return {"type": name, "data": payload}

    def decode(self, kind: str, item: dict) -> Any:
        """Decode one value written by :meth:`encode`."""
        if kind == "state" and isinstance(item, dict):
            type_name = item.get("type")
            if isinstance(type_name, str) and type_name.startswith(BUILTIN_PREFIX):
                return _decode_builtin(type_name, item.get("data"))

        try:
            type_ = TypeRegistry.get(kind, item["type"])
        except (RegistryError, KeyError, TypeError) as e:
            raise SerializationError(f"Cannot resolve {kind} type from {item!r}: {e}") from e

        payload = item.get("data")
        try:
            if hasattr(type_, "from_dict"):
                return type_.from_dict(payload)
            if issubclass(type_, enum.Enum):
                return type_(payload)
            if dataclasses.is_dataclass(type_):
                hints = typing.get_type_hints(type_)
                return type_(
                    **{
                        key: _from_json(value, hints.get(key, Any))
                        for key, value in payload.items()
                    }
                )
        except (TypeError, ValueError, AttributeError, NameError) as e:
            raise SerializationError(f"Failed to decode {kind} '{item['type']}': {e}") from e

        raise SerializationError(f"Don't know how to decode {type_.__name__}")


def _to_json(value: Any) -> Any:
    """Convert tuples and frozensets to JSON lists, recursively."""
    if isinstance(value, (tuple, list, frozenset, set)):
        return [_to_json(v) for v in value]
    return value


def _from_json(value: Any, hint: Any) -> Any:
    """Rebuild a field value from JSON using its type annotation.

    JSON has no tuples or sets: lists come back as tuples unless the
    annotation asks for a list or a (frozen)set.
    """
    if not isinstance(value, list):
        return value

    origin = typing.get_origin(hint) or hint
    args = typing.get_args(hint)

    if origin is list:
        inner = args[0] if args else Any
        return [_from_json(v, inner) for v in value]
    if origin in (frozenset, set):
        inner = args[0] if args else Any
        return origin(_from_json(v, inner) for v in value)
    if origin is tuple and args and args[-1] is not Ellipsis:
        return tuple(_from_json(v, a) for v, a in zip(value, args))
    inner = args[0] if origin is tuple and args else Any
    return tuple(_from_json(v, inner) for v in value)


def _decode_builtin(type_name: str, payload: Any) -> Any:
    type_ = BUILTIN_STATE_TYPES.get(type_name[len(BUILTIN_PREFIX):])
    if type_ is None:
        raise SerializationError(f"Unknown builtin state type '{type_name}'")
    if type_ in (tuple, frozenset):
        if not isinstance(payload, list):
            raise SerializationError(f"Builtin {type_name} state must be a list, got {payload!r}")
        return type_(_from_json(v, Any) for v in payload)
    if type_ is float and isinstance(payload, int) and not isinstance(payload, bool):
        return float(payload)
    if not isinstance(payload, type_) or (type_ is int and isinstance(payload, bool)):
        raise SerializationError(f"Builtin {type_name} state has bad payload {payload!r}")
    return payload
