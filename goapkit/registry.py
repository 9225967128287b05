"""Central registry of the state, action and goal types an agent can persist.

Uses a class-level registry pattern for global access without singleton
instantiation. Registration only matters for serialization; planning itself
never consults the registry.
"""

from __future__ import annotations

import logging

from goapkit.errors import RegistryError

logger = logging.getLogger(__name__)

KINDS = ("state", "action", "goal")


class TypeRegistry:
    """Maps stable names to the types used in agent checkpoints.

    Class-level registries: all methods are classmethods for global access.
    """

    _types: dict[str, dict[str, type]] = {kind: {} for kind in KINDS}

    @classmethod
    def _register(cls, kind: str, name: str):
        def decorator(type_: type) -> type:
            registered = cls._types[kind]
            if name in registered and registered[name] is not type_:
                logger.warning(f"{kind.capitalize()} type '{name}' already registered, overriding")
            registered[name] = type_
            logger.debug(f"Registered {kind} type: {name}")
            return type_

        return decorator

    @classmethod
    def register_state(cls, name: str):
        """Decorator to register a state type.

        Usage:
            @TypeRegistry.register_state("picnic_state")
            @dataclass(frozen=True)
            class PicnicState: ...
        """
        return cls._register("state", name)

    @classmethod
    def register_action(cls, name: str):
        """Decorator to register an action type (class or enum)."""
        return cls._register("action", name)

    @classmethod
    def register_goal(cls, name: str):
        """Decorator to register a goal type (class or enum)."""
        return cls._register("goal", name)

    @classmethod
    def get(cls, kind: str, name: str) -> type:
        """Get a registered type by kind and name.

        Raises:
            RegistryError: if nothing is registered under that name
        """
        try:
            return cls._types[kind][name]
        except KeyError:
            raise RegistryError(f"No {kind} type registered as '{name}'") from None

    @classmethod
    def name_of(cls, kind: str, obj: object) -> str:
        """Reverse lookup: the registered name of ``obj``'s type.

        Raises:
            RegistryError: if the type was never registered
        """
        for name, type_ in cls._types[kind].items():
            if type(obj) is type_:
                return name
        raise RegistryError(f"{kind.capitalize()} type {type(obj).__name__} is not registered")

    @classmethod
    def all_types(cls, kind: str) -> dict[str, type]:
        """Get all registered types of one kind."""
        return dict(cls._types[kind])

    @classmethod
    def unregister(cls, kind: str, name: str) -> None:
        """Remove one registration if present."""
        cls._types[kind].pop(name, None)
