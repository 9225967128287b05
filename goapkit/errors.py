"""Structured error hierarchy for goapkit.

Planning failures (no plan, no feasible goal) are not errors: they are
returned as ``None`` from the planning calls.
"""


class GoapError(Exception):
    """Base for all goapkit errors."""

    pass


class ValidationError(GoapError):
    """Input validation at boundary failed."""

    pass


class NegativeCostError(ValidationError):
    """An action reported a negative cost."""

    def __init__(self, action: object, cost: float):
        self.action = action
        self.cost = cost
        super().__init__(f"Action {action!r} reported negative cost {cost}")


class InvalidStateError(ValidationError):
    """State cannot be used as a search node (not hashable)."""

    pass


class PlanExecutionError(GoapError):
    """Committing a plan hit an action that is not applicable."""

    def __init__(self, step: int, action: object):
        self.step = step
        self.action = action
        super().__init__(f"Action {action!r} at step {step} is not applicable")


class SerializationError(GoapError):
    """Agent serialization/deserialization failed."""

    pass


class RegistryError(GoapError):
    """Lookup of an unregistered type name."""

    pass
