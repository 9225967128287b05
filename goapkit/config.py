"""Configuration settings for goapkit planners.

Uses Pydantic Settings for validation and environment variable support.
All settings can be overridden via GOAPKIT_* environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class PlannerConfig(BaseSettings):
    """Settings shared by the search engine, agents and checkpointing."""

    # Search
    max_expansions: int | None = Field(default=None, ge=1)  # None = unbounded
    validate_costs: bool = True  # raise on negative action costs

    # Agent
    record_stats: bool = True

    # Checkpointing
    checkpoint_dir: str = "data/checkpoints"
    checkpoint_max: int = Field(default=10, ge=1)

    # Logging
    log_level: str = "WARNING"

    model_config = {"env_prefix": "GOAPKIT_"}
