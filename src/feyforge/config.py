"""
Rules configuration for the character engine.

Defaults follow the Player's Handbook. Tables that want house rules can
override them through ``FEYFORGE_*`` environment variables (optionally from a
``.env`` file) or by passing a ``RulesConfig`` directly to the calculators.
"""

import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError

logger = logging.getLogger("feyforge")

ENV_PREFIX = "FEYFORGE_"


class RulesConfig(BaseModel):
    """House-rule knobs consumed by the stat calculators."""

    unarmored_base_ac: int = Field(
        default=10,
        description="Armor class of a character wearing no body armor, before DEX"
    )
    medium_armor_dex_cap: int = Field(
        default=2,
        ge=0,
        description="Maximum DEX modifier added to medium armor"
    )
    default_speed: int = Field(
        default=30,
        ge=0,
        description="Walking speed used when the character has none set"
    )
    carrying_capacity_multiplier: int = Field(
        default=15,
        ge=0,
        description="Pounds carried per point of Strength score"
    )
    passive_advantage_bonus: int = Field(
        default=5,
        ge=0,
        description="Bonus (or penalty) to passive scores from advantage (or disadvantage)"
    )
    armor_selection: Literal["first", "highest"] = Field(
        default="first",
        description=(
            "Which body armor counts when several are equipped: the first in "
            "property order, or the one with the highest base AC"
        )
    )

    model_config = {"frozen": True}

    @field_validator("armor_selection", mode="before")
    @classmethod
    def _normalize_selection(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v


DEFAULT_RULES = RulesConfig()


def load_rules_config(env_file: str | Path | None = None) -> RulesConfig:
    """Build a RulesConfig from ``FEYFORGE_*`` environment variables.

    Args:
        env_file: Optional path to a ``.env`` file. When omitted, python-dotenv
            searches upwards from the working directory.

    Returns:
        A RulesConfig with every unset variable left at its default.

    Raises:
        ConfigError: If a variable holds a value the model rejects.
    """
    if env_file is not None:
        if not load_dotenv(env_file):
            logger.warning(f"⚠️ Rules env file not found or empty: {env_file}")
    else:
        load_dotenv(find_dotenv(usecwd=True))

    overrides: dict[str, str] = {}
    for name in RulesConfig.model_fields:
        raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw.strip() != "":
            overrides[name] = raw

    if overrides:
        logger.debug(f"⚙️ Rules overrides from environment: {sorted(overrides)}")

    try:
        return RulesConfig(**overrides)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid rules configuration: {e.error_count()} bad value(s)",
            details={"errors": e.errors(include_url=False), "overrides": overrides},
        ) from e


__all__ = [
    "RulesConfig",
    "DEFAULT_RULES",
    "ENV_PREFIX",
    "load_rules_config",
]
