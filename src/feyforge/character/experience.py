"""Experience points and XP-driven levelling (PHB advancement table)."""

from __future__ import annotations

import logging

from pydantic import BaseModel

from ..exceptions import CharacterStateError
from .constants import MAX_LEVEL, MIN_LEVEL, XP_THRESHOLDS, clamp_level
from .models import Character

logger = logging.getLogger("feyforge")


class XPProgress(BaseModel):
    """Progress through the current level."""
    current: int
    to_next: int
    percentage: int


class ExperienceResult(BaseModel):
    """Outcome of an XP award."""
    new_level: int
    levels_gained: list[int]


def get_level_from_xp(xp: int) -> int:
    """Highest level whose XP threshold has been reached."""
    level = MIN_LEVEL
    for lvl in range(MIN_LEVEL, MAX_LEVEL + 1):
        if xp >= XP_THRESHOLDS[lvl]:
            level = lvl
        else:
            break
    return level


def get_xp_for_level(level: int) -> int:
    """Minimum XP for a level (clamped to 1-20)."""
    return XP_THRESHOLDS[clamp_level(level)]


def get_xp_to_next_level(xp: int) -> int:
    """XP still needed for the next level; 0 once level 20 is reached."""
    level = get_level_from_xp(xp)
    if level >= MAX_LEVEL:
        return 0
    return XP_THRESHOLDS[level + 1] - xp


def get_levels_gained(current_xp: int, xp_gained: int) -> list[int]:
    """Levels newly reached by adding ``xp_gained`` to ``current_xp``.

    >>> get_levels_gained(0, 1000)
    [2, 3]
    """
    old_level = get_level_from_xp(current_xp)
    new_level = get_level_from_xp(current_xp + xp_gained)
    return list(range(old_level + 1, new_level + 1))


def get_xp_progress(xp: int) -> XPProgress:
    """Progress through the current level as a floored percentage."""
    level = get_level_from_xp(xp)
    current_level_xp = XP_THRESHOLDS[level]
    next_level_xp = XP_THRESHOLDS.get(level + 1, current_level_xp)

    xp_needed = next_level_xp - current_level_xp
    xp_in_level = xp - current_level_xp
    percentage = (xp_in_level * 100) // xp_needed if xp_needed > 0 else 100

    return XPProgress(current=xp, to_next=get_xp_to_next_level(xp), percentage=percentage)


def add_experience(character: Character, xp: int) -> ExperienceResult:
    """Award XP and update the character's level (modified in-place).

    Raises:
        CharacterStateError: If ``xp`` is negative.
    """
    if xp < 0:
        raise CharacterStateError(
            f"Cannot award negative experience ({xp})",
            character_id=character.id,
        )

    levels_gained = get_levels_gained(character.experience_points, xp)
    character.experience_points += xp
    character.level = get_level_from_xp(character.experience_points)

    if levels_gained:
        logger.info(
            f"⬆️ '{character.name}' reached level {character.level} "
            f"({character.experience_points} XP)"
        )
    return ExperienceResult(new_level=character.level, levels_gained=levels_gained)


def set_level(character: Character, level: int) -> None:
    """Set the level directly (clamped to 1-20) and snap XP to its threshold."""
    level = clamp_level(level)
    character.level = level
    character.experience_points = get_xp_for_level(level)
    logger.debug(f"'{character.name}' set to level {level}")


__all__ = [
    "XPProgress",
    "ExperienceResult",
    "get_level_from_xp",
    "get_xp_for_level",
    "get_xp_to_next_level",
    "get_levels_gained",
    "get_xp_progress",
    "add_experience",
    "set_level",
]
