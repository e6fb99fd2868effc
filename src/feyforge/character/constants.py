"""
Fixed D&D 5e rules tables used by the character engine.

Nothing in this module is mutated at runtime.
"""

from typing import Literal

Ability = Literal[
    "strength",
    "dexterity",
    "constitution",
    "intelligence",
    "wisdom",
    "charisma",
]

Skill = Literal[
    "acrobatics",
    "animalHandling",
    "arcana",
    "athletics",
    "deception",
    "history",
    "insight",
    "intimidation",
    "investigation",
    "medicine",
    "nature",
    "perception",
    "performance",
    "persuasion",
    "religion",
    "sleightOfHand",
    "stealth",
    "survival",
]

ProficiencyLevel = Literal["none", "proficient", "expertise"]

ABILITIES: tuple[Ability, ...] = (
    "strength",
    "dexterity",
    "constitution",
    "intelligence",
    "wisdom",
    "charisma",
)

# Ability score abbreviation → full name
ABILITY_ABBREV: dict[str, Ability] = {
    "STR": "strength",
    "DEX": "dexterity",
    "CON": "constitution",
    "INT": "intelligence",
    "WIS": "wisdom",
    "CHA": "charisma",
}

# Skill → governing ability (PHB ch. 7)
SKILLS: dict[Skill, Ability] = {
    "acrobatics": "dexterity",
    "animalHandling": "wisdom",
    "arcana": "intelligence",
    "athletics": "strength",
    "deception": "charisma",
    "history": "intelligence",
    "insight": "wisdom",
    "intimidation": "charisma",
    "investigation": "intelligence",
    "medicine": "wisdom",
    "nature": "intelligence",
    "perception": "wisdom",
    "performance": "charisma",
    "persuasion": "charisma",
    "religion": "intelligence",
    "sleightOfHand": "dexterity",
    "stealth": "dexterity",
    "survival": "wisdom",
}

# Multiplier applied to the proficiency bonus
PROFICIENCY_LEVELS: dict[ProficiencyLevel, int] = {
    "none": 0,
    "proficient": 1,
    "expertise": 2,
}

# Minimum total XP for each character level
XP_THRESHOLDS: dict[int, int] = {
    1: 0,
    2: 300,
    3: 900,
    4: 2700,
    5: 6500,
    6: 14000,
    7: 23000,
    8: 34000,
    9: 48000,
    10: 64000,
    11: 85000,
    12: 100000,
    13: 120000,
    14: 140000,
    15: 165000,
    16: 195000,
    17: 225000,
    18: 265000,
    19: 305000,
    20: 355000,
}

MIN_LEVEL = 1
MAX_LEVEL = 20

# Modifier target keys for stats that are not abilities or skills
TARGET_ARMOR_CLASS = "armorClass"
TARGET_INITIATIVE = "initiative"
TARGET_SPEED = "speed"
TARGET_PERCEPTION = "perception"
SAVE_TARGET_SUFFIX = "Save"


def clamp_level(level: int) -> int:
    """Clamp a character level into the 1-20 range."""
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


def get_ability_modifier(score: int) -> int:
    """Ability modifier for a score: floor((score - 10) / 2).

    Floor division, so 9 gives -1 and 3 gives -4.
    """
    return (score - 10) // 2


def get_proficiency_bonus(level: int) -> int:
    """Proficiency bonus for a character level (+2 at 1, +6 at 17-20)."""
    return 2 + (clamp_level(level) - 1) // 4


def save_target(ability: str) -> str:
    """Modifier target key for an ability's saving throw, e.g. 'dexteritySave'."""
    return f"{ability}{SAVE_TARGET_SUFFIX}"
