"""
Character rules package for FeyForge.

Provides the data models, the D&D 5e rules tables, the modifier primitives,
the derived-stat calculation engine, XP levelling and sheet resource tracking.
"""

from .constants import (
    ABILITIES,
    ABILITY_ABBREV,
    PROFICIENCY_LEVELS,
    SKILLS,
    XP_THRESHOLDS,
    Ability,
    Skill,
    get_ability_modifier,
    get_proficiency_bonus,
)
from .models import *  # noqa: F401,F403
from .models import __all__ as _models_all
from .modifiers import (
    apply_modifiers,
    combine_modifiers,
    filter_modifiers_by_target,
    has_advantage,
    has_disadvantage,
)
from .calculations import (
    SpellcastingStats,
    WeaponAttack,
    calculate_ability_modifiers,
    calculate_ability_scores,
    calculate_all_saving_throws,
    calculate_all_skill_modifiers,
    calculate_all_stats,
    calculate_armor_class,
    calculate_attack_bonus,
    calculate_carrying_capacity,
    calculate_current_load,
    calculate_damage_bonus,
    calculate_initiative,
    calculate_max_hp,
    calculate_passive_perception,
    calculate_saving_throw,
    calculate_skill_modifier,
    calculate_speed,
    calculate_spellcasting,
    calculate_weapon_attack,
    find_equipped_armor,
    find_equipped_shield,
    get_all_modifiers,
)
from .experience import (
    ExperienceResult,
    XPProgress,
    add_experience,
    get_level_from_xp,
    get_levels_gained,
    get_xp_for_level,
    get_xp_progress,
    get_xp_to_next_level,
    set_level,
)
from .tracking import ResourceTracker

__all__ = [
    # Rules tables
    "ABILITIES",
    "ABILITY_ABBREV",
    "PROFICIENCY_LEVELS",
    "SKILLS",
    "XP_THRESHOLDS",
    "Ability",
    "Skill",
    "get_ability_modifier",
    "get_proficiency_bonus",
    # Modifiers
    "apply_modifiers",
    "combine_modifiers",
    "filter_modifiers_by_target",
    "has_advantage",
    "has_disadvantage",
    # Calculations
    "SpellcastingStats",
    "WeaponAttack",
    "calculate_ability_modifiers",
    "calculate_ability_scores",
    "calculate_all_saving_throws",
    "calculate_all_skill_modifiers",
    "calculate_all_stats",
    "calculate_armor_class",
    "calculate_attack_bonus",
    "calculate_carrying_capacity",
    "calculate_current_load",
    "calculate_damage_bonus",
    "calculate_initiative",
    "calculate_max_hp",
    "calculate_passive_perception",
    "calculate_saving_throw",
    "calculate_skill_modifier",
    "calculate_speed",
    "calculate_spellcasting",
    "calculate_weapon_attack",
    "find_equipped_armor",
    "find_equipped_shield",
    "get_all_modifiers",
    # Experience
    "ExperienceResult",
    "XPProgress",
    "add_experience",
    "get_level_from_xp",
    "get_levels_gained",
    "get_xp_for_level",
    "get_xp_progress",
    "get_xp_to_next_level",
    "set_level",
    # Tracking
    "ResourceTracker",
] + list(_models_all)
