"""
Character stat calculation engine.

Computes every derived number on the character sheet from a character
snapshot: ability scores, skills, saving throws, armor class, initiative,
speed, passive perception, carrying load and spellcasting.

The engine is stateless and never mutates the character. Every calculator
is a total function: missing data degrades to a documented default instead
of raising. Calculators that read modifiers accept an optional precomputed
``modifiers`` list so that ``calculate_all_stats`` collects them only once.

Functions:
    calculate_all_stats: Aggregate every derived stat into CalculatedStats.
    get_all_modifiers: Collect live modifiers from a character's properties.
    calculate_max_hp, calculate_attack_bonus, calculate_damage_bonus:
        Standalone helpers not part of the aggregate.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from ..config import DEFAULT_RULES, RulesConfig
from .constants import (
    ABILITIES,
    PROFICIENCY_LEVELS,
    SKILLS,
    TARGET_ARMOR_CLASS,
    TARGET_INITIATIVE,
    TARGET_PERCEPTION,
    TARGET_SPEED,
    Ability,
    Skill,
    get_ability_modifier,
    get_proficiency_bonus,
    save_target,
)
from .models import (
    AbilityScores,
    CalculatedStats,
    Character,
    EffectProperty,
    FeatureProperty,
    ItemProperty,
    Modifier,
)
from .modifiers import (
    apply_modifiers,
    filter_modifiers_by_target,
    has_advantage,
    has_disadvantage,
)

logger = logging.getLogger("feyforge")


class SpellcastingStats(BaseModel):
    """Spell save DC and spell attack bonus for a caster."""
    spell_save_dc: int
    spell_attack_bonus: int


class WeaponAttack(BaseModel):
    """Attack and damage numbers for one weapon."""
    weapon_name: str
    attack_bonus: int
    damage_bonus: int
    damage: str | None = None
    melee: bool = True


# ---------------------------------------------------------------------------
# Modifier collection
# ---------------------------------------------------------------------------

def get_all_modifiers(character: Character) -> list[Modifier]:
    """Collect every live modifier from a character's properties.

    A modifier is live iff its owning property passes the gate for its variant
    AND the modifier itself is active:
    - inactive properties never contribute;
    - items contribute only while equipped, and attuned if they require it;
    - effects contribute whenever active;
    - features contribute their optional modifiers whenever active;
    - actions, class resources and alternate forms never contribute.

    Args:
        character: The character snapshot.

    Returns:
        Live modifiers in property order.
    """
    modifiers: list[Modifier] = []

    properties = character.properties
    if not isinstance(properties, list):
        return modifiers

    for prop in properties:
        if not prop.active:
            continue

        if isinstance(prop, ItemProperty):
            if not prop.equipped:
                continue
            if prop.requires_attunement and not prop.attuned:
                continue
            modifiers.extend(prop.modifiers)
        elif isinstance(prop, EffectProperty):
            modifiers.extend(prop.modifiers)
        elif isinstance(prop, FeatureProperty):
            if prop.modifiers:
                modifiers.extend(prop.modifiers)

    return [m for m in modifiers if m.active]


def _live(character: Character, modifiers: Sequence[Modifier] | None) -> Sequence[Modifier]:
    return get_all_modifiers(character) if modifiers is None else modifiers


# ---------------------------------------------------------------------------
# Abilities
# ---------------------------------------------------------------------------

def calculate_ability_scores(
    character: Character,
    modifiers: Sequence[Modifier] | None = None,
) -> AbilityScores:
    """Final ability scores: base + racial bonuses + live modifiers.

    Racial bonuses are applied before item/effect modifiers. Since every
    modifier is additive the order does not change the result; that would no
    longer hold if non-additive modifier types were introduced.
    """
    base = character.base_abilities or AbilityScores()
    result = base.model_dump()

    for ability, bonus in (character.racial_bonuses or {}).items():
        if ability in result and bonus:
            result[ability] += bonus

    mods = _live(character, modifiers)
    for ability in ABILITIES:
        result[ability] = apply_modifiers(
            result[ability], filter_modifiers_by_target(mods, ability)
        )

    return AbilityScores(**result)


def calculate_ability_modifiers(abilities: AbilityScores) -> dict[Ability, int]:
    """Ability modifier for each of the six scores."""
    return {ability: get_ability_modifier(abilities[ability]) for ability in ABILITIES}


# ---------------------------------------------------------------------------
# Skills and saves
# ---------------------------------------------------------------------------

def _skill_proficiency_multiplier(character: Character, skill: str) -> int:
    if skill in (character.skill_expertise or []):
        return PROFICIENCY_LEVELS["expertise"]
    if skill in (character.skill_proficiencies or []):
        return PROFICIENCY_LEVELS["proficient"]
    return PROFICIENCY_LEVELS["none"]


def calculate_skill_modifier(
    character: Character,
    skill: Skill,
    abilities: AbilityScores,
    modifiers: Sequence[Modifier] | None = None,
) -> int:
    """Skill modifier: ability mod + proficiency bonus x multiplier + modifiers.

    Expertise (x2) takes precedence over plain proficiency (x1). Modifiers
    are matched on the skill key, e.g. "sleightOfHand".
    """
    ability_mod = get_ability_modifier(abilities[SKILLS[skill]])
    prof_bonus = get_proficiency_bonus(character.level or 1)
    multiplier = _skill_proficiency_multiplier(character, skill)

    base_modifier = ability_mod + math.floor(prof_bonus * multiplier)

    skill_mods = filter_modifiers_by_target(_live(character, modifiers), skill)
    return apply_modifiers(base_modifier, skill_mods)


def calculate_all_skill_modifiers(
    character: Character,
    abilities: AbilityScores,
    modifiers: Sequence[Modifier] | None = None,
) -> dict[Skill, int]:
    mods = _live(character, modifiers)
    return {
        skill: calculate_skill_modifier(character, skill, abilities, mods)
        for skill in SKILLS
    }


def calculate_saving_throw(
    character: Character,
    ability: Ability,
    abilities: AbilityScores,
    modifiers: Sequence[Modifier] | None = None,
) -> int:
    """Saving throw: ability mod + proficiency bonus if proficient + "<ability>Save" modifiers."""
    ability_mod = get_ability_modifier(abilities[ability])
    prof_bonus = get_proficiency_bonus(character.level or 1)

    is_proficient = ability in (character.saving_throw_proficiencies or [])
    base_save = ability_mod + (prof_bonus if is_proficient else 0)

    save_mods = filter_modifiers_by_target(_live(character, modifiers), save_target(ability))
    return apply_modifiers(base_save, save_mods)


def calculate_all_saving_throws(
    character: Character,
    abilities: AbilityScores,
    modifiers: Sequence[Modifier] | None = None,
) -> dict[Ability, int]:
    mods = _live(character, modifiers)
    return {
        ability: calculate_saving_throw(character, ability, abilities, mods)
        for ability in ABILITIES
    }


# ---------------------------------------------------------------------------
# Combat stats
# ---------------------------------------------------------------------------

def _is_worn(prop: Any) -> bool:
    return isinstance(prop, ItemProperty) and prop.active and prop.equipped


def find_equipped_armor(
    character: Character,
    config: RulesConfig | None = None,
) -> ItemProperty | None:
    """The body armor that counts towards AC, or None when unarmored.

    With the default "first" policy the first equipped light/medium/heavy
    armor in property order wins. The "highest" policy picks the largest
    base AC instead (first one on ties).
    """
    config = config or DEFAULT_RULES
    worn = [
        p for p in character.properties
        if _is_worn(p) and p.category == "armor" and p.is_body_armor
    ]
    if not worn:
        return None

    if len(worn) > 1:
        logger.warning(
            f"⚠️ Character '{character.name}' has {len(worn)} body armor items equipped "
            f"({', '.join(a.name for a in worn)}); using {config.armor_selection} match"
        )
        if config.armor_selection == "highest":
            return max(worn, key=lambda a: a.base_ac or 0)
    return worn[0]


def find_equipped_shield(character: Character) -> ItemProperty | None:
    """The first equipped shield, or None."""
    for prop in character.properties:
        if _is_worn(prop) and prop.is_shield:
            return prop
    return None


def _base_ac(item: ItemProperty) -> int:
    if item.base_ac is None:
        logger.debug(f"Item '{item.name}' has no base AC, counting it as 0")
        return 0
    return item.base_ac


def calculate_armor_class(
    character: Character,
    abilities: AbilityScores,
    modifiers: Sequence[Modifier] | None = None,
    config: RulesConfig | None = None,
) -> int:
    """Armor class from worn armor, shield, DEX and "armorClass" modifiers.

    - Unarmored: 10 + DEX modifier.
    - Light armor: base AC + DEX modifier.
    - Medium armor: base AC + DEX modifier, capped at +2.
    - Heavy armor: base AC, no DEX.
    A worn shield adds its base AC on top.
    """
    config = config or DEFAULT_RULES
    dex_mod = get_ability_modifier(abilities.dexterity)

    armor = find_equipped_armor(character, config)
    shield = find_equipped_shield(character)

    if armor is None:
        ac = config.unarmored_base_ac + dex_mod
    else:
        ac = _base_ac(armor)
        if armor.armor_category == "light":
            ac += dex_mod
        elif armor.armor_category == "medium":
            ac += min(dex_mod, config.medium_armor_dex_cap)
        # heavy: no DEX

    if shield is not None:
        ac += _base_ac(shield)

    ac_mods = filter_modifiers_by_target(_live(character, modifiers), TARGET_ARMOR_CLASS)
    return apply_modifiers(ac, ac_mods)


def calculate_initiative(
    character: Character,
    abilities: AbilityScores,
    modifiers: Sequence[Modifier] | None = None,
) -> int:
    dex_mod = get_ability_modifier(abilities.dexterity)
    init_mods = filter_modifiers_by_target(_live(character, modifiers), TARGET_INITIATIVE)
    return apply_modifiers(dex_mod, init_mods)


def calculate_speed(
    character: Character,
    modifiers: Sequence[Modifier] | None = None,
    config: RulesConfig | None = None,
) -> int:
    config = config or DEFAULT_RULES
    base_speed = character.speed if character.speed is not None else config.default_speed
    speed_mods = filter_modifiers_by_target(_live(character, modifiers), TARGET_SPEED)
    return apply_modifiers(base_speed, speed_mods)


def calculate_passive_perception(
    character: Character,
    skill_modifiers: Mapping[str, int],
    modifiers: Sequence[Modifier] | None = None,
    config: RulesConfig | None = None,
) -> int:
    """Passive Perception: 10 + Perception, +5 with advantage, -5 with disadvantage.

    Advantage and disadvantage on "perception" cancel each other out.
    """
    config = config or DEFAULT_RULES
    passive = 10 + skill_modifiers.get("perception", 0)

    perception_mods = filter_modifiers_by_target(_live(character, modifiers), TARGET_PERCEPTION)
    if has_advantage(perception_mods):
        passive += config.passive_advantage_bonus
    elif has_disadvantage(perception_mods):
        passive -= config.passive_advantage_bonus

    return passive


# ---------------------------------------------------------------------------
# Carrying
# ---------------------------------------------------------------------------

def calculate_carrying_capacity(
    abilities: AbilityScores,
    config: RulesConfig | None = None,
) -> int:
    """Carrying capacity in pounds: Strength score x 15."""
    config = config or DEFAULT_RULES
    return abilities.strength * config.carrying_capacity_multiplier


def calculate_current_load(character: Character) -> float:
    """Total weight of every active item, equipped or merely carried."""
    properties = character.properties
    if not isinstance(properties, list):
        return 0

    total: float = 0
    for prop in properties:
        if isinstance(prop, ItemProperty) and prop.active:
            total += (prop.weight or 0) * prop.quantity
    return total


# ---------------------------------------------------------------------------
# Spellcasting
# ---------------------------------------------------------------------------

def calculate_spellcasting(
    character: Character,
    abilities: AbilityScores,
) -> SpellcastingStats | None:
    """Spell save DC (8 + PB + mod) and attack bonus (PB + mod), or None for non-casters."""
    if character.spellcasting is None:
        return None

    ability_mod = get_ability_modifier(abilities[character.spellcasting.ability])
    prof_bonus = get_proficiency_bonus(character.level or 1)

    return SpellcastingStats(
        spell_save_dc=8 + prof_bonus + ability_mod,
        spell_attack_bonus=prof_bonus + ability_mod,
    )


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

def calculate_all_stats(
    character: Character | Mapping[str, Any],
    config: RulesConfig | None = None,
) -> CalculatedStats:
    """Calculate every derived stat for a character at once.

    Args:
        character: A Character, or a mapping (snake_case or camelCase keys)
            that is validated into one.
        config: House-rule overrides. Defaults to PHB rules.

    Returns:
        A frozen CalculatedStats snapshot. spell_save_dc and
        spell_attack_bonus are None when the character has no spellcasting.
    """
    if not isinstance(character, Character):
        character = Character.model_validate(character)
    config = config or DEFAULT_RULES

    level = character.level or 1
    modifiers = get_all_modifiers(character)

    abilities = calculate_ability_scores(character, modifiers)
    ability_modifiers = calculate_ability_modifiers(abilities)

    skill_modifiers = calculate_all_skill_modifiers(character, abilities, modifiers)
    saving_throws = calculate_all_saving_throws(character, abilities, modifiers)

    armor_class = calculate_armor_class(character, abilities, modifiers, config)
    initiative = calculate_initiative(character, abilities, modifiers)
    speed = calculate_speed(character, modifiers, config)
    passive_perception = calculate_passive_perception(
        character, skill_modifiers, modifiers, config
    )

    carrying_capacity = calculate_carrying_capacity(abilities, config)
    current_load = calculate_current_load(character)

    spellcasting = calculate_spellcasting(character, abilities)

    logger.debug(
        f"📊 Calculated stats for '{character.name}' "
        f"({len(modifiers)} live modifiers, AC {armor_class})"
    )

    return CalculatedStats(
        abilities=abilities,
        ability_modifiers=ability_modifiers,
        armor_class=armor_class,
        initiative=initiative,
        speed=speed,
        passive_perception=passive_perception,
        proficiency_bonus=get_proficiency_bonus(level),
        skill_modifiers=skill_modifiers,
        saving_throws=saving_throws,
        spell_save_dc=spellcasting.spell_save_dc if spellcasting else None,
        spell_attack_bonus=spellcasting.spell_attack_bonus if spellcasting else None,
        carrying_capacity=carrying_capacity,
        current_load=current_load,
        encumbered=current_load > carrying_capacity,
    )


# ---------------------------------------------------------------------------
# Standalone helpers
# ---------------------------------------------------------------------------

def calculate_max_hp(
    level: int,
    hit_die_size: int,
    con_modifier: int,
    use_average: bool = True,
) -> int:
    """Maximum hit points for a single-class character.

    Level 1 gets the full hit die + CON. Every later level adds
    ceil(die / 2) + 1 (average) or ceil(die / 2) (otherwise), plus CON.
    Only the final total is floored at 1; individual levels are not.

    Args:
        level: Character level.
        hit_die_size: Faces on the class hit die (6, 8, 10, 12).
        con_modifier: Constitution modifier.
        use_average: Use the PHB fixed value (half rounded up, +1).

    Returns:
        Maximum hit points, at least 1.
    """
    first_level_hp = hit_die_size + con_modifier
    if level <= 1:
        return max(1, first_level_hp)

    half_die = math.ceil(hit_die_size / 2)
    per_level = half_die + 1 if use_average else half_die
    higher_level_hp = (per_level + con_modifier) * (level - 1)

    return max(1, first_level_hp + higher_level_hp)


def _weapon_ability_modifier(
    abilities: AbilityScores,
    weapon_properties: Sequence[str],
    is_melee: bool,
) -> int:
    str_mod = get_ability_modifier(abilities.strength)
    dex_mod = get_ability_modifier(abilities.dexterity)

    if "finesse" in weapon_properties:
        return max(str_mod, dex_mod)
    return str_mod if is_melee else dex_mod


def calculate_attack_bonus(
    character: Character,
    abilities: AbilityScores,
    weapon_properties: Sequence[str],
    is_proficient: bool,
    is_melee: bool,
) -> int:
    """Weapon attack bonus.

    Finesse weapons use the higher of STR/DEX, other melee weapons STR and
    ranged weapons DEX. The proficiency bonus is added only when proficient.
    """
    prof_bonus = get_proficiency_bonus(character.level or 1) if is_proficient else 0
    return prof_bonus + _weapon_ability_modifier(abilities, weapon_properties, is_melee)


def calculate_damage_bonus(
    abilities: AbilityScores,
    weapon_properties: Sequence[str],
    is_melee: bool,
) -> int:
    """Weapon damage bonus; same ability choice as the attack bonus, no proficiency."""
    return _weapon_ability_modifier(abilities, weapon_properties, is_melee)


def calculate_weapon_attack(
    character: Character,
    weapon: ItemProperty,
    abilities: AbilityScores | None = None,
    is_proficient: bool = True,
) -> WeaponAttack:
    """Attack and damage bonus for a weapon item.

    A weapon tagged "ranged" is treated as a ranged attack; anything else
    (including "thrown" melee weapons) as melee.
    """
    if abilities is None:
        abilities = calculate_ability_scores(character)

    tags = [t.lower() for t in weapon.weapon_properties]
    is_melee = "ranged" not in tags

    return WeaponAttack(
        weapon_name=weapon.name,
        attack_bonus=calculate_attack_bonus(character, abilities, tags, is_proficient, is_melee),
        damage_bonus=calculate_damage_bonus(abilities, tags, is_melee),
        damage=weapon.damage,
        melee=is_melee,
    )


__all__ = [
    "SpellcastingStats",
    "WeaponAttack",
    "get_all_modifiers",
    "calculate_ability_scores",
    "calculate_ability_modifiers",
    "calculate_skill_modifier",
    "calculate_all_skill_modifiers",
    "calculate_saving_throw",
    "calculate_all_saving_throws",
    "find_equipped_armor",
    "find_equipped_shield",
    "calculate_armor_class",
    "calculate_initiative",
    "calculate_speed",
    "calculate_passive_perception",
    "calculate_carrying_capacity",
    "calculate_current_load",
    "calculate_spellcasting",
    "calculate_all_stats",
    "calculate_max_hp",
    "calculate_attack_bonus",
    "calculate_damage_bonus",
    "calculate_weapon_attack",
]
