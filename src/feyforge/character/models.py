"""
Data models for FeyForge characters.

Field names are snake_case; every model also accepts the camelCase keys the
web client stores (``baseAbilities``, ``requiresAttunement``, ...), so a JSON
export can be validated directly with ``Character.model_validate``.
"""

import logging
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from shortuuid import random

from .constants import Ability, Skill, clamp_level

logger = logging.getLogger("feyforge")


class FeyforgeModel(BaseModel):
    """Base model accepting both snake_case and camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AbilityScores(FeyforgeModel):
    """The six ability scores. No range is enforced; 1-30 is conventional."""
    strength: int = 10
    dexterity: int = 10
    constitution: int = 10
    intelligence: int = 10
    wisdom: int = 10
    charisma: int = 10

    def __getitem__(self, ability: str) -> int:
        return getattr(self, ability)


class Modifier(FeyforgeModel):
    """A single numeric or advantage/disadvantage effect on one stat.

    Attributes:
        target: What it affects: an ability name, a skill key, "armorClass",
            "initiative", "speed", "<ability>Save", ...
        type: "bonus" adds ``value``; "advantage"/"disadvantage" carry no number.
        value: Amount added for bonus modifiers (negative for penalties).
        active: Inactive modifiers are ignored everywhere.
    """
    id: str = Field(default_factory=lambda: random(length=8))
    target: str
    type: Literal["bonus", "advantage", "disadvantage"] = "bonus"
    value: int = 0
    active: bool = True
    source: str | None = None


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------
# Everything attached to a character (gear, spells-in-effect, class features,
# limited-use resources, wildshape forms) is a property. The ``type`` field
# discriminates the variants.
# ---------------------------------------------------------------------------

class BaseProperty(FeyforgeModel):
    """Fields shared by every property variant."""
    id: str = Field(default_factory=lambda: random(length=8))
    name: str
    description: str = ""
    active: bool = True


class ItemProperty(BaseProperty):
    """Equipment. Modifiers apply only while equipped (and attuned, if required)."""
    type: Literal["item"] = "item"
    category: str = "gear"  # weapon, armor, gear, consumable, tool, treasure
    equipped: bool = False
    requires_attunement: bool = False
    attuned: bool = False
    weight: float | None = None
    quantity: int = 1
    modifiers: list[Modifier] = Field(default_factory=list)

    # Armor and shields
    armor_category: Literal["light", "medium", "heavy", "shield"] | None = None
    base_ac: int | None = Field(default=None, alias="baseAC")

    # Weapons
    weapon_properties: list[str] = Field(default_factory=list)  # finesse, ranged, thrown, ...
    damage: str | None = None  # e.g., "1d8 slashing"

    @property
    def is_body_armor(self) -> bool:
        return self.armor_category in ("light", "medium", "heavy")

    @property
    def is_shield(self) -> bool:
        return self.armor_category == "shield"


class EffectProperty(BaseProperty):
    """A spell, condition or other effect. Active is the only gate."""
    type: Literal["effect"] = "effect"
    source: str = ""
    duration: str | None = None  # e.g., "1 minute", "concentration"
    modifiers: list[Modifier] = Field(default_factory=list)


class FeatureProperty(BaseProperty):
    """Class, race or background feature, optionally carrying modifiers."""
    type: Literal["feature"] = "feature"
    source: str = ""  # e.g., "Ranger 1", "Wood Elf"
    level_gained: int = 1
    modifiers: list[Modifier] | None = None


class ActionProperty(BaseProperty):
    """A special action the character can take. Never contributes modifiers."""
    type: Literal["action"] = "action"
    action_type: Literal["action", "bonusAction", "reaction", "free"] = "action"
    uses_per_rest: int | None = None


class ClassResourceProperty(BaseProperty):
    """A limited-use class resource (ki points, rage, channel divinity)."""
    type: Literal["classResource"] = "classResource"
    current: int = 0
    max: int = 0
    recharge_on: Literal["shortRest", "longRest", "none"] = "longRest"


class HitPoints(FeyforgeModel):
    """Current, maximum and temporary hit points."""
    current: int = 1
    max: int = 1
    temp: int = 0


class AlternateFormProperty(BaseProperty):
    """A wildshape or polymorph form with its own hit points."""
    type: Literal["alternateForm"] = "alternateForm"
    form_hp: HitPoints = Field(default_factory=HitPoints, alias="formHP")
    armor_class: int | None = None
    speed: int | None = None
    abilities: AbilityScores | None = None


Property = Annotated[
    Union[
        ItemProperty,
        EffectProperty,
        FeatureProperty,
        ActionProperty,
        ClassResourceProperty,
        AlternateFormProperty,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Character sheet
# ---------------------------------------------------------------------------

class SpellSlot(FeyforgeModel):
    total: int = Field(default=0, ge=0)
    used: int = Field(default=0, ge=0)


class SpellcastingInfo(FeyforgeModel):
    """Spellcasting ability and slot table."""
    ability: Ability
    spell_slots: dict[int, SpellSlot] = Field(default_factory=dict)  # spell level: slots


class HitDice(FeyforgeModel):
    """One pool of hit dice, e.g. 5d10 for a level 5 fighter."""
    die_size: int = 8
    total: int = Field(default=1, ge=0)
    used: int = Field(default=0, ge=0)


class DeathSaves(FeyforgeModel):
    successes: int = Field(default=0, ge=0, le=3)
    failures: int = Field(default=0, ge=0, le=3)


class Currency(FeyforgeModel):
    cp: int = 0
    sp: int = 0
    ep: int = 0
    gp: int = 0
    pp: int = 0


class Character(FeyforgeModel):
    """A character snapshot as consumed by the stat engine.

    Missing optional data is defaulted at validation time rather than
    rejected: no abilities means all 10s, no level means 1, a level outside
    1-20 is clamped, and a ``properties`` value that is not a list becomes an
    empty list.
    """
    id: str = Field(default_factory=lambda: random(length=8))
    name: str = ""
    level: int = 1
    experience_points: int = 0

    # Abilities
    base_abilities: AbilityScores = Field(default_factory=AbilityScores)
    racial_bonuses: dict[Ability, int] = Field(default_factory=dict)

    # Properties (items, effects, features, actions, resources, forms)
    properties: list[Property] = Field(default_factory=list)

    # Proficiencies
    skill_proficiencies: list[Skill] = Field(default_factory=list)
    skill_expertise: list[Skill] = Field(default_factory=list)
    saving_throw_proficiencies: list[Ability] = Field(default_factory=list)

    speed: int | None = None
    spellcasting: SpellcastingInfo | None = None

    # Tracked sheet state
    hit_points: HitPoints = Field(default_factory=HitPoints)
    hit_dice: list[HitDice] = Field(default_factory=list)
    death_saves: DeathSaves = Field(default_factory=DeathSaves)
    currency: Currency = Field(default_factory=Currency)

    # Id of the alternate form currently assumed, if any
    active_form_id: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _default_level(cls, v: Any) -> Any:
        if v is None:
            return 1
        return v

    @field_validator("level")
    @classmethod
    def _clamp_level(cls, v: int) -> int:
        level = clamp_level(v)
        if level != v:
            logger.debug(f"Clamping out-of-range level {v} to {level}")
        return level

    @field_validator("experience_points")
    @classmethod
    def _floor_experience(cls, v: int) -> int:
        return max(0, v)

    @field_validator("base_abilities", mode="before")
    @classmethod
    def _default_abilities(cls, v: Any) -> Any:
        if v is None:
            logger.debug("No base abilities on character, defaulting to all 10s")
            return {}
        return v

    @field_validator("properties", mode="before")
    @classmethod
    def _default_properties(cls, v: Any) -> Any:
        if not isinstance(v, list):
            if v is not None:
                logger.debug(f"Ignoring non-list properties value of type {type(v).__name__}")
            return []
        return v

    @field_validator(
        "racial_bonuses",
        "skill_proficiencies",
        "skill_expertise",
        "saving_throw_proficiencies",
        mode="before",
    )
    @classmethod
    def _default_empty(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return {} if info.field_name == "racial_bonuses" else []
        return v

    def get_property(self, property_id: str) -> Property | None:
        """Find a property by id, or None."""
        for prop in self.properties:
            if prop.id == property_id:
                return prop
        return None

    def items(self) -> list[ItemProperty]:
        """All item properties, in property order."""
        return [p for p in self.properties if isinstance(p, ItemProperty)]


class CalculatedStats(FeyforgeModel):
    """Every derived number shown on the character sheet.

    Produced whole by ``calculate_all_stats``; spell_save_dc and
    spell_attack_bonus are None (not zero) for non-casters.
    """
    abilities: AbilityScores
    ability_modifiers: dict[Ability, int]
    armor_class: int
    initiative: int
    speed: int
    passive_perception: int
    proficiency_bonus: int
    skill_modifiers: dict[Skill, int]
    saving_throws: dict[Ability, int]
    spell_save_dc: int | None = None
    spell_attack_bonus: int | None = None
    carrying_capacity: int
    current_load: float
    encumbered: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @property
    def has_spellcasting(self) -> bool:
        return self.spell_save_dc is not None


__all__ = [
    "FeyforgeModel",
    "AbilityScores",
    "Modifier",
    "BaseProperty",
    "ItemProperty",
    "EffectProperty",
    "FeatureProperty",
    "ActionProperty",
    "ClassResourceProperty",
    "AlternateFormProperty",
    "Property",
    "HitPoints",
    "SpellSlot",
    "SpellcastingInfo",
    "HitDice",
    "DeathSaves",
    "Currency",
    "Character",
    "CalculatedStats",
]
