"""
Sheet resource tracking: hit points, hit dice, death saves, spell slots,
class resources, alternate forms, currency and rests.

ResourceTracker is stateless: every method takes a Character and updates it
in place. Derived stats are not touched; callers re-run
``calculate_all_stats`` after a change that affects them (e.g. toggling an
item).
"""

import logging
import math
from collections.abc import Mapping

from ..exceptions import CharacterStateError
from .models import AlternateFormProperty, Character, ClassResourceProperty, Currency, Property

logger = logging.getLogger("feyforge.tracking")


def _require_non_negative(character: Character, amount: int, what: str) -> None:
    if amount < 0:
        raise CharacterStateError(
            f"{what} amount must not be negative (got {amount})",
            character_id=character.id,
            details={"amount": amount},
        )


class ResourceTracker:
    """Stateless helpers for the mutable parts of a character sheet."""

    # -----------------------------------------------------------------
    # Hit Points
    # -----------------------------------------------------------------

    @staticmethod
    def update_hp(character: Character, current: int, temp: int | None = None) -> None:
        """Set current HP (clamped to 0..max) and optionally temporary HP (>= 0)."""
        hp = character.hit_points
        hp.current = max(0, min(current, hp.max))
        if temp is not None:
            hp.temp = max(0, temp)

    @staticmethod
    def heal(character: Character, amount: int) -> int:
        """Restore hit points up to the maximum.

        Returns:
            The number of hit points actually restored.
        """
        _require_non_negative(character, amount, "Healing")
        before = character.hit_points.current
        ResourceTracker.update_hp(character, before + amount)
        return character.hit_points.current - before

    @staticmethod
    def take_damage(character: Character, amount: int) -> int:
        """Apply damage, draining temporary hit points first.

        Returns:
            The number of real (non-temporary) hit points lost.
        """
        _require_non_negative(character, amount, "Damage")
        hp = character.hit_points
        remaining = amount

        if hp.temp > 0:
            absorbed = min(hp.temp, remaining)
            hp.temp -= absorbed
            remaining -= absorbed

        before = hp.current
        ResourceTracker.update_hp(character, hp.current - remaining)
        lost = before - hp.current

        if hp.current == 0:
            logger.info(f"💀 '{character.name}' dropped to 0 HP")
        return lost

    # -----------------------------------------------------------------
    # Hit Dice
    # -----------------------------------------------------------------

    @staticmethod
    def spend_hit_die(character: Character, index: int = 0) -> bool:
        """Spend one hit die from the pool at ``index``.

        Returns:
            True if a die was spent, False if the pool was already empty.

        Raises:
            CharacterStateError: If there is no pool at ``index``.
        """
        if not 0 <= index < len(character.hit_dice):
            raise CharacterStateError(
                f"No hit die pool at index {index}",
                character_id=character.id,
                details={"pools": len(character.hit_dice)},
            )
        pool = character.hit_dice[index]
        if pool.used >= pool.total:
            return False
        pool.used += 1
        return True

    @staticmethod
    def recover_hit_dice(character: Character) -> None:
        """Recover half of each pool's total (rounded up), as on a long rest."""
        for pool in character.hit_dice:
            pool.used = max(0, pool.used - math.ceil(pool.total / 2))

    # -----------------------------------------------------------------
    # Death Saves
    # -----------------------------------------------------------------

    @staticmethod
    def record_death_save(character: Character, success: bool) -> None:
        saves = character.death_saves
        if success:
            saves.successes = min(3, saves.successes + 1)
        else:
            saves.failures = min(3, saves.failures + 1)

    @staticmethod
    def reset_death_saves(character: Character) -> None:
        character.death_saves.successes = 0
        character.death_saves.failures = 0

    # -----------------------------------------------------------------
    # Spell Slots
    # -----------------------------------------------------------------
    # Slot operations on a level the character has no slots for are no-ops.

    @staticmethod
    def expend_spell_slot(character: Character, level: int) -> bool:
        """Use one spell slot of ``level``. Returns False if none remain."""
        if character.spellcasting is None:
            return False
        slot = character.spellcasting.spell_slots.get(level)
        if slot is None or slot.used >= slot.total:
            return False
        slot.used += 1
        return True

    @staticmethod
    def restore_spell_slot(character: Character, level: int) -> None:
        if character.spellcasting is None:
            return
        slot = character.spellcasting.spell_slots.get(level)
        if slot is not None:
            slot.used = max(0, slot.used - 1)

    @staticmethod
    def restore_all_spell_slots(character: Character) -> None:
        if character.spellcasting is None:
            return
        for slot in character.spellcasting.spell_slots.values():
            slot.used = 0

    # -----------------------------------------------------------------
    # Class Resources and Properties
    # -----------------------------------------------------------------

    @staticmethod
    def get_class_resources(character: Character) -> list[ClassResourceProperty]:
        return [p for p in character.properties if isinstance(p, ClassResourceProperty)]

    @staticmethod
    def _get_resource(character: Character, resource_id: str) -> ClassResourceProperty:
        prop = character.get_property(resource_id)
        if not isinstance(prop, ClassResourceProperty):
            raise CharacterStateError(
                f"No class resource with id '{resource_id}'",
                character_id=character.id,
            )
        return prop

    @staticmethod
    def spend_class_resource(character: Character, resource_id: str, amount: int = 1) -> int:
        """Spend uses of a class resource (never below 0). Returns uses left."""
        _require_non_negative(character, amount, "Resource")
        resource = ResourceTracker._get_resource(character, resource_id)
        resource.current = max(0, resource.current - amount)
        return resource.current

    @staticmethod
    def restore_class_resource(
        character: Character,
        resource_id: str,
        amount: int | None = None,
    ) -> int:
        """Restore uses of a class resource (all of them when ``amount`` is None)."""
        resource = ResourceTracker._get_resource(character, resource_id)
        if amount is None:
            amount = resource.max
        _require_non_negative(character, amount, "Resource")
        resource.current = min(resource.max, resource.current + amount)
        return resource.current

    @staticmethod
    def toggle_property(character: Character, property_id: str) -> Property:
        """Flip a property's active flag.

        Raises:
            CharacterStateError: If no property has that id.
        """
        prop = character.get_property(property_id)
        if prop is None:
            raise CharacterStateError(
                f"No property with id '{property_id}'",
                character_id=character.id,
            )
        prop.active = not prop.active
        logger.debug(f"Toggled '{prop.name}' on '{character.name}' -> active={prop.active}")
        return prop

    # -----------------------------------------------------------------
    # Alternate Forms
    # -----------------------------------------------------------------

    @staticmethod
    def _get_form(character: Character, form_id: str) -> AlternateFormProperty:
        prop = character.get_property(form_id)
        if not isinstance(prop, AlternateFormProperty):
            raise CharacterStateError(
                f"No alternate form with id '{form_id}'",
                character_id=character.id,
            )
        return prop

    @staticmethod
    def transform_into_form(character: Character, form_id: str) -> AlternateFormProperty:
        """Assume an alternate form, replacing any form already assumed.

        Raises:
            CharacterStateError: If no alternate form has that id.
        """
        form = ResourceTracker._get_form(character, form_id)
        character.active_form_id = form.id
        logger.info(f"🐺 '{character.name}' transformed into '{form.name}'")
        return form

    @staticmethod
    def revert_from_form(character: Character) -> None:
        if character.active_form_id is not None:
            logger.info(f"'{character.name}' reverted to normal form")
        character.active_form_id = None

    @staticmethod
    def get_active_form(character: Character) -> AlternateFormProperty | None:
        """The assumed form, or None (also when its property no longer exists)."""
        if character.active_form_id is None:
            return None
        prop = character.get_property(character.active_form_id)
        return prop if isinstance(prop, AlternateFormProperty) else None

    @staticmethod
    def update_form_hp(character: Character, form_id: str, hp: int) -> int:
        """Set a form's current hit points (never below 0). Returns the new value."""
        form = ResourceTracker._get_form(character, form_id)
        form.form_hp.current = max(0, hp)
        return form.form_hp.current

    # -----------------------------------------------------------------
    # Currency
    # -----------------------------------------------------------------

    @staticmethod
    def update_currency(character: Character, changes: Mapping[str, int]) -> Currency:
        """Merge a partial coin update (e.g. ``{"gp": 12}``) into the purse.

        Denominations not named in ``changes`` keep their value.

        Raises:
            CharacterStateError: If ``changes`` names an unknown denomination.
        """
        unknown = sorted(set(changes) - set(Currency.model_fields))
        if unknown:
            raise CharacterStateError(
                f"Unknown currency denomination(s): {', '.join(unknown)}",
                character_id=character.id,
                details={"unknown": unknown},
            )
        merged = {**character.currency.model_dump(), **changes}
        character.currency = Currency.model_validate(merged)
        return character.currency

    # -----------------------------------------------------------------
    # Rests
    # -----------------------------------------------------------------

    @staticmethod
    def short_rest(character: Character) -> list[str]:
        """Recharge short-rest resources. Returns the names of restored resources."""
        restored = []
        for resource in ResourceTracker.get_class_resources(character):
            if resource.recharge_on == "shortRest":
                resource.current = resource.max
                restored.append(resource.name)
        logger.debug(f"☕ Short rest for '{character.name}': {restored}")
        return restored

    @staticmethod
    def long_rest(character: Character) -> list[str]:
        """Full recovery: HP, death saves, half hit dice, spell slots, resources.

        Returns:
            The names of restored class resources.
        """
        ResourceTracker.update_hp(character, character.hit_points.max, 0)
        ResourceTracker.reset_death_saves(character)
        ResourceTracker.recover_hit_dice(character)
        ResourceTracker.restore_all_spell_slots(character)

        restored = []
        for resource in ResourceTracker.get_class_resources(character):
            if resource.recharge_on in ("shortRest", "longRest"):
                resource.current = resource.max
                restored.append(resource.name)

        logger.debug(f"🛌 Long rest for '{character.name}': {restored}")
        return restored


__all__ = [
    "ResourceTracker",
]
