"""
Modifier primitives shared by every stat calculator.

Modifiers stack additively: nothing here applies a "highest only" rule.
Stacking policy, if any, belongs to the caller.
"""

from collections.abc import Iterable

from .models import Modifier

# Modifier types that carry no numeric delta
ROLL_MODE_TYPES = frozenset({"advantage", "disadvantage"})


def apply_modifiers(base: int, mods: Iterable[Modifier]) -> int:
    """Add the values of all numeric modifiers onto a base value.

    Advantage and disadvantage modifiers are skipped; callers that care about
    them (passive scores) use has_advantage/has_disadvantage instead.
    """
    total = base
    for mod in mods:
        if mod.type in ROLL_MODE_TYPES:
            continue
        total += mod.value
    return total


def filter_modifiers_by_target(mods: Iterable[Modifier], target: str) -> list[Modifier]:
    """Modifiers whose target matches exactly, in their original order."""
    return [m for m in mods if m.target == target]


def combine_modifiers(*mod_lists: Iterable[Modifier]) -> list[Modifier]:
    """Concatenate modifier lists without deduplication."""
    combined: list[Modifier] = []
    for mods in mod_lists:
        combined.extend(mods)
    return combined


def has_advantage(mods: Iterable[Modifier]) -> bool:
    """Whether the modifiers grant net advantage.

    Advantage and disadvantage cancel out when both are present.
    """
    mods = list(mods)
    has_adv = any(m.type == "advantage" for m in mods)
    has_disadv = any(m.type == "disadvantage" for m in mods)
    return has_adv and not has_disadv


def has_disadvantage(mods: Iterable[Modifier]) -> bool:
    """Whether the modifiers impose net disadvantage."""
    mods = list(mods)
    has_adv = any(m.type == "advantage" for m in mods)
    has_disadv = any(m.type == "disadvantage" for m in mods)
    return has_disadv and not has_adv


__all__ = [
    "apply_modifiers",
    "filter_modifiers_by_target",
    "combine_modifiers",
    "has_advantage",
    "has_disadvantage",
]
