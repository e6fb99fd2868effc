"""Factories shared by the character engine tests."""

from feyforge.character.models import ItemProperty, Modifier


def make_item(
    name: str = "Trinket",
    *,
    modifiers: list[Modifier] | None = None,
    equipped: bool = True,
    active: bool = True,
    requires_attunement: bool = False,
    attuned: bool = False,
    **kwargs,
) -> ItemProperty:
    """Helper to create an ItemProperty with sensible defaults."""
    return ItemProperty(
        name=name,
        modifiers=modifiers or [],
        equipped=equipped,
        active=active,
        requires_attunement=requires_attunement,
        attuned=attuned,
        **kwargs,
    )


def make_armor(name: str, armor_category: str, base_ac: int, *, equipped: bool = True) -> ItemProperty:
    """Helper to create a piece of armor or a shield."""
    return ItemProperty(
        name=name,
        category="armor",
        armor_category=armor_category,
        base_ac=base_ac,
        equipped=equipped,
    )
