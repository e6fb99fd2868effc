"""
Pytest configuration and fixtures for feyforge tests.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path to allow importing feyforge
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from feyforge.character.models import (  # noqa: E402
    AbilityScores,
    Character,
    ClassResourceProperty,
    DeathSaves,
    HitDice,
    HitPoints,
    SpellcastingInfo,
    SpellSlot,
)


@pytest.fixture
def rogue() -> Character:
    """A level 5 rogue: DEX 14, proficient in Stealth and Perception."""
    return Character(
        name="Vex",
        level=5,
        base_abilities=AbilityScores(
            strength=10,
            dexterity=14,
            constitution=12,
            intelligence=13,
            wisdom=12,
            charisma=8,
        ),
        skill_proficiencies=["stealth", "perception"],
        saving_throw_proficiencies=["dexterity", "intelligence"],
    )


@pytest.fixture
def wizard() -> Character:
    """A level 3 wizard with INT 16 and first/second level slots."""
    return Character(
        name="Elara",
        level=3,
        base_abilities=AbilityScores(
            strength=8,
            dexterity=14,
            constitution=12,
            intelligence=16,
            wisdom=13,
            charisma=10,
        ),
        spellcasting=SpellcastingInfo(
            ability="intelligence",
            spell_slots={1: SpellSlot(total=4, used=0), 2: SpellSlot(total=2, used=0)},
        ),
    )


@pytest.fixture
def fighter() -> Character:
    """A level 5 fighter with tracked HP, hit dice and class resources."""
    return Character(
        name="Aldric",
        level=5,
        base_abilities=AbilityScores(
            strength=16,
            dexterity=12,
            constitution=14,
            intelligence=10,
            wisdom=12,
            charisma=8,
        ),
        hit_points=HitPoints(current=44, max=44, temp=0),
        hit_dice=[HitDice(die_size=10, total=5, used=0)],
        death_saves=DeathSaves(),
        properties=[
            ClassResourceProperty(
                id="second-wind",
                name="Second Wind",
                current=1,
                max=1,
                recharge_on="shortRest",
            ),
            ClassResourceProperty(
                id="action-surge",
                name="Action Surge",
                current=1,
                max=1,
                recharge_on="shortRest",
            ),
            ClassResourceProperty(
                id="indomitable",
                name="Indomitable",
                current=1,
                max=1,
                recharge_on="longRest",
            ),
        ],
    )
