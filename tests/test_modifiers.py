"""Tests for the modifier primitives."""

from feyforge.character.models import Modifier
from feyforge.character.modifiers import (
    apply_modifiers,
    combine_modifiers,
    filter_modifiers_by_target,
    has_advantage,
    has_disadvantage,
)


class TestModifierModel:

    def test_defaults(self):
        mod = Modifier(target="armorClass", value=1)
        assert mod.type == "bonus"
        assert mod.active is True
        assert len(mod.id) == 8

    def test_accepts_camel_case_payload(self):
        mod = Modifier.model_validate(
            {"id": "m1", "target": "stealth", "type": "advantage", "value": 0, "active": False}
        )
        assert mod.type == "advantage"
        assert mod.active is False


class TestApplyModifiers:

    def test_sums_numeric_values(self):
        mods = [Modifier(target="speed", value=10), Modifier(target="speed", value=-5)]
        assert apply_modifiers(30, mods) == 35

    def test_empty_list_returns_base(self):
        assert apply_modifiers(12, []) == 12

    def test_advantage_contributes_nothing(self):
        mods = [
            Modifier(target="perception", type="advantage", value=3),
            Modifier(target="perception", type="disadvantage", value=3),
            Modifier(target="perception", value=1),
        ]
        assert apply_modifiers(4, mods) == 5


class TestFilterModifiers:

    def test_exact_match_preserves_order(self):
        a = Modifier(target="strength", value=1)
        b = Modifier(target="strengthSave", value=2)
        c = Modifier(target="strength", value=3)
        assert filter_modifiers_by_target([a, b, c], "strength") == [a, c]

    def test_no_match(self):
        assert filter_modifiers_by_target([Modifier(target="speed", value=5)], "initiative") == []


class TestCombineModifiers:

    def test_duplicates_stack(self):
        ring = Modifier(target="armorClass", value=1)
        cloak = Modifier(target="armorClass", value=1)
        combined = combine_modifiers([ring], [cloak], [ring])
        assert combined == [ring, cloak, ring]
        assert apply_modifiers(10, combined) == 13

    def test_no_lists(self):
        assert combine_modifiers() == []


class TestAdvantageResolution:

    def test_advantage_only(self):
        mods = [Modifier(target="perception", type="advantage")]
        assert has_advantage(mods) is True
        assert has_disadvantage(mods) is False

    def test_disadvantage_only(self):
        mods = [Modifier(target="perception", type="disadvantage")]
        assert has_advantage(mods) is False
        assert has_disadvantage(mods) is True

    def test_both_cancel(self):
        mods = [
            Modifier(target="perception", type="advantage"),
            Modifier(target="perception", type="disadvantage"),
        ]
        assert has_advantage(mods) is False
        assert has_disadvantage(mods) is False

    def test_neither(self):
        mods = [Modifier(target="perception", value=2)]
        assert has_advantage(mods) is False
        assert has_disadvantage(mods) is False

    def test_accepts_generators(self):
        gen = (m for m in [Modifier(target="perception", type="advantage")])
        assert has_advantage(gen) is True
