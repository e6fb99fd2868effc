"""Tests for XP-driven levelling."""

import pytest

from feyforge.exceptions import CharacterStateError
from feyforge.character.experience import (
    add_experience,
    get_level_from_xp,
    get_levels_gained,
    get_xp_for_level,
    get_xp_progress,
    get_xp_to_next_level,
    set_level,
)
from feyforge.character.models import Character


class TestLevelLookup:

    @pytest.mark.parametrize(
        "xp,level",
        [(0, 1), (299, 1), (300, 2), (899, 2), (900, 3), (6500, 5), (354999, 19), (355000, 20), (10**7, 20)],
    )
    def test_level_from_xp(self, xp, level):
        assert get_level_from_xp(xp) == level

    def test_xp_for_level(self):
        assert get_xp_for_level(1) == 0
        assert get_xp_for_level(5) == 6500
        assert get_xp_for_level(0) == 0
        assert get_xp_for_level(30) == 355000

    def test_xp_to_next_level(self):
        assert get_xp_to_next_level(0) == 300
        assert get_xp_to_next_level(250) == 50
        assert get_xp_to_next_level(355000) == 0

    def test_levels_gained(self):
        assert get_levels_gained(0, 1000) == [2, 3]
        assert get_levels_gained(300, 100) == []
        assert get_levels_gained(2600, 100) == [4]


class TestProgress:

    def test_halfway(self):
        progress = get_xp_progress(600)
        assert progress.current == 600
        assert progress.to_next == 300
        assert progress.percentage == 50

    def test_floors_percentage(self):
        # 100 of 300 XP into level 1
        assert get_xp_progress(100).percentage == 33

    def test_max_level(self):
        progress = get_xp_progress(400000)
        assert progress.to_next == 0
        assert progress.percentage == 100


class TestAddExperience:

    def test_levels_up_in_place(self):
        char = Character(name="Pip")
        result = add_experience(char, 1000)
        assert result.new_level == 3
        assert result.levels_gained == [2, 3]
        assert char.level == 3
        assert char.experience_points == 1000

    def test_no_level_change(self):
        char = Character(name="Pip", experience_points=300, level=2)
        result = add_experience(char, 50)
        assert result.levels_gained == []
        assert char.level == 2

    def test_negative_xp_rejected(self):
        char = Character(name="Pip")
        with pytest.raises(CharacterStateError) as exc_info:
            add_experience(char, -10)
        assert exc_info.value.character_id == char.id
        assert char.experience_points == 0

    def test_set_level_snaps_xp(self):
        char = Character(name="Pip", experience_points=12345)
        set_level(char, 4)
        assert char.level == 4
        assert char.experience_points == 2700

    def test_set_level_clamps(self):
        char = Character(name="Pip")
        set_level(char, 42)
        assert char.level == 20
        assert char.experience_points == 355000
