"""
Unit tests for characters.py - active form accessors.
"""
import pytest

from conftest import make_stats
from team_stats.characters import (
    clamp_form_index,
    get_character_skills,
    get_character_stats,
    get_display_name,
    get_image_url,
)
from team_stats.models import Character, Potential


@pytest.fixture
def transforming() -> Character:
    return Character.model_validate(
        {
            "id": "goku",
            "name": "孫悟空",
            "forms": [
                {
                    "display_name": "超サイヤ人孫悟空",
                    "image_url": "/a.png",
                    "stats": make_stats(atk=1000),
                    "skills": {"pre_extreme": {"super_attack": {"name": "かめはめ波"}}},
                },
                {
                    "display_name": "超サイヤ人3孫悟空",
                    "image_url": "/b.png",
                    "stats": make_stats(atk=2000),
                    "skills": {"pre_extreme": {"super_attack": {"name": "龍拳"}}},
                },
            ],
        }
    )


@pytest.fixture
def reversible() -> Character:
    return Character.model_validate(
        {
            "id": "gohan",
            "name": "孫悟飯",
            "stats": make_stats(atk=3000),
            "reversible_forms": [
                {"image_url": "/kid.png", "skills": {"pre_extreme": {"super_attack": {"name": "魔閃光"}}}},
                {"image_url": "/future.png", "skills": {"pre_extreme": {"super_attack": {"name": "激烈"}}}},
            ],
        }
    )


class TestClampFormIndex:
    """Tests for form index clamping."""

    def test_in_range(self, transforming):
        assert clamp_form_index(transforming, 1) == 1

    def test_too_high(self, transforming):
        assert clamp_form_index(transforming, 5) == 1

    def test_negative(self, transforming):
        assert clamp_form_index(transforming, -3) == 0

    def test_formless(self):
        assert clamp_form_index(Character(id="x"), 4) == 0


class TestFormAccessors:
    """Tests for form-based characters."""

    def test_out_of_range_form(self, transforming):
        assert get_image_url(transforming, 9) == "/b.png"
        assert get_display_name(transforming, 9) == "超サイヤ人3孫悟空"

    def test_stats_follow_form(self, transforming):
        assert get_character_stats(transforming, 0).for_potential(Potential.P100).atk == 1000
        assert get_character_stats(transforming, 1).for_potential(Potential.P100).atk == 2000

    def test_skills_follow_form(self, transforming):
        skills = get_character_skills(transforming, 1)
        assert skills.pre_extreme.super_attack.name == "龍拳"

    def test_display_name_and_image(self, transforming):
        assert get_display_name(transforming, 1) == "超サイヤ人3孫悟空"
        assert get_image_url(transforming, 0) == "/a.png"


class TestReversibleAccessors:
    """Tests for reversible characters."""

    def test_shared_stats(self, reversible):
        for index in (0, 1):
            assert get_character_stats(reversible, index).for_potential(Potential.P55).atk == 3000

    def test_skills_switch(self, reversible):
        assert get_character_skills(reversible, 0).pre_extreme.super_attack.name == "魔閃光"
        assert get_character_skills(reversible, 1).pre_extreme.super_attack.name == "激烈"

    def test_display_name_is_character_name(self, reversible):
        assert get_display_name(reversible, 1) == "孫悟飯"

    def test_image(self, reversible):
        assert get_image_url(reversible, 1) == "/future.png"


class TestFormlessCharacter:
    """A character with no forms at all has nothing to resolve."""

    def test_everything_empty(self):
        character = Character(id="x")
        assert get_character_stats(character) is None
        assert get_character_skills(character) is None
        assert get_display_name(character) == ""
        assert get_image_url(character) == ""
