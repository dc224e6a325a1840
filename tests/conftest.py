"""
Shared fixtures and factories for the stat engine tests.
"""

import pytest

from team_stats.models import Character, Team, TeamSlot


def make_stats(atk: int = 10000, def_: int = 5000, hp: int = 12000) -> dict:
    """Stats block with the same numbers at both potentials."""
    line = {"hp": hp, "atk": atk, "def": def_}
    return {"potential_55": dict(line), "potential_100": dict(line)}


def make_character(
    id: str = "unit",
    attribute: str = "超力",
    categories: list[str] | None = None,
    display_name: str = "テストユニット",
    rarity: str = "UR",
    skills: dict | None = None,
    stats: dict | None = None,
) -> Character:
    """Build a single-form character from plain data, the way YAML would supply it."""
    return Character.model_validate(
        {
            "id": id,
            "name": display_name,
            "attribute": attribute,
            "rarity": rarity,
            "categories": categories or [],
            "forms": [
                {
                    "display_name": display_name,
                    "stats": stats if stats is not None else make_stats(),
                    "skills": skills or {},
                }
            ],
        }
    )


def leader_skills(*conditions: dict, tier: str = "super_extreme") -> dict:
    """Skills dict with a single leader skill at one tier."""
    return {
        tier: {
            "leader_skill": {
                "name": "リーダースキル",
                "original_effect": f"{tier} leader",
                "conditions": list(conditions),
            }
        }
    }


def passive_skills(stat_boosts, tier: str = "pre_extreme") -> dict:
    """Skills dict with a single passive at one tier."""
    return {tier: {"passive_skill": {"name": "パッシブスキル", "stat_boosts": stat_boosts}}}


def make_team(**slots: Character | tuple[Character, int]) -> Team:
    """
    Build a team from keyword positions.

    make_team(leader=a, friend=b, m1=c) places a at 0, b at 6, c at 1.
    A (character, form_index) tuple selects a form.
    """
    positions = {"leader": 0, "friend": 6, "m1": 1, "m2": 2, "m3": 3, "m4": 4, "m5": 5}
    team_slots = []
    for key, value in slots.items():
        character, form_index = value if isinstance(value, tuple) else (value, 0)
        team_slots.append(
            TeamSlot(position=positions[key], character=character, form_index=form_index)
        )
    return Team(slots=team_slots)


@pytest.fixture
def plain_unit() -> Character:
    """A unit with stats and no skills at all."""
    return make_character(id="plain")


@pytest.fixture
def empty_team() -> Team:
    return Team.empty()
