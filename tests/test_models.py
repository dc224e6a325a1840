"""
Unit tests for models.py - data parsing, leniency and team normalization.
"""
import pytest
from pydantic import ValidationError

from conftest import make_character
from team_stats.models import (
    TIER_PRIORITY,
    Character,
    CharacterSkills,
    Condition,
    ConditionType,
    PassiveSkill,
    PotentialStats,
    PowerTier,
    SkillTier,
    SlotStats,
    StatLine,
    SuperAttack,
    Team,
    TeamSlot,
    TeamSpec,
)


class TestCondition:
    """Tests for leader skill condition parsing."""

    def test_def_alias(self):
        """The `def` key should populate `def_`."""
        condition = Condition.model_validate({"type": "attribute", "target": "力属性", "def": 1.5})
        assert condition.def_ == 1.5

    def test_string_target_wrapped(self):
        condition = Condition.model_validate({"type": "category", "target": "映画ボス"})
        assert condition.target == ["映画ボス"]

    def test_unknown_type(self):
        """Types we don't understand parse as UNKNOWN instead of failing."""
        condition = Condition.model_validate({"type": "link_skill", "target": ["x"]})
        assert condition.type == ConditionType.UNKNOWN

    def test_non_numeric_multiplier_is_absent(self):
        condition = Condition.model_validate({"type": "attribute", "atk": "lots", "hp": True})
        assert condition.atk is None
        assert condition.hp is None

    def test_numeric_string_multiplier(self):
        condition = Condition.model_validate({"type": "attribute", "atk": "1.5"})
        assert condition.atk == 1.5

    def test_has_multiplier(self):
        assert Condition.model_validate({"type": "attribute", "ki": 3}).has_multiplier
        assert not Condition.model_validate({"type": "attribute", "target": "力属性"}).has_multiplier


class TestSkillModels:
    """Tests for skill models."""

    def test_tier_lookup(self):
        skills = CharacterSkills.model_validate({"post_extreme": {"super_attack": {"name": "x"}}})
        assert skills.tier(SkillTier.POST_EXTREME).super_attack.name == "x"
        assert skills.tier(SkillTier.SUPER_EXTREME) is None

    def test_tier_priority_order(self):
        assert TIER_PRIORITY == (
            SkillTier.SUPER_EXTREME,
            SkillTier.POST_EXTREME,
            SkillTier.PRE_EXTREME,
        )

    def test_placeholder_boost_list(self):
        """A list where a boost tree belongs means "nothing yet"."""
        passive = PassiveSkill.model_validate({"stat_boosts": []})
        assert passive.stat_boosts == {}

    def test_super_attack_count_coerced(self):
        super_attack = SuperAttack.model_validate({"super_attack_count": "2", "multiplier": "x"})
        assert super_attack.super_attack_count == 2
        assert super_attack.multiplier is None


class TestCharacter:
    """Tests for Character parsing and properties."""

    def test_uppercase_stat_keys(self):
        stats = PotentialStats.model_validate({"HP": 100, "ATK": 200, "DEF": 300})
        assert (stats.hp, stats.atk, stats.def_) == (100, 200, 300)

    def test_negative_stats_rejected(self):
        with pytest.raises(ValidationError):
            PotentialStats.model_validate({"atk": -1})

    def test_numeric_id_and_rarity(self):
        character = Character.model_validate({"id": 1012, "rarity": 5})
        assert character.id == "1012"
        assert character.rarity == "5"

    def test_both_form_layouts_rejected(self):
        with pytest.raises(ValidationError):
            Character.model_validate(
                {"id": "x", "forms": [{}], "reversible_forms": [{}, {}]}
            )

    def test_power_tier(self):
        assert make_character(attribute="超力").power_tier == PowerTier.SUPER
        assert make_character(attribute="極知").power_tier == PowerTier.EXTREME
        assert make_character(attribute="").power_tier is None

    def test_is_lr(self):
        assert make_character(rarity="LR").is_lr
        assert not make_character(rarity="UR").is_lr

    def test_form_counts(self):
        reversible = Character.model_validate({"id": "r", "reversible_forms": [{}, {}]})
        assert reversible.is_reversible
        assert reversible.form_count == 2

        single = make_character()
        assert not single.has_multiple_forms
        assert single.form_count == 1

    def test_null_categories(self):
        character = Character.model_validate({"id": "x", "categories": None})
        assert character.categories == []


class TestTeam:
    """Tests for Team normalization and helpers."""

    def test_empty_team_has_seven_slots(self, empty_team):
        assert len(empty_team.slots) == 7
        assert all(slot.is_empty for slot in empty_team.slots)
        assert [slot.position for slot in empty_team.slots] == list(range(7))

    def test_slots_reordered_by_position(self, plain_unit):
        team = Team(slots=[TeamSlot(position=6, character=plain_unit)])
        assert team.friend.character is plain_unit
        assert team.leader.is_empty

    def test_duplicate_position_rejected(self, plain_unit):
        with pytest.raises(ValidationError):
            Team(slots=[TeamSlot(position=2), TeamSlot(position=2, character=plain_unit)])

    def test_position_out_of_range(self):
        with pytest.raises(ValidationError):
            TeamSlot(position=7)

    def test_members(self, plain_unit):
        team = Team.empty().with_character(3, plain_unit)
        assert [slot.position for slot in team.members] == [1, 2, 3, 4, 5]
        assert team.occupied()[0].position == 3

    def test_with_character_does_not_mutate(self, plain_unit, empty_team):
        updated = empty_team.with_character(0, plain_unit, form_index=1)
        assert empty_team.leader.is_empty
        assert updated.leader.character is plain_unit
        assert updated.leader.form_index == 1

    def test_slot_out_of_range(self, empty_team):
        assert empty_team.slot(9) is None
        assert empty_team.slot(-1) is None

    def test_cache_key_tracks_composition(self, plain_unit, empty_team):
        assert empty_team.cache_key() == Team.empty().cache_key()
        assert empty_team.with_character(1, plain_unit).cache_key() != empty_team.cache_key()
        assert (
            empty_team.with_character(1, plain_unit, 0).cache_key()
            != empty_team.with_character(1, plain_unit, 1).cache_key()
        )


class TestTeamSpec:
    """Tests for team files."""

    def test_numeric_character_id(self):
        spec = TeamSpec.model_validate({"id": "t", "slots": [{"position": 0, "character_id": 42}]})
        assert spec.slots[0].character_id == "42"

    def test_negative_form_index_rejected(self):
        with pytest.raises(ValidationError):
            TeamSpec.model_validate(
                {"id": "t", "slots": [{"position": 0, "character_id": "a", "form_index": -1}]}
            )


class TestResultModels:
    """Tests for output models."""

    def test_stat_line_dumps_def(self):
        line = StatLine(hp=1, atk=2, def_=3)
        assert line.model_dump(by_alias=True) == {"hp": 1, "atk": 2, "def": 3}

    def test_slot_stats_nested_dump(self):
        stats = SlotStats(position=0, character_id="a", potential_55=StatLine(def_=5))
        dumped = stats.model_dump(by_alias=True)
        assert dumped["potential_55"]["def"] == 5
        assert dumped["after_action"] is None
