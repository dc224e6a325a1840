"""
Leader and friend skill multipliers.

Only slot 0 (leader) and slot 6 (friend) contribute. Each skill sums every
condition the unit matches, and the two subtotals are added together:
a 150% leader and a 130% friend give a 2.8x multiplier, not 1.5 * 1.3.
"""

import logging
import math

from .characters import get_character_skills
from .conditions import matches_condition
from .models import (
    Character,
    Condition,
    LeaderSkill,
    StatMultipliers,
    Team,
    TeamSkillSummary,
    TeamSlot,
)
from .skills import get_display_leader_skill, get_leader_skill

logger = logging.getLogger(__name__)

NO_LEADER_TEXT = "リーダーを設置してください"
NO_FRIEND_TEXT = "フレンドを設置してください"
NO_SKILL_TEXT = "スキル情報がありません"


def get_slot_leader_skill(slot: TeamSlot | None) -> LeaderSkill | None:
    """Get the leader skill provided by the unit in a slot, if any."""
    if slot is None or slot.character is None:
        return None
    skills = get_character_skills(slot.character, slot.form_index)
    return get_leader_skill(skills)


def _sum_matching(
    character: Character,
    conditions: list[Condition],
    form_index: int,
) -> StatMultipliers:
    """Add up the multipliers of every condition the unit matches."""
    atk = def_ = hp = 0.0

    for condition in conditions:
        if not matches_condition(character, condition, form_index):
            continue
        if condition.atk is not None:
            atk += condition.atk
        if condition.def_ is not None:
            def_ += condition.def_
        if condition.hp is not None:
            hp += condition.hp

    return StatMultipliers(atk=atk, def_=def_, hp=hp)


def resolve_leader_friend_multipliers(
    character: Character,
    team: Team,
    form_index: int = 0,
) -> StatMultipliers:
    """
    Aggregate the leader and friend multipliers applying to a unit.

    Args:
        character: The unit whose stats are being resolved.
        team: The full roster snapshot.
        form_index: Active form of the unit.

    Returns:
        Summed multipliers per stat; 0 means "no bonus".
    """
    total = StatMultipliers()

    for role, slot in (("leader", team.leader), ("friend", team.friend)):
        skill = get_slot_leader_skill(slot)
        if skill is None:
            continue

        subtotal = _sum_matching(character, skill.conditions, form_index)
        logger.debug(
            f"{role} multipliers for {character.id}: "
            f"atk={subtotal.atk} def={subtotal.def_} hp={subtotal.hp}"
        )
        total = StatMultipliers(
            atk=total.atk + subtotal.atk,
            def_=total.def_ + subtotal.def_,
            hp=total.hp + subtotal.hp,
        )

    return total


def apply_multiplier(base: int, multiplier: float) -> int:
    """Apply an aggregate multiplier; 0 leaves the base unchanged."""
    if multiplier:
        return math.floor(base * multiplier)
    return base


def _describe_slot(slot: TeamSlot, empty_text: str) -> tuple[str, list[Condition]]:
    if slot.character is None:
        return empty_text, []

    skills = get_character_skills(slot.character, slot.form_index)
    skill = get_display_leader_skill(skills)
    if skill is None:
        return NO_SKILL_TEXT, []

    # Text and conditions always come from the same tier
    return skill.original_effect, list(skill.conditions)


def describe_team_skills(team: Team) -> TeamSkillSummary:
    """Collect the leader and friend skill texts for display."""
    leader_text, leader_conditions = _describe_slot(team.leader, NO_LEADER_TEXT)
    friend_text, friend_conditions = _describe_slot(team.friend, NO_FRIEND_TEXT)

    return TeamSkillSummary(
        leader_text=leader_text,
        friend_text=friend_text,
        leader_conditions=leader_conditions,
        friend_conditions=friend_conditions,
    )
