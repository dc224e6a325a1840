"""
Attack multipliers and the LR post-action formula.
"""

import math

from .models import (
    Character,
    CharacterSkills,
    PotentialStats,
    SkillKind,
    StatLine,
    SuperAttack,
)
from .skills import select_skill


def resolve_ultra_multiplier(skills: CharacterSkills | None) -> float | None:
    """
    Get the ultra super attack multiplier of the highest tier that has one.

    Returns:
        The multiplier, or None to leave ATK unchanged.
    """
    ultra = select_skill(
        skills,
        SkillKind.ULTRA_SUPER_ATTACK,
        lambda skill: bool(skill.multiplier),
    )
    if ultra is None:
        return None
    return ultra.multiplier


def apply_ultra_multiplier(atk: int, multiplier: float | None) -> int:
    if multiplier:
        return math.floor(atk * multiplier)
    return atk


def is_action_formula_applicable(character: Character, super_attack: SuperAttack | None) -> bool:
    """The post-action formula only applies to LR units with a repeat-hit count."""
    return character.is_lr and super_attack is not None and bool(super_attack.super_attack_count)


def resolve_action_stats(
    steady: StatLine,
    base_stats: PotentialStats,
    super_attack: SuperAttack,
    ultra_multiplier: float | None,
) -> StatLine:
    """
    Compute LR stats after the unit has acted.

    The ultra attack hits once, the super attack hits `n` times, and each
    super attack stacks its per-hit ATK boost (which also raises DEF).

    Args:
        steady: Steady-state stats with situational bonuses included.
        base_stats: Raw 100%-potential stats of the unit.
        super_attack: The resolved super attack (must carry a repeat count).
        ultra_multiplier: The resolved ultra multiplier, if any.

    Returns:
        Post-action stats. HP is carried over unchanged.
    """
    count = super_attack.super_attack_count or 0
    super_multiplier = super_attack.multiplier or 0
    boost = super_attack.stat_boost.atk if super_attack.stat_boost else None

    ultra_portion = math.floor(steady.atk * (ultra_multiplier or 0))
    super_portion = math.floor(steady.atk * super_multiplier * count)

    boost_portion = 0
    if boost:
        per_hit = math.floor(base_stats.atk * boost)
        boost_portion = math.floor(per_hit * boost) * count

    result_def = steady.def_
    if boost:
        result_def += math.floor(base_stats.def_ * boost * (count + 1))

    return StatLine(
        hp=steady.hp,
        atk=ultra_portion + super_portion + boost_portion,
        def_=result_def,
    )
