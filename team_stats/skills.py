"""
Skill tier selection.

Every skill kind is looked up the same way: walk the tiers from
`super_extreme` down to `pre_extreme` and take the first tier that carries
the kind. Tiers are independent per kind, and a tier is never blended with
another one.
"""

from collections.abc import Callable
from typing import Any

from .models import (
    KI_MAX,
    KI_MIN,
    TIER_PRIORITY,
    CharacterSkills,
    LeaderSkill,
    PassiveSkill,
    SkillKind,
    SkillSet,
    SuperAttack,
    UltraSuperAttack,
)

SkillPredicate = Callable[[Any], bool]


def select_tier(
    skills: CharacterSkills | None,
    kind: SkillKind,
    require: SkillPredicate | None = None,
) -> SkillSet | None:
    """
    Select the highest tier whose `kind` skill is present.

    Args:
        skills: Skill sets per tier.
        kind: Which skill kind to look for.
        require: Optional extra check on the skill itself. A tier whose skill
                 fails the check is treated as if the skill were missing.

    Returns:
        The winning tier's skill set, or None if no tier qualifies.
    """
    if skills is None:
        return None

    for tier in TIER_PRIORITY:
        skill_set = skills.tier(tier)
        if skill_set is None:
            continue

        skill = getattr(skill_set, kind.value)
        if skill is None:
            continue
        if require is not None and not require(skill):
            continue

        return skill_set

    return None


def select_skill(
    skills: CharacterSkills | None,
    kind: SkillKind,
    require: SkillPredicate | None = None,
) -> Any:
    """Select the `kind` skill from the highest qualifying tier."""
    skill_set = select_tier(skills, kind, require)
    if skill_set is None:
        return None
    return getattr(skill_set, kind.value)


def _has_usable_condition(skill: LeaderSkill) -> bool:
    return any(condition.has_multiplier for condition in skill.conditions)


def get_leader_skill(skills: CharacterSkills | None) -> LeaderSkill | None:
    """Leader skill of the highest tier that has at least one usable condition."""
    return select_skill(skills, SkillKind.LEADER, _has_usable_condition)


def get_passive_skill(skills: CharacterSkills | None) -> PassiveSkill | None:
    """Passive skill of the highest tier that defines a boost tree."""
    return select_skill(
        skills,
        SkillKind.PASSIVE,
        lambda skill: skill.stat_boosts is not None,
    )


def get_super_attack(skills: CharacterSkills | None) -> SuperAttack | None:
    return select_skill(skills, SkillKind.SUPER_ATTACK)


def get_ultra_super_attack(skills: CharacterSkills | None) -> UltraSuperAttack | None:
    return select_skill(skills, SkillKind.ULTRA_SUPER_ATTACK)


def _clamp_ki(value: float) -> float:
    return max(KI_MIN, min(KI_MAX, value))


def _has_ki_condition(skill: LeaderSkill) -> bool:
    return any(condition.ki is not None for condition in skill.conditions)


def leader_skill_ki(skills: CharacterSkills | None) -> float:
    """
    Get the ki bonus granted by the leader skill.

    Tiers whose conditions carry no ki are skipped, so a lower tier can
    supply the value.

    Returns:
        The first ki value found (clamped to 0-24), or 0 if no tier has one.
    """
    leader = select_skill(skills, SkillKind.LEADER, _has_ki_condition)
    if leader is None:
        return 0

    for condition in leader.conditions:
        if condition.ki is not None:
            return _clamp_ki(condition.ki)
    return 0


def passive_skill_ki(skills: CharacterSkills | None) -> float:
    """Get the passive's innate ki bonus (`stat_boosts.basic.ki`, 0-24)."""

    def has_basic_ki(skill: PassiveSkill) -> bool:
        basic = (skill.stat_boosts or {}).get("basic")
        if not isinstance(basic, dict):
            return False
        ki = basic.get("ki")
        return isinstance(ki, (int, float)) and not isinstance(ki, bool) and ki != 0

    passive = select_skill(skills, SkillKind.PASSIVE, has_basic_ki)
    if passive is None:
        return 0
    return _clamp_ki(passive.stat_boosts["basic"]["ki"])


def super_attack_count(skills: CharacterSkills | None) -> int:
    """Repeat-hit count of the resolved super attack (0 if none)."""
    super_attack = get_super_attack(skills)
    if super_attack is None:
        return 0
    return super_attack.super_attack_count or 0


def get_display_leader_skill(skills: CharacterSkills | None) -> LeaderSkill | None:
    """Leader skill of the highest tier that carries display text."""
    return select_skill(skills, SkillKind.LEADER, lambda skill: bool(skill.original_effect))
