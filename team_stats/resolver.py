"""
Stat resolution for a unit placed in a team.

Flow for one potential checkpoint:
1. Read the active form's base stats
2. Apply the summed leader + friend multipliers
3. Apply the passive's ATK/DEF boosts and DEF-down
4. Apply the ultra super attack multiplier (steady state) or the LR
   post-action formula (after acting)

Every function here is pure: the same character, form and team always give
the same result. `StatResolver` adds an optional memo cache on top.
"""

import logging
from collections import OrderedDict

from .allies import count_allies
from .attacks import (
    apply_ultra_multiplier,
    is_action_formula_applicable,
    resolve_action_stats,
    resolve_ultra_multiplier,
)
from .boosts import StatKey, apply_def_down, apply_stat_boost
from .characters import clamp_form_index, get_character_skills, get_character_stats
from .leader import apply_multiplier, resolve_leader_friend_multipliers
from .models import Character, Potential, SlotStats, StatLine, Team, TeamSlot
from .skills import (
    get_passive_skill,
    get_super_attack,
    leader_skill_ki,
    passive_skill_ki,
    super_attack_count,
)

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 1024


def resolve_stats(
    character: Character,
    team: Team,
    potential: Potential,
    form_index: int = 0,
    include_conditions: bool = False,
) -> StatLine | None:
    """
    Resolve stats after leader/friend and passive bonuses.

    The ultra multiplier is not applied here.

    Args:
        character: The unit being resolved.
        team: Full roster snapshot (read only).
        potential: Which potential checkpoint to use.
        form_index: Active form of the unit; clamped into range.
        include_conditions: Count situational (`conditions`) passive bonuses.

    Returns:
        The resolved stats, zero stats if the unit publishes no stats,
        or None if the requested potential is not published.
    """
    form_index = clamp_form_index(character, form_index)
    character_stats = get_character_stats(character, form_index)
    skills = get_character_skills(character, form_index)

    if character_stats is None:
        return StatLine()

    base = character_stats.for_potential(potential)
    if base is None:
        return None

    multipliers = resolve_leader_friend_multipliers(character, team, form_index)

    hp = apply_multiplier(base.hp, multipliers.hp)
    current_atk = apply_multiplier(base.atk, multipliers.atk)
    current_def = apply_multiplier(base.def_, multipliers.def_)

    final_atk = current_atk
    final_def = current_def

    passive = get_passive_skill(skills)
    if passive is not None and passive.stat_boosts is not None:
        tree = passive.stat_boosts

        def allies(rule):
            return count_allies(rule, team.slots)

        final_atk = apply_stat_boost(current_atk, tree, StatKey.ATK, include_conditions, allies)
        final_def = apply_stat_boost(current_def, tree, StatKey.DEF, include_conditions, allies)
        final_def = apply_def_down(final_def, current_def, tree, include_conditions, allies)

    return StatLine(hp=hp, atk=final_atk, def_=final_def)


def resolve_steady_state(
    character: Character,
    team: Team,
    form_index: int = 0,
) -> dict[Potential, StatLine | None]:
    """
    Resolve resting stats at both potential checkpoints.

    Situational bonuses are excluded and the ultra multiplier is applied.
    """
    skills = get_character_skills(character, form_index)
    ultra_multiplier = resolve_ultra_multiplier(skills)

    results: dict[Potential, StatLine | None] = {}
    for potential in Potential:
        stats = resolve_stats(character, team, potential, form_index, include_conditions=False)
        if stats is not None:
            stats = StatLine(
                hp=stats.hp,
                atk=apply_ultra_multiplier(stats.atk, ultra_multiplier),
                def_=stats.def_,
            )
        results[potential] = stats

    return results


def resolve_after_action(
    character: Character,
    team: Team,
    form_index: int = 0,
) -> StatLine | None:
    """
    Resolve stats after the unit has acted (100% potential).

    LR units with a repeat-hit super attack use the post-action formula;
    everyone else gets the conditions-included stats with the ultra
    multiplier applied.
    """
    steady = resolve_stats(
        character,
        team,
        Potential.P100,
        form_index,
        include_conditions=True,
    )
    if steady is None:
        return None

    skills = get_character_skills(character, form_index)
    character_stats = get_character_stats(character, form_index)
    if skills is None or character_stats is None:
        return steady

    super_attack = get_super_attack(skills)
    ultra_multiplier = resolve_ultra_multiplier(skills)

    if not is_action_formula_applicable(character, super_attack):
        return StatLine(
            hp=steady.hp,
            atk=apply_ultra_multiplier(steady.atk, ultra_multiplier),
            def_=steady.def_,
        )

    base_stats = character_stats.for_potential(Potential.P100)
    logger.debug(
        f"LR post-action formula for {character.id}: "
        f"{super_attack.super_attack_count} super attacks"
    )
    return resolve_action_stats(steady, base_stats, super_attack, ultra_multiplier)


def resolve_slot(slot: TeamSlot, team: Team) -> SlotStats | None:
    """
    Resolve everything shown for one slot.

    Returns:
        Slot stats, or None for an empty slot.
    """
    character = slot.character
    if character is None:
        return None

    form_index = clamp_form_index(character, slot.form_index)
    skills = get_character_skills(character, form_index)
    steady = resolve_steady_state(character, team, form_index)

    return SlotStats(
        position=slot.position,
        character_id=character.id,
        form_index=form_index,
        potential_55=steady[Potential.P55],
        potential_100=steady[Potential.P100],
        after_action=resolve_after_action(character, team, form_index),
        super_attack_count=super_attack_count(skills),
        leader_ki=leader_skill_ki(skills),
        passive_ki=passive_skill_ki(skills),
    )


def resolve_team(team: Team) -> list[SlotStats]:
    """Resolve every occupied slot of a team."""
    results = []
    for slot in team.occupied():
        stats = resolve_slot(slot, team)
        if stats is not None:
            results.append(stats)
    return results


class StatResolver:
    """
    Memoizing front end for slot resolution.

    Results are cached on (character, active form, team composition). The
    underlying functions are pure, so a cache hit always equals a fresh
    computation. The cache keeps at most `max_size` entries and evicts the
    least recently used one first.
    """

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE):
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self.max_size = max_size
        self._cache: OrderedDict[tuple, SlotStats] = OrderedDict()

    def resolve_slot(self, slot: TeamSlot, team: Team) -> SlotStats | None:
        """Resolve one slot, reusing a cached result when possible."""
        if slot.character is None:
            return None

        key = (slot.position, slot.character.id, slot.form_index, team.cache_key())
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            return cached

        stats = resolve_slot(slot, team)
        if stats is not None:
            self._cache[key] = stats
            if len(self._cache) > self.max_size:
                self._cache.popitem(last=False)
        return stats

    def resolve_team(self, team: Team) -> list[SlotStats]:
        """Resolve every occupied slot of a team."""
        results = []
        for slot in team.occupied():
            stats = self.resolve_slot(slot, team)
            if stats is not None:
                results.append(stats)
        logger.debug(f"Resolved {len(results)} slots ({len(self._cache)} cached)")
        return results

    def clear_cache(self) -> None:
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)
