"""
Passive skill stat boosts.

A passive's `stat_boosts` is a nested mapping of grouping labels down to
numeric leaves (`atk`, `def`, `def_down`). A handful of branch names are
reserved and change how the walker treats them:

- `basic`: the multiplicative seed, applied separately by the caller
- `defensive`: retaliation-only effects, never part of resting stats
- `conditions`: situational bonuses, only counted after acting
- `ally_count`: a per-ally rate scaled by how many teammates match
- `*_support`: buffs granted to other units

Every other key is a plain grouping label and is recursed into.
"""

import math
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from .allies import AllyCountRule, AllySelection


class StatKey(str, Enum):
    """Leaf keys the aggregator can sum."""

    ATK = "atk"
    DEF = "def"
    DEF_DOWN = "def_down"


class BoostBranch(str, Enum):
    """Reserved branch names in a boost tree."""

    BASIC = "basic"
    DEFENSIVE = "defensive"
    CONDITIONS = "conditions"
    ALLY_COUNT = "ally_count"


SUPPORT_SUFFIX = "_support"

AllyCounter = Callable[[AllyCountRule], int]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _ally_count_term(branch: Mapping, stat_key: StatKey, count_allies: AllyCounter | None) -> float:
    """
    Evaluate an `ally_count` branch.

    Shape: {"target": [...], "<stat>": {"per_ally": rate}}. Contributes
    1.0 + rate * allies, the same "1.x" form as other multiplicative leaves.
    """
    if count_allies is None:
        return 0.0

    targets = branch.get("target")
    rate_branch = branch.get(stat_key.value)
    if not isinstance(targets, list) or not targets or not isinstance(rate_branch, Mapping):
        return 0.0

    per_ally = rate_branch.get("per_ally")
    if not _is_number(per_ally):
        return 0.0

    allies = count_allies(AllyCountRule(targets=targets, select=AllySelection.MOST.value))
    return 1.0 + per_ally * allies


def collect_stat_values(
    tree: Mapping | None,
    stat_key: StatKey,
    exclude_basic: bool = False,
    include_conditions: bool = False,
    count_allies: AllyCounter | None = None,
) -> float:
    """
    Recursively sum every `stat_key` leaf of a boost tree.

    Args:
        tree: The boost tree (or any sub-branch of it).
        stat_key: Which leaf to sum.
        exclude_basic: Skip the `basic` branch.
        include_conditions: Count the `conditions` branch.
        count_allies: Ally counter bound to the current team; without one,
                      `ally_count` branches contribute nothing.

    Returns:
        The summed contribution. Non-numeric leaves are ignored.
    """
    if not isinstance(tree, Mapping):
        return 0.0
    stat_key = StatKey(stat_key)

    total = 0.0
    for key, value in tree.items():
        if exclude_basic and key == BoostBranch.BASIC:
            continue
        if key == BoostBranch.DEFENSIVE:
            continue
        if key == BoostBranch.CONDITIONS and not include_conditions:
            continue
        if isinstance(key, str) and key.endswith(SUPPORT_SUFFIX):
            continue

        if key == BoostBranch.ALLY_COUNT:
            if isinstance(value, Mapping):
                total += _ally_count_term(value, stat_key, count_allies)
            continue

        if key == stat_key and _is_number(value):
            total += value
        elif isinstance(value, Mapping):
            total += collect_stat_values(
                value,
                stat_key,
                exclude_basic,
                include_conditions,
                count_allies,
            )

    return total


def get_basic_value(tree: Mapping | None, stat_key: StatKey) -> float | None:
    """Get the `basic.<stat>` seed multiplier, if the tree defines a non-zero one."""
    if not isinstance(tree, Mapping):
        return None
    stat_key = StatKey(stat_key)
    basic = tree.get(BoostBranch.BASIC.value)
    if not isinstance(basic, Mapping):
        return None
    value = basic.get(stat_key.value)
    if _is_number(value) and value:
        return value
    return None


def apply_stat_boost(
    current: int,
    tree: Mapping | None,
    stat_key: StatKey,
    include_conditions: bool = False,
    count_allies: AllyCounter | None = None,
) -> int:
    """
    Apply a passive's ATK or DEF boosts to a post-leader stat.

    With a `basic` seed the seed is applied first and the remaining boosts
    add `boost_sum - 1` on top of the seeded value. The same combination is
    used for ATK and DEF; plain `basic_value * boost_sum` is never used.

    Returns:
        The boosted stat, floored at each multiplication.
    """
    boost_sum = collect_stat_values(
        tree,
        stat_key,
        exclude_basic=True,
        include_conditions=include_conditions,
        count_allies=count_allies,
    )

    basic = get_basic_value(tree, stat_key)
    if basic is not None:
        basic_value = math.floor(current * basic)
        if boost_sum > 0:
            return basic_value + math.floor(basic_value * (boost_sum - 1))
        return basic_value

    if boost_sum > 0:
        return math.floor(current * boost_sum)

    return current


def apply_def_down(
    def_value: int,
    current_def: int,
    tree: Mapping | None,
    include_conditions: bool = False,
    count_allies: AllyCounter | None = None,
) -> int:
    """Subtract the passive's DEF-down, measured against the post-leader DEF."""
    def_down_sum = collect_stat_values(
        tree,
        StatKey.DEF_DOWN,
        exclude_basic=False,
        include_conditions=include_conditions,
        count_allies=count_allies,
    )
    if def_down_sum > 0:
        return def_value - math.floor(current_def * def_down_sum)
    return def_value
