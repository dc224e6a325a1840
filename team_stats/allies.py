"""
Ally counting for dynamic passive bonuses.

"ATK +X% per ally that is Super-type or <category>" style effects scale with
how many teammates satisfy the rule.
"""

from enum import Enum

from pydantic import BaseModel, Field

from .models import PowerTier, TeamSlot


class AllyRuleType(str, Enum):
    """Supported ally-count rule types."""

    ATTRIBUTE_OR_CATEGORY = "attribute_or_category"


class AllySelection(str, Enum):
    """How the attribute and category tallies are combined."""

    MOST = "most"  # Whichever grouping is larger


class AllyCountRule(BaseModel):
    """An ally-count rule built from an `ally_count` boost branch."""

    type: str = AllyRuleType.ATTRIBUTE_OR_CATEGORY.value
    targets: list[str] = Field(default_factory=list)
    select: str = AllySelection.MOST.value


_ATTRIBUTE_MARKERS = {tier.value for tier in PowerTier}


def count_allies(rule: AllyCountRule, team_slots: list[TeamSlot]) -> int:
    """
    Count the team members matching an attribute-or-category rule.

    Bare power-tier markers ("超", "極") tally units whose attribute starts
    with them; every other target tallies units carrying that category.

    Args:
        rule: The rule to evaluate.
        team_slots: Every slot of the team, the unit itself included.

    Returns:
        The larger of the two tallies for `select == "most"`, otherwise 0.
    """
    if rule.type != AllyRuleType.ATTRIBUTE_OR_CATEGORY:
        return 0

    attribute_count = 0
    category_count = 0

    for slot in team_slots:
        character = slot.character
        if character is None:
            continue

        for target in rule.targets:
            if target in _ATTRIBUTE_MARKERS:
                if character.attribute.startswith(target):
                    attribute_count += 1
            elif target in character.categories:
                category_count += 1

    if rule.select == AllySelection.MOST:
        return max(attribute_count, category_count)
    return 0
