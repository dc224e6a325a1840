"""
Leader/friend skill condition matching.

A condition targets units by attribute, by (part of) their display name, or
by category. Targets within one condition are OR'd together.
"""

from .characters import get_display_name
from .models import Character, Condition, ConditionType, PowerTier

ATTRIBUTE_SUFFIX = "属性"
NAME_SEPARATORS = ("または", "&")


def matches_attribute(attribute: str, target: str) -> bool:
    """
    Check one attribute target.

    "力属性" (no power tier) matches both "超力" and "極力";
    "超力属性" only matches "超力".
    """
    base = target.replace(ATTRIBUTE_SUFFIX, "")
    if any(base.startswith(tier.value) for tier in PowerTier):
        return attribute == base
    return any(attribute == f"{tier.value}{base}" for tier in PowerTier)


def matches_name(display_name: str, target: str) -> bool:
    """
    Check one character-name target.

    A target split by "または" or "&" lists alternatives, and exactly one of
    them may appear in the name: a unit whose name contains two of the
    alternatives does not match.
    """
    for separator in NAME_SEPARATORS:
        if separator in target:
            names = [name.strip() for name in target.split(separator)]
            hits = [name for name in names if name in display_name]
            return len(hits) == 1
    return target in display_name


def matches_condition(character: Character, condition: Condition, form_index: int = 0) -> bool:
    """
    Evaluate a leader/friend skill condition against a character.

    Args:
        character: The unit receiving the bonus.
        condition: The condition to evaluate.
        form_index: Active form of the unit (affects the display name).

    Returns:
        True if any target matches. Unknown condition types never match.
    """
    targets = condition.target

    if condition.type == ConditionType.ATTRIBUTE:
        return any(matches_attribute(character.attribute, target) for target in targets)

    if condition.type == ConditionType.CHARACTER:
        display_name = get_display_name(character, form_index)
        return any(matches_name(display_name, target) for target in targets)

    if condition.type in (ConditionType.CATEGORY, ConditionType.ADDITIONAL_CATEGORY):
        categories = set(character.categories)
        return any(target in categories for target in targets)

    return False
