"""
Character accessors.

Resolve "the active form's data" for both character layouts: ordered
`forms` carry their own stats and skills, while `reversible_forms` only
carry skills and share the character-level stats.
"""

import logging

from .models import Character, CharacterSkills, CharacterStats

logger = logging.getLogger(__name__)


def clamp_form_index(character: Character, form_index: int) -> int:
    """
    Clamp an active-form index into the character's valid range.

    Callers never validate the index before asking for stats, so an
    out-of-range value is pulled back to the nearest valid form.
    """
    count = character.form_count
    if count == 0:
        return 0

    clamped = max(0, min(form_index, count - 1))
    if clamped != form_index:
        logger.debug(f"Clamped form index {form_index} -> {clamped} for {character.id}")
    return clamped


def get_character_skills(character: Character, form_index: int = 0) -> CharacterSkills | None:
    """Get the skills of the active form."""
    index = clamp_form_index(character, form_index)

    if character.reversible_forms:
        return character.reversible_forms[index].skills
    if character.forms:
        return character.forms[index].skills
    return None


def get_character_stats(character: Character, form_index: int = 0) -> CharacterStats | None:
    """Get the base stats of the active form (character-level for reversible units)."""
    if character.reversible_forms:
        return character.stats
    if character.forms:
        return character.forms[clamp_form_index(character, form_index)].stats
    return None


def get_display_name(character: Character, form_index: int = 0) -> str:
    """
    Get the name shown on the card.

    Reversible characters use the character name; form-based characters use
    the active form's display name.
    """
    if character.reversible_forms:
        return character.name or ""
    if character.forms:
        return character.forms[clamp_form_index(character, form_index)].display_name
    return ""


def get_image_url(character: Character, form_index: int = 0) -> str:
    """Get the image of the active form."""
    index = clamp_form_index(character, form_index)

    if character.reversible_forms:
        return character.reversible_forms[index].image_url or ""
    if character.forms:
        return character.forms[index].image_url or ""
    return ""
