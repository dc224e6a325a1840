"""
Pydantic models for roster and character data.

All models represent human-curated data supplied by the data loader.
Fields are designed to be flexible for partial/incomplete data: the stat
engine treats anything missing as "no bonus" instead of failing.
"""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

# =============================================================================
# CONSTANTS
# =============================================================================

LEADER_POSITION = 0
FRIEND_POSITION = 6
TEAM_SIZE = 7

KI_MIN = 0
KI_MAX = 24

# =============================================================================
# ENUMS
# =============================================================================


class PowerTier(str, Enum):
    """Power-tier prefix carried by every attribute."""

    SUPER = "超"
    EXTREME = "極"


class SkillTier(str, Enum):
    """Skill power levels, declared from lowest to highest."""

    PRE_EXTREME = "pre_extreme"
    POST_EXTREME = "post_extreme"
    SUPER_EXTREME = "super_extreme"


# Lookup order: the first tier that carries a skill kind wins
TIER_PRIORITY = (SkillTier.SUPER_EXTREME, SkillTier.POST_EXTREME, SkillTier.PRE_EXTREME)


class SkillKind(str, Enum):
    """Skill kinds available inside one tier."""

    LEADER = "leader_skill"
    SUPER_ATTACK = "super_attack"
    ULTRA_SUPER_ATTACK = "ultra_super_attack"
    PASSIVE = "passive_skill"
    ACTIVE = "active_skill"


class ConditionType(str, Enum):
    """Leader/friend skill condition types."""

    ATTRIBUTE = "attribute"
    CHARACTER = "character"
    CATEGORY = "category"
    ADDITIONAL_CATEGORY = "additional_category"
    UNKNOWN = "unknown"  # Anything the data uses that we don't understand


class Potential(str, Enum):
    """Stat-growth checkpoints at which base stats are published."""

    P55 = "potential_55"
    P100 = "potential_100"


LR_RARITY = "LR"


def _number_or_none(value: Any) -> float | None:
    """Read a numeric field leniently; anything non-numeric counts as absent."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _def_field(default: Any = None) -> Any:
    """`def` is a Python keyword, so the field is `def_` with `def` as its alias."""
    return Field(
        default=default,
        validation_alias=AliasChoices("def", "def_", "DEF"),
        serialization_alias="def",
    )


# =============================================================================
# SKILL MODELS
# =============================================================================


class Condition(BaseModel):
    """One leader/friend skill condition and the multipliers it grants."""

    type: ConditionType = ConditionType.UNKNOWN
    target: list[str] = Field(default_factory=list)  # OR'd together
    ki: float | None = None
    hp: float | None = None
    atk: float | None = None
    def_: float | None = _def_field()

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> ConditionType:
        try:
            return ConditionType(value)
        except ValueError:
            return ConditionType.UNKNOWN

    @field_validator("target", mode="before")
    @classmethod
    def _wrap_target(cls, value: Any) -> list:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("ki", "hp", "atk", "def_", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float | None:
        return _number_or_none(value)

    @property
    def has_multiplier(self) -> bool:
        return any(v is not None for v in (self.ki, self.hp, self.atk, self.def_))


class LeaderSkill(BaseModel):
    """Leader skill definition (also used from the friend slot)."""

    name: str | None = None
    conditions: list[Condition] = Field(default_factory=list)
    original_effect: str | None = None  # Display text as written in game
    effect: str | None = None


class SuperAttackBoost(BaseModel):
    """Per-hit stat boost granted by a super attack."""

    atk: float | None = None
    def_: float | None = _def_field()

    @field_validator("atk", "def_", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float | None:
        return _number_or_none(value)


class SuperAttack(BaseModel):
    """Super attack definition."""

    name: str | None = None
    effect: str | None = None
    multiplier: float | None = None
    super_attack_count: int | None = None  # Repeat-hit count (LR units)
    stat_boost: SuperAttackBoost | None = None

    @field_validator("multiplier", mode="before")
    @classmethod
    def _coerce_multiplier(cls, value: Any) -> float | None:
        return _number_or_none(value)

    @field_validator("super_attack_count", mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> int | None:
        number = _number_or_none(value)
        return int(number) if number is not None else None


class UltraSuperAttack(BaseModel):
    """Ultra super attack definition."""

    name: str | None = None
    effect: str | None = None
    multiplier: float | None = None

    @field_validator("multiplier", mode="before")
    @classmethod
    def _coerce_multiplier(cls, value: Any) -> float | None:
        return _number_or_none(value)


class PassiveSkill(BaseModel):
    """
    Passive skill definition.

    `stat_boosts` is a free-form nested mapping. Leaf keys `atk`, `def`,
    `def_down` and `ki` hold numbers; reserved branch names (`basic`,
    `defensive`, `conditions`, `ally_count`, `*_support`) are interpreted by
    the boost aggregator, every other key is just a grouping label.
    """

    name: str | None = None
    effect: str | None = None
    stat_boosts: dict[str, Any] | None = None

    @field_validator("stat_boosts", mode="before")
    @classmethod
    def _coerce_tree(cls, value: Any) -> dict | None:
        if value is None:
            return None
        if not isinstance(value, dict):
            return {}  # Placeholder lists in hand-written data mean "nothing yet"
        return value


class ActiveSkill(BaseModel):
    """Active skill definition (display only)."""

    name: str | None = None
    effect: str | None = None


class SkillSet(BaseModel):
    """All skill kinds available at one tier."""

    leader_skill: LeaderSkill | None = None
    super_attack: SuperAttack | None = None
    ultra_super_attack: UltraSuperAttack | None = None
    passive_skill: PassiveSkill | None = None
    active_skill: ActiveSkill | None = None


class CharacterSkills(BaseModel):
    """Skill sets per tier. Any tier may be missing."""

    pre_extreme: SkillSet | None = None
    post_extreme: SkillSet | None = None
    super_extreme: SkillSet | None = None

    def tier(self, tier: SkillTier) -> SkillSet | None:
        """Get the skill set for a tier."""
        return getattr(self, tier.value)


# =============================================================================
# CHARACTER MODELS
# =============================================================================


class PotentialStats(BaseModel):
    """Base HP/ATK/DEF at one potential checkpoint."""

    hp: int = Field(default=0, ge=0, validation_alias=AliasChoices("hp", "HP"))
    atk: int = Field(default=0, ge=0, validation_alias=AliasChoices("atk", "ATK"))
    def_: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("def", "def_", "DEF"),
        serialization_alias="def",
    )


class CharacterStats(BaseModel):
    """Published base stats."""

    potential_55: PotentialStats | None = None
    potential_100: PotentialStats | None = None

    def for_potential(self, potential: Potential) -> PotentialStats | None:
        """Get the stats published for a potential checkpoint."""
        return getattr(self, potential.value)


class CharacterForm(BaseModel):
    """A transformation form with its own stats and skills."""

    display_name: str = ""
    image_url: str | None = None
    stats: CharacterStats | None = None
    skills: CharacterSkills | None = None


class ReversibleForm(BaseModel):
    """A reversible form: skills and image only, stats live on the character."""

    image_url: str | None = None
    skills: CharacterSkills | None = None


class Character(BaseModel):
    """
    Character definition.

    A character has either ordered `forms` (index 0 is the base form) or a
    pair of `reversible_forms` that share the character-level `stats`.
    """

    # Identity
    id: str
    name: str = ""
    attribute: str = ""  # Power-tier prefix + element, e.g. "超力"
    type: str | None = None
    rarity: str | None = None
    cost: int | None = None

    # Team-building tags
    categories: list[str] = Field(default_factory=list)
    link_skills: list[str] = Field(default_factory=list)  # Display only

    # Forms
    forms: list[CharacterForm] = Field(default_factory=list)
    reversible_forms: list[ReversibleForm] = Field(default_factory=list)
    stats: CharacterStats | None = None  # Only used with reversible_forms

    @field_validator("id", "rarity", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str | None:
        if value is None:
            return None
        return str(value)

    @field_validator("categories", "link_skills", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list:
        return value or []

    @model_validator(mode="after")
    def _check_form_layout(self) -> "Character":
        if self.forms and self.reversible_forms:
            raise ValueError(f"Character {self.id} defines both forms and reversible_forms")
        return self

    @property
    def is_lr(self) -> bool:
        return self.rarity == LR_RARITY

    @property
    def is_reversible(self) -> bool:
        """Whether this character can switch between reversible forms."""
        return len(self.reversible_forms) > 1

    @property
    def has_multiple_forms(self) -> bool:
        return len(self.forms) > 1

    @property
    def form_count(self) -> int:
        if self.reversible_forms:
            return len(self.reversible_forms)
        return len(self.forms)

    @property
    def power_tier(self) -> PowerTier | None:
        """Derive the power tier from the attribute prefix."""
        for tier in PowerTier:
            if self.attribute.startswith(tier.value):
                return tier
        return None


# =============================================================================
# TEAM MODELS
# =============================================================================


class TeamSlot(BaseModel):
    """
    One roster position. 0 = leader, 1-5 = members, 6 = friend.

    The slot references a character; it never owns or mutates it.
    """

    position: int = Field(ge=0, le=TEAM_SIZE - 1)
    character: Character | None = None
    form_index: int = 0  # Active form of the placed character

    @property
    def is_empty(self) -> bool:
        return self.character is None


class Team(BaseModel):
    """A 7-slot roster snapshot. Missing positions are filled with empty slots."""

    slots: list[TeamSlot] = Field(default_factory=list)

    @model_validator(mode="after")
    def _normalize_slots(self) -> "Team":
        by_position: dict[int, TeamSlot] = {}
        for slot in self.slots:
            if slot.position in by_position:
                raise ValueError(f"Duplicate team position: {slot.position}")
            by_position[slot.position] = slot

        self.slots = [
            by_position.get(position, TeamSlot(position=position))
            for position in range(TEAM_SIZE)
        ]
        return self

    @classmethod
    def empty(cls) -> "Team":
        """Build a roster with every slot empty."""
        return cls()

    def slot(self, position: int) -> TeamSlot | None:
        """Get the slot at a position."""
        if 0 <= position < len(self.slots):
            return self.slots[position]
        return None

    @property
    def leader(self) -> TeamSlot:
        return self.slots[LEADER_POSITION]

    @property
    def friend(self) -> TeamSlot:
        return self.slots[FRIEND_POSITION]

    @property
    def members(self) -> list[TeamSlot]:
        return self.slots[LEADER_POSITION + 1 : FRIEND_POSITION]

    def occupied(self) -> list[TeamSlot]:
        """Slots that currently hold a character."""
        return [slot for slot in self.slots if slot.character is not None]

    def with_character(
        self,
        position: int,
        character: Character | None,
        form_index: int = 0,
    ) -> "Team":
        """Return a copy of this team with one slot replaced."""
        slots = [
            TeamSlot(position=position, character=character, form_index=form_index)
            if slot.position == position
            else slot
            for slot in self.slots
        ]
        return Team(slots=slots)

    def cache_key(self) -> tuple:
        """Hashable identity of the composition, for memoization."""
        return tuple(
            (slot.position, slot.character.id if slot.character else None, slot.form_index)
            for slot in self.slots
        )


class TeamEntry(BaseModel):
    """Team file entry referencing a character by ID."""

    position: int = Field(ge=0, le=TEAM_SIZE - 1)
    character_id: str
    form_index: int = Field(default=0, ge=0)

    @field_validator("character_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return str(value)


class TeamSpec(BaseModel):
    """Team file as written by humans: positions mapped to character IDs."""

    id: str
    name: str | None = None
    notes: str | None = None
    slots: list[TeamEntry] = Field(default_factory=list)


# =============================================================================
# RESULT MODELS
# =============================================================================


class StatLine(BaseModel):
    """Resolved HP/ATK/DEF triple. Always integers."""

    hp: int = 0
    atk: int = 0
    def_: int = _def_field(0)


class StatMultipliers(BaseModel):
    """Aggregate leader + friend multipliers. 0 means "no bonus"."""

    atk: float = 0
    def_: float = _def_field(0)
    hp: float = 0


class SlotStats(BaseModel):
    """Everything the presentation layer shows for one occupied slot."""

    position: int
    character_id: str
    form_index: int = 0
    potential_55: StatLine | None = None
    potential_100: StatLine | None = None
    after_action: StatLine | None = None
    super_attack_count: int = 0
    leader_ki: float = 0
    passive_ki: float = 0


class TeamSkillSummary(BaseModel):
    """Leader and friend skill texts for the team-skill display."""

    leader_text: str
    friend_text: str
    leader_conditions: list[Condition] = Field(default_factory=list)
    friend_conditions: list[Condition] = Field(default_factory=list)
