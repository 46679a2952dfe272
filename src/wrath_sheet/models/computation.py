"""Computation records and the computed stats snapshot.

These models are the outbound seam of the computation engine: one
``Computation`` per evaluated property for audit display, a list of
``ComputationError`` records for properties that could not be evaluated,
and an ``EntityStats`` snapshot used by the dice engine.

All models are frozen and round-trip through JSON without loss; the only
lossy formatting is in the human-readable ``breakdown`` strings.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from wrath_sheet.models.enums import Attribute, EffectOperation, PropertyType, Skill
from wrath_sheet.models.properties import Number


# =============================================================================
# Per-property Records
# =============================================================================


class ComputedEffect(BaseModel):
    """An effect as it was applied to one property.

    Attributes:
        effect_id: Id of the effect or bonus node.
        effect_name: Display name of the effect node.
        operation: How the amount was combined.
        amount: Resolved numeric amount.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    effect_id: str
    effect_name: str
    operation: EffectOperation
    amount: Number


class Computation(BaseModel):
    """The evaluated value of one property and how it was reached.

    Attributes:
        property_id: Id of the evaluated node.
        property_name: Display name of the node.
        semantic_name: Name the value is published under.
        property_type: Kind of node.
        base: Value before effects.
        result: Final value.
        effects: Effects applied, in application order.
        breakdown: Human-readable audit trail.
        clamped: Whether the value was raised to its floor.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    property_id: str
    property_name: str
    semantic_name: str
    property_type: PropertyType
    base: Number
    result: Number
    effects: tuple[ComputedEffect, ...] = ()
    breakdown: tuple[str, ...] = ()
    clamped: bool = False


class ComputationError(BaseModel):
    """A failure recorded against one property during computation.

    Attributes:
        property_id: Id of the property whose computation was affected.
        property_name: Display name of that property.
        message: What went wrong.
        formula: Offending formula text, when a formula failed.
        effect_id: Id of the failing effect node, when an effect failed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    property_id: str
    property_name: str
    message: str
    formula: str | None = None
    effect_id: str | None = None


# =============================================================================
# Stats Snapshot
# =============================================================================


class AttributeValues(BaseModel):
    """Computed values of the seven attributes."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strength: Number = 1
    toughness: Number = 1
    agility: Number = 1
    initiative: Number = 1
    willpower: Number = 1
    intellect: Number = 1
    fellowship: Number = 1

    def get(self, attribute: Attribute | str) -> Number:
        """Get the value of one attribute by name."""
        return getattr(self, Attribute(attribute).value)


class SkillValues(BaseModel):
    """Computed ranks of the eighteen skills (ranks plus add effects)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    athletics: Number = 0
    awareness: Number = 0
    ballistic_skill: Number = 0
    cunning: Number = 0
    deception: Number = 0
    insight: Number = 0
    intimidation: Number = 0
    investigation: Number = 0
    leadership: Number = 0
    medicae: Number = 0
    persuasion: Number = 0
    pilot: Number = 0
    psychic_mastery: Number = 0
    scholar: Number = 0
    stealth: Number = 0
    survival: Number = 0
    tech: Number = 0
    weapon_skill: Number = 0

    def get(self, skill: Skill | str) -> Number:
        """Get the ranks of one skill by name."""
        return getattr(self, Skill(skill).value)


class DerivedStats(BaseModel):
    """Combat and social stats derived from attributes and tier.

    Attributes:
        defence: 1 + half Initiative.
        resilience: 1 + Toughness.
        determination: 1 + half Willpower.
        max_wounds: Tier + Toughness.
        max_shock: Tier + Willpower.
        speed: 6 + half Agility, never below 6.
        passive_awareness: Half Intellect.
        conviction: Willpower.
        resolve: Half Willpower, never below 1.
        influence: Tier.
        wealth: Tier.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    defence: Number
    resilience: Number
    determination: Number
    max_wounds: Number
    max_shock: Number
    speed: Number
    passive_awareness: Number
    conviction: Number
    resolve: Number
    influence: Number
    wealth: Number


class EntityStats(BaseModel):
    """Flat computed snapshot of an entity.

    This is a cache of a computation over the entity's properties and is
    never a second source of truth.

    Example:
        >>> stats.dice_pool("medicae", bonus_dice=4)
        11
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tier: int = Field(ge=0, description="Campaign tier the stats were computed at")
    attributes: AttributeValues = Field(default_factory=AttributeValues)
    skills: SkillValues = Field(default_factory=SkillValues)
    derived: DerivedStats

    def dice_pool(self, skill: Skill | str, bonus_dice: Number = 0) -> Number:
        """Size of the pool for a test of a skill with its linked attribute.

        Args:
            skill: Skill being tested.
            bonus_dice: Extra dice from abilities or circumstance.

        Returns:
            Attribute + skill ranks + bonus dice.
        """
        tested = Skill(skill)
        return self.attributes.get(tested.linked_attribute) + self.skills.get(tested) + bonus_dice


class ComputationResult(BaseModel):
    """Everything one computation pass produced.

    Attributes:
        computations: Records keyed by property id.
        errors: Failures recorded during the pass.
        variables: Final variable namespace.
        stats: Flat stats snapshot.
        computed_at: When the pass ran.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    computations: dict[str, Computation] = Field(default_factory=dict)
    errors: tuple[ComputationError, ...] = ()
    variables: dict[str, Number] = Field(default_factory=dict)
    stats: EntityStats
    computed_at: datetime = Field(default_factory=datetime.now)

    @property
    def has_errors(self) -> bool:
        """Whether any property failed to compute."""
        return bool(self.errors)

    def errors_for(self, property_id: str) -> list[ComputationError]:
        """Get the errors recorded against one property."""
        return [error for error in self.errors if error.property_id == property_id]


__all__ = [
    "ComputedEffect",
    "Computation",
    "ComputationError",
    "AttributeValues",
    "SkillValues",
    "DerivedStats",
    "EntityStats",
    "ComputationResult",
]
