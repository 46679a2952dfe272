"""Ability models: situational capabilities that feed the dice engine.

An ability is passive data. Its conditions decide when it applies (all of
them must hold) and its effects say what it contributes: bonus dice,
rerolls, automatic icons, or text for effects a player resolves by hand.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from wrath_sheet.models.enums import (
    AbilityActivation,
    AbilityEffectType,
    Attribute,
    ConditionType,
    DamageType,
    HealType,
    RerollType,
    Skill,
    TargetKind,
)


class AbilityCondition(BaseModel):
    """One applicability condition.

    Fields other than ``type`` narrow the condition; a field left unset
    matches any context.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: ConditionType
    skill: Skill | None = None
    attribute: Attribute | None = None
    target_keyword: str | None = None
    target_type: TargetKind | None = None
    damage_type: DamageType | None = None
    situation: str | None = None


class AbilityEffect(BaseModel):
    """One effect produced when an ability applies."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: AbilityEffectType
    bonus_dice: str | None = Field(default=None, description="'rank', 'doubleRank', 'rank * N' or an integer")
    reroll_type: RerollType | None = None
    reroll_count: int | None = Field(default=None, ge=0)
    auto_icons: int | None = Field(default=None, ge=0)
    damage_bonus: str | None = None
    damage_penalty: str | None = None
    heal_amount: str | None = Field(default=None, description="Dice formula, e.g. '1d3+rank'")
    heal_type: HealType | None = None
    condition: str | None = None
    special_text: str | None = None


class AbilitySource(BaseModel):
    """Where an ability comes from."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str = Field(description="archetype, talent, species, wargear or psychic-power")
    id: str


class Ability(BaseModel):
    """A complete ability definition."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    activation: AbilityActivation
    conditions: tuple[AbilityCondition, ...] = ()
    effects: tuple[AbilityEffect, ...] = ()
    uses_per_scene: int | None = Field(default=None, ge=0)
    uses_per_combat: int | None = Field(default=None, ge=0)
    uses_per_session: int | None = Field(default=None, ge=0)
    source: AbilitySource | None = None


class AbilityContext(BaseModel):
    """The situation an ability is evaluated against.

    Attributes:
        user_rank: Rank of the character using the ability.
        user_keywords: Keywords of the user.
        skill: Skill being tested, if any.
        attribute: Attribute being tested, if any.
        target_keywords: Keywords carried by the target.
        target_type: Relationship of the target to the user.
        damage_type: Kind of damage being dealt.
        situation: Situational tag such as 'outnumbered'.
        allies_engaged: Allies engaged with the same target, when known.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_rank: int = Field(default=1, ge=0)
    user_keywords: tuple[str, ...] = ()
    skill: Skill | None = None
    attribute: Attribute | None = None
    target_keywords: tuple[str, ...] = ()
    target_type: TargetKind | None = None
    damage_type: DamageType | None = None
    situation: str | None = None
    allies_engaged: int | None = Field(default=None, ge=0)


class AbilityApplicationResult(BaseModel):
    """Combined contribution of one or more applied abilities."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    applied: bool = False
    bonus_dice: int = 0
    reroll_count: int = Field(default=0, ge=0)
    reroll_type: RerollType | None = None
    auto_icons: int = Field(default=0, ge=0)
    special_effects: tuple[str, ...] = ()


__all__ = [
    "AbilityCondition",
    "AbilityEffect",
    "AbilitySource",
    "Ability",
    "AbilityContext",
    "AbilityApplicationResult",
]
