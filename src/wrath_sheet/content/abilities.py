"""Archetype abilities (Core Rulebook p.70-110).

Each archetype grants one ability. Abilities are authored as data so the
ability engine can decide when they apply and what they add to a test.
"""

from __future__ import annotations

from types import MappingProxyType

from wrath_sheet.core.exceptions import ContentNotFoundError
from wrath_sheet.models.ability import Ability, AbilityCondition, AbilityEffect, AbilitySource
from wrath_sheet.models.enums import (
    AbilityActivation,
    AbilityEffectType,
    ConditionType,
    DamageType,
    HealType,
    Skill,
    TargetKind,
)


def _archetype(archetype_id: str) -> AbilitySource:
    return AbilitySource(type="archetype", id=archetype_id)


_ABILITIES: tuple[Ability, ...] = (
    Ability(
        id="loyal-compassion",
        name="Loyal Compassion",
        description=(
            "You add +Double Rank bonus dice to Medicae Tests made to treat characters "
            "with the IMPERIUM Keyword."
        ),
        activation=AbilityActivation.TEST,
        conditions=(
            AbilityCondition(type=ConditionType.SKILL_TEST, skill=Skill.MEDICAE),
            AbilityCondition(type=ConditionType.TARGET_KEYWORD, target_keyword="IMPERIUM"),
        ),
        effects=(AbilityEffect(type=AbilityEffectType.BONUS_DICE, bonus_dice="doubleRank"),),
        source=_archetype("sister-hospitaller"),
    ),
    Ability(
        id="fiery-invective",
        name="Fiery Invective",
        description=(
            "Once per combat, you may spend a Free Action to recite scripture. You and "
            "every ally who can hear you recover 1d3 + Rank Shock."
        ),
        activation=AbilityActivation.FREE_ACTION,
        conditions=(AbilityCondition(type=ConditionType.ALWAYS),),
        effects=(
            AbilityEffect(
                type=AbilityEffectType.HEAL,
                heal_amount="1d3+rank",
                heal_type=HealType.SHOCK,
            ),
        ),
        uses_per_combat=1,
        source=_archetype("ministorum-priest"),
    ),
    Ability(
        id="look-out-sir",
        name="Look Out, Sir!",
        description=(
            "Once per combat, when an ally within 5 metres is hit by an attack, you may "
            "take the hit in their place."
        ),
        activation=AbilityActivation.REFLEXIVE,
        conditions=(AbilityCondition(type=ConditionType.TARGET_TYPE, target_type=TargetKind.ALLY),),
        effects=(
            AbilityEffect(
                type=AbilityEffectType.SPECIAL,
                special_text="Redirect an attack that hits a nearby ally to yourself",
            ),
        ),
        uses_per_combat=1,
        source=_archetype("imperial-guardsman"),
    ),
    Ability(
        id="inquisitorial-decree",
        name="Inquisitorial Decree",
        description=(
            "Once per scene, you may invoke the authority of the Inquisition to add +Rank "
            "bonus dice to a Test made to influence an IMPERIUM character."
        ),
        activation=AbilityActivation.ONCE_PER_SCENE,
        conditions=(
            AbilityCondition(type=ConditionType.SKILL_TEST),
            AbilityCondition(type=ConditionType.TARGET_KEYWORD, target_keyword="IMPERIUM"),
        ),
        effects=(AbilityEffect(type=AbilityEffectType.BONUS_DICE, bonus_dice="rank"),),
        uses_per_scene=1,
        source=_archetype("inquisitorial-acolyte"),
    ),
    Ability(
        id="administratum-records",
        name="Administratum Records",
        description="You add +Rank bonus dice to Investigation Tests made to search records.",
        activation=AbilityActivation.TEST,
        conditions=(AbilityCondition(type=ConditionType.SKILL_TEST, skill=Skill.INVESTIGATION),),
        effects=(AbilityEffect(type=AbilityEffectType.BONUS_DICE, bonus_dice="rank"),),
        source=_archetype("inquisitorial-sage"),
    ),
    Ability(
        id="scrounger",
        name="Scrounger",
        description="You add +Rank bonus dice to Cunning Tests made to find or acquire goods.",
        activation=AbilityActivation.TEST,
        conditions=(AbilityCondition(type=ConditionType.SKILL_TEST, skill=Skill.CUNNING),),
        effects=(AbilityEffect(type=AbilityEffectType.BONUS_DICE, bonus_dice="rank"),),
        source=_archetype("ganger"),
    ),
    Ability(
        id="dancing-on-blades-edge",
        name="Dancing on the Blade's Edge",
        description=(
            "You add +Rank bonus dice to any Test made while acting recklessly, but suffer "
            "+1 DN to Fear Tests."
        ),
        activation=AbilityActivation.TEST,
        conditions=(AbilityCondition(type=ConditionType.SKILL_TEST),),
        effects=(
            AbilityEffect(type=AbilityEffectType.BONUS_DICE, bonus_dice="rank"),
            AbilityEffect(type=AbilityEffectType.SPECIAL, special_text="+1 DN penalty to Fear Tests"),
        ),
        source=_archetype("corsair"),
    ),
    Ability(
        id="get-stuck-in",
        name="Get Stuck In",
        description=(
            "When you make a melee attack while outnumbered, you add +Rank bonus dice for "
            "each ally engaged with the same target."
        ),
        activation=AbilityActivation.TEST,
        conditions=(
            AbilityCondition(type=ConditionType.DAMAGE_TYPE, damage_type=DamageType.MELEE),
            AbilityCondition(type=ConditionType.COMBAT_SITUATION, situation="outnumbered"),
        ),
        effects=(
            AbilityEffect(type=AbilityEffectType.BONUS_DICE, bonus_dice="rank"),
            AbilityEffect(
                type=AbilityEffectType.SPECIAL,
                special_text="+Rank bonus dice per ally engaged with the same target",
            ),
        ),
        source=_archetype("ork-boy"),
    ),
)

ARCHETYPE_ABILITIES = MappingProxyType({ability.id: ability for ability in _ABILITIES})


def get_ability_by_id(ability_id: str) -> Ability | None:
    """Look up an ability; None when unknown."""
    return ARCHETYPE_ABILITIES.get(ability_id)


def require_ability(ability_id: str) -> Ability:
    """Look up an ability that must exist.

    Raises:
        ContentNotFoundError: If no ability has that id.
    """
    ability = ARCHETYPE_ABILITIES.get(ability_id)
    if ability is None:
        raise ContentNotFoundError(
            f"Unknown ability {ability_id!r}",
            content_type="ability",
            content_id=ability_id,
        )
    return ability


__all__ = [
    "ARCHETYPE_ABILITIES",
    "get_ability_by_id",
    "require_ability",
]
