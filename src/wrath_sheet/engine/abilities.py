"""Ability resolution: which abilities apply to a test and what they add.

An ability applies when every one of its conditions holds for the context
(an empty condition list always holds). Applicable abilities are combined
without priority: bonus dice, rerolls and automatic icons are summed, and
text effects are concatenated in the order the ability ids were given.

Bonus-dice formulas use a small closed vocabulary (``rank``,
``doubleRank``, ``rank * N`` or an integer). Anything else contributes no
dice and raises an ``AbilityFormulaWarning`` instead of failing the test.

Example:
    >>> context = AbilityContext(user_rank=2, skill="medicae", target_keywords=("IMPERIUM",))
    >>> get_ability_bonus_for_test(["loyal-compassion"], context)
    4
"""

from __future__ import annotations

import re
import warnings
from collections.abc import Iterable, Mapping, Sequence

from wrath_sheet.content.abilities import get_ability_by_id, require_ability
from wrath_sheet.core.exceptions import AbilityFormulaWarning
from wrath_sheet.core.logging import get_logger
from wrath_sheet.engine.dice import DiceExpression, DiceRoller
from wrath_sheet.engine.formula import roll_formula
from wrath_sheet.models.ability import (
    Ability,
    AbilityApplicationResult,
    AbilityCondition,
    AbilityContext,
    AbilityEffect,
    AbilitySource,
)
from wrath_sheet.models.enums import (
    AbilityActivation,
    AbilityEffectType,
    ConditionType,
    HealType,
    RerollType,
    Skill,
)


logger = get_logger(__name__)

# Abilities whose bonus dice are granted once per ally engaged with the target.
PER_ALLY_ABILITY_IDS = frozenset({"get-stuck-in"})

_RANK_MULTIPLE = re.compile(r"^rank\s*\*\s*(\d+)$")
_INTEGER = re.compile(r"^[+-]?\d+$")


# =============================================================================
# Conditions
# =============================================================================


def _condition_holds(condition: AbilityCondition, context: AbilityContext) -> bool:
    if condition.type == ConditionType.ALWAYS:
        return True
    if condition.type == ConditionType.SKILL_TEST:
        if condition.skill is not None and context.skill != condition.skill:
            return False
        return condition.attribute is None or context.attribute == condition.attribute
    if condition.type == ConditionType.TARGET_KEYWORD:
        return condition.target_keyword is None or condition.target_keyword in context.target_keywords
    if condition.type == ConditionType.TARGET_TYPE:
        return condition.target_type is None or context.target_type == condition.target_type
    if condition.type == ConditionType.DAMAGE_TYPE:
        return condition.damage_type is None or context.damage_type == condition.damage_type
    if condition.type == ConditionType.COMBAT_SITUATION:
        return condition.situation is None or context.situation == condition.situation
    return False


def check_ability_conditions(ability: Ability, context: AbilityContext) -> bool:
    """Whether every condition of an ability holds for a context.

    Args:
        ability: Ability to check.
        context: Situation the ability would be used in.

    Returns:
        True if all conditions hold (vacuously true with no conditions).
    """
    return all(_condition_holds(condition, context) for condition in ability.conditions)


# =============================================================================
# Effects
# =============================================================================


def calculate_bonus_dice(formula: str, rank: int) -> int:
    """Evaluate a bonus-dice formula for a given rank.

    Args:
        formula: ``"rank"``, ``"doubleRank"`` / ``"double rank"``,
            ``"rank * N"`` or an integer literal.
        rank: Rank of the ability's user.

    Returns:
        Bonus dice granted; 0 (with a warning) for any other formula.
    """
    normalized = formula.strip().lower()
    if normalized == "rank":
        return rank
    if normalized in ("doublerank", "double rank"):
        return rank * 2
    multiple = _RANK_MULTIPLE.match(normalized)
    if multiple:
        return rank * int(multiple.group(1))
    if _INTEGER.match(normalized):
        return int(normalized)

    logger.warning("Unrecognised bonus dice formula", formula=formula)
    warnings.warn(
        f"Could not parse bonus dice formula {formula!r}; granting no bonus dice",
        AbilityFormulaWarning,
        stacklevel=2,
    )
    return 0


def find_applicable_abilities(
    ability_ids: Iterable[str],
    context: AbilityContext,
    *,
    catalog: Mapping[str, Ability] | None = None,
) -> list[Ability]:
    """Look up abilities by id and keep those that apply.

    Args:
        ability_ids: Ids of the abilities the user has.
        context: Situation being evaluated.
        catalog: Ability lookup; the built-in catalog when omitted.

    Returns:
        Applicable abilities in the order given. Unknown ids are skipped.
    """
    applicable: list[Ability] = []
    for ability_id in ability_ids:
        ability = catalog.get(ability_id) if catalog is not None else get_ability_by_id(ability_id)
        if ability is None:
            logger.debug("Skipping unknown ability", ability_id=ability_id)
            continue
        if check_ability_conditions(ability, context):
            applicable.append(ability)
    return applicable


def _effect_text(effect: AbilityEffect) -> str | None:
    if effect.type == AbilityEffectType.SPECIAL:
        return effect.special_text
    if effect.type == AbilityEffectType.HEAL and effect.heal_amount:
        return f"Heal {effect.heal_amount} {effect.heal_type or HealType.WOUNDS}"
    if effect.type == AbilityEffectType.DAMAGE_MODIFIER and effect.damage_bonus:
        return f"Damage: {effect.damage_bonus}"
    if effect.type == AbilityEffectType.CONDITION and effect.condition:
        return f"Apply condition: {effect.condition}"
    return None


def apply_ability(ability: Ability, context: AbilityContext) -> AbilityApplicationResult:
    """Resolve the effects of one ability.

    Conditions are not checked here; see ``find_applicable_abilities``.

    Args:
        ability: Ability to apply.
        context: Situation it is used in.

    Returns:
        What the ability contributes.
    """
    bonus_dice = 0
    reroll_count = 0
    reroll_type: RerollType | None = None
    auto_icons = 0
    special_effects: list[str] = []

    for effect in ability.effects:
        if effect.type == AbilityEffectType.BONUS_DICE:
            if effect.bonus_dice:
                dice = calculate_bonus_dice(effect.bonus_dice, context.user_rank)
                if ability.id in PER_ALLY_ABILITY_IDS and context.allies_engaged is not None:
                    dice *= context.allies_engaged
                bonus_dice += dice
        elif effect.type == AbilityEffectType.REROLL:
            reroll_type = effect.reroll_type
            reroll_count += effect.reroll_count if effect.reroll_count is not None else 1
        elif effect.type == AbilityEffectType.AUTO_SUCCESS:
            auto_icons += effect.auto_icons or 0
        else:
            text = _effect_text(effect)
            if text:
                special_effects.append(text)

    return AbilityApplicationResult(
        applied=True,
        bonus_dice=bonus_dice,
        reroll_count=reroll_count,
        reroll_type=reroll_type,
        auto_icons=auto_icons,
        special_effects=tuple(special_effects),
    )


def apply_abilities(
    ability_ids: Iterable[str],
    context: AbilityContext,
    *,
    catalog: Mapping[str, Ability] | None = None,
) -> AbilityApplicationResult:
    """Apply every applicable ability and combine the results.

    Bonus dice, reroll counts and automatic icons are summed; the reroll
    type of the last ability that grants one is kept; text effects are
    concatenated.

    Args:
        ability_ids: Ids of the abilities the user has.
        context: Situation being evaluated.
        catalog: Ability lookup; the built-in catalog when omitted.

    Returns:
        Combined result; ``applied`` is False when nothing applied.
    """
    applicable = find_applicable_abilities(ability_ids, context, catalog=catalog)

    bonus_dice = 0
    reroll_count = 0
    reroll_type: RerollType | None = None
    auto_icons = 0
    special_effects: list[str] = []

    for ability in applicable:
        result = apply_ability(ability, context)
        bonus_dice += result.bonus_dice
        if result.reroll_type is not None:
            reroll_type = result.reroll_type
        reroll_count += result.reroll_count
        auto_icons += result.auto_icons
        special_effects.extend(result.special_effects)

    if applicable:
        logger.debug(
            "Abilities applied",
            abilities=[ability.id for ability in applicable],
            bonus_dice=bonus_dice,
        )

    return AbilityApplicationResult(
        applied=bool(applicable),
        bonus_dice=bonus_dice,
        reroll_count=reroll_count,
        reroll_type=reroll_type,
        auto_icons=auto_icons,
        special_effects=tuple(special_effects),
    )


def get_ability_bonus_for_test(
    ability_ids: Iterable[str],
    context: AbilityContext,
    *,
    catalog: Mapping[str, Ability] | None = None,
) -> int:
    """Bonus dice all applicable abilities add to a test."""
    return apply_abilities(ability_ids, context, catalog=catalog).bonus_dice


def roll_ability_healing(
    ability: Ability | str,
    rank: int,
    *,
    roller: DiceRoller | None = None,
) -> dict[HealType, int]:
    """Roll every heal effect of an ability.

    Args:
        ability: Ability with heal effects, e.g. Fiery Invective, or its id.
        rank: Rank substituted into heal formulas.
        roller: Dice roller; the module default when omitted.

    Returns:
        Amount healed per pool. Pools the ability does not heal are omitted.

    Raises:
        ContentNotFoundError: If an ability id is not in the catalog.
        DiceRollError: If a heal formula is not valid dice notation.
    """
    if isinstance(ability, str):
        ability = require_ability(ability)
    healed: dict[HealType, int] = {}
    for effect in ability.effects:
        if effect.type != AbilityEffectType.HEAL or not effect.heal_amount:
            continue
        rolled: DiceExpression = roll_formula(effect.heal_amount, {"rank": rank}, roller=roller)
        pool = effect.heal_type or HealType.WOUNDS
        healed[pool] = healed.get(pool, 0) + max(0, rolled.total)
    return healed


# =============================================================================
# Builders
# =============================================================================


def create_test_bonus_ability(
    ability_id: str,
    name: str,
    description: str,
    skill: Skill | str,
    bonus_dice: str,
    target_keyword: str | None = None,
    *,
    source: AbilitySource | None = None,
) -> Ability:
    """Build an ability granting bonus dice to tests of one skill.

    Example:
        >>> create_test_bonus_ability(
        ...     "loyal-compassion", "Loyal Compassion", "...", "medicae", "doubleRank", "IMPERIUM"
        ... )
    """
    conditions = [AbilityCondition(type=ConditionType.SKILL_TEST, skill=Skill(skill))]
    if target_keyword:
        conditions.append(
            AbilityCondition(type=ConditionType.TARGET_KEYWORD, target_keyword=target_keyword)
        )
    return Ability(
        id=ability_id,
        name=name,
        description=description,
        activation=AbilityActivation.TEST,
        conditions=tuple(conditions),
        effects=(AbilityEffect(type=AbilityEffectType.BONUS_DICE, bonus_dice=bonus_dice),),
        source=source,
    )


def _always_ability(
    ability_id: str,
    name: str,
    description: str,
    activation: AbilityActivation,
    effects: Sequence[AbilityEffect],
    uses_per_combat: int | None,
    source: AbilitySource | None,
) -> Ability:
    return Ability(
        id=ability_id,
        name=name,
        description=description,
        activation=activation,
        conditions=(AbilityCondition(type=ConditionType.ALWAYS),),
        effects=tuple(effects),
        uses_per_combat=uses_per_combat,
        source=source,
    )


def create_combat_action_ability(
    ability_id: str,
    name: str,
    description: str,
    effects: Sequence[AbilityEffect],
    uses_per_combat: int | None = None,
    *,
    source: AbilitySource | None = None,
) -> Ability:
    """Build an always-applicable ability used as a combat action."""
    return _always_ability(
        ability_id, name, description, AbilityActivation.COMBAT_ACTION, effects, uses_per_combat, source
    )


def create_free_action_ability(
    ability_id: str,
    name: str,
    description: str,
    effects: Sequence[AbilityEffect],
    uses_per_combat: int | None = None,
    *,
    source: AbilitySource | None = None,
) -> Ability:
    """Build an always-applicable ability used as a free action."""
    return _always_ability(
        ability_id, name, description, AbilityActivation.FREE_ACTION, effects, uses_per_combat, source
    )


__all__ = [
    "PER_ALLY_ABILITY_IDS",
    "check_ability_conditions",
    "calculate_bonus_dice",
    "find_applicable_abilities",
    "apply_ability",
    "apply_abilities",
    "get_ability_bonus_for_test",
    "roll_ability_healing",
    "create_test_bonus_ability",
    "create_combat_action_ability",
    "create_free_action_ability",
]
