"""Rules engine: formulas, computation, dice, abilities and assembly.

Modules:
    formula: Sandboxed arithmetic over named variables.
    computation: Pass-ordered evaluation of a property tree.
    dice: d6 dice pools, Wrath dice and opposed tests.
    abilities: Matching abilities to a test and combining their effects.
    assembly: Building characters from purchase decisions.
"""

from __future__ import annotations

from wrath_sheet.engine.formula import (
    FORMULA_FUNCTIONS,
    evaluate_formula,
    formula_variables,
    roll_formula,
    substitute_variables,
)
from wrath_sheet.engine.dice import (
    D6Source,
    DiceExpression,
    DiceRoller,
    calculate_dice_pool,
    count_icons,
    get_default_roller,
    get_difficulty_name,
    perform_opposed_test,
    perform_skill_test,
    perform_test,
    reset_default_roller,
)
from wrath_sheet.engine.computation import (
    calculate_derived_stats,
    compute_entity,
    compute_entity_stats,
    get_attribute_modifier,
    refresh_entity_stats,
)
from wrath_sheet.engine.abilities import (
    PER_ALLY_ABILITY_IDS,
    apply_abilities,
    apply_ability,
    calculate_bonus_dice,
    check_ability_conditions,
    create_combat_action_ability,
    create_free_action_ability,
    create_test_bonus_ability,
    find_applicable_abilities,
    get_ability_bonus_for_test,
    roll_ability_healing,
)
from wrath_sheet.engine.assembly import (
    CharacterBuild,
    XPLedger,
    assemble_character,
    attribute_purchase_cost,
    build_xp_ledger,
    calculate_xp_spent,
    create_archetype_properties,
    resolve_keywords,
    skill_purchase_cost,
)


__all__ = [
    # Formula
    "FORMULA_FUNCTIONS",
    "substitute_variables",
    "formula_variables",
    "evaluate_formula",
    "roll_formula",
    # Dice
    "DiceExpression",
    "D6Source",
    "DiceRoller",
    "get_default_roller",
    "reset_default_roller",
    "calculate_dice_pool",
    "count_icons",
    "perform_test",
    "perform_opposed_test",
    "perform_skill_test",
    "get_difficulty_name",
    # Computation
    "get_attribute_modifier",
    "calculate_derived_stats",
    "compute_entity",
    "compute_entity_stats",
    "refresh_entity_stats",
    # Abilities
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
    # Assembly
    "CharacterBuild",
    "XPLedger",
    "attribute_purchase_cost",
    "skill_purchase_cost",
    "resolve_keywords",
    "build_xp_ledger",
    "calculate_xp_spent",
    "create_archetype_properties",
    "assemble_character",
]
