"""Wrath & Glory character engine.

A rules engine for Wrath & Glory characters and adversaries:

- Characters are trees of typed property nodes (attributes, skills,
  effects, resources, features)
- The computation engine evaluates a tree into a flat stats snapshot
- Dice pools of d6 with Wrath dice resolve tests against a difficulty
- Archetype abilities add bonus dice and effects to the tests they apply to

Example:
    >>> from wrath_sheet import CharacterBuild, assemble_character, perform_skill_test
    >>>
    >>> build = CharacterBuild(
    ...     name="Sister Amalia",
    ...     species_id="human",
    ...     archetype_id="sister-hospitaller",
    ...     keyword_choices={"[ORDER]": "ORDER OF OUR MARTYRED LADY"},
    ...     skill_targets={"medicae": 3},
    ... )
    >>> sister = assemble_character(build)
    >>> result = perform_skill_test(sister.stats, "medicae", dn=3)
    >>> print(result.success, result.shift)

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic V2 schemas: properties, entities, results and content.
    content: Species, archetypes, abilities and keywords.
    engine: Formulas, computation, dice, abilities and assembly.
"""

from __future__ import annotations

# Core
from wrath_sheet.core.config import Settings, get_settings
from wrath_sheet.core.exceptions import WrathSheetError
from wrath_sheet.core.logging import configure_logging, get_logger

# Models
from wrath_sheet.models.entity import (
    BestiaryEntry,
    Character,
    Entity,
    create_empty_bestiary_entry,
    create_empty_character,
)
from wrath_sheet.models.computation import ComputationResult, EntityStats
from wrath_sheet.models.dice import TestResult

# Engine
from wrath_sheet.engine.abilities import get_ability_bonus_for_test
from wrath_sheet.engine.assembly import CharacterBuild, assemble_character
from wrath_sheet.engine.computation import compute_entity, refresh_entity_stats
from wrath_sheet.engine.dice import DiceRoller, perform_opposed_test, perform_skill_test, perform_test
from wrath_sheet.engine.formula import evaluate_formula


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "WrathSheetError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Entity",
    "Character",
    "BestiaryEntry",
    "create_empty_character",
    "create_empty_bestiary_entry",
    "EntityStats",
    "ComputationResult",
    "TestResult",
    # Engine
    "evaluate_formula",
    "compute_entity",
    "refresh_entity_stats",
    "DiceRoller",
    "perform_test",
    "perform_opposed_test",
    "perform_skill_test",
    "get_ability_bonus_for_test",
    "CharacterBuild",
    "assemble_character",
]
