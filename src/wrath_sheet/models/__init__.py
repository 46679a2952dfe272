"""Pydantic V2 schemas for the Wrath & Glory character engine.

All models are frozen; edits produce new instances through
``model_copy(update=...)`` or the copy-on-write helpers in ``graph``.

Submodules:
    enums: Attributes, skills and every closed vocabulary.
    properties: The property node union and semantic naming.
    graph: Structural edits and traversal of property trees.
    computation: Computation records and the stats snapshot.
    dice: Test and opposed-test results.
    ability: Abilities, their conditions, effects and contexts.
    content: Keyword, species and archetype records.
    entity: Characters, NPCs and bestiary entries.

Example:
    >>> from wrath_sheet.models import AttributeProperty, create_empty_character
    >>> character = create_empty_character("Brother Marius")
    >>> strength = AttributeProperty(id="attr-strength", name="Strength", base_value=4)
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from wrath_sheet.models.enums import (
    SKILL_ATTRIBUTES,
    AbilityActivation,
    AbilityEffectType,
    ActionType,
    Attribute,
    ConditionType,
    DamageType,
    EffectOperation,
    EntityType,
    HealType,
    KeywordCategory,
    OpposedOutcome,
    PropertyType,
    RerollType,
    ResetOn,
    Size,
    Skill,
    TargetKind,
    TargetType,
    ThreatRating,
)

# =============================================================================
# Property Graph
# =============================================================================
from wrath_sheet.models.properties import (
    ActionProperty,
    AttributeProperty,
    BaseProperty,
    BonusProperty,
    ConstantProperty,
    EffectProperty,
    FeatureProperty,
    FolderProperty,
    NoteProperty,
    Number,
    Property,
    PropertyTarget,
    ResourceProperty,
    SkillProperty,
    parse_property,
    semantic_name,
    to_snake_case,
)
from wrath_sheet.models.graph import (
    PropertyMap,
    add_property,
    add_subtree,
    find_by_semantic_name,
    get_children,
    iter_enabled_subtree,
    remove_property,
    replace_property,
    resolve_tag_targets,
    set_property_enabled,
)

# =============================================================================
# Results
# =============================================================================
from wrath_sheet.models.computation import (
    AttributeValues,
    Computation,
    ComputationError,
    ComputationResult,
    ComputedEffect,
    DerivedStats,
    EntityStats,
    SkillValues,
)
from wrath_sheet.models.dice import IconCount, OpposedTestResult, TestResult, WrathDieResult

# =============================================================================
# Abilities & Content
# =============================================================================
from wrath_sheet.models.ability import (
    Ability,
    AbilityApplicationResult,
    AbilityCondition,
    AbilityContext,
    AbilityEffect,
    AbilitySource,
)
from wrath_sheet.models.content import (
    Archetype,
    KeywordDefinition,
    SourceReference,
    Species,
    is_bracketed_keyword,
)

# =============================================================================
# Entities
# =============================================================================
from wrath_sheet.models.entity import (
    ROOT_PROPERTY_ID,
    THREAT_MODIFIERS,
    BestiaryEntry,
    Character,
    EncounterSuggestion,
    Entity,
    ThreatModifier,
    add_entity_property,
    calculate_bestiary_shock,
    calculate_bestiary_wounds,
    create_empty_bestiary_entry,
    create_empty_character,
    remove_entity_property,
    tier_starting_xp,
)


__all__ = [
    # Enumerations
    "Attribute",
    "Skill",
    "SKILL_ATTRIBUTES",
    "PropertyType",
    "EffectOperation",
    "TargetType",
    "ResetOn",
    "ActionType",
    "EntityType",
    "ThreatRating",
    "Size",
    "KeywordCategory",
    "AbilityActivation",
    "ConditionType",
    "AbilityEffectType",
    "TargetKind",
    "DamageType",
    "RerollType",
    "HealType",
    "OpposedOutcome",
    # Properties
    "Number",
    "PropertyTarget",
    "BaseProperty",
    "AttributeProperty",
    "SkillProperty",
    "ResourceProperty",
    "ConstantProperty",
    "EffectProperty",
    "BonusProperty",
    "FolderProperty",
    "FeatureProperty",
    "ActionProperty",
    "NoteProperty",
    "Property",
    "parse_property",
    "to_snake_case",
    "semantic_name",
    # Graph
    "PropertyMap",
    "add_property",
    "add_subtree",
    "remove_property",
    "replace_property",
    "set_property_enabled",
    "get_children",
    "iter_enabled_subtree",
    "find_by_semantic_name",
    "resolve_tag_targets",
    # Computation
    "ComputedEffect",
    "Computation",
    "ComputationError",
    "AttributeValues",
    "SkillValues",
    "DerivedStats",
    "EntityStats",
    "ComputationResult",
    # Dice
    "IconCount",
    "WrathDieResult",
    "TestResult",
    "OpposedTestResult",
    # Abilities
    "AbilityCondition",
    "AbilityEffect",
    "AbilitySource",
    "Ability",
    "AbilityContext",
    "AbilityApplicationResult",
    # Content
    "is_bracketed_keyword",
    "SourceReference",
    "KeywordDefinition",
    "Species",
    "Archetype",
    # Entities
    "ROOT_PROPERTY_ID",
    "Entity",
    "Character",
    "ThreatModifier",
    "THREAT_MODIFIERS",
    "EncounterSuggestion",
    "BestiaryEntry",
    "calculate_bestiary_wounds",
    "calculate_bestiary_shock",
    "tier_starting_xp",
    "create_empty_character",
    "create_empty_bestiary_entry",
    "add_entity_property",
    "remove_entity_property",
]
