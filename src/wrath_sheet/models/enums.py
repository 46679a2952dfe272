"""Enumeration types for the Wrath & Glory character engine.

This module defines the fixed vocabularies of the rules: the seven
attributes, the eighteen skills, property node kinds, effect operations,
ability activations and conditions, keyword categories and threat ratings.
"""

from __future__ import annotations

from enum import StrEnum


class Attribute(StrEnum):
    """The seven core attributes every entity has."""

    STRENGTH = "strength"
    TOUGHNESS = "toughness"
    AGILITY = "agility"
    INITIATIVE = "initiative"
    WILLPOWER = "willpower"
    INTELLECT = "intellect"
    FELLOWSHIP = "fellowship"

    @property
    def display_name(self) -> str:
        """Get the display name of the attribute.

        Returns:
            Capitalized attribute name (e.g., 'Strength').
        """
        return self.value.capitalize()

    @property
    def abbreviation(self) -> str:
        """Get the character-sheet abbreviation.

        Returns:
            Abbreviation such as 'S' or 'Wil'.
        """
        return _ATTRIBUTE_ABBREVIATIONS[self]


_ATTRIBUTE_ABBREVIATIONS: dict[Attribute, str] = {
    Attribute.STRENGTH: "S",
    Attribute.TOUGHNESS: "T",
    Attribute.AGILITY: "A",
    Attribute.INITIATIVE: "I",
    Attribute.WILLPOWER: "Wil",
    Attribute.INTELLECT: "Int",
    Attribute.FELLOWSHIP: "Fel",
}


class Skill(StrEnum):
    """The eighteen skills, each linked to one attribute."""

    ATHLETICS = "athletics"
    AWARENESS = "awareness"
    BALLISTIC_SKILL = "ballistic_skill"
    CUNNING = "cunning"
    DECEPTION = "deception"
    INSIGHT = "insight"
    INTIMIDATION = "intimidation"
    INVESTIGATION = "investigation"
    LEADERSHIP = "leadership"
    MEDICAE = "medicae"
    PERSUASION = "persuasion"
    PILOT = "pilot"
    PSYCHIC_MASTERY = "psychic_mastery"
    SCHOLAR = "scholar"
    STEALTH = "stealth"
    SURVIVAL = "survival"
    TECH = "tech"
    WEAPON_SKILL = "weapon_skill"

    @property
    def linked_attribute(self) -> Attribute:
        """Get the attribute this skill is tested with.

        Returns:
            The linked Attribute.
        """
        return SKILL_ATTRIBUTES[self]

    @property
    def display_name(self) -> str:
        """Get the display name of the skill.

        Returns:
            Title-cased skill name (e.g., 'Ballistic Skill').
        """
        return self.value.replace("_", " ").title()


SKILL_ATTRIBUTES: dict[Skill, Attribute] = {
    Skill.ATHLETICS: Attribute.STRENGTH,
    Skill.AWARENESS: Attribute.INTELLECT,
    Skill.BALLISTIC_SKILL: Attribute.AGILITY,
    Skill.CUNNING: Attribute.FELLOWSHIP,
    Skill.DECEPTION: Attribute.FELLOWSHIP,
    Skill.INSIGHT: Attribute.FELLOWSHIP,
    Skill.INTIMIDATION: Attribute.WILLPOWER,
    Skill.INVESTIGATION: Attribute.INTELLECT,
    Skill.LEADERSHIP: Attribute.WILLPOWER,
    Skill.MEDICAE: Attribute.INTELLECT,
    Skill.PERSUASION: Attribute.FELLOWSHIP,
    Skill.PILOT: Attribute.AGILITY,
    Skill.PSYCHIC_MASTERY: Attribute.WILLPOWER,
    Skill.SCHOLAR: Attribute.INTELLECT,
    Skill.STEALTH: Attribute.AGILITY,
    Skill.SURVIVAL: Attribute.WILLPOWER,
    Skill.TECH: Attribute.INTELLECT,
    Skill.WEAPON_SKILL: Attribute.INITIATIVE,
}


# =============================================================================
# Property Graph
# =============================================================================


class PropertyType(StrEnum):
    """Kinds of node in a property tree."""

    ATTRIBUTE = "attribute"
    SKILL = "skill"
    RESOURCE = "resource"
    CONSTANT = "constant"
    EFFECT = "effect"
    BONUS = "bonus"
    FOLDER = "folder"
    FEATURE = "feature"
    ACTION = "action"
    NOTE = "note"


class EffectOperation(StrEnum):
    """How an effect combines with the value it targets."""

    ADD = "add"
    MULTIPLY = "multiply"
    SET = "set"


class TargetType(StrEnum):
    """How an effect selects the properties it modifies."""

    SPECIFIC = "specific"
    ALL = "all"
    TAGS = "tags"


class ResetOn(StrEnum):
    """When a resource pool refills."""

    REST = "rest"
    SCENE = "scene"
    SESSION = "session"
    MANUAL = "manual"


class ActionType(StrEnum):
    """Kinds of action node."""

    ATTACK = "attack"
    TEST = "test"
    POWER = "power"
    OTHER = "other"


# =============================================================================
# Entities
# =============================================================================


class EntityType(StrEnum):
    """Kinds of entity that own a property tree."""

    CHARACTER = "character"
    NPC = "npc"
    BESTIARY = "bestiary"


class ThreatRating(StrEnum):
    """Threat rating of a bestiary entry."""

    TROOP = "Troop"
    ELITE = "Elite"
    CHAMPION = "Champion"
    NEMESIS = "Nemesis"


class Size(StrEnum):
    """Species size categories."""

    TINY = "tiny"
    SMALL = "small"
    AVERAGE = "average"
    LARGE = "large"
    HUGE = "huge"


class KeywordCategory(StrEnum):
    """Categories of keyword definitions."""

    SPECIAL = "special"
    FACTION = "faction"
    BRACKETED = "bracketed"
    WARGEAR = "wargear"
    PSYCHIC = "psychic"


# =============================================================================
# Abilities
# =============================================================================


class AbilityActivation(StrEnum):
    """When an ability can be used."""

    PASSIVE = "passive"
    TEST = "test"
    COMBAT_ACTION = "combat-action"
    FREE_ACTION = "free-action"
    REFLEXIVE = "reflexive"
    REGROUP = "regroup"
    ONCE_PER_SCENE = "once-per-scene"
    ONCE_PER_COMBAT = "once-per-combat"


class ConditionType(StrEnum):
    """Kinds of applicability condition an ability can declare."""

    ALWAYS = "always"
    SKILL_TEST = "skill-test"
    TARGET_KEYWORD = "target-keyword"
    TARGET_TYPE = "target-type"
    DAMAGE_TYPE = "damage-type"
    COMBAT_SITUATION = "combat-situation"


class AbilityEffectType(StrEnum):
    """Kinds of effect an applicable ability produces."""

    BONUS_DICE = "bonus-dice"
    REROLL = "reroll"
    AUTO_SUCCESS = "auto-success"
    DAMAGE_MODIFIER = "damage-modifier"
    HEAL = "heal"
    CONDITION = "condition"
    SPECIAL = "special"


class TargetKind(StrEnum):
    """Relationship of an ability's target to its user."""

    ALLY = "ally"
    ENEMY = "enemy"
    SELF = "self"


class DamageType(StrEnum):
    """Damage categories abilities can key on."""

    MELEE = "melee"
    RANGED = "ranged"
    PSYCHIC = "psychic"


class RerollType(StrEnum):
    """Which dice a reroll effect may reroll."""

    FAILURES = "failures"
    ALL = "all"
    ONES = "ones"


class HealType(StrEnum):
    """Pool restored by a heal effect."""

    WOUNDS = "wounds"
    SHOCK = "shock"


# =============================================================================
# Dice
# =============================================================================


class OpposedOutcome(StrEnum):
    """Winner of an opposed test."""

    ATTACKER = "attacker"
    DEFENDER = "defender"
    TIE = "tie"


__all__ = [
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
]
