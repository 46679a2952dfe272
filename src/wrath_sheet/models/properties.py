"""Property node models for the Wrath & Glory character engine.

A character is a tree of typed property nodes. Every node shares the same
tree metadata (parent, children, order, tags, enabled flag) and carries a
type-specific payload. Nodes are frozen pydantic models; structural edits
produce new nodes via ``model_copy`` instead of mutating in place.

Node kinds:
    AttributeProperty: One of the seven attributes, floor 1.
    SkillProperty: Purchased ranks in one of the eighteen skills, floor 0.
    ResourceProperty: A pool whose maximum is a formula (Wounds, Shock).
    ConstantProperty: A literal number or a formula over other properties.
    EffectProperty: An add/multiply/set modifier with a target selector.
    BonusProperty: Shorthand for a flat add to one named property.
    FolderProperty: Organizational container.
    FeatureProperty: Descriptive capability text.
    ActionProperty: Something the entity can do (attack, test, power).
    NoteProperty: Free text.

Example:
    >>> from wrath_sheet.models.properties import AttributeProperty, semantic_name
    >>> node = AttributeProperty(id="attr-strength", name="Strength", base_value=3)
    >>> semantic_name(node)
    'strength'
"""

from __future__ import annotations

import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from wrath_sheet.models.enums import (
    ActionType,
    Attribute,
    EffectOperation,
    PropertyType,
    ResetOn,
    Skill,
    TargetType,
)


Number = int | float
"""Numeric values flowing through the engine (IEEE doubles or integers)."""


# =============================================================================
# Targeting
# =============================================================================


class PropertyTarget(BaseModel):
    """Selector naming the properties an effect modifies.

    Attributes:
        type: How properties are selected.
        names: Semantic names matched when ``type`` is ``specific``.
        tags: Node tags matched when ``type`` is ``tags``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: TargetType = Field(default=TargetType.SPECIFIC, description="Selection mode")
    names: tuple[str, ...] = Field(default=(), description="Targeted semantic names")
    tags: tuple[str, ...] = Field(default=(), description="Targeted node tags")

    def matches(self, name: str) -> bool:
        """Check whether a property with the given semantic name is targeted.

        Tag selection is resolved separately and never matches by name.

        Args:
            name: Semantic name of the candidate property.

        Returns:
            True if the property is targeted.
        """
        if self.type == TargetType.ALL:
            return True
        if self.type == TargetType.SPECIFIC:
            return name in self.names
        return False


# =============================================================================
# Node Models
# =============================================================================


class BaseProperty(BaseModel):
    """Tree metadata shared by every property node.

    Attributes:
        id: Unique identifier within the owning entity.
        name: Display name.
        parent: Id of the parent node; None only for the root.
        children: Ids of child nodes in evaluation order.
        order: Position among siblings.
        tags: Free-form tags.
        keywords: Keywords associated with this node.
        enabled: Disabled nodes exclude their whole subtree from computation.
        description: Optional description.
        source: Where the node came from (species, archetype, talent...).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1, description="Unique node identifier")
    name: str = Field(description="Display name")
    parent: str | None = Field(default=None, description="Parent node id")
    children: tuple[str, ...] = Field(default=(), description="Child node ids in order")
    order: int = Field(default=0, description="Position among siblings")
    tags: tuple[str, ...] = Field(default=(), description="Free-form tags")
    keywords: tuple[str, ...] = Field(default=(), description="Associated keywords")
    enabled: bool = Field(default=True, description="Whether the subtree is computed")
    description: str | None = Field(default=None, description="Optional description")
    source: str | None = Field(default=None, description="Origin of the node")


class AttributeProperty(BaseProperty):
    """One of the seven attributes."""

    type: Literal["attribute"] = "attribute"
    base_value: Number = Field(default=1, description="Starting value before effects")
    maximum: int | None = Field(default=None, description="Species cap, if any")


class SkillProperty(BaseProperty):
    """Purchased ranks in one skill."""

    type: Literal["skill"] = "skill"
    base_value: Number = Field(default=0, description="Purchased ranks")
    linked_attribute: Attribute = Field(description="Attribute tested with this skill")


class ResourceProperty(BaseProperty):
    """A depletable pool whose maximum is computed from a formula."""

    type: Literal["resource"] = "resource"
    current: Number = Field(default=0, description="Current value")
    maximum: str = Field(description="Formula for the maximum, e.g. 'tier + toughness'")
    reset_on: ResetOn | None = Field(default=None, description="When the pool refills")


class ConstantProperty(BaseProperty):
    """A literal number or a formula over other named properties."""

    type: Literal["constant"] = "constant"
    value: Number | str = Field(description="Literal value or formula")

    @property
    def is_formula(self) -> bool:
        """Whether the value must be evaluated as a formula."""
        return isinstance(self.value, str)


class EffectProperty(BaseProperty):
    """A modifier applied to the properties its target selects."""

    type: Literal["effect"] = "effect"
    operation: EffectOperation = Field(description="How the amount is combined")
    amount: Number | str = Field(description="Literal amount or formula")
    target: PropertyTarget = Field(description="Properties modified by this effect")


class BonusProperty(BaseProperty):
    """A flat bonus added to one named property."""

    type: Literal["bonus"] = "bonus"
    target: str = Field(description="Semantic name of the boosted property")
    amount: Number = Field(description="Amount added")


class FolderProperty(BaseProperty):
    """Organizational container with no value of its own."""

    type: Literal["folder"] = "folder"
    collapsed: bool = Field(default=False, description="Display state")


class FeatureProperty(BaseProperty):
    """Special ability or trait described in text."""

    type: Literal["feature"] = "feature"
    text: str = Field(default="", description="Rules text")
    active_effect: bool = Field(default=False, description="Active ability rather than trait")
    granted_abilities: tuple[str, ...] = Field(default=(), description="Granted ability ids")


class ActionProperty(BaseProperty):
    """Something the entity can do: an attack, a test or a power."""

    type: Literal["action"] = "action"
    action_type: ActionType = Field(default=ActionType.OTHER, description="Kind of action")
    skill_test: Skill | None = Field(default=None, description="Skill rolled for the action")
    damage_formula: str | None = Field(default=None, description="Damage formula for attacks")
    traits: tuple[str, ...] = Field(default=(), description="Weapon or power traits")


class NoteProperty(BaseProperty):
    """Free text attached to the tree."""

    type: Literal["note"] = "note"
    text: str = Field(default="", description="Note content")


Property = Annotated[
    Union[
        AttributeProperty,
        SkillProperty,
        ResourceProperty,
        ConstantProperty,
        EffectProperty,
        BonusProperty,
        FolderProperty,
        FeatureProperty,
        ActionProperty,
        NoteProperty,
    ],
    Field(discriminator="type"),
]
"""Any property node, discriminated by its ``type`` field."""

_PROPERTY_ADAPTER: TypeAdapter[Property] = TypeAdapter(Property)


def parse_property(data: dict[str, object]) -> Property:
    """Validate raw data into the matching property node model.

    Args:
        data: Mapping with a ``type`` key naming the node kind.

    Returns:
        The validated property node.
    """
    return _PROPERTY_ADAPTER.validate_python(data)


# =============================================================================
# Semantic Names
# =============================================================================

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_WORD = re.compile(r"[^0-9A-Za-z]+")

_ATTRIBUTE_NAMES = frozenset(attribute.value for attribute in Attribute)
_SKILL_NAMES = frozenset(skill.value for skill in Skill)


def to_snake_case(text: str) -> str:
    """Convert a display name, id fragment or camelCase name to snake_case.

    Example:
        >>> to_snake_case("Ballistic Skill")
        'ballistic_skill'
        >>> to_snake_case("maxWounds")
        'max_wounds'
    """
    spaced = _CAMEL_BOUNDARY.sub("_", text)
    return _NON_WORD.sub("_", spaced).strip("_").lower()


def _vocabulary_name(node: BaseProperty, prefix: str, vocabulary: frozenset[str]) -> str:
    if node.id.startswith(prefix):
        candidate = to_snake_case(node.id[len(prefix):])
        if candidate in vocabulary:
            return candidate
    return to_snake_case(node.name)


def semantic_name(node: BaseProperty) -> str:
    """Get the name a property is known by in formulas and effect targets.

    Attribute and skill nodes resolve through the id convention
    (``attr-<name>`` / ``skill-<name>``) before falling back to their display
    name, so a node displayed as "Strength (Astartes)" still answers to
    ``strength``.

    Args:
        node: Any property node.

    Returns:
        The snake_case semantic name.
    """
    if node.type == PropertyType.ATTRIBUTE:
        return _vocabulary_name(node, "attr-", _ATTRIBUTE_NAMES)
    if node.type == PropertyType.SKILL:
        return _vocabulary_name(node, "skill-", _SKILL_NAMES)
    return to_snake_case(node.name)


__all__ = [
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
]
