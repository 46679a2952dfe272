"""Property-tree computation engine.

``compute_entity`` walks the enabled subtree of a property tree in strict
passes and publishes each value under its semantic name so later passes
can reference it:

1. Attributes: the base value is replaced by the first ``set`` effect, then
   ``multiply`` effects apply in encounter order, then ``add`` effects in
   encounter order. The result is clamped to at least 1.
2. Formula constants, now that attribute values are known. Numeric
   constants are seeded before the first pass.
3. Skills: purchased ranks plus ``add`` effects (clamped to at least 0),
   plus the linked attribute. ``multiply`` and ``set`` effects on a skill
   are content errors; they are reported and not applied.
4. Resources: the ``maximum`` formula, evaluated last. Resources never
   feed back into earlier passes.

Effects select their targets by semantic name, or by the ids that
``resolve_tag_targets`` returns for tag targets.

Computation is best effort. A formula that fails for one property is
recorded as a ``ComputationError`` against that property and every other
property is still computed.

Example:
    >>> result = compute_entity(character.properties, character.root_property_id, tier=3)
    >>> result.stats.derived.max_wounds
    8
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import NamedTuple, TypeVar

from wrath_sheet.core.constants import (
    BASE_SPEED,
    DEFAULT_TIER,
    MIN_ATTRIBUTE_VALUE,
    MIN_SKILL_VALUE,
)
from wrath_sheet.core.exceptions import FormulaError
from wrath_sheet.core.logging import get_logger
from wrath_sheet.engine.formula import evaluate_formula
from wrath_sheet.models import graph
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
from wrath_sheet.models.entity import Entity
from wrath_sheet.models.enums import Attribute, EffectOperation, PropertyType, Skill, TargetType
from wrath_sheet.models.properties import (
    AttributeProperty,
    BonusProperty,
    ConstantProperty,
    EffectProperty,
    Number,
    Property,
    PropertyTarget,
    ResourceProperty,
    SkillProperty,
    semantic_name,
    to_snake_case,
)


logger = get_logger(__name__)

EntityT = TypeVar("EntityT", bound=Entity)


class _Modifier(NamedTuple):
    """An effect or bonus node normalised to one shape."""

    node_id: str
    name: str
    operation: EffectOperation
    amount: Number | str
    target: PropertyTarget
    tagged_ids: frozenset[str] = frozenset()


def _as_modifier(node: EffectProperty | BonusProperty) -> _Modifier:
    if isinstance(node, BonusProperty):
        return _Modifier(
            node_id=node.id,
            name=node.name,
            operation=EffectOperation.ADD,
            amount=node.amount,
            target=PropertyTarget(type=TargetType.SPECIFIC, names=(to_snake_case(node.target),)),
        )
    return _Modifier(
        node_id=node.id,
        name=node.name,
        operation=node.operation,
        amount=node.amount,
        target=node.target,
    )


def _resolve_tags(properties: Mapping[str, Property], modifier: _Modifier) -> _Modifier:
    if modifier.target.type != TargetType.TAGS:
        return modifier
    tagged = graph.resolve_tag_targets(properties, modifier.target.tags)
    return modifier._replace(tagged_ids=frozenset(tagged))


def _format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_signed(value: Number) -> str:
    text = _format_number(value)
    return text if text.startswith("-") else f"+{text}"


# =============================================================================
# Derived Stats
# =============================================================================


def get_attribute_modifier(value: Number) -> int:
    """Half an attribute, rounded down."""
    return math.floor(value / 2)


def calculate_derived_stats(attributes: AttributeValues, tier: int) -> DerivedStats:
    """Derive combat and social stats from attributes and tier.

    Args:
        attributes: Computed attribute values.
        tier: Campaign tier.

    Returns:
        The DerivedStats.
    """
    return DerivedStats(
        defence=1 + get_attribute_modifier(attributes.initiative),
        resilience=1 + attributes.toughness,
        determination=1 + get_attribute_modifier(attributes.willpower),
        max_wounds=tier + attributes.toughness,
        max_shock=tier + attributes.willpower,
        speed=max(BASE_SPEED, BASE_SPEED + get_attribute_modifier(attributes.agility)),
        passive_awareness=get_attribute_modifier(attributes.intellect),
        conviction=attributes.willpower,
        resolve=max(1, get_attribute_modifier(attributes.willpower)),
        influence=tier,
        wealth=tier,
    )


# =============================================================================
# Per-property Computation
# =============================================================================


class _Pass:
    """State shared by the passes of one computation."""

    def __init__(self, modifiers: Sequence[_Modifier], variables: dict[str, Number]) -> None:
        self.modifiers = modifiers
        self.variables = variables
        self.computations: dict[str, Computation] = {}
        self.errors: list[ComputationError] = []
        self.skill_ranks: dict[str, Number] = {}

    def record_error(
        self,
        node: Property,
        message: str,
        *,
        formula: str | None = None,
        effect_id: str | None = None,
    ) -> None:
        error = ComputationError(
            property_id=node.id,
            property_name=node.name,
            message=message,
            formula=formula,
            effect_id=effect_id,
        )
        self.errors.append(error)
        logger.warning(
            "Property computation error",
            property_id=node.id,
            property_name=node.name,
            error=message,
            formula=formula,
            effect_id=effect_id,
        )

    def modifiers_for(self, node: Property) -> list[_Modifier]:
        name = semantic_name(node)
        return [
            modifier
            for modifier in self.modifiers
            if modifier.target.matches(name) or node.id in modifier.tagged_ids
        ]

    def resolve_amount(self, modifier: _Modifier, target: Property) -> Number | None:
        """Resolve a modifier amount, recording a failure against the target."""
        if not isinstance(modifier.amount, str):
            return modifier.amount
        try:
            return evaluate_formula(modifier.amount, self.variables)
        except FormulaError as exc:
            self.record_error(target, exc.message, formula=modifier.amount, effect_id=modifier.node_id)
            return None

    def compute_attribute(self, node: AttributeProperty) -> Computation:
        name = semantic_name(node)
        modifiers = self.modifiers_for(node)
        value: Number = node.base_value
        applied: list[ComputedEffect] = []
        breakdown = [f"Base: {_format_number(node.base_value)}"]

        def apply(modifier: _Modifier, amount: Number, text: str) -> None:
            applied.append(
                ComputedEffect(
                    effect_id=modifier.node_id,
                    effect_name=modifier.name,
                    operation=modifier.operation,
                    amount=amount,
                )
            )
            breakdown.append(f"{modifier.name}: {text}")

        for modifier in modifiers:
            if modifier.operation != EffectOperation.SET:
                continue
            amount = self.resolve_amount(modifier, node)
            if amount is not None:
                value = amount
                apply(modifier, amount, f"set to {_format_number(amount)}")
            break

        for modifier in modifiers:
            if modifier.operation != EffectOperation.MULTIPLY:
                continue
            amount = self.resolve_amount(modifier, node)
            if amount is None:
                continue
            value *= amount
            apply(modifier, amount, f"×{_format_number(amount)}")

        for modifier in modifiers:
            if modifier.operation != EffectOperation.ADD:
                continue
            amount = self.resolve_amount(modifier, node)
            if amount is None:
                continue
            value += amount
            apply(modifier, amount, _format_signed(amount))

        clamped = value < MIN_ATTRIBUTE_VALUE
        if clamped:
            breakdown.append(f"Clamped to minimum {MIN_ATTRIBUTE_VALUE}")
            value = MIN_ATTRIBUTE_VALUE
        breakdown.append(f"Total: {_format_number(value)}")

        return Computation(
            property_id=node.id,
            property_name=node.name,
            semantic_name=name,
            property_type=PropertyType.ATTRIBUTE,
            base=node.base_value,
            result=value,
            effects=tuple(applied),
            breakdown=tuple(breakdown),
            clamped=clamped,
        )

    def compute_constant(self, node: ConstantProperty) -> Computation | None:
        name = semantic_name(node)
        if not node.is_formula:
            return Computation(
                property_id=node.id,
                property_name=node.name,
                semantic_name=name,
                property_type=PropertyType.CONSTANT,
                base=node.value,
                result=node.value,
                breakdown=(f"Value: {_format_number(node.value)}",),
            )
        try:
            value = evaluate_formula(node.value, self.variables)
        except FormulaError as exc:
            self.record_error(node, exc.message, formula=node.value)
            return None
        return Computation(
            property_id=node.id,
            property_name=node.name,
            semantic_name=name,
            property_type=PropertyType.CONSTANT,
            base=value,
            result=value,
            breakdown=(f"Formula: {node.value}", f"Result: {_format_number(value)}"),
        )

    def compute_skill(self, node: SkillProperty) -> Computation:
        name = semantic_name(node)
        linked = node.linked_attribute.value
        attribute_value = self.variables.get(linked, MIN_ATTRIBUTE_VALUE)
        ranks: Number = node.base_value
        applied: list[ComputedEffect] = []
        breakdown = [f"Skill Ranks: {_format_number(ranks)}"]

        for modifier in self.modifiers_for(node):
            if modifier.operation != EffectOperation.ADD:
                self.record_error(
                    node,
                    f"{modifier.operation.value} effects are not supported on skills",
                    effect_id=modifier.node_id,
                )
                continue
            amount = self.resolve_amount(modifier, node)
            if amount is None:
                continue
            ranks += amount
            applied.append(
                ComputedEffect(
                    effect_id=modifier.node_id,
                    effect_name=modifier.name,
                    operation=modifier.operation,
                    amount=amount,
                )
            )
            breakdown.append(f"{modifier.name}: {_format_signed(amount)}")

        clamped = ranks < MIN_SKILL_VALUE
        if clamped:
            breakdown.append(f"Clamped to minimum {MIN_SKILL_VALUE}")
            ranks = MIN_SKILL_VALUE
        self.skill_ranks[name] = ranks

        total = ranks + attribute_value
        breakdown.append(f"{Attribute(linked).display_name}: {_format_number(attribute_value)}")
        breakdown.append(f"Total: {_format_number(total)}")

        return Computation(
            property_id=node.id,
            property_name=node.name,
            semantic_name=name,
            property_type=PropertyType.SKILL,
            base=node.base_value + attribute_value,
            result=total,
            effects=tuple(applied),
            breakdown=tuple(breakdown),
            clamped=clamped,
        )

    def compute_resource(self, node: ResourceProperty) -> Computation | None:
        try:
            maximum = evaluate_formula(node.maximum, self.variables)
        except FormulaError as exc:
            self.record_error(node, exc.message, formula=node.maximum)
            return None
        return Computation(
            property_id=node.id,
            property_name=node.name,
            semantic_name=semantic_name(node),
            property_type=PropertyType.RESOURCE,
            base=maximum,
            result=maximum,
            breakdown=(f"Formula: {node.maximum}", f"Maximum: {_format_number(maximum)}"),
        )


# =============================================================================
# Entry Points
# =============================================================================


def _seed_variables(nodes: Sequence[Property], tier: int) -> dict[str, Number]:
    variables: dict[str, Number] = {"tier": tier}
    for attribute in Attribute:
        variables[attribute.value] = MIN_ATTRIBUTE_VALUE
    for node in nodes:
        if isinstance(node, ConstantProperty) and not node.is_formula:
            variables[semantic_name(node)] = node.value
    return variables


def _build_stats(state: _Pass, tier: int) -> EntityStats:
    attributes = AttributeValues(
        **{attribute.value: state.variables[attribute.value] for attribute in Attribute}
    )
    skills = SkillValues(
        **{skill.value: state.skill_ranks.get(skill.value, MIN_SKILL_VALUE) for skill in Skill}
    )
    return EntityStats(
        tier=tier,
        attributes=attributes,
        skills=skills,
        derived=calculate_derived_stats(attributes, tier),
    )


def compute_entity(
    properties: Mapping[str, Property],
    root_id: str,
    *,
    tier: int = DEFAULT_TIER,
) -> ComputationResult:
    """Compute every value in the enabled subtree of a property tree.

    The variable namespace is seeded with ``tier``, every attribute at its
    floor, and every numeric constant; a numeric constant named ``tier``
    overrides the argument.

    Args:
        properties: Property nodes keyed by id.
        root_id: Id of the node to compute from.
        tier: Campaign tier.

    Returns:
        Per-property computations, recorded errors, the final variable
        namespace and the flat stats snapshot.
    """
    nodes = list(graph.iter_enabled_subtree(properties, root_id))
    modifiers = [
        _resolve_tags(properties, _as_modifier(node))
        for node in nodes
        if isinstance(node, EffectProperty | BonusProperty)
    ]
    state = _Pass(modifiers, _seed_variables(nodes, tier))
    effective_tier = int(state.variables["tier"])

    logger.debug("Computing attributes", root_id=root_id, nodes=len(nodes))
    for node in nodes:
        if isinstance(node, AttributeProperty):
            computation = state.compute_attribute(node)
            state.computations[node.id] = computation
            state.variables[computation.semantic_name] = computation.result

    logger.debug("Computing constants", root_id=root_id)
    for node in nodes:
        if isinstance(node, ConstantProperty):
            computation = state.compute_constant(node)
            if computation is not None:
                state.computations[node.id] = computation
                state.variables[computation.semantic_name] = computation.result

    logger.debug("Computing skills", root_id=root_id)
    for node in nodes:
        if isinstance(node, SkillProperty):
            computation = state.compute_skill(node)
            state.computations[node.id] = computation
            state.variables[computation.semantic_name] = computation.result

    logger.debug("Computing resources", root_id=root_id)
    for node in nodes:
        if isinstance(node, ResourceProperty):
            computation = state.compute_resource(node)
            if computation is not None:
                state.computations[node.id] = computation

    result = ComputationResult(
        computations=state.computations,
        errors=tuple(state.errors),
        variables=dict(state.variables),
        stats=_build_stats(state, effective_tier),
    )
    logger.info(
        "Computation complete",
        root_id=root_id,
        computed=len(result.computations),
        errors=len(result.errors),
    )
    return result


def compute_entity_stats(entity: Entity) -> EntityStats:
    """Compute a fresh stats snapshot for an entity."""
    return compute_entity(entity.properties, entity.root_property_id, tier=entity.tier).stats


def refresh_entity_stats(entity: EntityT) -> EntityT:
    """Return a copy of an entity whose stats cache matches its properties."""
    return entity.model_copy(update={"stats": compute_entity_stats(entity)})


__all__ = [
    "get_attribute_modifier",
    "calculate_derived_stats",
    "compute_entity",
    "compute_entity_stats",
    "refresh_entity_stats",
]
