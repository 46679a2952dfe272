"""Character assembly: purchase decisions to a property tree and XP ledger.

A build names a species, an archetype and target ratings. Species and
archetype bonuses stack on top of the attribute floor of 1 (skills start
at 0); everything between that baseline and the target is bought one step
at a time from the cost tables. Ratings beyond the tables can only come
from bonuses.

The assembled tree holds:

* a ``tier`` constant,
* one ``attr-<name>`` node per attribute and one ``skill-<name>`` node per
  skill, holding the floor plus purchased steps,
* the species folder (``species-<id>``) with its bonus nodes,
* the archetype folder (``archetype-<id>``) with its bonus nodes and a
  feature granting the archetype ability.

Example:
    >>> build = CharacterBuild(
    ...     name="Sister Amalia",
    ...     species_id="human",
    ...     archetype_id="sister-hospitaller",
    ...     keyword_choices={"[ORDER]": "ORDER OF OUR MARTYRED LADY"},
    ...     attribute_targets={"intellect": 5},
    ...     skill_targets={"medicae": 3},
    ... )
    >>> character = assemble_character(build)
    >>> character.stats.attributes.intellect
    5
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from wrath_sheet.content.archetypes import get_archetype_by_id
from wrath_sheet.content.species import create_species_properties, get_species_by_id
from wrath_sheet.core.config import get_settings
from wrath_sheet.core.constants import (
    ATTRIBUTE_COSTS,
    DEFAULT_RANK,
    DEFAULT_TIER,
    MIN_ATTRIBUTE_VALUE,
    MIN_SKILL_VALUE,
    SKILL_COSTS,
)
from wrath_sheet.core.exceptions import CharacterBuildError
from wrath_sheet.core.logging import bind_context, clear_context, get_logger
from wrath_sheet.engine.computation import refresh_entity_stats
from wrath_sheet.models.content import Archetype, Species, is_bracketed_keyword
from wrath_sheet.models.entity import Character, create_empty_character, tier_starting_xp
from wrath_sheet.models.enums import Attribute, Skill
from wrath_sheet.models.graph import add_property, add_subtree
from wrath_sheet.models.properties import (
    AttributeProperty,
    BonusProperty,
    ConstantProperty,
    FeatureProperty,
    FolderProperty,
    Property,
    SkillProperty,
)


logger = get_logger(__name__)


class CharacterBuild(BaseModel):
    """Purchase decisions for a new character.

    Attributes:
        name: Character name.
        tier: Campaign tier; sets the XP budget.
        rank: Starting rank.
        player: Optional player name.
        species_id: Species catalog id.
        archetype_id: Archetype catalog id.
        keyword_choices: Replacement for each bracketed keyword,
            e.g. ``{"[ORDER]": "ORDER OF OUR MARTYRED LADY"}``.
        attribute_targets: Final attribute ratings; unlisted attributes stay
            at their baseline.
        skill_targets: Final skill ranks; unlisted skills stay at their
            baseline.
        extra_xp: XP granted on top of the tier allowance.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    tier: int = Field(default=DEFAULT_TIER, ge=1)
    rank: int = Field(default=DEFAULT_RANK, ge=0)
    player: str | None = None
    species_id: str
    archetype_id: str
    keyword_choices: dict[str, str] = Field(default_factory=dict)
    attribute_targets: dict[Attribute, int] = Field(default_factory=dict)
    skill_targets: dict[Skill, int] = Field(default_factory=dict)
    extra_xp: int = Field(default=0, ge=0)


class XPLedger(BaseModel):
    """Where a build's XP went.

    Attributes:
        budget: XP granted by the tier plus any extra XP.
        species: Cost of the species.
        archetype: Cost of the archetype.
        attributes: Purchase cost per attribute raised above its baseline.
        skills: Purchase cost per skill raised above its baseline.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    budget: int = Field(ge=0)
    species: int = Field(ge=0)
    archetype: int = Field(ge=0)
    attributes: dict[Attribute, int] = Field(default_factory=dict)
    skills: dict[Skill, int] = Field(default_factory=dict)

    @property
    def spent(self) -> int:
        """Total XP spent."""
        return self.species + self.archetype + sum(self.attributes.values()) + sum(self.skills.values())

    @property
    def available(self) -> int:
        """XP left over; negative when over budget."""
        return self.budget - self.spent


# =============================================================================
# Cost Tables
# =============================================================================


def _purchase_cost(
    costs: Mapping[int, int],
    from_rating: int,
    to_rating: int,
    field_name: str,
) -> int:
    if to_rating < from_rating:
        raise CharacterBuildError(
            f"Cannot lower a rating from {from_rating} to {to_rating}",
            field_name=field_name,
            invalid_value=to_rating,
        )
    total = 0
    for step in range(from_rating + 1, to_rating + 1):
        if step not in costs:
            raise CharacterBuildError(
                f"Rating {step} cannot be purchased",
                field_name=field_name,
                invalid_value=to_rating,
            )
        total += costs[step]
    return total


def attribute_purchase_cost(from_rating: int, to_rating: int) -> int:
    """XP cost of raising an attribute.

    Each step costs the table value of the rating it reaches, so raising
    from 2 to 4 costs ``10 + 20``.

    Args:
        from_rating: Current rating.
        to_rating: Target rating.

    Returns:
        Total XP cost; 0 when the ratings are equal.

    Raises:
        CharacterBuildError: If the target is below the current rating or a
            step is not in the cost table.
    """
    return _purchase_cost(ATTRIBUTE_COSTS, from_rating, to_rating, "attribute_targets")


def skill_purchase_cost(from_rank: int, to_rank: int) -> int:
    """XP cost of raising a skill, step by step.

    Raises:
        CharacterBuildError: If the target is below the current rank or a
            step is not in the cost table.
    """
    return _purchase_cost(SKILL_COSTS, from_rank, to_rank, "skill_targets")


# =============================================================================
# Validation
# =============================================================================


def _resolve_content(build: CharacterBuild) -> tuple[Species, Archetype]:
    species = get_species_by_id(build.species_id)
    if species is None:
        raise CharacterBuildError(
            f"Unknown species {build.species_id!r}",
            field_name="species_id",
            invalid_value=build.species_id,
        )
    archetype = get_archetype_by_id(build.archetype_id)
    if archetype is None:
        raise CharacterBuildError(
            f"Unknown archetype {build.archetype_id!r}",
            field_name="archetype_id",
            invalid_value=build.archetype_id,
        )
    if not archetype.allows_species(species.id):
        raise CharacterBuildError(
            f"{archetype.name} is not available to {species.name} characters",
            field_name="archetype_id",
            invalid_value=archetype.id,
            details={"allowed_species": list(archetype.species)},
        )
    if archetype.tier > build.tier:
        raise CharacterBuildError(
            f"{archetype.name} requires tier {archetype.tier}",
            field_name="tier",
            invalid_value=build.tier,
        )
    return species, archetype


def _attribute_baseline(attribute: Attribute, species: Species, archetype: Archetype) -> int:
    return (
        MIN_ATTRIBUTE_VALUE
        + species.base_attributes.get(attribute, 0)
        + archetype.attribute_bonuses.get(attribute, 0)
    )


def _skill_baseline(skill: Skill, species: Species, archetype: Archetype) -> int:
    return MIN_SKILL_VALUE + species.base_skills.get(skill, 0) + archetype.skill_bonuses.get(skill, 0)


def _attribute_purchases(
    build: CharacterBuild,
    species: Species,
    archetype: Archetype,
) -> dict[Attribute, tuple[int, int]]:
    """Map each attribute to (baseline, target), checking species maximums."""
    purchases: dict[Attribute, tuple[int, int]] = {}
    for attribute in Attribute:
        baseline = _attribute_baseline(attribute, species, archetype)
        target = build.attribute_targets.get(attribute, baseline)
        maximum = species.maximum_for(attribute)
        if target > baseline and maximum is not None and target > maximum:
            raise CharacterBuildError(
                f"{attribute.display_name} {target} exceeds the {species.name} maximum of {maximum}",
                field_name="attribute_targets",
                invalid_value=target,
            )
        purchases[attribute] = (baseline, target)
    return purchases


def _skill_purchases(
    build: CharacterBuild,
    species: Species,
    archetype: Archetype,
) -> dict[Skill, tuple[int, int]]:
    max_rank = get_settings().game.max_skill_rank
    purchases: dict[Skill, tuple[int, int]] = {}
    for skill in Skill:
        baseline = _skill_baseline(skill, species, archetype)
        target = build.skill_targets.get(skill, baseline)
        if target > baseline and target > max_rank:
            raise CharacterBuildError(
                f"{skill.display_name} {target} exceeds the maximum rank of {max_rank}",
                field_name="skill_targets",
                invalid_value=target,
            )
        purchases[skill] = (baseline, target)
    return purchases


def resolve_keywords(build: CharacterBuild, species: Species, archetype: Archetype) -> tuple[str, ...]:
    """Combine species and archetype keywords, replacing bracketed ones.

    Duplicates are dropped, keeping the first occurrence.

    Raises:
        CharacterBuildError: If a bracketed keyword has no choice, a choice
            is itself bracketed or empty, or a choice names a keyword the
            build does not have.
    """
    placeholders = [
        keyword for keyword in (*species.keywords, *archetype.keywords) if is_bracketed_keyword(keyword)
    ]
    unused = set(build.keyword_choices) - set(placeholders)
    if unused:
        raise CharacterBuildError(
            "Keyword choices given for keywords the build does not have",
            field_name="keyword_choices",
            invalid_value=sorted(unused),
        )

    keywords: list[str] = []
    for keyword in (*species.keywords, *archetype.keywords):
        if is_bracketed_keyword(keyword):
            choice = build.keyword_choices.get(keyword, "").strip()
            if not choice or is_bracketed_keyword(choice):
                raise CharacterBuildError(
                    f"A choice is required for {keyword}",
                    field_name="keyword_choices",
                    invalid_value=keyword,
                )
            resolved = choice.upper()
        else:
            resolved = keyword
        if resolved not in keywords:
            keywords.append(resolved)
    return tuple(keywords)


# =============================================================================
# XP Ledger
# =============================================================================


def build_xp_ledger(build: CharacterBuild) -> XPLedger:
    """Price a build without assembling it.

    Raises:
        CharacterBuildError: If the build is not legal.
    """
    species, archetype = _resolve_content(build)
    attributes = {
        attribute: attribute_purchase_cost(baseline, target)
        for attribute, (baseline, target) in _attribute_purchases(build, species, archetype).items()
        if target != baseline
    }
    skills = {
        skill: skill_purchase_cost(baseline, target)
        for skill, (baseline, target) in _skill_purchases(build, species, archetype).items()
        if target != baseline
    }
    return XPLedger(
        budget=tier_starting_xp(build.tier) + build.extra_xp,
        species=species.xp_cost,
        archetype=archetype.xp_cost,
        attributes=attributes,
        skills=skills,
    )


def calculate_xp_spent(build: CharacterBuild) -> int:
    """Total XP a build spends on species, archetype and purchases."""
    return build_xp_ledger(build).spent


# =============================================================================
# Node Emission
# =============================================================================


def create_archetype_properties(archetype: Archetype) -> list[Property]:
    """Build the property subtree an archetype adds to a character.

    Args:
        archetype: Archetype to build nodes for.

    Returns:
        Subtree nodes, folder first, ready for ``add_subtree``.
    """
    folder_id = f"archetype-{archetype.id}"
    children: list[Property] = []

    for order, (attribute, value) in enumerate(archetype.attribute_bonuses.items(), start=1):
        children.append(
            BonusProperty(
                id=f"{folder_id}-attr-{attribute.value}",
                name=f"{archetype.name} {attribute.display_name}",
                parent=folder_id,
                order=order,
                tags=("archetype", "attribute"),
                target=attribute.value,
                amount=value,
            )
        )
    for order, (skill, ranks) in enumerate(archetype.skill_bonuses.items(), start=100):
        children.append(
            BonusProperty(
                id=f"{folder_id}-skill-{skill.value}",
                name=f"{archetype.name} {skill.display_name}",
                parent=folder_id,
                order=order,
                tags=("archetype", "skill"),
                target=skill.value,
                amount=ranks,
            )
        )
    if archetype.ability_id:
        children.append(
            FeatureProperty(
                id=f"{folder_id}-ability",
                name=f"{archetype.name} Ability",
                parent=folder_id,
                order=300,
                tags=("archetype", "ability"),
                granted_abilities=(archetype.ability_id,),
                text=archetype.description,
            )
        )

    folder = FolderProperty(
        id=folder_id,
        name=archetype.name,
        order=200,
        tags=("archetype",),
        keywords=archetype.keywords,
        description=archetype.description,
        source=str(archetype.source),
        children=tuple(node.id for node in children),
    )
    return [folder, *children]


def _purchased_nodes(
    species: Species,
    attributes: Mapping[Attribute, tuple[int, int]],
    skills: Mapping[Skill, tuple[int, int]],
) -> list[Property]:
    nodes: list[Property] = []
    for order, (attribute, (baseline, target)) in enumerate(attributes.items(), start=10):
        nodes.append(
            AttributeProperty(
                id=f"attr-{attribute.value}",
                name=attribute.display_name,
                order=order,
                tags=("attribute",),
                base_value=MIN_ATTRIBUTE_VALUE + target - baseline,
                maximum=species.maximum_for(attribute),
            )
        )
    for order, (skill, (baseline, target)) in enumerate(skills.items(), start=30):
        nodes.append(
            SkillProperty(
                id=f"skill-{skill.value}",
                name=skill.display_name,
                order=order,
                tags=("skill",),
                base_value=MIN_SKILL_VALUE + target - baseline,
                linked_attribute=skill.linked_attribute,
            )
        )
    return nodes


def assemble_character(build: CharacterBuild, *, enforce_budget: bool = True) -> Character:
    """Turn a build into a character with a computed stats snapshot.

    Log events emitted while the character is built carry its
    ``character_id``; the logging context is cleared afterwards.

    Args:
        build: Purchase decisions.
        enforce_budget: Reject builds that spend more XP than they have.

    Returns:
        The assembled Character.

    Raises:
        CharacterBuildError: If the build is not legal, or is over budget
            while ``enforce_budget`` is set.
    """
    species, archetype = _resolve_content(build)
    keywords = resolve_keywords(build, species, archetype)
    attributes = _attribute_purchases(build, species, archetype)
    skills = _skill_purchases(build, species, archetype)
    ledger = build_xp_ledger(build)

    if enforce_budget and ledger.available < 0:
        raise CharacterBuildError(
            f"Build spends {ledger.spent} XP but only {ledger.budget} XP is available",
            field_name="xp_spent",
            invalid_value=ledger.spent,
            details={"budget": ledger.budget},
        )

    character = create_empty_character(build.name, build.tier, player=build.player, rank=build.rank)
    root_id = character.root_property_id

    bind_context(character_id=character.id)
    try:
        properties = add_property(
            character.properties,
            ConstantProperty(id="tier", name="Tier", value=build.tier, tags=("tier",)),
            root_id,
        )
        for node in _purchased_nodes(species, attributes, skills):
            properties = add_property(properties, node, root_id)
        species_nodes = create_species_properties(species)
        species_nodes[0] = species_nodes[0].model_copy(update={"order": 100})
        properties = add_subtree(properties, species_nodes, root_id)
        properties = add_subtree(properties, create_archetype_properties(archetype), root_id)

        character = character.model_copy(
            update={
                "species": species.id,
                "archetype": archetype.id,
                "keywords": keywords,
                "properties": properties,
                "xp_total": ledger.budget,
                "xp_spent": ledger.spent,
            }
        )
        character = refresh_entity_stats(character)
        logger.info(
            "Character assembled",
            species=species.id,
            archetype=archetype.id,
            xp_spent=ledger.spent,
            xp_total=ledger.budget,
        )
    finally:
        clear_context()
    return character

__all__ = [
    "CharacterBuild",
    "XPLedger",
    "attribute_purchase_cost",
    "skill_purchase_cost",
    "resolve_keywords",
    "build_xp_ledger",
    "calculate_xp_spent",
    "create_archetype_properties",
    "assemble_character",
    "tier_starting_xp",
]
