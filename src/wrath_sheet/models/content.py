"""Rule-content schemas: keywords, species and archetypes.

Content records are static data consumed by the engine. They are frozen
and addressed by stable string ids.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

from wrath_sheet.models.enums import Attribute, KeywordCategory, Size, Skill
from wrath_sheet.models.properties import Property


_BRACKETED = re.compile(r"^\[[^\]]+\]$")


def is_bracketed_keyword(keyword: str) -> bool:
    """Whether a keyword is a placeholder such as ``[CHAPTER]`` that needs a choice."""
    return bool(_BRACKETED.match(keyword))


class SourceReference(BaseModel):
    """Book and page a piece of content is printed on."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    book: str = "Core Rulebook"
    page: int = Field(ge=1)

    def __str__(self) -> str:
        return f"{self.book} p.{self.page}"


class KeywordDefinition(BaseModel):
    """Definition of one keyword."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    keyword: str
    category: KeywordCategory
    name: str
    description: str
    game_effect: str | None = None
    examples: tuple[str, ...] = ()


class Species(BaseModel):
    """A playable species.

    Attributes:
        id: Stable id, e.g. 'adeptus-astartes'.
        name: Display name.
        xp_cost: XP spent to play this species.
        base_attributes: Attribute bonuses granted by the species.
        base_skills: Skill ranks granted by the species.
        attribute_maximums: Highest rating each attribute may be bought to.
        properties: Species nodes (features, bonuses) added to the tree.
        speed: Movement speed.
        size: Size category.
        keywords: Keywords granted, possibly bracketed.
        description: Flavour text.
        common_names: Example names.
        source: Rulebook reference.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    name: str
    xp_cost: int = Field(ge=0)
    base_attributes: dict[Attribute, int] = Field(default_factory=dict)
    base_skills: dict[Skill, int] = Field(default_factory=dict)
    attribute_maximums: dict[Attribute, int]
    properties: tuple[Property, ...] = ()
    speed: int = Field(ge=0)
    size: Size = Size.AVERAGE
    keywords: tuple[str, ...] = ()
    description: str = ""
    common_names: tuple[str, ...] = ()
    source: SourceReference

    def maximum_for(self, attribute: Attribute) -> int | None:
        """Get the species cap for an attribute, if it has one."""
        return self.attribute_maximums.get(attribute)


class Archetype(BaseModel):
    """A character archetype.

    Attributes:
        id: Stable id, e.g. 'sister-hospitaller'.
        name: Display name.
        faction: Faction grouping used for display.
        tier: Lowest campaign tier the archetype is available at.
        species: Ids of species allowed to take the archetype.
        xp_cost: XP spent to take the archetype.
        keywords: Keywords granted, possibly bracketed.
        attribute_bonuses: Attribute bonuses granted.
        skill_bonuses: Skill ranks granted.
        ability_id: Id of the archetype ability.
        influence_modifier: Influence adjustment.
        description: Flavour text.
        source: Rulebook reference.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    name: str
    faction: str
    tier: int = Field(ge=1, le=4)
    species: tuple[str, ...]
    xp_cost: int = Field(ge=0)
    keywords: tuple[str, ...] = ()
    attribute_bonuses: dict[Attribute, int] = Field(default_factory=dict)
    skill_bonuses: dict[Skill, int] = Field(default_factory=dict)
    ability_id: str | None = None
    influence_modifier: int = 0
    description: str = ""
    source: SourceReference

    def allows_species(self, species_id: str) -> bool:
        """Whether characters of the given species may take this archetype."""
        return species_id in self.species

    @property
    def bracketed_keywords(self) -> tuple[str, ...]:
        """Keywords that must be replaced by a player choice."""
        return tuple(keyword for keyword in self.keywords if is_bracketed_keyword(keyword))


__all__ = [
    "is_bracketed_keyword",
    "SourceReference",
    "KeywordDefinition",
    "Species",
    "Archetype",
]
