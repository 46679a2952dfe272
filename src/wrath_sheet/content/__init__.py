"""Static rule content for Wrath & Glory.

Every catalog is a read-only mapping built once at import and addressed by
stable string ids. Lookups return None for unknown ids; callers that need an
ability to exist use ``require_ability``, which raises
``ContentNotFoundError``.

Submodules:
    keywords: Keyword definitions by category.
    species: Playable species and the property subtree each one adds.
    archetypes: Tier 1 archetypes.
    abilities: Archetype abilities.

Example:
    >>> from wrath_sheet.content import get_archetype_by_id, get_species_by_id
    >>> get_archetype_by_id("ork-boy").species
    ('ork',)
    >>> get_species_by_id("ork").speed
    6
"""

from __future__ import annotations

# =============================================================================
# Keywords
# =============================================================================
from wrath_sheet.content.keywords import (
    KEYWORD_DEFINITIONS,
    get_keyword_definition,
    get_keywords_by_category,
)

# =============================================================================
# Species & Archetypes
# =============================================================================
from wrath_sheet.content.species import (
    ALL_SPECIES,
    create_species_properties,
    get_species_by_id,
)
from wrath_sheet.content.archetypes import (
    ALL_ARCHETYPES,
    get_archetype_by_id,
    get_archetypes_by_faction,
    get_archetypes_by_species,
    get_archetypes_by_tier,
)

# =============================================================================
# Abilities
# =============================================================================
from wrath_sheet.content.abilities import ARCHETYPE_ABILITIES, get_ability_by_id, require_ability


__all__ = [
    # Keywords
    "KEYWORD_DEFINITIONS",
    "get_keyword_definition",
    "get_keywords_by_category",
    # Species
    "ALL_SPECIES",
    "get_species_by_id",
    "create_species_properties",
    # Archetypes
    "ALL_ARCHETYPES",
    "get_archetype_by_id",
    "get_archetypes_by_tier",
    "get_archetypes_by_species",
    "get_archetypes_by_faction",
    # Abilities
    "ARCHETYPE_ABILITIES",
    "get_ability_by_id",
    "require_ability",
]
