"""Tier 1 archetypes (Core Rulebook p.90-98).

Attribute and skill bonuses are added on top of the species baseline when a
character is assembled. Bracketed keywords such as ``[ORDER]`` must be
replaced by a player choice.
"""

from __future__ import annotations

from types import MappingProxyType

from wrath_sheet.models.content import Archetype, SourceReference
from wrath_sheet.models.enums import Attribute, Skill


_ALL_ARCHETYPES: tuple[Archetype, ...] = (
    Archetype(
        id="sister-hospitaller",
        name="Sister Hospitaller",
        faction="Adepta Sororitas",
        tier=1,
        species=("human",),
        xp_cost=24,
        keywords=("IMPERIUM", "ADEPTUS MINISTORUM", "ADEPTA SORORITAS", "[ORDER]"),
        attribute_bonuses={Attribute.WILLPOWER: 3, Attribute.INTELLECT: 3},
        skill_bonuses={Skill.MEDICAE: 1, Skill.SCHOLAR: 1},
        ability_id="loyal-compassion",
        description=(
            "A battlefield healer of both mind and soul. You ministrate to the injured "
            "with great Medicae expertise and inspire the pious with your faith."
        ),
        source=SourceReference(page=91),
    ),
    Archetype(
        id="ministorum-priest",
        name="Ministorum Priest",
        faction="Adeptus Ministorum",
        tier=1,
        species=("human",),
        xp_cost=12,
        keywords=("IMPERIUM", "ADEPTUS MINISTORUM"),
        attribute_bonuses={Attribute.WILLPOWER: 3},
        skill_bonuses={Skill.SCHOLAR: 1},
        ability_id="fiery-invective",
        description=(
            "You preach and enforce the Imperial Cult, inflaming faithful hearts with "
            "your impassioned oration."
        ),
        source=SourceReference(page=92),
    ),
    Archetype(
        id="imperial-guardsman",
        name="Imperial Guardsman",
        faction="Astra Militarum",
        tier=1,
        species=("human",),
        xp_cost=6,
        keywords=("IMPERIUM", "ASTRA MILITARUM", "[REGIMENT]"),
        skill_bonuses={Skill.BALLISTIC_SKILL: 2},
        ability_id="look-out-sir",
        description=(
            "A footsoldier in the galaxy's greatest army, trained to stand and fire "
            "against the monstrous enemies of humanity."
        ),
        source=SourceReference(page=93),
    ),
    Archetype(
        id="inquisitorial-acolyte",
        name="Inquisitorial Acolyte",
        faction="Inquisition",
        tier=1,
        species=("human",),
        xp_cost=6,
        keywords=("IMPERIUM", "INQUISITION", "[ANY]", "[ORDO]"),
        ability_id="inquisitorial-decree",
        description="Conscripted to aid an Inquisitor, you identify and destroy threats to the Imperium.",
        source=SourceReference(page=94),
    ),
    Archetype(
        id="inquisitorial-sage",
        name="Inquisitorial Sage",
        faction="Inquisition",
        tier=1,
        species=("human",),
        xp_cost=16,
        keywords=("ADEPTUS ADMINISTRATUM", "IMPERIUM", "INQUISITION", "[ORDO]"),
        attribute_bonuses={Attribute.INTELLECT: 3},
        skill_bonuses={Skill.SCHOLAR: 2},
        ability_id="administratum-records",
        influence_modifier=1,
        description=(
            "A bureaucratic savant, expert at sourcing and judiciously applying knowledge "
            "to serve the Imperium and your own ends."
        ),
        source=SourceReference(page=95),
    ),
    Archetype(
        id="ganger",
        name="Ganger",
        faction="Scum",
        tier=1,
        species=("human",),
        xp_cost=2,
        keywords=("SCUM", "[ANY]"),
        skill_bonuses={Skill.CUNNING: 1},
        ability_id="scrounger",
        influence_modifier=1,
        description=(
            "A member of the Imperial underclass whose identity is tied to a territorial gang."
        ),
        source=SourceReference(page=96),
    ),
    Archetype(
        id="corsair",
        name="Corsair",
        faction="Aeldari",
        tier=1,
        species=("aeldari",),
        xp_cost=16,
        keywords=("AELDARI", "ANHRATHE", "[COTERIE]"),
        attribute_bonuses={Attribute.AGILITY: 3},
        skill_bonuses={Skill.ATHLETICS: 2},
        ability_id="dancing-on-blades-edge",
        description=(
            "A space pirate and self-imposed exile who raids for coin and for the full "
            "spectrum of sensation."
        ),
        source=SourceReference(page=97),
    ),
    Archetype(
        id="ork-boy",
        name="Ork Boy",
        faction="Ork",
        tier=1,
        species=("ork",),
        xp_cost=26,
        keywords=("ORK", "[CLAN]"),
        attribute_bonuses={Attribute.STRENGTH: 3, Attribute.TOUGHNESS: 3},
        skill_bonuses={Skill.WEAPON_SKILL: 2},
        ability_id="get-stuck-in",
        description="A hulking, brutish creature who lives only to fight.",
        source=SourceReference(page=98),
    ),
)


ALL_ARCHETYPES = MappingProxyType({archetype.id: archetype for archetype in _ALL_ARCHETYPES})


def get_archetype_by_id(archetype_id: str) -> Archetype | None:
    """Look up an archetype; None when unknown."""
    return ALL_ARCHETYPES.get(archetype_id)


def get_archetypes_by_tier(tier: int) -> list[Archetype]:
    """Archetypes whose tier is exactly ``tier``, in catalog order."""
    return [archetype for archetype in ALL_ARCHETYPES.values() if archetype.tier == tier]


def get_archetypes_by_species(species_id: str) -> list[Archetype]:
    """Archetypes the given species may take, in catalog order."""
    return [archetype for archetype in ALL_ARCHETYPES.values() if archetype.allows_species(species_id)]


def get_archetypes_by_faction(faction: str) -> list[Archetype]:
    """Archetypes belonging to a faction, in catalog order."""
    return [archetype for archetype in ALL_ARCHETYPES.values() if archetype.faction == faction]


__all__ = [
    "ALL_ARCHETYPES",
    "get_archetype_by_id",
    "get_archetypes_by_tier",
    "get_archetypes_by_species",
    "get_archetypes_by_faction",
]
