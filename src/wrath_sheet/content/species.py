"""Playable species (Core Rulebook p.26-29)."""

from __future__ import annotations

from types import MappingProxyType

from wrath_sheet.models.content import SourceReference, Species
from wrath_sheet.models.enums import Attribute, Size, Skill
from wrath_sheet.models.properties import (
    BonusProperty,
    ConstantProperty,
    FeatureProperty,
    FolderProperty,
    Property,
)


def _maximums(
    strength: int,
    toughness: int,
    agility: int,
    initiative: int,
    willpower: int,
    intellect: int,
    fellowship: int,
) -> dict[Attribute, int]:
    return {
        Attribute.STRENGTH: strength,
        Attribute.TOUGHNESS: toughness,
        Attribute.AGILITY: agility,
        Attribute.INITIATIVE: initiative,
        Attribute.WILLPOWER: willpower,
        Attribute.INTELLECT: intellect,
        Attribute.FELLOWSHIP: fellowship,
    }


def _feature(species_id: str, slug: str, name: str, text: str, order: int, *tags: str) -> FeatureProperty:
    return FeatureProperty(
        id=f"{species_id}-{slug}",
        name=name,
        text=text,
        order=order,
        tags=("species", *tags),
    )


_ASTARTES_FEATURES = (
    _feature(
        "adeptus-astartes",
        "defender-of-humanity",
        "Defender of Humanity",
        "Add +Rank Icons to any successful attack against a Mob.",
        300,
        "combat",
    ),
    _feature(
        "adeptus-astartes",
        "honour-the-chapter",
        "Honour the Chapter",
        (
            "You are subject to the orders of your chapter master, and must honour the "
            "beliefs and traditions of your chapter."
        ),
        301,
        "roleplay",
    ),
    BonusProperty(
        id="adeptus-astartes-resolve",
        name="Astartes Resolve",
        target="resolve",
        amount=1,
        order=302,
        tags=("species", "resolve"),
        description="Your Resolve increases by +1",
    ),
    _feature(
        "adeptus-astartes",
        "implants",
        "Space Marine Implants",
        (
            "You are immune to the Bleeding Condition. You gain +1 bonus dice to any test "
            "related to one of the 19 implants if the GM agrees it is appropriate."
        ),
        303,
        "implants",
    ),
)


_PRIMARIS_FEATURES = (
    _feature(
        "primaris-astartes",
        "defender-of-humanity",
        "Defender of Humanity",
        "Add +Rank Icons to any successful attack against a Mob.",
        300,
        "combat",
    ),
    _feature(
        "primaris-astartes",
        "honour-the-chapter",
        "Honour the Chapter (Primaris)",
        (
            "You are subject to the orders of your chapter master, and must honour the "
            "beliefs and traditions of your chapter. As a Primaris, you ignore any "
            "impurities in your Chapter Gene-Seed, and also gain +3 Wounds."
        ),
        301,
        "roleplay",
    ),
    BonusProperty(
        id="primaris-astartes-resolve",
        name="Primaris Resolve",
        target="resolve",
        amount=1,
        order=302,
        tags=("species", "resolve"),
    ),
    BonusProperty(
        id="primaris-astartes-wounds",
        name="Primaris Toughness",
        target="wounds",
        amount=3,
        order=303,
        tags=("species", "wounds"),
        description="Primaris gain +3 bonus Wounds",
    ),
    _feature(
        "primaris-astartes",
        "implants",
        "Space Marine Implants",
        (
            "You are immune to the Bleeding Condition. You gain +1 bonus dice to any test "
            "related to one of the 22 implants if the GM agrees it is appropriate."
        ),
        304,
        "implants",
    ),
)


_ASTARTES_SKILLS = {
    Skill.ATHLETICS: 3,
    Skill.AWARENESS: 3,
    Skill.BALLISTIC_SKILL: 3,
    Skill.STEALTH: 3,
    Skill.WEAPON_SKILL: 3,
}


_ALL_SPECIES: tuple[Species, ...] = (
    Species(
        id="human",
        name="Human",
        xp_cost=0,
        attribute_maximums=_maximums(8, 8, 8, 8, 8, 8, 8),
        speed=6,
        size=Size.AVERAGE,
        keywords=("IMPERIUM", "HUMAN"),
        description=(
            "The uncounted trillions of Humans are the most numerous and widespread "
            "Species in the galaxy."
        ),
        common_names=("Aleksander", "Brother Marius", "Hester", "Sister Amalia"),
        source=SourceReference(page=26),
    ),
    Species(
        id="adeptus-astartes",
        name="Adeptus Astartes",
        xp_cost=160,
        base_attributes={
            Attribute.STRENGTH: 4,
            Attribute.TOUGHNESS: 4,
            Attribute.AGILITY: 4,
            Attribute.INITIATIVE: 4,
            Attribute.INTELLECT: 3,
            Attribute.WILLPOWER: 3,
        },
        base_skills=_ASTARTES_SKILLS,
        attribute_maximums=_maximums(10, 10, 9, 9, 10, 10, 8),
        properties=_ASTARTES_FEATURES,
        speed=7,
        size=Size.LARGE,
        keywords=("IMPERIUM", "ADEPTUS ASTARTES", "[CHAPTER]"),
        description=(
            "The Emperor's Angels of Death: transhuman demigods created for war who know no fear."
        ),
        common_names=("Cato", "Gaius", "Varro"),
        source=SourceReference(page=27),
    ),
    Species(
        id="primaris-astartes",
        name="Primaris Astartes",
        xp_cost=198,
        base_attributes={
            Attribute.STRENGTH: 5,
            Attribute.TOUGHNESS: 5,
            Attribute.AGILITY: 4,
            Attribute.INITIATIVE: 4,
            Attribute.INTELLECT: 3,
            Attribute.WILLPOWER: 3,
        },
        base_skills={**_ASTARTES_SKILLS, Skill.BALLISTIC_SKILL: 4},
        attribute_maximums=_maximums(12, 12, 9, 9, 10, 10, 8),
        properties=_PRIMARIS_FEATURES,
        speed=7,
        size=Size.LARGE,
        keywords=("IMPERIUM", "ADEPTUS ASTARTES", "PRIMARIS", "[CHAPTER]"),
        description=(
            "A new breed of transhuman warriors, larger and more powerful than their "
            "Firstborn brothers."
        ),
        common_names=("Iolus", "Messinius", "Sicarius"),
        source=SourceReference(page=27),
    ),
    Species(
        id="aeldari",
        name="Aeldari",
        xp_cost=10,
        base_attributes={Attribute.AGILITY: 3},
        attribute_maximums=_maximums(6, 6, 10, 10, 8, 8, 7),
        properties=(
            _feature(
                "aeldari",
                "intense-emotion",
                "Intense Emotion",
                "Increase the DN of any Resolve Tests you make by +1.",
                300,
            ),
            _feature(
                "aeldari",
                "psychosensitive",
                "Psychosensitive",
                "You may take the PSYKER Keyword for only 5 XP.",
                301,
                "psychic",
            ),
        ),
        speed=8,
        size=Size.AVERAGE,
        keywords=("AELDARI",),
        description=(
            "An ancient xenos Species whose declining empire once spanned the galaxy."
        ),
        common_names=("Eldrad", "Illic", "Yriel"),
        source=SourceReference(page=28),
    ),
    Species(
        id="ork",
        name="Ork",
        xp_cost=20,
        base_attributes={Attribute.STRENGTH: 3, Attribute.TOUGHNESS: 3},
        attribute_maximums=_maximums(12, 12, 6, 6, 7, 5, 5),
        properties=(
            _feature("ork", "orky", "Orky", "You gain +1 bonus die on all Intimidation tests.", 300),
            _feature(
                "ork",
                "bigger-is-better",
                "Bigger is Better",
                "Your Influence is equal to your Strength Attribute.",
                301,
            ),
        ),
        speed=6,
        size=Size.LARGE,
        keywords=("ORK", "[CLAN]"),
        description="A brutal xenos Species that craves violence and lives only for war.",
        common_names=("Grukk", "Skarfang", "Zogrot"),
        source=SourceReference(page=29),
    ),
)


ALL_SPECIES = MappingProxyType({species.id: species for species in _ALL_SPECIES})


def get_species_by_id(species_id: str) -> Species | None:
    """Look up a species; None when unknown."""
    return ALL_SPECIES.get(species_id)


def create_species_properties(species: Species) -> list[Property]:
    """Build the property subtree a species adds to a character.

    The subtree is a folder ``species-<id>`` holding one bonus node per base
    attribute and base skill, a ``Speed`` constant, and the species' own
    nodes. The folder comes first and already lists its children.

    Args:
        species: Species to build nodes for.

    Returns:
        Subtree nodes, folder first, ready for ``add_subtree``.
    """
    folder_id = f"species-{species.id}"
    children: list[Property] = []

    for order, (attribute, value) in enumerate(species.base_attributes.items(), start=1):
        if value > 0:
            children.append(
                BonusProperty(
                    id=f"{folder_id}-attr-{attribute.value}",
                    name=f"{species.name} {attribute.display_name}",
                    parent=folder_id,
                    order=order,
                    tags=("species", "attribute"),
                    target=attribute.value,
                    amount=value,
                    description=f"Base {attribute.display_name} from {species.name} species",
                )
            )

    for order, (skill, ranks) in enumerate(species.base_skills.items(), start=100):
        if ranks > 0:
            children.append(
                BonusProperty(
                    id=f"{folder_id}-skill-{skill.value}",
                    name=f"{species.name} {skill.display_name}",
                    parent=folder_id,
                    order=order,
                    tags=("species", "skill"),
                    target=skill.value,
                    amount=ranks,
                    description=f"Base {skill.display_name} from {species.name} species",
                )
            )

    children.append(
        ConstantProperty(
            id=f"{folder_id}-speed",
            name="Speed",
            parent=folder_id,
            order=200,
            tags=("species", "movement"),
            value=species.speed,
            description=f"Movement speed from {species.name} species",
        )
    )
    children.extend(node.model_copy(update={"parent": folder_id}) for node in species.properties)

    folder = FolderProperty(
        id=folder_id,
        name=species.name,
        tags=("species",),
        description=species.description,
        source=str(species.source),
        children=tuple(node.id for node in children),
    )
    return [folder, *children]


__all__ = [
    "ALL_SPECIES",
    "get_species_by_id",
    "create_species_properties",
]
