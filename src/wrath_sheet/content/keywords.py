"""Core keyword definitions (Core Rulebook p.375-379)."""

from __future__ import annotations

from types import MappingProxyType

from wrath_sheet.models.content import KeywordDefinition
from wrath_sheet.models.enums import KeywordCategory


def _faction(keyword: str, description: str, game_effect: str | None = None) -> KeywordDefinition:
    return KeywordDefinition(
        keyword=keyword,
        category=KeywordCategory.FACTION,
        name=keyword,
        description=description,
        game_effect=game_effect,
    )


def _bracketed(keyword: str, description: str, *examples: str) -> KeywordDefinition:
    return KeywordDefinition(
        keyword=keyword,
        category=KeywordCategory.BRACKETED,
        name=keyword,
        description=description,
        examples=examples,
    )


def _wargear(keyword: str, description: str) -> KeywordDefinition:
    return KeywordDefinition(
        keyword=keyword,
        category=KeywordCategory.WARGEAR,
        name=keyword,
        description=description,
    )


def _psychic(keyword: str, description: str) -> KeywordDefinition:
    return KeywordDefinition(
        keyword=keyword,
        category=KeywordCategory.PSYCHIC,
        name=keyword,
        description=description,
    )


_DEFINITIONS: tuple[KeywordDefinition, ...] = (
    # Special
    KeywordDefinition(
        keyword="ANY",
        category=KeywordCategory.SPECIAL,
        name="[ANY]",
        description=(
            "This Keyword can be replaced with any other Keyword of your choice. In almost "
            "all circumstances it makes the most sense to select a Faction Keyword."
        ),
        game_effect="Discuss your choice with your GM and the group.",
        examples=("IMPERIUM", "ADEPTUS MECHANICUS", "ASTRA MILITARUM", "INQUISITION", "SCUM"),
    ),
    KeywordDefinition(
        keyword="PSYKER",
        category=KeywordCategory.SPECIAL,
        name="PSYKER",
        description="You are a Psyker, capable of channeling the raw energies of the Warp.",
        game_effect=(
            "Know the Universal Psyker Abilities. Can spend XP to learn psychic powers "
            "and to improve the Psychic Mastery Skill."
        ),
    ),
    # Imperial factions
    _faction("ABHUMAN", "Mutated strains of Humanity tolerated by the Imperium for their usefulness."),
    _faction(
        "ADEPTA SORORITAS",
        "Warrior-monks of the Adeptus Ministorum who wage Wars of Faith.",
        "Access to Acts of Faith and Adepta Sororitas equipment.",
    ),
    _faction("ADEPTUS ADMINISTRATUM", "The vast bureaucracy that keeps the Imperium functioning."),
    _faction("ADEPTUS ASTARTES", "The Space Marines, transhuman warriors of the Emperor."),
    _faction("ADEPTUS MECHANICUS", "The Tech-Priests of Mars who hoard and maintain technology."),
    _faction("ADEPTUS MINISTORUM", "The Ecclesiarchy, the church of the God-Emperor."),
    _faction("ASTRA MILITARUM", "The Imperial Guard, the countless regiments of the Imperium."),
    _faction("IMPERIUM", "Loyal servants of the Imperium of Man."),
    _faction("INQUISITION", "Agents of the Emperor's Holy Inquisition."),
    _faction("OFFICIO ASSASSINORUM", "The Imperium's secret temples of assassins."),
    _faction("ROGUE TRADER", "Holders of a Warrant of Trade who roam beyond Imperial borders."),
    _faction("SCUM", "Criminals, outcasts and hive-gangers living outside Imperial law."),
    _faction("PRIMARIS", "Primaris Space Marines, created by the Ultima Founding."),
    # Xenos and heretic factions
    _faction("AELDARI", "An ancient, psychically gifted xenos species in decline."),
    _faction("ANHRATHE", "Aeldari Corsairs who raid across the galaxy."),
    _faction("ASURYANI", "Aeldari of the Craftworlds."),
    _faction("DRUKHARI", "Aeldari raiders of the Dark City of Commorragh."),
    _faction("ORK", "Brutal xenos who live for war."),
    _faction("CHAOS", "Servants of the Dark Gods of the Warp."),
    _faction("HERETIC", "Those who have turned from the Emperor's light."),
    # Bracketed
    _bracketed("[ANY]", "Replace with any Keyword of your choice.", "IMPERIUM", "SCUM"),
    _bracketed("[CHAPTER]", "Space Marine Chapter.", "ULTRAMARINES", "BLOOD ANGELS", "DARK ANGELS"),
    _bracketed("[CLAN]", "Ork Clan.", "GOFFS", "BAD MOONS", "EVIL SUNZ"),
    _bracketed("[COTERIE]", "Aeldari Corsair band.", "THE SUNBLITZ BROTHERHOOD"),
    _bracketed("[CRAFTWORLD]", "Asuryani Craftworld.", "ULTHWE", "BIEL-TAN", "IYANDEN"),
    _bracketed("[DYNASTY]", "Rogue Trader Dynasty."),
    _bracketed("[FORGE WORLD]", "Mechanicus Forge World.", "MARS", "RYZA"),
    _bracketed("[LEGION]", "Chaos Legion.", "BLACK LEGION", "DEATH GUARD"),
    _bracketed("[MARK OF CHAOS]", "Chaos God allegiance.", "KHORNE", "NURGLE", "TZEENTCH", "SLAANESH"),
    _bracketed("[ORDER]", "Adepta Sororitas Order.", "ORDER OF OUR MARTYRED LADY", "ORDER OF THE VALOROUS HEART"),
    _bracketed("[ORDO]", "Inquisition Ordo.", "ORDO XENOS", "ORDO HERETICUS", "ORDO MALLEUS"),
    _bracketed("[REGIMENT]", "Astra Militarum Regiment.", "CADIAN", "CATACHAN", "VALHALLAN"),
    # Wargear
    _wargear("BOLT", "Bolt weapons firing mass-reactive explosive shells."),
    _wargear("CHAIN", "Chainblades with motorised teeth."),
    _wargear("LAS", "Las weapons firing coherent light."),
    _wargear("PLASMA", "Plasma weapons that may overheat."),
    _wargear("POWER FIELD", "Weapons sheathed in a disruptive energy field."),
    _wargear("FLAK", "Flak armour that absorbs blast and shrapnel."),
    _wargear("POWERED", "Powered armour with servo-assisted movement."),
    # Psychic
    _psychic("PSYCHIC", "Base keyword of every psychic power."),
    _psychic("TELEPATHY", "Powers that read or influence minds."),
    _psychic("KINETIC", "Powers that manifest kinetic force."),
)

KEYWORD_DEFINITIONS = MappingProxyType({definition.keyword: definition for definition in _DEFINITIONS})


def get_keyword_definition(keyword: str) -> KeywordDefinition | None:
    """Look up a keyword definition; None when unknown."""
    return KEYWORD_DEFINITIONS.get(keyword)


def get_keywords_by_category(category: KeywordCategory | str) -> list[KeywordDefinition]:
    """All keyword definitions in one category."""
    wanted = KeywordCategory(category)
    return [definition for definition in KEYWORD_DEFINITIONS.values() if definition.category == wanted]


__all__ = [
    "KEYWORD_DEFINITIONS",
    "get_keyword_definition",
    "get_keywords_by_category",
]
