"""Entity models: characters, NPCs and bestiary entries.

An entity owns a property tree (``properties`` keyed by id, rooted at
``root_property_id``) and an optional ``stats`` cache. The cache is derived
data: every structural edit through this module clears it, and
``refresh_entity_stats`` recomputes it from the tree.

Example:
    >>> character = create_empty_character("Sister Amalia", tier=2)
    >>> character.xp_available
    200
"""

from __future__ import annotations

import uuid
from datetime import datetime
from types import MappingProxyType
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field

from wrath_sheet.core.config import get_settings
from wrath_sheet.core.constants import DEFAULT_RANK, DEFAULT_TIER
from wrath_sheet.models.computation import EntityStats
from wrath_sheet.models.enums import EntityType, ThreatRating
from wrath_sheet.models.graph import add_property, remove_property
from wrath_sheet.models.properties import FolderProperty, Property


ROOT_PROPERTY_ID = "root"


def _new_entity_id() -> str:
    return str(uuid.uuid4())


class Entity(BaseModel):
    """Anything with a property tree: a character, an NPC or a creature.

    Attributes:
        id: Unique identifier.
        name: Display name.
        type: Kind of entity.
        species: Species id, if any.
        keywords: All keywords the entity has.
        tier: Campaign tier (1-4, higher for powerful enemies).
        rank: Power scalar used by ability formulas.
        properties: Property nodes keyed by id.
        root_property_id: Id of the top-level folder.
        stats: Cached computation over ``properties``.
        notes: Free text.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=_new_entity_id)
    name: str
    type: EntityType = EntityType.NPC
    species: str | None = None
    keywords: tuple[str, ...] = ()
    tier: int = Field(default=DEFAULT_TIER, ge=1)
    rank: int = Field(default=DEFAULT_RANK, ge=0)
    properties: dict[str, Property] = Field(default_factory=dict)
    root_property_id: str = ROOT_PROPERTY_ID
    stats: EntityStats | None = None
    notes: str | None = None


class Character(Entity):
    """A player character with an XP ledger.

    Attributes:
        player: Name of the player.
        archetype: Archetype id, if built from one.
        xp_total: XP earned.
        xp_spent: XP spent on species, archetype and purchases.
        created_at: When the character was created.
        updated_at: When the character was last edited.
    """

    type: EntityType = EntityType.CHARACTER
    player: str | None = None
    archetype: str | None = None
    xp_total: int = Field(default=0, ge=0)
    xp_spent: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def xp_available(self) -> int:
        """XP left to spend; negative when the build is over budget."""
        return self.xp_total - self.xp_spent


# =============================================================================
# Bestiary
# =============================================================================


class ThreatModifier(BaseModel):
    """Scaling applied to a bestiary entry by its threat rating."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    wounds_multiplier: int = Field(ge=1)
    shock_multiplier: int = Field(ge=1)
    bonus_dice: int = Field(ge=0)


THREAT_MODIFIERS = MappingProxyType(
    {
        ThreatRating.TROOP: ThreatModifier(wounds_multiplier=1, shock_multiplier=1, bonus_dice=0),
        ThreatRating.ELITE: ThreatModifier(wounds_multiplier=2, shock_multiplier=2, bonus_dice=1),
        ThreatRating.CHAMPION: ThreatModifier(wounds_multiplier=3, shock_multiplier=3, bonus_dice=2),
        ThreatRating.NEMESIS: ThreatModifier(wounds_multiplier=5, shock_multiplier=5, bonus_dice=3),
    }
)


class EncounterSuggestion(BaseModel):
    """How a creature is usually fielded."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    quantity: str = Field(description="e.g. '2-4', '1 per player', '1d3+1'")
    tactics: str | None = None
    environment: str | None = None


class BestiaryEntry(Entity):
    """A creature or adversary profile."""

    type: EntityType = EntityType.BESTIARY
    threat: ThreatRating = ThreatRating.TROOP
    role: str | None = None
    suggested_encounter: EncounterSuggestion | None = None
    description: str | None = None
    lore_text: str | None = None
    gm_notes: str | None = None

    @property
    def threat_modifier(self) -> ThreatModifier:
        """Scaling for this entry's threat rating."""
        return THREAT_MODIFIERS[self.threat]


def calculate_bestiary_wounds(base_tier: int, toughness: int, threat: ThreatRating) -> int:
    """Wounds of a bestiary entry: (tier + Toughness) scaled by threat."""
    return (base_tier + toughness) * THREAT_MODIFIERS[ThreatRating(threat)].wounds_multiplier


def calculate_bestiary_shock(base_tier: int, willpower: int, threat: ThreatRating) -> int:
    """Shock of a bestiary entry: (tier + Willpower) scaled by threat."""
    return (base_tier + willpower) * THREAT_MODIFIERS[ThreatRating(threat)].shock_multiplier


# =============================================================================
# Construction & Editing
# =============================================================================


def tier_starting_xp(tier: int) -> int:
    """Starting XP for a campaign tier.

    Tiers up to the configured maximum grant ``tier * xp_per_tier``; any
    other tier falls back to a single tier's worth.

    Args:
        tier: Campaign tier.

    Returns:
        XP available to a new character.
    """
    game = get_settings().game
    if 1 <= tier <= game.max_tier:
        return tier * game.xp_per_tier
    return game.xp_per_tier


def _root_folder(name: str) -> FolderProperty:
    return FolderProperty(id=ROOT_PROPERTY_ID, name=name, tags=("root",))


def create_empty_character(
    name: str,
    tier: int = DEFAULT_TIER,
    *,
    player: str | None = None,
    rank: int = DEFAULT_RANK,
) -> Character:
    """Create a character with only a root folder and a full XP budget.

    Args:
        name: Character name.
        tier: Campaign tier.
        player: Optional player name.
        rank: Starting rank.

    Returns:
        A new Character.
    """
    root = _root_folder("Character")
    return Character(
        name=name,
        tier=tier,
        rank=rank,
        player=player,
        xp_total=tier_starting_xp(tier),
        properties={root.id: root},
        root_property_id=root.id,
    )


def create_empty_bestiary_entry(
    name: str,
    tier: int = DEFAULT_TIER,
    threat: ThreatRating = ThreatRating.TROOP,
) -> BestiaryEntry:
    """Create a bestiary entry with only a root folder."""
    root = _root_folder(name)
    return BestiaryEntry(
        name=name,
        tier=tier,
        threat=threat,
        properties={root.id: root},
        root_property_id=root.id,
    )


EntityT = TypeVar("EntityT", bound=Entity)


def _with_properties(entity: EntityT, properties: dict[str, Property]) -> EntityT:
    update: dict[str, object] = {"properties": properties, "stats": None}
    if isinstance(entity, Character):
        update["updated_at"] = datetime.now()
    return entity.model_copy(update=update)


def add_entity_property(entity: EntityT, node: Property, parent_id: str | None = None) -> EntityT:
    """Return a copy of an entity with a node attached.

    Args:
        entity: Entity to edit.
        node: Node to attach.
        parent_id: Parent node id; the root when omitted.

    Returns:
        The edited copy, with its stats cache cleared.

    Raises:
        PropertyTreeError: If the parent is unknown or the id already exists.
    """
    parent = parent_id or entity.root_property_id
    return _with_properties(entity, add_property(entity.properties, node, parent))


def remove_entity_property(entity: EntityT, node_id: str) -> EntityT:
    """Return a copy of an entity with a node and its subtree removed.

    Raises:
        PropertyTreeError: If the node is unknown or is the root.
    """
    return _with_properties(entity, remove_property(entity.properties, node_id))


__all__ = [
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
