"""Tests for entity models and entity-level tree edits."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from wrath_sheet.core.exceptions import PropertyTreeError
from wrath_sheet.models.computation import DerivedStats, EntityStats
from wrath_sheet.models.entity import (
    ROOT_PROPERTY_ID,
    Character,
    add_entity_property,
    calculate_bestiary_shock,
    calculate_bestiary_wounds,
    create_empty_bestiary_entry,
    create_empty_character,
    remove_entity_property,
    tier_starting_xp,
)
from wrath_sheet.models.enums import EntityType, ThreatRating
from wrath_sheet.models.properties import AttributeProperty, NoteProperty


def _placeholder_stats() -> EntityStats:
    derived = DerivedStats(
        defence=1,
        resilience=2,
        determination=1,
        max_wounds=2,
        max_shock=2,
        speed=6,
        passive_awareness=0,
        conviction=1,
        resolve=1,
        influence=1,
        wealth=1,
    )
    return EntityStats(tier=1, derived=derived)


class TestTierStartingXP:
    """Tests for the tier XP allowance."""

    @pytest.mark.parametrize(("tier", "expected"), [(1, 100), (2, 200), (4, 400)])
    def test_tier_multiples(self, tier: int, expected: int) -> None:
        """Test tiers 1-4 grant 100 XP per tier."""
        assert tier_starting_xp(tier) == expected

    @pytest.mark.parametrize("tier", [0, 5, 12])
    def test_out_of_range_falls_back(self, tier: int) -> None:
        """Test unknown tiers get a single tier's worth."""
        assert tier_starting_xp(tier) == 100

    def test_follows_settings(self, mock_env_vars: dict[str, str]) -> None:
        """Test the per-tier allowance is configurable."""
        assert tier_starting_xp(2) == 300


class TestCreateEmptyCharacter:
    """Tests for blank characters."""

    def test_root_only(self) -> None:
        """Test a new character holds only its root folder."""
        character = create_empty_character("Sister Amalia")

        assert set(character.properties) == {ROOT_PROPERTY_ID}
        assert character.root_property_id == ROOT_PROPERTY_ID
        assert character.properties[ROOT_PROPERTY_ID].parent is None
        assert character.type == EntityType.CHARACTER
        assert character.stats is None

    def test_xp_budget(self) -> None:
        """Test the XP budget follows the tier."""
        character = create_empty_character("Sister Amalia", tier=2, player="Ana")

        assert character.xp_total == 200
        assert character.xp_spent == 0
        assert character.xp_available == 200
        assert character.player == "Ana"

    def test_xp_available_can_go_negative(self) -> None:
        """Test overspending is reported, not hidden."""
        character = create_empty_character("Sister Amalia").model_copy(update={"xp_spent": 130})
        assert character.xp_available == -30

    def test_unique_ids(self) -> None:
        """Test every character gets its own id."""
        assert create_empty_character("A").id != create_empty_character("B").id

    def test_tier_must_be_positive(self) -> None:
        """Test tier 0 is refused."""
        with pytest.raises(PydanticValidationError):
            Character(name="Nobody", tier=0)


class TestEntityEdits:
    """Tests for copy-on-write entity edits."""

    def test_add_defaults_to_root(self) -> None:
        """Test nodes attach under the root when no parent is given."""
        character = create_empty_character("Sister Amalia")
        edited = add_entity_property(
            character, AttributeProperty(id="attr-willpower", name="Willpower", base_value=3)
        )

        assert edited.properties["attr-willpower"].parent == ROOT_PROPERTY_ID
        assert "attr-willpower" not in character.properties

    def test_edits_clear_stats(self) -> None:
        """Test structural edits invalidate the stats cache."""
        character = create_empty_character("Sister Amalia").model_copy(
            update={"stats": _placeholder_stats()}
        )

        added = add_entity_property(character, NoteProperty(id="n1", name="Oath"))
        assert added.stats is None

        removed = remove_entity_property(added.model_copy(update={"stats": _placeholder_stats()}), "n1")
        assert removed.stats is None
        assert "n1" not in removed.properties

    def test_edits_touch_updated_at(self) -> None:
        """Test character edits move the update timestamp forward."""
        character = create_empty_character("Sister Amalia")
        edited = add_entity_property(character, NoteProperty(id="n1", name="Oath"))
        assert edited.updated_at >= character.updated_at

    def test_remove_root_rejected(self) -> None:
        """Test the root cannot be removed from an entity."""
        with pytest.raises(PropertyTreeError):
            remove_entity_property(create_empty_character("Sister Amalia"), ROOT_PROPERTY_ID)


class TestBestiary:
    """Tests for bestiary entries and threat scaling."""

    def test_empty_entry(self) -> None:
        """Test a blank entry has a root named after it."""
        entry = create_empty_bestiary_entry("Cultist", tier=2, threat=ThreatRating.ELITE)

        assert entry.type == EntityType.BESTIARY
        assert entry.properties[ROOT_PROPERTY_ID].name == "Cultist"
        assert entry.threat_modifier.bonus_dice == 1

    @pytest.mark.parametrize(
        ("threat", "expected"),
        [
            (ThreatRating.TROOP, 5),
            (ThreatRating.ELITE, 10),
            (ThreatRating.CHAMPION, 15),
            (ThreatRating.NEMESIS, 25),
        ],
    )
    def test_wounds_scale_with_threat(self, threat: ThreatRating, expected: int) -> None:
        """Test wounds are (tier + Toughness) times the threat multiplier."""
        assert calculate_bestiary_wounds(2, 3, threat) == expected

    def test_shock_accepts_string_threat(self) -> None:
        """Test threat ratings may be given by value."""
        assert calculate_bestiary_shock(1, 4, "Champion") == 15  # type: ignore[arg-type]

