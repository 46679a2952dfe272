"""Tests for character assembly and XP accounting."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from wrath_sheet.content.archetypes import get_archetype_by_id
from wrath_sheet.core.exceptions import CharacterBuildError
from wrath_sheet.engine.assembly import (
    CharacterBuild,
    assemble_character,
    attribute_purchase_cost,
    build_xp_ledger,
    calculate_xp_spent,
    create_archetype_properties,
    skill_purchase_cost,
)
from wrath_sheet.models.enums import Attribute, Skill
from wrath_sheet.models.properties import FeatureProperty, FolderProperty


def _build(**overrides: Any) -> CharacterBuild:
    fields: dict[str, Any] = {
        "name": "Vex",
        "species_id": "human",
        "archetype_id": "ganger",
        "keyword_choices": {"[ANY]": "Hive Gang"},
    }
    fields.update(overrides)
    return CharacterBuild(**fields)


class TestPurchaseCosts:
    """Tests for the XP cost tables."""

    @pytest.mark.parametrize(
        ("start", "target", "expected"),
        [(1, 1, 0), (1, 2, 4), (2, 4, 30), (1, 5, 69), (7, 8, 110)],
    )
    def test_attribute_costs(self, start: int, target: int, expected: int) -> None:
        """Test attribute steps are summed from the table."""
        assert attribute_purchase_cost(start, target) == expected

    @pytest.mark.parametrize(
        ("start", "target", "expected"),
        [(0, 0, 0), (0, 1, 2), (0, 3, 20), (1, 3, 18), (4, 5, 30)],
    )
    def test_skill_costs(self, start: int, target: int, expected: int) -> None:
        """Test skill steps are summed from the table."""
        assert skill_purchase_cost(start, target) == expected

    def test_lowering_rejected(self) -> None:
        """Test ratings cannot be bought down."""
        with pytest.raises(CharacterBuildError) as exc_info:
            attribute_purchase_cost(3, 2)

        assert exc_info.value.details["field_name"] == "attribute_targets"

    def test_beyond_table_rejected(self) -> None:
        """Test steps missing from the table cannot be bought."""
        with pytest.raises(CharacterBuildError, match="Rating 9"):
            attribute_purchase_cost(8, 9)
        with pytest.raises(CharacterBuildError, match="Rating 6"):
            skill_purchase_cost(5, 6)


class TestXPLedger:
    """Tests for pricing builds."""

    def test_hospitaller(self, hospitaller_build: CharacterBuild) -> None:
        """Test archetype XP plus the Medicae purchase from its archetype rank."""
        ledger = build_xp_ledger(hospitaller_build)

        assert ledger.budget == 100
        assert ledger.species == 0
        assert ledger.archetype == 24
        assert ledger.attributes == {}
        assert ledger.skills == {Skill.MEDICAE: 18}
        assert ledger.spent == 42
        assert ledger.available == 58
        assert calculate_xp_spent(hospitaller_build) == 42

    def test_attribute_purchase(self) -> None:
        """Test attribute purchases are priced from the baseline."""
        ledger = build_xp_ledger(_build(attribute_targets={"strength": 3}))

        assert ledger.attributes == {Attribute.STRENGTH: 14}
        assert ledger.spent == 16

    def test_extra_xp(self) -> None:
        """Test extra XP raises the budget."""
        assert build_xp_ledger(_build(tier=2, extra_xp=25)).budget == 225


class TestAssembleCharacter:
    """Tests for assembling characters."""

    def test_hospitaller_identity(self, hospitaller: Any) -> None:
        """Test species, archetype, keywords and XP are recorded."""
        assert hospitaller.name == "Sister Amalia"
        assert hospitaller.species == "human"
        assert hospitaller.archetype == "sister-hospitaller"
        assert hospitaller.rank == 2
        assert hospitaller.keywords == (
            "IMPERIUM",
            "HUMAN",
            "ADEPTUS MINISTORUM",
            "ADEPTA SORORITAS",
            "ORDER OF OUR MARTYRED LADY",
        )
        assert hospitaller.xp_total == 100
        assert hospitaller.xp_spent == 42
        assert hospitaller.xp_available == 58

    def test_hospitaller_stats(self, hospitaller: Any) -> None:
        """Test the computed stats include archetype bonuses."""
        stats = hospitaller.stats

        assert stats is not None
        assert stats.tier == 1
        assert stats.attributes.intellect == 4
        assert stats.attributes.willpower == 4
        assert stats.attributes.strength == 1
        assert stats.skills.medicae == 3
        assert stats.skills.scholar == 1
        assert stats.dice_pool("medicae", bonus_dice=4) == 11
        assert stats.derived.max_wounds == 2

    def test_hospitaller_tree(self, hospitaller: Any) -> None:
        """Test purchased nodes hold only what was bought."""
        properties = hospitaller.properties
        root = properties[hospitaller.root_property_id]

        assert properties["tier"].value == 1
        assert properties["skill-medicae"].base_value == 2
        assert properties["attr-intellect"].base_value == 1
        assert properties["attr-intellect"].maximum == 8
        assert root.children[-2:] == ("species-human", "archetype-sister-hospitaller")

        feature = properties["archetype-sister-hospitaller-ability"]
        assert isinstance(feature, FeatureProperty)
        assert feature.granted_abilities == ("loyal-compassion",)

    def test_species_bonuses_stack(self) -> None:
        """Test species and archetype bonuses both raise the baseline."""
        character = assemble_character(
            _build(name="Grukk", species_id="ork", archetype_id="ork-boy", keyword_choices={"[CLAN]": "Goff"})
        )

        assert character.keywords == ("ORK", "GOFF")
        assert character.xp_spent == 46
        assert character.stats.attributes.strength == 7
        assert character.stats.skills.weapon_skill == 2

    def test_purchased_attribute(self) -> None:
        """Test bought attributes reach their target."""
        character = assemble_character(_build(attribute_targets={"strength": 3}, skill_targets={"cunning": 2}))

        assert character.stats.attributes.strength == 3
        assert character.stats.skills.cunning == 2
        assert character.xp_spent == 2 + 14 + 6

    def test_over_budget(self) -> None:
        """Test over-budget builds are refused unless allowed."""
        build = _build(attribute_targets={"strength": 5, "toughness": 5})

        with pytest.raises(CharacterBuildError) as exc_info:
            assemble_character(build)
        assert exc_info.value.details["field_name"] == "xp_spent"
        assert exc_info.value.details["budget"] == 100

        character = assemble_character(build, enforce_budget=False)
        assert character.xp_available == -40

    def test_extra_xp_covers_purchases(self) -> None:
        """Test extra XP can pay for an otherwise over-budget build."""
        build = _build(attribute_targets={"strength": 5, "toughness": 5}, extra_xp=50)
        assert assemble_character(build).xp_available == 10

    @pytest.mark.parametrize(
        ("overrides", "field_name"),
        [
            ({"species_id": "tyranid"}, "species_id"),
            ({"archetype_id": "space-wolf"}, "archetype_id"),
            ({"archetype_id": "ork-boy", "keyword_choices": {"[CLAN]": "Goff"}}, "archetype_id"),
            ({"attribute_targets": {"strength": 9}}, "attribute_targets"),
            ({"skill_targets": {"cunning": 6}}, "skill_targets"),
            ({"keyword_choices": {}}, "keyword_choices"),
            ({"keyword_choices": {"[ANY]": "[ANY]"}}, "keyword_choices"),
            ({"keyword_choices": {"[ANY]": "   "}}, "keyword_choices"),
            ({"keyword_choices": {"[ANY]": "Hive Gang", "[ORDER]": "X"}}, "keyword_choices"),
        ],
    )
    def test_illegal_builds(self, overrides: dict[str, Any], field_name: str) -> None:
        """Test illegal builds name the offending field."""
        with pytest.raises(CharacterBuildError) as exc_info:
            assemble_character(_build(**overrides))

        assert exc_info.value.details["field_name"] == field_name

    def test_beyond_cost_table(self) -> None:
        """Test a species maximum above the cost table still cannot be bought past 8."""
        build = _build(
            species_id="ork",
            archetype_id="ork-boy",
            keyword_choices={"[CLAN]": "Goff"},
            attribute_targets={"strength": 9},
        )
        with pytest.raises(CharacterBuildError, match="cannot be purchased"):
            assemble_character(build)

    def test_lowering_below_baseline(self, hospitaller_build: CharacterBuild) -> None:
        """Test targets below the archetype baseline are refused."""
        build = hospitaller_build.model_copy(update={"attribute_targets": {Attribute.WILLPOWER: 2}})
        with pytest.raises(CharacterBuildError, match="Cannot lower"):
            assemble_character(build)

    def test_build_validation(self) -> None:
        """Test build fields are validated on construction."""
        with pytest.raises(PydanticValidationError):
            _build(name="")
        with pytest.raises(PydanticValidationError):
            _build(tier=0)


class TestArchetypeProperties:
    """Tests for archetype subtrees."""

    def test_subtree_shape(self) -> None:
        """Test the folder comes first and lists every child."""
        archetype = get_archetype_by_id("sister-hospitaller")
        assert archetype is not None

        nodes = create_archetype_properties(archetype)
        folder, children = nodes[0], nodes[1:]

        assert isinstance(folder, FolderProperty)
        assert folder.id == "archetype-sister-hospitaller"
        assert folder.order == 200
        assert folder.keywords == archetype.keywords
        assert folder.children == tuple(node.id for node in children)
        assert all(node.parent == folder.id for node in children)
        assert {node.id for node in children} == {
            "archetype-sister-hospitaller-attr-willpower",
            "archetype-sister-hospitaller-attr-intellect",
            "archetype-sister-hospitaller-skill-medicae",
            "archetype-sister-hospitaller-skill-scholar",
            "archetype-sister-hospitaller-ability",
        }
