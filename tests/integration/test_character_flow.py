"""Integration tests for the character lifecycle.

Tests the complete flow: assemble a character from a build, roll a skill
test with archetype ability dice, edit the property tree and recompute.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from wrath_sheet import (
    Character,
    assemble_character,
    compute_entity,
    get_ability_bonus_for_test,
    perform_skill_test,
    refresh_entity_stats,
)
from wrath_sheet.models.ability import AbilityContext
from wrath_sheet.models.entity import add_entity_property, remove_entity_property
from wrath_sheet.models.enums import EffectOperation, Skill, TargetKind, TargetType
from wrath_sheet.models.graph import set_property_enabled
from wrath_sheet.models.properties import (
    BonusProperty,
    EffectProperty,
    FeatureProperty,
    FolderProperty,
    PropertyTarget,
    ResourceProperty,
)


def _granted_abilities(character: Character) -> list[str]:
    return [
        ability_id
        for node in character.properties.values()
        if isinstance(node, FeatureProperty)
        for ability_id in node.granted_abilities
    ]


class TestCharacterFlow:
    """Test assembly, testing and editing of one character."""

    def test_medicae_test_with_loyal_compassion(
        self,
        hospitaller: Character,
        scripted_roller: Callable[..., Any],
    ) -> None:
        """A rank 2 Hospitaller treating an Imperial ally rolls 11 dice."""
        context = AbilityContext(
            user_rank=hospitaller.rank,
            user_keywords=hospitaller.keywords,
            skill=Skill.MEDICAE,
            target_keywords=("IMPERIUM", "ASTRA MILITARUM"),
            target_type=TargetKind.ALLY,
        )
        bonus = get_ability_bonus_for_test(_granted_abilities(hospitaller), context)
        assert bonus == 4

        roller = scripted_roller(6, 5, 4, 4, 3, 3, 2, 2, 1, 1, 1, 6)
        result = perform_skill_test(hospitaller.stats, Skill.MEDICAE, 3, bonus_dice=bonus, roller=roller)

        assert result.dice_pool == 11
        assert result.total_icons == 5
        assert result.exalted_icons == 2
        assert result.success is True
        assert result.shift == 2
        assert result.glory == 1

    def test_no_bonus_against_xenos(self, hospitaller: Character) -> None:
        """Loyal Compassion does not apply to targets outside the Imperium."""
        context = AbilityContext(
            user_rank=hospitaller.rank,
            skill=Skill.MEDICAE,
            target_keywords=("AELDARI",),
        )
        assert get_ability_bonus_for_test(_granted_abilities(hospitaller), context) == 0

    def test_wargear_edits(self, hospitaller: Character) -> None:
        """Wargear bonuses apply while their folder is enabled."""
        edited = add_entity_property(hospitaller, FolderProperty(id="wargear", name="Wargear", order=300))
        edited = add_entity_property(
            edited,
            BonusProperty(id="auspex", name="Medicae Auspex", target="intellect", amount=1),
            "wargear",
        )
        edited = add_entity_property(
            edited,
            EffectProperty(
                id="armour",
                name="Sororitas Power Armour",
                operation=EffectOperation.ADD,
                amount=2,
                target=PropertyTarget(type=TargetType.SPECIFIC, names=("toughness",)),
            ),
            "wargear",
        )
        assert edited.stats is None

        equipped = refresh_entity_stats(edited)
        assert equipped.stats.attributes.intellect == 5
        assert equipped.stats.attributes.toughness == 3
        assert equipped.stats.derived.max_wounds == 4
        assert equipped.stats.dice_pool("medicae", bonus_dice=4) == 12

        unequipped = refresh_entity_stats(
            equipped.model_copy(update={"properties": set_property_enabled(equipped.properties, "wargear", False)})
        )
        assert unequipped.stats == hospitaller.stats

        removed = refresh_entity_stats(remove_entity_property(equipped, "wargear"))
        assert removed.stats == hospitaller.stats
        assert "auspex" not in removed.properties

    def test_resource_pool(self, hospitaller: Character) -> None:
        """Resource maximums follow the tier constant and computed attributes."""
        edited = add_entity_property(
            hospitaller,
            ResourceProperty(id="faith", name="Faith", maximum="tier + floor(willpower / 2)"),
        )
        result = compute_entity(edited.properties, edited.root_property_id, tier=edited.tier)

        assert result.computations["faith"].result == 3
        assert not result.has_errors

    def test_serialization_round_trip(self, hospitaller: Character) -> None:
        """An assembled character survives a JSON round trip."""
        restored = Character.model_validate_json(hospitaller.model_dump_json())

        assert restored == hospitaller
        assert restored.stats == hospitaller.stats


def test_default_roller_path(hospitaller_build: Any) -> None:
    """Assembled characters roll with the module default roller."""
    character = assemble_character(hospitaller_build)
    result = perform_skill_test(character.stats, "medicae", 2)

    assert result.dice_pool == 7
    assert len(result.rolls) == 7
    assert result.success == (result.total_icons >= 2)
