"""Tests for computation records and the stats snapshot."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from wrath_sheet.models.computation import (
    AttributeValues,
    Computation,
    ComputationError,
    ComputationResult,
    ComputedEffect,
    DerivedStats,
    EntityStats,
    SkillValues,
)
from wrath_sheet.models.enums import Attribute, EffectOperation, PropertyType, Skill


@pytest.fixture
def stats() -> EntityStats:
    """Stats for Intellect 4, Willpower 3 and Medicae 3."""
    return EntityStats(
        tier=1,
        attributes=AttributeValues(intellect=4, willpower=3),
        skills=SkillValues(medicae=3),
        derived=DerivedStats(
            defence=1,
            resilience=2,
            determination=2,
            max_wounds=2,
            max_shock=4,
            speed=6,
            passive_awareness=2,
            conviction=3,
            resolve=1,
            influence=1,
            wealth=1,
        ),
    )


class TestValueLookups:
    """Tests for attribute and skill lookups."""

    def test_attribute_defaults(self) -> None:
        """Test unlisted attributes sit at 1."""
        values = AttributeValues(strength=4)
        assert values.get(Attribute.STRENGTH) == 4
        assert values.get("agility") == 1

    def test_skill_defaults(self) -> None:
        """Test unlisted skills sit at 0."""
        assert SkillValues().get(Skill.WEAPON_SKILL) == 0

    def test_unknown_name_rejected(self) -> None:
        """Test lookups only accept real attribute names."""
        with pytest.raises(ValueError):
            AttributeValues().get("luck")


class TestEntityStats:
    """Tests for the flat stats snapshot."""

    def test_dice_pool(self, stats: EntityStats) -> None:
        """Test the pool is attribute plus skill plus bonus dice."""
        assert stats.dice_pool(Skill.MEDICAE) == 7
        assert stats.dice_pool("medicae", bonus_dice=4) == 11

    def test_dice_pool_uses_linked_attribute(self, stats: EntityStats) -> None:
        """Test skills without ranks still roll their attribute."""
        assert stats.dice_pool("leadership") == 3

    def test_json_round_trip(self, stats: EntityStats) -> None:
        """Test the snapshot survives serialization unchanged."""
        assert EntityStats.model_validate_json(stats.model_dump_json()) == stats

    def test_frozen(self, stats: EntityStats) -> None:
        """Test snapshots are immutable."""
        with pytest.raises(PydanticValidationError):
            stats.tier = 3  # type: ignore[misc]


class TestComputationResult:
    """Tests for the computation pass result."""

    def test_errors_for(self, stats: EntityStats) -> None:
        """Test errors are filtered by property."""
        result = ComputationResult(
            computations={
                "attr-willpower": Computation(
                    property_id="attr-willpower",
                    property_name="Willpower",
                    semantic_name="willpower",
                    property_type=PropertyType.ATTRIBUTE,
                    base=2,
                    result=3,
                    effects=(
                        ComputedEffect(
                            effect_id="b1",
                            effect_name="Faith",
                            operation=EffectOperation.ADD,
                            amount=1,
                        ),
                    ),
                    breakdown=("Base: 2", "Faith: +1", "Total: 3"),
                )
            },
            errors=(
                ComputationError(
                    property_id="wounds",
                    property_name="Wounds",
                    message="Unknown identifier 'armour'",
                    formula="tier + armour",
                ),
            ),
            stats=stats,
        )

        assert result.has_errors
        assert [error.formula for error in result.errors_for("wounds")] == ["tier + armour"]
        assert result.errors_for("attr-willpower") == []

    def test_round_trip(self, stats: EntityStats) -> None:
        """Test results serialize without loss."""
        result = ComputationResult(variables={"tier": 1, "willpower": 3}, stats=stats)
        restored = ComputationResult.model_validate_json(result.model_dump_json())

        assert restored == result
        assert not restored.has_errors
