"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from wrath_sheet.core.exceptions import (
    AbilityFormulaWarning,
    CharacterBuildError,
    ConfigurationError,
    ContentNotFoundError,
    DiceRollError,
    FormulaError,
    GameEngineError,
    PropertyTreeError,
    ValidationError,
    WrathSheetError,
)


class TestWrathSheetError:
    """Tests for the base WrathSheetError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = WrathSheetError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = WrathSheetError("Test error", details={"key": "value", "count": 42})
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        exc = WrathSheetError("Test", details={"x": 1})
        repr_str = repr(exc)
        assert "WrathSheetError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestConfigurationAndValidation:
    """Tests for configuration and validation exceptions."""

    def test_configuration_error_with_key(self) -> None:
        """Test ConfigurationError records the offending key."""
        exc = ConfigurationError("Bad value", config_key="json_logs")
        assert exc.details["config_key"] == "json_logs"

    def test_validation_error_with_field(self) -> None:
        """Test ValidationError with field context."""
        exc = ValidationError("Out of range", field_name="tier", invalid_value=9)
        assert exc.details["field_name"] == "tier"
        assert exc.details["invalid_value"] == 9

    def test_character_build_error_is_validation_error(self) -> None:
        """Test CharacterBuildError inherits validation context."""
        exc = CharacterBuildError("Over budget", field_name="xp_spent", invalid_value=120)
        assert isinstance(exc, ValidationError)
        assert isinstance(exc, WrathSheetError)
        assert exc.details["field_name"] == "xp_spent"


class TestGameEngineExceptions:
    """Tests for game engine exceptions."""

    def test_formula_error_carries_formula(self) -> None:
        """Test FormulaError always identifies the formula text."""
        exc = FormulaError("Unknown identifier 'armour'", formula="1 + armour")
        assert exc.formula == "1 + armour"
        assert exc.details["formula"] == "1 + armour"
        assert "1 + armour" in str(exc)

    def test_property_tree_error(self) -> None:
        """Test PropertyTreeError with node context."""
        exc = PropertyTreeError("Cannot remove root", property_id="root")
        assert exc.details["property_id"] == "root"

    def test_dice_roll_error_with_expression(self) -> None:
        """Test DiceRollError with expression."""
        exc = DiceRollError("Invalid dice", expression="1d")
        assert exc.details["expression"] == "1d"

    def test_content_not_found_error(self) -> None:
        """Test ContentNotFoundError with catalog context."""
        exc = ContentNotFoundError("Missing", content_type="species", content_id="squat")
        assert exc.details == {"content_type": "species", "content_id": "squat"}

    @pytest.mark.parametrize(
        "exc_class",
        [FormulaError, PropertyTreeError, DiceRollError, ContentNotFoundError],
    )
    def test_inheritance(self, exc_class: type[GameEngineError]) -> None:
        """Test every engine exception shares the engine base."""
        exc = exc_class("Error")
        assert isinstance(exc, GameEngineError)
        assert isinstance(exc, WrathSheetError)
        assert isinstance(exc, Exception)

    def test_ability_formula_warning_is_user_warning(self) -> None:
        """Test the ability formula warning category."""
        assert issubclass(AbilityFormulaWarning, UserWarning)
        assert not issubclass(AbilityFormulaWarning, WrathSheetError)
