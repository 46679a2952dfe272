"""Custom exception hierarchy for the Wrath & Glory character engine.

This module defines the exception hierarchy used across the engine. All
exceptions inherit from WrathSheetError, enabling unified error handling at
the application boundary while preserving domain-specific context.

Per-property computation failures are never raised out of the computation
engine; they are collected as ``ComputationError`` records instead. The
exceptions below cover everything that *is* raised.

Example:
    >>> from wrath_sheet.core.exceptions import FormulaError
    >>> raise FormulaError("Unknown identifier 'armour'", formula="1 + armour")
"""

from __future__ import annotations

from typing import Any


class WrathSheetError(Exception):
    """Base exception for all engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(WrathSheetError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(WrathSheetError):
    """Raised when data validation fails.

    This includes constraint violations or type mismatches in user
    input or rule content.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


class CharacterBuildError(ValidationError):
    """Raised when a character build contains an illegal purchase decision.

    Typical causes are an archetype the chosen species may not take, a
    purchase beyond the cost table or species maximum, a missing required
    keyword choice, or a build that spends more XP than the tier grants.
    """


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(WrathSheetError):
    """Base exception for all rules engine errors."""


class FormulaError(GameEngineError):
    """Raised when a formula string cannot be parsed or evaluated.

    The offending formula text is always carried in ``details["formula"]``.
    """

    def __init__(
        self,
        message: str,
        *,
        formula: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize formula error with the formula text.

        Args:
            message: Human-readable error description.
            formula: The formula string that failed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if formula is not None:
            combined_details["formula"] = formula
        self.formula = formula
        super().__init__(message, details=combined_details)


class PropertyTreeError(GameEngineError):
    """Raised when a structural edit of a property tree cannot be performed."""

    def __init__(
        self,
        message: str,
        *,
        property_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize property tree error with node context.

        Args:
            message: Human-readable error description.
            property_id: Identifier of the node involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if property_id:
            combined_details["property_id"] = property_id
        super().__init__(message, details=combined_details)


class DiceRollError(GameEngineError):
    """Raised when dice rolling operations fail.

    This typically occurs when parsing invalid dice notation or when a
    dice pool, Wrath dice count or difficulty number is negative.
    """

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class ContentNotFoundError(GameEngineError):
    """Raised when a rule-content lookup that must succeed finds nothing."""

    def __init__(
        self,
        message: str,
        *,
        content_type: str | None = None,
        content_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize content lookup error.

        Args:
            message: Human-readable error description.
            content_type: Catalog that was searched (species, archetype, ...).
            content_id: The id that was not found.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if content_type:
            combined_details["content_type"] = content_type
        if content_id:
            combined_details["content_id"] = content_id
        super().__init__(message, details=combined_details)


# =============================================================================
# Warnings
# =============================================================================


class AbilityFormulaWarning(UserWarning):
    """Issued when an ability's bonus-dice formula is outside the known grammar.

    Ability formulas are authored as data, so an unknown formula degrades
    to zero bonus dice instead of failing the test being rolled.
    """


__all__ = [
    # Base exception
    "WrathSheetError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    "CharacterBuildError",
    # Game engine exceptions
    "GameEngineError",
    "FormulaError",
    "PropertyTreeError",
    "DiceRollError",
    "ContentNotFoundError",
    # Warnings
    "AbilityFormulaWarning",
]
