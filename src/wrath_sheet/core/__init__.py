"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        WrathSheetError: Base exception for all engine errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Data validation errors.
        GameEngineError: Base for rules engine errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from wrath_sheet.core.config import (
    GameSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
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
from wrath_sheet.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


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
    "AbilityFormulaWarning",
    # Configuration
    "Settings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
