"""Configuration management for the Wrath & Glory character engine.

This module provides centralized configuration management using pydantic-settings,
supporting environment variables, .env files, and runtime configuration overrides.

Example:
    >>> from wrath_sheet.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.game.default_wrath_dice)
    1

Environment Variables:
    WRATH_SHEET_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    WRATH_SHEET_JSON_LOGS: Emit JSON log lines instead of console output
    WRATH_SHEET_GAME_DEFAULT_WRATH_DICE: Wrath dice added to every test
    WRATH_SHEET_GAME_DICE_SEED: Seed for reproducible rolls
    WRATH_SHEET_GAME_XP_PER_TIER: Starting XP granted per campaign tier
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wrath_sheet.core.exceptions import ConfigurationError


class GameSettings(BaseSettings):
    """Configuration for rules engine behavior.

    Attributes:
        default_wrath_dice: Wrath dice rolled with each skill test.
        dice_seed: Optional seed for the module-level dice roller.
        xp_per_tier: Starting XP granted per campaign tier.
        max_skill_rank: Highest purchasable skill rank.
        max_tier: Highest campaign tier with its own XP allowance.
    """

    model_config = SettingsConfigDict(
        env_prefix="WRATH_SHEET_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_wrath_dice: int = Field(
        default=1,
        ge=0,
        le=10,
        description="Wrath dice rolled with each skill test",
    )
    dice_seed: int | None = Field(
        default=None,
        description="Seed for reproducible dice rolls",
    )
    xp_per_tier: int = Field(
        default=100,
        gt=0,
        description="Starting XP granted per campaign tier",
    )
    max_skill_rank: int = Field(
        default=5,
        ge=1,
        le=10,
        description="Highest purchasable skill rank",
    )
    max_tier: int = Field(
        default=4,
        ge=1,
        le=10,
        description="Highest campaign tier with its own XP allowance",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON lines.
        log_file: Optional path of a log file.
        game: Rules engine settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="WRATH_SHEET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Wrath & Glory Character Engine",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON lines",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path",
    )

    game: GameSettings = Field(default_factory=GameSettings)

    @model_validator(mode="after")
    def validate_debug_logging(self) -> "Settings":
        """Refuse JSON logging in debug mode.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If debug mode is combined with JSON logs.
        """
        if self.debug and self.json_logs:
            raise ConfigurationError(
                "Debug mode uses console logging; disable json_logs",
                config_key="json_logs",
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    This is primarily useful for testing or when environment variables
    have changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
