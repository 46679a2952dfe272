"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Wrath & Glory character engine test suite.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache and the default dice roller around each test."""
    from wrath_sheet.core.config import clear_settings_cache
    from wrath_sheet.engine.dice import reset_default_roller

    clear_settings_cache()
    reset_default_roller()
    yield
    clear_settings_cache()
    reset_default_roller()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "WRATH_SHEET_LOG_LEVEL": "DEBUG",
        "WRATH_SHEET_GAME_DEFAULT_WRATH_DICE": "2",
        "WRATH_SHEET_GAME_DICE_SEED": "1234",
        "WRATH_SHEET_GAME_XP_PER_TIER": "150",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Engine Fixtures
# =============================================================================


class ScriptedRoller:
    """d6 source that hands out pre-set faces in order."""

    def __init__(self, faces: Iterable[int]) -> None:
        self.faces = list(faces)
        self.requests: list[int] = []

    def roll_d6(self, count: int) -> list[int]:
        self.requests.append(count)
        if count > len(self.faces):
            raise AssertionError(f"Scripted roller ran out of faces (wanted {count})")
        rolled, self.faces = self.faces[:count], self.faces[count:]
        return rolled


@pytest.fixture
def scripted_roller() -> Callable[..., ScriptedRoller]:
    """Factory for rollers that return fixed faces.

    Returns:
        Callable taking the faces to hand out, in roll order.
    """

    def make(*faces: int) -> ScriptedRoller:
        return ScriptedRoller(faces)

    return make


@pytest.fixture
def dice_roller() -> Any:
    """Create a DiceRoller with a fixed seed for reproducible tests.

    Returns:
        DiceRoller instance with fixed seed.
    """
    from wrath_sheet.engine.dice import DiceRoller

    return DiceRoller(seed=42)


# =============================================================================
# Property Tree Fixtures
# =============================================================================


@pytest.fixture
def root_folder() -> Any:
    """Create a bare root folder node."""
    from wrath_sheet.models.properties import FolderProperty

    return FolderProperty(id="root", name="Character", tags=("root",))


@pytest.fixture
def sample_tree(root_folder: Any) -> dict[str, Any]:
    """Provide a small tree: Toughness 5, Willpower 3, Medicae 2 and a Wounds pool.

    Returns:
        Property nodes keyed by id.
    """
    from wrath_sheet.models.enums import Attribute
    from wrath_sheet.models.graph import add_property
    from wrath_sheet.models.properties import (
        AttributeProperty,
        ResourceProperty,
        SkillProperty,
    )

    tree: dict[str, Any] = {root_folder.id: root_folder}
    nodes = [
        AttributeProperty(id="attr-toughness", name="Toughness", base_value=5, order=1),
        AttributeProperty(id="attr-willpower", name="Willpower", base_value=3, order=2),
        AttributeProperty(id="attr-intellect", name="Intellect", base_value=4, order=3),
        SkillProperty(
            id="skill-medicae",
            name="Medicae",
            base_value=2,
            linked_attribute=Attribute.INTELLECT,
            order=10,
        ),
        ResourceProperty(id="wounds", name="Wounds", maximum="tier + toughness", order=20),
    ]
    for node in nodes:
        tree = add_property(tree, node, root_folder.id)
    return tree


@pytest.fixture
def hospitaller_build() -> Any:
    """A legal tier 1 Sister Hospitaller build.

    Intellect 4 (the archetype bonus already puts it there), Medicae 3.
    """
    from wrath_sheet.engine.assembly import CharacterBuild

    return CharacterBuild(
        name="Sister Amalia",
        species_id="human",
        archetype_id="sister-hospitaller",
        keyword_choices={"[ORDER]": "Order of Our Martyred Lady"},
        skill_targets={"medicae": 3},
        rank=2,
    )


@pytest.fixture
def hospitaller(hospitaller_build: Any) -> Any:
    """An assembled Sister Hospitaller."""
    from wrath_sheet.engine.assembly import assemble_character

    return assemble_character(hospitaller_build)
