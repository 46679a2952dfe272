"""Result models for dice tests.

Test results are plain frozen models of numbers, booleans and tuples so
they can be shown by a dice UI or appended to a roll log as JSON.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from wrath_sheet.models.enums import OpposedOutcome


class IconCount(BaseModel):
    """Icons counted over a set of dice.

    Exalted Icons are included in ``icons``; they are not counted twice.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    icons: int = Field(ge=0, description="Dice showing 4 or more")
    exalted_icons: int = Field(ge=0, description="Dice showing 6")
    total_icons: int = Field(ge=0, description="Icons compared against the DN")


class WrathDieResult(BaseModel):
    """One Wrath die and the special outcome it flags."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: int = Field(ge=1, le=6)
    is_complication: bool
    is_glory: bool


class TestResult(BaseModel):
    """Outcome of a single test.

    Attributes:
        dice_pool: Number of pool dice rolled.
        wrath_dice: Number of Wrath dice rolled.
        rolls: Pool dice faces.
        wrath_rolls: Wrath dice and their flags.
        icons: Dice showing 4+ across pool and Wrath dice.
        exalted_icons: Dice showing 6 across pool and Wrath dice.
        total_icons: Icons compared against the DN.
        dn: Difficulty number.
        success: Whether total icons met the DN.
        shift: Icons beyond the DN; zero on failure.
        complications: Wrath dice showing 1.
        glory: Wrath dice showing 6.
    """

    __test__: ClassVar[bool] = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    dice_pool: int = Field(ge=0)
    wrath_dice: int = Field(ge=0)
    rolls: tuple[int, ...]
    wrath_rolls: tuple[WrathDieResult, ...]
    icons: int = Field(ge=0)
    exalted_icons: int = Field(ge=0)
    total_icons: int = Field(ge=0)
    dn: int = Field(ge=0)
    success: bool
    shift: int = Field(ge=0)
    complications: int = Field(ge=0)
    glory: int = Field(ge=0)


class OpposedTestResult(BaseModel):
    """Outcome of an opposed test: two DN 0 tests compared by icons."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    attacker: TestResult
    defender: TestResult
    winner: OpposedOutcome
    margin: int = Field(ge=0, description="Absolute icon difference")


__all__ = [
    "IconCount",
    "WrathDieResult",
    "TestResult",
    "OpposedTestResult",
]
