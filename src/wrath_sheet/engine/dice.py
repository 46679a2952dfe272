"""Dice rolling and test resolution for Wrath & Glory.

Rolling uses the d20 library. A test rolls a pool of d6s plus one or more
Wrath dice; every die showing 4+ is an Icon (a 6 is also an Exalted Icon),
the test succeeds when the Icons meet the difficulty number (DN), and Wrath
dice showing 1 or 6 flag Complications and Glory regardless of the outcome.

Any object with a ``roll_d6(count)`` method can stand in for the roller,
which is how tests fix the dice.

Example:
    >>> roller = DiceRoller(seed=7)
    >>> result = perform_test(dice_pool=6, dn=4, roller=roller)
    >>> result.success == (result.total_icons >= 4)
    True
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

import d20

from wrath_sheet.core.config import get_settings
from wrath_sheet.core.constants import (
    COMPLICATION_FACE,
    DIFFICULTY_NAMES,
    EXALTED_ICON_FACE,
    EXTREME_DIFFICULTY,
    GLORY_FACE,
    ICON_THRESHOLD,
    SIMPLE_DIFFICULTY,
)
from wrath_sheet.core.exceptions import DiceRollError
from wrath_sheet.core.logging import get_logger
from wrath_sheet.models.computation import EntityStats
from wrath_sheet.models.dice import IconCount, OpposedTestResult, TestResult, WrathDieResult
from wrath_sheet.models.enums import OpposedOutcome, Skill


logger = get_logger(__name__)

# d20 refuses expressions with more than 1000 rolls; large pools are split.
_MAX_DICE_PER_EXPRESSION = 500


@dataclass(frozen=True)
class DiceExpression:
    """A rolled dice expression.

    Attributes:
        expression: The expression that was rolled.
        total: The total result of the roll.
        dice: Individual kept dice results.
        modifier: Static part of the total (total minus dice).
    """

    expression: str
    total: int
    dice: list[int]
    modifier: int


class D6Source(Protocol):
    """Anything that can roll a number of six-sided dice."""

    def roll_d6(self, count: int) -> list[int]: ...


class DiceRoller:
    """Random source for the dice engine, backed by d20.

    d20 draws from the global ``random`` module, so a seed reseeds that
    shared generator. Seeded rollers are not independent streams: creating
    a second seeded roller changes the sequence the first one produces.

    Example:
        >>> roller = DiceRoller(seed=42)
        >>> len(roller.roll_d6(5))
        5
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    @property
    def seed(self) -> int | None:
        """Seed the roller was created with."""
        return self._seed

    def roll(self, expression: str) -> DiceExpression:
        """Roll dice according to the given expression.

        Args:
            expression: Dice expression (e.g., '1d3+2', '4d6').

        Returns:
            DiceExpression containing roll results.

        Raises:
            DiceRollError: If the expression is invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            result = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(f"Invalid dice expression: {exc}", expression=expression) from exc

        dice_values = self._extract_dice_values(result.expr)
        total = int(result.total)
        logger.debug("Dice rolled", expression=expression, total=total)
        return DiceExpression(
            expression=expression,
            total=total,
            dice=dice_values,
            modifier=total - sum(dice_values),
        )

    def _extract_dice_values(self, expr: Any) -> list[int]:
        """Extract kept dice values from a d20 expression tree."""
        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                for die in node.values:
                    if die.kept:
                        values.append(int(die.number))
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values

    def roll_d6(self, count: int) -> list[int]:
        """Roll ``count`` independent six-sided dice.

        Args:
            count: Number of dice; zero rolls nothing.

        Returns:
            The faces rolled, in order.

        Raises:
            DiceRollError: If count is negative.
        """
        if count < 0:
            raise DiceRollError("Cannot roll a negative number of dice", expression=f"{count}d6")
        faces: list[int] = []
        remaining = count
        while remaining > 0:
            batch = min(remaining, _MAX_DICE_PER_EXPRESSION)
            faces.extend(self.roll(f"{batch}d6").dice)
            remaining -= batch
        return faces


_default_roller: DiceRoller | None = None


def get_default_roller() -> DiceRoller:
    """Get the module-level roller, seeded from settings on first use."""
    global _default_roller
    if _default_roller is None:
        _default_roller = DiceRoller(seed=get_settings().game.dice_seed)
    return _default_roller


def reset_default_roller() -> None:
    """Discard the module-level roller so the next use re-reads settings."""
    global _default_roller
    _default_roller = None


# =============================================================================
# Test Resolution
# =============================================================================


def calculate_dice_pool(attribute: int, skill: int, bonus_dice: int = 0) -> int:
    """Size of a test's dice pool: Attribute + Skill + bonus dice, uncapped."""
    return attribute + skill + bonus_dice


def count_icons(rolls: Sequence[int]) -> IconCount:
    """Count Icons (4+) and Exalted Icons (6) over a set of dice.

    Example:
        >>> count_icons([1, 4, 6, 3]).total_icons
        2
    """
    icons = sum(1 for face in rolls if face >= ICON_THRESHOLD)
    exalted = sum(1 for face in rolls if face == EXALTED_ICON_FACE)
    return IconCount(icons=icons, exalted_icons=exalted, total_icons=icons)


def _require_non_negative(value: int, label: str) -> None:
    if value < 0:
        raise DiceRollError(f"{label} cannot be negative", details={label: value})


def perform_test(
    dice_pool: int,
    dn: int,
    wrath_dice: int = 1,
    *,
    roller: D6Source | None = None,
) -> TestResult:
    """Roll a test against a difficulty number.

    Args:
        dice_pool: Number of pool dice.
        dn: Difficulty number; 0 is valid and always succeeds.
        wrath_dice: Number of Wrath dice rolled alongside the pool.
        roller: Random source; the module default when omitted.

    Returns:
        The TestResult.

    Raises:
        DiceRollError: If the pool, Wrath dice count or DN is negative.
    """
    _require_non_negative(dice_pool, "dice_pool")
    _require_non_negative(wrath_dice, "wrath_dice")
    _require_non_negative(dn, "dn")

    source = roller or get_default_roller()
    rolls = list(source.roll_d6(dice_pool))
    wrath_faces = list(source.roll_d6(wrath_dice))
    wrath_rolls = tuple(
        WrathDieResult(
            value=face,
            is_complication=face == COMPLICATION_FACE,
            is_glory=face == GLORY_FACE,
        )
        for face in wrath_faces
    )

    counted = count_icons([*rolls, *wrath_faces])
    success = counted.total_icons >= dn
    result = TestResult(
        dice_pool=dice_pool,
        wrath_dice=wrath_dice,
        rolls=tuple(rolls),
        wrath_rolls=wrath_rolls,
        icons=counted.icons,
        exalted_icons=counted.exalted_icons,
        total_icons=counted.total_icons,
        dn=dn,
        success=success,
        shift=counted.total_icons - dn if success else 0,
        complications=sum(1 for die in wrath_rolls if die.is_complication),
        glory=sum(1 for die in wrath_rolls if die.is_glory),
    )
    logger.info(
        "Test resolved",
        dice_pool=dice_pool,
        dn=dn,
        total_icons=result.total_icons,
        success=result.success,
        complications=result.complications,
        glory=result.glory,
    )
    return result


def perform_opposed_test(
    attacker_pool: int,
    defender_pool: int,
    wrath_dice: int = 1,
    *,
    roller: D6Source | None = None,
) -> OpposedTestResult:
    """Roll an opposed test: both sides test at DN 0 and compare Icons.

    The attacker is rolled first, then the defender, from the same source.

    Returns:
        The OpposedTestResult; equal Icons are a tie with margin 0.
    """
    source = roller or get_default_roller()
    attacker = perform_test(attacker_pool, 0, wrath_dice, roller=source)
    defender = perform_test(defender_pool, 0, wrath_dice, roller=source)

    if attacker.total_icons > defender.total_icons:
        winner = OpposedOutcome.ATTACKER
    elif defender.total_icons > attacker.total_icons:
        winner = OpposedOutcome.DEFENDER
    else:
        winner = OpposedOutcome.TIE

    return OpposedTestResult(
        attacker=attacker,
        defender=defender,
        winner=winner,
        margin=abs(attacker.total_icons - defender.total_icons),
    )


def perform_skill_test(
    stats: EntityStats,
    skill: Skill | str,
    dn: int,
    *,
    bonus_dice: int = 0,
    wrath_dice: int | None = None,
    roller: D6Source | None = None,
) -> TestResult:
    """Roll a skill test for an entity from its stats snapshot.

    The pool is the skill's linked attribute plus its ranks plus any bonus
    dice. Fractional stat values are rounded down.

    Args:
        stats: Computed stats of the tester.
        skill: Skill being tested.
        dn: Difficulty number.
        bonus_dice: Extra dice, e.g. from ``get_ability_bonus_for_test``.
        wrath_dice: Wrath dice; the configured default when omitted.
        roller: Random source; the module default when omitted.

    Returns:
        The TestResult.
    """
    tested = Skill(skill)
    pool = calculate_dice_pool(
        int(stats.attributes.get(tested.linked_attribute)),
        int(stats.skills.get(tested)),
        bonus_dice,
    )
    if wrath_dice is None:
        wrath_dice = get_settings().game.default_wrath_dice
    logger.debug("Skill test", skill=tested.value, dice_pool=pool, dn=dn)
    return perform_test(pool, dn, wrath_dice, roller=roller)


def get_difficulty_name(dn: int) -> str:
    """Name of a difficulty number.

    Example:
        >>> get_difficulty_name(4)
        'Medium'
    """
    if dn <= 2:
        return SIMPLE_DIFFICULTY
    if dn >= 7:
        return EXTREME_DIFFICULTY
    return DIFFICULTY_NAMES[dn]


__all__ = [
    "DiceExpression",
    "D6Source",
    "DiceRoller",
    "get_default_roller",
    "reset_default_roller",
    "calculate_dice_pool",
    "count_icons",
    "perform_test",
    "perform_opposed_test",
    "perform_skill_test",
    "get_difficulty_name",
]
