"""Tests for dice rolling and test resolution."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from wrath_sheet.core.exceptions import DiceRollError
from wrath_sheet.engine.dice import (
    DiceExpression,
    DiceRoller,
    calculate_dice_pool,
    count_icons,
    get_default_roller,
    get_difficulty_name,
    perform_opposed_test,
    perform_skill_test,
    perform_test,
    reset_default_roller,
)
from wrath_sheet.models.dice import TestResult
from wrath_sheet.models.enums import OpposedOutcome


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_roll_with_modifier(self, dice_roller: DiceRoller) -> None:
        """Test a roll with a flat modifier."""
        result = dice_roller.roll("1d3+2")

        assert isinstance(result, DiceExpression)
        assert 3 <= result.total <= 5
        assert result.modifier == 2
        assert len(result.dice) == 1

    def test_multiple_dice(self, dice_roller: DiceRoller) -> None:
        """Test rolling multiple dice."""
        result = dice_roller.roll("4d6")

        assert 4 <= result.total <= 24
        assert len(result.dice) == 4
        assert result.modifier == 0

    @pytest.mark.parametrize("expression", ["", "   ", "not dice", "1d"])
    def test_invalid_expression(self, dice_roller: DiceRoller, expression: str) -> None:
        """Test invalid expressions raise DiceRollError."""
        with pytest.raises(DiceRollError):
            dice_roller.roll(expression)

    def test_roll_d6(self, dice_roller: DiceRoller) -> None:
        """Test independent d6 faces."""
        faces = dice_roller.roll_d6(10)

        assert len(faces) == 10
        assert all(1 <= face <= 6 for face in faces)
        assert dice_roller.roll_d6(0) == []

    def test_large_pools_are_batched(self, dice_roller: DiceRoller) -> None:
        """Test pools larger than one expression allows are still rolled."""
        faces = dice_roller.roll_d6(1200)

        assert len(faces) == 1200
        assert set(faces) <= {1, 2, 3, 4, 5, 6}

    def test_negative_count(self, dice_roller: DiceRoller) -> None:
        """Test a negative count is refused."""
        with pytest.raises(DiceRollError):
            dice_roller.roll_d6(-1)

    def test_seed_reproducible(self) -> None:
        """Test equal seeds give equal rolls."""
        first = DiceRoller(seed=5).roll_d6(12)
        second = DiceRoller(seed=5).roll_d6(12)

        assert first == second

    def test_default_roller_uses_settings(self, mock_env_vars: dict[str, str]) -> None:
        """Test the module roller is seeded from settings and shared."""
        roller = get_default_roller()

        assert roller.seed == 1234
        assert get_default_roller() is roller
        reset_default_roller()
        assert get_default_roller() is not roller


class TestIcons:
    """Tests for icon counting."""

    def test_count_icons(self) -> None:
        """Test 4+ are icons and 6s are also exalted."""
        counted = count_icons([1, 4, 6, 3, 5, 6])

        assert counted.icons == 4
        assert counted.exalted_icons == 2
        assert counted.total_icons == 4

    def test_dice_pool(self) -> None:
        """Test pool size is uncapped."""
        assert calculate_dice_pool(4, 3, 4) == 11
        assert calculate_dice_pool(12, 8, 30) == 50


class TestPerformTest:
    """Tests for single test resolution."""

    def test_success(self, scripted_roller: Callable[..., Any]) -> None:
        """Test icons over pool and Wrath dice meet the DN."""
        roller = scripted_roller(4, 6, 2, 5)
        result = perform_test(3, 3, 1, roller=roller)

        assert roller.requests == [3, 1]
        assert result.rolls == (4, 6, 2)
        assert result.wrath_rolls[0].value == 5
        assert result.total_icons == 3
        assert result.exalted_icons == 1
        assert result.success is True
        assert result.shift == 0

    def test_shift(self, scripted_roller: Callable[..., Any]) -> None:
        """Test extra icons become shift."""
        result = perform_test(4, 2, 1, roller=scripted_roller(4, 5, 6, 6, 5))

        assert result.total_icons == 5
        assert result.shift == 3

    def test_failure_has_no_shift(self, scripted_roller: Callable[..., Any]) -> None:
        """Test a failed test has shift 0."""
        result = perform_test(3, 4, 1, roller=scripted_roller(1, 2, 4, 5))

        assert result.success is False
        assert result.shift == 0

    def test_complication_on_success(self, scripted_roller: Callable[..., Any]) -> None:
        """Test a Wrath 1 causes a Complication even when the test succeeds."""
        result = perform_test(2, 2, 1, roller=scripted_roller(6, 6, 1))

        assert result.success is True
        assert result.complications == 1
        assert result.wrath_rolls[0].is_complication is True
        assert result.glory == 0

    def test_glory_on_failure(self, scripted_roller: Callable[..., Any]) -> None:
        """Test a Wrath 6 earns Glory even when the test fails."""
        result = perform_test(2, 4, 1, roller=scripted_roller(1, 1, 6))

        assert result.success is False
        assert result.glory == 1
        assert result.complications == 0

    def test_multiple_wrath_dice(self, scripted_roller: Callable[..., Any]) -> None:
        """Test every Wrath die is flagged independently."""
        result = perform_test(0, 0, 3, roller=scripted_roller(1, 6, 1))

        assert result.complications == 2
        assert result.glory == 1
        assert result.total_icons == 1

    def test_dn_zero_always_succeeds(self, scripted_roller: Callable[..., Any]) -> None:
        """Test an empty test at DN 0 succeeds."""
        result = perform_test(0, 0, 0, roller=scripted_roller())

        assert result.success is True
        assert result.rolls == ()
        assert result.wrath_rolls == ()

    @pytest.mark.parametrize(
        ("pool", "dn", "wrath"),
        [(-1, 3, 1), (3, -1, 1), (3, 3, -1)],
    )
    def test_negative_inputs(self, pool: int, dn: int, wrath: int) -> None:
        """Test negative pools, DNs and Wrath dice are refused."""
        with pytest.raises(DiceRollError):
            perform_test(pool, dn, wrath)

    def test_outcome_invariants(self, dice_roller: DiceRoller) -> None:
        """Test success and shift always follow the icon count."""
        for _ in range(200):
            result = perform_test(6, 4, 1, roller=dice_roller)
            faces = [*result.rolls, *(die.value for die in result.wrath_rolls)]

            assert len(faces) == 7
            assert result.total_icons == sum(1 for face in faces if face >= 4)
            assert result.success == (result.total_icons >= 4)
            assert result.shift == max(0, result.total_icons - 4)

    def test_result_serializes(self, scripted_roller: Callable[..., Any]) -> None:
        """Test results survive a JSON round trip."""
        result = perform_test(2, 1, 1, roller=scripted_roller(3, 4, 6))
        assert TestResult.model_validate_json(result.model_dump_json()) == result


class TestOpposedTest:
    """Tests for opposed tests."""

    def test_attacker_wins(self, scripted_roller: Callable[..., Any]) -> None:
        """Test more icons wins with the difference as margin."""
        result = perform_opposed_test(3, 2, roller=scripted_roller(4, 4, 1, 2, 5, 1, 3))

        assert result.attacker.total_icons == 2
        assert result.defender.total_icons == 1
        assert result.winner == OpposedOutcome.ATTACKER
        assert result.margin == 1

    def test_symmetry(self, scripted_roller: Callable[..., Any]) -> None:
        """Test swapping sides swaps the winner and keeps the margin."""
        forward = perform_opposed_test(3, 2, roller=scripted_roller(4, 4, 1, 2, 5, 1, 3))
        swapped = perform_opposed_test(2, 3, roller=scripted_roller(5, 1, 3, 4, 4, 1, 2))

        assert swapped.winner == OpposedOutcome.DEFENDER
        assert swapped.margin == forward.margin

    def test_tie(self, scripted_roller: Callable[..., Any]) -> None:
        """Test equal icons tie with margin 0."""
        result = perform_opposed_test(1, 1, roller=scripted_roller(4, 1, 5, 2))

        assert result.winner == OpposedOutcome.TIE
        assert result.margin == 0


class TestSkillTest:
    """Tests for skill tests from a stats snapshot."""

    def test_pool_from_stats(self, hospitaller: Any, scripted_roller: Callable[..., Any]) -> None:
        """Test the pool is attribute plus skill plus bonus dice."""
        roller = scripted_roller(*([4] * 11), 2)
        result = perform_skill_test(hospitaller.stats, "medicae", 3, bonus_dice=4, roller=roller)

        assert roller.requests == [11, 1]
        assert result.dice_pool == 11
        assert result.total_icons == 11

    def test_default_wrath_dice_from_settings(
        self,
        mock_env_vars: dict[str, str],
        hospitaller: Any,
        scripted_roller: Callable[..., Any],
    ) -> None:
        """Test the configured Wrath dice are used when none are given."""
        roller = scripted_roller(*([1] * 7), 3, 3)
        result = perform_skill_test(hospitaller.stats, "medicae", 1, roller=roller)

        assert roller.requests == [7, 2]
        assert result.wrath_dice == 2


class TestDifficultyNames:
    """Tests for difficulty names."""

    @pytest.mark.parametrize(
        ("dn", "expected"),
        [
            (0, "Simple"),
            (2, "Simple"),
            (3, "Easy"),
            (4, "Medium"),
            (5, "Hard"),
            (6, "Very Hard"),
            (7, "Extreme"),
            (10, "Extreme"),
        ],
    )
    def test_names(self, dn: int, expected: str) -> None:
        """Test each band."""
        assert get_difficulty_name(dn) == expected
