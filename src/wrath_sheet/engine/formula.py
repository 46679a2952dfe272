"""Formula evaluation over a variable namespace.

Formulas are short player-facing strings authored as content, such as
``"tier + toughness"`` or ``"max(1, floor(willpower / 2))"``. Evaluation
substitutes every known variable on token boundaries, then hands the
result to a restricted ``simpleeval`` evaluator that only understands
numbers, ``+ - * / ( )``, unary signs and the functions ``floor``,
``ceil``, ``min`` and ``max``. Formula text comes from data files, so
nothing else is ever executed.

Example:
    >>> evaluate_formula("tier + toughness", {"tier": 3, "toughness": 5})
    8
"""

from __future__ import annotations

import ast
import math
import operator
import re
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from simpleeval import InvalidExpression, SimpleEval, safe_add, safe_mult

from wrath_sheet.core.exceptions import FormulaError
from wrath_sheet.core.logging import get_logger
from wrath_sheet.engine.dice import get_default_roller
from wrath_sheet.models.properties import Number


if TYPE_CHECKING:
    from wrath_sheet.engine.dice import DiceExpression, DiceRoller


logger = get_logger(__name__)

# Longer formulas are rejected before parsing; deeply nested text would
# otherwise exhaust the parser.
MAX_FORMULA_LENGTH = 500


def _min(*values: Number) -> Number:
    return min(values)


def _max(*values: Number) -> Number:
    return max(values)


FORMULA_FUNCTIONS: Mapping[str, Callable[..., Number]] = {
    "floor": math.floor,
    "ceil": math.ceil,
    "min": _min,
    "max": _max,
}

FORMULA_OPERATORS: Mapping[type[ast.AST], Callable[..., Any]] = {
    ast.Add: safe_add,
    ast.Sub: operator.sub,
    ast.Mult: safe_mult,
    ast.Div: operator.truediv,
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

# An identifier not glued to a preceding word character (so "1d3" yields no
# "d3") and not followed by "(" (function calls are never variables).
_IDENTIFIER = re.compile(r"(?<![0-9A-Za-z_])[A-Za-z_][0-9A-Za-z_]*(?![0-9A-Za-z_])(?!\s*\()")


class FormulaEvaluator(SimpleEval):
    """simpleeval evaluator narrowed to arithmetic over numbers.

    Only numeric literals, names, the four formula operators, unary signs
    and positional calls to ``FORMULA_FUNCTIONS`` are evaluated; any other
    syntax raises ``FeatureNotAvailable``.
    """

    def __init__(self, names: Mapping[str, Number] | None = None) -> None:
        super().__init__(
            operators=dict(FORMULA_OPERATORS),
            functions=dict(FORMULA_FUNCTIONS),
            names=dict(names or {}),
        )
        self.nodes = {
            ast.Expr: self._eval_expr,
            ast.Constant: self._eval_number,
            ast.Name: self._eval_name,
            ast.BinOp: self._eval_binop,
            ast.UnaryOp: self._eval_unaryop,
            ast.Call: self._eval_call,
        }

    @staticmethod
    def _eval_number(node: ast.Constant) -> Number:
        if isinstance(node.value, bool) or not isinstance(node.value, int | float):
            raise InvalidExpression(f"Unsupported literal {node.value!r}")
        return node.value


def _format_value(value: Number) -> str:
    text = repr(value)
    return f"({text})" if value < 0 else text


def substitute_variables(formula: str, variables: Mapping[str, Number]) -> str:
    """Replace every known variable in a formula with its value.

    Matching is on whole identifiers, so ``strength_mod`` is untouched by a
    substitution for ``strength``. Negative values are parenthesised.

    Args:
        formula: Formula text.
        variables: Known variable values.

    Returns:
        The formula with known variables replaced by numbers.
    """

    def replace(match: re.Match[str]) -> str:
        name = match.group(0)
        if name in variables:
            return _format_value(variables[name])
        return name

    return _IDENTIFIER.sub(replace, formula)


def formula_variables(formula: str) -> tuple[str, ...]:
    """Identifiers a formula references, in order of first appearance.

    Example:
        >>> formula_variables("max(6, 6 + floor(agility / 2))")
        ('agility',)
    """
    seen: dict[str, None] = {}
    for match in _IDENTIFIER.finditer(formula):
        seen.setdefault(match.group(0), None)
    return tuple(seen)


def evaluate_formula(formula: str, variables: Mapping[str, Number]) -> Number:
    """Evaluate a formula against a variable namespace.

    Args:
        formula: Formula text, e.g. ``"tier + toughness"``.
        variables: Values of the names the formula may reference.

    Returns:
        The numeric result. Integer arithmetic stays integral; division
        always produces a float.

    Raises:
        FormulaError: If the formula is empty, too long or malformed,
            references an unknown identifier or function, divides by zero,
            nests too deeply, or produces a non-finite number.
    """
    if not isinstance(formula, str) or not formula.strip():
        raise FormulaError("Empty formula", formula=str(formula))
    if len(formula) > MAX_FORMULA_LENGTH:
        raise FormulaError(
            f"Formula is longer than {MAX_FORMULA_LENGTH} characters",
            formula=formula[:MAX_FORMULA_LENGTH],
        )

    substituted = substitute_variables(formula, variables).strip()
    evaluator = FormulaEvaluator(variables)
    try:
        result = evaluator.eval(substituted)
    except SyntaxError as exc:
        raise FormulaError(f"Malformed formula: {exc.msg}", formula=formula) from exc
    except ZeroDivisionError as exc:
        raise FormulaError("Division by zero", formula=formula) from exc
    except (RecursionError, MemoryError) as exc:
        raise FormulaError("Formula is nested too deeply", formula=formula) from exc
    except (InvalidExpression, KeyError, TypeError, ValueError, OverflowError) as exc:
        raise FormulaError(f"Formula could not be evaluated: {exc}", formula=formula) from exc

    if isinstance(result, bool) or not isinstance(result, int | float):
        raise FormulaError(f"Formula result {result!r} is not a number", formula=formula)
    if isinstance(result, float) and not math.isfinite(result):
        raise FormulaError("Formula result is not a finite number", formula=formula)
    return result


def roll_formula(
    formula: str,
    variables: Mapping[str, Number],
    *,
    roller: DiceRoller | None = None,
) -> DiceExpression:
    """Roll a dice formula after substituting variables.

    Used for formulas that mix dice notation with character values, such as
    a heal amount of ``"1d3+rank"``.

    Args:
        formula: Dice formula text.
        variables: Values substituted before rolling.
        roller: Dice roller; the module default when omitted.

    Returns:
        The rolled DiceExpression.

    Raises:
        DiceRollError: If the substituted formula is not valid dice notation.
    """
    substituted = substitute_variables(formula, variables)
    logger.debug("Rolling formula", formula=formula, substituted=substituted)
    return (roller or get_default_roller()).roll(substituted)


__all__ = [
    "MAX_FORMULA_LENGTH",
    "FORMULA_FUNCTIONS",
    "FORMULA_OPERATORS",
    "FormulaEvaluator",
    "substitute_variables",
    "formula_variables",
    "evaluate_formula",
    "roll_formula",
]
