"""
Dice pool resolution.

A skill test rolls a pool of same-sized dice and counts successes: each die
at or above the edition's threshold is a success and each die showing the
cancellation value removes one. When the pool has no dice left (zero or
negative), the character instead makes a penalty roll on the smallest skill
die, keeping only the lower value.

The d20 edition keeps only the highest die of a normal pool, sizes its
penalty roll from the size of the deficit, and also keeps the lowest die
when the attribute itself is 0 (take_lowest).
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from sheet_engine.data_models import DieSize
from sheet_engine.diagnostics import InvalidInputError
from sheet_engine.dice.roller import DiceRoller
from sheet_engine.rulesets import DEFAULT_RULESET, RulesetConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DicePoolRollResult:
    """Full breakdown of one resolved dice pool."""
    die_size: DieSize
    dice_count: int                 # Pool size as requested (may be <= 0)
    raw_values: tuple[int, ...]
    kept_values: tuple[int, ...]
    success_threshold: int
    cancellation_value: int
    successes: int
    cancellations: int
    net_successes: int
    is_penalty_roll: bool
    formula: str
    flat_bonus: int = 0

    @property
    def total(self) -> int:
        """Kept values plus flat bonus (used by the d20 edition)."""
        return sum(self.kept_values) + self.flat_bonus

    def __str__(self) -> str:
        return (
            f"{self.formula}: {list(self.raw_values)} -> "
            f"{self.net_successes} net success(es)"
        )


def is_penalty_pool(dice_count: int) -> bool:
    """A pool with no dice left becomes a penalty roll."""
    return dice_count <= 0


def penalty_dice_count(dice_count: int, ruleset: RulesetConfig = DEFAULT_RULESET) -> int:
    """Dice rolled for a penalty roll of the given pool size."""
    if ruleset.penalty_dice_from_deficit:
        return abs(dice_count) or 1
    return ruleset.penalty_roll_dice


def rolled_dice_count(dice_count: int, ruleset: RulesetConfig = DEFAULT_RULESET) -> int:
    """Number of dice actually thrown for a pool."""
    if is_penalty_pool(dice_count):
        return penalty_dice_count(dice_count, ruleset)
    return dice_count


def pool_die(dice_count: int, die_size: DieSize, ruleset: RulesetConfig = DEFAULT_RULESET) -> DieSize:
    """Die actually rolled: the smallest skill die for a penalty roll."""
    if is_penalty_pool(dice_count):
        return ruleset.skill_die_scale.smallest
    return die_size


def render_formula(
    dice_count: int,
    die_size: DieSize,
    ruleset: RulesetConfig = DEFAULT_RULESET,
    flat_bonus: int = 0,
    take_lowest: bool = False,
) -> str:
    """
    Render the roll formula shown on the sheet.

    Args:
        dice_count: Pool size (<= 0 means a penalty roll)
        die_size: Die rolled for a normal pool
        ruleset: Edition supplying the penalty die and dice count
        flat_bonus: Flat modifier appended as +X/-X when non-zero
        take_lowest: Keep the lowest die of a pool that still has dice

    Returns:
        "{n}d{sides}", or "{k}d{sides} (lower)" when only the lowest die counts
    """
    rolled = pool_die(dice_count, die_size, ruleset)
    formula = f"{rolled_dice_count(dice_count, ruleset)}d{DieSize(rolled).sides}"
    if take_lowest or is_penalty_pool(dice_count):
        formula += " (lower)"
    if flat_bonus > 0:
        formula += f"+{flat_bonus}"
    elif flat_bonus < 0:
        formula += f"-{abs(flat_bonus)}"
    return formula


def resolve_pool(
    dice_count: int,
    die_size: DieSize,
    raw_values: Sequence[int],
    ruleset: RulesetConfig = DEFAULT_RULESET,
    flat_bonus: int = 0,
    take_lowest: bool = False,
) -> DicePoolRollResult:
    """
    Count successes for an already-rolled pool.

    Args:
        dice_count: Pool size (<= 0 means a penalty roll)
        die_size: Die rolled for a normal pool
        raw_values: Values shown on the dice
        ruleset: Edition supplying threshold, cancellation value and penalty die
        flat_bonus: Flat modifier carried into the formula and total
        take_lowest: Keep only the lowest die even though the pool has dice

    Returns:
        DicePoolRollResult with counts and the rendered formula

    Raises:
        InvalidInputError: If the number of values does not match the pool
            or a value is outside the die's range
    """
    penalty = is_penalty_pool(dice_count)
    rolled_die = pool_die(dice_count, die_size, ruleset)
    expected = rolled_dice_count(dice_count, ruleset)
    values = tuple(raw_values)

    if len(values) != expected:
        raise InvalidInputError(
            f"Expected {expected} value(s) for a {'penalty roll' if penalty else 'pool'} "
            f"of {dice_count}, got {len(values)}"
        )
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= rolled_die.sides:
            raise InvalidInputError(f"{value!r} cannot be rolled on a {rolled_die.value}")

    if penalty or take_lowest:
        kept = (min(values),)
    elif ruleset.keep_highest and values:
        kept = (max(values),)
    else:
        kept = values
    successes = sum(1 for v in kept if v >= ruleset.success_threshold)
    cancellations = sum(1 for v in kept if v == ruleset.cancellation_value)

    result = DicePoolRollResult(
        die_size=rolled_die,
        dice_count=dice_count,
        raw_values=values,
        kept_values=kept,
        success_threshold=ruleset.success_threshold,
        cancellation_value=ruleset.cancellation_value,
        successes=successes,
        cancellations=cancellations,
        net_successes=max(0, successes - cancellations),
        is_penalty_roll=penalty or take_lowest,
        formula=render_formula(dice_count, die_size, ruleset, flat_bonus, take_lowest),
        flat_bonus=flat_bonus,
    )
    logger.debug(f"Resolved pool {result}")
    return result


def roll_pool(
    dice_count: int,
    die_size: DieSize,
    roller: DiceRoller,
    ruleset: RulesetConfig = DEFAULT_RULESET,
    flat_bonus: int = 0,
    reason: str = "",
    take_lowest: bool = False,
) -> DicePoolRollResult:
    """Roll a pool with a caller-owned roller and resolve it."""
    rolled_die = pool_die(dice_count, die_size, ruleset)
    values = roller.roll_dice(rolled_dice_count(dice_count, ruleset), rolled_die.sides, reason=reason)
    return resolve_pool(dice_count, die_size, values, ruleset, flat_bonus, take_lowest)
