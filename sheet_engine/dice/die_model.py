"""
Proficiency and die-size model.

Maps proficiency grades onto die sizes for an edition, orders and steps die
sizes along a scale, and holds the damage dice step progression used when an
effect raises or lowers a damage roll by a number of steps.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from sheet_engine.data_models import (
    DieScale,
    DieSize,
    ProficiencyGrade,
    SKILL_DIE_SCALE,
)
from sheet_engine.diagnostics import InvalidInputError
from sheet_engine.rulesets import DEFAULT_RULESET, RulesetConfig

logger = logging.getLogger(__name__)


# =============================================================================
# PROFICIENCY -> DIE
# =============================================================================


def die_size_for(
    grade: ProficiencyGrade,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> DieSize:
    """
    Get the die rolled for a proficiency grade.

    Args:
        grade: Proficiency grade of the skill
        ruleset: Edition supplying the grade -> die mapping

    Returns:
        The die size for that grade

    Raises:
        InvalidInputError: If the edition does not map the grade
    """
    grade = ProficiencyGrade(grade)
    try:
        return ruleset.proficiency_dice[grade]
    except KeyError:
        raise InvalidInputError(
            f"Ruleset {ruleset.name} has no die for grade {grade.value}"
        ) from None


def proficiency_multiplier(
    grade: ProficiencyGrade,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> int:
    """Attribute multiplier for a grade; 0 in editions that don't use them."""
    return ruleset.proficiency_multipliers.get(ProficiencyGrade(grade), 0)


# =============================================================================
# DIE ORDERING AND STEPPING
# =============================================================================


def compare_dice(a: DieSize, b: DieSize, scale: DieScale = SKILL_DIE_SCALE) -> int:
    """
    Compare two dice by their position on a scale.

    Returns:
        -1 if a is smaller, 0 if equal, 1 if a is larger
    """
    ia = scale.index_of(a)
    ib = scale.index_of(b)
    return (ia > ib) - (ia < ib)


def step_down(
    die: DieSize,
    floor: Optional[DieSize] = None,
    scale: DieScale = SKILL_DIE_SCALE,
) -> Optional[DieSize]:
    """
    Move one position down the scale.

    Args:
        die: Current die
        floor: Lowest die allowed (defaults to the smallest on the scale)
        scale: Scale to step along

    Returns:
        The next smaller die, or None when the die is already at the floor
    """
    floor = scale.smallest if floor is None else floor
    index = scale.index_of(die)
    if index <= scale.index_of(floor):
        return None
    return scale.at(index - 1)


def step_up(
    die: DieSize,
    ceiling: Optional[DieSize] = None,
    scale: DieScale = SKILL_DIE_SCALE,
) -> DieSize:
    """
    Move one position up the scale, clamped at the ceiling.

    Args:
        die: Current die
        ceiling: Highest die allowed (defaults to the largest on the scale)
        scale: Scale to step along
    """
    ceiling = scale.largest if ceiling is None else ceiling
    top = scale.index_of(ceiling)
    return scale.at(min(scale.index_of(die) + 1, top))


# =============================================================================
# DAMAGE DICE STEPS
# =============================================================================


@dataclass(frozen=True)
class DiceStep:
    """One step of the damage dice progression."""
    index: int
    primary: str
    alternatives: tuple[str, ...] = field(default_factory=tuple)

    @property
    def notations(self) -> tuple[str, ...]:
        return (self.primary,) + self.alternatives

    def __str__(self) -> str:
        return format_dice_step(self)


_STEP_NOTATIONS: tuple[tuple[str, ...], ...] = (
    ("1", "1d1"),
    ("1d2",),
    ("1d3",),
    ("1d4",),
    ("1d6",),
    ("1d8", "2d4"),
    ("1d10",),
    ("1d12", "2d6", "3d4"),
    ("2d8", "4d4"),
    ("3d6",),
    ("2d10", "5d4"),
    ("2d12", "3d8", "4d6", "6d4"),
    ("3d10", "5d6"),
    ("4d8", "8d4"),
    ("3d12", "6d6"),
    ("4d10", "5d8"),
    ("7d6",),
    ("4d12", "6d8", "8d6"),
    ("5d10",),
    ("7d8",),
    ("6d10", "5d12"),
    ("8d8",),
    ("7d10",),
    ("6d12",),
    ("8d10",),
    ("7d12",),
    ("8d12",),
)

DICE_STEPS: tuple[DiceStep, ...] = tuple(
    DiceStep(index=i, primary=notations[0], alternatives=notations[1:])
    for i, notations in enumerate(_STEP_NOTATIONS)
)


def get_dice_step(index: int) -> Optional[DiceStep]:
    """Step at an index, or None when off the progression."""
    if 0 <= index < len(DICE_STEPS):
        return DICE_STEPS[index]
    return None


def find_dice_step(notation: str) -> Optional[DiceStep]:
    """
    Find the step matching a notation (primary or alternative).

    Matching ignores case and surrounding whitespace.
    """
    normalized = notation.strip().lower()
    for step in DICE_STEPS:
        if normalized in step.notations:
            return step
    return None


def step_dice(notation: str, steps: int) -> Optional[DiceStep]:
    """
    Move a damage roll up (positive) or down (negative) the progression.

    Args:
        notation: Current notation, e.g. "1d6" or "2d4"
        steps: Number of steps to move

    Returns:
        The resulting step, or None if the notation is unknown or the
        move would leave the progression
    """
    current = find_dice_step(notation)
    if current is None:
        logger.debug(f"Unknown dice notation for stepping: {notation!r}")
        return None
    return get_dice_step(current.index + steps)


def format_dice_step(step: DiceStep) -> str:
    """Render a step as "primary or alt1/alt2"."""
    if not step.alternatives:
        return step.primary
    return f"{step.primary} or {'/'.join(step.alternatives)}"
