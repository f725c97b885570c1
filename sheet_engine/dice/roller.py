"""
Caller-owned randomness source.

Every random draw the engine makes goes through a DiceRoller instance the
caller creates and passes in. Seeding the roller makes a whole sequence of
rolls reproducible; the roller keeps a bounded history of recent rolls for
display.
"""

import logging
import random
import re
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sheet_engine.diagnostics import InvalidInputError

logger = logging.getLogger(__name__)

# Most recent rolls kept for the history panel
ROLL_HISTORY_LIMIT = 50

_NOTATION = re.compile(r"^\s*(\d*)\s*d\s*(\d+)\s*(?:([+-])\s*(\d+))?\s*$", re.IGNORECASE)


@dataclass
class DiceResult:
    """Result of a dice roll with full information."""
    notation: str
    rolls: list[int]
    modifier: int
    total: int
    reason: str
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        if self.modifier > 0:
            return f"{self.notation}: {self.rolls} + {self.modifier} = {self.total}"
        elif self.modifier < 0:
            return f"{self.notation}: {self.rolls} - {abs(self.modifier)} = {self.total}"
        return f"{self.notation}: {self.rolls} = {self.total}"


class DiceRoller:
    """
    Randomization interface owned by the caller.

    Each roller has its own random.Random and its own roll history.
    """

    def __init__(self, seed: Optional[int] = None, history_limit: int = ROLL_HISTORY_LIMIT):
        self._seed = seed
        self._rng = random.Random(seed)
        self._history: deque[DiceResult] = deque(maxlen=history_limit)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def set_seed(self, seed: int) -> None:
        """Reseed the roller for reproducibility."""
        self._seed = seed
        self._rng.seed(seed)

    def randint(self, a: int, b: int) -> int:
        """Random integer in [a, b], not recorded in the history."""
        return self._rng.randint(a, b)

    def roll_dice(self, count: int, sides: int, reason: str = "") -> list[int]:
        """
        Roll several dice of one size.

        Args:
            count: Number of dice (may be 0)
            sides: Faces per die
            reason: Why this roll is being made (for the history)

        Returns:
            The individual values in roll order
        """
        if count < 0:
            raise InvalidInputError(f"Cannot roll {count} dice")
        if sides < 1:
            raise InvalidInputError(f"A die needs at least one side, got {sides}")
        rolls = [self._rng.randint(1, sides) for _ in range(count)]
        self._record(DiceResult(
            notation=f"{count}d{sides}",
            rolls=rolls,
            modifier=0,
            total=sum(rolls),
            reason=reason,
        ))
        return rolls

    def roll_die(self, sides: int, reason: str = "") -> int:
        """Roll a single die."""
        return self.roll_dice(1, sides, reason)[0]

    def roll(self, dice: str, reason: str = "") -> DiceResult:
        """
        Roll dice using standard notation (e.g., '2d6', '1d20+5', '3d6-2').

        Args:
            dice: Dice notation string
            reason: Why this roll is being made (for logging)

        Returns:
            DiceResult with individual rolls and total
        """
        match = _NOTATION.match(dice)
        if match is None:
            raise InvalidInputError(f"Invalid dice notation: {dice!r}")
        count_text, sides_text, sign, mod_text = match.groups()
        num_dice = int(count_text) if count_text else 1
        die_size = int(sides_text)
        modifier = int(mod_text) if mod_text else 0
        if sign == "-":
            modifier = -modifier
        if die_size < 1:
            raise InvalidInputError(f"A die needs at least one side: {dice!r}")

        rolls = [self._rng.randint(1, die_size) for _ in range(num_dice)]
        result = DiceResult(
            notation=dice,
            rolls=rolls,
            modifier=modifier,
            total=sum(rolls) + modifier,
            reason=reason,
        )
        self._record(result)
        return result

    def get_roll_log(self) -> list[DiceResult]:
        """Recent rolls, oldest first."""
        return list(self._history)

    def clear_roll_log(self) -> None:
        self._history.clear()

    def _record(self, result: DiceResult) -> None:
        self._history.append(result)
        logger.debug(f"Rolled {result} ({result.reason})" if result.reason else f"Rolled {result}")
