"""
Item durability dice and the combat vulnerability die.

Both ride the resource die scale. An item's durability die is rolled when
the item is stressed: a 1 damages it and steps the die down, and a 1 on the
last die (d2) breaks it. The vulnerability die starts at d20 and shrinks one
step each time the creature takes a critical attack, never below d4; a 1 on
it is a critical wound and the die starts over at d20.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

from sheet_engine.data_models import DieSize, RESOURCE_DIE_SCALE
from sheet_engine.diagnostics import Diagnostic, DiagnosticCode, InvalidInputError
from sheet_engine.dice.die_model import step_down, step_up

if TYPE_CHECKING:
    from sheet_engine.dice.roller import DiceRoller

logger = logging.getLogger(__name__)


def _check_roll(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidInputError(f"Die roll must be an integer >= 1, got {value!r}")


# =============================================================================
# ITEM DURABILITY
# =============================================================================


class DurabilityState(str, Enum):
    """Condition of an item with a durability die."""
    INTACT = "intact"
    DAMAGED = "damaged"
    BROKEN = "broken"


# Dice an item may be given as its durability
DURABILITY_DIE_OPTIONS: tuple[DieSize, ...] = (
    DieSize.D2,
    DieSize.D4,
    DieSize.D6,
    DieSize.D8,
    DieSize.D10,
    DieSize.D12,
    DieSize.D20,
    DieSize.D100,
)

# Last die before breaking
DURABILITY_FLOOR = DieSize.D2


@dataclass(frozen=True)
class ItemDurability:
    """
    Durability of one item, tracked as a die on the resource scale.

    A broken item keeps its last die (d2) until repaired.
    """
    current_die: DieSize
    max_die: DieSize
    state: DurabilityState = DurabilityState.INTACT

    def __post_init__(self):
        object.__setattr__(self, "state", DurabilityState(self.state))
        if RESOURCE_DIE_SCALE.index_of(self.current_die) > RESOURCE_DIE_SCALE.index_of(self.max_die):
            raise InvalidInputError(
                f"Durability die {self.current_die.value} is above the maximum {self.max_die.value}"
            )

    @property
    def is_broken(self) -> bool:
        return self.state == DurabilityState.BROKEN

    @property
    def percent(self) -> int:
        """
        Remaining durability as a percentage of the maximum die.

        Broken items are at 0 and intact items at 100; otherwise the position
        of the current die over the position of the maximum, rounded half up.
        """
        if self.state == DurabilityState.BROKEN:
            return 0
        if self.state == DurabilityState.INTACT:
            return 100
        top = RESOURCE_DIE_SCALE.index_of(self.max_die)
        if top == 0:
            return 100
        return math.floor(RESOURCE_DIE_SCALE.index_of(self.current_die) / top * 100 + 0.5)

    def check(self, value: int) -> "DurabilityCheckResult":
        """
        Apply a durability roll.

        Args:
            value: Value rolled on the current die (must be at least 1)

        Returns:
            DurabilityCheckResult carrying the updated durability. Checking a
            broken item leaves it broken and carries a BROKEN_ITEM_CHECK
            diagnostic.

        Raises:
            InvalidInputError: If value is below 1
        """
        _check_roll(value)

        if self.is_broken:
            logger.warning(f"Durability check on a broken item ({self.current_die.value})")
            return DurabilityCheckResult(
                durability=self,
                value=value,
                damaged=False,
                previous_die=self.current_die,
                diagnostics=[Diagnostic(
                    code=DiagnosticCode.BROKEN_ITEM_CHECK,
                    message="Item is broken; repair it before testing durability",
                    details={"die": self.current_die.value},
                )],
            )

        if value >= 2:
            return DurabilityCheckResult(
                durability=self,
                value=value,
                damaged=False,
                previous_die=self.current_die,
            )

        lower = step_down(self.current_die, DURABILITY_FLOOR, RESOURCE_DIE_SCALE)
        if lower is None:
            updated = replace(self, state=DurabilityState.BROKEN)
        else:
            updated = replace(self, current_die=lower, state=DurabilityState.DAMAGED)

        logger.debug(
            f"Durability: rolled 1 on {self.current_die.value} -> "
            f"{updated.current_die.value} ({updated.state.value})"
        )
        return DurabilityCheckResult(
            durability=updated,
            value=value,
            damaged=True,
            previous_die=self.current_die,
        )

    def roll_and_check(self, roller: "DiceRoller") -> "DurabilityCheckResult":
        """Roll the current die with a caller-owned roller and apply it."""
        value = roller.roll_die(self.current_die.sides, reason="durability")
        return self.check(value)

    def repair(self) -> "ItemDurability":
        """Restore the item to its maximum die, intact."""
        return replace(self, current_die=self.max_die, state=DurabilityState.INTACT)


@dataclass(frozen=True)
class DurabilityCheckResult:
    """Outcome of one durability roll."""
    durability: ItemDurability
    value: int
    damaged: bool
    previous_die: DieSize
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def new_die(self) -> DieSize:
        return self.durability.current_die

    @property
    def new_state(self) -> DurabilityState:
        return self.durability.state


def create_item_durability(max_die: DieSize) -> ItemDurability:
    """
    Create durability for a new item, intact at its maximum die.

    Raises:
        InvalidInputError: If the die is not a durability option
    """
    if max_die not in DURABILITY_DIE_OPTIONS:
        raise InvalidInputError(
            f"{getattr(max_die, 'value', max_die)} is not a durability die; "
            f"options are {[d.value for d in DURABILITY_DIE_OPTIONS]}"
        )
    return ItemDurability(current_die=max_die, max_die=max_die)


# =============================================================================
# VULNERABILITY DIE
# =============================================================================


VULNERABILITY_START = DieSize.D20
VULNERABILITY_FLOOR = DieSize.D4


@dataclass(frozen=True)
class VulnerabilityDie:
    """
    A creature's vulnerability die: d20 -> d12 -> d10 -> d8 -> d6 -> d4.

    It stays at d4 once there. is_active marks a die in an ongoing combat.
    """
    current_die: DieSize = VULNERABILITY_START
    is_active: bool = False

    def __post_init__(self):
        index = RESOURCE_DIE_SCALE.index_of(self.current_die)
        if not (RESOURCE_DIE_SCALE.index_of(VULNERABILITY_FLOOR)
                <= index <= RESOURCE_DIE_SCALE.index_of(VULNERABILITY_START)):
            raise InvalidInputError(
                f"Vulnerability die must be between {VULNERABILITY_FLOOR.value} and "
                f"{VULNERABILITY_START.value}, got {self.current_die.value}"
            )

    def step_down(self) -> "VulnerabilityDie":
        """One step smaller, staying at d4."""
        lower = step_down(self.current_die, VULNERABILITY_FLOOR, RESOURCE_DIE_SCALE)
        return replace(self, current_die=lower or VULNERABILITY_FLOOR)

    def step_up(self) -> "VulnerabilityDie":
        """One step larger, up to d20."""
        return replace(
            self,
            current_die=step_up(self.current_die, VULNERABILITY_START, RESOURCE_DIE_SCALE),
        )

    def reset(self) -> "VulnerabilityDie":
        """Back to d20, e.g. at the end of combat."""
        return replace(self, current_die=VULNERABILITY_START)

    def take_critical(self, value: int) -> "VulnerabilityResult":
        """
        Apply the roll made when a critical attack lands.

        Args:
            value: Value rolled on the current die

        Returns:
            VulnerabilityResult; a 1 is a critical wound and resets the die,
            anything higher steps it down
        """
        _check_roll(value)
        if value == 1:
            updated = self.reset()
        else:
            updated = self.step_down()
        logger.debug(
            f"Vulnerability: rolled {value} on {self.current_die.value} -> {updated.current_die.value}"
            + (" (critical wound)" if value == 1 else "")
        )
        return VulnerabilityResult(
            die=updated,
            value=value,
            die_rolled=self.current_die,
            critical_wound=value == 1,
        )

    def roll_critical(self, roller: "DiceRoller") -> "VulnerabilityResult":
        """Roll the current die with a caller-owned roller and apply it."""
        return self.take_critical(roller.roll_die(self.current_die.sides, reason="vulnerability"))


@dataclass(frozen=True)
class VulnerabilityResult:
    """Outcome of one vulnerability roll."""
    die: VulnerabilityDie
    value: int
    die_rolled: DieSize
    critical_wound: bool
