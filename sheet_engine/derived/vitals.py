"""
Guard, vitality and power point bookkeeping.

Guard points (GA) absorb damage first; once they are gone, damage spills
into vitality (PV). Vitality maximum is a third of the guard maximum, and
while vitality is at 0 the guard maximum is halved.
"""

import logging
from dataclasses import dataclass, replace

from sheet_engine.diagnostics import InvalidInputError

logger = logging.getLogger(__name__)

# Recovery points spent per vitality point healed
VITALITY_RECOVERY_COST = 5


@dataclass(frozen=True)
class GuardPoints:
    maximum: int
    current: int
    temporary: int = 0


@dataclass(frozen=True)
class VitalityPoints:
    maximum: int
    current: int


@dataclass(frozen=True)
class DamageResult:
    """Guard and vitality after damage."""
    guard: GuardPoints
    vitality: VitalityPoints
    absorbed_by_temporary: int
    absorbed_by_guard: int
    absorbed_by_vitality: int


def calculate_vitality(guard_max: int) -> int:
    """Vitality maximum: a third of the guard maximum, rounded down."""
    return max(0, guard_max) // 3


def effective_guard_max(guard_max: int, vitality_current: int) -> int:
    """Guard maximum while wounded: halved when vitality is at 0."""
    if vitality_current <= 0:
        return guard_max // 2
    return guard_max


def apply_damage(guard: GuardPoints, vitality: VitalityPoints, damage: int) -> DamageResult:
    """
    Apply damage to guard, then vitality.

    Temporary guard absorbs first, then current guard; whatever is left
    reduces vitality, which never drops below 0. Damage of 0 or less changes
    nothing.
    """
    if damage <= 0:
        return DamageResult(guard, vitality, 0, 0, 0)

    remaining = damage
    from_temp = min(guard.temporary, remaining) if guard.temporary > 0 else 0
    remaining -= from_temp
    from_guard = min(guard.current, remaining) if guard.current > 0 else 0
    remaining -= from_guard
    from_vitality = min(vitality.current, remaining) if remaining > 0 else 0

    result = DamageResult(
        guard=replace(guard, current=guard.current - from_guard, temporary=guard.temporary - from_temp),
        vitality=replace(vitality, current=max(0, vitality.current - remaining)),
        absorbed_by_temporary=from_temp,
        absorbed_by_guard=from_guard,
        absorbed_by_vitality=from_vitality,
    )
    logger.debug(
        f"{damage} damage: temp -{from_temp}, guard -{from_guard}, vitality -{from_vitality}"
    )
    return result


def heal_guard(guard: GuardPoints, amount: int) -> GuardPoints:
    if amount <= 0:
        return guard
    return replace(guard, current=min(guard.current + amount, guard.maximum))


def heal_vitality(vitality: VitalityPoints, recovery_points: int) -> tuple[VitalityPoints, int]:
    """
    Spend recovery points on vitality.

    Returns:
        (new vitality, unspent recovery points)
    """
    if recovery_points < VITALITY_RECOVERY_COST or vitality.current >= vitality.maximum:
        return vitality, recovery_points
    healed = min(vitality.maximum - vitality.current, recovery_points // VITALITY_RECOVERY_COST)
    return (
        replace(vitality, current=vitality.current + healed),
        recovery_points - healed * VITALITY_RECOVERY_COST,
    )


def power_per_round(character_level: int, presence: int, other: int = 0) -> int:
    """Power points a character may spend in one round."""
    return character_level + presence + other


def max_dying_rounds(constitution: int, other: int = 0) -> int:
    """Rounds a character at 0 vitality can last before dying."""
    return 2 + constitution + other


def rest_guard_recovery(character_level: int, constitution: int, other: int = 0) -> int:
    return character_level * constitution + other


def spend_power(current: int, temporary: int, cost: int) -> tuple[int, int]:
    """
    Spend power points, temporary first.

    Returns:
        (new current, new temporary)

    Raises:
        InvalidInputError: If cost is negative
    """
    if cost < 0:
        raise InvalidInputError(f"Power cost cannot be negative ({cost})")
    from_temp = min(temporary, cost)
    return max(0, current - (cost - from_temp)), temporary - from_temp
