"""
Movement totals.

Each movement type has a base speed and a bonus (which may be negative). The
total is never below zero and a movement type is only available while its
total is positive.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from sheet_engine.data_models import MovementSpeed, MovementType

logger = logging.getLogger(__name__)

# New characters walk at 5 and have no other movement
DEFAULT_WALK_SPEED = 5


@dataclass(frozen=True)
class MovementProfile:
    """Speeds for every movement type; missing types are treated as 0/0."""
    speeds: Mapping[MovementType, MovementSpeed] = field(default_factory=dict)

    def speed(self, movement_type: MovementType) -> MovementSpeed:
        return self.speeds.get(MovementType(movement_type), MovementSpeed())

    @classmethod
    def default(cls) -> "MovementProfile":
        return cls({MovementType.WALK: MovementSpeed(base=DEFAULT_WALK_SPEED)})


class MovementCalculator:
    """
    Calculate movement totals for a character.

    A total is max(0, base + bonus); a type is active when its total is > 0.
    """

    @classmethod
    def total(cls, speed: MovementSpeed) -> int:
        return speed.total

    @classmethod
    def is_active(cls, speed: MovementSpeed) -> bool:
        return speed.is_active

    @classmethod
    def totals(cls, profile: MovementProfile) -> dict[MovementType, int]:
        """
        Get the total for every movement type.

        Args:
            profile: The character's movement speeds

        Returns:
            Dict of movement type -> total, including inactive types at 0
        """
        totals = {movement_type: profile.speed(movement_type).total for movement_type in MovementType}
        active = {k.value: v for k, v in totals.items() if v}
        logger.debug(f"Movement totals: {active}")
        return totals

    @classmethod
    def active_types(cls, profile: MovementProfile) -> list[MovementType]:
        """Movement types the character can currently use."""
        return [t for t in MovementType if profile.speed(t).is_active]

    @classmethod
    def with_bonus(
        cls,
        profile: MovementProfile,
        movement_type: MovementType,
        bonus: int,
        base: Optional[int] = None,
    ) -> MovementProfile:
        """Return a profile with one type's bonus (and optionally base) replaced."""
        current = profile.speed(movement_type)
        speeds = dict(profile.speeds)
        speeds[MovementType(movement_type)] = MovementSpeed(
            base=current.base if base is None else base,
            bonus=bonus,
        )
        return MovementProfile(speeds)
