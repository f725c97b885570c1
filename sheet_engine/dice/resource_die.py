"""
Resource dice (usage dice) for consumables and durability.

A resource such as water or arrows is tracked as a die on the resource
scale. Each use rolls the current die: a 1 depletes the resource outright,
anything higher steps the die down one size. Stepping below the minimum die
also depletes it.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Optional

from sheet_engine.data_models import DieSize, RESOURCE_DIE_SCALE
from sheet_engine.diagnostics import Diagnostic, DiagnosticCode, InvalidInputError
from sheet_engine.dice.die_model import step_down, step_up

if TYPE_CHECKING:
    from sheet_engine.dice.roller import DiceRoller

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceDie:
    """
    A resource tracked by a shrinking die.

    current_die is None while the resource is depleted. Every operation
    returns a new ResourceDie; instances are never modified.
    """
    name: str
    current_die: Optional[DieSize]
    min_die: DieSize = DieSize.D2
    max_die: DieSize = DieSize.D12
    is_custom: bool = False

    def __post_init__(self):
        low = RESOURCE_DIE_SCALE.index_of(self.min_die)
        high = RESOURCE_DIE_SCALE.index_of(self.max_die)
        if low > high:
            raise InvalidInputError(
                f"Resource {self.name}: min die {self.min_die.value} is above "
                f"max die {self.max_die.value}"
            )
        if self.current_die is not None:
            current = RESOURCE_DIE_SCALE.index_of(self.current_die)
            if not low <= current <= high:
                raise InvalidInputError(
                    f"Resource {self.name}: {self.current_die.value} is outside "
                    f"{self.min_die.value}-{self.max_die.value}"
                )

    @property
    def is_depleted(self) -> bool:
        return self.current_die is None

    @property
    def die_size(self) -> Optional[DieSize]:
        """Die to roll on the next use; None while depleted."""
        return self.current_die

    def use(self, value: int) -> "ResourceUseResult":
        """
        Apply a usage roll to the resource.

        Args:
            value: Value rolled on the current die (must be at least 1)

        Returns:
            ResourceUseResult with the new resource state. Using a depleted
            resource leaves it depleted and carries a DEPLETED_RESOURCE_USE
            diagnostic.

        Raises:
            InvalidInputError: If value is below 1
        """
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidInputError(f"Resource roll must be an integer >= 1, got {value!r}")

        if self.current_die is None:
            logger.warning(f"Resource {self.name} used while depleted")
            return ResourceUseResult(
                resource=self,
                die_rolled=None,
                value=value,
                stepped_down=False,
                diagnostics=[Diagnostic(
                    code=DiagnosticCode.DEPLETED_RESOURCE_USE,
                    message=f"{self.name} is depleted; reset or resupply before using it",
                    details={"resource": self.name},
                )],
            )

        if value == 1:
            new_die = None
            stepped_down = False
        else:
            new_die = step_down(self.current_die, self.min_die, RESOURCE_DIE_SCALE)
            stepped_down = True

        updated = replace(self, current_die=new_die)
        logger.debug(
            f"Resource {self.name}: rolled {value} on {self.current_die.value} -> "
            f"{new_die.value if new_die else 'depleted'}"
        )
        return ResourceUseResult(
            resource=updated,
            die_rolled=self.current_die,
            value=value,
            stepped_down=stepped_down,
        )

    def roll_and_use(self, roller: "DiceRoller") -> "ResourceUseResult":
        """Roll the current die with a caller-owned roller and apply it."""
        if self.current_die is None:
            return self.use(1)
        value = roller.roll_die(self.current_die.sides, reason=f"resource {self.name}")
        return self.use(value)

    def reset(self) -> "ResourceDie":
        """Fully restock the resource at its maximum die."""
        return replace(self, current_die=self.max_die)

    def restore_step(self) -> "ResourceDie":
        """Resupply one step; a depleted resource comes back at its minimum die."""
        if self.current_die is None:
            return replace(self, current_die=self.min_die)
        return replace(
            self,
            current_die=step_up(self.current_die, self.max_die, RESOURCE_DIE_SCALE),
        )


@dataclass(frozen=True)
class ResourceUseResult:
    """Outcome of one resource use."""
    resource: ResourceDie
    die_rolled: Optional[DieSize]
    value: int
    stepped_down: bool
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def is_depleted(self) -> bool:
        return self.resource.is_depleted

    @property
    def new_die(self) -> Optional[DieSize]:
        return self.resource.current_die


# =============================================================================
# PRESETS
# =============================================================================


@dataclass(frozen=True)
class PresetResource:
    """Default dice for a common resource."""
    name: str
    min_die: DieSize
    max_die: DieSize
    starting_die: DieSize
    description: str = ""


PRESET_RESOURCES: dict[str, PresetResource] = {
    preset.name: preset
    for preset in (
        PresetResource("water", DieSize.D2, DieSize.D12, DieSize.D12, "Drinking water supply"),
        PresetResource("food", DieSize.D2, DieSize.D12, DieSize.D12, "Food supply"),
        PresetResource("torch", DieSize.D2, DieSize.D8, DieSize.D8, "Torches for light"),
        PresetResource("arrows", DieSize.D2, DieSize.D12, DieSize.D12, "Arrows for bows"),
        PresetResource("weapon", DieSize.D2, DieSize.D20, DieSize.D20, "Main weapon durability"),
        PresetResource("armor", DieSize.D2, DieSize.D20, DieSize.D20, "Armor durability"),
        PresetResource("powder", DieSize.D2, DieSize.D10, DieSize.D10, "Gunpowder for firearms"),
        PresetResource("lead_shot", DieSize.D2, DieSize.D12, DieSize.D12, "Lead shot ammunition"),
        PresetResource("bolts", DieSize.D2, DieSize.D12, DieSize.D12, "Bolts for crossbows"),
        PresetResource("needles", DieSize.D2, DieSize.D8, DieSize.D8, "Needles for general use"),
    )
}

DEFAULT_RESOURCE_NAMES: tuple[str, ...] = ("water", "food")


def create_resource_die(
    name: str,
    max_die: DieSize = DieSize.D12,
    min_die: DieSize = DieSize.D2,
    current_die: Optional[DieSize] = None,
) -> ResourceDie:
    """
    Create a custom resource, starting at its maximum die unless told otherwise.

    Raises:
        InvalidInputError: If the name is blank or the dice are off the
            resource scale or out of order
    """
    if not name or not name.strip():
        raise InvalidInputError("Resource name cannot be empty")
    return ResourceDie(
        name=name.strip(),
        current_die=max_die if current_die is None else current_die,
        min_die=min_die,
        max_die=max_die,
        is_custom=True,
    )


def create_from_preset(name: str) -> ResourceDie:
    """Create a resource from its preset defaults."""
    try:
        preset = PRESET_RESOURCES[name]
    except KeyError:
        raise InvalidInputError(
            f"Unknown preset resource '{name}'. Known: {sorted(PRESET_RESOURCES)}"
        ) from None
    return ResourceDie(
        name=preset.name,
        current_die=preset.starting_die,
        min_die=preset.min_die,
        max_die=preset.max_die,
    )


def create_default_resources() -> list[ResourceDie]:
    """Resources every new character starts with (water and food)."""
    return [create_from_preset(name) for name in DEFAULT_RESOURCE_NAMES]
