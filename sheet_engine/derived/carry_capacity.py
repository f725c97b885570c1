"""
Carry capacity, load and encumbrance.

Capacity grows with strength and is adjusted by creature size. Load is the
weight of carried items plus physical coins. Comparing load against
capacity gives the encumbrance state: normal up to capacity, overloaded up
to twice capacity, immobilized beyond that.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional

from sheet_engine.data_models import CreatureSize, EncumbranceState
from sheet_engine.diagnostics import InvalidInputError
from sheet_engine.rulesets import DEFAULT_RULESET, RulesetConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CarriedItem:
    """An inventory line as far as load is concerned."""
    name: str
    weight: Optional[float] = 1    # None = weightless; 0 = light (5 of them weigh 1)
    quantity: int = 1
    equipped: bool = False


@dataclass(frozen=True)
class CarryCapacity:
    """Capacity figures shown on the inventory panel."""
    base: int
    size_multiplier: float
    size_bonus: int
    other_modifiers: int
    total: int
    push_limit: int
    lift_limit: int


@dataclass(frozen=True)
class LoadStatus:
    """Current load measured against capacity."""
    capacity: int
    load: float
    state: EncumbranceState
    percentage: int

    @property
    def is_overloaded(self) -> bool:
        return self.state == EncumbranceState.OVERLOADED

    @property
    def is_immobilized(self) -> bool:
        return self.state == EncumbranceState.IMMOBILIZED


# =============================================================================
# CAPACITY
# =============================================================================


def base_carry_capacity(strength: int, ruleset: RulesetConfig = DEFAULT_RULESET) -> int:
    """Base capacity before size: carry_base + carry_per_strength * strength."""
    return ruleset.carry_base + ruleset.carry_per_strength * strength


def calculate_carry_capacity(
    strength: int,
    size: CreatureSize = CreatureSize.MEDIUM,
    other_modifiers: int = 0,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> CarryCapacity:
    """
    Calculate carry capacity for a character.

    Args:
        strength: Strength attribute
        size: Creature size
        other_modifiers: Bonuses or penalties from items and features
        ruleset: Edition supplying the formula constants and size table

    Returns:
        CarryCapacity; total is floor(base * multiplier + size bonus + other),
        never below 0
    """
    base = base_carry_capacity(strength, ruleset)
    profile = ruleset.size_profile(size)
    total = max(0, math.floor(base * profile.carry_multiplier + profile.carry_bonus + other_modifiers))
    return CarryCapacity(
        base=base,
        size_multiplier=profile.carry_multiplier,
        size_bonus=profile.carry_bonus,
        other_modifiers=other_modifiers,
        total=total,
        push_limit=push_capacity(strength),
        lift_limit=lift_capacity(strength),
    )


def push_capacity(strength: int) -> int:
    return max(5, 10 * strength)


def lift_capacity(strength: int) -> int:
    return max(2, 5 * strength)


# =============================================================================
# LOAD
# =============================================================================


def coin_weight(physical_coins: int, ruleset: RulesetConfig = DEFAULT_RULESET) -> int:
    """
    Weight of coins carried on the person; banked coins weigh nothing.

    Raises:
        InvalidInputError: If the coin count is negative
    """
    if physical_coins < 0:
        raise InvalidInputError(f"Coin count cannot be negative ({physical_coins})")
    return physical_coins // ruleset.coins_per_weight


def items_weight(
    items: Iterable[CarriedItem],
    include_equipped: bool = True,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> float:
    """
    Total weight of carried items.

    Items with weight None are ignored. Weight-0 items are counted and every
    full group of five weighs 1. Negative weights (containers that lighten
    the load) subtract.
    """
    total = 0
    light_count = 0
    for item in items:
        if not include_equipped and item.equipped:
            continue
        if item.weight is None:
            continue
        if item.weight == 0:
            light_count += item.quantity
            continue
        total += item.weight * item.quantity
    return total + light_count // ruleset.zero_weight_items_per_weight


def total_load(
    items: Iterable[CarriedItem],
    physical_coins: int = 0,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> float:
    return items_weight(items, ruleset=ruleset) + coin_weight(physical_coins, ruleset)


# =============================================================================
# ENCUMBRANCE
# =============================================================================


def encumbrance_state(
    load: float,
    capacity: int,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> EncumbranceState:
    """
    Classify a load against capacity.

    A capacity of 0 or less immobilizes on any positive load.
    """
    if capacity <= 0:
        return EncumbranceState.IMMOBILIZED if load > 0 else EncumbranceState.NORMAL
    if load <= capacity * ruleset.overloaded_at:
        return EncumbranceState.NORMAL
    if load <= capacity * ruleset.immobilized_at:
        return EncumbranceState.OVERLOADED
    return EncumbranceState.IMMOBILIZED


def load_percentage(load: float, capacity: int) -> int:
    """Load as a rounded percentage of capacity."""
    if capacity <= 0:
        return 100 if load > 0 else 0
    return round(load / capacity * 100)


def calculate_load_status(
    capacity: int,
    items: Iterable[CarriedItem] = (),
    physical_coins: int = 0,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> LoadStatus:
    """Measure the current load against a capacity."""
    load = total_load(items, physical_coins, ruleset)
    state = encumbrance_state(load, capacity, ruleset)
    if state != EncumbranceState.NORMAL:
        logger.debug(f"Load {load}/{capacity}: {state.value}")
    return LoadStatus(
        capacity=capacity,
        load=load,
        state=state,
        percentage=load_percentage(load, capacity),
    )


def can_carry_without_penalty(
    current_load: float,
    additional: float,
    capacity: int,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> bool:
    return current_load + additional <= capacity * ruleset.overloaded_at


def can_carry_at_all(
    current_load: float,
    additional: float,
    capacity: int,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> bool:
    return current_load + additional <= capacity * ruleset.immobilized_at
