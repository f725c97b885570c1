"""Dice model, resource and durability dice, pool resolution and the caller-owned roller."""

from sheet_engine.dice.dice_pool import (
    DicePoolRollResult,
    is_penalty_pool,
    penalty_dice_count,
    pool_die,
    render_formula,
    resolve_pool,
    roll_pool,
    rolled_dice_count,
)
from sheet_engine.dice.die_model import (
    DICE_STEPS,
    DiceStep,
    compare_dice,
    die_size_for,
    find_dice_step,
    format_dice_step,
    get_dice_step,
    proficiency_multiplier,
    step_dice,
    step_down,
    step_up,
)
from sheet_engine.dice.durability import (
    DURABILITY_DIE_OPTIONS,
    DurabilityCheckResult,
    DurabilityState,
    ItemDurability,
    VulnerabilityDie,
    VulnerabilityResult,
    create_item_durability,
)
from sheet_engine.dice.resource_die import (
    DEFAULT_RESOURCE_NAMES,
    PRESET_RESOURCES,
    PresetResource,
    ResourceDie,
    ResourceUseResult,
    create_default_resources,
    create_from_preset,
    create_resource_die,
)
from sheet_engine.dice.roller import DiceResult, DiceRoller

__all__ = [
    "DEFAULT_RESOURCE_NAMES",
    "DICE_STEPS",
    "DURABILITY_DIE_OPTIONS",
    "DicePoolRollResult",
    "DiceResult",
    "DiceRoller",
    "DiceStep",
    "DurabilityCheckResult",
    "DurabilityState",
    "ItemDurability",
    "PRESET_RESOURCES",
    "PresetResource",
    "ResourceDie",
    "ResourceUseResult",
    "VulnerabilityDie",
    "VulnerabilityResult",
    "compare_dice",
    "create_default_resources",
    "create_from_preset",
    "create_item_durability",
    "create_resource_die",
    "die_size_for",
    "find_dice_step",
    "format_dice_step",
    "get_dice_step",
    "is_penalty_pool",
    "penalty_dice_count",
    "pool_die",
    "proficiency_multiplier",
    "render_formula",
    "resolve_pool",
    "roll_pool",
    "rolled_dice_count",
    "step_dice",
    "step_down",
    "step_up",
]
