"""
Edition parameters for the rules engine.

The source system shipped two divergent rulesets: the current dice-pool
edition, where proficiency picks the die size and successes are counted,
and the older d20 edition, where proficiency multiplies the attribute into a
flat bonus. Both are described here as data so the same engine code serves
either one.
"""

from dataclasses import dataclass, field
from typing import Mapping

from sheet_engine.data_models import (
    CreatureSize,
    DieScale,
    DieSize,
    ProficiencyGrade,
    SKILL_DIE_SCALE,
)
from sheet_engine.diagnostics import InvalidInputError


# =============================================================================
# SIZE TABLE
# =============================================================================


@dataclass(frozen=True)
class SizeProfile:
    """Size-dependent adjustments for a creature."""
    carry_multiplier: float = 1.0   # Applied to the strength-based base capacity
    carry_bonus: int = 0            # Added after the multiplier
    guard_bonus: int = 0
    # Dice added to specific skills (acrobatics, athletics, stealth, reflex, tenacity)
    skill_dice: Mapping[str, int] = field(default_factory=dict)


def _size_skill_dice(step: int) -> dict[str, int]:
    return {
        "acrobatics": step,
        "athletics": -step,
        "stealth": step,
        "reflex": step,
        "tenacity": -step,
    }


SIZE_PROFILES: dict[CreatureSize, SizeProfile] = {
    CreatureSize.TINY: SizeProfile(carry_bonus=-5, guard_bonus=3, skill_dice=_size_skill_dice(2)),
    CreatureSize.SMALL: SizeProfile(carry_bonus=-2, guard_bonus=2, skill_dice=_size_skill_dice(1)),
    CreatureSize.MEDIUM: SizeProfile(),
    CreatureSize.LARGE: SizeProfile(carry_bonus=2, guard_bonus=-2, skill_dice=_size_skill_dice(-1)),
    CreatureSize.HUGE: SizeProfile(carry_bonus=5, guard_bonus=-3, skill_dice=_size_skill_dice(-2)),
    CreatureSize.GARGANTUAN: SizeProfile(carry_bonus=10, guard_bonus=-5, skill_dice=_size_skill_dice(-3)),
}

# The d20 edition scaled capacity instead of adding to it
LEGACY_SIZE_PROFILES: dict[CreatureSize, SizeProfile] = {
    CreatureSize.TINY: SizeProfile(carry_multiplier=0.5),
    CreatureSize.SMALL: SizeProfile(carry_multiplier=0.75),
    CreatureSize.MEDIUM: SizeProfile(),
    CreatureSize.LARGE: SizeProfile(carry_multiplier=2.0),
    CreatureSize.HUGE: SizeProfile(carry_multiplier=4.0),
    CreatureSize.GARGANTUAN: SizeProfile(carry_multiplier=8.0),
}


# =============================================================================
# XP TABLE
# =============================================================================


# XP needed to advance from level N to N+1 (index 0 = level 0 -> 1)
XP_TABLE: tuple[int, ...] = (
    15, 50, 125, 250, 425, 650, 925, 1250, 1625, 2050,
    2500, 3050, 3625, 4250, 4925, 5650, 7710, 8700, 9750, 10860,
    12030, 13260, 14550, 15900, 17310, 18780, 20310, 21900, 23550, 25260,
    30000,
)

# Each level past the end of the table costs the previous one times this, floored
XP_OVERFLOW_MULTIPLIER = 1.07


@dataclass(frozen=True)
class XpTable:
    """
    XP needed to advance from each level to the next.

    Levels below zero use the first entry; levels past the end grow by the
    overflow multiplier per level, rounded down at every step.
    """
    entries: tuple[int, ...] = XP_TABLE
    overflow_multiplier: float = XP_OVERFLOW_MULTIPLIER

    def __post_init__(self):
        if not self.entries:
            raise InvalidInputError("XP table cannot be empty")
        if any(b < a for a, b in zip(self.entries, self.entries[1:])):
            raise InvalidInputError("XP table must be non-decreasing")
        if self.overflow_multiplier < 1:
            raise InvalidInputError("XP overflow multiplier must be at least 1")

    def __call__(self, level: int) -> int:
        return self.requirement(level)

    def requirement(self, level: int) -> int:
        """XP needed to go from `level` to `level + 1`."""
        if level < 0:
            return self.entries[0]
        if level < len(self.entries):
            return self.entries[level]
        xp = self.entries[-1]
        for _ in range(level - (len(self.entries) - 1)):
            xp = int(xp * self.overflow_multiplier)
        return xp


# =============================================================================
# RULESET
# =============================================================================


@dataclass(frozen=True)
class RulesetConfig:
    """
    All edition-specific constants consumed by the engine.

    Passed explicitly to every calculation; nothing is looked up from
    process-wide state.
    """
    name: str
    description: str = ""

    # Dice
    skill_die_scale: DieScale = SKILL_DIE_SCALE
    proficiency_dice: Mapping[ProficiencyGrade, DieSize] = field(default_factory=dict)
    proficiency_multipliers: Mapping[ProficiencyGrade, int] = field(default_factory=dict)
    success_threshold: int = 6          # A die succeeds on value >= threshold
    cancellation_value: int = 1         # A die cancels one success on exactly this value
    penalty_roll_dice: int = 2          # Penalty roll: roll this many, keep the lowest
    penalty_dice_from_deficit: bool = False     # Penalty roll rolls |pool| dice (at least 1) instead
    zero_attribute_dice: int = 0        # Attribute 0 rolls this many dice keeping the lowest (0 = off)
    keep_highest: bool = False          # Only the highest die of a normal pool counts
    # Situational modifiers and the signature bonus add to the result rather
    # than the pool; only modifiers marked affects_dice change the dice count
    flat_situational_modifiers: bool = False

    # Attributes
    attribute_soft_cap: int = 5
    attribute_hard_cap: int = 6

    # Situational dice penalties
    load_penalty: int = -2
    armor_penalty: int = -1
    missing_instrument_penalty: int = -2
    missing_proficiency_penalty: int = -2
    overloaded_sense_penalty: int = -2

    # Signature skill bonus dice: min(cap, ceil(level / step))
    signature_bonus_cap: int = 3
    signature_bonus_step: int = 5

    # Proficiency budget: base + mind
    base_proficiencies: int = 3

    # Carry capacity: base + strength * per_strength
    carry_base: int = 5
    carry_per_strength: int = 5
    coins_per_weight: int = 100
    zero_weight_items_per_weight: int = 5
    overloaded_at: float = 1.0          # Load above capacity * this is overloaded
    immobilized_at: float = 2.0         # Load above capacity * this is immobilized
    size_profiles: Mapping[CreatureSize, SizeProfile] = field(
        default_factory=lambda: dict(SIZE_PROFILES)
    )

    # Progression
    xp_table: XpTable = field(default_factory=XpTable)
    class_unlock_level: int = 3
    max_classes: int = 3

    def size_profile(self, size: CreatureSize) -> SizeProfile:
        return self.size_profiles.get(size, SizeProfile())

    @property
    def uses_multipliers(self) -> bool:
        """Whether proficiency feeds a flat bonus rather than only a die size."""
        return any(self.proficiency_multipliers.values())


DICE_POOL_RULESET = RulesetConfig(
    name="dice_pool",
    description="Dice-pool edition: proficiency sets the die, successes are counted",
    proficiency_dice={
        ProficiencyGrade.UNTRAINED: DieSize.D6,
        ProficiencyGrade.ADEPT: DieSize.D8,
        ProficiencyGrade.VERSED: DieSize.D10,
        ProficiencyGrade.MASTER: DieSize.D12,
    },
)

LEGACY_D20_RULESET = RulesetConfig(
    name="legacy_d20",
    description="d20 edition: attribute x proficiency multiplier as a flat bonus",
    skill_die_scale=DieScale((DieSize.D20,)),
    proficiency_dice={grade: DieSize.D20 for grade in ProficiencyGrade},
    proficiency_multipliers={
        ProficiencyGrade.UNTRAINED: 0,
        ProficiencyGrade.ADEPT: 1,
        ProficiencyGrade.VERSED: 2,
        ProficiencyGrade.MASTER: 3,
    },
    success_threshold=20,
    cancellation_value=1,
    penalty_dice_from_deficit=True,
    zero_attribute_dice=2,
    keep_highest=True,
    flat_situational_modifiers=True,
    attribute_soft_cap=5,
    attribute_hard_cap=6,
    load_penalty=-5,
    armor_penalty=-2,
    missing_instrument_penalty=-5,
    missing_proficiency_penalty=-5,
    overloaded_sense_penalty=-5,
    size_profiles=dict(LEGACY_SIZE_PROFILES),
)

DEFAULT_RULESET = DICE_POOL_RULESET
