"""
Skill dice pool calculation.

Turns an attribute value, a proficiency grade and a set of tagged dice
modifiers into the pool a player rolls:

    die_size          = die for the proficiency grade
    total_modifier    = signature bonus + sum of situational modifiers
    total_dice_count  = attribute value + total_modifier
    is_penalty_roll   = total_dice_count <= 0

The pool size is never clamped; a pool at or below zero is resolved as a
penalty roll by the dice pool resolver.

In the d20 edition situational modifiers and the signature bonus are flat:
they join attribute x multiplier in flat_bonus, and only modifiers marked
affects_dice change the dice count. An attribute of 0 rolls two dice and
keeps the lowest.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from sheet_engine.data_models import (
    AttributeName,
    AttributeSet,
    CreatureSize,
    DieSize,
    ModifierReason,
    ProficiencyGrade,
    SituationalModifier,
)
from sheet_engine.diagnostics import InvalidInputError
from sheet_engine.dice.dice_pool import is_penalty_pool, render_formula, roll_pool
from sheet_engine.dice.die_model import die_size_for, proficiency_multiplier
from sheet_engine.dice.roller import DiceRoller
from sheet_engine.resolution.skill_data import (
    SkillDefinition,
    get_skill,
    resolve_key_attribute,
)
from sheet_engine.rulesets import DEFAULT_RULESET, RulesetConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkillPoolInput:
    """Everything needed to size one skill pool."""
    attribute_value: int
    grade: ProficiencyGrade = ProficiencyGrade.UNTRAINED
    signature_bonus: int = 0
    situational_modifiers: tuple[SituationalModifier, ...] = ()

    def __post_init__(self):
        if isinstance(self.attribute_value, bool) or not isinstance(self.attribute_value, int):
            raise InvalidInputError(f"Attribute value must be an integer, got {self.attribute_value!r}")
        if self.attribute_value < 0:
            raise InvalidInputError(f"Attribute value cannot be negative ({self.attribute_value})")
        if self.signature_bonus < 0:
            raise InvalidInputError(f"Signature bonus cannot be negative ({self.signature_bonus})")
        # Accept lists and plain strings from callers
        object.__setattr__(self, "grade", ProficiencyGrade(self.grade))
        object.__setattr__(self, "situational_modifiers", tuple(self.situational_modifiers))


@dataclass(frozen=True)
class SkillPool:
    """A sized skill pool, ready to roll."""
    die_size: DieSize
    total_dice_count: int
    total_dice_modifier: int
    is_penalty_roll: bool
    formula: str
    attribute_value: int = 0
    grade: ProficiencyGrade = ProficiencyGrade.UNTRAINED
    signature_bonus: int = 0
    flat_bonus: int = 0             # attribute x multiplier + flat modifiers (d20 edition only)
    modifiers_by_reason: dict[ModifierReason, int] = field(default_factory=dict)
    take_lowest: bool = False       # d20 edition: attribute 0 keeps the lowest die

    def roll(self, roller: DiceRoller, ruleset: RulesetConfig = DEFAULT_RULESET, reason: str = ""):
        """Roll this pool with a caller-owned roller."""
        return roll_pool(
            self.total_dice_count,
            self.die_size,
            roller,
            ruleset,
            flat_bonus=self.flat_bonus,
            reason=reason,
            take_lowest=self.take_lowest,
        )


# =============================================================================
# POOL SIZING
# =============================================================================


def calculate_skill_pool(
    pool_input: SkillPoolInput,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> SkillPool:
    """
    Size a skill pool.

    Args:
        pool_input: Attribute value, grade, signature bonus and modifiers
        ruleset: Edition supplying the grade -> die mapping

    Returns:
        SkillPool with the die, count, penalty flag and formula
    """
    die_size = die_size_for(pool_input.grade, ruleset)
    flat_modifiers = ruleset.flat_situational_modifiers

    by_reason: dict[ModifierReason, int] = {}
    dice_modifier = 0
    flat_modifier = 0
    for modifier in pool_input.situational_modifiers:
        by_reason[modifier.reason] = by_reason.get(modifier.reason, 0) + modifier.value
        if flat_modifiers and not modifier.affects_dice:
            flat_modifier += modifier.value
        else:
            dice_modifier += modifier.value

    if flat_modifiers:
        flat_modifier += pool_input.signature_bonus
    else:
        dice_modifier += pool_input.signature_bonus

    base_count = pool_input.attribute_value
    take_lowest = False
    if pool_input.attribute_value == 0 and ruleset.zero_attribute_dice:
        base_count = ruleset.zero_attribute_dice
        take_lowest = True

    total_count = base_count + dice_modifier
    flat_bonus = (
        pool_input.attribute_value * proficiency_multiplier(pool_input.grade, ruleset)
        + flat_modifier
    )

    pool = SkillPool(
        die_size=die_size,
        total_dice_count=total_count,
        total_dice_modifier=dice_modifier,
        is_penalty_roll=take_lowest or is_penalty_pool(total_count),
        formula=render_formula(total_count, die_size, ruleset, flat_bonus, take_lowest),
        attribute_value=pool_input.attribute_value,
        grade=pool_input.grade,
        signature_bonus=pool_input.signature_bonus,
        flat_bonus=flat_bonus,
        modifiers_by_reason=by_reason,
        take_lowest=take_lowest,
    )
    logger.debug(
        f"Skill pool: attr {pool_input.attribute_value} {pool_input.grade.value} "
        f"dice {dice_modifier:+d} flat {flat_bonus:+d} -> {pool.formula}"
    )
    return pool


def signature_bonus_for_level(
    character_level: int,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> int:
    """Bonus dice on the signature skill: min(cap, ceil(level / step))."""
    if character_level <= 0:
        return 0
    return min(
        ruleset.signature_bonus_cap,
        math.ceil(character_level / ruleset.signature_bonus_step),
    )


# =============================================================================
# SITUATIONAL MODIFIERS
# =============================================================================


@dataclass(frozen=True)
class SkillSituation:
    """Circumstances of a test that may add penalty dice."""
    overloaded: bool = False
    armor_penalty: bool = False         # Wearing armor that hinders load skills
    has_instrument: bool = True
    size: CreatureSize = CreatureSize.MEDIUM


def situational_modifiers_for(
    skill: SkillDefinition,
    grade: ProficiencyGrade,
    situation: Optional[SkillSituation] = None,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> list[SituationalModifier]:
    """
    Build the tagged modifiers a situation imposes on one skill.

    Args:
        skill: Skill being tested
        grade: Character's grade in the skill
        situation: Load, armor, instrument and size circumstances
        ruleset: Edition supplying the penalty sizes and size table

    Returns:
        List of SituationalModifier, one per applicable reason
    """
    situation = situation or SkillSituation()
    modifiers: list[SituationalModifier] = []

    if situation.overloaded and skill.has_load_penalty:
        modifiers.append(SituationalModifier(ruleset.load_penalty, ModifierReason.LOAD, "Overloaded"))
    if situation.armor_penalty and skill.has_load_penalty:
        modifiers.append(SituationalModifier(ruleset.armor_penalty, ModifierReason.ARMOR, "Armor"))
    if skill.requires_instrument and not situation.has_instrument:
        modifiers.append(SituationalModifier(
            ruleset.missing_instrument_penalty,
            ModifierReason.MISSING_INSTRUMENT,
            "No instrument",
        ))
    if skill.requires_proficiency and ProficiencyGrade(grade) == ProficiencyGrade.UNTRAINED:
        modifiers.append(SituationalModifier(
            ruleset.missing_proficiency_penalty,
            ModifierReason.MISSING_PROFICIENCY,
            "Untrained",
        ))

    size_dice = ruleset.size_profile(situation.size).skill_dice.get(skill.skill_id, 0)
    if size_dice:
        modifiers.append(SituationalModifier(size_dice, ModifierReason.SIZE, situation.size.value.title()))

    return modifiers


def calculate_skill(
    skill_id: str,
    attributes: AttributeSet,
    grade: ProficiencyGrade = ProficiencyGrade.UNTRAINED,
    ruleset: RulesetConfig = DEFAULT_RULESET,
    character_level: int = 0,
    is_signature: bool = False,
    situation: Optional[SkillSituation] = None,
    extra_modifiers: Sequence[SituationalModifier] = (),
    key_attribute: Optional[AttributeName] = None,
) -> SkillPool:
    """
    Size the pool for a catalogue skill from a character snapshot.

    Args:
        skill_id: Catalogue id (e.g. "stealth")
        attributes: Character attributes
        grade: Character's grade in the skill
        ruleset: Edition in use
        character_level: Used for the signature bonus
        is_signature: Whether this is the character's signature skill
        situation: Circumstances that may add penalty dice
        extra_modifiers: Further modifiers from items, spells or conditions
        key_attribute: Attribute override (required for craft and luck)
    """
    skill = get_skill(skill_id)
    attribute = resolve_key_attribute(skill, key_attribute)
    modifiers = situational_modifiers_for(skill, grade, situation, ruleset)
    modifiers.extend(extra_modifiers)
    signature = signature_bonus_for_level(character_level, ruleset) if is_signature else 0

    return calculate_skill_pool(
        SkillPoolInput(
            attribute_value=attributes.get(attribute),
            grade=ProficiencyGrade(grade),
            signature_bonus=signature,
            situational_modifiers=tuple(modifiers),
        ),
        ruleset,
    )
