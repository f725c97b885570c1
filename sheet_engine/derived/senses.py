"""
Sense pools.

Seeing, listening and smelling are uses of the perception skill. Each one is
sized like any other skill pool, plus the bonus dice of a matching keen
sense. Being overloaded adds one load penalty to every sense.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from sheet_engine.data_models import (
    AttributeName,
    AttributeSet,
    KeenSense,
    ModifierReason,
    ProficiencyGrade,
    SenseType,
    SituationalModifier,
)
from sheet_engine.resolution.skill_data import PERCEPTION_SKILL, get_skill, resolve_key_attribute
from sheet_engine.resolution.skill_pool import (
    SkillPool,
    SkillPoolInput,
    calculate_skill_pool,
    signature_bonus_for_level,
)
from sheet_engine.rulesets import DEFAULT_RULESET, RulesetConfig

logger = logging.getLogger(__name__)

# Perception use -> sense it relies on
SENSE_USES: dict[str, SenseType] = {
    "observe": SenseType.VISION,
    "listen": SenseType.HEARING,
    "smell": SenseType.SMELL,
}


@dataclass(frozen=True)
class SensePool:
    """Pool for one sense."""
    sense: SenseType
    use_name: str
    keen_sense_bonus: int
    pool: SkillPool

    @property
    def formula(self) -> str:
        return self.pool.formula


def keen_sense_bonus(keen_senses: Iterable[KeenSense], sense: SenseType) -> int:
    """Bonus dice from the first keen sense matching the sense type."""
    for keen in keen_senses:
        if keen.sense == sense:
            return keen.bonus
    return 0


def calculate_sense_pool(
    sense: SenseType,
    attributes: AttributeSet,
    grade: ProficiencyGrade = ProficiencyGrade.UNTRAINED,
    keen_senses: Sequence[KeenSense] = (),
    overloaded: bool = False,
    ruleset: RulesetConfig = DEFAULT_RULESET,
    character_level: int = 0,
    is_signature: bool = False,
    extra_modifiers: Sequence[SituationalModifier] = (),
    key_attribute: Optional[AttributeName] = None,
) -> SensePool:
    """
    Size the pool for one sense.

    Args:
        sense: Vision, hearing or smell
        attributes: Character attributes
        grade: Perception grade
        keen_senses: Lineage keen senses
        overloaded: Whether the character is overloaded
        ruleset: Edition in use
        character_level: Used for the signature bonus
        is_signature: Whether perception is the signature skill
        extra_modifiers: Further modifiers for this sense
        key_attribute: Attribute override for this use

    Returns:
        SensePool wrapping the resulting skill pool
    """
    sense = SenseType(sense)
    perception = get_skill(PERCEPTION_SKILL)
    attribute = resolve_key_attribute(perception, key_attribute)

    modifiers = list(extra_modifiers)
    bonus = keen_sense_bonus(keen_senses, sense)
    if bonus:
        modifiers.append(SituationalModifier(bonus, ModifierReason.KEEN_SENSE, f"Keen {sense.value}"))
    if overloaded:
        modifiers.append(SituationalModifier(ruleset.overloaded_sense_penalty, ModifierReason.LOAD, "Overloaded"))

    pool = calculate_skill_pool(
        SkillPoolInput(
            attribute_value=attributes.get(attribute),
            grade=ProficiencyGrade(grade),
            signature_bonus=signature_bonus_for_level(character_level, ruleset) if is_signature else 0,
            situational_modifiers=tuple(modifiers),
        ),
        ruleset,
    )
    use_name = next(name for name, s in SENSE_USES.items() if s == sense)
    return SensePool(sense=sense, use_name=use_name, keen_sense_bonus=bonus, pool=pool)


def calculate_all_senses(
    attributes: AttributeSet,
    grade: ProficiencyGrade = ProficiencyGrade.UNTRAINED,
    keen_senses: Sequence[KeenSense] = (),
    overloaded: bool = False,
    ruleset: RulesetConfig = DEFAULT_RULESET,
    character_level: int = 0,
    is_signature: bool = False,
) -> dict[SenseType, SensePool]:
    """Pools for vision, hearing and smell."""
    return {
        sense: calculate_sense_pool(
            sense,
            attributes,
            grade=grade,
            keen_senses=keen_senses,
            overloaded=overloaded,
            ruleset=ruleset,
            character_level=character_level,
            is_signature=is_signature,
        )
        for sense in SenseType
    }
