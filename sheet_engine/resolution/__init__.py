"""Skill resolution module.

Skill catalogue, skill dice pool sizing and proficiency budget checks.
"""

from sheet_engine.resolution.proficiency_limits import (
    ProficiencyInfo,
    check_proficiency_budget,
    count_acquired,
    count_by_grade,
    max_proficiencies,
)
from sheet_engine.resolution.skill_data import (
    COMBAT_SKILLS,
    LOAD_SKILLS,
    PERCEPTION_SKILL,
    SKILLS,
    SkillDefinition,
    get_skill,
    resolve_key_attribute,
)
from sheet_engine.resolution.skill_pool import (
    SkillPool,
    SkillPoolInput,
    SkillSituation,
    calculate_skill,
    calculate_skill_pool,
    signature_bonus_for_level,
    situational_modifiers_for,
)

__all__ = [
    "COMBAT_SKILLS",
    "LOAD_SKILLS",
    "PERCEPTION_SKILL",
    "ProficiencyInfo",
    "SKILLS",
    "SkillDefinition",
    "SkillPool",
    "SkillPoolInput",
    "SkillSituation",
    "calculate_skill",
    "calculate_skill_pool",
    "check_proficiency_budget",
    "count_acquired",
    "count_by_grade",
    "get_skill",
    "max_proficiencies",
    "resolve_key_attribute",
    "signature_bonus_for_level",
    "situational_modifiers_for",
]
