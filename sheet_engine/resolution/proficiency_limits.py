"""
Proficiency budget.

A character may be trained (adept or better) in at most
base_proficiencies + mind skills. Exceeding the budget is reported, not
refused, so an imported sheet still loads.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping

from sheet_engine.data_models import PROFICIENCY_ORDER, ProficiencyGrade
from sheet_engine.diagnostics import Diagnostic, DiagnosticCode
from sheet_engine.rulesets import DEFAULT_RULESET, RulesetConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProficiencyInfo:
    """Budget summary for the proficiency panel."""
    maximum: int
    acquired: int
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def remaining(self) -> int:
        return max(0, self.maximum - self.acquired)

    @property
    def can_add(self) -> bool:
        return self.acquired < self.maximum

    @property
    def is_valid(self) -> bool:
        return self.acquired <= self.maximum


def max_proficiencies(mind: int, ruleset: RulesetConfig = DEFAULT_RULESET) -> int:
    """Number of skills a character may be trained in."""
    return ruleset.base_proficiencies + max(0, mind)


def count_acquired(grades: Mapping[str, ProficiencyGrade]) -> int:
    """Count skills above untrained."""
    return sum(1 for g in grades.values() if ProficiencyGrade(g) != ProficiencyGrade.UNTRAINED)


def count_by_grade(grades: Mapping[str, ProficiencyGrade]) -> dict[ProficiencyGrade, int]:
    counts = {grade: 0 for grade in PROFICIENCY_ORDER}
    for grade in grades.values():
        counts[ProficiencyGrade(grade)] += 1
    return counts


def check_proficiency_budget(
    grades: Mapping[str, ProficiencyGrade],
    mind: int,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> ProficiencyInfo:
    """
    Compare trained skills against the budget.

    Args:
        grades: Skill id -> grade
        mind: Character's mind attribute
        ruleset: Edition supplying the base budget

    Returns:
        ProficiencyInfo; carries a PROFICIENCY_LIMIT_EXCEEDED diagnostic when
        more skills are trained than allowed
    """
    maximum = max_proficiencies(mind, ruleset)
    acquired = count_acquired(grades)
    diagnostics = []
    if acquired > maximum:
        logger.warning(f"{acquired} proficiencies exceed the limit of {maximum}")
        diagnostics.append(Diagnostic(
            code=DiagnosticCode.PROFICIENCY_LIMIT_EXCEEDED,
            message=f"{acquired} trained skills, limit is {maximum}",
            details={"acquired": acquired, "maximum": maximum},
        ))
    return ProficiencyInfo(maximum=maximum, acquired=acquired, diagnostics=diagnostics)
