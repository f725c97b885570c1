"""
Level progression.

Characters advance one level at a time once their XP reaches the table
requirement for their current level; XP beyond the requirement carries over.
Each new level goes to one archetype, and the sum of archetype levels should
match the character level. From level 3 a character can also take up to
three classes.

Policy problems (too many archetype levels, classes taken too early, ...)
are returned as diagnostics so an imported sheet still loads and shows them.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from sheet_engine.data_models import (
    Archetype,
    ArchetypeName,
    AttributeSet,
    ResourceKind,
)
from sheet_engine.derived.archetype_resources import level_gain
from sheet_engine.derived.vitals import calculate_vitality
from sheet_engine.diagnostics import Diagnostic, DiagnosticCode, InvalidInputError
from sheet_engine.rulesets import DEFAULT_RULESET, RulesetConfig, XpTable

logger = logging.getLogger(__name__)


# =============================================================================
# ARCHETYPE GRANTS
# =============================================================================


# Archetype levels that grant a power or talent
POWER_OR_TALENT_LEVELS: frozenset[int] = frozenset({2, 3, 4, 6, 7, 8, 9, 11, 12, 13, 14})

# Archetype levels that grant a competence
COMPETENCE_LEVELS: frozenset[int] = frozenset({5, 10, 15})

# Archetype levels that grant an archetype feature
ARCHETYPE_FEATURE_LEVELS: frozenset[int] = frozenset({1, 5, 10, 15})


# =============================================================================
# XP
# =============================================================================


def _table(xp_table: Optional[XpTable], ruleset: RulesetConfig) -> XpTable:
    return ruleset.xp_table if xp_table is None else xp_table


def xp_for_next_level(
    level: int,
    xp_table: Optional[XpTable] = None,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> int:
    """XP needed to go from `level` to `level + 1`."""
    return _table(xp_table, ruleset)(level)


def can_level_up(
    xp: int,
    level: int,
    xp_table: Optional[XpTable] = None,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> bool:
    """Whether the character has enough XP to advance from `level`."""
    return xp >= xp_for_next_level(level, xp_table, ruleset)


def remaining_xp(
    xp: int,
    level: int,
    xp_table: Optional[XpTable] = None,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> int:
    """XP left after advancing from `level`; the excess is kept."""
    return max(0, xp - xp_for_next_level(level, xp_table, ruleset))


@dataclass(frozen=True)
class ProgressionState:
    """A character's level and XP against an XP table."""
    current_level: int
    current_xp: int = 0
    xp_table: XpTable = field(default_factory=XpTable)

    def __post_init__(self):
        if self.current_level < 0:
            raise InvalidInputError(f"Character level cannot be negative ({self.current_level})")
        if self.current_xp < 0:
            raise InvalidInputError(f"XP cannot be negative ({self.current_xp})")

    @property
    def xp_to_next_level(self) -> int:
        return self.xp_table(self.current_level)

    @property
    def can_level_up(self) -> bool:
        return self.current_xp >= self.xp_to_next_level

    def level_up(self) -> "ProgressionState":
        """
        Advance one level, keeping excess XP.

        Raises:
            InvalidInputError: If there is not enough XP
        """
        if not self.can_level_up:
            raise InvalidInputError(
                f"Level {self.current_level} needs {self.xp_to_next_level} XP, "
                f"have {self.current_xp}"
            )
        return ProgressionState(
            current_level=self.current_level + 1,
            current_xp=self.current_xp - self.xp_to_next_level,
            xp_table=self.xp_table,
        )


# =============================================================================
# VALIDATION
# =============================================================================


@dataclass(frozen=True)
class ClassLevel:
    """Levels a character has in one class."""
    name: str
    level: int

    def __post_init__(self):
        if self.level < 0:
            raise InvalidInputError(f"Class {self.name} level cannot be negative ({self.level})")


def total_archetype_levels(archetypes: Iterable[Archetype]) -> int:
    return sum(a.level for a in archetypes)


def validate_archetype_levels(
    archetypes: Sequence[Archetype],
    character_level: int,
) -> list[Diagnostic]:
    """
    Check that archetype levels fit within the character level.

    Levels are never truncated; an over-distribution is reported so the
    sheet can still show the computed values.

    Args:
        archetypes: Archetypes the character has
        character_level: Character level

    Returns:
        List containing an OVER_DISTRIBUTED_LEVELS diagnostic, or empty

    Raises:
        InvalidInputError: If any level is negative
    """
    if character_level < 0:
        raise InvalidInputError(f"Character level cannot be negative ({character_level})")
    for arch in archetypes:
        if arch.level < 0:
            raise InvalidInputError(
                f"Archetype {ArchetypeName(arch.name).value} level cannot be negative ({arch.level})"
            )

    total = total_archetype_levels(archetypes)
    if total <= character_level:
        return []

    logger.warning(f"Archetype levels {total} exceed character level {character_level}")
    return [Diagnostic(
        code=DiagnosticCode.OVER_DISTRIBUTED_LEVELS,
        message=f"Archetype levels ({total}) exceed character level ({character_level})",
        details={"archetype_levels": total, "character_level": character_level},
    )]


def can_have_classes(character_level: int, ruleset: RulesetConfig = DEFAULT_RULESET) -> bool:
    return character_level >= ruleset.class_unlock_level


def available_class_levels(classes: Iterable[ClassLevel], character_level: int) -> int:
    """Class levels still free to assign."""
    return max(0, character_level - sum(c.level for c in classes))


def validate_classes(
    classes: Sequence[ClassLevel],
    character_level: int,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> list[Diagnostic]:
    """
    Check class choices against the unlock level, class count and character level.

    Returns:
        Diagnostics for every rule broken (empty when valid)
    """
    if not classes:
        return []

    diagnostics = []
    if character_level < ruleset.class_unlock_level:
        diagnostics.append(Diagnostic(
            code=DiagnosticCode.CLASSES_LOCKED,
            message=(
                f"Classes unlock at level {ruleset.class_unlock_level}; "
                f"character is level {character_level}"
            ),
            details={"character_level": character_level},
        ))
    if len(classes) > ruleset.max_classes:
        diagnostics.append(Diagnostic(
            code=DiagnosticCode.TOO_MANY_CLASSES,
            message=f"At most {ruleset.max_classes} classes, have {len(classes)}",
            details={"classes": len(classes)},
        ))
    total = sum(c.level for c in classes)
    if total > character_level:
        diagnostics.append(Diagnostic(
            code=DiagnosticCode.CLASS_LEVELS_EXCEED_CHARACTER,
            message=f"Class levels ({total}) exceed character level ({character_level})",
            details={"class_levels": total, "character_level": character_level},
        ))

    for diagnostic in diagnostics:
        logger.warning(str(diagnostic))
    return diagnostics


def validate_progression(
    archetypes: Sequence[Archetype],
    classes: Sequence[ClassLevel],
    character_level: int,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> list[Diagnostic]:
    """All progression diagnostics for a character."""
    return (
        validate_archetype_levels(archetypes, character_level)
        + validate_classes(classes, character_level, ruleset)
    )


# =============================================================================
# LEVEL UP PREVIEW
# =============================================================================


@dataclass(frozen=True)
class LevelUpPreview:
    """What the next level would give if spent on a given archetype."""
    archetype: ArchetypeName
    new_character_level: int
    new_archetype_level: int
    guard_gained: int
    power_gained: int
    new_guard_max: int
    new_power_max: int
    new_vitality_max: int
    remaining_xp: int
    grants_power_or_talent: bool
    grants_competence: bool
    grants_archetype_feature: bool
    unlocks_classes: bool


def preview_level_up(
    archetype_name: ArchetypeName,
    state: ProgressionState,
    archetypes: Sequence[Archetype],
    attributes: AttributeSet,
    guard_max: int,
    power_max: int,
    ruleset: RulesetConfig = DEFAULT_RULESET,
) -> LevelUpPreview:
    """
    Preview taking the next level in an archetype.

    Args:
        archetype_name: Archetype receiving the level
        state: Current level and XP
        archetypes: Archetypes the character already has
        attributes: Character attributes
        guard_max: Current guard maximum
        power_max: Current power maximum
        ruleset: Edition in use

    Returns:
        LevelUpPreview with resource gains and the grants the new
        archetype level brings
    """
    archetype_name = ArchetypeName(archetype_name)
    current = next((a.level for a in archetypes if a.name == archetype_name), 0)
    new_archetype_level = current + 1
    new_character_level = state.current_level + 1

    guard_gained = level_gain(archetype_name, ResourceKind.GUARD, attributes)
    power_gained = level_gain(archetype_name, ResourceKind.POWER, attributes)

    return LevelUpPreview(
        archetype=archetype_name,
        new_character_level=new_character_level,
        new_archetype_level=new_archetype_level,
        guard_gained=guard_gained,
        power_gained=power_gained,
        new_guard_max=guard_max + guard_gained,
        new_power_max=power_max + power_gained,
        new_vitality_max=calculate_vitality(guard_max + guard_gained),
        remaining_xp=max(0, state.current_xp - state.xp_to_next_level),
        grants_power_or_talent=new_archetype_level in POWER_OR_TALENT_LEVELS,
        grants_competence=new_archetype_level in COMPETENCE_LEVELS,
        grants_archetype_feature=new_archetype_level in ARCHETYPE_FEATURE_LEVELS,
        unlocks_classes=(
            state.current_level < ruleset.class_unlock_level <= new_character_level
        ),
    )
