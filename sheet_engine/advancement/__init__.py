"""Character advancement: XP, level up and progression checks."""

from sheet_engine.advancement.progression import (
    ARCHETYPE_FEATURE_LEVELS,
    COMPETENCE_LEVELS,
    POWER_OR_TALENT_LEVELS,
    ClassLevel,
    LevelUpPreview,
    ProgressionState,
    available_class_levels,
    can_have_classes,
    can_level_up,
    preview_level_up,
    remaining_xp,
    total_archetype_levels,
    validate_archetype_levels,
    validate_classes,
    validate_progression,
    xp_for_next_level,
)

__all__ = [
    "ARCHETYPE_FEATURE_LEVELS",
    "COMPETENCE_LEVELS",
    "POWER_OR_TALENT_LEVELS",
    "ClassLevel",
    "LevelUpPreview",
    "ProgressionState",
    "available_class_levels",
    "can_have_classes",
    "can_level_up",
    "preview_level_up",
    "remaining_xp",
    "total_archetype_levels",
    "validate_archetype_levels",
    "validate_classes",
    "validate_progression",
    "xp_for_next_level",
]
