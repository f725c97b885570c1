"""
Edition rulesets for the character sheet engine.

Each edition is a frozen RulesetConfig passed explicitly into every
calculation.
"""

from sheet_engine.diagnostics import InvalidInputError
from sheet_engine.rulesets.ruleset_data import (
    DEFAULT_RULESET,
    DICE_POOL_RULESET,
    LEGACY_D20_RULESET,
    LEGACY_SIZE_PROFILES,
    SIZE_PROFILES,
    XP_OVERFLOW_MULTIPLIER,
    XP_TABLE,
    RulesetConfig,
    SizeProfile,
    XpTable,
)

RULESETS: dict[str, RulesetConfig] = {
    DICE_POOL_RULESET.name: DICE_POOL_RULESET,
    LEGACY_D20_RULESET.name: LEGACY_D20_RULESET,
}


def get_ruleset(name: str) -> RulesetConfig:
    """
    Look up an edition by name.

    Raises:
        InvalidInputError: If no edition has that name
    """
    try:
        return RULESETS[name]
    except KeyError:
        raise InvalidInputError(
            f"Unknown ruleset '{name}'. Known: {sorted(RULESETS)}"
        ) from None


__all__ = [
    "DEFAULT_RULESET",
    "DICE_POOL_RULESET",
    "LEGACY_D20_RULESET",
    "LEGACY_SIZE_PROFILES",
    "RULESETS",
    "SIZE_PROFILES",
    "XP_OVERFLOW_MULTIPLIER",
    "XP_TABLE",
    "RulesetConfig",
    "SizeProfile",
    "XpTable",
    "get_ruleset",
]
