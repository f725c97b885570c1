"""
Pytest fixtures for the character sheet engine test suite.

Provides rulesets, attribute snapshots, archetypes and seeded dice rollers.
"""

import pytest

from sheet_engine.data_models import ArchetypeName, AttributeSet
from sheet_engine.derived.archetype_resources import archetype
from sheet_engine.dice.roller import DiceRoller
from sheet_engine.rulesets import DICE_POOL_RULESET, LEGACY_D20_RULESET


# =============================================================================
# RULESET FIXTURES
# =============================================================================


@pytest.fixture
def ruleset():
    """Current dice-pool edition."""
    return DICE_POOL_RULESET


@pytest.fixture
def legacy_ruleset():
    """Older d20 edition."""
    return LEGACY_D20_RULESET


# =============================================================================
# DICE FIXTURES
# =============================================================================


@pytest.fixture
def seeded_dice():
    """Provide a seeded DiceRoller for reproducible tests."""
    return DiceRoller(seed=42)


@pytest.fixture
def clean_dice():
    """Provide a DiceRoller without a seed."""
    return DiceRoller()


# =============================================================================
# CHARACTER FIXTURES
# =============================================================================


@pytest.fixture
def attributes():
    """A typical starting character."""
    return AttributeSet(
        agility=2,
        constitution=3,
        strength=2,
        influence=1,
        mind=2,
        presence=1,
    )


@pytest.fixture
def weak_attributes():
    """A character with several zero attributes."""
    return AttributeSet(
        agility=0,
        constitution=1,
        strength=0,
        influence=0,
        mind=1,
        presence=0,
    )


@pytest.fixture
def combatant_rogue():
    """Level 3 combatant / level 2 rogue."""
    return [
        archetype(ArchetypeName.COMBATANT, 3),
        archetype(ArchetypeName.ROGUE, 2),
    ]
