"""
Unit tests for archetype-driven resource totals.
"""

import pytest

from sheet_engine.data_models import (
    Archetype,
    ArchetypeName,
    AttributeName,
    AttributeSet,
    ResourceKind,
)
from sheet_engine.derived.archetype_resources import (
    ARCHETYPE_PROFILES,
    archetype,
    calculate_resource_breakdown,
    calculate_resource_total,
    level_gain,
)
from sheet_engine.diagnostics import InvalidInputError


class TestResourceAggregation:
    """Tests for summing archetype contributions."""

    def test_two_archetypes(self):
        """(2, base 0, attr 4) + (3, base 5, attr 2) = 8 + 21 = 29."""
        attrs = AttributeSet(mind=4, constitution=2)
        archetypes = [
            Archetype(
                ArchetypeName.ACADEMIC, 2, AttributeName.MIND,
                base_per_level={ResourceKind.GUARD: 0},
            ),
            Archetype(
                ArchetypeName.COMBATANT, 3, AttributeName.CONSTITUTION,
                base_per_level={ResourceKind.GUARD: 5},
            ),
        ]
        breakdown = calculate_resource_breakdown(ResourceKind.GUARD, archetypes, attrs)
        assert breakdown.total == 29
        assert [c.total for c in breakdown.contributions] == [8, 21]
        assert breakdown.contribution_for(ArchetypeName.ACADEMIC).attribute_contribution == 8
        assert calculate_resource_total(ResourceKind.GUARD, archetypes, attrs) == 29

    def test_zero_level_skipped(self, attributes):
        """Archetypes at level 0 contribute nothing and are not listed."""
        archetypes = [archetype(ArchetypeName.SORCERER, 0), archetype(ArchetypeName.ROGUE, 1)]
        breakdown = calculate_resource_breakdown(ResourceKind.POWER, archetypes, attributes)
        assert [c.name for c in breakdown.contributions] == [ArchetypeName.ROGUE]
        assert breakdown.contribution_for(ArchetypeName.SORCERER) is None

    def test_no_archetypes(self, attributes):
        breakdown = calculate_resource_breakdown(ResourceKind.GUARD, [], attributes)
        assert breakdown.total == 0
        assert breakdown.contributions == []

    def test_resource_attribute_override(self, attributes, combatant_rogue):
        """Guard scales with constitution and power with presence."""
        guard = calculate_resource_breakdown(ResourceKind.GUARD, combatant_rogue, attributes)
        power = calculate_resource_breakdown(ResourceKind.POWER, combatant_rogue, attributes)
        assert {c.attribute for c in guard.contributions} == {AttributeName.CONSTITUTION}
        assert {c.attribute for c in power.contributions} == {AttributeName.PRESENCE}
        # combatant 3 * (5 + 3) + rogue 2 * (4 + 3)
        assert guard.total == 38
        # combatant 3 * (1 + 1) + rogue 2 * (2 + 1)
        assert power.total == 12

    @pytest.mark.parametrize("levels", [(1, 0, 0), (2, 3, 0), (5, 1, 4), (0, 0, 7)])
    @pytest.mark.parametrize("resource", list(ResourceKind))
    def test_breakdown_sums_to_total(self, attributes, levels, resource):
        """The breakdown always adds up to the aggregate."""
        names = [ArchetypeName.ACADEMIC, ArchetypeName.NATURAL, ArchetypeName.ACOLYTE]
        archetypes = [archetype(n, lvl) for n, lvl in zip(names, levels)]
        breakdown = calculate_resource_breakdown(resource, archetypes, attributes)
        assert sum(c.total for c in breakdown.contributions) == breakdown.total


class TestArchetypeCatalogue:
    """Tests for archetype data."""

    @pytest.mark.parametrize("name,guard,power", [
        (ArchetypeName.COMBATANT, 5, 1),
        (ArchetypeName.ROGUE, 4, 2),
        (ArchetypeName.NATURAL, 3, 3),
        (ArchetypeName.ACOLYTE, 3, 3),
        (ArchetypeName.ACADEMIC, 2, 4),
        (ArchetypeName.SORCERER, 1, 5),
    ])
    def test_per_level_bases(self, name, guard, power):
        arch = archetype(name, 1)
        assert arch.base_for(ResourceKind.GUARD) == guard
        assert arch.base_for(ResourceKind.POWER) == power

    def test_all_archetypes_present(self):
        assert set(ARCHETYPE_PROFILES) == set(ArchetypeName)

    def test_unknown_archetype(self):
        with pytest.raises(InvalidInputError):
            archetype("bard", 1)

    def test_negative_level(self):
        with pytest.raises(InvalidInputError):
            archetype(ArchetypeName.ROGUE, -1)

    @pytest.mark.parametrize("level", [1.5, "2", True, None])
    def test_non_integer_level(self, level):
        with pytest.raises(InvalidInputError):
            Archetype(ArchetypeName.ROGUE, level, AttributeName.AGILITY)
        with pytest.raises(InvalidInputError):
            archetype(ArchetypeName.ROGUE, level)

    def test_level_gain(self, attributes):
        """One more combatant level adds 5 + constitution guard."""
        assert level_gain(ArchetypeName.COMBATANT, ResourceKind.GUARD, attributes) == 8
        assert level_gain(ArchetypeName.SORCERER, ResourceKind.POWER, attributes) == 6
