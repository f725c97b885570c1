"""
Archetype-driven resource totals.

Guard points and power points come from the archetypes a character has
levels in. Each archetype contributes

    level * (base_per_level + governing attribute)

for a resource, and the sheet shows both the total and the per-archetype
breakdown. Both are produced by one computation so they cannot disagree.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from sheet_engine.data_models import (
    Archetype,
    ArchetypeName,
    AttributeName,
    AttributeSet,
    ResourceKind,
)
from sheet_engine.diagnostics import InvalidInputError

logger = logging.getLogger(__name__)


# =============================================================================
# ARCHETYPE CATALOGUE
# =============================================================================


@dataclass(frozen=True)
class ArchetypeProfile:
    """Static data for one archetype."""
    name: ArchetypeName
    primary_attribute: AttributeName
    guard_per_level: int
    power_per_level: int
    is_spellcaster: bool = False


ARCHETYPE_PROFILES: dict[ArchetypeName, ArchetypeProfile] = {
    ArchetypeName.ACADEMIC: ArchetypeProfile(
        ArchetypeName.ACADEMIC, AttributeName.MIND, guard_per_level=2, power_per_level=4,
    ),
    ArchetypeName.ACOLYTE: ArchetypeProfile(
        ArchetypeName.ACOLYTE, AttributeName.PRESENCE, guard_per_level=3, power_per_level=3,
    ),
    ArchetypeName.COMBATANT: ArchetypeProfile(
        ArchetypeName.COMBATANT, AttributeName.CONSTITUTION, guard_per_level=5, power_per_level=1,
    ),
    ArchetypeName.SORCERER: ArchetypeProfile(
        ArchetypeName.SORCERER, AttributeName.PRESENCE, guard_per_level=1, power_per_level=5,
        is_spellcaster=True,
    ),
    ArchetypeName.ROGUE: ArchetypeProfile(
        ArchetypeName.ROGUE, AttributeName.AGILITY, guard_per_level=4, power_per_level=2,
    ),
    ArchetypeName.NATURAL: ArchetypeProfile(
        ArchetypeName.NATURAL, AttributeName.PRESENCE, guard_per_level=3, power_per_level=3,
    ),
}

# Guard scales with constitution and power with presence, whatever the archetype
RESOURCE_ATTRIBUTES: dict[ResourceKind, AttributeName] = {
    ResourceKind.GUARD: AttributeName.CONSTITUTION,
    ResourceKind.POWER: AttributeName.PRESENCE,
}


def archetype(name: ArchetypeName, level: int) -> Archetype:
    """
    Build an Archetype from the catalogue.

    Args:
        name: Archetype name
        level: Levels invested in it

    Returns:
        Archetype with the catalogue's per-level bases and resource attributes
    """
    try:
        profile = ARCHETYPE_PROFILES[ArchetypeName(name)]
    except ValueError:
        raise InvalidInputError(f"Unknown archetype '{name}'") from None
    return Archetype(
        name=profile.name,
        level=level,
        governing_attribute=profile.primary_attribute,
        base_per_level={
            ResourceKind.GUARD: profile.guard_per_level,
            ResourceKind.POWER: profile.power_per_level,
        },
        resource_attributes=dict(RESOURCE_ATTRIBUTES),
    )


# =============================================================================
# AGGREGATION
# =============================================================================


@dataclass(frozen=True)
class ArchetypeContribution:
    """One archetype's share of a resource."""
    name: ArchetypeName
    level: int
    base_per_level: int
    attribute: AttributeName
    attribute_contribution: int     # level * attribute value
    total: int                      # level * (base + attribute value)


@dataclass(frozen=True)
class DerivedResourceBreakdown:
    """A resource total together with the contributions that make it up."""
    resource: ResourceKind
    total: int
    contributions: list[ArchetypeContribution] = field(default_factory=list)

    def contribution_for(self, name: ArchetypeName) -> Optional[ArchetypeContribution]:
        for contribution in self.contributions:
            if contribution.name == name:
                return contribution
        return None


def calculate_resource_breakdown(
    resource: ResourceKind,
    archetypes: Iterable[Archetype],
    attributes: AttributeSet,
) -> DerivedResourceBreakdown:
    """
    Compute a resource total and its per-archetype breakdown.

    Archetypes with level 0 contribute nothing and are left out of the
    breakdown.

    Args:
        resource: Guard or power
        archetypes: Archetypes the character has
        attributes: Character attributes

    Returns:
        DerivedResourceBreakdown whose total equals the sum of its contributions
    """
    contributions = []
    for arch in archetypes:
        if arch.level <= 0:
            continue
        attribute = arch.attribute_for(resource)
        value = attributes.get(attribute)
        base = arch.base_for(resource)
        contributions.append(ArchetypeContribution(
            name=arch.name,
            level=arch.level,
            base_per_level=base,
            attribute=attribute,
            attribute_contribution=arch.level * value,
            total=arch.level * (base + value),
        ))

    total = sum(c.total for c in contributions)
    logger.debug(f"{resource.value} total {total} from {len(contributions)} archetype(s)")
    return DerivedResourceBreakdown(resource=resource, total=total, contributions=contributions)


def calculate_resource_total(
    resource: ResourceKind,
    archetypes: Iterable[Archetype],
    attributes: AttributeSet,
) -> int:
    """Resource total only; same computation as the breakdown."""
    return calculate_resource_breakdown(resource, archetypes, attributes).total


def level_gain(
    name: ArchetypeName,
    resource: ResourceKind,
    attributes: AttributeSet,
) -> int:
    """Resource gained by taking one more level in a catalogue archetype."""
    arch = archetype(name, 1)
    return arch.base_for(resource) + attributes.get(arch.attribute_for(resource))
