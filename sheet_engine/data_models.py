"""
Shared data structures for the character sheet rules engine.

Every record here is an immutable value: the engine never owns a long-lived
mutable instance, so any number of sheet panels can recompute derived stats
from the same snapshot without coordination.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Optional

from sheet_engine.diagnostics import Diagnostic, DiagnosticCode, InvalidInputError

if TYPE_CHECKING:
    from sheet_engine.rulesets.ruleset_data import RulesetConfig


# =============================================================================
# ENUMS
# =============================================================================


class AttributeName(str, Enum):
    """The six character attributes."""
    AGILITY = "agility"
    CONSTITUTION = "constitution"
    STRENGTH = "strength"
    INFLUENCE = "influence"
    MIND = "mind"
    PRESENCE = "presence"


class ProficiencyGrade(str, Enum):
    """Skill training tiers, ordered untrained < adept < versed < master."""
    UNTRAINED = "untrained"
    ADEPT = "adept"
    VERSED = "versed"
    MASTER = "master"

    @property
    def rank(self) -> int:
        """Position of the grade in the total order (untrained = 0)."""
        return PROFICIENCY_ORDER.index(self)


PROFICIENCY_ORDER: tuple[ProficiencyGrade, ...] = (
    ProficiencyGrade.UNTRAINED,
    ProficiencyGrade.ADEPT,
    ProficiencyGrade.VERSED,
    ProficiencyGrade.MASTER,
)


class DieSize(str, Enum):
    """Die faces used by the skill and resource scales."""
    D2 = "d2"
    D3 = "d3"
    D4 = "d4"
    D6 = "d6"
    D8 = "d8"
    D10 = "d10"
    D12 = "d12"
    D20 = "d20"
    D100 = "d100"

    @property
    def sides(self) -> int:
        """Number of faces on the die."""
        return int(self.value[1:])

    @classmethod
    def from_sides(cls, sides: int) -> "DieSize":
        """Look up a die by its number of faces."""
        try:
            return cls(f"d{sides}")
        except ValueError:
            raise InvalidInputError(f"No die with {sides} sides") from None


class ModifierReason(str, Enum):
    """Why a situational dice modifier applies to a pool."""
    LOAD = "load"                               # Overloaded encumbrance
    ARMOR = "armor"                             # Armor penalty
    MISSING_INSTRUMENT = "missing_instrument"   # Skill needs a tool the character lacks
    MISSING_PROFICIENCY = "missing_proficiency" # Proficiency-only skill used untrained
    SIZE = "size"                               # Creature size skill dice
    KEEN_SENSE = "keen_sense"                   # Lineage keen sense bonus
    OTHER = "other"


class ArchetypeName(str, Enum):
    """The closed set of character archetypes."""
    ACADEMIC = "academic"
    ACOLYTE = "acolyte"
    COMBATANT = "combatant"
    SORCERER = "sorcerer"
    ROGUE = "rogue"
    NATURAL = "natural"


class ResourceKind(str, Enum):
    """Archetype-driven resource pools."""
    GUARD = "guard"     # Guard points (health)
    POWER = "power"     # Power points


class MovementType(str, Enum):
    """Movement modes tracked on the sheet."""
    WALK = "walk"
    FLY = "fly"
    CLIMB = "climb"
    BURROW = "burrow"
    SWIM = "swim"


class SenseType(str, Enum):
    """Senses that can be keen and that perception rolls use."""
    VISION = "vision"
    HEARING = "hearing"
    SMELL = "smell"


class CreatureSize(str, Enum):
    """Creature size categories."""
    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"
    GARGANTUAN = "gargantuan"


class EncumbranceState(str, Enum):
    """Load states derived from carried weight versus capacity."""
    NORMAL = "normal"
    OVERLOADED = "overloaded"
    IMMOBILIZED = "immobilized"


# =============================================================================
# DIE SCALES
# =============================================================================


@dataclass(frozen=True)
class DieScale:
    """
    An ordered run of die sizes, smallest first.

    Step operations move exactly one position and never leave the scale.
    """
    dice: tuple[DieSize, ...]

    def __post_init__(self):
        if not self.dice:
            raise InvalidInputError("A die scale needs at least one die")
        sides = [d.sides for d in self.dice]
        if sides != sorted(set(sides)):
            raise InvalidInputError(
                f"Die scale must be strictly increasing: {[d.value for d in self.dice]}"
            )

    def __len__(self) -> int:
        return len(self.dice)

    def __iter__(self) -> Iterator[DieSize]:
        return iter(self.dice)

    def __contains__(self, die: object) -> bool:
        return die in self.dice

    @property
    def smallest(self) -> DieSize:
        return self.dice[0]

    @property
    def largest(self) -> DieSize:
        return self.dice[-1]

    def index_of(self, die: DieSize) -> int:
        """
        Get the position of a die in the scale.

        Raises:
            InvalidInputError: If the die is not part of this scale
        """
        try:
            return self.dice.index(die)
        except ValueError:
            raise InvalidInputError(
                f"{getattr(die, 'value', die)} is not on the scale "
                f"{[d.value for d in self.dice]}"
            ) from None

    def at(self, index: int) -> Optional[DieSize]:
        """Die at a position, or None when the position is off the scale."""
        if 0 <= index < len(self.dice):
            return self.dice[index]
        return None


# Skill proficiency dice (current edition)
SKILL_DIE_SCALE = DieScale(
    (DieSize.D6, DieSize.D8, DieSize.D10, DieSize.D12)
)

# Resource dice: d2 -> d3 -> d4 -> d6 -> d8 -> d10 -> d12 -> d20 -> d100
RESOURCE_DIE_SCALE = DieScale(
    (
        DieSize.D2,
        DieSize.D3,
        DieSize.D4,
        DieSize.D6,
        DieSize.D8,
        DieSize.D10,
        DieSize.D12,
        DieSize.D20,
        DieSize.D100,
    )
)


# =============================================================================
# CHARACTER VALUES
# =============================================================================


@dataclass(frozen=True)
class AttributeSet:
    """
    The six attributes of a character snapshot.

    Values are non-negative integers. Zero is legal and feeds the penalty
    roll rule through the pool size, never through the attribute itself.
    Edition caps are checked separately by check_caps().
    """
    agility: int = 1
    constitution: int = 1
    strength: int = 1
    influence: int = 1
    mind: int = 1
    presence: int = 1

    def __post_init__(self):
        for name in AttributeName:
            value = getattr(self, name.value)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInputError(f"Attribute {name.value} must be an integer, got {value!r}")
            if value < 0:
                raise InvalidInputError(f"Attribute {name.value} cannot be negative ({value})")

    def get(self, attribute: AttributeName) -> int:
        """Get an attribute value by name."""
        return getattr(self, AttributeName(attribute).value)

    def as_dict(self) -> dict[str, int]:
        return {name.value: getattr(self, name.value) for name in AttributeName}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttributeSet":
        """
        Build an attribute set from a snapshot mapping.

        Unknown keys are rejected so a stale snapshot shape fails loudly.
        """
        known = {name.value for name in AttributeName}
        unknown = {getattr(key, "value", key) for key in data} - known
        if unknown:
            raise InvalidInputError(f"Unknown attributes: {sorted(unknown)}")
        return cls(**{AttributeName(key).value: value for key, value in data.items()})

    def check_caps(self, ruleset: "RulesetConfig") -> list[Diagnostic]:
        """
        Check the attributes against an edition's caps.

        Args:
            ruleset: Edition providing the soft and hard caps

        Returns:
            One ATTRIBUTE_ABOVE_SOFT_CAP diagnostic per attribute above the
            soft cap (values there are allowed)

        Raises:
            InvalidInputError: If any attribute exceeds the hard cap
        """
        diagnostics = []
        for name, value in self.as_dict().items():
            if value > ruleset.attribute_hard_cap:
                raise InvalidInputError(
                    f"Attribute {name} is {value}, above the hard cap of "
                    f"{ruleset.attribute_hard_cap}"
                )
            if value > ruleset.attribute_soft_cap:
                diagnostics.append(Diagnostic(
                    code=DiagnosticCode.ATTRIBUTE_ABOVE_SOFT_CAP,
                    message=f"{name} {value} is above the soft cap of {ruleset.attribute_soft_cap}",
                    details={"attribute": name, "value": value},
                ))
        return diagnostics


@dataclass(frozen=True)
class SituationalModifier:
    """
    A signed modifier tagged with the reason it applies.

    In the dice-pool edition every modifier is a dice delta. Editions with
    flat situational modifiers add the value to the result instead, unless
    affects_dice is set.
    """
    value: int
    reason: ModifierReason = ModifierReason.OTHER
    label: str = ""
    affects_dice: bool = False


@dataclass(frozen=True)
class Archetype:
    """
    An archetype and the levels a character has invested in it.

    The governing attribute scales every resource unless resource_attributes
    names a different attribute for a specific resource.
    """
    name: ArchetypeName
    level: int
    governing_attribute: AttributeName
    base_per_level: Mapping[ResourceKind, int] = field(default_factory=dict)
    resource_attributes: Mapping[ResourceKind, AttributeName] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "name", ArchetypeName(self.name))
        object.__setattr__(self, "governing_attribute", AttributeName(self.governing_attribute))
        if isinstance(self.level, bool) or not isinstance(self.level, int):
            raise InvalidInputError(
                f"Archetype {self.name.value} level must be an integer, got {self.level!r}"
            )
        if self.level < 0:
            raise InvalidInputError(
                f"Archetype {self.name.value} level cannot be negative ({self.level})"
            )

    def base_for(self, resource: ResourceKind) -> int:
        """Per-level base value for a resource (0 when not listed)."""
        return self.base_per_level.get(resource, 0)

    def attribute_for(self, resource: ResourceKind) -> AttributeName:
        """Attribute that scales the given resource."""
        return self.resource_attributes.get(resource, self.governing_attribute)


@dataclass(frozen=True)
class MovementSpeed:
    """Base speed plus bonus for one movement type."""
    base: int = 0
    bonus: int = 0

    @property
    def total(self) -> int:
        return max(0, self.base + self.bonus)

    @property
    def is_active(self) -> bool:
        return self.total > 0


@dataclass(frozen=True)
class KeenSense:
    """A lineage keen sense granting bonus dice on one sense."""
    sense: SenseType
    bonus: int
