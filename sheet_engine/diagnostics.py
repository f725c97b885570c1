"""
Error and diagnostic types shared by every engine module.

Two kinds of problems are distinguished:
- Precondition violations (caller bugs) raise InvalidInputError.
- Policy violations (over-distributed levels, using a depleted resource, ...)
  are returned as Diagnostic records next to an otherwise valid result, so the
  sheet can show the number and warn the player at the same time.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence


class InvalidInputError(ValueError):
    """Raised when an input violates a documented precondition."""
    pass


class DiagnosticCode(str, Enum):
    """Policy conditions reported alongside computed results."""
    OVER_DISTRIBUTED_LEVELS = "over_distributed_levels"
    DEPLETED_RESOURCE_USE = "depleted_resource_use"
    BROKEN_ITEM_CHECK = "broken_item_check"
    ATTRIBUTE_ABOVE_SOFT_CAP = "attribute_above_soft_cap"
    PROFICIENCY_LIMIT_EXCEEDED = "proficiency_limit_exceeded"
    CLASSES_LOCKED = "classes_locked"
    TOO_MANY_CLASSES = "too_many_classes"
    CLASS_LEVELS_EXCEED_CHARACTER = "class_levels_exceed_character"


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal policy violation attached to a result."""
    code: DiagnosticCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


def has_diagnostic(diagnostics: Sequence[Diagnostic], code: DiagnosticCode) -> bool:
    """Check whether a diagnostic with the given code is present."""
    return any(d.code == code for d in diagnostics)
