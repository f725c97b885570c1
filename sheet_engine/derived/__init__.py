"""Derived character values: archetype resources, carry capacity, movement, senses and vitals."""

from sheet_engine.derived.archetype_resources import (
    ARCHETYPE_PROFILES,
    RESOURCE_ATTRIBUTES,
    ArchetypeContribution,
    ArchetypeProfile,
    DerivedResourceBreakdown,
    archetype,
    calculate_resource_breakdown,
    calculate_resource_total,
    level_gain,
)
from sheet_engine.derived.carry_capacity import (
    CarriedItem,
    CarryCapacity,
    LoadStatus,
    calculate_carry_capacity,
    calculate_load_status,
    can_carry_at_all,
    can_carry_without_penalty,
    coin_weight,
    encumbrance_state,
    items_weight,
    load_percentage,
)
from sheet_engine.derived.movement import MovementCalculator, MovementProfile
from sheet_engine.derived.senses import SensePool, calculate_all_senses, calculate_sense_pool
from sheet_engine.derived.vitals import (
    DamageResult,
    GuardPoints,
    VitalityPoints,
    apply_damage,
    calculate_vitality,
    effective_guard_max,
    max_dying_rounds,
    power_per_round,
)

__all__ = [
    "ARCHETYPE_PROFILES",
    "RESOURCE_ATTRIBUTES",
    "ArchetypeContribution",
    "ArchetypeProfile",
    "CarriedItem",
    "CarryCapacity",
    "DamageResult",
    "DerivedResourceBreakdown",
    "GuardPoints",
    "LoadStatus",
    "MovementCalculator",
    "MovementProfile",
    "SensePool",
    "VitalityPoints",
    "apply_damage",
    "archetype",
    "calculate_all_senses",
    "calculate_carry_capacity",
    "calculate_load_status",
    "calculate_resource_breakdown",
    "calculate_resource_total",
    "calculate_sense_pool",
    "calculate_vitality",
    "can_carry_at_all",
    "can_carry_without_penalty",
    "coin_weight",
    "effective_guard_max",
    "encumbrance_state",
    "items_weight",
    "level_gain",
    "load_percentage",
    "max_dying_rounds",
    "power_per_round",
]
