"""
Unit tests for skill pool sizing, the skill catalogue and proficiency limits.
"""

import pytest

from sheet_engine.data_models import (
    AttributeName,
    AttributeSet,
    CreatureSize,
    DieSize,
    ModifierReason,
    ProficiencyGrade,
    SituationalModifier,
)
from sheet_engine.diagnostics import DiagnosticCode, InvalidInputError, has_diagnostic
from sheet_engine.resolution.proficiency_limits import (
    check_proficiency_budget,
    count_by_grade,
    max_proficiencies,
)
from sheet_engine.resolution.skill_data import SKILLS, get_skill
from sheet_engine.resolution.skill_pool import (
    SkillPoolInput,
    SkillSituation,
    calculate_skill,
    calculate_skill_pool,
    signature_bonus_for_level,
    situational_modifiers_for,
)


class TestCalculateSkillPool:
    """Tests for the core pool formula."""

    def test_adept_three(self, ruleset):
        """Attribute 3, adept, no modifiers -> 3d8."""
        pool = calculate_skill_pool(SkillPoolInput(3, ProficiencyGrade.ADEPT), ruleset)
        assert pool.die_size == DieSize.D8
        assert pool.total_dice_count == 3
        assert pool.total_dice_modifier == 0
        assert not pool.is_penalty_roll
        assert pool.formula == "3d8"

    def test_penalty_roll(self, ruleset):
        """Attribute 1, untrained, -3 -> penalty roll 2d6 (lower)."""
        pool = calculate_skill_pool(
            SkillPoolInput(
                1,
                ProficiencyGrade.UNTRAINED,
                situational_modifiers=[SituationalModifier(-3, ModifierReason.LOAD)],
            ),
            ruleset,
        )
        assert pool.total_dice_count == -2
        assert pool.is_penalty_roll
        assert pool.formula == "2d6 (lower)"

    def test_attribute_zero_is_penalty(self, ruleset):
        """Attribute 0 with no bonus dice is a penalty roll through the pool rule."""
        pool = calculate_skill_pool(SkillPoolInput(0, ProficiencyGrade.MASTER), ruleset)
        assert pool.is_penalty_roll
        assert pool.die_size == DieSize.D12
        assert pool.formula == "2d6 (lower)"

    def test_bonus_rescues_zero_attribute(self, ruleset):
        """A signature bonus can lift a zero attribute out of penalty."""
        pool = calculate_skill_pool(
            SkillPoolInput(0, ProficiencyGrade.VERSED, signature_bonus=2), ruleset
        )
        assert pool.total_dice_count == 2
        assert pool.formula == "2d10"

    def test_modifiers_grouped_by_reason(self, ruleset):
        modifiers = [
            SituationalModifier(-1, ModifierReason.ARMOR),
            SituationalModifier(-2, ModifierReason.LOAD),
            SituationalModifier(-1, ModifierReason.ARMOR),
            SituationalModifier(2, ModifierReason.SIZE),
        ]
        pool = calculate_skill_pool(SkillPoolInput(4, ProficiencyGrade.ADEPT, 1, modifiers), ruleset)
        assert pool.modifiers_by_reason == {
            ModifierReason.ARMOR: -2,
            ModifierReason.LOAD: -2,
            ModifierReason.SIZE: 2,
        }
        assert pool.total_dice_modifier == -1
        assert pool.total_dice_count == 3

    def test_legacy_flat_bonus(self, legacy_ruleset):
        """The d20 edition adds attribute x multiplier as a flat bonus."""
        pool = calculate_skill_pool(SkillPoolInput(3, ProficiencyGrade.VERSED), legacy_ruleset)
        assert pool.die_size == DieSize.D20
        assert pool.flat_bonus == 6
        assert pool.formula == "3d20+6"

    def test_negative_attribute_rejected(self):
        with pytest.raises(InvalidInputError):
            SkillPoolInput(-1)

    @pytest.mark.parametrize("grade", list(ProficiencyGrade))
    @pytest.mark.parametrize("modifier", [-4, -1, 0, 2])
    def test_pool_monotonic_in_attribute(self, ruleset, grade, modifier):
        """Raising the attribute never shrinks the pool."""
        mods = (SituationalModifier(modifier),)
        counts = [
            calculate_skill_pool(SkillPoolInput(a, grade, 0, mods), ruleset).total_dice_count
            for a in range(0, 7)
        ]
        assert counts == sorted(counts)

    @pytest.mark.parametrize("attribute", range(0, 7))
    def test_penalty_rule_is_pool_based(self, ruleset, attribute):
        """is_penalty_roll is exactly total_dice_count <= 0."""
        for modifier in range(-6, 3):
            pool = calculate_skill_pool(
                SkillPoolInput(attribute, situational_modifiers=(SituationalModifier(modifier),)),
                ruleset,
            )
            assert pool.is_penalty_roll == (pool.total_dice_count <= 0)


class TestLegacySkillPool:
    """Tests for d20 edition pools: flat modifiers, keep highest, lowest at 0."""

    def test_overloaded_load_skill_is_flat(self, legacy_ruleset):
        """Overloaded athletics with constitution 3, adept -> 3d20-2."""
        pool = calculate_skill(
            "athletics",
            AttributeSet(constitution=3),
            ProficiencyGrade.ADEPT,
            legacy_ruleset,
            situation=SkillSituation(overloaded=True),
        )
        assert pool.total_dice_count == 3
        assert pool.total_dice_modifier == 0
        assert pool.flat_bonus == -2
        assert pool.modifiers_by_reason == {ModifierReason.LOAD: -5}
        assert not pool.is_penalty_roll
        assert pool.formula == "3d20-2"

    def test_signature_bonus_is_flat(self, legacy_ruleset):
        """Level 5 signature (+1) while overloaded: 3 + 1 - 5 = -1."""
        pool = calculate_skill(
            "athletics",
            AttributeSet(constitution=3),
            ProficiencyGrade.ADEPT,
            legacy_ruleset,
            character_level=5,
            is_signature=True,
            situation=SkillSituation(overloaded=True),
        )
        assert pool.signature_bonus == 1
        assert pool.total_dice_count == 3
        assert pool.formula == "3d20-1"

    def test_armor_penalty_is_flat(self, legacy_ruleset):
        pool = calculate_skill(
            "stealth",
            AttributeSet(agility=2),
            ProficiencyGrade.VERSED,
            legacy_ruleset,
            situation=SkillSituation(armor_penalty=True),
        )
        assert pool.total_dice_count == 2
        assert pool.formula == "2d20+2"

    def test_attribute_zero_keeps_lowest(self, legacy_ruleset):
        pool = calculate_skill_pool(SkillPoolInput(0, ProficiencyGrade.MASTER), legacy_ruleset)
        assert pool.take_lowest
        assert pool.is_penalty_roll
        assert pool.total_dice_count == 2
        assert pool.flat_bonus == 0
        assert pool.formula == "2d20 (lower)"

    def test_attribute_zero_with_extra_die(self, legacy_ruleset):
        modifier = SituationalModifier(1, ModifierReason.OTHER, affects_dice=True)
        pool = calculate_skill_pool(
            SkillPoolInput(0, situational_modifiers=(modifier,)), legacy_ruleset
        )
        assert pool.total_dice_count == 3
        assert pool.formula == "3d20 (lower)"

    @pytest.mark.parametrize("attribute,grade,flat,dice,formula", [
        (2, ProficiencyGrade.ADEPT, 2, 0, "2d20+4"),
        (3, ProficiencyGrade.UNTRAINED, -1, 1, "4d20-1"),
        (2, ProficiencyGrade.UNTRAINED, 5, -3, "1d20 (lower)+5"),
        (1, ProficiencyGrade.MASTER, 0, -3, "2d20 (lower)+3"),
    ])
    def test_formula_examples(self, legacy_ruleset, attribute, grade, flat, dice, formula):
        """Flat and dice modifiers land in their own parts of the formula."""
        modifiers = []
        if flat:
            modifiers.append(SituationalModifier(flat))
        if dice:
            modifiers.append(SituationalModifier(dice, affects_dice=True))
        pool = calculate_skill_pool(SkillPoolInput(attribute, grade, 0, modifiers), legacy_ruleset)
        assert pool.formula == formula
        assert pool.total_dice_modifier == dice

    def test_dice_pool_edition_ignores_flat_channel(self, ruleset):
        """The current edition still treats every modifier as dice."""
        pool = calculate_skill(
            "athletics",
            AttributeSet(constitution=3),
            ProficiencyGrade.ADEPT,
            ruleset,
            situation=SkillSituation(overloaded=True),
        )
        assert pool.total_dice_count == 1
        assert pool.flat_bonus == 0
        assert pool.formula == "1d8"

    def test_roll_zero_attribute(self, legacy_ruleset, seeded_dice):
        pool = calculate_skill_pool(SkillPoolInput(0), legacy_ruleset)
        result = pool.roll(seeded_dice, legacy_ruleset)
        assert len(result.raw_values) == 2
        assert result.kept_values == (min(result.raw_values),)
        assert result.formula == "2d20 (lower)"

    def test_roll_keeps_highest(self, legacy_ruleset, seeded_dice):
        pool = calculate_skill_pool(SkillPoolInput(3, ProficiencyGrade.ADEPT), legacy_ruleset)
        result = pool.roll(seeded_dice, legacy_ruleset)
        assert len(result.raw_values) == 3
        assert result.total == max(result.raw_values) + 3


class TestSignatureBonus:
    """Tests for the signature skill bonus."""

    @pytest.mark.parametrize("level,bonus", [
        (0, 0), (1, 1), (5, 1), (6, 2), (10, 2), (11, 3), (15, 3), (30, 3),
    ])
    def test_bonus_by_level(self, ruleset, level, bonus):
        assert signature_bonus_for_level(level, ruleset) == bonus


class TestSituationalModifiers:
    """Tests for modifiers derived from circumstances."""

    def test_overloaded_load_skill(self, ruleset):
        mods = situational_modifiers_for(
            get_skill("stealth"), ProficiencyGrade.ADEPT, SkillSituation(overloaded=True), ruleset
        )
        assert [(m.reason, m.value) for m in mods] == [(ModifierReason.LOAD, ruleset.load_penalty)]

    def test_overloaded_non_load_skill(self, ruleset):
        """Skills without the load property ignore overload."""
        mods = situational_modifiers_for(
            get_skill("history"), ProficiencyGrade.ADEPT, SkillSituation(overloaded=True), ruleset
        )
        assert mods == []

    def test_missing_instrument_and_proficiency(self, ruleset):
        mods = situational_modifiers_for(
            get_skill("medicine"),
            ProficiencyGrade.UNTRAINED,
            SkillSituation(has_instrument=False),
            ruleset,
        )
        reasons = {m.reason for m in mods}
        assert reasons == {ModifierReason.MISSING_INSTRUMENT, ModifierReason.MISSING_PROFICIENCY}

    def test_trained_skips_proficiency_penalty(self, ruleset):
        mods = situational_modifiers_for(get_skill("arcana"), ProficiencyGrade.ADEPT, None, ruleset)
        assert mods == []

    @pytest.mark.parametrize("size,acrobatics,athletics", [
        (CreatureSize.TINY, 2, -2),
        (CreatureSize.SMALL, 1, -1),
        (CreatureSize.MEDIUM, 0, 0),
        (CreatureSize.LARGE, -1, 1),
    ])
    def test_size_dice(self, ruleset, size, acrobatics, athletics):
        situation = SkillSituation(size=size)
        for skill_id, expected in (("acrobatics", acrobatics), ("athletics", athletics)):
            mods = situational_modifiers_for(get_skill(skill_id), ProficiencyGrade.ADEPT, situation, ruleset)
            assert sum(m.value for m in mods if m.reason == ModifierReason.SIZE) == expected


class TestCalculateSkill:
    """Tests for the catalogue convenience wrapper."""

    def test_uses_key_attribute(self, ruleset, attributes):
        """Athletics uses constitution."""
        pool = calculate_skill("athletics", attributes, ProficiencyGrade.VERSED, ruleset)
        assert pool.attribute_value == attributes.constitution
        assert pool.formula == f"{attributes.constitution}d10"

    def test_signature(self, ruleset, attributes):
        pool = calculate_skill(
            "fighting", attributes, ProficiencyGrade.ADEPT, ruleset,
            character_level=7, is_signature=True,
        )
        assert pool.signature_bonus == 2
        assert pool.total_dice_count == attributes.strength + 2

    def test_special_attribute_requires_choice(self, ruleset, attributes):
        """Craft and luck need an explicit attribute."""
        with pytest.raises(InvalidInputError):
            calculate_skill("craft", attributes, ruleset=ruleset)
        pool = calculate_skill("luck", attributes, ruleset=ruleset, key_attribute=AttributeName.MIND)
        assert pool.attribute_value == attributes.mind

    def test_unknown_skill(self, ruleset, attributes):
        with pytest.raises(InvalidInputError):
            calculate_skill("juggling", attributes, ruleset=ruleset)

    def test_extra_modifiers(self, ruleset, attributes):
        pool = calculate_skill(
            "perception", attributes, ruleset=ruleset,
            extra_modifiers=[SituationalModifier(-5, label="Blinded")],
        )
        assert pool.is_penalty_roll

    def test_catalogue_size(self):
        assert len(SKILLS) == 33
        assert sum(1 for s in SKILLS.values() if s.has_special_attribute) == 2


class TestProficiencyLimits:
    """Tests for the proficiency budget."""

    def test_max_proficiencies(self, ruleset):
        assert max_proficiencies(2, ruleset) == 5
        assert max_proficiencies(0, ruleset) == 3

    def test_within_budget(self, ruleset):
        grades = {"stealth": ProficiencyGrade.ADEPT, "history": ProficiencyGrade.UNTRAINED}
        info = check_proficiency_budget(grades, mind=1, ruleset=ruleset)
        assert info.acquired == 1
        assert info.remaining == 3
        assert info.can_add
        assert info.is_valid
        assert info.diagnostics == []

    def test_over_budget(self, ruleset):
        grades = {name: ProficiencyGrade.ADEPT for name in list(SKILLS)[:5]}
        info = check_proficiency_budget(grades, mind=1, ruleset=ruleset)
        assert not info.is_valid
        assert info.remaining == 0
        assert has_diagnostic(info.diagnostics, DiagnosticCode.PROFICIENCY_LIMIT_EXCEEDED)

    def test_count_by_grade(self):
        counts = count_by_grade({"a": "adept", "b": "master", "c": "adept"})
        assert counts[ProficiencyGrade.ADEPT] == 2
        assert counts[ProficiencyGrade.UNTRAINED] == 0


class TestAttributeCaps:
    """Tests for edition attribute caps."""

    def test_soft_cap_reported(self, ruleset):
        attrs = AttributeSet(mind=6)
        diagnostics = attrs.check_caps(ruleset)
        assert len(diagnostics) == 1
        assert diagnostics[0].code == DiagnosticCode.ATTRIBUTE_ABOVE_SOFT_CAP

    def test_hard_cap_raises(self, ruleset):
        with pytest.raises(InvalidInputError):
            AttributeSet(strength=7).check_caps(ruleset)

    def test_negative_rejected(self):
        with pytest.raises(InvalidInputError):
            AttributeSet(agility=-1)

    def test_from_dict(self):
        attrs = AttributeSet.from_dict({"agility": 3, AttributeName.MIND: 2})
        assert attrs.agility == 3
        assert attrs.mind == 2
        with pytest.raises(InvalidInputError):
            AttributeSet.from_dict({"luck": 3})
