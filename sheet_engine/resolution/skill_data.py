"""
Skill catalogue.

Each skill names its default key attribute and the situational properties
that decide which penalties can apply to it: load (suffers the overload
penalty), instrument (needs a tool to be used without penalty) and
proficiency (untrained use is penalized). Craft and luck have no fixed key
attribute; the caller picks one.
"""

from dataclasses import dataclass
from typing import Optional

from sheet_engine.data_models import AttributeName
from sheet_engine.diagnostics import InvalidInputError


@dataclass(frozen=True)
class SkillDefinition:
    """
    Definition of a skill and its situational properties.
    """
    skill_id: str
    name: str
    key_attribute: Optional[AttributeName]  # None = chosen per use (craft, luck)

    has_load_penalty: bool = False
    requires_instrument: bool = False
    requires_proficiency: bool = False
    is_combat_skill: bool = False

    @property
    def has_special_attribute(self) -> bool:
        return self.key_attribute is None


AGI = AttributeName.AGILITY
CON = AttributeName.CONSTITUTION
STR = AttributeName.STRENGTH
INF = AttributeName.INFLUENCE
MIN = AttributeName.MIND
PRE = AttributeName.PRESENCE


def _skill(
    skill_id: str,
    key_attribute: Optional[AttributeName],
    load: bool = False,
    instrument: bool = False,
    proficiency: bool = False,
    combat: bool = False,
) -> SkillDefinition:
    return SkillDefinition(
        skill_id=skill_id,
        name=skill_id.replace("_", " ").title(),
        key_attribute=key_attribute,
        has_load_penalty=load,
        requires_instrument=instrument,
        requires_proficiency=proficiency,
        is_combat_skill=combat,
    )


SKILLS: dict[str, SkillDefinition] = {
    skill.skill_id: skill
    for skill in (
        _skill("accuracy", AGI, combat=True),
        _skill("acrobatics", AGI, load=True),
        _skill("animal_handling", INF, proficiency=True),
        _skill("arcana", MIN, proficiency=True, combat=True),
        _skill("art", MIN, proficiency=True),
        _skill("athletics", CON, load=True),
        _skill("driving", AGI, load=True, instrument=True, proficiency=True),
        _skill("sleight_of_hand", AGI, load=True, instrument=True, proficiency=True),
        _skill("determination", MIN, combat=True),
        _skill("deception", INF, instrument=True),
        _skill("strategy", MIN, proficiency=True),
        _skill("stealth", AGI, load=True),
        _skill("history", MIN),
        _skill("initiative", AGI, load=True, combat=True),
        _skill("instruction", MIN, proficiency=True),
        _skill("intimidation", INF),
        _skill("investigation", MIN),
        _skill("fighting", STR, combat=True),
        _skill("medicine", MIN, instrument=True, proficiency=True),
        _skill("nature", PRE, combat=True),
        _skill("craft", None, instrument=True),
        _skill("perception", PRE),
        _skill("performance", INF, load=True),
        _skill("insight", PRE),
        _skill("persuasion", INF),
        _skill("tracking", PRE, proficiency=True),
        _skill("reflex", AGI, load=True, combat=True),
        _skill("religion", PRE, proficiency=True, combat=True),
        _skill("survival", MIN),
        _skill("society", INF),
        _skill("luck", None),
        _skill("tenacity", STR, combat=True),
        _skill("vigor", CON, combat=True),
    )
}

COMBAT_SKILLS: tuple[str, ...] = tuple(s for s, d in SKILLS.items() if d.is_combat_skill)
LOAD_SKILLS: tuple[str, ...] = tuple(s for s, d in SKILLS.items() if d.has_load_penalty)

# Perception is the skill sense rolls are built on
PERCEPTION_SKILL = "perception"


def get_skill(skill_id: str) -> SkillDefinition:
    """
    Look up a skill by id.

    Raises:
        InvalidInputError: If the skill is not in the catalogue
    """
    try:
        return SKILLS[skill_id]
    except KeyError:
        raise InvalidInputError(f"Unknown skill '{skill_id}'") from None


def resolve_key_attribute(
    skill: SkillDefinition,
    override: Optional[AttributeName] = None,
) -> AttributeName:
    """
    Attribute used to test a skill.

    The override wins when given; skills without a fixed key attribute
    require one.
    """
    if override is not None:
        return AttributeName(override)
    if skill.key_attribute is None:
        raise InvalidInputError(
            f"Skill {skill.skill_id} has no fixed key attribute; choose one"
        )
    return skill.key_attribute
