"""Skill definitions -- named action templates usable by players and enemies."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from .elements import DamageType, ElementType


class SkillType(str, Enum):
    """Skill category, used by the enemy decision policy to pick skills."""

    ACTIVE = "active"
    PASSIVE = "passive"
    BUFF = "buff"
    DEBUFF = "debuff"
    SPECIAL = "special"


class SkillDefinition(BaseModel):
    """A learned skill.

    Optional fields left as ``None`` fall back to the defaults in
    :class:`~aether_combat.sim.rules.CombatRules` when the skill is used.
    """

    id: str
    name: str
    description: str = ""
    skill_type: SkillType = SkillType.ACTIVE

    damage_type: DamageType | None = None
    """Damage type dealt when used offensively.  ``None`` means blunt."""

    element_type: ElementType | None = None
    """Element of the attack.  ``None`` means Neutral."""

    cooldown: int | None = None
    """Base cooldown in player turns, restored each time the skill is used."""

    current_cooldown: int = 0
    """Turns remaining before the skill can be used again."""

    mana_cost: int | None = None
    stamina_cost: int | None = None

    @property
    def deals_damage(self) -> bool:
        return self.damage_type is not None
