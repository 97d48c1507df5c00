"""Combatant models for the combat engine.

All data classes use Pydantic v2 BaseModel for validation and
serialization.  The combat core only ever reads these; state changes are
applied by the caller on copies (see :mod:`aether_combat.sim.encounter`).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from aether_combat.ir.elements import DamageType, ElementType
from aether_combat.ir.enemy_ai import EnemyAIConfig
from aether_combat.ir.items import WeaponDefinition
from aether_combat.ir.skills import SkillDefinition
from aether_combat.ir.status_effects import StatusEffect, StatusEffectType


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------

class Stats(BaseModel):
    """Base attributes.  10 is the neutral score (modifier 0)."""

    strength: int = 10
    intelligence: int = 10
    agility: int = 10
    charisma: int = 10
    luck: int = 10
    endurance: int = 10
    perception: int = 10
    hit_rate: int = 0
    """Flat bonus added to attack rolls."""

    evasion_rate: int = 0
    """Flat bonus added to armor class."""


# ---------------------------------------------------------------------------
# Combatant base
# ---------------------------------------------------------------------------

class Combatant(BaseModel):
    """Common base for anything that fights: resources, stats, effects, skills."""

    name: str
    max_hp: int = Field(ge=1)
    current_hp: int
    max_mana: int = 0
    current_mana: int = 0
    max_stamina: int = 0
    current_stamina: int = 0

    stats: Stats = Field(default_factory=Stats)
    resistances: list[DamageType] = Field(default_factory=list)
    weaknesses: list[DamageType] = Field(default_factory=list)
    elemental_affinity: ElementType = ElementType.NEUTRAL
    status_effects: list[StatusEffect] = Field(default_factory=list)
    skills: list[SkillDefinition] = Field(default_factory=list)

    @field_validator("status_effects")
    @classmethod
    def _merge_duplicate_effects(cls, effects: list[StatusEffect]) -> list[StatusEffect]:
        """One effect per type: later duplicates fold into the first, keeping the longer duration."""
        merged: dict[StatusEffectType, StatusEffect] = {}
        for effect in effects:
            existing = merged.get(effect.type)
            if existing is None:
                merged[effect.type] = effect
            elif effect.duration > existing.duration:
                merged[effect.type] = existing.model_copy(update={"duration": effect.duration})
        return list(merged.values())

    @model_validator(mode="after")
    def _clamp_resources(self) -> Combatant:
        self.current_hp = _clamp(self.current_hp, self.max_hp)
        self.current_mana = _clamp(self.current_mana, self.max_mana)
        self.current_stamina = _clamp(self.current_stamina, self.max_stamina)
        return self

    # -- queries -------------------------------------------------------------

    @property
    def is_dead(self) -> bool:
        return self.current_hp <= 0

    @property
    def hp_fraction(self) -> float:
        """Current HP as a fraction of max HP, in ``[0, 1]``."""
        return self.current_hp / self.max_hp

    def get_skill(self, skill_id: str) -> SkillDefinition | None:
        """Return the skill with *skill_id*, or ``None`` if not known."""
        for skill in self.skills:
            if skill.id == skill_id:
                return skill
        return None

    # -- damage / heal -------------------------------------------------------

    def take_damage(self, amount: int) -> int:
        """Lose up to *amount* HP (HP never drops below 0).

        Returns the actual HP lost.
        """
        if amount <= 0:
            return 0
        hp_lost = min(self.current_hp, amount)
        self.current_hp -= hp_lost
        return hp_lost

    def heal(self, amount: int) -> int:
        """Heal *amount* HP, capped at ``max_hp``.  Returns HP restored."""
        if amount <= 0:
            return 0
        healed = min(self.max_hp - self.current_hp, amount)
        self.current_hp += healed
        return healed

    # -- mana / stamina ------------------------------------------------------

    def spend_stamina(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"spend_stamina amount must be >= 0, got {amount}")
        self.current_stamina = max(0, self.current_stamina - amount)

    def spend_mana(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"spend_mana amount must be >= 0, got {amount}")
        self.current_mana = max(0, self.current_mana - amount)


def _clamp(value: int, maximum: int) -> int:
    return max(0, min(value, maximum))


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------

class Player(Combatant):
    """The player character."""

    weapon: WeaponDefinition | None = None
    """Weapon equipped in the main hand, if any."""


# ---------------------------------------------------------------------------
# Enemy
# ---------------------------------------------------------------------------

class Enemy(Combatant):
    """A hostile NPC in combat.

    Content produced by the narrative engine sometimes describes an enemy's
    skills as free text instead of a structured list.  Such text is moved to
    ``skill_notes`` on validation and ``skills`` becomes empty, so the
    combat core only ever sees structured skills.
    """

    enemy_id: str
    description: str = ""
    ai_config: EnemyAIConfig = Field(default_factory=EnemyAIConfig)
    current_phase: int = 0
    """Index into ``ai_config.phases`` of the boss phase currently active."""

    skill_notes: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_skills(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("skills"), str):
            data = dict(data)
            data["skill_notes"] = data["skills"] or None
            data["skills"] = []
        elif isinstance(data, dict) and data.get("skills") is None and "skills" in data:
            data = dict(data)
            data["skills"] = []
        return data
