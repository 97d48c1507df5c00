"""Enemy AI configuration and the action descriptor returned by the policy."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EnemyAIType(str, Enum):
    """Behavioural archetype driving the enemy decision policy.

    ``HEALER`` has no dedicated branch and behaves like ``BASIC`` apart from
    the shared heal check.
    """

    BASIC = "Basic"
    AGGRESSIVE = "Aggressive"
    DEFENSIVE = "Defensive"
    TACTICAL = "Tactical"
    HEALER = "Healer"
    BOSS = "Boss"


class EnemyActionType(str, Enum):
    """What an enemy does on its turn."""

    ATTACK = "Attack"
    DEFEND = "Defend"
    SKILL = "Skill"
    FLEE = "Flee"
    HEAL = "Heal"
    WAIT = "Wait"
    PHASE_TRANSITION = "PhaseTransition"


class BossPhase(BaseModel):
    """One stage of a boss fight.

    Phase 0 is the phase the boss starts in; phase *n* is entered once HP
    drops to ``trigger_hp_percentage`` or below.
    """

    trigger_hp_percentage: float
    name: str
    dialogue: str | None = None
    new_skills: list[str] = Field(default_factory=list)
    """Ids of skills unlocked by this phase.  Named in the transition log;
    adding them to the enemy's skill list is left to the host."""


class EnemyAIConfig(BaseModel):
    """Per-enemy AI tuning."""

    type: EnemyAIType = EnemyAIType.BASIC
    flee_threshold: float | None = None
    """HP percentage (0-100) below which the enemy may flee."""

    heal_threshold: float | None = None
    """HP percentage (0-100) below which the enemy may heal itself."""

    special_skill_chance: float | None = None
    """Per-enemy override of ``CombatRules.basic_skill_chance`` for the Basic behaviour."""

    phases: list[BossPhase] = Field(default_factory=list)


class EnemyAction(BaseModel):
    """The action chosen by the decision policy for one enemy turn."""

    model_config = ConfigDict(frozen=True)

    type: EnemyActionType
    description: str = ""
    skill_id: str | None = None
