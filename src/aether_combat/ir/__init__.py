"""Declarative content models for combat.

Skills, weapons, status effects and enemy AI configuration are pydantic
models that serialise cleanly to/from JSON, so the save/load layer can
store them verbatim and the content registry can load them from disk.
"""

from .elements import (
    AFFINITY_DAMAGE_TYPES,
    MAGICAL_DAMAGE_TYPES,
    DamageType,
    ElementType,
    is_magical,
)
from .enemy_ai import (
    BossPhase,
    EnemyAction,
    EnemyActionType,
    EnemyAIConfig,
    EnemyAIType,
)
from .items import WeaponDefinition
from .skills import SkillDefinition, SkillType
from .status_effects import StatusEffect, StatusEffectType

__all__ = [
    # elements
    "DamageType",
    "ElementType",
    "MAGICAL_DAMAGE_TYPES",
    "AFFINITY_DAMAGE_TYPES",
    "is_magical",
    # enemy_ai
    "BossPhase",
    "EnemyAction",
    "EnemyActionType",
    "EnemyAIConfig",
    "EnemyAIType",
    # items
    "WeaponDefinition",
    # skills
    "SkillDefinition",
    "SkillType",
    # status_effects
    "StatusEffect",
    "StatusEffectType",
]
