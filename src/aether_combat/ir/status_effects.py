"""Status effects -- timed conditions attached to a combatant."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class StatusEffectType(str, Enum):
    """Kinds of status effect.  At most one instance per type per combatant."""

    POISON = "poison"
    BURN = "burn"
    FREEZE = "freeze"
    STUN = "stun"
    BLEED = "bleed"
    BUFF = "buff"
    DEBUFF = "debuff"
    STARVATION = "starvation"
    DEHYDRATION = "dehydration"
    EXHAUSTION = "exhaustion"


class StatusEffect(BaseModel):
    """A status effect instance with its remaining duration."""

    type: StatusEffectType
    name: str
    duration: int = Field(ge=0)
    """Remaining turns.  The effect is dropped once this reaches 0."""

    description: str = ""
