"""Equipment definitions relevant to combat."""

from __future__ import annotations

from pydantic import BaseModel

from .elements import DamageType, ElementType


class WeaponDefinition(BaseModel):
    """The weapon held in the attacker's main hand.

    Only its presence and typing matter to combat: any weapon rolls a d8
    for physical damage instead of the unarmed d6.
    """

    id: str
    name: str
    description: str = ""
    damage_type: DamageType | None = None
    """``None`` means slash."""

    element_type: ElementType | None = None
    """``None`` means Neutral."""
