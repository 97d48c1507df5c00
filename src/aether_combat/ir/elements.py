"""Damage and element typing shared by skills, weapons and combatants."""

from __future__ import annotations

from enum import Enum


class DamageType(str, Enum):
    """The fixed set of damage types understood by the damage calculator."""

    SLASH = "slash"
    PIERCE = "pierce"
    BLUNT = "blunt"
    FIRE = "fire"
    ICE = "ice"
    LIGHTNING = "lightning"
    HOLY = "holy"
    DARK = "dark"


class ElementType(str, Enum):
    """Elemental alignment of an attack or a combatant."""

    NEUTRAL = "Neutral"
    FIRE = "Fire"
    WATER = "Water"
    WIND = "Wind"
    EARTH = "Earth"
    LIGHTNING = "Lightning"
    HOLY = "Holy"
    DARK = "Dark"


MAGICAL_DAMAGE_TYPES = frozenset({
    DamageType.FIRE,
    DamageType.ICE,
    DamageType.LIGHTNING,
    DamageType.HOLY,
    DamageType.DARK,
})
"""Damage types scaled by intelligence rather than strength."""

AFFINITY_DAMAGE_TYPES: dict[ElementType, DamageType] = {
    ElementType.FIRE: DamageType.FIRE,
    ElementType.WATER: DamageType.ICE,
    ElementType.LIGHTNING: DamageType.LIGHTNING,
    ElementType.HOLY: DamageType.HOLY,
    ElementType.DARK: DamageType.DARK,
}
"""Damage type used by an enemy skill, keyed by the enemy's elemental affinity.

Water maps to ice and Wind/Earth have no entry.  Existing content depends
on this table, so it is kept as-is.
"""


def is_magical(damage_type: DamageType, element_type: ElementType = ElementType.NEUTRAL) -> bool:
    """Return True if the attack scales with intelligence."""
    return damage_type in MAGICAL_DAMAGE_TYPES or element_type != ElementType.NEUTRAL
