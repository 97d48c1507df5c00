"""Ability modifiers, attack bonuses and armor class."""

from __future__ import annotations

from typing import TYPE_CHECKING

from aether_combat.sim.rules import DEFAULT_RULES, CombatRules

if TYPE_CHECKING:
    from aether_combat.sim.core.entities import Stats


def ability_modifier(score: int) -> int:
    """D&D-style modifier: ``floor((score - 10) / 2)``.

    Floor division rounds toward negative infinity, so a score of 9
    gives -1, not 0.
    """
    return (score - 10) // 2


def attack_bonus(stats: Stats) -> int:
    """Bonus added to a d20 attack roll: agility + luck modifiers + hit rate."""
    return ability_modifier(stats.agility) + ability_modifier(stats.luck) + stats.hit_rate


def enemy_armor_class(
    stats: Stats,
    defending: bool = False,
    rules: CombatRules = DEFAULT_RULES,
) -> int:
    """Armor class of an enemy: base + agility modifier + evasion rate.

    A defending enemy gets ``rules.defend_ac_bonus`` on top.
    """
    ac = rules.base_armor_class + ability_modifier(stats.agility) + stats.evasion_rate
    if defending:
        ac += rules.defend_ac_bonus
    return ac


def player_armor_class(stats: Stats, rules: CombatRules = DEFAULT_RULES) -> int:
    """Armor class of the player: base + agility and endurance modifiers + evasion rate."""
    return (
        rules.base_armor_class
        + ability_modifier(stats.agility)
        + ability_modifier(stats.endurance)
        + stats.evasion_rate
    )
