"""Damage calculation.

Implements the damage pipeline for a single damage instance:
    die roll + ability modifier -> skill multiplier -> elemental multiplier
    -> critical multiplier -> floor, minimum 1

Physical attacks roll a d8 with a weapon (d6 unarmed) and scale with
strength; magical attacks roll a d6 and scale with intelligence.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Iterable

from pydantic import BaseModel, ConfigDict

from aether_combat.ir.elements import DamageType, ElementType, is_magical
from aether_combat.sim.mechanics.modifiers import ability_modifier
from aether_combat.sim.rules import DEFAULT_RULES, CombatRules

if TYPE_CHECKING:
    from aether_combat.ir.items import WeaponDefinition
    from aether_combat.sim.core.entities import Stats
    from aether_combat.sim.core.rng import GameRNG


class DamageResult(BaseModel):
    """A computed damage instance plus the terms that produced it."""

    model_config = ConfigDict(frozen=True)

    damage: int
    multiplier: float
    """Elemental multiplier applied (1.0 when neither weak nor resistant)."""

    base_roll: int
    stat_bonus: int
    magical: bool
    critical: bool = False
    trace: tuple[str, ...] = ()

    @property
    def detail(self) -> str:
        return " ".join(self.trace)


def elemental_multiplier(
    damage_type: DamageType,
    target_resistances: Iterable[DamageType] = (),
    target_weaknesses: Iterable[DamageType] = (),
    rules: CombatRules = DEFAULT_RULES,
) -> float:
    """Weakness and resistance multipliers for *damage_type*.

    A damage type listed as both a weakness and a resistance gets both
    factors (1.5 x 0.5 = 0.75).
    """
    multiplier = 1.0
    if damage_type in set(target_weaknesses):
        multiplier *= rules.weakness_multiplier
    if damage_type in set(target_resistances):
        multiplier *= rules.resistance_multiplier
    return multiplier


def calculate_damage(
    rng: GameRNG,
    attacker_stats: Stats,
    damage_type: DamageType = DamageType.BLUNT,
    element_type: ElementType = ElementType.NEUTRAL,
    target_resistances: Iterable[DamageType] = (),
    target_weaknesses: Iterable[DamageType] = (),
    weapon: WeaponDefinition | None = None,
    critical: bool = False,
    skill_multiplier: float = 1.0,
    rules: CombatRules = DEFAULT_RULES,
) -> DamageResult:
    """Roll and compute the final damage of one hit.

    Pipeline:
        1. Classify physical / magical.
        2. Roll the base die (d8 armed physical, d6 otherwise).
        3. Add the strength (physical) or intelligence (magical) modifier.
        4. Multiply by the skill multiplier and the elemental multiplier.
        5. Double on a critical.
        6. Floor, with a minimum of ``rules.minimum_damage``.
    """
    trace: list[str] = []
    magical = is_magical(damage_type, element_type)

    if magical:
        base_roll = rng.roll(rules.magic_die)
        stat_bonus = ability_modifier(attacker_stats.intelligence)
        trace.append(f"[magic 1d{rules.magic_die}({base_roll})]")
        trace.append(f"[INT {stat_bonus:+d}]")
    else:
        if weapon is not None:
            base_roll = rng.roll(rules.weapon_die)
            trace.append(f"[weapon 1d{rules.weapon_die}({base_roll})]")
        else:
            base_roll = rng.roll(rules.unarmed_die)
            trace.append(f"[unarmed 1d{rules.unarmed_die}({base_roll})]")
        stat_bonus = ability_modifier(attacker_stats.strength)
        trace.append(f"[STR {stat_bonus:+d}]")

    weaknesses = set(target_weaknesses)
    resistances = set(target_resistances)
    multiplier = elemental_multiplier(damage_type, resistances, weaknesses, rules)
    if damage_type in weaknesses:
        trace.append(f"[weakness x{rules.weakness_multiplier:g}]")
    if damage_type in resistances:
        trace.append(f"[resisted x{rules.resistance_multiplier:g}]")
    if critical:
        trace.append(f"[critical x{rules.critical_multiplier:g}]")
    if skill_multiplier != 1.0:
        trace.append(f"[skill x{skill_multiplier:g}]")

    raw = (base_roll + stat_bonus) * skill_multiplier * multiplier
    if critical:
        raw *= rules.critical_multiplier
    damage = max(rules.minimum_damage, math.floor(raw))

    return DamageResult(
        damage=damage,
        multiplier=multiplier,
        base_roll=base_roll,
        stat_bonus=stat_bonus,
        magical=magical,
        critical=critical,
        trace=tuple(trace),
    )
