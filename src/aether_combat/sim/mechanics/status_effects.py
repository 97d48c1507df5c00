"""Status effect lifecycle -- apply, query, per-turn processing.

A combatant carries at most one effect per :class:`StatusEffectType`.
Re-applying a type keeps the existing instance and extends its duration
to the larger of the two.  Once per turn, :func:`process_status_effects`
applies every effect in insertion order, then counts durations down and
drops expired effects.

Nothing here mutates its inputs: each function returns new lists or a
new combatant.
"""

from __future__ import annotations

import math
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from aether_combat.ir.status_effects import StatusEffect, StatusEffectType
from aether_combat.sim.core.entities import Combatant
from aether_combat.sim.rules import DEFAULT_RULES, CombatRules


class StatusTickResult(BaseModel):
    """Outcome of one status-processing pass."""

    model_config = ConfigDict(frozen=True)

    combatant: Combatant
    """Copy of the combatant (same class) with effects applied and durations ticked."""

    hp_lost: int = 0
    stamina_lost: int = 0
    mana_lost: int = 0
    log_lines: tuple[str, ...] = ()
    expired: tuple[StatusEffectType, ...] = ()


def add_status_effect(
    effects: Iterable[StatusEffect],
    effect: StatusEffect,
) -> list[StatusEffect]:
    """Return a new effect list with *effect* applied.

    If an effect of the same type is already present, its duration becomes
    ``max(existing, new)`` and no second instance is added.
    """
    result: list[StatusEffect] = []
    merged = False
    for existing in effects:
        if existing.type == effect.type and not merged:
            result.append(existing.model_copy(
                update={"duration": max(existing.duration, effect.duration)},
            ))
            merged = True
        else:
            result.append(existing)
    if not merged:
        result.append(effect)
    return result


def has_status_effect(effects: Iterable[StatusEffect], effect_type: StatusEffectType) -> bool:
    return any(e.type == effect_type for e in effects)


def remove_status_effect(
    effects: Iterable[StatusEffect],
    effect_type: StatusEffectType,
) -> list[StatusEffect]:
    """Return a new effect list without any effect of *effect_type*."""
    return [e for e in effects if e.type != effect_type]


def tick_durations(effects: Iterable[StatusEffect]) -> tuple[list[StatusEffect], list[StatusEffectType]]:
    """Count every duration down by one.

    Returns ``(remaining, expired_types)``; effects reaching 0 are dropped.
    """
    remaining: list[StatusEffect] = []
    expired: list[StatusEffectType] = []
    for effect in effects:
        duration = effect.duration - 1
        if duration > 0:
            remaining.append(effect.model_copy(update={"duration": duration}))
        else:
            expired.append(effect.type)
    return remaining, expired


def process_status_effects(
    combatant: Combatant,
    rules: CombatRules = DEFAULT_RULES,
) -> StatusTickResult:
    """Apply one turn of every active effect on *combatant*.

    Poison, burn and bleed remove a percentage of max HP (at least 1);
    starvation, dehydration and exhaustion drain flat amounts of HP,
    stamina and mana.  Other effect types have no per-turn effect but
    still count down.  Resources never drop below 0.
    """
    updated = combatant.model_copy(deep=True)
    lines: list[str] = []
    hp_lost = stamina_lost = mana_lost = 0

    for effect in combatant.status_effects:
        etype = effect.type
        if etype == StatusEffectType.POISON:
            amount = _percent_of_max_hp(updated, rules.poison_hp_fraction)
            hp_lost += updated.take_damage(amount)
            lines.append(f"[Poison] Takes {amount} poison damage.")
        elif etype == StatusEffectType.BURN:
            amount = _percent_of_max_hp(updated, rules.burn_hp_fraction)
            hp_lost += updated.take_damage(amount)
            lines.append(f"[Burn] Takes {amount} fire damage.")
        elif etype == StatusEffectType.BLEED:
            amount = _percent_of_max_hp(updated, rules.bleed_hp_fraction)
            hp_lost += updated.take_damage(amount)
            lines.append(f"[Bleed] Takes {amount} bleeding damage.")
        elif etype == StatusEffectType.STARVATION:
            hp_lost += updated.take_damage(rules.starvation_hp_loss)
            stamina_lost += _drain_stamina(updated, rules.starvation_stamina_loss)
            lines.append("[Starvation] Stamina drains away and health slowly falls.")
        elif etype == StatusEffectType.DEHYDRATION:
            hp_lost += updated.take_damage(rules.dehydration_hp_loss)
            mana_lost += _drain_mana(updated, rules.dehydration_mana_loss)
            lines.append("[Dehydration] Mana drains away and health slowly falls.")
        elif etype == StatusEffectType.EXHAUSTION:
            stamina_lost += _drain_stamina(updated, rules.exhaustion_stamina_loss)
            lines.append("[Exhaustion] Stamina drains rapidly.")

    remaining, expired = tick_durations(combatant.status_effects)
    updated.status_effects = remaining

    return StatusTickResult(
        combatant=updated,
        hp_lost=hp_lost,
        stamina_lost=stamina_lost,
        mana_lost=mana_lost,
        log_lines=tuple(lines),
        expired=tuple(expired),
    )


def _percent_of_max_hp(combatant: Combatant, fraction: float) -> int:
    return max(1, math.floor(combatant.max_hp * fraction))


def _drain_stamina(combatant: Combatant, amount: int) -> int:
    before = combatant.current_stamina
    combatant.spend_stamina(amount)
    return before - combatant.current_stamina


def _drain_mana(combatant: Combatant, amount: int) -> int:
    before = combatant.current_mana
    combatant.spend_mana(amount)
    return before - combatant.current_mana
