"""Turn driver -- everything the host does around one combat round.

The round resolver only computes deltas.  This module is the caller side:
it validates the player's choice, advances cooldowns, ticks status effects,
asks the enemy AI for its action, resolves the round and writes the
result back into a *new* :class:`EncounterState`.  Inputs are never
mutated, so a turn can be retried or discarded freely before the host
commits the returned state.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from aether_combat.ir.enemy_ai import EnemyAction, EnemyActionType
from aether_combat.sim.core.game_state import BestiaryEntry, EncounterState
from aether_combat.sim.enemy_ai import EnemyAI
from aether_combat.sim.mechanics.resources import (
    affordability_problem,
    is_on_cooldown,
    tick_cooldowns,
)
from aether_combat.sim.mechanics.status_effects import process_status_effects
from aether_combat.sim.resolver import CombatRoundResult, resolve_combat_round
from aether_combat.sim.rules import DEFAULT_RULES, CombatRules

if TYPE_CHECKING:
    from aether_combat.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)


class TurnOutcome(BaseModel):
    """Everything produced by one player turn."""

    model_config = ConfigDict(frozen=True)

    state: EncounterState
    """State after the turn (the input state when the turn was rejected)."""

    accepted: bool = True
    reason: str | None = None
    """Why the turn was rejected."""

    enemy_action: EnemyAction | None = None
    round_result: CombatRoundResult | None = None
    log_lines: tuple[str, ...] = ()

    @property
    def log(self) -> str:
        return "\n".join(self.log_lines)

    @property
    def enemy_defeated(self) -> bool:
        return self.state.enemy is not None and self.state.enemy.is_dead

    @property
    def player_defeated(self) -> bool:
        return self.state.player.is_dead

    @property
    def enemy_fled(self) -> bool:
        return self.enemy_action is not None and self.enemy_action.type == EnemyActionType.FLEE


def play_turn(
    state: EncounterState,
    rng: GameRNG,
    skill_id: str | None = None,
    rules: CombatRules = DEFAULT_RULES,
    ai_rng: GameRNG | None = None,
) -> TurnOutcome:
    """Play one player turn.

    Parameters
    ----------
    state:
        Current encounter state.  Not modified.
    rng:
        Dice source for the round.
    skill_id:
        Id of the player skill to use, or ``None`` for a basic attack.
    ai_rng:
        Separate stream for enemy decisions; defaults to *rng*.

    The turn is rejected (``accepted=False``, state unchanged) when the
    skill is unknown or on cooldown, or, during combat, when the player
    cannot pay its stamina or mana cost.
    """
    skill = None
    if skill_id is not None:
        skill = state.player.get_skill(skill_id)
        if skill is None:
            return _rejected(state, f"unknown skill {skill_id!r}")
        if is_on_cooldown(skill):
            return _rejected(state, f"{skill.name} is on cooldown ({skill.current_cooldown})")

    fighting = state.in_combat and state.enemy is not None and not state.enemy.is_dead
    if fighting:
        problem = affordability_problem(state.player, skill, rules)
        if problem is not None:
            return _rejected(state, problem)

    new_state = state.model_copy(deep=True)
    new_state.player.skills = tick_cooldowns(new_state.player.skills, skill_id, rules)

    log: list[str] = []
    if new_state.player.status_effects:
        tick = process_status_effects(new_state.player, rules)
        new_state.player = tick.combatant
        log.extend(tick.log_lines)

    enemy_action = None
    round_result = None
    if fighting:
        player = new_state.player
        enemy = new_state.enemy
        ai = EnemyAI(ai_rng or rng, rules)
        enemy_action = ai.decide_action(enemy, player)
        round_result = resolve_combat_round(
            player,
            enemy,
            rng,
            skill=skill,
            enemy_action=enemy_action,
            weapon=player.weapon,
            rules=rules,
        )
        player.spend_stamina(round_result.stamina_cost)
        player.spend_mana(round_result.mana_cost)
        log.extend(round_result.log_lines)
        new_state, notes = apply_round_result(new_state, enemy_action, round_result, rules)
        log.extend(notes)

    new_state.turn_count += 1
    return TurnOutcome(
        state=new_state,
        enemy_action=enemy_action,
        round_result=round_result,
        log_lines=tuple(log),
    )


def apply_round_result(
    state: EncounterState,
    enemy_action: EnemyAction | None,
    result: CombatRoundResult,
    rules: CombatRules = DEFAULT_RULES,
) -> tuple[EncounterState, list[str]]:
    """Write a round's deltas into a copy of *state*.

    Returns ``(new_state, notes)`` where *notes* are extra log lines
    (defeat markers, phase healing).  HP is clamped to ``[0, max_hp]``.
    A phase transition advances the enemy's phase counter and heals it by
    ``rules.phase_heal_fraction`` of max HP.  The bestiary records the
    first encounter with an enemy and counts kills.
    """
    new_state = state.model_copy(deep=True)
    notes: list[str] = []
    enemy = new_state.enemy

    if enemy is not None:
        entry = new_state.find_bestiary_entry(enemy)
        if entry is None:
            entry = BestiaryEntry(
                id=enemy.enemy_id,
                name=enemy.name,
                description=enemy.description,
                first_encountered_turn=new_state.turn_count,
                weaknesses=list(enemy.weaknesses),
                resistances=list(enemy.resistances),
            )
            new_state.bestiary.append(entry)

        if result.enemy_damage_taken > 0:
            enemy.take_damage(result.enemy_damage_taken)
            if enemy.is_dead:
                notes.append(f"[Enemy {enemy.name} has been defeated!]")
                entry.kill_count += 1
                logger.debug("%s defeated on turn %d", enemy.name, new_state.turn_count)

        if not enemy.is_dead:
            if result.enemy_healed > 0:
                enemy.heal(result.enemy_healed)

            if enemy_action is not None and enemy_action.type == EnemyActionType.PHASE_TRANSITION:
                heal_amount = math.floor(enemy.max_hp * rules.phase_heal_fraction)
                enemy.current_phase += 1
                enemy.heal(heal_amount)
                notes.append(f"(recovers {heal_amount} HP)")

    if result.player_damage_taken > 0:
        new_state.player.take_damage(result.player_damage_taken)
        if new_state.player.is_dead:
            notes.append("[The player has fallen!]")

    return new_state, notes


def _rejected(state: EncounterState, reason: str) -> TurnOutcome:
    logger.debug("Turn rejected: %s", reason)
    return TurnOutcome(state=state, accepted=False, reason=reason, log_lines=(reason,))
