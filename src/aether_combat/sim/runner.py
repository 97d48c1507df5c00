"""Encounter simulation runner -- ties the turn driver, a play agent and
telemetry together.

Provides two key classes:

- **CombatSimulator**: Runs a single encounter to completion.
- **BatchRunner**: Orchestrates many simulation runs (optionally in parallel).
"""

from __future__ import annotations

import logging
import multiprocessing
from typing import Any, TYPE_CHECKING

from aether_combat.ir.enemy_ai import EnemyActionType
from aether_combat.sim.core.game_state import EncounterState
from aether_combat.sim.core.rng import GameRNG
from aether_combat.sim.encounter import TurnOutcome, play_turn
from aether_combat.sim.mechanics.resources import can_afford, is_on_cooldown
from aether_combat.sim.play_agents.base import PlayAgent
from aether_combat.sim.play_agents.random_agent import RandomAgent
from aether_combat.sim.rules import DEFAULT_RULES, CombatRules
from aether_combat.sim.telemetry import EncounterTelemetry

if TYPE_CHECKING:
    from aether_combat.ir.skills import SkillDefinition
    from aether_combat.sim.content.registry import ContentRegistry
    from aether_combat.sim.core.entities import Player

logger = logging.getLogger(__name__)

_MAX_TURNS = 200


# =====================================================================
# CombatSimulator
# =====================================================================

class CombatSimulator:
    """Runs one encounter turn by turn until it ends.

    Parameters
    ----------
    agent:
        Chooses the player's action every turn.
    rules:
        Combat tuning passed through to the turn driver.
    max_turns:
        Safety cap; hitting it ends the encounter with ``"timeout"``.
    """

    def __init__(
        self,
        agent: PlayAgent,
        rules: CombatRules = DEFAULT_RULES,
        max_turns: int = _MAX_TURNS,
    ) -> None:
        self.agent = agent
        self.rules = rules
        self.max_turns = max_turns

    def run_encounter(
        self,
        state: EncounterState,
        rng: GameRNG,
    ) -> EncounterTelemetry:
        """Fight the enemy in *state* to a conclusion.

        Dice and enemy decisions use separate streams forked from *rng*
        (``"dice"`` and ``"enemy_ai"``).  The encounter ends when either
        side reaches 0 HP, the enemy flees, the player can pay for no
        action (``"stalled"``) or ``max_turns`` is reached.  If both sides
        fall in the same round the player wins, since the player strikes
        first.

        Raises
        ------
        ValueError
            If *state* has no enemy.
        """
        if state.enemy is None:
            raise ValueError("run_encounter needs an enemy in the encounter state")

        dice_rng = rng.fork("dice")
        ai_rng = rng.fork("enemy_ai")
        if not state.in_combat:
            state = state.model_copy(update={"in_combat": True})

        telemetry = EncounterTelemetry(
            seed=rng.seed,
            enemy_id=state.enemy.enemy_id,
            result="timeout",
            turns=0,
            player_hp_start=state.player.current_hp,
            player_hp_end=state.player.current_hp,
            hp_lost=0,
        )

        result: str | None = None
        while state.turn_count < self.max_turns:
            skill = self._choose_action(state)
            if skill is _STALLED:
                result = "stalled"
                break

            outcome = play_turn(
                state,
                dice_rng,
                skill_id=skill.id if skill is not None else None,
                rules=self.rules,
                ai_rng=ai_rng,
            )
            if not outcome.accepted:
                logger.warning(
                    "Agent %s chose a rejected action (%s); ending encounter",
                    type(self.agent).__name__,
                    outcome.reason,
                )
                result = "stalled"
                break

            state = outcome.state
            self._record_turn(telemetry, outcome, skill)

            if outcome.enemy_defeated:
                result = "win"
                break
            if outcome.player_defeated:
                result = "loss"
                break
            if outcome.enemy_fled:
                result = "fled"
                break

        if result is None:
            logger.warning(
                "Encounter vs %s (seed %d) hit the %d-turn cap",
                telemetry.enemy_id, telemetry.seed, self.max_turns,
            )
            result = "timeout"

        telemetry.result = result
        telemetry.turns = state.turn_count
        telemetry.player_hp_end = state.player.current_hp
        telemetry.hp_lost = telemetry.player_hp_start - telemetry.player_hp_end
        logger.debug(
            "Encounter vs %s: %s after %d turns (hp lost %d)",
            telemetry.enemy_id, result, telemetry.turns, telemetry.hp_lost,
        )
        return telemetry

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _choose_action(self, state: EncounterState) -> Any:
        """Ask the agent for an action; ``_STALLED`` if none is payable."""
        player = state.player
        usable = self._usable_skills(player)
        basic_ok = can_afford(player, None, self.rules)
        if not usable and not basic_ok:
            return _STALLED

        skill = self.agent.choose_skill(state, usable)
        if skill is None and not basic_ok:
            # Too tired to swing but a skill is still payable.
            skill = usable[0]
        return skill

    def _usable_skills(self, player: Player) -> list[SkillDefinition]:
        return [
            s for s in player.skills
            if not is_on_cooldown(s) and can_afford(player, s, self.rules)
        ]

    @staticmethod
    def _record_turn(
        telemetry: EncounterTelemetry,
        outcome: TurnOutcome,
        skill: SkillDefinition | None,
    ) -> None:
        if skill is not None:
            telemetry.skills_used[skill.id] = telemetry.skills_used.get(skill.id, 0) + 1

        round_result = outcome.round_result
        if round_result is None:
            return

        telemetry.player_attacks += 1
        if round_result.is_hit:
            telemetry.player_hits += 1
        if round_result.is_crit:
            telemetry.player_crits += 1
        if round_result.player_dodge:
            telemetry.player_dodges += 1
        telemetry.damage_dealt += round_result.enemy_damage_taken
        telemetry.damage_taken += round_result.player_damage_taken
        telemetry.enemy_healed += round_result.enemy_healed

        action = outcome.enemy_action
        if action is not None:
            key = action.type.value
            telemetry.enemy_actions[key] = telemetry.enemy_actions.get(key, 0) + 1
            if action.type == EnemyActionType.PHASE_TRANSITION:
                telemetry.phase_transitions += 1


_STALLED = object()


# =====================================================================
# BatchRunner
# =====================================================================

def _run_single_encounter(
    registry: ContentRegistry,
    agent: PlayAgent,
    seed: int,
    encounter_config: dict[str, Any],
    rules: CombatRules = DEFAULT_RULES,
) -> EncounterTelemetry:
    """Run a single encounter with the given seed and configuration."""
    master_rng = GameRNG(seed)
    content_rng = master_rng.fork("content")

    enemy_id = encounter_config.get("enemy_id", "cave_goblin")
    player = registry.build_player(encounter_config.get("player_template", "wanderer"))
    weapon_id = encounter_config.get("weapon_id")
    if weapon_id is not None:
        weapon = registry.get_weapon(weapon_id)
        if weapon is None:
            raise KeyError(f"unknown weapon {weapon_id!r}")
        player.weapon = weapon
    enemy = registry.build_enemy(enemy_id, content_rng)

    state = EncounterState(player=player, enemy=enemy, in_combat=True)
    simulator = CombatSimulator(
        agent,
        rules=rules,
        max_turns=encounter_config.get("max_turns", _MAX_TURNS),
    )
    return simulator.run_encounter(state, master_rng)


def _make_agent(agent_class: type[PlayAgent], seed: int) -> PlayAgent:
    agent_rng = GameRNG(seed).fork("agent")
    try:
        return agent_class(rng=agent_rng)  # type: ignore[call-arg]
    except TypeError:
        return agent_class()  # type: ignore[call-arg]


def _worker_run_single(args: tuple) -> EncounterTelemetry:
    """Top-level worker function for multiprocessing (must be picklable)."""
    content_dir, agent_class, seed, encounter_config, rules = args

    from aether_combat.sim.content.registry import ContentRegistry

    registry = ContentRegistry()
    registry.load_all(content_dir)

    agent = _make_agent(agent_class, seed)
    return _run_single_encounter(registry, agent, seed, encounter_config, rules)


class BatchRunner:
    """Runs many seeded encounters, optionally in parallel."""

    def __init__(
        self,
        registry: ContentRegistry,
        agent_class: type[PlayAgent] = RandomAgent,
        rules: CombatRules = DEFAULT_RULES,
    ) -> None:
        self.registry = registry
        self.agent_class = agent_class
        self.rules = rules

    def run_batch(
        self,
        n_runs: int,
        encounter_config: dict[str, Any],
        base_seed: int = 42,
        parallel: bool = False,
    ) -> list[EncounterTelemetry]:
        """Run *n_runs* encounters with seeds ``base_seed .. base_seed + n_runs - 1``.

        *encounter_config* keys: ``enemy_id``, ``player_template`` and
        optionally ``weapon_id`` and ``max_turns``.
        """
        seeds = [base_seed + i for i in range(n_runs)]

        if parallel and n_runs > 1:
            return self._run_parallel(seeds, encounter_config)
        return self._run_sequential(seeds, encounter_config)

    def _run_sequential(
        self,
        seeds: list[int],
        encounter_config: dict[str, Any],
    ) -> list[EncounterTelemetry]:
        results: list[EncounterTelemetry] = []
        for seed in seeds:
            agent = _make_agent(self.agent_class, seed)
            results.append(_run_single_encounter(
                self.registry, agent, seed, encounter_config, self.rules,
            ))
        return results

    def _run_parallel(
        self,
        seeds: list[int],
        encounter_config: dict[str, Any],
    ) -> list[EncounterTelemetry]:
        """Run simulations in parallel using multiprocessing.

        Rather than pickling the registry, we pass the content directory
        and reload in each worker process.
        """
        content_dir = str(self.registry.content_dir)
        work_items = [
            (content_dir, self.agent_class, seed, encounter_config, self.rules)
            for seed in seeds
        ]

        n_workers = min(len(seeds), multiprocessing.cpu_count() or 1)

        with multiprocessing.Pool(processes=n_workers) as pool:
            results = pool.map(_worker_run_single, work_items)

        return results
