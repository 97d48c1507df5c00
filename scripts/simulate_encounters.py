"""Run batch encounter simulations and print balance metrics.

Usage:
    python scripts/simulate_encounters.py --enemy cave_goblin [--runs 1000] [--agent heuristic]
    python scripts/simulate_encounters.py --baseline [--runs 1000] [--output data/baselines/]
    python scripts/simulate_encounters.py --enemy ember_drake --trace --seed 7
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from aether_combat.balance.baselines import generate_baseline, save_baseline
from aether_combat.balance.metrics import compute_encounter_metrics
from aether_combat.balance.models import EncounterBaseline
from aether_combat.balance.report import generate_text_report
from aether_combat.sim.content.registry import ContentRegistry
from aether_combat.sim.core.game_state import EncounterState
from aether_combat.sim.core.rng import GameRNG
from aether_combat.sim.encounter import play_turn
from aether_combat.sim.play_agents import HeuristicAgent, RandomAgent
from aether_combat.sim.runner import BatchRunner

_AGENTS = {"random": RandomAgent, "heuristic": HeuristicAgent}


def _trace(registry: ContentRegistry, enemy_id: str, player_template: str, seed: int) -> None:
    """Play one encounter with basic attacks and print every turn's log."""
    rng = GameRNG(seed)
    state = EncounterState(
        player=registry.build_player(player_template),
        enemy=registry.build_enemy(enemy_id, rng.fork("content")),
        in_combat=True,
    )
    dice_rng = rng.fork("dice")
    ai_rng = rng.fork("enemy_ai")
    print(f"{state.player.name} ({state.player.current_hp} HP) vs {state.enemy.name} ({state.enemy.current_hp} HP)")

    while state.turn_count < 50:
        outcome = play_turn(state, dice_rng, ai_rng=ai_rng)
        if not outcome.accepted:
            print(f"Turn rejected: {outcome.reason}")
            break
        state = outcome.state
        print(f"\n--- Turn {state.turn_count} ---")
        print(outcome.log)
        print(f"[HP] player {state.player.current_hp} | enemy {state.enemy.current_hp}")
        if outcome.enemy_defeated or outcome.player_defeated or outcome.enemy_fled:
            break


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate combat encounters")
    parser.add_argument("--enemy", type=str, default="cave_goblin", help="Enemy template id")
    parser.add_argument("--player", type=str, default="wanderer", help="Player template id")
    parser.add_argument("--agent", choices=sorted(_AGENTS), default="heuristic", help="Play agent")
    parser.add_argument("--runs", type=int, default=1_000, help="Encounters per enemy")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--parallel", action="store_true", help="Use a multiprocessing pool")
    parser.add_argument("--baseline", action="store_true", help="Simulate every enemy and save a baseline")
    parser.add_argument("--output", type=str, default="data/baselines/", help="Baseline output directory")
    parser.add_argument("--trace", action="store_true", help="Print the log of a single encounter")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    registry = ContentRegistry()
    registry.load_all()

    if args.trace:
        _trace(registry, args.enemy, args.player, args.seed)
        return

    t0 = time.perf_counter()
    if args.baseline:
        print(f"Running {args.runs:,} encounters against {len(registry.enemies)} enemies...")
        baseline = generate_baseline(
            registry,
            num_runs=args.runs,
            base_seed=args.seed,
            player_template=args.player,
            parallel=args.parallel,
        )
        json_path = Path(args.output) / f"{args.player}_heuristic_{args.runs}.json"
        save_baseline(baseline, json_path)
        print(f"Saved baseline to {json_path}")
    else:
        print(f"Running {args.runs:,} encounters against {args.enemy}...")
        runner = BatchRunner(registry, agent_class=_AGENTS[args.agent])
        results = runner.run_batch(
            n_runs=args.runs,
            encounter_config={"enemy_id": args.enemy, "player_template": args.player},
            base_seed=args.seed,
            parallel=args.parallel,
        )
        baseline = EncounterBaseline(
            agent=args.agent,
            player_template=args.player,
            num_runs=args.runs,
            generated_at=time.strftime("%Y-%m-%dT%H:%M:%S"),
            encounters=[compute_encounter_metrics(results, args.enemy)],
        )
    print(f"Done in {time.perf_counter() - t0:.1f}s")

    print()
    print(generate_text_report(baseline))


if __name__ == "__main__":
    main()
