"""Baseline generation: run sims, compute metrics, save/load JSON.

Orchestrates BatchRunner -> metric computation -> EncounterBaseline model.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from aether_combat.balance.metrics import compute_encounter_metrics
from aether_combat.balance.models import EncounterBaseline
from aether_combat.sim.play_agents.heuristic_agent import HeuristicAgent
from aether_combat.sim.runner import BatchRunner

if TYPE_CHECKING:
    from aether_combat.sim.content.registry import ContentRegistry

logger = logging.getLogger(__name__)


def generate_baseline(
    registry: ContentRegistry,
    enemy_ids: list[str] | None = None,
    num_runs: int = 1_000,
    base_seed: int = 42,
    player_template: str = "wanderer",
    parallel: bool = False,
) -> EncounterBaseline:
    """Simulate every enemy and compute an encounter baseline.

    Parameters
    ----------
    registry:
        Fully loaded ContentRegistry.
    enemy_ids:
        Enemies to simulate.  Defaults to every enemy in the registry.
    num_runs:
        Encounters simulated per enemy.
    base_seed:
        Starting seed for reproducible runs.
    player_template:
        Player template fighting every encounter.
    """
    if enemy_ids is None:
        enemy_ids = sorted(registry.enemies)

    runner = BatchRunner(registry, agent_class=HeuristicAgent)
    encounters = []
    for enemy_id in enemy_ids:
        logger.info("Simulating %d encounters vs %s", num_runs, enemy_id)
        results = runner.run_batch(
            n_runs=num_runs,
            encounter_config={"enemy_id": enemy_id, "player_template": player_template},
            base_seed=base_seed,
            parallel=parallel,
        )
        encounters.append(compute_encounter_metrics(results, enemy_id))

    return EncounterBaseline(
        agent="heuristic",
        player_template=player_template,
        num_runs=num_runs,
        generated_at=datetime.now(timezone.utc).isoformat(),
        encounters=encounters,
    )


def save_baseline(baseline: EncounterBaseline, path: Path) -> None:
    """Save baseline to JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(baseline.model_dump(), indent=2))


def load_baseline(path: Path) -> EncounterBaseline:
    """Load baseline from JSON file."""
    data = json.loads(path.read_text())
    return EncounterBaseline.model_validate(data)
