"""Pure metric computation functions for balance analysis.

All functions take a list of EncounterTelemetry and return structured
metrics.  No side effects, no I/O.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import TYPE_CHECKING

from aether_combat.balance.models import EncounterMetrics

if TYPE_CHECKING:
    from aether_combat.sim.telemetry import EncounterTelemetry


def _ratio(part: float, whole: float) -> float:
    return part / whole if whole else 0.0


def compute_encounter_metrics(
    runs: list[EncounterTelemetry],
    enemy_id: str | None = None,
) -> EncounterMetrics:
    """Compute aggregate metrics for runs against a single enemy.

    *enemy_id* labels the result; it defaults to the first run's enemy.
    """
    if enemy_id is None:
        enemy_id = runs[0].enemy_id if runs else ""

    total = len(runs)
    results = Counter(r.result for r in runs)
    attacks = sum(r.player_attacks for r in runs)

    actions: Counter[str] = Counter()
    skills: Counter[str] = Counter()
    for r in runs:
        actions.update(r.enemy_actions)
        skills.update(r.skills_used)
    total_actions = sum(actions.values())

    return EncounterMetrics(
        enemy_id=enemy_id,
        total_runs=total,
        wins=results["win"],
        losses=results["loss"],
        fled=results["fled"],
        stalled=results["stalled"],
        timeouts=results["timeout"],
        win_rate=_ratio(results["win"], total),
        loss_rate=_ratio(results["loss"], total),
        flee_rate=_ratio(results["fled"], total),
        avg_turns=_ratio(sum(r.turns for r in runs), total),
        avg_hp_lost=_ratio(sum(r.hp_lost for r in runs), total),
        avg_damage_dealt=_ratio(sum(r.damage_dealt for r in runs), total),
        avg_damage_taken=_ratio(sum(r.damage_taken for r in runs), total),
        avg_enemy_healed=_ratio(sum(r.enemy_healed for r in runs), total),
        hit_rate=_ratio(sum(r.player_hits for r in runs), attacks),
        crit_rate=_ratio(sum(r.player_crits for r in runs), attacks),
        dodge_rate=_ratio(sum(r.player_dodges for r in runs), attacks),
        enemy_action_distribution={
            action: count / total_actions for action, count in sorted(actions.items())
        },
        skill_usage=dict(sorted(skills.items())),
    )


def compute_all_metrics(runs: list[EncounterTelemetry]) -> list[EncounterMetrics]:
    """Group runs by enemy and compute metrics for each, sorted by enemy id."""
    by_enemy: dict[str, list[EncounterTelemetry]] = defaultdict(list)
    for r in runs:
        by_enemy[r.enemy_id].append(r)
    return [
        compute_encounter_metrics(by_enemy[enemy_id], enemy_id)
        for enemy_id in sorted(by_enemy)
    ]
