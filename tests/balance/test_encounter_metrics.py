"""Tests for encounter metric computation."""

from __future__ import annotations

import pytest

from aether_combat.balance.metrics import compute_all_metrics, compute_encounter_metrics
from aether_combat.sim.telemetry import EncounterTelemetry


def _make_run(
    result: str = "win",
    enemy_id: str = "cave_goblin",
    turns: int = 4,
    hp_lost: int = 10,
    **kwargs,
) -> EncounterTelemetry:
    defaults = dict(
        seed=0,
        enemy_id=enemy_id,
        result=result,
        turns=turns,
        player_hp_start=60,
        player_hp_end=60 - hp_lost,
        hp_lost=hp_lost,
        damage_dealt=20,
        damage_taken=hp_lost,
        player_attacks=turns,
        player_hits=turns // 2,
    )
    defaults.update(kwargs)
    return EncounterTelemetry(**defaults)


class TestComputeEncounterMetrics:
    def test_outcome_rates(self):
        runs = [_make_run("win"), _make_run("win"), _make_run("loss"), _make_run("fled")]
        m = compute_encounter_metrics(runs)
        assert m.enemy_id == "cave_goblin"
        assert (m.wins, m.losses, m.fled, m.stalled, m.timeouts) == (2, 1, 1, 0, 0)
        assert m.win_rate == pytest.approx(0.5)
        assert m.loss_rate == pytest.approx(0.25)
        assert m.flee_rate == pytest.approx(0.25)

    def test_averages_and_roll_rates(self):
        runs = [
            _make_run(turns=4, hp_lost=10, player_crits=1, player_dodges=2),
            _make_run(turns=6, hp_lost=20, player_crits=0, player_dodges=1),
        ]
        m = compute_encounter_metrics(runs)
        assert m.avg_turns == pytest.approx(5.0)
        assert m.avg_hp_lost == pytest.approx(15.0)
        assert m.hit_rate == pytest.approx(5 / 10)
        assert m.crit_rate == pytest.approx(1 / 10)
        assert m.dodge_rate == pytest.approx(3 / 10)

    def test_action_distribution_and_skill_usage(self):
        runs = [
            _make_run(enemy_actions={"Attack": 3, "Skill": 1}, skills_used={"fireball": 2}),
            _make_run(enemy_actions={"Attack": 1, "Flee": 1}, skills_used={"fireball": 1, "power_strike": 1}),
        ]
        m = compute_encounter_metrics(runs)
        assert m.enemy_action_distribution == pytest.approx({"Attack": 4 / 6, "Flee": 1 / 6, "Skill": 1 / 6})
        assert m.skill_usage == {"fireball": 3, "power_strike": 1}

    def test_empty(self):
        m = compute_encounter_metrics([], enemy_id="nobody")
        assert m.total_runs == 0
        assert m.win_rate == 0.0
        assert m.hit_rate == 0.0


class TestComputeAllMetrics:
    def test_groups_by_enemy(self):
        runs = [_make_run(enemy_id="wolf"), _make_run(enemy_id="golem"), _make_run("loss", enemy_id="wolf")]
        metrics = compute_all_metrics(runs)
        assert [m.enemy_id for m in metrics] == ["golem", "wolf"]
        assert metrics[1].total_runs == 2
