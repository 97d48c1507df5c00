"""Pydantic v2 models for encounter baseline data.

These models define the structured output of balance analysis:
per-enemy encounter metrics and the baseline that groups them.  All are
serializable to/from JSON.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class EncounterMetrics(BaseModel):
    """Per-enemy balance metrics computed from batch telemetry."""

    enemy_id: str
    total_runs: int
    # Outcomes
    wins: int
    losses: int
    fled: int
    stalled: int
    timeouts: int
    win_rate: float
    loss_rate: float
    flee_rate: float
    # Averages per encounter
    avg_turns: float
    avg_hp_lost: float
    avg_damage_dealt: float
    avg_damage_taken: float
    avg_enemy_healed: float
    # Roll rates
    hit_rate: float
    """Player hits / player attack rolls."""
    crit_rate: float
    """Player critical hits / player attack rolls."""
    dodge_rate: float
    """Enemy attacks evaded / player attack rolls (one enemy action per round)."""
    enemy_action_distribution: dict[str, float] = Field(default_factory=dict)
    """Share of each enemy action type across all rounds."""
    skill_usage: dict[str, int] = Field(default_factory=dict)
    """Total uses of each player skill."""


class EncounterBaseline(BaseModel):
    """Top-level baseline data structure."""

    agent: str
    """Agent type used for generation (e.g. 'heuristic')."""
    player_template: str
    num_runs: int
    """Runs per enemy."""
    generated_at: str
    """ISO 8601 timestamp."""
    encounters: list[EncounterMetrics]
