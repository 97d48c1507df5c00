"""Telemetry data model for per-encounter statistics.

This lightweight dataclass captures everything needed to evaluate how an
enemy plays without storing the entire turn-by-turn history.  It is a
plain ``dataclass`` (not a Pydantic model) to keep collection as cheap as
possible during batch runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class EncounterTelemetry:
    """Stats from a single simulated encounter.

    Attributes
    ----------
    seed:
        The master RNG seed used for this encounter.
    enemy_id:
        Identifier of the enemy template fought.
    result:
        ``"win"`` (enemy reduced to 0 HP), ``"loss"`` (player reduced to
        0 HP), ``"fled"`` (the enemy ran away), ``"stalled"`` (the player
        could not pay for any action) or ``"timeout"``.
    turns:
        Number of player turns taken.
    player_hp_start / player_hp_end:
        Player HP at the start and the end of the encounter.
    hp_lost:
        Total player HP lost (``player_hp_start - player_hp_end``).
    damage_dealt:
        Total damage dealt to the enemy.
    damage_taken:
        Total damage taken by the player from enemy attacks.
    enemy_healed:
        Total HP the enemy healed (heal actions only, not phase heals).
    player_attacks / player_hits / player_crits:
        Attack rolls made by the player and how many hit / were critical.
    player_dodges:
        Enemy attacks the player evaded.
    skills_used:
        Breakdown of player skills used: ``skill_id -> count``.
    enemy_actions:
        Breakdown of enemy action types: ``action type -> count``.
    phase_transitions:
        Boss phase transitions that occurred.
    """

    seed: int
    enemy_id: str
    result: str
    turns: int
    player_hp_start: int
    player_hp_end: int
    hp_lost: int
    damage_dealt: int = 0
    damage_taken: int = 0
    enemy_healed: int = 0
    player_attacks: int = 0
    player_hits: int = 0
    player_crits: int = 0
    player_dodges: int = 0
    skills_used: dict[str, int] = field(default_factory=dict)
    enemy_actions: dict[str, int] = field(default_factory=dict)
    phase_transitions: int = 0
