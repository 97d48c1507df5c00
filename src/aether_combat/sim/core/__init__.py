"""Core simulation primitives for the combat engine."""

from aether_combat.sim.core.entities import Combatant, Enemy, Player, Stats
from aether_combat.sim.core.game_state import BestiaryEntry, EncounterState
from aether_combat.sim.core.rng import GameRNG

__all__ = [
    # rng
    "GameRNG",
    # entities
    "Stats",
    "Combatant",
    "Player",
    "Enemy",
    # game_state
    "BestiaryEntry",
    "EncounterState",
]
