"""Encounter state owned by the caller between turns.

The combat core never mutates an ``EncounterState``; the turn driver in
:mod:`aether_combat.sim.encounter` returns a new one each turn.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from aether_combat.ir.elements import DamageType
from aether_combat.sim.core.entities import Enemy, Player


class BestiaryEntry(BaseModel):
    """What the player has learned about an enemy kind."""

    id: str
    name: str
    description: str = ""
    kill_count: int = 0
    first_encountered_turn: int = 0
    weaknesses: list[DamageType] = Field(default_factory=list)
    resistances: list[DamageType] = Field(default_factory=list)


class EncounterState(BaseModel):
    """Player, active enemy and bookkeeping for one ongoing session."""

    player: Player
    enemy: Enemy | None = None
    in_combat: bool = False
    turn_count: int = 0
    bestiary: list[BestiaryEntry] = Field(default_factory=list)

    def find_bestiary_entry(self, enemy: Enemy) -> BestiaryEntry | None:
        """Return the bestiary entry matching *enemy* by id or by name."""
        for entry in self.bestiary:
            if entry.id == enemy.enemy_id or entry.name == enemy.name:
                return entry
        return None
