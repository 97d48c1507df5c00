"""Random action agent -- picks skills uniformly at random.

The ``RandomAgent`` is the simplest possible play agent.  It is the
baseline for batch simulation runs: it verifies that the full turn loop
works end-to-end and gives a lower bound on how hard an enemy is.

Behaviour:
    - With probability ``basic_attack_chance`` it makes a basic attack.
    - Otherwise it picks a random usable skill (basic attack if none).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from aether_combat.sim.core.rng import GameRNG
from aether_combat.sim.play_agents.base import PlayAgent

if TYPE_CHECKING:
    from aether_combat.ir.skills import SkillDefinition
    from aether_combat.sim.core.game_state import EncounterState


class RandomAgent(PlayAgent):
    """Agent that uses random skills.

    Parameters
    ----------
    rng:
        Seeded RNG for deterministic randomness.  If ``None``, a default
        ``GameRNG(seed=0)`` is created.
    basic_attack_chance:
        Probability (0.0 -- 1.0) of a basic attack even when skills are
        usable.  Default is 0.5.
    """

    def __init__(
        self,
        rng: GameRNG | None = None,
        basic_attack_chance: float = 0.5,
    ) -> None:
        self._rng = rng or GameRNG(seed=0)
        self._basic_attack_chance = basic_attack_chance

    def choose_skill(
        self,
        state: EncounterState,
        usable_skills: list[SkillDefinition],
    ) -> SkillDefinition | None:
        if not usable_skills:
            return None
        if self._rng.chance(self._basic_attack_chance):
            return None
        return self._rng.random_choice(usable_skills)
