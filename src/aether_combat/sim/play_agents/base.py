"""Base class for automated player policies used in encounter simulation.

All play agents must subclass ``PlayAgent`` and implement
:meth:`PlayAgent.choose_skill`.  The combat simulator calls it once per
player turn.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aether_combat.ir.skills import SkillDefinition
    from aether_combat.sim.core.game_state import EncounterState


class PlayAgent(ABC):
    """Base class for agents that play the player's side of a fight."""

    @abstractmethod
    def choose_skill(
        self,
        state: EncounterState,
        usable_skills: list[SkillDefinition],
    ) -> SkillDefinition | None:
        """Choose the player's action for this turn.

        Parameters
        ----------
        state:
            The current encounter, giving the agent full observability.
        usable_skills:
            Player skills that are off cooldown and affordable right now.

        Returns
        -------
        SkillDefinition | None
            The skill to use, or ``None`` for a basic attack.
        """
