"""Heuristic play agent -- exploits elemental weaknesses.

Scores the basic attack and every usable damaging skill by the multiplier
it would get against the current enemy (skill multiplier x elemental
multiplier) and picks the best.  Ties go to the basic attack, then to the
earliest skill, so mana and stamina are only spent when a skill is
strictly better.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from aether_combat.ir.elements import DamageType
from aether_combat.sim.mechanics.damage import elemental_multiplier
from aether_combat.sim.play_agents.base import PlayAgent
from aether_combat.sim.rules import DEFAULT_RULES, CombatRules

if TYPE_CHECKING:
    from aether_combat.ir.skills import SkillDefinition
    from aether_combat.sim.core.game_state import EncounterState


class HeuristicAgent(PlayAgent):
    """Greedy agent maximising the expected damage multiplier."""

    def __init__(self, rules: CombatRules = DEFAULT_RULES) -> None:
        self._rules = rules

    def choose_skill(
        self,
        state: EncounterState,
        usable_skills: list[SkillDefinition],
    ) -> SkillDefinition | None:
        enemy = state.enemy
        if enemy is None:
            return None

        weapon = state.player.weapon
        if weapon is not None:
            basic_type = weapon.damage_type or DamageType.SLASH
        else:
            basic_type = DamageType.BLUNT
        best_score = elemental_multiplier(basic_type, enemy.resistances, enemy.weaknesses, self._rules)
        best: SkillDefinition | None = None

        for skill in usable_skills:
            if not skill.deals_damage:
                continue
            score = self._rules.skill_multiplier * elemental_multiplier(
                skill.damage_type, enemy.resistances, enemy.weaknesses, self._rules,
            )
            if score > best_score:
                best_score = score
                best = skill
        return best
