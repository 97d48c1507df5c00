"""Enemy decision policy.

Chooses one :class:`~aether_combat.ir.enemy_ai.EnemyAction` per enemy turn.
Rules are checked in priority order and the first that fires wins:

1. Boss phase transition (bosses with configured phases only).
2. Flee when HP is under the flee threshold (never for bosses).
3. Self-heal when HP is under the heal threshold and a healing skill exists.
4. Archetype behaviour (Aggressive, Defensive, Tactical, Boss, else Basic).

Every probability is an independent draw from the injected RNG; the only
memory between turns is the enemy's phase counter and resources.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Callable

from aether_combat.ir.enemy_ai import EnemyAction, EnemyActionType, EnemyAIType
from aether_combat.ir.skills import SkillDefinition, SkillType
from aether_combat.sim.rules import DEFAULT_RULES, CombatRules

if TYPE_CHECKING:
    from aether_combat.sim.core.entities import Combatant, Enemy
    from aether_combat.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

PHASE_TRANSITION_SKILL_ID = "phase-transition"


class EnemyAI:
    """Decision policy for enemies.

    Parameters
    ----------
    rng:
        Source for every probabilistic branch.  Inject a seeded or scripted
        RNG to make decisions reproducible.
    rules:
        Probabilities and thresholds.
    """

    def __init__(self, rng: GameRNG, rules: CombatRules = DEFAULT_RULES) -> None:
        self._rng = rng
        self._rules = rules

    def decide_action(self, enemy: Enemy, player: Combatant) -> EnemyAction:
        """Pick the action *enemy* takes this turn against *player*."""
        action = self._decide(enemy, player)
        logger.debug(
            "%s (%s, hp=%.2f) chose %s%s",
            enemy.name,
            enemy.ai_config.type.value,
            enemy.hp_fraction,
            action.type.value,
            f" [{action.skill_id}]" if action.skill_id else "",
        )
        return action

    def _decide(self, enemy: Enemy, player: Combatant) -> EnemyAction:
        config = enemy.ai_config
        hp_percent = enemy.hp_fraction * 100

        # 1. Boss phase transition pre-empts everything else
        if config.type == EnemyAIType.BOSS and config.phases:
            next_index = enemy.current_phase + 1
            if next_index < len(config.phases):
                next_phase = config.phases[next_index]
                if hp_percent <= next_phase.trigger_hp_percentage:
                    return EnemyAction(
                        type=EnemyActionType.PHASE_TRANSITION,
                        description=next_phase.dialogue or (
                            f"{enemy.name}'s aura shifts violently!"
                            f" It enters the {next_phase.name} phase!"
                        ),
                        skill_id=PHASE_TRANSITION_SKILL_ID,
                    )

        # 2. Flee on low HP
        if config.flee_threshold and hp_percent < config.flee_threshold:
            if config.type != EnemyAIType.BOSS and self._rng.chance(self._rules.flee_chance):
                return EnemyAction(
                    type=EnemyActionType.FLEE,
                    description=f"{enemy.name} looks terrified and tries to flee!",
                )

        # 3. Heal self on low HP
        if config.heal_threshold and hp_percent < config.heal_threshold:
            heal_skill = _find_skill(enemy, self._is_heal_skill)
            if heal_skill is not None and self._rng.chance(self._rules.heal_chance):
                return EnemyAction(
                    type=EnemyActionType.HEAL,
                    skill_id=heal_skill.id,
                    description=f"{enemy.name} chants {heal_skill.name}, trying to recover.",
                )

        # 4. Archetype behaviour
        if config.type == EnemyAIType.AGGRESSIVE:
            return self._aggressive(enemy)
        if config.type == EnemyAIType.DEFENSIVE:
            return self._defensive(enemy)
        if config.type == EnemyAIType.TACTICAL:
            return self._tactical(enemy, player)
        if config.type == EnemyAIType.BOSS:
            return self._boss(enemy)
        return self._basic(enemy)

    # ------------------------------------------------------------------
    # Archetypes
    # ------------------------------------------------------------------

    def _basic(self, enemy: Enemy) -> EnemyAction:
        chance = enemy.ai_config.special_skill_chance
        if chance is None:
            chance = self._rules.basic_skill_chance
        if self._rng.chance(chance) and enemy.skills:
            skill = self._rng.random_choice(enemy.skills)
            return _skill_action(skill, f"{enemy.name} uses {skill.name}!")
        return _attack_action(f"{enemy.name} attacks!")

    def _aggressive(self, enemy: Enemy) -> EnemyAction:
        if self._rng.chance(self._rules.aggressive_skill_chance):
            skill = _find_skill(enemy, lambda s: s.deals_damage or s.skill_type == SkillType.ACTIVE)
            if skill is not None:
                return _skill_action(skill, f"{enemy.name} ferociously unleashes {skill.name}!")
        return _attack_action(f"{enemy.name} lunges at you wildly!")

    def _defensive(self, enemy: Enemy) -> EnemyAction:
        rules = self._rules
        if enemy.hp_fraction < rules.defensive_low_hp and self._rng.chance(rules.defensive_defend_chance):
            return EnemyAction(
                type=EnemyActionType.DEFEND,
                description=f"{enemy.name} takes a defensive stance, bracing for the blow.",
            )
        if self._rng.chance(rules.defensive_support_chance):
            skill = _find_skill(enemy, lambda s: s.skill_type in (SkillType.BUFF, SkillType.DEBUFF))
            if skill is not None:
                return _skill_action(skill, f"{enemy.name} casts {skill.name}!")
        return _attack_action(f"{enemy.name} attacks cautiously.")

    def _tactical(self, enemy: Enemy, player: Combatant) -> EnemyAction:
        rules = self._rules
        if player.hp_fraction < rules.tactical_finisher_player_hp:
            finisher = _find_skill(
                enemy,
                lambda s: s.deals_damage and (s.mana_cost or 0) > rules.tactical_finisher_min_mana,
            )
            if finisher is not None:
                return _skill_action(
                    finisher,
                    f"{enemy.name} sees you falter and releases {finisher.name}!",
                )

        debuff = _find_skill(enemy, lambda s: s.skill_type == SkillType.DEBUFF)
        if debuff is not None and self._rng.chance(rules.tactical_debuff_chance):
            return _skill_action(debuff, f"{enemy.name} tries to weaken you with {debuff.name}.")

        return self._basic(enemy)

    def _boss(self, enemy: Enemy) -> EnemyAction:
        rules = self._rules
        if enemy.hp_fraction < rules.boss_desperation_hp and self._rng.chance(rules.boss_ultimate_chance):
            ultimate = _find_skill(enemy, self._is_ultimate_skill)
            if ultimate is not None:
                return _skill_action(
                    ultimate,
                    f"{enemy.name} gathers all its strength and unleashes its ultimate: {ultimate.name}!!!",
                )

        if self._rng.chance(rules.boss_special_chance):
            special = _find_skill(enemy, lambda s: s.skill_type == SkillType.SPECIAL or s.deals_damage)
            if special is not None:
                return _skill_action(special, f"{enemy.name}'s presence bears down as it uses {special.name}!")

        return _attack_action(f"{enemy.name} strikes with overwhelming force!")

    # ------------------------------------------------------------------
    # Skill predicates
    # ------------------------------------------------------------------

    def _is_heal_skill(self, skill: SkillDefinition) -> bool:
        name = skill.name.lower()
        description = skill.description.lower()
        return (
            _mentions(name, self._rules.heal_name_markers)
            or _mentions(description, self._rules.heal_description_markers)
        )

    def _is_ultimate_skill(self, skill: SkillDefinition) -> bool:
        return (
            _mentions(skill.name.lower(), self._rules.ultimate_name_markers)
            or (skill.mana_cost or 0) >= self._rules.boss_ultimate_min_mana
        )


def decide_enemy_action(
    enemy: Enemy,
    player: Combatant,
    rng: GameRNG,
    rules: CombatRules = DEFAULT_RULES,
) -> EnemyAction:
    """Functional shortcut for ``EnemyAI(rng, rules).decide_action(enemy, player)``."""
    return EnemyAI(rng, rules).decide_action(enemy, player)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _find_skill(
    enemy: Enemy,
    predicate: Callable[[SkillDefinition], bool],
) -> SkillDefinition | None:
    """First skill in the enemy's list matching *predicate*."""
    for skill in enemy.skills:
        if predicate(skill):
            return skill
    return None


def _skill_action(skill: SkillDefinition, description: str) -> EnemyAction:
    return EnemyAction(type=EnemyActionType.SKILL, skill_id=skill.id, description=description)


def _attack_action(description: str) -> EnemyAction:
    return EnemyAction(type=EnemyActionType.ATTACK, description=description)


def _mentions(text: str, markers: tuple[str, ...]) -> bool:
    """True if any marker occurs in *text*.

    ASCII markers must match whole words, so "heal" does not match
    "Health Drain"; other markers match as substrings.
    """
    for marker in markers:
        if marker.isascii():
            if re.search(rf"\b{re.escape(marker)}\b", text):
                return True
        elif marker in text:
            return True
    return False
