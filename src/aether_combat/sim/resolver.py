"""Combat round resolution.

One round is: the player acts (attack roll, then damage on a hit), then the
enemy performs the action chosen by :class:`~aether_combat.sim.enemy_ai.EnemyAI`.
:func:`resolve_combat_round` is a pure function of its inputs and the dice it
rolls: it reads both combatants and returns a :class:`CombatRoundResult` of
deltas plus a human-readable log.  Applying the deltas is the caller's job
(see :func:`aether_combat.sim.encounter.apply_round_result`).

Dice are consumed in a fixed order: player d20, player damage die (on a
hit), then the enemy's d20 and damage die, or its heal die.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

from pydantic import BaseModel, ConfigDict

from aether_combat.ir.elements import AFFINITY_DAMAGE_TYPES, DamageType, ElementType
from aether_combat.ir.enemy_ai import EnemyAction, EnemyActionType
from aether_combat.sim.mechanics.attack import AttackRoll, roll_attack
from aether_combat.sim.mechanics.damage import DamageResult, calculate_damage
from aether_combat.sim.mechanics.modifiers import (
    ability_modifier,
    attack_bonus,
    enemy_armor_class,
    player_armor_class,
)
from aether_combat.sim.mechanics.resources import action_cost
from aether_combat.sim.rules import DEFAULT_RULES, CombatRules

if TYPE_CHECKING:
    from aether_combat.ir.items import WeaponDefinition
    from aether_combat.ir.skills import SkillDefinition
    from aether_combat.sim.core.entities import Combatant, Enemy
    from aether_combat.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)


class CombatRoundResult(BaseModel):
    """Deltas and log produced by one combat round.

    ``is_hit``/``is_crit`` describe the player's attack; ``enemy_is_crit``
    the enemy's.
    """

    model_config = ConfigDict(frozen=True)

    log_lines: tuple[str, ...] = ()
    enemy_damage_taken: int = 0
    player_damage_taken: int = 0
    enemy_healed: int = 0
    is_hit: bool = False
    is_crit: bool = False
    player_dodge: bool = False
    stamina_cost: int = 0
    mana_cost: int = 0
    enemy_is_crit: bool = False
    enemy_action_type: EnemyActionType | None = None

    @property
    def log(self) -> str:
        return "\n".join(self.log_lines)


class _AttackTyping(NamedTuple):
    damage_type: DamageType
    element_type: ElementType
    multiplier: float


def resolve_combat_round(
    player: Combatant,
    enemy: Enemy,
    rng: GameRNG,
    skill: SkillDefinition | None = None,
    enemy_action: EnemyAction | None = None,
    weapon: WeaponDefinition | None = None,
    rules: CombatRules = DEFAULT_RULES,
) -> CombatRoundResult:
    """Resolve one full round between *player* and *enemy*.

    Parameters
    ----------
    player:
        The acting player.  Only stats, resistances and weaknesses are read.
    enemy:
        The opposing enemy.
    rng:
        Dice source.
    skill:
        Skill used by the player this round, or ``None`` for a basic attack.
    enemy_action:
        The enemy's decision for this round.  ``None`` makes the enemy
        counter-attack with a plain blunt hit.
    weapon:
        The player's equipped weapon, if any.
    """
    log: list[str] = []
    stamina_cost, mana_cost = action_cost(skill, rules)

    # --- player action typing ---------------------------------------------
    typing = _player_attack_typing(skill, weapon, rules)
    if skill is not None:
        log.append(
            f"[Player] Uses skill: {skill.name}"
            f" (costs {stamina_cost} stamina, {mana_cost} mana)"
        )
        log.append(f"> Element: {typing.element_type.value} | Type: {typing.damage_type.value}")
    elif weapon is not None:
        log.append(f"[Player] Attacks with {weapon.name} (costs {stamina_cost} stamina)")
        log.append(f"> Element: {typing.element_type.value} | Type: {typing.damage_type.value}")
    else:
        log.append(f"[Player] Attacks unarmed (costs {stamina_cost} stamina)")

    # --- player attack roll -------------------------------------------------
    enemy_defending = enemy_action is not None and enemy_action.type == EnemyActionType.DEFEND
    target_ac = enemy_armor_class(enemy.stats, defending=enemy_defending, rules=rules)
    if enemy_defending:
        log.append(
            f"> [Enemy defends] {enemy.name} takes a defensive stance"
            f" (AC +{rules.defend_ac_bonus})."
        )

    player_roll = roll_attack(rng, attack_bonus(player.stats), target_ac, rules)
    log.append(f"{player_roll.describe()} {_roll_verdict(player_roll)}")

    enemy_damage_taken = 0
    if player_roll.hit:
        dealt = calculate_damage(
            rng,
            player.stats,
            typing.damage_type,
            typing.element_type,
            enemy.resistances,
            enemy.weaknesses,
            weapon=weapon,
            critical=player_roll.critical,
            skill_multiplier=typing.multiplier,
            rules=rules,
        )
        enemy_damage_taken = dealt.damage
        log.append(f"> [Damage] {dealt.detail}")
        log.append(f"> Deals {dealt.damage} {typing.damage_type.value} damage{_effect_note(dealt)}")
    else:
        log.append("> Missed (evaded).")

    # --- enemy action -------------------------------------------------------
    player_damage_taken = 0
    enemy_healed = 0
    player_dodge = False
    enemy_is_crit = False

    if enemy_action is None:
        player_damage_taken, player_dodge = _resolve_counter_attack(player, enemy, rng, rules, log)
    else:
        log.append(f"[Enemy] {enemy_action.description or enemy_action.type.value}")
        action_type = enemy_action.type

        if action_type in (EnemyActionType.ATTACK, EnemyActionType.SKILL):
            enemy_typing = _enemy_attack_typing(enemy, enemy_action, rules)
            enemy_roll = roll_attack(
                rng,
                attack_bonus(enemy.stats),
                player_armor_class(player.stats, rules),
                rules,
            )
            log.append(f"{enemy_roll.describe()} {_roll_verdict(enemy_roll, enemy=True)}")
            if enemy_roll.hit:
                enemy_is_crit = enemy_roll.critical
                taken = calculate_damage(
                    rng,
                    enemy.stats,
                    enemy_typing.damage_type,
                    enemy_typing.element_type,
                    player.resistances,
                    player.weaknesses,
                    critical=enemy_roll.critical,
                    skill_multiplier=enemy_typing.multiplier,
                    rules=rules,
                )
                player_damage_taken = taken.damage
                log.append(f"> [Damage] {taken.detail}")
                log.append(
                    f"> Player takes {taken.damage} {enemy_typing.damage_type.value}"
                    f" damage{_effect_note(taken)}"
                )
            else:
                player_dodge = True
                log.append("> The player dodges!")

        elif action_type == EnemyActionType.DEFEND:
            log.append("> (No attack this round.)")

        elif action_type == EnemyActionType.HEAL:
            heal_roll = rng.roll(rules.heal_die)
            enemy_healed = max(0, heal_roll + ability_modifier(enemy.stats.intelligence))
            log.append(f"> Recovers {enemy_healed} HP.")

        elif action_type == EnemyActionType.FLEE:
            log.append(f"> ({enemy.name} tries to flee the battle...)")

        elif action_type == EnemyActionType.PHASE_TRANSITION:
            log.append(f"*** {enemy.name} enters a new phase! ***")
            unlocked = _next_phase_skills(enemy)
            if unlocked:
                log.append(f"> New skills: {', '.join(unlocked)}")

        else:
            log.append(f"> ({enemy.name} waits.)")

    result = CombatRoundResult(
        log_lines=tuple(log),
        enemy_damage_taken=enemy_damage_taken,
        player_damage_taken=player_damage_taken,
        enemy_healed=enemy_healed,
        is_hit=player_roll.hit,
        is_crit=player_roll.critical,
        player_dodge=player_dodge,
        stamina_cost=stamina_cost,
        mana_cost=mana_cost,
        enemy_is_crit=enemy_is_crit,
        enemy_action_type=enemy_action.type if enemy_action is not None else None,
    )
    logger.debug(
        "Round vs %s: player hit=%s crit=%s dealt=%d | enemy %s dealt=%d healed=%d",
        enemy.name,
        result.is_hit,
        result.is_crit,
        result.enemy_damage_taken,
        result.enemy_action_type.value if result.enemy_action_type else "counter",
        result.player_damage_taken,
        result.enemy_healed,
    )
    return result


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _player_attack_typing(
    skill: SkillDefinition | None,
    weapon: WeaponDefinition | None,
    rules: CombatRules,
) -> _AttackTyping:
    if skill is not None:
        return _AttackTyping(
            skill.damage_type or DamageType.BLUNT,
            skill.element_type or ElementType.NEUTRAL,
            rules.skill_multiplier,
        )
    if weapon is not None:
        return _AttackTyping(
            weapon.damage_type or DamageType.SLASH,
            weapon.element_type or ElementType.NEUTRAL,
            1.0,
        )
    return _AttackTyping(DamageType.BLUNT, ElementType.NEUTRAL, 1.0)


def _enemy_attack_typing(enemy: Enemy, action: EnemyAction, rules: CombatRules) -> _AttackTyping:
    """Typing of an enemy attack.

    Skills hit 1.5x harder and take their damage type from the enemy's
    elemental affinity; plain attacks are neutral slashes.
    """
    if action.type != EnemyActionType.SKILL or not action.skill_id:
        return _AttackTyping(DamageType.SLASH, ElementType.NEUTRAL, 1.0)

    affinity = enemy.elemental_affinity
    if affinity == ElementType.NEUTRAL:
        return _AttackTyping(DamageType.BLUNT, ElementType.NEUTRAL, rules.skill_multiplier)
    return _AttackTyping(
        AFFINITY_DAMAGE_TYPES.get(affinity, DamageType.BLUNT),
        affinity,
        rules.skill_multiplier,
    )


def _next_phase_skills(enemy: Enemy) -> list[str]:
    phases = enemy.ai_config.phases
    next_index = enemy.current_phase + 1
    if next_index < len(phases):
        return phases[next_index].new_skills
    return []


def _resolve_counter_attack(
    player: Combatant,
    enemy: Enemy,
    rng: GameRNG,
    rules: CombatRules,
    log: list[str],
) -> tuple[int, bool]:
    """Plain blunt counter-attack used when no enemy action was supplied.

    Returns ``(player_damage_taken, player_dodge)``.
    """
    roll = roll_attack(
        rng,
        attack_bonus(enemy.stats),
        player_armor_class(player.stats, rules),
        rules,
        honor_naturals=False,
    )
    if not roll.hit:
        log.append(f"{roll.describe('Counter')} -> miss (the player dodges)")
        return 0, True

    taken = calculate_damage(
        rng,
        enemy.stats,
        DamageType.BLUNT,
        ElementType.NEUTRAL,
        player.resistances,
        player.weaknesses,
        rules=rules,
    )
    log.append(f"{roll.describe('Counter')} -> hit")
    log.append(f"> [Damage] {taken.detail}")
    log.append(f"> Player takes {taken.damage} damage")
    return taken.damage, False


def _roll_verdict(roll: AttackRoll, enemy: bool = False) -> str:
    if roll.critical:
        return "-> **ENEMY CRITICAL!**" if enemy else "-> **CRITICAL!**"
    if roll.fumble:
        return "-> **ENEMY BLUNDER!**" if enemy else "-> **FUMBLE!**"
    return "-> hit" if roll.hit else "-> miss"


def _effect_note(result: DamageResult) -> str:
    if result.multiplier > 1:
        return " (effect exceptional!)"
    if result.multiplier < 1:
        return " (effect weak...)"
    return ""
