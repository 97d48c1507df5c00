"""Action costs, affordability and skill cooldowns."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from aether_combat.sim.rules import DEFAULT_RULES, CombatRules

if TYPE_CHECKING:
    from aether_combat.ir.skills import SkillDefinition
    from aether_combat.sim.core.entities import Combatant


def action_cost(
    skill: SkillDefinition | None,
    rules: CombatRules = DEFAULT_RULES,
) -> tuple[int, int]:
    """Return ``(stamina, mana)`` paid for an action.

    A skill costs its own stamina/mana (defaults 5 stamina, 0 mana when
    unset); a basic attack costs 2 stamina.
    """
    if skill is None:
        return rules.basic_attack_stamina_cost, 0
    stamina = skill.stamina_cost if skill.stamina_cost is not None else rules.default_skill_stamina_cost
    mana = skill.mana_cost if skill.mana_cost is not None else rules.default_skill_mana_cost
    return stamina, mana


def affordability_problem(
    combatant: Combatant,
    skill: SkillDefinition | None,
    rules: CombatRules = DEFAULT_RULES,
) -> str | None:
    """Explain why *combatant* cannot pay for the action, or ``None`` if it can."""
    stamina, mana = action_cost(skill, rules)
    if combatant.current_stamina < stamina:
        return f"not enough stamina ({combatant.current_stamina}/{stamina})"
    if combatant.current_mana < mana:
        return f"not enough mana ({combatant.current_mana}/{mana})"
    return None


def can_afford(
    combatant: Combatant,
    skill: SkillDefinition | None,
    rules: CombatRules = DEFAULT_RULES,
) -> bool:
    return affordability_problem(combatant, skill, rules) is None


def is_on_cooldown(skill: SkillDefinition) -> bool:
    return skill.current_cooldown > 0


def tick_cooldowns(
    skills: Iterable[SkillDefinition],
    used_skill_id: str | None = None,
    rules: CombatRules = DEFAULT_RULES,
) -> list[SkillDefinition]:
    """Return new skill copies with cooldowns advanced by one player turn.

    Every cooldown drops by 1 (not below 0); the skill just used restarts
    at its base cooldown (``rules.default_skill_cooldown`` when unset).
    """
    ticked: list[SkillDefinition] = []
    for skill in skills:
        remaining = max(0, skill.current_cooldown - 1)
        if used_skill_id is not None and skill.id == used_skill_id:
            remaining = skill.cooldown if skill.cooldown is not None else rules.default_skill_cooldown
        ticked.append(skill.model_copy(update={"current_cooldown": remaining}))
    return ticked
