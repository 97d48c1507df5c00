"""Combat constants table.

Every numeric default used by the damage calculator, round resolver,
status effect processor and enemy decision policy lives here, so the
engine has no scattered literals.  Pass a customised :class:`CombatRules`
to any public operation to tune it; :data:`DEFAULT_RULES` reproduces the
shipped game.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CombatRules(BaseModel):
    """Immutable bundle of combat tuning values."""

    model_config = ConfigDict(frozen=True)

    # -- dice ----------------------------------------------------------------
    attack_die: int = 20
    critical_roll: int = 20
    fumble_roll: int = 1
    weapon_die: int = 8
    unarmed_die: int = 6
    magic_die: int = 6
    heal_die: int = 8

    # -- armor class -----------------------------------------------------------
    base_armor_class: int = 10
    defend_ac_bonus: int = 5

    # -- damage ----------------------------------------------------------------
    weakness_multiplier: float = 1.5
    resistance_multiplier: float = 0.5
    critical_multiplier: float = 2.0
    skill_multiplier: float = 1.5
    minimum_damage: int = 1

    # -- costs and cooldowns ---------------------------------------------------
    basic_attack_stamina_cost: int = 2
    default_skill_stamina_cost: int = 5
    default_skill_mana_cost: int = 0
    default_skill_cooldown: int = 3

    # -- boss phases -----------------------------------------------------------
    phase_heal_fraction: float = 0.2

    # -- status effects --------------------------------------------------------
    poison_hp_fraction: float = 0.05
    burn_hp_fraction: float = 0.03
    bleed_hp_fraction: float = 0.04
    starvation_hp_loss: int = 1
    starvation_stamina_loss: int = 5
    dehydration_hp_loss: int = 1
    dehydration_mana_loss: int = 5
    exhaustion_stamina_loss: int = 10

    # -- enemy decision policy -------------------------------------------------
    basic_skill_chance: float = 0.2
    flee_chance: float = 0.4
    heal_chance: float = 0.8
    aggressive_skill_chance: float = 0.6
    defensive_low_hp: float = 0.4
    defensive_defend_chance: float = 0.5
    defensive_support_chance: float = 0.4
    tactical_finisher_player_hp: float = 0.3
    tactical_finisher_min_mana: int = 10
    tactical_debuff_chance: float = 0.3
    boss_desperation_hp: float = 0.2
    boss_ultimate_chance: float = 0.3
    boss_ultimate_min_mana: int = 50
    boss_special_chance: float = 0.4

    # Latin-script markers match whole words only; CJK markers match anywhere.
    heal_name_markers: tuple[str, ...] = (
        "heal", "heals", "healing", "cure", "mend", "mending",
        "restore", "restores", "restoration", "治癒", "回復",
    )
    heal_description_markers: tuple[str, ...] = ("restores health", "restore health", "回復生命")
    ultimate_name_markers: tuple[str, ...] = ("ultimate", "奧義", "終極")


DEFAULT_RULES = CombatRules()
