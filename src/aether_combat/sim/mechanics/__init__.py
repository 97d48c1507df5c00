"""Core combat mechanics.

Re-exports the primary functions from each mechanics module for convenience.

Usage::

    from aether_combat.sim.mechanics import (
        ability_modifier, attack_bonus, enemy_armor_class, player_armor_class,
        roll_attack,
        calculate_damage, elemental_multiplier,
        add_status_effect, process_status_effects, tick_durations,
        action_cost, can_afford, tick_cooldowns,
    )
"""

# -- modifiers ---------------------------------------------------------------
from .modifiers import (
    ability_modifier,
    attack_bonus,
    enemy_armor_class,
    player_armor_class,
)

# -- attack ------------------------------------------------------------------
from .attack import AttackRoll, roll_attack

# -- damage ------------------------------------------------------------------
from .damage import DamageResult, calculate_damage, elemental_multiplier

# -- status effects ----------------------------------------------------------
from .status_effects import (
    StatusTickResult,
    add_status_effect,
    has_status_effect,
    process_status_effects,
    remove_status_effect,
    tick_durations,
)

# -- resources ---------------------------------------------------------------
from .resources import (
    action_cost,
    affordability_problem,
    can_afford,
    is_on_cooldown,
    tick_cooldowns,
)

__all__ = [
    # modifiers
    "ability_modifier",
    "attack_bonus",
    "enemy_armor_class",
    "player_armor_class",
    # attack
    "AttackRoll",
    "roll_attack",
    # damage
    "DamageResult",
    "calculate_damage",
    "elemental_multiplier",
    # status effects
    "StatusTickResult",
    "add_status_effect",
    "has_status_effect",
    "process_status_effects",
    "remove_status_effect",
    "tick_durations",
    # resources
    "action_cost",
    "affordability_problem",
    "can_afford",
    "is_on_cooldown",
    "tick_cooldowns",
]
