"""The d20 attack roll.

A natural 20 always hits and is a critical; a natural 1 always misses.
Otherwise the attack hits when ``d20 + bonus >= target AC``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from aether_combat.sim.rules import DEFAULT_RULES, CombatRules

if TYPE_CHECKING:
    from aether_combat.sim.core.rng import GameRNG


class AttackRoll(BaseModel):
    """Outcome of one attack roll."""

    model_config = ConfigDict(frozen=True)

    natural: int
    bonus: int
    target_ac: int
    hit: bool
    critical: bool = False
    fumble: bool = False

    @property
    def total(self) -> int:
        return self.natural + self.bonus

    def describe(self, label: str = "Hit check") -> str:
        """One log line, e.g. ``> [Hit check] 1d20(15) + 3 = 18 (vs AC 10)``."""
        return (
            f"> [{label}] 1d20({self.natural}) + {self.bonus} = {self.total}"
            f" (vs AC {self.target_ac})"
        )


def roll_attack(
    rng: GameRNG,
    bonus: int,
    target_ac: int,
    rules: CombatRules = DEFAULT_RULES,
    honor_naturals: bool = True,
) -> AttackRoll:
    """Roll a d20 attack against *target_ac*.

    With ``honor_naturals=False`` the natural 20/1 overrides are skipped and
    only the numeric comparison decides the hit (used by the counter-attack
    fallback when no enemy action is supplied).
    """
    natural = rng.roll(rules.attack_die)
    total = natural + bonus

    if honor_naturals and natural == rules.critical_roll:
        return AttackRoll(natural=natural, bonus=bonus, target_ac=target_ac, hit=True, critical=True)
    if honor_naturals and natural == rules.fumble_roll:
        return AttackRoll(natural=natural, bonus=bonus, target_ac=target_ac, hit=False, fumble=True)
    return AttackRoll(natural=natural, bonus=bonus, target_ac=target_ac, hit=total >= target_ac)
