"""Shared fixtures and helpers for simulation tests."""

from __future__ import annotations

from typing import Any, Sequence, TypeVar

import pytest

from aether_combat.ir.enemy_ai import EnemyAIConfig
from aether_combat.sim.content.registry import ContentRegistry
from aether_combat.sim.core.entities import Enemy, Player, Stats
from aether_combat.sim.core.rng import GameRNG

T = TypeVar("T")


class ScriptedRNG(GameRNG):
    """GameRNG double that replays queued values instead of random ones.

    ``rolls`` feed :meth:`roll`, ``floats`` feed :meth:`random_float` (and
    therefore :meth:`chance`), ``choices`` are indices used by
    :meth:`random_choice`.  Running out of a queue fails the test, so
    every test states exactly which draws it expects.
    """

    def __init__(
        self,
        rolls: Sequence[int] = (),
        floats: Sequence[float] = (),
        choices: Sequence[int] = (),
    ) -> None:
        super().__init__(seed=0)
        self.rolls = list(rolls)
        self.floats = list(floats)
        self.choices = list(choices)

    def roll(self, sides: int) -> int:
        if not self.rolls:
            raise AssertionError(f"unexpected d{sides} roll")
        value = self.rolls.pop(0)
        if not 1 <= value <= sides:
            raise AssertionError(f"scripted roll {value} does not fit a d{sides}")
        return value

    def random_float(self) -> float:
        if not self.floats:
            raise AssertionError("unexpected random_float draw")
        return self.floats.pop(0)

    def random_choice(self, seq: Sequence[T]) -> T:
        if not self.choices:
            raise AssertionError("unexpected random_choice draw")
        return seq[self.choices.pop(0)]

    def fork(self, name: str) -> GameRNG:
        return self

    @property
    def exhausted(self) -> bool:
        return not (self.rolls or self.floats or self.choices)


def make_player(**kwargs: Any) -> Player:
    defaults: dict[str, Any] = dict(
        name="Aria", max_hp=50, current_hp=50,
        max_mana=30, current_mana=30, max_stamina=20, current_stamina=20,
    )
    defaults.update(kwargs)
    return Player(**defaults)


def make_enemy(ai: dict[str, Any] | None = None, **kwargs: Any) -> Enemy:
    defaults: dict[str, Any] = dict(
        name="Goblin", enemy_id="goblin", max_hp=20, current_hp=20,
        stats=Stats(),
    )
    defaults.update(kwargs)
    if ai is not None:
        defaults["ai_config"] = EnemyAIConfig(**ai)
    return Enemy(**defaults)


@pytest.fixture(scope="module")
def registry() -> ContentRegistry:
    """Module-scoped registry with the bundled content loaded once."""
    reg = ContentRegistry()
    reg.load_all()
    return reg
