"""Tests for damage calculation."""

from __future__ import annotations

import math

from aether_combat.ir.elements import DamageType, ElementType
from aether_combat.ir.items import WeaponDefinition
from aether_combat.sim.core.entities import Stats
from aether_combat.sim.core.rng import GameRNG
from aether_combat.sim.mechanics.damage import calculate_damage, elemental_multiplier
from tests.sim.conftest import ScriptedRNG

_SWORD = WeaponDefinition(id="sword", name="Sword", damage_type=DamageType.SLASH)


# ---------------------------------------------------------------------------
# Base die and stat bonus
# ---------------------------------------------------------------------------

class TestBaseDamage:
    def test_unarmed_uses_d6_and_strength(self):
        rng = ScriptedRNG(rolls=[4])
        result = calculate_damage(rng, Stats(strength=16))
        assert result.damage == 7
        assert result.base_roll == 4
        assert result.stat_bonus == 3
        assert not result.magical
        assert result.detail == "[unarmed 1d6(4)] [STR +3]"

    def test_weapon_uses_d8(self):
        result = calculate_damage(ScriptedRNG(rolls=[8]), Stats(), DamageType.SLASH, weapon=_SWORD)
        assert result.damage == 8
        assert result.trace[0] == "[weapon 1d8(8)]"

    def test_magical_damage_type_uses_intelligence(self):
        result = calculate_damage(
            ScriptedRNG(rolls=[5]), Stats(strength=20, intelligence=16), DamageType.FIRE,
        )
        assert result.magical
        assert result.damage == 5 + 3

    def test_elemental_weapon_counts_as_magical(self):
        result = calculate_damage(
            ScriptedRNG(rolls=[3]), Stats(intelligence=12), DamageType.SLASH, ElementType.FIRE,
            weapon=_SWORD,
        )
        assert result.magical
        assert result.trace[0] == "[magic 1d6(3)]"
        assert result.damage == 4


# ---------------------------------------------------------------------------
# Multipliers
# ---------------------------------------------------------------------------

class TestMultipliers:
    def test_weakness(self):
        result = calculate_damage(
            ScriptedRNG(rolls=[4]), Stats(), DamageType.BLUNT, target_weaknesses=[DamageType.BLUNT],
        )
        assert result.multiplier == 1.5
        assert result.damage == 6

    def test_resistance(self):
        result = calculate_damage(
            ScriptedRNG(rolls=[5]), Stats(), DamageType.BLUNT, target_resistances=[DamageType.BLUNT],
        )
        assert result.multiplier == 0.5
        assert result.damage == 2

    def test_weakness_and_resistance_stack(self):
        result = calculate_damage(
            ScriptedRNG(rolls=[6]), Stats(strength=14), DamageType.SLASH,
            target_resistances=[DamageType.SLASH], target_weaknesses=[DamageType.SLASH],
        )
        assert result.multiplier == 0.75
        assert result.damage == 6  # floor((6 + 2) * 0.75)

    def test_stacking_with_seeded_rng(self):
        expected_roll = GameRNG(1234).roll(6)
        result = calculate_damage(
            GameRNG(1234), Stats(strength=14), DamageType.SLASH,
            target_resistances=[DamageType.SLASH], target_weaknesses=[DamageType.SLASH],
        )
        assert result.base_roll == expected_roll
        assert result.damage == max(1, math.floor((expected_roll + 2) * 0.75))

    def test_skill_then_critical(self):
        result = calculate_damage(
            ScriptedRNG(rolls=[8]), Stats(), DamageType.SLASH, weapon=_SWORD,
            critical=True, skill_multiplier=1.5,
        )
        assert result.damage == 24
        assert "[critical x2]" in result.trace
        assert "[skill x1.5]" in result.trace

    def test_unrelated_type_unaffected(self):
        assert elemental_multiplier(DamageType.FIRE, [DamageType.ICE], [DamageType.HOLY]) == 1.0


# ---------------------------------------------------------------------------
# Minimum damage
# ---------------------------------------------------------------------------

class TestMinimumDamage:
    def test_negative_modifier_floors_at_one(self):
        result = calculate_damage(ScriptedRNG(rolls=[1]), Stats(strength=0))
        assert result.damage == 1

    def test_zero_multiplier_floors_at_one(self):
        result = calculate_damage(ScriptedRNG(rolls=[6]), Stats(), skill_multiplier=0.0)
        assert result.damage == 1

    def test_always_at_least_one(self):
        rng = GameRNG(99)
        for strength in range(0, 21):
            result = calculate_damage(
                rng, Stats(strength=strength), DamageType.PIERCE,
                target_resistances=[DamageType.PIERCE],
            )
            assert result.damage >= 1
