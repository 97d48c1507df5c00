"""Tests for status effect application and per-turn processing."""

from __future__ import annotations

from aether_combat.ir.status_effects import StatusEffect, StatusEffectType
from aether_combat.sim.core.entities import Player
from aether_combat.sim.mechanics.status_effects import (
    add_status_effect,
    has_status_effect,
    process_status_effects,
    remove_status_effect,
    tick_durations,
)
from tests.sim.conftest import make_player


def _effect(etype: StatusEffectType, duration: int, name: str | None = None) -> StatusEffect:
    return StatusEffect(type=etype, name=name or etype.value.title(), duration=duration)


# ---------------------------------------------------------------------------
# add / remove
# ---------------------------------------------------------------------------

class TestAddStatusEffect:
    def test_adds_new_type(self):
        effects = add_status_effect([], _effect(StatusEffectType.POISON, 3))
        assert len(effects) == 1
        assert has_status_effect(effects, StatusEffectType.POISON)

    def test_same_type_takes_max_duration(self):
        effects = [_effect(StatusEffectType.POISON, 2, name="Venom")]
        effects = add_status_effect(effects, _effect(StatusEffectType.POISON, 5))
        assert len(effects) == 1
        assert effects[0].duration == 5
        assert effects[0].name == "Venom"

    def test_shorter_reapplication_keeps_longer_duration(self):
        effects = [_effect(StatusEffectType.BURN, 4)]
        effects = add_status_effect(effects, _effect(StatusEffectType.BURN, 1))
        assert [e.duration for e in effects] == [4]

    def test_never_duplicates_a_type(self):
        effects: list[StatusEffect] = []
        for duration in (1, 3, 2, 3):
            effects = add_status_effect(effects, _effect(StatusEffectType.BLEED, duration))
            effects = add_status_effect(effects, _effect(StatusEffectType.STUN, duration))
        assert sorted(e.type.value for e in effects) == ["bleed", "stun"]

    def test_input_list_untouched(self):
        original = [_effect(StatusEffectType.POISON, 2)]
        add_status_effect(original, _effect(StatusEffectType.POISON, 6))
        assert original[0].duration == 2

    def test_remove(self):
        effects = [_effect(StatusEffectType.POISON, 2), _effect(StatusEffectType.STUN, 1)]
        assert remove_status_effect(effects, StatusEffectType.POISON) == [effects[1]]


# ---------------------------------------------------------------------------
# durations
# ---------------------------------------------------------------------------

class TestDurations:
    def test_duration_one_removed_after_one_pass(self):
        remaining, expired = tick_durations([_effect(StatusEffectType.FREEZE, 1)])
        assert remaining == []
        assert expired == [StatusEffectType.FREEZE]

    def test_duration_three_survives_two_passes(self):
        player = make_player(status_effects=[_effect(StatusEffectType.STUN, 3)])
        for expected in (2, 1):
            player = process_status_effects(player).combatant
            assert player.status_effects[0].duration == expected
        result = process_status_effects(player)
        assert result.combatant.status_effects == []
        assert result.expired == (StatusEffectType.STUN,)


# ---------------------------------------------------------------------------
# process_status_effects
# ---------------------------------------------------------------------------

class TestProcessStatusEffects:
    def test_percentage_effects(self):
        player = make_player(
            max_hp=100, current_hp=100,
            status_effects=[
                _effect(StatusEffectType.POISON, 2),
                _effect(StatusEffectType.BURN, 2),
                _effect(StatusEffectType.BLEED, 2),
            ],
        )
        result = process_status_effects(player)
        assert result.hp_lost == 5 + 3 + 4
        assert result.combatant.current_hp == 88
        assert result.log_lines == (
            "[Poison] Takes 5 poison damage.",
            "[Burn] Takes 3 fire damage.",
            "[Bleed] Takes 4 bleeding damage.",
        )

    def test_percentage_effects_deal_at_least_one(self):
        player = make_player(max_hp=10, current_hp=10, status_effects=[_effect(StatusEffectType.POISON, 1)])
        assert process_status_effects(player).combatant.current_hp == 9

    def test_starvation_and_dehydration(self):
        player = make_player(
            current_stamina=3, current_mana=10,
            status_effects=[
                _effect(StatusEffectType.STARVATION, 2),
                _effect(StatusEffectType.DEHYDRATION, 2),
            ],
        )
        result = process_status_effects(player)
        assert result.hp_lost == 2
        assert result.stamina_lost == 3
        assert result.mana_lost == 5
        assert result.combatant.current_stamina == 0
        assert result.combatant.current_mana == 5

    def test_exhaustion(self):
        player = make_player(current_stamina=20, status_effects=[_effect(StatusEffectType.EXHAUSTION, 1)])
        result = process_status_effects(player)
        assert result.combatant.current_stamina == 10
        assert result.log_lines == ("[Exhaustion] Stamina drains rapidly.",)

    def test_hp_never_negative(self):
        player = make_player(current_hp=1, status_effects=[_effect(StatusEffectType.BURN, 1)])
        assert process_status_effects(player).combatant.current_hp == 0

    def test_no_tick_effect_types_only_count_down(self):
        player = make_player(status_effects=[_effect(StatusEffectType.BUFF, 2)])
        result = process_status_effects(player)
        assert result.log_lines == ()
        assert result.combatant.current_hp == player.current_hp

    def test_returns_copy_of_same_class(self):
        player = make_player(status_effects=[_effect(StatusEffectType.POISON, 2)])
        result = process_status_effects(player)
        assert isinstance(result.combatant, Player)
        assert player.current_hp == 50
        assert player.status_effects[0].duration == 2

    def test_duplicate_effects_on_load_tick_once(self):
        player = make_player(
            max_hp=100, current_hp=100,
            status_effects=[_effect(StatusEffectType.POISON, 2), _effect(StatusEffectType.POISON, 3)],
        )
        result = process_status_effects(player)
        assert result.hp_lost == 5
        assert [(e.type, e.duration) for e in result.combatant.status_effects] == [
            (StatusEffectType.POISON, 2),
        ]
