"""Tests for RandomAgent and HeuristicAgent."""

from __future__ import annotations

from aether_combat.ir.elements import DamageType
from aether_combat.ir.items import WeaponDefinition
from aether_combat.ir.skills import SkillDefinition, SkillType
from aether_combat.sim.core.game_state import EncounterState
from aether_combat.sim.core.rng import GameRNG
from aether_combat.sim.play_agents import HeuristicAgent, RandomAgent
from tests.sim.conftest import make_enemy, make_player

_SLASH = SkillDefinition(id="cut", name="Cut", damage_type=DamageType.SLASH)
_FIRE = SkillDefinition(id="fireball", name="Fireball", damage_type=DamageType.FIRE)
_BUFF = SkillDefinition(id="focus", name="Focus", skill_type=SkillType.BUFF)
_SWORD = WeaponDefinition(id="sword", name="Sword", damage_type=DamageType.SLASH)


def _make_state(enemy=None, weapon=None) -> EncounterState:
    return EncounterState(player=make_player(weapon=weapon), enemy=enemy or make_enemy(), in_combat=True)


class TestRandomAgent:
    def test_no_skills_basic_attack(self):
        assert RandomAgent(GameRNG(1)).choose_skill(_make_state(), []) is None

    def test_always_skill_when_basic_chance_zero(self):
        agent = RandomAgent(GameRNG(1), basic_attack_chance=0.0)
        for _ in range(20):
            assert agent.choose_skill(_make_state(), [_SLASH, _FIRE]) in (_SLASH, _FIRE)

    def test_always_basic_when_chance_one(self):
        agent = RandomAgent(GameRNG(1), basic_attack_chance=1.0)
        assert agent.choose_skill(_make_state(), [_SLASH]) is None


class TestHeuristicAgent:
    def test_exploits_weakness(self):
        enemy = make_enemy(weaknesses=[DamageType.FIRE])
        assert HeuristicAgent().choose_skill(_make_state(enemy), [_SLASH, _FIRE]) is _FIRE

    def test_skill_beats_plain_attack(self):
        assert HeuristicAgent().choose_skill(_make_state(), [_SLASH, _FIRE]) is _SLASH

    def test_avoids_resisted_skill(self):
        enemy = make_enemy(resistances=[DamageType.FIRE], weaknesses=[DamageType.SLASH])
        state = _make_state(enemy, weapon=_SWORD)
        # sword slash x1.5 beats resisted fireball x0.75
        assert HeuristicAgent().choose_skill(state, [_FIRE]) is None

    def test_ignores_non_damaging_skills(self):
        assert HeuristicAgent().choose_skill(_make_state(), [_BUFF]) is None

    def test_no_enemy(self):
        state = EncounterState(player=make_player())
        assert HeuristicAgent().choose_skill(state, [_SLASH]) is None
