"""Tests for ContentRegistry loading and combatant construction."""

from __future__ import annotations

import json
import logging

import pytest

from aether_combat.ir.enemy_ai import EnemyAIType
from aether_combat.sim.content.registry import ContentRegistry
from aether_combat.sim.core.rng import GameRNG


def _write_content(tmp_path, skills=(), weapons=(), enemies=(), players=()):
    for name, entries in (
        ("skills.json", skills),
        ("weapons.json", weapons),
        ("enemies.json", enemies),
        ("players.json", players),
    ):
        (tmp_path / name).write_text(json.dumps(list(entries)))
    return tmp_path


class TestBundledContent:
    def test_everything_loads(self, registry: ContentRegistry):
        assert "fireball" in registry.skills
        assert "iron_sword" in registry.weapons
        assert "ember_drake" in registry.enemies
        assert "wanderer" in registry.players

    def test_section_markers_skipped(self, registry: ContentRegistry):
        assert all(not key.startswith("_") for key in registry.enemies)

    def test_every_enemy_builds_cleanly(self, registry: ContentRegistry, caplog):
        with caplog.at_level(logging.WARNING):
            for enemy_id in registry.enemies:
                enemy = registry.build_enemy(enemy_id, GameRNG(1))
                assert enemy.current_hp == enemy.max_hp
        assert caplog.records == []

    def test_every_player_builds_cleanly(self, registry: ContentRegistry, caplog):
        with caplog.at_level(logging.WARNING):
            for template_id in registry.players:
                registry.build_player(template_id)
        assert caplog.records == []


class TestBuildEnemy:
    def test_hp_rolled_in_range(self, registry: ContentRegistry):
        rng = GameRNG(3)
        for _ in range(20):
            enemy = registry.build_enemy("cave_goblin", rng)
            assert 18 <= enemy.max_hp <= 24

    def test_hp_max_without_rng(self, registry: ContentRegistry):
        assert registry.build_enemy("cave_goblin").max_hp == 24

    def test_skills_resolved(self, registry: ContentRegistry):
        enemy = registry.build_enemy("ash_cultist")
        assert [s.id for s in enemy.skills] == ["weakening_hex", "shadow_bolt"]
        assert enemy.ai_config.type == EnemyAIType.TACTICAL
        assert enemy.current_mana == 40

    def test_free_text_skills(self, registry: ContentRegistry):
        enemy = registry.build_enemy("wandering_bard")
        assert enemy.skills == []
        assert enemy.skill_notes.startswith("Sings")

    def test_boss_phases(self, registry: ContentRegistry):
        drake = registry.build_enemy("ember_drake")
        assert [p.name for p in drake.ai_config.phases] == ["Smouldering", "Blazing", "Inferno"]

    def test_unknown_enemy(self, registry: ContentRegistry):
        with pytest.raises(KeyError):
            registry.build_enemy("dragon_king")

    def test_unknown_skill_reference_skipped(self, tmp_path, caplog):
        content = _write_content(
            tmp_path,
            skills=[{"id": "bite", "name": "Bite", "damage_type": "pierce"}],
            enemies=[{"id": "rat", "name": "Rat", "hp_max": 5, "skills": ["bite", "gnaw"]}],
        )
        reg = ContentRegistry()
        reg.load_all(content)
        with caplog.at_level(logging.WARNING):
            rat = reg.build_enemy("rat")
        assert [s.id for s in rat.skills] == ["bite"]
        assert "gnaw" in caplog.text

    def test_inline_skill(self, tmp_path):
        content = _write_content(
            tmp_path,
            enemies=[{"id": "rat", "name": "Rat", "hp_max": 5, "skills": [{"id": "gnaw", "name": "Gnaw"}]}],
        )
        reg = ContentRegistry()
        reg.load_all(content)
        assert reg.build_enemy("rat").skills[0].name == "Gnaw"

    def test_built_skills_are_independent(self, registry: ContentRegistry):
        first = registry.build_enemy("cave_goblin")
        first.skills[0].current_cooldown = 3
        assert registry.build_enemy("cave_goblin").skills[0].current_cooldown == 0


class TestBuildPlayer:
    def test_wanderer(self, registry: ContentRegistry):
        player = registry.build_player("wanderer")
        assert player.weapon is not None and player.weapon.id == "iron_sword"
        assert [s.id for s in player.skills] == ["power_strike", "piercing_thrust", "fireball"]
        assert player.current_stamina == player.max_stamina == 60

    def test_unarmed_template(self, registry: ContentRegistry):
        assert registry.build_player("unarmed").weapon is None

    def test_unknown_template(self, registry: ContentRegistry):
        with pytest.raises(KeyError):
            registry.build_player("paladin")

    def test_malformed_skill_rejected(self, tmp_path):
        content = _write_content(tmp_path, skills=[{"id": "x", "name": "X", "damage_type": "sonic"}])
        with pytest.raises(ValueError):
            ContentRegistry().load_all(content)
