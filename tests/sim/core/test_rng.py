"""Tests for GameRNG -- seeded dice and forking."""

from __future__ import annotations

import pytest

from aether_combat.sim.core.rng import GameRNG


class TestRoll:
    def test_roll_within_range(self):
        rng = GameRNG(1)
        for _ in range(500):
            assert 1 <= rng.roll(20) <= 20

    def test_single_sided_die(self):
        assert GameRNG(5).roll(1) == 1

    def test_zero_sides_raises(self):
        with pytest.raises(ValueError):
            GameRNG(1).roll(0)

    def test_every_face_appears(self):
        rng = GameRNG(3)
        faces = {rng.roll(6) for _ in range(300)}
        assert faces == {1, 2, 3, 4, 5, 6}


class TestDeterminism:
    def test_same_seed_same_sequence(self):
        a, b = GameRNG(42), GameRNG(42)
        assert [a.roll(20) for _ in range(20)] == [b.roll(20) for _ in range(20)]

    def test_chance_bounds(self):
        rng = GameRNG(9)
        assert not any(rng.chance(0.0) for _ in range(100))
        assert all(rng.chance(1.0) for _ in range(100))


class TestFork:
    def test_fork_is_deterministic(self):
        assert GameRNG(7).fork("dice").seed == GameRNG(7).fork("dice").seed

    def test_forks_by_name_differ(self):
        rng = GameRNG(7)
        assert rng.fork("dice").seed != rng.fork("enemy_ai").seed

    def test_fork_does_not_consume_parent(self):
        a, b = GameRNG(11), GameRNG(11)
        a.fork("agent")
        assert a.random_float() == b.random_float()

    def test_repr(self):
        assert repr(GameRNG(3)) == "GameRNG(seed=3)"
