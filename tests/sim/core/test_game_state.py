"""Tests for EncounterState and the bestiary lookup."""

from __future__ import annotations

from aether_combat.sim.core.game_state import BestiaryEntry, EncounterState
from tests.sim.conftest import make_enemy, make_player


class TestBestiaryLookup:
    def test_match_by_id(self):
        state = EncounterState(
            player=make_player(),
            bestiary=[BestiaryEntry(id="goblin", name="Something Else")],
        )
        assert state.find_bestiary_entry(make_enemy()) is state.bestiary[0]

    def test_match_by_name(self):
        state = EncounterState(
            player=make_player(),
            bestiary=[BestiaryEntry(id="other", name="Goblin")],
        )
        assert state.find_bestiary_entry(make_enemy()) is state.bestiary[0]

    def test_no_match(self):
        state = EncounterState(player=make_player())
        assert state.find_bestiary_entry(make_enemy()) is None

    def test_round_trips_through_json(self):
        state = EncounterState(player=make_player(), enemy=make_enemy(skills="Throws rocks."), in_combat=True)
        restored = EncounterState.model_validate_json(state.model_dump_json())
        assert restored == state
        assert restored.enemy.skill_notes == "Throws rocks."
