"""
Unit tests for the data models (Team, SlotRef, Match, TournamentState).
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bracket.errors import InvalidResultError, SeedCountMismatchError, UnsafeUndoError
from bracket.models import (
    PENDING, READY, WINNERS, SLOT_A, SLOT_B, Match, SlotRef, Team, TournamentState,
)
from bracket.seeding import generate_bracket


class TestTeam:
    """Tests for the Team model."""

    def test_team_defaults(self):
        team = Team("aces", "Aces")
        assert team.seed is None
        assert team.placement is None
        assert team.eliminated is False

    def test_team_from_dict_defaults_name(self):
        team = Team.from_dict({'id': 'aces'})
        assert team.name == 'aces'

    def test_team_repr(self):
        repr_str = repr(Team("aces", "Aces", seed=1))
        assert "Aces" in repr_str
        assert "seed=1" in repr_str


class TestSlotRef:
    """Tests for SlotRef."""

    def test_equality_and_hash(self):
        assert SlotRef(5, 'a') == SlotRef(5, 'a')
        assert SlotRef(5, 'a') != SlotRef(5, 'b')
        assert len({SlotRef(5, 'a'), SlotRef(5, 'a')}) == 1

    def test_from_dict_none(self):
        assert SlotRef.from_dict(None) is None


class TestMatch:
    """Tests for the Match model."""

    def test_slots(self):
        match = Match(1, WINNERS, 1)
        match.set_slot(SLOT_A, 'aces')
        assert match.get_slot(SLOT_A) == 'aces'
        assert not match.is_filled
        match.set_slot(SLOT_B, 'blockers')
        assert match.is_filled
        assert match.participants == ['aces', 'blockers']
        assert match.status == PENDING

    def test_dict_round_trip(self):
        match = Match(3, WINNERS, 2, slot_a='aces', status=READY,
                      next_on_win=SlotRef(5, 'b'), next_on_loss=SlotRef(7, 'a'), label='Seed 1 vs Winner M1')
        restored = Match.from_dict(match.to_dict())
        assert restored.to_dict() == match.to_dict()
        assert restored.next_on_win == SlotRef(5, 'b')

    def test_bye_has_no_second_slot(self):
        match = Match(1, WINNERS, 1, slot_a='aces', is_bye=True)
        assert 'slot_b' not in match.to_dict()


class TestTournamentState:
    """Tests for TournamentState."""

    def test_round_trip(self, teams_factory):
        state = generate_bracket(teams_factory(7))
        restored = TournamentState.from_dict(state.to_dict())
        assert restored.to_dict() == state.to_dict()
        assert restored.phase == state.phase

    def test_from_empty(self):
        state = TournamentState.from_dict(None)
        assert state.matches == {}
        assert state.total_teams == 0

    def test_matches_sorted_by_id(self):
        state = TournamentState(matches=[Match(3, WINNERS, 1), Match(1, WINNERS, 1), Match(2, WINNERS, 1)])
        assert [m.id for m in state.match_list()] == [1, 2, 3]


class TestErrors:
    """Tests for error payloads."""

    def test_invalid_result_to_dict(self):
        error = InvalidResultError(4, 'not_ready')
        assert error.message == "Match 4: not ready"
        assert error.to_dict() == {
            'error': 'INVALID_RESULT', 'message': 'Match 4: not ready', 'match_id': 4, 'reason': 'not_ready'
        }

    def test_unsafe_undo_to_dict(self):
        data = UnsafeUndoError(2, 5).to_dict()
        assert data['error'] == 'UNSAFE_UNDO'
        assert data['blocking_match_id'] == 5

    def test_seed_count_message(self):
        assert str(SeedCountMismatchError(8, 7)) == "Topology needs 8 teams, got 7"
