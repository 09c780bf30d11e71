"""
Tests for turning a seed list into a live bracket.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bracket.errors import ConfigurationError, SeedCountMismatchError
from bracket.models import PENDING, READY, FINISHED, SlotRef, Team
from bracket.seeding import generate_bracket
from bracket.topology import get_topology


class TestGenerateBracket:
    """Tests for generate_bracket."""

    def test_eight_teams_seeded_into_round_one(self, teams_factory):
        state = generate_bracket(teams_factory(8), 8)
        assert len(state.matches) == 15
        assert (state.matches[1].slot_a, state.matches[1].slot_b) == ('team-1', 'team-8')
        assert (state.matches[4].slot_a, state.matches[4].slot_b) == ('team-2', 'team-7')
        assert [team.seed for team in state.team_list()] == list(range(1, 9))

    def test_statuses_after_generation(self, teams_factory):
        state = generate_bracket(teams_factory(8), 8)
        ready = sorted(m.id for m in state.match_list() if m.status == READY)
        assert ready == [1, 2, 3, 4]
        assert all(m.status == PENDING for m in state.match_list() if m.id > 4)

    def test_top_seed_waits_in_round_two(self, teams_factory):
        """With 5 teams, seed 1 sits in match 2 until match 1 is played."""
        state = generate_bracket(teams_factory(5), 5)
        assert state.matches[2].slot_a == 'team-1'
        assert state.matches[2].slot_b is None
        assert state.matches[2].status == PENDING
        assert state.matches[3].status == READY

    def test_routes_are_copied_from_topology(self, teams_factory):
        topology = get_topology(8)
        state = generate_bracket(teams_factory(8), 8, topology=topology)
        assert state.matches[1].next_on_win == SlotRef(5, 'a')
        assert state.matches[1].next_on_win is not topology.get(1).next_on_win

    def test_size_defaults_to_team_count(self, teams_factory):
        state = generate_bracket(teams_factory(6))
        assert state.total_teams == 6
        assert len(state.matches) == 11

    def test_seed_count_mismatch(self, teams_factory):
        with pytest.raises(SeedCountMismatchError) as exc_info:
            generate_bracket(teams_factory(7), 8)
        assert exc_info.value.expected == 8
        assert exc_info.value.actual == 7

    def test_topology_size_mismatch(self, teams_factory):
        with pytest.raises(ConfigurationError):
            generate_bracket(teams_factory(8), 6, topology=get_topology(8))

    def test_unsupported_team_count(self, teams_factory):
        with pytest.raises(ConfigurationError):
            generate_bracket(teams_factory(1))

    def test_duplicate_team_ids(self):
        teams = [Team('a', 'A'), Team('b', 'B'), Team('a', 'Also A')]
        with pytest.raises(ConfigurationError) as exc_info:
            generate_bracket(teams, 3)
        assert "Duplicate team id" in exc_info.value.message

    def test_caller_teams_not_mutated(self):
        teams = [Team(f't{i}', f'T{i}', seed=9, placement=4, eliminated=True) for i in range(5)]
        state = generate_bracket(teams, 5)
        assert teams[0].placement == 4
        fresh = state.teams['t0']
        assert (fresh.seed, fresh.placement, fresh.eliminated) == (1, None, False)


class TestByes:
    """Tests for bye resolution at generation time."""

    def test_three_teams_bye_resolved(self, teams_factory):
        state = generate_bracket(teams_factory(3))
        bye = state.matches[1]
        assert bye.is_bye
        assert bye.status == FINISHED
        assert bye.winner_id == 'team-1'
        assert bye.loser_id is None
        assert state.matches[3].slot_a == 'team-1'
        assert state.matches[3].status == PENDING
        assert state.matches[2].status == READY

    def test_bye_serialized_without_second_slot(self, teams_factory):
        state = generate_bracket(teams_factory(3))
        data = state.matches[1].to_dict()
        assert 'slot_b' not in data
        assert data['slot_a'] == 'team-1'

    def test_twelve_teams_top_four_advance(self, teams_factory):
        state = generate_bracket(teams_factory(12))
        byes = [m for m in state.match_list() if m.is_bye]
        assert sorted(m.winner_id for m in byes) == ['team-1', 'team-2', 'team-3', 'team-4']
        for bye in byes:
            target = state.matches[bye.next_on_win.match_id]
            assert target.get_slot(bye.next_on_win.slot) == bye.winner_id

    def test_no_byes_placed_no_placements(self, teams_factory):
        state = generate_bracket(teams_factory(12))
        assert all(team.placement is None for team in state.teams.values())
