"""
Placements, phase and champion, all derived from the teams and matches tables.
"""
from typing import List, Optional

from .models import (
    BRACKET_PENDING, IN_PROGRESS, AWAITING_DECIDER, COMPLETED,
    DECIDER, READY, SECTIONS, Match, TournamentState,
)


def next_placement(state: TournamentState) -> int:
    """
    Placement for the next team knocked out before the final.

    Counts down from last place: total teams minus those already out. If an
    undo has left a gap, the highest free placement is used so two teams never
    share a number.
    """
    taken = {team.placement for team in state.teams.values() if team.placement is not None}
    placement = state.total_teams - sum(1 for team in state.teams.values() if team.eliminated)
    if placement >= 3 and placement not in taken:
        return placement
    for candidate in range(state.total_teams, 2, -1):
        if candidate not in taken:
            return candidate
    return placement


def champion_id(state: TournamentState) -> Optional[str]:
    for team in state.teams.values():
        if team.placement == 1:
            return team.id
    return None


def derive_phase(state: TournamentState) -> str:
    if not state.matches:
        return BRACKET_PENDING
    if champion_id(state) is not None:
        return COMPLETED
    decider = state.find_section(DECIDER)
    if decider is not None and decider.status == READY:
        return AWAITING_DECIDER
    return IN_PROGRESS


def is_complete(state: TournamentState) -> bool:
    return derive_phase(state) == COMPLETED


def get_standings(state: TournamentState) -> List[dict]:
    """Teams with a placement, best first. Teams still in the running are left out."""
    placed = [team for team in state.teams.values() if team.placement is not None]
    placed.sort(key=lambda team: (team.placement, team.seed or 0))
    return [
        {'participant_id': team.id, 'name': team.name, 'placement': team.placement}
        for team in placed
    ]


def ready_matches(state: TournamentState) -> List[Match]:
    """Matches that can be played right now: winners, then losers, then final, then decider."""
    order = {section: index for index, section in enumerate(SECTIONS)}
    ready = [match for match in state.match_list() if match.status == READY]
    return sorted(ready, key=lambda m: (order.get(m.section, len(SECTIONS)), m.round, m.id))
