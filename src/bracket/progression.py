"""
Result reporting and undo for a live bracket.

Both operations check every precondition before touching the state, so a
rejected request leaves it exactly as it was. They work on the state in
place; ``TournamentService`` hands them a copy and only saves on success.
"""
import logging
from typing import Optional

from .errors import InvalidResultError, UnsafeUndoError
from .models import (
    FINAL, DECIDER, PENDING, READY, FINISHED,
    Match, SlotRef, TournamentState,
)
from .standings import next_placement

logger = logging.getLogger(__name__)


def _get_match(state: TournamentState, match_id) -> Match:
    match = state.matches.get(match_id)
    if match is None:
        raise InvalidResultError(match_id, 'unknown_match', f"Match {match_id} does not exist")
    return match


def _refresh_status(match: Match):
    if match.status == FINISHED:
        return
    match.status = READY if match.is_filled else PENDING


def place_team(state: TournamentState, ref: SlotRef, team_id):
    """Write ``team_id`` into the slot ``ref`` points at and update that match's status."""
    target = state.matches[ref.match_id]
    target.set_slot(ref.slot, team_id)
    _refresh_status(target)
    logger.debug(f"{team_id} moves to M{target.id}{ref.slot} ({target.status})")


def clear_slot(state: TournamentState, ref: SlotRef):
    target = state.matches[ref.match_id]
    target.set_slot(ref.slot, None)
    _refresh_status(target)


def _eliminate(state: TournamentState, team_id):
    team = state.teams[team_id]
    team.placement = next_placement(state)
    team.eliminated = True
    logger.debug(f"{team_id} eliminated in place {team.placement}")


def _crown(state: TournamentState, winner_id, loser_id):
    champion = state.teams[winner_id]
    champion.placement = 1
    champion.eliminated = False
    runner_up = state.teams[loser_id]
    runner_up.placement = 2
    runner_up.eliminated = True
    logger.debug(f"{winner_id} is champion, {loser_id} runner-up")


def _reset_decider(decider: Optional[Match]):
    if decider is None:
        return
    decider.slot_a = None
    decider.slot_b = None
    decider.winner_id = None
    decider.loser_id = None
    decider.score_a = None
    decider.score_b = None
    decider.status = PENDING


def _finish_final(state: TournamentState, final: Match):
    decider = state.find_section(DECIDER)
    if final.winner_id == final.slot_a or decider is None:
        # Winners bracket representative wins: no second match needed
        _crown(state, final.winner_id, final.loser_id)
        _reset_decider(decider)
        return
    decider.slot_a = final.slot_a
    decider.slot_b = final.slot_b
    decider.status = READY
    logger.debug(f"Decider M{decider.id} activated: {decider.slot_a} vs {decider.slot_b}")


def report_result(state: TournamentState, match_id, winner_id, loser_id,
                  score_a=None, score_b=None) -> TournamentState:
    """
    Record the outcome of a ready match and move both teams on.

    Raises InvalidResultError for an unknown match, a bye, a match that is
    not ready, or a winner/loser pair that does not match the occupants.
    """
    match = _get_match(state, match_id)
    if match.is_bye:
        raise InvalidResultError(match_id, 'bye_match', f"Match {match_id} is a bye and resolves itself")
    if match.status != READY or not match.is_filled:
        raise InvalidResultError(match_id, 'not_ready', f"Match {match_id} is {match.status}, not ready")
    if winner_id == loser_id or {winner_id, loser_id} != {match.slot_a, match.slot_b}:
        raise InvalidResultError(
            match_id, 'participants_mismatch',
            f"Match {match_id} is {match.slot_a} vs {match.slot_b}, got winner {winner_id} and loser {loser_id}"
        )

    match.status = FINISHED
    match.winner_id = winner_id
    match.loser_id = loser_id
    match.score_a = score_a
    match.score_b = score_b

    if match.section == FINAL:
        _finish_final(state, match)
    elif match.section == DECIDER:
        _crown(state, winner_id, loser_id)
    else:
        if match.next_on_win:
            place_team(state, match.next_on_win, winner_id)
        if match.next_on_loss:
            place_team(state, match.next_on_loss, loser_id)
        else:
            _eliminate(state, loser_id)
    return state


def _blocking_match(state: TournamentState, match: Match) -> Optional[Match]:
    """The first direct downstream match that has already been played, if any."""
    if match.section == FINAL:
        decider = state.find_section(DECIDER)
        if decider is not None and decider.status == FINISHED:
            return decider
        return None
    for ref in (match.next_on_win, match.next_on_loss):
        if ref is None:
            continue
        downstream = state.matches.get(ref.match_id)
        if downstream is not None and downstream.status == FINISHED:
            return downstream
    return None


def _clear_standing(state: TournamentState, team_id):
    team = state.teams.get(team_id)
    if team is not None:
        team.placement = None
        team.eliminated = False


def undo_result(state: TournamentState, match_id) -> TournamentState:
    """
    Take back the result of a finished match.

    Only allowed while none of the matches it fed has been played; otherwise
    UnsafeUndoError names the match that has to be undone first.
    """
    match = _get_match(state, match_id)
    if match.is_bye:
        raise InvalidResultError(match_id, 'bye_match', f"Match {match_id} is a bye and cannot be undone")
    if match.status != FINISHED:
        raise InvalidResultError(match_id, 'not_finished', f"Match {match_id} has no result to undo")
    blocking = _blocking_match(state, match)
    if blocking is not None:
        raise UnsafeUndoError(match_id, blocking.id)

    winner_id, loser_id = match.winner_id, match.loser_id
    if match.section == FINAL:
        _reset_decider(state.find_section(DECIDER))
        _clear_standing(state, winner_id)
        _clear_standing(state, loser_id)
    elif match.section == DECIDER:
        _clear_standing(state, winner_id)
        _clear_standing(state, loser_id)
    else:
        if match.next_on_win:
            clear_slot(state, match.next_on_win)
        if match.next_on_loss:
            clear_slot(state, match.next_on_loss)
        else:
            _clear_standing(state, loser_id)

    match.winner_id = None
    match.loser_id = None
    match.score_a = None
    match.score_b = None
    match.status = READY
    logger.debug(f"M{match_id} reset to ready")
    return state
