"""
Single-writer access to one tournament.

Every mutation takes the tournament's file lock, loads the saved state,
applies the operation to a copy and saves the copy only if the operation
succeeded. Reads go straight to the last saved file.
"""
import copy
import logging
import os
from typing import List, Optional

from filelock import FileLock

from . import progression, seeding, standings
from .errors import ConfigurationError
from .models import Team, TournamentState
from .store import BracketStore

logger = logging.getLogger(__name__)

LOCK_TIMEOUT = float(os.environ.get('BRACKET_LOCK_TIMEOUT', '10'))


class TournamentService:
    def __init__(self, directory: str, lock_timeout: Optional[float] = None):
        self.directory = directory
        self.store = BracketStore(directory)
        self._lock = FileLock(
            os.path.join(directory, '.lock'),
            timeout=LOCK_TIMEOUT if lock_timeout is None else lock_timeout,
        )

    def _locked(self) -> FileLock:
        os.makedirs(self.directory, exist_ok=True)
        return self._lock

    def _mutate(self, operation, *args, **kwargs) -> TournamentState:
        with self._locked():
            current = self.store.load()
            working = copy.deepcopy(current)
            updated = operation(working, *args, **kwargs)
            self.store.save(updated)
            return updated

    def generate_bracket(self, teams: List[Team], size: Optional[int] = None,
                         replace: bool = False) -> TournamentState:
        """Create the bracket. An existing bracket is only overwritten with ``replace``."""
        with self._locked():
            if self.store.exists() and self.store.load().matches and not replace:
                raise ConfigurationError(
                    "A bracket already exists for this tournament; pass replace to regenerate it"
                )
            state = seeding.generate_bracket(teams, size)
            self.store.save(state)
        logger.info(f"Generated bracket for {len(teams)} teams in {self.directory}")
        return state

    def report_result(self, match_id, winner_id, loser_id,
                      score_a=None, score_b=None) -> TournamentState:
        state = self._mutate(progression.report_result, match_id, winner_id, loser_id, score_a, score_b)
        logger.info(f"Match {match_id}: {winner_id} beat {loser_id} (phase {state.phase})")
        if standings.is_complete(state):
            logger.info(f"Tournament in {self.directory} complete, champion {state.champion_id}")
        return state

    def undo_result(self, match_id) -> TournamentState:
        state = self._mutate(progression.undo_result, match_id)
        logger.info(f"Match {match_id}: result undone (phase {state.phase})")
        return state

    def get_bracket_state(self) -> TournamentState:
        return self.store.load()

    def get_standings(self) -> List[dict]:
        return standings.get_standings(self.store.load())


def describe_state(state: TournamentState) -> dict:
    """JSON-ready view of a bracket, including the derived phase and champion."""
    return {
        'phase': state.phase,
        'champion_id': state.champion_id,
        'ready_matches': [match.id for match in standings.ready_matches(state)],
        'teams': [team.to_dict() for team in state.team_list()],
        'matches': [match.to_dict() for match in state.match_list()],
    }
