"""
YAML persistence for one tournament's bracket.

The whole durable footprint is a single ``bracket.yaml`` holding the teams
table and the matches table.
"""
import os

import yaml

from .models import TournamentState

BRACKET_FILE = 'bracket.yaml'


class BracketStore:
    def __init__(self, directory: str):
        self.directory = directory
        self.path = os.path.join(directory, BRACKET_FILE)

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def load(self) -> TournamentState:
        """Load the last saved state; an empty state if nothing was saved yet."""
        if not self.exists():
            return TournamentState()
        with open(self.path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        return TournamentState.from_dict(data)

    def save(self, state: TournamentState):
        """Write the state to a temp file and swap it in, so readers never see half a file."""
        os.makedirs(self.directory, exist_ok=True)
        tmp_path = self.path + '.tmp'
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                yaml.dump(state.to_dict(), f, default_flow_style=False, sort_keys=False)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
