"""
Shared pytest fixtures for bracket engine tests.

Running tests:
    pytest tests/                  - full suite
    pytest tests/ -m "not slow"   - fast subset (skips random full-tournament runs)
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bracket.models import Team


def pytest_configure(config):
    config.addinivalue_line('markers', 'slow: long-running simulation tests')


def _make_teams(count):
    """Teams in seed order: team-1 is seed 1."""
    return [Team(f"team-{i}", f"Team {i}") for i in range(1, count + 1)]


def _play_through(state, report, pick_winner):
    """
    Report every ready match until none is left.

    ``pick_winner(match)`` returns the winning team id. Returns the ids of the
    matches in the order they were played.
    """
    from bracket.standings import ready_matches
    played = []
    while True:
        ready = ready_matches(state)
        if not ready:
            return played
        match = ready[0]
        winner = pick_winner(match)
        loser = match.slot_b if winner == match.slot_a else match.slot_a
        state = report(state, match.id, winner, loser)
        played.append(match.id)


@pytest.fixture
def teams_factory():
    """Build N teams in seed order."""
    return _make_teams


@pytest.fixture
def play_through():
    """Play every ready match with a caller-supplied winner picker."""
    return _play_through


@pytest.fixture
def temp_data_dir(tmp_path, monkeypatch):
    """Point the app's storage at a temporary directory."""
    import app as app_module

    tournaments_dir = tmp_path / "tournaments"
    monkeypatch.setattr(app_module, 'DATA_DIR', str(tmp_path))
    monkeypatch.setattr(app_module, 'TOURNAMENTS_DIR', str(tournaments_dir))
    return str(tmp_path)


@pytest.fixture
def client(temp_data_dir):
    """Create a test client backed by the temporary data directory."""
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client
