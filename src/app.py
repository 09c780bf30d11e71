"""
Flask web application for the Volleyball Bracket engine.
"""
import os
import re

from flask import Flask, request, jsonify

from bracket.errors import (
    BracketError, ConfigurationError, InvalidResultError, UnsafeUndoError,
)
from bracket.models import Team
from bracket.topology import get_topology
from bracket.tournament import TournamentService, describe_state

app = Flask(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DATA_DIR = os.environ.get('TOURNAMENT_DATA_DIR', os.path.join(BASE_DIR, 'data'))
TOURNAMENTS_DIR = os.path.join(DATA_DIR, 'tournaments')


def _slugify(name: str) -> str:
    """Convert tournament or team name to filesystem-safe slug."""
    slug = name.lower().strip()
    slug = re.sub(r'[^a-z0-9\s-]', '', slug)
    slug = re.sub(r'[\s-]+', '-', slug)
    slug = slug.strip('-')
    return slug or 'tournament'


def get_service(slug: str) -> TournamentService:
    """Return the service for one tournament, stored under TOURNAMENTS_DIR/<slug>."""
    return TournamentService(os.path.join(TOURNAMENTS_DIR, _slugify(slug)))


def _status_for(error: BracketError) -> int:
    if isinstance(error, InvalidResultError):
        return 404 if error.reason == 'unknown_match' else 409
    if isinstance(error, UnsafeUndoError):
        return 409
    return 400


@app.errorhandler(BracketError)
def handle_bracket_error(error):
    status = _status_for(error)
    app.logger.warning(f'{request.method} {request.path} rejected ({status}): {error.message}')
    return jsonify(error.to_dict()), status


def _parse_teams(raw) -> list:
    """Accept a list of names or of {id, name} dicts, in seed order."""
    if not isinstance(raw, list) or not raw:
        raise ConfigurationError('teams must be a non-empty list in seed order')
    teams = []
    for entry in raw:
        if isinstance(entry, str):
            name = entry.strip()
            team_id = None
        elif isinstance(entry, dict) and entry.get('name'):
            name = str(entry['name']).strip()
            team_id = entry.get('id')
        else:
            raise ConfigurationError(f'Invalid team entry: {entry!r}')
        if not name:
            raise ConfigurationError('Team names cannot be empty')
        if not team_id:
            if not re.search(r'[a-z0-9]', name.lower()):
                raise ConfigurationError(f'Team name {name!r} needs a letter or digit, or an explicit id')
            team_id = _slugify(name)
        teams.append(Team(str(team_id), name))
    return teams


def _score_is_empty(score) -> bool:
    return score is None or score == ''


@app.route('/api/topologies/<int:size>')
def api_topology(size):
    """Describe the match graph used for a given number of teams."""
    generic = request.args.get('generic', '').lower() in ('1', 'true', 'yes')
    return jsonify(get_topology(size, generic=generic).describe())


@app.route('/api/tournaments/<slug>/bracket', methods=['GET'])
def api_get_bracket(slug):
    state = get_service(slug).get_bracket_state()
    return jsonify(describe_state(state))


@app.route('/api/tournaments/<slug>/bracket', methods=['POST'])
def api_generate_bracket(slug):
    """Generate the bracket from an ordered team list (index 0 is seed 1)."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    teams = _parse_teams(data.get('teams'))
    size = data.get('size')
    if size is not None and (isinstance(size, bool) or not isinstance(size, int)):
        return jsonify({'error': 'size must be an integer'}), 400
    replace = data.get('replace', False)
    if not isinstance(replace, bool):
        return jsonify({'error': 'replace must be a boolean'}), 400

    state = get_service(slug).generate_bracket(teams, size=size, replace=replace)
    app.logger.info(f'Bracket generated for {slug} with {len(teams)} teams')
    return jsonify(describe_state(state)), 201


@app.route('/api/tournaments/<slug>/results', methods=['POST'])
def api_report_result(slug):
    """Report the winner and loser of a ready match."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    match_id = data.get('match_id')
    winner_id = data.get('winner_id')
    loser_id = data.get('loser_id')
    if isinstance(match_id, bool) or not isinstance(match_id, int):
        return jsonify({'error': 'match_id must be an integer'}), 400
    if not winner_id or not loser_id:
        return jsonify({'error': 'winner_id and loser_id are required'}), 400

    score_a = data.get('score_a')
    score_b = data.get('score_b')
    if _score_is_empty(score_a) != _score_is_empty(score_b):
        return jsonify({'error': 'Both scores must be filled or both must be empty'}), 400
    if _score_is_empty(score_a):
        score_a = score_b = None

    state = get_service(slug).report_result(match_id, winner_id, loser_id, score_a, score_b)
    return jsonify(describe_state(state))


@app.route('/api/tournaments/<slug>/results/undo', methods=['POST'])
def api_undo_result(slug):
    """Undo the result of a finished match."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    match_id = data.get('match_id')
    if isinstance(match_id, bool) or not isinstance(match_id, int):
        return jsonify({'error': 'match_id must be an integer'}), 400

    state = get_service(slug).undo_result(match_id)
    return jsonify(describe_state(state))


@app.route('/api/tournaments/<slug>/standings')
def api_standings(slug):
    service = get_service(slug)
    state = service.get_bracket_state()
    return jsonify({
        'phase': state.phase,
        'champion_id': state.champion_id,
        'standings': service.get_standings(),
    })


if __name__ == '__main__':
    app.run(debug=True, port=5000)
