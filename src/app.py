"""
Flask web application exposing the fixture and standings engine as JSON.

Nothing is stored here: callers send the roster, matches and zones they
hold and get generated fixtures or computed tables back.
"""
import os
from flask import Flask, request, jsonify
from fixly.config import load_settings
from fixly.exceptions import FixtureError, InvalidTeamsError
from fixly.models import Match, Team
from fixly.standings import annotate_standings, compute_standings
from fixly.tournament import create_tournament, generate_fixtures, TYPE_LEAGUE, TYPE_ELIMINATION
from fixly.zones import suggest_next_zone, validate_zones, zones_from_dicts

app = Flask(__name__)

SETTINGS = load_settings()


def _error(error: FixtureError):
    app.logger.info(f'Rejected request to {request.path}: {error.message}')
    return jsonify(error.to_dict()), 400


def _parse_teams(entries) -> list:
    """Build Team objects from [{'id', 'name'}] request data."""
    if not isinstance(entries, list):
        raise InvalidTeamsError('teams must be a list')
    teams = []
    for entry in entries:
        if not isinstance(entry, dict) or entry.get('id') is None:
            raise InvalidTeamsError(f'Team entry needs an id: {entry!r}')
        teams.append(Team(entry['id'], str(entry.get('name') or entry['id']), entry.get('logo')))
    return teams


def _fixtures_response(tournament_type):
    data = request.get_json(silent=True) or {}
    tournament_id = data.get('tournament_id')
    if not tournament_id:
        return jsonify({'error': 'Missing tournament_id'}), 400
    try:
        teams = _parse_teams(data.get('teams', []))
        matches = generate_fixtures(tournament_type, teams, tournament_id)
    except FixtureError as e:
        return _error(e)
    return jsonify({'matches': [m.to_dict() for m in matches]})


@app.route('/api/health', methods=['GET'])
def api_health():
    return jsonify({'status': 'ok'})


@app.route('/api/fixtures/league', methods=['POST'])
def api_league_fixtures():
    """Generate a round-robin calendar for the posted roster."""
    return _fixtures_response(TYPE_LEAGUE)


@app.route('/api/fixtures/elimination', methods=['POST'])
def api_elimination_fixtures():
    """Generate a randomly drawn single elimination bracket."""
    return _fixtures_response(TYPE_ELIMINATION)


@app.route('/api/tournaments', methods=['POST'])
def api_create_tournament():
    """Create a tournament with generated ids, teams and fixtures."""
    data = request.get_json(silent=True) or {}
    name = (data.get('name') or '').strip()
    if not name:
        return jsonify({'error': 'Missing tournament name'}), 400

    try:
        tournament = create_tournament(
            name=name,
            tournament_type=data.get('type', SETTINGS['tournament_type']),
            team_entries=data.get('teams', []),
            sport=data.get('sport', SETTINGS['sport']),
            mode=data.get('mode', SETTINGS['mode']),
            points=SETTINGS['points'],
        )
    except FixtureError as e:
        return _error(e)

    app.logger.info(f'Created tournament {tournament.tournament_id} ({tournament.tournament_type})')
    return jsonify(tournament.to_dict()), 201


@app.route('/api/matches/score', methods=['POST'])
def api_update_score():
    """Apply a score update to a match and return the finished match."""
    data = request.get_json(silent=True) or {}
    match_data = data.get('match')
    if not isinstance(match_data, dict):
        return jsonify({'error': 'Missing match'}), 400
    if 'home_score' not in data or 'away_score' not in data:
        return jsonify({'error': 'Both scores must be provided'}), 400

    try:
        match = Match.from_dict(match_data).with_score(data['home_score'], data['away_score'])
    except FixtureError as e:
        return _error(e)
    return jsonify(match.to_dict())


@app.route('/api/standings', methods=['POST'])
def api_standings():
    """Compute the standings table, annotated with zones when given."""
    data = request.get_json(silent=True) or {}
    matches = data.get('matches', [])
    if not isinstance(matches, list):
        return jsonify({'error': 'matches must be a list'}), 400

    try:
        teams = _parse_teams(data.get('teams', []))
        zones = zones_from_dicts(data.get('zones') or [])
        rows = compute_standings(teams, matches, points=SETTINGS['points'])
    except FixtureError as e:
        return _error(e)

    if zones:
        annotate_standings(rows, zones)
    return jsonify({'standings': [row.to_dict() for row in rows]})


def _zones_request():
    data = request.get_json(silent=True) or {}
    team_count = data.get('team_count')
    if isinstance(team_count, bool) or not isinstance(team_count, int) or team_count < 1:
        return None, None
    return zones_from_dicts(data.get('zones') or []), team_count


@app.route('/api/zones/validate', methods=['POST'])
def api_validate_zones():
    """Check owner-supplied zones before they are saved."""
    try:
        zones, team_count = _zones_request()
        if zones is None:
            return jsonify({'error': 'team_count must be a positive integer'}), 400
        validate_zones(zones, team_count)
    except FixtureError as e:
        return _error(e)
    return jsonify({'valid': True, 'zones': [z.to_dict() for z in zones]})


@app.route('/api/zones/suggest', methods=['POST'])
def api_suggest_zone():
    """Propose the next zone after the ones already defined."""
    try:
        zones, team_count = _zones_request()
        if zones is None:
            return jsonify({'error': 'team_count must be a positive integer'}), 400
        zone = suggest_next_zone(zones, team_count)
    except FixtureError as e:
        return _error(e)
    return jsonify(zone.to_dict())


if __name__ == '__main__':
    app.run(debug=os.environ.get('FLASK_DEBUG') == '1', port=int(os.environ.get('PORT', 5000)))
