"""
Print the fixture list for a roster file.

Usage:
    python src/generate_matches.py data/teams.yaml
    python src/generate_matches.py data/teams.yaml --format elimination --seed 7
    python src/generate_matches.py data/teams.yaml --json

The roster is a YAML list of team names or {id, name} mappings.
"""
import argparse
import json
import random
import sys

import yaml

from fixly.config import load_settings
from fixly.exceptions import FixtureError
from fixly.league import group_matches_by_matchday
from fixly.models import Team
from fixly.tournament import generate_fixtures, TOURNAMENT_TYPES


def load_teams(file_path):
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file) or []
    if not isinstance(data, list):
        raise ValueError(f"{file_path}: expected a list of teams")

    teams = []
    for index, entry in enumerate(data, start=1):
        if isinstance(entry, dict):
            name = str(entry.get('name', '')).strip()
            team_id = entry.get('id', index)
        else:
            name = str(entry).strip()
            team_id = index
        if name:
            teams.append(Team(team_id, name))
    return teams


def format_side(ref, names):
    if ref.is_real:
        return names.get(ref.team_id, ref.team_id)
    if ref.is_bye:
        return 'BYE'
    return 'TBD'


def format_fixtures(teams, matches):
    names = {team.team_id: team.name for team in teams}
    lines = []
    for matchday, day_matches in group_matches_by_matchday(matches).items():
        if lines:
            lines.append('')
        lines.append(f"# Matchday {matchday}")
        for match in day_matches:
            lines.append(f"{format_side(match.home, names)} vs {format_side(match.away, names)}")
    return '\n'.join(lines)


def main(argv=None):
    settings = load_settings()
    parser = argparse.ArgumentParser(description='Generate a tournament fixture list.')
    parser.add_argument('teams_file', help='YAML roster file')
    parser.add_argument('--format', choices=TOURNAMENT_TYPES, default=settings['tournament_type'],
                        help='league (round-robin) or elimination (bracket)')
    parser.add_argument('--tournament-id', default='local', help='tournament id stamped on every match')
    parser.add_argument('--seed', type=int, default=None, help='seed for the elimination draw')
    parser.add_argument('--json', action='store_true', help='print matches as JSON')
    args = parser.parse_args(argv)

    try:
        teams = load_teams(args.teams_file)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: could not load teams: {e}", file=sys.stderr)
        return 1

    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        matches = generate_fixtures(args.format, teams, args.tournament_id, rng=rng)
    except FixtureError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({'matches': [m.to_dict() for m in matches]}, indent=2))
    else:
        print(format_fixtures(teams, matches))
    return 0


if __name__ == '__main__':
    sys.exit(main())
