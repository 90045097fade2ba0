"""
Standings table computation from finished matches.
"""
import logging
from typing import Dict, List, Mapping, Optional, Sequence, Union

from fixly.exceptions import FixtureError
from fixly.models import Match, StandingsRow, Team, Zone
from fixly.zones import find_zone

logger = logging.getLogger(__name__)

DEFAULT_POINTS = {'win': 3, 'draw': 1, 'loss': 0}


def _record(row: StandingsRow, scored: int, conceded: int, points: Mapping[str, int]) -> None:
    row.played += 1
    row.goals_for += scored
    row.goals_against += conceded
    if scored > conceded:
        row.won += 1
        row.points += points['win']
    elif scored == conceded:
        row.drawn += 1
        row.points += points['draw']
    else:
        row.lost += 1
        row.points += points['loss']


def standings_sort_key(row: StandingsRow):
    """Points, goal difference, goals for (all descending), then name and id."""
    return (-row.points, -row.goal_difference, -row.goals_for, row.team_name, row.team_id)


def compute_standings(teams: Sequence[Team], matches: Sequence[Union[Match, Dict]],
                      points: Optional[Mapping[str, int]] = None) -> List[StandingsRow]:
    """
    Calculate the ranked table for the given teams.

    Only matches with status finished and both scores set count; anything
    else is skipped regardless of the score fields. A side referring to a
    team outside ``teams`` is ignored, which lets callers pass the full match
    list of a tournament together with the roster of one group.

    Returns one row per team, freshly built on every call.
    """
    points = dict(DEFAULT_POINTS, **(points or {}))

    table = {}
    for team in teams:
        table[team.team_id] = StandingsRow(team.team_id, team.name, team.logo)

    ignored = 0
    for match in matches:
        if isinstance(match, dict):
            match = Match.from_dict(match)
        elif not isinstance(match, Match):
            raise FixtureError(f"Expected a match, got {match!r}", "INVALID_MATCH")
        if not match.has_result:
            continue

        home_row = table.get(match.home_team_id)
        away_row = table.get(match.away_team_id)
        if home_row is None or away_row is None:
            ignored += 1

        if home_row is not None:
            _record(home_row, match.home_score, match.away_score, points)
        if away_row is not None:
            _record(away_row, match.away_score, match.home_score, points)

    if ignored:
        logger.debug("%d finished matches have a side outside the table; that side was skipped", ignored)

    return sorted(table.values(), key=standings_sort_key)


def annotate_standings(rows: List[StandingsRow], zones: Sequence[Zone]) -> List[StandingsRow]:
    """Attach the zone covering each row's 1-based position."""
    for position, row in enumerate(rows, start=1):
        row.zone = find_zone(zones, position)
    return rows
