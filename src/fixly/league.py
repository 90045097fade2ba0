"""
Round-robin (league) fixture generation using the circle method.
"""
import logging
from collections import OrderedDict
from typing import Dict, List, Sequence

from fixly.exceptions import InvalidTeamsError
from fixly.models import Match, Team, TeamRef

logger = logging.getLogger(__name__)


def check_roster(teams: Sequence[Team]) -> None:
    """Reject rosters that cannot produce fixtures."""
    if len(teams) < 2:
        raise InvalidTeamsError(f"At least 2 teams are required, got {len(teams)}")
    seen = set()
    for team in teams:
        if team.team_id in seen:
            raise InvalidTeamsError(f"Duplicate team id: {team.team_id}")
        seen.add(team.team_id)


def calculate_league_rounds(num_teams: int) -> int:
    """Number of matchdays for a single round-robin (odd counts get a bye slot)."""
    if num_teams < 2:
        return 0
    if num_teams % 2 != 0:
        num_teams += 1
    return num_teams - 1


def generate_league_fixtures(teams: Sequence[Team], tournament_id) -> List[Match]:
    """
    Generate a single round-robin schedule.

    Position 0 stays fixed while the rest of the list rotates one step per
    round (the last slot moves to index 1). In every round position i plays
    position n-1-i, so each pair of teams meets exactly once across n-1
    rounds. Pairings against the bye slot are dropped, leaving that team idle
    for the matchday.
    """
    check_roster(teams)

    slots = [TeamRef.real(team.team_id) for team in teams]
    if len(slots) % 2 != 0:
        slots.append(TeamRef.bye())

    num_slots = len(slots)
    num_rounds = num_slots - 1
    half = num_slots // 2

    matches = []
    for round_index in range(num_rounds):
        for i in range(half):
            home = slots[i]
            away = slots[num_slots - 1 - i]
            if home.is_bye or away.is_bye:
                continue
            matches.append(Match(
                tournament_id=tournament_id,
                home=home,
                away=away,
                matchday=round_index + 1,
            ))
        slots = [slots[0], slots[-1]] + slots[1:-1]

    logger.debug("Generated %d league matches over %d matchdays for %d teams",
                 len(matches), num_rounds, len(teams))
    return matches


def group_matches_by_matchday(matches: Sequence[Match]) -> Dict[int, List[Match]]:
    grouped = OrderedDict()
    for match in sorted(matches, key=lambda m: m.matchday):
        grouped.setdefault(match.matchday, []).append(match)
    return grouped


def find_idle_teams(teams: Sequence[Team], matches: Sequence[Match]) -> Dict[int, List[str]]:
    """Map each matchday to the ids of teams without a match that round."""
    idle = OrderedDict()
    for matchday, day_matches in group_matches_by_matchday(matches).items():
        playing = set()
        for match in day_matches:
            playing.add(match.home_team_id)
            playing.add(match.away_team_id)
        idle[matchday] = [team.team_id for team in teams if team.team_id not in playing]
    return idle
