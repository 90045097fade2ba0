"""
Tournament instantiation: roster cleanup, id assignment and fixture generation.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from fixly.elimination import generate_elimination_fixtures
from fixly.exceptions import UnknownTournamentTypeError
from fixly.league import generate_league_fixtures
from fixly.models import Match, StandingsRow, Team, Zone
from fixly.standings import annotate_standings, compute_standings

logger = logging.getLogger(__name__)

TYPE_LEAGUE = 'league'
TYPE_ELIMINATION = 'elimination'
TOURNAMENT_TYPES = (TYPE_LEAGUE, TYPE_ELIMINATION)

MODE_COMMUNITY = 'community'
MODE_PRO = 'pro'

STATUS_DRAFT = 'draft'
STATUS_ACTIVE = 'active'
STATUS_FINISHED = 'finished'


def _new_id() -> str:
    return str(uuid.uuid4())


class Tournament:
    def __init__(self, tournament_id, name, tournament_type, teams, matches,
                 sport='football', mode=MODE_COMMUNITY, status=STATUS_ACTIVE,
                 created_at=None, points=None):
        self.tournament_id = tournament_id
        self.name = name
        self.tournament_type = tournament_type
        self.teams = list(teams)
        self.matches = list(matches)
        self.sport = sport
        self.mode = mode
        self.status = status
        self.created_at = created_at or datetime.now(timezone.utc).isoformat()
        self.points = points

    @property
    def is_pro(self):
        return self.mode == MODE_PRO

    def get_match(self, match_id) -> Match:
        for match in self.matches:
            if match.match_id == match_id:
                return match
        raise KeyError(match_id)

    def update_match_score(self, match_id, home_score: int, away_score: int) -> Match:
        """Record a result: the match is replaced by a finished copy."""
        for index, match in enumerate(self.matches):
            if match.match_id == match_id:
                updated = match.with_score(home_score, away_score)
                self.matches[index] = updated
                logger.info("Match %s of tournament %s finished %d-%d",
                            match_id, self.tournament_id, home_score, away_score)
                return updated
        raise KeyError(match_id)

    def standings(self, zones: Optional[Sequence[Zone]] = None) -> List[StandingsRow]:
        rows = compute_standings(self.teams, self.matches, points=self.points)
        if zones:
            annotate_standings(rows, zones)
        return rows

    def to_dict(self):
        return {
            'id': self.tournament_id,
            'name': self.name,
            'sport': self.sport,
            'type': self.tournament_type,
            'mode': self.mode,
            'is_pro': self.is_pro,
            'status': self.status,
            'created_at': self.created_at,
            'teams': [team.to_dict() for team in self.teams],
            'matches': [match.to_dict() for match in self.matches],
        }

    def __repr__(self):
        return (f"Tournament(name={self.name}, type={self.tournament_type}, "
                f"teams={len(self.teams)}, matches={len(self.matches)})")


def generate_fixtures(tournament_type: str, teams: Sequence[Team], tournament_id, rng=None) -> List[Match]:
    if tournament_type == TYPE_LEAGUE:
        return generate_league_fixtures(teams, tournament_id)
    if tournament_type == TYPE_ELIMINATION:
        return generate_elimination_fixtures(teams, tournament_id, rng=rng)
    raise UnknownTournamentTypeError(tournament_type)


def create_tournament(name: str, tournament_type: str, team_entries: Iterable[Union[str, Dict]],
                      sport: str = 'football', mode: str = MODE_COMMUNITY, rng=None,
                      id_factory: Optional[Callable[[], str]] = None,
                      points: Optional[Dict[str, int]] = None) -> Tournament:
    """
    Create a tournament with its teams and full fixture list.

    ``team_entries`` are names or {'name', 'logo'} mappings; blank names are
    dropped. Every team and match gets a fresh id from ``id_factory``.
    """
    if tournament_type not in TOURNAMENT_TYPES:
        raise UnknownTournamentTypeError(tournament_type)
    id_factory = id_factory or _new_id
    tournament_id = id_factory()

    teams = []
    for entry in team_entries:
        if isinstance(entry, str):
            entry = {'name': entry}
        team_name = str(entry.get('name') or '').strip()
        if not team_name:
            continue
        teams.append(Team(id_factory(), team_name, entry.get('logo') or None))

    matches = generate_fixtures(tournament_type, teams, tournament_id, rng=rng)
    matches = [match.with_id(id_factory()) for match in matches]

    logger.info("Created %s tournament %r with %d teams and %d matches",
                tournament_type, name, len(teams), len(matches))
    return Tournament(
        tournament_id=tournament_id,
        name=name,
        tournament_type=tournament_type,
        teams=teams,
        matches=matches,
        sport=sport,
        mode=mode,
        points=points,
    )
