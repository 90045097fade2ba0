from typing import Optional

from fixly.exceptions import FixtureError, InvalidScoreError

STATUS_SCHEDULED = 'scheduled'
STATUS_LIVE = 'live'
STATUS_FINISHED = 'finished'
MATCH_STATUSES = (STATUS_SCHEDULED, STATUS_LIVE, STATUS_FINISHED)


class Team:
    def __init__(self, team_id, name, logo=None):
        self._team_id = str(team_id)
        self._name = name
        self._logo = logo

    @property
    def team_id(self):
        return self._team_id

    @property
    def name(self):
        return self._name

    @property
    def logo(self):
        return self._logo

    def to_dict(self):
        return {'id': self._team_id, 'name': self._name, 'logo': self._logo}

    def __eq__(self, other):
        if not isinstance(other, Team):
            return NotImplemented
        return (self._team_id, self._name, self._logo) == (other._team_id, other._name, other._logo)

    def __hash__(self):
        return hash((self._team_id, self._name))

    def __repr__(self):
        return f"Team(team_id={self._team_id}, name={self._name})"


class TeamRef:
    """One side of a match: a real team, a bye, or a slot still to be decided."""

    REAL = 'real'
    BYE = 'bye'
    PENDING = 'pending'

    def __init__(self, kind, team_id=None):
        if kind not in (self.REAL, self.BYE, self.PENDING):
            raise FixtureError(f"Unknown team reference kind: {kind!r}", "INVALID_MATCH")
        if kind == self.REAL and team_id is None:
            raise FixtureError("A real team reference needs a team id", "INVALID_MATCH")
        self._kind = kind
        self._team_id = str(team_id) if kind == self.REAL else None

    @classmethod
    def real(cls, team_id):
        return cls(cls.REAL, team_id)

    @classmethod
    def bye(cls):
        return cls(cls.BYE)

    @classmethod
    def pending(cls):
        return cls(cls.PENDING)

    @property
    def kind(self):
        return self._kind

    @property
    def team_id(self):
        return self._team_id

    @property
    def is_real(self):
        return self._kind == self.REAL

    @property
    def is_bye(self):
        return self._kind == self.BYE

    @property
    def is_pending(self):
        return self._kind == self.PENDING

    def __eq__(self, other):
        if not isinstance(other, TeamRef):
            return NotImplemented
        return (self._kind, self._team_id) == (other._kind, other._team_id)

    def __hash__(self):
        return hash((self._kind, self._team_id))

    def __repr__(self):
        if self.is_real:
            return f"TeamRef.real({self._team_id!r})"
        return f"TeamRef.{self._kind}()"


def _check_score(value, field):
    # bool is an int subclass but never a valid score
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidScoreError(f"{field} must be an integer, got {value!r}", field=field)
    if value < 0:
        raise InvalidScoreError(f"{field} must not be negative, got {value}", field=field)
    return value


class Match:
    def __init__(self, tournament_id, home: TeamRef, away: TeamRef, matchday: int,
                 bracket_round: Optional[int] = None, bracket_position: Optional[int] = None,
                 home_score: Optional[int] = None, away_score: Optional[int] = None,
                 status: str = STATUS_SCHEDULED, match_id=None):
        if status not in MATCH_STATUSES:
            raise FixtureError(f"Unknown match status: {status!r}", "INVALID_MATCH")
        self.tournament_id = tournament_id
        self.home = home
        self.away = away
        self.matchday = matchday
        self.bracket_round = bracket_round
        self.bracket_position = bracket_position
        self.home_score = home_score
        self.away_score = away_score
        self.status = status
        self.match_id = match_id

    @property
    def home_team_id(self):
        return self.home.team_id if self.home is not None else None

    @property
    def away_team_id(self):
        return self.away.team_id if self.away is not None else None

    @property
    def is_bye(self):
        return (self.home is not None and self.home.is_bye) or (self.away is not None and self.away.is_bye)

    @property
    def has_result(self):
        """True when the match counts towards standings."""
        return (self.status == STATUS_FINISHED
                and self.home_score is not None
                and self.away_score is not None)

    def with_score(self, home_score, away_score):
        """Return a finished copy of this match carrying the reported score."""
        if (self.home is not None and self.home.is_pending) or (self.away is not None and self.away.is_pending):
            raise FixtureError("Cannot score a match whose teams are not decided yet", "INVALID_MATCH")
        _check_score(home_score, 'home_score')
        _check_score(away_score, 'away_score')
        return Match(
            tournament_id=self.tournament_id,
            home=self.home,
            away=self.away,
            matchday=self.matchday,
            bracket_round=self.bracket_round,
            bracket_position=self.bracket_position,
            home_score=home_score,
            away_score=away_score,
            status=STATUS_FINISHED,
            match_id=self.match_id,
        )

    def with_id(self, match_id):
        return Match(
            tournament_id=self.tournament_id,
            home=self.home,
            away=self.away,
            matchday=self.matchday,
            bracket_round=self.bracket_round,
            bracket_position=self.bracket_position,
            home_score=self.home_score,
            away_score=self.away_score,
            status=self.status,
            match_id=match_id,
        )

    def to_dict(self):
        data = {
            'tournament_id': self.tournament_id,
            'home_team_id': self.home_team_id,
            'away_team_id': self.away_team_id,
            'home_score': self.home_score,
            'away_score': self.away_score,
            'matchday': self.matchday,
            'status': self.status,
            'bracket_round': self.bracket_round,
            'bracket_position': self.bracket_position,
        }
        if self.match_id is not None:
            data['id'] = self.match_id
        return data

    @classmethod
    def from_dict(cls, data):
        """Build a match from its persisted shape (ids are plain strings or null)."""
        home_id = data.get('home_team_id')
        away_id = data.get('away_team_id')
        bracket_round = data.get('bracket_round')
        if bracket_round is not None and (isinstance(bracket_round, bool) or not isinstance(bracket_round, int)):
            raise FixtureError(f"bracket_round must be an integer, got {bracket_round!r}", "INVALID_MATCH")
        home_score = data.get('home_score')
        away_score = data.get('away_score')
        if home_score is not None:
            _check_score(home_score, 'home_score')
        if away_score is not None:
            _check_score(away_score, 'away_score')
        # A null slot past round 1 is a bracket placeholder, a null in round 1 a walkover
        empty = TeamRef.pending() if bracket_round and bracket_round > 1 else TeamRef.bye()
        return cls(
            tournament_id=data.get('tournament_id'),
            home=TeamRef.real(home_id) if home_id is not None else empty,
            away=TeamRef.real(away_id) if away_id is not None else empty,
            matchday=data.get('matchday', 1),
            bracket_round=bracket_round,
            bracket_position=data.get('bracket_position'),
            home_score=home_score,
            away_score=away_score,
            status=data.get('status', STATUS_SCHEDULED),
            match_id=data.get('id'),
        )

    def __repr__(self):
        return (f"Match(matchday={self.matchday}, home={self.home!r}, away={self.away!r}, "
                f"score={self.home_score}-{self.away_score}, status={self.status})")


class StandingsRow:
    def __init__(self, team_id, team_name, team_logo=None):
        self.team_id = team_id
        self.team_name = team_name
        self.team_logo = team_logo
        self.played = 0
        self.won = 0
        self.drawn = 0
        self.lost = 0
        self.goals_for = 0
        self.goals_against = 0
        self.points = 0
        self.zone = None

    @property
    def goal_difference(self):
        return self.goals_for - self.goals_against

    def to_dict(self):
        return {
            'team_id': self.team_id,
            'team_name': self.team_name,
            'team_logo': self.team_logo,
            'played': self.played,
            'won': self.won,
            'drawn': self.drawn,
            'lost': self.lost,
            'goals_for': self.goals_for,
            'goals_against': self.goals_against,
            'goal_difference': self.goal_difference,
            'points': self.points,
            'zone': self.zone.to_dict() if self.zone is not None else None,
        }

    def __repr__(self):
        return (f"StandingsRow(team={self.team_name}, played={self.played}, "
                f"points={self.points}, gd={self.goal_difference})")


class Zone:
    def __init__(self, start_position, end_position, color, label=''):
        self.start_position = start_position
        self.end_position = end_position
        self.color = color
        self.label = label

    def contains(self, rank):
        return self.start_position <= rank <= self.end_position

    def to_dict(self):
        return {
            'start_position': self.start_position,
            'end_position': self.end_position,
            'color': self.color,
            'label': self.label,
        }

    def __repr__(self):
        return f"Zone({self.start_position}-{self.end_position}, color={self.color}, label={self.label})"
