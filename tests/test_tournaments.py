"""
Tests for tournament creation and score updates.
"""
import itertools
import random
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from fixly.exceptions import InvalidScoreError, InvalidTeamsError, UnknownTournamentTypeError
from fixly.models import Zone, STATUS_FINISHED
from fixly.tournament import create_tournament, generate_fixtures


def counter_ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


class TestCreateTournament:

    def test_league_tournament(self):
        tournament = create_tournament("Spring Cup", "league", ["A", "B", "C", "D"], id_factory=counter_ids())

        assert tournament.tournament_id == "id-1"
        assert [t.team_id for t in tournament.teams] == ["id-2", "id-3", "id-4", "id-5"]
        assert len(tournament.matches) == 6
        assert [m.match_id for m in tournament.matches] == [f"id-{i}" for i in range(6, 12)]
        assert all(m.tournament_id == "id-1" for m in tournament.matches)
        assert tournament.status == "active"

    def test_blank_names_dropped(self):
        tournament = create_tournament("Cup", "league", ["A", "  ", {'name': ''}, {'name': ' B '}])
        assert [t.name for t in tournament.teams] == ["A", "B"]
        assert len(tournament.matches) == 1

    def test_logo_kept(self):
        tournament = create_tournament("Cup", "league", [{'name': 'A', 'logo': 'a.png'}, {'name': 'B'}])
        assert tournament.teams[0].logo == 'a.png'
        assert tournament.teams[1].logo is None

    def test_elimination_tournament(self):
        tournament = create_tournament("Knockout", "elimination", ["A", "B", "C", "D", "E"],
                                       rng=random.Random(3))
        rounds = {m.bracket_round for m in tournament.matches}
        assert rounds == {1, 2, 3}

    def test_pro_mode(self):
        tournament = create_tournament("Cup", "league", ["A", "B"], mode="pro")
        assert tournament.is_pro
        assert tournament.to_dict()['is_pro'] is True

    def test_default_ids_are_unique(self):
        tournament = create_tournament("Cup", "league", ["A", "B", "C"])
        ids = [tournament.tournament_id] + [t.team_id for t in tournament.teams] + [m.match_id for m in tournament.matches]
        assert len(ids) == len(set(ids))

    def test_too_few_teams(self):
        with pytest.raises(InvalidTeamsError):
            create_tournament("Cup", "league", ["A", " "])

    def test_unknown_type(self):
        with pytest.raises(UnknownTournamentTypeError):
            create_tournament("Cup", "groups", ["A", "B"])

    def test_generate_fixtures_unknown_type(self):
        with pytest.raises(UnknownTournamentTypeError):
            generate_fixtures("swiss", [], "tour-1")

    def test_to_dict(self):
        data = create_tournament("Cup", "league", ["A", "B"], sport="handball").to_dict()
        assert data['name'] == "Cup"
        assert data['type'] == "league"
        assert data['sport'] == "handball"
        assert len(data['teams']) == 2
        assert len(data['matches']) == 1
        assert 'id' in data['matches'][0]


class TestScoreUpdates:

    def test_update_then_standings(self):
        tournament = create_tournament("Cup", "league", ["A", "B"], id_factory=counter_ids())
        match = tournament.matches[0]

        updated = tournament.update_match_score(match.match_id, 3, 1)

        assert updated.status == STATUS_FINISHED
        assert tournament.get_match(match.match_id) is updated
        rows = tournament.standings()
        assert rows[0].team_id == match.home_team_id
        assert rows[0].points == 3
        assert rows[1].points == 0

    def test_standings_with_zones(self):
        tournament = create_tournament("Cup", "league", ["A", "B", "C"])
        rows = tournament.standings(zones=[Zone(1, 1, "#F9A825", "Champion")])
        assert rows[0].zone.label == "Champion"
        assert rows[1].zone is None

    def test_rescoring_overwrites(self):
        tournament = create_tournament("Cup", "league", ["A", "B"])
        match_id = tournament.matches[0].match_id
        tournament.update_match_score(match_id, 1, 0)
        tournament.update_match_score(match_id, 0, 0)
        assert all(row.points == 1 for row in tournament.standings())

    def test_unknown_match(self):
        tournament = create_tournament("Cup", "league", ["A", "B"])
        with pytest.raises(KeyError):
            tournament.update_match_score("missing", 1, 0)

    def test_invalid_score_leaves_match_untouched(self):
        tournament = create_tournament("Cup", "league", ["A", "B"])
        match = tournament.matches[0]
        with pytest.raises(InvalidScoreError):
            tournament.update_match_score(match.match_id, -1, 0)
        assert tournament.get_match(match.match_id) is match
