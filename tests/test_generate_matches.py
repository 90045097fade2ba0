"""
Tests for the generate_matches command line script.
"""
import json
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from generate_matches import format_fixtures, load_teams, main
from fixly.league import generate_league_fixtures


class TestLoadTeams:

    def test_names_list(self, teams_file):
        teams = load_teams(teams_file)
        assert [t.name for t in teams] == ["Lions", "Tigers", "Bears", "Wolves"]
        assert [t.team_id for t in teams] == ["1", "2", "3", "4"]

    def test_mappings_with_ids(self, tmp_path):
        path = tmp_path / "teams.yaml"
        path.write_text("- {id: lio, name: Lions}\n- {id: tig, name: Tigers}\n- {id: x, name: ''}\n")
        teams = load_teams(str(path))
        assert [(t.team_id, t.name) for t in teams] == [("lio", "Lions"), ("tig", "Tigers")]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "teams.yaml"
        path.write_text("")
        assert load_teams(str(path)) == []


class TestFormatFixtures:

    def test_league_output(self, sample_teams):
        text = format_fixtures(sample_teams, generate_league_fixtures(sample_teams, "t"))
        lines = text.splitlines()
        assert lines[0] == "# Matchday 1"
        assert lines[1] == "Team A vs Team D"
        assert lines[2] == "Team B vs Team C"
        assert lines[3] == ""
        assert "# Matchday 3" in lines


class TestMain:

    def test_league(self, teams_file, capsys):
        assert main([teams_file]) == 0
        out = capsys.readouterr().out
        assert out.count(" vs ") == 6
        assert "# Matchday 3" in out

    def test_elimination_json(self, tmp_path, capsys):
        path = tmp_path / "teams.yaml"
        path.write_text("- A\n- B\n- C\n")
        assert main([str(path), "--format", "elimination", "--seed", "1", "--json"]) == 0
        matches = json.loads(capsys.readouterr().out)['matches']
        assert len(matches) == 3
        assert sum(1 for m in matches if m['away_team_id'] is None and m['bracket_round'] == 1) == 1

    def test_elimination_text_shows_placeholders(self, tmp_path, capsys):
        path = tmp_path / "teams.yaml"
        path.write_text("- A\n- B\n- C\n")
        assert main([str(path), "--format", "elimination", "--seed", "1"]) == 0
        out = capsys.readouterr().out
        assert "vs BYE" in out
        assert "TBD vs TBD" in out

    def test_too_few_teams(self, tmp_path, capsys):
        path = tmp_path / "teams.yaml"
        path.write_text("- Lonely\n")
        assert main([str(path)]) == 1
        assert "At least 2 teams" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.yaml")]) == 1
        assert "could not load teams" in capsys.readouterr().err
