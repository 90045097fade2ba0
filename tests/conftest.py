"""
Shared pytest fixtures for the fixture engine tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from fixly.models import Match, Team, TeamRef, STATUS_FINISHED


def make_teams(count):
    """Teams t1..tN named 'Team 1'..'Team N'."""
    return [Team(f"t{i}", f"Team {i}") for i in range(1, count + 1)]


def finished(home_id, away_id, home_score, away_score, matchday=1, tournament_id="tour-1"):
    """Build a finished match between two real teams."""
    return Match(
        tournament_id=tournament_id,
        home=TeamRef.real(home_id),
        away=TeamRef.real(away_id),
        matchday=matchday,
        home_score=home_score,
        away_score=away_score,
        status=STATUS_FINISHED,
    )


@pytest.fixture
def client():
    """Create a test client for the JSON API."""
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def sample_teams():
    """Four teams A-D."""
    return [
        Team("a", "Team A"),
        Team("b", "Team B"),
        Team("c", "Team C"),
        Team("d", "Team D"),
    ]


@pytest.fixture
def five_teams():
    return make_teams(5)


@pytest.fixture
def teams_file(tmp_path):
    """Write a roster YAML file and return its path."""
    path = tmp_path / "teams.yaml"
    path.write_text("- Lions\n- Tigers\n- Bears\n- Wolves\n")
    return str(path)
