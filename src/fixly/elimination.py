"""
Single elimination bracket generation.

The draw is a random shuffle of the roster. Pass a seeded ``random.Random``
as ``rng`` to reproduce a draw; without one every call produces a new draw.
"""
import logging
import math
import random
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence

from fixly.league import check_roster
from fixly.models import Match, Team, TeamRef

logger = logging.getLogger(__name__)


def get_round_name(teams_in_round: int) -> str:
    """Get the name of a round based on number of bracket slots."""
    if teams_in_round == 2:
        return "Final"
    elif teams_in_round == 4:
        return "Semifinal"
    elif teams_in_round == 8:
        return "Quarterfinal"
    else:
        return f"Round of {teams_in_round}"


def calculate_bracket_size(num_teams: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if num_teams <= 0:
        return 0
    return 2 ** math.ceil(math.log2(num_teams))


def calculate_byes(num_teams: int) -> int:
    """Calculate number of byes needed."""
    bracket_size = calculate_bracket_size(num_teams)
    return bracket_size - num_teams


def calculate_total_rounds(num_teams: int) -> int:
    if num_teams < 2:
        return 0
    return int(math.log2(calculate_bracket_size(num_teams)))


def generate_elimination_fixtures(teams: Sequence[Team], tournament_id,
                                  rng: Optional[random.Random] = None) -> List[Match]:
    """
    Generate every match of a single elimination bracket.

    Round 1 pairs consecutive slots of the shuffled roster, padded with byes
    at the end up to the next power of two. A team drawn against a bye plays
    a walkover (away side is the bye, persisted as null). Slot pairs made of
    two byes hold nobody and are skipped. Later rounds only hold pending
    slots; winners are advanced by the caller once results are in.

    Matches come out round by round, each round in bracket position order
    with positions counted from 0.
    """
    check_roster(teams)
    rng = rng or random.Random()

    slots = [TeamRef.real(team.team_id) for team in teams]
    rng.shuffle(slots)
    slots.extend(TeamRef.bye() for _ in range(calculate_byes(len(slots))))

    matches = []
    bracket_round = 1
    while len(slots) >= 2:
        position = 0
        next_slots = []
        for i in range(0, len(slots), 2):
            home, away = slots[i], slots[i + 1]
            next_slots.append(TeamRef.pending())
            if home.is_bye and away.is_bye:
                continue
            matches.append(Match(
                tournament_id=tournament_id,
                home=home,
                away=away,
                matchday=bracket_round,
                bracket_round=bracket_round,
                bracket_position=position,
            ))
            position += 1
        slots = next_slots
        bracket_round += 1

    logger.debug("Generated %d elimination matches over %d rounds for %d teams",
                 len(matches), bracket_round - 1, len(teams))
    return matches


def get_elimination_bracket_display(matches: Sequence[Match]) -> List[Dict]:
    """
    Group bracket matches by round for display.

    Returns a list of {'round', 'name', 'matches', 'byes'} in round order.
    """
    rounds = OrderedDict()
    for match in sorted(matches, key=lambda m: (m.bracket_round or 0, m.bracket_position or 0)):
        rounds.setdefault(match.bracket_round, []).append(match)

    if not rounds:
        return []

    total_rounds = max(rounds)
    display = []
    for bracket_round, round_matches in rounds.items():
        slots_in_round = 2 ** (total_rounds - bracket_round + 1)
        display.append({
            'round': bracket_round,
            'name': get_round_name(slots_in_round),
            'matches': round_matches,
            'byes': sum(1 for m in round_matches if m.is_bye),
        })
    return display
