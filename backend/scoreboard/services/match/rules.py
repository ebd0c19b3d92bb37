"""Set and match thresholds for best-of-5 volleyball.

Every win check in the service goes through these functions.
"""

from scoreboard.models import TEAM1, TEAM2

SETS_TO_WIN = 3
MAX_SETS = 5
REGULAR_SET_TARGET = 25
DECIDING_SET_TARGET = 15
MIN_MARGIN = 2


def set_target(set_number: int) -> int:
    return DECIDING_SET_TARGET if set_number == MAX_SETS else REGULAR_SET_TARGET


def is_set_won(set_number: int, team1_points: int, team2_points: int) -> bool:
    return (
        max(team1_points, team2_points) >= set_target(set_number)
        and abs(team1_points - team2_points) >= MIN_MARGIN
    )


def is_match_won(team1_sets: int, team2_sets: int) -> bool:
    return team1_sets == SETS_TO_WIN or team2_sets == SETS_TO_WIN


def set_winner(set_number: int, team1_points: int, team2_points: int):
    """Return the winning team of a finished set, or None if it is still open."""
    if not is_set_won(set_number, team1_points, team2_points):
        return None
    return TEAM1 if team1_points > team2_points else TEAM2


def describe_set_rule(set_number: int) -> str:
    return f'Set {set_number}: first to {set_target(set_number)} (win by {MIN_MARGIN})'
