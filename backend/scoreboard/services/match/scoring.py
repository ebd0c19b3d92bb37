import logging
from datetime import datetime, timezone

from scoreboard.exceptions import InvalidTeamError, MatchNotActiveError
from scoreboard.models import Match, MatchStatus, SetScore, TEAM1, TEAMS
from .rules import is_match_won, is_set_won, set_winner

logger = logging.getLogger(__name__)


def ensure_team(team) -> str:
    if team not in TEAMS:
        raise InvalidTeamError(f"Unknown team {team!r}; expected 'team1' or 'team2'")
    return team


def apply_point(match: Match, team: str, now: datetime | None = None) -> Match:
    """Award one rally point to ``team`` and close the set or match if it is won.

    The point opens a fresh undo opportunity: ``last_scoring_team`` is set
    and ``undo_used`` is cleared.
    """
    ensure_team(team)
    if match.status != MatchStatus.IN_PROGRESS:
        raise MatchNotActiveError(f'Cannot score while match is {match.status}')

    if team == TEAM1:
        match.team1_score += 1
    else:
        match.team2_score += 1
    match.last_scoring_team = team
    match.last_score_time = now or datetime.now(timezone.utc)
    match.undo_used = False

    logger.debug(
        'point match=%s team=%s score=%s-%s set=%s',
        match.id, team, match.team1_score, match.team2_score, match.current_set,
    )
    finalize_set_if_won(match)
    return match


def finalize_set_if_won(match: Match) -> SetScore | None:
    """Record the live set if its score is a win.

    Appends the set to history, credits the winner, clears the live score
    and either completes the match or moves on to the next set. Returns the
    recorded set, or None when the live score is not a win.
    """
    winner = set_winner(match.current_set, match.team1_score, match.team2_score)
    if winner is None:
        return None

    finished = SetScore(
        set_number=match.current_set,
        team1_points=match.team1_score,
        team2_points=match.team2_score,
    )
    match.sets.append(finished)
    if winner == TEAM1:
        match.team1_sets += 1
    else:
        match.team2_sets += 1
    match.team1_score = 0
    match.team2_score = 0

    if is_match_won(match.team1_sets, match.team2_sets):
        # current_set stays on the deciding set
        match.status = MatchStatus.COMPLETED
    else:
        match.current_set += 1

    logger.debug(
        'set finalized match=%s set=%s points=%s-%s sets=%s-%s status=%s',
        match.id, finished.set_number, finished.team1_points, finished.team2_points,
        match.team1_sets, match.team2_sets, match.status,
    )
    return finished


def recount_sets(match: Match) -> tuple[int, int]:
    team1_sets = 0
    team2_sets = 0
    for s in match.sets:
        if set_winner(s.set_number, s.team1_points, s.team2_points) == TEAM1:
            team1_sets += 1
        else:
            team2_sets += 1
    return team1_sets, team2_sets


def is_consistent(match: Match) -> bool:
    """Check the aggregate invariants against a full recount of ``sets``."""
    if match.team1_sets + match.team2_sets != len(match.sets):
        return False
    if (match.team1_sets, match.team2_sets) != recount_sets(match):
        return False
    if any(not is_set_won(s.set_number, s.team1_points, s.team2_points) for s in match.sets):
        return False
    if [s.set_number for s in match.sets] != list(range(1, len(match.sets) + 1)):
        return False
    won = is_match_won(match.team1_sets, match.team2_sets)
    if won != (match.status == MatchStatus.COMPLETED):
        return False
    expected_set = len(match.sets) if won else len(match.sets) + 1
    return match.current_set == expected_set
