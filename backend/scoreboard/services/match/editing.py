import logging

from scoreboard.exceptions import (
    InvalidScoreError,
    InvalidSetScoreError,
    MatchNotActiveError,
    NotFoundError,
)
from scoreboard.models import Match, MatchStatus, TEAM1
from .rules import SETS_TO_WIN, describe_set_rule, is_match_won, is_set_won, set_winner
from .scoring import finalize_set_if_won, recount_sets

logger = logging.getLogger(__name__)


def validate_points(team1_points, team2_points) -> tuple[int, int]:
    for value in (team1_points, team2_points):
        # bool is an int subclass; reject it explicitly
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidScoreError(f'Score {value!r} is not an integer')
        if value < 0:
            raise InvalidScoreError(f'Score {value} is negative')
    return team1_points, team2_points


def _clear_undo(match: Match) -> None:
    match.last_scoring_team = None
    match.last_score_time = None
    match.undo_used = False


def edit_current_set_score(match: Match, team1_points, team2_points) -> Match:
    """Overwrite the live score of the current set.

    A manual overwrite is not a point, so it cannot be undone with
    ``undo_last_point``; the previous live score is kept in
    ``previous_team1_score``/``previous_team2_score`` instead. A winning
    score closes the set exactly as a point would.
    """
    validate_points(team1_points, team2_points)
    if match.status != MatchStatus.IN_PROGRESS:
        raise MatchNotActiveError(f'Cannot edit the live score while match is {match.status}')

    match.previous_team1_score = match.team1_score
    match.previous_team2_score = match.team2_score
    match.team1_score = team1_points
    match.team2_score = team2_points
    _clear_undo(match)

    finalize_set_if_won(match)
    logger.debug(
        'current score edited match=%s from=%s-%s to=%s-%s status=%s',
        match.id, match.previous_team1_score, match.previous_team2_score,
        team1_points, team2_points, match.status,
    )
    return match


def _find_set(match: Match, set_number):
    for s in match.sets:
        if s.set_number == set_number:
            return s
    raise NotFoundError(f'Set {set_number} has not been played')


def _recount_with(match: Match, edited, team1_points: int, team2_points: int) -> tuple[int, int]:
    """Set counts the history would have with ``edited`` at the new score."""
    team1_sets = 0
    team2_sets = 0
    for s in match.sets:
        if s is edited:
            winner = set_winner(s.set_number, team1_points, team2_points)
        else:
            winner = set_winner(s.set_number, s.team1_points, s.team2_points)
        if winner == TEAM1:
            team1_sets += 1
        else:
            team2_sets += 1
    return team1_sets, team2_sets


def edit_completed_set(match: Match, set_number, team1_points, team2_points) -> Match:
    """Correct the recorded score of a finished set.

    Set counters and status are rebuilt from the whole history rather than
    adjusted, so an edit can both complete and reopen a match.
    """
    validate_points(team1_points, team2_points)
    edited = _find_set(match, set_number)
    if not is_set_won(set_number, team1_points, team2_points):
        raise InvalidSetScoreError(
            f'{team1_points}-{team2_points} does not finish the set. {describe_set_rule(set_number)}'
        )
    if max(_recount_with(match, edited, team1_points, team2_points)) > SETS_TO_WIN:
        raise InvalidSetScoreError(
            f'Set {set_number} at {team1_points}-{team2_points} would give a team more than {SETS_TO_WIN} sets'
        )

    was_status = match.status
    edited.team1_points = team1_points
    edited.team2_points = team2_points
    match.team1_sets, match.team2_sets = recount_sets(match)
    _clear_undo(match)

    if is_match_won(match.team1_sets, match.team2_sets):
        match.status = MatchStatus.COMPLETED
        match.current_set = len(match.sets)
        match.team1_score = 0
        match.team2_score = 0
    else:
        # PAUSED is only left through resume
        if was_status == MatchStatus.COMPLETED:
            match.status = MatchStatus.IN_PROGRESS
        match.current_set = len(match.sets) + 1

    logger.debug(
        'set edited match=%s set=%s points=%s-%s sets=%s-%s status=%s->%s',
        match.id, set_number, team1_points, team2_points,
        match.team1_sets, match.team2_sets, was_status, match.status,
    )
    return match
