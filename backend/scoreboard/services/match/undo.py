import logging
from collections import namedtuple

from scoreboard.exceptions import NothingToUndoError, UndoAlreadyUsedError
from scoreboard.models import Match, MatchStatus, TEAM1
from .rules import set_winner

logger = logging.getLogger(__name__)

PendingUndo = namedtuple('PendingUndo', ['team', 'scored_at', 'closed_set'])


def pending_undo(match: Match) -> PendingUndo | None:
    """Describe the point that ``undo_last_point`` would revert, if any.

    Every non-point action clears ``last_scoring_team``, so a 0-0 live
    score here can only mean the last point closed a set.
    """
    if not match.last_scoring_team or match.undo_used:
        return None
    closed_set = match.team1_score == 0 and match.team2_score == 0
    return PendingUndo(match.last_scoring_team, match.last_score_time, closed_set)


def undo_last_point(match: Match) -> Match:
    if not match.last_scoring_team:
        raise NothingToUndoError()
    if match.undo_used:
        raise UndoAlreadyUsedError()

    team = match.last_scoring_team
    if match.team1_score > 0 or match.team2_score > 0:
        if team == TEAM1:
            match.team1_score -= 1
        else:
            match.team2_score -= 1
    else:
        _reopen_last_set(match, team)

    match.undo_used = True
    logger.debug(
        'undo match=%s team=%s score=%s-%s set=%s',
        match.id, team, match.team1_score, match.team2_score, match.current_set,
    )
    return match


def _reopen_last_set(match: Match, team: str) -> None:
    if not match.sets:
        # Only reachable if the aggregate was modified outside the engine
        raise NothingToUndoError('No completed set to reopen')

    closed = match.sets.pop()
    if set_winner(closed.set_number, closed.team1_points, closed.team2_points) == TEAM1:
        match.team1_sets -= 1
    else:
        match.team2_sets -= 1

    match.current_set = closed.set_number
    match.team1_score = closed.team1_points - (1 if team == TEAM1 else 0)
    match.team2_score = closed.team2_points - (0 if team == TEAM1 else 1)

    if match.status == MatchStatus.COMPLETED:
        match.status = MatchStatus.IN_PROGRESS
