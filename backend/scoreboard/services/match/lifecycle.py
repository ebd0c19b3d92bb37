import logging

from scoreboard.exceptions import InvalidMatchError, InvalidTransitionError, MatchNotActiveError
from scoreboard.models import Match, MatchStatus, TEAM_NAME_MAX_LENGTH

logger = logging.getLogger(__name__)


def create_match(team1_name, team2_name) -> Match:
    names = []
    for raw in (team1_name, team2_name):
        name = raw.strip() if isinstance(raw, str) else ''
        if not name:
            raise InvalidMatchError()
        if len(name) > TEAM_NAME_MAX_LENGTH:
            raise InvalidMatchError(f'Team names are limited to {TEAM_NAME_MAX_LENGTH} characters')
        names.append(name)
    return Match(team1_name=names[0], team2_name=names[1])


def pause(match: Match) -> Match:
    if match.status != MatchStatus.IN_PROGRESS:
        raise InvalidTransitionError(f'Cannot pause a match that is {match.status}')
    match.status = MatchStatus.PAUSED
    return match


def resume(match: Match) -> Match:
    if match.status != MatchStatus.PAUSED:
        raise InvalidTransitionError(f'Cannot resume a match that is {match.status}')
    match.status = MatchStatus.IN_PROGRESS
    return match


def toggle_pause(match: Match) -> Match:
    if match.status == MatchStatus.PAUSED:
        return resume(match)
    return pause(match)


def reset_current_set(match: Match) -> Match:
    """Zero the live score; completed sets and the set index are untouched."""
    if match.status != MatchStatus.IN_PROGRESS:
        raise MatchNotActiveError(f'Cannot reset the set while match is {match.status}')
    match.team1_score = 0
    match.team2_score = 0
    match.last_scoring_team = None
    match.last_score_time = None
    match.undo_used = False
    logger.debug('set reset match=%s set=%s', match.id, match.current_set)
    return match
