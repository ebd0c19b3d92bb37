class ScoreboardError(Exception):
    """Base class for rejected match operations.

    Each subclass maps to one HTTP status and a stable ``code`` that
    clients can switch on; ``message`` is meant for display.
    """

    status_code = 400
    code = 'scoreboard_error'
    default_message = 'Request could not be applied'

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {'error': self.code, 'message': self.message}


class MatchNotActiveError(ScoreboardError):
    status_code = 409
    code = 'match_not_active'
    default_message = 'Match is not in progress'


class InvalidTransitionError(ScoreboardError):
    status_code = 409
    code = 'invalid_transition'
    default_message = 'Match cannot change to that state'


class InvalidScoreError(ScoreboardError):
    code = 'invalid_score'
    default_message = 'Scores must be non-negative integers'


class InvalidTeamError(InvalidScoreError):
    code = 'invalid_team'
    default_message = "Team must be 'team1' or 'team2'"


class InvalidSetScoreError(ScoreboardError):
    code = 'invalid_set_score'
    default_message = 'Set score does not satisfy the win condition'


class InvalidMatchError(ScoreboardError):
    code = 'invalid_match'
    default_message = 'Both team names are required'


class NothingToUndoError(ScoreboardError):
    status_code = 409
    code = 'nothing_to_undo'
    default_message = 'No point to undo'


class UndoAlreadyUsedError(ScoreboardError):
    status_code = 409
    code = 'undo_already_used'
    default_message = 'Undo already used for the last point'


class NotFoundError(ScoreboardError):
    status_code = 404
    code = 'not_found'
    default_message = 'Not found'
