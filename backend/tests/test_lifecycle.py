import pytest

from scoreboard.exceptions import InvalidMatchError, InvalidTransitionError, MatchNotActiveError
from scoreboard.models import MatchStatus
from scoreboard.services.match import (
    apply_point,
    create_match,
    pause,
    reset_current_set,
    resume,
    toggle_pause,
)


def test_create_match_trims_names():
    match = create_match('  Eagles ', 'Hawks')
    assert (match.team1_name, match.team2_name) == ('Eagles', 'Hawks')
    assert match.status == MatchStatus.IN_PROGRESS
    assert match.current_set == 1


@pytest.mark.parametrize("team1, team2", [('', 'Hawks'), ('Eagles', '   '), (None, 'Hawks'), ('Eagles', 'x' * 65)])
def test_create_match_rejects_bad_names(team1, team2):
    with pytest.raises(InvalidMatchError):
        create_match(team1, team2)


def test_pause_and_resume():
    match = create_match('Eagles', 'Hawks')
    apply_point(match, 'team1')

    pause(match)
    assert match.status == MatchStatus.PAUSED
    assert match.team1_score == 1

    resume(match)
    assert match.status == MatchStatus.IN_PROGRESS
    assert match.last_scoring_team == 'team1'


def test_double_pause_rejected():
    match = create_match('Eagles', 'Hawks')
    pause(match)
    with pytest.raises(InvalidTransitionError):
        pause(match)
    assert match.status == MatchStatus.PAUSED


def test_resume_requires_pause():
    match = create_match('Eagles', 'Hawks')
    with pytest.raises(InvalidTransitionError):
        resume(match)


def test_completed_match_cannot_pause():
    match = create_match('Eagles', 'Hawks')
    match.status = MatchStatus.COMPLETED
    with pytest.raises(InvalidTransitionError):
        pause(match)
    with pytest.raises(InvalidTransitionError):
        toggle_pause(match)


def test_toggle_pause():
    match = create_match('Eagles', 'Hawks')
    toggle_pause(match)
    assert match.status == MatchStatus.PAUSED
    toggle_pause(match)
    assert match.status == MatchStatus.IN_PROGRESS


def test_reset_current_set_keeps_history():
    match = create_match('Eagles', 'Hawks')
    for _ in range(25):
        apply_point(match, 'team1')
    for _ in range(7):
        apply_point(match, 'team2')

    reset_current_set(match)

    assert (match.team1_score, match.team2_score) == (0, 0)
    assert match.last_scoring_team is None
    assert match.last_score_time is None
    assert match.undo_used is False
    assert len(match.sets) == 1
    assert (match.team1_sets, match.current_set) == (1, 2)


def test_reset_requires_active_match():
    match = create_match('Eagles', 'Hawks')
    pause(match)
    with pytest.raises(MatchNotActiveError):
        reset_current_set(match)
