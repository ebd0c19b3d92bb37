import random
from datetime import datetime, timezone

import pytest

from scoreboard.exceptions import InvalidTeamError, MatchNotActiveError
from scoreboard.models import Match, MatchStatus
from scoreboard.services.match import apply_point
from scoreboard.services.match.rules import set_target
from scoreboard.services.match.scoring import is_consistent


def new_match():
    return Match(team1_name='Eagles', team2_name='Hawks')


def score(match, team, times):
    for _ in range(times):
        apply_point(match, team)


def win_set(match, team):
    score(match, team, set_target(match.current_set))


def test_new_match_defaults():
    match = new_match()
    assert (match.team1_score, match.team2_score) == (0, 0)
    assert (match.team1_sets, match.team2_sets) == (0, 0)
    assert match.current_set == 1
    assert match.status == MatchStatus.IN_PROGRESS
    assert match.sets == []
    assert match.undo_used is False


def test_point_records_undo_opportunity():
    match = new_match()
    match.undo_used = True
    when = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)

    apply_point(match, 'team2', now=when)

    assert (match.team1_score, match.team2_score) == (0, 1)
    assert match.last_scoring_team == 'team2'
    assert match.last_score_time == when
    assert match.undo_used is False


# ---------- SCENARIOS ----------

def test_set_point_closes_set():
    match = new_match()
    score(match, 'team2', 23)
    score(match, 'team1', 24)

    apply_point(match, 'team1')

    assert [(s.set_number, s.team1_points, s.team2_points) for s in match.sets] == [(1, 25, 23)]
    assert (match.team1_score, match.team2_score) == (0, 0)
    assert match.current_set == 2
    assert match.team1_sets == 1
    assert is_consistent(match)


def test_one_point_margin_does_not_close_set():
    match = new_match()
    win_set(match, 'team1')
    win_set(match, 'team2')
    win_set(match, 'team1')
    for _ in range(24):
        apply_point(match, 'team1')
        apply_point(match, 'team2')

    apply_point(match, 'team1')

    assert (match.team1_score, match.team2_score) == (25, 24)
    assert len(match.sets) == 3
    assert match.current_set == 4
    assert match.status == MatchStatus.IN_PROGRESS


def test_deciding_point_completes_match():
    match = new_match()
    win_set(match, 'team1')
    win_set(match, 'team2')
    win_set(match, 'team1')
    match.team1_score = 25
    match.team2_score = 23

    apply_point(match, 'team1')

    assert (match.sets[-1].team1_points, match.sets[-1].team2_points) == (26, 23)
    assert match.team1_sets == 3
    assert match.status == MatchStatus.COMPLETED
    # current_set stays on the deciding set
    assert match.current_set == 4
    assert is_consistent(match)


def test_fifth_set_played_to_fifteen():
    match = new_match()
    for team in ('team1', 'team2', 'team1', 'team2'):
        win_set(match, team)
    assert match.current_set == 5

    score(match, 'team2', 14)
    score(match, 'team1', 15)
    assert match.status == MatchStatus.IN_PROGRESS
    score(match, 'team1', 1)

    assert (match.sets[-1].team1_points, match.sets[-1].team2_points) == (16, 14)
    assert match.status == MatchStatus.COMPLETED
    assert (match.team1_sets, match.team2_sets) == (3, 2)


# ---------- REJECTIONS ----------

def test_completed_match_rejects_points():
    match = new_match()
    for _ in range(3):
        win_set(match, 'team2')
    assert match.status == MatchStatus.COMPLETED

    with pytest.raises(MatchNotActiveError):
        apply_point(match, 'team1')
    assert len(match.sets) == 3


def test_paused_match_rejects_points():
    match = new_match()
    match.status = MatchStatus.PAUSED

    with pytest.raises(MatchNotActiveError):
        apply_point(match, 'team1')
    assert match.team1_score == 0


@pytest.mark.parametrize("team", ['team3', None, 'Team1', 1])
def test_unknown_team_rejected(team):
    match = new_match()
    with pytest.raises(InvalidTeamError):
        apply_point(match, team)


# ---------- INVARIANTS ----------

@pytest.mark.parametrize("seed", range(20))
def test_random_rallies_keep_invariants(seed):
    rng = random.Random(seed)
    match = new_match()
    while match.status != MatchStatus.COMPLETED:
        apply_point(match, rng.choice(['team1', 'team2']))
        assert is_consistent(match)
    assert 3 in (match.team1_sets, match.team2_sets)
    assert 3 <= len(match.sets) <= 5
