from flask import Blueprint, jsonify, request, current_app
from scoreboard import db, socketio
from scoreboard.exceptions import InvalidScoreError, NotFoundError
from scoreboard.models import Match, MatchStatus, TEAMS
from scoreboard.services.match import (
    apply_point,
    create_match,
    edit_completed_set,
    edit_current_set_score,
    match_lock,
    pause,
    pending_undo,
    reset_current_set,
    resume,
    toggle_pause,
    undo_last_point,
)
from scoreboard.services.match.locking import forget_match_lock
import time


matches = Blueprint('matches', __name__)

_last_point_at: dict[str, float] = {}


def _broadcast(event: str, payload: dict, match_id: int) -> None:
    if not current_app.config.get('BROADCAST_UPDATES', True):
        return
    socketio.emit(event, payload, to=f"match:{match_id}", namespace='/ws')


def _committed(match: Match):
    """Commit the locked match, notify the room and return the JSON response."""
    db.session.commit()
    payload = match.to_dict()
    _broadcast('match_update', payload, match.id)
    return jsonify(payload)


def _points_from_body() -> tuple:
    data = request.get_json(silent=True) or {}
    if 'team1Points' not in data or 'team2Points' not in data:
        raise InvalidScoreError('team1Points and team2Points are required')
    return data['team1Points'], data['team2Points']


def _debounce_ms() -> int:
    try:
        return int(current_app.config.get('POINT_DEBOUNCE_MS', 0))
    except (TypeError, ValueError):
        return 0


def _is_debounced(match_id: int, team) -> bool:
    debounce_ms = _debounce_ms()
    if debounce_ms <= 0:
        return False
    last = _last_point_at.get(f"{match_id}:{team}", 0)
    return time.time() * 1000.0 - last < debounce_ms


def _record_point(match_id: int, team: str) -> None:
    # Only accepted points start a debounce window
    if _debounce_ms() > 0:
        _last_point_at[f"{match_id}:{team}"] = time.time() * 1000.0


def _forget_points(match_id: int) -> None:
    for team in TEAMS:
        _last_point_at.pop(f"{match_id}:{team}", None)


@matches.route('', methods=['GET'])
def list_matches():
    rows = Match.query.order_by(Match.created_at.desc(), Match.id.desc()).all()
    return jsonify([m.to_dict() for m in rows])


@matches.route('/active', methods=['GET'])
def list_active_matches():
    rows = (
        Match.query.filter(Match.status != MatchStatus.COMPLETED)
        .order_by(Match.created_at.desc(), Match.id.desc())
        .all()
    )
    return jsonify([m.to_dict() for m in rows])


@matches.route('', methods=['POST'])
def create():
    data = request.get_json(silent=True) or {}
    match = create_match(data.get('team1Name'), data.get('team2Name'))
    db.session.add(match)
    db.session.commit()
    current_app.logger.info(f"[create] match={match.id} {match.team1_name} vs {match.team2_name}")
    return jsonify(match.to_dict()), 201


@matches.route('/<int:match_id>', methods=['GET'])
def get_match(match_id):
    match = db.session.get(Match, match_id)
    if match is None:
        raise NotFoundError(f'Match {match_id} not found')
    return jsonify(match.to_dict())


@matches.route('/<int:match_id>', methods=['DELETE'])
def delete_match(match_id):
    with match_lock(match_id) as match:
        db.session.delete(match)
        db.session.commit()
    forget_match_lock(match_id)
    _forget_points(match_id)
    current_app.logger.info(f"[delete] match={match_id}")
    _broadcast('match_deleted', {'match_id': match_id}, match_id)
    return '', 204


@matches.route('/<int:match_id>/score', methods=['PUT'])
def score_point(match_id):
    data = request.get_json(silent=True) or {}
    team = data.get('team')
    if _is_debounced(match_id, team):
        return jsonify({'message': 'debounced'}), 202

    with match_lock(match_id) as match:
        sets_before = len(match.sets)
        apply_point(match, team)
        current_app.logger.info(
            f"[point] match={match.id} team={team} score={match.team1_score}-{match.team2_score} set={match.current_set}"
        )
        if len(match.sets) > sets_before:
            closed = match.sets[-1]
            current_app.logger.info(
                f"[set-finalized] match={match.id} set={closed.set_number} points={closed.team1_points}-{closed.team2_points} "
                f"sets={match.team1_sets}-{match.team2_sets} status={match.status}"
            )
        response = _committed(match)
    _record_point(match_id, team)
    return response


@matches.route('/<int:match_id>/undo', methods=['PUT'])
def undo_point(match_id):
    with match_lock(match_id) as match:
        pending = pending_undo(match)
        undo_last_point(match)
        current_app.logger.info(
            f"[undo] match={match.id} team={pending.team} reopened_set={pending.closed_set} "
            f"score={match.team1_score}-{match.team2_score} set={match.current_set}"
        )
        return _committed(match)


@matches.route('/<int:match_id>/reset-set', methods=['PUT'])
def reset_set(match_id):
    with match_lock(match_id) as match:
        reset_current_set(match)
        current_app.logger.info(f"[reset-set] match={match.id} set={match.current_set}")
        return _committed(match)


@matches.route('/<int:match_id>/current-score', methods=['PUT'])
def edit_current_score(match_id):
    team1_points, team2_points = _points_from_body()
    with match_lock(match_id) as match:
        edit_current_set_score(match, team1_points, team2_points)
        current_app.logger.info(
            f"[edit-score] match={match.id} from={match.previous_team1_score}-{match.previous_team2_score} "
            f"to={team1_points}-{team2_points} status={match.status}"
        )
        return _committed(match)


@matches.route('/<int:match_id>/sets/<int:set_number>', methods=['PUT'])
def edit_set(match_id, set_number):
    team1_points, team2_points = _points_from_body()
    with match_lock(match_id) as match:
        edit_completed_set(match, set_number, team1_points, team2_points)
        current_app.logger.info(
            f"[edit-set] match={match.id} set={set_number} points={team1_points}-{team2_points} "
            f"sets={match.team1_sets}-{match.team2_sets} status={match.status}"
        )
        return _committed(match)


@matches.route('/<int:match_id>/pause', methods=['PUT'])
def pause_match(match_id):
    with match_lock(match_id) as match:
        pause(match)
        current_app.logger.info(f"[pause] match={match.id}")
        return _committed(match)


@matches.route('/<int:match_id>/resume', methods=['PUT'])
def resume_match(match_id):
    with match_lock(match_id) as match:
        resume(match)
        current_app.logger.info(f"[resume] match={match.id}")
        return _committed(match)


@matches.route('/<int:match_id>/toggle-pause', methods=['PUT'])
def toggle_pause_match(match_id):
    with match_lock(match_id) as match:
        toggle_pause(match)
        current_app.logger.info(f"[toggle-pause] match={match.id} status={match.status}")
        return _committed(match)
