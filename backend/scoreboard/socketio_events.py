from flask_socketio import join_room, leave_room, emit
from scoreboard import socketio


def _room_for(data):
    match_id = (data or {}).get('match_id')
    if match_id in (None, ''):
        return None
    return f"match:{match_id}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_match(data):
    room = _room_for(data)
    if not room:
        emit('error', {'message': 'match_id is required'})
        return
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_match(data):
    room = _room_for(data)
    if not room:
        emit('error', {'message': 'match_id is required'})
        return
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    handlers = (
        ('connect', handle_connect),
        ('join_match', handle_join_match),
        ('leave_match', handle_leave_match),
        ('ping', handle_ping),
    )
    for event, handler in handlers:
        socketio.on_event(event, handler, namespace='/ws')

    if testing:
        for event, handler in handlers:
            socketio.on_event(event, handler, namespace='/')
