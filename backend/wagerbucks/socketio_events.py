from flask_socketio import join_room, leave_room, emit
from flask import current_app


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def _room_for(data):
    wager_id = (data or {}).get('wager_id')
    if wager_id is None or isinstance(wager_id, bool):
        return None
    try:
        return f"wager:{int(wager_id)}"
    except (TypeError, ValueError):
        return None


def handle_join_wager(data):
    room = _room_for(data)
    if not room:
        emit('error', {'message': 'wager_id is required'})
        return
    join_room(room)
    current_app.logger.debug(f"[ws-join] room={room}")
    emit('joined', {'room': room})


def handle_leave_wager(data):
    room = _room_for(data)
    if not room:
        emit('error', {'message': 'wager_id is required'})
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
    from wagerbucks import socketio

    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_wager', handle_join_wager, namespace='/ws')
    socketio.on_event('leave_wager', handle_leave_wager, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        # Test-only mirror on default namespace
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('join_wager', handle_join_wager, namespace='/')
        socketio.on_event('leave_wager', handle_leave_wager, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
