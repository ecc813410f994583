from flask import request
from flask_socketio import emit
from quizcraft import db, socketio, get_quiz_service, WS_NAMESPACE
from quizcraft.models import Player
from typing import Dict


# socket id -> player id for sockets that have joined
_sid_to_player: Dict[str, int] = {}


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect():
    emit('connected', {'message': f'Connected to {WS_NAMESPACE}'})


def handle_disconnect(*_args):
    _sid_to_player.pop(_get_sid(), None)


def handle_join(data):
    name = ((data or {}).get('name') or '').strip()
    if not name:
        emit('error', {'message': 'name is required'})
        return
    if len(name) > 64:
        emit('error', {'message': 'name must be at most 64 characters'})
        return
    player = Player.query.filter_by(name=name).first()
    if player is None:
        player = Player(name=name)
        db.session.add(player)
        db.session.commit()
    _sid_to_player[_get_sid()] = player.id
    emit('joined', {'player': player.to_dict()})


def handle_chat(data):
    """Relay a chat line to everyone, then let the quiz judge it."""
    player_id = _sid_to_player.get(_get_sid())
    player = db.session.get(Player, player_id) if player_id is not None else None
    if player is None:
        emit('error', {'message': 'join before chatting'})
        return
    message = (data or {}).get('message')
    if not isinstance(message, str) or not message.strip():
        emit('error', {'message': 'message is required'})
        return
    socketio.emit('chat', {'player': player.name, 'message': message}, namespace=WS_NAMESPACE)
    get_quiz_service().handle_answer(player.id, player.name, message)


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on the quiz namespace."""
    socketio.on_event('connect', handle_connect, namespace=WS_NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=WS_NAMESPACE)
    socketio.on_event('join', handle_join, namespace=WS_NAMESPACE)
    socketio.on_event('chat', handle_chat, namespace=WS_NAMESPACE)
    socketio.on_event('ping', handle_ping, namespace=WS_NAMESPACE)
