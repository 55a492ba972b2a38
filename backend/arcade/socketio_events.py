from flask import request
from flask_socketio import emit


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def register_socketio_handlers(broadcaster) -> None:
    """Register Socket.IO event handlers for live score viewers.

    Viewers need no handshake: connecting is enough to start receiving
    ``updateScore`` for every game.
    """
    from arcade import socketio

    def handle_connect(auth=None):
        broadcaster.add_viewer(_get_sid())
        emit('connected', {'message': f'Connected to {broadcaster.namespace}'})

    def handle_disconnect(*args):
        broadcaster.remove_viewer(_get_sid())

    def handle_ping(data):
        emit('pong', data or {})

    socketio.on_event('connect', handle_connect, namespace=broadcaster.namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=broadcaster.namespace)
    socketio.on_event('ping', handle_ping, namespace=broadcaster.namespace)
