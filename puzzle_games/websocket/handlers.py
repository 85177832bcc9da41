"""
WebSocket Event Handlers

Pushes the crossword clock to subscribed clients in real time.
"""

from flask_socketio import emit, join_room, leave_room

from ..services.game_hub import get_game_hub
from ..utils.game_logger import game_logger

CROSSWORD_ROOM = 'crossword'


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('crossword_subscribe')
    def handle_crossword_subscribe(data=None):
        """Join the clock room and receive the current time immediately."""
        hub = get_game_hub()
        if not hub:
            emit('error', {'error': 'Game service unavailable'})
            return
        attach_tick_broadcast(socketio, hub)
        join_room(CROSSWORD_ROOM)
        emit('crossword_tick', hub.crossword.clock_view())

    @socketio.on('crossword_unsubscribe')
    def handle_crossword_unsubscribe(data=None):
        leave_room(CROSSWORD_ROOM)

    hub = get_game_hub()
    if hub:
        attach_tick_broadcast(socketio, hub)
    else:
        game_logger.logger.warning(
            "Game hub not initialized; crossword tick broadcast will attach on first subscribe"
        )


def attach_tick_broadcast(socketio, hub):
    """Hook the hub's crossword clock to this SocketIO server, once per hub."""
    if getattr(socketio, 'crossword_hub', None) is hub:
        return
    hub.crossword.add_tick_listener(lambda clock: broadcast_crossword_tick(socketio, clock))
    socketio.crossword_hub = hub


def broadcast_crossword_tick(socketio, clock):
    """Send one clock update to every subscribed client."""
    try:
        socketio.emit('crossword_tick', clock, room=CROSSWORD_ROOM)
    except Exception as e:
        game_logger.logger.error(f"Failed to broadcast crossword tick: {e}")
