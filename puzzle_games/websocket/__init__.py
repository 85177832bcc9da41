"""
WebSocket Package

Socket.IO handlers for real-time updates.
"""

from .handlers import register_websocket_handlers, broadcast_crossword_tick

__all__ = ['register_websocket_handlers', 'broadcast_crossword_tick']
