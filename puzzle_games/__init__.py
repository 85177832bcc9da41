"""
Puzzle Games Server Application Package

Hosts four puzzle games (Wordle, Connections, Strands and Crossword) with
locally persisted progress and a shared completion registry.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    The game hub must be initialized first (see main.py) so the WebSocket
    handlers can attach to the crossword clock.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance and its SocketIO wrapper
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    # Register blueprints
    from .controllers.menu_controller import menu_bp
    from .controllers.wordle_controller import wordle_bp
    from .controllers.connections_controller import connections_bp
    from .controllers.strands_controller import strands_bp
    from .controllers.crossword_controller import crossword_bp

    app.register_blueprint(menu_bp, url_prefix='/api')
    app.register_blueprint(wordle_bp, url_prefix='/api/wordle')
    app.register_blueprint(connections_bp, url_prefix='/api/connections')
    app.register_blueprint(strands_bp, url_prefix='/api/strands')
    app.register_blueprint(crossword_bp, url_prefix='/api/crossword')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
