"""
Puzzle Games Server - Main Entry Point

This is the main entry point for the puzzle games server.
It initializes the storage backend and the game hub, starts the crossword
clock and runs the Flask-SocketIO application.
"""

from puzzle_games import create_app
from puzzle_games.config import Config, validate_puzzle_integrity
from puzzle_games.services import IntervalTicker, create_store, initialize_game_hub
from puzzle_games.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    ticker = None
    try:
        print("Initializing services...")

        validate_puzzle_integrity()
        print("✓ Puzzle content validated")

        store = create_store(Config)
        print(f"✓ Storage backend '{Config.STORE_BACKEND}' ready")

        ticker = IntervalTicker(Config.TICK_INTERVAL_SECONDS)
        initialize_game_hub(store, ticker=ticker)
        print("✓ Game hub initialized successfully")

        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        ticker.start()
        print(f"✓ Crossword clock started - ticking every {Config.TICK_INTERVAL_SECONDS}s")

        game_logger.logger.info("Puzzle Games Server starting")

        print(f"\nStarting Puzzle Games Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG,
                     use_reloader=False, allow_unsafe_werkzeug=True)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Puzzle Games Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise
    finally:
        if ticker is not None:
            ticker.stop()


if __name__ == '__main__':
    main()
