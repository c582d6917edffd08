"""
Hintle Game Server - Main Entry Point

This is the main entry point for the Hintle game server.
It initializes the session service and starts the Flask-SocketIO application.
"""

from hintle import create_app
from hintle.config import Config, validate_word_pools, get_word_statistics
from hintle.services.session_service import initialize_session_service
from hintle.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        validate_word_pools()
        stats = get_word_statistics()
        print(f"✓ Built-in word pools valid ({stats['total_words']} words)")

        # Bootstraps the word pools once, before any round is played
        session_service = initialize_session_service(Config)
        print("✓ Session service initialized successfully")
        print(f"  Difficulty policy: {session_service.difficulty_policy}")
        print(f"  Stats store: {type(session_service.stats_store).__name__}")
        print(f"  Word list: {'remote' if session_service.word_source.pools else 'built-in'}")

        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Hintle Server Starting")

        print(f"\nStarting Hintle Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Hintle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
