"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Board Settings
    ROWS = int(os.getenv('ROWS', 6))
    COLS = int(os.getenv('COLS', 5))

    # Difficulty policy: "score" derives the tier from the session score,
    # "explicit" lets the player pick it per round
    DIFFICULTY_POLICY = os.getenv('DIFFICULTY_POLICY', 'score')

    # Word List Provider Settings (empty URL keeps the built-in pools)
    WORD_LIST_URL = os.getenv('WORD_LIST_URL', '')
    WORD_LIST_TIMEOUT_SECONDS = float(os.getenv('WORD_LIST_TIMEOUT_SECONDS', 5))

    # Hint Provider Settings
    DICTIONARY_API = os.getenv('DICTIONARY_API', 'https://api.dictionaryapi.dev/api/v2/entries/en/')
    HINT_TIMEOUT_SECONDS = float(os.getenv('HINT_TIMEOUT_SECONDS', 5))
    HINT_COUNTDOWN_SECONDS = int(os.getenv('HINT_COUNTDOWN_SECONDS', 10))

    # Database Settings (stats persistence, in-memory when unset)
    MONGO_URI = os.getenv('MONGO_URI')

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    WORD_LIST_URL = ''
    HINT_COUNTDOWN_SECONDS = 0
    MONGO_URI = None


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
