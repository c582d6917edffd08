"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, constants and curated word pools
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    ROWS, COLS, FALLBACK_WORD_POOLS, validate_word_pools, get_word_statistics
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'ROWS', 'COLS', 'FALLBACK_WORD_POOLS', 'validate_word_pools', 'get_word_statistics'
]
