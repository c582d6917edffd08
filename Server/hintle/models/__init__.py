"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    Difficulty, Verdict, Outcome, RoundPhase, KeyAction,
    SessionStats, RoundState, InputResult, RoundView
)

__all__ = [
    'Difficulty', 'Verdict', 'Outcome', 'RoundPhase', 'KeyAction',
    'SessionStats', 'RoundState', 'InputResult', 'RoundView'
]
