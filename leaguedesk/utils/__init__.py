"""Utility functions and helpers"""

from .validators import MatchValidator, TeamValidator

__all__ = ['MatchValidator', 'TeamValidator']
