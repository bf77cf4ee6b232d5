"""
Configuration package for tool settings.
"""

from .settings import Settings

__all__ = ['Settings']
