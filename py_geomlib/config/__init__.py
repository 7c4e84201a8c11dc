"""
Configuration for the geometry library.
"""

from .config import Settings, settings

__all__ = ['Settings', 'settings']
