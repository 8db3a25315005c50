"""
Display modules for jumpapp output.
"""

from . import window_display

__all__ = ['window_display']
