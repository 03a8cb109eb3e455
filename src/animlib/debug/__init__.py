"""
Debug Module

Provides animation state readouts for on-screen display.
"""

from .animation_overlay import AnimationDebugInfo

__all__ = ['AnimationDebugInfo']
