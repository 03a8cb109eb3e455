"""
Configuration

Animation constants and playback settings.
"""

from .settings import *
