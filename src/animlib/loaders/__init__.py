"""
Loaders

Assembly of loaded animation data into playable model instances.
"""

from .animated_model import AnimatedModel

__all__ = ['AnimatedModel']
