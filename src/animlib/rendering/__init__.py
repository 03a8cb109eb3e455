"""
Rendering

Hand-off of skinning matrices to shader programs.
"""

from .skinning import upload_bone_matrices

__all__ = ['upload_bone_matrices']
