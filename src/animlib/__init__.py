"""
AnimLib - Skeletal Animation Core

Per-frame bone matrices for skinned meshes: keyframe interpolation,
hierarchical transform propagation, vertex influences and playback.
"""

# Configuration
from .config.settings import *

# Animation core
from .animation import (
    AnimationError,
    SkeletonError,
    HierarchyError,
    Keyframe,
    KeyframeTrack,
    PositionTrack,
    RotationTrack,
    ScaleTrack,
    InterpolationType,
    Bone,
    BoneTracks,
    Skeleton,
    HierarchyNode,
    NodeDefinition,
    build_hierarchy,
    evaluate_hierarchy,
    VertexBoneInfluence,
    SkinWeights,
    AnimationClip,
    AnimationPlayer,
    PlaybackState,
)

# Loaders
from .loaders import AnimatedModel

# Debug
from .debug import AnimationDebugInfo

__version__ = "0.2.0"
__all__ = [
    # Config (exported via *)
    "PlaybackSettings",
    "load_playback_settings",
    # Errors
    "AnimationError",
    "SkeletonError",
    "HierarchyError",
    # Tracks
    "Keyframe",
    "KeyframeTrack",
    "PositionTrack",
    "RotationTrack",
    "ScaleTrack",
    "InterpolationType",
    # Skeleton
    "Bone",
    "BoneTracks",
    "Skeleton",
    "HierarchyNode",
    "NodeDefinition",
    "build_hierarchy",
    "evaluate_hierarchy",
    # Skinning
    "VertexBoneInfluence",
    "SkinWeights",
    # Playback
    "AnimationClip",
    "AnimationPlayer",
    "PlaybackState",
    "AnimatedModel",
    "AnimationDebugInfo",
]
