"""
Animation System

Skeletal animation core: keyframe tracks, bones, skeleton hierarchy,
vertex influences and clip playback.
"""

from .errors import AnimationError, SkeletonError, HierarchyError
from .keyframe import (
    Keyframe,
    KeyframeTrack,
    PositionTrack,
    RotationTrack,
    ScaleTrack,
    InterpolationType,
    create_track,
    slerp_shortest,
)
from .bone import Bone, BoneTracks
from .skeleton import Skeleton
from .hierarchy import HierarchyNode, NodeDefinition, build_hierarchy, evaluate_hierarchy
from .skin import VertexBoneInfluence, SkinWeights
from .animation import AnimationClip
from .animation_player import AnimationPlayer, PlaybackState

__all__ = [
    'AnimationError',
    'SkeletonError',
    'HierarchyError',
    'Keyframe',
    'KeyframeTrack',
    'PositionTrack',
    'RotationTrack',
    'ScaleTrack',
    'InterpolationType',
    'create_track',
    'slerp_shortest',
    'Bone',
    'BoneTracks',
    'Skeleton',
    'HierarchyNode',
    'NodeDefinition',
    'build_hierarchy',
    'evaluate_hierarchy',
    'VertexBoneInfluence',
    'SkinWeights',
    'AnimationClip',
    'AnimationPlayer',
    'PlaybackState',
]
