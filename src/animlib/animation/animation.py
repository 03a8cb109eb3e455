"""
Animation Clip

A named, timed animation: the node tree it is evaluated against plus the
per-bone keyframe tracks it plays.
"""

import logging
from typing import Dict, Optional

from ..config.settings import DEFAULT_TICKS_PER_SECOND
from .bone import BoneTracks
from .hierarchy import HierarchyNode, evaluate_hierarchy
from .skeleton import Skeleton

logger = logging.getLogger(__name__)


class AnimationClip:
    """
    Complete animation clip.

    Each clip owns its own hierarchy snapshot, since clips may be authored
    against slightly different node sets. Keyframe times are in ticks;
    ``ticks_per_second`` converts them to seconds.

    Tracks come from the bones themselves unless the clip carries its own
    set for a bone in ``tracks`` (bone index -> BoneTracks).
    """

    def __init__(
        self,
        name: str,
        root: HierarchyNode,
        skeleton: Skeleton,
        ticks_per_second: Optional[float] = None,
        tracks: Optional[Dict[int, BoneTracks]] = None,
    ):
        """
        Initialize animation clip.

        Args:
            name: Clip name
            root: Root node of the clip's hierarchy
            skeleton: Skeleton the hierarchy's bone indices refer to
            ticks_per_second: Playback rate (None or <= 0 uses the default)
            tracks: Per-bone tracks owned by this clip

        Raises:
            HierarchyError: If the hierarchy does not fit the skeleton
        """
        root.validate(skeleton)

        self.name = name
        self.root = root
        self.tracks: Dict[int, BoneTracks] = dict(tracks or {})

        if ticks_per_second is None or ticks_per_second <= 0.0:
            logger.debug("Clip '%s' has no tick rate, using %.1f", name, DEFAULT_TICKS_PER_SECOND)
            ticks_per_second = DEFAULT_TICKS_PER_SECOND
        self.ticks_per_second = float(ticks_per_second)

        self.duration = self._compute_duration(skeleton)

    def _compute_duration(self, skeleton: Skeleton) -> float:
        """Latest keyframe time among bones referenced by the hierarchy."""
        duration = 0.0
        for index in self.root.bone_indices():
            tracks = self.tracks.get(index, skeleton.bones[index].tracks)
            duration = max(duration, tracks.max_time)
        return duration

    @property
    def duration_seconds(self) -> float:
        return self.duration / self.ticks_per_second

    def evaluate(self, time: float, skeleton: Skeleton):
        """
        Refresh the skeleton's final matrices at a given time.

        Args:
            time: Time in ticks
            skeleton: Skeleton receiving the final matrices
        """
        evaluate_hierarchy(self.root, time, skeleton, self.tracks)

    def __repr__(self):
        return f"AnimationClip(name='{self.name}', duration={self.duration:.2f} ticks, tps={self.ticks_per_second})"
