"""
Animated Model

Bundles a skeleton, its clips, skin weights and the player driving them.
"""

import logging
from typing import List, Optional, Sequence

from ..animation.animation import AnimationClip
from ..animation.animation_player import AnimationPlayer
from ..animation.skeleton import Skeleton
from ..animation.skin import SkinWeights
from ..config.settings import PlaybackSettings, load_playback_settings

logger = logging.getLogger(__name__)


class AnimatedModel:
    """
    One animated model instance.

    Receives validated data from the ingestion side (skeleton, clips,
    per-mesh skin weights) and exposes a per-frame ``update``. The
    skeleton's final matrices are the only output the renderer reads.
    """

    def __init__(
        self,
        skeleton: Skeleton,
        clips: Optional[Sequence[AnimationClip]] = None,
        skin_weights: Optional[Sequence[SkinWeights]] = None,
        settings: Optional[PlaybackSettings] = None,
        name: str = "AnimatedModel",
    ):
        """
        Initialize animated model.

        Args:
            skeleton: Skeleton shared by all clips
            clips: Animation clips (first one selected)
            skin_weights: Bone influences per mesh; finalized here
            settings: Playback settings (default: loaded from config)
            name: Model name for debugging
        """
        self.name = name
        self.skeleton = skeleton
        self.clips: List[AnimationClip] = list(clips or [])
        self.skin_weights: List[SkinWeights] = list(skin_weights or [])

        for weights in self.skin_weights:
            weights.finalize()

        if settings is None:
            settings = load_playback_settings()
        self.player = AnimationPlayer(skeleton, self.clips, settings)

        logger.debug(
            "Animated model '%s': %d bones, %d clips, %d skinned meshes",
            name, skeleton.bone_count, len(self.clips), len(self.skin_weights),
        )

    @property
    def has_animations(self) -> bool:
        return bool(self.clips)

    def update(self, delta_time: float) -> bool:
        """
        Advance animation playback.

        Args:
            delta_time: Time elapsed since last frame (seconds)

        Returns:
            True if the model was playing an animation this frame
        """
        if not self.has_animations:
            return False

        was_playing = self.player.is_playing
        self.player.tick(delta_time)
        return was_playing

    def play_animation(self, name: str, loop: bool = True) -> bool:
        """
        Play a clip by name from its start.

        Args:
            name: Clip name
            loop: Whether to loop the clip

        Returns:
            True if the clip exists
        """
        if not self.player.set_clip(name):
            return False
        self.player.set_looping(loop)
        self.player.play()
        return True

    def stop_animation(self):
        """Stop the current clip and return to bind pose."""
        self.player.stop()

    def __repr__(self):
        return f"AnimatedModel(name='{self.name}', bones={self.skeleton.bone_count}, clips={len(self.clips)})"
