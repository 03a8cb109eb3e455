"""
Animation Player

Manages clip playback state and drives hierarchy evaluation.
"""

import logging
from enum import Enum
from numbers import Integral
from typing import List, Optional, Sequence, Union

from ..config.settings import PlaybackSettings
from .animation import AnimationClip
from .skeleton import Skeleton

logger = logging.getLogger(__name__)


class PlaybackState(Enum):
    """Playback states."""
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class AnimationPlayer:
    """
    Controls clip playback for one skeleton.

    Manages:
    - Current clip and playback time (in ticks)
    - Play/pause/stop and looping
    - Scrubbing via set_progress
    - Refreshing the skeleton's final matrices

    One player exists per animated model instance. Players of different
    instances share no mutable state.
    """

    def __init__(
        self,
        skeleton: Skeleton,
        clips: Optional[Sequence[AnimationClip]] = None,
        settings: Optional[PlaybackSettings] = None,
    ):
        """
        Initialize animation player.

        Args:
            skeleton: Skeleton whose final matrices are written
            clips: Available clips (the first one is selected)
            settings: Initial speed and looping (default: PlaybackSettings())
        """
        settings = settings if settings is not None else PlaybackSettings()

        self.skeleton = skeleton
        self.clips: List[AnimationClip] = list(clips or [])
        self.current_clip: Optional[AnimationClip] = None
        self.current_clip_index: Optional[int] = None
        self.current_time: float = 0.0
        self.looping: bool = settings.looping
        self.speed: float = settings.speed
        self._state = PlaybackState.STOPPED

        if self.clips:
            self.set_clip(0)

    # ------------------------------------------------------------------
    # Playback control
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state == PlaybackState.PLAYING

    @property
    def is_finished(self) -> bool:
        """True once a non-looping clip has run to its end."""
        return (
            self.current_clip is not None
            and not self.is_playing
            and not self.looping
            and self.current_time >= self.current_clip.duration
        )

    def play(self):
        """Start or resume playback, restarting a finished non-looping clip."""
        if self.current_clip is None:
            return

        if self.current_time >= self.current_clip.duration and not self.looping:
            self.current_time = 0.0

        self._set_state(PlaybackState.PLAYING)

    def pause(self):
        """Pause playback, keeping the current time."""
        if self._state == PlaybackState.PLAYING:
            self._set_state(PlaybackState.PAUSED)

    def stop(self):
        """Stop playback, rewind and reset the skeleton to bind pose."""
        self.current_time = 0.0
        self.skeleton.reset_final_matrices()
        self._set_state(PlaybackState.STOPPED)

    def set_speed(self, speed: float):
        """Set playback speed (1.0 = normal speed)."""
        self.speed = speed

    def set_looping(self, looping: bool):
        self.looping = looping

    def set_clip(self, clip: Union[int, str]) -> bool:
        """
        Select the current clip by index or name.

        The play/pause state is kept; time rewinds to 0.

        Args:
            clip: Clip index or clip name

        Returns:
            True if the clip was found, False otherwise (current clip unchanged)
        """
        if isinstance(clip, str):
            index = next((i for i, c in enumerate(self.clips) if c.name == clip), None)
        elif isinstance(clip, Integral) and not isinstance(clip, bool):
            index = int(clip) if 0 <= clip < len(self.clips) else None
        else:
            index = None

        if index is None:
            logger.warning("Animation clip %r not found (%d available)", clip, len(self.clips))
            return False

        self.current_clip = self.clips[index]
        self.current_clip_index = index
        self.current_time = 0.0
        logger.debug("Selected clip '%s'", self.current_clip.name)
        return True

    # ------------------------------------------------------------------
    # Per-frame update
    # ------------------------------------------------------------------

    def tick(self, delta_time: float):
        """
        Advance playback and refresh final matrices.

        Args:
            delta_time: Time elapsed since last frame (seconds)
        """
        clip = self.current_clip
        if clip is None or self._state != PlaybackState.PLAYING:
            return

        self.current_time += delta_time * self.speed * clip.ticks_per_second

        duration = clip.duration
        if self.current_time >= duration or self.current_time < 0.0:
            if self.looping:
                # Zero-length clips hold at 0
                self.current_time = self.current_time % duration if duration > 0.0 else 0.0
                # A tiny negative time wraps to duration after rounding
                if self.current_time >= duration:
                    self.current_time = 0.0
            else:
                self.current_time = min(max(self.current_time, 0.0), duration)
                self._set_state(PlaybackState.PAUSED)
                logger.debug("Clip '%s' finished", clip.name)

        clip.evaluate(self.current_time, self.skeleton)

    def set_progress(self, progress: float):
        """
        Scrub to a position in the current clip and evaluate immediately.

        Works in any state.

        Args:
            progress: Position in [0, 1] (clamped)
        """
        clip = self.current_clip
        if clip is None:
            return

        progress = min(max(progress, 0.0), 1.0)
        self.current_time = progress * clip.duration
        clip.evaluate(self.current_time, self.skeleton)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def clip_count(self) -> int:
        return len(self.clips)

    def clip_name(self, index: int) -> str:
        """Name of the clip at index, or an empty string if out of range."""
        if 0 <= index < len(self.clips):
            return self.clips[index].name
        return ""

    @property
    def current_clip_name(self) -> str:
        return self.current_clip.name if self.current_clip is not None else ""

    @property
    def duration_seconds(self) -> float:
        """Current clip duration in seconds (0.0 without a clip)."""
        if self.current_clip is None:
            return 0.0
        return self.current_clip.duration_seconds

    def progress(self) -> float:
        """Current position in [0, 1] (0.0 without a clip or for empty clips)."""
        clip = self.current_clip
        if clip is None or clip.duration <= 0.0:
            return 0.0
        return self.current_time / clip.duration

    def _set_state(self, state: PlaybackState):
        if state != self._state:
            logger.debug("Playback %s -> %s", self._state.value, state.value)
            self._state = state

    def __repr__(self):
        return (
            f"AnimationPlayer(clip='{self.current_clip_name}', time={self.current_time:.2f} ticks, "
            f"state={self._state.value})"
        )
