"""
Keyframe Tracks

Timestamped position/rotation/scale samples for a single bone and their
interpolation at arbitrary times.
"""

from bisect import bisect_left, bisect_right
from enum import Enum
from typing import List, Optional

import numpy as np
from pyrr import Quaternion, Vector3, quaternion


class InterpolationType(Enum):
    """Keyframe interpolation types."""
    LINEAR = "LINEAR"
    STEP = "STEP"
    CUBICSPLINE = "CUBICSPLINE"


class Keyframe:
    """
    Single keyframe in a track.

    Stores the timestamp (in clip ticks) and value for one property.
    """

    def __init__(self, time: float, value):
        """
        Initialize keyframe.

        Args:
            time: Time in ticks
            value: Value at this time (Vector3 for T/S, Quaternion for R)
        """
        self.time = float(time)
        self.value = value

    def __repr__(self):
        return f"Keyframe(t={self.time:.3f}, v={self.value})"


class KeyframeTrack:
    """
    Ordered keyframes for one property of one bone.

    Tracks are filled once at load time and only read afterwards.
    Timestamps must be non-decreasing in insertion order; the track never
    sorts its samples.
    """

    def __init__(self, interpolation: InterpolationType = InterpolationType.LINEAR):
        self.interpolation = interpolation
        self.keyframes: List[Keyframe] = []
        self._times: List[float] = []

    # Overridden by subclasses
    def neutral(self):
        raise NotImplementedError

    def _convert(self, value):
        return value

    def _interpolate(self, v0, v1, factor: float):
        raise NotImplementedError

    def add_keyframe(self, time: float, value):
        """Append a keyframe; its time may not precede the last one."""
        time = float(time)
        if self._times and time < self._times[-1]:
            raise ValueError(
                f"Keyframe at t={time} precedes previous keyframe at t={self._times[-1]}"
            )
        self.keyframes.append(Keyframe(time, self._convert(value)))
        self._times.append(time)

    @property
    def times(self) -> List[float]:
        return list(self._times)

    @property
    def max_time(self) -> float:
        """Timestamp of the last keyframe (0.0 for an empty track)."""
        return self._times[-1] if self._times else 0.0

    def find_index(self, time: float) -> int:
        """
        Find the largest keyframe index whose timestamp is <= time.

        Returns -1 when time precedes the first keyframe or the track is empty.
        """
        return bisect_right(self._times, time) - 1

    def sample(self, time: float):
        """
        Sample the track at a given time.

        Args:
            time: Time in ticks

        Returns:
            Interpolated value at this time, or the neutral value when empty
        """
        if not self.keyframes:
            return self.neutral()

        first = self.keyframes[0]
        last = self.keyframes[-1]

        # Clamp to the keyed range (also covers single-keyframe tracks)
        if len(self.keyframes) == 1 or time <= first.time:
            return first.value
        if time > last.time:
            return last.value

        index = self.find_index(time)

        # Exact hit: the earliest keyframe sharing this timestamp wins
        if self._times[index] == time:
            return self.keyframes[bisect_left(self._times, time)].value

        # k0.time < time < k1.time, so the span is never zero
        k0 = self.keyframes[index]
        k1 = self.keyframes[index + 1]

        if self.interpolation == InterpolationType.STEP:
            return k0.value

        # CUBICSPLINE tangents are not carried, so it blends linearly too
        factor = (time - k0.time) / (k1.time - k0.time)
        return self._interpolate(k0.value, k1.value, factor)

    def __len__(self):
        return len(self.keyframes)

    def __bool__(self):
        return bool(self.keyframes)

    def __repr__(self):
        return f"{self.__class__.__name__}(keyframes={len(self.keyframes)}, interpolation={self.interpolation.value})"


class _Vector3Track(KeyframeTrack):
    """Track of Vector3 values blended linearly."""

    def _convert(self, value):
        return Vector3(np.asarray(value, dtype=float)[:3])

    def _interpolate(self, v0, v1, factor: float):
        a = np.asarray(v0, dtype=float)
        b = np.asarray(v1, dtype=float)
        return Vector3(a * (1.0 - factor) + b * factor)


class PositionTrack(_Vector3Track):
    """Translation keyframes. Empty tracks sample as the zero vector."""

    def neutral(self):
        return Vector3([0.0, 0.0, 0.0])


class ScaleTrack(_Vector3Track):
    """Scale keyframes. Empty tracks sample as unit scale."""

    def neutral(self):
        return Vector3([1.0, 1.0, 1.0])


class RotationTrack(KeyframeTrack):
    """
    Rotation keyframes stored as (x, y, z, w) quaternions.

    Empty tracks sample as the identity rotation. Interior samples use
    shortest-arc slerp, so the result never travels the long way round.
    """

    def neutral(self):
        return Quaternion([0.0, 0.0, 0.0, 1.0])

    def _convert(self, value):
        q = np.asarray(value, dtype=float)[:4]
        length = np.linalg.norm(q)
        if length <= 0.0:
            return self.neutral()
        return Quaternion(quaternion.normalize(q))

    def _interpolate(self, v0, v1, factor: float):
        return slerp_shortest(v0, v1, factor)


def slerp_shortest(q0, q1, factor: float) -> Quaternion:
    """
    Spherically interpolate two quaternions along the shortest arc.

    Args:
        q0: Start rotation (x, y, z, w)
        q1: End rotation (x, y, z, w)
        factor: Blend factor in [0, 1]

    Returns:
        Normalized Quaternion
    """
    a = np.asarray(q0, dtype=float)
    b = np.asarray(q1, dtype=float)

    # q and -q are the same rotation; pick the one in a's hemisphere
    if np.dot(a, b) < 0.0:
        b = -b

    result = np.asarray(quaternion.slerp(a, b, factor), dtype=float)
    length = np.linalg.norm(result)
    if length <= 0.0:
        return Quaternion(a)
    return Quaternion(quaternion.normalize(result))


def create_track(kind: str, interpolation: Optional[InterpolationType] = None) -> KeyframeTrack:
    """
    Create an empty track for a glTF-style target path.

    Args:
        kind: "translation", "rotation" or "scale"
        interpolation: Interpolation method (default LINEAR)
    """
    track_types = {
        "translation": PositionTrack,
        "rotation": RotationTrack,
        "scale": ScaleTrack,
    }
    if kind not in track_types:
        raise ValueError(f"Unsupported track kind: {kind}. Available: {list(track_types.keys())}")
    return track_types[kind](interpolation or InterpolationType.LINEAR)
