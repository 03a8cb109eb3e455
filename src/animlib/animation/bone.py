"""
Bone

A skinning bone: identity, inverse bind matrix and its keyframe tracks.
"""

from typing import Optional

import numpy as np
from pyrr import Matrix44, Quaternion, Vector3

from .keyframe import PositionTrack, RotationTrack, ScaleTrack


class BoneTracks:
    """Position, rotation and scale tracks animating one bone."""

    def __init__(
        self,
        positions: Optional[PositionTrack] = None,
        rotations: Optional[RotationTrack] = None,
        scales: Optional[ScaleTrack] = None,
    ):
        self.positions = positions if positions is not None else PositionTrack()
        self.rotations = rotations if rotations is not None else RotationTrack()
        self.scales = scales if scales is not None else ScaleTrack()

    @property
    def max_time(self) -> float:
        """Latest keyframe timestamp across the three tracks."""
        return max(self.positions.max_time, self.rotations.max_time, self.scales.max_time)

    def is_empty(self) -> bool:
        return not (self.positions or self.rotations or self.scales)

    def __repr__(self):
        return (
            f"BoneTracks(positions={len(self.positions)}, "
            f"rotations={len(self.rotations)}, scales={len(self.scales)})"
        )


class Bone:
    """
    Single bone of a skinned skeleton.

    The bone id is a dense index into the skeleton's bone list and its
    final matrix array. The offset (inverse bind) matrix moves a vertex
    from model space into the bone's space at bind time.

    Matrices follow pyrr's row-major layout: the local transform is
    built as S @ R @ T, the row-vector form of T * R * S.
    """

    def __init__(
        self,
        name: str,
        bone_id: int,
        offset_matrix: Optional[Matrix44] = None,
        tracks: Optional[BoneTracks] = None,
    ):
        """
        Initialize a bone.

        Args:
            name: Bone name (matches hierarchy node names)
            bone_id: Dense index in the owning skeleton
            offset_matrix: Inverse bind matrix (default: identity)
            tracks: Keyframe tracks (default: empty tracks)
        """
        self.name = name
        self.id = bone_id
        self.offset_matrix = Matrix44(offset_matrix) if offset_matrix is not None else Matrix44.identity()
        self.tracks = tracks if tracks is not None else BoneTracks()

        # Bind pose components used when a channel has no keyframes
        self.bind_translation = Vector3([0.0, 0.0, 0.0])
        self.bind_rotation = Quaternion([0.0, 0.0, 0.0, 1.0])
        self.bind_scale = Vector3([1.0, 1.0, 1.0])

        # Last evaluated local transform
        self.local_transform = Matrix44.identity()

    @property
    def positions(self) -> PositionTrack:
        return self.tracks.positions

    @property
    def rotations(self) -> RotationTrack:
        return self.tracks.rotations

    @property
    def scales(self) -> ScaleTrack:
        return self.tracks.scales

    def set_bind_pose(self, translation=None, rotation=None, scale=None):
        """Set bind pose components used for channels without keyframes."""
        if translation is not None:
            self.bind_translation = Vector3(np.asarray(translation, dtype=float)[:3])
        if rotation is not None:
            self.bind_rotation = Quaternion(np.asarray(rotation, dtype=float)[:4])
        if scale is not None:
            self.bind_scale = Vector3(np.asarray(scale, dtype=float)[:3])

    def sample_components(self, time: float, tracks: Optional[BoneTracks] = None):
        """
        Sample translation, rotation and scale at a given time.

        Args:
            time: Time in ticks
            tracks: Tracks to sample instead of the bone's own

        Returns:
            (translation, rotation, scale) tuple
        """
        tracks = tracks if tracks is not None else self.tracks

        translation = tracks.positions.sample(time) if tracks.positions else self.bind_translation
        rotation = tracks.rotations.sample(time) if tracks.rotations else self.bind_rotation
        scale = tracks.scales.sample(time) if tracks.scales else self.bind_scale
        return translation, rotation, scale

    def local_transform_at(self, time: float, tracks: Optional[BoneTracks] = None) -> Matrix44:
        """
        Calculate the local transform at the given time.

        Args:
            time: Time in ticks
            tracks: Tracks to sample instead of the bone's own (per-clip data)

        Returns:
            Local transform matrix
        """
        translation, rotation, scale = self.sample_components(time, tracks)

        # Scale first, then rotation, then translation (row-vector order)
        mat = Matrix44.from_scale(scale)
        # from_quaternion is column-vector form; its transpose rotates row vectors
        mat = mat @ Matrix44.from_inverse_of_quaternion(rotation)
        mat = mat @ Matrix44.from_translation(translation)

        self.local_transform = mat
        return mat

    def __repr__(self):
        return f"Bone(name='{self.name}', id={self.id}, tracks={self.tracks})"
