"""Tests for Bone local transforms"""

import math

import numpy as np

from animlib.animation.bone import Bone, BoneTracks
from animlib.animation.keyframe import PositionTrack


def _y_rotation(angle):
    return [0.0, math.sin(angle / 2.0), 0.0, math.cos(angle / 2.0)]


def test_unanimated_bone_is_identity():
    """A bone without keyframes evaluates to the identity transform"""
    bone = Bone("hip", 0)

    assert np.allclose(np.asarray(bone.local_transform_at(12.0)), np.identity(4))
    assert np.allclose(np.asarray(bone.offset_matrix), np.identity(4))


def test_translation_lands_in_last_row():
    """Row-major matrices keep translation in the last row"""
    bone = Bone("hip", 0)
    bone.positions.add_keyframe(0.0, [1.0, 2.0, 3.0])

    mat = np.asarray(bone.local_transform_at(0.0))

    assert np.allclose(mat[3], [1.0, 2.0, 3.0, 1.0])
    assert np.allclose(mat[:3, :3], np.identity(3))


def test_scale_rotate_translate_order():
    """A point is scaled, then rotated, then translated"""
    bone = Bone("arm", 0)
    bone.positions.add_keyframe(0.0, [0.0, 0.0, 5.0])
    bone.rotations.add_keyframe(0.0, _y_rotation(math.pi / 2.0))
    bone.scales.add_keyframe(0.0, [2.0, 2.0, 2.0])

    mat = np.asarray(bone.local_transform_at(0.0))
    point = np.array([1.0, 0.0, 0.0, 1.0]) @ mat

    # (1,0,0) -> scale (2,0,0) -> +90 deg about Y (0,0,-2) -> translate (0,0,3)
    assert np.allclose(point, [0.0, 0.0, 3.0, 1.0], atol=1e-6)


def test_local_transform_is_cached():
    """The last evaluated transform is kept on the bone"""
    bone = Bone("hip", 0)
    bone.positions.add_keyframe(0.0, [0.0, 0.0, 0.0])
    bone.positions.add_keyframe(10.0, [10.0, 0.0, 0.0])

    mat = np.asarray(bone.local_transform_at(4.0))

    assert np.allclose(np.asarray(bone.local_transform), mat)
    assert np.allclose(np.asarray(bone.local_transform)[3], [4.0, 0.0, 0.0, 1.0])


def test_bind_pose_used_for_empty_channels():
    """Channels without keyframes fall back to the bone's bind pose"""
    bone = Bone("forearm", 1)
    bone.set_bind_pose(translation=[0.0, 2.0, 0.0], scale=[3.0, 3.0, 3.0])
    bone.rotations.add_keyframe(0.0, [0.0, 0.0, 0.0, 1.0])

    mat = np.asarray(bone.local_transform_at(1.0))

    assert np.allclose(mat[3], [0.0, 2.0, 0.0, 1.0])
    assert np.allclose(np.diag(mat)[:3], [3.0, 3.0, 3.0])


def test_clip_tracks_override_bone_tracks():
    """Tracks passed in replace the bone's own tracks for that evaluation"""
    bone = Bone("hip", 0)
    bone.positions.add_keyframe(0.0, [1.0, 0.0, 0.0])

    override = PositionTrack()
    override.add_keyframe(0.0, [0.0, 0.0, 9.0])
    clip_tracks = BoneTracks(positions=override)

    assert np.allclose(np.asarray(bone.local_transform_at(0.0, clip_tracks))[3], [0.0, 0.0, 9.0, 1.0])
    assert np.allclose(np.asarray(bone.local_transform_at(0.0))[3], [1.0, 0.0, 0.0, 1.0])


def test_bone_tracks_max_time():
    """BoneTracks reports the latest keyframe across its channels"""
    tracks = BoneTracks()
    assert tracks.is_empty()
    assert tracks.max_time == 0.0

    tracks.positions.add_keyframe(3.0, [0.0, 0.0, 0.0])
    tracks.rotations.add_keyframe(7.0, [0.0, 0.0, 0.0, 1.0])

    assert not tracks.is_empty()
    assert tracks.max_time == 7.0
