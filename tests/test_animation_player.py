"""Tests for AnimationPlayer playback control"""

import logging

import numpy as np

from animlib.animation.animation import AnimationClip
from animlib.animation.animation_player import AnimationPlayer, PlaybackState
from animlib.animation.hierarchy import HierarchyNode
from animlib.animation.skeleton import Skeleton
from animlib.config.settings import PlaybackSettings


def _slide_rig(duration=60.0, ticks_per_second=24.0, names=("slide",)):
    """One bone sliding along +X by one unit per tick."""
    skeleton = Skeleton()
    bone = skeleton.create_bone("hip")
    if duration > 0.0:
        bone.positions.add_keyframe(0.0, [0.0, 0.0, 0.0])
        bone.positions.add_keyframe(duration, [duration, 0.0, 0.0])

    clips = [
        AnimationClip(name, HierarchyNode("hip", 0), skeleton, ticks_per_second=ticks_per_second)
        for name in names
    ]
    return skeleton, clips


def _player(looping=True, **kwargs):
    skeleton, clips = _slide_rig(**kwargs)
    return AnimationPlayer(skeleton, clips, PlaybackSettings(looping=looping))


def test_player_initial_state():
    """First clip is selected and the player starts stopped"""
    player = _player()

    assert player.current_clip_name == "slide"
    assert player.current_clip_index == 0
    assert player.current_time == 0.0
    assert player.state == PlaybackState.STOPPED
    assert not player.is_playing
    assert player.speed == 1.0
    assert player.looping


def test_tick_does_nothing_while_stopped():
    """Time only advances while playing"""
    player = _player()
    player.tick(1.0)

    assert player.current_time == 0.0
    assert np.allclose(player.skeleton.final_matrices[0], np.eye(4))


def test_non_looping_clip_clamps_at_end():
    """Three seconds at 24 ticks/s stop a 60-tick clip exactly at its end"""
    player = _player(looping=False)
    player.play()

    for _ in range(3):
        player.tick(1.0)

    assert player.current_time == 60.0
    assert not player.is_playing
    assert player.state == PlaybackState.PAUSED
    assert player.is_finished
    assert np.allclose(player.skeleton.final_matrices[0][3], [60.0, 0.0, 0.0, 1.0])


def test_looping_clip_wraps():
    """Looping playback wraps time back into [0, duration)"""
    player = _player(looping=True)
    player.play()

    player.tick(1.25)
    assert player.current_time == 30.0
    player.tick(1.25)
    assert player.current_time == 0.0
    assert player.is_playing

    player.tick(3.0)
    assert player.current_time == 12.0
    assert not player.is_finished


def test_play_restarts_finished_clip():
    """Playing a finished non-looping clip starts it over"""
    player = _player(looping=False)
    player.play()
    player.tick(5.0)
    assert player.is_finished

    player.play()
    assert player.current_time == 0.0
    assert player.is_playing


def test_pause_freezes_time():
    """Paused players keep their time"""
    player = _player()
    player.play()
    player.tick(0.5)
    player.pause()
    player.tick(1.0)

    assert player.current_time == 12.0
    assert player.state == PlaybackState.PAUSED

    player.play()
    player.tick(0.5)
    assert player.current_time == 24.0


def test_pause_ignored_when_stopped():
    """Pause only applies to a playing clip"""
    player = _player()
    player.pause()
    assert player.state == PlaybackState.STOPPED


def test_stop_resets_time_and_matrices():
    """Stop rewinds and returns the skeleton to identity"""
    player = _player()
    player.play()
    player.tick(1.0)
    assert not np.allclose(player.skeleton.final_matrices[0], np.eye(4))

    player.stop()
    assert player.current_time == 0.0
    assert player.state == PlaybackState.STOPPED
    assert np.allclose(player.skeleton.final_matrices[0], np.eye(4))


def test_speed_scales_advance():
    """Playback speed multiplies elapsed ticks"""
    player = _player()
    player.set_speed(2.0)
    player.play()
    player.tick(0.5)

    assert player.current_time == 24.0


def test_set_clip_by_name_and_index():
    """Clips are selectable by name or index; state is kept and time rewinds"""
    player = _player(names=("walk", "run"))
    player.play()
    player.tick(0.5)

    assert player.set_clip("run")
    assert player.current_clip_name == "run"
    assert player.current_clip_index == 1
    assert player.current_time == 0.0
    assert player.is_playing

    assert player.set_clip(0)
    assert player.current_clip_name == "walk"


def test_set_clip_unknown_keeps_current(caplog):
    """Unknown clips are reported and leave the selection unchanged"""
    player = _player(names=("walk", "run"))
    player.set_clip(1)

    with caplog.at_level(logging.WARNING):
        assert not player.set_clip("swim")
        assert not player.set_clip(2)
        assert not player.set_clip(-1)

    assert player.current_clip_name == "run"
    assert "not found" in caplog.text


def test_set_progress_scrubs_and_evaluates():
    """Scrubbing updates time and matrices even when not playing"""
    player = _player()
    player.set_progress(0.5)

    assert player.current_time == 30.0
    assert np.isclose(player.progress(), 0.5)
    assert np.allclose(player.skeleton.final_matrices[0][3], [30.0, 0.0, 0.0, 1.0])
    assert player.state == PlaybackState.STOPPED

    player.set_progress(2.0)
    assert player.current_time == 60.0
    player.set_progress(-1.0)
    assert player.current_time == 0.0


def test_zero_duration_clip():
    """Clips without keyframes hold at time 0"""
    looping = _player(looping=True, duration=0.0)
    looping.play()
    looping.tick(1.0)
    assert looping.current_time == 0.0
    assert looping.is_playing
    assert looping.progress() == 0.0

    once = _player(looping=False, duration=0.0)
    once.play()
    once.tick(1.0)
    assert once.current_time == 0.0
    assert once.state == PlaybackState.PAUSED
    assert once.is_finished


def test_queries():
    """Clip metadata queries"""
    player = _player(names=("walk", "run"))

    assert player.clip_count == 2
    assert player.clip_name(1) == "run"
    assert player.clip_name(2) == ""
    assert player.clip_name(-1) == ""
    assert np.isclose(player.duration_seconds, 2.5)


def test_player_without_clips():
    """A player with no clips ignores every control"""
    skeleton = Skeleton()
    player = AnimationPlayer(skeleton)

    player.play()
    player.tick(1.0)
    player.set_progress(0.5)

    assert player.current_clip is None
    assert player.state == PlaybackState.STOPPED
    assert player.current_clip_name == ""
    assert player.duration_seconds == 0.0
    assert player.progress() == 0.0
    assert not player.is_finished


def test_players_are_independent():
    """Two players over separate skeletons do not share state"""
    first = _player()
    second = _player()

    first.play()
    first.tick(1.0)

    assert second.current_time == 0.0
    assert np.allclose(second.skeleton.final_matrices[0], np.eye(4))


def test_negative_speed_loops_backwards():
    """Reverse playback wraps into [0, duration), never onto duration itself"""
    player = _player(looping=True)
    player.set_speed(-1.0)
    player.play()

    player.tick(0.5)
    assert player.current_time == 48.0

    player.set_progress(0.0)
    player.tick(1e-18)
    assert 0.0 <= player.current_time < 60.0
    assert player.is_playing


def test_negative_speed_without_loop_stops_at_start():
    """Reverse playback of a non-looping clip clamps at 0 and pauses"""
    player = _player(looping=False)
    player.set_speed(-1.0)
    player.play()
    player.tick(1.0)

    assert player.current_time == 0.0
    assert player.state == PlaybackState.PAUSED


def test_set_clip_rejects_non_index_values():
    """Only names and integer indices select a clip"""
    player = _player(names=("walk", "run"))

    assert not player.set_clip(1.0)
    assert not player.set_clip(None)
    assert not player.set_clip(True)
    assert player.current_clip_name == "walk"

    assert player.set_clip(np.int64(1))
    assert player.current_clip_name == "run"
    assert player.current_clip_index == 1
