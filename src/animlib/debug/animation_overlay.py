"""
Animation Debug Info

Formats animation player state as text lines for an overlay or editor panel.
"""

from typing import List

from ..animation.animation_player import AnimationPlayer


class AnimationDebugInfo:
    """Collects animation player stats as display lines."""

    @staticmethod
    def gather(player: AnimationPlayer) -> List[str]:
        """
        Gather animation stats.

        Args:
            player: Player to describe

        Returns:
            List of formatted lines
        """
        if player.clip_count == 0:
            return ["Animation: No animations available"]

        lines = [
            f"Animation: {player.current_clip_name} ({(player.current_clip_index or 0) + 1}/{player.clip_count})",
            f"  State: {player.state.value}{' (loop)' if player.looping else ''}",
            f"  Progress: {player.progress():.2f}",
            f"  Duration: {player.duration_seconds:.2f} seconds",
            f"  Speed: {player.speed:.2f}x",
        ]
        return lines
