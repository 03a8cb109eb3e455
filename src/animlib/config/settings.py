"""
Animation Configuration Settings

All configuration constants for the skeletal animation core.
Modify these values to change playback behavior.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

# ============================================================================
# Project Paths
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ASSETS_DIR = PROJECT_ROOT / "assets"
ANIMATION_CONFIG_PATH = ASSETS_DIR / "config" / "animation.json"

# ============================================================================
# Skeleton Limits
# ============================================================================

MAX_BONES = 100             # Must match the bone uniform array size in the skinning shader
MAX_BONE_INFLUENCES = 4     # Bone slots per vertex (ivec4 ids + vec4 weights)

# Weights of a normalized vertex must sum to 1.0 within this tolerance
INFLUENCE_SUM_TOLERANCE = 1e-3

# ============================================================================
# Playback
# ============================================================================

DEFAULT_TICKS_PER_SECOND = 25.0  # Used when the source format leaves it unspecified
DEFAULT_PLAYBACK_SPEED = 1.0
DEFAULT_LOOPING = True

# ============================================================================
# Rendering
# ============================================================================

BONE_MATRICES_UNIFORM = "boneMatrices"

__all__ = [
    "PROJECT_ROOT",
    "ASSETS_DIR",
    "ANIMATION_CONFIG_PATH",
    "MAX_BONES",
    "MAX_BONE_INFLUENCES",
    "INFLUENCE_SUM_TOLERANCE",
    "DEFAULT_TICKS_PER_SECOND",
    "DEFAULT_PLAYBACK_SPEED",
    "DEFAULT_LOOPING",
    "BONE_MATRICES_UNIFORM",
    "PlaybackSettings",
    "load_playback_settings",
]


# ============================================================================
# Playback Overrides - Loaded from JSON Config
# ============================================================================

@dataclass(frozen=True)
class PlaybackSettings:
    """Initial playback parameters for a new AnimationPlayer."""

    speed: float = DEFAULT_PLAYBACK_SPEED
    looping: bool = DEFAULT_LOOPING


def load_playback_settings(path: Optional[Union[str, Path]] = None) -> PlaybackSettings:
    """
    Load playback settings from a JSON configuration file.

    The file is optional. Recognised keys are ``speed`` and ``looping``;
    anything else is ignored.

    Args:
        path: Config file path (default: ANIMATION_CONFIG_PATH)

    Returns:
        PlaybackSettings with any overrides applied
    """
    config_path = Path(path) if path is not None else ANIMATION_CONFIG_PATH

    if not config_path.exists():
        logger.debug("Animation config not found at %s, using defaults", config_path)
        return PlaybackSettings()

    try:
        with open(config_path, 'r') as f:
            config = json.load(f)

        speed = float(config.get("speed", DEFAULT_PLAYBACK_SPEED))

        looping = config.get("looping", DEFAULT_LOOPING)
        if not isinstance(looping, bool):
            logger.warning(
                "Invalid 'looping' value %r in %s (expected true/false), using %s",
                looping, config_path, DEFAULT_LOOPING,
            )
            looping = DEFAULT_LOOPING

        return PlaybackSettings(speed=speed, looping=looping)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.warning("Error loading animation config %s: %s", config_path, e)
        return PlaybackSettings()
