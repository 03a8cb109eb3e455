"""Load-time errors raised while assembling animation data."""


class AnimationError(RuntimeError):
    """Raised when animation data handed to the core is invalid."""


class SkeletonError(AnimationError):
    """Raised when a bone cannot be added to a skeleton."""


class HierarchyError(AnimationError):
    """Raised when a skeleton node tree is malformed (cycles, sharing, dangling bones)."""
