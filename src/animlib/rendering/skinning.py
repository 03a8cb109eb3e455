"""Bone matrix upload for skinning shaders."""

import moderngl

from ..animation.skeleton import Skeleton
from ..config.settings import BONE_MATRICES_UNIFORM


def upload_bone_matrices(
    program: moderngl.Program,
    skeleton: Skeleton,
    uniform: str = BONE_MATRICES_UNIFORM,
) -> bool:
    """
    Write the skeleton's final matrices into a shader uniform array.

    Matrices are row-major float32 (pyrr layout), which GLSL reads as the
    column-major skinning matrices. Programs that do not declare the
    uniform (non-skinned shaders) are skipped.

    Args:
        program: Shader program
        skeleton: Skeleton with up-to-date final matrices
        uniform: Name of the ``mat4[]`` uniform

    Returns:
        True if the matrices were written
    """
    if uniform not in program or skeleton.bone_count == 0:
        return False

    program[uniform].write(skeleton.get_final_matrices_array().tobytes())
    return True
