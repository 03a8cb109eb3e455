"""
Skeleton

Flat bone collection with a name lookup and the final skinning matrices
uploaded to the GPU.
"""

from typing import Dict, List, Optional

import numpy as np
from pyrr import Matrix44

from ..config.settings import MAX_BONES
from .bone import Bone
from .errors import SkeletonError


class Skeleton:
    """
    Bones of one animated model plus their final (skinning) matrices.

    Bone ids are dense: the bone with id ``i`` lives at ``bones[i]`` and
    writes ``final_matrices[i]``. At most MAX_BONES bones are accepted,
    matching the shader's uniform array; the check happens when bones are
    added, never during evaluation.

    ``final_matrices`` is a preallocated float32 array of MAX_BONES
    matrices. Only the hierarchy walk and ``reset_final_matrices`` write
    to it.
    """

    MAX_BONES = MAX_BONES

    def __init__(self, name: str = "Skeleton"):
        """
        Initialize skeleton.

        Args:
            name: Skeleton name for debugging
        """
        self.name = name
        self.bones: List[Bone] = []
        self.bone_name_to_index: Dict[str, int] = {}
        self.final_matrices = np.empty((MAX_BONES, 4, 4), dtype='f4')
        self.reset_final_matrices()

    @property
    def bone_count(self) -> int:
        return len(self.bones)

    def add_bone(self, bone: Bone) -> Bone:
        """
        Add a bone to the skeleton.

        Args:
            bone: Bone whose id equals the current bone count

        Raises:
            SkeletonError: If the id is out of range or not the next dense
                index, or the name is already taken
        """
        if bone.id < 0 or bone.id >= MAX_BONES:
            raise SkeletonError(
                f"Bone '{bone.name}' has id {bone.id}; ids must be in [0, {MAX_BONES})"
            )
        if bone.id != len(self.bones):
            raise SkeletonError(
                f"Bone '{bone.name}' has id {bone.id}; expected next dense id {len(self.bones)}"
            )
        if bone.name in self.bone_name_to_index:
            raise SkeletonError(f"Duplicate bone name '{bone.name}'")

        self.bones.append(bone)
        self.bone_name_to_index[bone.name] = bone.id
        return bone

    def create_bone(self, name: str, offset_matrix: Optional[Matrix44] = None) -> Bone:
        """Create and add a bone with the next free id."""
        return self.add_bone(Bone(name, len(self.bones), offset_matrix))

    def get_bone_index(self, name: str) -> int:
        """
        Get bone index by name.

        Returns:
            Bone index, or -1 if not found
        """
        return self.bone_name_to_index.get(name, -1)

    def get_bone(self, name: str) -> Optional[Bone]:
        """
        Find a bone by name.

        Returns:
            Bone if found, None otherwise
        """
        index = self.bone_name_to_index.get(name)
        if index is None:
            return None
        return self.bones[index]

    def reset_final_matrices(self):
        """Reset every final matrix to identity (bind pose)."""
        self.final_matrices[:] = np.identity(4, dtype='f4')

    def get_final_matrices_array(self) -> np.ndarray:
        """
        Get the final matrices of all bones for shader upload.

        Returns:
            Numpy array of shape (bone_count, 4, 4) with dtype float32
        """
        return self.final_matrices[:len(self.bones)]

    def __repr__(self):
        return f"Skeleton(name='{self.name}', bones={len(self.bones)})"
