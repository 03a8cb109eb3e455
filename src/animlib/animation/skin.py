"""
Skin

Per-vertex bone influences for skeletal skinning.
"""

import logging
from typing import List, Tuple

import numpy as np

from ..config.settings import INFLUENCE_SUM_TOLERANCE, MAX_BONE_INFLUENCES

logger = logging.getLogger(__name__)


class VertexBoneInfluence:
    """
    Up to four (bone id, weight) pairs attached to one vertex.

    Unused slots hold bone id -1 and weight 0. Only the four strongest
    influences are kept: weaker ones are dropped, not accumulated.

    ``normalize`` must run once, after every influence for the vertex has
    been added. Normalizing earlier shrinks the stored weights, so later
    additions compete against rescaled values.
    """

    def __init__(self):
        self.bone_ids: List[int] = [-1] * MAX_BONE_INFLUENCES
        self.weights: List[float] = [0.0] * MAX_BONE_INFLUENCES

    def add(self, bone_id: int, weight: float):
        """
        Record an influence.

        Fills the first empty slot; when all slots are taken, replaces the
        weakest influence if the new weight is larger.

        Args:
            bone_id: Skeleton bone index
            weight: Influence weight
        """
        for i in range(MAX_BONE_INFLUENCES):
            if self.weights[i] == 0.0:
                self.bone_ids[i] = bone_id
                self.weights[i] = weight
                return

        min_index = 0
        for i in range(1, MAX_BONE_INFLUENCES):
            if self.weights[i] < self.weights[min_index]:
                min_index = i

        if weight > self.weights[min_index]:
            self.bone_ids[min_index] = bone_id
            self.weights[min_index] = weight

    def normalize(self):
        """Scale weights to sum to 1.0. All-zero weights are left untouched."""
        total = sum(self.weights)
        if total > 0.0:
            inv_total = 1.0 / total
            self.weights = [w * inv_total for w in self.weights]

    @property
    def weight_sum(self) -> float:
        return sum(self.weights)

    def is_empty(self) -> bool:
        """True when the vertex has no skinning influence (rigid / bind pose)."""
        return all(w == 0.0 for w in self.weights)

    def is_normalized(self) -> bool:
        return self.is_empty() or abs(self.weight_sum - 1.0) <= INFLUENCE_SUM_TOLERANCE

    def influences(self) -> List[Tuple[int, float]]:
        """Occupied (bone id, weight) pairs in slot order."""
        return [(b, w) for b, w in zip(self.bone_ids, self.weights) if w != 0.0]

    def __repr__(self):
        return f"VertexBoneInfluence(bone_ids={self.bone_ids}, weights={self.weights})"


class SkinWeights:
    """
    Bone influences for every vertex of one mesh.

    Collects raw influences, normalizes them all once in ``finalize`` and
    packs them into arrays for the bone id / weight vertex attributes.
    """

    def __init__(self, vertex_count: int):
        """
        Initialize skin weights.

        Args:
            vertex_count: Number of vertices in the mesh
        """
        self.influences: List[VertexBoneInfluence] = [
            VertexBoneInfluence() for _ in range(vertex_count)
        ]
        self.finalized = False

    @property
    def vertex_count(self) -> int:
        return len(self.influences)

    def add(self, vertex: int, bone_id: int, weight: float):
        """
        Add an influence to a vertex.

        Raises:
            RuntimeError: If called after finalize()
        """
        if self.finalized:
            raise RuntimeError("Cannot add bone influences after SkinWeights.finalize()")
        self.influences[vertex].add(bone_id, weight)

    def finalize(self):
        """Normalize every vertex. Runs once; later calls are no-ops."""
        if self.finalized:
            return
        for influence in self.influences:
            influence.normalize()
        self.finalized = True

        unskinned = sum(1 for influence in self.influences if influence.is_empty())
        if unskinned:
            logger.debug("%d of %d vertices have no bone influence", unskinned, self.vertex_count)

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Pack influences for vertex buffer upload.

        Returns:
            (bone_ids, weights): int32 and float32 arrays of shape (vertex_count, 4)
        """
        bone_ids = np.array(
            [influence.bone_ids for influence in self.influences], dtype='i4'
        ).reshape(-1, MAX_BONE_INFLUENCES)
        weights = np.array(
            [influence.weights for influence in self.influences], dtype='f4'
        ).reshape(-1, MAX_BONE_INFLUENCES)
        return bone_ids, weights

    def __getitem__(self, vertex: int) -> VertexBoneInfluence:
        return self.influences[vertex]

    def __len__(self):
        return len(self.influences)

    def __repr__(self):
        return f"SkinWeights(vertices={self.vertex_count}, finalized={self.finalized})"
