"""
Skeleton Node Hierarchy

Rooted node tree mirroring the source scene graph. Some nodes map to a
bone; the tree is walked top-down to produce the skeleton's final
matrices.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

from pyrr import Matrix44

from .bone import BoneTracks
from .errors import HierarchyError
from .skeleton import Skeleton

logger = logging.getLogger(__name__)


class HierarchyNode:
    """
    Node in a skeleton hierarchy.

    Each node owns its children exclusively and holds no reference back to
    its parent. ``bone_index`` is None for structural nodes (armature
    roots, helpers), which contribute their static bind transform.
    """

    def __init__(
        self,
        name: str,
        bone_index: Optional[int] = None,
        local_bind_transform: Optional[Matrix44] = None,
    ):
        """
        Initialize a node.

        Args:
            name: Node name (resolved against skeleton bone names)
            bone_index: Index of the bone this node drives, or None
            local_bind_transform: Transform relative to the parent node
        """
        self.name = name
        self.bone_index = bone_index
        self.local_bind_transform = (
            Matrix44(local_bind_transform) if local_bind_transform is not None else Matrix44.identity()
        )
        self.children: List[HierarchyNode] = []
        self._attached = False

    def add_child(self, child: HierarchyNode) -> HierarchyNode:
        """
        Attach a child node.

        Raises:
            HierarchyError: If the child already has a parent, is this node,
                or contains this node in its subtree
        """
        if child is self:
            raise HierarchyError(f"Node '{self.name}' cannot be its own child")
        if child._attached:
            raise HierarchyError(f"Node '{child.name}' already has a parent")
        if any(node is self for node in child.iter_nodes()):
            raise HierarchyError(
                f"Attaching '{child.name}' under '{self.name}' would create a cycle"
            )

        child._attached = True
        self.children.append(child)
        return child

    def iter_nodes(self) -> Iterator[HierarchyNode]:
        """Yield this node and its descendants depth-first, parents first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, name: str) -> Optional[HierarchyNode]:
        """Find the first node with the given name in this subtree."""
        for node in self.iter_nodes():
            if node.name == name:
                return node
        return None

    def bone_indices(self) -> List[int]:
        """Bone indices referenced anywhere in this subtree, in walk order."""
        return [node.bone_index for node in self.iter_nodes() if node.bone_index is not None]

    def validate(self, skeleton: Skeleton):
        """
        Check this tree against a skeleton.

        Raises:
            HierarchyError: If a node references a bone the skeleton does not
                have, or two nodes reference the same bone
        """
        seen: Dict[int, str] = {}
        for node in self.iter_nodes():
            index = node.bone_index
            if index is None:
                continue
            if index < 0 or index >= skeleton.bone_count:
                raise HierarchyError(
                    f"Node '{node.name}' references bone {index}; skeleton has {skeleton.bone_count} bones"
                )
            if index in seen:
                raise HierarchyError(
                    f"Bone {index} is referenced by both '{seen[index]}' and '{node.name}'"
                )
            seen[index] = node.name

    def __repr__(self):
        return f"HierarchyNode(name='{self.name}', bone={self.bone_index}, children={len(self.children)})"


def evaluate_hierarchy(
    root: HierarchyNode,
    time: float,
    skeleton: Skeleton,
    tracks: Optional[Dict[int, BoneTracks]] = None,
):
    """
    Propagate transforms through the tree and refresh final matrices.

    Every bone referenced by the tree gets exactly one write:
    ``final = offset @ global`` (row-major form of global * offset), where
    ``global = local @ parent_global``.

    Args:
        root: Root of the node tree
        time: Time in ticks
        skeleton: Skeleton receiving the final matrices
        tracks: Per-bone tracks overriding the bones' own tracks
    """
    _evaluate_node(root, time, Matrix44.identity(), skeleton, tracks or {})


def _evaluate_node(
    node: HierarchyNode,
    time: float,
    parent_transform: Matrix44,
    skeleton: Skeleton,
    tracks: Dict[int, BoneTracks],
):
    index = node.bone_index

    if index is not None:
        bone = skeleton.bones[index]
        local = bone.local_transform_at(time, tracks.get(index))
    else:
        local = node.local_bind_transform

    global_transform = local @ parent_transform

    if index is not None:
        skeleton.final_matrices[index] = skeleton.bones[index].offset_matrix @ global_transform

    for child in node.children:
        _evaluate_node(child, time, global_transform, skeleton, tracks)


@dataclass
class NodeDefinition:
    """
    Flat, glTF-style description of one scene node.

    ``children`` holds indices into the node list being built.
    """

    name: str
    transform: Optional[Matrix44] = None
    children: List[int] = field(default_factory=list)


def build_hierarchy(
    nodes: Sequence[NodeDefinition],
    root: int,
    skeleton: Skeleton,
) -> HierarchyNode:
    """
    Build a node tree from a flat node list.

    Node names are resolved against the skeleton's bone names; names that
    do not resolve become structural nodes.

    Args:
        nodes: Flat node list, children referenced by index
        root: Index of the root node
        skeleton: Skeleton used to resolve bone names

    Returns:
        Root HierarchyNode

    Raises:
        HierarchyError: On out-of-range indices, cycles, or nodes listed as
            a child more than once
    """
    if root < 0 or root >= len(nodes):
        raise HierarchyError(f"Root index {root} out of range for {len(nodes)} nodes")

    built: Dict[int, HierarchyNode] = {}
    # Indices on the current path from the root
    visiting = set()

    def make(index: int) -> HierarchyNode:
        definition = nodes[index]
        bone_index = skeleton.get_bone_index(definition.name)
        if bone_index < 0:
            logger.debug("Node '%s' has no matching bone, treating as structural", definition.name)
        return HierarchyNode(
            definition.name,
            bone_index if bone_index >= 0 else None,
            definition.transform,
        )

    root_node = make(root)
    built[root] = root_node
    stack = [(root, iter(nodes[root].children))]
    visiting.add(root)

    while stack:
        index, children = stack[-1]
        child_index = next(children, None)
        if child_index is None:
            visiting.discard(index)
            stack.pop()
            continue

        if child_index < 0 or child_index >= len(nodes):
            raise HierarchyError(
                f"Node '{nodes[index].name}' references missing child index {child_index}"
            )
        if child_index in visiting:
            raise HierarchyError(
                f"Cycle detected: node '{nodes[child_index].name}' is an ancestor of '{nodes[index].name}'"
            )
        if child_index in built:
            raise HierarchyError(f"Node '{nodes[child_index].name}' has more than one parent")

        child = make(child_index)
        built[index].add_child(child)
        built[child_index] = child
        visiting.add(child_index)
        stack.append((child_index, iter(nodes[child_index].children)))

    return root_node
