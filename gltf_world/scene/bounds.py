import logging
import logging
import typing
import typing
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
from gltf_world.core.world import AxisAlignedBoundingBox, Mesh, Node, Scene
from gltf_world.core.world import AxisAlignedBoundingBox, Mesh, Node, Scene

logger: logging.Logger = logging.getLogger(__name__)

def mesh_bounds(mesh: Mesh, vertices: npt.NDArray[typing.Any]) -> AxisAlignedBoundingBox:
    # Local-space box over every primitive's slice of the shared vertex buffer
#   # Local-space box over every primitive's slice of the shared vertex buffer
    aabb: AxisAlignedBoundingBox = AxisAlignedBoundingBox.empty()
#   aabb: AxisAlignedBoundingBox = AxisAlignedBoundingBox.empty()
    for primitive in mesh.primitives:
#   for primitive in mesh.primitives:
        positions: npt.NDArray[np.float32] = vertices["position"][primitive.vertex_offset:primitive.vertex_offset + primitive.number_of_vertices]
#       positions: npt.NDArray[np.float32] = vertices["position"][primitive.vertex_offset:primitive.vertex_offset + primitive.number_of_vertices]
        aabb.expand_to_include(AxisAlignedBoundingBox.from_positions(positions))
#       aabb.expand_to_include(AxisAlignedBoundingBox.from_positions(positions))
    return aabb
#   return aabb

def compute_aabbs(scenes: list[Scene], nodes: list[Node], meshes: list[Mesh], vertices: npt.NDArray[typing.Any]) -> list[AxisAlignedBoundingBox]:
    """
    Post-pass over every scene graph: each node that owns a mesh gets its own box and 'aabb_index'.
#   Post-pass over every scene graph: each node that owns a mesh gets its own box and 'aabb_index'.
    """
    aabbs: list[AxisAlignedBoundingBox] = []
#   aabbs: list[AxisAlignedBoundingBox] = []
    for scene in scenes:
#   for scene in scenes:
        for graph_index in scene.graph.node_indices():
#       for graph_index in scene.graph.node_indices():
            node: Node = nodes[scene.graph[graph_index]]
#           node: Node = nodes[scene.graph[graph_index]]
            if node.mesh_index is None or node.aabb_index is not None:
#           if node.mesh_index is None or node.aabb_index is not None:
                continue
#               continue
            aabbs.append(mesh_bounds(meshes[node.mesh_index], vertices))
#           aabbs.append(mesh_bounds(meshes[node.mesh_index], vertices))
            node.aabb_index = len(aabbs) - 1
#           node.aabb_index = len(aabbs) - 1
    logger.debug("Computed %d bounding boxes", len(aabbs))
#   logger.debug("Computed %d bounding boxes", len(aabbs))
    return aabbs
#   return aabbs
