import logging
import logging
import typing
import typing
import numpy as np
import numpy as np
from gltf_world.core.common_types import NodeMetadata
from gltf_world.core.common_types import NodeMetadata
from gltf_world.core.errors import IOOrDecodeError
from gltf_world.core.errors import IOOrDecodeError
from gltf_world.core.transform import Transform
from gltf_world.core.transform import Transform
from gltf_world.core.world import Node, Scene
from gltf_world.core.world import Node, Scene
from gltf_world.io.document import GltfDocument
from gltf_world.io.document import GltfDocument
from gltf_world.scene.camera import Camera
from gltf_world.scene.camera import Camera

logger: logging.Logger = logging.getLogger(__name__)

IDENTITY_MATRIX: list[float] = [1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 1.0]

def transform_from_node(gltf_node: typing.Any) -> Transform:
    # A node carries either a full matrix or separate TRS properties; an identity matrix means "use TRS".
#   # A node carries either a full matrix or separate TRS properties; an identity matrix means "use TRS".
    matrix: list[float] | None = gltf_node.matrix
#   matrix: list[float] | None = gltf_node.matrix
    if matrix is not None and len(matrix) != 16:
#   if matrix is not None and len(matrix) != 16:
        raise IOOrDecodeError(f"Node matrix has {len(matrix)} values, expected 16")
#       raise IOOrDecodeError(f"Node matrix has {len(matrix)} values, expected 16")
    if matrix is not None and not np.allclose(matrix, IDENTITY_MATRIX):
#   if matrix is not None and not np.allclose(matrix, IDENTITY_MATRIX):
        return Transform.from_matrix(matrix)
#       return Transform.from_matrix(matrix)
    return Transform(
#   return Transform(
        translation=gltf_node.translation,
#       translation=gltf_node.translation,
        rotation=gltf_node.rotation,
#       rotation=gltf_node.rotation,
        scale=gltf_node.scale,
#       scale=gltf_node.scale,
    )
#   )

class SceneGraphBuilder:
    """
    Flattens the document node hierarchy into the Node, Transform and NodeMetadata tables,
#   Flattens the document node hierarchy into the Node, Transform and NodeMetadata tables,
    and records the hierarchy as one SceneGraph per scene.
#   and records the hierarchy as one SceneGraph per scene.
    Every scene starts with a synthetic root at graph index 0, so a document node shared by two scenes
#   Every scene starts with a synthetic root at graph index 0, so a document node shared by two scenes
    is flattened once per scene.
#   is flattened once per scene.
    """
    def __init__(self, document: GltfDocument, scene_root_name: str = "Scene Root", default_node_name: str = "Node", default_camera_name: str = "Main Camera") -> None:
#   def __init__(self, document: GltfDocument, scene_root_name: str = "Scene Root", default_node_name: str = "Node", default_camera_name: str = "Main Camera") -> None:
        self.document: GltfDocument = document
#       self.document: GltfDocument = document
        self.scene_root_name: str = scene_root_name
#       self.scene_root_name: str = scene_root_name
        self.default_node_name: str = default_node_name
#       self.default_node_name: str = default_node_name
        self.default_camera_name: str = default_camera_name
#       self.default_camera_name: str = default_camera_name
        self.nodes: list[Node] = []
#       self.nodes: list[Node] = []
        self.transforms: list[Transform] = []
#       self.transforms: list[Transform] = []
        self.metadata: list[NodeMetadata] = []
#       self.metadata: list[NodeMetadata] = []
        pass
#       pass

    def push_node(self, transform: Transform, name: str, mesh_index: int | None = None, camera_index: int | None = None, light_index: int | None = None, skin_index: int | None = None) -> int:
#   def push_node(self, transform: Transform, name: str, mesh_index: int | None = None, camera_index: int | None = None, light_index: int | None = None, skin_index: int | None = None) -> int:
        self.transforms.append(transform)
#       self.transforms.append(transform)
        self.metadata.append(NodeMetadata(name=name))
#       self.metadata.append(NodeMetadata(name=name))
        self.nodes.append(Node(
#       self.nodes.append(Node(
            transform_index=len(self.transforms) - 1,
#           transform_index=len(self.transforms) - 1,
            metadata_index=len(self.metadata) - 1,
#           metadata_index=len(self.metadata) - 1,
            mesh_index=mesh_index,
#           mesh_index=mesh_index,
            camera_index=camera_index,
#           camera_index=camera_index,
            light_index=light_index,
#           light_index=light_index,
            skin_index=skin_index,
#           skin_index=skin_index,
        ))
#       ))
        return len(self.nodes) - 1
#       return len(self.nodes) - 1

    def push_document_node(self, gltf_node: typing.Any) -> int:
#   def push_document_node(self, gltf_node: typing.Any) -> int:
        camera_index: int | None = self.document.check_index("cameras", gltf_node.camera)
#       camera_index: int | None = self.document.check_index("cameras", gltf_node.camera)
        return self.push_node(
#       return self.push_node(
            transform=transform_from_node(gltf_node),
#           transform=transform_from_node(gltf_node),
            name=gltf_node.name or self.default_node_name,
#           name=gltf_node.name or self.default_node_name,
            mesh_index=self.document.check_index("meshes", gltf_node.mesh),
#           mesh_index=self.document.check_index("meshes", gltf_node.mesh),
            # Slot 0 of the camera table belongs to the synthesized default camera
#           # Slot 0 of the camera table belongs to the synthesized default camera
            camera_index=camera_index + 1 if camera_index is not None else None,
#           camera_index=camera_index + 1 if camera_index is not None else None,
            light_index=self.document.node_light_index(gltf_node),
#           light_index=self.document.node_light_index(gltf_node),
            skin_index=self.document.check_index("skins", gltf_node.skin),
#           skin_index=self.document.check_index("skins", gltf_node.skin),
        )
#       )

    def build_scene(self, name: str | None, root_nodes: list[int]) -> Scene:
#   def build_scene(self, name: str | None, root_nodes: list[int]) -> Scene:
        scene: Scene = Scene(name=name)
#       scene: Scene = Scene(name=name)
        root_graph_index: int = scene.graph.add_node(self.push_node(Transform.identity(), self.scene_root_name))
#       root_graph_index: int = scene.graph.add_node(self.push_node(Transform.identity(), self.scene_root_name))

        # Work stack of (parent graph index, document node index, document ancestors of that node)
#       # Work stack of (parent graph index, document node index, document ancestors of that node)
        stack: list[tuple[int, int, frozenset[int]]] = [(root_graph_index, node_index, frozenset()) for node_index in reversed(root_nodes)]
#       stack: list[tuple[int, int, frozenset[int]]] = [(root_graph_index, node_index, frozenset()) for node_index in reversed(root_nodes)]
        while stack:
#       while stack:
            parent_graph_index, node_index, ancestors = stack.pop()
#           parent_graph_index, node_index, ancestors = stack.pop()
            if node_index in ancestors:
#           if node_index in ancestors:
                raise IOOrDecodeError(f"Node {node_index} is its own ancestor")
#               raise IOOrDecodeError(f"Node {node_index} is its own ancestor")
            gltf_node: typing.Any = self.document.get("nodes", node_index)
#           gltf_node: typing.Any = self.document.get("nodes", node_index)
            graph_index: int = scene.graph.add_node(self.push_document_node(gltf_node))
#           graph_index: int = scene.graph.add_node(self.push_document_node(gltf_node))
            if graph_index != parent_graph_index:
#           if graph_index != parent_graph_index:
                scene.graph.add_edge(parent_graph_index, graph_index)
#               scene.graph.add_edge(parent_graph_index, graph_index)
            child_ancestors: frozenset[int] = ancestors | {node_index}
#           child_ancestors: frozenset[int] = ancestors | {node_index}
            # Reversed so children pop in document order
#           # Reversed so children pop in document order
            for child_index in reversed(gltf_node.children or []):
#           for child_index in reversed(gltf_node.children or []):
                stack.append((graph_index, child_index, child_ancestors))
#               stack.append((graph_index, child_index, child_ancestors))
        return scene
#       return scene

    def build_scenes(self) -> list[Scene]:
#   def build_scenes(self) -> list[Scene]:
        gltf_scenes: list[typing.Any] = self.document.items("scenes")
#       gltf_scenes: list[typing.Any] = self.document.items("scenes")
        if not gltf_scenes:
#       if not gltf_scenes:
            logger.debug("Document has no scenes, creating an empty default scene")
#           logger.debug("Document has no scenes, creating an empty default scene")
            return [self.build_scene(None, [])]
#           return [self.build_scene(None, [])]
        scenes: list[Scene] = [self.build_scene(gltf_scene.name, list(gltf_scene.nodes or [])) for gltf_scene in gltf_scenes]
#       scenes: list[Scene] = [self.build_scene(gltf_scene.name, list(gltf_scene.nodes or [])) for gltf_scene in gltf_scenes]
        logger.debug("Built %d scenes over %d nodes", len(scenes), len(self.nodes))
#       logger.debug("Built %d scenes over %d nodes", len(scenes), len(self.nodes))
        return scenes
#       return scenes

    def attach_default_camera(self, scene: Scene, camera: Camera) -> int:
#   def attach_default_camera(self, scene: Scene, camera: Camera) -> int:
        # The default camera node sits directly under the scene root and references camera slot 0
#       # The default camera node sits directly under the scene root and references camera slot 0
        transform: Transform = Transform(
#       transform: Transform = Transform(
            translation=camera.orientation.position(),
#           translation=camera.orientation.position(),
            rotation=camera.orientation.look_at_offset(),
#           rotation=camera.orientation.look_at_offset(),
        )
#       )
        node_index: int = self.push_node(transform, self.default_camera_name, camera_index=0)
#       node_index: int = self.push_node(transform, self.default_camera_name, camera_index=0)
        graph_index: int = scene.graph.add_node(node_index)
#       graph_index: int = scene.graph.add_node(node_index)
        scene.graph.add_edge(0, graph_index)
#       scene.graph.add_edge(0, graph_index)
        scene.default_camera_graph_node_index = graph_index
#       scene.default_camera_graph_node_index = graph_index
        return node_index
#       return node_index
