import typing
import typing
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
import pyrr as rr
from gltf_world.core.common_types import vec3f32, Interpolation, ImageFormat, Material, NodeMetadata, PrimitiveTopology, Sampler, Texture, TransformationKind
from gltf_world.core.common_types import vec3f32, Interpolation, ImageFormat, Material, NodeMetadata, PrimitiveTopology, Sampler, Texture, TransformationKind
from gltf_world.core.transform import Transform
from gltf_world.core.transform import Transform
from gltf_world.scene.camera import Camera
from gltf_world.scene.camera import Camera

# Layout of one entry of World.vertices. Every primitive's vertices live in this single contiguous buffer
# so a renderer can upload it in one call; Primitive offsets address into it.
VERTEX_DTYPE: np.dtype = np.dtype([
    ("position", np.float32, (3,)),
    ("normal", np.float32, (3,)),
    ("uv_0", np.float32, (2,)),
    ("uv_1", np.float32, (2,)),
    ("joint_0", np.float32, (4,)),
    ("weight_0", np.float32, (4,)),
    ("color_0", np.float32, (3,)),
])

class Node:
    # Nodes never point at their children; the hierarchy only exists in Scene.graph.
#   # Nodes never point at their children; the hierarchy only exists in Scene.graph.
    # camera_index is already shifted by one: World.cameras[0] is the synthesized default camera.
#   # camera_index is already shifted by one: World.cameras[0] is the synthesized default camera.
    def __init__(self, transform_index: int, metadata_index: int, mesh_index: int | None = None, camera_index: int | None = None, light_index: int | None = None, skin_index: int | None = None, aabb_index: int | None = None) -> None:
#   def __init__(self, transform_index: int, metadata_index: int, mesh_index: int | None = None, camera_index: int | None = None, light_index: int | None = None, skin_index: int | None = None, aabb_index: int | None = None) -> None:
        self.transform_index: int = transform_index
#       self.transform_index: int = transform_index
        self.metadata_index: int = metadata_index
#       self.metadata_index: int = metadata_index
        self.mesh_index: int | None = mesh_index
#       self.mesh_index: int | None = mesh_index
        self.camera_index: int | None = camera_index
#       self.camera_index: int | None = camera_index
        self.light_index: int | None = light_index
#       self.light_index: int | None = light_index
        self.skin_index: int | None = skin_index
#       self.skin_index: int | None = skin_index
        self.aabb_index: int | None = aabb_index
#       self.aabb_index: int | None = aabb_index
        pass
#       pass

    def __repr__(self) -> str:
#   def __repr__(self) -> str:
        return (
#       return (
            f"Node(transform_index={self.transform_index}, metadata_index={self.metadata_index}, "
#           f"Node(transform_index={self.transform_index}, metadata_index={self.metadata_index}, "
            f"mesh_index={self.mesh_index}, camera_index={self.camera_index}, light_index={self.light_index}, "
#           f"mesh_index={self.mesh_index}, camera_index={self.camera_index}, light_index={self.light_index}, "
            f"skin_index={self.skin_index}, aabb_index={self.aabb_index})"
#           f"skin_index={self.skin_index}, aabb_index={self.aabb_index})"
        )
#       )

class SceneGraph:
    """
    Index-based directed forest. Graph indices are positions in 'nodes'; the value stored at a
#   Index-based directed forest. Graph indices are positions in 'nodes'; the value stored at a
    graph index is the index of the Node in World.nodes. Every graph node has at most one parent.
#   graph index is the index of the Node in World.nodes. Every graph node has at most one parent.
    """
    def __init__(self) -> None:
#   def __init__(self) -> None:
        self.nodes: list[int] = []
#       self.nodes: list[int] = []
        self.parents: list[int | None] = []
#       self.parents: list[int | None] = []
        self.children: list[list[int]] = []
#       self.children: list[list[int]] = []
        pass
#       pass

    def __len__(self) -> int:
#   def __len__(self) -> int:
        return len(self.nodes)
#       return len(self.nodes)

    def __getitem__(self, graph_index: int) -> int:
#   def __getitem__(self, graph_index: int) -> int:
        return self.nodes[graph_index]
#       return self.nodes[graph_index]

    def add_node(self, node_index: int) -> int:
#   def add_node(self, node_index: int) -> int:
        self.nodes.append(node_index)
#       self.nodes.append(node_index)
        self.parents.append(None)
#       self.parents.append(None)
        self.children.append([])
#       self.children.append([])
        return len(self.nodes) - 1
#       return len(self.nodes) - 1

    def add_edge(self, parent: int, child: int) -> None:
#   def add_edge(self, parent: int, child: int) -> None:
        if parent == child:
#       if parent == child:
            raise ValueError(f"Self-edge on graph node {parent}")
#           raise ValueError(f"Self-edge on graph node {parent}")
        if self.parents[child] is not None:
#       if self.parents[child] is not None:
            raise ValueError(f"Graph node {child} already has parent {self.parents[child]}")
#           raise ValueError(f"Graph node {child} already has parent {self.parents[child]}")
        self.parents[child] = parent
#       self.parents[child] = parent
        self.children[parent].append(child)
#       self.children[parent].append(child)

    def node_indices(self) -> range:
#   def node_indices(self) -> range:
        return range(len(self.nodes))
#       return range(len(self.nodes))

    def edges(self) -> typing.Iterator[tuple[int, int]]:
#   def edges(self) -> typing.Iterator[tuple[int, int]]:
        for parent, children in enumerate(self.children):
#       for parent, children in enumerate(self.children):
            for child in children:
#           for child in children:
                yield (parent, child)
#               yield (parent, child)

    def parent_of(self, graph_index: int) -> int | None:
#   def parent_of(self, graph_index: int) -> int | None:
        return self.parents[graph_index]
#       return self.parents[graph_index]

    def children_of(self, graph_index: int) -> list[int]:
#   def children_of(self, graph_index: int) -> list[int]:
        return list(self.children[graph_index])
#       return list(self.children[graph_index])

    def roots(self) -> list[int]:
#   def roots(self) -> list[int]:
        return [graph_index for graph_index, parent in enumerate(self.parents) if parent is None]
#       return [graph_index for graph_index, parent in enumerate(self.parents) if parent is None]

    def walk(self, start: int = 0) -> typing.Iterator[int]:
#   def walk(self, start: int = 0) -> typing.Iterator[int]:
        # Pre-order, children in insertion order
#       # Pre-order, children in insertion order
        stack: list[int] = [start]
#       stack: list[int] = [start]
        while stack:
#       while stack:
            graph_index: int = stack.pop()
#           graph_index: int = stack.pop()
            yield graph_index
#           yield graph_index
            stack.extend(reversed(self.children[graph_index]))
#           stack.extend(reversed(self.children[graph_index]))

class Scene:
    def __init__(self, name: str | None = None) -> None:
#   def __init__(self, name: str | None = None) -> None:
        self.name: str | None = name
#       self.name: str | None = name
        self.graph: SceneGraph = SceneGraph()
#       self.graph: SceneGraph = SceneGraph()
        # Graph position of the synthesized default camera. Only the first scene receives one.
#       # Graph position of the synthesized default camera. Only the first scene receives one.
        self.default_camera_graph_node_index: int | None = None
#       self.default_camera_graph_node_index: int | None = None
        pass
#       pass

class Primitive:
    def __init__(self, topology: PrimitiveTopology, material_index: int | None, vertex_offset: int, number_of_vertices: int, index_offset: int, number_of_indices: int) -> None:
#   def __init__(self, topology: PrimitiveTopology, material_index: int | None, vertex_offset: int, number_of_vertices: int, index_offset: int, number_of_indices: int) -> None:
        self.topology: PrimitiveTopology = topology
#       self.topology: PrimitiveTopology = topology
        self.material_index: int | None = material_index
#       self.material_index: int | None = material_index
        self.vertex_offset: int = vertex_offset
#       self.vertex_offset: int = vertex_offset
        self.number_of_vertices: int = number_of_vertices
#       self.number_of_vertices: int = number_of_vertices
        self.index_offset: int = index_offset
#       self.index_offset: int = index_offset
        self.number_of_indices: int = number_of_indices
#       self.number_of_indices: int = number_of_indices
        pass
#       pass

    @property
#   @property
    def is_indexed(self) -> bool:
#   def is_indexed(self) -> bool:
        return self.number_of_indices > 0
#       return self.number_of_indices > 0

class Mesh:
    def __init__(self, primitives: list[Primitive], name: str | None = None) -> None:
#   def __init__(self, primitives: list[Primitive], name: str | None = None) -> None:
        self.primitives: list[Primitive] = primitives
#       self.primitives: list[Primitive] = primitives
        self.name: str | None = name
#       self.name: str | None = name
        pass
#       pass

class Image:
    # Pixels are always normalized to tightly packed 8-bit RGBA rows.
#   # Pixels are always normalized to tightly packed 8-bit RGBA rows.
    def __init__(self, pixels: bytes, width: int, height: int, format: ImageFormat = ImageFormat.R8G8B8A8) -> None:
#   def __init__(self, pixels: bytes, width: int, height: int, format: ImageFormat = ImageFormat.R8G8B8A8) -> None:
        self.pixels: bytes = pixels
#       self.pixels: bytes = pixels
        self.format: ImageFormat = format
#       self.format: ImageFormat = format
        self.width: int = width
#       self.width: int = width
        self.height: int = height
#       self.height: int = height
        pass
#       pass

class Joint:
    def __init__(self, inverse_bind_matrix: rr.Matrix44, target_node_index: int) -> None:
#   def __init__(self, inverse_bind_matrix: rr.Matrix44, target_node_index: int) -> None:
        self.inverse_bind_matrix: rr.Matrix44 = inverse_bind_matrix
#       self.inverse_bind_matrix: rr.Matrix44 = inverse_bind_matrix
        self.target_node_index: int = target_node_index
#       self.target_node_index: int = target_node_index
        pass
#       pass

class Skin:
    def __init__(self, joints: list[Joint], name: str | None = None) -> None:
#   def __init__(self, joints: list[Joint], name: str | None = None) -> None:
        self.joints: list[Joint] = joints
#       self.joints: list[Joint] = joints
        self.name: str | None = name
#       self.name: str | None = name
        pass
#       pass

    @property
#   @property
    def inverse_bind_matrices(self) -> list[rr.Matrix44]:
#   def inverse_bind_matrices(self) -> list[rr.Matrix44]:
        return [joint.inverse_bind_matrix for joint in self.joints]
#       return [joint.inverse_bind_matrix for joint in self.joints]

class TransformationSet:
    # Tagged variant: 'values' is N x 3 for translations and scales, N x 4 (x, y, z, w) for rotations,
#   # Tagged variant: 'values' is N x 3 for translations and scales, N x 4 (x, y, z, w) for rotations,
    # and a flat array of morph target weights for MORPH_TARGET_WEIGHTS.
#   # and a flat array of morph target weights for MORPH_TARGET_WEIGHTS.
    def __init__(self, kind: TransformationKind, values: npt.NDArray[np.float32]) -> None:
#   def __init__(self, kind: TransformationKind, values: npt.NDArray[np.float32]) -> None:
        self.kind: TransformationKind = kind
#       self.kind: TransformationKind = kind
        self.values: npt.NDArray[np.float32] = values
#       self.values: npt.NDArray[np.float32] = values
        pass
#       pass

    def __len__(self) -> int:
#   def __len__(self) -> int:
        return len(self.values)
#       return len(self.values)

class Channel:
    def __init__(self, target_node_index: int, inputs: npt.NDArray[np.float32], transformations: TransformationSet, interpolation: Interpolation = Interpolation.LINEAR) -> None:
#   def __init__(self, target_node_index: int, inputs: npt.NDArray[np.float32], transformations: TransformationSet, interpolation: Interpolation = Interpolation.LINEAR) -> None:
        self.target_node_index: int = target_node_index
#       self.target_node_index: int = target_node_index
        self.inputs: npt.NDArray[np.float32] = inputs
#       self.inputs: npt.NDArray[np.float32] = inputs
        self.transformations: TransformationSet = transformations
#       self.transformations: TransformationSet = transformations
        self.interpolation: Interpolation = interpolation
#       self.interpolation: Interpolation = interpolation
        pass
#       pass

class Animation:
    def __init__(self, channels: list[Channel], max_animation_time: float, name: str | None = None) -> None:
#   def __init__(self, channels: list[Channel], max_animation_time: float, name: str | None = None) -> None:
        self.channels: list[Channel] = channels
#       self.channels: list[Channel] = channels
        self.max_animation_time: float = max_animation_time
#       self.max_animation_time: float = max_animation_time
        self.name: str | None = name
#       self.name: str | None = name
        # Playback cursor, advanced by whoever plays the animation
#       # Playback cursor, advanced by whoever plays the animation
        self.time: float = 0.0
#       self.time: float = 0.0
        pass
#       pass

class DirectionalLight:
    pass
#   pass

class PointLight:
    pass
#   pass

class SpotLight:
    def __init__(self, inner_cone_angle: float, outer_cone_angle: float) -> None:
#   def __init__(self, inner_cone_angle: float, outer_cone_angle: float) -> None:
        self.inner_cone_angle: float = inner_cone_angle
#       self.inner_cone_angle: float = inner_cone_angle
        self.outer_cone_angle: float = outer_cone_angle
#       self.outer_cone_angle: float = outer_cone_angle
        pass
#       pass

type LightKind = DirectionalLight | PointLight | SpotLight
"""
type LightKind = DirectionalLight | PointLight | SpotLight
"""

class Light:
    # range 0.0 means infinite
#   # range 0.0 means infinite
    def __init__(self, color: vec3f32, intensity: float, range: float, kind: DirectionalLight | PointLight | SpotLight, name: str | None = None) -> None:
#   def __init__(self, color: vec3f32, intensity: float, range: float, kind: DirectionalLight | PointLight | SpotLight, name: str | None = None) -> None:
        self.color: vec3f32 = color
#       self.color: vec3f32 = color
        self.intensity: float = intensity
#       self.intensity: float = intensity
        self.range: float = range
#       self.range: float = range
        self.kind: LightKind = kind
#       self.kind: LightKind = kind
        self.name: str | None = name
#       self.name: str | None = name
        pass
#       pass

class AxisAlignedBoundingBox:
    def __init__(self, min: npt.ArrayLike, max: npt.ArrayLike) -> None:
#   def __init__(self, min: npt.ArrayLike, max: npt.ArrayLike) -> None:
        self.min: npt.NDArray[np.float32] = np.asarray(min, dtype=np.float32).copy()
#       self.min: npt.NDArray[np.float32] = np.asarray(min, dtype=np.float32).copy()
        self.max: npt.NDArray[np.float32] = np.asarray(max, dtype=np.float32).copy()
#       self.max: npt.NDArray[np.float32] = np.asarray(max, dtype=np.float32).copy()
        pass
#       pass

    @classmethod
#   @classmethod
    def empty(cls) -> "AxisAlignedBoundingBox":
#   def empty(cls) -> "AxisAlignedBoundingBox":
        # Degenerate box: min above max on every axis, so any expansion replaces it
#       # Degenerate box: min above max on every axis, so any expansion replaces it
        return cls(np.full(3, np.inf), np.full(3, -np.inf))
#       return cls(np.full(3, np.inf), np.full(3, -np.inf))

    @classmethod
#   @classmethod
    def from_positions(cls, positions: npt.NDArray[np.float32]) -> "AxisAlignedBoundingBox":
#   def from_positions(cls, positions: npt.NDArray[np.float32]) -> "AxisAlignedBoundingBox":
        if len(positions) == 0:
#       if len(positions) == 0:
            return cls.empty()
#           return cls.empty()
        return cls(np.min(positions, axis=0), np.max(positions, axis=0))
#       return cls(np.min(positions, axis=0), np.max(positions, axis=0))

    def is_empty(self) -> bool:
#   def is_empty(self) -> bool:
        return bool(np.any(self.min > self.max))
#       return bool(np.any(self.min > self.max))

    def expand_to_include(self, other: "AxisAlignedBoundingBox") -> None:
#   def expand_to_include(self, other: "AxisAlignedBoundingBox") -> None:
        if other.is_empty():
#       if other.is_empty():
            return
#           return
        self.min = np.minimum(self.min, other.min)
#       self.min = np.minimum(self.min, other.min)
        self.max = np.maximum(self.max, other.max)
#       self.max = np.maximum(self.max, other.max)

    def contains(self, point: npt.ArrayLike) -> bool:
#   def contains(self, point: npt.ArrayLike) -> bool:
        p: npt.NDArray[np.float32] = np.asarray(point, dtype=np.float32)
#       p: npt.NDArray[np.float32] = np.asarray(point, dtype=np.float32)
        return bool(np.all(self.min <= p) and np.all(p <= self.max))
#       return bool(np.all(self.min <= p) and np.all(p <= self.max))

    def center(self) -> npt.NDArray[np.float32]:
#   def center(self) -> npt.NDArray[np.float32]:
        return (self.min + self.max) * 0.5
#       return (self.min + self.max) * 0.5

    def extents(self) -> npt.NDArray[np.float32]:
#   def extents(self) -> npt.NDArray[np.float32]:
        return self.max - self.min
#       return self.max - self.min

    def __repr__(self) -> str:
#   def __repr__(self) -> str:
        return f"AxisAlignedBoundingBox(min={self.min.tolist()}, max={self.max.tolist()})"
#       return f"AxisAlignedBoundingBox(min={self.min.tolist()}, max={self.max.tolist()})"

class World:
    # Flattened, index-addressed result of one import. Every table is filled once and never reordered.
#   # Flattened, index-addressed result of one import. Every table is filled once and never reordered.
    def __init__(
#   def __init__(
        self,
#       self,
        scenes: list[Scene],
#       scenes: list[Scene],
        nodes: list[Node],
#       nodes: list[Node],
        transforms: list[Transform],
#       transforms: list[Transform],
        metadata: list[NodeMetadata],
#       metadata: list[NodeMetadata],
        meshes: list[Mesh],
#       meshes: list[Mesh],
        vertices: npt.NDArray[typing.Any],
#       vertices: npt.NDArray[typing.Any],
        indices: npt.NDArray[np.uint32],
#       indices: npt.NDArray[np.uint32],
        materials: list[Material],
#       materials: list[Material],
        textures: list[Texture],
#       textures: list[Texture],
        samplers: list[Sampler],
#       samplers: list[Sampler],
        images: list[Image],
#       images: list[Image],
        skins: list[Skin],
#       skins: list[Skin],
        animations: list[Animation],
#       animations: list[Animation],
        cameras: list[Camera],
#       cameras: list[Camera],
        lights: list[Light],
#       lights: list[Light],
        aabbs: list[AxisAlignedBoundingBox],
#       aabbs: list[AxisAlignedBoundingBox],
    ) -> None:
#   ) -> None:
        self.scenes: list[Scene] = scenes
#       self.scenes: list[Scene] = scenes
        self.nodes: list[Node] = nodes
#       self.nodes: list[Node] = nodes
        self.transforms: list[Transform] = transforms
#       self.transforms: list[Transform] = transforms
        self.metadata: list[NodeMetadata] = metadata
#       self.metadata: list[NodeMetadata] = metadata
        self.meshes: list[Mesh] = meshes
#       self.meshes: list[Mesh] = meshes
        self.vertices: npt.NDArray[typing.Any] = vertices
#       self.vertices: npt.NDArray[typing.Any] = vertices
        self.indices: npt.NDArray[np.uint32] = indices
#       self.indices: npt.NDArray[np.uint32] = indices
        self.materials: list[Material] = materials
#       self.materials: list[Material] = materials
        self.textures: list[Texture] = textures
#       self.textures: list[Texture] = textures
        self.samplers: list[Sampler] = samplers
#       self.samplers: list[Sampler] = samplers
        self.images: list[Image] = images
#       self.images: list[Image] = images
        self.skins: list[Skin] = skins
#       self.skins: list[Skin] = skins
        self.animations: list[Animation] = animations
#       self.animations: list[Animation] = animations
        self.cameras: list[Camera] = cameras
#       self.cameras: list[Camera] = cameras
        self.lights: list[Light] = lights
#       self.lights: list[Light] = lights
        self.aabbs: list[AxisAlignedBoundingBox] = aabbs
#       self.aabbs: list[AxisAlignedBoundingBox] = aabbs
        pass
#       pass

    def primitive_vertices(self, primitive: Primitive) -> npt.NDArray[typing.Any]:
#   def primitive_vertices(self, primitive: Primitive) -> npt.NDArray[typing.Any]:
        return self.vertices[primitive.vertex_offset:primitive.vertex_offset + primitive.number_of_vertices]
#       return self.vertices[primitive.vertex_offset:primitive.vertex_offset + primitive.number_of_vertices]

    def primitive_indices(self, primitive: Primitive) -> npt.NDArray[np.uint32]:
#   def primitive_indices(self, primitive: Primitive) -> npt.NDArray[np.uint32]:
        return self.indices[primitive.index_offset:primitive.index_offset + primitive.number_of_indices]
#       return self.indices[primitive.index_offset:primitive.index_offset + primitive.number_of_indices]

    def node_name(self, node_index: int) -> str:
#   def node_name(self, node_index: int) -> str:
        return self.metadata[self.nodes[node_index].metadata_index]["name"]
#       return self.metadata[self.nodes[node_index].metadata_index]["name"]

    def node_transform(self, node_index: int) -> Transform:
#   def node_transform(self, node_index: int) -> Transform:
        return self.transforms[self.nodes[node_index].transform_index]
#       return self.transforms[self.nodes[node_index].transform_index]

    def summary(self) -> dict[str, int]:
#   def summary(self) -> dict[str, int]:
        return {
#       return {
            "scenes": len(self.scenes),
#           "scenes": len(self.scenes),
            "nodes": len(self.nodes),
#           "nodes": len(self.nodes),
            "transforms": len(self.transforms),
#           "transforms": len(self.transforms),
            "metadata": len(self.metadata),
#           "metadata": len(self.metadata),
            "meshes": len(self.meshes),
#           "meshes": len(self.meshes),
            "vertices": len(self.vertices),
#           "vertices": len(self.vertices),
            "indices": len(self.indices),
#           "indices": len(self.indices),
            "materials": len(self.materials),
#           "materials": len(self.materials),
            "textures": len(self.textures),
#           "textures": len(self.textures),
            "samplers": len(self.samplers),
#           "samplers": len(self.samplers),
            "images": len(self.images),
#           "images": len(self.images),
            "skins": len(self.skins),
#           "skins": len(self.skins),
            "animations": len(self.animations),
#           "animations": len(self.animations),
            "cameras": len(self.cameras),
#           "cameras": len(self.cameras),
            "lights": len(self.lights),
#           "lights": len(self.lights),
            "aabbs": len(self.aabbs),
#           "aabbs": len(self.aabbs),
        }
#       }
