import logging
import logging
import typing
import typing
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
from gltf_world.core.common_types import PrimitiveTopology
from gltf_world.core.common_types import PrimitiveTopology
from gltf_world.core.errors import IOOrDecodeError
from gltf_world.core.errors import IOOrDecodeError
from gltf_world.core.world import VERTEX_DTYPE, Mesh, Primitive
from gltf_world.core.world import VERTEX_DTYPE, Mesh, Primitive
from gltf_world.io.document import GltfDocument
from gltf_world.io.document import GltfDocument
from gltf_world.scene.attributes import PrimitiveAttributes, read_primitive_attributes, read_primitive_indices
from gltf_world.scene.attributes import PrimitiveAttributes, read_primitive_attributes, read_primitive_indices

logger: logging.Logger = logging.getLogger(__name__)

def map_primitive_mode(mode: int | None, mesh_index: int, primitive_index: int) -> PrimitiveTopology:
    # Absent mode means triangles
#   # Absent mode means triangles
    if mode is None:
#   if mode is None:
        return PrimitiveTopology.TRIANGLES
#       return PrimitiveTopology.TRIANGLES
    try:
#   try:
        return PrimitiveTopology(mode)
#       return PrimitiveTopology(mode)
    except ValueError as e:
#   except ValueError as e:
        raise IOOrDecodeError(f"Mesh {mesh_index} primitive {primitive_index} has unknown mode {mode}") from e
#       raise IOOrDecodeError(f"Mesh {mesh_index} primitive {primitive_index} has unknown mode {mode}") from e

def interleave(attributes: PrimitiveAttributes) -> npt.NDArray[typing.Any]:
    # Combine the per-attribute arrays index by index into VERTEX_DTYPE records
#   # Combine the per-attribute arrays index by index into VERTEX_DTYPE records
    vertices: npt.NDArray[typing.Any] = np.zeros(len(attributes), dtype=VERTEX_DTYPE)
#   vertices: npt.NDArray[typing.Any] = np.zeros(len(attributes), dtype=VERTEX_DTYPE)
    vertices["position"] = attributes.positions
#   vertices["position"] = attributes.positions
    vertices["normal"] = attributes.normals
#   vertices["normal"] = attributes.normals
    vertices["uv_0"] = attributes.uvs_0
#   vertices["uv_0"] = attributes.uvs_0
    vertices["uv_1"] = attributes.uvs_1
#   vertices["uv_1"] = attributes.uvs_1
    vertices["joint_0"] = attributes.joints_0
#   vertices["joint_0"] = attributes.joints_0
    vertices["weight_0"] = attributes.weights_0
#   vertices["weight_0"] = attributes.weights_0
    vertices["color_0"] = attributes.colors_0
#   vertices["color_0"] = attributes.colors_0
    return vertices
#   return vertices

class GeometryAssembler:
    """
    Merges every primitive's vertex and index stream into one shared vertex buffer and one shared index buffer.
#   Merges every primitive's vertex and index stream into one shared vertex buffer and one shared index buffer.
    Primitives remember where their slice starts and how long it is. Indices stay local to the primitive's vertex slice.
#   Primitives remember where their slice starts and how long it is. Indices stay local to the primitive's vertex slice.
    """
    def __init__(self, document: GltfDocument) -> None:
#   def __init__(self, document: GltfDocument) -> None:
        self.document: GltfDocument = document
#       self.document: GltfDocument = document
        self.vertex_chunks: list[npt.NDArray[typing.Any]] = []
#       self.vertex_chunks: list[npt.NDArray[typing.Any]] = []
        self.index_chunks: list[npt.NDArray[np.uint32]] = []
#       self.index_chunks: list[npt.NDArray[np.uint32]] = []
        self.number_of_vertices: int = 0
#       self.number_of_vertices: int = 0
        self.number_of_indices: int = 0
#       self.number_of_indices: int = 0
        pass
#       pass

    def add_primitive(self, primitive: typing.Any, mesh_index: int, primitive_index: int) -> Primitive:
#   def add_primitive(self, primitive: typing.Any, mesh_index: int, primitive_index: int) -> Primitive:
        topology: PrimitiveTopology = map_primitive_mode(primitive.mode, mesh_index, primitive_index)
#       topology: PrimitiveTopology = map_primitive_mode(primitive.mode, mesh_index, primitive_index)
        material_index: int | None = self.document.check_index("materials", primitive.material)
#       material_index: int | None = self.document.check_index("materials", primitive.material)
        attributes: PrimitiveAttributes = read_primitive_attributes(self.document, primitive, mesh_index, primitive_index)
#       attributes: PrimitiveAttributes = read_primitive_attributes(self.document, primitive, mesh_index, primitive_index)
        indices: npt.NDArray[np.uint32] = read_primitive_indices(self.document, primitive)
#       indices: npt.NDArray[np.uint32] = read_primitive_indices(self.document, primitive)
        if len(indices) > 0 and int(indices.max()) >= len(attributes):
#       if len(indices) > 0 and int(indices.max()) >= len(attributes):
            raise IOOrDecodeError(f"Mesh {mesh_index} primitive {primitive_index} references vertex {int(indices.max())} of {len(attributes)}")
#           raise IOOrDecodeError(f"Mesh {mesh_index} primitive {primitive_index} references vertex {int(indices.max())} of {len(attributes)}")

        result: Primitive = Primitive(
#       result: Primitive = Primitive(
            topology=topology,
#           topology=topology,
            material_index=material_index,
#           material_index=material_index,
            vertex_offset=self.number_of_vertices,
#           vertex_offset=self.number_of_vertices,
            number_of_vertices=len(attributes),
#           number_of_vertices=len(attributes),
            index_offset=self.number_of_indices,
#           index_offset=self.number_of_indices,
            number_of_indices=len(indices),
#           number_of_indices=len(indices),
        )
#       )
        self.vertex_chunks.append(interleave(attributes))
#       self.vertex_chunks.append(interleave(attributes))
        self.index_chunks.append(indices)
#       self.index_chunks.append(indices)
        self.number_of_vertices += len(attributes)
#       self.number_of_vertices += len(attributes)
        self.number_of_indices += len(indices)
#       self.number_of_indices += len(indices)
        return result
#       return result

    def add_mesh(self, gltf_mesh: typing.Any, mesh_index: int) -> Mesh:
#   def add_mesh(self, gltf_mesh: typing.Any, mesh_index: int) -> Mesh:
        primitives: list[Primitive] = [
#       primitives: list[Primitive] = [
            self.add_primitive(primitive, mesh_index, primitive_index)
#           self.add_primitive(primitive, mesh_index, primitive_index)
            for primitive_index, primitive in enumerate(gltf_mesh.primitives or [])
#           for primitive_index, primitive in enumerate(gltf_mesh.primitives or [])
        ]
#       ]
        return Mesh(primitives=primitives, name=gltf_mesh.name)
#       return Mesh(primitives=primitives, name=gltf_mesh.name)

    def build_meshes(self) -> list[Mesh]:
#   def build_meshes(self) -> list[Mesh]:
        meshes: list[Mesh] = [self.add_mesh(gltf_mesh, mesh_index) for mesh_index, gltf_mesh in enumerate(self.document.items("meshes"))]
#       meshes: list[Mesh] = [self.add_mesh(gltf_mesh, mesh_index) for mesh_index, gltf_mesh in enumerate(self.document.items("meshes"))]
        logger.debug("Assembled %d meshes: %d vertices, %d indices", len(meshes), self.number_of_vertices, self.number_of_indices)
#       logger.debug("Assembled %d meshes: %d vertices, %d indices", len(meshes), self.number_of_vertices, self.number_of_indices)
        return meshes
#       return meshes

    def vertices(self) -> npt.NDArray[typing.Any]:
#   def vertices(self) -> npt.NDArray[typing.Any]:
        if not self.vertex_chunks:
#       if not self.vertex_chunks:
            return np.zeros(0, dtype=VERTEX_DTYPE)
#           return np.zeros(0, dtype=VERTEX_DTYPE)
        return np.concatenate(self.vertex_chunks)
#       return np.concatenate(self.vertex_chunks)

    def indices(self) -> npt.NDArray[np.uint32]:
#   def indices(self) -> npt.NDArray[np.uint32]:
        if not self.index_chunks:
#       if not self.index_chunks:
            return np.zeros(0, dtype=np.uint32)
#           return np.zeros(0, dtype=np.uint32)
        return np.concatenate(self.index_chunks).astype(np.uint32)
#       return np.concatenate(self.index_chunks).astype(np.uint32)
