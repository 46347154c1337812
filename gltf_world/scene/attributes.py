import logging
import logging
import typing
import typing
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
from gltf_world.core.errors import IOOrDecodeError, MissingRequiredAttribute
from gltf_world.core.errors import IOOrDecodeError, MissingRequiredAttribute
from gltf_world.io.document import GltfDocument
from gltf_world.io.document import GltfDocument

logger: logging.Logger = logging.getLogger(__name__)

# Values synthesized for attributes a primitive does not carry
DEFAULT_NORMAL: tuple[float, ...] = (0.0, 0.0, 0.0)
DEFAULT_UV: tuple[float, ...] = (0.0, 0.0)
DEFAULT_JOINTS: tuple[float, ...] = (0.0, 0.0, 0.0, 0.0)
DEFAULT_WEIGHTS: tuple[float, ...] = (1.0, 0.0, 0.0, 0.0)
DEFAULT_COLOR: tuple[float, ...] = (1.0, 1.0, 1.0)

def read_or_default(document: GltfDocument, accessor_index: int | None, default: tuple[float, ...], count: int, normalize: bool = False) -> npt.NDArray[np.float32]:
    """
    Reads an optional float attribute or repeats 'default' once per vertex.
#   Reads an optional float attribute or repeats 'default' once per vertex.
    The result always has the width of 'default'; wider data (RGBA colors) is truncated.
#   The result always has the width of 'default'; wider data (RGBA colors) is truncated.
    """
    width: int = len(default)
#   width: int = len(default)
    if accessor_index is None:
#   if accessor_index is None:
        return np.tile(np.asarray(default, dtype=np.float32), (count, 1))
#       return np.tile(np.asarray(default, dtype=np.float32), (count, 1))
    data: npt.NDArray[np.float32] = document.read_floats(accessor_index, normalize=normalize)
#   data: npt.NDArray[np.float32] = document.read_floats(accessor_index, normalize=normalize)
    if len(data) != count:
#   if len(data) != count:
        raise IOOrDecodeError(f"Accessor {accessor_index} has {len(data)} elements, expected {count} to match the positions")
#       raise IOOrDecodeError(f"Accessor {accessor_index} has {len(data)} elements, expected {count} to match the positions")
    if data.shape[1] < width:
#   if data.shape[1] < width:
        raise IOOrDecodeError(f"Accessor {accessor_index} has {data.shape[1]} components, expected at least {width}")
#       raise IOOrDecodeError(f"Accessor {accessor_index} has {data.shape[1]} components, expected at least {width}")
    return np.ascontiguousarray(data[:, :width], dtype=np.float32)
#   return np.ascontiguousarray(data[:, :width], dtype=np.float32)

class PrimitiveAttributes:
    # Per-vertex arrays of one primitive. All arrays share the same length.
#   # Per-vertex arrays of one primitive. All arrays share the same length.
    def __init__(self, positions: npt.NDArray[np.float32], normals: npt.NDArray[np.float32], uvs_0: npt.NDArray[np.float32], uvs_1: npt.NDArray[np.float32], joints_0: npt.NDArray[np.float32], weights_0: npt.NDArray[np.float32], colors_0: npt.NDArray[np.float32]) -> None:
#   def __init__(self, positions: npt.NDArray[np.float32], normals: npt.NDArray[np.float32], uvs_0: npt.NDArray[np.float32], uvs_1: npt.NDArray[np.float32], joints_0: npt.NDArray[np.float32], weights_0: npt.NDArray[np.float32], colors_0: npt.NDArray[np.float32]) -> None:
        self.positions: npt.NDArray[np.float32] = positions
#       self.positions: npt.NDArray[np.float32] = positions
        self.normals: npt.NDArray[np.float32] = normals
#       self.normals: npt.NDArray[np.float32] = normals
        self.uvs_0: npt.NDArray[np.float32] = uvs_0
#       self.uvs_0: npt.NDArray[np.float32] = uvs_0
        self.uvs_1: npt.NDArray[np.float32] = uvs_1
#       self.uvs_1: npt.NDArray[np.float32] = uvs_1
        self.joints_0: npt.NDArray[np.float32] = joints_0
#       self.joints_0: npt.NDArray[np.float32] = joints_0
        self.weights_0: npt.NDArray[np.float32] = weights_0
#       self.weights_0: npt.NDArray[np.float32] = weights_0
        self.colors_0: npt.NDArray[np.float32] = colors_0
#       self.colors_0: npt.NDArray[np.float32] = colors_0
        pass
#       pass

    def __len__(self) -> int:
#   def __len__(self) -> int:
        return len(self.positions)
#       return len(self.positions)

def attribute_accessor(primitive: typing.Any, name: str) -> int | None:
    attributes: typing.Any = primitive.attributes
#   attributes: typing.Any = primitive.attributes
    if attributes is None:
#   if attributes is None:
        return None
#       return None
    if isinstance(attributes, dict):
#   if isinstance(attributes, dict):
        return attributes.get(name)
#       return attributes.get(name)
    return getattr(attributes, name, None)
#   return getattr(attributes, name, None)

def read_primitive_attributes(document: GltfDocument, primitive: typing.Any, mesh_index: int, primitive_index: int) -> PrimitiveAttributes:
    position_accessor: int | None = attribute_accessor(primitive, "POSITION")
#   position_accessor: int | None = attribute_accessor(primitive, "POSITION")
    if position_accessor is None:
#   if position_accessor is None:
        raise MissingRequiredAttribute(mesh_index, primitive_index, "POSITION")
#       raise MissingRequiredAttribute(mesh_index, primitive_index, "POSITION")
    positions: npt.NDArray[np.float32] = document.read_floats(position_accessor)
#   positions: npt.NDArray[np.float32] = document.read_floats(position_accessor)
    if positions.shape[1] != 3:
#   if positions.shape[1] != 3:
        raise IOOrDecodeError(f"Mesh {mesh_index} primitive {primitive_index} POSITION accessor is not VEC3")
#       raise IOOrDecodeError(f"Mesh {mesh_index} primitive {primitive_index} POSITION accessor is not VEC3")
    count: int = len(positions)
#   count: int = len(positions)

    # Joint indices stay integral in the document; they are widened to float without normalization.
#   # Joint indices stay integral in the document; they are widened to float without normalization.
    # Texture coordinates, colors and weights are normalized when stored as integers.
#   # Texture coordinates, colors and weights are normalized when stored as integers.
    attributes: PrimitiveAttributes = PrimitiveAttributes(
#   attributes: PrimitiveAttributes = PrimitiveAttributes(
        positions=np.ascontiguousarray(positions, dtype=np.float32),
#       positions=np.ascontiguousarray(positions, dtype=np.float32),
        normals=read_or_default(document, attribute_accessor(primitive, "NORMAL"), DEFAULT_NORMAL, count),
#       normals=read_or_default(document, attribute_accessor(primitive, "NORMAL"), DEFAULT_NORMAL, count),
        uvs_0=read_or_default(document, attribute_accessor(primitive, "TEXCOORD_0"), DEFAULT_UV, count, normalize=True),
#       uvs_0=read_or_default(document, attribute_accessor(primitive, "TEXCOORD_0"), DEFAULT_UV, count, normalize=True),
        uvs_1=read_or_default(document, attribute_accessor(primitive, "TEXCOORD_1"), DEFAULT_UV, count, normalize=True),
#       uvs_1=read_or_default(document, attribute_accessor(primitive, "TEXCOORD_1"), DEFAULT_UV, count, normalize=True),
        joints_0=read_or_default(document, attribute_accessor(primitive, "JOINTS_0"), DEFAULT_JOINTS, count),
#       joints_0=read_or_default(document, attribute_accessor(primitive, "JOINTS_0"), DEFAULT_JOINTS, count),
        weights_0=read_or_default(document, attribute_accessor(primitive, "WEIGHTS_0"), DEFAULT_WEIGHTS, count, normalize=True),
#       weights_0=read_or_default(document, attribute_accessor(primitive, "WEIGHTS_0"), DEFAULT_WEIGHTS, count, normalize=True),
        colors_0=read_or_default(document, attribute_accessor(primitive, "COLOR_0"), DEFAULT_COLOR, count, normalize=True),
#       colors_0=read_or_default(document, attribute_accessor(primitive, "COLOR_0"), DEFAULT_COLOR, count, normalize=True),
    )
#   )
    logger.debug("Mesh %d primitive %d: %d vertices", mesh_index, primitive_index, count)
#   logger.debug("Mesh %d primitive %d: %d vertices", mesh_index, primitive_index, count)
    return attributes
#   return attributes

def read_primitive_indices(document: GltfDocument, primitive: typing.Any) -> npt.NDArray[np.uint32]:
    # Unindexed primitives yield an empty index array
#   # Unindexed primitives yield an empty index array
    if primitive.indices is None:
#   if primitive.indices is None:
        return np.zeros(0, dtype=np.uint32)
#       return np.zeros(0, dtype=np.uint32)
    return document.read_indices(primitive.indices)
#   return document.read_indices(primitive.indices)
