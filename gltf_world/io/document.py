import base64
import base64
import io
import io
import logging
import logging
import pathlib as pl
import pathlib as pl
import struct
import struct
import typing
import typing
import urllib.parse
import urllib.parse
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import pygltflib # type: ignore[import-untyped]
import pygltflib
from PIL import Image as PILImage
from PIL import Image as PILImage
from PIL import ImageFile as PILImageFile
from PIL import ImageFile as PILImageFile
from gltf_world.core.errors import IOOrDecodeError
from gltf_world.core.errors import IOOrDecodeError

logger: logging.Logger = logging.getLogger(__name__)

# Accessor component types, always little-endian in the binary buffers
COMPONENT_DTYPES: dict[int, str] = {
    5120: "<i1", # BYTE
    5121: "<u1", # UNSIGNED_BYTE
    5122: "<i2", # SHORT
    5123: "<u2", # UNSIGNED_SHORT
    5125: "<u4", # UNSIGNED_INT
    5126: "<f4", # FLOAT
}

TYPE_COMPONENT_COUNT: dict[str, int] = {
    "SCALAR": 1,
    "VEC2": 2,
    "VEC3": 3,
    "VEC4": 4,
    "MAT2": 4,
    "MAT3": 9,
    "MAT4": 16,
}

# Divisors for normalized integer components. Signed types clamp at -1.0.
NORMALIZATION_DIVISORS: dict[int, float] = {
    5120: 127.0,
    5121: 255.0,
    5122: 32767.0,
    5123: 65535.0,
}

LIGHTS_EXTENSION: str = "KHR_lights_punctual"

def field(item: typing.Any, name: str, default: typing.Any = None) -> typing.Any:
    # Nested document objects come back either as dataclasses or as plain dicts depending on how they were declared.
#   # Nested document objects come back either as dataclasses or as plain dicts depending on how they were declared.
    if item is None:
#   if item is None:
        return default
#       return default
    if isinstance(item, dict):
#   if isinstance(item, dict):
        value = item.get(name, default)
#       value = item.get(name, default)
    else:
#   else:
        value = getattr(item, name, default)
#       value = getattr(item, name, default)
    return default if value is None else value
#   return default if value is None else value

# Key under which decode_image records the pixel layout as stored in the file
SOURCE_RAWMODE_KEY: str = "gltf_world.source_rawmode"

def stored_rawmode(picture: PILImageFile.ImageFile) -> str:
    # The first decoder tile names the stored layout (e.g. "RGB;16B"), which load() may narrow to an 8-bit mode
#   # The first decoder tile names the stored layout (e.g. "RGB;16B"), which load() may narrow to an 8-bit mode
    if picture.tile:
#   if picture.tile:
        args: typing.Any = picture.tile[0][3]
#       args: typing.Any = picture.tile[0][3]
        if isinstance(args, tuple):
#       if isinstance(args, tuple):
            args = args[0] if args else None
#           args = args[0] if args else None
        if isinstance(args, str):
#       if isinstance(args, str):
            return args
#           return args
    return picture.mode
#   return picture.mode

class GltfDocument:
    """
    Thin typed layer over a pygltflib document.
#   Thin typed layer over a pygltflib document.
    Resolves buffers (GLB binary chunk, base64 data URIs, sibling files) and turns accessors into numpy arrays.
#   Resolves buffers (GLB binary chunk, base64 data URIs, sibling files) and turns accessors into numpy arrays.
    Buffers are cached for the lifetime of this object only.
#   Buffers are cached for the lifetime of this object only.
    """
    def __init__(self, gltf: pygltflib.GLTF2, base_path: pl.Path | None = None) -> None:
#   def __init__(self, gltf: pygltflib.GLTF2, base_path: pl.Path | None = None) -> None:
        self.gltf: pygltflib.GLTF2 = gltf
#       self.gltf: pygltflib.GLTF2 = gltf
        self.base_path: pl.Path | None = base_path
#       self.base_path: pl.Path | None = base_path
        self._buffers: dict[int, bytes] = {}
#       self._buffers: dict[int, bytes] = {}
        pass
#       pass

    @classmethod
#   @classmethod
    def load(cls, path: str | pl.Path) -> "GltfDocument":
#   def load(cls, path: str | pl.Path) -> "GltfDocument":
        file_path: pl.Path = pl.Path(path)
#       file_path: pl.Path = pl.Path(path)
        if not file_path.is_file():
#       if not file_path.is_file():
            raise IOOrDecodeError(f"Asset not found: {file_path}")
#           raise IOOrDecodeError(f"Asset not found: {file_path}")
        try:
#       try:
            gltf: pygltflib.GLTF2 | None = pygltflib.GLTF2().load(str(file_path))
#           gltf: pygltflib.GLTF2 | None = pygltflib.GLTF2().load(str(file_path))
        except (OSError, ValueError, KeyError, TypeError, AttributeError, struct.error) as e:
#       except (OSError, ValueError, KeyError, TypeError, AttributeError, struct.error) as e:
            raise IOOrDecodeError(f"Failed to decode {file_path}: {e}") from e
#           raise IOOrDecodeError(f"Failed to decode {file_path}: {e}") from e
        if gltf is None:
#       if gltf is None:
            raise IOOrDecodeError(f"Failed to decode {file_path}")
#           raise IOOrDecodeError(f"Failed to decode {file_path}")
        logger.debug("Loaded document %s", file_path)
#       logger.debug("Loaded document %s", file_path)
        return cls(gltf=gltf, base_path=file_path.parent)
#       return cls(gltf=gltf, base_path=file_path.parent)

    # -----------------------------
#   # -----------------------------
    # Document tables
#   # Document tables
    # -----------------------------
#   # -----------------------------
    def items(self, collection: str) -> list[typing.Any]:
#   def items(self, collection: str) -> list[typing.Any]:
        return list(getattr(self.gltf, collection, None) or [])
#       return list(getattr(self.gltf, collection, None) or [])

    def count(self, collection: str) -> int:
#   def count(self, collection: str) -> int:
        return len(self.items(collection))
#       return len(self.items(collection))

    def get(self, collection: str, index: int | None) -> typing.Any:
#   def get(self, collection: str, index: int | None) -> typing.Any:
        items: list[typing.Any] = self.items(collection)
#       items: list[typing.Any] = self.items(collection)
        if index is None or not 0 <= index < len(items):
#       if index is None or not 0 <= index < len(items):
            raise IOOrDecodeError(f"Invalid {collection} index {index} (document has {len(items)})")
#           raise IOOrDecodeError(f"Invalid {collection} index {index} (document has {len(items)})")
        return items[index]
#       return items[index]

    def check_index(self, collection: str, index: int | None) -> int | None:
#   def check_index(self, collection: str, index: int | None) -> int | None:
        # Optional references pass through as None; present ones must be in range
#       # Optional references pass through as None; present ones must be in range
        if index is None:
#       if index is None:
            return None
#           return None
        self.get(collection, index)
#       self.get(collection, index)
        return index
#       return index

    @property
#   @property
    def lights(self) -> list[dict[str, typing.Any]]:
#   def lights(self) -> list[dict[str, typing.Any]]:
        extension: typing.Any = field(self.gltf.extensions, LIGHTS_EXTENSION, {})
#       extension: typing.Any = field(self.gltf.extensions, LIGHTS_EXTENSION, {})
        return list(field(extension, "lights", []))
#       return list(field(extension, "lights", []))

    def node_light_index(self, node: typing.Any) -> int | None:
#   def node_light_index(self, node: typing.Any) -> int | None:
        extension: typing.Any = field(node.extensions, LIGHTS_EXTENSION, {})
#       extension: typing.Any = field(node.extensions, LIGHTS_EXTENSION, {})
        light_index: int | None = field(extension, "light")
#       light_index: int | None = field(extension, "light")
        if light_index is not None and not 0 <= light_index < len(self.lights):
#       if light_index is not None and not 0 <= light_index < len(self.lights):
            raise IOOrDecodeError(f"Invalid light index {light_index} (document has {len(self.lights)})")
#           raise IOOrDecodeError(f"Invalid light index {light_index} (document has {len(self.lights)})")
        return light_index
#       return light_index

    # -----------------------------
#   # -----------------------------
    # Buffers
#   # Buffers
    # -----------------------------
#   # -----------------------------
    def read_uri(self, uri: str) -> bytes:
#   def read_uri(self, uri: str) -> bytes:
        if uri.startswith("data:"):
#       if uri.startswith("data:"):
            header, _, payload = uri.partition(",")
#           header, _, payload = uri.partition(",")
            if not header.endswith(";base64"):
#           if not header.endswith(";base64"):
                raise IOOrDecodeError(f"Unsupported data URI encoding: {header}")
#               raise IOOrDecodeError(f"Unsupported data URI encoding: {header}")
            try:
#           try:
                return base64.b64decode(payload)
#               return base64.b64decode(payload)
            except ValueError as e:
#           except ValueError as e:
                raise IOOrDecodeError(f"Invalid base64 payload in data URI: {e}") from e
#               raise IOOrDecodeError(f"Invalid base64 payload in data URI: {e}") from e
        if self.base_path is None:
#       if self.base_path is None:
            raise IOOrDecodeError(f"Cannot resolve external resource {uri!r} without a base path")
#           raise IOOrDecodeError(f"Cannot resolve external resource {uri!r} without a base path")
        resource_path: pl.Path = self.base_path / urllib.parse.unquote(uri)
#       resource_path: pl.Path = self.base_path / urllib.parse.unquote(uri)
        try:
#       try:
            return resource_path.read_bytes()
#           return resource_path.read_bytes()
        except OSError as e:
#       except OSError as e:
            raise IOOrDecodeError(f"Failed to read external resource {resource_path}: {e}") from e
#           raise IOOrDecodeError(f"Failed to read external resource {resource_path}: {e}") from e

    def buffer_data(self, buffer_index: int) -> bytes:
#   def buffer_data(self, buffer_index: int) -> bytes:
        if buffer_index in self._buffers:
#       if buffer_index in self._buffers:
            return self._buffers[buffer_index]
#           return self._buffers[buffer_index]
        buffer: typing.Any = self.get("buffers", buffer_index)
#       buffer: typing.Any = self.get("buffers", buffer_index)
        data: bytes | None
#       data: bytes | None
        if buffer.uri is None:
#       if buffer.uri is None:
            # The first buffer of a GLB container refers to its binary chunk
#           # The first buffer of a GLB container refers to its binary chunk
            data = self.gltf.binary_blob()
#           data = self.gltf.binary_blob()
            if data is None:
#           if data is None:
                raise IOOrDecodeError(f"Buffer {buffer_index} has no uri and the document has no binary chunk")
#               raise IOOrDecodeError(f"Buffer {buffer_index} has no uri and the document has no binary chunk")
        else:
#       else:
            data = self.read_uri(buffer.uri)
#           data = self.read_uri(buffer.uri)
        data = bytes(data)
#       data = bytes(data)
        if buffer.byteLength is not None and len(data) < buffer.byteLength:
#       if buffer.byteLength is not None and len(data) < buffer.byteLength:
            raise IOOrDecodeError(f"Buffer {buffer_index} holds {len(data)} bytes, expected {buffer.byteLength}")
#           raise IOOrDecodeError(f"Buffer {buffer_index} holds {len(data)} bytes, expected {buffer.byteLength}")
        self._buffers[buffer_index] = data
#       self._buffers[buffer_index] = data
        return data
#       return data

    # -----------------------------
#   # -----------------------------
    # Accessors
#   # Accessors
    # -----------------------------
#   # -----------------------------
    def component_dtype(self, component_type: int) -> np.dtype:
#   def component_dtype(self, component_type: int) -> np.dtype:
        if component_type not in COMPONENT_DTYPES:
#       if component_type not in COMPONENT_DTYPES:
            raise IOOrDecodeError(f"Unknown accessor component type {component_type}")
#           raise IOOrDecodeError(f"Unknown accessor component type {component_type}")
        return np.dtype(COMPONENT_DTYPES[component_type])
#       return np.dtype(COMPONENT_DTYPES[component_type])

    def read_view(self, view_index: int, byte_offset: int, dtype: np.dtype, components: int, count: int, strided: bool = True) -> npt.NDArray[typing.Any]:
#   def read_view(self, view_index: int, byte_offset: int, dtype: np.dtype, components: int, count: int, strided: bool = True) -> npt.NDArray[typing.Any]:
        view: typing.Any = self.get("bufferViews", view_index)
#       view: typing.Any = self.get("bufferViews", view_index)
        buffer: bytes = self.buffer_data(view.buffer)
#       buffer: bytes = self.buffer_data(view.buffer)
        element_size: int = dtype.itemsize * components
#       element_size: int = dtype.itemsize * components
        stride: int = (view.byteStride or element_size) if strided else element_size
#       stride: int = (view.byteStride or element_size) if strided else element_size
        view_start: int = view.byteOffset or 0
#       view_start: int = view.byteOffset or 0
        view_end: int = view_start + view.byteLength
#       view_end: int = view_start + view.byteLength
        if view_end > len(buffer):
#       if view_end > len(buffer):
            raise IOOrDecodeError(f"Buffer view {view_index} overruns buffer {view.buffer}")
#           raise IOOrDecodeError(f"Buffer view {view_index} overruns buffer {view.buffer}")
        if count == 0:
#       if count == 0:
            return np.zeros((0, components), dtype=dtype)
#           return np.zeros((0, components), dtype=dtype)

        start: int = view_start + byte_offset
#       start: int = view_start + byte_offset
        end: int = start + stride * (count - 1) + element_size
#       end: int = start + stride * (count - 1) + element_size
        if end > view_end:
#       if end > view_end:
            raise IOOrDecodeError(f"Accessor data overruns buffer view {view_index}")
#           raise IOOrDecodeError(f"Accessor data overruns buffer view {view_index}")

        # One row of raw bytes per element, honoring the view's byte stride
#       # One row of raw bytes per element, honoring the view's byte stride
        raw: npt.NDArray[np.uint8] = np.frombuffer(buffer, dtype=np.uint8, count=end - start, offset=start)
#       raw: npt.NDArray[np.uint8] = np.frombuffer(buffer, dtype=np.uint8, count=end - start, offset=start)
        rows: npt.NDArray[np.uint8] = np.lib.stride_tricks.as_strided(raw, shape=(count, element_size), strides=(stride, 1))
#       rows: npt.NDArray[np.uint8] = np.lib.stride_tricks.as_strided(raw, shape=(count, element_size), strides=(stride, 1))
        return rows.copy().view(dtype).reshape((count, components))
#       return rows.copy().view(dtype).reshape((count, components))

    def read_accessor(self, accessor_index: int) -> npt.NDArray[typing.Any]:
#   def read_accessor(self, accessor_index: int) -> npt.NDArray[typing.Any]:
        """
        Returns a (count, components) array in the accessor's own component type.
#       Returns a (count, components) array in the accessor's own component type.
        Accessors without a buffer view start zero-filled; sparse values are substituted afterwards.
#       Accessors without a buffer view start zero-filled; sparse values are substituted afterwards.
        """
        accessor: typing.Any = self.get("accessors", accessor_index)
#       accessor: typing.Any = self.get("accessors", accessor_index)
        dtype: np.dtype = self.component_dtype(accessor.componentType)
#       dtype: np.dtype = self.component_dtype(accessor.componentType)
        if accessor.type not in TYPE_COMPONENT_COUNT:
#       if accessor.type not in TYPE_COMPONENT_COUNT:
            raise IOOrDecodeError(f"Accessor {accessor_index} has unknown type {accessor.type!r}")
#           raise IOOrDecodeError(f"Accessor {accessor_index} has unknown type {accessor.type!r}")
        components: int = TYPE_COMPONENT_COUNT[accessor.type]
#       components: int = TYPE_COMPONENT_COUNT[accessor.type]
        count: int = accessor.count or 0
#       count: int = accessor.count or 0

        data: npt.NDArray[typing.Any]
#       data: npt.NDArray[typing.Any]
        if accessor.bufferView is None:
#       if accessor.bufferView is None:
            data = np.zeros((count, components), dtype=dtype)
#           data = np.zeros((count, components), dtype=dtype)
        else:
#       else:
            data = self.read_view(accessor.bufferView, accessor.byteOffset or 0, dtype, components, count)
#           data = self.read_view(accessor.bufferView, accessor.byteOffset or 0, dtype, components, count)

        sparse: typing.Any = accessor.sparse
#       sparse: typing.Any = accessor.sparse
        if sparse is not None and field(sparse, "count", 0) > 0:
#       if sparse is not None and field(sparse, "count", 0) > 0:
            sparse_count: int = field(sparse, "count")
#           sparse_count: int = field(sparse, "count")
            sparse_indices: typing.Any = field(sparse, "indices")
#           sparse_indices: typing.Any = field(sparse, "indices")
            sparse_values: typing.Any = field(sparse, "values")
#           sparse_values: typing.Any = field(sparse, "values")
            if sparse_indices is None or sparse_values is None:
#           if sparse_indices is None or sparse_values is None:
                raise IOOrDecodeError(f"Accessor {accessor_index} has an incomplete sparse block")
#               raise IOOrDecodeError(f"Accessor {accessor_index} has an incomplete sparse block")
            indices: npt.NDArray[typing.Any] = self.read_view(
#           indices: npt.NDArray[typing.Any] = self.read_view(
                field(sparse_indices, "bufferView"),
#               field(sparse_indices, "bufferView"),
                field(sparse_indices, "byteOffset", 0),
#               field(sparse_indices, "byteOffset", 0),
                self.component_dtype(field(sparse_indices, "componentType")),
#               self.component_dtype(field(sparse_indices, "componentType")),
                1,
#               1,
                sparse_count,
#               sparse_count,
                strided=False,
#               strided=False,
            ).reshape(-1).astype(np.int64)
#           ).reshape(-1).astype(np.int64)
            values: npt.NDArray[typing.Any] = self.read_view(
#           values: npt.NDArray[typing.Any] = self.read_view(
                field(sparse_values, "bufferView"),
#               field(sparse_values, "bufferView"),
                field(sparse_values, "byteOffset", 0),
#               field(sparse_values, "byteOffset", 0),
                dtype,
#               dtype,
                components,
#               components,
                sparse_count,
#               sparse_count,
                strided=False,
#               strided=False,
            )
#           )
            if np.any(indices >= count):
#           if np.any(indices >= count):
                raise IOOrDecodeError(f"Accessor {accessor_index} has sparse indices beyond its count")
#               raise IOOrDecodeError(f"Accessor {accessor_index} has sparse indices beyond its count")
            data = data.copy()
#           data = data.copy()
            data[indices] = values
#           data[indices] = values
        return data
#       return data

    def read_floats(self, accessor_index: int, normalize: bool = False) -> npt.NDArray[np.float32]:
#   def read_floats(self, accessor_index: int, normalize: bool = False) -> npt.NDArray[np.float32]:
        # Integer data is mapped to [0, 1] / [-1, 1] when the accessor says so, or when the
#       # Integer data is mapped to [0, 1] / [-1, 1] when the accessor says so, or when the
        # attribute semantics require it (texture coordinates, colors, weights, rotations).
#       # attribute semantics require it (texture coordinates, colors, weights, rotations).
        accessor: typing.Any = self.get("accessors", accessor_index)
#       accessor: typing.Any = self.get("accessors", accessor_index)
        data: npt.NDArray[typing.Any] = self.read_accessor(accessor_index)
#       data: npt.NDArray[typing.Any] = self.read_accessor(accessor_index)
        if data.dtype.kind == "f":
#       if data.dtype.kind == "f":
            return data.astype(np.float32)
#           return data.astype(np.float32)
        if normalize or accessor.normalized:
#       if normalize or accessor.normalized:
            if accessor.componentType not in NORMALIZATION_DIVISORS:
#           if accessor.componentType not in NORMALIZATION_DIVISORS:
                raise IOOrDecodeError(f"Accessor {accessor_index} cannot be normalized (component type {accessor.componentType})")
#               raise IOOrDecodeError(f"Accessor {accessor_index} cannot be normalized (component type {accessor.componentType})")
            divisor: float = NORMALIZATION_DIVISORS[accessor.componentType]
#           divisor: float = NORMALIZATION_DIVISORS[accessor.componentType]
            return np.maximum(data.astype(np.float32) / divisor, -1.0).astype(np.float32)
#           return np.maximum(data.astype(np.float32) / divisor, -1.0).astype(np.float32)
        return data.astype(np.float32)
#       return data.astype(np.float32)

    def read_indices(self, accessor_index: int) -> npt.NDArray[np.uint32]:
#   def read_indices(self, accessor_index: int) -> npt.NDArray[np.uint32]:
        data: npt.NDArray[typing.Any] = self.read_accessor(accessor_index)
#       data: npt.NDArray[typing.Any] = self.read_accessor(accessor_index)
        if data.dtype.kind != "u" or data.shape[1] != 1:
#       if data.dtype.kind != "u" or data.shape[1] != 1:
            raise IOOrDecodeError(f"Accessor {accessor_index} is not a scalar unsigned index accessor")
#           raise IOOrDecodeError(f"Accessor {accessor_index} is not a scalar unsigned index accessor")
        return data.reshape(-1).astype(np.uint32)
#       return data.reshape(-1).astype(np.uint32)

    # -----------------------------
#   # -----------------------------
    # Images
#   # Images
    # -----------------------------
#   # -----------------------------
    def image_bytes(self, image_index: int) -> bytes:
#   def image_bytes(self, image_index: int) -> bytes:
        image: typing.Any = self.get("images", image_index)
#       image: typing.Any = self.get("images", image_index)
        if image.uri is not None:
#       if image.uri is not None:
            return self.read_uri(image.uri)
#           return self.read_uri(image.uri)
        if image.bufferView is not None:
#       if image.bufferView is not None:
            view: typing.Any = self.get("bufferViews", image.bufferView)
#           view: typing.Any = self.get("bufferViews", image.bufferView)
            buffer: bytes = self.buffer_data(view.buffer)
#           buffer: bytes = self.buffer_data(view.buffer)
            start: int = view.byteOffset or 0
#           start: int = view.byteOffset or 0
            if start + view.byteLength > len(buffer):
#           if start + view.byteLength > len(buffer):
                raise IOOrDecodeError(f"Image {image_index} overruns buffer {view.buffer}")
#               raise IOOrDecodeError(f"Image {image_index} overruns buffer {view.buffer}")
            return buffer[start:start + view.byteLength]
#           return buffer[start:start + view.byteLength]
        raise IOOrDecodeError(f"Image {image_index} has neither a uri nor a buffer view")
#       raise IOOrDecodeError(f"Image {image_index} has neither a uri nor a buffer view")

    def decode_image(self, image_index: int) -> PILImage.Image:
#   def decode_image(self, image_index: int) -> PILImage.Image:
        data: bytes = self.image_bytes(image_index)
#       data: bytes = self.image_bytes(image_index)
        try:
#       try:
            picture: PILImageFile.ImageFile = PILImage.open(io.BytesIO(data))
#           picture: PILImageFile.ImageFile = PILImage.open(io.BytesIO(data))
            picture.info[SOURCE_RAWMODE_KEY] = stored_rawmode(picture)
#           picture.info[SOURCE_RAWMODE_KEY] = stored_rawmode(picture)
            picture.load()
#           picture.load()
        except (OSError, ValueError) as e:
#       except (OSError, ValueError) as e:
            raise IOOrDecodeError(f"Failed to decode image {image_index}: {e}") from e
#           raise IOOrDecodeError(f"Failed to decode image {image_index}: {e}") from e
        return picture
#       return picture
