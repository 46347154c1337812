import base64
import base64
import io
import io
import json
import json
import pathlib as pl
import pathlib as pl
import struct
import struct
import typing
import typing
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import pytest
import pytest
from PIL import Image as PILImage
from PIL import Image as PILImage

FLOAT: int = 5126
UNSIGNED_BYTE: int = 5121
UNSIGNED_SHORT: int = 5123
UNSIGNED_INT: int = 5125

NUMPY_TYPES: dict[int, str] = {
    5120: "<i1",
    5121: "<u1",
    5122: "<i2",
    5123: "<u2",
    5125: "<u4",
    5126: "<f4",
}

class GltfAssetBuilder:
    # Assembles a small glTF document in memory and writes it as .gltf (data URI buffer) or .glb
#   # Assembles a small glTF document in memory and writes it as .gltf (data URI buffer) or .glb
    def __init__(self, directory: pl.Path) -> None:
#   def __init__(self, directory: pl.Path) -> None:
        self.directory: pl.Path = directory
#       self.directory: pl.Path = directory
        self.document: dict[str, typing.Any] = {"asset": {"version": "2.0"}}
#       self.document: dict[str, typing.Any] = {"asset": {"version": "2.0"}}
        self.blob: bytearray = bytearray()
#       self.blob: bytearray = bytearray()
        pass
#       pass

    def add(self, collection: str, item: dict[str, typing.Any]) -> int:
#   def add(self, collection: str, item: dict[str, typing.Any]) -> int:
        items: list[dict[str, typing.Any]] = self.document.setdefault(collection, [])
#       items: list[dict[str, typing.Any]] = self.document.setdefault(collection, [])
        items.append(item)
#       items.append(item)
        return len(items) - 1
#       return len(items) - 1

    def add_buffer_view(self, data: bytes, byte_stride: int | None = None) -> int:
#   def add_buffer_view(self, data: bytes, byte_stride: int | None = None) -> int:
        # Views start 4-byte aligned, as accessors require
#       # Views start 4-byte aligned, as accessors require
        while len(self.blob) % 4 != 0:
#       while len(self.blob) % 4 != 0:
            self.blob.append(0)
#           self.blob.append(0)
        view: dict[str, typing.Any] = {"buffer": 0, "byteOffset": len(self.blob), "byteLength": len(data)}
#       view: dict[str, typing.Any] = {"buffer": 0, "byteOffset": len(self.blob), "byteLength": len(data)}
        if byte_stride is not None:
#       if byte_stride is not None:
            view["byteStride"] = byte_stride
#           view["byteStride"] = byte_stride
        self.blob.extend(data)
#       self.blob.extend(data)
        return self.add("bufferViews", view)
#       return self.add("bufferViews", view)

    def add_accessor(self, values: npt.ArrayLike, accessor_type: str = "VEC3", component_type: int = FLOAT, normalized: bool = False) -> int:
#   def add_accessor(self, values: npt.ArrayLike, accessor_type: str = "VEC3", component_type: int = FLOAT, normalized: bool = False) -> int:
        array: npt.NDArray[typing.Any] = np.asarray(values, dtype=NUMPY_TYPES[component_type])
#       array: npt.NDArray[typing.Any] = np.asarray(values, dtype=NUMPY_TYPES[component_type])
        accessor: dict[str, typing.Any] = {
#       accessor: dict[str, typing.Any] = {
            "bufferView": self.add_buffer_view(array.tobytes()),
#           "bufferView": self.add_buffer_view(array.tobytes()),
            "componentType": component_type,
#           "componentType": component_type,
            "count": len(array),
#           "count": len(array),
            "type": accessor_type,
#           "type": accessor_type,
        }
#       }
        if normalized:
#       if normalized:
            accessor["normalized"] = True
#           accessor["normalized"] = True
        if accessor_type == "VEC3" and component_type == FLOAT and len(array) > 0:
#       if accessor_type == "VEC3" and component_type == FLOAT and len(array) > 0:
            accessor["min"] = array.min(axis=0).tolist()
#           accessor["min"] = array.min(axis=0).tolist()
            accessor["max"] = array.max(axis=0).tolist()
#           accessor["max"] = array.max(axis=0).tolist()
        return self.add("accessors", accessor)
#       return self.add("accessors", accessor)

    def add_triangle_mesh(self, positions: npt.ArrayLike | None = None, indices: list[int] | None = None, material: int | None = None, **attributes: int) -> int:
#   def add_triangle_mesh(self, positions: npt.ArrayLike | None = None, indices: list[int] | None = None, material: int | None = None, **attributes: int) -> int:
        if positions is None:
#       if positions is None:
            positions = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
#           positions = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
        primitive: dict[str, typing.Any] = {"attributes": {"POSITION": self.add_accessor(positions), **attributes}}
#       primitive: dict[str, typing.Any] = {"attributes": {"POSITION": self.add_accessor(positions), **attributes}}
        if indices is not None:
#       if indices is not None:
            primitive["indices"] = self.add_accessor(indices, "SCALAR", UNSIGNED_SHORT)
#           primitive["indices"] = self.add_accessor(indices, "SCALAR", UNSIGNED_SHORT)
        if material is not None:
#       if material is not None:
            primitive["material"] = material
#           primitive["material"] = material
        return self.add("meshes", {"primitives": [primitive]})
#       return self.add("meshes", {"primitives": [primitive]})

    def add_image(self, picture: PILImage.Image) -> int:
#   def add_image(self, picture: PILImage.Image) -> int:
        stream: io.BytesIO = io.BytesIO()
#       stream: io.BytesIO = io.BytesIO()
        picture.save(stream, format="PNG")
#       picture.save(stream, format="PNG")
        uri: str = "data:image/png;base64," + base64.b64encode(stream.getvalue()).decode("ascii")
#       uri: str = "data:image/png;base64," + base64.b64encode(stream.getvalue()).decode("ascii")
        return self.add("images", {"uri": uri})
#       return self.add("images", {"uri": uri})

    def write(self, name: str = "asset.gltf") -> pl.Path:
#   def write(self, name: str = "asset.gltf") -> pl.Path:
        document: dict[str, typing.Any] = dict(self.document)
#       document: dict[str, typing.Any] = dict(self.document)
        if self.blob:
#       if self.blob:
            uri: str = "data:application/octet-stream;base64," + base64.b64encode(bytes(self.blob)).decode("ascii")
#           uri: str = "data:application/octet-stream;base64," + base64.b64encode(bytes(self.blob)).decode("ascii")
            document["buffers"] = [{"uri": uri, "byteLength": len(self.blob)}]
#           document["buffers"] = [{"uri": uri, "byteLength": len(self.blob)}]
        path: pl.Path = self.directory / name
#       path: pl.Path = self.directory / name
        path.write_text(json.dumps(document), encoding="utf-8")
#       path.write_text(json.dumps(document), encoding="utf-8")
        return path
#       return path

    def write_glb(self, name: str = "asset.glb") -> pl.Path:
#   def write_glb(self, name: str = "asset.glb") -> pl.Path:
        document: dict[str, typing.Any] = dict(self.document)
#       document: dict[str, typing.Any] = dict(self.document)
        binary: bytes = bytes(self.blob)
#       binary: bytes = bytes(self.blob)
        binary += b"\x00" * (-len(binary) % 4)
#       binary += b"\x00" * (-len(binary) % 4)
        if binary:
#       if binary:
            document["buffers"] = [{"byteLength": len(self.blob)}]
#           document["buffers"] = [{"byteLength": len(self.blob)}]
        json_chunk: bytes = json.dumps(document).encode("utf-8")
#       json_chunk: bytes = json.dumps(document).encode("utf-8")
        json_chunk += b" " * (-len(json_chunk) % 4)
#       json_chunk += b" " * (-len(json_chunk) % 4)

        chunks: bytes = struct.pack("<II", len(json_chunk), 0x4E4F534A) + json_chunk
#       chunks: bytes = struct.pack("<II", len(json_chunk), 0x4E4F534A) + json_chunk
        if binary:
#       if binary:
            chunks += struct.pack("<II", len(binary), 0x004E4942) + binary
#           chunks += struct.pack("<II", len(binary), 0x004E4942) + binary
        header: bytes = struct.pack("<III", 0x46546C67, 2, 12 + len(chunks))
#       header: bytes = struct.pack("<III", 0x46546C67, 2, 12 + len(chunks))
        path: pl.Path = self.directory / name
#       path: pl.Path = self.directory / name
        path.write_bytes(header + chunks)
#       path.write_bytes(header + chunks)
        return path
#       return path

@pytest.fixture
def asset(tmp_path: pl.Path) -> GltfAssetBuilder:
    return GltfAssetBuilder(tmp_path)
#   return GltfAssetBuilder(tmp_path)
