import enum
import enum
import typing
import typing

type vec2f32 = tuple[
    float,
    float,
]
"""
type vec2f32 = tuple[
    float,
    float,
]
"""

type vec3f32 = tuple[
    float,
    float,
    float,
]
"""
type vec3f32 = tuple[
    float,
    float,
    float,
]
"""

type vec4f32 = tuple[
    float,
    float,
    float,
    float,
]
"""
type vec4f32 = tuple[
    float,
    float,
    float,
    float,
]
"""

class PrimitiveTopology(enum.Enum):
    # Values match the glTF primitive "mode" integers.
#   # Values match the glTF primitive "mode" integers.
    POINTS = 0
#   POINTS = 0
    LINES = 1
#   LINES = 1
    LINE_LOOP = 2
#   LINE_LOOP = 2
    LINE_STRIP = 3
#   LINE_STRIP = 3
    TRIANGLES = 4
#   TRIANGLES = 4
    TRIANGLE_STRIP = 5
#   TRIANGLE_STRIP = 5
    TRIANGLE_FAN = 6
#   TRIANGLE_FAN = 6

class AlphaMode(enum.Enum):
    OPAQUE = "OPAQUE"
#   OPAQUE = "OPAQUE"
    MASK = "MASK"
#   MASK = "MASK"
    BLEND = "BLEND"
#   BLEND = "BLEND"

class MinFilter(enum.Enum):
    # OpenGL enum values as stored in the document samplers.
#   # OpenGL enum values as stored in the document samplers.
    NEAREST = 9728
#   NEAREST = 9728
    LINEAR = 9729
#   LINEAR = 9729
    NEAREST_MIPMAP_NEAREST = 9984
#   NEAREST_MIPMAP_NEAREST = 9984
    LINEAR_MIPMAP_NEAREST = 9985
#   LINEAR_MIPMAP_NEAREST = 9985
    NEAREST_MIPMAP_LINEAR = 9986
#   NEAREST_MIPMAP_LINEAR = 9986
    LINEAR_MIPMAP_LINEAR = 9987
#   LINEAR_MIPMAP_LINEAR = 9987

class MagFilter(enum.Enum):
    NEAREST = 9728
#   NEAREST = 9728
    LINEAR = 9729
#   LINEAR = 9729

class WrappingMode(enum.Enum):
    CLAMP_TO_EDGE = 33071
#   CLAMP_TO_EDGE = 33071
    MIRRORED_REPEAT = 33648
#   MIRRORED_REPEAT = 33648
    REPEAT = 10497
#   REPEAT = 10497

class ImageFormat(enum.Enum):
    R8 = "R8"
#   R8 = "R8"
    R8G8 = "R8G8"
#   R8G8 = "R8G8"
    R8G8B8 = "R8G8B8"
#   R8G8B8 = "R8G8B8"
    R8G8B8A8 = "R8G8B8A8"
#   R8G8B8A8 = "R8G8B8A8"
    R16 = "R16"
#   R16 = "R16"
    R16G16 = "R16G16"
#   R16G16 = "R16G16"
    R16G16B16 = "R16G16B16"
#   R16G16B16 = "R16G16B16"
    R16G16B16A16 = "R16G16B16A16"
#   R16G16B16A16 = "R16G16B16A16"
    R32G32B32 = "R32G32B32"
#   R32G32B32 = "R32G32B32"
    R32G32B32A32 = "R32G32B32A32"
#   R32G32B32A32 = "R32G32B32A32"

class Interpolation(enum.Enum):
    LINEAR = "LINEAR"
#   LINEAR = "LINEAR"
    STEP = "STEP"
#   STEP = "STEP"
    CUBICSPLINE = "CUBICSPLINE"
#   CUBICSPLINE = "CUBICSPLINE"

class TransformationKind(enum.Enum):
    # Values match the animation channel target "path".
#   # Values match the animation channel target "path".
    TRANSLATIONS = "translation"
#   TRANSLATIONS = "translation"
    ROTATIONS = "rotation"
#   ROTATIONS = "rotation"
    SCALES = "scale"
#   SCALES = "scale"
    MORPH_TARGET_WEIGHTS = "weights"
#   MORPH_TARGET_WEIGHTS = "weights"

class NodeMetadata(typing.TypedDict):
    name: str
#   name: str

class Sampler(typing.TypedDict):
    min_filter: MinFilter
#   min_filter: MinFilter
    mag_filter: MagFilter
#   mag_filter: MagFilter
    wrap_s: WrappingMode
#   wrap_s: WrappingMode
    wrap_t: WrappingMode
#   wrap_t: WrappingMode

class Texture(typing.TypedDict):
    # sampler_index None means the default Sampler settings apply.
#   # sampler_index None means the default Sampler settings apply.
    image_index: int
#   image_index: int
    sampler_index: int | None
#   sampler_index: int | None

class Material(typing.TypedDict):
    # Texture references index into World.textures, None means "no texture".
#   # Texture references index into World.textures, None means "no texture".
    name: str
#   name: str
    base_color_factor: vec4f32
#   base_color_factor: vec4f32
    base_color_texture_index: int | None
#   base_color_texture_index: int | None
    alpha_mode: AlphaMode
#   alpha_mode: AlphaMode
    alpha_cutoff: float
#   alpha_cutoff: float
    emissive_factor: vec3f32
#   emissive_factor: vec3f32
    emissive_texture_index: int | None
#   emissive_texture_index: int | None
