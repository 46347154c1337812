import logging
import logging
import typing
import typing
from PIL import Image as PILImage
from PIL import Image as PILImage
from gltf_world.core.common_types import AlphaMode, ImageFormat, MagFilter, Material, MinFilter, Sampler, Texture, WrappingMode, vec3f32, vec4f32
from gltf_world.core.common_types import AlphaMode, ImageFormat, MagFilter, Material, MinFilter, Sampler, Texture, WrappingMode, vec3f32, vec4f32
from gltf_world.core.errors import IOOrDecodeError, UnsupportedImageFormat
from gltf_world.core.errors import IOOrDecodeError, UnsupportedImageFormat
from gltf_world.core.world import Image
from gltf_world.core.world import Image
from gltf_world.io.document import SOURCE_RAWMODE_KEY, GltfDocument, field
from gltf_world.io.document import SOURCE_RAWMODE_KEY, GltfDocument, field

logger: logging.Logger = logging.getLogger(__name__)

# Pillow modes we can normalize to 8-bit RGBA without losing precision
SUPPORTED_IMAGE_MODES: frozenset[str] = frozenset({"1", "L", "LA", "P", "PA", "RGB", "RGBA", "RGBX"})

# Stored layouts (decoder rawmodes or Pillow modes) with more than 8 bits per channel.
# Pillow opens some of these in an 8-bit mode and truncates the samples, so the stored layout decides.
SOURCE_FORMAT_NAMES: dict[str, ImageFormat] = {
    "I;16": ImageFormat.R16,
    "I;16B": ImageFormat.R16,
    "I;16L": ImageFormat.R16,
    "I;16N": ImageFormat.R16,
    "LA;16B": ImageFormat.R16G16,
    "RGB;16B": ImageFormat.R16G16B16,
    "RGB;16L": ImageFormat.R16G16B16,
    "RGBA;16B": ImageFormat.R16G16B16A16,
    "RGBA;16L": ImageFormat.R16G16B16A16,
}

def source_layout(picture: PILImage.Image) -> str:
    return str(picture.info.get(SOURCE_RAWMODE_KEY, picture.mode))
#   return str(picture.info.get(SOURCE_RAWMODE_KEY, picture.mode))

def source_format_name(picture: PILImage.Image) -> str:
    # Layouts without an ImageFormat counterpart (e.g. "I", "F", "CMYK") are reported by their Pillow mode
#   # Layouts without an ImageFormat counterpart (e.g. "I", "F", "CMYK") are reported by their Pillow mode
    for layout in (source_layout(picture), picture.mode):
#   for layout in (source_layout(picture), picture.mode):
        if layout in SOURCE_FORMAT_NAMES:
#       if layout in SOURCE_FORMAT_NAMES:
            return SOURCE_FORMAT_NAMES[layout].value
#           return SOURCE_FORMAT_NAMES[layout].value
    return picture.mode
#   return picture.mode

def map_image(picture: PILImage.Image, image_index: int) -> Image:
    if source_layout(picture) in SOURCE_FORMAT_NAMES or picture.mode not in SUPPORTED_IMAGE_MODES:
#   if source_layout(picture) in SOURCE_FORMAT_NAMES or picture.mode not in SUPPORTED_IMAGE_MODES:
        raise UnsupportedImageFormat(image_index, source_format_name(picture))
#       raise UnsupportedImageFormat(image_index, source_format_name(picture))
    rgba: PILImage.Image = picture.convert("RGBA")
#   rgba: PILImage.Image = picture.convert("RGBA")
    return Image(
#   return Image(
        pixels=rgba.tobytes(),
#       pixels=rgba.tobytes(),
        width=rgba.width,
#       width=rgba.width,
        height=rgba.height,
#       height=rgba.height,
        format=ImageFormat.R8G8B8A8,
#       format=ImageFormat.R8G8B8A8,
    )
#   )

def map_enum[E](enum_type: type[E], value: int | None, default: E, what: str, sampler_index: int) -> E:
    if value is None:
#   if value is None:
        return default
#       return default
    try:
#   try:
        return enum_type(value) # type: ignore[call-arg]
#       return enum_type(value) # type: ignore[call-arg]
    except ValueError as e:
#   except ValueError as e:
        raise IOOrDecodeError(f"Sampler {sampler_index} has unknown {what} {value}") from e
#       raise IOOrDecodeError(f"Sampler {sampler_index} has unknown {what} {value}") from e

def map_sampler(gltf_sampler: typing.Any, sampler_index: int) -> Sampler:
    # Unspecified filters fall back to linear, unspecified wrapping to repeat
#   # Unspecified filters fall back to linear, unspecified wrapping to repeat
    return Sampler(
#   return Sampler(
        min_filter=map_enum(MinFilter, gltf_sampler.minFilter, MinFilter.LINEAR, "minFilter", sampler_index),
#       min_filter=map_enum(MinFilter, gltf_sampler.minFilter, MinFilter.LINEAR, "minFilter", sampler_index),
        mag_filter=map_enum(MagFilter, gltf_sampler.magFilter, MagFilter.LINEAR, "magFilter", sampler_index),
#       mag_filter=map_enum(MagFilter, gltf_sampler.magFilter, MagFilter.LINEAR, "magFilter", sampler_index),
        wrap_s=map_enum(WrappingMode, gltf_sampler.wrapS, WrappingMode.REPEAT, "wrapS", sampler_index),
#       wrap_s=map_enum(WrappingMode, gltf_sampler.wrapS, WrappingMode.REPEAT, "wrapS", sampler_index),
        wrap_t=map_enum(WrappingMode, gltf_sampler.wrapT, WrappingMode.REPEAT, "wrapT", sampler_index),
#       wrap_t=map_enum(WrappingMode, gltf_sampler.wrapT, WrappingMode.REPEAT, "wrapT", sampler_index),
    )
#   )

def map_texture(document: GltfDocument, gltf_texture: typing.Any, texture_index: int) -> Texture:
    if gltf_texture.source is None:
#   if gltf_texture.source is None:
        raise IOOrDecodeError(f"Texture {texture_index} has no source image")
#       raise IOOrDecodeError(f"Texture {texture_index} has no source image")
    return Texture(
#   return Texture(
        image_index=typing.cast(int, document.check_index("images", gltf_texture.source)),
#       image_index=typing.cast(int, document.check_index("images", gltf_texture.source)),
        sampler_index=document.check_index("samplers", gltf_texture.sampler),
#       sampler_index=document.check_index("samplers", gltf_texture.sampler),
    )
#   )

def texture_reference(document: GltfDocument, texture_info: typing.Any) -> int | None:
    # A textureInfo block resolves to its texture index, a missing block to None
#   # A textureInfo block resolves to its texture index, a missing block to None
    if texture_info is None:
#   if texture_info is None:
        return None
#       return None
    return document.check_index("textures", field(texture_info, "index"))
#   return document.check_index("textures", field(texture_info, "index"))

def map_material(document: GltfDocument, gltf_material: typing.Any, material_index: int) -> Material:
    pbr: typing.Any = gltf_material.pbrMetallicRoughness
#   pbr: typing.Any = gltf_material.pbrMetallicRoughness
    base_color_factor: list[float] = list(field(pbr, "baseColorFactor", [1.0, 1.0, 1.0, 1.0]))
#   base_color_factor: list[float] = list(field(pbr, "baseColorFactor", [1.0, 1.0, 1.0, 1.0]))
    emissive_factor: list[float] = list(gltf_material.emissiveFactor or [0.0, 0.0, 0.0])
#   emissive_factor: list[float] = list(gltf_material.emissiveFactor or [0.0, 0.0, 0.0])
    try:
#   try:
        alpha_mode: AlphaMode = AlphaMode(gltf_material.alphaMode or "OPAQUE")
#       alpha_mode: AlphaMode = AlphaMode(gltf_material.alphaMode or "OPAQUE")
    except ValueError as e:
#   except ValueError as e:
        raise IOOrDecodeError(f"Material {material_index} has unknown alphaMode {gltf_material.alphaMode!r}") from e
#       raise IOOrDecodeError(f"Material {material_index} has unknown alphaMode {gltf_material.alphaMode!r}") from e
    return Material(
#   return Material(
        name=gltf_material.name or "",
#       name=gltf_material.name or "",
        base_color_factor=typing.cast(vec4f32, tuple(float(v) for v in base_color_factor)),
#       base_color_factor=typing.cast(vec4f32, tuple(float(v) for v in base_color_factor)),
        base_color_texture_index=texture_reference(document, field(pbr, "baseColorTexture")),
#       base_color_texture_index=texture_reference(document, field(pbr, "baseColorTexture")),
        alpha_mode=alpha_mode,
#       alpha_mode=alpha_mode,
        alpha_cutoff=float(gltf_material.alphaCutoff if gltf_material.alphaCutoff is not None else 0.5),
#       alpha_cutoff=float(gltf_material.alphaCutoff if gltf_material.alphaCutoff is not None else 0.5),
        emissive_factor=typing.cast(vec3f32, tuple(float(v) for v in emissive_factor)),
#       emissive_factor=typing.cast(vec3f32, tuple(float(v) for v in emissive_factor)),
        emissive_texture_index=texture_reference(document, gltf_material.emissiveTexture),
#       emissive_texture_index=texture_reference(document, gltf_material.emissiveTexture),
    )
#   )

class MaterialTables:
    def __init__(self, materials: list[Material], textures: list[Texture], samplers: list[Sampler], images: list[Image]) -> None:
#   def __init__(self, materials: list[Material], textures: list[Texture], samplers: list[Sampler], images: list[Image]) -> None:
        self.materials: list[Material] = materials
#       self.materials: list[Material] = materials
        self.textures: list[Texture] = textures
#       self.textures: list[Texture] = textures
        self.samplers: list[Sampler] = samplers
#       self.samplers: list[Sampler] = samplers
        self.images: list[Image] = images
#       self.images: list[Image] = images
        pass
#       pass

def build_material_tables(document: GltfDocument) -> MaterialTables:
    images: list[Image] = [
#   images: list[Image] = [
        map_image(document.decode_image(image_index), image_index)
#       map_image(document.decode_image(image_index), image_index)
        for image_index in range(document.count("images"))
#       for image_index in range(document.count("images"))
    ]
#   ]
    samplers: list[Sampler] = [
#   samplers: list[Sampler] = [
        map_sampler(gltf_sampler, sampler_index)
#       map_sampler(gltf_sampler, sampler_index)
        for sampler_index, gltf_sampler in enumerate(document.items("samplers"))
#       for sampler_index, gltf_sampler in enumerate(document.items("samplers"))
    ]
#   ]
    textures: list[Texture] = [
#   textures: list[Texture] = [
        map_texture(document, gltf_texture, texture_index)
#       map_texture(document, gltf_texture, texture_index)
        for texture_index, gltf_texture in enumerate(document.items("textures"))
#       for texture_index, gltf_texture in enumerate(document.items("textures"))
    ]
#   ]
    materials: list[Material] = [
#   materials: list[Material] = [
        map_material(document, gltf_material, material_index)
#       map_material(document, gltf_material, material_index)
        for material_index, gltf_material in enumerate(document.items("materials"))
#       for material_index, gltf_material in enumerate(document.items("materials"))
    ]
#   ]
    logger.debug("Material tables: %d materials, %d textures, %d samplers, %d images", len(materials), len(textures), len(samplers), len(images))
#   logger.debug("Material tables: %d materials, %d textures, %d samplers, %d images", len(materials), len(textures), len(samplers), len(images))
    return MaterialTables(materials=materials, textures=textures, samplers=samplers, images=images)
#   return MaterialTables(materials=materials, textures=textures, samplers=samplers, images=images)
