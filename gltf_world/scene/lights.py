import logging
import logging
import math
import math
import typing
import typing
from gltf_world.core.common_types import vec3f32
from gltf_world.core.common_types import vec3f32
from gltf_world.core.errors import IOOrDecodeError
from gltf_world.core.errors import IOOrDecodeError
from gltf_world.core.world import DirectionalLight, Light, PointLight, SpotLight
from gltf_world.core.world import DirectionalLight, Light, PointLight, SpotLight
from gltf_world.io.document import GltfDocument, field
from gltf_world.io.document import GltfDocument, field

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_INNER_CONE_ANGLE: float = 0.0
DEFAULT_OUTER_CONE_ANGLE: float = math.pi / 4.0

def map_light_kind(gltf_light: typing.Any, light_index: int) -> DirectionalLight | PointLight | SpotLight:
    light_type: str | None = field(gltf_light, "type")
#   light_type: str | None = field(gltf_light, "type")
    if light_type == "directional":
#   if light_type == "directional":
        return DirectionalLight()
#       return DirectionalLight()
    if light_type == "point":
#   if light_type == "point":
        return PointLight()
#       return PointLight()
    if light_type == "spot":
#   if light_type == "spot":
        spot: typing.Any = field(gltf_light, "spot", {})
#       spot: typing.Any = field(gltf_light, "spot", {})
        return SpotLight(
#       return SpotLight(
            inner_cone_angle=float(field(spot, "innerConeAngle", DEFAULT_INNER_CONE_ANGLE)),
#           inner_cone_angle=float(field(spot, "innerConeAngle", DEFAULT_INNER_CONE_ANGLE)),
            outer_cone_angle=float(field(spot, "outerConeAngle", DEFAULT_OUTER_CONE_ANGLE)),
#           outer_cone_angle=float(field(spot, "outerConeAngle", DEFAULT_OUTER_CONE_ANGLE)),
        )
#       )
    raise IOOrDecodeError(f"Light {light_index} has unknown type {light_type!r}")
#   raise IOOrDecodeError(f"Light {light_index} has unknown type {light_type!r}")

def map_light(gltf_light: typing.Any, light_index: int) -> Light:
    color: list[float] = list(field(gltf_light, "color", [1.0, 1.0, 1.0]))
#   color: list[float] = list(field(gltf_light, "color", [1.0, 1.0, 1.0]))
    if len(color) != 3:
#   if len(color) != 3:
        raise IOOrDecodeError(f"Light {light_index} color has {len(color)} components, expected 3")
#       raise IOOrDecodeError(f"Light {light_index} color has {len(color)} components, expected 3")
    return Light(
#   return Light(
        color=typing.cast(vec3f32, tuple(float(c) for c in color)),
#       color=typing.cast(vec3f32, tuple(float(c) for c in color)),
        intensity=float(field(gltf_light, "intensity", 1.0)),
#       intensity=float(field(gltf_light, "intensity", 1.0)),
        # 0.0 stands for an infinite range
#       # 0.0 stands for an infinite range
        range=float(field(gltf_light, "range", 0.0)),
#       range=float(field(gltf_light, "range", 0.0)),
        kind=map_light_kind(gltf_light, light_index),
#       kind=map_light_kind(gltf_light, light_index),
        name=field(gltf_light, "name"),
#       name=field(gltf_light, "name"),
    )
#   )

def extract_lights(document: GltfDocument) -> list[Light]:
    # Documents without the punctual lights extension simply have no lights
#   # Documents without the punctual lights extension simply have no lights
    lights: list[Light] = [map_light(gltf_light, light_index) for light_index, gltf_light in enumerate(document.lights)]
#   lights: list[Light] = [map_light(gltf_light, light_index) for light_index, gltf_light in enumerate(document.lights)]
    logger.debug("Extracted %d lights", len(lights))
#   logger.debug("Extracted %d lights", len(lights))
    return lights
#   return lights
