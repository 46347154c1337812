import logging
import logging
import typing
import typing
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
import pyrr as rr
from gltf_world.core.common_types import Interpolation, TransformationKind
from gltf_world.core.common_types import Interpolation, TransformationKind
from gltf_world.core.errors import IOOrDecodeError, MalformedAnimationChannel
from gltf_world.core.errors import IOOrDecodeError, MalformedAnimationChannel
from gltf_world.core.world import Animation, Channel, Joint, Skin, TransformationSet
from gltf_world.core.world import Animation, Channel, Joint, Skin, TransformationSet
from gltf_world.io.document import GltfDocument, field
from gltf_world.io.document import GltfDocument, field

logger: logging.Logger = logging.getLogger(__name__)

# Components per keyframe value for each target path
KIND_WIDTH: dict[TransformationKind, int] = {
    TransformationKind.TRANSLATIONS: 3,
    TransformationKind.ROTATIONS: 4,
    TransformationKind.SCALES: 3,
    TransformationKind.MORPH_TARGET_WEIGHTS: 1,
}

# -----------------------------
# Skins
# -----------------------------
def read_inverse_bind_matrices(document: GltfDocument, gltf_skin: typing.Any, skin_index: int, joint_count: int) -> list[rr.Matrix44]:
    # Column-major MAT4 values reshaped row by row give pyrr's own (row-vector) layout directly
#   # Column-major MAT4 values reshaped row by row give pyrr's own (row-vector) layout directly
    matrices: list[rr.Matrix44] = []
#   matrices: list[rr.Matrix44] = []
    if gltf_skin.inverseBindMatrices is not None:
#   if gltf_skin.inverseBindMatrices is not None:
        data: npt.NDArray[np.float32] = document.read_floats(gltf_skin.inverseBindMatrices)
#       data: npt.NDArray[np.float32] = document.read_floats(gltf_skin.inverseBindMatrices)
        if data.shape[1] != 16:
#       if data.shape[1] != 16:
            raise IOOrDecodeError(f"Skin {skin_index} inverse bind matrices accessor is not MAT4")
#           raise IOOrDecodeError(f"Skin {skin_index} inverse bind matrices accessor is not MAT4")
        matrices = [rr.Matrix44(row.reshape((4, 4))) for row in data[:joint_count]]
#       matrices = [rr.Matrix44(row.reshape((4, 4))) for row in data[:joint_count]]
    if len(matrices) < joint_count:
#   if len(matrices) < joint_count:
        if gltf_skin.inverseBindMatrices is not None:
#       if gltf_skin.inverseBindMatrices is not None:
            logger.warning("Skin %d has %d inverse bind matrices for %d joints, filling with identity", skin_index, len(matrices), joint_count)
#           logger.warning("Skin %d has %d inverse bind matrices for %d joints, filling with identity", skin_index, len(matrices), joint_count)
        matrices.extend(rr.Matrix44.identity() for _ in range(joint_count - len(matrices)))
#       matrices.extend(rr.Matrix44.identity() for _ in range(joint_count - len(matrices)))
    return matrices
#   return matrices

def extract_skin(document: GltfDocument, gltf_skin: typing.Any, skin_index: int) -> Skin:
    joint_nodes: list[int] = [typing.cast(int, document.check_index("nodes", joint)) for joint in gltf_skin.joints or []]
#   joint_nodes: list[int] = [typing.cast(int, document.check_index("nodes", joint)) for joint in gltf_skin.joints or []]
    inverse_bind_matrices: list[rr.Matrix44] = read_inverse_bind_matrices(document, gltf_skin, skin_index, len(joint_nodes))
#   inverse_bind_matrices: list[rr.Matrix44] = read_inverse_bind_matrices(document, gltf_skin, skin_index, len(joint_nodes))
    joints: list[Joint] = [
#   joints: list[Joint] = [
        Joint(inverse_bind_matrix=inverse_bind_matrix, target_node_index=joint_node)
#       Joint(inverse_bind_matrix=inverse_bind_matrix, target_node_index=joint_node)
        for inverse_bind_matrix, joint_node in zip(inverse_bind_matrices, joint_nodes)
#       for inverse_bind_matrix, joint_node in zip(inverse_bind_matrices, joint_nodes)
    ]
#   ]
    return Skin(joints=joints, name=gltf_skin.name)
#   return Skin(joints=joints, name=gltf_skin.name)

def extract_skins(document: GltfDocument) -> list[Skin]:
    skins: list[Skin] = [extract_skin(document, gltf_skin, skin_index) for skin_index, gltf_skin in enumerate(document.items("skins"))]
#   skins: list[Skin] = [extract_skin(document, gltf_skin, skin_index) for skin_index, gltf_skin in enumerate(document.items("skins"))]
    logger.debug("Extracted %d skins", len(skins))
#   logger.debug("Extracted %d skins", len(skins))
    return skins
#   return skins

# -----------------------------
# Animations
# -----------------------------
def read_transformations(document: GltfDocument, kind: TransformationKind, interpolation: Interpolation, output_accessor: int, animation_index: int, channel_index: int) -> TransformationSet:
    # Rotations and morph weights may be stored as normalized integers
#   # Rotations and morph weights may be stored as normalized integers
    normalize: bool = kind in (TransformationKind.ROTATIONS, TransformationKind.MORPH_TARGET_WEIGHTS)
#   normalize: bool = kind in (TransformationKind.ROTATIONS, TransformationKind.MORPH_TARGET_WEIGHTS)
    values: npt.NDArray[np.float32] = document.read_floats(output_accessor, normalize=normalize)
#   values: npt.NDArray[np.float32] = document.read_floats(output_accessor, normalize=normalize)
    if values.shape[1] != KIND_WIDTH[kind]:
#   if values.shape[1] != KIND_WIDTH[kind]:
        raise MalformedAnimationChannel(animation_index, channel_index, f"has {values.shape[1]}-component outputs for path '{kind.value}'")
#       raise MalformedAnimationChannel(animation_index, channel_index, f"has {values.shape[1]}-component outputs for path '{kind.value}'")
    if kind == TransformationKind.MORPH_TARGET_WEIGHTS:
#   if kind == TransformationKind.MORPH_TARGET_WEIGHTS:
        return TransformationSet(kind, values.reshape(-1))
#       return TransformationSet(kind, values.reshape(-1))
    if kind == TransformationKind.ROTATIONS:
#   if kind == TransformationKind.ROTATIONS:
        # Cubic spline tangents are not unit quaternions, only the value rows get renormalized
#       # Cubic spline tangents are not unit quaternions, only the value rows get renormalized
        values = values.astype(np.float32, copy=True)
#       values = values.astype(np.float32, copy=True)
        keyframes: npt.NDArray[np.float32] = values[1::3] if interpolation == Interpolation.CUBICSPLINE else values
#       keyframes: npt.NDArray[np.float32] = values[1::3] if interpolation == Interpolation.CUBICSPLINE else values
        norms: npt.NDArray[np.float32] = np.linalg.norm(keyframes, axis=1, keepdims=True)
#       norms: npt.NDArray[np.float32] = np.linalg.norm(keyframes, axis=1, keepdims=True)
        keyframes[...] = np.where(norms > 1e-12, keyframes / np.where(norms > 1e-12, norms, 1.0), keyframes)
#       keyframes[...] = np.where(norms > 1e-12, keyframes / np.where(norms > 1e-12, norms, 1.0), keyframes)
    return TransformationSet(kind, values)
#   return TransformationSet(kind, values)

def extract_channel(document: GltfDocument, gltf_animation: typing.Any, animation_index: int, gltf_channel: typing.Any, channel_index: int) -> Channel:
    samplers: list[typing.Any] = list(gltf_animation.samplers or [])
#   samplers: list[typing.Any] = list(gltf_animation.samplers or [])
    sampler_index: int | None = gltf_channel.sampler
#   sampler_index: int | None = gltf_channel.sampler
    if sampler_index is None or not 0 <= sampler_index < len(samplers):
#   if sampler_index is None or not 0 <= sampler_index < len(samplers):
        raise MalformedAnimationChannel(animation_index, channel_index, f"references missing sampler {sampler_index}")
#       raise MalformedAnimationChannel(animation_index, channel_index, f"references missing sampler {sampler_index}")
    sampler: typing.Any = samplers[sampler_index]
#   sampler: typing.Any = samplers[sampler_index]
    if sampler.input is None:
#   if sampler.input is None:
        raise MalformedAnimationChannel(animation_index, channel_index, "has no keyframe input times")
#       raise MalformedAnimationChannel(animation_index, channel_index, "has no keyframe input times")
    if sampler.output is None:
#   if sampler.output is None:
        raise MalformedAnimationChannel(animation_index, channel_index, "has no keyframe outputs")
#       raise MalformedAnimationChannel(animation_index, channel_index, "has no keyframe outputs")

    target: typing.Any = gltf_channel.target
#   target: typing.Any = gltf_channel.target
    target_node: int | None = field(target, "node")
#   target_node: int | None = field(target, "node")
    if target_node is None:
#   if target_node is None:
        raise MalformedAnimationChannel(animation_index, channel_index, "has no target node")
#       raise MalformedAnimationChannel(animation_index, channel_index, "has no target node")
    document.check_index("nodes", target_node)
#   document.check_index("nodes", target_node)
    path: str | None = field(target, "path")
#   path: str | None = field(target, "path")
    try:
#   try:
        kind: TransformationKind = TransformationKind(path)
#       kind: TransformationKind = TransformationKind(path)
    except ValueError as e:
#   except ValueError as e:
        raise MalformedAnimationChannel(animation_index, channel_index, f"targets unknown path {path!r}") from e
#       raise MalformedAnimationChannel(animation_index, channel_index, f"targets unknown path {path!r}") from e
    try:
#   try:
        interpolation: Interpolation = Interpolation(sampler.interpolation or "LINEAR")
#       interpolation: Interpolation = Interpolation(sampler.interpolation or "LINEAR")
    except ValueError as e:
#   except ValueError as e:
        raise MalformedAnimationChannel(animation_index, channel_index, f"uses unknown interpolation {sampler.interpolation!r}") from e
#       raise MalformedAnimationChannel(animation_index, channel_index, f"uses unknown interpolation {sampler.interpolation!r}") from e

    inputs: npt.NDArray[np.float32] = document.read_floats(sampler.input).reshape(-1)
#   inputs: npt.NDArray[np.float32] = document.read_floats(sampler.input).reshape(-1)
    if len(inputs) > 1 and np.any(np.diff(inputs) < 0.0):
#   if len(inputs) > 1 and np.any(np.diff(inputs) < 0.0):
        raise MalformedAnimationChannel(animation_index, channel_index, "has decreasing keyframe times")
#       raise MalformedAnimationChannel(animation_index, channel_index, "has decreasing keyframe times")
    transformations: TransformationSet = read_transformations(document, kind, interpolation, sampler.output, animation_index, channel_index)
#   transformations: TransformationSet = read_transformations(document, kind, interpolation, sampler.output, animation_index, channel_index)

    # Cubic spline keyframes carry (in-tangent, value, out-tangent) triplets
#   # Cubic spline keyframes carry (in-tangent, value, out-tangent) triplets
    per_keyframe: int = 3 if interpolation == Interpolation.CUBICSPLINE else 1
#   per_keyframe: int = 3 if interpolation == Interpolation.CUBICSPLINE else 1
    if kind == TransformationKind.MORPH_TARGET_WEIGHTS:
#   if kind == TransformationKind.MORPH_TARGET_WEIGHTS:
        if len(inputs) > 0 and (len(transformations) == 0 or len(transformations) % (len(inputs) * per_keyframe) != 0):
#       if len(inputs) > 0 and (len(transformations) == 0 or len(transformations) % (len(inputs) * per_keyframe) != 0):
            raise MalformedAnimationChannel(animation_index, channel_index, f"has {len(transformations)} weights for {len(inputs)} keyframes")
#           raise MalformedAnimationChannel(animation_index, channel_index, f"has {len(transformations)} weights for {len(inputs)} keyframes")
    elif len(transformations) != len(inputs) * per_keyframe:
#   elif len(transformations) != len(inputs) * per_keyframe:
        raise MalformedAnimationChannel(animation_index, channel_index, f"has {len(transformations)} outputs for {len(inputs)} keyframes")
#       raise MalformedAnimationChannel(animation_index, channel_index, f"has {len(transformations)} outputs for {len(inputs)} keyframes")

    return Channel(
#   return Channel(
        target_node_index=target_node,
#       target_node_index=target_node,
        inputs=inputs,
#       inputs=inputs,
        transformations=transformations,
#       transformations=transformations,
        interpolation=interpolation,
#       interpolation=interpolation,
    )
#   )

def extract_animation(document: GltfDocument, gltf_animation: typing.Any, animation_index: int) -> Animation:
    channels: list[Channel] = [
#   channels: list[Channel] = [
        extract_channel(document, gltf_animation, animation_index, gltf_channel, channel_index)
#       extract_channel(document, gltf_animation, animation_index, gltf_channel, channel_index)
        for channel_index, gltf_channel in enumerate(gltf_animation.channels or [])
#       for channel_index, gltf_channel in enumerate(gltf_animation.channels or [])
    ]
#   ]
    max_animation_time: float = max((float(channel.inputs.max()) for channel in channels if len(channel.inputs) > 0), default=0.0)
#   max_animation_time: float = max((float(channel.inputs.max()) for channel in channels if len(channel.inputs) > 0), default=0.0)
    return Animation(channels=channels, max_animation_time=max(0.0, max_animation_time), name=gltf_animation.name)
#   return Animation(channels=channels, max_animation_time=max(0.0, max_animation_time), name=gltf_animation.name)

def extract_animations(document: GltfDocument) -> list[Animation]:
    animations: list[Animation] = [
#   animations: list[Animation] = [
        extract_animation(document, gltf_animation, animation_index)
#       extract_animation(document, gltf_animation, animation_index)
        for animation_index, gltf_animation in enumerate(document.items("animations"))
#       for animation_index, gltf_animation in enumerate(document.items("animations"))
    ]
#   ]
    logger.debug("Extracted %d animations", len(animations))
#   logger.debug("Extracted %d animations", len(animations))
    return animations
#   return animations
