import logging
import logging
import math
import math
import numpy as np
import numpy as np
import pyrr as rr # type: ignore[import-untyped]
import pyrr as rr
import typing
import typing
from gltf_world.core.common_types import vec3f32
from gltf_world.core.common_types import vec3f32
from gltf_world.core.errors import IOOrDecodeError
from gltf_world.core.errors import IOOrDecodeError

logger: logging.Logger = logging.getLogger(__name__)

# Used when a perspective camera has an infinite far plane and a finite matrix is still requested
FAR_PLANE_FALLBACK: float = 1000.0

class PerspectiveProjection:
    def __init__(self, y_fov_rad: float, z_near: float, z_far: float | None = None, aspect_ratio: float | None = None) -> None:
#   def __init__(self, y_fov_rad: float, z_near: float, z_far: float | None = None, aspect_ratio: float | None = None) -> None:
        # z_far None means an infinite far plane, aspect_ratio None means "use the viewport's".
#       # z_far None means an infinite far plane, aspect_ratio None means "use the viewport's".
        self.y_fov_rad: float = y_fov_rad
#       self.y_fov_rad: float = y_fov_rad
        self.z_near: float = z_near
#       self.z_near: float = z_near
        self.z_far: float | None = z_far
#       self.z_far: float | None = z_far
        self.aspect_ratio: float | None = aspect_ratio
#       self.aspect_ratio: float | None = aspect_ratio
        pass
#       pass

    def matrix(self, viewport_aspect_ratio: float) -> rr.Matrix44:
#   def matrix(self, viewport_aspect_ratio: float) -> rr.Matrix44:
        aspect: float = self.aspect_ratio if self.aspect_ratio is not None else viewport_aspect_ratio
#       aspect: float = self.aspect_ratio if self.aspect_ratio is not None else viewport_aspect_ratio
        return rr.Matrix44.perspective_projection(
#       return rr.Matrix44.perspective_projection(
            fovy=math.degrees(self.y_fov_rad),
#           fovy=math.degrees(self.y_fov_rad),
            aspect=aspect,
#           aspect=aspect,
            near=self.z_near,
#           near=self.z_near,
            far=self.z_far if self.z_far is not None else FAR_PLANE_FALLBACK,
#           far=self.z_far if self.z_far is not None else FAR_PLANE_FALLBACK,
        )
#       )

class OrthographicProjection:
    def __init__(self, x_mag: float, y_mag: float, z_near: float, z_far: float) -> None:
#   def __init__(self, x_mag: float, y_mag: float, z_near: float, z_far: float) -> None:
        self.x_mag: float = x_mag
#       self.x_mag: float = x_mag
        self.y_mag: float = y_mag
#       self.y_mag: float = y_mag
        self.z_near: float = z_near
#       self.z_near: float = z_near
        self.z_far: float = z_far
#       self.z_far: float = z_far
        pass
#       pass

    def matrix(self, viewport_aspect_ratio: float) -> rr.Matrix44:
#   def matrix(self, viewport_aspect_ratio: float) -> rr.Matrix44:
        return rr.Matrix44.orthogonal_projection(
#       return rr.Matrix44.orthogonal_projection(
            left=-self.x_mag,
#           left=-self.x_mag,
            right=self.x_mag,
#           right=self.x_mag,
            bottom=-self.y_mag,
#           bottom=-self.y_mag,
            top=self.y_mag,
#           top=self.y_mag,
            near=self.z_near,
#           near=self.z_near,
            far=self.z_far,
#           far=self.z_far,
        )
#       )

type Projection = PerspectiveProjection | OrthographicProjection
"""
type Projection = PerspectiveProjection | OrthographicProjection
"""

class Orientation:
    # Orbit-style orientation: the eye sits on a sphere of 'radius' around 'offset'.
#   # Orbit-style orientation: the eye sits on a sphere of 'radius' around 'offset'.
    # yaw is measured from +Z towards +X, pitch from the XZ plane towards +Y, both in radians.
#   # yaw is measured from +Z towards +X, pitch from the XZ plane towards +Y, both in radians.
    def __init__(self, offset: vec3f32 = (0.0, 0.0, 0.0), radius: float = 5.0, yaw: float = 0.0, pitch: float = 0.0, up: vec3f32 = (0.0, 1.0, 0.0), min_radius: float = 1.0, max_radius: float = 100.0) -> None:
#   def __init__(self, offset: vec3f32 = (0.0, 0.0, 0.0), radius: float = 5.0, yaw: float = 0.0, pitch: float = 0.0, up: vec3f32 = (0.0, 1.0, 0.0), min_radius: float = 1.0, max_radius: float = 100.0) -> None:
        self.offset: rr.Vector3 = rr.Vector3(offset)
#       self.offset: rr.Vector3 = rr.Vector3(offset)
        self.view_up: rr.Vector3 = rr.Vector3(up)
#       self.view_up: rr.Vector3 = rr.Vector3(up)
        self.min_radius: float = min_radius
#       self.min_radius: float = min_radius
        self.max_radius: float = max_radius
#       self.max_radius: float = max_radius
        self.radius: float = max(min_radius, min(max_radius, radius))
#       self.radius: float = max(min_radius, min(max_radius, radius))
        self.yaw: float = yaw
#       self.yaw: float = yaw
        # Keep away from the poles, where the view basis degenerates
#       # Keep away from the poles, where the view basis degenerates
        self.pitch: float = max(-np.pi/2 + 0.1, min(np.pi/2 - 0.1, pitch))
#       self.pitch: float = max(-np.pi/2 + 0.1, min(np.pi/2 - 0.1, pitch))
        pass
#       pass

    def direction(self) -> rr.Vector3:
#   def direction(self) -> rr.Vector3:
        return rr.Vector3([
#       return rr.Vector3([
            np.sin(self.yaw) * np.cos(self.pitch),
#           np.sin(self.yaw) * np.cos(self.pitch),
            np.sin(self.pitch),
#           np.sin(self.pitch),
            np.cos(self.yaw) * np.cos(self.pitch),
#           np.cos(self.yaw) * np.cos(self.pitch),
        ])
#       ])

    def position(self) -> rr.Vector3:
#   def position(self) -> rr.Vector3:
        return self.offset + self.direction() * self.radius
#       return self.offset + self.direction() * self.radius

    def look_at_offset(self) -> rr.Quaternion:
#   def look_at_offset(self) -> rr.Quaternion:
        # Rotation whose local -Z axis points from the eye towards the offset (glTF camera convention)
#       # Rotation whose local -Z axis points from the eye towards the offset (glTF camera convention)
        backward: rr.Vector3 = rr.vector.normalize(self.direction())
#       backward: rr.Vector3 = rr.vector.normalize(self.direction())
        right: rr.Vector3 = rr.vector3.cross(self.view_up, backward)
#       right: rr.Vector3 = rr.vector3.cross(self.view_up, backward)
        if rr.vector.length(right) < 1e-6:
#       if rr.vector.length(right) < 1e-6:
            right = rr.Vector3([1.0, 0.0, 0.0])
#           right = rr.Vector3([1.0, 0.0, 0.0])
        else:
#       else:
            right = rr.vector.normalize(right)
#           right = rr.vector.normalize(right)
        up: rr.Vector3 = rr.vector3.cross(backward, right)
#       up: rr.Vector3 = rr.vector3.cross(backward, right)
        # pyrr is row-major: the camera basis vectors are the rows of its rotation matrix
#       # pyrr is row-major: the camera basis vectors are the rows of its rotation matrix
        basis: rr.Matrix33 = rr.Matrix33([right, up, backward])
#       basis: rr.Matrix33 = rr.Matrix33([right, up, backward])
        return rr.Quaternion(rr.quaternion.normalize(rr.Quaternion.from_matrix(basis)))
#       return rr.Quaternion(rr.quaternion.normalize(rr.Quaternion.from_matrix(basis)))

    def view_matrix(self) -> rr.Matrix44:
#   def view_matrix(self) -> rr.Matrix44:
        return rr.Matrix44.look_at(
#       return rr.Matrix44.look_at(
            eye=self.position(),
#           eye=self.position(),
            target=self.offset,
#           target=self.offset,
            up=self.view_up,
#           up=self.view_up,
        )
#       )

class Camera:
    def __init__(self, projection: PerspectiveProjection | OrthographicProjection | None = None, orientation: Orientation | None = None) -> None:
#   def __init__(self, projection: PerspectiveProjection | OrthographicProjection | None = None, orientation: Orientation | None = None) -> None:
        self.projection: Projection = projection if projection is not None else PerspectiveProjection(
#       self.projection: Projection = projection if projection is not None else PerspectiveProjection(
            y_fov_rad=math.radians(45.0),
#           y_fov_rad=math.radians(45.0),
            z_near=0.01,
#           z_near=0.01,
            z_far=FAR_PLANE_FALLBACK,
#           z_far=FAR_PLANE_FALLBACK,
        )
#       )
        self.orientation: Orientation = orientation if orientation is not None else Orientation()
#       self.orientation: Orientation = orientation if orientation is not None else Orientation()
        pass
#       pass

    def get_view_matrix(self) -> rr.Matrix44:
#   def get_view_matrix(self) -> rr.Matrix44:
        return self.orientation.view_matrix()
#       return self.orientation.view_matrix()

    def get_projection_matrix(self, viewport_aspect_ratio: float) -> rr.Matrix44:
#   def get_projection_matrix(self, viewport_aspect_ratio: float) -> rr.Matrix44:
        return self.projection.matrix(viewport_aspect_ratio)
#       return self.projection.matrix(viewport_aspect_ratio)

def map_camera(gltf_camera: typing.Any, camera_index: int) -> Camera:
    # Document cameras keep the default orientation; their placement comes from the owning node's Transform.
#   # Document cameras keep the default orientation; their placement comes from the owning node's Transform.
    camera_type: str | None = gltf_camera.type
#   camera_type: str | None = gltf_camera.type
    if camera_type == "perspective":
#   if camera_type == "perspective":
        perspective: typing.Any = gltf_camera.perspective
#       perspective: typing.Any = gltf_camera.perspective
        if perspective is None or perspective.yfov is None or perspective.znear is None:
#       if perspective is None or perspective.yfov is None or perspective.znear is None:
            raise IOOrDecodeError(f"Camera {camera_index} is perspective but has no valid perspective block")
#           raise IOOrDecodeError(f"Camera {camera_index} is perspective but has no valid perspective block")
        return Camera(projection=PerspectiveProjection(
#       return Camera(projection=PerspectiveProjection(
            aspect_ratio=perspective.aspectRatio,
#           aspect_ratio=perspective.aspectRatio,
            y_fov_rad=perspective.yfov,
#           y_fov_rad=perspective.yfov,
            z_near=perspective.znear,
#           z_near=perspective.znear,
            z_far=perspective.zfar,
#           z_far=perspective.zfar,
        ))
#       ))
    if camera_type == "orthographic":
#   if camera_type == "orthographic":
        orthographic: typing.Any = gltf_camera.orthographic
#       orthographic: typing.Any = gltf_camera.orthographic
        if orthographic is None or None in (orthographic.xmag, orthographic.ymag, orthographic.znear, orthographic.zfar):
#       if orthographic is None or None in (orthographic.xmag, orthographic.ymag, orthographic.znear, orthographic.zfar):
            raise IOOrDecodeError(f"Camera {camera_index} is orthographic but has no valid orthographic block")
#           raise IOOrDecodeError(f"Camera {camera_index} is orthographic but has no valid orthographic block")
        return Camera(projection=OrthographicProjection(
#       return Camera(projection=OrthographicProjection(
            x_mag=orthographic.xmag,
#           x_mag=orthographic.xmag,
            y_mag=orthographic.ymag,
#           y_mag=orthographic.ymag,
            z_near=orthographic.znear,
#           z_near=orthographic.znear,
            z_far=orthographic.zfar,
#           z_far=orthographic.zfar,
        ))
#       ))
    raise IOOrDecodeError(f"Camera {camera_index} has unknown type {camera_type!r}")
#   raise IOOrDecodeError(f"Camera {camera_index} has unknown type {camera_type!r}")

def extract_cameras(gltf_cameras: list[typing.Any]) -> list[Camera]:
    cameras: list[Camera] = [map_camera(gltf_camera, camera_index) for camera_index, gltf_camera in enumerate(gltf_cameras)]
#   cameras: list[Camera] = [map_camera(gltf_camera, camera_index) for camera_index, gltf_camera in enumerate(gltf_cameras)]
    logger.debug("Extracted %d document cameras", len(cameras))
#   logger.debug("Extracted %d document cameras", len(cameras))
    return cameras
#   return cameras
