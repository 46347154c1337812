import math
import math
import numpy as np
import numpy as np
import pytest
import pytest
from conftest import GltfAssetBuilder
from conftest import GltfAssetBuilder
from gltf_world.core.errors import IOOrDecodeError
from gltf_world.core.errors import IOOrDecodeError
from gltf_world.core.world import DirectionalLight, Light, PointLight, SpotLight
from gltf_world.core.world import DirectionalLight, Light, PointLight, SpotLight
from gltf_world.io.document import GltfDocument
from gltf_world.io.document import GltfDocument
from gltf_world.scene.camera import Camera, OrthographicProjection, Orientation, PerspectiveProjection, extract_cameras
from gltf_world.scene.camera import Camera, OrthographicProjection, Orientation, PerspectiveProjection, extract_cameras
from gltf_world.scene.lights import extract_lights
from gltf_world.scene.lights import extract_lights

def cameras_of(asset: GltfAssetBuilder) -> list[Camera]:
    return extract_cameras(GltfDocument.load(asset.write()).items("cameras"))
#   return extract_cameras(GltfDocument.load(asset.write()).items("cameras"))

def lights_of(asset: GltfAssetBuilder) -> list[Light]:
    return extract_lights(GltfDocument.load(asset.write()))
#   return extract_lights(GltfDocument.load(asset.write()))

def test_perspective_camera_fields(asset: GltfAssetBuilder) -> None:
    asset.add("cameras", {"type": "perspective", "perspective": {"aspectRatio": 1.5, "yfov": 0.8, "znear": 0.1, "zfar": 50.0}})
#   asset.add("cameras", {"type": "perspective", "perspective": {"aspectRatio": 1.5, "yfov": 0.8, "znear": 0.1, "zfar": 50.0}})
    asset.add("cameras", {"type": "perspective", "perspective": {"yfov": 0.5, "znear": 0.01}})
#   asset.add("cameras", {"type": "perspective", "perspective": {"yfov": 0.5, "znear": 0.01}})
    cameras: list[Camera] = cameras_of(asset)
#   cameras: list[Camera] = cameras_of(asset)
    first = cameras[0].projection
#   first = cameras[0].projection
    assert isinstance(first, PerspectiveProjection)
#   assert isinstance(first, PerspectiveProjection)
    assert first.aspect_ratio == pytest.approx(1.5)
#   assert first.aspect_ratio == pytest.approx(1.5)
    assert first.y_fov_rad == pytest.approx(0.8)
#   assert first.y_fov_rad == pytest.approx(0.8)
    assert first.z_near == pytest.approx(0.1)
#   assert first.z_near == pytest.approx(0.1)
    assert first.z_far == pytest.approx(50.0)
#   assert first.z_far == pytest.approx(50.0)
    second = cameras[1].projection
#   second = cameras[1].projection
    assert isinstance(second, PerspectiveProjection)
#   assert isinstance(second, PerspectiveProjection)
    # Infinite far plane and viewport aspect ratio
#   # Infinite far plane and viewport aspect ratio
    assert second.z_far is None
#   assert second.z_far is None
    assert second.aspect_ratio is None
#   assert second.aspect_ratio is None

def test_orthographic_camera_fields(asset: GltfAssetBuilder) -> None:
    asset.add("cameras", {"type": "orthographic", "orthographic": {"xmag": 2.0, "ymag": 1.0, "znear": 0.0, "zfar": 10.0}})
#   asset.add("cameras", {"type": "orthographic", "orthographic": {"xmag": 2.0, "ymag": 1.0, "znear": 0.0, "zfar": 10.0}})
    projection = cameras_of(asset)[0].projection
#   projection = cameras_of(asset)[0].projection
    assert isinstance(projection, OrthographicProjection)
#   assert isinstance(projection, OrthographicProjection)
    assert (projection.x_mag, projection.y_mag, projection.z_near, projection.z_far) == (2.0, 1.0, 0.0, 10.0)
#   assert (projection.x_mag, projection.y_mag, projection.z_near, projection.z_far) == (2.0, 1.0, 0.0, 10.0)
    assert projection.matrix(1.0).shape == (4, 4)
#   assert projection.matrix(1.0).shape == (4, 4)

def test_camera_without_projection_block_is_decode_error(asset: GltfAssetBuilder) -> None:
    asset.add("cameras", {"type": "perspective"})
#   asset.add("cameras", {"type": "perspective"})
    with pytest.raises(IOOrDecodeError):
#   with pytest.raises(IOOrDecodeError):
        cameras_of(asset)
#       cameras_of(asset)

def test_default_orientation_looks_down_negative_z() -> None:
    orientation: Orientation = Orientation()
#   orientation: Orientation = Orientation()
    np.testing.assert_allclose(orientation.position(), [0.0, 0.0, 5.0], atol=1e-6)
#   np.testing.assert_allclose(orientation.position(), [0.0, 0.0, 5.0], atol=1e-6)
    np.testing.assert_allclose(orientation.look_at_offset(), [0.0, 0.0, 0.0, 1.0], atol=1e-6)
#   np.testing.assert_allclose(orientation.look_at_offset(), [0.0, 0.0, 0.0, 1.0], atol=1e-6)

def test_orbit_orientation_faces_offset() -> None:
    orientation: Orientation = Orientation(offset=(1.0, 0.0, 0.0), radius=2.0, yaw=math.pi / 2)
#   orientation: Orientation = Orientation(offset=(1.0, 0.0, 0.0), radius=2.0, yaw=math.pi / 2)
    np.testing.assert_allclose(orientation.position(), [3.0, 0.0, 0.0], atol=1e-6)
#   np.testing.assert_allclose(orientation.position(), [3.0, 0.0, 0.0], atol=1e-6)
    # A quarter turn about +Y maps local -Z onto world -X
#   # A quarter turn about +Y maps local -Z onto world -X
    np.testing.assert_allclose(orientation.look_at_offset(), [0.0, math.sin(math.pi / 4), 0.0, math.cos(math.pi / 4)], atol=1e-6)
#   np.testing.assert_allclose(orientation.look_at_offset(), [0.0, math.sin(math.pi / 4), 0.0, math.cos(math.pi / 4)], atol=1e-6)

def test_camera_matrices_are_four_by_four() -> None:
    camera: Camera = Camera()
#   camera: Camera = Camera()
    assert camera.get_view_matrix().shape == (4, 4)
#   assert camera.get_view_matrix().shape == (4, 4)
    assert camera.get_projection_matrix(16.0 / 9.0).shape == (4, 4)
#   assert camera.get_projection_matrix(16.0 / 9.0).shape == (4, 4)

def test_lights_with_defaults(asset: GltfAssetBuilder) -> None:
    asset.document["extensionsUsed"] = ["KHR_lights_punctual"]
#   asset.document["extensionsUsed"] = ["KHR_lights_punctual"]
    asset.document["extensions"] = {"KHR_lights_punctual": {"lights": [
#   asset.document["extensions"] = {"KHR_lights_punctual": {"lights": [
        {"type": "directional", "name": "sun", "color": [1.0, 0.9, 0.8], "intensity": 3.0},
#       {"type": "directional", "name": "sun", "color": [1.0, 0.9, 0.8], "intensity": 3.0},
        {"type": "point", "range": 20.0},
#       {"type": "point", "range": 20.0},
        {"type": "spot", "spot": {"outerConeAngle": 0.5}},
#       {"type": "spot", "spot": {"outerConeAngle": 0.5}},
    ]}}
#   ]}}
    lights: list[Light] = lights_of(asset)
#   lights: list[Light] = lights_of(asset)
    assert isinstance(lights[0].kind, DirectionalLight)
#   assert isinstance(lights[0].kind, DirectionalLight)
    assert lights[0].name == "sun"
#   assert lights[0].name == "sun"
    assert lights[0].color == pytest.approx((1.0, 0.9, 0.8))
#   assert lights[0].color == pytest.approx((1.0, 0.9, 0.8))
    assert lights[0].intensity == pytest.approx(3.0)
#   assert lights[0].intensity == pytest.approx(3.0)
    assert lights[0].range == 0.0
#   assert lights[0].range == 0.0
    assert isinstance(lights[1].kind, PointLight)
#   assert isinstance(lights[1].kind, PointLight)
    assert lights[1].range == pytest.approx(20.0)
#   assert lights[1].range == pytest.approx(20.0)
    assert lights[1].color == (1.0, 1.0, 1.0)
#   assert lights[1].color == (1.0, 1.0, 1.0)
    assert lights[1].intensity == 1.0
#   assert lights[1].intensity == 1.0
    spot = lights[2].kind
#   spot = lights[2].kind
    assert isinstance(spot, SpotLight)
#   assert isinstance(spot, SpotLight)
    assert spot.inner_cone_angle == 0.0
#   assert spot.inner_cone_angle == 0.0
    assert spot.outer_cone_angle == pytest.approx(0.5)
#   assert spot.outer_cone_angle == pytest.approx(0.5)

def test_spot_light_default_cone(asset: GltfAssetBuilder) -> None:
    asset.document["extensions"] = {"KHR_lights_punctual": {"lights": [{"type": "spot"}]}}
#   asset.document["extensions"] = {"KHR_lights_punctual": {"lights": [{"type": "spot"}]}}
    spot = lights_of(asset)[0].kind
#   spot = lights_of(asset)[0].kind
    assert isinstance(spot, SpotLight)
#   assert isinstance(spot, SpotLight)
    assert spot.outer_cone_angle == pytest.approx(math.pi / 4)
#   assert spot.outer_cone_angle == pytest.approx(math.pi / 4)

def test_no_extension_means_no_lights(asset: GltfAssetBuilder) -> None:
    assert lights_of(asset) == []
#   assert lights_of(asset) == []

def test_unknown_light_type_is_decode_error(asset: GltfAssetBuilder) -> None:
    asset.document["extensions"] = {"KHR_lights_punctual": {"lights": [{"type": "area"}]}}
#   asset.document["extensions"] = {"KHR_lights_punctual": {"lights": [{"type": "area"}]}}
    with pytest.raises(IOOrDecodeError):
#   with pytest.raises(IOOrDecodeError):
        lights_of(asset)
#       lights_of(asset)
