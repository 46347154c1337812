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
from gltf_world.core.transform import Transform, quaternion_from_rotation_matrix
from gltf_world.core.transform import Transform, quaternion_from_rotation_matrix
from gltf_world.core.world import Scene, SceneGraph
from gltf_world.core.world import Scene, SceneGraph
from gltf_world.io.document import GltfDocument
from gltf_world.io.document import GltfDocument
from gltf_world.scene.camera import Camera
from gltf_world.scene.camera import Camera
from gltf_world.scene.graph import SceneGraphBuilder, transform_from_node
from gltf_world.scene.graph import SceneGraphBuilder, transform_from_node

def builder_for(asset: GltfAssetBuilder) -> SceneGraphBuilder:
    return SceneGraphBuilder(GltfDocument.load(asset.write()))
#   return SceneGraphBuilder(GltfDocument.load(asset.write()))

def names(builder: SceneGraphBuilder, scene: Scene) -> list[str]:
    return [builder.metadata[builder.nodes[scene.graph[i]].metadata_index]["name"] for i in scene.graph.walk(0)]
#   return [builder.metadata[builder.nodes[scene.graph[i]].metadata_index]["name"] for i in scene.graph.walk(0)]

def test_hierarchy_is_flattened_in_document_order(asset: GltfAssetBuilder) -> None:
    asset.add("nodes", {"name": "body", "children": [1, 2]})
#   asset.add("nodes", {"name": "body", "children": [1, 2]})
    asset.add("nodes", {"name": "arm"})
#   asset.add("nodes", {"name": "arm"})
    asset.add("nodes", {"name": "leg", "children": [3]})
#   asset.add("nodes", {"name": "leg", "children": [3]})
    asset.add("nodes", {})
#   asset.add("nodes", {})
    asset.add("scenes", {"nodes": [0]})
#   asset.add("scenes", {"nodes": [0]})
    builder: SceneGraphBuilder = builder_for(asset)
#   builder: SceneGraphBuilder = builder_for(asset)
    scene: Scene = builder.build_scenes()[0]
#   scene: Scene = builder.build_scenes()[0]

    assert names(builder, scene) == ["Scene Root", "body", "arm", "leg", "Node"]
#   assert names(builder, scene) == ["Scene Root", "body", "arm", "leg", "Node"]
    assert scene.graph.roots() == [0]
#   assert scene.graph.roots() == [0]
    assert scene.graph.children_of(0) == [1]
#   assert scene.graph.children_of(0) == [1]
    assert scene.graph.children_of(1) == [2, 3]
#   assert scene.graph.children_of(1) == [2, 3]
    assert scene.graph.parent_of(4) == 3
#   assert scene.graph.parent_of(4) == 3
    # One parent per non-root node, no self edges
#   # One parent per non-root node, no self edges
    for parent, child in scene.graph.edges():
#   for parent, child in scene.graph.edges():
        assert parent != child
#       assert parent != child
    assert sum(1 for parent in scene.graph.parents if parent is None) == 1
#   assert sum(1 for parent in scene.graph.parents if parent is None) == 1

def test_root_node_has_identity_transform_and_no_payload(asset: GltfAssetBuilder) -> None:
    asset.add("scenes", {"nodes": []})
#   asset.add("scenes", {"nodes": []})
    builder: SceneGraphBuilder = builder_for(asset)
#   builder: SceneGraphBuilder = builder_for(asset)
    scene: Scene = builder.build_scenes()[0]
#   scene: Scene = builder.build_scenes()[0]
    root = builder.nodes[scene.graph[0]]
#   root = builder.nodes[scene.graph[0]]
    assert root.mesh_index is None and root.camera_index is None and root.light_index is None
#   assert root.mesh_index is None and root.camera_index is None and root.light_index is None
    transform: Transform = builder.transforms[root.transform_index]
#   transform: Transform = builder.transforms[root.transform_index]
    np.testing.assert_allclose(transform.translation, [0.0, 0.0, 0.0])
#   np.testing.assert_allclose(transform.translation, [0.0, 0.0, 0.0])
    np.testing.assert_allclose(transform.rotation, [0.0, 0.0, 0.0, 1.0])
#   np.testing.assert_allclose(transform.rotation, [0.0, 0.0, 0.0, 1.0])
    np.testing.assert_allclose(transform.scale, [1.0, 1.0, 1.0])
#   np.testing.assert_allclose(transform.scale, [1.0, 1.0, 1.0])

def test_zero_scenes_yield_one_default_scene(asset: GltfAssetBuilder) -> None:
    asset.add("nodes", {"name": "orphan"})
#   asset.add("nodes", {"name": "orphan"})
    builder: SceneGraphBuilder = builder_for(asset)
#   builder: SceneGraphBuilder = builder_for(asset)
    scenes: list[Scene] = builder.build_scenes()
#   scenes: list[Scene] = builder.build_scenes()
    assert len(scenes) == 1
#   assert len(scenes) == 1
    assert len(scenes[0].graph) == 1
#   assert len(scenes[0].graph) == 1
    assert names(builder, scenes[0]) == ["Scene Root"]
#   assert names(builder, scenes[0]) == ["Scene Root"]

def test_camera_indices_are_shifted(asset: GltfAssetBuilder) -> None:
    asset.add("cameras", {"type": "perspective", "perspective": {"yfov": 1.0, "znear": 0.1}})
#   asset.add("cameras", {"type": "perspective", "perspective": {"yfov": 1.0, "znear": 0.1}})
    asset.add("cameras", {"type": "perspective", "perspective": {"yfov": 1.0, "znear": 0.1}})
#   asset.add("cameras", {"type": "perspective", "perspective": {"yfov": 1.0, "znear": 0.1}})
    asset.add("nodes", {"camera": 1})
#   asset.add("nodes", {"camera": 1})
    asset.add("scenes", {"nodes": [0]})
#   asset.add("scenes", {"nodes": [0]})
    builder: SceneGraphBuilder = builder_for(asset)
#   builder: SceneGraphBuilder = builder_for(asset)
    scene: Scene = builder.build_scenes()[0]
#   scene: Scene = builder.build_scenes()[0]
    assert builder.nodes[scene.graph[1]].camera_index == 2
#   assert builder.nodes[scene.graph[1]].camera_index == 2

def test_node_references_are_copied(asset: GltfAssetBuilder) -> None:
    asset.add_triangle_mesh()
#   asset.add_triangle_mesh()
    asset.add("skins", {"joints": [1]})
#   asset.add("skins", {"joints": [1]})
    asset.document["extensions"] = {"KHR_lights_punctual": {"lights": [{"type": "point"}]}}
#   asset.document["extensions"] = {"KHR_lights_punctual": {"lights": [{"type": "point"}]}}
    asset.add("nodes", {"mesh": 0, "skin": 0, "children": [1]})
#   asset.add("nodes", {"mesh": 0, "skin": 0, "children": [1]})
    asset.add("nodes", {"extensions": {"KHR_lights_punctual": {"light": 0}}})
#   asset.add("nodes", {"extensions": {"KHR_lights_punctual": {"light": 0}}})
    asset.add("scenes", {"nodes": [0]})
#   asset.add("scenes", {"nodes": [0]})
    builder: SceneGraphBuilder = builder_for(asset)
#   builder: SceneGraphBuilder = builder_for(asset)
    scene: Scene = builder.build_scenes()[0]
#   scene: Scene = builder.build_scenes()[0]
    mesh_node = builder.nodes[scene.graph[1]]
#   mesh_node = builder.nodes[scene.graph[1]]
    light_node = builder.nodes[scene.graph[2]]
#   light_node = builder.nodes[scene.graph[2]]
    assert mesh_node.mesh_index == 0
#   assert mesh_node.mesh_index == 0
    assert mesh_node.skin_index == 0
#   assert mesh_node.skin_index == 0
    assert light_node.light_index == 0
#   assert light_node.light_index == 0
    assert light_node.mesh_index is None
#   assert light_node.mesh_index is None

def test_cycle_is_decode_error(asset: GltfAssetBuilder) -> None:
    asset.add("nodes", {"children": [1]})
#   asset.add("nodes", {"children": [1]})
    asset.add("nodes", {"children": [0]})
#   asset.add("nodes", {"children": [0]})
    asset.add("scenes", {"nodes": [0]})
#   asset.add("scenes", {"nodes": [0]})
    with pytest.raises(IOOrDecodeError):
#   with pytest.raises(IOOrDecodeError):
        builder_for(asset).build_scenes()
#       builder_for(asset).build_scenes()

def test_self_child_is_decode_error(asset: GltfAssetBuilder) -> None:
    asset.add("nodes", {"children": [0]})
#   asset.add("nodes", {"children": [0]})
    asset.add("scenes", {"nodes": [0]})
#   asset.add("scenes", {"nodes": [0]})
    with pytest.raises(IOOrDecodeError):
#   with pytest.raises(IOOrDecodeError):
        builder_for(asset).build_scenes()
#       builder_for(asset).build_scenes()

def test_dangling_child_is_decode_error(asset: GltfAssetBuilder) -> None:
    asset.add("nodes", {"children": [5]})
#   asset.add("nodes", {"children": [5]})
    asset.add("scenes", {"nodes": [0]})
#   asset.add("scenes", {"nodes": [0]})
    with pytest.raises(IOOrDecodeError):
#   with pytest.raises(IOOrDecodeError):
        builder_for(asset).build_scenes()
#       builder_for(asset).build_scenes()

def test_default_camera_attaches_under_root(asset: GltfAssetBuilder) -> None:
    asset.add("nodes", {"name": "a"})
#   asset.add("nodes", {"name": "a"})
    asset.add("scenes", {"nodes": [0]})
#   asset.add("scenes", {"nodes": [0]})
    builder: SceneGraphBuilder = builder_for(asset)
#   builder: SceneGraphBuilder = builder_for(asset)
    scene: Scene = builder.build_scenes()[0]
#   scene: Scene = builder.build_scenes()[0]
    node_index: int = builder.attach_default_camera(scene, Camera())
#   node_index: int = builder.attach_default_camera(scene, Camera())
    graph_index = scene.default_camera_graph_node_index
#   graph_index = scene.default_camera_graph_node_index
    assert graph_index is not None
#   assert graph_index is not None
    assert scene.graph[graph_index] == node_index
#   assert scene.graph[graph_index] == node_index
    assert scene.graph.parent_of(graph_index) == 0
#   assert scene.graph.parent_of(graph_index) == 0
    assert builder.nodes[node_index].camera_index == 0
#   assert builder.nodes[node_index].camera_index == 0
    assert builder.metadata[builder.nodes[node_index].metadata_index]["name"] == "Main Camera"
#   assert builder.metadata[builder.nodes[node_index].metadata_index]["name"] == "Main Camera"
    transform: Transform = builder.transforms[builder.nodes[node_index].transform_index]
#   transform: Transform = builder.transforms[builder.nodes[node_index].transform_index]
    np.testing.assert_allclose(transform.translation, [0.0, 0.0, 5.0], atol=1e-6)
#   np.testing.assert_allclose(transform.translation, [0.0, 0.0, 5.0], atol=1e-6)
    np.testing.assert_allclose(transform.rotation, [0.0, 0.0, 0.0, 1.0], atol=1e-6)
#   np.testing.assert_allclose(transform.rotation, [0.0, 0.0, 0.0, 1.0], atol=1e-6)

def test_trs_transform_is_read() -> None:
    class TrsNode:
#   class TrsNode:
        matrix = None
#       matrix = None
        translation = [1.0, 2.0, 3.0]
#       translation = [1.0, 2.0, 3.0]
        rotation = [0.0, 0.0, math.sin(math.pi / 4), math.cos(math.pi / 4)]
#       rotation = [0.0, 0.0, math.sin(math.pi / 4), math.cos(math.pi / 4)]
        scale = [2.0, 2.0, 2.0]
#       scale = [2.0, 2.0, 2.0]
    transform: Transform = transform_from_node(TrsNode())
#   transform: Transform = transform_from_node(TrsNode())
    np.testing.assert_allclose(transform.translation, [1.0, 2.0, 3.0])
#   np.testing.assert_allclose(transform.translation, [1.0, 2.0, 3.0])
    np.testing.assert_allclose(transform.rotation, TrsNode.rotation)
#   np.testing.assert_allclose(transform.rotation, TrsNode.rotation)
    np.testing.assert_allclose(transform.scale, [2.0, 2.0, 2.0])
#   np.testing.assert_allclose(transform.scale, [2.0, 2.0, 2.0])

def test_matrix_transform_is_decomposed() -> None:
    # Column-major: 90 degrees about Z, scale 2 on every axis, translation (4, 5, 6)
#   # Column-major: 90 degrees about Z, scale 2 on every axis, translation (4, 5, 6)
    class MatrixNode:
#   class MatrixNode:
        matrix = [0.0, 2.0, 0.0, 0.0, -2.0, 0.0, 0.0, 0.0, 0.0, 0.0, 2.0, 0.0, 4.0, 5.0, 6.0, 1.0]
#       matrix = [0.0, 2.0, 0.0, 0.0, -2.0, 0.0, 0.0, 0.0, 0.0, 0.0, 2.0, 0.0, 4.0, 5.0, 6.0, 1.0]
        translation = None
#       translation = None
        rotation = None
#       rotation = None
        scale = None
#       scale = None
    transform: Transform = transform_from_node(MatrixNode())
#   transform: Transform = transform_from_node(MatrixNode())
    np.testing.assert_allclose(transform.translation, [4.0, 5.0, 6.0], atol=1e-6)
#   np.testing.assert_allclose(transform.translation, [4.0, 5.0, 6.0], atol=1e-6)
    np.testing.assert_allclose(transform.scale, [2.0, 2.0, 2.0], atol=1e-6)
#   np.testing.assert_allclose(transform.scale, [2.0, 2.0, 2.0], atol=1e-6)
    np.testing.assert_allclose(transform.rotation, [0.0, 0.0, math.sin(math.pi / 4), math.cos(math.pi / 4)], atol=1e-6)
#   np.testing.assert_allclose(transform.rotation, [0.0, 0.0, math.sin(math.pi / 4), math.cos(math.pi / 4)], atol=1e-6)

def test_rotation_matrix_to_quaternion() -> None:
    # Quarter turn about +X, column-vector convention
#   # Quarter turn about +X, column-vector convention
    quarter_x = np.array([[1.0, 0.0, 0.0], [0.0, 0.0, -1.0], [0.0, 1.0, 0.0]])
#   quarter_x = np.array([[1.0, 0.0, 0.0], [0.0, 0.0, -1.0], [0.0, 1.0, 0.0]])
    np.testing.assert_allclose(quaternion_from_rotation_matrix(quarter_x), [math.sin(math.pi / 4), 0.0, 0.0, math.cos(math.pi / 4)], atol=1e-6)
#   np.testing.assert_allclose(quaternion_from_rotation_matrix(quarter_x), [math.sin(math.pi / 4), 0.0, 0.0, math.cos(math.pi / 4)], atol=1e-6)
    # A third of a turn about (1, 1, 1) cycles the axes X -> Y -> Z
#   # A third of a turn about (1, 1, 1) cycles the axes X -> Y -> Z
    cycle = np.array([[0.0, 0.0, 1.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
#   cycle = np.array([[0.0, 0.0, 1.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    np.testing.assert_allclose(quaternion_from_rotation_matrix(cycle), [0.5, 0.5, 0.5, 0.5], atol=1e-6)
#   np.testing.assert_allclose(quaternion_from_rotation_matrix(cycle), [0.5, 0.5, 0.5, 0.5], atol=1e-6)

def test_scene_graph_rejects_second_parent() -> None:
    graph: SceneGraph = SceneGraph()
#   graph: SceneGraph = SceneGraph()
    a: int = graph.add_node(0)
#   a: int = graph.add_node(0)
    b: int = graph.add_node(1)
#   b: int = graph.add_node(1)
    c: int = graph.add_node(2)
#   c: int = graph.add_node(2)
    graph.add_edge(a, c)
#   graph.add_edge(a, c)
    with pytest.raises(ValueError):
#   with pytest.raises(ValueError):
        graph.add_edge(b, c)
#       graph.add_edge(b, c)
    with pytest.raises(ValueError):
#   with pytest.raises(ValueError):
        graph.add_edge(a, a)
#       graph.add_edge(a, a)
