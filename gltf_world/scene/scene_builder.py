import logging
import logging
import pathlib as pl
import pathlib as pl
from gltf_world.core.world import Mesh, Scene, World
from gltf_world.core.world import Mesh, Scene, World
from gltf_world.io.document import GltfDocument
from gltf_world.io.document import GltfDocument
from gltf_world.scene.animation import extract_animations, extract_skins
from gltf_world.scene.animation import extract_animations, extract_skins
from gltf_world.scene.bounds import compute_aabbs
from gltf_world.scene.bounds import compute_aabbs
from gltf_world.scene.camera import Camera, Orientation, extract_cameras
from gltf_world.scene.camera import Camera, Orientation, extract_cameras
from gltf_world.scene.geometry import GeometryAssembler
from gltf_world.scene.geometry import GeometryAssembler
from gltf_world.scene.graph import SceneGraphBuilder
from gltf_world.scene.graph import SceneGraphBuilder
from gltf_world.scene.lights import extract_lights
from gltf_world.scene.lights import extract_lights
from gltf_world.scene.materials import MaterialTables, build_material_tables
from gltf_world.scene.materials import MaterialTables, build_material_tables

logger: logging.Logger = logging.getLogger(__name__)

class SceneBuilder:
    # The SceneBuilder is the central coordinator of one import.
#   # The SceneBuilder is the central coordinator of one import.
    # It runs the whole pipeline in a fixed order:
#   # It runs the whole pipeline in a fixed order:
    # 1. Geometry, materials, skins, animations, cameras and lights are extracted into flat tables.
#   # 1. Geometry, materials, skins, animations, cameras and lights are extracted into flat tables.
    # 2. The scene graphs are built, then the default camera is wired into the first scene.
#   # 2. The scene graphs are built, then the default camera is wired into the first scene.
    # 3. Bounding boxes are computed for every node that owns a mesh.
#   # 3. Bounding boxes are computed for every node that owns a mesh.
    # Any failure raises before a World exists, so callers get a complete World or an exception.
#   # Any failure raises before a World exists, so callers get a complete World or an exception.

    # Names given to synthesized entities
#   # Names given to synthesized entities
    scene_root_name: str = "Scene Root"
#   scene_root_name: str = "Scene Root"
    default_node_name: str = "Node"
#   default_node_name: str = "Node"
    default_camera_name: str = "Main Camera"
#   default_camera_name: str = "Main Camera"

    def __init__(self, document: GltfDocument, scene_root_name: str | None = None, default_node_name: str | None = None, default_camera_name: str | None = None) -> None:
#   def __init__(self, document: GltfDocument, scene_root_name: str | None = None, default_node_name: str | None = None, default_camera_name: str | None = None) -> None:
        self.document: GltfDocument = document
#       self.document: GltfDocument = document
        if scene_root_name is not None:
#       if scene_root_name is not None:
            self.scene_root_name = scene_root_name
#           self.scene_root_name = scene_root_name
        if default_node_name is not None:
#       if default_node_name is not None:
            self.default_node_name = default_node_name
#           self.default_node_name = default_node_name
        if default_camera_name is not None:
#       if default_camera_name is not None:
            self.default_camera_name = default_camera_name
#           self.default_camera_name = default_camera_name
        pass
#       pass

    def default_camera(self) -> Camera:
#   def default_camera(self) -> Camera:
        # Default projection, orbiting the origin from +Z
#       # Default projection, orbiting the origin from +Z
        return Camera(orientation=Orientation())
#       return Camera(orientation=Orientation())

    def build(self) -> World:
#   def build(self) -> World:
        geometry: GeometryAssembler = GeometryAssembler(self.document)
#       geometry: GeometryAssembler = GeometryAssembler(self.document)
        meshes: list[Mesh] = geometry.build_meshes()
#       meshes: list[Mesh] = geometry.build_meshes()
        tables: MaterialTables = build_material_tables(self.document)
#       tables: MaterialTables = build_material_tables(self.document)
        skins = extract_skins(self.document)
#       skins = extract_skins(self.document)
        animations = extract_animations(self.document)
#       animations = extract_animations(self.document)
        # Slot 0 is the synthesized camera, document cameras follow in order
#       # Slot 0 is the synthesized camera, document cameras follow in order
        default_camera: Camera = self.default_camera()
#       default_camera: Camera = self.default_camera()
        cameras: list[Camera] = [default_camera, *extract_cameras(self.document.items("cameras"))]
#       cameras: list[Camera] = [default_camera, *extract_cameras(self.document.items("cameras"))]
        lights = extract_lights(self.document)
#       lights = extract_lights(self.document)

        graph_builder: SceneGraphBuilder = SceneGraphBuilder(
#       graph_builder: SceneGraphBuilder = SceneGraphBuilder(
            self.document,
#           self.document,
            scene_root_name=self.scene_root_name,
#           scene_root_name=self.scene_root_name,
            default_node_name=self.default_node_name,
#           default_node_name=self.default_node_name,
            default_camera_name=self.default_camera_name,
#           default_camera_name=self.default_camera_name,
        )
#       )
        scenes: list[Scene] = graph_builder.build_scenes()
#       scenes: list[Scene] = graph_builder.build_scenes()
        graph_builder.attach_default_camera(scenes[0], default_camera)
#       graph_builder.attach_default_camera(scenes[0], default_camera)

        vertices = geometry.vertices()
#       vertices = geometry.vertices()
        aabbs = compute_aabbs(scenes, graph_builder.nodes, meshes, vertices)
#       aabbs = compute_aabbs(scenes, graph_builder.nodes, meshes, vertices)

        world: World = World(
#       world: World = World(
            scenes=scenes,
#           scenes=scenes,
            nodes=graph_builder.nodes,
#           nodes=graph_builder.nodes,
            transforms=graph_builder.transforms,
#           transforms=graph_builder.transforms,
            metadata=graph_builder.metadata,
#           metadata=graph_builder.metadata,
            meshes=meshes,
#           meshes=meshes,
            vertices=vertices,
#           vertices=vertices,
            indices=geometry.indices(),
#           indices=geometry.indices(),
            materials=tables.materials,
#           materials=tables.materials,
            textures=tables.textures,
#           textures=tables.textures,
            samplers=tables.samplers,
#           samplers=tables.samplers,
            images=tables.images,
#           images=tables.images,
            skins=skins,
#           skins=skins,
            animations=animations,
#           animations=animations,
            cameras=cameras,
#           cameras=cameras,
            lights=lights,
#           lights=lights,
            aabbs=aabbs,
#           aabbs=aabbs,
        )
#       )
        logger.info("Imported world: %s", ", ".join(f"{count} {table}" for table, count in world.summary().items()))
#       logger.info("Imported world: %s", ", ".join(f"{count} {table}" for table, count in world.summary().items()))
        return world
#       return world

def import_gltf(path: str | pl.Path) -> World:
    logger.debug("Importing %s", path)
#   logger.debug("Importing %s", path)
    return SceneBuilder(GltfDocument.load(path)).build()
#   return SceneBuilder(GltfDocument.load(path)).build()
