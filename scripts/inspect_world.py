import sys
import sys
import os
import os
import logging
import logging
from gltf_world.core.errors import WorldImportError
from gltf_world.core.errors import WorldImportError
from gltf_world.core.logging_config import setup_logging
from gltf_world.core.logging_config import setup_logging
from gltf_world.core.world import World
from gltf_world.core.world import World
from gltf_world.scene.scene_builder import import_gltf
from gltf_world.scene.scene_builder import import_gltf

def inspect(path: str) -> int:
    if not os.path.exists(path):
#   if not os.path.exists(path):
        print(f"Error: File {path} not found.")
#       print(f"Error: File {path} not found.")
        return 1
#       return 1

    print(f"Inspecting {path}...")
#   print(f"Inspecting {path}...")

    try:
#   try:
        world: World = import_gltf(path)
#       world: World = import_gltf(path)
    except WorldImportError as e:
#   except WorldImportError as e:
        print(f"Failed to import asset: {e}")
#       print(f"Failed to import asset: {e}")
        return 1
#       return 1

    # Table sizes
#   # Table sizes
    for table, count in world.summary().items():
#   for table, count in world.summary().items():
        print(f"  {table:<12} {count}")
#       print(f"  {table:<12} {count}")

    # Meshes and their primitive ranges
#   # Meshes and their primitive ranges
    print(f"Meshes ({len(world.meshes)}):")
#   print(f"Meshes ({len(world.meshes)}):")
    for i, mesh in enumerate(world.meshes):
#   for i, mesh in enumerate(world.meshes):
        print(f"  [{i}] Name: {mesh.name or 'Unnamed'}")
#       print(f"  [{i}] Name: {mesh.name or 'Unnamed'}")
        for j, primitive in enumerate(mesh.primitives):
#       for j, primitive in enumerate(mesh.primitives):
            print(f"      ({j}) {primitive.topology.name} | Material Index: {primitive.material_index} | Vertices: {primitive.number_of_vertices} | Indices: {primitive.number_of_indices}")
#           print(f"      ({j}) {primitive.topology.name} | Material Index: {primitive.material_index} | Vertices: {primitive.number_of_vertices} | Indices: {primitive.number_of_indices}")

    # Scene hierarchy
#   # Scene hierarchy
    for i, scene in enumerate(world.scenes):
#   for i, scene in enumerate(world.scenes):
        print(f"Scene [{i}] {scene.name or 'Unnamed'}:")
#       print(f"Scene [{i}] {scene.name or 'Unnamed'}:")
        for graph_index in scene.graph.walk(0):
#       for graph_index in scene.graph.walk(0):
            depth: int = 0
#           depth: int = 0
            parent: int | None = scene.graph.parent_of(graph_index)
#           parent: int | None = scene.graph.parent_of(graph_index)
            while parent is not None:
#           while parent is not None:
                depth += 1
#               depth += 1
                parent = scene.graph.parent_of(parent)
#               parent = scene.graph.parent_of(parent)
            print(f"  {'  ' * depth}{world.node_name(scene.graph[graph_index])}")
#           print(f"  {'  ' * depth}{world.node_name(scene.graph[graph_index])}")
    return 0
#   return 0

if __name__ == "__main__":
    if len(sys.argv) < 2:
#   if len(sys.argv) < 2:
        print("Usage: python inspect_world.py <path_to_asset>")
#       print("Usage: python inspect_world.py <path_to_asset>")
        sys.exit(2)
#       sys.exit(2)
    setup_logging(level=logging.INFO)
#   setup_logging(level=logging.INFO)
    sys.exit(inspect(sys.argv[1]))
#   sys.exit(inspect(sys.argv[1]))
