class WorldImportError(Exception):
    # Base class for every failure that aborts an import. No partial World is ever returned.
#   # Base class for every failure that aborts an import. No partial World is ever returned.
    pass
#   pass

class IOOrDecodeError(WorldImportError):
    # The asset is unreadable, or the document is structurally invalid (bad JSON, bad GLB header,
#   # The asset is unreadable, or the document is structurally invalid (bad JSON, bad GLB header,
    # dangling index references, buffers too short for their accessors, undecodable images).
#   # dangling index references, buffers too short for their accessors, undecodable images).
    pass
#   pass

class MissingRequiredAttribute(WorldImportError):
    def __init__(self, mesh_index: int, primitive_index: int, attribute: str = "POSITION") -> None:
#   def __init__(self, mesh_index: int, primitive_index: int, attribute: str = "POSITION") -> None:
        super().__init__(f"Mesh {mesh_index} primitive {primitive_index} has no {attribute} attribute")
#       super().__init__(f"Mesh {mesh_index} primitive {primitive_index} has no {attribute} attribute")
        self.mesh_index: int = mesh_index
#       self.mesh_index: int = mesh_index
        self.primitive_index: int = primitive_index
#       self.primitive_index: int = primitive_index
        self.attribute: str = attribute
#       self.attribute: str = attribute

class UnsupportedImageFormat(WorldImportError):
    def __init__(self, image_index: int, source_format: str) -> None:
#   def __init__(self, image_index: int, source_format: str) -> None:
        super().__init__(f"Image {image_index} uses unsupported pixel format {source_format}")
#       super().__init__(f"Image {image_index} uses unsupported pixel format {source_format}")
        self.image_index: int = image_index
#       self.image_index: int = image_index
        self.source_format: str = source_format
#       self.source_format: str = source_format

class MalformedAnimationChannel(WorldImportError):
    def __init__(self, animation_index: int, channel_index: int, reason: str) -> None:
#   def __init__(self, animation_index: int, channel_index: int, reason: str) -> None:
        super().__init__(f"Animation {animation_index} channel {channel_index} {reason}")
#       super().__init__(f"Animation {animation_index} channel {channel_index} {reason}")
        self.animation_index: int = animation_index
#       self.animation_index: int = animation_index
        self.channel_index: int = channel_index
#       self.channel_index: int = channel_index
        self.reason: str = reason
#       self.reason: str = reason
