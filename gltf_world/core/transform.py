import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
import pyrr as rr

def quaternion_from_rotation_matrix(rotation: npt.NDArray[np.float64]) -> rr.Quaternion:
    """
    Converts a 3x3 rotation matrix (column-vector convention, as in glTF) into an (x, y, z, w) quaternion.
#   Converts a 3x3 rotation matrix (column-vector convention, as in glTF) into an (x, y, z, w) quaternion.
    """
    # pyrr matrices are row-major, so the column-vector matrix goes in transposed
#   # pyrr matrices are row-major, so the column-vector matrix goes in transposed
    matrix: rr.Matrix33 = rr.Matrix33(np.asarray(rotation, dtype=np.float64).T)
#   matrix: rr.Matrix33 = rr.Matrix33(np.asarray(rotation, dtype=np.float64).T)
    return rr.Quaternion(rr.quaternion.normalize(rr.Quaternion.from_matrix(matrix)))
#   return rr.Quaternion(rr.quaternion.normalize(rr.Quaternion.from_matrix(matrix)))

class Transform:
    # Local translation/rotation/scale relative to the parent node. Never pre-multiplied.
#   # Local translation/rotation/scale relative to the parent node. Never pre-multiplied.
    def __init__(self, translation: npt.ArrayLike | None = None, rotation: npt.ArrayLike | None = None, scale: npt.ArrayLike | None = None) -> None:
#   def __init__(self, translation: npt.ArrayLike | None = None, rotation: npt.ArrayLike | None = None, scale: npt.ArrayLike | None = None) -> None:
        self.translation: rr.Vector3 = rr.Vector3(translation if translation is not None else [0.0, 0.0, 0.0])
#       self.translation: rr.Vector3 = rr.Vector3(translation if translation is not None else [0.0, 0.0, 0.0])
        self.rotation: rr.Quaternion = rr.Quaternion(rotation if rotation is not None else [0.0, 0.0, 0.0, 1.0])
#       self.rotation: rr.Quaternion = rr.Quaternion(rotation if rotation is not None else [0.0, 0.0, 0.0, 1.0])
        self.scale: rr.Vector3 = rr.Vector3(scale if scale is not None else [1.0, 1.0, 1.0])
#       self.scale: rr.Vector3 = rr.Vector3(scale if scale is not None else [1.0, 1.0, 1.0])
        pass
#       pass

    @classmethod
#   @classmethod
    def identity(cls) -> "Transform":
#   def identity(cls) -> "Transform":
        return cls()
#       return cls()

    @classmethod
#   @classmethod
    def from_matrix(cls, values: npt.ArrayLike) -> "Transform":
#   def from_matrix(cls, values: npt.ArrayLike) -> "Transform":
        # The document stores 16 floats in column-major order.
#       # The document stores 16 floats in column-major order.
        # Transposing the row-wise reshape gives the usual column-vector matrix M with M @ p.
#       # Transposing the row-wise reshape gives the usual column-vector matrix M with M @ p.
        matrix: npt.NDArray[np.float64] = np.asarray(values, dtype=np.float64).reshape((4, 4)).T
#       matrix: npt.NDArray[np.float64] = np.asarray(values, dtype=np.float64).reshape((4, 4)).T
        translation: npt.NDArray[np.float64] = matrix[:3, 3].copy()
#       translation: npt.NDArray[np.float64] = matrix[:3, 3].copy()
        basis: npt.NDArray[np.float64] = matrix[:3, :3]
#       basis: npt.NDArray[np.float64] = matrix[:3, :3]

        scale: npt.NDArray[np.float64] = np.linalg.norm(basis, axis=0)
#       scale: npt.NDArray[np.float64] = np.linalg.norm(basis, axis=0)
        # A mirrored basis is folded into a negative X scale so the rotation stays proper
#       # A mirrored basis is folded into a negative X scale so the rotation stays proper
        if np.linalg.det(basis) < 0.0:
#       if np.linalg.det(basis) < 0.0:
            scale[0] = -scale[0]
#           scale[0] = -scale[0]
        safe_scale: npt.NDArray[np.float64] = np.where(np.abs(scale) > 1e-12, scale, 1.0)
#       safe_scale: npt.NDArray[np.float64] = np.where(np.abs(scale) > 1e-12, scale, 1.0)
        rotation: rr.Quaternion = quaternion_from_rotation_matrix(basis / safe_scale)
#       rotation: rr.Quaternion = quaternion_from_rotation_matrix(basis / safe_scale)
        return cls(translation=translation, rotation=rotation, scale=scale)
#       return cls(translation=translation, rotation=rotation, scale=scale)

    def __repr__(self) -> str:
#   def __repr__(self) -> str:
        return f"Transform(translation={list(self.translation)}, rotation={list(self.rotation)}, scale={list(self.scale)})"
#       return f"Transform(translation={list(self.translation)}, rotation={list(self.rotation)}, scale={list(self.scale)})"
