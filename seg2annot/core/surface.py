# -*- coding: utf-8 -*-

"""
Surface meshes.

A :class:`SurfaceMesh` owns its geometry and a per-vertex annotation buffer.
The color table it carries is a plain reference used when the annotation is
written; the mesh never copies or modifies it.
"""

from pathlib import Path
from typing import Optional, Union

import numpy as np
from nibabel.freesurfer import io as fsio

from . import constants as const
from .ctab import ColorTable
from .errors import FileIOError, validate_file_exists


class SurfaceMesh:
    def __init__(self, coords, faces, path: Optional[str] = None):
        self.coords = np.asarray(coords, dtype=np.float32).reshape(-1, 3)
        self.faces = np.asarray(faces, dtype=np.int32).reshape(-1, 3)
        self.path = path
        self.annotation = np.full(self.n_vertices, const.UNKNOWN_ANNOTATION, dtype=np.int32)
        self.ctab: Optional[ColorTable] = None

    @property
    def n_vertices(self) -> int:
        return self.coords.shape[0]

    @property
    def n_faces(self) -> int:
        return self.faces.shape[0]

    def __repr__(self) -> str:
        return f"SurfaceMesh({self.n_vertices} vertices, {self.n_faces} faces, path={self.path!r})"


def read_surface(path: Union[str, Path]) -> SurfaceMesh:
    """
    Read a FreeSurfer triangle surface (e.g. ``lh.white``).

    Raises:
        FileIOError: if the file is missing or not a readable surface
    """
    path = Path(path)
    validate_file_exists(path, "surface")

    try:
        coords, faces = fsio.read_geometry(str(path))
    except (OSError, EOFError, ValueError, IndexError) as e:
        raise FileIOError(
            f"Could not read surface {path}: {e}",
            file_path=str(path), file_type="surface", operation="read",
        ) from e

    return SurfaceMesh(coords, faces, path=str(path))
