# -*- coding: utf-8 -*-

"""
Assignment of annotation codes to surface vertices.

Every vertex ``v`` of the mesh receives ``ctab.annotation_code(segmentation[v])``.
Labels missing from the table receive ``UNKNOWN_ANNOTATION``; that is a
mapping, not an error.
"""

import logging

import numpy as np

from . import constants as const
from .ctab import ColorTable
from .errors import ConfigError

logger = logging.getLogger(__name__)


def assign_annotation(mesh, segmentation, ctab: ColorTable, strict: bool = True, debug: bool = False) -> None:
    """
    Fill ``mesh.annotation`` from a per-vertex segmentation and attach ``ctab``.

    Iterates over the mesh's vertices, not over the segmentation. A
    segmentation longer than the mesh is truncated with a warning.

    Args:
        mesh: SurfaceMesh to update in place
        segmentation: integer label per vertex
        ctab: color table used for the lookup (shared, never modified)
        strict: if True, a segmentation shorter than the mesh raises
            ConfigError; if False the missing vertices keep UNKNOWN_ANNOTATION
        debug: log one line per vertex at DEBUG level

    Raises:
        ConfigError: if ``strict`` and the segmentation is too short
    """
    segmentation = np.asarray(segmentation, dtype=np.int64).ravel()
    n_vertices = mesh.n_vertices
    n_values = segmentation.size

    if n_values < n_vertices:
        if strict:
            raise ConfigError(
                f"Segmentation has {n_values} values but the surface has {n_vertices} vertices",
                config_key="seg",
                expected=f">= {n_vertices} values",
            )
        logger.warning(
            f"Segmentation has {n_values} values for {n_vertices} vertices; "
            f"vertices {n_values}..{n_vertices - 1} stay unlabeled"
        )
    elif n_values > n_vertices:
        logger.warning(
            f"Segmentation has {n_values} values for {n_vertices} vertices; extra values ignored"
        )

    n = min(n_values, n_vertices)
    codes = ctab.annotation_codes(segmentation[:n])
    mesh.annotation[:n] = codes
    mesh.annotation[n:] = const.UNKNOWN_ANNOTATION
    mesh.ctab = ctab

    if debug:
        for vtxno in range(n):
            segid = int(segmentation[vtxno])
            entry = ctab.lookup(segid)
            name = entry.name if entry is not None else "-"
            logger.debug(f"{vtxno:5d} {segid:3d} {int(codes[vtxno]):9d} {name}")

    n_unknown = int(np.count_nonzero(codes == const.UNKNOWN_ANNOTATION))
    if n_unknown:
        logger.info(f"{n_unknown} of {n} vertices have labels not in the color table")
