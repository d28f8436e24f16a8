# -*- coding: utf-8 -*-

"""
seg2annot Segmentation Module

Loading of volume-encoded surface segmentations. A surface segmentation stores
one label per vertex as a volume whose first axis runs over vertices, so the
label of vertex ``k`` is the voxel value at ``(k, 0, 0, 0)``.
"""

from pathlib import Path
from typing import Union

import numpy as np
import nibabel as nib
from nibabel.filebasedimages import ImageFileError

from . import constants as const
from .errors import FileIOError, validate_file_exists

_INT64_LIMIT = 2.0 ** 63


def labels_from_array(data) -> np.ndarray:
    """
    Extract the per-vertex label column from a voxel array.

    Parameters:
    -----------
    data : array-like
        Voxel data of up to four dimensions

    Returns:
    --------
    labels : ndarray of int64
        ``data[:, 0, 0, 0]``. Float samples are truncated toward zero; NaN and
        infinite samples, and samples outside the int64 range, become
        ``UNKNOWN_INDEX``.
    """
    data = np.asanyarray(data)
    if data.ndim == 0:
        data = data.reshape(1)
    while data.ndim < 4:
        data = data[..., np.newaxis]

    column = data[(slice(None),) + (0,) * (data.ndim - 1)]

    if np.issubdtype(column.dtype, np.integer):
        if column.dtype == np.uint64:
            labels = np.full(column.shape, const.UNKNOWN_INDEX, dtype=np.int64)
            fits = column <= np.iinfo(np.int64).max
            labels[fits] = column[fits].astype(np.int64)
            return labels
        return column.astype(np.int64)

    column = np.asarray(column, dtype=np.float64)
    column = np.trunc(column)
    # 2**63 is exact in float64; anything at or beyond it cannot be cast
    valid = np.isfinite(column) & (np.abs(column) < _INT64_LIMIT)
    labels = np.full(column.shape, const.UNKNOWN_INDEX, dtype=np.int64)
    labels[valid] = column[valid].astype(np.int64)
    return labels


def read_segmentation(path: Union[str, Path]) -> np.ndarray:
    """
    Read a volume-encoded surface segmentation.

    Any format nibabel can load is accepted (MGH/MGZ, NIfTI, ...). The samples
    are read in the file's native type, not rescaled to float.

    Raises:
        FileIOError: if the file is missing or cannot be loaded
    """
    path = Path(path)
    validate_file_exists(path, "segmentation")

    try:
        img = nib.load(str(path))
        data = np.asanyarray(img.dataobj)
    except (OSError, EOFError, ValueError, ImageFileError) as e:
        raise FileIOError(
            f"Could not read surface segmentation {path}: {e}",
            file_path=str(path), file_type="segmentation", operation="read",
        ) from e

    return labels_from_array(data)
