#!/usr/bin/env python3
"""
Pytest configuration for seg2annot tests.

Builds small synthetic FreeSurfer subjects (white surface, surface
segmentation, color table) under a temporary SUBJECTS_DIR.
"""

import logging
from pathlib import Path

import nibabel as nib
import numpy as np
import pytest
from nibabel.freesurfer import io as fsio


LUT_TEXT = """\
#No. Label Name                R   G   B   A
0   unknown                   25   5  25   0
1   cortex                   220  20  10   0
"""

SPARSE_LUT_TEXT = """\
#$Id: FreeSurferColorLUT.txt style table with gaps
0   Unknown                    0   0   0   0
2   Left-Cerebral-White-Matter 245 245 245 0
3   Left-Cerebral-Cortex       205  62  78 0

17  Left-Hippocampus           220 216  20 0
"""


def write_white(subjects_dir: Path, subject: str, hemi: str, n_vertices: int) -> Path:
    """Write a minimal triangle surface with ``n_vertices`` vertices."""
    surf_dir = Path(subjects_dir) / subject / "surf"
    surf_dir.mkdir(parents=True, exist_ok=True)
    coords = np.arange(n_vertices * 3, dtype=np.float32).reshape(n_vertices, 3)
    faces = np.array(
        [[i, (i + 1) % n_vertices, (i + 2) % n_vertices] for i in range(n_vertices)],
        dtype=np.int32,
    )
    path = surf_dir / f"{hemi}.white"
    fsio.write_geometry(str(path), coords, faces)
    return path


def write_surfseg(path: Path, values, dtype=np.int32) -> Path:
    """Write per-vertex labels as an (N, 1, 1) MGH volume."""
    data = np.asarray(values, dtype=dtype).reshape(-1, 1, 1)
    nib.save(nib.MGHImage(data, np.eye(4)), str(path))
    return Path(path)


@pytest.fixture(autouse=True)
def _reset_loggers():
    """Undo get_logger() side effects so caplog sees records in every test."""
    yield
    for name in ("seg2annot", "nibabel"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def lut_file(tmp_path):
    path = tmp_path / "test.ctab"
    path.write_text(LUT_TEXT)
    return path


@pytest.fixture
def sparse_lut_file(tmp_path):
    path = tmp_path / "FreeSurferColorLUT.txt"
    path.write_text(SPARSE_LUT_TEXT)
    return path


@pytest.fixture
def subject_env(tmp_path, monkeypatch, lut_file):
    """
    Subject 'bert' with a 3-vertex lh.white, segmentation [1, 0, 5] and the
    two-entry test table; SUBJECTS_DIR points at it.
    """
    subjects_dir = tmp_path / "subjects"
    white = write_white(subjects_dir, "bert", "lh", 3)
    seg = write_surfseg(tmp_path / "lh.seg.mgz", [1, 0, 5])
    monkeypatch.setenv("SUBJECTS_DIR", str(subjects_dir))
    return {
        "subjects_dir": subjects_dir,
        "white": white,
        "seg": seg,
        "ctab": lut_file,
        "out": tmp_path / "lh.seg.annot",
    }
