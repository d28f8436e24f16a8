#!/usr/bin/env python3
"""
Unit tests for subject paths (core/paths.py) and surface loading (core/surface.py)
"""

from pathlib import Path

import numpy as np
import pytest

from seg2annot.core import constants as const
from seg2annot.core.errors import ConfigError, FileIOError
from seg2annot.core.paths import get_subjects_dir, surface_path
from seg2annot.core.surface import SurfaceMesh, read_surface

from conftest import write_white


@pytest.mark.unit
class TestSubjectsDir:
    def test_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SUBJECTS_DIR", str(tmp_path))
        assert get_subjects_dir() == tmp_path

    def test_unset(self, monkeypatch):
        monkeypatch.delenv("SUBJECTS_DIR", raising=False)
        with pytest.raises(ConfigError) as exc:
            get_subjects_dir()
        assert exc.value.details["config_key"] == "SUBJECTS_DIR"

    def test_empty_counts_as_unset(self):
        with pytest.raises(ConfigError):
            get_subjects_dir({"SUBJECTS_DIR": ""})

    def test_explicit_mapping(self):
        assert get_subjects_dir({"SUBJECTS_DIR": "/data/subjects"}) == Path("/data/subjects")


@pytest.mark.unit
def test_surface_path_layout():
    assert surface_path("/sd", "bert", "rh") == Path("/sd/bert/surf/rh.white")
    assert surface_path(Path("/sd"), "bert", "lh", surface="pial") == Path("/sd/bert/surf/lh.pial")


@pytest.mark.unit
class TestReadSurface:
    def test_reads_geometry(self, tmp_path):
        path = write_white(tmp_path, "bert", "lh", 5)
        mesh = read_surface(path)
        assert mesh.n_vertices == 5
        assert mesh.n_faces == 5
        assert mesh.path == str(path)
        np.testing.assert_allclose(mesh.coords[1], [3, 4, 5])

    def test_annotation_buffer_starts_unlabeled(self, tmp_path):
        mesh = read_surface(write_white(tmp_path, "bert", "lh", 4))
        assert mesh.annotation.dtype == np.int32
        assert (mesh.annotation == const.UNKNOWN_ANNOTATION).all()
        assert mesh.ctab is None

    def test_missing_surface(self, tmp_path):
        with pytest.raises(FileIOError) as exc:
            read_surface(tmp_path / "bert" / "surf" / "lh.white")
        assert exc.value.details["file_type"] == "surface"

    def test_not_a_surface(self, tmp_path):
        p = tmp_path / "lh.white"
        p.write_bytes(b"\x00\x01\x02 definitely not a triangle file")
        with pytest.raises(FileIOError):
            read_surface(p)


@pytest.mark.unit
def test_mesh_from_arrays():
    mesh = SurfaceMesh(np.zeros((3, 3)), [[0, 1, 2]])
    assert mesh.n_vertices == 3
    assert mesh.annotation.shape == (3,)
