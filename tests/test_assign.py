#!/usr/bin/env python3
"""
Unit tests for per-vertex annotation assignment (core/assign.py)
"""

import logging

import numpy as np
import pytest

from seg2annot.core import constants as const
from seg2annot.core.assign import assign_annotation
from seg2annot.core.ctab import read_color_table
from seg2annot.core.errors import ConfigError
from seg2annot.core.surface import SurfaceMesh


def _mesh(n_vertices):
    faces = [[i, (i + 1) % n_vertices, (i + 2) % n_vertices] for i in range(n_vertices)]
    return SurfaceMesh(np.zeros((n_vertices, 3)), faces)


@pytest.fixture
def ctab(lut_file):
    return read_color_table(lut_file)


@pytest.mark.unit
class TestAssignAnnotation:
    def test_example_with_absent_label(self, ctab):
        """Table {0: unknown, 1: cortex}, seg [1, 0, 5] -> [code(1), code(0), sentinel]"""
        mesh = _mesh(3)
        assert assign_annotation(mesh, [1, 0, 5], ctab) is None
        assert mesh.annotation.tolist() == [
            ctab.annotation_code(1),
            ctab.annotation_code(0),
            const.UNKNOWN_ANNOTATION,
        ]

    def test_attaches_table_by_reference(self, ctab):
        mesh = _mesh(3)
        assign_annotation(mesh, [0, 0, 0], ctab)
        assert mesh.ctab is ctab

    def test_every_vertex_matches_lookup(self, sparse_lut_file):
        ctab = read_color_table(sparse_lut_file)
        rng = np.random.default_rng(0)
        seg = rng.choice([0, 1, 2, 3, 17, 40], size=200)
        mesh = _mesh(200)
        assign_annotation(mesh, seg, ctab)
        expected = [ctab.annotation_code(int(v)) for v in seg]
        assert mesh.annotation.tolist() == expected

    def test_short_segmentation_raises(self, ctab):
        mesh = _mesh(4)
        with pytest.raises(ConfigError) as exc:
            assign_annotation(mesh, [1, 0], ctab)
        assert exc.value.details["config_key"] == "seg"
        assert mesh.ctab is None

    def test_short_segmentation_not_strict(self, ctab, caplog):
        mesh = _mesh(4)
        with caplog.at_level(logging.WARNING, logger="seg2annot.core.assign"):
            assign_annotation(mesh, [1, 0], ctab, strict=False)
        assert mesh.annotation.tolist() == [
            ctab.annotation_code(1),
            ctab.annotation_code(0),
            const.UNKNOWN_ANNOTATION,
            const.UNKNOWN_ANNOTATION,
        ]
        assert "stay unlabeled" in caplog.text

    def test_long_segmentation_is_truncated(self, ctab, caplog):
        mesh = _mesh(3)
        with caplog.at_level(logging.WARNING, logger="seg2annot.core.assign"):
            assign_annotation(mesh, [1, 1, 1, 0, 0], ctab)
        assert mesh.annotation.tolist() == [ctab.annotation_code(1)] * 3
        assert "extra values ignored" in caplog.text

    def test_debug_traces_each_vertex(self, ctab, caplog):
        mesh = _mesh(3)
        with caplog.at_level(logging.DEBUG, logger="seg2annot.core.assign"):
            assign_annotation(mesh, [1, 0, 5], ctab, debug=True)
        lines = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
        assert len(lines) == 3
        assert lines[0].split()[-1] == "cortex"
        assert lines[2].split()[-1] == "-"

    def test_reassignment_overwrites(self, ctab):
        mesh = _mesh(2)
        assign_annotation(mesh, [1, 1], ctab)
        assign_annotation(mesh, [0, 7], ctab)
        assert mesh.annotation.tolist() == [ctab.annotation_code(0), const.UNKNOWN_ANNOTATION]
