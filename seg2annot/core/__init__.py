# -*- coding: utf-8 -*-

# Import main components for easy access
from . import constants
from .annot import annotation_to_labels, annotation_to_names, read_annotation, write_annotation
from .assign import assign_annotation
from .ctab import ColorTable, ColorTableEntry, pack_rgb, read_color_table
from .errors import ConfigError, FileIOError, Seg2AnnotError, UsageError
from .paths import get_subjects_dir, surface_path
from .segmentation import read_segmentation
from .surface import SurfaceMesh, read_surface

# Define public API
__all__ = [
    'constants',

    # Color tables
    'ColorTable',
    'ColorTableEntry',
    'pack_rgb',
    'read_color_table',

    # Inputs
    'read_segmentation',
    'read_surface',
    'SurfaceMesh',
    'get_subjects_dir',
    'surface_path',

    # Annotation
    'assign_annotation',
    'read_annotation',
    'write_annotation',
    'annotation_to_labels',
    'annotation_to_names',

    # Errors
    'Seg2AnnotError',
    'ConfigError',
    'FileIOError',
    'UsageError',
]
