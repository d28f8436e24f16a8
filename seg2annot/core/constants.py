# -*- coding: utf-8 -*-

"""
seg2annot Constants
Centralized constants: environment variables, FreeSurfer layout and file format values.
"""

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

ENV_SUBJECTS_DIR = "SUBJECTS_DIR"

# ============================================================================
# FREESURFER SUBJECT LAYOUT
# ============================================================================

DIR_SURF = "surf"
SURFACE_WHITE = "white"
HEMISPHERES = ("lh", "rh")

# ============================================================================
# ANNOTATION FORMAT
# ============================================================================

EXT_ANNOT = ".annot"

# Annotation code for vertices whose label has no color table entry
UNKNOWN_ANNOTATION = -1
UNKNOWN_INDEX = -1

# All binary annotation fields are big-endian int32
ANNOT_DTYPE = ">i4"
TAG_OLD_COLORTABLE = 1
CTAB_VERSION_TO_WRITE = 2
CTAB_SOURCE_UNKNOWN = "NOFILE"

# ============================================================================
# EXIT CODES
# ============================================================================

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
