# -*- coding: utf-8 -*-

"""
seg2annot Path Management
Resolution of FreeSurfer subject paths from ``SUBJECTS_DIR``.

Usage:
    from seg2annot.core.paths import get_subjects_dir, surface_path

    white = surface_path(get_subjects_dir(), "bert", "lh")
"""

import os
from pathlib import Path
from typing import Optional, Union

from . import constants as const
from .errors import ConfigError


def get_subjects_dir(environ: Optional[dict] = None) -> Path:
    """
    Return ``SUBJECTS_DIR`` as a Path.

    Raises:
        ConfigError: if the variable is unset or empty
    """
    env = os.environ if environ is None else environ
    value = env.get(const.ENV_SUBJECTS_DIR)
    if not value:
        raise ConfigError(
            f"{const.ENV_SUBJECTS_DIR} not defined in environment",
            config_key=const.ENV_SUBJECTS_DIR,
        )
    return Path(value)


def surface_path(
    subjects_dir: Union[str, Path],
    subject: str,
    hemi: str,
    surface: str = const.SURFACE_WHITE,
) -> Path:
    """Path of ``{subjects_dir}/{subject}/surf/{hemi}.{surface}``."""
    return Path(subjects_dir) / subject / const.DIR_SURF / f"{hemi}.{surface}"
