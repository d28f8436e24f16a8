# -*- coding: utf-8 -*-

"""
seg2annot Conversion Pipeline

Validate options, read the color table, the surface segmentation and the
white surface, assign annotation codes, write the annotation. Any failure
stops the pipeline before the output file is written.

Usage:
    from seg2annot.core.convert import Seg2AnnotConfig, check_options, run_conversion

    cfg = Seg2AnnotConfig(surfseg="lh.seg.mgz", subject="bert", hemi="lh",
                          ctab="aparc.ctab", annot="lh.seg.annot")
    check_options(cfg)
    run_conversion(cfg)
"""

import getpass
import logging
import os
import platform
from dataclasses import dataclass
from typing import Optional

from .. import __version__
from .annot import write_annotation
from .assign import assign_annotation
from .ctab import read_color_table
from .errors import ConfigError
from .paths import get_subjects_dir, surface_path
from .segmentation import read_segmentation
from .surface import SurfaceMesh, read_surface

LOGGER_NAME = "seg2annot"


@dataclass(frozen=True)
class Seg2AnnotConfig:
    surfseg: Optional[str] = None
    subject: Optional[str] = None
    hemi: Optional[str] = None
    ctab: Optional[str] = None
    annot: Optional[str] = None
    debug: bool = False
    checkopts: bool = False
    log_file: Optional[str] = None
    cmdline: str = ""


# (attribute, option, description) in the order they are checked
_REQUIRED = (
    ("subject", "--s", "subject"),
    ("hemi", "--h", "hemi"),
    ("ctab", "--ctab", "ctab"),
    ("annot", "--o", "output"),
    ("surfseg", "--seg", "surfseg"),
)


def check_options(config: Seg2AnnotConfig) -> None:
    """
    Raise ConfigError for the first required option that was not given.

    An empty value counts as given; it fails later when the file is opened.
    No file is touched here.
    """
    for attr, option, what in _REQUIRED:
        if getattr(config, attr) is None:
            raise ConfigError(f"{what} not specified", config_key=option)


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


def dump_options(config: Seg2AnnotConfig, logger: logging.Logger) -> None:
    """Log the run environment and the resolved options."""
    uname = platform.uname()
    logger.info("")
    logger.info(f"seg2annot {__version__}")
    logger.info(f"cwd {os.getcwd()}")
    logger.info(f"cmdline {config.cmdline}")
    logger.info(f"sysname  {uname.system}")
    logger.info(f"hostname {uname.node}")
    logger.info(f"machine  {uname.machine}")
    logger.info(f"user     {_current_user()}")
    logger.info(f"subject   {config.subject}")
    logger.info(f"hemi      {config.hemi}")
    logger.info(f"surfseg   {config.surfseg}")
    logger.info(f"ctab      {config.ctab}")
    logger.info(f"annotfile {config.annot}")
    logger.info("")


def run_conversion(config: Seg2AnnotConfig, logger: Optional[logging.Logger] = None) -> SurfaceMesh:
    """
    Run the whole conversion for a validated config.

    Returns:
        The annotated surface, with its color table attached

    Raises:
        ConfigError: SUBJECTS_DIR unset, or segmentation shorter than the surface
        FileIOError: any input unreadable or the output unwritable
    """
    logger = logger or logging.getLogger(LOGGER_NAME)

    logger.info(f"Reading ctab {config.ctab}")
    ctab = read_color_table(config.ctab)
    logger.debug(f"Color table has {len(ctab)} entries (max index {ctab.max_index})")

    logger.info(f"Reading surface seg {config.surfseg}")
    segmentation = read_segmentation(config.surfseg)

    subjects_dir = get_subjects_dir()
    white = surface_path(subjects_dir, config.subject, config.hemi)
    logger.info(f"Reading surface {white}")
    mesh = read_surface(white)
    logger.debug(f"Surface has {mesh.n_vertices} vertices, segmentation has {segmentation.size} values")

    assign_annotation(mesh, segmentation, ctab, debug=config.debug)

    logger.info(f"Writing annot to {config.annot}")
    write_annotation(mesh, config.annot)
    return mesh
