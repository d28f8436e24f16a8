#!/usr/bin/env python3
"""
seg2annot CLI (Click).

Converts a volume-encoded surface segmentation into a surface annotation,
using a color table to name and color the segmentation indices.

Usage:
    seg2annot --seg lh.aparc.mgz --s bert --h lh --ctab aparc.ctab --o lh.aparc.annot

    # only validate the options
    seg2annot --seg lh.aparc.mgz --s bert --h lh --ctab aparc.ctab --o out.annot --checkopts

The white surface is read from $SUBJECTS_DIR/<subject>/surf/<hemi>.white.
Option names are case-insensitive.

Exit codes: 0 success, 1 configuration or I/O error, 2 unrecognized option.
"""

from __future__ import annotations

import logging
import shlex
import sys
from typing import List, Optional, Sequence

import click

from seg2annot import __version__
from seg2annot import logger as logging_util
from seg2annot.cli import utils
from seg2annot.core import constants as const
from seg2annot.core.convert import (
    LOGGER_NAME,
    Seg2AnnotConfig,
    check_options,
    dump_options,
    run_conversion,
)
from seg2annot.core.errors import ConfigError, UsageError, handle_error

PROG_NAME = "seg2annot"

CONTEXT_SETTINGS = dict(
    help_option_names=["--help"],
    # Option names match case-insensitively (--SEG == --seg)
    token_normalize_func=lambda token: token.lower(),
)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("--seg", "surfseg", metavar="SURFSEG", help="Volume-encoded surface segmentation.")
@click.option("--s", "subject", metavar="SUBJECT", help="Subject (under $SUBJECTS_DIR).")
@click.option("--h", "--hemi", "hemi", metavar="HEMI", help="Hemisphere (lh or rh).")
@click.option("--ctab", "ctab", metavar="COLORTABLE", help="Color table (LUT text file or .annot).")
@click.option("--o", "annot", metavar="OUTPARC", help="Output annotation file.")
@click.option("--debug", is_flag=True, help="Turn on debugging (per-vertex trace).")
@click.option("--checkopts/--nocheckopts", "checkopts", default=False,
              help="Don't run anything, just check options and exit.")
@click.option("--log-file", "log_file", metavar="PATH", default=None,
              help="Also write the log to this file.")
@click.version_option(__version__, "--version", prog_name=PROG_NAME, message="%(prog)s %(version)s")
@click.pass_context
def cli(ctx: click.Context, surfseg, subject, hemi, ctab, annot, debug, checkopts, log_file) -> int:
    """Convert a surface segmentation volume into an annotation file."""
    obj = ctx.obj or {}
    config = Seg2AnnotConfig(
        surfseg=surfseg,
        subject=subject,
        hemi=hemi,
        ctab=ctab,
        annot=annot,
        debug=debug,
        checkopts=checkopts,
        log_file=log_file,
        cmdline=obj.get("cmdline", ctx.command_path),
    )
    return execute(config)


def execute(config: Seg2AnnotConfig) -> int:
    """Validate, then run the conversion. Returns the process exit code."""
    # Console only until the options are valid; the log file is output too
    logger = logging_util.get_logger(LOGGER_NAME)
    if config.debug:
        logging_util.set_console_level(logger, logging.DEBUG)

    try:
        check_options(config)
    except ConfigError as e:
        return handle_error(e, logger)
    if config.checkopts:
        return const.EXIT_SUCCESS

    if config.log_file:
        try:
            logging_util.add_file_handler(logger, config.log_file)
        except OSError as e:
            utils.echo_error(f"Could not open log file {config.log_file}: {e}")
            return const.EXIT_FAILURE
    logging_util.configure_external_loggers(["nibabel"], logger)

    try:
        dump_options(config, logger)
        run_conversion(config, logger)
    except Exception as e:
        return handle_error(e, logger)

    return const.EXIT_SUCCESS


def _long_options() -> List[str]:
    names: List[str] = []
    for param in cli.params:
        names.extend(o for o in getattr(param, "opts", []) if o.startswith("--"))
        names.extend(o for o in getattr(param, "secondary_opts", []) if o.startswith("--"))
    return names


def _print_usage() -> None:
    with click.Context(cli, info_name=PROG_NAME) as ctx:
        click.echo(ctx.get_help())


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Console entry point. Returns the exit code instead of raising SystemExit."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        _print_usage()
        return const.EXIT_FAILURE

    cmdline = " ".join([PROG_NAME, *(shlex.quote(a) for a in args)])
    try:
        rc = cli.main(args=args, prog_name=PROG_NAME, standalone_mode=False, obj={"cmdline": cmdline})
    except click.exceptions.NoSuchOption as e:
        # "-seg" is reported by click as "-s"; show what was typed
        typed = next((a for a in args if a.lower().startswith(e.option_name.lower())), e.option_name)
        err = UsageError(f"Option {typed} unknown", option=typed)
        utils.echo_error(f"ERROR: {err.message}")
        hint = utils.single_dash_hint(args, _long_options())
        if hint:
            utils.echo_error(f"       {hint}")
        return err.exit_code
    except click.exceptions.BadOptionUsage as e:
        # e.g. an option given without its value
        err = ConfigError(e.format_message(), config_key=e.option_name)
        utils.echo_error(f"ERROR: {err.message}")
        return err.exit_code
    except click.UsageError as e:
        err = UsageError(e.format_message())
        utils.echo_error(f"ERROR: {err.message}")
        return err.exit_code
    except click.exceptions.Abort:
        utils.echo_warning("Cancelled.")
        return const.EXIT_FAILURE

    return rc if isinstance(rc, int) else const.EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
