"""
Shared utilities for seg2annot Click CLIs.

Goals:
- Keep CLI UX consistent (styling of errors and warnings)
- Help users who type FreeSurfer-style single-dash flags
"""

from __future__ import annotations

from typing import Iterable, Optional

import click


# =============================================================================
# Styling helpers
# =============================================================================

COLORS = {
    "warning": "yellow",
    "error": "red",
}


def echo_warning(text: str) -> None:
    click.secho(f"⚠ {text}", fg=COLORS["warning"], err=True)


def echo_error(text: str) -> None:
    click.secho(f"✗ {text}", fg=COLORS["error"], err=True)


# =============================================================================
# Argument helpers
# =============================================================================


def single_dash_hint(args: Iterable[str], long_options: Iterable[str]) -> Optional[str]:
    """
    Return a hint for the first ``-opt`` token whose ``--opt`` form is a known option.
    """
    known = {o.lower() for o in long_options}
    for tok in args:
        if tok.startswith("-") and not tok.startswith("--") and len(tok) > 2:
            if "-" + tok.lower() in known:
                return f"Did you really mean -{tok} ?"
    return None
