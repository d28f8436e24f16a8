# -*- coding: utf-8 -*-

"""
Color/label tables.

A table maps integer segmentation indices to a region name and an RGBA color.
Tables are read from FreeSurfer LUT text files::

    #No. Label Name                R   G   B   A
    0    Unknown                   0   0   0   0
    1    ctx-lh-bankssts          25 100  40   0

or from the table embedded in an existing ``.annot`` file. Annotation codes
pack the color as ``R + G*256 + B*65536``; indices with no entry map to
``UNKNOWN_ANNOTATION``.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np

from . import constants as const
from .errors import FileIOError, validate_file_exists


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack a color into a FreeSurfer annotation code."""
    return int(r) + (int(g) << 8) + (int(b) << 16)


@dataclass(frozen=True)
class ColorTableEntry:
    index: int
    name: str
    r: int
    g: int
    b: int
    a: int = 0

    @property
    def rgba(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    @property
    def annotation(self) -> int:
        return pack_rgb(self.r, self.g, self.b)


class ColorTable:
    """
    Read-only, ordered collection of color table entries with unique indices.

    Lookups never modify the table, so one instance can be shared by the
    assigner and the writer.
    """

    def __init__(self, entries: Iterable[ColorTableEntry], source: Optional[str] = None):
        self._entries: Tuple[ColorTableEntry, ...] = tuple(entries)
        self.source = source

        self._by_index: Dict[int, ColorTableEntry] = {}
        self._by_code: Dict[int, ColorTableEntry] = {}
        for entry in self._entries:
            if entry.index in self._by_index:
                raise ValueError(f"Duplicate color table index {entry.index}")
            self._by_index[entry.index] = entry
            # First entry wins when two entries share a color
            self._by_code.setdefault(entry.annotation, entry)

        order = sorted(self._by_index)
        self._sorted_indices = np.array(order, dtype=np.int64)
        self._sorted_codes = np.array(
            [self._by_index[i].annotation for i in order], dtype=np.int32
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ColorTableEntry]:
        return iter(self._entries)

    def __contains__(self, index) -> bool:
        return index in self._by_index

    def __eq__(self, other) -> bool:
        if not isinstance(other, ColorTable):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None

    def __repr__(self) -> str:
        return f"ColorTable({len(self)} entries, source={self.source!r})"

    @property
    def entries(self) -> Tuple[ColorTableEntry, ...]:
        return self._entries

    @property
    def indices(self) -> List[int]:
        return [e.index for e in self._entries]

    @property
    def names(self) -> List[str]:
        return [e.name for e in self._entries]

    @property
    def max_index(self) -> int:
        """Largest structure index, or -1 for an empty table."""
        return int(self._sorted_indices[-1]) if len(self._sorted_indices) else -1

    def lookup(self, index: int) -> Optional[ColorTableEntry]:
        return self._by_index.get(int(index))

    def annotation_code(self, index: int) -> int:
        """Annotation code for ``index``, or ``UNKNOWN_ANNOTATION`` if it has no entry."""
        entry = self.lookup(index)
        if entry is None:
            return const.UNKNOWN_ANNOTATION
        return entry.annotation

    def annotation_codes(self, indices) -> np.ndarray:
        """Vectorized :meth:`annotation_code` over an integer array."""
        idx = np.asarray(indices, dtype=np.int64).ravel()
        codes = np.full(idx.shape, const.UNKNOWN_ANNOTATION, dtype=np.int32)
        if idx.size == 0 or self._sorted_indices.size == 0:
            return codes

        pos = np.searchsorted(self._sorted_indices, idx)
        pos = np.clip(pos, 0, self._sorted_indices.size - 1)
        hit = self._sorted_indices[pos] == idx
        codes[hit] = self._sorted_codes[pos[hit]]
        return codes

    def index_of_annotation(self, code: int) -> Optional[int]:
        entry = self._by_code.get(int(code))
        return None if entry is None else entry.index

    def name_of_annotation(self, code: int) -> Optional[str]:
        entry = self._by_code.get(int(code))
        return None if entry is None else entry.name


# ==============================================================================
# READING
# ==============================================================================

def _parse_lut_line(line: str, lineno: int, path: str) -> ColorTableEntry:
    fields = line.split()
    if len(fields) < 5:
        raise FileIOError(
            f"Malformed color table line {lineno} in {path}: expected 'index name r g b [a]'",
            file_path=path, file_type="ctab", operation="read",
        )
    try:
        index = int(fields[0])
        channels = [int(v) for v in fields[2:6]]
    except ValueError:
        raise FileIOError(
            f"Malformed color table line {lineno} in {path}: non-integer field",
            file_path=path, file_type="ctab", operation="read",
        ) from None

    if index < 0:
        raise FileIOError(
            f"Negative structure index {index} on line {lineno} in {path}",
            file_path=path, file_type="ctab", operation="read",
        )
    if any(c < 0 or c > 255 for c in channels):
        raise FileIOError(
            f"Color value out of range 0-255 on line {lineno} in {path}",
            file_path=path, file_type="ctab", operation="read",
        )
    if len(channels) == 3:
        channels.append(0)
    r, g, b, a = channels
    return ColorTableEntry(index=index, name=fields[1], r=r, g=g, b=b, a=a)


def parse_color_table(lines: Iterable[str], source: Optional[str] = None) -> ColorTable:
    """Parse LUT text lines into a :class:`ColorTable`."""
    path = source or "<string>"
    entries = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        entries.append(_parse_lut_line(line, lineno, path))

    if not entries:
        raise FileIOError(
            f"No color table entries found in {path}",
            file_path=path, file_type="ctab", operation="read",
        )
    try:
        return ColorTable(entries, source=source)
    except ValueError as e:
        raise FileIOError(
            f"{e} in {path}", file_path=path, file_type="ctab", operation="read"
        ) from None


def read_color_table(path: Union[str, Path]) -> ColorTable:
    """
    Read a color table from a LUT text file or from an ``.annot`` file.

    Raises:
        FileIOError: if the file is missing, unreadable or malformed
    """
    path = Path(path)
    validate_file_exists(path, "ctab")

    if path.suffix == const.EXT_ANNOT:
        from .annot import read_annotation

        _, ctab = read_annotation(path)
        if ctab is None:
            raise FileIOError(
                f"Annotation {path} does not embed a color table",
                file_path=str(path), file_type="ctab", operation="read",
            )
        return ctab

    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse_color_table(f, source=str(path))
    except (OSError, UnicodeDecodeError) as e:
        raise FileIOError(
            f"Could not read color table {path}: {e}",
            file_path=str(path), file_type="ctab", operation="read",
        ) from e
