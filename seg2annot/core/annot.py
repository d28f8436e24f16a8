# -*- coding: utf-8 -*-

"""
seg2annot Annotation Module

Reading and writing FreeSurfer binary annotation (``.annot``) files.

Layout (every number is a big-endian int32, strings are length-prefixed and
NUL-terminated)::

    vnum
    vnum x (vertex number, annotation code)
    tag                      1 when a color table follows
    -version                 -2 for the current table format
    max structure index + 1
    source table name
    number of entries
    entries x (index, name, r, g, b, a)

Structure indices are written exactly as they appear in the color table, so
sparse tables (e.g. FreeSurferColorLUT) survive a write/read round trip.
nibabel's ``write_annot`` renumbers entries by position, which would break
that, hence the dedicated writer.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np

from . import constants as const
from .ctab import ColorTable, ColorTableEntry
from .errors import ConfigError, FileIOError, validate_file_exists

_DT = np.dtype(const.ANNOT_DTYPE)


# ==============================================================================
# WRITING
# ==============================================================================

def _int_bytes(*values) -> bytes:
    return np.array(values).astype(_DT).tobytes()


def _string_bytes(text: str) -> bytes:
    data = text.encode("utf-8") + b"\x00"
    return _int_bytes(len(data)) + data


def encode_annotation(codes, ctab: ColorTable) -> bytes:
    """Serialize per-vertex annotation codes and their color table."""
    codes = np.asarray(codes).ravel()
    vnum = codes.size

    chunks = [_int_bytes(vnum)]
    chunks.append(np.column_stack((np.arange(vnum), codes)).astype(_DT).tobytes())

    chunks.append(_int_bytes(const.TAG_OLD_COLORTABLE, -const.CTAB_VERSION_TO_WRITE))
    chunks.append(_int_bytes(ctab.max_index + 1))
    chunks.append(_string_bytes(ctab.source or const.CTAB_SOURCE_UNKNOWN))
    chunks.append(_int_bytes(len(ctab)))
    for entry in ctab:
        chunks.append(_int_bytes(entry.index))
        chunks.append(_string_bytes(entry.name))
        chunks.append(_int_bytes(*entry.rgba))

    return b"".join(chunks)


def write_annotation(mesh, path: Union[str, Path]) -> None:
    """
    Write the mesh's annotation codes and attached color table to ``path``.

    Raises:
        ConfigError: if no color table is attached to the mesh
        FileIOError: if the file cannot be written
    """
    if mesh.ctab is None:
        raise ConfigError("No color table attached to the surface", config_key="ctab")

    path = Path(path)
    payload = encode_annotation(mesh.annotation, mesh.ctab)
    try:
        with open(path, "wb") as fobj:
            fobj.write(payload)
    except OSError as e:
        raise FileIOError(
            f"Could not write annotation {path}: {e}",
            file_path=str(path), file_type="annotation", operation="write",
        ) from e


# ==============================================================================
# READING
# ==============================================================================

class _BufferReader:
    """Cursor over an annotation byte buffer."""

    def __init__(self, buf: bytes):
        self._buf = buf
        self._pos = 0

    def at_end(self) -> bool:
        return self._pos >= len(self._buf)

    def read_ints(self, count: int) -> np.ndarray:
        nbytes = count * _DT.itemsize
        if count < 0 or self._pos + nbytes > len(self._buf):
            raise ValueError("unexpected end of file")
        out = np.frombuffer(self._buf, dtype=_DT, count=count, offset=self._pos)
        self._pos += nbytes
        return out.astype(np.int64)

    def read_int(self) -> int:
        return int(self.read_ints(1)[0])

    def read_string(self) -> str:
        length = self.read_int()
        if length < 0 or self._pos + length > len(self._buf):
            raise ValueError("unexpected end of file")
        raw = self._buf[self._pos:self._pos + length]
        self._pos += length
        return raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace")


def _read_ctab(reader: _BufferReader, source: str) -> ColorTable:
    n_entries = reader.read_int()
    entries = []

    if n_entries > 0:
        # Old format: entries are numbered by position
        reader.read_string()
        for index in range(n_entries):
            name = reader.read_string()
            r, g, b, a = reader.read_ints(4)
            entries.append(ColorTableEntry(index, name, int(r), int(g), int(b), int(a)))
        return ColorTable(entries, source=source)

    version = -n_entries
    if version != const.CTAB_VERSION_TO_WRITE:
        raise ValueError(f"unsupported color table version {version}")

    reader.read_int()  # max structure index + 1
    embedded_source = reader.read_string()
    count = reader.read_int()
    for _ in range(count):
        index = reader.read_int()
        name = reader.read_string()
        r, g, b, a = reader.read_ints(4)
        entries.append(ColorTableEntry(index, name, int(r), int(g), int(b), int(a)))

    if embedded_source and embedded_source != const.CTAB_SOURCE_UNKNOWN:
        source = embedded_source
    return ColorTable(entries, source=source)


def decode_annotation(buf: bytes, source: str = "<bytes>") -> Tuple[np.ndarray, Optional[ColorTable]]:
    """
    Parse an annotation byte buffer.

    Returns:
        (codes, ctab): int32 codes per vertex (``UNKNOWN_ANNOTATION`` for
        vertices absent from the file) and the embedded table, or None.

    Raises:
        ValueError: if the buffer is truncated or inconsistent
    """
    reader = _BufferReader(buf)
    vnum = reader.read_int()
    if vnum < 0:
        raise ValueError(f"negative vertex count {vnum}")

    pairs = reader.read_ints(2 * vnum).reshape(vnum, 2)
    vno = pairs[:, 0]
    if vnum and (vno.min() < 0 or vno.max() >= vnum):
        raise ValueError("vertex number out of range")

    codes = np.full(vnum, const.UNKNOWN_ANNOTATION, dtype=np.int32)
    codes[vno] = pairs[:, 1]

    ctab = None
    if not reader.at_end():
        tag = reader.read_int()
        if tag == const.TAG_OLD_COLORTABLE:
            ctab = _read_ctab(reader, source)
    return codes, ctab


def read_annotation(path: Union[str, Path]) -> Tuple[np.ndarray, Optional[ColorTable]]:
    """
    Read an annotation file written by FreeSurfer, nibabel or :func:`write_annotation`.

    Raises:
        FileIOError: if the file is missing, unreadable or malformed
    """
    path = Path(path)
    validate_file_exists(path, "annotation")
    try:
        buf = path.read_bytes()
    except OSError as e:
        raise FileIOError(
            f"Could not read annotation {path}: {e}",
            file_path=str(path), file_type="annotation", operation="read",
        ) from e

    try:
        return decode_annotation(buf, source=str(path))
    except ValueError as e:
        raise FileIOError(
            f"Malformed annotation {path}: {e}",
            file_path=str(path), file_type="annotation", operation="read",
        ) from e


# ==============================================================================
# DECODING
# ==============================================================================

def annotation_to_labels(codes, ctab: ColorTable) -> np.ndarray:
    """Map annotation codes back to table indices (``UNKNOWN_INDEX`` if unmatched)."""
    codes = np.asarray(codes).ravel()
    labels = np.full(codes.shape, const.UNKNOWN_INDEX, dtype=np.int64)
    for code in np.unique(codes):
        index = ctab.index_of_annotation(code)
        if index is not None:
            labels[codes == code] = index
    return labels


def annotation_to_names(codes, ctab: ColorTable) -> List[Optional[str]]:
    """Map annotation codes back to region names (None if unmatched)."""
    return [ctab.name_of_annotation(code) for code in np.asarray(codes).ravel()]
