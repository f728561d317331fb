"""Load .ot settings files into FixedRecord.

Disk is truth: the file length must match the packed layout exactly and
every multi-byte field is decoded from big-endian at its documented offset.
"""
from __future__ import annotations

import os
import stat
import struct
from pathlib import Path

from .protocol import (
    MAX_SLICES,
    OFF_CHECKSUM,
    OFF_GAIN,
    OFF_HEADER,
    OFF_LOOP,
    OFF_LOOP_LEN,
    OFF_LOOP_POINT,
    OFF_QUANTIZE,
    OFF_RESERVED,
    OFF_SLICE_COUNT,
    OFF_SLICES,
    OFF_STRETCH,
    OFF_TEMPO,
    OFF_TRIM_END,
    OFF_TRIM_LEN,
    OFF_TRIM_START,
    OT_FILE_LEN,
    OT_HEADER_LEN,
    OT_RESERVED_LEN,
    SLICE_REC_LEN,
)
from .record import FixedRecord, SliceRecord, SliceTable

_BE_FMT = {1: ">B", 2: ">H", 4: ">I"}


class LoadError(Exception):
    """A single .ot file could not be loaded. Recoverable per file."""

    def __init__(self, path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = str(path)
        self.reason = reason


class FormatError(LoadError):
    """File length does not match the fixed record size."""


class ReadError(LoadError):
    """File missing, unreadable, not a regular file, or short read."""


def read_be(buf, offset: int, width: int) -> int:
    """Read an unsigned big-endian integer of `width` bytes at `offset`."""
    return struct.unpack_from(_BE_FMT[width], buf, offset)[0]


def _decode_slice(buf, index: int) -> SliceRecord:
    base = OFF_SLICES + index * SLICE_REC_LEN
    return SliceRecord(
        start_point=read_be(buf, base, 4),
        end_point=read_be(buf, base + 4, 4),
        loop_point=read_be(buf, base + 8, 4),
    )


def decode(buf, path=None) -> FixedRecord:
    """Decode an in-memory .ot image.

    Only slice entries below min(sliceCount, 64) are decoded; the rest of
    the array is stale on disk and is never touched.
    """
    if len(buf) != OT_FILE_LEN:
        raise FormatError(
            path if path is not None else "<buffer>",
            f"expected {OT_FILE_LEN} bytes, found {len(buf)}",
        )

    slice_count = read_be(buf, OFF_SLICE_COUNT, 4)
    valid = min(slice_count, MAX_SLICES)

    return FixedRecord(
        header=bytes(buf[OFF_HEADER:OFF_HEADER + OT_HEADER_LEN]),
        reserved=bytes(buf[OFF_RESERVED:OFF_RESERVED + OT_RESERVED_LEN]),
        tempo=read_be(buf, OFF_TEMPO, 4),
        trim_length=read_be(buf, OFF_TRIM_LEN, 4),
        loop_length=read_be(buf, OFF_LOOP_LEN, 4),
        stretch_mode=read_be(buf, OFF_STRETCH, 4),
        loop_mode=read_be(buf, OFF_LOOP, 4),
        gain=read_be(buf, OFF_GAIN, 2),
        quantize_mode=read_be(buf, OFF_QUANTIZE, 1),
        trim_start=read_be(buf, OFF_TRIM_START, 4),
        trim_end=read_be(buf, OFF_TRIM_END, 4),
        loop_point=read_be(buf, OFF_LOOP_POINT, 4),
        slices=SliceTable((_decode_slice(buf, i) for i in range(valid)), declared=slice_count),
        slice_count=slice_count,
        checksum=read_be(buf, OFF_CHECKSUM, 2),
    )


def load(path) -> FixedRecord:
    """Load and decode one .ot file.

    Raises FormatError on a size mismatch (nothing is read) and ReadError on
    any OS-level failure. The file handle is closed on every exit path.
    """
    path = Path(path)

    try:
        st = os.stat(path)
    except OSError as e:
        raise ReadError(path, e.strerror or str(e)) from e
    if not stat.S_ISREG(st.st_mode):
        raise ReadError(path, "not a regular file")

    if st.st_size != OT_FILE_LEN:
        raise FormatError(path, f"expected {OT_FILE_LEN} bytes, found {st.st_size}")

    buf = bytearray(OT_FILE_LEN)
    try:
        with open(path, "rb") as f:
            n = f.readinto(buf)
    except OSError as e:
        raise ReadError(path, e.strerror or str(e)) from e

    if n != OT_FILE_LEN:
        raise ReadError(path, f"short read: got {n} of {OT_FILE_LEN} bytes")

    return decode(buf, path=path)
