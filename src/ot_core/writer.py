"""Encode .ot settings files. Used by the demo generator and test fixtures."""
from __future__ import annotations

import struct
from pathlib import Path

from .checksum import compute_checksum
from .protocol import (
    GAIN_ZERO_DB,
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
    OT_HEADER_MAGIC,
    OT_RESERVED_BYTES,
    SLICE_REC_FMT,
    SLICE_REC_LEN,
    TEMPO_SCALE,
)
from .record import QuantizeMode, SliceRecord


def encode(
    *,
    slices=(),
    slice_count: int | None = None,
    tempo: int = 120 * TEMPO_SCALE,
    trim_length: int = 0,
    loop_length: int = 0,
    stretch_mode: int = 0,
    loop_mode: int = 0,
    gain: int = GAIN_ZERO_DB,
    quantize_mode: int = QuantizeMode.DIRECT,
    trim_start: int = 0,
    trim_end: int = 0,
    loop_point: int = 0,
    checksum: int | None = None,
    header: bytes = OT_HEADER_MAGIC,
) -> bytes:
    """Build a complete .ot image.

    `slices` holds SliceRecord or (start, end, loop) tuples. `slice_count`
    defaults to len(slices) and may be set independently to build anomaly
    fixtures. The checksum is computed unless given explicitly.
    """
    slices = [s if isinstance(s, SliceRecord) else SliceRecord(*s) for s in slices]
    if len(slices) > MAX_SLICES:
        raise ValueError(f"At most {MAX_SLICES} slices fit in a .ot file, got {len(slices)}")
    if len(header) != len(OT_HEADER_MAGIC):
        raise ValueError(f"Header must be {len(OT_HEADER_MAGIC)} bytes, got {len(header)}")
    if slice_count is None:
        slice_count = len(slices)

    buf = bytearray(OT_FILE_LEN)
    buf[OFF_HEADER:OFF_HEADER + len(header)] = header
    buf[OFF_RESERVED:OFF_RESERVED + len(OT_RESERVED_BYTES)] = OT_RESERVED_BYTES

    struct.pack_into(">I", buf, OFF_TEMPO, tempo)
    struct.pack_into(">I", buf, OFF_TRIM_LEN, trim_length)
    struct.pack_into(">I", buf, OFF_LOOP_LEN, loop_length)
    struct.pack_into(">I", buf, OFF_STRETCH, stretch_mode)
    struct.pack_into(">I", buf, OFF_LOOP, loop_mode)
    struct.pack_into(">H", buf, OFF_GAIN, gain)
    struct.pack_into(">B", buf, OFF_QUANTIZE, quantize_mode)
    struct.pack_into(">I", buf, OFF_TRIM_START, trim_start)
    struct.pack_into(">I", buf, OFF_TRIM_END, trim_end)
    struct.pack_into(">I", buf, OFF_LOOP_POINT, loop_point)

    for i, s in enumerate(slices):
        struct.pack_into(
            SLICE_REC_FMT, buf, OFF_SLICES + i * SLICE_REC_LEN,
            s.start_point, s.end_point, s.loop_point,
        )

    struct.pack_into(">I", buf, OFF_SLICE_COUNT, slice_count)

    if checksum is None:
        checksum = compute_checksum(buf)
    struct.pack_into(">H", buf, OFF_CHECKSUM, checksum)

    return bytes(buf)


def write(path, **fields) -> Path:
    """Encode and write a .ot file. Returns the path written."""
    path = Path(path)
    path.write_bytes(encode(**fields))
    return path
