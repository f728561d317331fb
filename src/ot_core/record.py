"""Decoded, immutable view of one .ot settings file."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

from .protocol import (
    GAIN_STEPS_PER_DB,
    GAIN_ZERO_DB,
    LENGTH_SCALE,
    MAX_SLICES,
    TEMPO_SCALE,
)


class StretchMode(IntEnum):
    OFF = 0
    NORMAL = 2
    BEAT = 3


class LoopMode(IntEnum):
    OFF = 0
    NORMAL = 1
    PINGPONG = 2


class QuantizeMode(IntEnum):
    """Trig quantization. 0x00 follows pattern length, 0xFF fires directly."""

    PATTERN = 0x00
    STEPS_1 = 1
    STEPS_2 = 2
    STEPS_3 = 3
    STEPS_4 = 4
    STEPS_6 = 5
    STEPS_8 = 6
    STEPS_12 = 7
    STEPS_16 = 8
    STEPS_24 = 9
    STEPS_32 = 10
    STEPS_48 = 11
    STEPS_64 = 12
    STEPS_96 = 13
    STEPS_128 = 14
    STEPS_192 = 15
    STEPS_256 = 16
    DIRECT = 0xFF

    @property
    def steps(self) -> int | None:
        """Grid size in steps, or None for PATTERN and DIRECT."""
        if self.name.startswith("STEPS_"):
            return int(self.name[len("STEPS_"):])
        return None


@dataclass(frozen=True)
class SliceRecord:
    start_point: int
    end_point: int
    loop_point: int


class SliceTable(Sequence):
    """Read-only slice array bounded by the file's own slice count.

    Holds only the entries below min(declared, 64). Indexing at or past that
    bound raises IndexError; the stale tail of the on-disk array is never
    reachable.
    """

    __slots__ = ("_entries", "_declared")

    def __init__(self, entries, declared: int):
        entries = tuple(entries)
        if len(entries) != min(declared, MAX_SLICES):
            raise ValueError(
                f"SliceTable holds {len(entries)} entries, expected {min(declared, MAX_SLICES)}"
            )
        object.__setattr__(self, "_entries", entries)
        object.__setattr__(self, "_declared", int(declared))

    def __setattr__(self, name, value):
        raise AttributeError("SliceTable is read-only")

    @property
    def declared(self) -> int:
        return self._declared

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, i):
        return self._entries[i]

    def __eq__(self, other) -> bool:
        if not isinstance(other, SliceTable):
            return NotImplemented
        return self._declared == other._declared and self._entries == other._entries

    def __hash__(self) -> int:
        return hash((self._declared, self._entries))

    def __repr__(self) -> str:
        return f"SliceTable(declared={self._declared}, entries={list(self._entries)!r})"


@dataclass(frozen=True)
class FixedRecord:
    header: bytes
    reserved: bytes
    tempo: int
    trim_length: int
    loop_length: int
    stretch_mode: int
    loop_mode: int
    gain: int
    quantize_mode: int
    trim_start: int
    trim_end: int
    loop_point: int
    slices: SliceTable
    slice_count: int
    checksum: int

    @property
    def bpm(self) -> float:
        return self.tempo / TEMPO_SCALE

    @property
    def trim_length_value(self) -> float:
        return self.trim_length / LENGTH_SCALE

    @property
    def loop_length_value(self) -> float:
        return self.loop_length / LENGTH_SCALE

    @property
    def gain_db(self) -> float:
        return (self.gain - GAIN_ZERO_DB) / GAIN_STEPS_PER_DB

    # Enum views raise ValueError for codes the format does not define.
    @property
    def stretch(self) -> StretchMode:
        return StretchMode(self.stretch_mode)

    @property
    def loop(self) -> LoopMode:
        return LoopMode(self.loop_mode)

    @property
    def quantize(self) -> QuantizeMode:
        return QuantizeMode(self.quantize_mode)

    def as_dict(self) -> dict:
        """JSON-ready view; slices limited to the valid entries."""
        return {
            "header": self.header.hex(),
            "reserved": self.reserved.hex(),
            "tempo": self.tempo,
            "bpm": self.bpm,
            "trim_length": self.trim_length,
            "loop_length": self.loop_length,
            "stretch_mode": self.stretch_mode,
            "loop_mode": self.loop_mode,
            "gain": self.gain,
            "gain_db": self.gain_db,
            "quantize_mode": self.quantize_mode,
            "trim_start": self.trim_start,
            "trim_end": self.trim_end,
            "loop_point": self.loop_point,
            "slice_count": self.slice_count,
            "slices": [
                {"start_point": s.start_point, "end_point": s.end_point, "loop_point": s.loop_point}
                for s in self.slices
            ],
            "checksum": self.checksum,
        }
