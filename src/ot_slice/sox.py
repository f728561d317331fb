"""Render slice descriptors as sox command lines."""
from __future__ import annotations

from ot_core.protocol import AUDIO_EXT, SETTINGS_EXT
from ot_core.record import FixedRecord

from .extract import SliceDescriptor, extract_slices


def is_settings_file(path) -> bool:
    return str(path).endswith(SETTINGS_EXT)


def _base_name(path) -> str:
    name = str(path)
    if not is_settings_file(name):
        raise ValueError(f"Not a {SETTINGS_EXT} file: {name}")
    return name[: -len(SETTINGS_EXT)]


def audio_path_for(path) -> str:
    """Companion audio file: same base name, audio extension."""
    return _base_name(path) + AUDIO_EXT


def slice_output_path(path, index: int) -> str:
    """Per-slice output: base name + 2-digit zero-padded index."""
    return f"{_base_name(path)}{index:02d}{AUDIO_EXT}"


def sox_line(input_path: str, output_path: str, d: SliceDescriptor) -> str:
    return f"{input_path} {output_path} trim {d.start_point}s ={d.end_point}s"


def sox_lines(path, record: FixedRecord) -> list[str]:
    audio = audio_path_for(path)
    return [sox_line(audio, slice_output_path(path, d.index), d) for d in extract_slices(record)]
