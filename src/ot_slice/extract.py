"""Slice extraction: FixedRecord -> ordered slice descriptors."""
from __future__ import annotations

import warnings
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from ot_core.protocol import MAX_SLICES
from ot_core.record import FixedRecord


class SliceCountWarning(UserWarning):
    """Declared slice count exceeds the 64-entry array; output is clamped."""


@dataclass(frozen=True)
class SliceDescriptor:
    index: int
    start_point: int
    end_point: int
    loop_point: int


def extract_slices(record: FixedRecord) -> Iterator[SliceDescriptor]:
    """Yield one descriptor per valid slice, index 0 first.

    Yields exactly min(slice_count, 64) descriptors. Sample offsets are
    passed through unchanged.
    """
    count = record.slice_count
    if count > MAX_SLICES:
        warnings.warn(
            f"Slice count {count} exceeds capacity {MAX_SLICES}; clamping to {MAX_SLICES}",
            SliceCountWarning,
        )
        count = MAX_SLICES

    for i in range(count):
        s = record.slices[i]
        yield SliceDescriptor(
            index=i,
            start_point=s.start_point,
            end_point=s.end_point,
            loop_point=s.loop_point,
        )


@contextmanager
def recording_clamps():
    """Collect SliceCountWarning messages raised inside the block.

    Every occurrence is kept, not just the first per call site, so a batch
    can attribute each clamp to its own file. The list is filled when the
    block exits. Other warnings are re-issued unchanged.
    """
    messages: list[str] = []
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", SliceCountWarning)
        yield messages
    for w in caught:
        if issubclass(w.category, SliceCountWarning):
            messages.append(str(w.message))
        else:
            warnings.warn_explicit(w.message, w.category, w.filename, w.lineno)
