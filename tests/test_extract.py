import struct

import pytest

from ot_core.protocol import OFF_SLICE_COUNT
from ot_core.reader import decode, load
from ot_core.writer import encode
from ot_slice.extract import SliceCountWarning, SliceDescriptor, extract_slices


def test_two_slice_scenario(make_ot):
    rec = load(make_ot(slices=[(126, 8872, 0), (9000, 15000, 0)]))
    got = list(extract_slices(rec))
    assert got == [
        SliceDescriptor(index=0, start_point=126, end_point=8872, loop_point=0),
        SliceDescriptor(index=1, start_point=9000, end_point=15000, loop_point=0),
    ]


def test_zero_slices_yield_nothing(make_ot):
    rec = load(make_ot(slices=[]))
    assert list(extract_slices(rec)) == []


def test_ordering_follows_disk_order(make_ot):
    # Descending sample offsets: order must still follow slice index.
    table = [(1000 - i * 10, 1005 - i * 10, 0) for i in range(20)]
    got = list(extract_slices(load(make_ot(slices=table))))
    assert [d.index for d in got] == list(range(20))
    assert [(d.start_point, d.end_point) for d in got] == [(s, e) for s, e, _ in table]


def test_count_above_capacity_is_clamped():
    buf = bytearray(encode(slices=[(i, i + 1, 0) for i in range(64)]))
    struct.pack_into(">I", buf, OFF_SLICE_COUNT, 70)
    rec = decode(bytes(buf))

    with pytest.warns(SliceCountWarning, match="70"):
        got = list(extract_slices(rec))
    assert len(got) == 64
    assert got[-1].index == 63


def test_no_warning_at_capacity(make_ot, recwarn):
    rec = load(make_ot(slices=[(i, i + 1, 0) for i in range(64)]))
    assert len(list(extract_slices(rec))) == 64
    assert not [w for w in recwarn if issubclass(w.category, SliceCountWarning)]
