import hashlib
import struct

import pyarrow.parquet as pq

from ot_core.protocol import OFF_SLICE_COUNT
from ot_core.writer import encode
from ot_slice.table import SLICE_TABLE_SCHEMA, compile_slice_table


def test_slice_table_rows(make_ot, tmp_path):
    a = make_ot("a.ot", slices=[(126, 8872, 0), (9000, 15000, 5)], tempo=2880)
    b = make_ot("b.ot", slices=[(0, 100, 0)], tempo=3000)
    out = tmp_path / "out" / "slices.parquet"

    summary = compile_slice_table([str(b), str(a)], out)
    assert summary == {"files": 2, "slices": 3, "skipped": [], "warnings": [], "out": str(out)}

    table = pq.read_table(out)
    assert table.schema.equals(SLICE_TABLE_SCHEMA, check_metadata=False)

    rows = table.to_pylist()
    assert [(r["source"], r["slice_index"]) for r in rows] == [
        (str(a), 0), (str(a), 1), (str(b), 0),
    ]
    first = rows[0]
    assert first["audio"] == str(tmp_path / "a.wav")
    assert first["output"] == str(tmp_path / "a00.wav")
    assert (first["start_point"], first["end_point"]) == (126, 8872)
    assert rows[1]["loop_point"] == 5
    assert first["tempo_bpm"] == 120.0
    assert rows[2]["tempo_bpm"] == 125.0
    assert first["source_hash"] == hashlib.sha256(a.read_bytes()).hexdigest()


def test_bad_files_are_skipped(make_ot, tmp_path):
    good = make_ot("good.ot", slices=[(1, 2, 0)])
    bad = tmp_path / "bad.ot"
    bad.write_bytes(b"\x00" * 10)
    out = tmp_path / "slices.parquet"

    summary = compile_slice_table([str(bad), str(good), str(tmp_path / "gone.ot")], out)
    assert summary["files"] == 1
    assert summary["slices"] == 1
    assert [s["path"] for s in summary["skipped"]] == [str(bad), str(tmp_path / "gone.ot")]
    assert pq.read_table(out).num_rows == 1


def test_empty_batch_writes_nothing(make_ot, tmp_path):
    empty = make_ot("empty.ot", slices=[])
    out = tmp_path / "slices.parquet"
    summary = compile_slice_table([str(empty)], out)
    assert summary["out"] is None
    assert not out.exists()


def test_directory_is_skipped(make_ot, tmp_path):
    good = make_ot("good.ot", slices=[(1, 2, 0)])
    d = tmp_path / "dir.ot"
    d.mkdir()
    summary = compile_slice_table([str(d), str(good)], tmp_path / "slices.parquet")
    assert [s["path"] for s in summary["skipped"]] == [str(d)]
    assert summary["slices"] == 1


def test_each_clamp_is_reported_per_file(tmp_path):
    buf = bytearray(encode(slices=[(i, i + 1, 0) for i in range(64)]))
    struct.pack_into(">I", buf, OFF_SLICE_COUNT, 70)
    paths = []
    for name in ("a.ot", "b.ot"):
        p = tmp_path / name
        p.write_bytes(bytes(buf))
        paths.append(str(p))

    summary = compile_slice_table(paths, tmp_path / "slices.parquet")
    assert summary["slices"] == 128
    assert [w["path"] for w in summary["warnings"]] == paths
    assert all("70" in w["message"] for w in summary["warnings"])
