"""Slice table: one Parquet row per slice across a batch of .ot files."""
from __future__ import annotations

import hashlib
from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from ot_core.reader import LoadError, decode
from ot_core.record import FixedRecord

from .extract import extract_slices, recording_clamps
from .sox import audio_path_for, slice_output_path

SLICE_TABLE_SCHEMA = pa.schema(
    [
        ("source", pa.string()),
        ("source_hash", pa.string()),
        ("audio", pa.string()),
        ("output", pa.string()),
        ("slice_index", pa.int32()),
        ("start_point", pa.int64()),
        ("end_point", pa.int64()),
        ("loop_point", pa.int64()),
        ("tempo_bpm", pa.float64()),
    ]
)


def build_slice_rows(path, record: FixedRecord, source_hash: str) -> list[dict]:
    audio = audio_path_for(path)
    return [
        {
            "source": str(path),
            "source_hash": source_hash,
            "audio": audio,
            "output": slice_output_path(path, d.index),
            "slice_index": d.index,
            "start_point": d.start_point,
            "end_point": d.end_point,
            "loop_point": d.loop_point,
            "tempo_bpm": record.bpm,
        }
        for d in extract_slices(record)
    ]


def compile_slice_table(paths, out_path: Path) -> dict:
    """Write the slice table for `paths` to `out_path`.

    Files that fail to load are skipped and listed in the summary, as are
    clamped slice counts. Nothing is written when no slices were found.
    """
    rows: list[dict] = []
    loaded: list[str] = []
    skipped: list[dict] = []
    clamped: list[dict] = []

    for p in paths:
        # One read: the hash covers exactly the bytes that were decoded.
        try:
            raw = Path(p).read_bytes()
        except OSError as e:
            skipped.append({"path": str(p), "reason": e.strerror or str(e)})
            continue
        try:
            record = decode(raw, path=p)
        except LoadError as e:
            skipped.append({"path": e.path, "reason": e.reason})
            continue

        with recording_clamps() as messages:
            rows.extend(build_slice_rows(p, record, hashlib.sha256(raw).hexdigest()))
        clamped.extend({"path": str(p), "message": m} for m in messages)
        loaded.append(str(p))

    summary = {
        "files": len(loaded),
        "slices": len(rows),
        "skipped": skipped,
        "warnings": clamped,
        "out": None,
    }

    df = pd.DataFrame(rows, columns=SLICE_TABLE_SCHEMA.names)
    if df.empty:
        return summary

    df = df.sort_values(["source", "slice_index"])
    table = pa.Table.from_pandas(df, schema=SLICE_TABLE_SCHEMA, preserve_index=False)
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(table, out_path)

    summary["out"] = str(out_path)
    return summary
