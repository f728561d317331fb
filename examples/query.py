"""Query a slice table - list slices of one source with their lengths."""
from __future__ import annotations

import sys
from pathlib import Path

import duckdb


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python query.py <slices.parquet> [source.ot]")
        print("Example: python query.py slices.parquet demo_ot/demo.ot")
        sys.exit(1)

    table = Path(sys.argv[1])
    source = sys.argv[2] if len(sys.argv) > 2 else None

    con = duckdb.connect(":memory:")
    con.execute(f"CREATE VIEW slices AS SELECT * FROM '{table}'")

    sql = """
    SELECT
        source,
        slice_index,
        start_point,
        end_point,
        end_point - start_point AS length_samples,
        output
    FROM slices
    """
    params = []
    if source is not None:
        sql += " WHERE source = ?"
        params.append(source)
    sql += " ORDER BY source, slice_index"

    print(f"--- Slice Table: {table} ---")
    print(f"--- Source: {source or 'all'} ---\n")

    df = con.execute(sql, params).fetchdf()
    if df.empty:
        print("No slices found.")
    else:
        for _, row in df.iterrows():
            print(f"SLICE {row['slice_index']:02d}: {row['source']}")
            print(f"  Range: {row['start_point']}s - {row['end_point']}s ({row['length_samples']} samples)")
            print(f"  Output: {row['output']}")
            print()


if __name__ == "__main__":
    main()
