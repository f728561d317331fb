import sys
from pathlib import Path

from ot_core.protocol import OFF_SLICES, OT_FILE_LEN

def main():
    if len(sys.argv) != 2:
        print("Usage: corrupt_one_byte.py <file.ot>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = bytearray(p.read_bytes())
    if len(b) != OT_FILE_LEN:
        print(f"Not a {OT_FILE_LEN}-byte .ot file.")
        raise SystemExit(2)

    # Flip the low byte of slice 0's start point.
    # The file stays loadable; only the checksum no longer matches.
    idx = OFF_SLICES + 3
    b[idx] ^= 0x01
    p.write_bytes(bytes(b))
    print(f"Corrupted 1 byte at offset {idx} in {p}")

if __name__ == "__main__":
    main()
