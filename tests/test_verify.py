import struct

from ot_core.protocol import OFF_SLICE_COUNT, OFF_SLICES, OT_FILE_LEN
from ot_core.writer import encode
from ot_core.checksum import compute_checksum
from ot_verify.logic import verify_ot


def codes(result):
    return [e["code"] for e in result["errors"]]


def test_checksum_sums_bytes_after_header():
    buf = bytearray(OT_FILE_LEN)
    buf[0:16] = b"\xff" * 16  # header is not summed
    buf[0x17] = 0x05
    buf[0x33D] = 0x01
    assert compute_checksum(buf) == 6


def test_checksum_wraps_to_16_bits():
    buf = bytearray(b"\xff" * OT_FILE_LEN)
    assert compute_checksum(buf) == (0xFF * (0x33E - 0x10)) & 0xFFFF


def test_valid_file_passes(tmp_path):
    p = tmp_path / "ok.ot"
    p.write_bytes(encode(slices=[(126, 8872, 0), (9000, 15000, 0)]))
    result = verify_ot(p)
    assert result["status"] == "PASS"
    assert result["error_count"] == 0
    assert result["path"] == str(p)


def test_missing_file(tmp_path):
    result = verify_ot(tmp_path / "missing.ot")
    assert result["status"] == "FAIL"
    assert codes(result) == ["E_OT_IO"]


def test_wrong_size_stops_verification(tmp_path):
    p = tmp_path / "short.ot"
    p.write_bytes(encode()[:-2])
    result = verify_ot(p)
    assert codes(result) == ["E_OT_SIZE"]
    assert result["errors"][0]["found"] == OT_FILE_LEN - 2


def test_bad_header(tmp_path):
    p = tmp_path / "hdr.ot"
    p.write_bytes(encode(header=b"X" * 16))
    assert codes(verify_ot(p)) == ["E_OT_HEADER"]


def test_errors_accumulate(tmp_path):
    buf = bytearray(encode(slices=[(500, 100, 0)] + [(0, 1, 0)] * 63))
    struct.pack_into(">I", buf, OFF_SLICE_COUNT, 70)  # also breaks the checksum
    p = tmp_path / "multi.ot"
    p.write_bytes(bytes(buf))

    result = verify_ot(p)
    assert result["status"] == "FAIL"
    assert codes(result) == ["E_OT_SLICE_COUNT", "E_OT_SLICE_RANGE", "E_OT_CHECKSUM"]
    assert result["errors"][1]["slice_index"] == 0


def test_flipped_byte_breaks_checksum(tmp_path):
    buf = bytearray(encode(slices=[(126, 8872, 0)]))
    buf[OFF_SLICES + 3] ^= 0x01
    p = tmp_path / "flip.ot"
    p.write_bytes(bytes(buf))
    assert codes(verify_ot(p)) == ["E_OT_CHECKSUM"]
