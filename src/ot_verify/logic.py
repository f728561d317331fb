import json
from pathlib import Path
from ot_core.protocol import MAX_SLICES, OT_FILE_LEN, OT_HEADER_MAGIC
from ot_core.reader import decode
from ot_core.checksum import compute_checksum
from .const import ERRORS

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}

def canonical_json(obj) -> str:
    return json.dumps(obj, **CANONICAL_JSON_KW)

def _result(path: Path, errors: list) -> dict:
    return {
        "status": "FAIL" if errors else "PASS",
        "error_count": len(errors),
        "errors": errors,
        "path": str(path),
    }

def verify_ot(path: Path) -> dict:
    path = Path(path)
    errors = []

    # I/O and size failures leave nothing else to check.
    try:
        raw = path.read_bytes()
    except OSError as e:
        errors.append({"code":"E_OT_IO","message":ERRORS["E_OT_IO"],"detail":e.strerror or str(e)})
        return _result(path, errors)

    if len(raw) != OT_FILE_LEN:
        errors.append({"code":"E_OT_SIZE","message":ERRORS["E_OT_SIZE"],"expected":OT_FILE_LEN,"found":len(raw)})
        return _result(path, errors)

    record = decode(raw, path=path)

    if record.header != OT_HEADER_MAGIC:
        errors.append({"code":"E_OT_HEADER","message":ERRORS["E_OT_HEADER"],"found":record.header.hex()})

    if record.slice_count > MAX_SLICES:
        errors.append({"code":"E_OT_SLICE_COUNT","message":ERRORS["E_OT_SLICE_COUNT"],"declared":record.slice_count,"capacity":MAX_SLICES})

    for i, s in enumerate(record.slices):
        if s.start_point > s.end_point:
            errors.append({"code":"E_OT_SLICE_RANGE","message":ERRORS["E_OT_SLICE_RANGE"],"slice_index":i,"start_point":s.start_point,"end_point":s.end_point})

    computed = compute_checksum(raw)
    if record.checksum != computed:
        errors.append({"code":"E_OT_CHECKSUM","message":ERRORS["E_OT_CHECKSUM"],"expected":record.checksum,"computed":computed})

    return _result(path, errors)
