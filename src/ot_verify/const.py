ERRORS = {
  "E_OT_IO": "Settings file cannot be read",
  "E_OT_SIZE": "Settings file length does not match the record size",
  "E_OT_HEADER": "Settings file header magic invalid",
  "E_OT_SLICE_COUNT": "Slice count exceeds slice array capacity",
  "E_OT_SLICE_RANGE": "Slice start point is after its end point",
  "E_OT_CHECKSUM": "Stored checksum does not match file content",
}
