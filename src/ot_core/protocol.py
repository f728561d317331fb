"""Octatrack slice settings (.ot) protocol constants.

Single source of truth for on-disk magic values and the record layout.
Keep this file stable. Reader, writer and verifier must remain synchronized.
"""
import struct

# File magic: "FORM" | 0000 | "DPS1SMPA"
OT_HEADER_MAGIC = b"FORM\x00\x00\x00\x00DPS1SMPA"
OT_HEADER_LEN = 16

# Reserved block after the header, all blank except 0x15 = 2
OT_RESERVED_BYTES = b"\x00\x00\x00\x00\x00\x02\x00"
OT_RESERVED_LEN = 7

SETTINGS_EXT = ".ot"
AUDIO_EXT = ".wav"

# Field offsets. Every multi-byte field is big-endian, layout is packed.
OFF_HEADER = 0x00
OFF_RESERVED = 0x10
OFF_TEMPO = 0x17  # u32, BPM * 24
OFF_TRIM_LEN = 0x1B  # u32, value * 100
OFF_LOOP_LEN = 0x1F  # u32, value * 100
OFF_STRETCH = 0x23  # u32
OFF_LOOP = 0x27  # u32
OFF_GAIN = 0x2B  # u16, 0x30 = 0 dB
OFF_QUANTIZE = 0x2D  # u8
OFF_TRIM_START = 0x2E  # u32
OFF_TRIM_END = 0x32  # u32
OFF_LOOP_POINT = 0x36  # u32
OFF_SLICES = 0x3A  # 64 * [start(4) | end(4) | loop(4)]
OFF_SLICE_COUNT = 0x33A  # u32
OFF_CHECKSUM = 0x33E  # u16

# Slice entry: [StartPoint(4) | EndPoint(4) | LoopPoint(4)] = 12 bytes
MAX_SLICES = 64
SLICE_REC_FMT = ">III"
SLICE_REC_LEN = 12

# Whole file, in field order:
# header | reserved | tempo | trimLen | loopLen | stretch | loop | gain |
# quantize | trimStart | trimEnd | loopPoint | slices | sliceCount | checksum
OT_FILE_FMT = f">{OT_HEADER_LEN}s{OT_RESERVED_LEN}sIIIIIHBIII{MAX_SLICES * SLICE_REC_LEN}sIH"
OT_FILE_LEN = struct.calcsize(OT_FILE_FMT)

assert struct.calcsize(SLICE_REC_FMT) == SLICE_REC_LEN
assert OFF_SLICES + MAX_SLICES * SLICE_REC_LEN == OFF_SLICE_COUNT
assert OFF_CHECKSUM + 2 == OT_FILE_LEN

# Gain: 0x00 = -24 dB, 0x30 = 0 dB, 0x60 = +24 dB
GAIN_ZERO_DB = 0x30
GAIN_STEPS_PER_DB = 2

TEMPO_SCALE = 24
LENGTH_SCALE = 100
