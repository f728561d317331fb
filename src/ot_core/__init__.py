"""OctaSlice Core - .ot record layout, reader and writer."""
from .reader import FormatError, LoadError, ReadError, decode, load, read_be
from .record import FixedRecord, LoopMode, QuantizeMode, SliceRecord, SliceTable, StretchMode

__all__ = [
    "load", "decode", "read_be",
    "LoadError", "FormatError", "ReadError",
    "FixedRecord", "SliceRecord", "SliceTable",
    "StretchMode", "LoopMode", "QuantizeMode",
]
