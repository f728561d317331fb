from .protocol import OFF_CHECKSUM, OFF_RESERVED

def compute_checksum(buf) -> int:
    """16-bit sum of every byte after the header, up to the checksum field."""
    return sum(buf[OFF_RESERVED:OFF_CHECKSUM]) & 0xFFFF
