"""
seqguid_core/layout.py - Placement of the timestamp fields in a GUID

Offsets refer to the GUID byte array as Microsoft platforms see it
(uuid.UUID.bytes_le). Six bytes carry the timestamp; the other ten are
left alone.

Reversed layout (default). SQL Server compares uniqueidentifier values
starting from the last six bytes, so the fields go there, most
significant byte first:

    offset  0 .. 9    10 .. 13          14 .. 15
            random    time_ticks (BE)   day_offset (BE)

Forward layout. The fields lead the array in little-endian order:

    offset  0 .. 1           2 .. 5            6 .. 15
            day_offset (LE)  time_ticks (LE)   random
"""

from __future__ import annotations


GUID_SIZE = 16
DAY_OFFSET_SIZE = 2
TIME_OF_DAY_SIZE = 4

_REVERSED_DAYS = slice(GUID_SIZE - DAY_OFFSET_SIZE, GUID_SIZE)
_REVERSED_TIME = slice(
    GUID_SIZE - DAY_OFFSET_SIZE - TIME_OF_DAY_SIZE,
    GUID_SIZE - DAY_OFFSET_SIZE,
)
_FORWARD_DAYS = slice(0, DAY_OFFSET_SIZE)
_FORWARD_TIME = slice(DAY_OFFSET_SIZE, DAY_OFFSET_SIZE + TIME_OF_DAY_SIZE)


def _check_size(buffer: bytes) -> None:
    if len(buffer) != GUID_SIZE:
        raise ValueError(
            f"GUID buffer must be {GUID_SIZE} bytes, got {len(buffer)}"
        )


def field_offsets(reversed_byte_order: bool = True) -> dict[str, slice]:
    """Return the byte slices holding 'day_offset' and 'time_ticks'."""
    if reversed_byte_order:
        return {"day_offset": _REVERSED_DAYS, "time_ticks": _REVERSED_TIME}
    return {"day_offset": _FORWARD_DAYS, "time_ticks": _FORWARD_TIME}


def embed(
    buffer: bytes,
    day_offset: int,
    time_ticks: int,
    reversed_byte_order: bool = True,
) -> bytes:
    """Return a copy of buffer with the timestamp fields written in.

    Args:
        buffer: 16 source bytes in GUID byte order.
        day_offset: 0..0xFFFF.
        time_ticks: 0..0xFFFFFFFF.
        reversed_byte_order: Layout mode (see module docstring).

    Raises:
        ValueError: If buffer is not 16 bytes long.
        OverflowError: If a field value does not fit its width.
    """
    _check_size(buffer)

    byteorder = "big" if reversed_byte_order else "little"
    offsets = field_offsets(reversed_byte_order)

    result = bytearray(buffer)
    result[offsets["day_offset"]] = day_offset.to_bytes(
        DAY_OFFSET_SIZE, byteorder=byteorder
    )
    result[offsets["time_ticks"]] = time_ticks.to_bytes(
        TIME_OF_DAY_SIZE, byteorder=byteorder
    )
    return bytes(result)


def extract(buffer: bytes, reversed_byte_order: bool = True) -> tuple[int, int]:
    """Read (day_offset, time_ticks) back out of a GUID byte array.

    Raises:
        ValueError: If buffer is not 16 bytes long.
    """
    _check_size(buffer)

    byteorder = "big" if reversed_byte_order else "little"
    offsets = field_offsets(reversed_byte_order)

    day_offset = int.from_bytes(buffer[offsets["day_offset"]], byteorder)
    time_ticks = int.from_bytes(buffer[offsets["time_ticks"]], byteorder)
    return day_offset, time_ticks
