"""
seqguid_core - Sequential GUIDs with an embedded creation time.

GUIDs generated here keep 10 random bytes and carry their creation time
(day since 2000-01-01 plus 1/300 s tick of the day) in the remaining 6,
so that they cluster by time in database indices. The default layout
matches SQL Server's uniqueidentifier sort order.
"""

__version__ = "0.1.0"

from .timecode import (
    BASE_DATE,
    MAX_DAY_OFFSET,
    TICKS_PER_DAY,
    TICKS_PER_SECOND,
    TimestampOutOfRangeError,
    decode_timestamp,
    encode_timestamp,
    tick_resolution,
    to_utc,
)
from .layout import (
    DAY_OFFSET_SIZE,
    GUID_SIZE,
    TIME_OF_DAY_SIZE,
    embed,
    extract,
    field_offsets,
)
from .options import GenerationOptions
from .guid import (
    EMPTY_GUID,
    generate,
    get_create_time,
    new_seeded_guid,
    new_sequential_guid,
    sequential_guid,
)
