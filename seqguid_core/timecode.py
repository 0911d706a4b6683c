"""
seqguid_core/timecode.py - Timestamp <-> (day offset, time ticks) conversion

A creation time is stored as two integers:

    day_offset   whole days since BASE_DATE            (16 bits, unsigned)
    time_ticks   1/300 s ticks since midnight UTC      (32 bits, unsigned)

1/300 s is the native time resolution of SQL Server, which is the engine
the default byte layout targets. Anything finer is lost.

Rounding is floor in both directions and uses exact integer arithmetic:

    encode: ticks = microseconds_of_day * 3 // 10_000
    decode: micro = ticks * 10_000 // 3

so a decoded value never lies after the original, and whole seconds
survive a round trip exactly.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# A near-present epoch keeps the day count inside 16 bits (~179 years).
BASE_DATE = datetime(2000, 1, 1, tzinfo=timezone.utc)

TICKS_PER_SECOND = 300
TICKS_PER_DAY = 24 * 60 * 60 * TICKS_PER_SECOND
MAX_DAY_OFFSET = 0xFFFF

_MICROSECONDS_PER_DAY = 24 * 60 * 60 * 1_000_000


class TimestampOutOfRangeError(ValueError):
    """Raised when a timestamp cannot be stored in the 16-bit day offset.

    Covers both epoch underflow (before BASE_DATE) and values after
    BASE_DATE + 65535 days.
    """


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def encode_timestamp(created_at: datetime) -> tuple[int, int]:
    """Split a point in time into (day_offset, time_ticks).

    The day offset is the truncated whole-day distance from BASE_DATE.
    The tick count only looks at the time-of-day component.

    Raises:
        TimestampOutOfRangeError: If the day offset does not fit in
            0..MAX_DAY_OFFSET.
    """
    moment = to_utc(created_at)

    day_offset = (moment - BASE_DATE).days
    if day_offset < 0:
        raise TimestampOutOfRangeError(
            f"{moment.isoformat()} precedes the epoch "
            f"{BASE_DATE.isoformat()}"
        )
    if day_offset > MAX_DAY_OFFSET:
        raise TimestampOutOfRangeError(
            f"{moment.isoformat()} is {day_offset} days after the epoch; "
            f"at most {MAX_DAY_OFFSET} days fit in the identifier"
        )

    micro_of_day = (
        (moment.hour * 3600 + moment.minute * 60 + moment.second) * 1_000_000
        + moment.microsecond
    )
    time_ticks = micro_of_day * 3 // 10_000
    return day_offset, time_ticks


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def decode_timestamp(day_offset: int, time_ticks: int) -> datetime:
    """Rebuild an aware UTC datetime from (day_offset, time_ticks).

    Tick counts beyond one day are not rejected; they simply roll into
    the following days, as with any timedelta.

    Raises:
        OverflowError: If the result is outside the datetime range.
    """
    micro = time_ticks * 10_000 // 3
    return BASE_DATE + timedelta(days=day_offset, microseconds=micro)


def tick_resolution() -> timedelta:
    """Largest amount of time lost by one encode/decode round trip."""
    return timedelta(microseconds=_MICROSECONDS_PER_DAY // TICKS_PER_DAY + 1)
