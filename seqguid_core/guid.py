"""
seqguid_core/guid.py - Sequential GUID generation and inspection

A sequential GUID is an ordinary random GUID with its creation time
written over six fixed bytes (see layout.py). Used as a primary key,
new values land near each other in the index instead of at random
pages, and the creation time can be read back for journaling.

    new_sequential_guid()   random base, current time
    new_seeded_guid(seed)   deterministic base, for reproducible tests
    get_create_time(guid)   embedded time, or None

All functions are pure; no state is shared between calls.
"""

from __future__ import annotations

import logging
import random
import uuid
from datetime import datetime, timezone
from typing import Optional, Union

from .layout import GUID_SIZE, embed, extract
from .options import GenerationOptions
from .timecode import decode_timestamp, encode_timestamp

logger = logging.getLogger(__name__)

EMPTY_GUID = uuid.UUID(int=0)


# ---------------------------------------------------------------------------
# Base bytes
# ---------------------------------------------------------------------------

def _random_base() -> bytes:
    return uuid.uuid4().bytes_le


def _seeded_base(seed: int) -> bytes:
    # One Random instance per call; never shared between threads.
    # Seeding from the signed bytes keeps n and -n apart (an int seed
    # is reduced to abs(seed)).
    material = seed.to_bytes((seed.bit_length() + 8) // 8, "little", signed=True)
    return random.Random(material).randbytes(GUID_SIZE)


def _stamp(
    base: bytes,
    created_at: Optional[datetime],
    reversed_byte_order: bool,
) -> uuid.UUID:
    if created_at is None:
        created_at = datetime.now(timezone.utc)
    day_offset, time_ticks = encode_timestamp(created_at)
    stamped = embed(base, day_offset, time_ticks, reversed_byte_order)
    if stamped == EMPTY_GUID.bytes_le:
        raise ValueError(
            "Generated GUID is the empty GUID; use a non-empty base "
            "or a created_at after the first tick of 2000-01-01"
        )
    return uuid.UUID(bytes_le=stamped)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

def new_sequential_guid(
    base: Optional[uuid.UUID] = None,
    created_at: Optional[datetime] = None,
    reversed_byte_order: bool = True,
) -> uuid.UUID:
    """Generate a sequential GUID.

    Args:
        base: Existing GUID to take the ten random bytes from. A fresh
              uuid4 is used if omitted.
        created_at: Time to embed. Defaults to the current UTC time.
                    Naive datetimes are read as UTC.
        reversed_byte_order: True (default) for the SQL Server layout,
                             False for the forward layout.

    Returns:
        The new GUID. Bytes outside the six timestamp bytes equal base.

    Raises:
        TimestampOutOfRangeError: If created_at is before 2000-01-01 UTC
            or more than 65535 days after it.
        ValueError: If the result would be the empty (all-zero) GUID,
            i.e. base is empty and created_at falls in the first tick
            of the epoch.
    """
    source = base.bytes_le if base is not None else _random_base()
    result = _stamp(source, created_at, reversed_byte_order)
    logger.debug(
        "Generated sequential GUID %s (reversed=%s, base=%s)",
        result, reversed_byte_order, "given" if base is not None else "random",
    )
    return result


def new_seeded_guid(
    seed: int,
    created_at: Optional[datetime] = None,
    reversed_byte_order: bool = True,
) -> uuid.UUID:
    """Generate a sequential GUID from a seeded pseudo-random base.

    Same seed and same created_at (to the tick) give the same GUID.
    The base is NOT cryptographically random; use new_sequential_guid()
    for real identifiers.
    """
    result = _stamp(_seeded_base(seed), created_at, reversed_byte_order)
    logger.debug(
        "Generated seeded GUID %s (seed=%d, reversed=%s)",
        result, seed, reversed_byte_order,
    )
    return result


def generate(options: GenerationOptions) -> uuid.UUID:
    """Generate a sequential GUID from a GenerationOptions object."""
    if options.seed is not None:
        return new_seeded_guid(
            options.seed, options.created_at, options.reversed_byte_order
        )
    return new_sequential_guid(
        options.base, options.created_at, options.reversed_byte_order
    )


def sequential_guid() -> str:
    """Generate a sequential GUID as a string (for default_factory use)."""
    return str(new_sequential_guid())


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def get_create_time(
    guid: Union[uuid.UUID, bytes],
    reversed_byte_order: bool = True,
) -> Optional[datetime]:
    """Read the creation time embedded in a sequential GUID.

    Args:
        guid: A GUID, or its 16 bytes in GUID byte order (bytes_le).
        reversed_byte_order: The layout the GUID was generated with.
            Decoding with the wrong layout yields a meaningless time.

    Returns:
        The embedded time as an aware UTC datetime, accurate to 1/300 s
        and never later than the original. None for the empty GUID or
        if the decoded value is outside the datetime range.

    Raises:
        ValueError: If raw bytes are not exactly 16 bytes long.
    """
    raw = guid.bytes_le if isinstance(guid, uuid.UUID) else bytes(guid)

    if raw == EMPTY_GUID.bytes_le:
        logger.debug("Empty GUID carries no creation time")
        return None

    day_offset, time_ticks = extract(raw, reversed_byte_order)
    try:
        return decode_timestamp(day_offset, time_ticks)
    except OverflowError:
        logger.debug(
            "Creation time out of range (day_offset=%d, time_ticks=%d)",
            day_offset, time_ticks,
        )
        return None
