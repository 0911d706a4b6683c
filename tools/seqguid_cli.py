#!/usr/bin/env python3
"""
seqguid CLI - Mint and inspect sequential GUIDs.

Usage:
    python -m tools.seqguid_cli new [--count N] [--at ISO] [--seed N]
                                    [--base UUID] [--forward]
    python -m tools.seqguid_cli decode <guid> [<guid> ...] [--forward] [--bytes]

Commands:
    new     Print one or more sequential GUIDs, one per line
    decode  Print the creation time embedded in each GUID

Byte view legend (decode --bytes), GUID byte order:
    <....>  time of day ticks
    [....]  day offset
"""

import argparse
import logging
import os
import sys
import uuid
from datetime import datetime

# Ensure project root is on path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from seqguid_core.guid import generate, get_create_time
from seqguid_core.layout import field_offsets
from seqguid_core.options import GenerationOptions

logger = logging.getLogger("seqguid")


# ============================================================
# Formatting
# ============================================================

def parse_timestamp(text: str) -> datetime:
    """Parse an ISO 8601 timestamp; a trailing 'Z' means UTC."""
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def fmt_time(value: datetime | None) -> str:
    if value is None:
        return "(none)"
    return value.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def fmt_bytes(guid: uuid.UUID, reversed_byte_order: bool = True) -> str:
    """Hex dump of the GUID byte array with the timestamp fields marked."""
    raw = guid.bytes_le
    offsets = field_offsets(reversed_byte_order)
    days = offsets["day_offset"]
    ticks = offsets["time_ticks"]

    out = []
    for i, byte in enumerate(raw):
        if i == ticks.start:
            out.append("<")
        if i == days.start:
            out.append("[")
        out.append(f"{byte:02x}")
        if i == ticks.stop - 1:
            out.append(">")
        if i == days.stop - 1:
            out.append("]")
    return "".join(out)


# ============================================================
# Commands
# ============================================================

def cmd_new(options: GenerationOptions, count: int = 1) -> None:
    """Print count GUIDs generated from options."""
    for _ in range(count):
        print(generate(options))


def cmd_decode(
    guids: list[uuid.UUID],
    reversed_byte_order: bool = True,
    show_bytes: bool = False,
) -> None:
    """Print each GUID with its embedded creation time."""
    for guid in guids:
        created = get_create_time(guid, reversed_byte_order)
        line = f"{guid}  {fmt_time(created)}"
        if show_bytes:
            line += f"  {fmt_bytes(guid, reversed_byte_order)}"
        print(line)


# ============================================================
# Main
# ============================================================

def positive_int(text: str) -> int:
    """argparse type: an integer of at least 1."""
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="seqguid CLI - Sequential GUID generator and decoder",
        prog="python -m tools.seqguid_cli",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Generate sequential GUIDs")
    new.add_argument("--count", "-n", type=positive_int, default=1,
                     help="Number of GUIDs to print (default 1). With --seed, "
                          "GUIDs minted within one tick are identical")
    new.add_argument("--at", dest="created_at",
                     help="Creation time to embed, ISO 8601 (default: now)")
    new.add_argument("--seed", type=int,
                     help="Deterministic base; for reproducible test data")
    new.add_argument("--base",
                     help="Existing GUID to keep the random bytes of")
    new.add_argument("--forward", action="store_true",
                     help="Forward layout instead of the SQL Server layout")

    decode = sub.add_parser("decode", help="Show embedded creation times")
    decode.add_argument("guids", nargs="+", help="GUIDs to decode")
    decode.add_argument("--forward", action="store_true",
                        help="GUIDs use the forward layout")
    decode.add_argument("--bytes", dest="show_bytes", action="store_true",
                        help="Show the GUID bytes with fields marked")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.command == "new":
            options = GenerationOptions(
                base=uuid.UUID(args.base) if args.base else None,
                created_at=(
                    parse_timestamp(args.created_at)
                    if args.created_at else None
                ),
                seed=args.seed,
                reversed_byte_order=not args.forward,
            )
            cmd_new(options, count=args.count)
        elif args.command == "decode":
            guids = [uuid.UUID(text) for text in args.guids]
            cmd_decode(
                guids,
                reversed_byte_order=not args.forward,
                show_bytes=args.show_bytes,
            )
    except ValueError as e:  # also pydantic ValidationError
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"  ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
