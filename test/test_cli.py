"""
test/test_cli.py - Tests for tools/seqguid_cli.py

Run: pytest test/test_cli.py -v
  or: python test/test_cli.py
"""

import io
import os
import sys
import uuid
from contextlib import redirect_stderr, redirect_stdout

# Ensure project root is on path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime, timezone

from seqguid_core.guid import get_create_time, new_seeded_guid
from tools.seqguid_cli import main, parse_timestamp


KNOWN_TIME = datetime(2010, 1, 2, 12, 30, 9, 10_000, tzinfo=timezone.utc)


def run_cli(*argv: str) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(list(argv))
    return code, out.getvalue(), err.getvalue()


# ==================================================================
# new
# ==================================================================

def test_new_default():
    code, out, _ = run_cli("new")
    assert code == 0
    lines = out.splitlines()
    assert len(lines) == 1
    assert get_create_time(uuid.UUID(lines[0])) is not None
    print("  PASS: test_new_default")


def test_new_count():
    code, out, _ = run_cli("new", "--count", "3")
    assert code == 0
    guids = [uuid.UUID(line) for line in out.splitlines()]
    assert len(set(guids)) == 3
    print("  PASS: test_new_count")


def test_new_seeded_matches_library():
    code, out, _ = run_cli("new", "--seed", "7", "--at", "2010-01-02T12:30:09.010Z")
    assert code == 0
    assert out.strip() == str(new_seeded_guid(7, KNOWN_TIME))
    print("  PASS: test_new_seeded_matches_library")


def test_new_forward_with_base():
    base = uuid.uuid4()
    code, out, _ = run_cli(
        "new", "--base", str(base), "--at", "2015-05-05T05:05:05Z", "--forward"
    )
    assert code == 0
    g = uuid.UUID(out.strip())
    assert g.bytes_le[6:] == base.bytes_le[6:]
    assert get_create_time(g, reversed_byte_order=False) == datetime(
        2015, 5, 5, 5, 5, 5, tzinfo=timezone.utc
    )
    print("  PASS: test_new_forward_with_base")


def test_new_rejects_time_before_epoch():
    code, out, err = run_cli("new", "--at", "1999-12-31T23:00:00Z")
    assert code == 1
    assert out == ""
    assert "ERROR" in err
    print("  PASS: test_new_rejects_time_before_epoch")


def test_new_rejects_base_with_seed():
    code, _, err = run_cli("new", "--seed", "1", "--base", str(uuid.uuid4()))
    assert code == 1
    assert "mutually exclusive" in err
    print("  PASS: test_new_rejects_base_with_seed")


def test_new_count_must_be_positive():
    for bad in ["0", "-2", "many"]:
        try:
            run_cli("new", "--count", bad)
            assert False, f"Should reject --count {bad}"
        except SystemExit as e:
            assert e.code == 2
    print("  PASS: test_new_count_must_be_positive")


def test_new_rejects_empty_result():
    code, out, err = run_cli(
        "new", "--base", str(uuid.UUID(int=0)), "--at", "2000-01-01T00:00:00Z"
    )
    assert code == 1
    assert out == ""
    assert "empty GUID" in err
    print("  PASS: test_new_rejects_empty_result")


# ==================================================================
# decode
# ==================================================================

def test_decode_known_guid():
    g = new_seeded_guid(7, KNOWN_TIME)
    code, out, _ = run_cli("decode", str(g))
    assert code == 0
    assert out.strip() == f"{g}  2010-01-02T12:30:09.010Z"
    print("  PASS: test_decode_known_guid")


def test_decode_bytes_view():
    g = new_seeded_guid(7, KNOWN_TIME)
    code, out, _ = run_cli("decode", str(g), "--bytes")
    assert code == 0
    # ticks 0x00CE08EF, day offset 3654 = 0x0E46
    assert out.rstrip().endswith("<00ce08ef>[0e46]")

    g = new_seeded_guid(7, KNOWN_TIME, reversed_byte_order=False)
    code, out, _ = run_cli("decode", str(g), "--bytes", "--forward")
    assert code == 0
    assert "  [460e]<ef08ce00>" in out
    print("  PASS: test_decode_bytes_view")


def test_decode_empty_guid():
    code, out, _ = run_cli("decode", str(uuid.UUID(int=0)))
    assert code == 0
    assert out.strip().endswith("(none)")
    print("  PASS: test_decode_empty_guid")


def test_decode_several():
    g1 = new_seeded_guid(1, KNOWN_TIME)
    g2 = new_seeded_guid(2, KNOWN_TIME)
    code, out, _ = run_cli("decode", str(g1), str(g2))
    assert code == 0
    assert len(out.splitlines()) == 2
    print("  PASS: test_decode_several")


def test_decode_rejects_garbage():
    code, out, err = run_cli("decode", "not-a-guid")
    assert code == 1
    assert out == ""
    assert "ERROR" in err
    print("  PASS: test_decode_rejects_garbage")


# ==================================================================
# Helpers
# ==================================================================

def test_parse_timestamp():
    assert parse_timestamp("2010-01-02T12:30:09.010Z") == KNOWN_TIME
    assert parse_timestamp("2010-01-02T14:30:09.010+02:00") == KNOWN_TIME
    assert parse_timestamp("2010-01-02T12:30:09").tzinfo is None
    print("  PASS: test_parse_timestamp")


# ==================================================================
# Runner
# ==================================================================

def run_all():
    print("=" * 60)
    print("seqguid CLI Tests")
    print("=" * 60)

    test_new_default()
    test_new_count()
    test_new_seeded_matches_library()
    test_new_forward_with_base()
    test_new_rejects_time_before_epoch()
    test_new_rejects_base_with_seed()
    test_new_count_must_be_positive()
    test_new_rejects_empty_result()
    test_decode_known_guid()
    test_decode_bytes_view()
    test_decode_empty_guid()
    test_decode_several()
    test_decode_rejects_garbage()
    test_parse_timestamp()

    print("=" * 60)
    print("ALL TESTS PASSED")
    print("=" * 60)


if __name__ == "__main__":
    run_all()
