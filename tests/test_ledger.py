from __future__ import annotations

import pytest

from mdcolor import ledger


def test_placeholder_format():
    led = ledger.RegionLedger()
    assert led.protect("first") == "\x1b[256m0\x1b[m"
    assert led.protect("second") == "\x1b[256m1\x1b[m"
    assert len(led) == 2


def test_placeholder_has_nothing_to_match():
    token = ledger.placeholder(12)
    assert "\n" not in token
    assert not set("#*_~`>!") & set(token)
    assert ledger.hasPlaceholders(token)
    assert not ledger.hasPlaceholders("plain [text]")


def test_round_trip():
    led = ledger.RegionLedger()
    text = "**bold** and `code`\n"
    assert led.restore(led.protect(text)) == text


def test_restore_inside_text():
    led = ledger.RegionLedger()
    token = led.protect("X")
    assert led.restore(f"a {token} b {token}") == "a X b X"


def test_restore_nested():
    led = ledger.RegionLedger()
    inner = led.protect("link")
    outer = led.protect(f"[{inner}]")
    assert led.restore(f"see {outer}") == "see [link]"


def test_restore_idempotent():
    led = ledger.RegionLedger()
    text = "a " + led.protect("b " + led.protect("c"))
    once = led.restore(text)
    assert led.restore(once) == once


def test_unknown_index():
    led = ledger.RegionLedger()
    led.protect("only")
    with pytest.raises(ledger.LedgerError) as excinfo:
        led.restore(ledger.placeholder(5))
    assert str(excinfo.value) == "restore failed: index 5 (ledger holds 1 fragments)"
    assert excinfo.value.index == 5


def test_ledgers_are_independent():
    a = ledger.RegionLedger()
    b = ledger.RegionLedger()
    a.protect("x")
    assert len(b) == 0
    with pytest.raises(ledger.LedgerError):
        b.restore(ledger.placeholder(0))
