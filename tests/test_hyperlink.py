from __future__ import annotations

from mdcolor import hyperlink


def test_wrap():
    assert hyperlink.wrap("https://example.com", "x") == "\x1b]8;;https://example.com\x1b\\x\x1b]8;;\x1b\\"


def test_wrap_keeps_styling_inside():
    styled = "\x1b[3m[link]\x1b[m"
    wrapped = hyperlink.wrap("https://example.com", styled)
    assert wrapped.startswith("\x1b]8;;https://example.com\x1b\\\x1b[3m")
    assert wrapped.endswith("\x1b[m\x1b]8;;\x1b\\")


def test_wrap_disabled():
    assert hyperlink.wrap("https://example.com", "x", enabled=False) == "x"


def test_escape_leaves_printable_ascii():
    url = "https://example.com/a/b?q=1&r=%20#frag"
    assert hyperlink.escapeUrl(url) == url


def test_escape_space_and_controls():
    assert hyperlink.escapeUrl("https://example.com/a b") == "https://example.com/a%20b"
    assert hyperlink.escapeUrl("https://example.com/\x1b\\") == "https://example.com/%1B\\"


def test_escape_utf8():
    assert hyperlink.escapeUrl("https://example.com/é") == "https://example.com/%C3%A9"
