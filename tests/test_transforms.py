from __future__ import annotations

from mdcolor import hyperlink, transforms


def test_registry():
    assert transforms.names() == ["chomp", "close_hashes", "lower", "unbracket", "upper"]
    assert transforms.get("upper") is transforms.upper
    assert transforms.get("nosuch") is None


def test_case_leaves_escapes_alone():
    assert transforms.upper("\x1b[1mabc\x1b[m") == "\x1b[1mABC\x1b[m"
    assert transforms.lower("\x1b[38;5;196mABC\x1b[K\x1b[m") == "\x1b[38;5;196mabc\x1b[K\x1b[m"


def test_case_leaves_urls_alone():
    linked = hyperlink.wrap("https://example.com/Path", "[Text]")
    assert transforms.upper(linked) == hyperlink.wrap("https://example.com/Path", "[TEXT]")


def test_chomp():
    assert transforms.chomp("abc\n") == "abc"
    assert transforms.chomp("abc") == "abc"
    assert transforms.chomp("\x1b[1mabc\n\x1b[m") == "\x1b[1mabc\x1b[m"


def test_close_hashes():
    assert transforms.closeHashes("\x1b[1m## Title\x1b[m") == "\x1b[1m## Title ##\x1b[m"
    assert transforms.closeHashes("## Title\n") == "## Title ##\n"
    assert transforms.closeHashes("## Title ##") == "## Title ##"
    assert transforms.closeHashes("not a heading") == "not a heading"


def test_unbracket():
    assert transforms.unbracket("\x1b[3m[text]\x1b[m") == "\x1b[3mtext\x1b[m"
    assert transforms.unbracket("![alt]") == "alt"
    linked = hyperlink.wrap("https://example.com", "\x1b[3m[text]\x1b[m")
    assert transforms.unbracket(linked) == hyperlink.wrap("https://example.com", "\x1b[3mtext\x1b[m")
    assert transforms.unbracket("no brackets") == "no brackets"


def test_visible_text():
    assert transforms.visibleText(hyperlink.wrap("https://x", "\x1b[1mhi\x1b[m")) == "hi"
