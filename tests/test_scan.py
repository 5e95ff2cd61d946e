from __future__ import annotations

import pytest

from mdcolor import scan


def fences(text):
    return [fence for _, _, fence in scan.findFences(text)]


def test_fence():
    text = "before\n  ```python  \nx = 1\n\ny = 2\n  ```  \nafter\n"
    [(start, end, fence)] = list(scan.findFences(text))
    assert text[start:end] == "  ```python  \nx = 1\n\ny = 2\n  ```  "
    assert fence.indent == "  "
    assert fence.fence == "```"
    assert fence.info == "python  "
    assert fence.body == "x = 1\n\ny = 2\n"
    assert fence.closeIndent == "  "
    assert fence.trail == "  "


def test_fence_prefers_full_run():
    # The full-length closer wins over the shorter run before it.
    text = "````\n```\n`````\n~~~~\n````\n"
    [fence] = fences(text)
    assert fence.body == "```\n`````\n~~~~\n"


def test_fence_closes_on_shorter_run():
    # No four-tick closer, so the block is a three-tick fence with "`" as info.
    [fence] = fences("````\n**x**\n```\n")
    assert fence.fence == "```"
    assert fence.info == "`"
    assert fence.body == "**x**\n"


def test_fence_closer_at_end_of_text():
    [fence] = fences("~~~\ncode\n~~~")
    assert fence.body == "code\n"


def test_unclosed_fence_is_text():
    text = "```\nnever closed\n~~~\ninner\n~~~\n"
    [fence] = fences(text)
    assert fence.fence == "~~~"
    assert fence.body == "inner\n"


def test_fences_are_independent():
    text = "```\na\n```\n~~~\nb\n~~~\n"
    assert [(f.fence, f.body) for f in fences(text)] == [("```", "a\n"), ("~~~", "b\n")]


def test_fence_indent_limit():
    assert fences("    ```\ncode\n    ```\n") == []
    assert fences("```\ncode\n    ```\n") == []


def test_code_spans():
    spans = list(scan.findCodeSpans("a `b` and ``c ` d`` e"))
    assert [(s.ticks, s.content) for _, _, s in spans] == [("`", "b"), ("``", "c ` d")]


def test_code_span_retries_shorter_run():
    [(start, end, span)] = list(scan.findCodeSpans("``a`"))
    assert (start, end) == (1, 4)
    assert span.content == "a"


def test_code_span_stays_on_one_line():
    assert list(scan.findCodeSpans("`a\nb`")) == []
    assert list(scan.findCodeSpans("``")) == []


def spans(delimiter, text):
    return [span for _, _, span in delimiter.finditer(text)]


@pytest.mark.parametrize(
    ("delimiter", "text", "expected"),
    [
        (scan.BOLD_STARS, "a **b** c **d**", ["**b**", "**d**"]),
        (scan.BOLD_STARS, "\\**no**", []),
        (scan.BOLD_STARS, "**no\\**", []),
        (scan.BOLD_STARS, "`**no**", []),
        (scan.BOLD_STARS, "**no\nthing**", []),
        (scan.BOLD_UNDERSCORES, "__yes__", ["__yes__"]),
        (scan.BOLD_UNDERSCORES, "a__no__", []),
        (scan.BOLD_UNDERSCORES, "__no__a", []),
        (scan.ITALIC_UNDERSCORE, "_yes_ and _this_", ["_yes_", "_this_"]),
        (scan.ITALIC_UNDERSCORE, "snake_case_name", []),
        (scan.ITALIC_UNDERSCORE, "__", []),
        (scan.ITALIC_STAR, "*yes* a*b*c", ["*yes*", "*b*"]),
        (scan.ITALIC_STAR, "**no**", []),
        (scan.ITALIC_STAR, "* list item", []),
        (scan.STRIKE, "~~gone~~", ["~~gone~~"]),
        (scan.STRIKE, "~~~~", []),
        (scan.STRIKE, "\\~~no~~", []),
    ],
)
def test_delimiters(delimiter, text, expected):
    assert spans(delimiter, text) == expected


def test_link_text():
    assert scan.scanLinkText("[text](u)", 1) == 5
    assert scan.scanLinkText("[a `]` b](u)", 1) == 8
    assert scan.scanLinkText("[a \\] b](u)", 1) == 7
    assert scan.scanLinkText("[](u)", 1) is None
    assert scan.scanLinkText("[a\nb](u)", 1) is None
    assert scan.scanLinkText("[a `b](u)", 1) is None


def test_url():
    assert scan.scanUrl("(https://x.com)", 0) == ("https://x.com", 15)
    assert scan.scanUrl("(<https://x.com>)", 0) == ("https://x.com", 17)
    assert scan.scanUrl("(a b)", 0) is None
    assert scan.scanUrl("()", 0) is None


def test_find_links():
    text = "[one](a) ![img](b) [two](<c>)"
    assert [(m.text, m.url) for _, _, m in scan.findLinks(text)] == [("one", "a"), ("two", "c")]
    assert [(m.text, m.url) for _, _, m in scan.findImages(text)] == [("img", "b")]


def test_find_links_skips_escapes():
    assert list(scan.findLinks("\x1b[1m](x)")) == []


def test_find_image_links():
    text = "[![alt text](img.png \"title\")](https://x.com)"
    [(start, end, match)] = list(scan.findImageLinks(text))
    assert (start, end) == (0, len(text))
    assert match.text == "alt text"
    assert match.imageUrl == 'img.png "title"'
    assert match.url == "https://x.com"


def test_sub_spans():
    text = "a **b** c"
    assert scan.subSpans(text, scan.BOLD_STARS.finditer(text), str.upper) == "a **B** c"
