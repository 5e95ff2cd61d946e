from __future__ import annotations

import pytest

from mdcolor import regions

DOC = """\
# Title

```
code
```

<!-- hidden -->

| a | b |
|---|---|
| 1 | 2 |

* item one
1. item two

Term
: definition
"""


def span_text(name):
    return [DOC[start:end] for start, end in regions.spans(DOC, name)]


def test_code_block():
    assert span_text("CODE_BLOCK") == ["```\ncode\n```"]


def test_comment():
    assert span_text("COMMENT") == ["<!-- hidden -->"]


def test_table():
    assert span_text("TABLE") == ["| a | b |\n|---|---|\n| 1 | 2 |\n"]


def test_list_items():
    assert span_text("LIST_ITEM") == ["* item one\n1. item two\n"]


def test_definition():
    assert span_text("DEFINITION") == ["Term\n: definition\n"]


def test_spans_are_sorted_and_merged():
    found = regions.spans(DOC)
    assert found == sorted(found)
    for (_, end), (start, _) in zip(found, found[1:]):
        assert end < start


def test_unknown_region():
    with pytest.raises(KeyError):
        regions.spans(DOC, "PARAGRAPH")


def test_merge():
    assert regions.merge([(5, 8), (0, 3), (2, 4), (8, 9)]) == [(0, 4), (5, 9)]


def test_contains():
    found = [(0, 4), (10, 12)]
    assert regions.contains(found, 3)
    assert not regions.contains(found, 4)
    assert regions.contains(found, 10)


@pytest.mark.parametrize(
    ("line", "indent"),
    [
        ("* item", "  "),
        ("  - item", "    "),
        ("12. item", "    "),
        ("#) item", "   "),
        (": definition", "  "),
        ("    indented", "    "),
        ("plain", ""),
    ],
)
def test_hanging_indent(line, indent):
    assert regions.hangingIndent(line) == indent
