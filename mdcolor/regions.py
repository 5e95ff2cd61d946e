from __future__ import annotations

import re

from . import t

# Regions of a Markdown document that a post-processor (a table formatter,
# or a folder that wraps long lines) must leave alone or treat specially.
# These are matched against the *uncolored* source.

CODE_BLOCK = re.compile(r"^ {0,3}(?=(`{3,}|~{3,}))\1(.*)\n[\s\S]*?^ {0,3}\1", re.M)
COMMENT = re.compile(r"^<!--(?![->])[\s\S]+?-->", re.M)
TABLE = re.compile(r"^ {0,3}(?:[│|├].+[│|┤]\n){3,}", re.M)
LIST_ITEM = re.compile(r"^[ \t]*(?:[*-]|(?:\d+|#)[.)])[ \t]+.*\n", re.M)
# A term line, an optional blank line, then a ": definition" line.
DEFINITION = re.compile(r"(?:\A|(?<=\n\n)).+\n\n?(:[ \t]+.*\n)")

PATTERNS: dict[str, re.Pattern] = {
    "CODE_BLOCK": CODE_BLOCK,
    "COMMENT": COMMENT,
    "TABLE": TABLE,
    "LIST_ITEM": LIST_ITEM,
    "DEFINITION": DEFINITION,
}

# The leading part of a line that its folded continuation lines
# are indented to match: list bullets, numbers, "#." / "#)",
# definition colons, or plain indentation.
LIST_MARKER = re.compile(r"^[ \t]*(?:[*-]|(?:\d+|#)[.)]|:)[ \t]+|^[ \t]+")


def spans(text: str, *names: str) -> list[t.SpanT]:
    """
    Returns the sorted (start, end) spans matched by the named patterns,
    with overlapping or touching spans merged.
    With no names, every pattern is used.
    """
    if not names:
        names = tuple(PATTERNS)
    found = []
    for name in names:
        if name not in PATTERNS:
            msg = f"Unknown region '{name}'; expected one of {', '.join(PATTERNS)}."
            raise KeyError(msg)
        found.extend(match.span() for match in PATTERNS[name].finditer(text))
    return merge(found)


def merge(spanList: t.Iterable[t.SpanT]) -> list[t.SpanT]:
    merged: list[t.SpanT] = []
    for start, end in sorted(spanList):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def contains(spanList: t.Sequence[t.SpanT], pos: int) -> bool:
    return any(start <= pos < end for start, end in spanList)


def hangingIndent(line: str) -> str:
    """
    The indentation a continuation of line should get:
    as many spaces as its list marker (plus padding) is wide.
    """
    match = LIST_MARKER.match(line)
    if not match:
        return ""
    return " " * len(match.group(0).expandtabs())
