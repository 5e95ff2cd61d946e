from __future__ import annotations

import re

from . import constants, t

# Text transforms that a color override can attach by name:
#   --cm h2='L25D/<Teal>&close_hashes'
# They run after styling, so every one of them has to leave
# escape sequences alone and only touch the visible text.

REGISTRY: dict[str, t.Callable[[str], str]] = {}


def transform(name: str) -> t.Callable[[t.Callable[[str], str]], t.Callable[[str], str]]:
    def register(fn: t.Callable[[str], str]) -> t.Callable[[str], str]:
        REGISTRY[name] = fn
        return fn

    return register


def get(name: str) -> t.Callable[[str], str] | None:
    return REGISTRY.get(name)


def names() -> list[str]:
    return sorted(REGISTRY)


def splitEscapes(text: str) -> list[str]:
    # Even indexes are visible text, odd indexes are escape sequences.
    pieces = []
    lastEnd = 0
    for match in constants.escapeRe.finditer(text):
        pieces.append(text[lastEnd : match.start()])
        pieces.append(match.group(0))
        lastEnd = match.end()
    pieces.append(text[lastEnd:])
    return pieces


def mapVisible(text: str, fn: t.Callable[[str], str]) -> str:
    """
    Applies fn to each run of visible text,
    passing escape sequences through untouched.
    """
    pieces = splitEscapes(text)
    for i in range(0, len(pieces), 2):
        pieces[i] = fn(pieces[i])
    return "".join(pieces)


def visibleText(text: str) -> str:
    return constants.escapeRe.sub("", text)


# Trailing escapes (resets, erase-line) that close a styled run.
TRAILING_ESCAPES_RE = re.compile(r"((?:" + constants.escapeRe.pattern + r")*)\Z")


@transform("upper")
def upper(text: str) -> str:
    return mapVisible(text, str.upper)


@transform("lower")
def lower(text: str) -> str:
    return mapVisible(text, str.lower)


@transform("chomp")
def chomp(text: str) -> str:
    # Drops a single trailing newline, even if the closing escapes come after it.
    match = TRAILING_ESCAPES_RE.search(text)
    assert match is not None
    body, tail = text[: match.start()], match.group(1)
    if body.endswith("\n"):
        body = body[:-1]
    elif tail.endswith("\n"):
        tail = tail[:-1]
    return body + tail


@transform("close_hashes")
def closeHashes(text: str) -> str:
    # "## Title" becomes "## Title ##", unless it already ends in a hash.
    visible = visibleText(text)
    opening = re.match(r"\s*(#{1,6})[ \t]", visible)
    if not opening or visible.rstrip("\n").endswith("#"):
        return text
    match = TRAILING_ESCAPES_RE.search(text)
    assert match is not None
    body, tail = text[: match.start()], match.group(1)
    newline = ""
    if body.endswith("\n"):
        body, newline = body[:-1], "\n"
    return body + " " + opening.group(1) + newline + tail


@transform("unbracket")
def unbracket(text: str) -> str:
    # "[label]" becomes "label"; the hyperlink escapes around it stay put.
    if not re.fullmatch(r"!?\[.*\]\n?", visibleText(text), re.S):
        return text
    pieces = splitEscapes(text)
    visibleIndexes = [i for i in range(0, len(pieces), 2) if pieces[i]]
    first, last = visibleIndexes[0], visibleIndexes[-1]
    pieces[first] = re.sub(r"^!?\[", "", pieces[first])
    pieces[last] = re.sub(r"\](\n?)$", r"\1", pieces[last])
    return "".join(pieces)
