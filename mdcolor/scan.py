from __future__ import annotations

import dataclasses
import re

from . import t

# Small hand-written scanners for the constructs whose boundary rules
# are awkward (or catastrophically slow) as single regexes.
# Every scanner returns spans over the text it was given;
# it never modifies anything itself.

WORD_RE = re.compile(r"\w")

FENCE_OPEN_RE = re.compile(r"( {0,3})(`{3,}|~{3,})(.*)")


def isWord(char: str) -> bool:
    return bool(char) and WORD_RE.match(char) is not None


def lineEnd(text: str, start: int) -> int:
    end = text.find("\n", start)
    return len(text) if end == -1 else end


def subSpans(text: str, spans: t.Iterable[tuple[int, int, t.Any]], repl: t.Callable[[t.Any], str]) -> str:
    """
    Like re.sub(), but over (start, end, match) triples
    produced by one of the scanners below.
    The spans must be sorted and non-overlapping.
    """
    pieces = []
    lastEnd = 0
    for start, end, match in spans:
        pieces.append(text[lastEnd:start])
        pieces.append(repl(match))
        lastEnd = end
    pieces.append(text[lastEnd:])
    return "".join(pieces)


# Fenced code blocks


@dataclasses.dataclass
class Fence:
    start: int
    end: int
    indent: str
    fence: str
    info: str
    body: str
    closeIndent: str
    trail: str


def findFences(text: str) -> t.Generator[tuple[int, int, Fence], None, None]:
    """
    A three-state machine over the lines of text:
    outside a block, looking for an opener;
    inside one, looking for a closer made of exactly the same fence.
    If no line closes the whole run, a shorter fence (down to three)
    is tried, with the rest of the run taken as info.
    An opener that never closes is just text,
    and scanning picks up again on the line after it.
    The block's span stops before the closer's newline.
    """
    lines = text.splitlines(keepends=True)
    offsets = []
    pos = 0
    for line in lines:
        offsets.append(pos)
        pos += len(line)

    i = 0
    while i < len(lines):
        opener = lines[i]
        match = FENCE_OPEN_RE.fullmatch(opener[:-1]) if opener.endswith("\n") else None
        if not match:
            i += 1
            continue
        indent, run, rest = match.groups()
        found = None
        # The longest fence with a closer wins; what's left of the run becomes info.
        for length in range(len(run), 2, -1):
            fence = run[:length]
            closerRe = re.compile(r"( {0,3})" + re.escape(fence) + r"([ \t]*)")
            for j in range(i + 1, len(lines)):
                closer = closerRe.fullmatch(lines[j].rstrip("\n"))
                if closer:
                    found = (j, fence, run[length:] + rest, closer)
                    break
            if found:
                break
        if found is None:
            i += 1
            continue
        j, fence, info, closer = found
        start = offsets[i]
        end = offsets[j] + len(lines[j].rstrip("\n"))
        body = "".join(lines[i + 1 : j])
        yield start, end, Fence(start, end, indent, fence, info, body, closer.group(1), closer.group(2))
        i = j + 1


# Inline code


@dataclasses.dataclass
class CodeSpan:
    ticks: str
    content: str


def findCodeSpans(text: str) -> t.Generator[tuple[int, int, CodeSpan], None, None]:
    """
    A run of N backticks (all of them, counting from where the scan stands),
    then at least one character on the same line,
    then the next run of N backticks.
    If that fails the scan moves ahead one character,
    so "``a`" still finds "`a`" inside it.
    """
    i = 0
    n = len(text)
    while True:
        i = text.find("`", i)
        if i == -1:
            return
        j = i
        while j < n and text[j] == "`":
            j += 1
        ticks = text[i:j]
        close = text.find(ticks, j + 1)
        if close == -1 or "\n" in text[j:close]:
            i += 1
            continue
        end = close + len(ticks)
        yield i, end, CodeSpan(ticks, text[j:close])
        i = end


# Emphasis


@dataclasses.dataclass(frozen=True)
class Delimiter:
    """
    A symmetric inline delimiter like ** or ~~, with its boundary rules.
    The content never crosses a line, and the closer is never backslash-escaped.
    """

    mark: str
    # Characters that can't come right before the opener.
    notAfter: str = "\\`"
    notAfterWord: bool = False
    minContent: int = 0
    # Content can't contain the mark at all (single-character delimiters).
    markFree: bool = False
    notBeforeWord: bool = False
    # Characters that can't come right after the closer.
    notBefore: str = ""

    def openerOk(self, text: str, i: int) -> bool:
        prev = text[i - 1] if i > 0 else ""
        if prev and prev in self.notAfter:
            return False
        return not (self.notAfterWord and isWord(prev))

    def closerOk(self, text: str, k: int) -> bool:
        if text[k - 1] == "\\":
            return False
        after = k + len(self.mark)
        nextChar = text[after] if after < len(text) else ""
        if self.notBeforeWord and isWord(nextChar):
            return False
        return not (nextChar and nextChar in self.notBefore)

    def findCloser(self, text: str, start: int) -> int | None:
        end = lineEnd(text, start)
        if self.markFree:
            k = text.find(self.mark, start)
            if k == -1 or k >= end or k - start < self.minContent:
                return None
            return k if self.closerOk(text, k) else None
        k = start + self.minContent
        while True:
            k = text.find(self.mark, k)
            if k == -1 or k + len(self.mark) > end:
                return None
            if self.closerOk(text, k):
                return k
            k += 1

    def finditer(self, text: str) -> t.Generator[tuple[int, int, str], None, None]:
        i = 0
        while True:
            i = text.find(self.mark, i)
            if i == -1:
                return
            if not self.openerOk(text, i):
                i += 1
                continue
            close = self.findCloser(text, i + len(self.mark))
            if close is None:
                i += 1
                continue
            end = close + len(self.mark)
            yield i, end, text[i:end]
            i = end


BOLD_STARS = Delimiter("**")
BOLD_UNDERSCORES = Delimiter("__", notAfterWord=True, notBeforeWord=True)
ITALIC_UNDERSCORE = Delimiter("_", notAfterWord=True, minContent=1, markFree=True, notBeforeWord=True)
ITALIC_STAR = Delimiter("*", notAfter="\\`*", minContent=1, markFree=True, notBefore="*")
STRIKE = Delimiter("~~", minContent=1)


# Links and images


@dataclasses.dataclass
class LinkMatch:
    text: str
    url: str
    imageUrl: str = ""


def scanLinkText(text: str, i: int) -> int | None:
    """
    Scans link text starting just after its "[".
    Returns the index of the closing "]", or None.
    Backtick spans may contain "]", backslash escapes anything but a newline,
    and the text never crosses a line.
    """
    start = i
    n = len(text)
    while i < n:
        char = text[i]
        if char == "]":
            return i if i > start else None
        if char == "\n":
            return None
        if char == "`":
            close = text.find("`", i + 1)
            if close == -1 or "\n" in text[i + 1 : close]:
                return None
            i = close + 1
        elif char == "\\":
            if i + 1 >= n or text[i + 1] == "\n":
                return None
            i += 2
        else:
            i += 1
    return None


def scanUrl(text: str, i: int) -> tuple[str, int] | None:
    """
    Scans "(url)" or "(<url>)" starting at the "(".
    Returns the url and the index just past the ")".
    """
    if not text.startswith("(", i):
        return None
    j = i + 1
    if text.startswith("<", j):
        j += 1
    k = j
    n = len(text)
    while k < n and text[k] not in ">)" and not text[k].isspace():
        k += 1
    if k == j:
        return None
    url = text[j:k]
    if text.startswith(">", k):
        k += 1
    if not text.startswith(")", k):
        return None
    return url, k + 1


def scanImageUrl(text: str, i: int) -> tuple[str, int] | None:
    # The image inside an image-link takes anything up to ")" on the line.
    if not text.startswith("(", i):
        return None
    k = i + 1
    n = len(text)
    while k < n and text[k] not in ")\n":
        k += 1
    if k == i + 1 or not text.startswith(")", k):
        return None
    return text[i + 1 : k], k + 1


def matchLink(text: str, i: int) -> tuple[int, LinkMatch] | None:
    # "[text](url)" at i
    close = scanLinkText(text, i + 1)
    if close is None:
        return None
    url = scanUrl(text, close + 1)
    if url is None:
        return None
    return url[1], LinkMatch(text[i + 1 : close], url[0])


def findLinks(text: str) -> t.Generator[tuple[int, int, LinkMatch], None, None]:
    # Not after "!" (that's an image) or ESC (that's a CSI sequence).
    i = 0
    while True:
        i = text.find("[", i)
        if i == -1:
            return
        if i > 0 and text[i - 1] in "!\x1b":
            i += 1
            continue
        result = matchLink(text, i)
        if result is None:
            i += 1
            continue
        end, match = result
        yield i, end, match
        i = end


def findImages(text: str) -> t.Generator[tuple[int, int, LinkMatch], None, None]:
    i = 0
    while True:
        i = text.find("![", i)
        if i == -1:
            return
        result = matchLink(text, i + 1)
        if result is None:
            i += 1
            continue
        end, match = result
        yield i, end, match
        i = end


def findImageLinks(text: str) -> t.Generator[tuple[int, int, LinkMatch], None, None]:
    # "[![alt](image)](link)"
    i = 0
    while True:
        i = text.find("[![", i)
        if i == -1:
            return
        result = matchImageLink(text, i)
        if result is None:
            i += 1
            continue
        end, match = result
        yield i, end, match
        i = end


def matchImageLink(text: str, i: int) -> tuple[int, LinkMatch] | None:
    altClose = scanLinkText(text, i + 3)
    if altClose is None:
        return None
    image = scanImageUrl(text, altClose + 1)
    if image is None:
        return None
    imageUrl, pos = image
    if not text.startswith("]", pos):
        return None
    link = scanUrl(text, pos + 1)
    if link is None:
        return None
    return link[1], LinkMatch(text[i + 3 : altClose], link[0], imageUrl)
