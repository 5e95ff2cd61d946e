from __future__ import annotations

import re

from . import scan, t

if t.TYPE_CHECKING:
    from .pipeline import Run

# One function per Markdown construct.
# Each takes the whole buffer and the current run, and returns the new buffer.
# The protecting ones hand their output to the run's ledger,
# so nothing after them can match inside it.

COMMENT_RE = re.compile(r"^<!--(?![->])[\s\S]*?-->", re.M)
HORIZONTAL_RULE_RE = re.compile(r"^([ ]{0,3}(?:[-*_][ ]*){3,})$", re.M)
BLOCKQUOTE_RE = re.compile(r"^>+[ \t]?", re.M)


def headingRe(level: int) -> re.Pattern:
    return re.compile(r"^(#{" + str(level) + r"}[ \t]+.*)$", re.M)


HEADING_RES = {level: headingRe(level) for level in range(1, 7)}


def codeBlocks(text: str, run: Run) -> str:
    def replace(fence: scan.Fence) -> str:
        out = run.color("code_mark", fence.indent + fence.fence)
        if fence.info:
            out += run.color("code_info", fence.info)
        out += "\n"
        for line in fence.body.splitlines(keepends=True):
            out += run.color("code_block", line)
        out += run.color("code_mark", fence.closeIndent + fence.fence) + fence.trail
        return run.protect(out)

    return scan.subSpans(text, scan.findFences(text), replace)


def comments(text: str, run: Run) -> str:
    return COMMENT_RE.sub(lambda match: run.protect(run.color("comment", match.group(0))), text)


def imageLinks(text: str, run: Run) -> str:
    def replace(link: scan.LinkMatch) -> str:
        bang = run.link(link.imageUrl, run.color("image_link", "!"))
        alt = run.link(link.url, run.color("image_link", f"[{link.text}]"))
        return run.protect(bang + alt)

    return scan.subSpans(text, scan.findImageLinks(text), replace)


def images(text: str, run: Run) -> str:
    def replace(link: scan.LinkMatch) -> str:
        return run.protect(run.link(link.url, run.color("image", f"![{link.text}]")))

    return scan.subSpans(text, scan.findImages(text), replace)


def links(text: str, run: Run) -> str:
    # The url only survives inside the hyperlink escape.
    def replace(link: scan.LinkMatch) -> str:
        return run.protect(run.link(link.url, run.color("link", f"[{link.text}]")))

    return scan.subSpans(text, scan.findLinks(text), replace)


def inlineCode(text: str, run: Run) -> str:
    def replace(span: scan.CodeSpan) -> str:
        tick = run.color("code_tick", span.ticks)
        return run.protect(tick + run.color("code_inline", span.content) + tick)

    return scan.subSpans(text, scan.findCodeSpans(text), replace)


def horizontalRules(text: str, run: Run) -> str:
    return HORIZONTAL_RULE_RE.sub(lambda match: run.protect(run.color("horizontal_rule", match.group(1))), text)


def headings(text: str, run: Run) -> str:
    """
    Colors whole heading lines, deepest level first.
    The line is restored before coloring, so the heading style
    wraps (and re-opens around) whatever was already protected in it.
    Levels whose label is inactive are left alone.
    """
    for level in range(6, 0, -1):
        label = f"h{level}"
        if not run.active(label):
            continue
        hashed = run.config.hashedFor(level)

        def replace(match: re.Match, level: int = level, label: str = label, hashed: bool = hashed) -> str:
            line = match.group(1)
            if hashed and not line.endswith("#"):
                line += " " + "#" * level
            return run.protect(run.color(label, run.restore(line)))

        text = HEADING_RES[level].sub(replace, text)
    return text


def _delimited(text: str, run: Run, label: str, *delimiters: scan.Delimiter) -> str:
    for delimiter in delimiters:
        text = scan.subSpans(text, delimiter.finditer(text), lambda span: run.color(label, span))
    return text


def bold(text: str, run: Run) -> str:
    return _delimited(text, run, "bold", scan.BOLD_STARS, scan.BOLD_UNDERSCORES)


def italic(text: str, run: Run) -> str:
    return _delimited(text, run, "italic", scan.ITALIC_UNDERSCORE, scan.ITALIC_STAR)


def strike(text: str, run: Run) -> str:
    return _delimited(text, run, "strike", scan.STRIKE)


def blockquotes(text: str, run: Run) -> str:
    # Only the leading run of markers; a ">" later in the line is content.
    return BLOCKQUOTE_RE.sub(lambda match: run.color("blockquote", match.group(0)), text)
