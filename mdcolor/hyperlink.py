from __future__ import annotations

import urllib.parse

from . import constants

# Everything printable in ASCII, minus the space, is left alone.
SAFE_CHARS = "".join(chr(c) for c in range(0x21, 0x7F))


def escapeUrl(url: str) -> str:
    """
    Percent-encodes (as UTF-8) every byte outside printable ASCII,
    so nothing in the URL can end the OSC 8 sequence early.
    """
    return urllib.parse.quote(url, safe=SAFE_CHARS, encoding="utf-8")


def wrap(url: str, text: str, enabled: bool = True) -> str:
    """
    Makes text a clickable OSC 8 hyperlink to url.
    The OSC pair sits outside any SGR styling already in text,
    so the styling is carried through unchanged.
    """
    if not enabled:
        return text
    return f"{constants.oscStart}{escapeUrl(url)}{constants.oscEnd}{text}{constants.oscStart}{constants.oscEnd}"
