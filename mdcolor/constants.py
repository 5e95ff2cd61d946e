from __future__ import annotations

import re

ESC = "\x1b"

# SGR 256 is not a real rendition, so these can't collide with styling.
protectStart = ESC + "[256m"
protectEnd = ESC + "[m"
protectRe = re.compile(re.escape(protectStart) + r"(\d+)" + re.escape(protectEnd))

# Any reset that a nested style might leave behind.
resetRe = re.compile(ESC + r"\[0*m")
reset = ESC + "[m"
eraseLine = ESC + "[K"

# OSC 8 hyperlinks
oscStart = ESC + "]8;;"
oscEnd = ESC + "\\"

# Matches any escape sequence the pipeline emits (CSI, or OSC terminated by ST or BEL).
escapeRe = re.compile(ESC + r"(?:\[[0-9;]*[A-Za-z]|\][^\x07\x1b]*(?:\x07|\x1b\\))")

headingLevels = (1, 2, 3, 4, 5, 6)
