from __future__ import annotations

import colorsys
import dataclasses
import re

from . import colornames, constants, t

# A terse color-spec language, in the style of Term::ANSIColor::Concise.
#   "L25D/<RoyalBlue>=y25;E" is
#   grey-25 bold foreground, on RoyalBlue darkened to 25% luminance,
#   with the background carried to the end of the line.

TOKEN_RE = re.compile(
    r"""
    (?P<toggle>[/^;])
    | L(?P<grey>\d\d)
    | (?P<cube>[0-5]{3})
    | \#(?P<hex>[0-9a-fA-F]{6}|[0-9a-fA-F]{3})(?![0-9a-fA-F])
    | \((?P<dec>\d{1,3}\s*,\s*\d{1,3}\s*,\s*\d{1,3})\)
    | <(?P<name>[A-Za-z][\w ]*)>
    | (?P<basic>[RGBCMYKW])
    | (?P<bright>[rgbcmykw])
    | (?P<effect>[ZDPIUFQSHXNE])
    """,
    re.X,
)
ADJUST_RE = re.compile(r"([-+=])([ylsr])(\d+)")

BASIC_COLORS = "KRGYBMCW"

EFFECTS = {
    "Z": "0",
    "D": "1",
    "P": "2",
    "I": "3",
    "U": "4",
    "F": "5",
    "Q": "6",
    "S": "7",
    "H": "8",
    "X": "9",
}

CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


class ColorSpecError(ValueError):
    pass


@dataclasses.dataclass(frozen=True)
class Style:
    start: str = ""
    erase: bool = False

    def __bool__(self) -> bool:
        return bool(self.start) or self.erase

    def apply(self, text: str) -> str:
        if not self:
            return text
        segments = text.split("\n")
        return "\n".join(
            self._applySegment(seg, last=(i == len(segments) - 1)) for i, seg in enumerate(segments)
        )

    def _applySegment(self, seg: str, last: bool) -> str:
        tail = constants.eraseLine if self.erase else ""
        if seg == "":
            # A blank line only needs painting when the background runs to the edge,
            # and the (empty) remainder after a final newline never does.
            if self.erase and not last:
                return self.start + tail + constants.reset
            return seg
        # Whatever was styled inside us ends with a reset;
        # turn our own style back on after each one.
        if self.start:
            seg = constants.resetRe.sub(lambda m: m.group(0) + self.start, seg)
        return self.start + seg + tail + constants.reset


IDENTITY = Style()


def compile(spec: str, rgb24: bool = False) -> Style:
    codes: list[str] = []
    erase = False
    background = False
    i = 0
    while i < len(spec):
        if spec[i].isspace():
            i += 1
            continue
        match = TOKEN_RE.match(spec, i)
        if match is None:
            msg = f"Unrecognized color spec '{spec[i:]}' in '{spec}'."
            raise ColorSpecError(msg)
        i = match.end()
        kind = match.lastgroup
        value = match.group(t.cast(str, kind))

        if kind == "toggle":
            if value == "/":
                background = True
            elif value == "^":
                background = False
            continue
        if kind == "effect":
            if value == "E":
                erase = True
            elif value != "N":
                codes.append(EFFECTS[value])
            continue
        if kind == "basic":
            codes.append(str((40 if background else 30) + BASIC_COLORS.index(value)))
            continue
        if kind == "bright":
            codes.append(str((100 if background else 90) + BASIC_COLORS.index(value.upper())))
            continue

        adjustments = []
        while True:
            adj = ADJUST_RE.match(spec, i)
            if adj is None:
                break
            adjustments.append((adj.group(1), adj.group(2), int(adj.group(3))))
            i = adj.end()

        if kind == "grey":
            level = int(value)
            if level > 25:
                msg = f"Grey level L{value} is out of range (L00-L25) in '{spec}'."
                raise ColorSpecError(msg)
            index = greyIndex(level)
            if not adjustments and not rgb24:
                codes.append(indexCode(index, background))
                continue
            rgb = indexToRgb(index)
        elif kind == "cube":
            index = 16 + 36 * int(value[0]) + 6 * int(value[1]) + int(value[2])
            if not adjustments and not rgb24:
                codes.append(indexCode(index, background))
                continue
            rgb = indexToRgb(index)
        elif kind == "hex":
            if len(value) == 3:
                value = "".join(c * 2 for c in value)
            rgb = (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))
        elif kind == "dec":
            parts = [int(x) for x in value.split(",")]
            if any(x > 255 for x in parts):
                msg = f"RGB component out of range in '{spec}'."
                raise ColorSpecError(msg)
            rgb = (parts[0], parts[1], parts[2])
        else:
            found = colornames.lookup(value)
            if found is None:
                msg = f"Unknown color name <{value}> in '{spec}'."
                raise ColorSpecError(msg)
            rgb = found

        for op, what, amount in adjustments:
            rgb = adjust(rgb, op, what, amount)
        if rgb24:
            codes.append(("48" if background else "38") + ";2;{};{};{}".format(*rgb))
        else:
            codes.append(indexCode(rgbToIndex(rgb), background))

    start = f"{constants.ESC}[{';'.join(codes)}m" if codes else ""
    return Style(start, erase)


def indexCode(index: int, background: bool) -> str:
    return ("48" if background else "38") + f";5;{index}"


def greyIndex(level: int) -> int:
    # L00 and L25 are the cube's black and white;
    # everything between is the 24-step grey ramp.
    if level == 0:
        return 16
    if level == 25:
        return 231
    return 231 + level


def indexToRgb(index: int) -> t.RgbT:
    if index >= 232:
        v = 8 + 10 * (index - 232)
        return (v, v, v)
    index -= 16
    return (CUBE_LEVELS[index // 36], CUBE_LEVELS[(index // 6) % 6], CUBE_LEVELS[index % 6])


def rgbToIndex(rgb: t.RgbT) -> int:
    def nearestLevel(v: int) -> int:
        return min(range(6), key=lambda i: abs(CUBE_LEVELS[i] - v))

    r, g, b = (nearestLevel(v) for v in rgb)
    cubeIndex = 16 + 36 * r + 6 * g + b
    avg = sum(rgb) // 3
    greyStep = max(0, min(23, round((avg - 8) / 10)))
    greyIdx = 232 + greyStep
    if distance(indexToRgb(greyIdx), rgb) < distance(indexToRgb(cubeIndex), rgb):
        return greyIdx
    return cubeIndex


def distance(a: t.RgbT, b: t.RgbT) -> int:
    return sum((x - y) ** 2 for x, y in zip(a, b))


def luminance(rgb: t.RgbT) -> float:
    r, g, b = rgb
    return (0.299 * r + 0.587 * g + 0.114 * b) / 2.55


def adjust(rgb: t.RgbT, op: str, what: str, amount: int) -> t.RgbT:
    h, l, s = colorsys.rgb_to_hls(*(v / 255 for v in rgb))
    if what == "r":
        if op == "=":
            h = (amount % 360) / 360
        else:
            h = (h + (amount if op == "+" else -amount) / 360) % 1.0
    elif what == "l":
        l = applyOp(l * 100, op, amount) / 100
    elif what == "s":
        s = applyOp(s * 100, op, amount) / 100
    else:
        target = applyOp(luminance(rgb), op, amount)
        l = lightnessForLuminance(h, s, target)
    return t.cast("t.RgbT", tuple(round(v * 255) for v in colorsys.hls_to_rgb(h, l, s)))


def applyOp(current: float, op: str, amount: int) -> float:
    if op == "=":
        value = float(amount)
    elif op == "+":
        value = current + amount
    else:
        value = current - amount
    return max(0.0, min(100.0, value))


def lightnessForLuminance(h: float, s: float, target: float) -> float:
    # Luminance only ever grows with lightness, so bisect for it.
    lo, hi = 0.0, 1.0
    for _ in range(24):
        mid = (lo + hi) / 2
        rgb = t.cast("t.RgbT", tuple(round(v * 255) for v in colorsys.hls_to_rgb(h, mid, s)))
        if luminance(rgb) < target:
            lo = mid
        else:
            hi = mid
    return (lo + hi) / 2
