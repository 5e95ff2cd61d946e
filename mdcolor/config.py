from __future__ import annotations

import dataclasses
import os
import re

from . import constants, t

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("", "0", "false", "no", "off")


class ConfigError(ValueError):
    pass


def scriptPath(*pathSegs: str) -> str:
    startPath = os.path.dirname(os.path.realpath(__file__))
    path = os.path.join(startPath, *pathSegs)
    return path


def parseBool(val: str | bool | int | None, key: str = "value") -> bool:
    if isinstance(val, bool):
        return val
    if val is None:
        return True
    if isinstance(val, int):
        return val != 0
    lowered = val.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    msg = f"Expected a boolean for '{key}', got '{val}'."
    raise ConfigError(msg)


@dataclasses.dataclass
class HashedLevels:
    """Whether each heading level gets closing hashes (### Title ###)."""

    h1: bool = False
    h2: bool = False
    h3: bool = False
    h4: bool = False
    h5: bool = False
    h6: bool = False

    def forLevel(self, level: int) -> bool:
        return t.cast(bool, getattr(self, f"h{level}"))

    def set(self, key: str, value: bool) -> None:
        if not re.fullmatch(r"h[1-6]", key):
            msg = f"Unknown heading level '{key}'; expected h1 through h6."
            raise ConfigError(msg)
        setattr(self, key, value)


@dataclasses.dataclass
class Config:
    mode: str = "light"
    baseColor: str = ""
    colormap: list[str] = dataclasses.field(default_factory=list)
    show: list[tuple[str, bool]] = dataclasses.field(default_factory=list)
    hashed: HashedLevels = dataclasses.field(default_factory=HashedLevels)
    # "" is off, "all" is everything, otherwise colon-separated step names.
    headingMarkup: str = ""
    osc8: bool = True
    colorize: bool = True
    rgb24: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.mode not in ("light", "dark"):
            msg = f"Unknown mode '{self.mode}'; expected 'light' or 'dark'."
            raise ConfigError(msg)

    @staticmethod
    def fromParams(params: str, base: Config | None = None) -> Config:
        """
        Parses the compact "key=value,key=value" form,
        with dotted keys reaching into nested settings:
            mode=dark,base_color=Crimson,hashed.h3=1
        """
        self = dataclasses.replace(base) if base is not None else Config()
        self.hashed = dataclasses.replace(self.hashed)
        self.colormap = list(self.colormap)
        self.show = list(self.show)
        for item in splitParams(params):
            key, sep, val = item.partition("=")
            key = key.strip()
            value: str | None = val if sep else None
            self.setParam(key, value)
        self.validate()
        return self

    def setParam(self, key: str, value: str | None) -> None:
        if key.startswith("hashed."):
            self.hashed.set(key[len("hashed.") :], parseBool(value, key))
        elif key == "mode":
            self.mode = (value or "light").strip()
        elif key == "base_color":
            self.baseColor = (value or "").strip()
        elif key == "heading_markup":
            self.headingMarkup = normalizeHeadingMarkup(value)
        elif key in ("osc8", "colorize", "rgb24"):
            setattr(self, key, parseBool(value, key))
        else:
            msg = f"Unknown configuration parameter '{key}'."
            raise ConfigError(msg)

    def hashedFor(self, level: int) -> bool:
        assert level in constants.headingLevels
        return self.hashed.forLevel(level)


def splitParams(params: str) -> list[str]:
    return [x.strip() for x in params.split(",") if x.strip()]


def normalizeHeadingMarkup(value: str | bool | None) -> str:
    # A bare flag (no value) means "all".
    if value is None or value is True:
        return "all"
    if value is False:
        return ""
    value = value.strip()
    if value in ("", "1") or value.lower() == "all":
        return "all"
    if value == "0":
        return ""
    return value


def parseShow(item: str) -> tuple[str, bool]:
    label, sep, val = item.partition("=")
    label = label.strip()
    if not label:
        msg = f"Missing label in --show '{item}'."
        raise ConfigError(msg)
    if not sep:
        return label, True
    return label, parseBool(val, label)


def parseHashed(item: str) -> tuple[str, bool]:
    key, sep, val = item.partition("=")
    return key.strip(), parseBool(val if sep else None, key)
