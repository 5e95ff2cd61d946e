from __future__ import annotations

import dataclasses
import re

from . import colorspec, themes, transforms, t
from . import messages as m

if t.TYPE_CHECKING:
    from .config import Config

OVERRIDE_RE = re.compile(r"\s*(\w+)\s*=(.*)", re.S)


class Visibility:
    """
    The --show settings: labels explicitly switched on or off,
    plus a default for everything not mentioned.
    "all" resets the default and forgets the explicit entries,
    so only entries *after* it count.
    """

    def __init__(self, default: bool = True) -> None:
        self._internal: dict[str, bool] = {}
        self.default = default

    def __getitem__(self, label: str) -> bool:
        return self._internal.get(label, self.default)

    def __setitem__(self, label: str, val: bool) -> None:
        if label == "all":
            self._internal.clear()
            self.default = bool(val)
        else:
            self._internal[label] = bool(val)

    def hasExplicit(self, label: str) -> bool:
        return label in self._internal

    def __repr__(self) -> str:
        return f"Visibility({self._internal!r}, default={self.default})"


@dataclasses.dataclass(frozen=True)
class ResolvedLabel:
    name: str
    active: bool
    apply: t.StylerT


class LabelTable:
    """
    Per-run table of label specs.
    Built from the theme defaults, the base color,
    the --cm overrides and the --show settings, in that order.
    """

    def __init__(self, config: Config) -> None:
        self.rgb24 = config.rgb24
        self.base, defaults = themes.builtinThemes().resolve(config.mode)
        if config.baseColor:
            self.base = baseColorSpec(config.baseColor, config.mode)
        self.baseName = re.sub(r"=y\d+$", "", self.base)
        self.specs: dict[str, str] = {label: self.expand(spec) for label, spec in defaults.items()}
        self.transforms: dict[str, list[str]] = {}
        for override in config.colormap:
            self.applyOverride(override)
        self.show = Visibility()
        for label, val in config.show:
            self.show[label] = val
        self._styles: dict[str, colorspec.Style] = {}

    def expand(self, spec: str) -> str:
        return spec.replace("${base_name}", self.baseName).replace("${base}", self.base)

    def applyOverride(self, override: str) -> None:
        match = OVERRIDE_RE.fullmatch(override)
        if not match:
            m.warn(f"Color override '{override}' isn't of the form LABEL=SPEC; ignoring it.")
            return
        label, value = match.group(1), self.expand(match.group(2))
        spec, *transformNames = value.split("&")
        transformNames = [x.strip() for x in transformNames if x.strip()]
        if spec.startswith("+"):
            self.specs[label] = self.specs.get(label, "") + spec[1:]
            self.transforms.setdefault(label, []).extend(transformNames)
        else:
            self.specs[label] = spec
            self.transforms[label] = transformNames

    def active(self, label: str) -> bool:
        if not self.show[label]:
            return False
        if label not in self.specs:
            return True
        return self.specs[label] != "" or bool(self.transforms.get(label))

    def style(self, label: str) -> colorspec.Style:
        if label not in self._styles:
            spec = self.specs.get(label, "")
            try:
                self._styles[label] = colorspec.compile(spec, rgb24=self.rgb24)
            except colorspec.ColorSpecError as e:
                m.warn(f"Bad color for '{label}': {e} Leaving it unstyled.")
                self._styles[label] = colorspec.IDENTITY
        return self._styles[label]

    def color(self, label: str, text: str) -> str:
        if not self.show[label]:
            return text
        styled = self.style(label).apply(text)
        for name in self.transforms.get(label, []):
            fn = transforms.get(name)
            if fn is None:
                m.warn(
                    f"Unknown transform '&{name}' on '{label}' (known: {', '.join(transforms.names())}); ignoring it.",
                )
                continue
            try:
                styled = fn(styled)
            except Exception as e:
                m.warn(f"Transform '&{name}' on '{label}' failed: {e}. Using the text as styled.")
        return styled

    def resolve(self, label: str) -> ResolvedLabel:
        return ResolvedLabel(label, self.active(label), lambda text: self.color(label, text))


def baseColorSpec(baseColor: str, mode: str) -> str:
    # Bare color names get the mode's luminance; anything else is taken as-is.
    if re.fullmatch(r"[A-Za-z]\w*", baseColor):
        return f"<{baseColor}>" + ("=y80" if mode == "dark" else "=y25")
    return baseColor
