from __future__ import annotations

import dataclasses
import functools

import kdl

from . import config, t

MODES = ("light", "dark")


@dataclasses.dataclass
class Theme:
    name: str
    base: str
    colors: dict[str, str] = dataclasses.field(default_factory=dict)
    extends: str | None = None

    @staticmethod
    def fromKdlNode(node: kdl.Node) -> Theme:
        name = t.cast(str, node.args[0])
        extends = node.props.get("extends")
        self = Theme(name, base="", extends=None if extends is None else str(extends))
        for child in node.getAll("base"):
            self.base = str(child.args[0])
        for child in node.getAll("color"):
            label, spec = (str(x) for x in child.args[:2])
            self.colors[label] = spec
        return self


@dataclasses.dataclass
class ThemeManager:
    themes: dict[str, Theme] = dataclasses.field(default_factory=dict)

    @staticmethod
    def fromKdlStr(data: str) -> ThemeManager:
        self = ThemeManager()
        kdlDoc = kdl.parse(data)
        for node in kdlDoc.getAll("theme"):
            theme = Theme.fromKdlNode(node)
            self.themes[theme.name] = theme
        return self

    def resolve(self, mode: str) -> tuple[str, dict[str, str]]:
        """
        Returns the base color and the label colors for a mode,
        with everything the theme extends folded in underneath.
        Always hands back fresh copies; callers are free to mutate them.
        """
        if mode not in self.themes:
            mode = "light"
        chain: list[Theme] = []
        theme: Theme | None = self.themes[mode]
        while theme is not None:
            chain.append(theme)
            theme = self.themes.get(theme.extends) if theme.extends else None
        base = ""
        colors: dict[str, str] = {}
        for theme in reversed(chain):
            base = theme.base or base
            colors.update(theme.colors)
        return base, colors


@functools.cache
def builtinThemes() -> ThemeManager:
    with open(config.scriptPath("themes.kdl"), encoding="utf-8") as fh:
        return ThemeManager.fromKdlStr(fh.read())


def defaultTheme(mode: str = "light") -> dict[str, str]:
    base, colors = builtinThemes().resolve(mode)
    colors["base"] = base
    return colors


def printTheme(mode: str = "light") -> str:
    # Shell array assignments, for scripts that want the defaults:
    #   theme_light[h1]='L25D/${base};E'
    lines = []
    for key, val in sorted(defaultTheme(mode).items()):
        val = val.replace("'", "'\\''")
        lines.append(f"theme_{mode}[{key}]='{val}'")
    return "\n".join(lines) + "\n"
