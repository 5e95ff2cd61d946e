from __future__ import annotations

from mdcolor import themes

THEMES = """
theme "base" {
    base "<Red>"
    color "bold" "D"
    color "italic" "I"
}
theme "child" extends="base" {
    color "italic" "U"
}
"""


def test_from_kdl():
    manager = themes.ThemeManager.fromKdlStr(THEMES)
    assert manager.themes["child"].extends == "base"
    base, colors = manager.resolve("child")
    assert base == "<Red>"
    assert colors == {"bold": "D", "italic": "U"}


def test_resolve_returns_copies():
    manager = themes.ThemeManager.fromKdlStr(THEMES)
    _, colors = manager.resolve("base")
    colors["bold"] = "S"
    assert manager.resolve("base")[1]["bold"] == "D"


def test_builtin_themes():
    light = themes.defaultTheme("light")
    dark = themes.defaultTheme("dark")
    assert light["base"] == "<RoyalBlue>=y25"
    assert dark["base"] == "<RoyalBlue>=y80"
    assert set(light) == set(dark)
    for label in ["h1", "h2", "h3", "h4", "h5", "h6", "bold", "italic", "strike", "link", "blockquote"]:
        assert label in light


def test_print_theme():
    printed = themes.printTheme("dark")
    lines = printed.splitlines()
    assert "theme_dark[base]='<RoyalBlue>=y80'" in lines
    assert "theme_dark[h1]='L00D/${base};E'" in lines
    assert lines == sorted(lines)
