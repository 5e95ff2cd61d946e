from __future__ import annotations

import pytest

from mdcolor import config


def test_defaults():
    conf = config.Config()
    assert conf.mode == "light"
    assert conf.headingMarkup == ""
    assert conf.osc8 and conf.colorize and not conf.rgb24
    assert not any(conf.hashedFor(level) for level in range(1, 7))


def test_from_params():
    conf = config.Config.fromParams("mode=dark,base_color=Crimson,hashed.h3=1")
    assert conf.mode == "dark"
    assert conf.baseColor == "Crimson"
    assert conf.hashed.h3
    assert not conf.hashed.h2
    assert conf.hashedFor(3)


def test_from_params_booleans():
    conf = config.Config.fromParams("osc8=0, rgb24=yes, colorize=off")
    assert not conf.osc8
    assert conf.rgb24
    assert not conf.colorize
    # A bare key switches it on.
    assert config.Config.fromParams("rgb24").rgb24


@pytest.mark.parametrize(
    ("params", "expected"),
    [
        ("heading_markup", "all"),
        ("heading_markup=", "all"),
        ("heading_markup=1", "all"),
        ("heading_markup=ALL", "all"),
        ("heading_markup=0", ""),
        ("heading_markup=bold:italic", "bold:italic"),
    ],
)
def test_heading_markup(params, expected):
    assert config.Config.fromParams(params).headingMarkup == expected


@pytest.mark.parametrize("params", ["colour=red", "osc8=maybe", "mode=sepia", "hashed.h7=1"])
def test_bad_params(params):
    with pytest.raises(config.ConfigError):
        config.Config.fromParams(params)


def test_from_params_copies_base():
    base = config.Config(colormap=["bold=U"])
    conf = config.Config.fromParams("hashed.h1=1", base)
    conf.colormap.append("italic=U")
    assert base.colormap == ["bold=U"]
    assert not base.hashed.h1
    assert conf.hashed.h1


def test_bad_mode():
    with pytest.raises(config.ConfigError):
        config.Config(mode="sepia")


def test_hashed_levels():
    hashed = config.HashedLevels()
    hashed.set("h3", True)
    assert hashed.forLevel(3)
    with pytest.raises(config.ConfigError):
        hashed.set("h0", True)


def test_parse_bool():
    assert config.parseBool(None)
    assert not config.parseBool("")
    assert config.parseBool(" Yes ")
    assert not config.parseBool("off")
    assert config.parseBool(1)
    with pytest.raises(config.ConfigError):
        config.parseBool("perhaps")


def test_parse_show():
    assert config.parseShow("bold=0") == ("bold", False)
    assert config.parseShow("bold") == ("bold", True)
    assert config.parseShow("all=") == ("all", False)
    with pytest.raises(config.ConfigError):
        config.parseShow("=1")


def test_parse_hashed():
    assert config.parseHashed("h2") == ("h2", True)
    assert config.parseHashed("h2=0") == ("h2", False)
