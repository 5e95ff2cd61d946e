from __future__ import annotations

import argparse
import os
import sys

from . import InputSource, config, ledger, pipeline, themes
from . import messages as m


def main(argv: list[str] | None = None) -> None:
    try:
        with open(config.scriptPath("semver.txt"), encoding="utf-8") as fh:
            semver = fh.read().strip()
            semverText = f"mdcolor v{semver}: "
    except FileNotFoundError:
        semver = "???"
        semverText = ""

    argparser = argparse.ArgumentParser(description=f"{semverText}Colors Markdown source for the terminal.")
    argparser.add_argument("--version", action="version", version=semver)
    argparser.add_argument(
        "-q",
        "--quiet",
        dest="quiet",
        action="count",
        default=0,
        help="Silences one level of message, least-important first.",
    )
    argparser.add_argument(
        "-s",
        "--silent",
        dest="silent",
        action="store_true",
        help="Shorthand for 'as many -q as you need to shut it up'",
    )
    argparser.add_argument(
        "-a",
        "--ascii-only",
        dest="asciiOnly",
        action="store_true",
        help="Force all messages to be ASCII-only.",
    )
    argparser.add_argument(
        "--print",
        dest="printMode",
        choices=m.PRINT_MODES,
        default=None,
        help="How messages are formatted. Options are 'plain' (just text), 'console' (text with console color codes), and 'json' (JSON stream). Defaults to 'console'.",
    )
    argparser.add_argument(
        "infile",
        nargs="?",
        default=None,
        help='Path to the source file: stdin ("-"), an https URL, or a Markdown file.',
    )
    argparser.add_argument(
        "outfile",
        nargs="?",
        default=None,
        help='Path to the output file: stdout ("-"), or a filename.',
    )
    argparser.add_argument(
        "-m",
        "--mode",
        dest="mode",
        choices=themes.MODES,
        default=None,
        help="Which built-in theme to start from. Defaults to 'light'.",
    )
    argparser.add_argument(
        "-B",
        "--base-color",
        dest="baseColor",
        default=None,
        help="The base color the theme is built around: a color name like 'Crimson', or any color spec.",
    )
    argparser.add_argument(
        "--cm",
        "--colormap",
        dest="colormap",
        action="append",
        default=[],
        metavar="LABEL=SPEC",
        help="Overrides a label's color. 'LABEL=+SPEC' appends to the current spec, and a trailing '&name' attaches a text transform. Can be given multiple times.",
    )
    argparser.add_argument(
        "--show",
        dest="show",
        action="append",
        default=[],
        metavar="LABEL[=VAL]",
        help="Switches a label on or off ('bold=0'). 'all=' switches everything off, so later --show options can switch things back on. Can be given multiple times.",
    )
    argparser.add_argument(
        "--hashed",
        dest="hashed",
        action="append",
        default=[],
        metavar="hN[=VAL]",
        help="Adds closing hashes to headings of that level ('### Title ###'). Can be given multiple times.",
    )
    argparser.add_argument(
        "--hm",
        "--heading-markup",
        dest="headingMarkup",
        nargs="?",
        const="all",
        default=None,
        metavar="STEPS",
        help="Styles inline markup inside headings too. Give a colon-separated list (like 'bold:italic') to only do some of it.",
    )
    argparser.add_argument(
        "--no-osc8",
        dest="osc8",
        action="store_false",
        default=None,
        help="Don't turn links and images into clickable terminal hyperlinks.",
    )
    argparser.add_argument(
        "--no-colorize",
        dest="colorize",
        action="store_false",
        default=None,
        help="Pass the text through without any styling.",
    )
    argparser.add_argument(
        "--rgb24",
        dest="rgb24",
        action="store_true",
        default=None,
        help="Emit 24-bit colors instead of the nearest 256-color ones.",
    )
    argparser.add_argument(
        "--config",
        dest="configParams",
        default=None,
        metavar="PARAMS",
        help="Settings in compact form, like 'mode=dark,base_color=Crimson,hashed.h3=1'. Other options override these.",
    )
    argparser.add_argument(
        "--print-theme",
        dest="printTheme",
        nargs="?",
        const="",
        default=None,
        metavar="MODE",
        help="Prints a theme's default colors as shell array assignments, then exits.",
    )

    options = argparser.parse_args(argv)

    if options.silent:
        m.state.printOn = "nothing"
        m.state.silent = True
    else:
        m.state.printOn = m.MessagesState.categoryName(options.quiet)
    m.state.asciiOnly = options.asciiOnly
    if options.printMode is None:
        if "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
            m.state.printMode = "plain"
        else:
            m.state.printMode = "console"
    else:
        m.state.printMode = options.printMode

    if options.printTheme is not None:
        handlePrintTheme(options)
    else:
        handleColorize(options)


def configFromOptions(options: argparse.Namespace) -> config.Config:
    """
    Builds the run's Config: the --config params first,
    then every individual option on top of them.
    Raises ConfigError for anything malformed.
    """
    if options.configParams:
        conf = config.Config.fromParams(options.configParams)
    else:
        conf = config.Config()
    if options.mode is not None:
        conf.mode = options.mode
    if options.baseColor is not None:
        conf.baseColor = options.baseColor
    conf.colormap.extend(options.colormap)
    for item in options.show:
        conf.show.extend(config.parseShow(x) for x in config.splitParams(item))
    for item in options.hashed:
        conf.hashed.set(*config.parseHashed(item))
    if options.headingMarkup is not None:
        conf.headingMarkup = config.normalizeHeadingMarkup(options.headingMarkup)
    for key in ("osc8", "colorize", "rgb24"):
        if getattr(options, key) is not None:
            setattr(conf, key, getattr(options, key))
    conf.validate()
    return conf


def handlePrintTheme(options: argparse.Namespace) -> None:
    mode = options.printTheme or options.mode or "light"
    if mode not in themes.MODES:
        m.die(f"Unknown theme mode '{mode}'; expected one of {', '.join(themes.MODES)}.")
        return
    sys.stdout.write(themes.printTheme(mode))


def handleColorize(options: argparse.Namespace) -> None:
    try:
        conf = configFromOptions(options)
    except config.ConfigError as e:
        m.die(str(e))
        return

    source = InputSource.inputFromName(options.infile or "-")
    try:
        text = source.read().content
    except (OSError, UnicodeDecodeError) as e:
        m.die(f"Couldn't read the input from '{source}':\n{e}")
        return

    try:
        output = pipeline.colorize(text, conf)
    except ledger.LedgerError as e:
        m.die(str(e))
        return

    if options.outfile in (None, "-"):
        sys.stdout.write(output)
    else:
        try:
            with open(options.outfile, "w", encoding="utf-8") as f:
                f.write(output)
        except OSError as e:
            m.die(f"Couldn't write the output to '{options.outfile}':\n{e}")
