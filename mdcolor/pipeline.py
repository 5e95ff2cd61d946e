from __future__ import annotations

import dataclasses

from . import hyperlink, labels, ledger, matchers, t
from . import messages as m

if t.TYPE_CHECKING:
    from .config import Config


@dataclasses.dataclass(frozen=True)
class Step:
    name: str
    fn: t.Callable[[str, Run], str]
    # None means the step always runs.
    label: str | None = None


# Protection steps run first, in this order, whatever else is configured.
PROTECT_STEPS = (
    Step("code_blocks", matchers.codeBlocks),
    Step("comments", matchers.comments),
    Step("image_links", matchers.imageLinks),
    Step("images", matchers.images),
    Step("links", matchers.links),
)

# These go before or after headings, depending on the heading-markup setting.
INLINE_STEPS = (
    Step("inline_code", matchers.inlineCode),
    Step("horizontal_rules", matchers.horizontalRules, "horizontal_rule"),
    Step("bold", matchers.bold, "bold"),
    Step("italic", matchers.italic, "italic"),
    Step("strike", matchers.strike, "strike"),
)

# Gated per level, inside the step itself.
HEADINGS_STEP = Step("headings", matchers.headings)

FINAL_STEPS = (Step("blockquotes", matchers.blockquotes, "blockquote"),)


def buildPipeline(headingMarkup: str) -> list[Step]:
    """
    Orders the steps for one run.

    headingMarkup is "" (headings first, so markup inside a heading stays literal),
    "all" (every inline step before headings),
    or a colon-separated list of the inline steps to move before headings.
    """
    if headingMarkup == "all":
        early = {step.name for step in INLINE_STEPS}
    elif headingMarkup:
        early = {x.strip() for x in headingMarkup.split(":") if x.strip()}
        known = {step.name for step in INLINE_STEPS}
        for name in sorted(early - known):
            m.warn(
                f"Unknown heading-markup step '{name}' (known: {', '.join(step.name for step in INLINE_STEPS)}); ignoring it.",
            )
    else:
        early = set()
    before = [step for step in INLINE_STEPS if step.name in early]
    after = [step for step in INLINE_STEPS if step.name not in early]
    return [*PROTECT_STEPS, *before, HEADINGS_STEP, *after, *FINAL_STEPS]


class Run:
    """
    All the state of one colorizing pass: the config,
    a fresh label table, and a fresh region ledger.
    Nothing here outlives the pass.
    """

    def __init__(self, config: Config) -> None:
        # Warnings repeat on every pass, not just the first in the process.
        m.state.forgetSeen()
        self.config = config
        self.labels = labels.LabelTable(config)
        self.ledger = ledger.RegionLedger()
        self.steps = buildPipeline(config.headingMarkup)

    def active(self, label: str) -> bool:
        return self.labels.active(label)

    def color(self, label: str, text: str) -> str:
        return self.labels.color(label, text)

    def protect(self, text: str) -> str:
        return self.ledger.protect(text)

    def restore(self, text: str) -> str:
        return self.ledger.restore(text)

    def link(self, url: str, text: str) -> str:
        return hyperlink.wrap(url, text, enabled=self.config.osc8)

    def execute(self, text: str) -> str:
        for step in self.steps:
            if step.label is not None and not self.active(step.label):
                continue
            text = step.fn(text, self)
        return self.restore(text)


def colorize(text: str, config: Config) -> str:
    """
    Annotates Markdown text with terminal styling.
    Raises LedgerError if a placeholder can't be restored.
    """
    if not config.colorize:
        return text
    return Run(config).execute(text)
