from __future__ import annotations

import io

import pytest

from mdcolor import config, labels, pipeline
from mdcolor import messages as m


@pytest.fixture(autouse=True)
def messages():
    # Every test gets its own message log, so warnings can be inspected
    # and nothing leaks into the global state.
    with m.withMessageState(io.StringIO(), printMode="plain") as fh:
        yield fh


@pytest.fixture
def colorize():
    def run(text, **kwargs):
        return pipeline.colorize(text, config.Config(**kwargs))

    return run


@pytest.fixture
def style():
    # The Style a label resolves to under the given config.
    def get(label, **kwargs):
        return labels.LabelTable(config.Config(**kwargs)).style(label)

    return get
