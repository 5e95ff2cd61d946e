from __future__ import annotations

import dataclasses
import re

from . import constants


class LedgerError(Exception):
    """
    A placeholder pointed at a fragment the ledger never stored.
    This is always a pipeline bug, never a problem with the input,
    so it's not recoverable.
    """

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"restore failed: index {index} (ledger holds {size} fragments)")
        self.index = index
        self.size = size


@dataclasses.dataclass
class RegionLedger:
    """
    Stores already-processed fragments of the buffer,
    handing back an opaque placeholder for each one
    so that later steps can't match inside them.

    One ledger belongs to one run; never share them.
    """

    fragments: list[str] = dataclasses.field(default_factory=list)

    def protect(self, text: str) -> str:
        self.fragments.append(text)
        return placeholder(len(self.fragments) - 1)

    def restore(self, text: str) -> str:
        # Stored fragments can hold placeholders of their own
        # (headings re-protect lines that already contained links),
        # so keep going until nothing changes.
        while True:
            newText = constants.protectRe.sub(self._lookup, text)
            if newText == text:
                return newText
            text = newText

    def _lookup(self, match: re.Match) -> str:
        index = int(match.group(1))
        if index >= len(self.fragments):
            raise LedgerError(index, len(self.fragments))
        return self.fragments[index]

    def __len__(self) -> int:
        return len(self.fragments)


def placeholder(index: int) -> str:
    return f"{constants.protectStart}{index}{constants.protectEnd}"


def hasPlaceholders(text: str) -> bool:
    return constants.protectRe.search(text) is not None
