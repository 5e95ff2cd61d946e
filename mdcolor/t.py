# pylint: skip-file
# Module for holding types, for easy importing into the rest of the codebase
from __future__ import annotations

import sys

# The only things that should be available during runtime.
from typing import TYPE_CHECKING, Generic, TypeVar, cast, overload

# Only available in 3.11, so stub them out for earlier versions
if sys.version_info >= (3, 11):
    from typing import assert_never, assert_type
else:
    from typing_extensions import assert_never, assert_type


if TYPE_CHECKING:
    from typing import (
        AbstractSet,
        Any,
        Callable,
        Generator,
        Iterable,
        Iterator,
        Literal,
        Mapping,
        Sequence,
        TextIO,
        TypeAlias,
    )

    from typing_extensions import (
        Self,
    )

    # A styling function: raw text in, escaped text out.
    StylerT: TypeAlias = Callable[[str], str]

    # (start, end) offsets into a buffer.
    SpanT: TypeAlias = tuple[int, int]

    RgbT: TypeAlias = tuple[int, int, int]

    from .config import Config
    from .labels import LabelTable
    from .ledger import RegionLedger
    from .pipeline import Run
