# src/rargs/core/combinations.py
"""
Groups template fragments into output units.

A Join is concatenated into exactly one argument. A Split expands into zero or
more arguments, one per capture. A Split never absorbs, and is never absorbed
by, its neighbours.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from rargs.core.fields import Fragment, Literal, NamedGroup, RangeGroup, SplitRangeGroup
from rargs.core.ranges import Range

JoinPart = Union[Literal, NamedGroup, RangeGroup]


@dataclass(frozen=True)
class Join:
    parts: Tuple[JoinPart, ...]


@dataclass(frozen=True)
class Split:
    range: Range


Combination = Union[Join, Split]


def group_combinations(fragments: Iterable[Fragment]) -> List[Combination]:
    """Folds fragments left to right into Join and Split combinations."""
    out: List[Combination] = []
    # Parts of the Join currently open, or None when the last unit is closed
    open_parts: Optional[List[JoinPart]] = None

    def _close() -> None:
        nonlocal open_parts
        if open_parts is not None:
            out.append(Join(tuple(open_parts)))
        open_parts = None

    for fragment in fragments:
        if isinstance(fragment, SplitRangeGroup):
            _close()
            out.append(Split(fragment.range))
            continue

        if open_parts is not None:
            open_parts.append(fragment)
            continue

        # An empty literal never opens a Join on its own
        if isinstance(fragment, Literal) and not fragment.text:
            continue
        open_parts = [fragment]

    _close()
    return out
