# src/rargs/core/ranges.py
"""
Index ranges over the positional captures of a line.

Ranges are 1-based and inclusive on both ends. Negative indices count from the
end, so -1 is the last capture. Index 0 addresses the whole line.

Both resolvers walk the same cascade: a zero left bound degrades to LeftOpen,
a right bound past the end degrades to RightOpen, equal bounds collapse to
Single, and open shapes degrade towards FullyOpen. Keep the two in lockstep.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union


@dataclass(frozen=True)
class Single:
    index: int


@dataclass(frozen=True)
class Bounded:
    left: int
    right: int


@dataclass(frozen=True)
class LeftOpen:
    """From the first capture through ``right``."""
    right: int


@dataclass(frozen=True)
class RightOpen:
    """From ``left`` through the last capture."""
    left: int


@dataclass(frozen=True)
class FullyOpen:
    pass


Range = Union[Single, Bounded, LeftOpen, RightOpen, FullyOpen]


def make_range(left: Optional[int], right: Optional[int]) -> Range:
    """Builds the range shape for whichever bounds are present."""
    if left is None and right is None:
        return FullyOpen()
    if right is None:
        return RightOpen(left)
    if left is None:
        return LeftOpen(right)
    return Bounded(left, right)


def translate_index(index: int, group_count: int) -> int:
    """Maps a signed index to a non-negative 1-based boundary."""
    if index < 0:
        index = index + group_count + 1
    return max(0, index)


def resolve_joined(
        rng: Range,
        groups: Sequence[str],
        separator: str,
        whole: Optional[str] = None,
) -> Optional[str]:
    """
    Resolves a range to a single string, joining multiple captures with
    ``separator``. Returns None when a single index falls outside the captures.
    """
    count = len(groups)

    if isinstance(rng, Single):
        index = translate_index(rng.index, count)
        if index == 0:
            return whole
        if index > count:
            return None
        return groups[index - 1]

    if isinstance(rng, Bounded):
        left = translate_index(rng.left, count)
        right = translate_index(rng.right, count)
        if left == 0:
            return resolve_joined(LeftOpen(right), groups, separator, whole)
        if right > count:
            return resolve_joined(RightOpen(left), groups, separator, whole)
        if left == right:
            return resolve_joined(Single(left), groups, separator, whole)
        return separator.join(groups[left - 1:right])

    if isinstance(rng, LeftOpen):
        right = translate_index(rng.right, count)
        if right > count:
            return resolve_joined(FullyOpen(), groups, separator, whole)
        return separator.join(groups[:right])

    if isinstance(rng, RightOpen):
        left = translate_index(rng.left, count)
        if left == 0:
            return resolve_joined(FullyOpen(), groups, separator, whole)
        return separator.join(groups[left - 1:])

    return separator.join(groups)


def resolve_split(
        rng: Range,
        groups: Sequence[str],
        whole: Optional[str] = None,
) -> List[str]:
    """Resolves a range to the unjoined list of captures it spans."""
    count = len(groups)

    if isinstance(rng, Single):
        index = translate_index(rng.index, count)
        if index == 0:
            return [whole] if whole is not None else []
        if index > count:
            return []
        return [groups[index - 1]]

    if isinstance(rng, Bounded):
        left = translate_index(rng.left, count)
        right = translate_index(rng.right, count)
        if left == 0:
            return resolve_split(LeftOpen(right), groups, whole)
        if right > count:
            return resolve_split(RightOpen(left), groups, whole)
        if left == right:
            return resolve_split(Single(left), groups, whole)
        return list(groups[left - 1:right])

    if isinstance(rng, LeftOpen):
        right = translate_index(rng.right, count)
        if right > count:
            return resolve_split(FullyOpen(), groups, whole)
        return list(groups[:right])

    if isinstance(rng, RightOpen):
        left = translate_index(rng.left, count)
        if left == 0:
            return resolve_split(FullyOpen(), groups, whole)
        return list(groups[left - 1:])

    return list(groups)
