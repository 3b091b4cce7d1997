# src/rargs/core/fields.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from rargs.core.ranges import Range, Single, make_range

# The four field syntaxes, tried in this order. A bare number or word must win
# before the range forms get a chance to look at it.
FIELD_SINGLE = re.compile(r"^\{\s*(?P<num>-?\d+)\s*\}$")
FIELD_NAMED = re.compile(r"^\{\s*(?P<name>\w*)\s*\}$")
FIELD_RANGE = re.compile(r"^\{(?P<left>-?\d*)?\.\.(?P<right>-?\d*)?(?::(?P<sep>.*))?\}$")
FIELD_SPLIT_RANGE = re.compile(r"^\{(?P<left>-?\d*)?\.\.\.(?P<right>-?\d*)?\}$")


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class NamedGroup:
    name: str


@dataclass(frozen=True)
class RangeGroup:
    range: Range
    separator: Optional[str] = None


@dataclass(frozen=True)
class SplitRangeGroup:
    range: Range


Fragment = Union[Literal, NamedGroup, RangeGroup, SplitRangeGroup]


def _bound(text: Optional[str]) -> Optional[int]:
    # "-" alone is accepted by the pattern but carries no number
    if not text or text == "-":
        return None
    return int(text)


def parse_field(field_string: str) -> Fragment:
    """
    Classifies a braced field token such as ``{year}``, ``{-1}``, ``{2..4:,}``
    or ``{1...}``.

    Args:
        field_string (str): The token including its braces.

    Returns:
        Fragment: The parsed field, or a Literal holding the token unchanged
        when it matches none of the field syntaxes.
    """
    m = FIELD_SINGLE.match(field_string)
    if m:
        return RangeGroup(Single(int(m.group("num"))))

    m = FIELD_NAMED.match(field_string)
    if m:
        return NamedGroup(m.group("name"))

    m = FIELD_RANGE.match(field_string)
    if m:
        rng = make_range(_bound(m.group("left")), _bound(m.group("right")))
        return RangeGroup(rng, m.group("sep"))

    m = FIELD_SPLIT_RANGE.match(field_string)
    if m:
        return SplitRangeGroup(make_range(_bound(m.group("left")), _bound(m.group("right"))))

    return Literal(field_string)
