# tests/core/test_fields.py
import pytest

from rargs.core.fields import Literal, NamedGroup, RangeGroup, SplitRangeGroup, parse_field
from rargs.core.ranges import Bounded, FullyOpen, LeftOpen, RightOpen, Single


def test_parse_numbered_field():
    assert parse_field("{3}") == RangeGroup(Single(3))
    assert parse_field("{-2}") == RangeGroup(Single(-2))
    assert parse_field("{ 1 }") == RangeGroup(Single(1))


def test_parse_named_field():
    assert parse_field("{year}") == NamedGroup("year")
    assert parse_field("{ LN }") == NamedGroup("LN")


def test_parse_empty_braces_is_whole_line_name():
    assert parse_field("{}") == NamedGroup("")


@pytest.mark.parametrize("token, expected", [
    ("{2..4}", RangeGroup(Bounded(2, 4))),
    ("{..3}", RangeGroup(LeftOpen(3))),
    ("{2..}", RangeGroup(RightOpen(2))),
    ("{..}", RangeGroup(FullyOpen())),
    ("{-3..-1}", RangeGroup(Bounded(-3, -1))),
])
def test_parse_joined_ranges(token, expected):
    assert parse_field(token) == expected


def test_parse_joined_range_with_separator():
    assert parse_field("{1..2:-}") == RangeGroup(Bounded(1, 2), "-")
    assert parse_field("{..:, }") == RangeGroup(FullyOpen(), ", ")
    # an empty separator is still an explicit override
    assert parse_field("{2..:}") == RangeGroup(RightOpen(2), "")


@pytest.mark.parametrize("token, expected", [
    ("{1...}", SplitRangeGroup(RightOpen(1))),
    ("{...2}", SplitRangeGroup(LeftOpen(2))),
    ("{...}", SplitRangeGroup(FullyOpen())),
    ("{2...-1}", SplitRangeGroup(Bounded(2, -1))),
])
def test_parse_split_ranges(token, expected):
    assert parse_field(token) == expected


@pytest.mark.parametrize("token", ["{a b}", "{1...2:-}", "{x..y}", "{1.2}", "{....}"])
def test_unrecognized_field_is_literal(token):
    assert parse_field(token) == Literal(token)
