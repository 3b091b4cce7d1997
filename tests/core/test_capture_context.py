# tests/core/test_capture_context.py
import re

import pytest

from rargs.core.context.capture_context import CaptureContext, iter_matches
from rargs.core.ranges import Bounded, FullyOpen, Single

DATE_PATTERN = re.compile(r"(?P<year>\d{4})-(\d{2})-(\d{2})")
WHITESPACE_PATTERN = re.compile(r"(.*?)\s+|(.*?)$")


@pytest.fixture
def date_context():
    """A context for a single ISO date."""
    return CaptureContext.builder(DATE_PATTERN, "2018-10-21").build()


def test_positional_groups(date_context):
    assert date_context.groups == ["2018", "10", "21"]
    assert date_context.get_by_range(Single(2)) == "10"
    assert date_context.get_by_range(Single(-1)) == "21"


def test_named_group_and_whole_line(date_context):
    assert date_context.get_by_name("year") == "2018"
    assert date_context.get_by_name("") == "2018-10-21"
    assert date_context.get_by_name("0") == "2018-10-21"
    assert date_context.get_by_name("missing") is None


def test_default_and_explicit_separator(date_context):
    assert date_context.get_by_range(FullyOpen()) == "2018 10 21"
    assert date_context.get_by_range(Bounded(1, 2), "-") == "2018-10"
    date_context.with_default_sep("/")
    assert date_context.get_by_range(FullyOpen()) == "2018/10/21"


def test_split_range(date_context):
    assert date_context.get_by_split_range(FullyOpen()) == ["2018", "10", "21"]
    assert date_context.get_by_split_range(Single(7)) == []


def test_captures_accumulate_across_matches_and_last_name_wins():
    pattern = re.compile(r"(?P<word>[a-z]+)=(\d+)")
    ctx = CaptureContext.builder(pattern, "a=1 b=2 c=3").build()
    assert ctx.groups == ["a", "1", "b", "2", "c", "3"]
    assert ctx.get_by_name("word") == "c"
    assert ctx.get_by_range(Single(1)) == "a"


def test_non_participating_groups_take_no_position():
    ctx = CaptureContext.builder(WHITESPACE_PATTERN, "foo bar  baz").build()
    assert ctx.groups == ["foo", "bar", "baz"]


def test_empty_line_has_one_empty_capture():
    ctx = CaptureContext.builder(WHITESPACE_PATTERN, "").build()
    assert ctx.groups == [""]


def test_iter_matches_skips_empty_match_after_previous_match():
    spans = [m.span() for m in iter_matches(WHITESPACE_PATTERN, "a b")]
    assert spans == [(0, 2), (2, 3)]


def test_put_overrides_named_capture():
    pattern = re.compile(r"(?P<LN>\w+)")
    ctx = CaptureContext.builder(pattern, "hello").put("LN", "7").build()
    assert ctx.get_by_name("LN") == "7"
    assert ctx.get_by_range(Single(1)) == "hello"


def test_unmatched_line_has_no_groups():
    ctx = CaptureContext.builder(DATE_PATTERN, "no date here").build()
    assert ctx.groups == []
    assert ctx.get_by_name("year") is None
    assert ctx.get_by_range(Single(0)) == "no date here"
    assert ctx.get_by_range(FullyOpen()) == ""


def test_scan_restarts_after_skipped_empty_match():
    """An empty match at the previous end is skipped by one character, not by alternative."""
    ctx = CaptureContext.builder(re.compile(r"(x*)|(ab)"), "xab").build()
    assert ctx.groups == ["x", "", ""]
