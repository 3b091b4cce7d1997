# src/rargs/core/context/capture_context.py
from __future__ import annotations

import logging
import re
from typing import Dict, Iterator, List, Optional, Pattern

from rargs.core.ranges import Range, resolve_joined, resolve_split

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = " "


def iter_matches(pattern: Pattern[str], content: str) -> Iterator[re.Match]:
    """
    Yields the successive matches of ``pattern`` over ``content``.

    An empty match that starts exactly where the previous match ended is
    skipped, and the search restarts one character further on. Without this,
    a trailing ``(.*?)$`` alternative would add an empty capture after a match
    that already reached the end of the line.
    """
    last_end: Optional[int] = None
    pos = 0
    while pos <= len(content):
        m = pattern.search(content, pos)
        if m is None:
            break
        if m.start() == m.end() == last_end:
            pos = m.start() + 1
            continue
        last_end = m.end()
        pos = m.end()
        yield m


class CaptureContext:
    """
    The fields captured from one input line. For example:

    input:   2018-10-21
    pattern: "^(?P<year>\\d{4})-(\\d{2})-(\\d{2})$"

    gives:
    {}/{0}      => "2018-10-21"
    {1}/{year}  => "2018"
    {2}         => "10"
    {3}         => "21"

    Positional captures run across every match in the line; a named group that
    matches more than once keeps the value from its last match.
    """

    def __init__(
            self,
            values: Dict[str, str],
            groups: List[str],
            default_sep: str = DEFAULT_SEPARATOR,
    ) -> None:
        self._values = values
        self._groups = groups
        self.default_sep = default_sep

    @classmethod
    def builder(cls, pattern: Pattern[str], content: str) -> "CaptureContext":
        """Runs ``pattern`` over ``content`` and collects every capture."""
        values: Dict[str, str] = {"": content, "0": content}
        groups: List[str] = []

        for m in iter_matches(pattern, content):
            groups.extend(g for g in m.groups() if g is not None)
            for name, index in pattern.groupindex.items():
                value = m.group(index)
                if value is not None:
                    values[name] = value

        logger.debug("Captured %d positional groups from %r", len(groups), content)
        return cls(values, groups)

    def with_default_sep(self, default_sep: str) -> "CaptureContext":
        self.default_sep = default_sep
        return self

    def put(self, key: str, value: str) -> "CaptureContext":
        """Injects a pseudo-field, overriding any capture of the same name."""
        self._values[key] = value
        return self

    def build(self) -> "CaptureContext":
        return self

    @property
    def groups(self) -> List[str]:
        return list(self._groups)

    def get_by_name(self, group_name: str) -> Optional[str]:
        return self._values.get(group_name)

    def get_by_range(self, rng: Range, sep: Optional[str] = None) -> Optional[str]:
        separator = sep if sep is not None else self.default_sep
        return resolve_joined(rng, self._groups, separator, whole=self._values.get(""))

    def get_by_split_range(self, rng: Range) -> List[str]:
        return resolve_split(rng, self._groups, whole=self._values.get(""))

    def __repr__(self) -> str:
        return f"<CaptureContext groups={len(self._groups)} names={len(self._values)}>"
