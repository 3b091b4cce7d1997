# src/rargs/core/parser.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from rargs.core.combinations import Combination, group_combinations
from rargs.core.fields import Fragment, Literal, parse_field

# Pattern to find a field token: a '{', anything but braces, then '}'
FIELD_TOKEN_PATTERN = re.compile(r"\{[^{}]*\}")


@dataclass(frozen=True)
class ArgTemplate:
    """
    The compiled form of one command-line argument.

    "x {abc} z" compiles to Literal("x "), NamedGroup("abc"), Literal(" z"),
    which is grouped once into the combinations used for every line.
    """
    raw: str
    fragments: Tuple[Fragment, ...]
    combinations: Tuple[Combination, ...] = field(default=())


def tokenize_template(arg: str) -> List[Fragment]:
    """
    Splits a raw argument into literal text and parsed field fragments.

    Every gap between tokens (including a leading and trailing one) is kept as
    a Literal, possibly empty, so the fragment order mirrors the argument.
    """
    fragments: List[Fragment] = []
    last = 0
    for m in FIELD_TOKEN_PATTERN.finditer(arg):
        fragments.append(Literal(arg[last:m.start()]))
        fragments.append(parse_field(m.group(0)))
        last = m.end()
    fragments.append(Literal(arg[last:]))
    return fragments


def compile_template(arg: str) -> ArgTemplate:
    """Compiles one argument string into its fragments and combinations."""
    fragments = tokenize_template(arg)
    return ArgTemplate(
        raw=arg,
        fragments=tuple(fragments),
        combinations=tuple(group_combinations(fragments)),
    )


def compile_templates(args: Sequence[str]) -> List[ArgTemplate]:
    """Compiles every argument of a command line, preserving order."""
    return [compile_template(a) for a in args]
