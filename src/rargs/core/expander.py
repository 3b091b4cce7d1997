# src/rargs/core/expander.py
from __future__ import annotations

from typing import Iterable, List, Optional

from rargs.core.combinations import Combination, Join, JoinPart, Split
from rargs.core.context.capture_context import CaptureContext
from rargs.core.fields import Literal, NamedGroup
from rargs.core.parser import ArgTemplate


def _resolve_part(part: JoinPart, context: CaptureContext) -> Optional[str]:
    if isinstance(part, Literal):
        return part.text
    if isinstance(part, NamedGroup):
        return context.get_by_name(part.name)
    return context.get_by_range(part.range, part.separator)


def combine_with_context(context: CaptureContext, combinations: Iterable[Combination]) -> List[str]:
    """
    Resolves combinations into arguments: each Join yields exactly one string,
    each Split yields one string per capture in its range.
    """
    out: List[str] = []
    for combination in combinations:
        if isinstance(combination, Join):
            out.append("".join(_resolve_part(p, context) or "" for p in combination.parts))
        elif isinstance(combination, Split):
            out.extend(context.get_by_split_range(combination.range))
    return out


def expand_template(template: ArgTemplate, context: CaptureContext) -> List[str]:
    """Expands one compiled argument into zero or more actual arguments."""
    return combine_with_context(context, template.combinations)


def expand_templates(templates: Iterable[ArgTemplate], context: CaptureContext) -> List[str]:
    """Expands every argument template in order and concatenates the results."""
    args: List[str] = []
    for template in templates:
        args.extend(expand_template(template, context))
    return args
