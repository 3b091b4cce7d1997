# src/rargs/core/xngine.py
from __future__ import annotations

import logging
import re
import subprocess
import sys
from typing import List, Optional, Pattern, Sequence, TYPE_CHECKING

from rargs.core.context.capture_context import DEFAULT_SEPARATOR, CaptureContext
from rargs.core.errors import InvalidPatternError
from rargs.core.expander import expand_templates
from rargs.core.parser import ArgTemplate, compile_templates

if TYPE_CHECKING:
    from rargs.model import RargsOptions

CONTEXT_KEY_LINENUM = "LINENUM"
CONTEXT_KEY_LINENUM_SHORT = "LN"

# Used when neither a pattern nor a delimiter is given: split on whitespace runs
DEFAULT_PATTERN = r"(.*?)\s+|(.*?)$"


def build_pattern(pattern: Optional[str] = None, delimiter: Optional[str] = None) -> Pattern[str]:
    """
    Compiles the line-matching regex.

    A delimiter turns into a pattern capturing every delimited field. Raises
    InvalidPatternError when the resulting regex does not compile.
    """
    if pattern is not None:
        source = pattern
    elif delimiter is not None:
        source = rf"(.*?){delimiter}|(.*?)$"
    else:
        source = DEFAULT_PATTERN

    try:
        return re.compile(source)
    except re.error as e:
        raise InvalidPatternError(source, str(e)) from e


class ExecuteEngine:
    """
    Expands the argument templates against each input line and runs the
    command with the result. Everything held here is read-only after
    construction, so one engine is shared by all worker threads.
    """

    def __init__(
            self,
            *,
            command: str,
            args: Sequence[str] = (),
            pattern: Optional[str] = None,
            delimiter: Optional[str] = None,
            default_sep: str = DEFAULT_SEPARATOR,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self.command = command
        self.pattern = build_pattern(pattern, delimiter)
        self.templates: List[ArgTemplate] = compile_templates(args)
        self.default_sep = default_sep
        self._log = logger or logging.getLogger(__name__)
        self._log.debug(
            "Engine ready: command=%r pattern=%r templates=%d",
            command, self.pattern.pattern, len(self.templates),
        )

    @classmethod
    def from_options(cls, opts: "RargsOptions") -> "ExecuteEngine":
        command, *args = opts.cmd_and_args
        return cls(
            command=command,
            args=args,
            pattern=opts.pattern,
            delimiter=opts.delimiter,
            default_sep=opts.separator,
        )

    def build_context(self, line: str, line_num: int) -> CaptureContext:
        return (
            CaptureContext.builder(self.pattern, line)
            .with_default_sep(self.default_sep)
            .put(CONTEXT_KEY_LINENUM, str(line_num))
            .put(CONTEXT_KEY_LINENUM_SHORT, str(line_num))
            .build()
        )

    def get_args(self, line: str, line_num: int) -> List[str]:
        """Returns the expanded argument list (without the command) for one line."""
        context = self.build_context(line, line_num)
        return expand_templates(self.templates, context)

    def execute_for_input(self, line: str, line_num: int) -> int:
        """
        Runs the command for one line and returns its exit status.

        The status is not interpreted. A command that cannot be started is
        reported on stderr and yields 127.
        """
        args = self.get_args(line, line_num)
        self._log.debug("Line %d: running %r with %r", line_num, self.command, args)
        try:
            proc = subprocess.run([self.command] + args, stdin=subprocess.DEVNULL, check=False)
            return int(proc.returncode)
        except OSError as e:
            self._log.debug("Failed to start %r for line %d: %s", self.command, line_num, e)
            print(f"rargs: {self.command}: {e}", file=sys.stderr)
            return 127

    def print_commands_to_be_executed(self, line: str, line_num: int) -> None:
        args = self.get_args(line, line_num)
        print(f"{self.command} {' '.join(args)}")
