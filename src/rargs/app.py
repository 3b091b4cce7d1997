# src/rargs/app.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO, List, Optional

from pydantic import ValidationError

from rargs.core.errors import InvalidPatternError, LineDecodeError
from rargs.core.managers.config_manager import config_manager
from rargs.core.utils.configure_logging import configure_logger
from rargs.core.utils.line_reader import read_lines
from rargs.core.utils.parallel_workers import LineDispatcher
from rargs.core.xngine import ExecuteEngine
from rargs.model import RargsOptions

logger = logging.getLogger(__name__)

EPILOG = """
field syntax in arguments:
  {name} {}          named group / the whole line
  {N} {-N}           Nth captured group, or counted from the end
  {L..R} {..R} {L..} {..}
                     groups L through R joined by the separator
  {L..R:sep}         the same, joined by 'sep'
  {L...R}            groups L through R as separate arguments
  {LINENUM} {LN}     the current line number
""".strip()


def build_arg_parser() -> argparse.ArgumentParser:
    """Builds the CLI parser; defaults for separator, startnum and threads come from settings."""
    parser = argparse.ArgumentParser(
        prog="rargs",
        description="Xargs with pattern matching",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-0", "--read0", action="store_true",
                        help="Read input delimited by ASCII NUL(\\0) characters")
    parser.add_argument("-w", "--worker", type=int, default=1,
                        help="Deprecated. Number of threads to be used (same as --threads)")
    parser.add_argument("-j", "--threads", type=int,
                        default=config_manager.get_nested("defaults.threads", 1),
                        help="Number of threads to be used")

    source = parser.add_mutually_exclusive_group()
    source.add_argument("-p", "--pattern", help="regex pattern that captures the input")
    source.add_argument("-d", "--delimiter",
                        help="regex pattern used as delimiter (conflict with pattern)")

    parser.add_argument("-s", "--separator",
                        default=config_manager.get_nested("defaults.separator", " "),
                        help="separator for ranged fields")
    parser.add_argument("-n", "--startnum", type=int,
                        default=config_manager.get_nested("defaults.startnum", 1),
                        help="start value for line number")
    parser.add_argument("-e", "--dry-run", dest="dry_run", action="store_true",
                        help="Print the commands to be executed without actually execute")
    parser.add_argument("--progress", action="store_true",
                        help="Show a progress bar on stderr")
    parser.add_argument("--log-level", dest="log_level", default=None,
                        help="Logging level (default: debug.level from settings)")
    parser.add_argument("cmd_and_args", nargs=argparse.REMAINDER,
                        help="command to execute and its arguments")
    return parser


def run(engine: ExecuteEngine, opts: RargsOptions, stream: BinaryIO) -> int:
    """
    Feeds every input line to the engine. Returns the process exit status:
    0 when all input was consumed, 1 when a line could not be decoded.
    """
    lines = read_lines(stream, opts.line_delimiter, opts.startnum)
    try:
        if opts.dry_run:
            for line, line_num in lines:
                engine.print_commands_to_be_executed(line, line_num)
            return 0

        with LineDispatcher(engine, opts.num_threads, show_progress=opts.progress) as dispatcher:
            for line, line_num in lines:
                dispatcher.submit(line, line_num)
    except LineDecodeError as e:
        logger.debug("Stopped reading input: %s", e)
        print(f"rargs: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None, stdin: Optional[BinaryIO] = None) -> int:
    """Entrypoint for running rargs from the command line."""
    parser = build_arg_parser()
    ns = parser.parse_args(argv)

    configure_logger(ns.log_level or config_manager.get_nested("debug.level", "WARNING"))

    cmd_and_args = list(ns.cmd_and_args)
    if cmd_and_args and cmd_and_args[0] == "--":
        cmd_and_args = cmd_and_args[1:]
    if not cmd_and_args:
        parser.error("the following arguments are required: cmd_and_args")

    fields = vars(ns)
    fields.pop("log_level")
    fields["cmd_and_args"] = cmd_and_args
    try:
        opts = RargsOptions(**fields)
    except ValidationError as e:
        print(f"rargs: invalid options: {e}", file=sys.stderr)
        return 2

    try:
        engine = ExecuteEngine.from_options(opts)
    except InvalidPatternError as e:
        logger.debug("%s", e)
        print(f"rargs: {e}", file=sys.stderr)
        return 2

    logger.info("Running %r with %d thread(s).", engine.command, opts.num_threads)
    return run(engine, opts, stdin if stdin is not None else sys.stdin.buffer)


if __name__ == "__main__":
    sys.exit(main())
