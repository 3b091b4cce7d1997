# tests/core/test_xngine.py
import subprocess
from unittest.mock import MagicMock

import pytest

from rargs.core.errors import InvalidPatternError
from rargs.core.xngine import DEFAULT_PATTERN, ExecuteEngine, build_pattern
from rargs.model import RargsOptions

DATE = r"(?P<year>\d{4})-(\d{2})-(\d{2})"


def make_engine(*args, **kwargs):
    """An engine running 'cmd' with the given argument templates."""
    kwargs.setdefault("pattern", DATE)
    return ExecuteEngine(command="cmd", args=list(args), logger=MagicMock(), **kwargs)


def test_named_and_numbered_fields_join_into_one_argument():
    engine = make_engine("{year}/{2}/{3}")
    assert engine.get_args("2018-10-21", 1) == ["2018/10/21"]


def test_split_range_fans_out():
    engine = make_engine("{1...}")
    assert engine.get_args("2018-10-21", 1) == ["2018", "10", "21"]


def test_range_with_custom_separator():
    engine = make_engine("{1..2:-}")
    assert engine.get_args("2018-10-21", 1) == ["2018-10"]


def test_range_uses_default_separator():
    engine = make_engine("{..}", default_sep="+")
    assert engine.get_args("2018-10-21", 1) == ["2018+10+21"]


def test_unmatched_name_gives_empty_argument():
    engine = make_engine("{foo}")
    assert engine.get_args("2018-10-21", 1) == [""]


def test_unresolvable_split_contributes_nothing():
    engine = make_engine("a", "{5...}", "b")
    assert engine.get_args("2018-10-21", 1) == ["a", "b"]


def test_literal_template_is_one_argument_for_every_line():
    engine = make_engine("--verbose")
    assert engine.get_args("2018-10-21", 1) == ["--verbose"]
    assert engine.get_args("garbage", 2) == ["--verbose"]


def test_line_number_pseudo_fields():
    engine = make_engine("{LN}", "{LINENUM}")
    # numbering from --startnum is covered in test_app.py::test_line_numbers_start_at_startnum
    assert engine.get_args("2018-10-21", 7) == ["7", "7"]


def test_templates_concatenate_in_order():
    engine = make_engine("-y", "{year}", "{2...}", "end")
    assert engine.get_args("2018-10-21", 1) == ["-y", "2018", "10", "21", "end"]


def test_unrecognized_field_passes_through():
    engine = make_engine("{a b}")
    assert engine.get_args("2018-10-21", 1) == ["{a b}"]


def test_default_pattern_splits_on_whitespace():
    engine = ExecuteEngine(command="cmd", args=["{2}", "{-1}"])
    assert engine.pattern.pattern == DEFAULT_PATTERN
    assert engine.get_args("one  two three", 1) == ["two", "three"]


def test_delimiter_builds_field_pattern():
    engine = ExecuteEngine(command="cmd", args=["{3}", "{1..2:+}"], delimiter=",")
    assert engine.get_args("a,b,c", 1) == ["c", "a+b"]


def test_invalid_pattern_is_rejected():
    with pytest.raises(InvalidPatternError):
        build_pattern("(unclosed")


def test_execute_for_input_runs_command(monkeypatch):
    run = MagicMock(return_value=subprocess.CompletedProcess(args=[], returncode=3))
    monkeypatch.setattr(subprocess, "run", run)

    engine = make_engine("{year}", "{2...}")
    assert engine.execute_for_input("2018-10-21", 1) == 3

    run.assert_called_once()
    assert run.call_args.args[0] == ["cmd", "2018", "10", "21"]
    assert run.call_args.kwargs["stdin"] == subprocess.DEVNULL


def test_execute_for_input_reports_spawn_failure(monkeypatch, capsys):
    monkeypatch.setattr(subprocess, "run", MagicMock(side_effect=FileNotFoundError(2, "No such file or directory")))

    engine = make_engine("{1}")
    assert engine.execute_for_input("2018-10-21", 1) == 127
    assert "rargs: cmd: " in capsys.readouterr().err


def test_print_commands_to_be_executed(capsys):
    engine = make_engine("{3}", "{2}")
    engine.print_commands_to_be_executed("2018-10-21", 1)
    assert capsys.readouterr().out == "cmd 21 10\n"


def test_from_options():
    opts = RargsOptions(cmd_and_args=["echo", "{1}"], delimiter=":", separator="|")
    engine = ExecuteEngine.from_options(opts)
    assert engine.command == "echo"
    assert engine.default_sep == "|"
    assert engine.get_args("x:y", 1) == ["x"]
