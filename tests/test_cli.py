import io
import sys

import pytest

from kappa.cli import main, run


def write_program(tmp_path, text):
    path = tmp_path / "program.k"
    path.write_text(text, encoding="utf-8")
    return path


def test_runs_program_file(tmp_path, capsys):
    path = write_program(tmp_path, "x = 1\n(print (add x 2))\n")
    assert main([str(path)]) == 0
    captured = capsys.readouterr()
    assert captured.out == "3\n"
    assert captured.err == ""


def test_runtime_error_exits_with_failure(tmp_path, capsys):
    path = write_program(tmp_path, '(print 1)\n(add 1 "a")\n(print 2)\n')
    assert main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out == "1\n"
    assert "add: tried to add number to string" in captured.err


def test_syntax_error_reports_location(tmp_path, capsys):
    path = write_program(tmp_path, "x = 5 )")
    assert main([str(path)]) == 1
    err = capsys.readouterr().err
    assert f"{path}:1:7:" in err
    assert "x = 5 )" in err


def test_reads_standard_input(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO('(print "hi")'))
    assert main([]) == 0
    assert capsys.readouterr().out == '"hi"\n'


def test_dash_reads_standard_input(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("(print true)"))
    assert main(["-"]) == 0
    assert capsys.readouterr().out == "true\n"


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.k")]) == 1
    assert "could not be opened" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as exit_info:
        main(["--version"])
    assert exit_info.value.code == 0
    assert "kappa 0.1.0" in capsys.readouterr().out


def test_runaway_recursion_is_reported(capsys):
    sys.setrecursionlimit(1000)
    assert run("loop = n => (loop n)\n(loop 1)") == 1
    assert "maximum recursion depth exceeded" in capsys.readouterr().err


def test_debug_logs_parse_and_evaluation(tmp_path, caplog):
    path = write_program(tmp_path, "x = 1")
    with caplog.at_level("DEBUG"):
        assert main([str(path), "--debug"]) == 0
    assert "parsed 1 top-level expressions" in caplog.text
