import logging

import pytest

from mal import config
from mal.errors import MalUnresolvedSymbol
from mal.interpreter import Interpreter
from mal.modules.prelude_loader import load_prelude, prelude_path
from mal.types.collections import List
from mal.types.nil import Nil


def test_prelude_defines_bootstrap_functions(interp):
    assert interp.rep("(not true)") == "false"
    assert interp.rep("(not nil)") == "true"
    assert interp.rep("(not 0)") == "false"
    assert interp.rep("(fn? load-file)") == "true"
    assert interp.rep("(macro? cond)") == "true"
    assert interp.rep("(macro? or)") == "true"


def test_no_prelude():
    interp = Interpreter(prelude=None)
    with pytest.raises(MalUnresolvedSymbol):
        interp.eval("(not true)")


def test_prelude_from_source():
    interp = Interpreter(prelude="(def! answer 42)")
    assert interp.eval("answer") == 42


def test_load_file(interp, tmp_path):
    source = tmp_path / "lib.mal"
    source.write_text(
        ";; library\n"
        "(def! square (fn* (x) (* x x)))\n"
        "(def! nine (square 3)) ; trailing comment",
        encoding="utf-8",
    )
    assert interp.eval(f'(load-file "{source}")') is Nil
    assert interp.eval("nine") == 9
    assert interp.eval("(square 4)") == 16


def test_eval_uses_root_environment(interp):
    assert interp.eval("(eval (list + 1 2))") == 3
    assert interp.eval("(eval (read-string \"(+ 2 3)\"))") == 5
    interp.eval("(let* (x 1) (eval '(def! from-eval 7)))")
    assert interp.eval("from-eval") == 7
    with pytest.raises(MalUnresolvedSymbol):
        interp.eval("(let* (local 1) (eval 'local))")


def test_argv_binding():
    interp = Interpreter(argv=["a", "b"])
    argv = interp.eval("*ARGV*")
    assert isinstance(argv, List)
    assert argv == ["a", "b"]
    assert Interpreter().eval("*ARGV*") == []


def test_eval_returns_last_result(interp):
    assert interp.eval("1 2 3") == 3
    assert interp.eval("") is Nil
    assert interp.rep("") is None
    assert interp.rep("(def! x 1) (+ x 1)") == "2"


def test_prelude_path_override(tmp_path, monkeypatch):
    (tmp_path / "core.mal").write_text("(def! custom-prelude true)", encoding="utf-8")
    monkeypatch.setenv("MAL_PRELUDE_PATH", str(tmp_path))
    assert prelude_path() == tmp_path / "core.mal"
    interp = Interpreter()
    assert interp.rep("custom-prelude") == "true"


def test_prelude_path_may_name_the_file(tmp_path, monkeypatch):
    (tmp_path / "core.mal").write_text("", encoding="utf-8")
    monkeypatch.setenv("MAL_PRELUDE_PATH", str(tmp_path / "core.mal"))
    assert config.get_prelude_root() == tmp_path


def test_missing_prelude_is_a_warning(tmp_path, monkeypatch, caplog):
    monkeypatch.setenv("MAL_PRELUDE_PATH", str(tmp_path))
    with pytest.raises(FileNotFoundError):
        load_prelude(Interpreter(prelude=None))
    with caplog.at_level(logging.WARNING):
        interp = Interpreter()
    assert "Cannot find prelude" in caplog.text
    assert interp.eval("(+ 1 1)") == 2


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, logging.WARNING),
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("nonsense", logging.WARNING),
    ]
)
def test_log_level(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("MAL_LOG_LEVEL", raising=False)
    else:
        monkeypatch.setenv("MAL_LOG_LEVEL", raw)
    assert config.get_log_level() == expected


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, 10_000),
        ("50000", 50_000),
        ("lots", 10_000),
    ]
)
def test_recursion_limit(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("MAL_RECURSION_LIMIT", raising=False)
    else:
        monkeypatch.setenv("MAL_RECURSION_LIMIT", raw)
    assert config.get_recursion_limit() == expected
