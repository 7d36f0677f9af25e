import pytest

from mal.printer import escape, pr_str
from mal.types.atom import Atom
from mal.types.boolean import false, true
from mal.types.collections import HashMap, List, Vector
from mal.types.environment import Environment
from mal.types.lambda_fn import Builtin, Lambda
from mal.types.nil import Nil
from mal.types.symbol import Keyword, Symbol


@pytest.mark.parametrize(
    "value,expected",
    [
        (Nil, "nil"),
        (true, "true"),
        (false, "false"),
        (42, "42"),
        (-7, "-7"),
        (2.5, "2.5"),
        (Symbol("abc"), "abc"),
        (Keyword("kw"), ":kw"),
        ("plain", '"plain"'),
        ('say "hi"', '"say \\"hi\\""'),
        ("line\nbreak", '"line\\nbreak"'),
        ("back\\slash", '"back\\\\slash"'),
        (List(), "()"),
        (Vector(), "[]"),
        (HashMap(), "{}"),
        (List([1, List([2, 3])]), "(1 (2 3))"),
        (Vector([1, "a", Keyword("b")]), '[1 "a" :b]'),
        (HashMap({Keyword("a"): Vector([1])}), "{:a [1]}"),
        (Atom(1), "(atom 1)"),
    ]
)
def test_readable(value, expected):
    assert pr_str(value, True) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ('say "hi"', 'say "hi"'),
        ("line\nbreak", "line\nbreak"),
        (List(["a", Symbol("b")]), "(a b)"),
        (HashMap({"k": "v"}), "{k v}"),
        (Atom("x"), "(atom x)"),
    ]
)
def test_not_readable(value, expected):
    assert pr_str(value, False) == expected


def test_functions_print_opaquely():
    fn = Lambda([], [1], Environment())
    assert pr_str(fn) == "#<function>"
    assert pr_str(fn.as_macro()) == "#<macro>"
    builtin = Builtin("f", lambda env, args: Nil)
    assert pr_str(builtin) == "#<function>"
    assert pr_str(builtin.as_macro()) == "#<macro>"


def test_escape():
    assert escape('a"b\\c\nd') == 'a\\"b\\\\c\\nd'
    assert escape("tab\tstays") == "tab\tstays"
