import pytest

from mal.builtin.env_builtin import BUILTINS
from mal.errors import MalError, MalTypeError
from mal.types.collections import HashMap, List, Vector
from mal.types.nil import Nil
from mal.types.symbol import Keyword, Symbol


# -----------------------------------------------------
# Arithmetic and comparison
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+)", 0),
        ("(+ 1 2 3)", 6),
        ("(+ 1 2.5)", 3.5),
        ("(- 10 3 2)", 5),
        ("(- 4)", -4),
        ("(*)", 1),
        ("(* 2 3 4)", 24),
        ("(/ 7 2)", 3),
        ("(/ -7 2)", -3),
        ("(/ 7 -2)", -3),
        ("(/ 7.0 2)", 3.5),
        ("(/ 100 2 5)", 10),
        ("(/ 2)", 0),
        ("(/ 2.0)", 0.5),
    ]
)
def test_arithmetic(interp, source, expected):
    assert interp.eval(source) == expected


def test_division_by_zero(interp):
    with pytest.raises(MalError, match="division by zero"):
        interp.eval("(/ 1 0)")


@pytest.mark.parametrize(
    "source",
    [
        '(+ 1 "2")',
        "(- nil)",
        "(* 2 :a)",
        "(< 1 true)",
    ]
)
def test_arithmetic_type_errors(interp, source):
    with pytest.raises(MalTypeError):
        interp.eval(source)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(< 1 2)", "true"),
        ("(< 1 2 3)", "true"),
        ("(< 1 3 2)", "false"),
        ("(<= 2 2)", "true"),
        ("(> 3 2 1)", "true"),
        ("(>= 1 2)", "false"),
        ("(= 1 1 1)", "true"),
        ("(= 1 1.0)", "true"),
        ('(= "a" "a")', "true"),
        ('(= "a" :a)', "false"),
        ("(= :a :a)", "true"),
        ("(= 'a 'a)", "true"),
        ("(= nil nil)", "true"),
        ("(= nil false)", "false"),
        ("(= 1 true)", "false"),
        ("(= 0 false)", "false"),
        ("(= {:a 1 :b 2} {:b 2 :a 1})", "true"),
        ("(= {:a 1} {:a 2})", "false"),
        ("(= [] ())", "true"),
    ]
)
def test_comparison(interp, source, expected):
    assert interp.rep(source) == expected


# -----------------------------------------------------
# Predicates and constructors
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(nil? nil)", "true"),
        ("(nil? false)", "false"),
        ("(true? true)", "true"),
        ("(true? 1)", "false"),
        ("(false? false)", "true"),
        ("(false? nil)", "false"),
        ("(symbol? 'a)", "true"),
        ("(symbol? :a)", "false"),
        ("(keyword? :a)", "true"),
        ('(keyword? "a")', "false"),
        ('(string? "a")', "true"),
        ("(string? 'a)", "false"),
        ("(number? 1.5)", "true"),
        ("(number? true)", "false"),
        ("(fn? +)", "true"),
        ("(fn? (fn* () 1))", "true"),
        ("(fn? cond)", "false"),
        ("(macro? cond)", "true"),
        ("(list? (list))", "true"),
        ("(list? [])", "false"),
        ("(vector? [])", "true"),
        ("(sequential? [])", "true"),
        ("(sequential? ())", "true"),
        ("(sequential? {})", "false"),
        ("(map? {})", "true"),
        ("(empty? ())", "true"),
        ("(empty? [1])", "false"),
        ("(empty? nil)", "true"),
    ]
)
def test_predicates(interp, source, expected):
    assert interp.rep(source) == expected


def test_constructors(interp):
    assert interp.eval('(symbol "abc")') == Symbol("abc")
    assert interp.eval('(keyword "abc")') == Keyword("abc")
    assert interp.eval("(keyword :abc)") == Keyword("abc")
    assert isinstance(interp.eval("(list 1 2)"), List)
    assert isinstance(interp.eval("(vector 1 2)"), Vector)
    assert interp.eval('(hash-map "a" 1 :b 2)') == HashMap({"a": 1, Keyword("b"): 2})
    with pytest.raises(MalTypeError):
        interp.eval('(hash-map "a")')


# -----------------------------------------------------
# Sequences
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(cons 1 (list 2 3))", "(1 2 3)"),
        ("(cons 1 [2 3])", "(1 2 3)"),
        ("(cons 1 nil)", "(1)"),
        ("(concat)", "()"),
        ("(concat (list 1) [2] nil (list 3 4))", "(1 2 3 4)"),
        ("(count (list 1 2 3))", "3"),
        ("(count nil)", "0"),
        ('(count "abc")', "3"),
        ("(count {:a 1})", "1"),
        ("(first (list 1 2))", "1"),
        ("(first ())", "nil"),
        ("(first nil)", "nil"),
        ("(rest [1 2 3])", "(2 3)"),
        ("(rest ())", "()"),
        ("(rest nil)", "()"),
        ("(nth [10 20 30] 1)", "20"),
        ("(conj (list 2 3) 1 0)", "(0 1 2 3)"),
        ("(conj [1 2] 3 4)", "[1 2 3 4]"),
        ("(seq [1 2])", "(1 2)"),
        ("(seq ())", "nil"),
        ('(seq "ab")', '("a" "b")'),
        ('(seq "")', "nil"),
        ("(vec (list 1 2))", "[1 2]"),
        ("(apply + 1 2 (list 3 4))", "10"),
        ("(apply list [])", "()"),
        ("(map (fn* (x) (* x x)) [1 2 3])", "(1 4 9)"),
        ("(map first (list [1] [2]))", "(1 2)"),
    ]
)
def test_sequences(interp, source, expected):
    assert interp.rep(source) == expected


def test_sequence_ops_share_structure_without_mutation(interp):
    interp.eval("(def! xs (list 2 3))")
    interp.eval("(def! ys (cons 1 xs))")
    assert interp.rep("xs") == "(2 3)"
    assert interp.rep("ys") == "(1 2 3)"
    interp.eval("(def! v [1])")
    interp.eval("(conj v 2)")
    assert interp.rep("v") == "[1]"


def test_nth_out_of_range(interp):
    with pytest.raises(MalError, match="out of range"):
        interp.eval("(nth (list 1 2) 2)")


def test_sequence_type_errors(interp):
    with pytest.raises(MalTypeError):
        interp.eval("(first 1)")
    with pytest.raises(MalTypeError):
        interp.eval("(cons 1 2)")


# -----------------------------------------------------
# Hash maps
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(get {:a 1} :a)", "1"),
        ("(get {:a 1} :b)", "nil"),
        ("(get nil :a)", "nil"),
        ('(get {"k" 1} "k")', "1"),
        ("(get {[1 2] :v} (list 1 2))", ":v"),
        ("(contains? {:a nil} :a)", "true"),
        ("(contains? {:a 1} :b)", "false"),
        ("(assoc {} :a 1 :b 2)", "{:a 1 :b 2}"),
        ("(assoc {:a 1} :a 2)", "{:a 2}"),
        ("(dissoc {:a 1 :b 2} :a :c)", "{:b 2}"),
        ("(keys {:a 1 :b 2})", "(:a :b)"),
        ("(vals {:a 1 :b 2})", "(1 2)"),
        ("(keys {})", "()"),
    ]
)
def test_hash_maps(interp, source, expected):
    assert interp.rep(source) == expected


def test_assoc_does_not_mutate(interp):
    interp.eval("(def! m {:a 1})")
    interp.eval("(assoc m :b 2)")
    interp.eval("(dissoc m :a)")
    assert interp.rep("m") == "{:a 1}"


def test_equal_keys_are_unique(interp):
    assert interp.eval("(count (assoc {[1] :x} (list 1) :y))") == 1
    assert interp.eval("(count (hash-map 1 :a 1.0 :b))") == 1


def test_functions_are_not_map_keys(interp):
    interp.eval("(def! f (fn* () 1))")
    with pytest.raises(MalTypeError):
        interp.eval("(hash-map f 1)")
    with pytest.raises(MalTypeError):
        interp.eval("(get {} f)")
    with pytest.raises(MalTypeError):
        interp.eval("(contains? {} +)")


def test_true_and_one_are_distinct_keys(interp):
    assert interp.eval("(count (hash-map 1 :a true :b))") == 2


# -----------------------------------------------------
# Strings and I/O
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ('(pr-str "a" 1 :k)', '"\\"a\\" 1 :k"'),
        ("(pr-str)", '""'),
        ('(str "a" 1 :k nil)', '"a1:knil"'),
        ('(str "a\\nb")', '"a\\nb"'),
        ("(str [1 \"x\"])", '"[1 x]"'),
        ("(str)", '""'),
        ('(read-string "(1 2)")', "(1 2)"),
        ('(read-string ";; nothing")', "nil"),
        ('(read-string ":kw")', ":kw"),
    ]
)
def test_strings(interp, source, expected):
    assert interp.rep(source) == expected


def test_prn_and_println(interp, capsys):
    assert interp.eval('(prn "a" 1)') is Nil
    assert interp.eval('(println "a" 1)') is Nil
    out = capsys.readouterr().out
    assert out == '"a" 1\na 1\n'


def test_slurp(interp, tmp_path):
    path = tmp_path / "data.txt"
    path.write_text("hello\nworld", encoding="utf-8")
    assert interp.eval(f'(slurp "{path}")') == "hello\nworld"


def test_readline(interp, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt: "typed")
    assert interp.eval('(readline "> ")') == "typed"


def test_readline_eof(interp, monkeypatch):
    def eof(prompt):
        raise EOFError

    monkeypatch.setattr("builtins.input", eof)
    assert interp.eval('(readline "> ")') is Nil


# -----------------------------------------------------
# Misc
# -----------------------------------------------------

def test_time_ms(interp):
    first = interp.eval("(time-ms)")
    assert isinstance(first, int)
    assert interp.eval("(time-ms)") >= first


def test_every_builtin_is_registered(interp):
    for name in BUILTINS:
        assert interp.env.lookup(Symbol(name)) is not None
