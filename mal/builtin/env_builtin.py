"""Built-in functions for the mal runtime environment.

This module defines core arithmetic, comparison, sequence and hash-map
processing, predicates, strings and printing, atoms, metadata and error
builtins, plus the registration utility that installs them into an
Environment. Every builtin has the signature fn(env, args) and receives
already-evaluated arguments.
"""
from __future__ import annotations

import time
from pathlib import Path
from typing import Callable

from mal import LispValue
from mal.errors import MalError, MalException, MalTypeError
from mal.evaluation.apply import apply_function
from mal.evaluation.evaluator import evaluate
from mal.evaluation.special_forms.checks import check_arity
from mal.printer import pr_str
from mal.reader.parser import read_str
from mal.types.atom import Atom
from mal.types.boolean import Boolean, boolean, false, true
from mal.types.collections import HashMap, List, Vector
from mal.types.environment import Environment
from mal.types.equality import equal, is_number
from mal.types.lambda_fn import Builtin
from mal.types.nil import Nil
from mal.types.symbol import Keyword, Symbol
from mal.types.values import get_meta, hash_key, is_function, is_macro, with_meta

BuiltinFn = Callable[[Environment, list[LispValue]], LispValue]


def _numbers(name: str, expr: list[LispValue]) -> list[LispValue]:
    for x in expr:
        if not is_number(x):
            raise MalTypeError(f"All arguments to {name} must be numbers, got {pr_str(x)}")
    return expr


def _sequence(name: str, value: LispValue) -> tuple:
    """Accept a list, a vector or nil (as the empty sequence)."""
    if value is Nil:
        return ()
    if not isinstance(value, (List, Vector)):
        raise MalTypeError(f"{name} expects a list or vector, got {pr_str(value)}")
    return value


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the numeric sum of all arguments; errors if any arg is non-numeric."""
    return sum(_numbers("+", expr))


def sub(env: Environment, expr: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    check_arity("-", expr, 1)
    _numbers("-", expr)
    if len(expr) == 1:
        return -expr[0]
    result = expr[0]
    for x in expr[1:]:
        result -= x
    return result


def mul(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the product of all arguments; errors if any arg is non-numeric."""
    result = 1
    for x in _numbers("*", expr):
        result *= x
    return result


def _divide(a, b):
    if b == 0:
        raise MalError("division by zero")
    if isinstance(a, int) and isinstance(b, int):
        # integer division truncates toward zero
        quotient = abs(a) // abs(b)
        return quotient if (a >= 0) == (b > 0) else -quotient
    return a / b


def div(env: Environment, expr: list[LispValue]) -> LispValue:
    """Divide left-to-right; with one arg returns the reciprocal."""
    check_arity("/", expr, 1)
    _numbers("/", expr)
    if len(expr) == 1:
        return _divide(1, expr[0])
    result = expr[0]
    for x in expr[1:]:
        result = _divide(result, x)
    return result


# -------------------------------
# Comparison
# -------------------------------
def equals(env: Environment, expr: list[LispValue]) -> Boolean:
    """Return true if all arguments are equal to the first."""
    check_arity("=", expr, 1)
    first = expr[0]
    return boolean(all(equal(first, other) for other in expr[1:]))


def _chain(name: str, test: Callable[[LispValue, LispValue], bool]) -> BuiltinFn:
    def compare(env: Environment, expr: list[LispValue]) -> Boolean:
        check_arity(name, expr, 1)
        _numbers(name, expr)
        return boolean(all(test(a, b) for a, b in zip(expr, expr[1:])))

    compare.__doc__ = f"Chainable {name}: true if it holds for every adjacent pair."
    return compare


lt = _chain("<", lambda a, b: a < b)
lte = _chain("<=", lambda a, b: a <= b)
gt = _chain(">", lambda a, b: a > b)
gte = _chain(">=", lambda a, b: a >= b)


# -------------------------------
# Predicates
# -------------------------------
def _predicate(name: str, test: Callable[[LispValue], bool]) -> BuiltinFn:
    def predicate(env: Environment, expr: list[LispValue]) -> Boolean:
        check_arity(name, expr, 1, 1)
        return boolean(test(expr[0]))

    return predicate


PREDICATES: dict[str, Callable[[LispValue], bool]] = {
    "nil?": lambda x: x is Nil,
    "true?": lambda x: x is true,
    "false?": lambda x: x is false,
    "symbol?": lambda x: isinstance(x, Symbol),
    "keyword?": lambda x: isinstance(x, Keyword),
    "string?": lambda x: isinstance(x, str),
    "number?": is_number,
    "fn?": lambda x: is_function(x) and not x.is_macro,
    "macro?": is_macro,
    "list?": lambda x: isinstance(x, List),
    "vector?": lambda x: isinstance(x, Vector),
    "sequential?": lambda x: isinstance(x, (List, Vector)),
    "map?": lambda x: isinstance(x, HashMap),
    "atom?": lambda x: isinstance(x, Atom),
}


# -------------------------------
# Constructors
# -------------------------------
def symbol(env: Environment, expr: list[LispValue]) -> Symbol:
    check_arity("symbol", expr, 1, 1)
    if not isinstance(expr[0], str):
        raise MalTypeError("symbol expects a string")
    return Symbol(expr[0])


def keyword(env: Environment, expr: list[LispValue]) -> Keyword:
    check_arity("keyword", expr, 1, 1)
    if isinstance(expr[0], Keyword):
        return expr[0]
    if not isinstance(expr[0], str):
        raise MalTypeError("keyword expects a string")
    return Keyword(expr[0])


def list_builtin(env: Environment, expr: list[LispValue]) -> List:
    """Return a new list containing the given arguments."""
    return List(expr)


def vector(env: Environment, expr: list[LispValue]) -> Vector:
    return Vector(expr)


def hash_map(env: Environment, expr: list[LispValue]) -> HashMap:
    if len(expr) % 2 != 0:
        raise MalTypeError("hash-map requires an even number of arguments")
    return HashMap((hash_key("hash-map", k), v) for k, v in zip(expr[::2], expr[1::2]))


# -------------------------------
# Sequence operations
# -------------------------------
def cons(env: Environment, expr: list[LispValue]) -> List:
    """Construct a new list by prepending head to a list, vector or nil."""
    check_arity("cons", expr, 2, 2)
    head, tail = expr
    return List([head, *_sequence("cons", tail)])


def concat(env: Environment, expr: list[LispValue]) -> List:
    """Concatenate lists and vectors (nil counts as empty) into a new list."""
    return List(item for seq in expr for item in _sequence("concat", seq))


def count(env: Environment, expr: list[LispValue]) -> int:
    check_arity("count", expr, 1, 1)
    xs = expr[0]
    if isinstance(xs, (HashMap, str)):
        return len(xs)
    return len(_sequence("count", xs))


def is_empty(env: Environment, expr: list[LispValue]) -> Boolean:
    check_arity("empty?", expr, 1, 1)
    return boolean(count(env, expr) == 0)


def first(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the first element; nil for an empty sequence or nil."""
    check_arity("first", expr, 1, 1)
    xs = _sequence("first", expr[0])
    return xs[0] if xs else Nil


def rest(env: Environment, expr: list[LispValue]) -> List:
    """Return all but the first element as a list; () for nil or empty."""
    check_arity("rest", expr, 1, 1)
    return List(_sequence("rest", expr[0])[1:])


def nth(env: Environment, expr: list[LispValue]) -> LispValue:
    check_arity("nth", expr, 2, 2)
    xs = _sequence("nth", expr[0])
    index = expr[1]
    if not isinstance(index, int) or isinstance(index, bool):
        raise MalTypeError("nth index must be an integer")
    if not 0 <= index < len(xs):
        raise MalError("nth: index out of range")
    return xs[index]


def conj(env: Environment, expr: list[LispValue]) -> LispValue:
    """Lists grow at the front, vectors at the back."""
    check_arity("conj", expr, 1)
    coll, items = expr[0], expr[1:]
    if isinstance(coll, Vector):
        return Vector([*coll, *items])
    return List([*reversed(items), *_sequence("conj", coll)])


def seq(env: Environment, expr: list[LispValue]) -> LispValue:
    check_arity("seq", expr, 1, 1)
    xs = expr[0]
    if isinstance(xs, str):
        return List(xs) if xs else Nil
    xs = _sequence("seq", xs)
    return List(xs) if xs else Nil


def vec(env: Environment, expr: list[LispValue]) -> Vector:
    check_arity("vec", expr, 1, 1)
    return Vector(_sequence("vec", expr[0]))


def apply(env: Environment, expr: list[LispValue]) -> LispValue:
    """(apply f a b '(c d)) calls f with a b c d."""
    check_arity("apply", expr, 2)
    fn, *middle, last = expr
    return apply_function(fn, [*middle, *_sequence("apply", last)], env, evaluate)


def map_builtin(env: Environment, expr: list[LispValue]) -> List:
    check_arity("map", expr, 2, 2)
    fn, xs = expr
    return List(apply_function(fn, [x], env, evaluate) for x in _sequence("map", xs))


# -------------------------------
# Hash-map operations
# -------------------------------
def _map_arg(name: str, value: LispValue) -> HashMap:
    if value is Nil:
        return HashMap()
    if not isinstance(value, HashMap):
        raise MalTypeError(f"{name} expects a hash-map, got {pr_str(value)}")
    return value


def assoc(env: Environment, expr: list[LispValue]) -> HashMap:
    check_arity("assoc", expr, 1)
    result = HashMap(_map_arg("assoc", expr[0]))
    result.update(hash_map(env, expr[1:]))
    return result


def dissoc(env: Environment, expr: list[LispValue]) -> HashMap:
    check_arity("dissoc", expr, 1)
    result = HashMap(_map_arg("dissoc", expr[0]))
    for key in expr[1:]:
        result.pop(hash_key("dissoc", key), None)
    return result


def get(env: Environment, expr: list[LispValue]) -> LispValue:
    check_arity("get", expr, 2, 2)
    return _map_arg("get", expr[0]).get(hash_key("get", expr[1]), Nil)


def contains(env: Environment, expr: list[LispValue]) -> Boolean:
    check_arity("contains?", expr, 2, 2)
    return boolean(hash_key("contains?", expr[1]) in _map_arg("contains?", expr[0]))


def keys(env: Environment, expr: list[LispValue]) -> List:
    check_arity("keys", expr, 1, 1)
    return List(_map_arg("keys", expr[0]).keys())


def vals(env: Environment, expr: list[LispValue]) -> List:
    check_arity("vals", expr, 1, 1)
    return List(_map_arg("vals", expr[0]).values())


# -------------------------------
# Strings, printing and reading
# -------------------------------
def pr_str_builtin(env: Environment, expr: list[LispValue]) -> str:
    return " ".join(pr_str(x, True) for x in expr)


def str_builtin(env: Environment, expr: list[LispValue]) -> str:
    return "".join(pr_str(x, False) for x in expr)


def prn(env: Environment, expr: list[LispValue]) -> LispValue:
    print(" ".join(pr_str(x, True) for x in expr))
    return Nil


def println(env: Environment, expr: list[LispValue]) -> LispValue:
    print(" ".join(pr_str(x, False) for x in expr))
    return Nil


def read_string(env: Environment, expr: list[LispValue]) -> LispValue:
    check_arity("read-string", expr, 1, 1)
    if not isinstance(expr[0], str):
        raise MalTypeError("read-string expects a string")
    form = read_str(expr[0])
    return Nil if form is None else form


def slurp(env: Environment, expr: list[LispValue]) -> str:
    check_arity("slurp", expr, 1, 1)
    if not isinstance(expr[0], str):
        raise MalTypeError("slurp expects a file name")
    return Path(expr[0]).read_text(encoding="utf-8")


def readline(env: Environment, expr: list[LispValue]) -> LispValue:
    check_arity("readline", expr, 1, 1)
    try:
        return input(pr_str(expr[0], False))
    except EOFError:
        return Nil


# -------------------------------
# Atoms
# -------------------------------
def _atom_arg(name: str, value: LispValue) -> Atom:
    if not isinstance(value, Atom):
        raise MalTypeError(f"{name} expects an atom, got {pr_str(value)}")
    return value


def atom(env: Environment, expr: list[LispValue]) -> Atom:
    check_arity("atom", expr, 1, 1)
    return Atom(expr[0])


def deref(env: Environment, expr: list[LispValue]) -> LispValue:
    check_arity("deref", expr, 1, 1)
    return _atom_arg("deref", expr[0]).value


def reset(env: Environment, expr: list[LispValue]) -> LispValue:
    check_arity("reset!", expr, 2, 2)
    return _atom_arg("reset!", expr[0]).reset(expr[1])


def swap(env: Environment, expr: list[LispValue]) -> LispValue:
    """(swap! a f x y) sets a to (f @a x y) and returns the new value."""
    check_arity("swap!", expr, 2)
    cell = _atom_arg("swap!", expr[0])
    fn, extra = expr[1], expr[2:]
    return cell.reset(apply_function(fn, [cell.value, *extra], env, evaluate))


# -------------------------------
# Metadata, errors, misc
# -------------------------------
def meta(env: Environment, expr: list[LispValue]) -> LispValue:
    check_arity("meta", expr, 1, 1)
    return get_meta(expr[0])


def with_meta_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    check_arity("with-meta", expr, 2, 2)
    return with_meta(expr[0], expr[1])


def throw(env: Environment, expr: list[LispValue]) -> LispValue:
    """Raise a user exception carrying the argument unchanged."""
    check_arity("throw", expr, 1, 1)
    raise MalException(expr[0])


def time_ms(env: Environment, expr: list[LispValue]) -> int:
    return int(time.time() * 1000)


BUILTINS: dict[str, BuiltinFn] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "=": equals,
    "<": lt,
    "<=": lte,
    ">": gt,
    ">=": gte,
    **{name: _predicate(name, test) for name, test in PREDICATES.items()},
    "symbol": symbol,
    "keyword": keyword,
    "list": list_builtin,
    "vector": vector,
    "hash-map": hash_map,
    "cons": cons,
    "concat": concat,
    "count": count,
    "empty?": is_empty,
    "first": first,
    "rest": rest,
    "nth": nth,
    "conj": conj,
    "seq": seq,
    "vec": vec,
    "apply": apply,
    "map": map_builtin,
    "assoc": assoc,
    "dissoc": dissoc,
    "get": get,
    "contains?": contains,
    "keys": keys,
    "vals": vals,
    "pr-str": pr_str_builtin,
    "str": str_builtin,
    "prn": prn,
    "println": println,
    "read-string": read_string,
    "slurp": slurp,
    "readline": readline,
    "atom": atom,
    "deref": deref,
    "reset!": reset,
    "swap!": swap,
    "meta": meta,
    "with-meta": with_meta_builtin,
    "throw": throw,
    "time-ms": time_ms,
}


def register(env: Environment) -> None:
    """Register all builtin functions into the given environment."""
    env.update({Symbol(name): Builtin(name, fn) for name, fn in BUILTINS.items()})
