"""Helpers shared by every consumer of the value model."""

from __future__ import annotations

from mal import LispValue
from mal.errors import MalTypeError
from mal.printer import pr_str
from mal.types.boolean import false
from mal.types.collections import HashMap, List, Vector
from mal.types.lambda_fn import Builtin, Lambda
from mal.types.nil import Nil

# Values that can carry metadata
META_CARRIERS = (List, Vector, HashMap, Lambda, Builtin)


def is_truthy(value: LispValue) -> bool:
    """Everything except nil and false is true, including 0 and empty collections."""
    return value is not Nil and value is not false


def is_function(value: LispValue) -> bool:
    return isinstance(value, (Lambda, Builtin))


def is_macro(value: LispValue) -> bool:
    return is_function(value) and value.is_macro


def with_meta(value: LispValue, meta: LispValue) -> LispValue:
    """Copy-on-write metadata: the original value is left untouched."""
    if not isinstance(value, META_CARRIERS):
        raise MalTypeError(f"with-meta not supported on {type(value).__name__}")
    return value.with_meta(meta)


def get_meta(value: LispValue) -> LispValue:
    if isinstance(value, META_CARRIERS):
        return value.meta
    return Nil


def hash_key(name: str, key: LispValue) -> LispValue:
    """Check that `key` can be stored in a HashMap.

    Atoms are mutable and functions never compare equal, so neither is a key.
    """
    if is_function(key):
        raise MalTypeError(f"{name}: a function cannot be used as a hash-map key")
    try:
        hash(key)
    except TypeError:
        raise MalTypeError(f"{name}: {pr_str(key)} cannot be used as a hash-map key")
    return key
