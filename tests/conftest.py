import pytest

from mal.builtin import env_builtin
from mal.interpreter import Interpreter
from mal.types.environment import Environment


# Most tests run mal source through a full Interpreter (builtins + prelude).
# Tests that exercise the evaluator directly use `env`, a root environment with
# the builtins registered but no prelude.


@pytest.fixture
def interp():
    """Return a fresh interpreter, prelude loaded, for each test."""
    return Interpreter()


@pytest.fixture
def env():
    """Return a fresh root environment holding only the builtins."""
    e = Environment()
    env_builtin.register(e)
    return e
