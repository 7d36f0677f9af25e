# Core type aliases for mal's data model.
# Code and data share one representation: the reader produces the same Value
# variants (mal.types.*) that the evaluator consumes and returns.
#
# Naming guidance:
# - SExpression: Use in reader/quasiquote/macro code to denote syntactic forms.
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any`; they are interchangeable.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias (used interchangeably with LispValue)
SExpression = LispValue

# Evaluator function type, passed into special forms to avoid import cycles
EvaluatorFn = Callable[..., LispValue]
