from mal import SExpression, LispValue, EvaluatorFn
from mal.evaluation.special_forms.checks import check_arity
from mal.types.collections import List, Vector
from mal.types.environment import Environment
from mal.types.symbol import Symbol
from mal.types.tail_call import TailCall

QUOTE = Symbol("quote")
UNQUOTE = Symbol("unquote")
SPLICE_UNQUOTE = Symbol("splice-unquote")
CONS = Symbol("cons")
CONCAT = Symbol("concat")


def _is_call_to(form: SExpression, name: Symbol) -> bool:
    return isinstance(form, List) and len(form) > 0 and form[0] == name


def quasiquote(ast: SExpression) -> SExpression:
    """Rewrite a quasiquote template into code that rebuilds it.

    Pure and non-evaluating: `unquote` holes become the expressions they hold,
    `splice-unquote` holes become `concat` calls, everything else is quoted
    and reassembled with `cons`.
    """
    if not isinstance(ast, (List, Vector)) or len(ast) == 0:
        return List([QUOTE, ast])

    if _is_call_to(ast, UNQUOTE):
        check_arity("unquote", ast[1:], 1, 1)
        return ast[1]

    first, rest = ast[0], List(ast[1:])
    if _is_call_to(first, SPLICE_UNQUOTE):
        check_arity("splice-unquote", first[1:], 1, 1)
        return List([CONCAT, first[1], quasiquote(rest)])

    return List([CONS, quasiquote(first), quasiquote(rest)])


def quote_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    check_arity("quote", tail, 1, 1)
    return tail[0]


def quasiquote_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> TailCall:
    check_arity("quasiquote", tail, 1, 1)
    # Evaluate the generated construction code in place of the template
    return TailCall(quasiquote(tail[0]), env)
