from __future__ import annotations
import logging
from typing import Iterable, Literal, Optional

from mal import LispValue
from mal.builtin.env_builtin import register
from mal.evaluation.evaluator import evaluate
from mal.evaluation.special_forms.checks import check_arity
from mal.printer import pr_str
from mal.reader.parser import read_all
from mal.types.collections import List
from mal.types.environment import Environment
from mal.types.lambda_fn import Builtin
from mal.types.nil import Nil
from mal.types.symbol import Symbol

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating mal code.
    Maintains the root Environment across calls; the builtins, `eval`,
    `*ARGV*` and the prelude definitions all live there.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        argv: Iterable[str] = (),
    ):
        self.env: Environment = Environment()
        register(self.env)
        self.env.define(Symbol("eval"), Builtin("eval", self._eval_builtin))
        self.env.define(Symbol("*ARGV*"), List(argv))

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            # Lazy import to avoid circular imports
            from mal.modules.prelude_loader import load_prelude
            try:
                load_prelude(self)
            except FileNotFoundError as ex:
                # Be permissive: no prelude found -> proceed without it
                logger.warning("%s", ex)
        elif prelude:
            self.eval_prelude(prelude)

    def _eval_builtin(self, env: Environment, args: list[LispValue]) -> LispValue:
        """(eval form): a nested evaluation in the root environment."""
        check_arity("eval", args, 1, 1)
        return evaluate(args[0], self.env)

    def eval_prelude(self, code: str) -> None:
        for expr in read_all(code):
            evaluate(expr, self.env)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code`; return the last result (nil if none)."""
        result: LispValue = Nil
        for expr in read_all(code):
            result = evaluate(expr, self.env)
        return result

    def rep(self, code: str) -> Optional[str]:
        """Read, evaluate and print; None when `code` holds no form."""
        printed = None
        for expr in read_all(code):
            printed = pr_str(evaluate(expr, self.env), True)
        return printed
