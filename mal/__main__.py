"""Command line entry point.

    mal                 prompt loop (user> ...)
    mal FILE ARGS...    run FILE with ARGS bound to *ARGV*
"""

from __future__ import annotations

import logging
import sys
from argparse import ArgumentParser

from mal.config import get_log_level, get_recursion_limit
from mal.errors import MalException
from mal.interpreter import Interpreter
from mal.printer import pr_str

logger = logging.getLogger(__name__)

PROMPT = "user> "


def describe_error(error: Exception) -> str:
    if isinstance(error, MalException):
        return pr_str(error.value, True)
    return str(error) or type(error).__name__


def repl(interp: Interpreter) -> None:
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            print()
            return
        try:
            output = interp.rep(line)
        except Exception as e:
            logger.debug("Uncaught error", exc_info=True)
            print(f"Error: {describe_error(e)}", file=sys.stderr)
            continue
        if output is not None:
            print(output)


def main() -> None:
    parser = ArgumentParser(description="A small Lisp interpreter")
    parser.add_argument("file", type=str, nargs="?", default=None)
    args, argv = parser.parse_known_args()

    logging.basicConfig(level=get_log_level())
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    interp = Interpreter(argv=argv)
    if args.file is None:
        repl(interp)
        return

    try:
        interp.eval(f"(load-file {pr_str(args.file, True)})")
    except Exception as e:
        print(f"Error: {describe_error(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
