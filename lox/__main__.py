"""CLI: python -m lox [script.lox]

With a script, evaluates the single expression it holds and prints the
result. Without one, starts an interactive prompt.
"""

import cmd
import sys
from pathlib import Path
from typing import Optional

from termcolor import colored

from .evaluator import EvalError
from .interpreter import interpret, stringify
from .parser import ParseError
from .scanner import LexErrors

# sysexits.h
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def report(message: str) -> None:
    print(colored("error: ", "red", attrs=["bold"]) + message, file=sys.stderr)


def run(source: str) -> int:
    """Interpret source, print its value or report its errors; return an exit code."""
    try:
        value = interpret(source)
    except LexErrors as e:
        for err in e.errors:
            report(str(err))
        return EX_DATAERR
    except ParseError as e:
        report(str(e))
        return EX_DATAERR
    except EvalError as e:
        report(str(e))
        return EX_SOFTWARE
    print(stringify(value))
    return 0


class Shell(cmd.Cmd):
    """Lox expression prompt."""
    intro = "Lox expression evaluator\nType 'exit' or press Ctrl-D to leave."
    prompt = "> "

    def default(self, line):
        """Evaluates the line as one Lox expression."""
        run(line)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits the prompt."""
        print()
        return True

    def do_exit(self, arg):
        """Exits the prompt."""
        return True


def main(argv: Optional[list[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1:
        print("Usage: python -m lox [script.lox]", file=sys.stderr)
        return EX_USAGE

    if not args:
        Shell().cmdloop()
        return 0

    path = Path(args[0])
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        report(f"cannot read '{path}': {e.strerror}")
        return EX_NOINPUT
    return run(source)


if __name__ == "__main__":
    sys.exit(main())
