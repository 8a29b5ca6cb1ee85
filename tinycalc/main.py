"""Runs the tinycalc interpreter on a script file or in command-line mode. Also uses the error handling context manager.
Called from the tinycalc console script and `python -m tinycalc`.
"""

import argparse

from tinycalc.lang.error import ErrorHandler
from tinycalc.lang.grammar import Parser
from tinycalc.lang.session import Session
from tinycalc.lang.shell import Shell


def positive_int(value):
    num = int(value)
    if num < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return num


def main(argv=None):
    """Runs tinycalc interpreter."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="tinycalc", description="Interactive integer expression evaluator.")
        parser.add_argument("file", help="file to evaluate line by line (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--max-depth", type=positive_int, default=Parser.RECURSION_LIMIT,
                            help=f"maximum nesting depth of an expression (default: {Parser.RECURSION_LIMIT})")
        parser.add_argument("--trace", action="store_true", help="print every evaluation step")
        args = parser.parse_args(argv)

        error_handler.trace = args.trace

        if args.file is not None:
            Session(error_handler, args.file, cmd_line=False, max_depth=args.max_depth).run_file()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, max_depth=args.max_depth)).cmdloop()
