"""Error handling for the tinycalc language. Only GenericExceptions should be encountered while running a line: if
another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Taxonomy:
    GenericException
     |- LexError            ; unrecognized character
     |- ParseError          ; malformed token sequence
     '- EvalError           ; failure while walking the expression tree
         |- UnboundVariable
         |- InvalidAssignment
         '- Overflow
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a tinycalc error. Snippets in exprs are substituted
    into msg in order, and exprs[0] should be the offending expr (usually the whole input line) used for diagnosis.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.plain = msg.format(*exprs)
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.plain)


class LexError(GenericException):
    """Raised when a character cannot start any token."""

    def __init__(self, line, char, pos):
        super().__init__("'{}' contains unrecognized character '{}'", (line, char), start=pos, end=pos + 1)
        self.char = char
        self.pos = pos


class ParseError(GenericException):
    """Raised when a token sequence does not match the grammar."""


class EvalError(GenericException):
    """Raised when an expression tree cannot be evaluated."""


class UnboundVariable(EvalError):

    def __init__(self, name):
        super().__init__("'{}' is not bound to a value", name, diagnosis=False)
        self.name = name


class InvalidAssignment(EvalError):

    def __init__(self, target, value):
        msg = "'{}' is not a variable and cannot be assigned '{}'"
        super().__init__(msg, (target, value), diagnosis=False)
        self.target = target
        self.value = value


class Overflow(EvalError):

    def __init__(self, expr):
        super().__init__("'{}' overflows a 32-bit integer", expr, diagnosis=False)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report tinycalc errors."""
    ERROR = "red"
    TRACE = "cyan"

    def __init__(self, fatal=True, trace=False):
        self.fatal = fatal
        self.trace = trace
        self.traceback = {}
        self.errors = 0

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session.run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a successful Session.run."""
        self.traceback[path] = (None, None)

    def register_step(self, label, text):
        """Prints a single evaluation step if tracing is enabled."""
        if self.trace:
            print(colored(f"  {label} ", ErrorHandler.TRACE, attrs=["bold"]) + text)

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded, with a caret line beneath it."""
        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Reports error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        self.errors += 1

        error_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{type(error).__name__}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded", diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
