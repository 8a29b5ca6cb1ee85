"""Session control for tinycalc. A session owns one Environment for its whole lifetime and runs lines through the
lex -> parse -> evaluate pipeline, either from the command line or from a script file.
"""

from dataclasses import dataclass

from tinycalc.lang.environment import Environment
from tinycalc.lang.error import GenericException
from tinycalc.lang.evaluator import Evaluator
from tinycalc.lang.grammar import parse
from tinycalc.lang.lexical import tokenize
from tinycalc.lang.tree import Expression


@dataclass
class Result:
    """Everything produced by a successfully run line."""
    tokens: list
    tree: Expression
    value: int


class Session:
    """Governs a tinycalc session, with control over the scope of variable bindings."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, max_depth=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.cmd_line = cmd_line    # whether or not in command-line mode
        self.max_depth = max_depth  # nesting limit for parser and evaluator, None for default

        self.env = Environment()
        self.results = []  # list of Results of every successful line
        self.line_num = 0

        if self.cmd_line:
            self.error_handler.fatal = False
        elif path == Session.SH_FILE:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

    def run(self, line, line_num=None):
        """Runs line in this session and returns its Result. Any error is raised as a GenericException, and bindings
        made before the error are kept.
        """
        self.line_num = self.line_num + 1 if line_num is None else line_num
        self.error_handler.register_line(self.path, line.strip(), self.line_num)  # in case error is raised

        tokens = tokenize(line)
        tree = parse(tokens, line, self.max_depth)

        on_step = self._step if self.error_handler.trace else None
        value = Evaluator(self.env, on_step, self.max_depth).evaluate(tree)

        result = Result(tokens, tree, value)
        self.results.append(result)

        self.error_handler.remove_line(self.path)  # error was not raised
        return result

    def run_file(self):
        """Runs every non-blank line of self.path and prints its value without keeping its Result. Stops at the first
        error if the error handler is fatal, otherwise reports it and moves on to the next line.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as file:
                lines = file.read().splitlines()
        except OSError:
            raise GenericException("'{}' could not be opened", self.path, diagnosis=False)

        for line_num, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            with self.error_handler:
                self.run(line, line_num)
                print(self.pop().value)

    def pop(self):
        """Removes and returns the most recent Result."""
        return self.results.pop()

    def _step(self, node, value):
        self.error_handler.register_step("eval", f"{node} -> {value}")
