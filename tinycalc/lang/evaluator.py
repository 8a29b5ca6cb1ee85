"""Tree-walking evaluation of tinycalc expressions against an Environment. Children are always evaluated before their
parent, left before right, and the value of an Assignment before its target is checked. Bindings made before an error
are kept.
"""

from tinycalc.lang import numerical
from tinycalc.lang.error import EvalError, InvalidAssignment
from tinycalc.lang.tree import Assignment, BinaryOp, NumberLiteral, VariableReference


class Evaluator:
    """Evaluates expression trees in env. on_step, if given, is called with (node, value) after every node."""
    RECURSION_LIMIT = 100

    def __init__(self, env, on_step=None, max_depth=None):
        self.env = env
        self.on_step = on_step
        self.max_depth = Evaluator.RECURSION_LIMIT if max_depth is None else max_depth

    def evaluate(self, expr, depth=0):
        if depth > self.max_depth:
            raise EvalError("expression exceeds maximum evaluation depth of {}", str(self.max_depth), diagnosis=False)

        if isinstance(expr, NumberLiteral):
            value = expr.value

        elif isinstance(expr, VariableReference):
            value = self.env.lookup(expr.name)

        elif isinstance(expr, Assignment):
            assigned = self.evaluate(expr.value, depth + 1)
            if not isinstance(expr.target, VariableReference):
                raise InvalidAssignment(expr.target.expr, expr.value.expr)

            self.env.assign(expr.target.name, assigned)
            value = self.env.lookup(expr.target.name)

        elif isinstance(expr, BinaryOp):
            left = self.evaluate(expr.left, depth + 1)
            right = self.evaluate(expr.right, depth + 1)
            value = numerical.apply(expr.operator, left, right)

        else:
            raise EvalError("'{}' is not an expression", repr(expr), diagnosis=False, internal=True)

        if self.on_step is not None:
            self.on_step(expr, value)
        return value


def evaluate(expr, env, max_depth=None):
    """Returns integer value of expr in env. Raises EvalError on failure."""
    return Evaluator(env, max_depth=max_depth).evaluate(expr)
