"""Expression tree for the tinycalc language. Every node is immutable and exclusively owns its children.

repr() gives a structural rendering (`BinaryOp(Add, NumberLiteral(1), NumberLiteral(2))`) and the expr property gives
an infix rendering (`1 + 2`) used in messages.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from operator import add, mul, sub


class Operator(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"

    @property
    def function(self):
        return _FUNCTIONS[self]

    def __repr__(self):
        return self.name.title()


_FUNCTIONS = {Operator.ADD: add, Operator.SUBTRACT: sub, Operator.MULTIPLY: mul}


class Expression(ABC):
    """Superclass of every syntactic form: NumberLiteral, VariableReference, Assignment, BinaryOp."""

    @property
    @abstractmethod
    def expr(self):
        """Infix rendering of this node."""

    @property
    def grouped(self):
        """self.expr, surrounded by parentheses if this node is compound."""
        return self.expr

    def __str__(self):
        return self.expr


@dataclass(frozen=True)
class NumberLiteral(Expression):
    value: int

    @property
    def expr(self):
        return str(self.value)

    def __repr__(self):
        return f"NumberLiteral({self.value})"


@dataclass(frozen=True)
class VariableReference(Expression):
    name: str

    @property
    def expr(self):
        return self.name

    def __repr__(self):
        return f"VariableReference({self.name!r})"


@dataclass(frozen=True)
class Assignment(Expression):
    """target is not checked to be a VariableReference until evaluation."""
    target: Expression
    value: Expression

    @property
    def expr(self):
        return f"{self.target.grouped} = {self.value.expr}"

    @property
    def grouped(self):
        return f"({self.expr})"

    def __repr__(self):
        return f"Assignment({self.target!r}, {self.value!r})"


@dataclass(frozen=True)
class BinaryOp(Expression):
    operator: Operator
    left: Expression
    right: Expression

    @property
    def expr(self):
        return f"{self.left.grouped} {self.operator.value} {self.right.grouped}"

    @property
    def grouped(self):
        return f"({self.expr})"

    def __repr__(self):
        return f"BinaryOp({self.operator!r}, {self.left!r}, {self.right!r})"
